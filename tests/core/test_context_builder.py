"""
Test suite for grounding context assembly and prompt construction.

System role: Verification of context formatting and prompt templates
"""

from kb_rag.core.context_builder import (
    NO_CONTEXT_SENTINEL,
    SOURCE_SEPARATOR,
    ContextAssembler,
    build_context,
)
from kb_rag.core.prompts import SYSTEM_PROMPT, build_user_turn


class TestContextAssembler:
    """Test suite for ContextAssembler.build_context."""

    def test_empty_results_return_sentinel(self) -> None:
        assert build_context([]) == NO_CONTEXT_SENTINEL
        assert NO_CONTEXT_SENTINEL == "No relevant documents found in the knowledge base."

    def test_labels_sources_in_input_order(self, make_result) -> None:
        """Test blocks are 1-based, labeled by source and joined by the separator."""
        # Arrange
        results = [
            make_result("First fragment", source="docs/a.md"),
            make_result("Second fragment", source="src/b.py"),
        ]

        # Act
        context = ContextAssembler().build_context(results)

        # Assert
        assert context == (
            "[Source 1: docs/a.md]\nFirst fragment"
            "\n\n---\n\n"
            "[Source 2: src/b.py]\nSecond fragment"
        )

    def test_missing_source_is_unknown(self, make_result) -> None:
        """Test results without a source path are labeled 'Unknown'."""
        context = build_context([make_result("Orphan fragment"), make_result("Empty", source="")])

        assert context.startswith("[Source 1: Unknown]\nOrphan fragment")
        assert "[Source 2: Unknown]\nEmpty" in context

    def test_one_block_per_result(self, make_result) -> None:
        """Test the number of blocks equals the number of results."""
        results = [make_result(f"fragment {i}", source=f"f{i}.md") for i in range(7)]

        context = build_context(results)

        assert len(context.split(SOURCE_SEPARATOR)) == 7
        assert context.count("[Source ") == 7

    def test_content_is_not_truncated(self, make_result) -> None:
        long_content = "word " * 5000

        assert long_content in build_context([make_result(long_content, source="big.txt")])


class TestPrompts:
    """Test suite for prompt templates."""

    def test_user_turn_wraps_context_and_question(self) -> None:
        """Test the final user turn carries context, question and instructions."""
        # Act
        turn = build_user_turn("[Source 1: a.md]\nText", "How do I index {files}?")

        # Assert
        assert turn.startswith("Context from knowledge base:\n[Source 1: a.md]\nText")
        assert "\n\n---\n\nUser question: How do I index {files}?" in turn
        assert turn.endswith(
            "If the context doesn't contain relevant information to answer the question, "
            "let the user know."
        )

    def test_system_prompt_sets_grounding_rules(self) -> None:
        assert "cite specific sources" in SYSTEM_PROMPT
        assert "markdown" in SYSTEM_PROMPT
        assert "Don't make up information" in SYSTEM_PROMPT
