"""
Grounding context assembly.

Formats retrieved fragments into a single labeled context block for the
generation step.

Dependencies: kb_rag.models
System role: Context formatting business logic
"""

from collections.abc import Sequence

from kb_rag.models.search import SearchResult

NO_CONTEXT_SENTINEL = "No relevant documents found in the knowledge base."
SOURCE_SEPARATOR = "\n\n---\n\n"
UNKNOWN_SOURCE = "Unknown"


class ContextAssembler:
    """Builds the grounding context from ranked search results."""

    def build_context(self, results: Sequence[SearchResult]) -> str:
        """
        Render results as labeled source blocks.

        Args:
            results: Search results, already in rank order

        Returns:
            str: Joined source blocks, or the no-documents sentinel when empty
        """
        if not results:
            return NO_CONTEXT_SENTINEL

        return SOURCE_SEPARATOR.join(
            self.format_source(position, result)
            for position, result in enumerate(results, start=1)
        )

    def format_source(self, position: int, result: SearchResult) -> str:
        """Format one result as '[Source N: path]' followed by its content."""
        source = result.metadata.get("source") or UNKNOWN_SOURCE
        return f"[Source {position}: {source}]\n{result.content}"


def build_context(results: Sequence[SearchResult]) -> str:
    """Module-level shortcut for ContextAssembler().build_context."""
    return ContextAssembler().build_context(results)
