"""
Test suite for ConversationService.

Tests best-effort retrieval, history windowing, prompt assembly and reply
handling. Uses mocked retrieval service and generation client.

System role: Verification of chat orchestration layer
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from kb_rag.application.services.conversation_service import ConversationService
from kb_rag.boundary.llm.generation_schemas import ContentBlock, GenerationReply
from kb_rag.configs import GenerationSettings
from kb_rag.core.context_builder import NO_CONTEXT_SENTINEL
from kb_rag.core.exceptions import TransientServiceError, ValidationError
from kb_rag.core.prompts import FALLBACK_ANSWER, SYSTEM_PROMPT
from kb_rag.models.chat import ConversationTurn
from kb_rag.models.search import RetrievalOutcome


@pytest.fixture
def mock_retrieval_service() -> MagicMock:
    service = MagicMock()
    service.try_search = AsyncMock(return_value=RetrievalOutcome(results=[]))
    return service


@pytest.fixture
def mock_generation_client() -> MagicMock:
    client = MagicMock()
    client.complete = AsyncMock(
        return_value=GenerationReply(content=[ContentBlock(type="text", text="The answer.")])
    )
    return client


@pytest.fixture
def conversation_service(mock_retrieval_service, mock_generation_client) -> ConversationService:
    return ConversationService(
        retrieval_service=mock_retrieval_service,
        generation_client=mock_generation_client,
        settings=GenerationSettings(api_key="k", model="claude-test", max_tokens=1024),
    )


def make_history(count: int) -> list[ConversationTurn]:
    return [
        ConversationTurn(role="user" if i % 2 == 0 else "assistant", content=f"turn {i}")
        for i in range(count)
    ]


class TestAnswer:
    """Test suite for ConversationService.answer."""

    @pytest.mark.asyncio
    async def test_grounds_answer_in_retrieved_sources(
        self, conversation_service, mock_retrieval_service, mock_generation_client, make_result
    ) -> None:
        # Arrange
        sources = [make_result("Indexing uses Pinecone.", score=0.88, source="docs/index.md")]
        mock_retrieval_service.try_search.return_value = RetrievalOutcome(results=sources)

        # Act
        result = await conversation_service.answer("How is indexing done?", [])

        # Assert
        assert result.answer == "The answer."
        assert result.sources == sources
        mock_retrieval_service.try_search.assert_awaited_once_with("How is indexing done?")

        kwargs = mock_generation_client.complete.await_args.kwargs
        assert kwargs["system"] == SYSTEM_PROMPT
        assert kwargs["model"] == "claude-test"
        assert kwargs["max_tokens"] == 1024
        final_turn = kwargs["messages"][-1]
        assert final_turn["role"] == "user"
        assert "[Source 1: docs/index.md]\nIndexing uses Pinecone." in final_turn["content"]
        assert "User question: How is indexing done?" in final_turn["content"]

    @pytest.mark.asyncio
    async def test_retrieval_failure_downgrades_to_no_sources(
        self, conversation_service, mock_retrieval_service, mock_generation_client
    ) -> None:
        """Test a failing index still yields an answer with empty sources."""
        # Arrange
        mock_retrieval_service.try_search.return_value = RetrievalOutcome(
            error=TransientServiceError("index unavailable", service="pinecone")
        )

        # Act
        result = await conversation_service.answer("hello", [])

        # Assert
        assert result.answer == "The answer."
        assert result.sources == []
        final_turn = mock_generation_client.complete.await_args.kwargs["messages"][-1]
        assert NO_CONTEXT_SENTINEL in final_turn["content"]

    @pytest.mark.asyncio
    async def test_history_is_windowed_to_last_ten_turns(
        self, conversation_service, mock_generation_client
    ) -> None:
        """Test 14 prior turns forward only the last 10, then the grounded question."""
        # Act
        await conversation_service.answer("next question", make_history(14))

        # Assert
        messages = mock_generation_client.complete.await_args.kwargs["messages"]
        assert len(messages) == 11
        assert [m["content"] for m in messages[:10]] == [f"turn {i}" for i in range(4, 14)]
        assert [m["role"] for m in messages[:10]] == ["user", "assistant"] * 5

    @pytest.mark.asyncio
    async def test_short_history_is_forwarded_whole(
        self, conversation_service, mock_generation_client
    ) -> None:
        await conversation_service.answer("q", make_history(3))

        messages = mock_generation_client.complete.await_args.kwargs["messages"]
        assert [m["content"] for m in messages[:3]] == ["turn 0", "turn 1", "turn 2"]

    @pytest.mark.asyncio
    async def test_first_text_block_is_the_answer(
        self, conversation_service, mock_generation_client
    ) -> None:
        mock_generation_client.complete.return_value = GenerationReply(
            content=[
                ContentBlock(type="tool_use"),
                ContentBlock(type="text", text="first"),
                ContentBlock(type="text", text="second"),
            ]
        )

        result = await conversation_service.answer("q", [])

        assert result.answer == "first"

    @pytest.mark.asyncio
    async def test_reply_without_text_uses_fallback(
        self, conversation_service, mock_generation_client
    ) -> None:
        mock_generation_client.complete.return_value = GenerationReply(content=[])

        result = await conversation_service.answer("q", [])

        assert result.answer == FALLBACK_ANSWER

    @pytest.mark.asyncio
    async def test_generation_failure_propagates(
        self, conversation_service, mock_generation_client
    ) -> None:
        mock_generation_client.complete.side_effect = TransientServiceError(
            "overloaded", service="anthropic"
        )

        with pytest.raises(TransientServiceError):
            await conversation_service.answer("q", [])

    @pytest.mark.asyncio
    async def test_empty_message_is_rejected(
        self, conversation_service, mock_retrieval_service
    ) -> None:
        with pytest.raises(ValidationError):
            await conversation_service.answer("   ", [])

        mock_retrieval_service.try_search.assert_not_awaited()


class TestWindowHistory:
    def test_zero_window_drops_history(self, mock_retrieval_service, mock_generation_client) -> None:
        service = ConversationService(
            mock_retrieval_service,
            mock_generation_client,
            settings=GenerationSettings(history_window=0),
        )

        assert service.window_history(make_history(4)) == []
