"""
Test suite for domain models.

System role: Verification of document, chunk and request model invariants
"""

import pydantic
import pytest

from kb_rag.models.chat import ChatRequest, ConversationTurn
from kb_rag.models.document import Chunk, Document
from kb_rag.models.search import RetrievalOutcome, SearchRequest


class TestDocument:
    def test_document_is_frozen(self) -> None:
        document = Document(content="text", metadata={"source": "a.md"})

        with pytest.raises(pydantic.ValidationError):
            document.content = "changed"

    def test_metadata_defaults_to_empty(self) -> None:
        assert Document(content="text").metadata == {}


class TestChunk:
    def test_position_accessors(self) -> None:
        chunk = Chunk(content="text", metadata={"chunk_index": 1, "total_chunks": 3})

        assert chunk.chunk_index == 1
        assert chunk.total_chunks == 3

    @pytest.mark.parametrize(
        "metadata",
        [
            {},
            {"chunk_index": 3, "total_chunks": 3},
            {"chunk_index": -1, "total_chunks": 3},
            {"chunk_index": "0", "total_chunks": 1},
        ],
    )
    def test_invalid_position_is_rejected(self, metadata: dict) -> None:
        with pytest.raises(pydantic.ValidationError):
            Chunk(content="text", metadata=metadata)


class TestRequests:
    def test_search_request_top_k_bounds(self) -> None:
        assert SearchRequest(query="q").top_k is None

        with pytest.raises(pydantic.ValidationError):
            SearchRequest(query="q", top_k=0)

    def test_conversation_turn_role_is_restricted(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            ConversationTurn(role="system", content="hi")

    def test_chat_request_defaults(self) -> None:
        request = ChatRequest(message="hello")

        assert request.history == []


class TestRetrievalOutcome:
    def test_ok_without_error(self) -> None:
        assert RetrievalOutcome().ok is True
        assert RetrievalOutcome(error=RuntimeError("down")).ok is False
