"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory Pinecone fakes, settings with network-free defaults,
match/result builders
Dependencies: pytest, kb_rag
System role: Test infrastructure and fixture management
"""

from types import SimpleNamespace
from typing import Any

import pytest

from kb_rag.boundary.vdb.pinecone_index_client import PineconeIndexClient
from kb_rag.configs import VectorIndexSettings
from kb_rag.models.search import SearchResult


class FakeIndex:
    """In-memory stand-in for a Pinecone index handle."""

    def __init__(self) -> None:
        self.upsert_calls: list[dict[str, Any]] = []
        self.query_calls: list[dict[str, Any]] = []
        self.delete_calls: list[dict[str, Any]] = []
        self.matches: list[SimpleNamespace] = []
        self.stats = SimpleNamespace(total_vector_count=0, dimension=384)

    def upsert(self, **kwargs: Any) -> None:
        self.upsert_calls.append(kwargs)

    def query(self, **kwargs: Any) -> SimpleNamespace:
        self.query_calls.append(kwargs)
        return SimpleNamespace(matches=list(self.matches))

    def delete(self, **kwargs: Any) -> None:
        self.delete_calls.append(kwargs)

    def describe_index_stats(self) -> SimpleNamespace:
        return self.stats


class FakeIndexList:
    def __init__(self, names: list[str]) -> None:
        self._names = names

    def names(self) -> list[str]:
        return list(self._names)


class FakePineconeClient:
    """In-memory stand-in for the Pinecone control-plane client."""

    def __init__(self, index_names: list[str] | None = None) -> None:
        self.index_names = list(index_names or [])
        self.create_calls: list[dict[str, Any]] = []
        self.index = FakeIndex()
        self.list_error: Exception | None = None
        self.create_error: Exception | None = None

    def list_indexes(self) -> FakeIndexList:
        if self.list_error is not None:
            raise self.list_error
        return FakeIndexList(self.index_names)

    def create_index(self, **kwargs: Any) -> None:
        if self.create_error is not None:
            raise self.create_error
        self.create_calls.append(kwargs)
        self.index_names.append(kwargs["name"])

    def Index(self, name: str) -> FakeIndex:  # noqa: N802
        return self.index


def _make_match(id: str, score: float, **metadata: Any) -> SimpleNamespace:
    return SimpleNamespace(id=id, score=score, metadata=metadata)


def _make_result(content: str, score: float = 0.9, **metadata: Any) -> SearchResult:
    return SearchResult(content=content, metadata=metadata, score=score)


@pytest.fixture
def make_match():
    """Factory for Pinecone-style query matches."""
    return _make_match


@pytest.fixture
def make_result():
    """Factory for SearchResult objects."""
    return _make_result


@pytest.fixture
def vector_index_settings() -> VectorIndexSettings:
    """Index settings with no provisioning wait."""
    return VectorIndexSettings(
        api_key="test-key",
        index_name="test-index",
        settle_seconds=0.0,
        request_timeout_seconds=5.0,
    )


@pytest.fixture
def fake_pinecone() -> FakePineconeClient:
    """Pinecone client whose index does not exist yet."""
    return FakePineconeClient()


@pytest.fixture
def index_client(
    vector_index_settings: VectorIndexSettings,
    fake_pinecone: FakePineconeClient,
) -> PineconeIndexClient:
    """Index client wired to the in-memory Pinecone fake."""
    return PineconeIndexClient(vector_index_settings, dimension=384, client=fake_pinecone)
