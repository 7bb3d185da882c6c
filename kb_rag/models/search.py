"""
Search domain models and schemas.

Retrieval results and request/response schemas for the search API.

Dependencies: pydantic
System role: Retrieval API contracts
"""

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, Field


class SearchResult(BaseModel):
    """Single scored fragment returned by the retrieval service."""

    content: str = Field(description="Chunk text stored with the record")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Record metadata")
    score: float = Field(description="Similarity score reported by the index")


@dataclass(frozen=True)
class RetrievalOutcome:
    """Result of a best-effort retrieval: either results or the failure."""

    results: list[SearchResult] = field(default_factory=list)
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class SearchRequest(BaseModel):
    """Request schema for similarity search."""

    query: str = Field(default="", description="Free-text query")
    top_k: int | None = Field(
        default=None,
        ge=1,
        le=100,
        description="Number of nearest neighbours to request (configured default if omitted)",
    )
    namespace: str | None = Field(default=None, description="Index namespace to search")


class SearchResponse(BaseModel):
    """Response schema for similarity search."""

    results: list[SearchResult]
    total: int = Field(description="Number of results returned")
