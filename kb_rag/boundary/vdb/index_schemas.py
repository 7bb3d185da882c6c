"""
Vector index schemas.

Pydantic models for vector operations (records, matches, stats).
Used for type-safe vector index interactions.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from typing import Any

from pydantic import BaseModel, Field


class IndexedRecord(BaseModel):
    """Vector record written to the index."""

    id: str = Field(description="Record identifier, unique within a namespace")
    values: list[float] = Field(description="Embedding vector")
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Original chunk text under 'text' plus chunk metadata",
    )

    def to_vector(self) -> dict[str, Any]:
        """Serialize to the upsert payload shape."""
        return {"id": self.id, "values": self.values, "metadata": self.metadata}


class IndexMatch(BaseModel):
    """Single raw match returned by a similarity query."""

    id: str = Field(description="Record identifier")
    score: float = Field(description="Similarity score")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Stored metadata")


class IndexStats(BaseModel):
    """Read-only index statistics."""

    record_count: int = Field(default=0, description="Total records across namespaces")
    dimension: int = Field(description="Vector dimension of the index")
