"""
Document and chunk domain models.

Represents caller-supplied documents and the chunks derived from them.

Dependencies: pydantic
System role: Ingest-path data structures
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

MetadataValue = str | int | float | bool | list[str]


class Document(BaseModel):
    """Free-text document submitted for indexing."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="Raw document text")
    metadata: dict[str, MetadataValue] = Field(
        default_factory=dict,
        description="Open-ended scalar metadata (source path, title, ...)",
    )


class Chunk(BaseModel):
    """Chunk derived from a document; the atomic unit stored in the index."""

    content: str = Field(description="Chunk text content")
    metadata: dict[str, Any] = Field(
        description="Parent metadata plus chunk_index and total_chunks",
    )

    @model_validator(mode="after")
    def _check_position(self) -> "Chunk":
        index = self.metadata.get("chunk_index")
        total = self.metadata.get("total_chunks")
        if not isinstance(index, int) or not isinstance(total, int):
            raise ValueError("chunk metadata requires integer chunk_index and total_chunks")
        if not 0 <= index < total:
            raise ValueError(f"chunk_index {index} out of range for total_chunks {total}")
        return self

    @property
    def chunk_index(self) -> int:
        return self.metadata["chunk_index"]

    @property
    def total_chunks(self) -> int:
        return self.metadata["total_chunks"]


class IngestResult(BaseModel):
    """Bookkeeping returned by the ingest path."""

    indexed: int = Field(description="Records accepted by the vector index")
    original_documents: int = Field(description="Documents submitted by the caller")
    chunks: int = Field(description="Chunks produced from those documents")
