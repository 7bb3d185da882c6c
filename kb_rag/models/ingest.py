"""
Ingest API schemas.

Dependencies: pydantic
System role: Indexing API contracts
"""

from pydantic import BaseModel, Field

from kb_rag.models.document import MetadataValue


class IngestDocument(BaseModel):
    """Document as submitted over HTTP."""

    content: str = Field(description="Raw document text")
    metadata: dict[str, MetadataValue] = Field(default_factory=dict)


class IngestRequest(BaseModel):
    """Request schema for indexing documents."""

    documents: list[IngestDocument] = Field(default_factory=list)
    namespace: str | None = Field(default=None, description="Target index namespace")


class IngestResponse(BaseModel):
    """Response schema for indexing documents."""

    success: bool = True
    indexed: int
    original_documents: int
    chunks: int


class DeleteNamespaceResponse(BaseModel):
    """Response schema for namespace deletion."""

    success: bool = True
    namespace: str
