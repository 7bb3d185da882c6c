"""Vector database boundary: Pinecone index client and schemas."""

from kb_rag.boundary.vdb.index_schemas import IndexedRecord, IndexMatch, IndexStats
from kb_rag.boundary.vdb.pinecone_index_client import PineconeIndexClient, classify_index_error

__all__ = [
    "IndexMatch",
    "IndexStats",
    "IndexedRecord",
    "PineconeIndexClient",
    "classify_index_error",
]
