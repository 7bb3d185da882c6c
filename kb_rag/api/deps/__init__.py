"""API-specific dependencies."""

from .dependencies import (
    ServiceCache,
    get_conversation_service,
    get_index_client,
    get_ingestion_service,
    get_retrieval_service,
    get_service_cache,
)

__all__ = [
    "ServiceCache",
    "get_conversation_service",
    "get_index_client",
    "get_ingestion_service",
    "get_retrieval_service",
    "get_service_cache",
]
