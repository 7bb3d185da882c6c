"""
Dependency injection container.

Factory functions for FastAPI dependencies. Heavy collaborators (embedding
model, Pinecone and Anthropic clients) are built once per process and
shared through the service cache.

Dependencies: kb_rag.configs, kb_rag.application, kb_rag.boundary, kb_rag.core
System role: DI container for service injection
"""

import threading

from kb_rag.application.services import ConversationService, IngestionService, RetrievalService
from kb_rag.boundary.llm.anthropic_client import AnthropicGenerationClient
from kb_rag.boundary.vdb.pinecone_index_client import PineconeIndexClient
from kb_rag.configs import Settings, get_settings
from kb_rag.core.chunker import SentenceWindowChunker
from kb_rag.core.embedder import Embedder


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self, settings: Settings | None = None):
        self._lock = threading.RLock()
        self._settings = settings
        self._chunker = None
        self._embedder = None
        self._index_client = None
        self._generation_client = None
        self._retrieval_service = None
        self._ingestion_service = None
        self._conversation_service = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            with self._lock:
                if self._settings is None:
                    self._settings = get_settings()
        return self._settings

    @property
    def chunker(self) -> SentenceWindowChunker:
        """Get cached chunker."""
        if self._chunker is None:
            with self._lock:
                if self._chunker is None:
                    self._chunker = SentenceWindowChunker(self.settings.chunking)
        return self._chunker

    @property
    def embedder(self) -> Embedder:
        """Get cached embedder (the model itself loads on first use)."""
        if self._embedder is None:
            with self._lock:
                if self._embedder is None:
                    self._embedder = Embedder(self.settings.embedding)
        return self._embedder

    @property
    def index_client(self) -> PineconeIndexClient:
        """Get cached Pinecone index client."""
        if self._index_client is None:
            with self._lock:
                if self._index_client is None:
                    self._index_client = PineconeIndexClient(
                        self.settings.vector_index,
                        dimension=self.settings.embedding.dimension,
                    )
        return self._index_client

    @property
    def generation_client(self) -> AnthropicGenerationClient:
        """Get cached Anthropic client."""
        if self._generation_client is None:
            with self._lock:
                if self._generation_client is None:
                    self._generation_client = AnthropicGenerationClient(self.settings.generation)
        return self._generation_client

    @property
    def retrieval_service(self) -> RetrievalService:
        if self._retrieval_service is None:
            with self._lock:
                if self._retrieval_service is None:
                    self._retrieval_service = RetrievalService(
                        embedder=self.embedder,
                        index_client=self.index_client,
                        settings=self.settings.retrieval,
                    )
        return self._retrieval_service

    @property
    def ingestion_service(self) -> IngestionService:
        if self._ingestion_service is None:
            with self._lock:
                if self._ingestion_service is None:
                    self._ingestion_service = IngestionService(
                        chunker=self.chunker,
                        embedder=self.embedder,
                        index_client=self.index_client,
                    )
        return self._ingestion_service

    @property
    def conversation_service(self) -> ConversationService:
        if self._conversation_service is None:
            with self._lock:
                if self._conversation_service is None:
                    self._conversation_service = ConversationService(
                        retrieval_service=self.retrieval_service,
                        generation_client=self.generation_client,
                        settings=self.settings.generation,
                    )
        return self._conversation_service

    def clear(self) -> None:
        """Clear all cached instances."""
        with self._lock:
            if self._index_client is not None:
                self._index_client.reset()
            self._chunker = None
            self._embedder = None
            self._index_client = None
            self._generation_client = None
            self._retrieval_service = None
            self._ingestion_service = None
            self._conversation_service = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_index_client() -> PineconeIndexClient:
    """
    Get the shared vector index client.

    Returns:
        PineconeIndexClient: Client bound to the configured index
    """
    return get_service_cache().index_client


def get_retrieval_service() -> RetrievalService:
    """
    Get retrieval service instance.

    Returns:
        RetrievalService: Search over the knowledge base
    """
    return get_service_cache().retrieval_service


def get_ingestion_service() -> IngestionService:
    """
    Get ingestion service instance.

    Returns:
        IngestionService: Chunk, embed and upsert pipeline
    """
    return get_service_cache().ingestion_service


def get_conversation_service() -> ConversationService:
    """
    Get conversation service instance.

    Returns:
        ConversationService: Grounded Q&A orchestrator
    """
    return get_service_cache().conversation_service
