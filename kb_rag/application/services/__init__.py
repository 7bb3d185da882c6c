"""Application services orchestrating the RAG pipeline."""

from kb_rag.application.services.conversation_service import ConversationService
from kb_rag.application.services.ingestion_service import IngestionService
from kb_rag.application.services.retrieval_service import RetrievalService

__all__ = ["ConversationService", "IngestionService", "RetrievalService"]
