"""Domain models and API schemas."""

from kb_rag.models.chat import ChatRequest, ChatResponse, ConversationAnswer, ConversationTurn
from kb_rag.models.document import Chunk, Document, IngestResult
from kb_rag.models.search import RetrievalOutcome, SearchRequest, SearchResponse, SearchResult

__all__ = [
    "ChatRequest",
    "ChatResponse",
    "Chunk",
    "ConversationAnswer",
    "ConversationTurn",
    "Document",
    "IngestResult",
    "RetrievalOutcome",
    "SearchRequest",
    "SearchResponse",
    "SearchResult",
]
