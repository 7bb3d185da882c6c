"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
All config modules support environment variable mapping with validation.
"""

from kb_rag.configs.chunking import ChunkingSettings
from kb_rag.configs.embedding import EmbeddingSettings
from kb_rag.configs.generation import GenerationSettings
from kb_rag.configs.retrieval import RetrievalSettings
from kb_rag.configs.settings import Settings, get_settings
from kb_rag.configs.vector_index import VectorIndexSettings

__all__ = [
    "ChunkingSettings",
    "EmbeddingSettings",
    "GenerationSettings",
    "RetrievalSettings",
    "Settings",
    "VectorIndexSettings",
    "get_settings",
]
