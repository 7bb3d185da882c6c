"""
Retrieval configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Query-time retrieval tuning
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from kb_rag.configs.base import BaseSettings


class RetrievalSettings(BaseSettings):
    """Top-K and score threshold for similarity search."""

    model_config = SettingsConfigDict(env_prefix="RETRIEVAL_")

    top_k: int = Field(default=10, ge=1, le=100, description="Number of top results to retrieve")
    min_score: float = Field(
        default=0.5,
        description="Minimum similarity score; lower-scoring matches are dropped",
    )
