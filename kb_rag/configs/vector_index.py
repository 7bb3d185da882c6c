"""
Vector index configuration settings.

Manages Pinecone connection, index provisioning and write batching.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for RAG retrieval
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from kb_rag.configs.base import BaseSettings


class VectorIndexSettings(BaseSettings):
    """Pinecone serverless index configuration."""

    model_config = SettingsConfigDict(env_prefix="PINECONE_")

    api_key: str | None = Field(default=None, description="Pinecone API key")
    index_name: str = Field(default="rag-index", description="Pinecone index name")
    cloud: str = Field(default="aws", description="Serverless cloud provider")
    region: str = Field(default="us-east-1", description="Serverless region")
    metric: str = Field(default="cosine", description="Similarity metric for new indexes")

    upsert_batch_size: int = Field(
        default=100,
        gt=0,
        description="Records per upsert request",
    )
    settle_seconds: float = Field(
        default=60.0,
        ge=0.0,
        description="Wait after index creation while the index is provisioned",
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0.0,
        description="Timeout applied to every Pinecone call",
    )
