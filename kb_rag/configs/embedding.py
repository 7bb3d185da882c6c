"""
Embedding model configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Embedding runtime configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from kb_rag.configs.base import BaseSettings


class EmbeddingSettings(BaseSettings):
    """Sentence-transformers embedding configuration."""

    model_config = SettingsConfigDict(env_prefix="EMBEDDING_", protected_namespaces=())

    model_name: str = Field(
        default="sentence-transformers/all-MiniLM-L6-v2",
        description="HuggingFace model ID (mean pooling)",
    )
    dimension: int = Field(
        default=384,
        gt=0,
        description="Output vector dimension (all-MiniLM-L6-v2 = 384)",
    )
    device: str = Field(default="cpu", description="Torch device for inference")
    batch_size: int = Field(
        default=32,
        gt=0,
        description="Texts per sequential embedding call on the batch path",
    )
