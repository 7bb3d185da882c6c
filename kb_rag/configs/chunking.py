"""
Chunking configuration settings.

Controls the sliding-window chunker used on the ingest path.

Dependencies: pydantic, pydantic_settings
System role: Text splitting configuration
"""

from pydantic import Field, model_validator
from pydantic_settings import SettingsConfigDict

from kb_rag.configs.base import BaseSettings


class ChunkingSettings(BaseSettings):
    """Sliding-window chunker configuration (sizes in characters)."""

    model_config = SettingsConfigDict(env_prefix="CHUNKING_")

    chunk_size: int = Field(default=1000, gt=0, description="Maximum chunk size in characters")
    chunk_overlap: int = Field(
        default=200,
        ge=0,
        description="Characters shared between consecutive chunks",
    )
    min_chunk_length: int = Field(
        default=50,
        ge=0,
        description="Chunks whose trimmed length is at or below this are dropped",
    )

    @model_validator(mode="after")
    def _overlap_below_size(self) -> "ChunkingSettings":
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError(
                f"chunk_overlap ({self.chunk_overlap}) must be smaller than "
                f"chunk_size ({self.chunk_size})"
            )
        return self
