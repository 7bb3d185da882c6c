"""
Generation configuration settings.

Settings for the Anthropic Messages API used to produce grounded answers.

Dependencies: pydantic_settings
System role: LLM configuration for the conversation orchestrator
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from kb_rag.configs.base import BaseSettings


class GenerationSettings(BaseSettings):
    """Anthropic model configuration."""

    model_config = SettingsConfigDict(env_prefix="ANTHROPIC_")

    api_key: str | None = Field(default=None, description="Anthropic API key")
    model: str = Field(default="claude-sonnet-4-5", description="Anthropic model identifier")
    max_tokens: int = Field(default=4096, gt=0, description="Output token cap")
    timeout_seconds: float = Field(default=60.0, gt=0.0, description="Request timeout")
    history_window: int = Field(
        default=10,
        ge=0,
        description="Number of most recent conversation turns forwarded to the model",
    )
