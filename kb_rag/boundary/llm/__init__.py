"""LLM boundary: generation clients and reply schemas."""

from kb_rag.boundary.llm.anthropic_client import AnthropicGenerationClient, classify_generation_error
from kb_rag.boundary.llm.generation_schemas import ContentBlock, GenerationReply

__all__ = [
    "AnthropicGenerationClient",
    "ContentBlock",
    "GenerationReply",
    "classify_generation_error",
]
