"""
Generation reply schemas.

Provider-neutral view of a Messages API reply: an ordered list of typed
content blocks. Only text blocks carry an answer.

Dependencies: pydantic
System role: Type definitions for the generation boundary
"""

from pydantic import BaseModel, Field


class ContentBlock(BaseModel):
    """Single block of model output."""

    type: str = Field(description="Block type ('text', 'tool_use', ...)")
    text: str | None = Field(default=None, description="Text payload for text blocks")


class GenerationReply(BaseModel):
    """Reply returned by the generation client."""

    content: list[ContentBlock] = Field(default_factory=list)
    model: str | None = None
    stop_reason: str | None = None

    def first_text(self) -> str | None:
        """Return the text of the first text block, if any."""
        for block in self.content:
            if block.type == "text" and block.text is not None:
                return block.text
        return None
