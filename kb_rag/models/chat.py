"""
Chat domain models and schemas.

Request/response schemas for conversational Q&A.

Dependencies: pydantic
System role: Chat API contracts
"""

from typing import Literal

from pydantic import BaseModel, Field

from kb_rag.models.search import SearchResult


class ConversationTurn(BaseModel):
    """Single prior turn supplied by the caller."""

    role: Literal["user", "assistant"] = Field(description="Message role: 'user' or 'assistant'")
    content: str = Field(description="Message content")


class ConversationAnswer(BaseModel):
    """Grounded answer plus the fragments it was grounded on."""

    answer: str
    sources: list[SearchResult] = Field(default_factory=list)


class ChatRequest(BaseModel):
    """Request schema for chat messages."""

    message: str = Field(default="", description="User question or message")
    history: list[ConversationTurn] = Field(
        default_factory=list,
        description="Prior conversation, oldest first",
    )


class ChatResponse(BaseModel):
    """Response schema for chat messages."""

    answer: str
    sources: list[SearchResult]
