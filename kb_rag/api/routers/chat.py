"""Chat API endpoints.

Routes:
- POST /chat - Answer a message using knowledge-base context

Dependencies: kb_rag.application.services.conversation_service
System role: Chat messaging HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from kb_rag.api.deps import get_conversation_service
from kb_rag.application.services.conversation_service import ConversationService
from kb_rag.core.exceptions import ValidationError
from kb_rag.models.chat import ChatRequest, ChatResponse
from kb_rag.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    conversation_service: ConversationService = Depends(get_conversation_service),
) -> ChatResponse:
    """Send a chat message with optional prior history.

    An empty or unreachable knowledge base still yields an answer; only
    generation failures are reported as errors.

    Args:
        request: ChatRequest with message and history
        conversation_service: Injected ConversationService

    Returns:
        ChatResponse: Answer with the fragments used as sources

    Raises:
        HTTPException(400): Empty message
        HTTPException(500): Generation failure
    """
    try:
        result = await conversation_service.answer(request.message, request.history)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        log_exception_with_context(
            logger,
            f"{__name__}:chat - Chat processing failed",
            e,
            history=request.history,
        )
        raise HTTPException(status_code=500, detail="Failed to process request")

    return ChatResponse(answer=result.answer, sources=result.sources)
