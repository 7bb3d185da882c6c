"""
Anthropic Messages API client wrapper.

Sends a system prompt plus user/assistant turns to the Messages API and
returns the reply as typed content blocks. SDK failures are translated
into the application's service error categories. No retries happen at
this layer; the SDK's own retries are disabled.

Dependencies: anthropic, kb_rag.configs, kb_rag.core.exceptions
System role: Generation boundary for the conversation orchestrator
"""

import logging
import threading
from typing import Any

import anthropic

from kb_rag.boundary.llm.generation_schemas import ContentBlock, GenerationReply
from kb_rag.configs.generation import GenerationSettings
from kb_rag.core.exceptions import (
    AuthError,
    NotFoundError,
    ServiceError,
    TransientServiceError,
    UnknownServiceError,
)

logger = logging.getLogger(__name__)

SERVICE_NAME = "anthropic"


def classify_generation_error(exc: Exception, operation: str = "messages.create") -> ServiceError:
    """
    Map an Anthropic SDK failure onto the service error taxonomy.

    Args:
        exc: Original exception
        operation: Operation that failed

    Returns:
        ServiceError: AuthError, NotFoundError, TransientServiceError or UnknownServiceError
    """
    if isinstance(exc, ServiceError):
        return exc

    if isinstance(exc, (anthropic.AuthenticationError, anthropic.PermissionDeniedError)):
        error_cls: type[ServiceError] = AuthError
    elif isinstance(exc, anthropic.NotFoundError):
        error_cls = NotFoundError
    elif isinstance(
        exc,
        (
            anthropic.APITimeoutError,
            anthropic.APIConnectionError,
            anthropic.RateLimitError,
            anthropic.InternalServerError,
            TimeoutError,
        ),
    ):
        error_cls = TransientServiceError
    elif isinstance(exc, anthropic.APIStatusError) and (
        exc.status_code in (408, 429) or exc.status_code >= 500
    ):
        error_cls = TransientServiceError
    else:
        error_cls = UnknownServiceError

    details: dict[str, Any] = {"error_type": type(exc).__name__}
    status = getattr(exc, "status_code", None)
    if isinstance(status, int):
        details["status"] = status

    return error_cls(
        f"Anthropic {operation} failed: {str(exc) or type(exc).__name__}",
        service=SERVICE_NAME,
        operation=operation,
        details=details,
    )


class AnthropicGenerationClient:
    """Async client for grounded answer generation."""

    def __init__(
        self,
        settings: GenerationSettings | None = None,
        client: Any | None = None,
    ) -> None:
        """
        Initialize generation client configuration.

        Args:
            settings: API key, default model, token cap and timeout
            client: Optional pre-built AsyncAnthropic (tests inject fakes here)
        """
        self._settings = settings or GenerationSettings()
        self._client = client
        self._lock = threading.Lock()

    def _get_client(self) -> Any:
        if self._client is None:
            with self._lock:
                if self._client is None:
                    if not self._settings.api_key:
                        raise AuthError(
                            "ANTHROPIC_API_KEY is required",
                            service=SERVICE_NAME,
                            operation="connect",
                        )
                    self._client = anthropic.AsyncAnthropic(
                        api_key=self._settings.api_key,
                        timeout=self._settings.timeout_seconds,
                        max_retries=0,
                    )
        return self._client

    async def complete(
        self,
        system: str,
        messages: list[dict[str, str]],
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> GenerationReply:
        """
        Generate a reply for a conversation.

        Args:
            system: System prompt
            messages: Alternating user/assistant turns, oldest first, ending with a user turn
            model: Model identifier (configured default if omitted)
            max_tokens: Output token cap (configured default if omitted)

        Returns:
            GenerationReply: Reply content blocks in model order

        Raises:
            ServiceError: When the API call fails
        """
        model = model or self._settings.model
        max_tokens = max_tokens or self._settings.max_tokens
        client = self._get_client()

        logger.debug(
            f"{__name__}:complete - Calling {model} with {len(messages)} messages "
            f"(max_tokens={max_tokens})"
        )
        try:
            response = await client.messages.create(
                model=model,
                max_tokens=max_tokens,
                system=system,
                messages=messages,
            )
        except Exception as e:
            error = classify_generation_error(e)
            logger.error(f"{__name__}:complete - {type(error).__name__}: {type(e).__name__}: {e}")
            raise error from e

        blocks = [
            ContentBlock(
                type=str(getattr(block, "type", "")),
                text=getattr(block, "text", None),
            )
            for block in (response.content or [])
        ]
        return GenerationReply(
            content=blocks,
            model=getattr(response, "model", None),
            stop_reason=getattr(response, "stop_reason", None),
        )
