"""
Exception hierarchy for the knowledge-base RAG service.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.
Collaborator failures (Pinecone, Anthropic, embedding runtime) are
categorized into auth / not-found / transient / unknown so callers can
decide what to surface.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class KnowledgeBaseError(Exception):
    """Base exception for all knowledge-base application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(KnowledgeBaseError):
    """Raised when caller input is missing or malformed."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class DimensionMismatchError(KnowledgeBaseError):
    """Raised when similarity is computed over vectors of unequal length."""

    def __init__(self, left: int, right: int) -> None:
        super().__init__(
            f"Vectors must have the same length (got {left} and {right})",
            {"left_dimension": left, "right_dimension": right},
        )


class ServiceError(KnowledgeBaseError):
    """Base exception for failures reported by an external collaborator."""

    def __init__(
        self,
        message: str,
        service: str | None = None,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize service error.

        Args:
            message: Error message
            service: Collaborator that failed (pinecone, anthropic, embedding)
            operation: Operation that failed (upsert, query, create_index...)
            details: Additional context
        """
        details = details or {}
        if service:
            details["service"] = service
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class AuthError(ServiceError):
    """Raised when credentials for a collaborator are missing or rejected."""

    pass


class NotFoundError(ServiceError):
    """Raised when the index (or another required resource) does not exist."""

    pass


class TransientServiceError(ServiceError):
    """Raised on timeouts, connection failures, throttling and 5xx responses."""

    pass


class UnknownServiceError(ServiceError):
    """Raised for collaborator failures that fit no other category."""

    pass


class EmbeddingError(ServiceError):
    """Raised when embedding generation fails."""

    pass
