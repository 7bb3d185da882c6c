"""
Test suite for the exception hierarchy.

System role: Verification of error context and categorization
"""

import pytest

from kb_rag.core.exceptions import (
    AuthError,
    DimensionMismatchError,
    EmbeddingError,
    KnowledgeBaseError,
    NotFoundError,
    ServiceError,
    TransientServiceError,
    UnknownServiceError,
    ValidationError,
)


class TestKnowledgeBaseError:
    def test_str_without_details(self) -> None:
        assert str(KnowledgeBaseError("boom")) == "boom"

    def test_str_includes_details(self) -> None:
        error = KnowledgeBaseError("boom", {"index": "rag-index"})

        assert str(error) == "boom | Details: {'index': 'rag-index'}"
        assert error.message == "boom"


class TestValidationError:
    def test_field_is_recorded(self) -> None:
        error = ValidationError("Query is required", field="query")

        assert error.details == {"field": "query"}
        assert isinstance(error, KnowledgeBaseError)


class TestServiceError:
    def test_service_and_operation_in_details(self) -> None:
        error = TransientServiceError(
            "timed out", service="pinecone", operation="query", details={"status": 503}
        )

        assert error.details == {"status": 503, "service": "pinecone", "operation": "query"}

    @pytest.mark.parametrize(
        "error_cls",
        [AuthError, NotFoundError, TransientServiceError, UnknownServiceError, EmbeddingError],
    )
    def test_categories_are_service_errors(self, error_cls) -> None:
        assert issubclass(error_cls, ServiceError)
        assert issubclass(error_cls, KnowledgeBaseError)

    def test_dimension_mismatch_is_not_a_service_error(self) -> None:
        error = DimensionMismatchError(3, 4)

        assert not isinstance(error, ServiceError)
        assert "3" in error.message and "4" in error.message
