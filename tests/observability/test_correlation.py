"""
Test suite for correlation ID propagation and logging setup.

System role: Verification of request tracing helpers
"""

import logging

from kb_rag.observability.correlation import (
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from kb_rag.observability.log_utils import log_exception_with_context, safe_log_value
from kb_rag.observability.logger import CorrelationIdFilter


class TestCorrelationId:
    def teardown_method(self) -> None:
        clear_correlation_id()

    def test_set_and_get(self) -> None:
        assert set_correlation_id("abc") == "abc"
        assert get_correlation_id() == "abc"

    def test_generates_when_missing(self) -> None:
        generated = set_correlation_id()

        assert len(generated) == 36
        assert get_correlation_id() == generated

    def test_clear(self) -> None:
        set_correlation_id("abc")

        clear_correlation_id()

        assert get_correlation_id() == ""


class TestCorrelationIdFilter:
    def teardown_method(self) -> None:
        clear_correlation_id()

    def make_record(self) -> logging.LogRecord:
        return logging.LogRecord("test", logging.INFO, __file__, 1, "message", None, None)

    def test_stamps_current_id(self) -> None:
        set_correlation_id("req-1")
        record = self.make_record()

        assert CorrelationIdFilter().filter(record) is True
        assert record.correlation_id == "req-1"

    def test_placeholder_outside_request(self) -> None:
        record = self.make_record()

        CorrelationIdFilter().filter(record)

        assert record.correlation_id == "-"


class TestLogUtils:
    def test_safe_log_value_summarizes_collections(self) -> None:
        assert safe_log_value([1, 2, 3]) == "list(3 items)"
        assert safe_log_value({"a": 1}) == "dict(1 keys)"
        assert safe_log_value(None) == "None"

    def test_safe_log_value_truncates(self) -> None:
        assert safe_log_value("x" * 600).startswith("x" * 500 + "... (truncated, 600 total)")

    def test_log_exception_with_context(self, caplog) -> None:
        logger = logging.getLogger("kb_rag.tests")

        with caplog.at_level(logging.ERROR, logger="kb_rag.tests"):
            log_exception_with_context(logger, "failed", ValueError("bad"), namespace="docs")

        record = caplog.records[-1]
        assert record.error_type == "ValueError"
        assert record.namespace == "docs"
        assert record.exc_info is not None
