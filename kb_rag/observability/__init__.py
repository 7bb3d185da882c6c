"""
Observability module.

Provides console logging with correlation ID tracking and request logging.
"""

from kb_rag.observability.correlation import (
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from kb_rag.observability.logger import CorrelationIdFilter, configure_logging

__all__ = [
    "CorrelationIdFilter",
    "clear_correlation_id",
    "configure_logging",
    "get_correlation_id",
    "set_correlation_id",
]
