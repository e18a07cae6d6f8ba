"""
Observability module - Logging, Metrics, and Tracing.
"""

from receipt_validation.observability.logging import get_logger, log_context, setup_logging
from receipt_validation.observability.metrics import metrics
from receipt_validation.observability.tracing import setup_tracing, trace_operation

__all__ = [
    "get_logger",
    "log_context",
    "setup_logging",
    "metrics",
    "setup_tracing",
    "trace_operation",
]
