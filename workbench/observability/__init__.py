"""
Observability module.

Provides structured logging, correlation ID tracking and Prometheus
counters for outbound document sync calls.
"""

from workbench.observability.correlation import (
    correlation_scope,
    get_correlation_id,
    set_correlation_id,
)
from workbench.observability.logger import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "correlation_scope",
    "get_correlation_id",
    "get_logger",
    "set_correlation_id",
]
