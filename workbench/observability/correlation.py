"""
Correlation ID propagation.

The current correlation id lives in a ContextVar so it follows a request
or worker task across awaits. HTTP requests take it from
``X-Correlation-ID``; Celery tasks use their task id.

Dependencies: contextvars
System role: Request tracing across service boundaries
"""

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Set the correlation id, generating a UUID4 when none is given."""
    value = correlation_id or str(uuid.uuid4())
    correlation_id_ctx.set(value)
    return value


def get_correlation_id() -> str:
    """Current correlation id, empty string when unset."""
    return correlation_id_ctx.get()


def clear_correlation_id() -> None:
    """Reset the correlation id."""
    correlation_id_ctx.set("")


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """
    Bind a correlation id for the duration of a block.

    The previous value is restored on exit.
    """
    token = correlation_id_ctx.set(correlation_id or str(uuid.uuid4()))
    try:
        yield correlation_id_ctx.get()
    finally:
        correlation_id_ctx.reset(token)
