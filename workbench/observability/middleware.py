"""
Request tracing middleware.

CorrelationMiddleware binds the X-Correlation-ID header (or a fresh id)
for the request and echoes it back. RequestLoggingMiddleware logs one
line per request with status and latency; health and metrics probes are
logged at DEBUG so they do not drown the access log.

Dependencies: fastapi, starlette
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from workbench.observability.correlation import correlation_scope
from workbench.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
QUIET_PATH_PREFIXES = ("/api/v1/health", "/metrics")


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and latency of every request."""

    async def dispatch(self, request: Request, call_next) -> Response:
        started = time.perf_counter()
        method = request.method
        path = request.url.path

        try:
            response: Response = await call_next(request)
        except Exception as exc:
            log_exception_with_context(
                logger,
                f"{method} {path} failed",
                exc,
                method=method,
                path=path,
                process_time_ms=_elapsed_ms(started),
            )
            raise

        level = logging.DEBUG if path.startswith(QUIET_PATH_PREFIXES) else logging.INFO
        if response.status_code >= 500:
            level = logging.ERROR
        log_with_context(
            logger,
            level,
            f"{method} {path} - {response.status_code}",
            method=method,
            path=path,
            status_code=response.status_code,
            process_time_ms=_elapsed_ms(started),
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Bind a correlation id for the request and return it in the response."""

    async def dispatch(self, request: Request, call_next) -> Response:
        with correlation_scope(request.headers.get(CORRELATION_HEADER)) as correlation_id:
            response: Response = await call_next(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
