"""
Structured logging helpers.

Context is passed to the standard logger through ``extra=``. Values are
stringified and truncated, and credential or document-body keys are
redacted so API keys, OAuth tokens and document text never reach logs.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from typing import Any

REDACTED = "<redacted>"

SENSITIVE_KEYS = frozenset(
    {
        "api_key",
        "access_token",
        "secret_key",
        "workspace_api_key",
        "authorization",
        "text",
        "content",
    }
)


def safe_log_value(value: Any, max_length: int = 500) -> str:
    """
    Convert a value to a short string for a log record.

    Collections are summarized by size rather than dumped.

    Args:
        value: Value to convert
        max_length: Maximum length before truncating

    Returns:
        str: Log-safe representation
    """
    if value is None:
        return "None"
    if isinstance(value, str):
        text = value
    elif isinstance(value, (list, tuple, set, frozenset)):
        text = f"{type(value).__name__}({len(value)} items)"
    elif isinstance(value, dict):
        text = f"dict({len(value)} keys)"
    elif isinstance(value, BaseException):
        text = f"{type(value).__name__}: {value}"
    else:
        text = str(value)

    if len(text) > max_length:
        return f"{text[:max_length]}... (truncated, {len(text)} total)"
    return text


def build_log_context(**context) -> dict[str, str]:
    """Stringify context values, redacting sensitive keys."""
    return {
        key: REDACTED if key.lower() in SENSITIVE_KEYS else safe_log_value(value)
        for key, value in context.items()
    }


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context,
) -> None:
    """
    Log a message with structured context.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Key-value pairs attached to the record
    """
    logger.log(level, message, extra=build_log_context(**context))


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context,
) -> None:
    """
    Log an exception at ERROR level with its traceback and context.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception being reported
        **context: Key-value pairs attached to the record
    """
    extra = build_log_context(**context)
    extra["error_type"] = type(exc).__name__
    extra["error_msg"] = safe_log_value(str(exc))
    logger.error(message, exc_info=exc, extra=extra)
