"""
Logging setup shared by the API process and Celery workers.

Records go to stdout as single lines carrying the current correlation id.

Dependencies: logging (stdlib)
System role: Centralized logging configuration
"""

import logging
import sys

from workbench.observability.correlation import get_correlation_id

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Third-party loggers that log every request or statement at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine", "celery.app.trace")


class CorrelationIdFilter(logging.Filter):
    """Attach the current correlation id to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        return True


def configure_logging(level: str = "INFO") -> None:
    """
    Install a single stdout handler on the root logger.

    Safe to call more than once; earlier handlers are replaced.

    Args:
        level: Root log level name
    """
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root_logger.setLevel(level.upper())
    root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return the named logger."""
    return logging.getLogger(name)
