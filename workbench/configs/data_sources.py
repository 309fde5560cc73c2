"""
Data source index configuration settings.

Settings for the remote document index that connectors upsert into.

Dependencies: pydantic_settings
System role: Document sync client configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings

from workbench.configs.base import settings_config


class DataSourceSettings(BaseSettings):
    """Settings for document upsert/delete calls against the index API."""

    model_config = settings_config("DATA_SOURCE_")

    front_api: str | None = Field(
        default=None,
        description="Base URL of the index API (e.g. https://front.internal)",
    )
    upsert_retries: int = Field(
        default=10,
        description="Maximum upsert attempts before giving up",
    )
    upsert_base_delay_ms: int = Field(
        default=500,
        description="Base delay for quadratic backoff between upsert attempts",
    )
    request_timeout: float = Field(
        default=30.0,
        description="HTTP timeout per request in seconds",
    )
