"""
Celery configuration settings.

Manages Celery broker and result backend configuration for background
transcript processing. Includes retry policies and beat schedule interval.

Dependencies: pydantic, pydantic_settings
System role: Async task queue configuration for transcript sync
"""

from pydantic import Field
from pydantic_settings import BaseSettings

from workbench.configs.base import settings_config


class CelerySettings(BaseSettings):
    """Celery broker and result backend configuration."""

    model_config = settings_config("CELERY_")

    broker_host: str = Field(default="localhost", description="Redis broker host")
    broker_port: int = Field(default=6379, description="Redis broker port")
    broker_db: int = Field(default=0, description="Redis broker database number")

    result_backend_host: str = Field(default="localhost", description="Redis host for results")
    result_backend_port: int = Field(default=6379, description="Redis port")
    result_backend_db: int = Field(default=1, description="Redis database number")

    task_serializer: str = Field(default="json", description="Task serialization format")
    result_serializer: str = Field(default="json", description="Result serialization format")
    accept_content: list[str] = Field(
        default=["json"],
        description="Accepted content types",
    )
    timezone: str = Field(default="UTC", description="Celery timezone")

    # Retry policy
    task_max_retries: int = Field(default=3, description="Maximum task retry attempts")
    task_retry_backoff: int = Field(default=60, description="Retry backoff base in seconds")
    task_retry_backoff_max: int = Field(
        default=600,
        description="Maximum retry backoff in seconds",
    )

    transcripts_sync_interval: float = Field(
        default=7200.0,
        description="Seconds between periodic transcript syncs",
    )

    @property
    def broker_url(self) -> str:
        """
        Construct Redis broker URL.

        Returns:
            str: Celery-compatible broker URL
        """
        return f"redis://{self.broker_host}:{self.broker_port}/{self.broker_db}"

    @property
    def result_backend_url(self) -> str:
        """
        Construct Redis result backend URL.

        Returns:
            str: Celery-compatible result backend URL
        """
        return f"redis://{self.result_backend_host}:{self.result_backend_port}/{self.result_backend_db}"
