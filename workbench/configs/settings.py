"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from workbench.configs.assistant_api import AssistantApiSettings
from workbench.configs.base import BaseSettings
from workbench.configs.celery_config import CelerySettings
from workbench.configs.data_sources import DataSourceSettings
from workbench.configs.database import DatabaseSettings
from workbench.configs.mail import EmailSettings
from workbench.configs.oauth import OAuthSettings
from workbench.configs.transcripts import TranscriptsSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    # Aggregated settings
    database: DatabaseSettings = DatabaseSettings()
    data_sources: DataSourceSettings = DataSourceSettings()
    assistant_api: AssistantApiSettings = AssistantApiSettings()
    oauth: OAuthSettings = OAuthSettings()
    transcripts: TranscriptsSettings = TranscriptsSettings()
    email: EmailSettings = EmailSettings()
    celery: CelerySettings = CelerySettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from workbench.configs import get_settings
        settings = get_settings()
    """
    return Settings()
