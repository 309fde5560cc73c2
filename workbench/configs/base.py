"""
Base configuration settings.

Every settings class reads ``.env`` and the process environment under its
own prefix. ``settings_config`` builds that shared model config; the
top-level ``BaseSettings`` carries the unprefixed application fields.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def settings_config(env_prefix: str = "") -> SettingsConfigDict:
    """
    Model config shared by every Workbench settings class.

    Args:
        env_prefix: Environment variable prefix, e.g. ``POSTGRES_``

    Returns:
        SettingsConfigDict: .env aware, case-insensitive, extra keys ignored
    """
    return SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix=env_prefix,
        case_sensitive=False,
        extra="ignore",
    )


class BaseSettings(PydanticBaseSettings):
    """Unprefixed application settings."""

    model_config = settings_config()

    environment: str = Field(
        default="development",
        description="Application environment (development, staging, production)",
    )
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: LogLevel = Field(default="INFO", description="Root log level")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        """Accept log levels in any case."""
        return value.upper() if isinstance(value, str) else value
