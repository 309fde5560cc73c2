"""
OAuth connection service configuration.

Transcript providers are authorized per user through an OAuth connection
service that stores and refreshes provider tokens.

Dependencies: pydantic_settings
System role: Provider credential resolution configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings

from workbench.configs.base import settings_config


class OAuthSettings(BaseSettings):
    """OAuth connection service configuration."""

    model_config = settings_config("OAUTH_")

    base_url: str = Field(
        default="https://api.nango.dev",
        description="OAuth connection service URL",
    )
    secret_key: str = Field(default="", description="OAuth connection service secret key")
    google_drive_provider_key: str = Field(
        default="google-drive",
        description="Provider config key for Google Drive connections",
    )
    gong_provider_key: str = Field(
        default="gong",
        description="Provider config key for Gong connections",
    )
    request_timeout: float = Field(default=30.0, description="HTTP timeout in seconds")
