"""
Email delivery configuration settings.

Dependencies: pydantic_settings
System role: Transactional email configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings

from workbench.configs.base import settings_config


class EmailSettings(BaseSettings):
    """Transactional email API configuration."""

    model_config = settings_config("EMAIL_")

    api_url: str = Field(
        default="https://api.sendgrid.com/v3/mail/send",
        description="Mail send endpoint",
    )
    api_key: str = Field(default="", description="Mail API key")
    request_timeout: float = Field(default=30.0, description="HTTP timeout in seconds")
