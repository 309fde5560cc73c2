"""
Assistant API configuration settings.

Settings for the internal conversation/agent API used by the
transcript pipeline.

Dependencies: pydantic_settings
System role: Conversation API client configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings

from workbench.configs.base import settings_config


class AssistantApiSettings(BaseSettings):
    """Conversation and agent API configuration."""

    model_config = settings_config("ASSISTANT_API_")

    base_url: str = Field(
        default="http://localhost:3000",
        description="Base URL of the conversation API",
    )
    api_key: str = Field(default="", description="System API key for the conversation API")
    poll_interval: float = Field(
        default=2.0,
        description="Seconds between conversation polls while waiting for an agent reply",
    )
    poll_max_attempts: int = Field(
        default=150,
        description="Maximum number of conversation polls before giving up",
    )
    request_timeout: float = Field(default=60.0, description="HTTP timeout in seconds")
