"""
Transcript pipeline configuration settings.

Dependencies: pydantic_settings
System role: Meeting transcript summarization configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings

from workbench.configs.base import settings_config


class TranscriptsSettings(BaseSettings):
    """Transcript discovery, summarization and notification settings."""

    model_config = settings_config("TRANSCRIPTS_")

    min_transcript_size: int = Field(
        default=100,
        description="Transcripts shorter than this many characters are not summarized",
    )
    lookback_days: int = Field(
        default=7,
        description="How far back providers are searched for new transcripts",
    )
    app_url: str = Field(
        default="http://localhost:3000",
        description="Public app URL used to link summaries",
    )
    sender_name: str = Field(default="Workbench team", description="Notification sender name")
    sender_email: str = Field(
        default="team@workbench.local",
        description="Notification sender address",
    )
    support_email: str = Field(
        default="support@workbench.local",
        description="Support address quoted in failure notifications",
    )
    google_drive_api_url: str = Field(
        default="https://www.googleapis.com/drive/v3",
        description="Google Drive API base URL",
    )
    gong_api_url: str = Field(
        default="https://api.gong.io/v2",
        description="Gong API base URL",
    )
    request_timeout: float = Field(default=30.0, description="Provider HTTP timeout in seconds")
