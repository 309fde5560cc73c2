"""
Transcript API schemas.

Dependencies: pydantic
System role: Transcript HTTP contracts
"""

from datetime import datetime

from pydantic import BaseModel


class TranscriptHistoryItem(BaseModel):
    """One handled transcript file."""

    file_id: str
    file_name: str
    conversation_id: str | None = None
    created_at: datetime


class TranscriptHistoryResponse(BaseModel):
    """Handled files of a configuration."""

    configuration_id: str
    history: list[TranscriptHistoryItem]


class ProcessEnqueuedResponse(BaseModel):
    """Acknowledgement of an enqueued sync."""

    configuration_id: str
    task_id: str
    status: str = "queued"
