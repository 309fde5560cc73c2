"""
Transcript pipeline domain models.

Dependencies: pydantic
System role: Transcript pipeline contracts
"""

import enum

from pydantic import BaseModel


class TranscriptContent(BaseModel):
    """Title and plain-text body of one transcript."""

    title: str = ""
    content: str = ""


class TranscriptOutcome(str, enum.Enum):
    """
    Result of processing one transcript file.

    PROCESSED: Summary generated, history recorded, email sent
    SKIPPED_ALREADY_PROCESSED: A history record already existed
    SKIPPED_TOO_SHORT: Content below the minimum size; stub recorded, user notified
    NO_AGENT_REPLY: Message posted but the agent never succeeded; history recorded, no email
    ABORTED: Missing agent or conversation API failure before the message; nothing recorded
    """

    PROCESSED = "processed"
    SKIPPED_ALREADY_PROCESSED = "skipped_already_processed"
    SKIPPED_TOO_SHORT = "skipped_too_short"
    NO_AGENT_REPLY = "no_agent_reply"
    ABORTED = "aborted"


class EmailAddress(BaseModel):
    """Display name and address."""

    name: str
    email: str


class EmailMessage(BaseModel):
    """Structured email handed to the mail collaborator."""

    sender: EmailAddress
    subject: str
    html: str
