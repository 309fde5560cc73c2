"""
Meeting transcript configuration and history ORM models.

A configuration selects, for one user, the provider transcripts are pulled
from and the agent that summarizes them. History rows record every file
already handled so a transcript is never summarized twice.

Dependencies: sqlalchemy, workbench.boundary.db.base
System role: Transcript pipeline state persistence
"""

import enum
from uuid import UUID

from sqlalchemy import Boolean, Enum, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from workbench.boundary.db.base import Base, UUIDMixin, TimestampMixin


class TranscriptsProvider(str, enum.Enum):
    """Supported transcript sources."""

    GOOGLE_DRIVE = "google_drive"
    GONG = "gong"


class TranscriptsConfigurationModel(Base, UUIDMixin, TimestampMixin):
    """
    Per-user transcript configuration.

    Attributes:
        user_id: Owner, who receives summaries by email
        workspace_id: Workspace conversations are created in
        provider: TranscriptsProvider
        connection_id: OAuth connection used to call the provider
        agent_configuration_id: Agent mentioned to summarize, None until chosen
        is_active: Whether periodic sync picks this configuration up
    """

    __tablename__ = "transcripts_configurations"
    __table_args__ = (UniqueConstraint("user_id", "provider"),)

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    workspace_id: Mapped[UUID] = mapped_column(
        ForeignKey("workspaces.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    provider: Mapped[TranscriptsProvider] = mapped_column(
        Enum(TranscriptsProvider, native_enum=False),
        nullable=False,
    )
    connection_id: Mapped[str] = mapped_column(String(255), nullable=False)
    agent_configuration_id: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        default=None,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class TranscriptsHistoryModel(Base, UUIDMixin, TimestampMixin):
    """
    One processed transcript file.

    conversation_id is None when the transcript was too short to summarize.
    """

    __tablename__ = "transcripts_histories"
    __table_args__ = (UniqueConstraint("configuration_id", "file_id"),)

    configuration_id: Mapped[UUID] = mapped_column(
        ForeignKey("transcripts_configurations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    file_id: Mapped[str] = mapped_column(String(512), nullable=False)
    file_name: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
    conversation_id: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        default=None,
    )
