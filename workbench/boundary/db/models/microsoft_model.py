"""
Microsoft (OneDrive/SharePoint) connector ORM models.

One configuration row per connector, plus the selected roots, the delta
links used for incremental sync, and every node seen during sync.

Dependencies: sqlalchemy, workbench.boundary.db.base
System role: Connector state persistence
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from workbench.boundary.db.base import Base, UUIDMixin, TimestampMixin


class MicrosoftConfigurationModel(Base, UUIDMixin, TimestampMixin):
    """Per-connector Microsoft sync settings."""

    __tablename__ = "microsoft_configurations"

    connector_id: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)
    pdf_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    csv_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    large_files_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class MicrosoftRootModel(Base, UUIDMixin, TimestampMixin):
    """A drive, site or folder selected for sync."""

    __tablename__ = "microsoft_roots"
    __table_args__ = (UniqueConstraint("connector_id", "node_id"),)

    connector_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    node_id: Mapped[str] = mapped_column(String(512), nullable=False)
    node_type: Mapped[str] = mapped_column(String(32), nullable=False)


class MicrosoftDeltaModel(Base, UUIDMixin, TimestampMixin):
    """Latest delta link for a synced drive or folder."""

    __tablename__ = "microsoft_deltas"
    __table_args__ = (UniqueConstraint("connector_id", "node_id"),)

    connector_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    node_id: Mapped[str] = mapped_column(String(512), nullable=False)
    delta_link: Mapped[str] = mapped_column(Text, nullable=False)


class MicrosoftNodeModel(Base, UUIDMixin, TimestampMixin):
    """A file or folder seen during sync."""

    __tablename__ = "microsoft_nodes"
    __table_args__ = (UniqueConstraint("connector_id", "internal_id"),)

    connector_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    internal_id: Mapped[str] = mapped_column(String(512), nullable=False)
    node_type: Mapped[str] = mapped_column(String(32), nullable=False)
    name: Mapped[str | None] = mapped_column(String(1024), nullable=True, default=None)
    mime_type: Mapped[str | None] = mapped_column(String(255), nullable=True, default=None)
    parent_internal_id: Mapped[str | None] = mapped_column(
        String(512),
        nullable=True,
        default=None,
    )
    last_seen_ts: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )
    last_upserted_ts: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )
