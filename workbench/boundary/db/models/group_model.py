"""
Group and group membership ORM models.

Groups partition workspace members. Only ``regular`` groups are editable;
``global`` and ``system`` groups are managed by the platform.

Dependencies: sqlalchemy, workbench.boundary.db.base
System role: Group-based access control persistence
"""

import enum
from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, Enum, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from workbench.boundary.db.base import Base, UUIDMixin, TimestampMixin


class GroupType(str, enum.Enum):
    """
    Group kinds.

    REGULAR: User-managed group, members can be added and removed
    GLOBAL: Contains every workspace member
    SYSTEM: Internal group used for system keys
    """

    REGULAR = "regular"
    GLOBAL = "global"
    SYSTEM = "system"


class GroupModel(Base, UUIDMixin, TimestampMixin):
    """
    Group ORM model.

    Attributes:
        name: Group display name
        type: GroupType
        workspace_id: Owning workspace
    """

    __tablename__ = "groups"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[GroupType] = mapped_column(
        Enum(GroupType, native_enum=False),
        nullable=False,
        default=GroupType.REGULAR,
    )
    workspace_id: Mapped[UUID] = mapped_column(
        ForeignKey("workspaces.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )


class GroupMembershipModel(Base, UUIDMixin, TimestampMixin):
    """
    Group membership ORM model with soft time-bounded validity.

    A user holds at most one active membership per group at a time;
    ending a membership sets ``end_at`` rather than deleting the row.
    """

    __tablename__ = "group_memberships"

    group_id: Mapped[UUID] = mapped_column(
        ForeignKey("groups.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
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
    start_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )
