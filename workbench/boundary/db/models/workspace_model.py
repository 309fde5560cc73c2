"""
Workspace, user and workspace membership ORM models.

Workspaces own groups, connectors and transcript configurations. Users join
workspaces through time-bounded memberships.

Dependencies: sqlalchemy, workbench.boundary.db.base
System role: Tenant and identity persistence
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from workbench.boundary.db.base import Base, UUIDMixin, TimestampMixin


class WorkspaceModel(Base, UUIDMixin, TimestampMixin):
    """
    Workspace ORM model.

    Attributes:
        id: UUID primary key, also used as the public workspace id
        name: Display name
    """

    __tablename__ = "workspaces"

    name: Mapped[str] = mapped_column(String(255), nullable=False)


class UserModel(Base, UUIDMixin, TimestampMixin):
    """
    User ORM model.

    Attributes:
        email: Unique login email
        username: Handle used in conversation contexts
        first_name: Given name
        last_name: Optional family name
        image_url: Optional avatar URL
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    username: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    first_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    last_name: Mapped[str | None] = mapped_column(String(255), nullable=True, default=None)
    image_url: Mapped[str | None] = mapped_column(String(1024), nullable=True, default=None)

    @property
    def full_name(self) -> str:
        """First and last name joined, without trailing space."""
        return " ".join(part for part in (self.first_name, self.last_name) if part)


class MembershipModel(Base, UUIDMixin, TimestampMixin):
    """
    Workspace membership ORM model.

    A membership is active when ``start_at <= now`` and ``end_at`` is
    either null or in the future.

    Constraints:
        user_id, workspace_id: Foreign keys ON DELETE CASCADE
    """

    __tablename__ = "memberships"

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
    role: Mapped[str] = mapped_column(String(32), nullable=False, default="user")
    start_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )
