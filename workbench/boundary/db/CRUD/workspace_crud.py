"""
Workspace, user and workspace membership CRUD operations.

Dependencies: sqlalchemy, workbench.boundary.db.models
System role: Tenant and identity persistence operations
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from workbench.boundary.db.base import utcnow
from workbench.boundary.db.models.workspace_model import (
    MembershipModel,
    UserModel,
    WorkspaceModel,
)
from workbench.boundary.db.CRUD.base_crud import BaseCRUD, active_at


class WorkspaceCRUD(BaseCRUD[WorkspaceModel]):
    """CRUD operations for WorkspaceModel."""

    def __init__(self) -> None:
        """Initialize WorkspaceCRUD with WorkspaceModel."""
        super().__init__(WorkspaceModel)


class UserCRUD(BaseCRUD[UserModel]):
    """CRUD operations for UserModel."""

    def __init__(self) -> None:
        """Initialize UserCRUD with UserModel."""
        super().__init__(UserModel)

    async def get_by_email(self, session: AsyncSession, email: str) -> UserModel | None:
        """
        Retrieve user by login email.

        Args:
            session: Async database session
            email: User email

        Returns:
            UserModel if found, None otherwise
        """
        stmt = select(UserModel).where(UserModel.email == email)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


class MembershipCRUD(BaseCRUD[MembershipModel]):
    """
    CRUD operations for workspace memberships.

    Extends BaseCRUD with active-membership lookups.
    """

    def __init__(self) -> None:
        """Initialize MembershipCRUD with MembershipModel."""
        super().__init__(MembershipModel)

    async def get_active_membership(
        self,
        session: AsyncSession,
        user_id: UUID,
        workspace_id: UUID,
        now: datetime | None = None,
    ) -> MembershipModel | None:
        """
        Retrieve the user's active membership in a workspace.

        Args:
            session: Async database session
            user_id: User UUID
            workspace_id: Workspace UUID
            now: Reference time (defaults to current UTC time)

        Returns:
            Active MembershipModel if any, None otherwise
        """
        stmt = (
            select(MembershipModel)
            .where(
                MembershipModel.user_id == user_id,
                MembershipModel.workspace_id == workspace_id,
                active_at(MembershipModel, now or utcnow()),
            )
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


workspace_crud = WorkspaceCRUD()
user_crud = UserCRUD()
membership_crud = MembershipCRUD()
