"""
Group and group membership CRUD operations.

Groups are addressed publicly by the string form of their UUID and are
always scoped to a workspace.

Dependencies: sqlalchemy, workbench.boundary.db.models
System role: Group persistence operations
"""

from datetime import datetime
from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from workbench.boundary.db.base import utcnow
from workbench.boundary.db.models.group_model import (
    GroupMembershipModel,
    GroupModel,
    GroupType,
)
from workbench.boundary.db.CRUD.base_crud import BaseCRUD, active_at
from workbench.core.exceptions import ResourceNotFoundError


def parse_group_id(s_id: str) -> UUID | None:
    """Parse a public group id, returning None when malformed."""
    try:
        return UUID(str(s_id))
    except ValueError:
        return None


class GroupCRUD(BaseCRUD[GroupModel]):
    """
    CRUD operations for GroupModel.

    Extends BaseCRUD with workspace-scoped lookups and cascading deletes.
    """

    def __init__(self) -> None:
        """Initialize GroupCRUD with GroupModel."""
        super().__init__(GroupModel)

    async def make_new(
        self,
        session: AsyncSession,
        workspace_id: UUID,
        name: str,
        type: GroupType = GroupType.REGULAR,
    ) -> GroupModel:
        """
        Create a group in a workspace.

        Args:
            session: Async database session
            workspace_id: Owning workspace UUID
            name: Group name
            type: Group kind (defaults to regular)

        Returns:
            Created GroupModel
        """
        return await self.create(session, workspace_id=workspace_id, name=name, type=type)

    async def fetch_by_id(
        self,
        session: AsyncSession,
        workspace_id: UUID,
        s_id: str,
    ) -> GroupModel | None:
        """
        Retrieve a group of the workspace by public id.

        Returns:
            GroupModel if found, None if missing or the id is malformed
        """
        group_id = parse_group_id(s_id)
        if group_id is None:
            return None
        return await self._get_in_workspace(session, workspace_id, group_id)

    async def get_workspace_group(
        self,
        session: AsyncSession,
        workspace_id: UUID,
        s_id: str,
    ) -> GroupModel | None:
        """
        Retrieve a group of the workspace by public id.

        Raises:
            ValueError: If the id is malformed
        """
        group_id = parse_group_id(s_id)
        if group_id is None:
            raise ValueError("Invalid group ID.")
        return await self._get_in_workspace(session, workspace_id, group_id)

    async def _get_in_workspace(
        self,
        session: AsyncSession,
        workspace_id: UUID,
        group_id: UUID,
    ) -> GroupModel | None:
        stmt = select(GroupModel).where(
            GroupModel.id == group_id,
            GroupModel.workspace_id == workspace_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_workspace_groups(
        self,
        session: AsyncSession,
        workspace_id: UUID,
    ) -> Sequence[GroupModel]:
        """List every group of a workspace, ordered by name."""
        stmt = (
            select(GroupModel)
            .where(GroupModel.workspace_id == workspace_id)
            .order_by(GroupModel.name)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_system_group(self, session: AsyncSession, workspace_id: UUID) -> GroupModel:
        """
        Retrieve the workspace system group.

        Raises:
            ResourceNotFoundError: If the workspace has no system group
        """
        return await self._get_by_type(session, workspace_id, GroupType.SYSTEM)

    async def get_global_group(self, session: AsyncSession, workspace_id: UUID) -> GroupModel:
        """
        Retrieve the workspace global group.

        Raises:
            ResourceNotFoundError: If the workspace has no global group
        """
        return await self._get_by_type(session, workspace_id, GroupType.GLOBAL)

    async def _get_by_type(
        self,
        session: AsyncSession,
        workspace_id: UUID,
        group_type: GroupType,
    ) -> GroupModel:
        stmt = select(GroupModel).where(
            GroupModel.workspace_id == workspace_id,
            GroupModel.type == group_type,
        )
        result = await session.execute(stmt)
        group = result.scalars().first()
        if group is None:
            raise ResourceNotFoundError(f"{group_type.value}_group", workspace_id)
        return group

    async def delete_group(self, session: AsyncSession, group: GroupModel) -> bool:
        """
        Delete a group and its memberships.

        Returns:
            True if the group row was deleted
        """
        await session.execute(
            delete(GroupMembershipModel).where(GroupMembershipModel.group_id == group.id)
        )
        return await self.delete_by_id(session, group.id)

    async def delete_all_for_workspace(
        self,
        session: AsyncSession,
        workspace_id: UUID,
    ) -> None:
        """Delete every group membership, then every group, of a workspace."""
        await session.execute(
            delete(GroupMembershipModel).where(
                GroupMembershipModel.workspace_id == workspace_id
            )
        )
        await session.execute(
            delete(GroupModel).where(GroupModel.workspace_id == workspace_id)
        )

    @staticmethod
    def to_dict(group: GroupModel) -> dict:
        """Serialize the public fields of a group."""
        return {
            "id": str(group.id),
            "name": group.name,
            "workspace_id": str(group.workspace_id),
            "type": group.type.value,
        }


class GroupMembershipCRUD(BaseCRUD[GroupMembershipModel]):
    """CRUD operations for GroupMembershipModel."""

    def __init__(self) -> None:
        """Initialize GroupMembershipCRUD with GroupMembershipModel."""
        super().__init__(GroupMembershipModel)

    async def get_active_membership(
        self,
        session: AsyncSession,
        group_id: UUID,
        user_id: UUID,
        workspace_id: UUID,
        now: datetime | None = None,
    ) -> GroupMembershipModel | None:
        """
        Retrieve the user's active membership in a group.

        Returns:
            Active GroupMembershipModel if any, None otherwise
        """
        stmt = (
            select(GroupMembershipModel)
            .where(
                GroupMembershipModel.group_id == group_id,
                GroupMembershipModel.user_id == user_id,
                GroupMembershipModel.workspace_id == workspace_id,
                active_at(GroupMembershipModel, now or utcnow()),
            )
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_active_members(
        self,
        session: AsyncSession,
        group_id: UUID,
        now: datetime | None = None,
    ) -> Sequence[GroupMembershipModel]:
        """List memberships of a group that are active at ``now``."""
        stmt = select(GroupMembershipModel).where(
            GroupMembershipModel.group_id == group_id,
            active_at(GroupMembershipModel, now or utcnow()),
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def end_membership(
        self,
        session: AsyncSession,
        membership_id: UUID,
        end_at: datetime | None = None,
    ) -> None:
        """Mark a membership as ended at ``end_at`` (defaults to now)."""
        await session.execute(
            update(GroupMembershipModel)
            .where(GroupMembershipModel.id == membership_id)
            .values(end_at=end_at or utcnow())
        )


group_crud = GroupCRUD()
group_membership_crud = GroupMembershipCRUD()
