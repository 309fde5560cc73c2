"""
Group membership service.

Adds and removes users from workspace groups, enforcing the membership
rules. Rule violations are returned as GroupMembershipError values rather
than raised, so callers can map each one to a response.

Dependencies: workbench.boundary.db.CRUD
System role: Group membership use case orchestration
"""

import enum
import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from workbench.boundary.db.base import utcnow
from workbench.boundary.db.CRUD import (
    group_crud,
    group_membership_crud,
    membership_crud,
    user_crud,
)
from workbench.boundary.db.models import GroupMembershipModel, GroupModel, GroupType
from workbench.core.exceptions import ResourceNotFoundError

logger = logging.getLogger(__name__)


class GroupMembershipError(str, enum.Enum):
    """Reasons a membership change was refused."""

    USER_NOT_FOUND = "user_not_found"
    USER_NOT_WORKSPACE_MEMBER = "user_not_workspace_member"
    GROUP_NOT_REGULAR = "group_not_regular"
    USER_ALREADY_GROUP_MEMBER = "user_already_group_member"
    USER_NOT_GROUP_MEMBER = "user_not_group_member"


class GroupService:
    """Group membership orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize group service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def add_member(
        self,
        workspace_id: UUID,
        group: GroupModel,
        user_id: UUID,
    ) -> GroupMembershipError | None:
        """
        Add a user to a regular group.

        Checks run in order: user exists, user is an active member of the
        workspace, group is regular, user is not already an active member
        of the group. The first failing check is returned.

        Args:
            workspace_id: Workspace the group belongs to
            group: Target group
            user_id: User to add

        Returns:
            None on success, otherwise the GroupMembershipError
        """
        user = await user_crud.get_by_id(self.db, user_id)
        if user is None:
            return GroupMembershipError.USER_NOT_FOUND

        workspace_membership = await membership_crud.get_active_membership(
            self.db, user_id, workspace_id
        )
        if workspace_membership is None:
            return GroupMembershipError.USER_NOT_WORKSPACE_MEMBER

        if group.type != GroupType.REGULAR:
            return GroupMembershipError.GROUP_NOT_REGULAR

        existing = await group_membership_crud.get_active_membership(
            self.db, group.id, user_id, workspace_id
        )
        if existing is not None:
            return GroupMembershipError.USER_ALREADY_GROUP_MEMBER

        await group_membership_crud.create(
            self.db,
            group_id=group.id,
            user_id=user_id,
            workspace_id=workspace_id,
            start_at=utcnow(),
            end_at=None,
        )
        logger.info(
            "User added to group",
            extra={"group_id": str(group.id), "user_id": str(user_id)},
        )
        return None

    async def remove_member(
        self,
        workspace_id: UUID,
        group: GroupModel,
        user_id: UUID,
    ) -> GroupMembershipError | None:
        """
        End a user's active membership in a regular group.

        Returns:
            None on success, otherwise the GroupMembershipError
        """
        user = await user_crud.get_by_id(self.db, user_id)
        if user is None:
            return GroupMembershipError.USER_NOT_FOUND

        if group.type != GroupType.REGULAR:
            return GroupMembershipError.GROUP_NOT_REGULAR

        existing = await group_membership_crud.get_active_membership(
            self.db, group.id, user_id, workspace_id
        )
        if existing is None:
            return GroupMembershipError.USER_NOT_GROUP_MEMBER

        await group_membership_crud.end_membership(self.db, existing.id)
        logger.info(
            "User removed from group",
            extra={"group_id": str(group.id), "user_id": str(user_id)},
        )
        return None

    async def list_members(self, group: GroupModel) -> list[GroupMembershipModel]:
        """List active memberships of a group."""
        return list(await group_membership_crud.list_active_members(self.db, group.id))

    async def list_groups(self, workspace_id: UUID) -> list[dict]:
        """List the groups of a workspace as public dicts."""
        groups = await group_crud.list_workspace_groups(self.db, workspace_id)
        return [group_crud.to_dict(group) for group in groups]

    async def get_group(self, workspace_id: UUID, group_id: str) -> GroupModel:
        """
        Retrieve a group of the workspace by public id.

        Raises:
            ValueError: If the group id is malformed
            ResourceNotFoundError: If the workspace has no such group
        """
        group = await group_crud.get_workspace_group(self.db, workspace_id, group_id)
        if group is None:
            raise ResourceNotFoundError("group", group_id)
        return group
