"""
Test suite for GroupService membership rules.

Runs against an in-memory SQLite database; each precondition failure
returns its GroupMembershipError and leaves no membership row behind.

System role: Verification of group membership use cases
"""

import uuid
from datetime import timedelta

import pytest
from sqlalchemy import func, select

from workbench.application.services.group_service import GroupMembershipError, GroupService
from workbench.boundary.db.base import utcnow
from workbench.boundary.db.CRUD import group_crud, group_membership_crud, membership_crud, user_crud
from workbench.boundary.db.models import GroupMembershipModel, GroupType


async def count_memberships(session) -> int:
    result = await session.execute(select(func.count()).select_from(GroupMembershipModel))
    return result.scalar_one()


@pytest.fixture
async def regular_group(test_async_db, workspace):
    return await group_crud.make_new(test_async_db, workspace.id, "Engineering")


class TestAddMember:
    """Test suite for GroupService.add_member()."""

    @pytest.mark.asyncio
    async def test_success_should_create_one_active_membership(
        self, test_async_db, workspace, workspace_member, regular_group
    ) -> None:
        service = GroupService(test_async_db)

        error = await service.add_member(workspace.id, regular_group, workspace_member.id)

        assert error is None
        assert await count_memberships(test_async_db) == 1
        membership = await group_membership_crud.get_active_membership(
            test_async_db, regular_group.id, workspace_member.id, workspace.id
        )
        assert membership is not None
        assert membership.end_at is None

    @pytest.mark.asyncio
    async def test_unknown_user_should_return_user_not_found(
        self, test_async_db, workspace, regular_group
    ) -> None:
        error = await GroupService(test_async_db).add_member(workspace.id, regular_group, uuid.uuid4())

        assert error == GroupMembershipError.USER_NOT_FOUND
        assert await count_memberships(test_async_db) == 0

    @pytest.mark.asyncio
    async def test_non_member_should_return_user_not_workspace_member(
        self, test_async_db, workspace, user, regular_group
    ) -> None:
        error = await GroupService(test_async_db).add_member(workspace.id, regular_group, user.id)

        assert error == GroupMembershipError.USER_NOT_WORKSPACE_MEMBER
        assert await count_memberships(test_async_db) == 0

    @pytest.mark.asyncio
    async def test_ended_workspace_membership_should_not_count(
        self, test_async_db, workspace, regular_group
    ) -> None:
        former = await user_crud.create(test_async_db, email="former@acme.test", username="former")
        await membership_crud.create(
            test_async_db,
            user_id=former.id,
            workspace_id=workspace.id,
            start_at=utcnow() - timedelta(days=10),
            end_at=utcnow() - timedelta(days=1),
        )

        error = await GroupService(test_async_db).add_member(workspace.id, regular_group, former.id)

        assert error == GroupMembershipError.USER_NOT_WORKSPACE_MEMBER

    @pytest.mark.asyncio
    @pytest.mark.parametrize("group_type", [GroupType.GLOBAL, GroupType.SYSTEM])
    async def test_non_regular_group_should_return_group_not_regular(
        self, test_async_db, workspace, workspace_member, group_type
    ) -> None:
        group = await group_crud.make_new(test_async_db, workspace.id, "Everyone", type=group_type)

        error = await GroupService(test_async_db).add_member(workspace.id, group, workspace_member.id)

        assert error == GroupMembershipError.GROUP_NOT_REGULAR
        assert await count_memberships(test_async_db) == 0

    @pytest.mark.asyncio
    async def test_existing_member_should_return_user_already_group_member(
        self, test_async_db, workspace, workspace_member, regular_group
    ) -> None:
        service = GroupService(test_async_db)
        assert await service.add_member(workspace.id, regular_group, workspace_member.id) is None

        error = await service.add_member(workspace.id, regular_group, workspace_member.id)

        assert error == GroupMembershipError.USER_ALREADY_GROUP_MEMBER
        assert await count_memberships(test_async_db) == 1


class TestRemoveMember:
    """Test suite for GroupService.remove_member()."""

    @pytest.mark.asyncio
    async def test_remove_should_end_membership_and_allow_rejoin(
        self, test_async_db, workspace, workspace_member, regular_group
    ) -> None:
        service = GroupService(test_async_db)
        await service.add_member(workspace.id, regular_group, workspace_member.id)

        assert await service.remove_member(workspace.id, regular_group, workspace_member.id) is None
        assert await service.list_members(regular_group) == []
        assert await service.add_member(workspace.id, regular_group, workspace_member.id) is None
        assert await count_memberships(test_async_db) == 2

    @pytest.mark.asyncio
    async def test_remove_non_member_should_return_user_not_group_member(
        self, test_async_db, workspace, workspace_member, regular_group
    ) -> None:
        error = await GroupService(test_async_db).remove_member(
            workspace.id, regular_group, workspace_member.id
        )

        assert error == GroupMembershipError.USER_NOT_GROUP_MEMBER
