"""
Test suite for group endpoints.

System role: Verification of group membership HTTP API
"""

import uuid
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from workbench.api.deps import get_group_service
from workbench.api.main import create_app
from workbench.application.services.group_service import GroupMembershipError
from workbench.boundary.db.models import GroupModel, GroupType
from workbench.core.exceptions import ResourceNotFoundError


@pytest.fixture
def client():
    app = create_app()
    return TestClient(app)


@pytest.fixture
def workspace_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
def group(workspace_id) -> GroupModel:
    return GroupModel(id=uuid.uuid4(), name="Engineering", type=GroupType.REGULAR, workspace_id=workspace_id)


@pytest.fixture
def mock_group_service(client, group):
    service = AsyncMock()
    service.get_group.return_value = group
    service.add_member.return_value = None
    client.app.dependency_overrides[get_group_service] = lambda: service
    return service


def test_list_groups(client, mock_group_service, workspace_id, group):
    mock_group_service.list_groups.return_value = [
        {"id": str(group.id), "name": "Engineering", "workspace_id": str(workspace_id), "type": "regular"}
    ]

    response = client.get(f"/api/v1/workspaces/{workspace_id}/groups")

    assert response.status_code == 200
    assert response.json()[0]["name"] == "Engineering"
    mock_group_service.list_groups.assert_called_once_with(workspace_id)


def test_add_member_success(client, mock_group_service, workspace_id, group):
    user_id = uuid.uuid4()

    response = client.post(
        f"/api/v1/workspaces/{workspace_id}/groups/{group.id}/members",
        json={"user_id": str(user_id)},
    )

    assert response.status_code == 201
    assert response.json() == {"group_id": str(group.id), "user_id": str(user_id), "status": "added"}
    mock_group_service.add_member.assert_called_once_with(workspace_id, group, user_id)


@pytest.mark.parametrize(
    "error, status_code",
    [
        (GroupMembershipError.USER_NOT_FOUND, 404),
        (GroupMembershipError.USER_NOT_WORKSPACE_MEMBER, 409),
        (GroupMembershipError.GROUP_NOT_REGULAR, 409),
        (GroupMembershipError.USER_ALREADY_GROUP_MEMBER, 409),
    ],
)
def test_add_member_rule_violation(client, mock_group_service, workspace_id, group, error, status_code):
    mock_group_service.add_member.return_value = error

    response = client.post(
        f"/api/v1/workspaces/{workspace_id}/groups/{group.id}/members",
        json={"user_id": str(uuid.uuid4())},
    )

    assert response.status_code == status_code
    assert response.json()["detail"] == error.value


def test_add_member_malformed_group_id(client, mock_group_service, workspace_id):
    mock_group_service.get_group.side_effect = ValueError("Invalid group ID.")

    response = client.post(
        f"/api/v1/workspaces/{workspace_id}/groups/not-an-id/members",
        json={"user_id": str(uuid.uuid4())},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid group ID."
    mock_group_service.add_member.assert_not_called()


def test_add_member_unknown_group(client, mock_group_service, workspace_id):
    missing = uuid.uuid4()
    mock_group_service.get_group.side_effect = ResourceNotFoundError("group", missing)

    response = client.post(
        f"/api/v1/workspaces/{workspace_id}/groups/{missing}/members",
        json={"user_id": str(uuid.uuid4())},
    )

    assert response.status_code == 404


def test_remove_member(client, mock_group_service, workspace_id, group):
    user_id = uuid.uuid4()
    mock_group_service.remove_member.return_value = None

    response = client.delete(f"/api/v1/workspaces/{workspace_id}/groups/{group.id}/members/{user_id}")

    assert response.status_code == 200
    assert response.json()["status"] == "removed"
