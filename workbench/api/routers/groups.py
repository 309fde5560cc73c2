"""
Group API endpoints.

Routes: GET /workspaces/{workspace_id}/groups,
        POST /workspaces/{workspace_id}/groups/{group_id}/members,
        DELETE /workspaces/{workspace_id}/groups/{group_id}/members/{user_id}

Dependencies: workbench.application.services.group_service, workbench.models
System role: Group membership HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from workbench.api.deps import get_group_service
from workbench.application.services.group_service import GroupMembershipError, GroupService
from workbench.boundary.db.models import GroupModel
from workbench.core.exceptions import ResourceNotFoundError
from workbench.models.group import AddMemberRequest, GroupResponse, MembershipChangeResponse

router = APIRouter(prefix="/workspaces/{workspace_id}/groups", tags=["groups"])


def membership_error_status(error: GroupMembershipError) -> int:
    """HTTP status for a refused membership change."""
    if error == GroupMembershipError.USER_NOT_FOUND:
        return 404
    return 409


async def _load_group(service: GroupService, workspace_id: UUID, group_id: str) -> GroupModel:
    try:
        return await service.get_group(workspace_id, group_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ResourceNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.get("", response_model=list[GroupResponse])
async def list_groups(
    workspace_id: UUID,
    group_service: GroupService = Depends(get_group_service),
) -> list[GroupResponse]:
    """List every group of a workspace."""
    groups = await group_service.list_groups(workspace_id)
    return [GroupResponse(**group) for group in groups]


@router.post("/{group_id}/members", response_model=MembershipChangeResponse, status_code=201)
async def add_group_member(
    workspace_id: UUID,
    group_id: str,
    request: AddMemberRequest,
    group_service: GroupService = Depends(get_group_service),
) -> MembershipChangeResponse:
    """
    Add a user to a regular group.

    Raises:
        HTTPException(400): Malformed group id
        HTTPException(404): Group or user not found
        HTTPException(409): Membership rule violated, detail is the error tag
    """
    group = await _load_group(group_service, workspace_id, group_id)

    error = await group_service.add_member(workspace_id, group, request.user_id)
    if error is not None:
        raise HTTPException(status_code=membership_error_status(error), detail=error.value)

    return MembershipChangeResponse(
        group_id=str(group.id),
        user_id=str(request.user_id),
        status="added",
    )


@router.delete("/{group_id}/members/{user_id}", response_model=MembershipChangeResponse)
async def remove_group_member(
    workspace_id: UUID,
    group_id: str,
    user_id: UUID,
    group_service: GroupService = Depends(get_group_service),
) -> MembershipChangeResponse:
    """End a user's membership in a regular group."""
    group = await _load_group(group_service, workspace_id, group_id)

    error = await group_service.remove_member(workspace_id, group, user_id)
    if error is not None:
        raise HTTPException(status_code=membership_error_status(error), detail=error.value)

    return MembershipChangeResponse(group_id=str(group.id), user_id=str(user_id), status="removed")
