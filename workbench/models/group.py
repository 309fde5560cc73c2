"""
Group API schemas.

Dependencies: pydantic
System role: Group HTTP contracts
"""

from uuid import UUID

from pydantic import BaseModel


class GroupResponse(BaseModel):
    """Public group representation."""

    id: str
    name: str
    workspace_id: str
    type: str


class AddMemberRequest(BaseModel):
    """Request body for adding a user to a group."""

    user_id: UUID


class MembershipChangeResponse(BaseModel):
    """Result of a membership change."""

    group_id: str
    user_id: str
    status: str
