"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from workbench.boundary.db.CRUD import group_crud, group_membership_crud

    # Use singleton instances
    group = await group_crud.fetch_by_id(db, workspace_id, group_s_id)

    # Or instantiate classes directly for custom behavior
    from workbench.boundary.db.CRUD import GroupCRUD
    custom_crud = GroupCRUD()
"""

from workbench.boundary.db.CRUD.base_crud import BaseCRUD, active_at
from workbench.boundary.db.CRUD.workspace_crud import (
    MembershipCRUD,
    UserCRUD,
    WorkspaceCRUD,
    membership_crud,
    user_crud,
    workspace_crud,
)
from workbench.boundary.db.CRUD.group_crud import (
    GroupCRUD,
    GroupMembershipCRUD,
    group_crud,
    group_membership_crud,
)
from workbench.boundary.db.CRUD.microsoft_crud import (
    MicrosoftConfigurationCRUD,
    MicrosoftDeltaCRUD,
    MicrosoftNodeCRUD,
    MicrosoftRootCRUD,
    microsoft_configuration_crud,
    microsoft_delta_crud,
    microsoft_node_crud,
    microsoft_root_crud,
)
from workbench.boundary.db.CRUD.transcripts_crud import (
    TranscriptsConfigurationCRUD,
    transcripts_configuration_crud,
)

__all__ = [
    "BaseCRUD",
    "active_at",
    "WorkspaceCRUD",
    "UserCRUD",
    "MembershipCRUD",
    "GroupCRUD",
    "GroupMembershipCRUD",
    "MicrosoftConfigurationCRUD",
    "MicrosoftRootCRUD",
    "MicrosoftNodeCRUD",
    "MicrosoftDeltaCRUD",
    "TranscriptsConfigurationCRUD",
    "workspace_crud",
    "user_crud",
    "membership_crud",
    "group_crud",
    "group_membership_crud",
    "microsoft_configuration_crud",
    "microsoft_root_crud",
    "microsoft_node_crud",
    "microsoft_delta_crud",
    "transcripts_configuration_crud",
]
