"""
Database models package.

Exports:
  - WorkspaceModel, UserModel, MembershipModel: Tenancy and identity
  - GroupModel, GroupMembershipModel, GroupType: Groups
  - Microsoft*Model: Microsoft connector state
  - TranscriptsConfigurationModel, TranscriptsHistoryModel, TranscriptsProvider

Dependencies: sqlalchemy, workbench.boundary.db.base
System role: Database model definitions for domain entities
"""

from workbench.boundary.db.models.workspace_model import (
    MembershipModel,
    UserModel,
    WorkspaceModel,
)
from workbench.boundary.db.models.group_model import (
    GroupMembershipModel,
    GroupModel,
    GroupType,
)
from workbench.boundary.db.models.microsoft_model import (
    MicrosoftConfigurationModel,
    MicrosoftDeltaModel,
    MicrosoftNodeModel,
    MicrosoftRootModel,
)
from workbench.boundary.db.models.transcripts_model import (
    TranscriptsConfigurationModel,
    TranscriptsHistoryModel,
    TranscriptsProvider,
)

__all__ = [
    "WorkspaceModel",
    "UserModel",
    "MembershipModel",
    "GroupModel",
    "GroupMembershipModel",
    "GroupType",
    "MicrosoftConfigurationModel",
    "MicrosoftDeltaModel",
    "MicrosoftNodeModel",
    "MicrosoftRootModel",
    "TranscriptsConfigurationModel",
    "TranscriptsHistoryModel",
    "TranscriptsProvider",
]
