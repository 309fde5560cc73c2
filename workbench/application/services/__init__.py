"""
Application services.

Exports:
  - GroupService, GroupMembershipError: Group membership rules
  - TranscriptService: Transcript discovery and summarization
"""

from workbench.application.services.group_service import GroupMembershipError, GroupService
from workbench.application.services.transcript_service import TranscriptService

__all__ = ["GroupMembershipError", "GroupService", "TranscriptService"]
