"""Presentation view models built from conversation payloads."""

from workbench.views.user_message import UserMessageView, build_user_message_view

__all__ = ["UserMessageView", "build_user_message_view"]
