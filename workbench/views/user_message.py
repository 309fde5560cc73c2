"""
User message view model.

Flattens a conversation user message into the fields a client needs to
render it: author picture and name, markdown content, reactions, and
whether to offer agent suggestions.

Dependencies: pydantic, workbench.models.conversation
System role: Conversation rendering contract
"""

from pydantic import BaseModel, Field

from workbench.models.conversation import MessageReaction, UserMessage


class UserMessageView(BaseModel):
    """Render-ready user message."""

    conversation_id: str
    message_id: str
    picture_url: str | None = None
    name: str | None = None
    content: str
    reactions: list[MessageReaction] = Field(default_factory=list)
    enable_emojis: bool = True
    show_agent_suggestion: bool = False


def build_user_message_view(
    message: UserMessage,
    conversation_id: str,
    reactions: list[MessageReaction],
    hide_reactions: bool = False,
    is_last_message: bool = False,
) -> UserMessageView:
    """
    Build the view of a user message.

    The picture falls back from the registered user's image to the one
    captured in the message context. Agent suggestions are offered only
    under the last message, and only when it mentions no agent.
    """
    picture_url = (message.user.image if message.user else None) or message.context.profile_picture_url
    return UserMessageView(
        conversation_id=conversation_id,
        message_id=message.s_id,
        picture_url=picture_url,
        name=message.context.full_name,
        content=message.content,
        reactions=list(reactions),
        enable_emojis=not hide_reactions,
        show_agent_suggestion=is_last_message and len(message.mentions) == 0,
    )
