"""
Test suite for build_user_message_view().

System role: Verification of user message rendering contract
"""

from workbench.models.conversation import MessageReaction, UserMessage
from workbench.views import build_user_message_view


def make_message(**overrides) -> UserMessage:
    payload = {
        "type": "user_message",
        "sId": "msg-1",
        "content": "Can you **summarize** this?",
        "mentions": [],
        "context": {
            "username": "ada",
            "timezone": "Europe/London",
            "fullName": "Ada Lovelace",
            "email": "ada@acme.test",
            "profilePictureUrl": "https://img.acme.test/context.png",
            "origin": "web",
        },
        "user": {"sId": "u-1", "fullName": "Ada Lovelace", "image": "https://img.acme.test/user.png"},
    }
    payload.update(overrides)
    return UserMessage.model_validate(payload)


def test_picture_should_prefer_user_image() -> None:
    view = build_user_message_view(make_message(), "conv-1", [])

    assert view.picture_url == "https://img.acme.test/user.png"
    assert view.name == "Ada Lovelace"
    assert view.content == "Can you **summarize** this?"
    assert view.message_id == "msg-1"
    assert view.conversation_id == "conv-1"


def test_picture_should_fall_back_to_context() -> None:
    view = build_user_message_view(make_message(user=None), "conv-1", [])

    assert view.picture_url == "https://img.acme.test/context.png"


def test_picture_should_fall_back_when_user_has_no_image() -> None:
    message = make_message(user={"sId": "u-1", "fullName": "Ada Lovelace", "image": None})

    view = build_user_message_view(message, "conv-1", [])

    assert view.picture_url == "https://img.acme.test/context.png"


def test_reactions_should_be_kept_and_emojis_follow_hide_flag() -> None:
    reactions = [MessageReaction(messageId="msg-1", emoji="+1", users=[{"username": "bob"}])]

    shown = build_user_message_view(make_message(), "conv-1", reactions)
    hidden = build_user_message_view(make_message(), "conv-1", reactions, hide_reactions=True)

    assert shown.reactions == reactions
    assert shown.enable_emojis is True
    assert hidden.enable_emojis is False


def test_agent_suggestion_only_on_last_message_without_mentions() -> None:
    mentioned = make_message(mentions=[{"configurationId": "agent-1"}])

    assert build_user_message_view(make_message(), "c", [], is_last_message=True).show_agent_suggestion
    assert not build_user_message_view(make_message(), "c", [], is_last_message=False).show_agent_suggestion
    assert not build_user_message_view(mentioned, "c", [], is_last_message=True).show_agent_suggestion
