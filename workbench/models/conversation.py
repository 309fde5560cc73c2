"""
Conversation domain models and schemas.

Mirrors the payloads of the conversation/agent API. The API speaks
camelCase; fields accept both the alias and the Python name.

Dependencies: pydantic
System role: Conversation API contracts
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ApiModel(BaseModel):
    """Base for API payloads using camelCase aliases."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class AgentConfiguration(ApiModel):
    """Agent that can be mentioned in a conversation."""

    s_id: str = Field(alias="sId")
    name: str
    description: str = ""
    picture_url: str | None = Field(default=None, alias="pictureUrl")


class MessageContext(ApiModel):
    """Who posted a message and from where."""

    username: str
    timezone: str = "UTC"
    full_name: str | None = Field(default=None, alias="fullName")
    email: str | None = None
    profile_picture_url: str | None = Field(default=None, alias="profilePictureUrl")
    origin: str | None = None


class Mention(ApiModel):
    """Agent mention attached to a user message."""

    configuration_id: str = Field(alias="configurationId")


class MessageUser(ApiModel):
    """Registered user behind a message."""

    s_id: str | None = Field(default=None, alias="sId")
    full_name: str | None = Field(default=None, alias="fullName")
    image: str | None = None


class UserMessage(ApiModel):
    """A message posted by a user."""

    type: Literal["user_message"] = "user_message"
    s_id: str = Field(alias="sId")
    content: str
    mentions: list[Mention] = Field(default_factory=list)
    context: MessageContext
    user: MessageUser | None = None


class AgentMessage(ApiModel):
    """A message generated by an agent."""

    type: Literal["agent_message"] = "agent_message"
    s_id: str = Field(alias="sId")
    status: str = "created"
    content: str | None = None
    configuration: AgentConfiguration | None = None


class MessageReaction(ApiModel):
    """Emoji reactions on a message."""

    message_id: str = Field(alias="messageId")
    emoji: str
    users: list[dict[str, Any]] = Field(default_factory=list)


class Conversation(ApiModel):
    """
    Conversation with its message versions.

    ``content`` is a list of ranks; each rank holds the versions of one
    message as raw dicts (user messages, agent messages, content fragments).
    """

    s_id: str = Field(alias="sId")
    title: str | None = None
    visibility: str = "workspace"
    content: list[list[dict[str, Any]]] = Field(default_factory=list)

    def agent_messages(self) -> list[AgentMessage]:
        """Latest version of every agent message, in conversation order."""
        return [
            AgentMessage.model_validate(versions[-1])
            for versions in self.content
            if versions and versions[-1].get("type") == "agent_message"
        ]

    def first_agent_message(self) -> AgentMessage | None:
        """First agent message of the conversation, if any."""
        messages = self.agent_messages()
        return messages[0] if messages else None


class ContentFragment(ApiModel):
    """Document attached to a conversation before the triggering message."""

    title: str
    content: str
    url: str | None = None
    content_type: str = Field(default="text/plain", alias="contentType")
    context: MessageContext
