"""
Conversation/agent API client.

Creates conversations, attaches content fragments, posts user messages that
mention an agent, and polls the conversation until the agent has replied.

Dependencies: httpx
System role: Access to the internal assistant for transcript summarization
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable

import httpx

from workbench.core.exceptions import AssistantApiError
from workbench.models.conversation import (
    AgentConfiguration,
    AgentMessage,
    ContentFragment,
    Conversation,
    MessageContext,
)

logger = logging.getLogger(__name__)

AGENT_MESSAGE_DONE_STATUSES = {"succeeded", "failed", "cancelled"}


class AssistantApiClient:
    """Async client for the workspace assistant endpoints."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 60.0,
        poll_interval: float = 2.0,
        poll_max_attempts: int = 150,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """
        Initialize assistant API client.

        Args:
            base_url: Base URL of the conversation API
            api_key: System API key
            http_client: Optional shared httpx client
            timeout: Per-request timeout in seconds
            poll_interval: Seconds between polls in wait_for_agent_reply
            poll_max_attempts: Maximum polls before giving up
            sleep: Coroutine used between polls
        """
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)
        self._timeout = timeout
        self._poll_interval = poll_interval
        self._poll_max_attempts = poll_max_attempts
        self._sleep = sleep

    async def close(self) -> None:
        """Close the underlying httpx client if this instance created it."""
        if self._owns_client:
            await self._http.aclose()

    def _url(self, workspace_id: str, path: str) -> str:
        return f"{self._base_url}/api/v1/w/{workspace_id}/assistant/{path}"

    async def _request(
        self,
        method: str,
        url: str,
        user_email: str | None = None,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        headers = {"Authorization": f"Bearer {self._api_key}"}
        if user_email:
            headers["X-User-Email"] = user_email
        try:
            return await self._http.request(
                method, url, json=json, headers=headers, timeout=self._timeout
            )
        except httpx.HTTPError as e:
            raise AssistantApiError(f"{method} {url} failed: {e!r}") from e

    @staticmethod
    def _raise_for_status(response: httpx.Response, action: str) -> None:
        if not response.is_success:
            raise AssistantApiError(
                f"Error while trying to {action}: HTTP {response.status_code}",
                status_code=response.status_code,
                details={"body": response.text[:500]},
            )

    async def get_agent_configuration(
        self,
        workspace_id: str,
        agent_configuration_id: str,
    ) -> AgentConfiguration | None:
        """
        Retrieve an agent configuration.

        Returns:
            AgentConfiguration, or None if the agent does not exist
        """
        response = await self._request(
            "GET",
            self._url(workspace_id, f"agent_configurations/{agent_configuration_id}"),
        )
        if response.status_code == 404:
            return None
        self._raise_for_status(response, "fetch agent configuration")
        return AgentConfiguration.model_validate(response.json()["agentConfiguration"])

    async def create_conversation(
        self,
        workspace_id: str,
        title: str,
        user_email: str | None = None,
        visibility: str = "workspace",
    ) -> Conversation:
        """Create an empty conversation."""
        response = await self._request(
            "POST",
            self._url(workspace_id, "conversations"),
            user_email=user_email,
            json={"title": title, "visibility": visibility, "message": None},
        )
        self._raise_for_status(response, "create conversation")
        return Conversation.model_validate(response.json()["conversation"])

    async def post_content_fragment(
        self,
        workspace_id: str,
        conversation_id: str,
        fragment: ContentFragment,
        user_email: str | None = None,
    ) -> dict[str, Any]:
        """Attach a content fragment to a conversation."""
        response = await self._request(
            "POST",
            self._url(workspace_id, f"conversations/{conversation_id}/content_fragments"),
            user_email=user_email,
            json=fragment.model_dump(by_alias=True),
        )
        self._raise_for_status(response, "create content fragment")
        return response.json()["contentFragment"]

    async def post_user_message(
        self,
        workspace_id: str,
        conversation_id: str,
        content: str,
        mentions: list[str],
        context: MessageContext,
        user_email: str | None = None,
    ) -> dict[str, Any]:
        """Post a user message mentioning the given agent configurations."""
        response = await self._request(
            "POST",
            self._url(workspace_id, f"conversations/{conversation_id}/messages"),
            user_email=user_email,
            json={
                "content": content,
                "mentions": [{"configurationId": m} for m in mentions],
                "context": context.model_dump(by_alias=True),
            },
        )
        self._raise_for_status(response, "create message")
        return response.json()["message"]

    async def get_conversation(
        self,
        workspace_id: str,
        conversation_id: str,
        user_email: str | None = None,
    ) -> Conversation | None:
        """
        Retrieve a conversation with its messages.

        Returns:
            Conversation, or None if it does not exist
        """
        response = await self._request(
            "GET",
            self._url(workspace_id, f"conversations/{conversation_id}"),
            user_email=user_email,
        )
        if response.status_code == 404:
            return None
        self._raise_for_status(response, "fetch conversation")
        return Conversation.model_validate(response.json()["conversation"])

    async def wait_for_agent_reply(
        self,
        workspace_id: str,
        conversation_id: str,
        user_email: str | None = None,
    ) -> tuple[Conversation, AgentMessage] | None:
        """
        Poll a conversation until its first agent message is done.

        Returns:
            (conversation, agent message) once the agent message succeeded,
            None if it failed, was cancelled, or never finished in time
        """
        for attempt in range(self._poll_max_attempts):
            conversation = await self.get_conversation(workspace_id, conversation_id, user_email)
            if conversation is None:
                return None

            agent_message = conversation.first_agent_message()
            if agent_message and agent_message.status in AGENT_MESSAGE_DONE_STATUSES:
                if agent_message.status != "succeeded":
                    logger.warning(
                        "Agent message finished without success",
                        extra={
                            "conversation_id": conversation_id,
                            "status": agent_message.status,
                        },
                    )
                    return None
                return conversation, agent_message

            if attempt + 1 < self._poll_max_attempts:
                await self._sleep(self._poll_interval)

        logger.warning(
            "Timed out waiting for agent reply",
            extra={"conversation_id": conversation_id, "attempts": self._poll_max_attempts},
        )
        return None
