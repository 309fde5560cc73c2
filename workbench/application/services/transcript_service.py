"""
Meeting transcript summarization service.

Discovers new transcripts for a configuration, sends each to the
configured agent in a new conversation, and emails the summary to the
configuration owner. Every handled file gets a history record so it is
never summarized twice.

Dependencies: workbench.boundary.db.CRUD, workbench.boundary.http
System role: Transcript pipeline orchestration
"""

import html
import logging
from typing import Mapping
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from workbench.boundary.db.CRUD import transcripts_configuration_crud, user_crud, workspace_crud
from workbench.boundary.db.models import (
    TranscriptsConfigurationModel,
    TranscriptsProvider,
    UserModel,
    WorkspaceModel,
)
from workbench.boundary.http.assistant_client import AssistantApiClient
from workbench.boundary.http.email_client import EmailClient
from workbench.boundary.http.markdown_render import render_markdown_email
from workbench.boundary.http.providers import BaseTranscriptsProvider
from workbench.configs.transcripts import TranscriptsSettings
from workbench.core.exceptions import AssistantApiError, ProviderError, ResourceNotFoundError
from workbench.models.conversation import ContentFragment, MessageContext
from workbench.models.transcript import (
    EmailAddress,
    EmailMessage,
    TranscriptContent,
    TranscriptOutcome,
)
from workbench.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)

TOO_SHORT_SUBJECT = "Unable to Generate Your Meeting Transcript Summary"

TOO_SHORT_TEMPLATE = """<p>Dear {full_name},</p>
<p>We encountered an issue while trying to generate a summary for your recent meeting. Unfortunately, the transcript provided was either too short or empty, which prevented us from creating a meaningful summary.</p>
<p>What you can do:</p>
<ul>
<li>Check your meeting settings to ensure transcription is properly enabled;</li>
<li>If this issue persists, you may want to contact your meeting provider's support for assistance with their transcription service.</li>
</ul>
<p>We apologize for any inconvenience this may have caused. If you have any questions or need further assistance, please reach out to our support team at <a href="mailto:{support_email}">{support_email}</a>.</p>
<p>Thank you for your understanding,</p>
<p>{sender_name}</p>"""

SUMMARY_TEMPLATE = (
    '<a href="{conversation_url}">Open this conversation</a><br /><br /> '
    "{summary_html}<br /><br />{sender_name}"
)


class TranscriptService:
    """Transcript discovery and summarization orchestrator."""

    def __init__(
        self,
        db: AsyncSession,
        providers: Mapping[TranscriptsProvider, BaseTranscriptsProvider],
        assistant_client: AssistantApiClient,
        email_client: EmailClient,
        settings: TranscriptsSettings,
    ) -> None:
        """
        Initialize transcript service.

        Args:
            db: Async SQLAlchemy session
            providers: Provider implementation per TranscriptsProvider value
            assistant_client: Conversation/agent API client
            email_client: Mail API client
            settings: Transcript pipeline settings
        """
        self.db = db
        self.providers = providers
        self.assistant_client = assistant_client
        self.email_client = email_client
        self.settings = settings

    def _provider_for(self, configuration: TranscriptsConfigurationModel) -> BaseTranscriptsProvider:
        provider = self.providers.get(configuration.provider)
        if provider is None:
            raise ProviderError(
                str(configuration.provider.value),
                "No transcript provider registered",
                details={"configuration_id": str(configuration.id)},
            )
        return provider

    async def _get_workspace(self, configuration: TranscriptsConfigurationModel) -> WorkspaceModel:
        workspace = await workspace_crud.get_by_id(self.db, configuration.workspace_id)
        if workspace is None:
            raise ResourceNotFoundError("workspace", configuration.workspace_id)
        return workspace

    async def retrieve_new_transcripts(self, configuration_id: UUID) -> list[str]:
        """
        List transcript ids that have not been handled yet.

        Args:
            configuration_id: Transcript configuration UUID

        Returns:
            list[str]: Unseen file ids; empty when the configuration is missing

        Raises:
            ResourceNotFoundError: If the configuration's workspace is missing
            ProviderError: If the provider call fails
        """
        configuration = await transcripts_configuration_crud.get_by_id(self.db, configuration_id)
        if configuration is None:
            log_with_context(
                logger,
                logging.ERROR,
                "Transcript configuration not found, skipping",
                configuration_id=configuration_id,
            )
            return []

        await self._get_workspace(configuration)

        candidate_ids = await self._provider_for(configuration).list_transcript_ids(configuration)
        seen = await transcripts_configuration_crud.list_history_file_ids(self.db, configuration.id)
        new_ids = [file_id for file_id in dict.fromkeys(candidate_ids) if file_id not in seen]

        log_with_context(
            logger,
            logging.INFO,
            "Retrieved new transcripts",
            configuration_id=configuration_id,
            candidates=len(candidate_ids),
            new=len(new_ids),
        )
        return new_ids

    async def process_transcript(self, configuration_id: UUID, file_id: str) -> TranscriptOutcome:
        """
        Summarize one transcript and email the result.

        Args:
            configuration_id: Transcript configuration UUID
            file_id: Provider file id

        Returns:
            TranscriptOutcome

        Raises:
            ResourceNotFoundError: If the configuration, workspace or user is missing
            ProviderError: If the transcript cannot be fetched
            EmailDeliveryError: If the notification cannot be sent
        """
        configuration = await transcripts_configuration_crud.get_by_id(self.db, configuration_id)
        if configuration is None:
            raise ResourceNotFoundError("transcripts_configuration", configuration_id)

        workspace = await self._get_workspace(configuration)

        user = await user_crud.get_by_id(self.db, configuration.user_id)
        if user is None:
            raise ResourceNotFoundError("user", configuration.user_id)

        context = {
            "configuration_id": str(configuration_id),
            "file_id": file_id,
            "user_id": str(user.id),
        }
        log_with_context(logger, logging.INFO, "Processing transcript", **context)

        history = await transcripts_configuration_crud.fetch_history_for_file(
            self.db, configuration.id, file_id
        )
        if history is not None:
            log_with_context(logger, logging.INFO, "Transcript already processed", **context)
            return TranscriptOutcome.SKIPPED_ALREADY_PROCESSED

        transcript = await self._provider_for(configuration).fetch_transcript(configuration, file_id)

        if len(transcript.content) < self.settings.min_transcript_size:
            log_with_context(logger, logging.INFO, "Transcript too short or empty, skipping", **context)
            await self._record_history(configuration, file_id, transcript.title, conversation_id=None)
            await self.email_client.send_email(user.email, self.build_too_short_email(user))
            return TranscriptOutcome.SKIPPED_TOO_SHORT

        return await self._summarize(configuration, workspace, user, transcript, context)

    async def _record_history(
        self,
        configuration: TranscriptsConfigurationModel,
        file_id: str,
        file_name: str,
        conversation_id: str | None,
    ) -> None:
        """
        Record a handled file and commit it.

        Runs before any email is sent; a retried run then stops at the
        history check.
        """
        await transcripts_configuration_crud.record_history(
            self.db,
            configuration_id=configuration.id,
            file_id=file_id,
            file_name=file_name,
            conversation_id=conversation_id,
        )
        await self.db.commit()

    async def _summarize(
        self,
        configuration: TranscriptsConfigurationModel,
        workspace: WorkspaceModel,
        user: UserModel,
        transcript: TranscriptContent,
        context: dict,
    ) -> TranscriptOutcome:
        workspace_id = str(workspace.id)
        agent_configuration_id = configuration.agent_configuration_id
        if not agent_configuration_id:
            log_with_context(logger, logging.ERROR, "No agent configuration id, stopping", **context)
            return TranscriptOutcome.ABORTED

        try:
            agent = await self.assistant_client.get_agent_configuration(
                workspace_id, agent_configuration_id
            )
        except AssistantApiError as e:
            log_exception_with_context(logger, "Could not fetch agent configuration", e, **context)
            return TranscriptOutcome.ABORTED
        if agent is None:
            log_with_context(
                logger,
                logging.ERROR,
                "Agent configuration not found, stopping",
                agent_configuration_id=agent_configuration_id,
                **context,
            )
            return TranscriptOutcome.ABORTED

        if not user.username or not user.username.strip():
            log_with_context(logger, logging.ERROR, "User has an empty username, stopping", **context)
            return TranscriptOutcome.ABORTED

        message_context = MessageContext(
            username=user.username,
            timezone="UTC",
            full_name=user.full_name,
            email=user.email,
            profile_picture_url=user.image_url,
            origin=None,
        )

        try:
            conversation = await self.assistant_client.create_conversation(
                workspace_id, title=transcript.title, user_email=user.email, visibility="workspace"
            )
            await self.assistant_client.post_content_fragment(
                workspace_id,
                conversation.s_id,
                ContentFragment(
                    title=transcript.title,
                    content=transcript.content,
                    url=None,
                    content_type="text/plain",
                    context=message_context,
                ),
                user_email=user.email,
            )
            await self.assistant_client.post_user_message(
                workspace_id,
                conversation.s_id,
                content=f"Transcript: {transcript.title}",
                mentions=[agent_configuration_id],
                context=message_context,
                user_email=user.email,
            )
        except AssistantApiError as e:
            log_exception_with_context(logger, "Conversation API call failed, stopping", e, **context)
            return TranscriptOutcome.ABORTED

        # The agent has been asked; from here on the file is never resubmitted
        try:
            reply = await self.assistant_client.wait_for_agent_reply(
                workspace_id, conversation.s_id, user_email=user.email
            )
        except AssistantApiError as e:
            log_exception_with_context(
                logger,
                "Polling the conversation failed",
                e,
                conversation_id=conversation.s_id,
                **context,
            )
            reply = None

        if reply is None:
            log_with_context(
                logger,
                logging.ERROR,
                "No agent reply for conversation, recording without summary",
                conversation_id=conversation.s_id,
                **context,
            )
            await self._record_history(
                configuration, context["file_id"], transcript.title, conversation.s_id
            )
            return TranscriptOutcome.NO_AGENT_REPLY

        conversation, agent_message = reply
        log_with_context(
            logger,
            logging.INFO,
            "Created conversation",
            conversation_id=conversation.s_id,
            agent_configuration_id=agent_configuration_id,
            **context,
        )

        summary_html = render_markdown_email(agent_message.content or "")
        await self._record_history(configuration, context["file_id"], transcript.title, conversation.s_id)
        await self.email_client.send_email(
            user.email,
            self.build_summary_email(workspace_id, conversation.s_id, transcript.title, summary_html),
        )
        return TranscriptOutcome.PROCESSED

    def _sender(self) -> EmailAddress:
        return EmailAddress(name=self.settings.sender_name, email=self.settings.sender_email)

    def conversation_url(self, workspace_id: str, conversation_id: str) -> str:
        """Link to a conversation in the app."""
        return f"{self.settings.app_url.rstrip('/')}/w/{workspace_id}/assistant/{conversation_id}"

    def build_too_short_email(self, user: UserModel) -> EmailMessage:
        """Notification sent when a transcript is too short to summarize."""
        return EmailMessage(
            sender=self._sender(),
            subject=TOO_SHORT_SUBJECT,
            html=TOO_SHORT_TEMPLATE.format(
                full_name=html.escape(user.full_name),
                support_email=html.escape(self.settings.support_email),
                sender_name=html.escape(self.settings.sender_name),
            ),
        )

    def build_summary_email(
        self,
        workspace_id: str,
        conversation_id: str,
        title: str,
        summary_html: str,
    ) -> EmailMessage:
        """Email carrying the agent summary and a link to its conversation."""
        return EmailMessage(
            sender=self._sender(),
            subject=f"Meeting summary - {title}",
            html=SUMMARY_TEMPLATE.format(
                conversation_url=self.conversation_url(workspace_id, conversation_id),
                summary_html=summary_html,
                sender_name=html.escape(self.settings.sender_name),
            ),
        )

    async def process_active_configurations(self) -> dict[TranscriptOutcome, int]:
        """
        Run discovery and processing for every active configuration.

        Failures on one configuration or file are logged and the batch
        continues.

        Returns:
            dict: Count of files per TranscriptOutcome
        """
        counts = {outcome: 0 for outcome in TranscriptOutcome}
        configurations = await transcripts_configuration_crud.list_active(self.db)

        for configuration in configurations:
            try:
                file_ids = await self.retrieve_new_transcripts(configuration.id)
            except Exception as e:
                log_exception_with_context(
                    logger,
                    "Failed to retrieve transcripts",
                    e,
                    configuration_id=configuration.id,
                )
                continue

            for file_id in file_ids:
                try:
                    outcome = await self.process_transcript(configuration.id, file_id)
                except Exception as e:
                    log_exception_with_context(
                        logger,
                        "Failed to process transcript",
                        e,
                        configuration_id=configuration.id,
                        file_id=file_id,
                    )
                    continue
                counts[outcome] += 1

        log_with_context(
            logger,
            logging.INFO,
            "Processed active transcript configurations",
            configurations=len(configurations),
            **{outcome.value: count for outcome, count in counts.items()},
        )
        return counts

    async def list_history(self, configuration_id: UUID) -> list[dict]:
        """
        List handled files of a configuration, newest first.

        Raises:
            ResourceNotFoundError: If the configuration is missing
        """
        configuration = await self.ensure_configuration(configuration_id)
        history = await transcripts_configuration_crud.list_history(self.db, configuration.id)
        return [
            {
                "file_id": record.file_id,
                "file_name": record.file_name,
                "conversation_id": record.conversation_id,
                "created_at": record.created_at,
            }
            for record in history
        ]

    async def ensure_configuration(self, configuration_id: UUID) -> TranscriptsConfigurationModel:
        """
        Retrieve a configuration or raise.

        Raises:
            ResourceNotFoundError: If the configuration is missing
        """
        configuration = await transcripts_configuration_crud.get_by_id(self.db, configuration_id)
        if configuration is None:
            raise ResourceNotFoundError("transcripts_configuration", configuration_id)
        return configuration
