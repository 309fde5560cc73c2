"""
Test suite for transcript worker runs.

Drives _run_with_service() against a file-backed SQLite database so every
run gets its own engine and session, the way Celery task runs do.

System role: Verification of transcript task transaction handling
"""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from workbench.boundary.db import Base
from workbench.boundary.db.CRUD import (
    transcripts_configuration_crud,
    user_crud,
    workspace_crud,
)
from workbench.boundary.db.models import TranscriptsProvider
from workbench.boundary.http.assistant_client import AssistantApiClient
from workbench.boundary.http.email_client import EmailClient
from workbench.boundary.http.providers import BaseTranscriptsProvider
from workbench.core.exceptions import EmailDeliveryError
from workbench.models.conversation import AgentConfiguration, AgentMessage, Conversation
from workbench.models.transcript import TranscriptContent, TranscriptOutcome
from workbench.workers.tasks.transcripts import _run_with_service

LONG_TRANSCRIPT = "Ada: Let's review the roadmap. " * 10


class StubClients:
    """Stands in for HttpClients with mocked collaborators."""

    def __init__(self) -> None:
        provider = AsyncMock(spec=BaseTranscriptsProvider)
        provider.fetch_transcript.return_value = TranscriptContent(
            title="Weekly sync", content=LONG_TRANSCRIPT
        )
        self.providers = {TranscriptsProvider.GOOGLE_DRIVE: provider}

        self.assistant = AsyncMock(spec=AssistantApiClient)
        self.assistant.get_agent_configuration.return_value = AgentConfiguration(
            sId="agent-1", name="summarizer"
        )
        self.assistant.create_conversation.return_value = Conversation(sId="conv-1", title="Weekly sync")
        self.assistant.wait_for_agent_reply.return_value = (
            Conversation(sId="conv-1", title="Weekly sync"),
            AgentMessage(sId="m-2", status="succeeded", content="- Ship v2"),
        )

        self.email = AsyncMock(spec=EmailClient)

    async def __aenter__(self) -> "StubClients":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'workbench.db'}"


@pytest.fixture
async def configuration_id(database_url):
    engine = create_async_engine(database_url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_sessionmaker(engine, expire_on_commit=False)() as session:
        workspace = await workspace_crud.create(session, name="Acme")
        user = await user_crud.create(
            session,
            email="ada@acme.test",
            username="ada",
            first_name="Ada",
            last_name="Lovelace",
        )
        configuration = await transcripts_configuration_crud.make_new(
            session,
            user_id=user.id,
            workspace_id=workspace.id,
            provider=TranscriptsProvider.GOOGLE_DRIVE,
            connection_id="conn-1",
            agent_configuration_id="agent-1",
            is_active=True,
        )
        await session.commit()
        configuration_id = configuration.id

    await engine.dispose()
    return configuration_id


@pytest.fixture
def clients(database_url):
    stub = StubClients()
    with patch(
        "workbench.workers.tasks.transcripts.create_task_engine",
        side_effect=lambda: create_async_engine(database_url),
    ), patch("workbench.workers.tasks.transcripts.HttpClients", return_value=stub):
        yield stub


class TestProcessTranscriptRuns:
    """Test suite for process_transcript runs through _run_with_service()."""

    @pytest.mark.asyncio
    async def test_retry_after_email_failure_should_not_create_second_conversation(
        self, configuration_id, clients
    ) -> None:
        clients.email.send_email.side_effect = [EmailDeliveryError("mail API down"), None]

        with pytest.raises(EmailDeliveryError):
            await _run_with_service(lambda s: s.process_transcript(configuration_id, "f-1"))

        outcome = await _run_with_service(lambda s: s.process_transcript(configuration_id, "f-1"))

        assert outcome == TranscriptOutcome.SKIPPED_ALREADY_PROCESSED
        assert clients.assistant.create_conversation.await_count == 1

    @pytest.mark.asyncio
    async def test_short_transcript_history_should_survive_email_failure(
        self, configuration_id, clients
    ) -> None:
        provider = clients.providers[TranscriptsProvider.GOOGLE_DRIVE]
        provider.fetch_transcript.return_value = TranscriptContent(title="Quick chat", content="Hi.")
        clients.email.send_email.side_effect = EmailDeliveryError("mail API down")

        with pytest.raises(EmailDeliveryError):
            await _run_with_service(lambda s: s.process_transcript(configuration_id, "f-1"))

        outcome = await _run_with_service(lambda s: s.process_transcript(configuration_id, "f-1"))

        assert outcome == TranscriptOutcome.SKIPPED_ALREADY_PROCESSED
        assert clients.email.send_email.await_count == 1
