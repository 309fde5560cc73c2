"""
Transcript Celery tasks.

Tasks:
  sync_transcripts()                          periodic, every active configuration
  sync_configuration(configuration_id)        discover new files, fan out processing
  process_transcript(configuration_id, file_id)

Each run opens its own async DB session and HTTP clients, and commits
when the use case returns.

Dependencies: celery, workbench.application, workbench.boundary, workbench.workers
System role: Async transcript processing tasks
"""

import asyncio
import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import async_sessionmaker

from workbench.application.services.transcript_service import TranscriptService
from workbench.boundary.db import create_task_engine
from workbench.boundary.http.clients import HttpClients
from workbench.configs import get_settings
from workbench.core.exceptions import EmailDeliveryError, ProviderError
from workbench.observability import correlation_scope
from workbench.workers import celery_app, celery_config

logger = logging.getLogger(__name__)


async def _run_with_service(use_case):
    """Run ``use_case(service)`` in a fresh session, committing on success."""
    settings = get_settings()
    engine = create_task_engine()
    SessionFactory = async_sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    try:
        async with HttpClients(settings) as clients, SessionFactory() as session:
            service = TranscriptService(
                db=session,
                providers=clients.providers,
                assistant_client=clients.assistant,
                email_client=clients.email,
                settings=settings.transcripts,
            )
            try:
                result = await use_case(service)
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            return result
    finally:
        await engine.dispose()


@celery_app.task(bind=True)
def sync_transcripts(self) -> dict:
    """
    Process new transcripts of every active configuration.

    Returns:
        dict: Count of files per outcome
    """
    with correlation_scope(self.request.id):
        counts = asyncio.run(_run_with_service(lambda s: s.process_active_configurations()))
    return {outcome.value: count for outcome, count in counts.items()}


@celery_app.task(bind=True)
def sync_configuration(self, configuration_id: str) -> list[str]:
    """
    Discover new transcripts of one configuration and enqueue each.

    Args:
        configuration_id: Configuration UUID as string

    Returns:
        list[str]: Enqueued file ids
    """
    with correlation_scope(self.request.id):
        file_ids = asyncio.run(
            _run_with_service(lambda s: s.retrieve_new_transcripts(UUID(configuration_id)))
        )
    for file_id in file_ids:
        process_transcript.delay(configuration_id, file_id)
    logger.info(
        "Enqueued transcripts",
        extra={"configuration_id": configuration_id, "count": len(file_ids)},
    )
    return file_ids


@celery_app.task(
    bind=True,
    max_retries=celery_config.task_max_retries,
    autoretry_for=(ProviderError, EmailDeliveryError),
    retry_backoff=celery_config.task_retry_backoff,
    retry_backoff_max=celery_config.task_retry_backoff_max,
)
def process_transcript(self, configuration_id: str, file_id: str) -> str:
    """
    Summarize one transcript.

    Args:
        configuration_id: Configuration UUID as string
        file_id: Provider file id

    Returns:
        str: TranscriptOutcome value
    """
    with correlation_scope(self.request.id):
        outcome = asyncio.run(
            _run_with_service(lambda s: s.process_transcript(UUID(configuration_id), file_id))
        )
    return outcome.value
