"""
Celery workers module.

Periodic transcript sync and per-file transcript processing.

Dependencies: celery, workbench.configs
System role: Background task processing
"""

from celery import Celery
from celery.signals import setup_logging

from workbench.configs import get_settings
from workbench.observability import configure_logging

settings = get_settings()
celery_config = settings.celery

celery_app = Celery(
    "workbench",
    broker=celery_config.broker_url,
    backend=celery_config.result_backend_url,
    include=["workbench.workers.tasks.transcripts"],
)

celery_app.conf.update(
    task_serializer=celery_config.task_serializer,
    result_serializer=celery_config.result_serializer,
    accept_content=celery_config.accept_content,
    timezone=celery_config.timezone,
    task_max_retries=celery_config.task_max_retries,
    beat_schedule={
        "sync-transcripts": {
            "task": "workbench.workers.tasks.transcripts.sync_transcripts",
            "schedule": celery_config.transcripts_sync_interval,
        },
    },
)


@setup_logging.connect
def configure_worker_logging(**kwargs) -> None:
    """Use the application log format in worker processes."""
    configure_logging(get_settings().log_level)
