"""
Transcript API endpoints.

Routes: GET /transcripts/configurations/{configuration_id}/history,
        POST /transcripts/configurations/{configuration_id}/process

Dependencies: workbench.application.services.transcript_service, workbench.workers
System role: Transcript pipeline HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from workbench.api.deps import get_transcript_service
from workbench.application.services.transcript_service import TranscriptService
from workbench.core.exceptions import ResourceNotFoundError
from workbench.models.transcript_api import (
    ProcessEnqueuedResponse,
    TranscriptHistoryItem,
    TranscriptHistoryResponse,
)
from workbench.workers.tasks.transcripts import sync_configuration

router = APIRouter(prefix="/transcripts/configurations", tags=["transcripts"])


@router.get("/{configuration_id}/history", response_model=TranscriptHistoryResponse)
async def get_history(
    configuration_id: UUID,
    transcript_service: TranscriptService = Depends(get_transcript_service),
) -> TranscriptHistoryResponse:
    """
    List transcript files already handled for a configuration.

    Raises:
        HTTPException(404): Configuration not found
    """
    try:
        history = await transcript_service.list_history(configuration_id)
    except ResourceNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    return TranscriptHistoryResponse(
        configuration_id=str(configuration_id),
        history=[TranscriptHistoryItem(**item) for item in history],
    )


@router.post("/{configuration_id}/process", response_model=ProcessEnqueuedResponse, status_code=202)
async def process_configuration(
    configuration_id: UUID,
    transcript_service: TranscriptService = Depends(get_transcript_service),
) -> ProcessEnqueuedResponse:
    """
    Enqueue discovery and processing of new transcripts for a configuration.

    Raises:
        HTTPException(404): Configuration not found
    """
    try:
        await transcript_service.ensure_configuration(configuration_id)
    except ResourceNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    result = sync_configuration.delay(str(configuration_id))
    return ProcessEnqueuedResponse(configuration_id=str(configuration_id), task_id=result.id)
