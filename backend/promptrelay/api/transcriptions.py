"""
Transcription API endpoints - transcripts submitted as text.
"""

import logging
from fastapi import APIRouter, HTTPException, Depends, status

from ..core.exceptions import PromptRelayError, StoreError
from ..models import (
    CreateTranscriptionRequest,
    StatusMessage,
    Transcription,
    TranscriptionListResponse,
    TranscriptionResponse,
)
from ..storage import TranscriptionStore
from .deps import get_transcription_store
from .errors import http_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["transcriptions"])

LIST_LIMIT = 50


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transcription not found")


@router.post("/transcription", response_model=TranscriptionResponse,
             status_code=status.HTTP_201_CREATED)
async def create_transcription(
    payload: CreateTranscriptionRequest,
    records: TranscriptionStore = Depends(get_transcription_store),
):
    record = Transcription(text=payload.text, source=payload.source)
    try:
        record.id = await records.create(record)
    except PromptRelayError as e:
        raise http_error(e) from e
    return TranscriptionResponse.from_record(record)


@router.get("/transcription/{transcription_id}", response_model=TranscriptionResponse)
async def get_transcription(
    transcription_id: str,
    records: TranscriptionStore = Depends(get_transcription_store),
):
    try:
        record = await records.find_by_id(transcription_id)
    except PromptRelayError as e:
        raise http_error(e) from e
    if record is None:
        raise _not_found()
    return TranscriptionResponse.from_record(record)


@router.delete("/transcription/{transcription_id}", response_model=StatusMessage)
async def delete_transcription(
    transcription_id: str,
    records: TranscriptionStore = Depends(get_transcription_store),
):
    try:
        deleted = await records.delete(transcription_id)
    except PromptRelayError as e:
        raise http_error(e) from e
    if not deleted:
        raise _not_found()
    return StatusMessage(message="Deleted successfully")


@router.get("/transcriptions", response_model=TranscriptionListResponse)
async def list_transcriptions(records: TranscriptionStore = Depends(get_transcription_store)):
    """Latest transcripts, newest first."""
    try:
        recent = await records.find_recent(LIST_LIMIT)
    except PromptRelayError as e:
        raise http_error(e) from e

    try:
        total = await records.count()
    except StoreError as e:
        logger.warning(f"Transcription count unavailable: {e}")
        total = 0

    return TranscriptionListResponse(
        data=[TranscriptionResponse.from_record(r) for r in recent],
        total=total,
    )
