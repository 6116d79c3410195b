"""
Speech-to-Text API endpoints - transcribe uploaded audio, optionally answer it with the LLM.
"""

import logging
from typing import List, Optional
from fastapi import APIRouter, HTTPException, Depends, status, UploadFile, File, Query

from ..core.exceptions import PromptRelayError, StoreError
from ..llm.gateway import LLMGateway
from ..llm.prompts import SuggestionType
from ..models import (
    Message,
    SttTranscription,
    SttTranscriptionListResponse,
    SttTranscriptionResponse,
    StatusMessage,
    TranscribeWithAIResponse,
)
from ..services.transcription import TranscriptionService, file_extension, supported_formats
from ..storage import SessionStore, SttTranscriptionStore
from .deps import get_gateway, get_session_store, get_stt_store, get_transcription_service
from .errors import http_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/stt", tags=["stt"])

DEFAULT_FILE_NAME = "audio.wav"
LIST_LIMIT = 50


async def _read_upload(file: Optional[UploadFile], audio: Optional[UploadFile]) -> tuple[bytes, str]:
    """Audio bytes and file name from the ``file`` or ``audio`` form field."""
    upload = file or audio
    if upload is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No audio file provided")
    data = await upload.read()
    if not data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Audio file is empty")
    return data, upload.filename or DEFAULT_FILE_NAME


async def _append_to_session(sessions: SessionStore, session_id: str, *messages: Message) -> None:
    """Append transcript turns to a session. Failures are logged, never raised."""
    for message in messages:
        try:
            appended = await sessions.add_message(session_id, message)
        except PromptRelayError as e:
            logger.warning(f"Transcript not appended to session {session_id}: {e}")
            return
        if not appended:
            logger.warning(f"Transcript not appended: session {session_id} not found")
            return


@router.post("/transcribe", response_model=SttTranscriptionResponse)
async def transcribe(
    file: Optional[UploadFile] = File(None),
    audio: Optional[UploadFile] = File(None),
    language: Optional[str] = Query(None, description="ISO 639-1 language code"),
    session_id: Optional[str] = Query(None, description="Append the transcript to this session"),
    stt: TranscriptionService = Depends(get_transcription_service),
    records: SttTranscriptionStore = Depends(get_stt_store),
    sessions: SessionStore = Depends(get_session_store),
):
    """
    Transcribe an uploaded audio file.

    Args:
        file / audio: Multipart audio upload (either field name)
        language: Optional language hint
        session_id: Optional session that receives the transcript as a user message

    Returns:
        The stored transcription
    """
    data, file_name = await _read_upload(file, audio)

    formats = supported_formats()
    if file_extension(file_name) not in formats:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported audio format. Supported: {formats}",
        )

    try:
        result = await stt.transcribe(data, file_name, language=language)
        record = SttTranscription(
            text=result.text,
            language=result.language,
            duration=result.duration,
            model=result.model,
            file_name=file_name,
            file_size=len(data),
            session_id=session_id,
        )
        record.id = await records.create(record)
    except PromptRelayError as e:
        raise http_error(e) from e

    if session_id:
        await _append_to_session(sessions, session_id, Message.user(result.text))

    return SttTranscriptionResponse.from_record(record)


@router.post("/transcribe-ai", response_model=TranscribeWithAIResponse)
async def transcribe_and_respond(
    file: Optional[UploadFile] = File(None),
    audio: Optional[UploadFile] = File(None),
    language: Optional[str] = Query(None, description="ISO 639-1 language code"),
    session_id: Optional[str] = Query(None, description="Append transcript and reply to this session"),
    stt: TranscriptionService = Depends(get_transcription_service),
    gateway: LLMGateway = Depends(get_gateway),
    records: SttTranscriptionStore = Depends(get_stt_store),
    sessions: SessionStore = Depends(get_session_store),
):
    """
    Transcribe an uploaded audio file and answer it as an interview question.
    """
    data, file_name = await _read_upload(file, audio)

    try:
        result = await stt.transcribe(data, file_name, language=language)
        reply = await gateway.suggest(result.text, suggestion_type=SuggestionType.INTERVIEW)
        record = SttTranscription(
            text=result.text,
            language=result.language,
            duration=result.duration,
            model=result.model,
            file_name=file_name,
            file_size=len(data),
            session_id=session_id,
            ai_response=reply.content,
        )
        record.id = await records.create(record)
    except PromptRelayError as e:
        raise http_error(e) from e

    if session_id:
        await _append_to_session(
            sessions, session_id, Message.user(result.text), Message.assistant(reply.content)
        )

    return TranscribeWithAIResponse(
        id=record.id,
        transcription=result.text,
        ai_response=reply.content,
        language=result.language,
        duration=result.duration,
        model=result.model,
        created_at=record.created_at,
    )


@router.get("/transcription/{transcription_id}", response_model=SttTranscriptionResponse)
async def get_transcription(
    transcription_id: str,
    records: SttTranscriptionStore = Depends(get_stt_store),
):
    try:
        record = await records.find_by_id(transcription_id)
    except PromptRelayError as e:
        raise http_error(e) from e
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transcription not found")
    return SttTranscriptionResponse.from_record(record)


@router.get("/transcriptions", response_model=SttTranscriptionListResponse)
async def list_transcriptions(
    session_id: Optional[str] = Query(None, description="Only transcripts appended to this session"),
    records: SttTranscriptionStore = Depends(get_stt_store),
):
    try:
        if session_id:
            recent = await records.find_by_session(session_id, LIST_LIMIT)
        else:
            recent = await records.find_recent(LIST_LIMIT)
    except PromptRelayError as e:
        raise http_error(e) from e

    try:
        total = await records.count_by_session(session_id) if session_id else await records.count()
    except StoreError as e:
        logger.warning(f"Transcription count unavailable: {e}")
        total = 0

    return SttTranscriptionListResponse(
        data=[SttTranscriptionResponse.from_record(r) for r in recent],
        total=total,
    )


@router.delete("/transcription/{transcription_id}", response_model=StatusMessage)
async def delete_transcription(
    transcription_id: str,
    records: SttTranscriptionStore = Depends(get_stt_store),
):
    try:
        deleted = await records.delete(transcription_id)
    except PromptRelayError as e:
        raise http_error(e) from e
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transcription not found")
    return StatusMessage(message="Deleted successfully")


@router.get("/formats", response_model=List[str])
async def list_formats():
    """Audio file extensions accepted by ``/transcribe``."""
    return supported_formats()
