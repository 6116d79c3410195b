"""
FastAPI dependencies - components built once in the lifespan, read from ``app.state``.
"""

from fastapi import Depends, HTTPException, Request, status

from ..config import settings
from ..llm.gateway import LLMGateway
from ..services.chat import ChatOrchestrator
from ..services.transcription import TranscriptionService
from ..storage import CompletionStore, SessionStore, SttTranscriptionStore, TranscriptionStore


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def get_completion_store(request: Request) -> CompletionStore:
    return request.app.state.completion_store


def get_transcription_store(request: Request) -> TranscriptionStore:
    return request.app.state.transcription_store


def get_stt_store(request: Request) -> SttTranscriptionStore:
    return request.app.state.stt_store


def get_gateway(request: Request) -> LLMGateway:
    """The LLM gateway, or 400 when no provider had an API key at startup."""
    gateway = getattr(request.app.state, "gateway", None)
    if gateway is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="LLM provider not configured",
        )
    return gateway


def get_transcription_service(request: Request) -> TranscriptionService:
    return request.app.state.transcription_service


def get_chat_orchestrator(
    sessions: SessionStore = Depends(get_session_store),
    gateway: LLMGateway = Depends(get_gateway),
) -> ChatOrchestrator:
    return ChatOrchestrator(
        sessions,
        gateway,
        context_limit=settings.chat_context_limit,
        system_prompt=settings.chat_system_prompt,
    )
