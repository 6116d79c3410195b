"""
Session API endpoints - conversational sessions and multi-turn chat.
"""

import logging
from fastapi import APIRouter, HTTPException, Depends, status

from ..core.exceptions import PromptRelayError, StoreError
from ..models import (
    Message,
    Session,
    CreateSessionRequest,
    AddMessageRequest,
    UpdateTitleRequest,
    ChatRequest,
    ChatResponse,
    MessageResponse,
    SessionResponse,
    SessionSummary,
    SessionListResponse,
    StatusMessage,
)
from ..services.chat import ChatOrchestrator
from ..storage import SessionStore
from .deps import get_chat_orchestrator, get_session_store
from .errors import http_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["sessions"])

LIST_LIMIT = 50


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")


@router.post("/session", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def create_session(
    payload: CreateSessionRequest,
    sessions: SessionStore = Depends(get_session_store),
):
    """
    Create an empty session.

    Args:
        payload: Optional title, session type and metadata

    Returns:
        The new session with its assigned id
    """
    session = Session(
        title=payload.title,
        session_type=payload.session_type,
        metadata=payload.metadata,
    )
    try:
        session.id = await sessions.create(session)
    except PromptRelayError as e:
        raise http_error(e) from e
    return SessionResponse.from_session(session)


@router.get("/session/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str, sessions: SessionStore = Depends(get_session_store)):
    try:
        session = await sessions.find_by_id(session_id)
    except PromptRelayError as e:
        raise http_error(e) from e
    if session is None:
        raise _not_found()
    return SessionResponse.from_session(session)


@router.delete("/session/{session_id}", response_model=StatusMessage)
async def delete_session(session_id: str, sessions: SessionStore = Depends(get_session_store)):
    try:
        deleted = await sessions.delete(session_id)
    except PromptRelayError as e:
        raise http_error(e) from e
    if not deleted:
        raise _not_found()
    return StatusMessage(message="Deleted successfully")


@router.patch("/session/{session_id}/title", response_model=SessionResponse)
async def update_session_title(
    session_id: str,
    payload: UpdateTitleRequest,
    sessions: SessionStore = Depends(get_session_store),
):
    """Rename a session and return it as stored afterwards."""
    try:
        if not await sessions.update_title(session_id, payload.title):
            raise _not_found()
        session = await sessions.find_by_id(session_id)
    except PromptRelayError as e:
        raise http_error(e) from e
    if session is None:
        raise _not_found()
    return SessionResponse.from_session(session)


@router.post("/session/{session_id}/message", response_model=MessageResponse)
async def add_message(
    session_id: str,
    payload: AddMessageRequest,
    sessions: SessionStore = Depends(get_session_store),
):
    """Append a message without calling the LLM."""
    message = Message(role=payload.role, content=payload.content)
    try:
        appended = await sessions.add_message(session_id, message)
    except PromptRelayError as e:
        raise http_error(e) from e
    if not appended:
        raise _not_found()
    return MessageResponse.from_message(message)


@router.post("/session/{session_id}/chat", response_model=ChatResponse)
async def chat(
    session_id: str,
    payload: ChatRequest,
    orchestrator: ChatOrchestrator = Depends(get_chat_orchestrator),
):
    """
    Send a user message and get the assistant's reply.

    Both turns are appended to the session. The last messages of the session
    are sent along as conversation context.
    """
    try:
        turn = await orchestrator.chat(
            session_id,
            payload.message,
            model=payload.model,
            system_prompt=payload.system_prompt,
        )
    except PromptRelayError as e:
        raise http_error(e) from e

    return ChatResponse(
        session_id=turn.session_id,
        message=MessageResponse.from_message(turn.user_message),
        response=MessageResponse.from_message(turn.assistant_message),
        model=turn.model,
    )


@router.get("/sessions", response_model=SessionListResponse)
async def list_sessions(sessions: SessionStore = Depends(get_session_store)):
    """Most recently updated sessions, newest first."""
    try:
        recent = await sessions.find_all(LIST_LIMIT)
    except PromptRelayError as e:
        raise http_error(e) from e

    try:
        total = await sessions.count()
    except StoreError as e:
        logger.warning(f"Session count unavailable: {e}")
        total = 0

    return SessionListResponse(
        data=[SessionSummary.from_session(s) for s in recent],
        total=total,
    )
