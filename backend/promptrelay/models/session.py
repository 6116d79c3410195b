"""
Session Models - conversational sessions, their messages, and API schemas.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, model_validator

from .base import DocumentModel, utc_now

DEFAULT_SESSION_TYPE = "general"
DEFAULT_CONTEXT_WINDOW = 10


class Message(BaseModel):
    """One turn of a conversation. The timestamp is set when the object is built."""
    role: str  # "user", "assistant", "system" by convention
    content: str
    timestamp: datetime = Field(default_factory=utc_now)

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role="user", content=content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        return cls(role="assistant", content=content)

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(role="system", content=content)


class Session(DocumentModel):
    """A persisted, ordered conversation. ``messages`` is append-only."""
    title: Optional[str] = None
    session_type: str = DEFAULT_SESSION_TYPE
    messages: List[Message] = Field(default_factory=list)
    metadata: Optional[Any] = None
    created_at: datetime
    updated_at: datetime

    @model_validator(mode="before")
    @classmethod
    def _default_timestamps(cls, data: Any) -> Any:
        # A new session starts with updated_at == created_at
        if isinstance(data, dict):
            data = dict(data)
            if data.get("session_type") is None:
                data["session_type"] = DEFAULT_SESSION_TYPE
            if data.get("created_at") is None:
                data["created_at"] = utc_now()
            if data.get("updated_at") is None:
                data["updated_at"] = data["created_at"]
        return data

    @property
    def message_count(self) -> int:
        return len(self.messages)


def context_window(session: Session, limit: int = DEFAULT_CONTEXT_WINDOW) -> List[Message]:
    """
    Trailing ``limit`` messages of a session, oldest first.

    Returns every message when the session holds ``limit`` or fewer. The
    session is not modified.
    """
    if limit <= 0:
        return []
    return list(session.messages[-limit:])


# ---------------------------------------------------------------------------
# API schemas
# ---------------------------------------------------------------------------

class CreateSessionRequest(BaseModel):
    title: Optional[str] = Field(None, max_length=100)
    session_type: Optional[str] = None
    metadata: Optional[Any] = None


class AddMessageRequest(BaseModel):
    role: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)


class UpdateTitleRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=100)


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1)
    model: Optional[str] = None
    system_prompt: Optional[str] = None


class MessageResponse(BaseModel):
    role: str
    content: str
    timestamp: datetime

    @classmethod
    def from_message(cls, message: Message) -> "MessageResponse":
        return cls(role=message.role, content=message.content, timestamp=message.timestamp)


class SessionSummary(BaseModel):
    id: str
    title: Optional[str] = None
    session_type: str
    message_count: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_session(cls, session: Session) -> "SessionSummary":
        return cls(
            id=session.id or "",
            title=session.title,
            session_type=session.session_type,
            message_count=session.message_count,
            created_at=session.created_at,
            updated_at=session.updated_at,
        )


class SessionResponse(SessionSummary):
    messages: List[MessageResponse]
    metadata: Optional[Any] = None

    @classmethod
    def from_session(cls, session: Session) -> "SessionResponse":
        summary = SessionSummary.from_session(session)
        return cls(
            **summary.model_dump(),
            messages=[MessageResponse.from_message(m) for m in session.messages],
            metadata=session.metadata,
        )


class SessionListResponse(BaseModel):
    data: List[SessionSummary]
    total: int


class ChatResponse(BaseModel):
    session_id: str
    message: MessageResponse
    response: MessageResponse
    model: str


class StatusMessage(BaseModel):
    message: str


def session_to_cache(session: Session) -> str:
    """Serialize a full session snapshot for the cache."""
    return session.model_dump_json()


def session_from_cache(raw: str | bytes) -> Session:
    """Inverse of :func:`session_to_cache`; raises pydantic.ValidationError on bad input."""
    return Session.model_validate_json(raw)


def message_document(message: Message) -> Dict[str, Any]:
    """Message as stored inside a session document."""
    return message.model_dump()
