"""
Transcription Models - text transcripts and speech-to-text results.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, model_validator

from .base import DocumentModel, utc_now


class Transcription(DocumentModel):
    """A transcript submitted as text, stored in ``transcriptions``."""
    text: str
    source: Optional[str] = None
    ai_response: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: Optional[datetime] = None

    @model_validator(mode="after")
    def _default_updated_at(self) -> "Transcription":
        if self.updated_at is None:
            self.updated_at = self.created_at
        return self


class SttTranscription(DocumentModel):
    """The result of transcribing an uploaded audio file, stored in ``stt_transcriptions``."""
    text: str
    language: Optional[str] = None
    duration: Optional[float] = None
    model: str
    file_name: Optional[str] = None
    file_size: Optional[int] = None
    session_id: Optional[str] = None
    ai_response: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)


class CreateTranscriptionRequest(BaseModel):
    text: str = Field(..., min_length=1)
    source: Optional[str] = None


class TranscriptionResponse(BaseModel):
    id: str
    text: str
    source: Optional[str] = None
    ai_response: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_record(cls, record: Transcription) -> "TranscriptionResponse":
        return cls(
            id=record.id or "",
            text=record.text,
            source=record.source,
            ai_response=record.ai_response,
            created_at=record.created_at,
        )


class TranscriptionListResponse(BaseModel):
    data: List[TranscriptionResponse]
    total: int


class SttTranscriptionResponse(BaseModel):
    id: str
    text: str
    language: Optional[str] = None
    duration: Optional[float] = None
    model: str
    created_at: datetime

    @classmethod
    def from_record(cls, record: SttTranscription) -> "SttTranscriptionResponse":
        return cls(
            id=record.id or "",
            text=record.text,
            language=record.language,
            duration=record.duration,
            model=record.model,
            created_at=record.created_at,
        )


class TranscribeWithAIResponse(BaseModel):
    id: str
    transcription: str
    ai_response: str
    language: Optional[str] = None
    duration: Optional[float] = None
    model: str
    created_at: datetime


class SttTranscriptionListResponse(BaseModel):
    data: List[SttTranscriptionResponse]
    total: int
