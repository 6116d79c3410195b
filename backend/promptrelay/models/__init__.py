"""Models module."""

from .base import DocumentModel, utc_now
from .session import (
    Message, Session, context_window, DEFAULT_CONTEXT_WINDOW,
    CreateSessionRequest, AddMessageRequest, UpdateTitleRequest, ChatRequest,
    MessageResponse, SessionSummary, SessionResponse, SessionListResponse,
    ChatResponse, StatusMessage,
)
from .ai import (
    Usage, AICompletion, CompleteRequest, SuggestRequest, AnalyzeRequest,
    AIResponse, ModelInfo, ModelsResponse,
)
from .transcription import (
    Transcription, SttTranscription, CreateTranscriptionRequest,
    TranscriptionResponse, TranscriptionListResponse, SttTranscriptionResponse,
    TranscribeWithAIResponse, SttTranscriptionListResponse,
)

__all__ = [
    'DocumentModel', 'utc_now',
    'Message', 'Session', 'context_window', 'DEFAULT_CONTEXT_WINDOW',
    'CreateSessionRequest', 'AddMessageRequest', 'UpdateTitleRequest', 'ChatRequest',
    'MessageResponse', 'SessionSummary', 'SessionResponse', 'SessionListResponse',
    'ChatResponse', 'StatusMessage',
    'Usage', 'AICompletion', 'CompleteRequest', 'SuggestRequest', 'AnalyzeRequest',
    'AIResponse', 'ModelInfo', 'ModelsResponse',
    'Transcription', 'SttTranscription', 'CreateTranscriptionRequest',
    'TranscriptionResponse', 'TranscriptionListResponse', 'SttTranscriptionResponse',
    'TranscribeWithAIResponse', 'SttTranscriptionListResponse',
]
