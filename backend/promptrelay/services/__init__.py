"""Services module."""

from .transcription import TranscriptionService, SttResult, supported_formats
from .chat import ChatOrchestrator, ChatTurn, build_prompt

__all__ = [
    'TranscriptionService', 'SttResult', 'supported_formats',
    'ChatOrchestrator', 'ChatTurn', 'build_prompt',
]
