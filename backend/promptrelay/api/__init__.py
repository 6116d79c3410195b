"""API module."""

from .sessions import router as sessions_router
from .ai import router as ai_router
from .stt import router as stt_router
from .transcriptions import router as transcriptions_router

__all__ = ['sessions_router', 'ai_router', 'stt_router', 'transcriptions_router']
