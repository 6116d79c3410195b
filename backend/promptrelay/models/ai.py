"""
AI Models - persisted completion records and the AI endpoint schemas.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from .base import DocumentModel, utc_now


class Usage(BaseModel):
    """Token accounting reported by the upstream provider."""
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class AICompletion(DocumentModel):
    """One relayed LLM exchange, stored in ``ai_completions``."""
    prompt: str
    system_prompt: Optional[str] = None
    model: str
    response: str
    usage: Optional[Usage] = None
    request_type: str  # "complete", "suggest" or "analyze"
    created_at: datetime = Field(default_factory=utc_now)


class CompleteRequest(BaseModel):
    prompt: str = Field(..., min_length=1)
    model: Optional[str] = None
    system_prompt: Optional[str] = None
    max_tokens: Optional[int] = Field(None, gt=0)
    temperature: Optional[float] = Field(None, ge=0.0, le=2.0)


class SuggestRequest(BaseModel):
    context: str = Field(..., min_length=1)
    model: Optional[str] = None
    suggestion_type: Optional[str] = None


class AnalyzeRequest(BaseModel):
    text: str = Field(..., min_length=1)
    model: Optional[str] = None
    analysis_type: Optional[str] = None


class AIResponse(BaseModel):
    id: str
    model: str
    content: str
    usage: Optional[Usage] = None
    created_at: datetime


class ModelInfo(BaseModel):
    id: str
    name: str
    description: str
    context_length: int


class ModelsResponse(BaseModel):
    models: List[ModelInfo]
