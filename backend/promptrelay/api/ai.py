"""
AI API endpoints - relayed completions, suggestions and analyses.

Every successful call is recorded in ``ai_completions``.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends

from ..core.exceptions import PromptRelayError
from ..llm.base import LLMResponse
from ..llm.catalog import MODEL_CATALOG
from ..llm.gateway import LLMGateway
from ..models import (
    AICompletion,
    AIResponse,
    AnalyzeRequest,
    CompleteRequest,
    ModelsResponse,
    SuggestRequest,
)
from ..storage import CompletionStore
from .deps import get_completion_store, get_gateway
from .errors import http_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ai", tags=["ai"])


async def _record(
    completions: CompletionStore,
    request_type: str,
    prompt: str,
    model: str,
    result: LLMResponse,
    system_prompt: Optional[str] = None,
) -> AIResponse:
    completion = AICompletion(
        prompt=prompt,
        system_prompt=system_prompt,
        model=model,
        response=result.content,
        usage=result.usage,
        request_type=request_type,
    )
    completion_id = await completions.create(completion)
    return AIResponse(
        id=completion_id,
        model=model,
        content=result.content,
        usage=result.usage,
        created_at=completion.created_at,
    )


@router.post("/complete", response_model=AIResponse)
async def complete(
    payload: CompleteRequest,
    gateway: LLMGateway = Depends(get_gateway),
    completions: CompletionStore = Depends(get_completion_store),
):
    """
    Relay a single prompt to the LLM.

    Args:
        payload: Prompt plus optional model, system prompt and sampling limits

    Returns:
        The reply with token usage and the id of the stored record
    """
    model = payload.model or gateway.default_model
    try:
        result = await gateway.complete(
            payload.prompt,
            model=model,
            system_prompt=payload.system_prompt,
            max_tokens=payload.max_tokens,
            temperature=payload.temperature,
        )
        return await _record(
            completions, "complete", payload.prompt, model, result,
            system_prompt=payload.system_prompt,
        )
    except PromptRelayError as e:
        raise http_error(e) from e


@router.post("/suggest", response_model=AIResponse)
async def suggest(
    payload: SuggestRequest,
    gateway: LLMGateway = Depends(get_gateway),
    completions: CompletionStore = Depends(get_completion_store),
):
    """Real-time suggestion for an interview, coding, meeting or general context."""
    model = payload.model or gateway.default_model
    try:
        result = await gateway.suggest(
            payload.context, model=model, suggestion_type=payload.suggestion_type
        )
        return await _record(completions, "suggest", payload.context, model, result)
    except PromptRelayError as e:
        raise http_error(e) from e


@router.post("/analyze", response_model=AIResponse)
async def analyze(
    payload: AnalyzeRequest,
    gateway: LLMGateway = Depends(get_gateway),
    completions: CompletionStore = Depends(get_completion_store),
):
    model = payload.model or gateway.default_model
    try:
        result = await gateway.analyze(
            payload.text, model=model, analysis_type=payload.analysis_type
        )
        return await _record(completions, "analyze", payload.text, model, result)
    except PromptRelayError as e:
        raise http_error(e) from e


@router.get("/models", response_model=ModelsResponse)
async def list_models():
    """Models clients may pass as ``model``."""
    return ModelsResponse(models=MODEL_CATALOG)
