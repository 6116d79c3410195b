"""
LLM Gateway - one completion interface in front of whichever provider is active.
"""

import logging
from typing import Any, Optional, Union

from .base import LLMMessage, LLMProvider, LLMResponse
from .factory import create_provider_with_fallback
from .prompts import AnalysisType, PromptPreset, SuggestionType, CONCISE, get_preset

logger = logging.getLogger(__name__)


class LLMGateway:
    """
    Uniform chat completion plus the task-specific suggest and analyze calls.
    """

    def __init__(self, provider: LLMProvider, preset: PromptPreset = CONCISE,
                 default_model: Optional[str] = None):
        """
        Args:
            provider: Active chat-completion provider
            preset: Prompt preset used by suggest and analyze
            default_model: Model used when a call names none (provider default if None)
        """
        self.provider = provider
        self.preset = preset
        self.default_model = default_model or provider.model

    @property
    def provider_name(self) -> str:
        return self.provider.name

    async def complete(
        self,
        prompt: str,
        model: Optional[str] = None,
        system_prompt: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> LLMResponse:
        """
        Single-turn completion: optional system message, then the user prompt.

        Raises:
            ApiError: upstream error, including timeouts (flagged retryable)
            InvalidResponseError: upstream returned no choices
        """
        messages = []
        if system_prompt is not None:
            messages.append(LLMMessage.text("system", system_prompt))
        messages.append(LLMMessage.text("user", prompt))

        return await self.provider.chat_completion(
            messages,
            model=model or self.default_model,
            temperature=temperature,
            max_tokens=max_tokens,
        )

    async def suggest(
        self,
        context: str,
        model: Optional[str] = None,
        suggestion_type: Union[SuggestionType, str, None] = None,
    ) -> LLMResponse:
        """Real-time suggestion framed for the given category."""
        kind = suggestion_type if isinstance(suggestion_type, SuggestionType) \
            else SuggestionType.parse(suggestion_type)
        prompt_spec = self.preset.suggestion(kind)

        logger.info(f"Suggest: type={kind.value}, preset={self.preset.name}")
        return await self.complete(
            prompt_spec.render(context),
            model=model,
            system_prompt=prompt_spec.system_prompt,
            max_tokens=prompt_spec.budget.max_tokens,
            temperature=prompt_spec.budget.temperature,
        )

    async def analyze(
        self,
        text: str,
        model: Optional[str] = None,
        analysis_type: Union[AnalysisType, str, None] = None,
    ) -> LLMResponse:
        """Analysis of ``text`` with a category-specific system prompt and a low temperature."""
        kind = analysis_type if isinstance(analysis_type, AnalysisType) \
            else AnalysisType.parse(analysis_type)
        budget = self.preset.analysis_budget

        logger.info(f"Analyze: type={kind.value}, preset={self.preset.name}")
        return await self.complete(
            text,
            model=model,
            system_prompt=self.preset.analysis(kind),
            max_tokens=budget.max_tokens,
            temperature=budget.temperature,
        )


def create_gateway(config: Any) -> LLMGateway:
    """
    Gateway over the first provider that can be built from ``config``.

    Raises:
        MissingApiKeyError: No provider has an API key
    """
    provider = create_provider_with_fallback(config)
    return LLMGateway(
        provider,
        preset=get_preset(config.prompt_preset),
        default_model=config.default_model,
    )
