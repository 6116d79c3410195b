"""LLM module - provides unified interface for chat-completion providers."""

from .base import LLMProvider, LLMMessage, LLMResponse
from .openai_compatible import OpenAICompatibleProvider, GroqProvider, OpenRouterProvider
from .factory import create_llm_provider, create_provider_with_fallback
from .prompts import SuggestionType, AnalysisType, PromptPreset, get_preset
from .gateway import LLMGateway, create_gateway

__all__ = [
    'LLMProvider',
    'LLMMessage',
    'LLMResponse',
    'OpenAICompatibleProvider',
    'GroqProvider',
    'OpenRouterProvider',
    'create_llm_provider',
    'create_provider_with_fallback',
    'SuggestionType',
    'AnalysisType',
    'PromptPreset',
    'get_preset',
    'LLMGateway',
    'create_gateway',
]
