"""
LLM Provider Factory - Creates provider instances from configuration.
"""

import logging
from typing import Any, Dict, Optional, Type

from .base import LLMProvider
from .openai_compatible import GroqProvider, OpenRouterProvider
from ..core.exceptions import MissingApiKeyError

logger = logging.getLogger(__name__)

PROVIDERS: Dict[str, Type[LLMProvider]] = {
    "groq": GroqProvider,
    "openrouter": OpenRouterProvider,
}


def create_llm_provider(
    provider: str = "groq",
    api_key: Optional[str] = None,
    model: Optional[str] = None,
    base_url: Optional[str] = None,
    **kwargs
) -> LLMProvider:
    """
    Create an LLM provider instance.

    Args:
        provider: Provider name ("groq" or "openrouter")
        api_key: API key for the provider
        model: Model name (uses provider default if not specified)
        base_url: Custom base URL (uses provider default if not specified)
        **kwargs: Additional provider-specific parameters

    Returns:
        LLMProvider instance

    Raises:
        ValueError: Unknown provider name
        MissingApiKeyError: No API key for the provider
    """
    provider_cls = PROVIDERS.get(provider)
    if provider_cls is None:
        raise ValueError(f"Unsupported LLM provider: {provider}")
    if not api_key:
        raise MissingApiKeyError(provider)

    params: Dict[str, Any] = {"api_key": api_key}
    if model:
        params["model"] = model
    if base_url:
        params["base_url"] = base_url
    params.update(kwargs)
    return provider_cls(**params)


def provider_from_settings(provider: str, config: Any) -> LLMProvider:
    """Build the named provider from its profile in application settings."""
    if provider == "groq":
        return create_llm_provider(
            "groq",
            api_key=config.groq_api_key,
            base_url=config.groq_base_url,
            timeout=config.llm_timeout_seconds,
        )
    if provider == "openrouter":
        return create_llm_provider(
            "openrouter",
            api_key=config.openrouter_api_key,
            base_url=config.openrouter_base_url,
            timeout=config.llm_timeout_seconds,
            referer=config.openrouter_referer,
            title=config.openrouter_title,
        )
    raise ValueError(f"Unsupported LLM provider: {provider}")


def create_provider_with_fallback(config: Any) -> LLMProvider:
    """
    Build the primary provider, or the other one if the primary has no key.

    Fallback happens here, at construction time only. A call that fails at
    runtime is not retried on the other provider.

    Raises:
        MissingApiKeyError: Neither provider is configured
    """
    primary = config.llm_primary_provider
    if primary not in PROVIDERS:
        raise ValueError(f"Unsupported LLM provider: {primary}")
    order = [primary] + [name for name in PROVIDERS if name != primary]

    for name in order:
        try:
            provider = provider_from_settings(name, config)
        except MissingApiKeyError:
            logger.warning(f"LLM provider '{name}' has no API key, trying next")
            continue
        if name != primary:
            logger.info(f"Falling back to LLM provider '{name}'")
        return provider

    raise MissingApiKeyError(" or ".join(order))
