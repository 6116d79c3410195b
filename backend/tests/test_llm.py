"""
Unit tests for the LLM module.
Tests messages, OpenAI-compatible providers, and the factory.
"""

import pytest
import httpx
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

from promptrelay.core.exceptions import ApiError, InvalidResponseError, MissingApiKeyError
from promptrelay.llm.base import LLMMessage, LLMResponse
from promptrelay.llm.openai_compatible import (
    GroqProvider,
    OpenRouterProvider,
    extract_error_message,
)
from promptrelay.llm.factory import create_llm_provider, create_provider_with_fallback


def _config(**overrides):
    values = dict(
        llm_primary_provider="groq",
        groq_api_key="groq-key",
        groq_base_url="https://api.groq.com/openai/v1",
        openrouter_api_key="or-key",
        openrouter_base_url="https://openrouter.ai/api/v1",
        openrouter_referer="https://promptrelay.app",
        openrouter_title="PromptRelay",
        llm_timeout_seconds=30.0,
    )
    values.update(overrides)
    return SimpleNamespace(**values)


def _mock_client(mock_client, response=None, side_effect=None):
    mock_instance = AsyncMock()
    if side_effect is not None:
        mock_instance.post.side_effect = side_effect
    else:
        mock_instance.post.return_value = response
    mock_instance.__aenter__ = AsyncMock(return_value=mock_instance)
    mock_instance.__aexit__ = AsyncMock(return_value=False)
    mock_client.return_value = mock_instance
    return mock_instance


class TestLLMMessage:
    """Tests for LLMMessage and LLMResponse dataclasses."""

    def test_text_message(self):
        msg = LLMMessage.text("user", "Hello")
        assert msg.role == "user"
        assert msg.content == "Hello"

    def test_response_defaults(self):
        resp = LLMResponse(content="Hi")
        assert resp.usage is None
        assert resp.raw is None


class TestErrorMessage:
    """Tests for upstream error body parsing."""

    def test_nested_message(self):
        assert extract_error_message('{"error": {"message": "invalid key"}}') == "invalid key"

    def test_raw_body_fallback(self):
        assert extract_error_message("Bad Gateway") == "Bad Gateway"

    def test_json_without_error(self):
        assert extract_error_message('{"detail": "x"}') == '{"detail": "x"}'


class TestGroqProvider:
    """Tests for the Groq provider."""

    def test_init_defaults(self):
        provider = GroqProvider(api_key="test-key")
        assert provider.model == "llama-3.1-8b-instant"
        assert provider.base_url == "https://api.groq.com/openai/v1"

    def test_headers(self):
        headers = GroqProvider(api_key="gsk-test")._get_headers()
        assert headers["Authorization"] == "Bearer gsk-test"
        assert headers["Content-Type"] == "application/json"
        assert "X-Title" not in headers

    def test_format_messages(self):
        provider = GroqProvider(api_key="test")
        formatted = provider._format_messages([
            LLMMessage.text("system", "sys prompt"),
            LLMMessage.text("user", "hello"),
        ])
        assert formatted == [
            {"role": "system", "content": "sys prompt"},
            {"role": "user", "content": "hello"},
        ]

    @pytest.mark.asyncio
    async def test_chat_completion_success(self):
        provider = GroqProvider(api_key="test-key")
        response = httpx.Response(200, json={
            "id": "cmpl-1",
            "choices": [{"message": {"role": "assistant", "content": "Test response"}}],
            "model": "llama-3.1-8b-instant",
            "usage": {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15},
        })

        with patch("httpx.AsyncClient") as mock_client:
            instance = _mock_client(mock_client, response)

            result = await provider.chat_completion(
                [LLMMessage.text("user", "Hello")], max_tokens=100, temperature=0.2
            )

            assert result.content == "Test response"
            assert result.id == "cmpl-1"
            assert result.usage.total_tokens == 15

            url = instance.post.call_args.args[0]
            payload = instance.post.call_args.kwargs["json"]
            assert url == "https://api.groq.com/openai/v1/chat/completions"
            assert payload["max_tokens"] == 100
            assert payload["temperature"] == 0.2

    @pytest.mark.asyncio
    async def test_optional_params_omitted(self):
        provider = GroqProvider(api_key="test-key")
        response = httpx.Response(200, json={"choices": [{"message": {"content": "ok"}}]})

        with patch("httpx.AsyncClient") as mock_client:
            instance = _mock_client(mock_client, response)
            result = await provider.chat_completion([LLMMessage.text("user", "Hi")])

            payload = instance.post.call_args.kwargs["json"]
            assert "max_tokens" not in payload
            assert "temperature" not in payload
            assert result.usage is None

    @pytest.mark.asyncio
    async def test_null_content_becomes_empty(self):
        provider = GroqProvider(api_key="test-key")
        response = httpx.Response(200, json={"choices": [{"message": {"content": None}}]})

        with patch("httpx.AsyncClient") as mock_client:
            _mock_client(mock_client, response)
            result = await provider.chat_completion([LLMMessage.text("user", "Hi")])
            assert result.content == ""

    @pytest.mark.asyncio
    async def test_unauthorized_error_message(self):
        provider = GroqProvider(api_key="bad-key")
        response = httpx.Response(401, json={"error": {"message": "invalid key"}})

        with patch("httpx.AsyncClient") as mock_client:
            _mock_client(mock_client, response)
            with pytest.raises(ApiError) as exc_info:
                await provider.chat_completion([LLMMessage.text("user", "Hi")])

        assert str(exc_info.value) == "invalid key"
        assert exc_info.value.status_code == 401
        assert exc_info.value.retryable is False

    @pytest.mark.asyncio
    async def test_rate_limit_is_retryable(self):
        provider = GroqProvider(api_key="key")
        response = httpx.Response(429, text="slow down")

        with patch("httpx.AsyncClient") as mock_client:
            _mock_client(mock_client, response)
            with pytest.raises(ApiError) as exc_info:
                await provider.chat_completion([LLMMessage.text("user", "Hi")])

        assert exc_info.value.message == "slow down"
        assert exc_info.value.retryable is True

    @pytest.mark.asyncio
    async def test_no_choices(self):
        provider = GroqProvider(api_key="key")
        response = httpx.Response(200, json={"choices": []})

        with patch("httpx.AsyncClient") as mock_client:
            _mock_client(mock_client, response)
            with pytest.raises(InvalidResponseError, match="No choices"):
                await provider.chat_completion([LLMMessage.text("user", "Hi")])

    @pytest.mark.asyncio
    async def test_malformed_usage(self):
        provider = GroqProvider(api_key="key")
        response = httpx.Response(200, json={
            "choices": [{"message": {"content": "Hello"}}],
            "usage": {"prompt_tokens": None, "completion_tokens": 2, "total_tokens": 2},
        })

        with patch("httpx.AsyncClient") as mock_client:
            _mock_client(mock_client, response)
            with pytest.raises(InvalidResponseError, match="Malformed usage"):
                await provider.chat_completion([LLMMessage.text("user", "Hi")])

    @pytest.mark.asyncio
    async def test_timeout(self):
        provider = GroqProvider(api_key="key", timeout=5.0)

        with patch("httpx.AsyncClient") as mock_client:
            _mock_client(mock_client, side_effect=httpx.ReadTimeout("timed out"))
            with pytest.raises(ApiError) as exc_info:
                await provider.chat_completion([LLMMessage.text("user", "Hi")])

        assert exc_info.value.timed_out is True
        assert exc_info.value.retryable is True
        mock_client.assert_called_once_with(timeout=5.0)

    @pytest.mark.asyncio
    async def test_connection_error(self):
        provider = GroqProvider(api_key="key")

        with patch("httpx.AsyncClient") as mock_client:
            _mock_client(mock_client, side_effect=httpx.ConnectError("refused"))
            with pytest.raises(ApiError) as exc_info:
                await provider.chat_completion([LLMMessage.text("user", "Hi")])

        assert exc_info.value.timed_out is False
        assert exc_info.value.retryable is True


class TestOpenRouterProvider:
    """Tests for the OpenRouter provider."""

    def test_init_defaults(self):
        provider = OpenRouterProvider(api_key="test-key")
        assert provider.model == "nvidia/nemotron-3-nano-30b-a3b:free"
        assert provider.base_url == "https://openrouter.ai/api/v1"

    def test_attribution_headers(self):
        provider = OpenRouterProvider(api_key="k", referer="https://example.org", title="Relay")
        headers = provider._get_headers()
        assert headers["HTTP-Referer"] == "https://example.org"
        assert headers["X-Title"] == "Relay"
        assert headers["Authorization"] == "Bearer k"


class TestLLMFactory:
    """Tests for the provider factory and construction-time fallback."""

    def test_create_groq_provider(self):
        provider = create_llm_provider(provider="groq", api_key="key", model="llama-3.3-70b")
        assert isinstance(provider, GroqProvider)
        assert provider.model == "llama-3.3-70b"

    def test_create_openrouter_provider(self):
        provider = create_llm_provider(provider="openrouter", api_key="key")
        assert isinstance(provider, OpenRouterProvider)

    def test_no_api_key_raises(self):
        with pytest.raises(MissingApiKeyError):
            create_llm_provider(provider="groq", api_key="")

    def test_unsupported_provider_raises(self):
        with pytest.raises(ValueError, match="Unsupported"):
            create_llm_provider(provider="unsupported", api_key="key")

    def test_custom_base_url(self):
        provider = create_llm_provider(
            provider="groq", api_key="key", base_url="https://custom.api.com/v1/"
        )
        assert provider.base_url == "https://custom.api.com/v1"

    def test_primary_provider_used(self):
        provider = create_provider_with_fallback(_config())
        assert isinstance(provider, GroqProvider)
        assert provider.api_key == "groq-key"

    def test_falls_back_when_primary_has_no_key(self):
        provider = create_provider_with_fallback(_config(groq_api_key=None))
        assert isinstance(provider, OpenRouterProvider)
        assert provider.api_key == "or-key"

    def test_openrouter_primary(self):
        provider = create_provider_with_fallback(_config(llm_primary_provider="openrouter"))
        assert isinstance(provider, OpenRouterProvider)

    def test_no_keys_at_all(self):
        with pytest.raises(MissingApiKeyError):
            create_provider_with_fallback(_config(groq_api_key="", openrouter_api_key=None))

    def test_timeout_from_config(self):
        provider = create_provider_with_fallback(_config(llm_timeout_seconds=12.5))
        assert provider.timeout == 12.5
