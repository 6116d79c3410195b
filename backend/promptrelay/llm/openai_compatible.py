"""
OpenAI-compatible chat-completion providers (Groq, OpenRouter).

Both vendors expose ``POST {base_url}/chat/completions`` with bearer auth and
the OpenAI request/response shape; they differ in base URL, default model and
the extra headers OpenRouter asks callers to send.
"""

import httpx
import json
import logging
import time
from typing import Optional, List, Dict, Any
from pydantic import ValidationError

from .base import LLMProvider, LLMMessage, LLMResponse
from ..core.exceptions import ApiError, InvalidResponseError
from ..models.ai import Usage

logger = logging.getLogger(__name__)


def extract_error_message(body: str) -> str:
    """Message from an ``{"error": {"message": ...}}`` body, else the raw body."""
    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, TypeError):
        return body
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return error["message"]
    return body


class OpenAICompatibleProvider(LLMProvider):
    """Chat completions over the OpenAI wire format."""

    name = "openai-compatible"

    def __init__(self, api_key: str, model: str, base_url: str, timeout: float = 30.0,
                 extra_headers: Optional[Dict[str, str]] = None):
        super().__init__(api_key, model, base_url, timeout)
        self.extra_headers = dict(extra_headers or {})

    def _get_headers(self) -> Dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        headers.update(self.extra_headers)
        return headers

    async def chat_completion(
        self,
        messages: List[LLMMessage],
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> LLMResponse:
        """Send request to the Chat Completions endpoint."""
        start_time = time.time()
        url = f"{self.base_url}/chat/completions"
        payload: Dict[str, Any] = {
            "model": model or self.model,
            "messages": self._format_messages(messages),
        }
        if max_tokens is not None:
            payload["max_tokens"] = max_tokens
        if temperature is not None:
            payload["temperature"] = temperature

        if logger.isEnabledFor(logging.DEBUG):
            first_msg = messages[0].content[:200] if messages else ""
            logger.debug(
                f"LLM API call starting: provider={self.name}, model={payload['model']}, "
                f"{len(messages)} messages, first: {first_msg}"
            )

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.post(url, json=payload, headers=self._get_headers())
        except httpx.TimeoutException as e:
            self._log_failure(payload, start_time, f"timeout after {self.timeout}s")
            raise ApiError(
                f"{self.name} request timed out after {self.timeout}s", timed_out=True
            ) from e
        except httpx.HTTPError as e:
            self._log_failure(payload, start_time, str(e))
            raise ApiError(f"{self.name} request failed: {e}", retryable=True) from e

        if not resp.is_success:
            message = extract_error_message(resp.text)
            self._log_failure(payload, start_time, f"HTTP {resp.status_code}: {message}")
            raise ApiError(
                message,
                status_code=resp.status_code,
                retryable=resp.status_code == 429 or resp.status_code >= 500,
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise InvalidResponseError(f"{self.name} returned a non-JSON body") from e

        choices = data.get("choices") if isinstance(data, dict) else None
        if not choices:
            raise InvalidResponseError("No choices in response")
        try:
            content = choices[0]["message"]["content"] or ""
        except (KeyError, TypeError, IndexError) as e:
            raise InvalidResponseError("Malformed choice in response") from e

        try:
            usage = Usage.model_validate(data["usage"]) if data.get("usage") else None
        except ValidationError as e:
            raise InvalidResponseError("Malformed usage in response") from e
        duration_ms = (time.time() - start_time) * 1000

        logger.info(
            "LLM API call completed",
            extra={"extra_fields": {
                "provider": self.name,
                "model": data.get("model", payload["model"]),
                "prompt_tokens": usage.prompt_tokens if usage else None,
                "completion_tokens": usage.completion_tokens if usage else None,
                "total_tokens": usage.total_tokens if usage else None,
                "duration_ms": round(duration_ms, 2),
            }}
        )

        return LLMResponse(
            id=data.get("id", ""),
            content=content,
            model=data.get("model", payload["model"]),
            usage=usage,
            raw=data,
        )

    def _log_failure(self, payload: Dict[str, Any], start_time: float, error: str) -> None:
        duration_ms = (time.time() - start_time) * 1000
        logger.error(
            f"LLM API call failed: {error}",
            extra={"extra_fields": {
                "provider": self.name,
                "model": payload.get("model"),
                "duration_ms": round(duration_ms, 2),
                "error": error,
            }}
        )


class GroqProvider(OpenAICompatibleProvider):
    """Groq: the low-latency option."""

    name = "groq"

    def __init__(
        self,
        api_key: str,
        model: str = "llama-3.1-8b-instant",
        base_url: str = "https://api.groq.com/openai/v1",
        timeout: float = 30.0,
    ):
        super().__init__(api_key, model, base_url, timeout)


class OpenRouterProvider(OpenAICompatibleProvider):
    """OpenRouter. Its terms ask callers to identify the app via two headers."""

    name = "openrouter"

    def __init__(
        self,
        api_key: str,
        model: str = "nvidia/nemotron-3-nano-30b-a3b:free",
        base_url: str = "https://openrouter.ai/api/v1",
        timeout: float = 30.0,
        referer: str = "https://promptrelay.app",
        title: str = "PromptRelay",
    ):
        super().__init__(
            api_key, model, base_url, timeout,
            extra_headers={"HTTP-Referer": referer, "X-Title": title},
        )
