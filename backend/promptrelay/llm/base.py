"""
LLM Provider Base - Abstract base for all chat-completion providers.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional, List
from dataclasses import dataclass

from ..models.ai import Usage


@dataclass
class LLMMessage:
    """A message in a chat-completion request."""
    role: str  # "system", "user", "assistant"
    content: str

    @staticmethod
    def text(role: str, text: str) -> "LLMMessage":
        """Create a text message."""
        return LLMMessage(role=role, content=text)


@dataclass
class LLMResponse:
    """Result of a chat completion."""
    content: str
    id: str = ""
    model: str = ""
    usage: Optional[Usage] = None  # None when the provider reports no usage
    raw: Optional[Dict[str, Any]] = None


class LLMProvider(ABC):
    """
    Abstract base class for chat-completion providers.
    Construction requires an API key; a provider without one cannot exist.
    """

    name: str = "base"

    def __init__(self, api_key: str, model: str, base_url: str, timeout: float = 30.0):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @abstractmethod
    async def chat_completion(
        self,
        messages: List[LLMMessage],
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> LLMResponse:
        """
        Send a chat completion request.

        Args:
            messages: Conversation messages, system message first if any
            model: Model override (provider default if None)
            temperature: Sampling temperature, omitted from the request if None
            max_tokens: Completion cap, omitted from the request if None

        Returns:
            LLMResponse with the first choice's content

        Raises:
            ApiError: upstream rejected the request, failed or timed out
            InvalidResponseError: upstream answered without a usable choice
        """
        pass

    def _format_messages(self, messages: List[LLMMessage]) -> List[Dict[str, Any]]:
        """Convert LLMMessage list to API-compatible format."""
        return [{"role": m.role, "content": m.content} for m in messages]
