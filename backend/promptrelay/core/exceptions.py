"""
Exception taxonomy shared by the stores, the LLM gateway and the API layer.
"""

from typing import Optional


class PromptRelayError(Exception):
    """Base class for all application errors."""


class MissingApiKeyError(PromptRelayError):
    """A provider was requested but its API key is not configured."""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"Missing API key for provider '{provider}'")


class ApiError(PromptRelayError):
    """An upstream API rejected the request or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None,
                 retryable: bool = False, timed_out: bool = False):
        self.message = message
        self.status_code = status_code
        self.retryable = retryable or timed_out
        self.timed_out = timed_out
        super().__init__(message)


class InvalidResponseError(PromptRelayError):
    """An upstream API answered successfully but the payload is unusable."""


class StoreError(PromptRelayError):
    """The document store failed to complete an operation."""


class CacheError(PromptRelayError):
    """The cache failed. Callers treat this as a miss, never as fatal."""


class InvalidIdError(PromptRelayError, ValueError):
    """An identifier is not in the document store's id format."""

    def __init__(self, value: str):
        self.value = value
        super().__init__("Invalid ID format")


class NotFoundError(PromptRelayError):
    """A requested record does not exist."""


class SessionNotFoundError(NotFoundError):
    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__("Session not found")
