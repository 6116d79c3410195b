"""Core module - logging setup and the shared exception taxonomy."""

from .exceptions import (
    PromptRelayError,
    MissingApiKeyError,
    ApiError,
    InvalidResponseError,
    StoreError,
    CacheError,
    InvalidIdError,
    NotFoundError,
    SessionNotFoundError,
)
from .logging_config import setup_logging

__all__ = [
    'PromptRelayError', 'MissingApiKeyError', 'ApiError', 'InvalidResponseError',
    'StoreError', 'CacheError', 'InvalidIdError', 'NotFoundError', 'SessionNotFoundError',
    'setup_logging',
]
