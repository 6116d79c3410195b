"""
Translate application errors into HTTP responses.
"""

import logging

from fastapi import HTTPException, status

from ..core.exceptions import (
    ApiError,
    InvalidIdError,
    InvalidResponseError,
    MissingApiKeyError,
    NotFoundError,
    PromptRelayError,
    StoreError,
)

logger = logging.getLogger(__name__)


def http_error(exc: PromptRelayError) -> HTTPException:
    """
    Map a domain exception onto an ``HTTPException``; the body is ``{"detail": message}``.
    """
    if isinstance(exc, InvalidIdError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, MissingApiKeyError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, ApiError):
        logger.warning(f"Upstream API error: {exc.message} (status={exc.status_code})")
        code = status.HTTP_504_GATEWAY_TIMEOUT if exc.timed_out else status.HTTP_502_BAD_GATEWAY
        return HTTPException(status_code=code, detail=exc.message)
    if isinstance(exc, InvalidResponseError):
        logger.warning(f"Unusable upstream response: {exc}")
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))
    if isinstance(exc, StoreError):
        return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))

    logger.error(f"Unhandled application error: {exc}", exc_info=exc)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
