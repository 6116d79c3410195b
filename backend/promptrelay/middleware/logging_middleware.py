"""
FastAPI middleware for logging API requests and responses.

Uses pure ASGI middleware (not BaseHTTPMiddleware) so uploads and
responses pass through unbuffered.

Each request is logged once on completion with method, path, status and
duration. JSON bodies are logged with sensitive keys filtered; multipart
uploads (audio) are logged by size only. A request id is attached to the
response as ``X-Request-ID``.
"""

import json
import logging
import time
import uuid
from typing import Optional
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from ..core.logging_config import filter_sensitive_data, truncate_large_data

logger = logging.getLogger(__name__)

MAX_BODY_LOG_LENGTH = 2000
REQUEST_ID_HEADER = b"x-request-id"


def _summarize_body(data: bytes, content_type: str) -> Optional[str]:
    """Loggable rendering of a body: filtered JSON, truncated text, or a size for binary."""
    if not data:
        return None
    if content_type.startswith("multipart/") or content_type.startswith("audio/"):
        return f"<{len(data)} bytes {content_type.split(';')[0]}>"

    text = data.decode("utf-8", errors="ignore")
    try:
        payload = json.loads(text)
    except json.JSONDecodeError:
        return truncate_large_data(text, max_length=MAX_BODY_LOG_LENGTH)
    filtered = filter_sensitive_data(payload)
    return truncate_large_data(json.dumps(filtered, ensure_ascii=False), max_length=MAX_BODY_LOG_LENGTH)


def _extract_error_reason(body_text: Optional[str]) -> Optional[str]:
    """The ``detail`` of an error response, if there is one."""
    if not body_text:
        return None
    try:
        payload = json.loads(body_text)
    except json.JSONDecodeError:
        return truncate_large_data(body_text, max_length=500)
    if isinstance(payload, dict) and payload.get("detail"):
        return str(payload["detail"])
    return truncate_large_data(body_text, max_length=500)


class RequestLoggingMiddleware:
    """Pure ASGI middleware to log all API requests and responses."""

    def __init__(self, app: ASGIApp, exclude_paths: Optional[list] = None):
        """
        Args:
            app: The ASGI application
            exclude_paths: Paths that are passed through without logging
        """
        self.app = app
        self.exclude_paths = exclude_paths or ["/health", "/"]

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope.get("path", "") in self.exclude_paths:
            await self.app(scope, receive, send)
            return

        start_time = time.time()
        request_id = uuid.uuid4().hex[:12]
        method = scope.get("method", "UNKNOWN")
        path = scope.get("path", "")
        headers = {
            k.decode("latin-1").lower(): v.decode("latin-1")
            for k, v in scope.get("headers", [])
        }
        request_content_type = headers.get("content-type", "")
        client = scope.get("client")

        request_chunks = []

        async def logging_receive() -> Message:
            message = await receive()
            if message["type"] == "http.request":
                request_chunks.append(message.get("body", b""))
            return message

        status_code = 0
        response_content_type = ""
        response_chunks = []

        async def logging_send(message: Message) -> None:
            nonlocal status_code, response_content_type
            if message["type"] == "http.response.start":
                status_code = message.get("status", 0)
                raw_headers = list(message.get("headers", []))
                for k, v in raw_headers:
                    if k.lower() == b"content-type":
                        response_content_type = v.decode("latin-1")
                raw_headers.append((REQUEST_ID_HEADER, request_id.encode("latin-1")))
                message = {**message, "headers": raw_headers}
            elif message["type"] == "http.response.body":
                response_chunks.append(message.get("body", b""))
            await send(message)

        try:
            await self.app(scope, logging_receive, logging_send)
        except Exception as e:
            logger.error(
                f"Request failed: {method} {path} - {e}",
                exc_info=True,
                extra={"extra_fields": {
                    "request_id": request_id,
                    "method": method,
                    "path": path,
                    "duration_ms": round((time.time() - start_time) * 1000, 2),
                    "error": str(e),
                }}
            )
            raise

        duration_ms = round((time.time() - start_time) * 1000, 2)
        request_body = _summarize_body(b"".join(request_chunks), request_content_type)
        response_body = _summarize_body(b"".join(response_chunks), response_content_type)
        error_reason = _extract_error_reason(response_body) if status_code >= 400 else None

        if status_code < 400:
            log_level = logging.INFO
        elif status_code < 500:
            log_level = logging.WARNING
        else:
            log_level = logging.ERROR

        message = f"{method} {path} - {status_code} ({duration_ms:.2f}ms)"
        if error_reason:
            message += f" | {error_reason}"

        logger.log(
            log_level,
            message,
            extra={"extra_fields": {
                "request_id": request_id,
                "method": method,
                "path": path,
                "query": scope.get("query_string", b"").decode("utf-8", errors="ignore") or None,
                "client": client[0] if client else None,
                "status_code": status_code,
                "duration_ms": duration_ms,
                "request_body": request_body,
                "response_body": response_body if logger.isEnabledFor(logging.DEBUG) else None,
                "error_reason": error_reason,
            }}
        )
