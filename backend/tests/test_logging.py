"""
Tests for logging helpers and the request logging middleware.
"""

import json
import logging

from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from promptrelay.core.logging_config import (
    JSONFormatter,
    filter_sensitive_data,
    truncate_large_data,
)
from promptrelay.middleware import RequestLoggingMiddleware


class TestLoggingHelpers:
    """Tests for sensitive-data filtering and truncation."""

    def test_filter_nested(self):
        data = {"api_key": "gsk-1", "nested": {"Authorization": "Bearer x", "model": "m"}}
        assert filter_sensitive_data(data) == {
            "api_key": "***FILTERED***",
            "nested": {"Authorization": "***FILTERED***", "model": "m"},
        }

    def test_token_counts_are_kept(self):
        data = {"prompt_tokens": 10, "max_tokens": 100}
        assert filter_sensitive_data(data) == data

    def test_truncate(self):
        assert truncate_large_data("short", max_length=10) == "short"
        assert truncate_large_data("x" * 20, max_length=10).startswith("x" * 10 + "... (truncated")

    def test_json_formatter_extra_fields(self):
        record = logging.LogRecord("promptrelay.test", logging.INFO, __file__, 1, "hello", None, None)
        record.extra_fields = {"session_id": "abc", "password": "pw"}

        payload = json.loads(JSONFormatter().format(record))
        assert payload["message"] == "hello"
        assert payload["level"] == "INFO"
        assert payload["session_id"] == "abc"
        assert payload["password"] == "***FILTERED***"


def _app():
    app = FastAPI()
    app.add_middleware(RequestLoggingMiddleware)

    @app.post("/echo")
    async def echo(body: dict):
        return body

    @app.get("/boom")
    async def boom():
        raise HTTPException(status_code=404, detail="Session not found")

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    return app


class TestRequestLoggingMiddleware:
    """Tests for the request logging middleware."""

    def test_request_id_header(self):
        client = TestClient(_app())
        response = client.post("/echo", json={"a": 1})
        assert response.status_code == 200
        assert response.json() == {"a": 1}
        assert len(response.headers["x-request-id"]) == 12

    def test_logs_completion(self, caplog):
        client = TestClient(_app())
        with caplog.at_level(logging.INFO, logger="promptrelay.middleware.logging_middleware"):
            client.post("/echo", json={"api_key": "secret-value"})

        records = [r for r in caplog.records if "POST /echo - 200" in r.getMessage()]
        assert len(records) == 1
        fields = records[0].extra_fields
        assert fields["status_code"] == 200
        assert "secret-value" not in fields["request_body"]

    def test_error_logged_as_warning(self, caplog):
        client = TestClient(_app())
        with caplog.at_level(logging.INFO, logger="promptrelay.middleware.logging_middleware"):
            client.get("/boom")

        records = [r for r in caplog.records if "GET /boom - 404" in r.getMessage()]
        assert records[0].levelno == logging.WARNING
        assert records[0].extra_fields["error_reason"] == "Session not found"

    def test_excluded_path_not_logged(self, caplog):
        client = TestClient(_app())
        with caplog.at_level(logging.INFO, logger="promptrelay.middleware.logging_middleware"):
            response = client.get("/health")

        assert "x-request-id" not in response.headers
        assert not [r for r in caplog.records if "/health" in r.getMessage()]
