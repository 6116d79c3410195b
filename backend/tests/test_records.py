"""
Unit tests for the record stores and the speech-to-text service.
"""

import pytest
import httpx
import openai
from datetime import timedelta
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from promptrelay.core.exceptions import ApiError, InvalidIdError, MissingApiKeyError
from promptrelay.models import AICompletion, SttTranscription, Transcription
from promptrelay.services.transcription import (
    TranscriptionService,
    file_extension,
    mime_type_for,
    supported_formats,
)
from promptrelay.storage import CompletionStore, SttTranscriptionStore, TranscriptionStore

MISSING_ID = "64b7f0c2a1b2c3d4e5f60718"
TRANSCRIBE_URL = "https://api.groq.com/openai/v1/audio/transcriptions"


class TestRecordStores:
    """Tests for the write-once record façades."""

    @pytest.mark.asyncio
    async def test_create_and_find(self, documents):
        store = TranscriptionStore(documents)
        record_id = await store.create(Transcription(text="hello", source="mic"))

        record = await store.find_by_id(record_id)
        assert record.id == record_id
        assert record.text == "hello"
        assert record.source == "mic"

    @pytest.mark.asyncio
    async def test_find_missing(self, documents):
        assert await CompletionStore(documents).find_by_id(MISSING_ID) is None

    @pytest.mark.asyncio
    async def test_invalid_id(self, documents):
        with pytest.raises(InvalidIdError):
            await CompletionStore(documents).delete("xyz")

    @pytest.mark.asyncio
    async def test_find_recent_newest_first(self, documents):
        store = CompletionStore(documents)
        older = AICompletion(prompt="a", model="m", response="r", request_type="complete")
        newer = AICompletion(
            prompt="b", model="m", response="r", request_type="suggest",
            created_at=older.created_at + timedelta(seconds=5),
        )
        await store.create(older)
        await store.create(newer)

        recent = await store.find_recent(limit=50)
        assert [r.prompt for r in recent] == ["b", "a"]
        assert await store.count() == 2

    @pytest.mark.asyncio
    async def test_delete(self, documents):
        store = TranscriptionStore(documents)
        record_id = await store.create(Transcription(text="bye"))

        assert await store.delete(record_id) is True
        assert await store.delete(record_id) is False

    @pytest.mark.asyncio
    async def test_stt_find_by_session(self, documents):
        store = SttTranscriptionStore(documents)
        await store.create(SttTranscription(text="one", model="w", session_id="s1"))
        await store.create(SttTranscription(text="two", model="w", session_id="s2"))

        records = await store.find_by_session("s1")
        assert [r.text for r in records] == ["one"]
        assert await store.count_by_session("s1") == 1
        assert await store.count_by_session("s3") == 0


class TestFormats:
    """Tests for audio format helpers."""

    def test_supported_formats(self):
        assert supported_formats() == ["mp3", "wav", "webm", "ogg", "m4a", "flac", "mp4"]

    def test_extension(self):
        assert file_extension("Talk.MP3") == "mp3"
        assert file_extension("noext") == ""

    def test_mime_type(self):
        assert mime_type_for("a.webm") == "audio/webm"
        assert mime_type_for("a.xyz") == "application/octet-stream"


class TestTranscriptionService:
    """Tests for the Whisper client wrapper."""

    def _service(self, create):
        service = TranscriptionService(api_key="gsk-test", base_url="https://api.groq.com/openai/v1")
        service.client = MagicMock()
        service.client.audio.transcriptions.create = create
        return service

    @pytest.mark.asyncio
    async def test_transcribe_success(self):
        create = AsyncMock(return_value=SimpleNamespace(text="hello world", language="en", duration=1.5))
        service = self._service(create)

        result = await service.transcribe(b"RIFF....", "clip.wav", language="en")

        assert result.text == "hello world"
        assert result.language == "en"
        assert result.duration == 1.5
        assert result.model == "whisper-large-v3-turbo"

        kwargs = create.call_args.kwargs
        assert kwargs["response_format"] == "verbose_json"
        assert kwargs["language"] == "en"
        assert kwargs["file"] == ("clip.wav", b"RIFF....", "audio/wav")

    @pytest.mark.asyncio
    async def test_language_omitted(self):
        create = AsyncMock(return_value=SimpleNamespace(text="hi"))
        service = self._service(create)

        result = await service.transcribe(b"data", "clip.mp3")

        assert "language" not in create.call_args.kwargs
        assert result.language is None
        assert result.duration is None

    @pytest.mark.asyncio
    async def test_missing_key(self):
        service = TranscriptionService(api_key=None, base_url="https://api.groq.com/openai/v1")
        assert service.is_configured() is False
        with pytest.raises(MissingApiKeyError):
            await service.transcribe(b"data", "clip.wav")

    @pytest.mark.asyncio
    async def test_upstream_error(self):
        request = httpx.Request("POST", TRANSCRIBE_URL)
        response = httpx.Response(400, json={"error": {"message": "file too short"}}, request=request)
        create = AsyncMock(side_effect=openai.BadRequestError("bad", response=response, body=None))
        service = self._service(create)

        with pytest.raises(ApiError) as exc_info:
            await service.transcribe(b"data", "clip.wav")

        assert exc_info.value.message == "file too short"
        assert exc_info.value.status_code == 400
        assert exc_info.value.retryable is False

    @pytest.mark.asyncio
    async def test_timeout(self):
        request = httpx.Request("POST", TRANSCRIBE_URL)
        create = AsyncMock(side_effect=openai.APITimeoutError(request=request))
        service = self._service(create)

        with pytest.raises(ApiError) as exc_info:
            await service.transcribe(b"data", "clip.wav")
        assert exc_info.value.timed_out is True

    def test_from_settings(self):
        config = SimpleNamespace(
            groq_api_key="gsk-test",
            groq_base_url="https://api.groq.com/openai/v1",
            stt_model="whisper-large-v3",
            llm_timeout_seconds=30.0,
        )
        service = TranscriptionService.from_settings(config)
        assert service.is_configured()
        assert service.model == "whisper-large-v3"
