"""
Speech-to-Text Transcription Service using an OpenAI-compatible Whisper endpoint.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, List, Optional

import openai
from openai import AsyncOpenAI

from ..core.exceptions import ApiError, MissingApiKeyError
from ..llm.openai_compatible import extract_error_message

logger = logging.getLogger(__name__)

MIME_TYPES = {
    "mp3": "audio/mpeg",
    "wav": "audio/wav",
    "webm": "audio/webm",
    "ogg": "audio/ogg",
    "m4a": "audio/m4a",
    "flac": "audio/flac",
    "mp4": "audio/mp4",
}


def supported_formats() -> List[str]:
    """File extensions accepted for transcription."""
    return list(MIME_TYPES)


def file_extension(file_name: str) -> str:
    return file_name.rsplit(".", 1)[-1].lower() if "." in file_name else ""


def mime_type_for(file_name: str) -> str:
    return MIME_TYPES.get(file_extension(file_name), "application/octet-stream")


@dataclass
class SttResult:
    text: str
    model: str
    language: Optional[str] = None
    duration: Optional[float] = None


class TranscriptionService:
    """
    Transcribes audio files through the provider's ``/audio/transcriptions`` endpoint.
    """

    def __init__(self, api_key: Optional[str], base_url: str,
                 model: str = "whisper-large-v3-turbo", timeout: float = 60.0):
        """
        Args:
            api_key: Provider API key. Without one every call raises MissingApiKeyError.
            base_url: OpenAI-compatible API root
            model: Whisper model name
            timeout: Upper bound for one upload, in seconds
        """
        self.model = model
        if api_key:
            self.client: Optional[AsyncOpenAI] = AsyncOpenAI(
                api_key=api_key, base_url=base_url, timeout=timeout
            )
        else:
            self.client = None

    @classmethod
    def from_settings(cls, config: Any) -> "TranscriptionService":
        return cls(
            api_key=config.groq_api_key,
            base_url=config.groq_base_url,
            model=config.stt_model,
            timeout=max(config.llm_timeout_seconds, 60.0),
        )

    def is_configured(self) -> bool:
        return self.client is not None

    async def transcribe(
        self,
        audio_data: bytes,
        file_name: str = "audio.wav",
        language: Optional[str] = None,
    ) -> SttResult:
        """
        Transcribe an audio file.

        Args:
            audio_data: Raw audio bytes
            file_name: Original file name, used for the format hint
            language: ISO 639-1 code; auto-detected when omitted

        Raises:
            MissingApiKeyError: STT provider not configured
            ApiError: upstream failure or timeout
        """
        if self.client is None:
            raise MissingApiKeyError("groq")

        start_time = time.time()
        params = {
            "model": self.model,
            "file": (file_name, audio_data, mime_type_for(file_name)),
            "response_format": "verbose_json",
        }
        if language:
            params["language"] = language

        try:
            response = await self.client.audio.transcriptions.create(**params)
        except openai.APITimeoutError as e:
            raise ApiError("Transcription request timed out", timed_out=True) from e
        except openai.APIStatusError as e:
            message = extract_error_message(e.response.text)
            logger.error(f"Transcription failed: HTTP {e.status_code}: {message}")
            raise ApiError(message, status_code=e.status_code,
                           retryable=e.status_code == 429 or e.status_code >= 500) from e
        except openai.OpenAIError as e:
            logger.error(f"Transcription failed: {e}", exc_info=True)
            raise ApiError(f"Transcription failed: {e}", retryable=True) from e

        result = SttResult(
            text=response.text,
            model=self.model,
            language=getattr(response, "language", None),
            duration=getattr(response, "duration", None),
        )
        logger.info(
            "Transcription completed",
            extra={"extra_fields": {
                "model": self.model,
                "file_name": file_name,
                "bytes": len(audio_data),
                "language": result.language,
                "duration_ms": round((time.time() - start_time) * 1000, 2),
            }}
        )
        return result
