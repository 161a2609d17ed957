"""Transcription through an OpenAI-compatible speech-to-text API."""

from __future__ import annotations

from pathlib import Path

import openai

from recapkit.config import TranscriptionConfig
from recapkit.transcription.base import Transcriber, TranscriptionError, validate_audio_file
from recapkit.transcription.models import TranscriptResult


def _base_url(host: str) -> str:
    if host.endswith("/v1"):
        return host
    return host.rstrip("/") + "/v1"


class OpenAITranscriber(Transcriber):
    """Transcribes audio with Whisper via the OpenAI API (or a compatible server)."""

    def __init__(self, config: TranscriptionConfig) -> None:
        self._config = config
        self._client: openai.OpenAI | None = None

    def _get_client(self) -> openai.OpenAI:
        if not self._config.api_key:
            raise TranscriptionError(
                "OpenAI API key not configured. Set OPENAI_API_KEY or api_key under [transcription]."
            )
        if self._client is None:
            self._client = openai.OpenAI(
                base_url=_base_url(self._config.host),
                api_key=self._config.api_key,
                max_retries=self._config.max_retries,
            )
        return self._client

    def transcribe(self, audio_path: Path) -> TranscriptResult:
        validate_audio_file(audio_path, self._config.max_file_mb)
        client = self._get_client()

        kwargs = {}
        if self._config.language:
            kwargs["language"] = self._config.language
        if self._config.prompt:
            kwargs["prompt"] = self._config.prompt

        try:
            with open(audio_path, "rb") as f:
                response = client.audio.transcriptions.create(
                    file=f,
                    model=self._config.model,
                    response_format="verbose_json",
                    temperature=self._config.temperature,
                    **kwargs,
                )
        except openai.AuthenticationError as e:
            raise TranscriptionError(
                "OpenAI API key was rejected. Check the configured api_key."
            ) from e
        except openai.RateLimitError as e:
            if "quota" in str(e).lower():
                raise TranscriptionError(
                    "API quota exceeded. Please check your OpenAI billing settings."
                ) from e
            raise TranscriptionError("Too many requests. Please wait a moment and try again.") from e
        except openai.APIConnectionError as e:
            raise TranscriptionError(
                f"Could not reach the transcription service at {self._config.host}."
            ) from e
        except openai.APIError as e:
            raise TranscriptionError(f"Failed to transcribe audio: {e}") from e

        return TranscriptResult.from_dict(response.model_dump())
