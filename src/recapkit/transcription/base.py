"""Abstract base class for transcribers."""

from __future__ import annotations

import abc
from pathlib import Path

from recapkit.transcription.models import TranscriptResult

SUPPORTED_EXTENSIONS = ("mp3", "mpeg", "mpga", "wav", "m4a", "mp4", "webm")


class TranscriptionError(Exception):
    """A transcription failed; the message is meant for the user."""


def validate_audio_file(audio_path: Path, max_size_mb: int = 25) -> None:
    """Reject files the speech-to-text API would refuse anyway."""
    if not audio_path.is_file():
        raise TranscriptionError(f"File not found: {audio_path}")

    suffix = audio_path.suffix.lower().lstrip(".")
    if suffix not in SUPPORTED_EXTENSIONS:
        raise TranscriptionError(
            "Unsupported file type. Please upload MP3, WAV, M4A, MP4, or WebM files."
        )

    if audio_path.stat().st_size > max_size_mb * 1024 * 1024:
        raise TranscriptionError(
            f"File too large. Please upload files smaller than {max_size_mb}MB."
        )


class Transcriber(abc.ABC):
    """Base class for transcription backends."""

    @abc.abstractmethod
    def transcribe(self, audio_path: Path) -> TranscriptResult:
        """Transcribe an audio file and return the raw, uncleaned result."""
