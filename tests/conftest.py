"""Shared fixtures for recapkit tests."""

from __future__ import annotations

import pytest

from recapkit.transcription.models import Segment, TranscriptResult


@pytest.fixture
def sample_transcript() -> TranscriptResult:
    """A basic cleaned transcript with two segments."""
    return TranscriptResult(
        text="Hello world. How are you?",
        segments=[
            Segment(start=0.0, end=1.5, text="Hello world."),
            Segment(start=1.5, end=3.0, text="How are you?"),
        ],
        language="en",
        duration=3.0,
    )


@pytest.fixture
def raw_payload() -> dict:
    """A speech-to-text verbose_json payload with a hallucinated tail."""
    return {
        "task": "transcribe",
        "language": "english",
        "duration": 16.0,
        "text": " I think that we should really focus on retention. Now, about pricing...",
        "segments": [
            {"id": 0, "seek": 0, "start": 0.0, "end": 1.5, "text": " I think that", "avg_logprob": -0.2},
            {"id": 1, "seek": 0, "start": 2.0, "end": 5.0, "text": " we should really focus on retention."},
            {"id": 2, "seek": 0, "start": 14.0, "end": 16.0, "text": " Now, about pricing..."},
            {"id": 3, "seek": 0, "start": 16.0, "end": 16.0, "text": " bye bye bye bye"},
        ],
    }


@pytest.fixture
def tmp_config_file(tmp_path):
    """Write a minimal TOML config to a temp directory and return its path."""
    config_toml = tmp_path / "config.toml"
    config_toml.write_text(
        '[transcription]\nmodel = "whisper-large"\n\n[generation]\nbackend = "ollama"\n\n'
        '[output]\ndir = "/tmp/test-recaps"\n'
    )
    return config_toml
