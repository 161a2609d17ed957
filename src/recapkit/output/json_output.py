"""JSON output formatters for transcripts and generated assets."""

from __future__ import annotations

import json
from dataclasses import asdict

from recapkit.generation.base import GeneratedAsset
from recapkit.transcription.models import TranscriptResult


def format_transcript_json(result: TranscriptResult) -> str:
    """Format a transcript result as JSON."""
    return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)


def format_assets_json(assets: list[GeneratedAsset], insights: list[str]) -> str:
    """Format generated assets as JSON."""
    data = {"insights": insights, "assets": [asdict(asset) for asset in assets]}
    return json.dumps(data, indent=2, ensure_ascii=False)
