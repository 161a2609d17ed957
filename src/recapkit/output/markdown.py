"""Markdown output formatters for transcripts and generated assets."""

from __future__ import annotations

from recapkit.generation.base import GeneratedAsset
from recapkit.transcription.models import TranscriptResult


def _format_time(seconds: float) -> str:
    """Format seconds as HH:MM:SS or MM:SS."""
    m, s = divmod(int(max(seconds, 0)), 60)
    h, m = divmod(m, 60)
    if h > 0:
        return f"{h:02d}:{m:02d}:{s:02d}"
    return f"{m:02d}:{s:02d}"


def format_transcript(result: TranscriptResult) -> str:
    """Format a transcript result as markdown."""
    lines = ["# Transcript\n"]

    if result.language:
        lines.append(f"**Language:** {result.language}  ")
    if result.duration:
        lines.append(f"**Duration:** {_format_time(result.duration)}  ")
    lines.append("")

    if not result.has_segments:
        lines.append(result.text.strip())
        return "\n".join(lines) + "\n"

    for seg in result.segments:
        lines.append(f"[{_format_time(seg.start)} - {_format_time(seg.end)}]")
        lines.append(seg.text.strip())
        lines.append("")

    return "\n".join(lines).rstrip("\n") + "\n"


def format_assets(assets: list[GeneratedAsset], insights: list[str]) -> str:
    """Format generated assets, preceded by the extracted insights."""
    lines = ["# Marketing Assets\n"]

    if insights:
        lines.append("## Key Insights\n")
        lines.extend(f"- {insight}" for insight in insights)
        lines.append("")

    for asset in assets:
        lines.append(f"## {asset.title}\n")
        lines.append(asset.content.strip())
        lines.append("")

    return "\n".join(lines).rstrip("\n") + "\n"
