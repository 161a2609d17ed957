"""Pipeline orchestration: transcribe -> clean -> generate -> output."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

import click

from recapkit.config import Config
from recapkit.generation import create_generator
from recapkit.generation.base import GeneratedAsset, Generator
from recapkit.progress import Spinner
from recapkit.transcription.base import TranscriptionError
from recapkit.transcription.cleanup import clean_result
from recapkit.transcription.models import TranscriptResult


def _get_output_dir(config: Config) -> Path:
    """Create and return a timestamped output directory."""
    base = config.output.resolved_dir
    timestamp = datetime.now().strftime("%Y-%m-%d_%H%M")
    out_dir = base / timestamp
    out_dir.mkdir(parents=True, exist_ok=True)
    return out_dir


def _create_transcriber(config: Config):
    """Create the speech-to-text transcriber."""
    from recapkit.transcription.openai_transcriber import OpenAITranscriber

    return OpenAITranscriber(config.transcription)


def _create_generator(config: Config) -> Generator:
    return create_generator(config)


def _extension(config: Config) -> str:
    return "json" if config.output.format == "json" else "md"


def _format_transcript(config: Config, result: TranscriptResult) -> str:
    if config.output.format == "json":
        from recapkit.output.json_output import format_transcript_json
        return format_transcript_json(result)
    from recapkit.output.markdown import format_transcript
    return format_transcript(result)


def _format_assets(config: Config, assets: list[GeneratedAsset], insights: list[str]) -> str:
    if config.output.format == "json":
        from recapkit.output.json_output import format_assets_json
        return format_assets_json(assets, insights)
    from recapkit.output.markdown import format_assets
    return format_assets(assets, insights)


def _load_transcript(path: Path) -> TranscriptResult:
    """Read a speech-to-text JSON payload, or treat the file as plain text."""
    try:
        raw = path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        click.echo(f"Error: {path} is not a UTF-8 text file.", err=True)
        raise SystemExit(1) from None
    if path.suffix.lower() == ".json":
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            click.echo(f"Error: {path} is not valid JSON ({e}).", err=True)
            raise SystemExit(1) from None
        if not isinstance(data, dict):
            click.echo(f"Error: {path} must contain a JSON object with a 'text' field.", err=True)
            raise SystemExit(1)
        try:
            return TranscriptResult.from_dict(data)
        except ValueError as e:
            click.echo(f"Error: {path} is not a valid transcript ({e}).", err=True)
            raise SystemExit(1) from None
    return TranscriptResult(text=raw)


def _clean(config: Config, result: TranscriptResult) -> TranscriptResult:
    if not config.cleanup.enabled:
        return result
    return clean_result(result, merge=config.cleanup.merge_segments)


def _write_transcript(config: Config, result: TranscriptResult, out_dir: Path) -> Path:
    transcript_path = out_dir / f"transcript.{_extension(config)}"
    transcript_path.write_text(_format_transcript(config, result), encoding="utf-8")
    return transcript_path


def run_transcribe(config: Config, audio_file: str, generate: bool = False) -> None:
    """Transcribe an audio file, clean it, and optionally generate assets."""
    audio_path = Path(audio_file)
    transcriber = _create_transcriber(config)

    try:
        with Spinner(f"Transcribing with {config.transcription.model}"):
            raw = transcriber.transcribe(audio_path)
    except TranscriptionError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1) from None

    result = _clean(config, raw)
    out_dir = _get_output_dir(config)
    transcript_path = _write_transcript(config, result, out_dir)
    click.echo(f"Transcript saved to {transcript_path}")

    if generate and config.generation.enabled:
        generator = _create_generator(config)
        if not generator.is_available():
            click.echo(
                f"\nWarning: {config.generation.backend} is not reachable "
                f"at {config.generation.host}. Skipping asset generation.",
                err=True,
            )
            return
        _do_generate(config, generator, result.full_text, out_dir)
    else:
        click.echo(f"\n{_format_transcript(config, result)}")


def run_clean(config: Config, transcript_file: str) -> None:
    """Clean a raw transcript (speech-to-text JSON or plain text)."""
    result = _clean(config, _load_transcript(Path(transcript_file)))

    out_dir = _get_output_dir(config)
    transcript_path = _write_transcript(config, result, out_dir)
    click.echo(f"\n{_format_transcript(config, result)}")
    click.echo(f"Cleaned transcript saved to {transcript_path}")


def run_generate(config: Config, transcript_file: str, description: str = "") -> None:
    """Generate marketing assets from a transcript file."""
    transcript = _load_transcript(Path(transcript_file)).full_text

    generator = _create_generator(config)
    if not generator.is_available():
        click.echo(
            f"Error: {config.generation.backend} is not reachable at {config.generation.host}. "
            "Is the server running?",
            err=True,
        )
        raise SystemExit(1)

    out_dir = _get_output_dir(config)
    _do_generate(config, generator, transcript, out_dir, description)


def _do_generate(
    config: Config,
    generator: Generator,
    transcript: str,
    out_dir: Path,
    description: str = "",
) -> None:
    """Shared logic: extract insights, write each configured asset, save."""
    content_type = config.generation.content_type
    asset_types = config.generation.assets

    with Spinner("Analyzing content for key insights"):
        insights = generator.extract_insights(transcript, description, content_type)

    if not insights:
        click.echo(
            "Error: Could not extract meaningful insights from the content. Please ensure your "
            "content contains substantial discussion or valuable information.",
            err=True,
        )
        raise SystemExit(1)

    assets: list[GeneratedAsset] = []
    label = f"Generating {len(asset_types)} assets with {config.generation.model}"
    with Spinner(label) as spinner:
        for i, asset_type in enumerate(asset_types, start=1):
            spinner.update(f"Generating {asset_type} ({i}/{len(asset_types)})")
            assets.append(
                generator.generate_asset(asset_type, transcript, insights, description, content_type)
            )
        spinner.update(label)

    assets_str = _format_assets(config, assets, insights)
    assets_path = out_dir / f"assets.{_extension(config)}"
    assets_path.write_text(assets_str, encoding="utf-8")
    click.echo(f"\n{assets_str}")
    click.echo(f"Assets saved to {assets_path}")
