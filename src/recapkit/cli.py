"""CLI entry point for recapkit."""

from __future__ import annotations

import os
import subprocess

import click

from recapkit.config import Config, ensure_config_file
from recapkit.generation.prompts import list_templates


@click.group()
@click.option("--format", "output_format", type=click.Choice(["markdown", "json"]), default=None, help="Output format.")
@click.option("--model", default=None, help="Speech-to-text model (e.g. whisper-1).")
@click.option("--language", default=None, help="Spoken language code; empty string to auto-detect.")
@click.pass_context
def cli(
    ctx: click.Context,
    output_format: str | None,
    model: str | None,
    language: str | None,
) -> None:
    """Turn recordings and transcripts into cleaned text and marketing assets."""
    ctx.ensure_object(dict)
    config = Config.load()

    # Apply CLI overrides
    if output_format:
        config.output.format = output_format
    if model:
        config.transcription.model = model
    if language is not None:
        config.transcription.language = language

    ctx.obj["config"] = config


@cli.command()
@click.argument("file", type=click.Path(exists=True))
@click.option("--generate", is_flag=True, help="Also generate marketing assets from the transcript.")
@click.option("--no-cleanup", is_flag=True, help="Keep the raw speech-to-text output.")
@click.pass_context
def transcribe(ctx: click.Context, file: str, generate: bool, no_cleanup: bool) -> None:
    """Transcribe an audio or video file."""
    config = ctx.obj["config"]
    if no_cleanup:
        config.cleanup.enabled = False

    from recapkit.pipeline import run_transcribe
    run_transcribe(config, file, generate=generate)


@cli.command()
@click.argument("file", type=click.Path(exists=True))
@click.option("--no-merge", is_flag=True, help="Clean segment text but keep the original segmentation.")
@click.pass_context
def clean(ctx: click.Context, file: str, no_merge: bool) -> None:
    """Clean a raw transcript file (speech-to-text JSON or plain text)."""
    config = ctx.obj["config"]
    config.cleanup.enabled = True
    if no_merge:
        config.cleanup.merge_segments = False

    from recapkit.pipeline import run_clean
    run_clean(config, file)


@cli.command()
@click.argument("file", type=click.Path(exists=True))
@click.option("--description", default="", help="What the content is about (improves prompts).")
@click.option(
    "--asset",
    "assets",
    multiple=True,
    help=f"Asset to generate; repeatable. Built-in: {', '.join(list_templates())}.",
)
@click.option("--backend", type=click.Choice(["openai", "ollama"]), default=None, help="Generation backend.")
@click.option(
    "--content-type",
    type=click.Choice(["file", "link", "text"]),
    default=None,
    help="Source kind: file/link for webinars, text for articles.",
)
@click.pass_context
def generate(
    ctx: click.Context,
    file: str,
    description: str,
    assets: tuple[str, ...],
    backend: str | None,
    content_type: str | None,
) -> None:
    """Generate marketing assets from a transcript file."""
    config = ctx.obj["config"]
    if assets:
        config.generation.assets = list(assets)
    if backend:
        config.generation.use_backend(backend)
    if content_type:
        config.generation.content_type = content_type

    from recapkit.pipeline import run_generate
    run_generate(config, file, description=description)


@cli.command("config")
def config_cmd() -> None:
    """Open the configuration file in your editor."""
    path = ensure_config_file()
    editor = os.environ.get("EDITOR", "nano")
    click.echo(f"Opening {path} with {editor}...")
    subprocess.run([editor, str(path)])
