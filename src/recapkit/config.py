"""Configuration management with TOML loading and defaults."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

CONFIG_DIR = Path("~/.config/recapkit").expanduser()
CONFIG_PATH = CONFIG_DIR / "config.toml"

DEFAULT_OPENAI_HOST = "https://api.openai.com"
DEFAULT_OLLAMA_HOST = "http://localhost:11434"

DEFAULT_TRANSCRIPTION_PROMPT = (
    "This is a professional webinar or business presentation. "
    "Please transcribe accurately without adding any extra content."
)

DEFAULT_CONFIG_TOML = """\
[transcription]
model = "whisper-1"       # speech-to-text model
language = "en"           # empty = auto-detect; a fixed language reduces hallucinations
host = "https://api.openai.com"
api_key = ""              # or set OPENAI_API_KEY
temperature = 0.0         # 0 = most deterministic output
max_file_mb = 25          # upload limit of the speech-to-text API
max_retries = 2

[cleanup]
enabled = true            # remove repeated phrases / repetitive lines
merge_segments = true     # merge silence-split fragments into whole thoughts

[generation]
enabled = true
backend = "openai"        # "openai" (or any compatible server) or "ollama"
model = "gpt-4"
host = "https://api.openai.com"  # ollama: http://localhost:11434
api_key = ""              # or set OPENAI_API_KEY
content_type = "file"     # "file" / "link" (webinar) or "text" (blog post)
assets = ["linkedin", "quotes", "recap"]  # built-in: linkedin, email, quotes, recap
max_transcript_chars = 8000

# Custom asset templates (optional):
# [templates.tweet]
# system_prompt = "You write punchy tweets."
# prompt = "Write a tweet about:\\n{insights}"

[output]
dir = "~/recapkit"        # base output directory
format = "markdown"       # "markdown" or "json"
"""


@dataclass
class TranscriptionConfig:
    model: str = "whisper-1"
    language: str = "en"
    host: str = DEFAULT_OPENAI_HOST
    api_key: str = ""
    temperature: float = 0.0
    prompt: str = DEFAULT_TRANSCRIPTION_PROMPT
    max_file_mb: int = 25
    max_retries: int = 2


@dataclass
class CleanupConfig:
    enabled: bool = True
    merge_segments: bool = True


@dataclass
class GenerationConfig:
    enabled: bool = True
    backend: str = "openai"
    model: str = "gpt-4"
    host: str = DEFAULT_OPENAI_HOST
    api_key: str = ""
    content_type: str = "file"
    assets: list[str] = field(default_factory=lambda: ["linkedin", "quotes", "recap"])
    max_transcript_chars: int = 8000

    def use_backend(self, backend: str) -> None:
        """Switch to ``backend``, pointing ``host`` at its default server."""
        if backend == self.backend:
            return
        self.backend = backend
        if backend == "ollama":
            self.host = os.environ.get("OLLAMA_HOST") or DEFAULT_OLLAMA_HOST
        else:
            self.host = DEFAULT_OPENAI_HOST


@dataclass
class TemplateConfig:
    system_prompt: str = ""
    prompt: str = ""


@dataclass
class OutputConfig:
    dir: str = "~/recapkit"
    format: str = "markdown"

    @property
    def resolved_dir(self) -> Path:
        return Path(self.dir).expanduser()


@dataclass
class Config:
    transcription: TranscriptionConfig = field(default_factory=TranscriptionConfig)
    cleanup: CleanupConfig = field(default_factory=CleanupConfig)
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    templates: dict[str, TemplateConfig] = field(default_factory=dict)

    @classmethod
    def load(cls) -> Config:
        """Load config from TOML file, falling back to defaults."""
        config = cls()

        if CONFIG_PATH.exists():
            with open(CONFIG_PATH, "rb") as f:
                data = tomllib.load(f)
            config = _merge_toml(config, data)

        # Env var overrides
        if api_key := os.environ.get("OPENAI_API_KEY"):
            config.transcription.api_key = api_key
            config.generation.api_key = api_key
        if (ollama_host := os.environ.get("OLLAMA_HOST")) and config.generation.backend == "ollama":
            config.generation.host = ollama_host

        return config


_SECTIONS = ("transcription", "cleanup", "generation", "output")


def _merge_toml(config: Config, data: dict) -> Config:
    """Merge TOML data into config dataclass."""
    for section in _SECTIONS:
        target = getattr(config, section)
        for k, v in data.get(section, {}).items():
            if hasattr(target, k):
                setattr(target, k, v)

    for name, t_data in data.get("templates", {}).items():
        config.templates[name] = TemplateConfig(
            system_prompt=t_data.get("system_prompt", ""),
            prompt=t_data.get("prompt", ""),
        )

    return config


def ensure_config_file() -> Path:
    """Create default config file if it doesn't exist. Returns the path."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    if not CONFIG_PATH.exists():
        CONFIG_PATH.write_text(DEFAULT_CONFIG_TOML)
    return CONFIG_PATH
