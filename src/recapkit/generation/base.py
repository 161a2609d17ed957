"""Abstract base class for text-generation backends."""

from __future__ import annotations

import abc
from dataclasses import dataclass

from recapkit.config import GenerationConfig, TemplateConfig
from recapkit.generation.prompts import (
    INSIGHTS_PROMPT,
    INSIGHTS_SYSTEM,
    asset_title,
    content_type_label,
    parse_insights,
    resolve_template,
)


@dataclass
class GeneratedAsset:
    type: str
    title: str
    content: str


class Generator(abc.ABC):
    """Base class for generation backends.

    Backends only implement ``chat`` and ``is_available``; insight extraction
    and asset generation are built on top of ``chat``.
    """

    def __init__(self, config: GenerationConfig, templates: dict[str, TemplateConfig] | None = None) -> None:
        self._config = config
        self._templates = templates or {}

    @abc.abstractmethod
    def chat(self, system_prompt: str, user_prompt: str, json_mode: bool = False) -> str:
        """Send one system/user exchange and return the cleaned reply."""

    @abc.abstractmethod
    def is_available(self) -> bool:
        """Check if the generation backend is reachable."""

    def _truncate(self, transcript: str) -> str:
        return transcript[: self._config.max_transcript_chars]

    def extract_insights(self, transcript: str, description: str = "", content_type: str = "file") -> list[str]:
        label = content_type_label(content_type)
        system = INSIGHTS_SYSTEM.format(content_label=label)
        user = INSIGHTS_PROMPT.format(
            description=description or "(not provided)",
            content_label=label,
            transcript=self._truncate(transcript),
        )
        return parse_insights(self.chat(system, user, json_mode=True))

    def generate_asset(
        self,
        asset_type: str,
        transcript: str,
        insights: list[str],
        description: str = "",
        content_type: str = "file",
    ) -> GeneratedAsset:
        system, prompt = resolve_template(asset_type, self._templates)
        user = prompt.format(
            content_label=content_type_label(content_type),
            description=description or "this topic",
            insights="\n".join(f"- {item}" for item in insights),
            transcript=self._truncate(transcript),
        )
        return GeneratedAsset(
            type=asset_type,
            title=asset_title(asset_type),
            content=self.chat(system, user),
        )
