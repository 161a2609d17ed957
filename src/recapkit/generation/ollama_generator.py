"""Ollama-based generation."""

from __future__ import annotations

import ollama

from recapkit.config import GenerationConfig, TemplateConfig
from recapkit.generation.base import Generator
from recapkit.generation.prompts import clean_response


class OllamaGenerator(Generator):
    """Generates insights and assets using a local Ollama model."""

    def __init__(self, config: GenerationConfig, templates: dict[str, TemplateConfig] | None = None) -> None:
        super().__init__(config, templates)
        self._client = ollama.Client(host=config.host)

    def chat(self, system_prompt: str, user_prompt: str, json_mode: bool = False) -> str:
        kwargs = {}
        if json_mode:
            kwargs["format"] = "json"
        response = self._client.chat(
            model=self._config.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            **kwargs,
        )
        return clean_response(response["message"]["content"])

    def is_available(self) -> bool:
        try:
            self._client.list()
            return True
        except Exception:
            return False
