"""OpenAI-compatible API generation (OpenAI, LM Studio, llama.cpp server, etc.)."""

from __future__ import annotations

import openai

from recapkit.config import GenerationConfig, TemplateConfig
from recapkit.generation.base import Generator
from recapkit.generation.prompts import INSIGHTS_SCHEMA, clean_response


class OpenAIGenerator(Generator):
    """Generates insights and assets using an OpenAI-compatible chat API."""

    def __init__(self, config: GenerationConfig, templates: dict[str, TemplateConfig] | None = None) -> None:
        super().__init__(config, templates)
        base_url = config.host
        if not base_url.endswith("/v1"):
            base_url = base_url.rstrip("/") + "/v1"
        # Local servers accept any key
        self._client = openai.OpenAI(base_url=base_url, api_key=config.api_key or "not-needed")

    def chat(self, system_prompt: str, user_prompt: str, json_mode: bool = False) -> str:
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        formats_to_try: list[dict | None] = [None]
        if json_mode:
            formats_to_try = [
                {"type": "json_object"},
                {"type": "json_schema", "json_schema": {
                    "name": "insights",
                    "strict": True,
                    "schema": INSIGHTS_SCHEMA,
                }},
                None,
            ]
        for fmt in formats_to_try:
            try:
                kwargs = {}
                if fmt is not None:
                    kwargs["response_format"] = fmt
                response = self._client.chat.completions.create(
                    model=self._config.model,
                    messages=messages,
                    **kwargs,
                )
                return clean_response(response.choices[0].message.content or "")
            except openai.BadRequestError:
                if fmt is None:
                    raise
                continue
        return ""

    def is_available(self) -> bool:
        try:
            self._client.models.list()
            return True
        except Exception:
            return False
