from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from recapkit.config import Config
    from recapkit.generation.base import Generator


def create_generator(config: Config) -> Generator:
    """Create the appropriate generator based on config."""
    if config.generation.backend == "ollama":
        from recapkit.generation.ollama_generator import OllamaGenerator

        return OllamaGenerator(config.generation, config.templates)
    else:
        from recapkit.generation.openai_generator import OpenAIGenerator

        return OpenAIGenerator(config.generation, config.templates)
