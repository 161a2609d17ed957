"""Tests for generation helpers and backends."""

from __future__ import annotations

import json

from werkzeug import Request, Response

from recapkit.config import Config, GenerationConfig, TemplateConfig
from recapkit.generation.prompts import (
    ASSET_TEMPLATES,
    asset_title,
    clean_response,
    content_type_label,
    parse_insights,
    resolve_template,
)


def _chat_completion(content: str) -> dict:
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
        "model": "test-model",
    }


def _ollama_chat(content: str) -> dict:
    return {"message": {"role": "assistant", "content": content}, "done": True}


class TestCleanResponse:
    def test_strips_think_tags(self):
        raw = "<think>reasoning about the webinar</think>\n## Overview\nclean"
        assert clean_response(raw) == "## Overview\nclean"

    def test_no_tags_unchanged(self):
        text = "## Overview\nNo thinking here."
        assert clean_response(text) == text

    def test_case_insensitive(self):
        assert clean_response("<THINK>stuff</THINK>\nresult") == "result"

    def test_orphaned_close_think_tag(self):
        raw = "1. Analyze\n2. Plan\n</think>\n## Overview\nActual content"
        assert clean_response(raw) == "## Overview\nActual content"


class TestParseInsights:
    def test_object_form(self):
        assert parse_insights('{"insights": ["One", "Two"]}') == ["One", "Two"]

    def test_bare_array(self):
        assert parse_insights('["One", "Two"]') == ["One", "Two"]

    def test_code_fence(self):
        assert parse_insights('```json\n["One"]\n```') == ["One"]

    def test_drops_blank_items(self):
        assert parse_insights('["One", "  ", ""]') == ["One"]

    def test_invalid_json(self):
        assert parse_insights("Here are the insights: one, two") == []

    def test_wrong_shape(self):
        assert parse_insights('{"insights": "one"}') == []
        assert parse_insights("42") == []


class TestTemplates:
    def test_builtin(self):
        system, prompt = resolve_template("linkedin")
        assert system == ASSET_TEMPLATES["linkedin"]["system"]
        assert "{insights}" in prompt

    def test_unknown_falls_back_to_recap(self):
        assert resolve_template("nonexistent") == resolve_template("recap")

    def test_empty_name_is_recap(self):
        assert resolve_template("") == resolve_template("recap")

    def test_user_template_inherits_missing_fields(self):
        user = {"linkedin": TemplateConfig(prompt="Short post: {insights}")}
        system, prompt = resolve_template("linkedin", user)
        assert system == ASSET_TEMPLATES["linkedin"]["system"]
        assert prompt == "Short post: {insights}"

    def test_custom_asset_type(self):
        user = {"tweet": TemplateConfig(system_prompt="You tweet.", prompt="Tweet: {insights}")}
        assert resolve_template("tweet", user) == ("You tweet.", "Tweet: {insights}")

    def test_asset_title(self):
        assert asset_title("quotes") == "Quote Cards"
        assert asset_title("product_tweet") == "Product Tweet"

    def test_content_type_label(self):
        assert content_type_label("text") == "blog post or article"
        assert content_type_label("link") == "webinar or presentation"
        assert content_type_label("podcast") == "webinar or presentation"


class TestCreateGenerator:
    def test_openai_default(self):
        from recapkit.generation import create_generator
        from recapkit.generation.openai_generator import OpenAIGenerator

        assert isinstance(create_generator(Config()), OpenAIGenerator)

    def test_ollama(self):
        from recapkit.generation import create_generator
        from recapkit.generation.ollama_generator import OllamaGenerator

        config = Config()
        config.generation.backend = "ollama"
        config.generation.host = "http://localhost:11434"
        assert isinstance(create_generator(config), OllamaGenerator)


class TestOpenAIGenerator:
    """Test OpenAIGenerator against a mock HTTP server."""

    def _generator(self, httpserver, **kwargs):
        from recapkit.generation.openai_generator import OpenAIGenerator

        config = GenerationConfig(host=httpserver.url_for(""), backend="openai", model="test-model")
        return OpenAIGenerator(config, **kwargs)

    def test_extract_insights(self, httpserver):
        httpserver.expect_request("/v1/chat/completions", method="POST").respond_with_json(
            _chat_completion('{"insights": ["Retention beats acquisition.", "Price annually."]}')
        )

        insights = self._generator(httpserver).extract_insights(
            "Long webinar transcript", description="Retention", content_type="file"
        )

        assert insights == ["Retention beats acquisition.", "Price annually."]
        body = json.loads(httpserver.log[0][0].data)
        assert body["response_format"] == {"type": "json_object"}
        assert "webinar or presentation" in body["messages"][0]["content"]
        assert "Content Topic: Retention" in body["messages"][1]["content"]

    def test_transcript_truncated(self, httpserver):
        httpserver.expect_request("/v1/chat/completions", method="POST").respond_with_json(
            _chat_completion('["x"]')
        )
        generator = self._generator(httpserver)
        generator._config.max_transcript_chars = 10

        generator.extract_insights("0123456789ABCDEF")

        body = json.loads(httpserver.log[0][0].data)
        assert "0123456789" in body["messages"][1]["content"]
        assert "ABCDEF" not in body["messages"][1]["content"]

    def test_json_mode_falls_back_without_response_format(self, httpserver):
        def handler(request: Request) -> Response:
            if "response_format" in json.loads(request.get_data()):
                error = {"error": {"message": "response_format not supported", "type": "invalid_request_error"}}
                return Response(json.dumps(error), status=400, content_type="application/json")
            return Response(json.dumps(_chat_completion('["Only insight"]')), content_type="application/json")

        httpserver.expect_request("/v1/chat/completions", method="POST").respond_with_handler(handler)

        assert self._generator(httpserver).extract_insights("transcript") == ["Only insight"]
        assert len(httpserver.log) == 3

    def test_generate_asset(self, httpserver):
        httpserver.expect_request("/v1/chat/completions", method="POST").respond_with_json(
            _chat_completion("<think>plan</think>\nBig news for B2B teams!")
        )

        asset = self._generator(httpserver).generate_asset(
            "linkedin", "transcript", ["Retention beats acquisition."], description="Retention"
        )

        assert asset.type == "linkedin"
        assert asset.title == "LinkedIn Post"
        assert asset.content == "Big news for B2B teams!"
        body = json.loads(httpserver.log[0][0].data)
        assert "response_format" not in body
        assert "- Retention beats acquisition." in body["messages"][1]["content"]
        assert '"Retention"' in body["messages"][1]["content"]

    def test_generate_custom_asset(self, httpserver):
        httpserver.expect_request("/v1/chat/completions", method="POST").respond_with_json(
            _chat_completion("Tweet text")
        )
        templates = {"tweet": TemplateConfig(system_prompt="You tweet.", prompt="Tweet: {insights}")}

        asset = self._generator(httpserver, templates=templates).generate_asset("tweet", "t", ["A"])

        assert asset.title == "Tweet"
        body = json.loads(httpserver.log[0][0].data)
        assert body["messages"][0]["content"] == "You tweet."
        assert body["messages"][1]["content"] == "Tweet: - A"

    def test_is_available_success(self, httpserver):
        httpserver.expect_request("/v1/models", method="GET").respond_with_json({"data": [], "object": "list"})
        assert self._generator(httpserver).is_available() is True

    def test_is_available_failure(self):
        from recapkit.generation.openai_generator import OpenAIGenerator

        config = GenerationConfig(host="http://localhost:1", backend="openai", model="test-model")
        assert OpenAIGenerator(config).is_available() is False


class TestOllamaGenerator:
    """Test OllamaGenerator against a mock HTTP server."""

    def _generator(self, httpserver):
        from recapkit.generation.ollama_generator import OllamaGenerator

        config = GenerationConfig(host=httpserver.url_for(""), backend="ollama", model="test-model")
        return OllamaGenerator(config)

    def test_extract_insights_uses_json_format(self, httpserver):
        httpserver.expect_request("/api/chat", method="POST").respond_with_json(
            _ollama_chat('{"insights": ["Ship weekly."]}')
        )

        insights = self._generator(httpserver).extract_insights("transcript", content_type="text")

        assert insights == ["Ship weekly."]
        body = json.loads(httpserver.log[0][0].data)
        assert body["format"] == "json"
        assert "blog post or article" in body["messages"][0]["content"]

    def test_generate_asset_cleans_think_tags(self, httpserver):
        httpserver.expect_request("/api/chat", method="POST").respond_with_json(
            _ollama_chat("<think>reasoning</think>\n## Overview\nA clear recap.")
        )

        asset = self._generator(httpserver).generate_asset("recap", "transcript", ["A"])

        assert asset.content == "## Overview\nA clear recap."
        assert asset.title == "One-Pager Recap"

    def test_is_available_success(self, httpserver):
        httpserver.expect_request("/api/tags", method="GET").respond_with_json({"models": []})
        assert self._generator(httpserver).is_available() is True

    def test_is_available_failure(self):
        from recapkit.generation.ollama_generator import OllamaGenerator

        config = GenerationConfig(host="http://localhost:1", backend="ollama", model="test-model")
        assert OllamaGenerator(config).is_available() is False
