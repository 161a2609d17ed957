"""Prompt templates for insight extraction and marketing assets."""

from __future__ import annotations

import json
import logging
import re

_THINK_RE = re.compile(r"<think>[\s\S]*?</think>\s*", re.IGNORECASE)
_ORPHAN_THINK_CLOSE_RE = re.compile(r"^[\s\S]*?</think>\s*", re.IGNORECASE)
_CODE_FENCE_RE = re.compile(r"^```(?:json)?\s*([\s\S]*?)\s*```$", re.IGNORECASE)


def clean_response(text: str) -> str:
    """Strip reasoning/thinking tags from LLM responses."""
    text = _THINK_RE.sub("", text).strip()
    if "</think>" in text.lower():
        text = _ORPHAN_THINK_CLOSE_RE.sub("", text).strip()
    return text


def parse_insights(text: str) -> list[str]:
    """Parse a model's insight list. Returns [] if the response is unusable.

    Accepts a bare JSON array or an object with an ``insights`` array,
    optionally wrapped in a markdown code fence.
    """
    text = text.strip()
    if m := _CODE_FENCE_RE.match(text):
        text = m.group(1)
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        logging.getLogger(__name__).warning("Could not parse insights", exc_info=True)
        return []

    if isinstance(data, dict):
        data = data.get("insights", [])
    if not isinstance(data, list):
        return []
    return [str(item).strip() for item in data if str(item).strip()]


CONTENT_TYPE_LABELS: dict[str, str] = {
    "file": "webinar or presentation",
    "link": "webinar or presentation",
    "text": "blog post or article",
}


def content_type_label(content_type: str) -> str:
    return CONTENT_TYPE_LABELS.get(content_type, CONTENT_TYPE_LABELS["file"])


INSIGHTS_SYSTEM = """You are an expert content strategist analyzing a {content_label}. \
Extract the 5-7 most valuable, actionable insights from this content. Focus on:
- Key takeaways that would be valuable to share
- Actionable strategies or frameworks mentioned
- Surprising statistics or data points
- Memorable quotes or statements that challenge assumptions
- Practical tips that readers/attendees can implement immediately

Prioritize insights that are self-contained and make sense out of context.

Return ONLY a JSON object: {{"insights": ["insight 1", "insight 2"]}}"""

INSIGHTS_PROMPT = """Content Topic: {description}
Content Type: {content_label}

Content:
{transcript}"""

INSIGHTS_SCHEMA = {
    "type": "object",
    "properties": {"insights": {"type": "array", "items": {"type": "string"}}},
    "required": ["insights"],
    "additionalProperties": False,
}


LINKEDIN_SYSTEM = (
    "You are a B2B social media writer. You write engaging, authentic LinkedIn posts "
    "that start with a strong hook and end with a question for the audience."
)

LINKEDIN_PROMPT = """Write a LinkedIn post (under 200 words) sharing the insights below \
from a {content_label} about "{description}".

Use short lines, a few arrows or bullets, and 3-5 relevant hashtags at the end.

Insights:
{insights}"""

EMAIL_SYSTEM = (
    "You are a sales copywriter. You write short, direct, value-focused outreach emails "
    "without hype or filler."
)

EMAIL_PROMPT = """Write a sales outreach email (under 150 words) based on a {content_label} \
about "{description}". Lead with the single most useful insight, offer one concrete takeaway, \
and close with a low-friction call to action. Include a subject line on the first line as \
"Subject: ...".

Insights:
{insights}"""

QUOTES_SYSTEM = (
    "You are a content editor. You pick the most quotable, self-contained statements from "
    "a piece of content and polish them into short quote cards."
)

QUOTES_PROMPT = """From the {content_label} about "{description}", write 3-5 quote cards.
Each quote card is a single sentence under 25 words, on its own line, prefixed with "> ".
Stay faithful to the source; do not invent claims.

Insights:
{insights}

Content:
{transcript}"""

RECAP_SYSTEM = (
    "You are a marketing writer. You turn long-form content into clear, skimmable "
    "one-page recaps."
)

RECAP_PROMPT = """Write a one-page recap of the following {content_label} about "{description}".

Include these sections:
## Overview
A brief 2-3 sentence summary.

## Key Takeaways
Bullet points of the most important insights.

## Next Steps
Bullet points of what the reader can do with this information.

---

Content:
{transcript}"""


ASSET_TEMPLATES: dict[str, dict[str, str]] = {
    "linkedin": {"title": "LinkedIn Post", "system": LINKEDIN_SYSTEM, "prompt": LINKEDIN_PROMPT},
    "email": {"title": "Sales Outreach Email", "system": EMAIL_SYSTEM, "prompt": EMAIL_PROMPT},
    "quotes": {"title": "Quote Cards", "system": QUOTES_SYSTEM, "prompt": QUOTES_PROMPT},
    "recap": {"title": "One-Pager Recap", "system": RECAP_SYSTEM, "prompt": RECAP_PROMPT},
}

DEFAULT_ASSET = "recap"


def resolve_template(
    asset_type: str, user_templates: dict | None = None,
) -> tuple[str, str]:
    """Resolve an asset type to (system_prompt, user_prompt).

    Looks up user-defined templates first, then built-ins. Falls back to "recap".
    A user template inherits missing fields from the built-in of the same name.
    """
    name = asset_type or DEFAULT_ASSET
    user_templates = user_templates or {}
    builtin = ASSET_TEMPLATES.get(name, ASSET_TEMPLATES[DEFAULT_ASSET])

    if name in user_templates:
        t = user_templates[name]
        return (
            t.system_prompt or builtin["system"],
            t.prompt or builtin["prompt"],
        )
    return builtin["system"], builtin["prompt"]


def asset_title(asset_type: str) -> str:
    if asset_type in ASSET_TEMPLATES:
        return ASSET_TEMPLATES[asset_type]["title"]
    return asset_type.replace("-", " ").replace("_", " ").title()


def list_templates() -> list[str]:
    """Return the names of all built-in asset templates."""
    return list(ASSET_TEMPLATES.keys())
