"""Transcript cleanup: hallucination removal and segment merging.

Speech-to-text models tend to loop on a phrase during silence or noise, and
they split speech on pauses rather than on sentences. ``clean_text`` removes
the loops, ``merge_segments`` stitches fragments back into whole thoughts, and
``clean_result`` runs both over a full transcription.

All thresholds below are hand-tuned; keep them as they are unless the merge
behaviour is deliberately being retuned.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from collections.abc import Iterable
from dataclasses import replace

from recapkit.transcription.models import Segment, TranscriptResult

logger = logging.getLogger(__name__)

# --- Text cleaner ---

MIN_PHRASE_LENGTH = 10
MAX_PHRASE_LENGTH = 200
MIN_PHRASE_REPEATS = 3
MIN_WORDS_PER_LINE = 4
MAX_WORD_RATIO = 0.7

# Cleaned text shorter than this fraction of the original triggers a warning.
DISCARD_WARNING_RATIO = 0.5

# A phrase may span lines; the repeats themselves are separated by spaces or tabs only.
# The upper bound keeps the scan linear in the text length.
_REPEATED_PHRASE_RE = re.compile(
    rf"(.{{{MIN_PHRASE_LENGTH},{MAX_PHRASE_LENGTH}}}?)(?:[ \t]*\1){{{MIN_PHRASE_REPEATS - 1},}}",
    re.IGNORECASE | re.DOTALL,
)
_EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")

# --- Segment merger ---

CONTINUOUS_GAP = 1.5
SHORT_TEXT_CHARS = 15
NO_TERMINATOR_GAP = 3.0
LOWERCASE_CONTINUATION_GAP = 4.0
CONTINUATION_CUE_GAP = 5.0
SHORT_PAIR_CHARS = 30
SHORT_PAIR_GAP = 4.0

CLEANUP_TEXT_CHARS = 20
CLEANUP_GAP = 8.0

_TERMINATORS = (".", "!", "?")
_CONTINUATION_RE = re.compile(r"(?:[,;:]|\b(?:and|but|or|so|then|now))$", re.IGNORECASE)


def _is_repetitive_line(line: str) -> bool:
    words = line.split()
    if len(words) < MIN_WORDS_PER_LINE:
        return False
    top_count = Counter(word.lower() for word in words).most_common(1)[0][1]
    return top_count / len(words) >= MAX_WORD_RATIO


def _clean_once(text: str) -> str:
    text = _REPEATED_PHRASE_RE.sub(r"\1", text)
    lines = [line for line in text.split("\n") if not _is_repetitive_line(line)]
    return _EXCESS_NEWLINES_RE.sub("\n\n", "\n".join(lines)).strip()


def clean_text(text: str) -> str:
    """Remove speech-to-text hallucination artifacts from ``text``.

    Phrases of 10 to 200 characters repeated three or more times in a row
    collapse to a single occurrence, lines dominated by a single word are
    dropped, and blank runs are squeezed to one empty line. Two-time repeats
    ("no no") are left alone.

    Collapsing a run or dropping a line can bring copies of a phrase together,
    so the steps repeat until the text stops changing.
    """
    while True:
        cleaned = _clean_once(text)
        if cleaned == text:
            return text
        text = cleaned


def _join(current: Segment, nxt: Segment) -> Segment:
    text = f"{current.text.strip()} {nxt.text.strip()}".strip()
    return replace(current, text=text, end=nxt.end)


def _should_merge(current: str, nxt: str, gap: float) -> bool:
    """Pass-1 policy: does ``nxt`` continue the thought in ``current``?

    Both texts are expected to be stripped already.
    """
    if gap < CONTINUOUS_GAP:
        return True
    if len(current) < SHORT_TEXT_CHARS:
        return True
    if gap < NO_TERMINATOR_GAP and not current.endswith(_TERMINATORS):
        return True
    if gap < LOWERCASE_CONTINUATION_GAP and nxt[:1].islower():
        return True
    if gap < CONTINUATION_CUE_GAP and _CONTINUATION_RE.search(current):
        return True
    return len(current) < SHORT_PAIR_CHARS and len(nxt) < SHORT_PAIR_CHARS and gap < SHORT_PAIR_GAP


def _primary_merge(segments: list[Segment]) -> list[Segment]:
    merged: list[Segment] = []
    current = segments[0]
    for nxt in segments[1:]:
        if not nxt.text.strip():
            continue
        gap = nxt.start - current.end
        if _should_merge(current.text.strip(), nxt.text.strip(), gap):
            current = _join(current, nxt)
        else:
            merged.append(current)
            current = nxt
    merged.append(current)
    return merged


def _merge_short_segments(segments: list[Segment]) -> list[Segment]:
    merged: list[Segment] = []
    current = segments[0]
    for nxt in segments[1:]:
        gap = nxt.start - current.end
        if len(current.text.strip()) < CLEANUP_TEXT_CHARS and gap < CLEANUP_GAP:
            current = _join(current, nxt)
        else:
            merged.append(current)
            current = nxt
    merged.append(current)
    return merged


def merge_segments(segments: Iterable[Segment]) -> list[Segment]:
    """Coalesce silence-split fragments into coherent spans.

    A first pass merges on timing gaps plus punctuation and wording cues; a
    second pass folds any remaining short segment into its neighbour. Segments
    left with empty text are dropped. Overlapping timestamps yield negative
    gaps, which simply count as small ones.
    """
    segments = list(segments)
    if not segments:
        return []
    merged = _merge_short_segments(_primary_merge(segments))
    return [seg for seg in merged if seg.text.strip()]


def clean_result(result: TranscriptResult, merge: bool = True) -> TranscriptResult:
    """Run the cleanup pipeline over a transcription and return a new result."""
    text = clean_text(result.text)
    if result.text and len(text) < len(result.text) * DISCARD_WARNING_RATIO:
        logger.warning(
            "Cleanup discarded %d of %d characters as likely hallucination",
            len(result.text) - len(text),
            len(result.text),
        )

    segments = [replace(seg, text=clean_text(seg.text)) for seg in result.segments]
    if merge:
        segments = merge_segments(segments)
    else:
        segments = [seg for seg in segments if seg.text.strip()]

    return TranscriptResult(
        text=text,
        segments=segments,
        language=result.language,
        duration=result.duration,
    )
