"""Data models for transcription results."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Segment:
    start: float
    end: float
    text: str


@dataclass
class TranscriptResult:
    text: str
    segments: list[Segment] = field(default_factory=list)
    language: str | None = None
    duration: float | None = None

    @property
    def full_text(self) -> str:
        text = self.text.strip()
        if text:
            return text
        return " ".join(seg.text.strip() for seg in self.segments if seg.text.strip())

    @property
    def has_segments(self) -> bool:
        return bool(self.segments)

    @classmethod
    def from_dict(cls, data: dict) -> TranscriptResult:
        """Build a result from a speech-to-text payload (verbose JSON shape).

        Raises ValueError if a segment is not an object or a timestamp is not numeric.
        """
        raw_segments = data.get("segments") or []
        if not isinstance(raw_segments, list) or not all(isinstance(seg, dict) for seg in raw_segments):
            raise ValueError("'segments' must be a list of objects")
        try:
            segments = [
                Segment(
                    start=float(seg.get("start") or 0.0),
                    end=float(seg.get("end") or 0.0),
                    text=str(seg.get("text") or ""),
                )
                for seg in raw_segments
            ]
            duration = data.get("duration")
            duration = float(duration) if duration is not None else None
        except (TypeError, ValueError) as e:
            raise ValueError(f"invalid timestamp: {e}") from e
        return cls(
            text=str(data.get("text") or ""),
            segments=segments,
            language=data.get("language") or None,
            duration=duration,
        )

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "language": self.language,
            "duration": self.duration,
            "segments": [
                {"start": seg.start, "end": seg.end, "text": seg.text} for seg in self.segments
            ],
        }
