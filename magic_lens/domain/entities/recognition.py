"""Recognition result entities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ...exceptions import ValidationError
from ..value_objects.geometry import BoundingBox


@dataclass(frozen=True, slots=True)
class RecognizedLine:
    """A single recognized line of text and where it sits in the image.

    Text is stored exactly as the engine produced it; trimming happens
    when the line is rendered.
    """
    text: str
    bbox: BoundingBox
    confidence: float = 0.0

    @property
    def is_empty(self) -> bool:
        """Check if line has no visible text."""
        return not self.text.strip()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RecognizedLine:
        box = data.get("bbox", data.get("boundingBox"))
        if box is None:
            raise ValidationError("Recognized line has no bounding box", field="bbox")
        return cls(
            text=str(data.get("text", "")),
            bbox=BoundingBox.from_dict(box),
            confidence=float(data.get("confidence", 0.0)),
        )


@dataclass(frozen=True, slots=True)
class RecognitionResult:
    """Full text and per-line boxes for one image.

    Replaced wholesale for every new image, never edited in place.
    """
    full_text: str
    lines: tuple[RecognizedLine, ...] = ()

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.full_text.strip() and not self.lines

    @classmethod
    def from_lines(cls, lines: list[RecognizedLine]) -> RecognitionResult:
        """Build a result whose full text is the lines joined top to bottom."""
        return cls(
            full_text="\n".join(line.text for line in lines),
            lines=tuple(lines)
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RecognitionResult:
        """Create from an engine-shaped ``{text, lines: [...]}`` mapping."""
        lines = tuple(RecognizedLine.from_dict(item) for item in data.get("lines", []))
        return cls(full_text=str(data.get("text", "")), lines=lines)
