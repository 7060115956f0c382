"""Overlay entity."""

from __future__ import annotations

from dataclasses import dataclass

from ..value_objects.geometry import OverlayRect


@dataclass(frozen=True, slots=True)
class LineOverlay:
    """A recognized line positioned over the displayed image."""
    text: str
    rect: OverlayRect

    def to_dict(self) -> dict[str, object]:
        return {"text": self.text, **self.rect.to_dict()}
