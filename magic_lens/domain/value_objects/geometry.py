"""Geometry value objects."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Mapping

from ...exceptions import ValidationError


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis-aligned box in source-image pixel coordinates."""
    x0: float
    y0: float
    x1: float
    y1: float

    def __post_init__(self) -> None:
        if self.x1 < self.x0 or self.y1 < self.y0:
            raise ValidationError(
                f"Degenerate bounding box ({self.x0}, {self.y0}, {self.x1}, {self.y1})",
                field="bbox"
            )

    def __iter__(self) -> Iterator[float]:
        """Allow unpacking: x0, y0, x1, y1 = box"""
        yield self.x0
        yield self.y0
        yield self.x1
        yield self.y1

    @property
    def width(self) -> float:
        return self.x1 - self.x0

    @property
    def height(self) -> float:
        return self.y1 - self.y0

    @classmethod
    def from_points(cls, points: Any) -> BoundingBox:
        """Create the box enclosing a polygon given as (x, y) pairs."""
        xs = [float(p[0]) for p in points]
        ys = [float(p[1]) for p in points]
        if not xs:
            raise ValidationError("Cannot build a bounding box from no points", field="bbox")
        return cls(min(xs), min(ys), max(xs), max(ys))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BoundingBox:
        """Create from an engine-style ``{x0, y0, x1, y1}`` mapping."""
        try:
            return cls(
                float(data["x0"]),
                float(data["y0"]),
                float(data["x1"]),
                float(data["y1"])
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValidationError(f"Invalid bounding box: {data!r}", field="bbox") from e

    def to_dict(self) -> dict[str, float]:
        return {"x0": self.x0, "y0": self.y0, "x1": self.x1, "y1": self.y1}


@dataclass(frozen=True, slots=True)
class ImageFrame:
    """Natural and on-screen dimensions of the displayed image.

    Natural dimensions are fixed once the image decodes; rendered
    dimensions change with every resize or layout reflow.
    """
    natural_width: float
    natural_height: float
    rendered_width: float
    rendered_height: float

    @property
    def is_decoded(self) -> bool:
        """Check if natural dimensions are known."""
        return self.natural_width > 0 and self.natural_height > 0

    @property
    def scale_x(self) -> float:
        return self.rendered_width / self.natural_width

    @property
    def scale_y(self) -> float:
        return self.rendered_height / self.natural_height

    def resized(self, rendered_width: float, rendered_height: float) -> ImageFrame:
        """Return a frame with new rendered dimensions."""
        return ImageFrame(
            self.natural_width,
            self.natural_height,
            rendered_width,
            rendered_height
        )

    @classmethod
    def at_natural_size(cls, width: float, height: float) -> ImageFrame:
        """Frame for an image shown at its intrinsic size."""
        return cls(width, height, width, height)


@dataclass(frozen=True, slots=True)
class OverlayRect:
    """Overlay rectangle in display pixels."""
    left: float
    top: float
    width: float
    height: float
    font_size: float

    def to_dict(self) -> dict[str, float]:
        return {
            "left": self.left,
            "top": self.top,
            "width": self.width,
            "height": self.height,
            "font_size": self.font_size,
        }
