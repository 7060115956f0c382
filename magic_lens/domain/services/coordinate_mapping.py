"""Coordinate mapping service - image pixels to display overlays."""

from __future__ import annotations

from typing import Iterable

from ...config import FONT_SIZE_RATIO
from ...exceptions import FrameNotReadyError
from ..entities.overlay import LineOverlay
from ..entities.recognition import RecognizedLine
from ..value_objects.geometry import BoundingBox, ImageFrame, OverlayRect


def map_box_to_overlay(
    box: BoundingBox,
    frame: ImageFrame,
    font_scale: float = FONT_SIZE_RATIO
) -> OverlayRect:
    """Convert an image-pixel box into display-space overlay geometry.

    Each axis is scaled on its own, so an image stretched by layout
    constraints still gets overlays covering exactly the rendered region.

    Args:
        box: Box in source-image pixel coordinates
        frame: Natural and rendered image dimensions
        font_scale: Font size as a fraction of overlay height

    Returns:
        Overlay rectangle in display pixels

    Raises:
        FrameNotReadyError: If the image natural size is not known
    """
    if not frame.is_decoded:
        raise FrameNotReadyError(
            f"Cannot map box before image decodes "
            f"(natural size {frame.natural_width}x{frame.natural_height})"
        )

    scale_x = frame.scale_x
    scale_y = frame.scale_y
    height = box.height * scale_y

    return OverlayRect(
        left=box.x0 * scale_x,
        top=box.y0 * scale_y,
        width=box.width * scale_x,
        height=height,
        font_size=height * font_scale
    )


def map_lines_to_overlays(
    lines: Iterable[RecognizedLine],
    frame: ImageFrame,
    font_scale: float = FONT_SIZE_RATIO
) -> list[LineOverlay]:
    """Map every recognized line for the current frame.

    Always a full recomputation in line order.
    """
    if not frame.is_decoded:
        raise FrameNotReadyError()

    return [
        LineOverlay(
            text=line.text.strip(),
            rect=map_box_to_overlay(line.bbox, frame, font_scale)
        )
        for line in lines
    ]
