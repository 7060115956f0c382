"""Value objects - immutable data with validation."""

from .geometry import BoundingBox, ImageFrame, OverlayRect
from .rules import EntityRule
from .config import LensConfig, DisplayMode, RecognizerType

__all__ = [
    'BoundingBox',
    'ImageFrame',
    'OverlayRect',
    'EntityRule',
    'LensConfig',
    'DisplayMode',
    'RecognizerType',
]
