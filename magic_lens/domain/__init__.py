"""Domain layer - pure business logic."""

from .entities.recognition import RecognizedLine, RecognitionResult
from .entities.overlay import LineOverlay
from .entities.extraction import ExtractedGroup
from .value_objects.config import LensConfig, DisplayMode, RecognizerType
from .value_objects.geometry import BoundingBox, ImageFrame, OverlayRect
from .value_objects.rules import EntityRule

__all__ = [
    # Entities
    'RecognizedLine',
    'RecognitionResult',
    'LineOverlay',
    'ExtractedGroup',
    # Value Objects
    'LensConfig',
    'DisplayMode',
    'RecognizerType',
    'BoundingBox',
    'ImageFrame',
    'OverlayRect',
    'EntityRule',
]
