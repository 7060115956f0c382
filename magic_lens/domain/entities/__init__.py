"""Domain entities."""

from .recognition import RecognizedLine, RecognitionResult
from .overlay import LineOverlay
from .extraction import ExtractedGroup

__all__ = ['RecognizedLine', 'RecognitionResult', 'LineOverlay', 'ExtractedGroup']
