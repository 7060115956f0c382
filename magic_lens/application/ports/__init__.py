"""Ports - interfaces for external dependencies (Dependency Inversion)."""

from .recognition_engine import RecognitionEngine
from .clipboard import Clipboard, MemoryClipboard
from .event_publisher import EventPublisher, SessionEvent, SimpleEventPublisher

__all__ = [
    'RecognitionEngine',
    'Clipboard',
    'MemoryClipboard',
    'EventPublisher',
    'SessionEvent',
    'SimpleEventPublisher',
]
