"""Event Publisher port - interface for publishing events."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class SessionEvent:
    """Event emitted on every session transition."""
    stage: str
    message: str
    image_path: Path | None = None


@runtime_checkable
class EventPublisher(Protocol):
    """Port for publishing session events."""

    def publish(self, event: SessionEvent) -> None:
        """Publish an event."""
        ...

    def subscribe(self, callback: Callable[[SessionEvent], None]) -> None:
        """Subscribe to events."""
        ...


class SimpleEventPublisher:
    """Simple synchronous event publisher."""

    def __init__(self):
        self._subscribers: list[Callable[[SessionEvent], None]] = []

    def publish(self, event: SessionEvent) -> None:
        for callback in self._subscribers:
            callback(event)

    def subscribe(self, callback: Callable[[SessionEvent], None]) -> None:
        self._subscribers.append(callback)
