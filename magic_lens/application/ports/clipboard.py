"""Clipboard port - interface for copying text."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Clipboard(Protocol):
    """Port for the system clipboard."""

    def write_text(self, text: str) -> bool:
        """Write text to the clipboard.

        Returns:
            True on success, False if the clipboard refused the write
        """
        ...


class MemoryClipboard:
    """In-process clipboard keeping a history of writes."""

    def __init__(self):
        self._history: list[str] = []

    def write_text(self, text: str) -> bool:
        self._history.append(text)
        return True

    @property
    def text(self) -> str | None:
        return self._history[-1] if self._history else None

    @property
    def history(self) -> list[str]:
        return list(self._history)
