"""Qt clipboard adapter - implements the Clipboard port."""

from __future__ import annotations

import logging

from PyQt6.QtGui import QGuiApplication

logger = logging.getLogger(__name__)


class QtClipboard:
    """Writes to the system clipboard through the running Qt application."""

    def write_text(self, text: str) -> bool:
        if QGuiApplication.instance() is None:
            logger.warning("No Qt application running, cannot reach clipboard")
            return False

        clipboard = QGuiApplication.clipboard()
        if clipboard is None:
            return False

        clipboard.setText(text)
        return clipboard.text() == text
