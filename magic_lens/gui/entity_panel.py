"""Entity panel: one card per extracted group with copy buttons."""

import logging
from typing import Callable

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtWidgets import (
    QGroupBox, QHBoxLayout, QLabel, QPushButton, QScrollArea, QVBoxLayout, QWidget
)

from ..config import COPY_FEEDBACK_MS
from ..domain.entities.extraction import ExtractedGroup

logger = logging.getLogger(__name__)

COPY_LABEL = "Copy"
DONE_LABEL = "Done!"


class EntityPanel(QScrollArea):
    """Lists extracted entities grouped by rule.

    Args:
        copy_handler: Called with the exact matched string; returns True
            if the clipboard accepted it
        feedback_ms: How long "Done!" stays on a button
    """

    def __init__(
        self,
        copy_handler: Callable[[str], bool],
        feedback_ms: int = COPY_FEEDBACK_MS,
        parent: QWidget | None = None
    ):
        super().__init__(parent)
        self.setObjectName("infoPanel")
        self.setWidgetResizable(True)
        self.setMinimumWidth(280)

        self._copy_handler = copy_handler
        self._feedback_ms = feedback_ms

        self._content = QWidget()
        self._layout = QVBoxLayout(self._content)
        self._layout.setAlignment(Qt.AlignmentFlag.AlignTop)
        self.setWidget(self._content)

        self._empty_label = QLabel("No phone numbers, emails, links or dates found.")
        self._empty_label.setWordWrap(True)
        self._layout.addWidget(self._empty_label)
        self._cards: list[QGroupBox] = []

    def set_groups(self, groups: list[ExtractedGroup]) -> None:
        self.clear()
        self._empty_label.setVisible(not groups)

        for group in groups:
            card = QGroupBox(group.heading)
            card.setObjectName("dataCard")
            card_layout = QVBoxLayout(card)
            for match in group.matches:
                card_layout.addLayout(self._create_row(match))
            self._layout.addWidget(card)
            self._cards.append(card)

    def clear(self) -> None:
        for card in self._cards:
            card.deleteLater()
        self._cards = []
        self._empty_label.hide()

    def _create_row(self, value: str) -> QHBoxLayout:
        row = QHBoxLayout()

        label = QLabel(value)
        label.setTextFormat(Qt.TextFormat.PlainText)
        label.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        row.addWidget(label, 1)

        button = QPushButton(COPY_LABEL)
        button.setObjectName("copyButton")
        # Bound by closure so the payload is the untouched match
        button.clicked.connect(lambda _checked=False, v=value, b=button: self._copy(v, b))
        row.addWidget(button)

        return row

    def _copy(self, value: str, button: QPushButton) -> None:
        if not self._copy_handler(value):
            return

        button.setText(DONE_LABEL)
        timer = QTimer(button)
        timer.setSingleShot(True)
        timer.timeout.connect(lambda: button.setText(COPY_LABEL))
        timer.start(self._feedback_ms)
