"""Image stage: the displayed image with line overlays on top."""

import logging

from PyQt6.QtCore import QRect, QSize, Qt, pyqtSignal
from PyQt6.QtGui import QPixmap
from PyQt6.QtWidgets import QLabel, QWidget

from ..domain.entities.overlay import LineOverlay

logger = logging.getLogger(__name__)

# Lens mode: recognized text drawn over the image
LENS_STYLE = """
QLabel#textOverlay {
    background-color: rgba(255, 255, 255, 225);
    color: #111111;
    border-radius: 2px;
    padding: 0px;
}
"""

# Highlight mode: image stays visible, lines are tinted
HIGHLIGHT_STYLE = """
QLabel#textOverlay {
    background-color: rgba(94, 214, 198, 90);
    color: transparent;
    border: 1px solid rgba(94, 214, 198, 200);
    border-radius: 2px;
    padding: 0px;
}
"""


class ImageStage(QWidget):
    """Shows the image scaled to fit and positions overlay labels over it.

    The image is never enlarged past its natural size. ``resized`` fires
    with the new on-screen image size whenever the displayed rectangle
    changes.
    """

    resized = pyqtSignal(float, float)  # rendered width, rendered height

    def __init__(self, parent: QWidget | None = None):
        super().__init__(parent)
        self.setMinimumSize(200, 200)

        self._pixmap: QPixmap | None = None
        self._image_rect = QRect()

        self._image_label = QLabel(self)
        self._image_label.setObjectName("sourceImage")

        self._overlay_container = QWidget(self)
        self._overlay_container.setObjectName("overlayContainer")
        self._overlay_container.setStyleSheet(LENS_STYLE)
        self._overlay_labels: list[QLabel] = []

        self._busy_label = QLabel("Analyzing image...", self)
        self._busy_label.setObjectName("loadingOverlay")
        self._busy_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._busy_label.hide()

    def set_image(self, pixmap: QPixmap) -> None:
        self._pixmap = pixmap
        self.clear_overlays()
        self._relayout()

    def clear(self) -> None:
        self._pixmap = None
        self._image_rect = QRect()
        self._image_label.clear()
        self.clear_overlays()
        self.set_busy(False)

    def rendered_size(self) -> tuple[float, float] | None:
        """Current on-screen image size, or None without an image."""
        if self._pixmap is None or self._image_rect.isEmpty():
            return None
        return float(self._image_rect.width()), float(self._image_rect.height())

    def set_busy(self, busy: bool) -> None:
        self._busy_label.setVisible(busy)
        if busy:
            self._busy_label.raise_()

    def set_highlight(self, enabled: bool) -> None:
        """Switch overlay styling. Geometry is untouched."""
        self._overlay_container.setStyleSheet(HIGHLIGHT_STYLE if enabled else LENS_STYLE)

    def set_overlays(self, overlays: list[LineOverlay]) -> None:
        """Replace every overlay label with freshly mapped ones."""
        self.clear_overlays()

        for overlay in overlays:
            rect = overlay.rect
            label = QLabel(overlay.text, self._overlay_container)
            label.setObjectName("textOverlay")
            label.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
            label.setGeometry(
                round(rect.left),
                round(rect.top),
                max(1, round(rect.width)),
                max(1, round(rect.height))
            )
            font = label.font()
            font.setPixelSize(max(1, round(rect.font_size)))
            label.setFont(font)
            label.show()
            self._overlay_labels.append(label)

        logger.debug(f"Placed {len(self._overlay_labels)} overlay(s)")

    def clear_overlays(self) -> None:
        for label in self._overlay_labels:
            label.deleteLater()
        self._overlay_labels = []

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._relayout()

    def _relayout(self) -> None:
        self._busy_label.setGeometry(self.rect())

        if self._pixmap is None or self._pixmap.isNull():
            return

        natural = self._pixmap.size()
        available = self.size()
        if natural.width() <= available.width() and natural.height() <= available.height():
            target = QSize(natural)
        else:
            target = natural.scaled(available, Qt.AspectRatioMode.KeepAspectRatio)

        x = (available.width() - target.width()) // 2
        y = (available.height() - target.height()) // 2
        new_rect = QRect(x, y, target.width(), target.height())

        self._image_label.setGeometry(new_rect)
        self._image_label.setPixmap(self._pixmap.scaled(
            target,
            Qt.AspectRatioMode.IgnoreAspectRatio,
            Qt.TransformationMode.SmoothTransformation
        ))
        self._overlay_container.setGeometry(new_rect)

        if new_rect.size() != self._image_rect.size():
            self._image_rect = new_rect
            self.resized.emit(float(target.width()), float(target.height()))
        else:
            self._image_rect = new_rect
