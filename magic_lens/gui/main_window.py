"""Main window for the Magic Lens GUI."""

import logging
import sys
from pathlib import Path

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QDragEnterEvent, QDropEvent, QKeySequence, QPixmap, QShortcut
from PyQt6.QtWidgets import (
    QApplication, QCheckBox, QFileDialog, QHBoxLayout, QLabel, QMainWindow,
    QMessageBox, QPushButton, QSplitter, QStackedWidget, QVBoxLayout, QWidget
)

from ..adapters.clipboard.qt_clipboard import QtClipboard
from ..application.ports.event_publisher import SessionEvent
from ..application.services.image_analysis import read_image_size
from ..application.services.lens_session import LensSession
from ..config import SUPPORTED_IMAGE_EXTENSIONS
from ..domain.entities.recognition import RecognitionResult
from ..domain.services.entity_extraction import EntityRuleRegistry, build_registry
from ..domain.value_objects.config import DisplayMode
from ..exceptions import ConfigurationError, ImageLoadError
from ..utils.env import setup_logging
from .entity_panel import EntityPanel
from .image_stage import ImageStage
from .recognition_controller import RecognitionController
from .settings_manager import SettingsManager

logger = logging.getLogger(__name__)


class Theme:
    """Dark theme color scheme."""
    BG_DARK = "#0e1116"
    BG_MEDIUM = "#151a23"
    BG_LIGHT = "#1c2432"
    ACCENT = "#5b8cff"
    ACCENT_HOVER = "#7aa2ff"
    SUCCESS = "#2ed573"
    TEXT = "#e7ebf2"
    TEXT_DIM = "#a4adbb"
    BORDER = "#263043"


STYLESHEET = f"""
QMainWindow {{
    background-color: {Theme.BG_DARK};
    color: {Theme.TEXT};
    font-size: 10pt;
}}

QLabel {{
    color: {Theme.TEXT};
}}

#dropZone {{
    border: 2px dashed {Theme.BORDER};
    border-radius: 16px;
    color: {Theme.TEXT_DIM};
    font-size: 13pt;
}}

#loadingOverlay {{
    background-color: rgba(14, 17, 22, 170);
    color: {Theme.TEXT};
    font-size: 14pt;
    font-weight: 600;
}}

QGroupBox#dataCard {{
    background-color: {Theme.BG_MEDIUM};
    border: 1px solid {Theme.BORDER};
    border-radius: 10px;
    margin-top: 18px;
    padding: 8px;
    font-weight: 600;
}}

QGroupBox#dataCard::title {{
    subcontrol-origin: margin;
    left: 10px;
    padding: 0 4px;
}}

QPushButton {{
    background-color: {Theme.BG_LIGHT};
    color: {Theme.TEXT};
    border: 1px solid {Theme.BORDER};
    border-radius: 8px;
    padding: 6px 14px;
}}

QPushButton:hover {{
    border-color: {Theme.ACCENT};
}}

QPushButton#primaryButton {{
    background-color: {Theme.ACCENT};
    border: none;
    font-weight: 600;
}}

QPushButton#primaryButton:hover {{
    background-color: {Theme.ACCENT_HOVER};
}}

QPushButton#copyButton {{
    min-width: 64px;
}}

QScrollArea#infoPanel {{
    background: transparent;
    border: none;
}}
"""


class MainWindow(QMainWindow):
    """Upload an image, overlay its recognized lines and list its entities."""

    def __init__(self, settings_manager: SettingsManager | None = None):
        super().__init__()
        self.setWindowTitle("Magic Lens")
        self.resize(1200, 800)
        self.setAcceptDrops(True)

        self.settings_manager = settings_manager or SettingsManager()
        self.config = self.settings_manager.load_config()
        self.session = LensSession(config=self.config, registry=self._load_registry())
        self.session.subscribe(self._on_session_event)
        self.controller = RecognitionController(self.config)
        self.clipboard = QtClipboard()

        self._setup_ui()
        self.setStyleSheet(STYLESHEET)
        self.settings_manager.load_window_geometry(self)

        self.mode_check.setChecked(self.session.highlight_enabled)
        self.image_stage.set_highlight(self.session.highlight_enabled)

    def _load_registry(self) -> EntityRuleRegistry:
        try:
            return build_registry(self.config)
        except ConfigurationError as e:
            logger.warning(f"Using built-in rules only: {e}")
            return EntityRuleRegistry.builtin()

    # -- layout ------------------------------------------------------------

    def _setup_ui(self) -> None:
        central = QWidget()
        central.setObjectName("centralWidget")
        layout = QVBoxLayout(central)

        layout.addLayout(self._create_header())

        self.pages = QStackedWidget()
        self.pages.addWidget(self._create_drop_page())
        self.pages.addWidget(self._create_result_page())
        layout.addWidget(self.pages, 1)

        self.setCentralWidget(central)
        self.statusBar().showMessage("Drop an image or press Ctrl+O")

        QShortcut(QKeySequence("Ctrl+O"), self, activated=self.browse_image)
        QShortcut(QKeySequence("Ctrl+N"), self, activated=self.reset_session)
        QShortcut(QKeySequence("Ctrl+H"), self, activated=self.mode_check.toggle)

    def _create_header(self) -> QHBoxLayout:
        header = QHBoxLayout()

        title = QLabel("Magic Lens")
        title.setStyleSheet("font-size: 16pt; font-weight: 700;")
        header.addWidget(title)
        header.addStretch()

        self.mode_check = QCheckBox("Highlight mode")
        self.mode_check.toggled.connect(self._on_mode_toggled)
        header.addWidget(self.mode_check)

        self.new_button = QPushButton("New image")
        self.new_button.clicked.connect(self.reset_session)
        header.addWidget(self.new_button)

        return header

    def _create_drop_page(self) -> QWidget:
        page = QWidget()
        layout = QVBoxLayout(page)

        drop_zone = QLabel("Drop an image here")
        drop_zone.setObjectName("dropZone")
        drop_zone.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(drop_zone, 1)

        upload_button = QPushButton("Upload image")
        upload_button.setObjectName("primaryButton")
        upload_button.clicked.connect(self.browse_image)
        layout.addWidget(upload_button, 0, Qt.AlignmentFlag.AlignHCenter)

        return page

    def _create_result_page(self) -> QWidget:
        splitter = QSplitter(Qt.Orientation.Horizontal)

        self.image_stage = ImageStage()
        self.image_stage.resized.connect(self._on_stage_resized)
        splitter.addWidget(self.image_stage)

        self.entity_panel = EntityPanel(
            copy_handler=lambda text: self.session.copy_to_clipboard(text, self.clipboard),
            feedback_ms=self.config.copy_feedback_ms
        )
        self.entity_panel.hide()
        splitter.addWidget(self.entity_panel)

        splitter.setStretchFactor(0, 3)
        splitter.setStretchFactor(1, 1)
        return splitter

    # -- image flow --------------------------------------------------------

    def browse_image(self) -> None:
        patterns = " ".join(f"*{ext}" for ext in sorted(SUPPORTED_IMAGE_EXTENSIONS))
        path, _ = QFileDialog.getOpenFileName(
            self,
            "Select Image",
            self.settings_manager.get_last_folder(),
            f"Images ({patterns})"
        )
        if path:
            self.open_image(Path(path))

    def open_image(self, image_path: Path) -> None:
        """Show an image and start recognizing it in the background."""
        try:
            natural_width, natural_height = read_image_size(image_path)
        except ImageLoadError as e:
            logger.warning(str(e))
            QMessageBox.warning(self, "Magic Lens", f"Cannot open image:\n{e}")
            return

        pixmap = QPixmap(str(image_path))
        if pixmap.isNull():
            QMessageBox.warning(self, "Magic Lens", f"Cannot display {image_path.name}")
            return

        self.settings_manager.set_last_folder(str(image_path.parent))

        self.entity_panel.clear()
        self.entity_panel.hide()
        # Load first so the resize emitted by set_image finds no result to re-map.
        ticket = self.session.load_image(image_path, natural_width, natural_height)

        self.pages.setCurrentIndex(1)
        self.image_stage.set_image(pixmap)
        rendered = self.image_stage.rendered_size()
        if rendered:
            self.session.resize(*rendered)
        self.image_stage.set_busy(True)

        try:
            thread = self.controller.start(image_path, ticket)
        except ConfigurationError as e:
            self._on_recognition_failed(str(e), ticket)
            return

        thread.recognized_signal.connect(self._on_recognized)
        thread.failed_signal.connect(self._on_recognition_failed)
        thread.start()

    def _on_recognized(self, result: RecognitionResult, ticket: int) -> None:
        if not self.session.complete_recognition(result, ticket):
            return

        self.image_stage.set_busy(False)
        rendered = self.image_stage.rendered_size()
        overlays = self.session.resize(*rendered) if rendered else None
        self.image_stage.set_overlays(overlays if overlays is not None else self.session.overlays)
        self.entity_panel.set_groups(self.session.groups)
        self.entity_panel.show()

    def _on_recognition_failed(self, message: str, ticket: int) -> None:
        if not self.session.fail_recognition(message, ticket):
            return

        self.image_stage.clear()
        self.pages.setCurrentIndex(0)
        QMessageBox.warning(self, "Magic Lens", self.session.last_error)

    def _on_stage_resized(self, width: float, height: float) -> None:
        overlays = self.session.resize(width, height)
        if overlays is not None:
            self.image_stage.set_overlays(overlays)

    def _on_mode_toggled(self, checked: bool) -> None:
        mode = self.session.set_mode(DisplayMode.HIGHLIGHT if checked else DisplayMode.LENS)
        self.image_stage.set_highlight(self.session.highlight_enabled)
        self.settings_manager.save_mode(mode)

    def reset_session(self) -> None:
        self.session.reset()
        self.image_stage.clear()
        self.entity_panel.clear()
        self.entity_panel.hide()
        self.pages.setCurrentIndex(0)

    def _on_session_event(self, event: SessionEvent) -> None:
        self.statusBar().showMessage(event.message)

    # -- Qt events ---------------------------------------------------------

    def dragEnterEvent(self, event: QDragEnterEvent):
        if event.mimeData().hasUrls():
            event.acceptProposedAction()

    def dragMoveEvent(self, event):
        if event.mimeData().hasUrls():
            event.acceptProposedAction()

    def dropEvent(self, event: QDropEvent):
        for url in event.mimeData().urls():
            path = Path(url.toLocalFile())
            if path.is_file() and path.suffix.lower() in SUPPORTED_IMAGE_EXTENSIONS:
                self.open_image(path)
                return
        self.statusBar().showMessage("Dropped file is not a supported image")

    def closeEvent(self, event):
        self.settings_manager.save_window_geometry(self)
        self.settings_manager.save_config(self.config)
        self.settings_manager.sync()
        self.controller.cleanup()
        event.accept()


def main():
    """Main entry point."""
    setup_logging()

    app = QApplication(sys.argv)
    app.setStyle("Fusion")

    window = MainWindow()
    window.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
