"""Settings persistence manager for the GUI."""

import logging
from pathlib import Path

from PyQt6.QtCore import QSettings

from ..config import DEFAULT_LANGUAGE
from ..domain.value_objects.config import DisplayMode, LensConfig, RecognizerType

logger = logging.getLogger(__name__)


# Default values for all settings
DEFAULT_SETTINGS = {
    "display/mode": DisplayMode.LENS.value,
    "ocr/engine": RecognizerType.TESSERACT.value,
    "ocr/language": DEFAULT_LANGUAGE,
    "ocr/min_confidence": 0.0,
    "rules/file": "",
    "paths/last_folder": "",
}


class SettingsManager:
    """Persists user preferences and window geometry with QSettings."""

    ORGANIZATION = "magic_lens"
    APPLICATION = "magic_lens"

    def __init__(self, settings: QSettings | None = None):
        self.settings = settings or QSettings(
            QSettings.Format.IniFormat,
            QSettings.Scope.UserScope,
            self.ORGANIZATION,
            self.APPLICATION
        )

    def load_window_geometry(self, window) -> None:
        if self.settings.contains("window/geometry"):
            window.restoreGeometry(self.settings.value("window/geometry"))
        if self.settings.contains("window/state"):
            window.restoreState(self.settings.value("window/state"))

    def save_window_geometry(self, window) -> None:
        self.settings.setValue("window/geometry", window.saveGeometry())
        self.settings.setValue("window/state", window.saveState())

    def load_config(self) -> LensConfig:
        """Build a LensConfig from stored values, falling back to defaults.

        Stored values that no longer validate are ignored with a warning.
        """
        rules_file = self._value("rules/file")
        try:
            return LensConfig(
                default_mode=self._value("display/mode"),
                recognizer=self._value("ocr/engine"),
                language=self._value("ocr/language"),
                min_confidence=float(self._value("ocr/min_confidence")),
                rules_file=Path(rules_file) if rules_file else None,
            )
        except ValueError as e:
            logger.warning(f"Ignoring invalid stored settings: {e}")
            return LensConfig()

    def save_config(self, config: LensConfig) -> None:
        """Store engine and rule preferences. The mode is saved by save_mode."""
        self.settings.setValue("ocr/engine", config.recognizer.value)
        self.settings.setValue("ocr/language", config.language)
        self.settings.setValue("ocr/min_confidence", config.min_confidence)
        self.settings.setValue("rules/file", str(config.rules_file) if config.rules_file else "")

    def save_mode(self, mode: DisplayMode) -> None:
        self.settings.setValue("display/mode", mode.value)

    def get_last_folder(self) -> str:
        return str(self._value("paths/last_folder"))

    def set_last_folder(self, path: str) -> None:
        self.settings.setValue("paths/last_folder", path)

    def sync(self) -> None:
        self.settings.sync()

    def _value(self, key: str):
        return self.settings.value(key, DEFAULT_SETTINGS[key])
