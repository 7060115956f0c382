"""Recognition controller for running the engine off the UI thread."""

import logging
from pathlib import Path

from PyQt6.QtCore import QThread, pyqtSignal

from ..application.ports.recognition_engine import RecognitionEngine
from ..domain.value_objects.config import LensConfig
from ..exceptions import ImageLoadError, RecognitionError
from ..infrastructure.plugin_registry import PluginRegistry

logger = logging.getLogger(__name__)


class RecognitionThread(QThread):
    """Runs one recognition and reports exactly one outcome."""

    # Signals for thread-safe UI updates
    recognized_signal = pyqtSignal(object, int)  # RecognitionResult, ticket
    failed_signal = pyqtSignal(str, int)  # error message, ticket

    def __init__(self, engine: RecognitionEngine, image_path: Path, ticket: int):
        super().__init__()
        self.engine = engine
        self.image_path = image_path
        self.ticket = ticket

    def run(self) -> None:
        try:
            result = self.engine.recognize(self.image_path)
        except (RecognitionError, ImageLoadError) as e:
            self.failed_signal.emit(str(e), self.ticket)
            return
        except Exception as e:
            logger.exception("Unexpected recognition error")
            self.failed_signal.emit(f"{type(e).__name__}: {e}", self.ticket)
            return

        self.recognized_signal.emit(result, self.ticket)


class RecognitionController:
    """Owns the engine and the recognition thread."""

    def __init__(self, config: LensConfig):
        self._config = config
        self._engine: RecognitionEngine | None = None
        self._threads: list[RecognitionThread] = []

    @property
    def engine(self) -> RecognitionEngine:
        """Engine selected in the configuration, created on first use."""
        if self._engine is None:
            self._engine = PluginRegistry.create_from_config(self._config)
        return self._engine

    def start(self, image_path: Path, ticket: int) -> RecognitionThread:
        """Create (not start) a recognition thread for the image.

        Raises:
            ConfigurationError: If the configured engine does not exist
        """
        thread = RecognitionThread(self.engine, image_path, ticket)
        thread.finished.connect(lambda t=thread: self._forget(t))
        self._threads.append(thread)
        return thread

    def cleanup(self) -> None:
        """Wait for running threads and release the engine."""
        for thread in self._threads:
            if thread.isRunning():
                thread.wait(2000)
        self._threads = []
        self._unload()

    def _forget(self, thread: RecognitionThread) -> None:
        if thread in self._threads:
            self._threads.remove(thread)

    def _unload(self) -> None:
        if self._engine is not None:
            self._engine.unload()
            self._engine = None
