"""Shared behaviour for recognition engine adapters."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from ...config import DEFAULT_LANGUAGE
from ...domain.entities.recognition import RecognitionResult, RecognizedLine
from ...exceptions import ImageLoadError, RecognitionError

logger = logging.getLogger(__name__)


class BaseRecognizer(ABC):
    """Abstract base class for recognition engines.

    Subclasses implement ``load``, ``unload`` and ``_recognize_lines``;
    ``recognize`` adds lazy loading, path checks, confidence filtering and
    consistent error types.

    Example:
        class MyRecognizer(BaseRecognizer):
            def load(self) -> None:
                self._model = load_my_model()

            def _recognize_lines(self, image_path: Path) -> list[RecognizedLine]:
                return self._convert(self._model.predict(image_path))

            def unload(self) -> None:
                self._model = None
    """

    def __init__(self, language: str = DEFAULT_LANGUAGE, min_confidence: float = 0.0):
        """Initialize recognizer.

        Args:
            language: Tesseract-style language code(s), e.g. 'eng' or 'eng+deu'
            min_confidence: Lines below this confidence (0-1) are dropped
        """
        self.language = language
        self.min_confidence = min_confidence
        self._model: Optional[object] = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Engine name."""

    @property
    def is_loaded(self) -> bool:
        """Check if the model is loaded."""
        return self._model is not None

    @property
    def is_available(self) -> bool:
        """Check if engine dependencies are installed."""
        return True

    @abstractmethod
    def load(self) -> None:
        """Load the engine into memory.

        Raises:
            RecognitionError: If loading fails
        """

    @abstractmethod
    def unload(self) -> None:
        """Unload the engine and free memory."""

    @abstractmethod
    def _recognize_lines(self, image_path: Path) -> list[RecognizedLine]:
        """Run the engine and return lines in the engine's order."""

    def recognize(self, image_path: Path | str) -> RecognitionResult:
        """Recognize text lines with automatic loading.

        Raises:
            ImageLoadError: If image not found
            RecognitionError: If loading or recognition fails
        """
        if not self.is_loaded:
            try:
                self.load()
            except RecognitionError:
                raise
            except Exception as e:
                raise RecognitionError(f"Failed to load {self.name}: {e}") from e

        image_path = Path(image_path)
        if not image_path.exists():
            raise ImageLoadError("Image not found", image_path=str(image_path))

        logger.debug(f"Running {self.name} on {image_path.name}")

        try:
            lines = self._recognize_lines(image_path)
        except RecognitionError:
            raise
        except Exception as e:
            raise RecognitionError(
                f"{self.name} recognition failed: {e}",
                image_path=str(image_path)
            ) from e

        kept = [
            line for line in lines
            if not line.is_empty and line.confidence >= self.min_confidence
        ]
        if len(kept) != len(lines):
            logger.debug(f"Dropped {len(lines) - len(kept)} empty or low-confidence line(s)")

        logger.debug(f"Recognized {len(kept)} line(s)")
        return RecognitionResult.from_lines(kept)

    def __enter__(self):
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.unload()
