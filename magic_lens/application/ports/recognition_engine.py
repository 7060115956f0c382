"""Recognition engine port - interface for OCR engines."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from ...domain.entities.recognition import RecognitionResult


@runtime_checkable
class RecognitionEngine(Protocol):
    """Port for text recognition engines.

    Implementations: Tesseract, EasyOCR, PaddleOCR.
    """

    @property
    def name(self) -> str:
        """Engine name."""
        ...

    @property
    def is_available(self) -> bool:
        """Check if engine dependencies are installed."""
        ...

    def load(self) -> None:
        """Load model into memory."""
        ...

    def unload(self) -> None:
        """Unload model and free memory."""
        ...

    def recognize(self, image_path: Path | str) -> RecognitionResult:
        """Recognize text and per-line boxes in an image.

        Args:
            image_path: Image to process

        Returns:
            Full text and lines with boxes in image pixel coordinates

        Raises:
            RecognitionError: If the engine fails; no partial result
            ImageLoadError: If the image does not exist
        """
        ...
