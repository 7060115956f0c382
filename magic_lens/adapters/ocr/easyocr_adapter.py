"""EasyOCR adapter - implements RecognitionEngine with EasyOCR."""

from __future__ import annotations

import gc
import logging
from pathlib import Path

import numpy as np

from ...config import DEFAULT_LANGUAGE
from ...domain.entities.recognition import RecognizedLine
from ...domain.value_objects.geometry import BoundingBox
from ...exceptions import RecognitionError
from .base import BaseRecognizer

logger = logging.getLogger(__name__)

# Tesseract language codes -> EasyOCR language codes
LANGUAGE_CODES: dict[str, str] = {
    "eng": "en",
    "deu": "de",
    "fra": "fr",
    "spa": "es",
    "ita": "it",
    "por": "pt",
    "nld": "nl",
    "rus": "ru",
    "jpn": "ja",
    "kor": "ko",
    "chi_sim": "ch_sim",
    "chi_tra": "ch_tra",
}


def to_easyocr_languages(language: str) -> list[str]:
    """Translate 'eng+deu' style codes into EasyOCR's list form."""
    return [LANGUAGE_CODES.get(code, code) for code in language.split("+") if code]


def parse_readtext(results: list) -> list[RecognizedLine]:
    """Convert ``readtext`` output into recognized lines.

    EasyOCR returns ``(quad, text, confidence)`` tuples, where quad is
    [[x1,y1], [x2,y1], [x2,y2], [x1,y2]].
    """
    lines: list[RecognizedLine] = []
    for quad, text, confidence in results:
        points = np.asarray(quad, dtype=np.float64).reshape(-1, 2)
        lines.append(RecognizedLine(
            text=str(text),
            bbox=BoundingBox(
                float(points[:, 0].min()),
                float(points[:, 1].min()),
                float(points[:, 0].max()),
                float(points[:, 1].max())
            ),
            confidence=float(confidence)
        ))
    return lines


class EasyOCRAdapter(BaseRecognizer):
    """Recognition with EasyOCR.

    EasyOCR has simpler dependencies than PaddleOCR and needs no system
    binary, but pulls in PyTorch.

    Installation:
        pip install easyocr
    """

    def __init__(
        self,
        language: str = DEFAULT_LANGUAGE,
        min_confidence: float = 0.0,
        gpu: bool = False
    ):
        super().__init__(language, min_confidence)
        self.lang_list = to_easyocr_languages(language) or ['en']
        self.gpu = gpu

    @property
    def name(self) -> str:
        return "EasyOCR"

    @property
    def is_available(self) -> bool:
        try:
            import easyocr  # noqa: F401
            return True
        except ImportError:
            return False

    def load(self) -> None:
        """Load the EasyOCR reader.

        Raises:
            RecognitionError: If EasyOCR is not installed or loading fails
        """
        if self.is_loaded:
            logger.debug("EasyOCR model already loaded")
            return

        logger.debug(f"Loading EasyOCR model (languages={self.lang_list}, gpu={self.gpu})...")

        try:
            import easyocr
            self._model = easyocr.Reader(self.lang_list, gpu=self.gpu, verbose=False)
            logger.info("EasyOCR model loaded")
        except ImportError as e:
            raise RecognitionError(
                "EasyOCR not installed. Install with: pip install easyocr"
            ) from e
        except Exception as e:
            raise RecognitionError(f"Failed to load EasyOCR model: {e}") from e

    def unload(self) -> None:
        if self._model is not None:
            del self._model
            self._model = None
            gc.collect()
            logger.info("EasyOCR model unloaded")

    def _recognize_lines(self, image_path: Path) -> list[RecognizedLine]:
        results = self._model.readtext(str(image_path))
        return parse_readtext(results)
