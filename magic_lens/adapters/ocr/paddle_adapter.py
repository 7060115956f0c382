"""PaddleOCR adapter - implements RecognitionEngine with PaddleOCR."""

from __future__ import annotations

import gc
import logging
from pathlib import Path

from ...config import DEFAULT_LANGUAGE
from ...domain.entities.recognition import RecognizedLine
from ...domain.value_objects.geometry import BoundingBox
from ...exceptions import RecognitionError
from .base import BaseRecognizer

logger = logging.getLogger(__name__)

# Tesseract language codes -> PaddleOCR language codes
LANGUAGE_CODES: dict[str, str] = {
    "eng": "en",
    "deu": "german",
    "fra": "french",
    "jpn": "japan",
    "kor": "korean",
    "chi_sim": "ch",
    "chi_tra": "chinese_cht",
}


class PaddleOCRAdapter(BaseRecognizer):
    """Recognition with the PaddleOCR pipeline.

    Installation:
        Install PaddlePaddle from https://www.paddlepaddle.org.cn/
        Then run: pip install paddleocr
    """

    def __init__(
        self,
        language: str = DEFAULT_LANGUAGE,
        min_confidence: float = 0.0,
        device: str = "cpu"
    ):
        super().__init__(language, min_confidence)
        primary = language.split("+")[0]
        self.paddle_lang = LANGUAGE_CODES.get(primary, primary)
        self.device = device

    @property
    def name(self) -> str:
        return "PaddleOCR"

    @property
    def is_available(self) -> bool:
        """Check if PaddleOCR is installed."""
        try:
            import paddleocr  # noqa: F401
            return True
        except ImportError:
            return False

    def load(self) -> None:
        """Load PaddleOCR model.

        Raises:
            RecognitionError: If PaddleOCR is not installed or loading fails
        """
        if self._model is not None:
            return

        try:
            from paddleocr import PaddleOCR
            self._model = PaddleOCR(
                lang=self.paddle_lang,
                device=self.device,
                use_doc_orientation_classify=False,
                use_doc_unwarping=False,
                use_textline_orientation=False
            )
            logger.info(f"PaddleOCR model loaded (lang={self.paddle_lang})")
        except ImportError as e:
            raise RecognitionError(
                "PaddleOCR not installed. Install with: pip install paddleocr"
            ) from e
        except Exception as e:
            raise RecognitionError(f"Failed to load PaddleOCR model: {e}") from e

    def unload(self) -> None:
        """Unload model."""
        if self._model is not None:
            del self._model
            self._model = None
            gc.collect()
            logger.info("PaddleOCR model unloaded")

    def _recognize_lines(self, image_path: Path) -> list[RecognizedLine]:
        result = self._model.predict(str(image_path))
        if not result:
            return []
        return self._parse_result(result[0])

    def _parse_result(self, raw_result: object) -> list[RecognizedLine]:
        """Parse one PaddleOCR page result."""
        result_dict = dict(raw_result)

        texts = list(result_dict.get("rec_texts", []))
        polygons = list(result_dict.get("rec_polys", []))
        scores = list(result_dict.get("rec_scores", []))

        lines: list[RecognizedLine] = []

        for i, text in enumerate(texts):
            if i >= len(polygons):
                logger.warning(f"Mismatch between texts and polygons at index {i}")
                break

            confidence = scores[i] if i < len(scores) else 0.0
            lines.append(RecognizedLine(
                text=str(text),
                bbox=BoundingBox.from_points(polygons[i]),
                confidence=float(confidence)
            ))

        return lines
