"""Tesseract adapter - implements RecognitionEngine with pytesseract."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Mapping

import numpy as np

from ...config import DEFAULT_LANGUAGE
from ...domain.entities.recognition import RecognizedLine
from ...domain.value_objects.geometry import BoundingBox
from ...exceptions import RecognitionError
from .base import BaseRecognizer

logger = logging.getLogger(__name__)

# Overrides the tesseract binary location
TESSERACT_CMD_ENV = "MAGIC_LENS_TESSERACT"


def _safe_float(x: Any) -> float:
    try:
        return float(x)
    except (TypeError, ValueError):
        return float("nan")


def group_tokens(data: Mapping[str, list], min_conf: float = 0.0) -> list[RecognizedLine]:
    """Group ``image_to_data`` word tokens into lines.

    Tokens sharing (block_num, par_num, line_num) form one line. The line
    box is the union of its token boxes and its confidence the mean token
    confidence. Lines keep Tesseract's reading order.
    """
    n = len(data.get("text", []))
    groups: dict[tuple[int, int, int], list[int]] = {}

    for i in range(n):
        txt = str(data["text"][i] or "").strip()
        if not txt:
            continue
        conf = _safe_float(data["conf"][i]) if "conf" in data else 0.0
        if np.isnan(conf) or conf < 0:
            continue
        if conf / 100.0 < min_conf:
            continue

        key = (
            int(data.get("block_num", [0] * n)[i]),
            int(data.get("par_num", [0] * n)[i]),
            int(data.get("line_num", [0] * n)[i]),
        )
        groups.setdefault(key, []).append(i)

    lines: list[RecognizedLine] = []
    for idxs in groups.values():
        # Preserve token order left->right
        idxs = sorted(idxs, key=lambda j: int(data["left"][j]))

        lefts = np.array([int(data["left"][j]) for j in idxs])
        tops = np.array([int(data["top"][j]) for j in idxs])
        rights = lefts + np.array([int(data["width"][j]) for j in idxs])
        bottoms = tops + np.array([int(data["height"][j]) for j in idxs])
        confs = [_safe_float(data["conf"][j]) / 100.0 for j in idxs] if "conf" in data else []

        lines.append(RecognizedLine(
            text=" ".join(str(data["text"][j]).strip() for j in idxs),
            bbox=BoundingBox(
                float(lefts.min()),
                float(tops.min()),
                float(rights.max()),
                float(bottoms.max())
            ),
            confidence=float(np.mean(confs)) if confs else 0.0
        ))

    return lines


class TesseractAdapter(BaseRecognizer):
    """Recognition with the Tesseract engine.

    Args:
        language: Tesseract language code(s), e.g. 'eng' or 'eng+deu'
        min_confidence: Lines below this mean confidence are dropped
        tesseract_cmd: Path to the tesseract binary (falls back to
            ``$MAGIC_LENS_TESSERACT`` and then to ``PATH``)
        psm: Tesseract page segmentation mode

    Installation:
        pip install pytesseract  (plus the tesseract binary)
    """

    def __init__(
        self,
        language: str = DEFAULT_LANGUAGE,
        min_confidence: float = 0.0,
        tesseract_cmd: str | None = None,
        psm: int = 3
    ):
        super().__init__(language, min_confidence)
        self.tesseract_cmd = tesseract_cmd or os.getenv(TESSERACT_CMD_ENV)
        self.psm = psm

    @property
    def name(self) -> str:
        return "Tesseract"

    @property
    def is_available(self) -> bool:
        """Check if pytesseract and the tesseract binary are installed."""
        try:
            import pytesseract
            if self.tesseract_cmd:
                pytesseract.pytesseract.tesseract_cmd = self.tesseract_cmd
            pytesseract.get_tesseract_version()
            return True
        except ImportError:
            return False
        except pytesseract.TesseractNotFoundError:
            return False

    def load(self) -> None:
        """Locate the tesseract binary.

        Raises:
            RecognitionError: If pytesseract or tesseract is missing
        """
        if self.is_loaded:
            return

        try:
            import pytesseract
        except ImportError as e:
            raise RecognitionError(
                "pytesseract not installed. Install with: pip install pytesseract"
            ) from e

        if self.tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = self.tesseract_cmd

        try:
            version = pytesseract.get_tesseract_version()
        except pytesseract.TesseractNotFoundError as e:
            raise RecognitionError(
                "tesseract binary not found. Install Tesseract or set "
                f"${TESSERACT_CMD_ENV}"
            ) from e

        self._model = pytesseract
        logger.info(f"Tesseract {version} ready (lang={self.language})")

    def unload(self) -> None:
        self._model = None

    def _recognize_lines(self, image_path: Path) -> list[RecognizedLine]:
        from PIL import Image as PILImage

        pytesseract = self._model
        with PILImage.open(image_path) as img:
            data = pytesseract.image_to_data(
                img.convert("RGB"),
                lang=self.language,
                config=f"--psm {self.psm}",
                output_type=pytesseract.Output.DICT
            )
        return group_tokens(data)
