"""Recognition adapters - implementations of the RecognitionEngine port."""

from .base import BaseRecognizer
from .tesseract_adapter import TesseractAdapter
from .easyocr_adapter import EasyOCRAdapter
from .paddle_adapter import PaddleOCRAdapter

__all__ = ['BaseRecognizer', 'TesseractAdapter', 'EasyOCRAdapter', 'PaddleOCRAdapter']
