"""Magic Lens - recognize text in an image, overlay it and pull out contact data."""

__version__ = "1.0.0"

from .config import FONT_SIZE_RATIO, COPY_FEEDBACK_MS, RECOGNITION_FAILURE_NOTICE
from .domain import DisplayMode, LensConfig, RecognitionResult, RecognizedLine
from .domain.services import extract_entities, map_box_to_overlay
from .application import LensSession, ImageAnalysisService
from .exceptions import (
    MagicLensError,
    ConfigurationError,
    ImageLoadError,
    RecognitionError,
    ValidationError,
    FrameNotReadyError,
)
from .utils.env import setup_logging

__all__ = [
    '__version__',
    'FONT_SIZE_RATIO',
    'COPY_FEEDBACK_MS',
    'RECOGNITION_FAILURE_NOTICE',
    'DisplayMode',
    'LensConfig',
    'RecognizedLine',
    'RecognitionResult',
    'LensSession',
    'ImageAnalysisService',
    'extract_entities',
    'map_box_to_overlay',
    'setup_logging',
    # Exceptions
    'MagicLensError',
    'ConfigurationError',
    'ImageLoadError',
    'RecognitionError',
    'ValidationError',
    'FrameNotReadyError',
]
