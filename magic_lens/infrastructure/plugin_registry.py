"""Plugin registry - discovers and loads recognition engines via entry points."""

from __future__ import annotations

import logging
from functools import lru_cache
from importlib.metadata import entry_points
from typing import TYPE_CHECKING

from ..domain.value_objects.config import LensConfig, RecognizerType
from ..exceptions import ConfigurationError

if TYPE_CHECKING:
    from ..application.ports.recognition_engine import RecognitionEngine

logger = logging.getLogger(__name__)


class PluginRegistry:
    """Registry for discovering and creating recognition engines.

    Third-party packages can register engines:

    [project.entry-points."magic_lens.recognizers"]
    my_engine = "my_package:MyRecognizer"
    """

    RECOGNIZER_GROUP = "magic_lens.recognizers"

    @classmethod
    @lru_cache(maxsize=1)
    def discover_recognizers(cls) -> dict[str, type]:
        """Discover all available recognition engines.

        Returns:
            Dict mapping engine names to classes
        """
        from ..adapters.ocr.easyocr_adapter import EasyOCRAdapter
        from ..adapters.ocr.paddle_adapter import PaddleOCRAdapter
        from ..adapters.ocr.tesseract_adapter import TesseractAdapter

        engines: dict[str, type] = {
            RecognizerType.TESSERACT.value: TesseractAdapter,
            RecognizerType.EASYOCR.value: EasyOCRAdapter,
            RecognizerType.PADDLEOCR.value: PaddleOCRAdapter,
        }

        for ep in entry_points(group=cls.RECOGNIZER_GROUP):
            try:
                engines[ep.name] = ep.load()
                logger.debug(f"Discovered recognition engine: {ep.name}")
            except Exception as e:
                logger.warning(f"Failed to load recognition engine {ep.name}: {e}")

        return engines

    @classmethod
    def create_recognizer(cls, name: str, **kwargs) -> "RecognitionEngine":
        """Create recognition engine instance by name.

        Raises:
            ConfigurationError: If engine not found
        """
        engines = cls.discover_recognizers()

        if name not in engines:
            available = ", ".join(engines.keys())
            raise ConfigurationError(
                f"Unknown recognition engine: '{name}'. Available: {available}",
                config_key="recognizer"
            )

        logger.debug(f"Creating recognition engine: {name}")
        return engines[name](**kwargs)

    @classmethod
    def create_from_config(cls, config: LensConfig) -> "RecognitionEngine":
        """Create the engine selected in the configuration."""
        return cls.create_recognizer(
            config.recognizer.value,
            language=config.language,
            min_confidence=config.min_confidence
        )

    @classmethod
    def list_available(cls) -> list[str]:
        """List available engine names."""
        return list(cls.discover_recognizers().keys())
