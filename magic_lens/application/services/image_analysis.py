"""Image analysis service - run recognition and feed the session."""

from __future__ import annotations

import logging
import time
from pathlib import Path

from PIL import Image as PILImage, UnidentifiedImageError

from ...config import SUPPORTED_IMAGE_EXTENSIONS
from ...exceptions import ImageLoadError, RecognitionError
from ..ports.recognition_engine import RecognitionEngine
from .lens_session import LensSession

logger = logging.getLogger(__name__)


def read_image_size(image_path: Path | str) -> tuple[int, int]:
    """Decode an image just far enough to learn its natural size.

    Raises:
        ImageLoadError: If the file is missing, unsupported or undecodable
    """
    image_path = Path(image_path)

    if image_path.suffix.lower() not in SUPPORTED_IMAGE_EXTENSIONS:
        raise ImageLoadError(
            f"Unsupported image type '{image_path.suffix}'",
            image_path=str(image_path)
        )
    if not image_path.is_file():
        raise ImageLoadError("Image not found", image_path=str(image_path))

    try:
        with PILImage.open(image_path) as img:
            width, height = img.size
    except (UnidentifiedImageError, OSError) as e:
        raise ImageLoadError(f"Cannot decode image: {e}", image_path=str(image_path)) from e

    if width <= 0 or height <= 0:
        raise ImageLoadError(f"Image has no pixels ({width}x{height})", image_path=str(image_path))

    return width, height


class ImageAnalysisService:
    """Connects a recognition engine to a lens session."""

    def __init__(self, engine: RecognitionEngine, session: LensSession | None = None):
        self._engine = engine
        self._session = session or LensSession()

    @property
    def session(self) -> LensSession:
        return self._session

    @property
    def engine(self) -> RecognitionEngine:
        return self._engine

    def open_image(
        self,
        image_path: Path | str,
        display_size: tuple[float, float] | None = None
    ) -> int:
        """Decode the image size and start a new session image.

        Returns:
            Recognition ticket
        """
        width, height = read_image_size(image_path)
        rendered_width, rendered_height = display_size or (width, height)
        return self._session.load_image(
            image_path, width, height, rendered_width, rendered_height
        )

    def recognize(self, image_path: Path | str, ticket: int | None = None) -> bool:
        """Run the engine and route success or failure into the session.

        Returns:
            True if a result was accepted
        """
        start_time = time.time()
        try:
            result = self._engine.recognize(image_path)
        except (RecognitionError, ImageLoadError) as e:
            self._session.fail_recognition(e, ticket)
            return False

        elapsed = (time.time() - start_time) * 1000
        logger.debug(f"{self._engine.name} finished in {elapsed:.0f} ms")
        return self._session.complete_recognition(result, ticket)

    def analyze(
        self,
        image_path: Path | str,
        display_size: tuple[float, float] | None = None
    ) -> bool:
        """Open and recognize an image in one step."""
        ticket = self.open_image(image_path, display_size)
        return self.recognize(image_path, ticket)

    def __enter__(self) -> ImageAnalysisService:
        """Context manager entry."""
        self._engine.load()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - cleanup resources."""
        self._engine.unload()
        return False  # Don't suppress exceptions
