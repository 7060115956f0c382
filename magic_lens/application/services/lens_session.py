"""Lens session - the single owner of per-image state."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

from ...config import RECOGNITION_FAILURE_NOTICE
from ...domain.entities.extraction import ExtractedGroup
from ...domain.entities.overlay import LineOverlay
from ...domain.entities.recognition import RecognitionResult
from ...domain.services.coordinate_mapping import map_lines_to_overlays
from ...domain.services.entity_extraction import EntityRuleRegistry, extract_entities
from ...domain.value_objects.config import DisplayMode, LensConfig
from ...domain.value_objects.geometry import ImageFrame
from ...exceptions import FrameNotReadyError
from ..ports.clipboard import Clipboard
from ..ports.event_publisher import EventPublisher, SessionEvent, SimpleEventPublisher

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    """Lifecycle of the session's current image."""
    EMPTY = "empty"
    RECOGNIZING = "recognizing"
    READY = "ready"


class LensSession:
    """Holds the current image, its recognition result and derived outputs.

    Every change goes through a transition method. Each ``load_image`` call
    issues a ticket; a completion or failure carrying an older ticket is
    dropped, so at most one recognition can land per image.

    Display mode is process-wide and survives ``reset``.
    """

    def __init__(
        self,
        config: LensConfig | None = None,
        registry: EntityRuleRegistry | None = None,
        events: EventPublisher | None = None
    ):
        self._config = config or LensConfig()
        self._registry = registry if registry is not None else EntityRuleRegistry.builtin()
        self._events = events or SimpleEventPublisher()
        self._mode = self._config.default_mode
        self._ticket = 0
        self._last_error: str | None = None
        self._clear()

    def _clear(self) -> None:
        self._state = SessionState.EMPTY
        self._image_path: Path | None = None
        self._frame: ImageFrame | None = None
        self._result: RecognitionResult | None = None
        self._overlays: tuple[LineOverlay, ...] = ()
        self._groups: tuple[ExtractedGroup, ...] = ()

    # -- read-only state ---------------------------------------------------

    @property
    def config(self) -> LensConfig:
        return self._config

    @property
    def registry(self) -> EntityRuleRegistry:
        return self._registry

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_busy(self) -> bool:
        return self._state is SessionState.RECOGNIZING

    @property
    def has_result(self) -> bool:
        return self._state is SessionState.READY

    @property
    def image_path(self) -> Path | None:
        return self._image_path

    @property
    def frame(self) -> ImageFrame | None:
        return self._frame

    @property
    def result(self) -> RecognitionResult | None:
        return self._result

    @property
    def overlays(self) -> list[LineOverlay]:
        return list(self._overlays)

    @property
    def groups(self) -> list[ExtractedGroup]:
        return list(self._groups)

    @property
    def mode(self) -> DisplayMode:
        return self._mode

    @property
    def highlight_enabled(self) -> bool:
        """Cosmetic flag for the overlay container."""
        return self._mode is DisplayMode.HIGHLIGHT

    @property
    def last_error(self) -> str | None:
        """User-facing notice from the last failed recognition."""
        return self._last_error

    @property
    def ticket(self) -> int:
        return self._ticket

    def subscribe(self, callback) -> None:
        """Subscribe to session events."""
        self._events.subscribe(callback)

    # -- transitions -------------------------------------------------------

    def load_image(
        self,
        image_path: Path | str | None,
        natural_width: float,
        natural_height: float,
        rendered_width: float | None = None,
        rendered_height: float | None = None
    ) -> int:
        """Start a new image, discarding everything from the previous one.

        Args:
            image_path: Source of the image (informational)
            natural_width: Decoded image width in pixels
            natural_height: Decoded image height in pixels
            rendered_width: On-screen width (defaults to natural width)
            rendered_height: On-screen height (defaults to natural height)

        Returns:
            Ticket to pass to ``complete_recognition``/``fail_recognition``

        Raises:
            FrameNotReadyError: If the natural size is not positive
        """
        frame = ImageFrame.at_natural_size(natural_width, natural_height)
        if rendered_width is not None and rendered_height is not None:
            frame = frame.resized(rendered_width, rendered_height)
        if not frame.is_decoded:
            raise FrameNotReadyError(
                f"Image must be decoded before loading "
                f"(got {natural_width}x{natural_height})"
            )

        self._ticket += 1
        self._clear()
        self._last_error = None
        self._image_path = Path(image_path) if image_path is not None else None
        self._frame = frame
        self._state = SessionState.RECOGNIZING

        logger.debug(
            f"Loaded image {self._image_path} "
            f"({natural_width}x{natural_height}), ticket {self._ticket}"
        )
        self._publish("recognizing", "Analyzing image")
        return self._ticket

    def complete_recognition(
        self,
        result: RecognitionResult,
        ticket: int | None = None
    ) -> bool:
        """Accept the recognition result and derive overlays and entities.

        Returns:
            False if the result was stale and dropped
        """
        if not self._accepts(ticket):
            logger.debug(f"Dropping stale recognition result (ticket {ticket})")
            return False

        self._result = result
        self._groups = tuple(extract_entities(result.full_text, self._registry))
        self._overlays = tuple(
            map_lines_to_overlays(result.lines, self._frame, self._config.font_scale)
        )
        self._state = SessionState.READY

        logger.info(
            f"Recognized {result.line_count} line(s), "
            f"{len(self._groups)} entity group(s)"
        )
        self._publish(
            "ready",
            f"{result.line_count} line(s), {len(self._groups)} entity group(s)"
        )
        return True

    def fail_recognition(
        self,
        error: BaseException | str | None = None,
        ticket: int | None = None
    ) -> bool:
        """Return to the empty state after a failed recognition.

        Returns:
            False if the failure was stale and dropped
        """
        if not self._accepts(ticket):
            logger.debug(f"Dropping stale recognition failure (ticket {ticket})")
            return False

        image_path = self._image_path
        logger.error(f"Recognition failed for {image_path}: {error}")
        self._clear()
        self._last_error = RECOGNITION_FAILURE_NOTICE
        self._publish("failed", RECOGNITION_FAILURE_NOTICE, image_path=image_path)
        return True

    def resize(
        self,
        rendered_width: float,
        rendered_height: float
    ) -> list[LineOverlay] | None:
        """Track a new on-screen size and rebuild every overlay.

        Returns:
            Fresh overlays, or None when there is no active result
        """
        if self._frame is None:
            return None

        self._frame = self._frame.resized(rendered_width, rendered_height)

        if self._state is not SessionState.READY:
            return None

        self._overlays = tuple(
            map_lines_to_overlays(self._result.lines, self._frame, self._config.font_scale)
        )
        self._publish("resized", f"Display size {rendered_width}x{rendered_height}")
        return list(self._overlays)

    def set_mode(self, mode: DisplayMode | str) -> DisplayMode:
        """Switch display mode. Geometry is left untouched."""
        self._mode = DisplayMode(mode)
        self._publish("mode", f"Display mode: {self._mode.value}")
        return self._mode

    def toggle_mode(self) -> DisplayMode:
        return self.set_mode(self._mode.toggled())

    def reset(self) -> None:
        """Forget the current image, its result and any pending recognition."""
        self._ticket += 1
        self._clear()
        self._last_error = None
        self._publish("reset", "Session reset")

    def copy_to_clipboard(self, text: str, clipboard: Clipboard) -> bool:
        """Copy a matched string verbatim.

        Clipboard failures are not reported to the user.

        Returns:
            True if the clipboard accepted the text
        """
        try:
            copied = clipboard.write_text(text)
        except Exception as e:
            logger.warning(f"Clipboard write failed: {e}")
            return False

        if not copied:
            logger.warning("Clipboard rejected the copy")
        return bool(copied)

    # -- helpers -----------------------------------------------------------

    def _accepts(self, ticket: int | None) -> bool:
        if self._state is not SessionState.RECOGNIZING:
            return False
        return ticket is None or ticket == self._ticket

    def _publish(self, stage: str, message: str, image_path: Path | None = None) -> None:
        self._events.publish(SessionEvent(
            stage=stage,
            message=message,
            image_path=image_path or self._image_path
        ))
