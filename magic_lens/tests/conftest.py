"""Shared fixtures for Magic Lens tests."""

from pathlib import Path

import pytest
from PIL import Image

from magic_lens.domain.entities.recognition import RecognitionResult, RecognizedLine
from magic_lens.domain.value_objects.geometry import BoundingBox
from magic_lens.exceptions import RecognitionError


class FakeEngine:
    """In-memory recognition engine returning a canned result."""

    name = "Fake"
    is_available = True

    def __init__(self, result: RecognitionResult | None = None, error: Exception | None = None):
        self.result = result
        self.error = error
        self.calls: list[Path] = []
        self.loaded = False

    def load(self) -> None:
        self.loaded = True

    def unload(self) -> None:
        self.loaded = False

    def recognize(self, image_path):
        self.calls.append(Path(image_path))
        if self.error is not None:
            raise self.error
        return self.result


def make_result(*lines: tuple[str, tuple[float, float, float, float]]) -> RecognitionResult:
    return RecognitionResult.from_lines([
        RecognizedLine(text=text, bbox=BoundingBox(*box), confidence=0.9)
        for text, box in lines
    ])


@pytest.fixture
def sample_result() -> RecognitionResult:
    return make_result(
        ("Call 555-123-4567 or visit", (0, 0, 100, 100)),
        ("http://example.com on 12/25/2024", (100, 200, 600, 260)),
    )


@pytest.fixture
def sample_image(tmp_path: Path) -> Path:
    path = tmp_path / "card.png"
    Image.new("RGB", (1000, 800), color="white").save(path)
    return path


@pytest.fixture
def fake_engine(sample_result: RecognitionResult) -> FakeEngine:
    return FakeEngine(result=sample_result)


@pytest.fixture
def failing_engine() -> FakeEngine:
    return FakeEngine(error=RecognitionError("engine exploded"))


@pytest.fixture
def engine_factory():
    """Build a FakeEngine from lines of (text, (x0, y0, x1, y1))."""
    def factory(*lines, error: Exception | None = None) -> FakeEngine:
        return FakeEngine(result=make_result(*lines), error=error)
    return factory
