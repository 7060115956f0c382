"""Unit tests for configuration value objects and exceptions."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from magic_lens.config import COPY_FEEDBACK_MS, FONT_SIZE_RATIO
from magic_lens.domain.value_objects.config import DisplayMode, LensConfig, RecognizerType
from magic_lens.exceptions import (
    ConfigurationError, FrameNotReadyError, ImageLoadError, MagicLensError, RecognitionError
)


class TestLensConfig:
    """Tests for LensConfig class."""

    def test_defaults(self):
        config = LensConfig()
        assert config.default_mode is DisplayMode.LENS
        assert config.font_scale == FONT_SIZE_RATIO
        assert config.copy_feedback_ms == COPY_FEEDBACK_MS
        assert config.recognizer is RecognizerType.TESSERACT
        assert config.language == "eng"
        assert config.disabled_rules == []

    def test_string_enums(self):
        config = LensConfig(default_mode="highlight", recognizer="easyocr")
        assert config.default_mode is DisplayMode.HIGHLIGHT
        assert config.recognizer is RecognizerType.EASYOCR

    def test_language_stripped(self):
        assert LensConfig(language="  eng+deu ").language == "eng+deu"

    @pytest.mark.parametrize("kwargs", [
        {"language": "   "},
        {"font_scale": 0},
        {"font_scale": 2.5},
        {"min_confidence": 1.5},
        {"copy_feedback_ms": -1},
        {"recognizer": "magic"},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(PydanticValidationError):
            LensConfig(**kwargs)


def test_display_mode_toggled():
    assert DisplayMode.LENS.toggled() is DisplayMode.HIGHLIGHT
    assert DisplayMode.HIGHLIGHT.toggled() is DisplayMode.LENS


class TestExceptions:
    """Tests for exception formatting."""

    def test_error_codes(self):
        assert str(ConfigurationError("bad")) == "[CONFIG_ERROR] bad"
        assert RecognitionError("x").error_code == "RECOGNITION_ERROR"
        assert FrameNotReadyError().error_code == "PRECONDITION_ERROR"

    def test_image_path_in_message(self):
        error = ImageLoadError("Image not found", image_path="/tmp/a.png")
        assert str(error) == "[IMAGE_ERROR] Image not found (image: /tmp/a.png)"

    def test_hierarchy(self):
        for error in (ConfigurationError("a"), ImageLoadError("b"), FrameNotReadyError()):
            assert isinstance(error, MagicLensError)
        assert str(MagicLensError("plain")) == "plain"
