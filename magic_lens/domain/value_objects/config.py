"""Configuration value objects with validation."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from ...config import COPY_FEEDBACK_MS, DEFAULT_LANGUAGE, FONT_SIZE_RATIO


class DisplayMode(str, Enum):
    """How overlays are drawn over the image. Never affects geometry."""
    LENS = "lens"
    HIGHLIGHT = "highlight"

    def toggled(self) -> DisplayMode:
        return DisplayMode.LENS if self is DisplayMode.HIGHLIGHT else DisplayMode.HIGHLIGHT


class RecognizerType(str, Enum):
    """Supported recognition engines."""
    TESSERACT = "tesseract"
    EASYOCR = "easyocr"
    PADDLEOCR = "paddleocr"


class LensConfig(BaseModel):
    """Session and recognition configuration with validation."""

    model_config = {"validate_assignment": False}

    # Display
    default_mode: DisplayMode = DisplayMode.LENS
    font_scale: float = Field(default=FONT_SIZE_RATIO, gt=0.0, le=2.0)
    copy_feedback_ms: int = Field(default=COPY_FEEDBACK_MS, ge=0)

    # Recognition
    recognizer: RecognizerType = RecognizerType.TESSERACT
    language: str = DEFAULT_LANGUAGE
    min_confidence: float = Field(default=0.0, ge=0.0, le=1.0)

    # Entity rules
    rules_file: Path | None = None
    disabled_rules: list[str] = Field(default_factory=list)

    @field_validator('language')
    @classmethod
    def validate_language(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("language cannot be empty")
        return v


__all__ = [
    'DisplayMode',
    'RecognizerType',
    'LensConfig',
]
