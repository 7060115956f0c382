"""Custom exceptions for Magic Lens."""

from typing import Optional


class MagicLensError(Exception):
    """Base exception for all application errors.

    Attributes:
        message: Human-readable error description
        error_code: Optional error code for programmatic handling
    """

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code

    def __str__(self) -> str:
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message


class ConfigurationError(MagicLensError):
    """Error in configuration or settings.

    Attributes:
        config_key: The configuration key that caused the error (if applicable)
    """

    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(message, error_code="CONFIG_ERROR")
        self.config_key = config_key


class ImageLoadError(MagicLensError):
    """Error opening or decoding the source image.

    Attributes:
        image_path: Path to the image that could not be loaded
    """

    def __init__(self, message: str, image_path: Optional[str] = None):
        super().__init__(message, error_code="IMAGE_ERROR")
        self.image_path = image_path

    def __str__(self) -> str:
        if self.image_path:
            return f"{super().__str__()} (image: {self.image_path})"
        return super().__str__()


class RecognitionError(MagicLensError):
    """The recognition engine could not produce a result.

    Attributes:
        image_path: Path to the image being recognized when error occurred
    """

    def __init__(self, message: str, image_path: Optional[str] = None):
        super().__init__(message, error_code="RECOGNITION_ERROR")
        self.image_path = image_path


class ValidationError(MagicLensError):
    """Error validating inputs or parameters.

    Attributes:
        field: The field that failed validation (if applicable)
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, error_code="VALIDATION_ERROR")
        self.field = field


class FrameNotReadyError(MagicLensError):
    """Overlay mapping was attempted before the image dimensions were known.

    This is a programming error: callers must wait for the image to decode
    before mapping any bounding box.
    """

    def __init__(self, message: str = "Image natural dimensions are not known yet"):
        super().__init__(message, error_code="PRECONDITION_ERROR")
