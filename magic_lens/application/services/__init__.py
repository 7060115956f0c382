"""Application services."""

from .lens_session import LensSession, SessionState
from .image_analysis import ImageAnalysisService, read_image_size

__all__ = ['LensSession', 'SessionState', 'ImageAnalysisService', 'read_image_size']
