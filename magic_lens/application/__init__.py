"""Application layer - use cases and orchestration."""

from .services.lens_session import LensSession, SessionState
from .services.image_analysis import ImageAnalysisService

__all__ = ['LensSession', 'SessionState', 'ImageAnalysisService']
