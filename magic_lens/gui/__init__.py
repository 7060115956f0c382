"""GUI components for Magic Lens."""

from .main_window import MainWindow, main
from .settings_manager import SettingsManager
from .image_stage import ImageStage
from .entity_panel import EntityPanel
from .recognition_controller import RecognitionController, RecognitionThread

__all__ = [
    'MainWindow',
    'main',
    'SettingsManager',
    'ImageStage',
    'EntityPanel',
    'RecognitionController',
    'RecognitionThread',
]
