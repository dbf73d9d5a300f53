"""
Bullseye - concentric-ring fiducial marker detection

Locates bullseye markers at pixel and sub-pixel precision.
"""

__version__ = '1.0.0'

from .detection import KeypointBullseye, KeypointSelectorBullseye
from .exceptions import (BullseyeError, ConfigurationError, ImageFormatError,
                         ImageSizeError, NotReadyError)
from .core import BullseyeProcessor

__all__ = [
    'KeypointSelectorBullseye',
    'KeypointBullseye',
    'BullseyeProcessor',
    'BullseyeError',
    'ConfigurationError',
    'ImageSizeError',
    'ImageFormatError',
    'NotReadyError',
]
