"""Bullseye marker detection."""

from .bullseye_detector import KeypointSelectorBullseye
from .keypoints import Detection, KeypointBullseye

__all__ = ['KeypointSelectorBullseye', 'KeypointBullseye', 'Detection']
