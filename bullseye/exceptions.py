"""Exceptions raised by the bullseye detector."""


class BullseyeError(Exception):
    """Base class for detector errors."""


class ConfigurationError(BullseyeError, ValueError):
    """Invalid detector construction parameters."""


class ImageSizeError(BullseyeError, ValueError):
    """Image too small to hold a complete detection margin."""


class ImageFormatError(BullseyeError, ValueError):
    """Image is not a 2D intensity grid or a 3-channel BGR image."""


class NotReadyError(BullseyeError, RuntimeError):
    """Keypoints requested before an image was bound."""
