"""Adapts caller images to the detector's working representation."""

import cv2
import numpy as np
from skimage.util import img_as_float32, img_as_float64

from bullseye.exceptions import ImageFormatError, ImageSizeError


def read_only_view(image: np.ndarray) -> np.ndarray:
    """Non-writeable view of the caller's array; the array itself is untouched."""
    view = np.asarray(image).view()
    view.flags.writeable = False
    return view


def _narrow_integers(image: np.ndarray) -> np.ndarray:
    """
    Map integer arrays wider than 16 bits onto uint8 or uint16.

    Values within [0, 255] are read as 8-bit data, values within
    [0, 65535] as 16-bit data.

    Raises:
        ImageFormatError: If values fall outside [0, 65535]
    """
    if not np.issubdtype(image.dtype, np.integer) or image.dtype.itemsize <= 2:
        return image
    if image.size == 0:
        return image.astype(np.uint8)
    low, high = int(image.min()), int(image.max())
    if low < 0 or high > np.iinfo(np.uint16).max:
        raise ImageFormatError(
            f"{image.dtype} image values span [{low}, {high}]; "
            f"expected 8-bit or 16-bit intensities")
    return image.astype(np.uint8 if high <= np.iinfo(np.uint8).max else np.uint16)


def to_intensity(image: np.ndarray) -> np.ndarray:
    """
    Convert an image to a contiguous float64 intensity grid.

    Args:
        image: 2D grayscale array or 3-channel BGR array of any dtype

    Returns:
        2D float64 array; integer inputs are scaled to [0, 1]

    Raises:
        ImageFormatError: If the array is not a numeric grayscale or BGR image
    """
    image = np.asarray(image)
    if image.dtype == bool or not np.issubdtype(image.dtype, np.number):
        raise ImageFormatError(f"Unsupported image dtype {image.dtype}")
    image = _narrow_integers(image)
    if image.ndim == 3 and image.shape[2] == 1:
        image = image[:, :, 0]
    if image.ndim == 3 and image.shape[2] == 3:
        image = cv2.cvtColor(img_as_float32(image), cv2.COLOR_BGR2GRAY)
    elif image.ndim != 2:
        raise ImageFormatError(
            f"Expected a 2D grayscale or 3-channel BGR image, got shape {image.shape}")
    return np.ascontiguousarray(img_as_float64(image))


def check_size(image: np.ndarray, min_size: int):
    """Raise ImageSizeError if either dimension is below ``min_size``."""
    rows, cols = image.shape[:2]
    if rows < min_size or cols < min_size:
        raise ImageSizeError(
            f"Image of {rows}x{cols} pixels is smaller than the "
            f"{min_size}x{min_size} minimum for this detector")
