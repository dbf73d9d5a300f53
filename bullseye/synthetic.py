"""Synthetic bullseye images for demos and tests."""

import numpy as np
from typing import Sequence, Tuple

from bullseye.detection.ring_pattern import RingPattern


def render_bullseyes(shape: Tuple[int, int], centers: Sequence[Tuple[float, float]],
                     min_radius: int = 10, max_radius: int = 15, ring_count: int = 5,
                     dark: int = 25, light: int = 230, background: int = 128) -> np.ndarray:
    """
    Render concentric-ring markers on a flat background.

    The central disk is dark and the annuli alternate light, dark, ...
    outward, using the same radial bands the detector samples.

    Args:
        shape: (rows, columns) of the output image
        centers: (row, column) marker centres, may be fractional
        min_radius: Central disk radius
        max_radius: Outer marker radius
        ring_count: Number of annuli
        dark: Intensity of the disk and odd annuli
        light: Intensity of even annuli
        background: Intensity outside every marker

    Returns:
        uint8 grayscale image
    """
    pattern = RingPattern(min_radius, max_radius, ring_count)
    rows, cols = np.mgrid[0:shape[0], 0:shape[1]]
    image = np.full(shape, background, dtype=np.uint8)

    for center_row, center_col in centers:
        dr = rows - center_row
        dc = cols - center_col
        region = pattern.region_index(np.sqrt(dr * dr + dc * dc))
        inside = region >= 0
        # Region 0 is the disk; region k + 1 is annulus k.
        image[inside] = np.where(region[inside] % 2 == 0, dark, light)

    return image


def render_bullseye(shape: Tuple[int, int], center: Tuple[float, float], **kwargs) -> np.ndarray:
    """Render a single marker; see render_bullseyes."""
    return render_bullseyes(shape, [center], **kwargs)


def add_noise(image: np.ndarray, sigma: float = 5.0, seed: int = 0) -> np.ndarray:
    """Add clipped Gaussian noise to a uint8 image."""
    rng = np.random.default_rng(seed)
    noisy = image.astype(np.float64) + rng.normal(0.0, sigma, image.shape)
    return np.clip(np.round(noisy), 0, 255).astype(np.uint8)
