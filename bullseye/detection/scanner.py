"""Bullseye scoring over every admissible image location."""

import logging
from typing import Iterable, Tuple

import cv2
import numpy as np

from bullseye.config import DetectorConfig
from bullseye.detection.ring_pattern import RingPattern

logger = logging.getLogger(__name__)


def ring_contrast(means: Iterable[np.ndarray]) -> np.ndarray:
    """
    Contrast term of the bullseye score.

    Args:
        means: Region means ordered disk first, then annuli outward

    Returns:
        Smallest absolute step between consecutive means, or 0 where the
        steps do not alternate in sign
    """
    iterator = iter(means)
    previous = np.asarray(next(iterator), dtype=np.float64)
    contrast = None
    alternating = None
    previous_step = None

    for mean in iterator:
        step = np.asarray(mean, dtype=np.float64) - previous
        if contrast is None:
            contrast = np.abs(step)
            alternating = step != 0
        else:
            contrast = np.minimum(contrast, np.abs(step))
            alternating &= (step * previous_step) < 0
        previous = mean
        previous_step = step

    return np.where(alternating, contrast, 0.0)


class CandidateScanner:
    """Computes the score field of an image for one ring pattern."""

    def __init__(self, config: DetectorConfig, pattern: RingPattern):
        self.config = config
        self.pattern = pattern

    def valid_bounds(self, shape: Tuple[int, ...]) -> Tuple[int, int, int, int]:
        """Half-open (row_start, row_stop, col_start, col_stop) of scored locations."""
        margin = self.config.max_radius
        rows, cols = shape[:2]
        return margin, max(margin, rows - margin), margin, max(margin, cols - margin)

    def _dense_mean(self, image: np.ndarray, region: int) -> np.ndarray:
        return cv2.filter2D(image, cv2.CV_64F, self.pattern.kernel(region),
                            borderType=cv2.BORDER_REFLECT)

    def _admissible(self, contrast: np.ndarray) -> np.ndarray:
        return (contrast > 0) & (contrast >= self.config.min_contrast)

    def _score(self, contrast: np.ndarray, spread: np.ndarray) -> np.ndarray:
        return contrast / (contrast + self.config.symmetry_weight * spread)

    def scan(self, image: np.ndarray) -> np.ndarray:
        """
        Score every location at least ``max_radius`` from the borders.

        Args:
            image: 2D float64 intensity image

        Returns:
            Score field with the image's shape; unscored locations hold -inf
            and early-rejected locations hold 0
        """
        field = np.full(image.shape, -np.inf, dtype=np.float64)
        r0, r1, c0, c1 = self.valid_bounds(image.shape)
        if r1 <= r0 or c1 <= c0:
            return field

        contrast = ring_contrast(
            self._dense_mean(image, region)[r0:r1, c0:c1]
            for region in range(self.pattern.region_count))
        window = np.zeros(contrast.shape, dtype=np.float64)

        rows, cols = np.nonzero(self._admissible(contrast))
        logger.debug("Contrast stage kept %d of %d locations", len(rows), contrast.size)

        chunk = self.config.chunk_size
        for start in range(0, len(rows), chunk):
            r = rows[start:start + chunk]
            c = cols[start:start + chunk]
            window[r, c] = self._symmetry_stage(image, r + r0, c + c0, contrast[r, c])

        field[r0:r1, c0:c1] = window
        return field

    def _samples(self, image: np.ndarray, rows: np.ndarray, cols: np.ndarray,
                 region: int) -> np.ndarray:
        dr, dc = self.pattern.offsets(region)
        return image[rows[:, None] + dr[None, :], cols[:, None] + dc[None, :]]

    def _angular_spread(self, samples: np.ndarray, region: int) -> np.ndarray:
        """Standard deviation of the sector means of one region, per location."""
        return (samples @ self.pattern.sector_weights(region)).std(axis=1)

    def _symmetry_stage(self, image: np.ndarray, rows: np.ndarray, cols: np.ndarray,
                        contrast: np.ndarray) -> np.ndarray:
        """Accumulate angular spread region by region, dropping hopeless locations."""
        scores = np.zeros(len(rows), dtype=np.float64)
        spread = np.zeros(len(rows), dtype=np.float64)
        alive = np.arange(len(rows))

        for region in self.pattern.symmetry_order():
            if alive.size == 0:
                break
            samples = self._samples(image, rows[alive], cols[alive], region)
            spread[alive] = np.maximum(spread[alive], self._angular_spread(samples, region))
            # Spread only grows, so this bound never increases.
            bound = self._score(contrast[alive], spread[alive])
            alive = alive[bound > self.config.score_threshold]

        scores[alive] = self._score(contrast[alive], spread[alive])
        return scores

    def score_locations(self, image: np.ndarray, rows, cols) -> np.ndarray:
        """
        Full-cost score of individual locations, without early rejection.

        Locations whose sampling disk leaves the image score NaN.
        """
        rows = np.atleast_1d(np.asarray(rows, dtype=np.intp))
        cols = np.atleast_1d(np.asarray(cols, dtype=np.intp))
        extent = self.pattern.extent
        height, width = image.shape[:2]
        inside = ((rows >= extent) & (rows < height - extent)
                  & (cols >= extent) & (cols < width - extent))

        scores = np.full(len(rows), np.nan, dtype=np.float64)
        if not inside.any():
            return scores
        r = rows[inside]
        c = cols[inside]

        means = []
        spread = np.zeros(len(r), dtype=np.float64)
        for region in range(self.pattern.region_count):
            samples = self._samples(image, r, c, region)
            means.append(samples.mean(axis=1))
            spread = np.maximum(spread, self._angular_spread(samples, region))

        contrast = ring_contrast(means)
        admissible = self._admissible(contrast)
        inner = np.zeros(len(r), dtype=np.float64)
        inner[admissible] = self._score(contrast[admissible], spread[admissible])
        scores[inside] = inner
        return scores
