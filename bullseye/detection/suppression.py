"""Non-maximum suppression and thresholding of bullseye score fields."""

import logging
from typing import List, Tuple

import numpy as np
from scipy import ndimage

logger = logging.getLogger(__name__)


def exclusion_footprint(radius: int) -> np.ndarray:
    """Boolean disk of offsets with ``dr**2 + dc**2 <= radius**2``."""
    dr, dc = np.mgrid[-radius:radius + 1, -radius:radius + 1]
    return (dr * dr + dc * dc) <= radius * radius


def preceding_footprint(radius: int) -> np.ndarray:
    """Offsets of the exclusion disk that precede the centre in row-major order."""
    dr, dc = np.mgrid[-radius:radius + 1, -radius:radius + 1]
    return exclusion_footprint(radius) & ((dr < 0) | ((dr == 0) & (dc < 0)))


class NonMaximumSuppressor:
    """Reduces a score field to one location per exclusion neighbourhood."""

    def __init__(self, threshold: float = 0.5, exclusion_radius: int = 15):
        """
        Initialize suppressor.

        Args:
            threshold: Minimum quality; kept scores must be strictly above it
            exclusion_radius: Radius of the neighbourhood a kept location must dominate
        """
        self.threshold = threshold
        self.exclusion_radius = exclusion_radius
        self.footprint = exclusion_footprint(exclusion_radius)
        self.preceding = preceding_footprint(exclusion_radius)

    def suppress(self, score_field: np.ndarray) -> List[Tuple[int, int, float]]:
        """
        Select dominant locations.

        A location survives when its score exceeds the threshold and no other
        location in its exclusion disk beats it. A location beats another
        with a higher score, or with an equal score and a lexicographically
        smaller (row, column). Every location of the field counts, including
        ones that are themselves beaten.

        Args:
            score_field: Complete score field, -inf where unscored

        Returns:
            (row, column, score) triples in row-major order
        """
        scores = np.asarray(score_field, dtype=np.float64)
        local_max = ndimage.maximum_filter(scores, footprint=self.footprint,
                                           mode='constant', cval=-np.inf)
        candidates = (scores > self.threshold) & (scores >= local_max)
        rows, cols = np.nonzero(candidates)
        if len(rows) == 0:
            return []

        values = scores[rows, cols]
        keep = self._break_ties(scores, rows, cols, values)
        logger.debug("Suppression kept %d of %d local maxima", int(keep.sum()), len(rows))

        return [(int(r), int(c), float(v))
                for r, c, v in zip(rows[keep], cols[keep], values[keep])]

    def _break_ties(self, scores: np.ndarray, rows: np.ndarray, cols: np.ndarray,
                    values: np.ndarray) -> np.ndarray:
        """Drop local maxima equalled by an earlier location of their disk."""
        # Candidates dominate their disk, so reaching their score means a tie.
        preceding_max = ndimage.maximum_filter(scores, footprint=self.preceding,
                                               mode='constant', cval=-np.inf)
        return values > preceding_max[rows, cols]


def suppress_non_maxima(score_field: np.ndarray, threshold: float = 0.5,
                        exclusion_radius: int = 15) -> List[Tuple[int, int, float]]:
    """Select dominant locations of a score field."""
    return NonMaximumSuppressor(threshold, exclusion_radius).suppress(score_field)
