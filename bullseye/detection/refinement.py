"""Sub-pixel refinement of integer keypoints."""

import logging
from typing import Tuple

import numpy as np

logger = logging.getLogger(__name__)

# 3x3 neighbourhood, row-major; x is the column offset, y the row offset.
_NEIGHBOUR_ROWS, _NEIGHBOUR_COLS = [a.ravel() for a in np.mgrid[-1:2, -1:2]]
_DESIGN = np.column_stack([
    np.ones(9),
    _NEIGHBOUR_COLS,
    _NEIGHBOUR_ROWS,
    _NEIGHBOUR_COLS ** 2,
    _NEIGHBOUR_COLS * _NEIGHBOUR_ROWS,
    _NEIGHBOUR_ROWS ** 2,
]).astype(np.float64)


def neighbour_offsets() -> Tuple[np.ndarray, np.ndarray]:
    """Row and column offsets of the 3x3 neighbourhood, centre included."""
    return _NEIGHBOUR_ROWS.copy(), _NEIGHBOUR_COLS.copy()


class QuadraticRefiner:
    """Fits a 2D quadratic to a 3x3 score patch and locates its peak."""

    def __init__(self, max_offset: float = 0.5, min_determinant: float = 1e-12):
        self.max_offset = max_offset
        self.min_determinant = min_determinant

    def refine(self, patch: np.ndarray) -> Tuple[float, float]:
        """
        Estimate the continuous peak offset of a score patch.

        Args:
            patch: 3x3 scores centred on an integer keypoint

        Returns:
            (row_offset, column_offset), each clamped to ``max_offset``.
            Degenerate patches give (0.0, 0.0).
        """
        values = np.asarray(patch, dtype=np.float64).reshape(-1)
        if values.size != 9 or not np.all(np.isfinite(values)):
            logger.debug("Refinement fallback: incomplete neighbourhood")
            return 0.0, 0.0

        coeffs, _, rank, _ = np.linalg.lstsq(_DESIGN, values, rcond=None)
        if rank < _DESIGN.shape[1]:
            return 0.0, 0.0
        _, bx, by, cxx, cxy, cyy = coeffs

        hessian = np.array([[2.0 * cxx, cxy],
                            [cxy, 2.0 * cyy]])
        det = np.linalg.det(hessian)
        # Peak only where the Hessian is negative definite.
        if det <= self.min_determinant or hessian[0, 0] >= 0:
            logger.debug("Refinement fallback: no isolated maximum")
            return 0.0, 0.0

        x, y = np.linalg.solve(hessian, -np.array([bx, by]))
        if not (np.isfinite(x) and np.isfinite(y)):
            return 0.0, 0.0

        row_offset = float(np.clip(y, -self.max_offset, self.max_offset))
        column_offset = float(np.clip(x, -self.max_offset, self.max_offset))
        return row_offset, column_offset
