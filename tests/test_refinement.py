"""Tests for sub-pixel refinement."""

import pytest
import numpy as np
from bullseye.detection.refinement import QuadraticRefiner, neighbour_offsets


def sample_patch(func):
    rows, cols = neighbour_offsets()
    return np.array([func(c, r) for r, c in zip(rows, cols)], dtype=float).reshape(3, 3)


class TestQuadraticRefiner:
    """Test quadratic peak fitting."""

    def test_initialization(self):
        """Test default clamp."""
        refiner = QuadraticRefiner()
        assert refiner.max_offset == 0.5

    def test_neighbour_offsets(self):
        """Test row-major 3x3 offsets."""
        rows, cols = neighbour_offsets()
        assert rows.tolist() == [-1, -1, -1, 0, 0, 0, 1, 1, 1]
        assert cols.tolist() == [-1, 0, 1, -1, 0, 1, -1, 0, 1]

    def test_symmetric_patch(self):
        """Test a centred peak has no offset."""
        patch = np.array([[0.2, 0.5, 0.2],
                          [0.5, 1.0, 0.5],
                          [0.2, 0.5, 0.2]])
        row, col = QuadraticRefiner().refine(patch)
        assert row == pytest.approx(0.0, abs=1e-12)
        assert col == pytest.approx(0.0, abs=1e-12)

    def test_exact_quadratic(self):
        """Test the peak of a sampled quadratic is recovered."""
        patch = sample_patch(lambda x, y: 1.0 - (x - 0.3) ** 2 - 2.0 * (y + 0.2) ** 2)
        row, col = QuadraticRefiner().refine(patch)
        assert row == pytest.approx(-0.2, abs=1e-9)
        assert col == pytest.approx(0.3, abs=1e-9)

    def test_rotated_quadratic(self):
        """Test a cross term is handled."""
        patch = sample_patch(lambda x, y: -(x - 0.1) ** 2 - (y - 0.25) ** 2
                             - 0.5 * (x - 0.1) * (y - 0.25))
        row, col = QuadraticRefiner().refine(patch)
        assert row == pytest.approx(0.25, abs=1e-9)
        assert col == pytest.approx(0.1, abs=1e-9)

    def test_offset_clamped(self):
        """Test distant peaks are clamped below one pixel."""
        patch = sample_patch(lambda x, y: -(x - 0.9) ** 2 - (y + 3.0) ** 2)
        row, col = QuadraticRefiner().refine(patch)
        assert row == -0.5
        assert col == 0.5

    def test_custom_clamp(self):
        """Test a tighter clamp."""
        patch = sample_patch(lambda x, y: -(x - 0.4) ** 2 - y ** 2)
        row, col = QuadraticRefiner(max_offset=0.25).refine(patch)
        assert col == 0.25
        assert row == pytest.approx(0.0, abs=1e-9)

    def test_flat_patch(self):
        """Test flat scores fall back to the integer location."""
        assert QuadraticRefiner().refine(np.full((3, 3), 0.7)) == (0.0, 0.0)

    def test_saddle_patch(self):
        """Test a saddle has no maximum."""
        patch = sample_patch(lambda x, y: x ** 2 - y ** 2)
        assert QuadraticRefiner().refine(patch) == (0.0, 0.0)

    def test_minimum_patch(self):
        """Test a bowl has no maximum."""
        patch = sample_patch(lambda x, y: x ** 2 + y ** 2)
        assert QuadraticRefiner().refine(patch) == (0.0, 0.0)

    def test_ridge_patch(self):
        """Test a ridge along one axis is singular."""
        patch = sample_patch(lambda x, y: -(y - 0.2) ** 2)
        assert QuadraticRefiner().refine(patch) == (0.0, 0.0)

    def test_non_finite_patch(self):
        """Test NaN scores fall back."""
        patch = np.ones((3, 3))
        patch[0, 0] = np.nan
        assert QuadraticRefiner().refine(patch) == (0.0, 0.0)

    def test_wrong_size_patch(self):
        """Test incomplete neighbourhoods fall back."""
        assert QuadraticRefiner().refine(np.ones((2, 3))) == (0.0, 0.0)
