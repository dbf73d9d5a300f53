"""Tests for synthetic marker rendering."""

import numpy as np
from bullseye.synthetic import add_noise, render_bullseye, render_bullseyes


class TestRendering:
    """Test bullseye rendering."""

    def test_shape_and_dtype(self):
        """Test output image format."""
        image = render_bullseye((120, 110), (59, 54))
        assert image.shape == (120, 110)
        assert image.dtype == np.uint8

    def test_ring_layout(self):
        """Test disk dark, rings alternating outward, background beyond."""
        image = render_bullseye((120, 110), (59, 54), dark=10, light=200, background=90)
        assert image[59, 54] == 10
        assert image[59, 54 + 9] == 10
        assert image[59, 54 + 10] == 200
        assert image[59, 54 + 11] == 10
        assert image[59, 54 + 14] == 200
        assert image[59, 54 + 15] == 90
        assert image[0, 0] == 90

    def test_point_symmetry(self):
        """Test integer-centred markers are point symmetric."""
        image = render_bullseye((61, 61), (30, 30))
        assert np.array_equal(image, image[::-1, ::-1])

    def test_multiple_markers(self):
        """Test every centre receives a marker."""
        image = render_bullseyes((80, 140), [(40, 40), (40, 100)], dark=0, light=255)
        assert image[40, 40] == 0
        assert image[40, 100] == 0
        assert image[40, 70] == 128

    def test_marker_clipped_at_border(self):
        """Test markers may extend past the image."""
        image = render_bullseye((40, 40), (2, 2))
        assert image[2, 2] == 25

    def test_noise_reproducible(self):
        """Test noise depends only on the seed."""
        image = render_bullseye((50, 50), (25, 25))
        assert np.array_equal(add_noise(image, seed=4), add_noise(image, seed=4))
        assert not np.array_equal(add_noise(image, seed=4), add_noise(image, seed=5))
        assert add_noise(image).dtype == np.uint8
