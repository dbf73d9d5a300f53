"""Concentric sampling geometry shared by the scanner and the renderer."""

import numpy as np
from typing import List, Tuple

from bullseye.exceptions import ConfigurationError


class RingPattern:
    """
    Pixel offsets of a central disk and ``ring_count`` annuli.

    Region 0 is the disk ``d < min_radius``; region ``k + 1`` is annulus
    ``k``, spanning ``[min_radius + k*w, min_radius + (k+1)*w)`` with
    ``w = (max_radius - min_radius) / ring_count``. Offsets at
    ``d >= max_radius`` are not sampled.

    Every region is further split into ``sector_count`` angular sectors
    centred on multiples of ``2*pi / sector_count``, starting at the
    positive column axis. Sector means measure how uniform a region is
    around the centre.
    """

    def __init__(self, min_radius: int, max_radius: int, ring_count: int,
                 sector_count: int = 8):
        self.min_radius = int(min_radius)
        self.max_radius = int(max_radius)
        self.ring_count = int(ring_count)
        self.sector_count = int(sector_count)
        self.extent = self.max_radius - 1

        dr, dc = np.mgrid[-self.extent:self.extent + 1, -self.extent:self.extent + 1]
        index = self.region_index(np.sqrt(dr * dr + dc * dc))
        step = 2.0 * np.pi / self.sector_count
        sector = np.floor(np.arctan2(dr, dc) / step + 0.5).astype(np.int64) % self.sector_count

        offsets = []
        kernels = []
        sector_weights = []
        for region in range(self.region_count):
            selected = index == region
            count = int(np.count_nonzero(selected))
            if count == 0:
                raise ConfigurationError(
                    f"Region {region} of the ring pattern holds no pixels; "
                    f"use fewer rings or a wider radius range")
            offsets.append((dr[selected].astype(np.intp), dc[selected].astype(np.intp)))
            kernel = np.zeros(dr.shape, dtype=np.float64)
            kernel[selected] = 1.0 / count
            kernels.append(kernel)

            # Small disks leave some sectors empty; those are skipped.
            region_sector = sector[selected]
            used = np.unique(region_sector)
            weights = (region_sector[:, None] == used[None, :]).astype(np.float64)
            sector_weights.append(weights / weights.sum(axis=0))

        self._offsets = tuple(offsets)
        self._kernels = tuple(kernels)
        self._sector_weights = tuple(sector_weights)

    @property
    def region_count(self) -> int:
        """Number of sampled regions: the disk plus every annulus."""
        return self.ring_count + 1

    def region_index(self, distance) -> np.ndarray:
        """Map radial distances to region indices, -1 outside ``max_radius``."""
        distance = np.asarray(distance, dtype=np.float64)
        index = np.full(distance.shape, -1, dtype=np.int64)
        index[distance < self.min_radius] = 0

        in_rings = (distance >= self.min_radius) & (distance < self.max_radius)
        ring = np.floor((distance[in_rings] - self.min_radius) * self.ring_count
                        / (self.max_radius - self.min_radius)).astype(np.int64)
        index[in_rings] = np.minimum(ring, self.ring_count - 1) + 1
        return index

    def _check(self, region: int) -> int:
        if not 0 <= region < self.region_count:
            raise IndexError(f"region {region} out of range [0, {self.region_count})")
        return region

    def offsets(self, region: int) -> Tuple[np.ndarray, np.ndarray]:
        """Row and column offsets of one region."""
        return self._offsets[self._check(region)]

    def kernel(self, region: int) -> np.ndarray:
        """Normalised averaging kernel of one region, centred on the origin."""
        return self._kernels[self._check(region)]

    def sector_weights(self, region: int) -> np.ndarray:
        """
        Averaging matrix of the non-empty sectors of one region.

        Shape is ``(samples, sectors)``; multiplying the region's samples,
        ordered as in ``offsets``, by it gives the sector means.
        """
        return self._sector_weights[self._check(region)]

    def sample_count(self, region: int) -> int:
        return len(self.offsets(region)[0])

    def symmetry_order(self) -> List[int]:
        """Annuli innermost first, then the disk."""
        return list(range(1, self.region_count)) + [0]
