"""Bullseye keypoint selection: scanning, suppression and refinement."""

import logging
from typing import Any, Dict, List, Optional

import numpy as np

from bullseye.config import DetectorConfig
from bullseye.detection.image_source import check_size, read_only_view, to_intensity
from bullseye.detection.keypoints import Detection, KeypointBullseye
from bullseye.detection.refinement import QuadraticRefiner, neighbour_offsets
from bullseye.detection.ring_pattern import RingPattern
from bullseye.detection.scanner import CandidateScanner
from bullseye.detection.suppression import NonMaximumSuppressor
from bullseye.exceptions import NotReadyError

logger = logging.getLogger(__name__)


class KeypointSelectorBullseye:
    """Locates concentric-ring markers in a bound image."""

    def __init__(self, min_radius: int = 10, max_radius: int = 15, ring_count: int = 5,
                 **options):
        """
        Initialize detector.

        Args:
            min_radius: Radius of the central disk
            max_radius: Outer radius of the outermost annulus
            ring_count: Number of alternating annuli between the two radii
            **options: Tuning values of DetectorConfig (score_threshold,
                min_contrast, symmetry_weight, sector_count, exclusion_radius,
                max_subpixel_offset, chunk_size)

        Raises:
            ConfigurationError: If any parameter is invalid
        """
        self.config = DetectorConfig(min_radius, max_radius, ring_count, **options)
        self.pattern = RingPattern(min_radius, max_radius, ring_count,
                                   self.config.sector_count)
        self.scanner = CandidateScanner(self.config, self.pattern)
        self.suppressor = NonMaximumSuppressor(self.config.score_threshold,
                                               self.config.exclusion_radius)
        self.refiner = QuadraticRefiner(self.config.max_subpixel_offset)

        self._image = None
        self._intensity = None
        self._score_field = None
        self._detections = None

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None) -> 'KeypointSelectorBullseye':
        """Create a detector from a nested dict shaped like DEFAULT_CONFIG."""
        settings = DetectorConfig.from_dict(config)
        return cls(settings.min_radius, settings.max_radius, settings.ring_count,
                   score_threshold=settings.score_threshold,
                   min_contrast=settings.min_contrast,
                   symmetry_weight=settings.symmetry_weight,
                   sector_count=settings.sector_count,
                   exclusion_radius=settings.exclusion_radius,
                   max_subpixel_offset=settings.max_subpixel_offset,
                   chunk_size=settings.chunk_size)

    @property
    def image(self) -> Optional[np.ndarray]:
        """Read-only view of the bound image, or None."""
        return self._image

    def set_image(self, image: np.ndarray):
        """
        Bind a new image and discard results of the previous one.

        Raises:
            ImageSizeError: If either dimension is below 2*max_radius + 1
            ImageFormatError: If the array is not a grayscale or BGR image
        """
        view = read_only_view(image)
        intensity = to_intensity(view)
        check_size(intensity, self.config.min_image_size)

        self._image = view
        self._intensity = intensity
        self._score_field = None
        self._detections = None
        logger.debug("Bound %dx%d image", intensity.shape[0], intensity.shape[1])

    def get_keypoints(self) -> List[KeypointBullseye]:
        """Pixel-grid keypoints of the bound image, in row-major order."""
        return [d.integer() for d in self._get_detections()]

    def get_keypoints_general_position(self) -> List[KeypointBullseye]:
        """Sub-pixel keypoints, element-for-element with get_keypoints()."""
        return [d.general_position() for d in self._get_detections()]

    def get_score_field(self) -> np.ndarray:
        """Copy of the score field; -inf marks the unscored border."""
        self._get_detections()
        return self._score_field.copy()

    def _get_detections(self) -> List[Detection]:
        if self._intensity is None:
            raise NotReadyError("No image bound; call set_image() first")
        if self._detections is None:
            self._detections = self._detect(self._intensity)
        return self._detections

    def _detect(self, intensity: np.ndarray) -> List[Detection]:
        self._score_field = self.scanner.scan(intensity)
        peaks = self.suppressor.suppress(self._score_field)

        detections = []
        d_rows, d_cols = neighbour_offsets()
        for row, col, score in peaks:
            patch = self.scanner.score_locations(intensity, row + d_rows, col + d_cols)
            row_offset, column_offset = self.refiner.refine(patch.reshape(3, 3))
            detections.append(Detection(row, col, score, row_offset, column_offset))

        logger.info("Detected %d bullseye keypoint(s)", len(detections))
        return detections
