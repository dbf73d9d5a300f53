"""
Bullseye Core Processor
Main entry point for marker detection on single images
"""

from typing import Dict, Any, Optional, Union
from datetime import datetime
from pathlib import Path
import logging
import time

import numpy as np

from bullseye import __version__
from bullseye.config import merge_config
from bullseye.detection.bullseye_detector import KeypointSelectorBullseye
from bullseye.exceptions import BullseyeError
from bullseye.utils.io_handler import load_image
from bullseye.utils.metrics import PerformanceMetrics

logger = logging.getLogger(__name__)


class BullseyeProcessor:
    """Runs the detector on an image and packages the results"""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize processor

        Args:
            config: Configuration overrides, shaped like DEFAULT_CONFIG (optional)
        """
        self.config = merge_config(config)
        self.version = __version__
        self.detector = KeypointSelectorBullseye.from_config(self.config)

    def process_image(self, image_input: Union[str, Path, np.ndarray],
                      image_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Detect bullseye markers in one image

        Args:
            image_input: Path to image file or numpy array
            image_id: Identifier echoed in the result (defaults to file stem)

        Returns:
            Dictionary containing detection results
        """
        metrics = PerformanceMetrics()
        metrics.start_timer('total')

        if isinstance(image_input, (str, Path)):
            image = load_image(str(image_input))
            image_id = image_id or Path(image_input).stem
        else:
            image = image_input
            image_id = image_id or f"image_{int(time.time())}"

        if image is None:
            raise ValueError(f"Failed to load image from {image_input}")

        try:
            with metrics.timer('bind'):
                self.detector.set_image(image)
            with metrics.timer('detect'):
                keypoints = self.detector.get_keypoints()
                refined = self.detector.get_keypoints_general_position()
        except BullseyeError as e:
            logger.warning("Detection failed for %s: %s", image_id, e)
            return {
                "system": "Bullseye",
                "version": self.version,
                "timestamp": datetime.now().isoformat(),
                "image_id": image_id,
                "status": "failed",
                "keypoints": [],
                "processing_metadata": {
                    "processing_time_ms": round(metrics.stop_timer('total'), 2),
                    "errors": [str(e)]
                }
            }

        total = metrics.stop_timer('total')
        timings = metrics.get_summary()

        return {
            "system": "Bullseye",
            "version": self.version,
            "timestamp": datetime.now().isoformat(),
            "image_id": image_id,
            "status": "success" if keypoints else "no_markers",

            "detector": {
                "min_radius": self.detector.config.min_radius,
                "max_radius": self.detector.config.max_radius,
                "ring_count": self.detector.config.ring_count,
                "score_threshold": self.detector.config.score_threshold,
                "exclusion_radius": self.detector.config.exclusion_radius
            },

            "keypoints": [
                {
                    "row": kp.row,
                    "column": kp.column,
                    "row_subpixel": round(gp.row, 4),
                    "column_subpixel": round(gp.column, 4),
                    "score": round(kp.score, 4)
                }
                for kp, gp in zip(keypoints, refined)
            ],

            "processing_metadata": {
                "processing_time_ms": round(total, 2),
                "stage_times_ms": {k: round(v, 2) for k, v in timings.items() if k != 'total'},
                "image_size": {
                    "width": int(image.shape[1]),
                    "height": int(image.shape[0])
                },
                "errors": []
            }
        }
