"""Visualization utilities for debugging and display."""

import cv2
import numpy as np
from typing import Sequence, Tuple

from bullseye.detection.keypoints import KeypointBullseye


def make_flag_image(shape: Tuple[int, int],
                    keypoints: Sequence[KeypointBullseye]) -> np.ndarray:
    """
    Mark each keypoint with its own gray level on a black image.

    Keypoint ``i`` (0-based) gets ``(i + 1) * (255 // len(keypoints))``.
    """
    flag = np.zeros(shape[:2], dtype=np.uint8)
    if not keypoints:
        return flag
    step = 255 // len(keypoints)
    for i, kp in enumerate(keypoints):
        flag[int(kp.row), int(kp.column)] = min(255, (i + 1) * step)
    return flag


def draw_keypoints(image: np.ndarray, keypoints: Sequence[KeypointBullseye],
                   radius: int = 15, color: Tuple[int, int, int] = (0, 255, 255),
                   thickness: int = 1) -> np.ndarray:
    """Draw a circle and centre cross for each keypoint."""
    output = cv2.cvtColor(image, cv2.COLOR_GRAY2BGR) if image.ndim == 2 else image.copy()
    for kp in keypoints:
        # OpenCV points are (x, y) = (column, row)
        center = (int(round(kp.column)), int(round(kp.row)))
        cv2.circle(output, center, radius, color, thickness)
        cv2.drawMarker(output, center, (0, 0, 255), cv2.MARKER_CROSS, 5, 1)
    return output


def score_field_to_image(score_field: np.ndarray) -> np.ndarray:
    """Map a score field to uint8, unscored border shown black."""
    scores = np.where(np.isfinite(score_field), score_field, 0.0)
    return np.clip(np.round(scores * 255), 0, 255).astype(np.uint8)
