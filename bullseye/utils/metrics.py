"""Timing and localisation accuracy metrics."""

import numpy as np
from contextlib import contextmanager
from time import perf_counter
from typing import Dict, Sequence, Tuple
from scipy.spatial import cKDTree


class PerformanceMetrics:
    """Track stage timings in milliseconds."""

    def __init__(self):
        self.start_times = {}
        self.durations = {}

    def start_timer(self, name: str):
        """Start timing a stage."""
        self.start_times[name] = perf_counter()

    def stop_timer(self, name: str) -> float:
        """Stop timing and return duration in milliseconds."""
        if name not in self.start_times:
            return 0.0
        duration = (perf_counter() - self.start_times.pop(name)) * 1000
        self.durations[name] = duration
        return duration

    @contextmanager
    def timer(self, name: str):
        self.start_timer(name)
        try:
            yield
        finally:
            self.stop_timer(name)

    def get_summary(self) -> Dict[str, float]:
        """Get summary of all timings."""
        return self.durations.copy()


class AccuracyMetrics:
    """Compare detected keypoints against known marker centres."""

    @staticmethod
    def match_keypoints(detected: Sequence[Tuple[float, float]],
                        ground_truth: Sequence[Tuple[float, float]],
                        tolerance: float = 2.0) -> Dict[str, float]:
        """
        Greedily pair each true centre with its nearest unused detection.

        Args:
            detected: (row, column) detections
            ground_truth: (row, column) true centres
            tolerance: Largest distance counted as a match, in pixels

        Returns:
            Counts, precision/recall/F1 and error statistics of the matches
        """
        detected = np.asarray(detected, dtype=np.float64).reshape(-1, 2)
        truth = np.asarray(ground_truth, dtype=np.float64).reshape(-1, 2)

        errors = []
        if len(detected) and len(truth):
            tree = cKDTree(detected)
            used = set()
            for point in truth:
                distances, indices = tree.query(point, k=len(detected))
                for distance, index in zip(np.atleast_1d(distances), np.atleast_1d(indices)):
                    if distance > tolerance:
                        break
                    if index not in used:
                        used.add(int(index))
                        errors.append(float(distance))
                        break

        true_positives = len(errors)
        result = AccuracyMetrics.calculate_precision_recall(
            true_positives, len(detected) - true_positives, len(truth) - true_positives)
        result['true_positives'] = true_positives
        result.update(AccuracyMetrics.localization_error(np.asarray(errors)))
        return result

    @staticmethod
    def calculate_precision_recall(true_positives: int, false_positives: int,
                                   false_negatives: int) -> Dict[str, float]:
        """Calculate precision, recall, and F1 score."""
        precision = true_positives / (true_positives + false_positives) if (true_positives + false_positives) > 0 else 0
        recall = true_positives / (true_positives + false_negatives) if (true_positives + false_negatives) > 0 else 0
        f1 = 2 * (precision * recall) / (precision + recall) if (precision + recall) > 0 else 0

        return {
            'precision': precision,
            'recall': recall,
            'f1_score': f1
        }

    @staticmethod
    def localization_error(errors: np.ndarray) -> Dict[str, float]:
        """Summary statistics of per-marker distances; NaN when empty."""
        if errors.size == 0:
            nan = float('nan')
            return {'mean_error': nan, 'median_error': nan, 'max_error': nan}
        return {
            'mean_error': float(np.mean(errors)),
            'median_error': float(np.median(errors)),
            'max_error': float(np.max(errors))
        }
