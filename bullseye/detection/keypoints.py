"""Keypoint records produced by the bullseye detector."""

from dataclasses import dataclass
from typing import Any, Dict, Union

Number = Union[int, float]


@dataclass(frozen=True)
class KeypointBullseye:
    """
    Marker location in image coordinates.

    Rows grow downward and columns rightward from the top-left corner.
    ``row`` and ``column`` are ints for pixel-grid keypoints and floats
    for general-position keypoints.
    """

    row: Number
    column: Number
    score: float = 0.0

    def as_tuple(self):
        return self.row, self.column

    def to_dict(self) -> Dict[str, Any]:
        return {'row': self.row, 'column': self.column, 'score': self.score}


@dataclass(frozen=True)
class Detection:
    """Integer anchor of one marker plus its sub-pixel offsets."""

    row: int
    column: int
    score: float
    row_offset: float = 0.0
    column_offset: float = 0.0

    def integer(self) -> KeypointBullseye:
        """Pixel-grid view, offsets dropped."""
        return KeypointBullseye(self.row, self.column, self.score)

    def general_position(self) -> KeypointBullseye:
        """Continuous view, offsets applied."""
        return KeypointBullseye(self.row + self.row_offset,
                                self.column + self.column_offset,
                                self.score)
