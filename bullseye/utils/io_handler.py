"""I/O handling for images and JSON output."""

import cv2
import json
import numpy as np
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class JSONWriter:
    """Write detection results to JSON."""

    @staticmethod
    def save_results(output: Union[Dict, List], output_path: str, indent: int = 2):
        """Save results to JSON file."""
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w') as f:
            json.dump(output, f, indent=indent)

    @staticmethod
    def load_results(input_path: str) -> Any:
        """Load results from JSON file."""
        with open(input_path, 'r') as f:
            return json.load(f)


def save_image(image: np.ndarray, output_path: str) -> bool:
    """Save image to file, creating parent directories."""
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    return bool(cv2.imwrite(str(output_path), image))


def load_image(image_path: str, grayscale: bool = True) -> Optional[np.ndarray]:
    """Load image from file; None if it cannot be read."""
    flags = cv2.IMREAD_GRAYSCALE if grayscale else cv2.IMREAD_COLOR
    return cv2.imread(str(image_path), flags)
