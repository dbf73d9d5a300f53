"""
Configuration management for the bullseye detector
"""

import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

import numpy as np
import yaml

from bullseye.exceptions import ConfigurationError

DEFAULT_CONFIG = {
    "detection": {
        "min_radius": 10,
        "max_radius": 15,
        "ring_count": 5
    },
    "scoring": {
        "score_threshold": 0.5,
        "min_contrast": 0.05,
        "symmetry_weight": 1.0,
        "sector_count": 8,
        "chunk_size": 4096
    },
    "suppression": {
        "exclusion_radius": None
    },
    "refinement": {
        "max_subpixel_offset": 0.5
    },
    "output": {
        "json_indent": 2
    }
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def merge_config(override: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return DEFAULT_CONFIG deep-merged with ``override``."""
    return _merge(DEFAULT_CONFIG, override or {})


def load_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a YAML configuration file on top of the defaults.

    Args:
        config_path: Path to a YAML file holding any subset of DEFAULT_CONFIG

    Returns:
        Complete configuration dictionary
    """
    with open(config_path, 'r') as f:
        loaded = yaml.safe_load(f) or {}
    if not isinstance(loaded, dict):
        raise ConfigurationError(f"Configuration in {config_path} must be a mapping")
    return merge_config(loaded)


def _is_int(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


@dataclass(frozen=True)
class DetectorConfig:
    """Immutable detector parameters, validated on creation."""

    min_radius: int
    max_radius: int
    ring_count: int
    score_threshold: float = 0.5
    min_contrast: float = 0.05
    symmetry_weight: float = 1.0
    sector_count: int = 8
    exclusion_radius: Optional[int] = None
    max_subpixel_offset: float = 0.5
    chunk_size: int = 4096

    def __post_init__(self):
        for name in ('min_radius', 'max_radius', 'ring_count', 'chunk_size'):
            value = getattr(self, name)
            if not _is_int(value) or value < 1:
                raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")
        if self.min_radius >= self.max_radius:
            raise ConfigurationError(
                f"min_radius ({self.min_radius}) must be smaller than max_radius ({self.max_radius})")
        if self.exclusion_radius is None:
            object.__setattr__(self, 'exclusion_radius', int(self.max_radius))
        elif not _is_int(self.exclusion_radius) or self.exclusion_radius < 1:
            raise ConfigurationError(
                f"exclusion_radius must be a positive integer, got {self.exclusion_radius!r}")
        if not 0.0 <= self.score_threshold < 1.0:
            raise ConfigurationError(f"score_threshold must lie in [0, 1), got {self.score_threshold}")
        if self.min_contrast < 0.0:
            raise ConfigurationError(f"min_contrast must be non-negative, got {self.min_contrast}")
        if self.symmetry_weight <= 0.0:
            raise ConfigurationError(f"symmetry_weight must be positive, got {self.symmetry_weight}")
        if not _is_int(self.sector_count) or self.sector_count < 2:
            raise ConfigurationError(
                f"sector_count must be an integer of at least 2, got {self.sector_count!r}")
        if not 0.0 < self.max_subpixel_offset < 1.0:
            raise ConfigurationError(
                f"max_subpixel_offset must lie in (0, 1), got {self.max_subpixel_offset}")

    @property
    def min_image_size(self) -> int:
        """Smallest image dimension holding one valid detection location."""
        return 2 * self.max_radius + 1

    @classmethod
    def from_dict(cls, config: Optional[Dict[str, Any]] = None) -> 'DetectorConfig':
        """Build from a nested configuration dict shaped like DEFAULT_CONFIG."""
        full = merge_config(config)
        detection = full['detection']
        scoring = full['scoring']
        return cls(
            min_radius=detection['min_radius'],
            max_radius=detection['max_radius'],
            ring_count=detection['ring_count'],
            score_threshold=float(scoring['score_threshold']),
            min_contrast=float(scoring['min_contrast']),
            symmetry_weight=float(scoring['symmetry_weight']),
            sector_count=scoring['sector_count'],
            exclusion_radius=full['suppression']['exclusion_radius'],
            max_subpixel_offset=float(full['refinement']['max_subpixel_offset']),
            chunk_size=scoring['chunk_size'],
        )
