"""Oval field geometry on the ground plane (x, z)."""

import math
from typing import Dict, Optional, Tuple

from ..config import FIELD_CONFIG, FieldConfig


def is_point_in_field(x: float, z: float, config: Optional[FieldConfig] = None) -> bool:
    """Check if a ground point lies inside the oval boundary."""
    config = config or FIELD_CONFIG
    nx = x / config.semi_major
    nz = z / config.semi_minor
    return nx * nx + nz * nz <= 1


def snap_to_field(x: float, z: float, config: Optional[FieldConfig] = None) -> Tuple[float, float]:
    """Project a point outside the oval back onto its boundary."""
    config = config or FIELD_CONFIG
    if is_point_in_field(x, z, config):
        return x, z
    angle = math.atan2(z / config.semi_minor, x / config.semi_major)
    return config.semi_major * math.cos(angle), config.semi_minor * math.sin(angle)


def get_field_bounds(config: Optional[FieldConfig] = None) -> Dict[str, float]:
    """Axis-aligned bounds of the oval."""
    config = config or FIELD_CONFIG
    return {
        "min_x": -config.semi_major,
        "max_x": config.semi_major,
        "min_z": -config.semi_minor,
        "max_z": config.semi_minor,
    }


__all__ = [
    "is_point_in_field",
    "snap_to_field",
    "get_field_bounds",
]
