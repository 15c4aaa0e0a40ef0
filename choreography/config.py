"""Choreography configuration - recording, field and playback defaults.

Field units are meters (1 scene unit = 1 meter). Path time is in seconds,
event time in milliseconds.
"""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class RecorderConfig:
    """Thresholds for turning a drag gesture into a movement path.

    Frozen so a recorder cannot have its thresholds changed mid-drag.
    """

    # Planar distance a sample must travel before it is kept
    min_point_distance: float = 1.5
    # Release point is appended only when further than this from the last kept point
    final_point_tolerance: float = 0.1
    # Start-to-end displacement must exceed this, otherwise the drag was a click
    min_drag_distance: float = 1.0
    # Seconds
    min_duration: float = 2.0
    # Project samples onto the oval field boundary
    snap_to_field: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "min_point_distance": self.min_point_distance,
            "final_point_tolerance": self.final_point_tolerance,
            "min_drag_distance": self.min_drag_distance,
            "min_duration": self.min_duration,
            "snap_to_field": self.snap_to_field,
        }


@dataclass(frozen=True)
class FieldConfig:
    """Australian football oval dimensions in meters."""

    length: float = 165.0
    width: float = 135.0

    @property
    def semi_major(self) -> float:
        return self.length / 2

    @property
    def semi_minor(self) -> float:
        return self.width / 2

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {"length": self.length, "width": self.width}


@dataclass(frozen=True)
class PlaybackConfig:
    """Numeric tolerances used by interpolation and scheduling."""

    # Per-axis tolerance when deciding whether a path moves at all
    movement_epsilon: float = 1e-4
    # Progress step for finite-difference velocity
    velocity_delta: float = 0.01
    # Playback halts this many ms before an unacknowledged phase boundary
    boundary_guard_ms: float = 1.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "movement_epsilon": self.movement_epsilon,
            "velocity_delta": self.velocity_delta,
            "boundary_guard_ms": self.boundary_guard_ms,
        }


# Default instances
RECORDER_CONFIG = RecorderConfig()
FIELD_CONFIG = FieldConfig()
PLAYBACK_CONFIG = PlaybackConfig()


__all__ = [
    "RecorderConfig",
    "FieldConfig",
    "PlaybackConfig",
    "RECORDER_CONFIG",
    "FIELD_CONFIG",
    "PLAYBACK_CONFIG",
]
