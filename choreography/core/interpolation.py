"""
Interpolation functions for movement paths.

Pure time -> position mapping. Each axis is interpolated linearly between
exactly two bracketing keyframes; there is no spline smoothing across more
points, so the timing model matches the straight segments the paths are
built from. Degenerate input never raises: an empty path sits at the origin,
a zero-width bracket holds its start position and a zero time delta gives a
zero velocity.
"""

import math
from typing import Iterable, List, Sequence, Tuple, Union

import numpy as np

from ..config import PLAYBACK_CONFIG
from .easing import EasingFn, ease_in_out, get_easing
from .keyframe import ORIGIN, Keyframe, MovementPath, Position

Vector = Tuple[float, float, float]

ZERO_VECTOR: Vector = (0.0, 0.0, 0.0)
VELOCITY_DELTA = PLAYBACK_CONFIG.velocity_delta


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation between two values. Exact at t=0 and t=1."""
    return a * (1 - t) + b * t


def lerp_position(start: Position, end: Position, t: float) -> Position:
    """Linear interpolation between two positions, axis by axis."""
    return (
        lerp(start[0], end[0], t),
        lerp(start[1], end[1], t),
        lerp(start[2], end[2], t),
    )


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value to [low, high]."""
    return min(max(value, low), high)


def distance(a: Iterable[float], b: Iterable[float]) -> float:
    """Euclidean distance between two points."""
    return math.dist(tuple(a), tuple(b))


def planar_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Distance on the ground plane (x, z), ignoring height."""
    return math.hypot(b[0] - a[0], b[2] - a[2])


def find_surrounding_keyframes(
    keyframes: Sequence[Keyframe],
    timestamp: float,
) -> Tuple[int, int]:
    """
    Find the keyframe pair bracketing ``timestamp``.

    The end index is the first keyframe strictly later than ``timestamp``
    (or the last keyframe when none is), and the start index is the one
    before it. At or before the first keyframe both indices are 0.

    Args:
        keyframes: Keyframes sorted by timestamp
        timestamp: Seconds

    Returns:
        (start_index, end_index); (-1, -1) for an empty sequence
    """
    if len(keyframes) == 0:
        return -1, -1
    if len(keyframes) == 1:
        return 0, 0
    if timestamp <= keyframes[0].timestamp:
        return 0, 0

    times = np.fromiter((kf.timestamp for kf in keyframes), dtype=np.float64,
                        count=len(keyframes))
    end = int(np.searchsorted(times, timestamp, side="right"))
    end = min(end, len(keyframes) - 1)
    return max(0, end - 1), end


def position_at_time(path: MovementPath, timestamp: float) -> Position:
    """
    Get the interpolated position at ``timestamp`` seconds into the path.

    Time is clamped to [0, duration].
    """
    keyframes = path.keyframes
    if not keyframes:
        return ORIGIN
    if len(keyframes) == 1:
        return keyframes[0].position

    t = clamp(timestamp, 0.0, path.duration)
    start_index, end_index = find_surrounding_keyframes(keyframes, t)
    if start_index == end_index:
        return keyframes[start_index].position

    start = keyframes[start_index]
    end = keyframes[end_index]
    span = end.timestamp - start.timestamp
    factor = (t - start.timestamp) / span if span > 0 else 0.0
    return lerp_position(start.position, end.position, factor)


def position_at_time_with_offset(
    path: MovementPath,
    global_time: float,
    start_offset: float,
) -> Position:
    """
    Get the position of a path that starts ``start_offset`` into a larger timeline.

    Before the offset the entity waits at its first keyframe; after
    ``start_offset + duration`` it rests at its last keyframe. All values are
    in the path's time unit (seconds).
    """
    keyframes = path.keyframes
    if not keyframes:
        return ORIGIN
    if global_time < start_offset:
        return keyframes[0].position
    if global_time > start_offset + path.duration:
        return keyframes[-1].position
    return position_at_time(path, global_time - start_offset)


def position_at_progress(path: MovementPath, progress: float) -> Position:
    """Get the position at normalized progress (0-1) through the path."""
    return position_at_time(path, clamp(progress, 0.0, 1.0) * path.duration)


def position_at_progress_with_easing(
    path: MovementPath,
    progress: float,
    easing: Union[str, EasingFn] = ease_in_out,
) -> Position:
    """
    Get the position at progress after remapping it through an easing curve.

    Args:
        path: Path to evaluate
        progress: 0-1, clamped
        easing: Easing callable or registered easing name

    Returns:
        Eased position
    """
    easing_fn = get_easing(easing)
    return position_at_progress(path, easing_fn(clamp(progress, 0.0, 1.0)))


def sample_positions(path: MovementPath, num_samples: int) -> List[Position]:
    """
    Sample positions at evenly spaced progress values.

    Used for drawing the path line; playback never goes through this.
    Fewer than two samples yields just the start position.
    """
    if num_samples < 2:
        return [position_at_progress(path, 0.0)]
    return [
        position_at_progress(path, i / (num_samples - 1))
        for i in range(num_samples)
    ]


def sample_positions_array(path: MovementPath, num_samples: int) -> np.ndarray:
    """Same samples as :func:`sample_positions`, as an (n, 3) array."""
    return np.asarray(sample_positions(path, num_samples), dtype=np.float64)


def path_length(path: MovementPath) -> float:
    """Sum of straight-segment lengths between consecutive keyframes."""
    if len(path.keyframes) < 2:
        return 0.0
    points = np.asarray([kf.position for kf in path.keyframes], dtype=np.float64)
    segments = np.linalg.norm(np.diff(points, axis=0), axis=1)
    return float(segments.sum())


def velocity_at_progress(
    path: MovementPath,
    progress: float,
    delta: float = VELOCITY_DELTA,
) -> Vector:
    """
    Approximate velocity (units per second) at a progress point.

    Forward difference over ``delta`` progress, switching to a backward
    difference at the end of the path so it never samples past it.
    """
    p1 = clamp(progress, 0.0, 1.0)
    p2 = clamp(p1 + delta, 0.0, 1.0)

    if p2 == p1:
        p1, p2 = clamp(p1 - delta, 0.0, 1.0), p1

    dt = (p2 - p1) * path.duration
    if dt == 0:
        return ZERO_VECTOR

    a = position_at_progress(path, p1)
    b = position_at_progress(path, p2)
    return (
        (b[0] - a[0]) / dt,
        (b[1] - a[1]) / dt,
        (b[2] - a[2]) / dt,
    )


def direction_at_end(path: MovementPath) -> Vector:
    """
    Unit ground-plane direction of the final segment, for arrowheads.

    Zero vector when the path has no final segment or it has no length.
    """
    keyframes = path.keyframes
    if len(keyframes) < 2:
        return ZERO_VECTOR
    a = keyframes[-2].position
    b = keyframes[-1].position
    length = planar_distance(a, b)
    if length == 0:
        return ZERO_VECTOR
    return ((b[0] - a[0]) / length, 0.0, (b[2] - a[2]) / length)


__all__ = [
    "Vector",
    "ZERO_VECTOR",
    "VELOCITY_DELTA",
    "lerp",
    "lerp_position",
    "clamp",
    "distance",
    "planar_distance",
    "find_surrounding_keyframes",
    "position_at_time",
    "position_at_time_with_offset",
    "position_at_progress",
    "position_at_progress_with_easing",
    "sample_positions",
    "sample_positions_array",
    "path_length",
    "velocity_at_progress",
    "direction_at_end",
]
