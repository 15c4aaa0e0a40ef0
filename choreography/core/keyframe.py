"""
Keyframe and MovementPath data structures.

Paths are immutable values: every mutator returns a new path and leaves its
input untouched, so a playback loop can keep reading the old value while an
editor swaps in the new one.

Keyframe timestamps and path durations are in seconds.
"""

import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Optional, Sequence, Tuple

from ..config import PLAYBACK_CONFIG
from .exceptions import InvalidPathError, InvariantViolationError, ParameterError

Position = Tuple[float, float, float]
IdFactory = Callable[[str], str]

ORIGIN: Position = (0.0, 0.0, 0.0)


def uuid_id_factory(prefix: str) -> str:
    """Default identifier factory: ``<prefix>-<uuid4 hex>``."""
    return f"{prefix}-{uuid.uuid4().hex}"


def as_position(value: Iterable[float]) -> Position:
    """Coerce any 3-element iterable to a float tuple."""
    x, y, z = value
    return (float(x), float(y), float(z))


class EntityType(Enum):
    """Kinds of entity that can own a movement path."""
    BALL = "ball"
    PLAYER = "player"


@dataclass(frozen=True)
class Keyframe:
    """
    Position of an entity at one instant.

    Attributes:
        timestamp: Seconds from the start of the path (>= 0)
        position: (x, y, z) in field units
    """
    timestamp: float
    position: Position = ORIGIN

    def __post_init__(self):
        if self.timestamp < 0:
            raise ParameterError(
                "Keyframe timestamp must be non-negative",
                parameter="timestamp",
                value=self.timestamp,
            )
        object.__setattr__(self, "timestamp", float(self.timestamp))
        object.__setattr__(self, "position", as_position(self.position))

    def to_dict(self) -> Dict[str, Any]:
        return {"timestamp": self.timestamp, "position": list(self.position)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Keyframe":
        return cls(timestamp=data["timestamp"], position=data["position"])


# Waypoints are user-placed keyframes
Waypoint = Keyframe


@dataclass(frozen=True)
class MovementPath:
    """
    Timed route for one ball or player.

    ``keyframes`` is sorted ascending by timestamp and ``duration`` equals the
    last keyframe's timestamp; both are re-derived on construction, so the
    ``duration`` argument is informational. A path with fewer than two keyframes is
    incomplete and must not be scheduled for playback.
    """
    id: str
    entity_id: str
    entity_type: EntityType
    keyframes: Tuple[Keyframe, ...] = field(default_factory=tuple)
    duration: float = 0.0

    def __post_init__(self):
        keyframes = _sorted(self.keyframes)
        object.__setattr__(self, "keyframes", keyframes)
        object.__setattr__(self, "duration", _duration_of(keyframes))

    def __len__(self) -> int:
        return len(self.keyframes)

    @property
    def start(self) -> Optional[Keyframe]:
        return self.keyframes[0] if self.keyframes else None

    @property
    def end(self) -> Optional[Keyframe]:
        return self.keyframes[-1] if self.keyframes else None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dict (in-memory shape)."""
        return {
            "id": self.id,
            "entity_id": self.entity_id,
            "entity_type": self.entity_type.value,
            "keyframes": [kf.to_dict() for kf in self.keyframes],
            "duration": self.duration,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MovementPath":
        """Create from dict. Keyframes are re-sorted and duration re-derived."""
        keyframes = _sorted(Keyframe.from_dict(kf) for kf in data.get("keyframes", []))
        return cls(
            id=data["id"],
            entity_id=data["entity_id"],
            entity_type=EntityType(data["entity_type"]),
            keyframes=keyframes,
            duration=_duration_of(keyframes),
        )


# Path system defaults
PATH_DEFAULTS = {
    "duration": 5.0,      # seconds
    "min_keyframes": 2,   # start + end
}


def _sorted(keyframes: Iterable[Keyframe]) -> Tuple[Keyframe, ...]:
    # sorted() is stable, so keyframes sharing a timestamp keep insertion order
    return tuple(sorted(keyframes, key=lambda kf: kf.timestamp))


def _duration_of(keyframes: Sequence[Keyframe]) -> float:
    return keyframes[-1].timestamp if keyframes else 0.0


def _path_id(entity_type: EntityType, entity_id: str,
             id: Optional[str], id_factory: Optional[IdFactory]) -> str:
    if id is not None:
        return id
    factory = id_factory or uuid_id_factory
    return factory(f"path-{entity_type.value}-{entity_id}")


def create_keyframe(timestamp: float, position: Iterable[float]) -> Keyframe:
    """Create a keyframe at a timestamp and position."""
    return Keyframe(timestamp=timestamp, position=as_position(position))


def create_path(
    entity_id: str,
    entity_type: EntityType,
    start: Iterable[float],
    end: Iterable[float],
    duration: float = PATH_DEFAULTS["duration"],
    id: Optional[str] = None,
    id_factory: Optional[IdFactory] = None,
) -> MovementPath:
    """
    Create a straight two-keyframe path.

    Args:
        entity_id: Ball or player the path belongs to
        entity_type: EntityType.BALL or EntityType.PLAYER
        start: Position at t=0
        end: Position at t=duration
        duration: Seconds
        id: Explicit path id; generated when omitted
        id_factory: Generator used when ``id`` is omitted

    Returns:
        New MovementPath
    """
    keyframes = (create_keyframe(0.0, start), create_keyframe(duration, end))
    return MovementPath(
        id=_path_id(entity_type, entity_id, id, id_factory),
        entity_id=entity_id,
        entity_type=entity_type,
        keyframes=keyframes,
        duration=float(duration),
    )


def create_path_from_waypoints(
    entity_id: str,
    entity_type: EntityType,
    waypoints: Sequence[Keyframe],
    id: Optional[str] = None,
    id_factory: Optional[IdFactory] = None,
) -> MovementPath:
    """
    Create a path from user-placed or recorded waypoints.

    Waypoints may arrive in any order; they are sorted by timestamp and the
    path duration is taken from the last one.

    Raises:
        InvalidPathError: If fewer than two waypoints are given
    """
    min_keyframes = PATH_DEFAULTS["min_keyframes"]
    if len(waypoints) < min_keyframes:
        raise InvalidPathError(
            f"Path requires at least {min_keyframes} waypoints",
            count=len(waypoints),
            entity_id=entity_id,
        )

    keyframes = _sorted(waypoints)
    return MovementPath(
        id=_path_id(entity_type, entity_id, id, id_factory),
        entity_id=entity_id,
        entity_type=entity_type,
        keyframes=keyframes,
        duration=_duration_of(keyframes),
    )


def add_keyframe(path: MovementPath, keyframe: Keyframe) -> MovementPath:
    """Insert a keyframe; duration grows if it lands past the end."""
    keyframes = _sorted(path.keyframes + (keyframe,))
    return replace(
        path,
        keyframes=keyframes,
        duration=max(path.duration, keyframe.timestamp),
    )


def remove_keyframe(path: MovementPath, index: int) -> MovementPath:
    """
    Remove the keyframe at ``index``.

    Raises:
        InvariantViolationError: If fewer than two keyframes would remain
        IndexError: If ``index`` is out of range
    """
    min_keyframes = PATH_DEFAULTS["min_keyframes"]
    if len(path.keyframes) <= min_keyframes:
        raise InvariantViolationError(
            f"Cannot remove keyframe: path requires at least {min_keyframes} keyframes",
            path_id=path.id,
            count=len(path.keyframes),
        )
    if not -len(path.keyframes) <= index < len(path.keyframes):
        raise IndexError(f"keyframe index {index} out of range for path {path.id}")

    index %= len(path.keyframes)
    keyframes = path.keyframes[:index] + path.keyframes[index + 1:]
    return replace(path, keyframes=keyframes, duration=_duration_of(keyframes))


def update_keyframe(
    path: MovementPath,
    index: int,
    timestamp: Optional[float] = None,
    position: Optional[Iterable[float]] = None,
) -> MovementPath:
    """Update a keyframe's timestamp and/or position, then re-sort."""
    current = path.keyframes[index]
    updated = Keyframe(
        timestamp=current.timestamp if timestamp is None else timestamp,
        position=current.position if position is None else as_position(position),
    )
    index %= len(path.keyframes)
    keyframes = _sorted(
        path.keyframes[:index] + (updated,) + path.keyframes[index + 1:]
    )
    return replace(path, keyframes=keyframes, duration=_duration_of(keyframes))


def is_valid_path(path: MovementPath) -> bool:
    """A path is playable with at least two keyframes and a positive duration."""
    return len(path.keyframes) >= PATH_DEFAULTS["min_keyframes"] and path.duration > 0


def path_has_movement(
    path: MovementPath,
    epsilon: float = PLAYBACK_CONFIG.movement_epsilon,
) -> bool:
    """True if the start and end positions differ on any axis."""
    if len(path.keyframes) < PATH_DEFAULTS["min_keyframes"]:
        return False
    start = path.keyframes[0].position
    end = path.keyframes[-1].position
    return any(abs(a - b) > epsilon for a, b in zip(start, end))


__all__ = [
    "Position",
    "IdFactory",
    "ORIGIN",
    "EntityType",
    "Keyframe",
    "Waypoint",
    "MovementPath",
    "PATH_DEFAULTS",
    "uuid_id_factory",
    "as_position",
    "create_keyframe",
    "create_path",
    "create_path_from_waypoints",
    "add_keyframe",
    "remove_keyframe",
    "update_keyframe",
    "is_valid_path",
    "path_has_movement",
]
