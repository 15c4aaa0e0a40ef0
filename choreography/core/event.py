"""
AnimationEvent and AnimationPhase data structures.

An event groups several entities' paths on one shared timeline. Each entity
is bound by reference (path id) with its own start offset, and named phases
split the timeline into pause-and-explain sections.

Event durations, start offsets, phase start times and the global playback
clock are in milliseconds. Path durations are in seconds.
"""

import math
import time
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .exceptions import ParameterError
from .keyframe import IdFactory, uuid_id_factory


@dataclass(frozen=True)
class PlayerPathConfig:
    """
    Binds one entity's path into an event timeline.

    Attributes:
        player_id: Entity the path animates (ball ids are allowed too)
        path_id: Reference to a MovementPath held elsewhere
        start_time_offset: Milliseconds after event start that the path begins
    """
    player_id: str
    path_id: str
    start_time_offset: float = 0.0

    def __post_init__(self):
        if self.start_time_offset < 0:
            raise ParameterError(
                "start_time_offset must be non-negative",
                parameter="start_time_offset",
                value=self.start_time_offset,
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_id": self.player_id,
            "path_id": self.path_id,
            "start_time_offset": self.start_time_offset,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlayerPathConfig":
        return cls(
            player_id=data["player_id"],
            path_id=data["path_id"],
            start_time_offset=data.get("start_time_offset", 0.0),
        )


@dataclass(frozen=True)
class AnimationPhase:
    """
    Named pause boundary on an event timeline.

    Playback halts just before ``start_time`` until resumed, except for a
    phase at 0 which plays immediately.
    """
    id: str
    name: str
    start_time: float
    description: Optional[str] = None

    def __post_init__(self):
        if self.start_time < 0:
            raise ParameterError(
                "Phase start_time must be non-negative",
                parameter="start_time",
                value=self.start_time,
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "start_time": self.start_time,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnimationPhase":
        return cls(
            id=data["id"],
            name=data["name"],
            start_time=data["start_time"],
            description=data.get("description"),
        )


@dataclass(frozen=True)
class AnimationEvent:
    """
    Multi-entity animation on a shared timeline.

    ``player_paths`` holds at most one config per player id. ``duration`` is
    a floor; see :func:`resolve_end_time` for the actual end.
    """
    id: str
    name: str
    duration: float
    player_paths: Tuple[PlayerPathConfig, ...] = field(default_factory=tuple)
    phases: Tuple[AnimationPhase, ...] = field(default_factory=tuple)
    description: Optional[str] = None
    created_at: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dict (in-memory shape)."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "duration": self.duration,
            "player_paths": [pp.to_dict() for pp in self.player_paths],
            "phases": [phase.to_dict() for phase in self.phases],
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnimationEvent":
        """Create from dict."""
        return cls(
            id=data["id"],
            name=data["name"],
            description=data.get("description"),
            duration=data.get("duration", EVENT_DEFAULTS["duration"]),
            player_paths=_unique_by_player(
                PlayerPathConfig.from_dict(pp) for pp in data.get("player_paths", [])
            ),
            phases=tuple(AnimationPhase.from_dict(p) for p in data.get("phases", [])),
            created_at=data.get("created_at", 0.0),
        )


# Event system defaults
EVENT_DEFAULTS = {
    "duration": 30000.0,        # ms
    "start_time_offset": 0.0,   # ms
}

_IMMUTABLE_EVENT_FIELDS = frozenset({"id", "created_at"})


def _now_ms() -> float:
    return time.time() * 1000.0


def _unique_by_player(configs: Iterable[PlayerPathConfig]) -> Tuple[PlayerPathConfig, ...]:
    """Collapse duplicate player ids; the last config wins but keeps the first slot."""
    result: List[PlayerPathConfig] = []
    slots: Dict[str, int] = {}
    for config in configs:
        if config.player_id in slots:
            result[slots[config.player_id]] = config
        else:
            slots[config.player_id] = len(result)
            result.append(config)
    return tuple(result)


# ============================================================================
# CONSTRUCTORS
# ============================================================================

def create_player_path_config(
    player_id: str,
    path_id: str,
    start_time_offset: float = EVENT_DEFAULTS["start_time_offset"],
) -> PlayerPathConfig:
    """Create a player path configuration for an event."""
    return PlayerPathConfig(
        player_id=player_id,
        path_id=path_id,
        start_time_offset=float(start_time_offset),
    )


def create_animation_event(
    name: str,
    player_paths: Sequence[PlayerPathConfig] = (),
    duration: float = EVENT_DEFAULTS["duration"],
    description: Optional[str] = None,
    id: Optional[str] = None,
    created_at: Optional[float] = None,
    id_factory: Optional[IdFactory] = None,
) -> AnimationEvent:
    """
    Create an animation event with no phases.

    Args:
        name: Display name
        player_paths: Initial path bindings; duplicate player ids collapse
        duration: Minimum length in ms
        description: Optional notes
        id: Explicit id; generated when omitted
        created_at: Creation time in ms; wall clock when omitted
        id_factory: Generator used when ``id`` is omitted

    Returns:
        New AnimationEvent
    """
    factory = id_factory or uuid_id_factory
    return AnimationEvent(
        id=id if id is not None else factory("event"),
        name=name,
        description=description,
        duration=float(duration),
        player_paths=_unique_by_player(player_paths),
        phases=(),
        created_at=_now_ms() if created_at is None else created_at,
    )


def create_animation_phase(
    name: str,
    start_time: float,
    description: Optional[str] = None,
    id: Optional[str] = None,
    id_factory: Optional[IdFactory] = None,
) -> AnimationPhase:
    """Create a phase starting ``start_time`` ms into the event."""
    factory = id_factory or uuid_id_factory
    return AnimationPhase(
        id=id if id is not None else factory("phase"),
        name=name,
        start_time=float(start_time),
        description=description,
    )


# ============================================================================
# MUTATORS (copy-on-write)
# ============================================================================

def add_player_path(event: AnimationEvent, config: PlayerPathConfig) -> AnimationEvent:
    """Add a path binding, replacing any existing one for the same player."""
    return replace(event, player_paths=_unique_by_player(event.player_paths + (config,)))


def remove_player_path(event: AnimationEvent, player_id: str) -> AnimationEvent:
    """Remove the path binding for a player."""
    return replace(
        event,
        player_paths=tuple(pp for pp in event.player_paths if pp.player_id != player_id),
    )


def update_player_path(
    event: AnimationEvent,
    player_id: str,
    path_id: Optional[str] = None,
    start_time_offset: Optional[float] = None,
) -> AnimationEvent:
    """Update a player's path binding. Unknown players leave the event unchanged."""
    def _update(pp: PlayerPathConfig) -> PlayerPathConfig:
        if pp.player_id != player_id:
            return pp
        return PlayerPathConfig(
            player_id=pp.player_id,
            path_id=pp.path_id if path_id is None else path_id,
            start_time_offset=(
                pp.start_time_offset if start_time_offset is None else float(start_time_offset)
            ),
        )

    return replace(event, player_paths=tuple(_update(pp) for pp in event.player_paths))


def update_event(event: AnimationEvent, **changes: Any) -> AnimationEvent:
    """
    Update event properties.

    Raises:
        ParameterError: For ``id``/``created_at`` or unknown field names
    """
    known = {f.name for f in fields(AnimationEvent)}
    for name in changes:
        if name in _IMMUTABLE_EVENT_FIELDS:
            raise ParameterError(f"Event field '{name}' cannot be changed", parameter=name)
        if name not in known:
            raise ParameterError(f"Unknown event field '{name}'", parameter=name)

    if "player_paths" in changes:
        changes["player_paths"] = _unique_by_player(changes["player_paths"])
    if "phases" in changes:
        changes["phases"] = tuple(changes["phases"])
    return replace(event, **changes)


def add_phase(event: AnimationEvent, phase: AnimationPhase) -> AnimationEvent:
    """Add a phase, replacing any phase with the same id."""
    phases = tuple(p for p in event.phases if p.id != phase.id) + (phase,)
    return replace(event, phases=phases)


def remove_phase(event: AnimationEvent, phase_id: str) -> AnimationEvent:
    """Remove a phase by id."""
    return replace(event, phases=tuple(p for p in event.phases if p.id != phase_id))


# ============================================================================
# QUERIES
# ============================================================================

def get_player_path_config(
    event: AnimationEvent,
    player_id: str,
) -> Optional[PlayerPathConfig]:
    """Get a player's path binding, if any."""
    for pp in event.player_paths:
        if pp.player_id == player_id:
            return pp
    return None


def has_player_path(event: AnimationEvent, player_id: str) -> bool:
    """Check if an event binds a path for a player."""
    return get_player_path_config(event, player_id) is not None


def is_valid_event(event: AnimationEvent) -> bool:
    """An event is playable with a name, a positive duration and at least one path."""
    return (
        len(event.name.strip()) > 0
        and event.duration > 0
        and len(event.player_paths) > 0
    )


def resolve_end_time(
    event: AnimationEvent,
    path_durations: Mapping[str, float],
) -> float:
    """
    Actual end of an event in ms.

    The latest ``start_time_offset + path duration`` across all bindings, but
    never earlier than ``event.duration``.

    Args:
        event: Event to resolve
        path_durations: path_id -> path duration in seconds; missing ids count as 0

    Returns:
        End time in milliseconds
    """
    end_time = event.duration
    for pp in event.player_paths:
        path_duration = path_durations.get(pp.path_id, 0.0)
        end_time = max(end_time, pp.start_time_offset + path_duration * 1000.0)
    return end_time


# ============================================================================
# PHASE SCHEDULING
# ============================================================================
# Acknowledgment (has playback already paused at a boundary) is tracked by the
# caller as the highest acknowledged index into the sorted phase list.

def sorted_phases(phases: Iterable[AnimationPhase]) -> List[AnimationPhase]:
    """Phases ascending by start time; ties keep insertion order."""
    return sorted(phases, key=lambda p: p.start_time)


def active_phase_index(phases: Iterable[AnimationPhase], global_time: float) -> int:
    """
    Index (into the sorted phases) of the phase playing at ``global_time``.

    Returns 0 before any phase has started and -1 when there are no phases.
    """
    ordered = sorted_phases(phases)
    if not ordered:
        return -1
    for i in range(len(ordered) - 1, -1, -1):
        if global_time >= ordered[i].start_time:
            return i
    return 0


def pending_phase_boundary(
    phases: Iterable[AnimationPhase],
    global_time: float,
    acknowledged: int = -1,
) -> Optional[int]:
    """
    Most recent pause boundary at or before ``global_time`` not yet acknowledged.

    A phase at 0 is the prologue and never counts as a boundary. Phases
    sharing a start time are reported lowest index first, matching the order
    :func:`next_phase_boundary` pauses at them.

    Args:
        phases: Event phases, any order
        global_time: Playback clock in ms
        acknowledged: Highest sorted index the caller has already paused for

    Returns:
        Sorted phase index, or None
    """
    ordered = sorted_phases(phases)
    latest = None
    for phase in ordered:
        if 0 < phase.start_time <= global_time:
            latest = phase.start_time
    if latest is None:
        return None
    for i, phase in enumerate(ordered):
        if phase.start_time == latest and i > acknowledged:
            return i
    return None


def next_phase_boundary(
    phases: Iterable[AnimationPhase],
    global_time: float,
    acknowledged: int = -1,
) -> Optional[int]:
    """First unacknowledged pause boundary strictly after ``global_time``."""
    ordered = sorted_phases(phases)
    for i, phase in enumerate(ordered):
        if i > acknowledged and phase.start_time > 0 and phase.start_time > global_time:
            return i
    return None


# ============================================================================
# TIMELINE HELPERS
# ============================================================================

def event_progress(global_time: float, duration: float) -> float:
    """Progress (0-1) through an event."""
    if duration <= 0:
        return 0.0
    return max(0.0, min(1.0, global_time / duration))


def time_from_progress(progress: float, duration: float) -> float:
    """Global time (ms) for a progress value."""
    return max(0.0, min(duration, progress * duration))


def format_event_time(ms: float) -> str:
    """Format milliseconds as ``mm:ss.cc``."""
    total_seconds = ms / 1000.0
    minutes = math.floor(total_seconds / 60)
    seconds = math.floor(total_seconds % 60)
    centis = math.floor((total_seconds % 1) * 100)
    return f"{minutes:02d}:{seconds:02d}.{centis:02d}"


__all__ = [
    "PlayerPathConfig",
    "AnimationPhase",
    "AnimationEvent",
    "EVENT_DEFAULTS",
    "create_player_path_config",
    "create_animation_event",
    "create_animation_phase",
    "add_player_path",
    "remove_player_path",
    "update_player_path",
    "update_event",
    "add_phase",
    "remove_phase",
    "get_player_path_config",
    "has_player_path",
    "is_valid_event",
    "resolve_end_time",
    "sorted_phases",
    "active_phase_index",
    "pending_phase_boundary",
    "next_phase_boundary",
    "event_progress",
    "time_from_progress",
    "format_event_time",
]
