"""
Event renderer - evaluates an animation event at a point on its timeline.

This is the surface a frame-driven playback scheduler calls: entity
positions at a global time, the resolved end time, the active phase and the
next place playback must halt. The scheduler owns the clock and the record
of which phase boundaries it has already paused at.

Usage:
    renderer = EventRenderer(store.get_path)
    step = renderer.advance(event, clock, delta_ms, acknowledged=acked)
    updates = renderer.render(event, step.global_time)
    if step.paused_at is not None:
        ...  # show the phase banner, wait for resume, then acked = step.paused_at
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Set

from .config import PLAYBACK_CONFIG, PlaybackConfig
from .core.event import (
    AnimationEvent,
    active_phase_index,
    event_progress,
    next_phase_boundary,
    pending_phase_boundary,
    resolve_end_time,
    sorted_phases,
)
from .core.interpolation import position_at_time_with_offset
from .core.keyframe import MovementPath, Position

logger = logging.getLogger(__name__)

PathLookup = Callable[[str], Optional[MovementPath]]


@dataclass(frozen=True)
class EntityUpdate:
    """New position for one entity."""
    entity_id: str
    position: Position


@dataclass(frozen=True)
class FrameContext:
    """Timeline state at a global time."""
    global_time: float  # ms
    end_time: float  # ms
    progress: float  # 0-1 through the resolved end time
    phase_index: int  # sorted phase index, -1 when the event has no phases
    pending_boundary: Optional[int]  # unacknowledged boundary at or before global_time


@dataclass(frozen=True)
class PlaybackStep:
    """Result of advancing the playback clock by one frame."""
    global_time: float
    paused_at: Optional[int] = None  # sorted phase index playback halted before
    finished: bool = False


class EventRenderer:
    """
    Resolve per-entity positions for an event.

    Paths are looked up by id on every call so edits made elsewhere show up
    on the next frame. A binding whose path has disappeared leaves its
    entity where it was last rendered.
    """

    def __init__(self, path_lookup: PathLookup, config: Optional[PlaybackConfig] = None):
        self.path_lookup = path_lookup
        self.config = config or PLAYBACK_CONFIG
        self._last_known: Dict[str, Position] = {}
        self._warned: Set[str] = set()

    def render(self, event: AnimationEvent, global_time: float) -> List[EntityUpdate]:
        """
        Positions of every bound entity at ``global_time`` ms.

        Args:
            event: Event being played
            global_time: Playback clock in ms

        Returns:
            One update per entity with a resolvable position
        """
        updates = []
        for pp in event.player_paths:
            path = self.path_lookup(pp.path_id)

            if path is None or not path.keyframes:
                if pp.path_id not in self._warned:
                    logger.warning(
                        f"Event {event.id}: path {pp.path_id} for {pp.player_id} is missing, "
                        f"holding last known position"
                    )
                    self._warned.add(pp.path_id)
                held = self._last_known.get(pp.player_id)
                if held is not None:
                    updates.append(EntityUpdate(pp.player_id, held))
                continue

            # Event time is ms, path time is seconds
            position = position_at_time_with_offset(
                path,
                global_time / 1000.0,
                pp.start_time_offset / 1000.0,
            )
            self._last_known[pp.player_id] = position
            updates.append(EntityUpdate(pp.player_id, position))

        return updates

    def end_time(self, event: AnimationEvent) -> float:
        """Resolved end of the event in ms."""
        durations = {}
        for pp in event.player_paths:
            path = self.path_lookup(pp.path_id)
            if path is not None:
                durations[pp.path_id] = path.duration
        return resolve_end_time(event, durations)

    def context(
        self,
        event: AnimationEvent,
        global_time: float,
        acknowledged: int = -1,
    ) -> FrameContext:
        """Timeline state at ``global_time``."""
        end_time = self.end_time(event)
        return FrameContext(
            global_time=global_time,
            end_time=end_time,
            progress=event_progress(global_time, end_time),
            phase_index=active_phase_index(event.phases, global_time),
            pending_boundary=pending_phase_boundary(event.phases, global_time, acknowledged),
        )

    def advance(
        self,
        event: AnimationEvent,
        global_time: float,
        delta_ms: float,
        speed: float = 1.0,
        acknowledged: int = -1,
    ) -> PlaybackStep:
        """
        Move the playback clock forward by one frame.

        The step is clamped to the resolved end time and stops just before
        the next unacknowledged phase boundary.

        Args:
            event: Event being played
            global_time: Current clock in ms
            delta_ms: Wall-clock time since the previous frame
            speed: Playback rate multiplier
            acknowledged: Highest sorted phase index already paused at

        Returns:
            PlaybackStep with the new clock value
        """
        end_time = self.end_time(event)
        target = min(max(global_time + delta_ms * speed, 0.0), end_time)

        boundary = next_phase_boundary(event.phases, global_time, acknowledged)
        if boundary is not None:
            start = sorted_phases(event.phases)[boundary].start_time
            stop_at = max(global_time, start - self.config.boundary_guard_ms)
            if target >= stop_at:
                logger.debug(f"Event {event.id}: pausing before phase {boundary} at {stop_at}ms")
                return PlaybackStep(global_time=stop_at, paused_at=boundary)

        return PlaybackStep(global_time=target, finished=target >= end_time)

    def forget(self) -> None:
        """Drop remembered positions, e.g. when switching events."""
        self._last_known.clear()
        self._warned.clear()


def render_event(
    event: AnimationEvent,
    paths: Iterable[MovementPath],
    global_time: float,
) -> List[EntityUpdate]:
    """
    Convenience function to render one frame of an event.

    Args:
        event: Event to render
        paths: Paths the event may reference
        global_time: Playback clock in ms

    Returns:
        Entity updates
    """
    by_id = {path.id: path for path in paths}
    return EventRenderer(by_id.get).render(event, global_time)


__all__ = [
    "PathLookup",
    "EntityUpdate",
    "FrameContext",
    "PlaybackStep",
    "EventRenderer",
    "render_event",
]
