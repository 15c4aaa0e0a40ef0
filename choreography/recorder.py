"""
Path recorder - turns a free-hand drag into a timed movement path.

Usage:
    recorder = PathRecorder("player-7", EntityType.PLAYER, store,
                            protection=AnyProtection([events, captured]))
    recorder.begin(player.position)          # gesture down
    recorder.update(pointer_ground_point)    # once per frame while dragging
    path = recorder.end(player.position)     # gesture up / cancel / leave

Samples closer than ``min_point_distance`` to the last kept point are
dropped, so the keyframe count is bounded by distance travelled rather than
frame rate. Timestamps are spread evenly by index across the drag's
wall-clock duration. ``end`` may be called from several sources (local
release, window-level release, pointer cancel); only the first call while
recording does anything.
"""

import logging
import time
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from .adapters.protocol import (
    HistorySink,
    HistorySnapshot,
    NoProtection,
    PathProtection,
    PathStore,
)
from .config import RECORDER_CONFIG, RecorderConfig
from .core.field import snap_to_field
from .core.interpolation import planar_distance
from .core.keyframe import (
    EntityType,
    IdFactory,
    Keyframe,
    MovementPath,
    Position,
    as_position,
    create_path_from_waypoints,
)

logger = logging.getLogger(__name__)


class RecorderState(Enum):
    """Recorder lifecycle."""
    IDLE = "idle"
    RECORDING = "recording"


class PathRecorder:
    """
    Drag-to-path capture for a single entity.

    One recorder per entity; recorders for different entities share nothing
    and can run side by side.
    """

    def __init__(
        self,
        entity_id: str,
        entity_type: EntityType,
        store: PathStore,
        protection: Optional[PathProtection] = None,
        history: Optional[HistorySink] = None,
        config: Optional[RecorderConfig] = None,
        clock: Callable[[], float] = time.monotonic,
        id_factory: Optional[IdFactory] = None,
    ):
        """
        Args:
            entity_id: Ball or player being dragged
            entity_type: EntityType of the entity
            store: Where prior paths are removed and the new path is added
            protection: Paths it protects survive a new recording
            history: Notified with the pre-drag position when a path is made
            config: Recording thresholds
            clock: Seconds, monotonic
            id_factory: Path id generator
        """
        self.entity_id = entity_id
        self.entity_type = entity_type
        self.store = store
        self.protection = protection or NoProtection()
        self.history = history
        self.config = config or RECORDER_CONFIG
        self.clock = clock
        self.id_factory = id_factory

        self._state = RecorderState.IDLE
        self._points: List[Position] = []
        self._start_time = 0.0
        self._pre_drag: Optional[Position] = None
        # Latest sample offered, kept or not
        self._latest: Optional[Position] = None

    @property
    def state(self) -> RecorderState:
        return self._state

    @property
    def is_recording(self) -> bool:
        return self._state is RecorderState.RECORDING

    @property
    def points(self) -> Tuple[Position, ...]:
        """Points kept so far in the current recording."""
        return tuple(self._points)

    def begin(self, position: Sequence[float]) -> bool:
        """
        Start recording from the entity's current position.

        Discards the entity's previous paths unless protected.

        Returns:
            False if a recording was already in progress
        """
        if self.is_recording:
            logger.debug(f"Recorder for {self.entity_id} already recording, ignoring begin")
            return False

        self._discard_previous_paths()

        self._pre_drag = as_position(position)
        start = self._snap(self._pre_drag)
        self._points = [start]
        self._latest = start
        self._start_time = self.clock()
        self._state = RecorderState.RECORDING
        logger.debug(f"Recording started for {self.entity_type.value} {self.entity_id} at {start}")
        return True

    def update(self, position: Sequence[float]) -> bool:
        """
        Offer a live position sample.

        Returns:
            True if the sample was kept
        """
        if not self.is_recording:
            return False

        point = self._snap(as_position(position))
        self._latest = point
        if planar_distance(self._points[-1], point) >= self.config.min_point_distance:
            self._points.append(point)
            return True
        return False

    def end(self, final_position: Optional[Sequence[float]] = None) -> Optional[MovementPath]:
        """
        Finish recording and emit a path.

        Args:
            final_position: Entity position at release; the latest sample
                offered to ``update`` when omitted

        Returns:
            The new path, or None if not recording or the drag was a click
        """
        if not self.is_recording:
            return None
        # Leave RECORDING before doing any work so a second end signal is a no-op
        self._state = RecorderState.IDLE

        points = list(self._points)
        pre_drag = self._pre_drag
        latest = self._latest
        elapsed = self.clock() - self._start_time
        self._points = []
        self._pre_drag = None
        self._latest = None

        if final_position is not None:
            final = self._snap(as_position(final_position))
        else:
            final = latest
        if (
            final is not None
            and planar_distance(points[-1], final) > self.config.final_point_tolerance
        ):
            points.append(final)

        if len(points) < 2:
            logger.debug(f"Discarded recording for {self.entity_id}: {len(points)} point(s)")
            return None

        displacement = planar_distance(points[0], points[-1])
        if displacement <= self.config.min_drag_distance:
            logger.debug(
                f"Discarded recording for {self.entity_id}: "
                f"displacement {displacement:.2f} <= {self.config.min_drag_distance}"
            )
            return None

        duration = max(self.config.min_duration, elapsed)
        last = len(points) - 1
        waypoints = [
            Keyframe(timestamp=(i / last) * duration, position=point)
            for i, point in enumerate(points)
        ]
        path = create_path_from_waypoints(
            self.entity_id,
            self.entity_type,
            waypoints,
            id_factory=self.id_factory,
        )
        self.store.add_path(path)

        if self.history is not None and pre_drag is not None:
            self.history.push_snapshot(
                HistorySnapshot(entity_id=self.entity_id, position=pre_drag, path_id=path.id)
            )

        logger.info(
            f"Recorded path {path.id}: {len(path)} keyframes over {duration:.2f}s"
        )
        return path

    def cancel(self, final_position: Optional[Sequence[float]] = None) -> Optional[MovementPath]:
        """End from a cancel source (pointer cancel, pointer left the surface)."""
        return self.end(final_position)

    def _discard_previous_paths(self) -> None:
        for path in self.store.paths_for_entity(self.entity_id):
            if self.protection.is_protected(path.id):
                logger.debug(f"Keeping protected path {path.id}")
                continue
            self.store.remove_path(path.id)

    def _snap(self, point: Position) -> Position:
        if not self.config.snap_to_field:
            return point
        x, z = snap_to_field(point[0], point[2])
        return (x, point[1], z)


__all__ = [
    "RecorderState",
    "PathRecorder",
]
