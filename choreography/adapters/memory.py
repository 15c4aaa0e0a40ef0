"""
In-memory collaborators.

Plain-dict implementations of the collaborator protocols. Applications with
their own state containers implement the protocols directly; these back the
tests and small scripts.
"""

import logging
from typing import Dict, Iterable, List, Optional, Set

from ..core.event import AnimationEvent
from ..core.keyframe import EntityType, MovementPath
from .protocol import HistorySnapshot

logger = logging.getLogger(__name__)


class InMemoryPathStore:
    """Paths keyed by id, in insertion order."""

    def __init__(self, paths: Iterable[MovementPath] = ()):
        self._paths: Dict[str, MovementPath] = {}
        for path in paths:
            self.add_path(path)

    def __len__(self) -> int:
        return len(self._paths)

    def __contains__(self, path_id: str) -> bool:
        return path_id in self._paths

    @property
    def paths(self) -> List[MovementPath]:
        return list(self._paths.values())

    def get_path(self, path_id: str) -> Optional[MovementPath]:
        return self._paths.get(path_id)

    def paths_for_entity(self, entity_id: str) -> List[MovementPath]:
        return [p for p in self._paths.values() if p.entity_id == entity_id]

    def path_for_entity(self, entity_id: str, entity_type: EntityType) -> Optional[MovementPath]:
        """First path for an entity of the given type."""
        for path in self._paths.values():
            if path.entity_id == entity_id and path.entity_type == entity_type:
                return path
        return None

    def add_path(self, path: MovementPath) -> None:
        self._paths[path.id] = path

    def remove_path(self, path_id: str) -> None:
        if self._paths.pop(path_id, None) is not None:
            logger.debug(f"Removed path {path_id}")

    def durations(self) -> Dict[str, float]:
        """path_id -> duration in seconds, for resolve_end_time."""
        return {path_id: path.duration for path_id, path in self._paths.items()}

    def clear(self) -> None:
        self._paths.clear()


class InMemoryEventStore:
    """
    Saved events. Protects every path a saved event references.
    """

    def __init__(self, events: Iterable[AnimationEvent] = ()):
        self._events: Dict[str, AnimationEvent] = {}
        for event in events:
            self.add_event(event)

    def __len__(self) -> int:
        return len(self._events)

    @property
    def events(self) -> List[AnimationEvent]:
        return list(self._events.values())

    def get_event(self, event_id: str) -> Optional[AnimationEvent]:
        return self._events.get(event_id)

    def add_event(self, event: AnimationEvent) -> None:
        """Store an event, replacing any event with the same id."""
        self._events[event.id] = event

    def delete_event(self, event_id: str) -> None:
        self._events.pop(event_id, None)

    def events_sorted(self) -> List[AnimationEvent]:
        """Newest first."""
        return sorted(self._events.values(), key=lambda e: e.created_at, reverse=True)

    def is_protected(self, path_id: str) -> bool:
        return any(
            pp.path_id == path_id
            for event in self._events.values()
            for pp in event.player_paths
        )


class CapturedPathSet:
    """Paths captured in an open editor but not yet saved to an event."""

    def __init__(self, path_ids: Iterable[str] = ()):
        self._ids: Set[str] = set(path_ids)

    def __len__(self) -> int:
        return len(self._ids)

    def capture(self, path_id: str) -> None:
        self._ids.add(path_id)

    def release(self, path_id: str) -> None:
        self._ids.discard(path_id)

    def clear(self) -> None:
        self._ids.clear()

    def is_protected(self, path_id: str) -> bool:
        return path_id in self._ids


class InMemoryHistory:
    """Collects snapshots; undo/redo is left to the application."""

    def __init__(self, max_size: int = 50):
        self.max_size = max_size
        self.snapshots: List[HistorySnapshot] = []

    def push_snapshot(self, snapshot: HistorySnapshot) -> None:
        self.snapshots.append(snapshot)
        if len(self.snapshots) > self.max_size:
            del self.snapshots[: len(self.snapshots) - self.max_size]


__all__ = [
    "InMemoryPathStore",
    "InMemoryEventStore",
    "CapturedPathSet",
    "InMemoryHistory",
]
