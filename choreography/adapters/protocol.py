"""
Collaborator protocols - the stores the core reads from and writes to.

The core never owns application state. The recorder removes and adds paths
through a PathStore, asks a PathProtection whether a path may be discarded,
and notifies a HistorySink so an external undo stack can snapshot the
pre-drag position.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Protocol, runtime_checkable

from ..core.keyframe import MovementPath, Position


@dataclass(frozen=True)
class HistorySnapshot:
    """Pre-edit state handed to a history sink."""
    entity_id: str
    position: Position
    path_id: Optional[str] = None


@runtime_checkable
class PathStore(Protocol):
    """
    Holds movement paths by id.

    Usage:
        store = InMemoryPathStore()
        store.add_path(path)
        store.paths_for_entity(path.entity_id)
    """

    def get_path(self, path_id: str) -> Optional[MovementPath]:
        """Get a path by id, or None."""
        ...

    def paths_for_entity(self, entity_id: str) -> List[MovementPath]:
        """All paths belonging to an entity."""
        ...

    def add_path(self, path: MovementPath) -> None:
        """Store a path, replacing any path with the same id."""
        ...

    def remove_path(self, path_id: str) -> None:
        """Drop a path. Unknown ids are ignored."""
        ...


@runtime_checkable
class PathProtection(Protocol):
    """Answers whether a path must survive a fresh recording for its entity."""

    def is_protected(self, path_id: str) -> bool:
        ...


@runtime_checkable
class HistorySink(Protocol):
    """Receives a snapshot whenever the core commits an undoable change."""

    def push_snapshot(self, snapshot: HistorySnapshot) -> None:
        ...


class AnyProtection:
    """Protection that holds if any of its sources protects the path."""

    def __init__(self, sources: Iterable[PathProtection]):
        self._sources = list(sources)

    def is_protected(self, path_id: str) -> bool:
        return any(source.is_protected(path_id) for source in self._sources)


class NoProtection:
    """Every path may be discarded."""

    def is_protected(self, path_id: str) -> bool:
        return False


__all__ = [
    "HistorySnapshot",
    "PathStore",
    "PathProtection",
    "HistorySink",
    "AnyProtection",
    "NoProtection",
]
