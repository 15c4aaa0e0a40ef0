"""
Collaborator adapters.

Protocols for the stores the core talks to, plus in-memory implementations.
"""

from .protocol import (
    HistorySnapshot,
    PathStore,
    PathProtection,
    HistorySink,
    AnyProtection,
    NoProtection,
)
from .memory import (
    InMemoryPathStore,
    InMemoryEventStore,
    CapturedPathSet,
    InMemoryHistory,
)

__all__ = [
    # Protocol
    "HistorySnapshot",
    "PathStore",
    "PathProtection",
    "HistorySink",
    "AnyProtection",
    "NoProtection",
    # In-memory
    "InMemoryPathStore",
    "InMemoryEventStore",
    "CapturedPathSet",
    "InMemoryHistory",
]
