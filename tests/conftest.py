"""Shared pytest fixtures for choreography tests."""

import itertools

import pytest

from choreography import (
    EntityType,
    Keyframe,
    InMemoryPathStore,
    create_path,
    create_path_from_waypoints,
)


class FakeClock:
    """Manually advanced monotonic clock (seconds)."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def id_factory():
    """Deterministic ids: ``<prefix>-1``, ``<prefix>-2``, ..."""
    counter = itertools.count(1)
    return lambda prefix: f"{prefix}-{next(counter)}"


@pytest.fixture
def straight_path():
    """Ball moving 10 units along x over 10 seconds."""
    return create_path("ball-1", EntityType.BALL, (0, 0, 0), (10, 0, 0),
                       duration=10, id="path-straight")


@pytest.fixture
def corner_path():
    """Player running east then north with uneven segment timing."""
    return create_path_from_waypoints(
        "player-1",
        EntityType.PLAYER,
        [
            Keyframe(0.0, (0, 0, 0)),
            Keyframe(2.0, (4, 0, 0)),
            Keyframe(6.0, (4, 0, 8)),
        ],
        id="path-corner",
    )


@pytest.fixture
def store():
    return InMemoryPathStore()
