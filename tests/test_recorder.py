"""
Tests for drag-to-path recording.

Run with: pytest tests/test_recorder.py -v
"""

import pytest

from choreography import (
    AnyProtection,
    CapturedPathSet,
    EntityType,
    HistorySnapshot,
    InMemoryEventStore,
    InMemoryHistory,
    PathRecorder,
    RecorderConfig,
    RecorderState,
    add_player_path,
    create_animation_event,
    create_path,
    create_player_path_config,
)
from choreography.core.interpolation import planar_distance


@pytest.fixture
def recorder(store, clock, id_factory):
    return PathRecorder("p7", EntityType.PLAYER, store, clock=clock, id_factory=id_factory)


class TestLifecycle:
    """State transitions."""

    def test_begin_enters_recording(self, recorder):
        assert recorder.state is RecorderState.IDLE
        assert recorder.begin((0, 0, 0))
        assert recorder.is_recording
        assert recorder.points == ((0.0, 0.0, 0.0),)

    def test_second_begin_ignored(self, recorder):
        recorder.begin((0, 0, 0))
        recorder.update((5, 0, 0))
        assert not recorder.begin((9, 0, 9))
        assert recorder.points[0] == (0.0, 0.0, 0.0)
        assert len(recorder.points) == 2

    def test_update_while_idle(self, recorder):
        assert not recorder.update((5, 0, 0))
        assert recorder.points == ()

    def test_end_while_idle(self, recorder, store):
        assert recorder.end((5, 0, 0)) is None
        assert len(store) == 0

    def test_end_is_idempotent(self, recorder, store, clock):
        """Several release signals produce one path."""
        recorder.begin((0, 0, 0))
        recorder.update((5, 0, 0))
        clock.advance(1)
        assert recorder.end((5, 0, 0)) is not None
        assert recorder.end((5, 0, 0)) is None
        assert recorder.cancel() is None
        assert len(store) == 1
        assert recorder.state is RecorderState.IDLE


class TestThinning:
    """Sample spacing."""

    def test_close_samples_dropped(self, recorder):
        recorder.begin((0, 0, 0))
        assert not recorder.update((1, 0, 0))
        assert recorder.update((2, 0, 0))
        assert not recorder.update((3, 0, 0))
        assert recorder.update((3.5, 0, 0))
        assert recorder.points == ((0, 0, 0), (2, 0, 0), (3.5, 0, 0))

    def test_height_ignored(self, recorder):
        """Only ground-plane distance counts."""
        recorder.begin((0, 0, 0))
        assert not recorder.update((0, 40, 1))

    def test_kept_points_spaced(self, recorder):
        recorder.begin((0, 0, 0))
        for i in range(60):
            recorder.update((i * 0.37, 0, (i % 7) * 0.2))
        points = recorder.points
        for a, b in zip(points, points[1:]):
            assert planar_distance(a, b) >= 1.5


class TestEmit:
    """Path emission on release."""

    def test_timestamps_spread_evenly(self, recorder, clock):
        """Four points over three seconds give keyframes at 0, 1, 2, 3."""
        recorder.begin((0, 0, 0))
        recorder.update((2, 0, 0))
        recorder.update((3.5, 0, 0))
        clock.advance(3)
        path = recorder.end((4, 0, 0))

        assert path.id == "path-player-p7-1"
        assert path.entity_type is EntityType.PLAYER
        assert [kf.timestamp for kf in path.keyframes] == [0.0, 1.0, 2.0, 3.0]
        assert path.keyframes[-1].position == (4.0, 0.0, 0.0)
        assert path.duration == 3.0

    def test_minimum_duration(self, recorder, clock):
        """Quick flicks still play for two seconds."""
        recorder.begin((0, 0, 0))
        clock.advance(0.2)
        path = recorder.end((6, 0, 0))
        assert path.duration == 2.0
        assert [kf.timestamp for kf in path.keyframes] == [0.0, 2.0]

    def test_release_near_last_point_not_duplicated(self, recorder, clock):
        recorder.begin((0, 0, 0))
        recorder.update((3, 0, 0))
        clock.advance(2)
        path = recorder.end((3.05, 0, 0))
        assert len(path) == 2
        assert path.end.position == (3.0, 0.0, 0.0)

    def test_release_without_position(self, recorder, clock):
        recorder.begin((0, 0, 0))
        recorder.update((3, 0, 0))
        clock.advance(2)
        assert recorder.end().end.position == (3.0, 0.0, 0.0)

    def test_release_without_position_uses_latest_sample(self, recorder, clock):
        """A sample too close to keep still becomes the final point."""
        recorder.begin((0, 0, 0))
        recorder.update((2, 0, 0))
        assert not recorder.update((3, 0, 0))
        clock.advance(2)
        path = recorder.end()
        assert [kf.position for kf in path.keyframes] == [
            (0.0, 0.0, 0.0), (2.0, 0.0, 0.0), (3.0, 0.0, 0.0),
        ]

    def test_cancel_matches_release(self, recorder, clock):
        """Cancel and release at the same point give the same path."""
        recorder.begin((0, 0, 0))
        recorder.update((1.4, 0, 0))
        clock.advance(3)
        released = recorder.end((1.4, 0, 0))

        recorder.begin((0, 0, 0))
        recorder.update((1.4, 0, 0))
        clock.advance(3)
        cancelled = recorder.cancel()

        assert cancelled is not None
        assert cancelled.keyframes == released.keyframes
        assert cancelled.duration == released.duration == 3.0

    def test_cancel_with_position(self, recorder, clock):
        recorder.begin((0, 0, 0))
        clock.advance(2)
        assert recorder.cancel((4, 0, 0)).end.position == (4.0, 0.0, 0.0)

    def test_stored(self, recorder, store, clock):
        recorder.begin((0, 0, 0))
        clock.advance(2)
        path = recorder.end((5, 0, 0))
        assert store.get_path(path.id) == path


class TestDiscard:
    """Drags too small to count."""

    def test_click_discarded(self, recorder, store):
        recorder.begin((0, 0, 0))
        assert recorder.end((0, 0, 0)) is None
        assert len(store) == 0

    def test_exactly_one_unit_discarded(self, recorder, store):
        """Displacement must exceed the threshold."""
        recorder.begin((0, 0, 0))
        assert recorder.end((1.0, 0, 0)) is None
        assert len(store) == 0

    def test_just_over_threshold_kept(self, recorder):
        recorder.begin((0, 0, 0))
        assert recorder.end((1.2, 0, 0)) is not None

    def test_round_trip_discarded(self, recorder, store):
        """A drag that returns to its start is a click."""
        recorder.begin((0, 0, 0))
        recorder.update((5, 0, 0))
        assert recorder.end((0.5, 0, 0)) is None
        assert len(store) == 0

    def test_discard_returns_to_idle(self, recorder):
        recorder.begin((0, 0, 0))
        recorder.end((0, 0, 0))
        assert recorder.begin((0, 0, 0))


class TestPriorPaths:
    """What happens to an entity's existing paths."""

    def test_unprotected_replaced(self, recorder, store, clock):
        old = create_path("p7", EntityType.PLAYER, (0, 0, 0), (9, 0, 9), id="old")
        store.add_path(old)
        recorder.begin((0, 0, 0))
        assert "old" not in store
        clock.advance(2)
        path = recorder.end((5, 0, 0))
        assert [p.id for p in store.paths_for_entity("p7")] == [path.id]

    def test_other_entities_untouched(self, recorder, store):
        store.add_path(create_path("p8", EntityType.PLAYER, (0, 0, 0), (9, 0, 9), id="other"))
        recorder.begin((0, 0, 0))
        assert "other" in store

    def test_event_protected_path_kept(self, store, clock):
        store.add_path(create_path("p7", EntityType.PLAYER, (0, 0, 0), (9, 0, 9), id="saved"))
        event = add_player_path(create_animation_event("Drill"),
                                create_player_path_config("p7", "saved"))
        events = InMemoryEventStore([event])

        recorder = PathRecorder("p7", EntityType.PLAYER, store,
                                protection=events, clock=clock)
        recorder.begin((0, 0, 0))
        assert "saved" in store

    def test_captured_path_kept(self, store, clock):
        store.add_path(create_path("p7", EntityType.PLAYER, (0, 0, 0), (9, 0, 9), id="draft"))
        store.add_path(create_path("p7", EntityType.PLAYER, (0, 0, 0), (1, 0, 1), id="scratch"))
        captured = CapturedPathSet(["draft"])

        recorder = PathRecorder(
            "p7", EntityType.PLAYER, store,
            protection=AnyProtection([InMemoryEventStore(), captured]),
            clock=clock,
        )
        recorder.begin((0, 0, 0))
        assert "draft" in store
        assert "scratch" not in store


class TestHistory:
    """Undo snapshots."""

    def test_snapshot_of_pre_drag_position(self, store, clock):
        history = InMemoryHistory()
        recorder = PathRecorder("ball", EntityType.BALL, store, history=history, clock=clock)
        recorder.begin((2, 0, 3))
        clock.advance(2)
        path = recorder.end((8, 0, 3))

        assert len(history.snapshots) == 1
        snapshot = history.snapshots[0]
        assert snapshot.entity_id == "ball"
        assert snapshot.position == (2.0, 0.0, 3.0)
        assert snapshot.path_id == path.id

    def test_no_snapshot_for_discarded_drag(self, store, clock):
        history = InMemoryHistory()
        recorder = PathRecorder("ball", EntityType.BALL, store, history=history, clock=clock)
        recorder.begin((2, 0, 3))
        recorder.end((2, 0, 3))
        assert history.snapshots == []

    def test_history_bounded(self):
        history = InMemoryHistory(max_size=2)
        for i in range(5):
            history.push_snapshot(HistorySnapshot("e", (i, 0, 0)))
        assert [s.position[0] for s in history.snapshots] == [3, 4]


class TestSnapping:
    """Optional field boundary projection."""

    def test_samples_snapped_to_oval(self, store, clock):
        config = RecorderConfig(snap_to_field=True)
        recorder = PathRecorder("p7", EntityType.PLAYER, store, config=config, clock=clock)
        recorder.begin((0, 0, 0))
        assert recorder.update((200, 0, 0))
        clock.advance(2)
        path = recorder.end()
        assert path.end.position == pytest.approx((82.5, 0.0, 0.0))

    def test_start_point_snapped(self, store, clock):
        """Only the recorded start is projected; the undo snapshot keeps the real position."""
        history = InMemoryHistory()
        config = RecorderConfig(snap_to_field=True)
        recorder = PathRecorder("p7", EntityType.PLAYER, store, history=history,
                                config=config, clock=clock)
        recorder.begin((200, 0, 0))
        assert recorder.points[0] == pytest.approx((82.5, 0.0, 0.0))
        clock.advance(2)
        path = recorder.end((0, 0, 0))
        assert path.start.position == pytest.approx((82.5, 0.0, 0.0))
        assert history.snapshots[0].position == (200.0, 0.0, 0.0)

    def test_no_snapping_by_default(self, recorder, clock):
        recorder.begin((0, 0, 0))
        recorder.update((200, 0, 0))
        clock.advance(2)
        assert recorder.end().end.position == (200.0, 0.0, 0.0)
