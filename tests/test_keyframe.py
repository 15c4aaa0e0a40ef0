"""
Tests for the path model.

Run with: pytest tests/test_keyframe.py -v
"""

import pytest

from choreography import (
    EntityType,
    Keyframe,
    MovementPath,
    InvalidPathError,
    InvariantViolationError,
    ParameterError,
    create_keyframe,
    create_path,
    create_path_from_waypoints,
    add_keyframe,
    remove_keyframe,
    update_keyframe,
    is_valid_path,
    path_has_movement,
)


class TestKeyframe:
    """Keyframe value type."""

    def test_position_coerced_to_float_tuple(self):
        """Lists and ints become a float tuple."""
        kf = create_keyframe(1, [1, 2, 3])
        assert kf.position == (1.0, 2.0, 3.0)
        assert isinstance(kf.position, tuple)
        assert isinstance(kf.timestamp, float)

    def test_negative_timestamp_rejected(self):
        """Timestamps are non-negative."""
        with pytest.raises(ParameterError):
            Keyframe(-0.5, (0, 0, 0))

    def test_is_immutable(self):
        """Keyframes are frozen."""
        kf = Keyframe(0.0, (0, 0, 0))
        with pytest.raises(AttributeError):
            kf.timestamp = 3.0

    def test_dict_shape(self):
        """to_dict/from_dict use plain lists for positions."""
        kf = Keyframe(2.5, (1, 0, -1))
        data = kf.to_dict()
        assert data == {"timestamp": 2.5, "position": [1.0, 0.0, -1.0]}
        assert Keyframe.from_dict(data) == kf


class TestCreatePath:
    """Path constructors."""

    def test_two_point_path(self):
        """create_path places keyframes at 0 and duration."""
        path = create_path("p1", EntityType.PLAYER, (0, 0, 0), (5, 0, 5), duration=3)
        assert len(path) == 2
        assert path.keyframes[0].timestamp == 0.0
        assert path.keyframes[1].timestamp == 3.0
        assert path.duration == 3.0
        assert path.entity_type is EntityType.PLAYER

    def test_default_duration(self):
        """Default duration is five seconds."""
        path = create_path("b", EntityType.BALL, (0, 0, 0), (1, 0, 0))
        assert path.duration == 5.0

    def test_generated_id_uses_factory(self, id_factory):
        """Injected id factory receives a descriptive prefix."""
        path = create_path("p9", EntityType.PLAYER, (0, 0, 0), (1, 0, 0),
                           id_factory=id_factory)
        assert path.id == "path-player-p9-1"

    def test_generated_ids_are_unique(self):
        """Default ids don't collide."""
        a = create_path("p", EntityType.PLAYER, (0, 0, 0), (1, 0, 0))
        b = create_path("p", EntityType.PLAYER, (0, 0, 0), (1, 0, 0))
        assert a.id != b.id

    def test_waypoints_sorted(self):
        """Waypoints given as [5, 0, 10] sort to [0, 5, 10] with duration 10."""
        waypoints = [
            Keyframe(5, (5, 0, 0)),
            Keyframe(0, (0, 0, 0)),
            Keyframe(10, (10, 0, 0)),
        ]
        path = create_path_from_waypoints("b", EntityType.BALL, waypoints, id="x")
        assert [kf.timestamp for kf in path.keyframes] == [0.0, 5.0, 10.0]
        assert path.duration == 10.0

    def test_waypoints_input_untouched(self):
        """Sorting does not reorder the caller's list."""
        waypoints = [Keyframe(3, (0, 0, 0)), Keyframe(1, (1, 0, 0))]
        create_path_from_waypoints("b", EntityType.BALL, waypoints)
        assert waypoints[0].timestamp == 3.0

    @pytest.mark.parametrize("count", [0, 1])
    def test_too_few_waypoints(self, count):
        """Fewer than two waypoints fails fast without padding."""
        waypoints = [Keyframe(0, (0, 0, 0))] * count
        with pytest.raises(InvalidPathError) as exc:
            create_path_from_waypoints("b", EntityType.BALL, waypoints)
        assert exc.value.details["count"] == count

    def test_direct_construction_sorts(self):
        """The constructor restores ordering and re-derives duration."""
        path = MovementPath("x", "e", EntityType.BALL, keyframes=(
            Keyframe(10, (1, 0, 0)),
            Keyframe(0, (0, 0, 0)),
        ), duration=3.0)
        assert [kf.timestamp for kf in path.keyframes] == [0.0, 10.0]
        assert path.duration == 10.0
        assert is_valid_path(path)

    def test_direct_construction_accepts_list(self):
        path = MovementPath("x", "e", EntityType.BALL, [Keyframe(2, (0, 0, 0))])
        assert isinstance(path.keyframes, tuple)
        assert path.duration == 2.0

    def test_dict_round_trip_resorts(self):
        """from_dict restores ordering and duration invariants."""
        data = {
            "id": "p",
            "entity_id": "e",
            "entity_type": "ball",
            "keyframes": [
                {"timestamp": 4, "position": [4, 0, 0]},
                {"timestamp": 0, "position": [0, 0, 0]},
            ],
            "duration": 99,
        }
        path = MovementPath.from_dict(data)
        assert path.duration == 4.0
        assert path.start.position == (0.0, 0.0, 0.0)
        assert path.to_dict()["entity_type"] == "ball"


class TestMutators:
    """Copy-on-write keyframe edits."""

    def test_add_keyframe_sorts_and_keeps_input(self, straight_path):
        """add_keyframe returns a new sorted path."""
        updated = add_keyframe(straight_path, Keyframe(4, (2, 0, 2)))
        assert [kf.timestamp for kf in updated.keyframes] == [0.0, 4.0, 10.0]
        assert updated.duration == 10.0
        assert len(straight_path) == 2

    def test_add_keyframe_extends_duration(self, straight_path):
        """A keyframe past the end grows the duration."""
        updated = add_keyframe(straight_path, Keyframe(12, (12, 0, 0)))
        assert updated.duration == 12.0
        assert updated.end.timestamp == 12.0

    def test_add_then_remove_restores(self, corner_path):
        """Removing the inserted keyframe gives back the original sequence."""
        inserted = Keyframe(3.0, (4, 0, 2))
        updated = add_keyframe(corner_path, inserted)
        index = updated.keyframes.index(inserted)
        restored = remove_keyframe(updated, index)
        assert restored.keyframes == corner_path.keyframes
        assert restored.duration == corner_path.duration

    def test_remove_keyframe_recomputes_duration(self, corner_path):
        """Removing the last keyframe shortens the path."""
        updated = remove_keyframe(corner_path, 2)
        assert updated.duration == 2.0
        assert len(updated) == 2

    def test_remove_below_minimum_rejected(self, straight_path):
        """A two-keyframe path cannot lose a keyframe."""
        with pytest.raises(InvariantViolationError) as exc:
            remove_keyframe(straight_path, 0)
        assert exc.value.details["path_id"] == "path-straight"
        assert len(straight_path) == 2

    def test_remove_out_of_range(self, corner_path):
        """Bad indices raise IndexError."""
        with pytest.raises(IndexError):
            remove_keyframe(corner_path, 7)

    def test_update_position(self, corner_path):
        """Partial update keeps the timestamp."""
        updated = update_keyframe(corner_path, 1, position=(5, 0, 0))
        assert updated.keyframes[1] == Keyframe(2.0, (5, 0, 0))
        assert corner_path.keyframes[1].position == (4.0, 0.0, 0.0)

    def test_update_timestamp_resorts(self, corner_path):
        """Moving a keyframe past the end re-sorts and updates duration."""
        updated = update_keyframe(corner_path, 1, timestamp=8.0)
        assert [kf.timestamp for kf in updated.keyframes] == [0.0, 6.0, 8.0]
        assert updated.duration == 8.0
        assert updated.end.position == (4.0, 0.0, 0.0)


class TestValidity:
    """Validity and movement checks."""

    def test_valid_path(self, straight_path):
        assert is_valid_path(straight_path)

    def test_zero_duration_invalid(self):
        """Two keyframes at t=0 are not playable."""
        path = create_path("b", EntityType.BALL, (0, 0, 0), (1, 0, 0), duration=0)
        assert not is_valid_path(path)

    def test_incomplete_path_invalid(self):
        path = MovementPath("p", "e", EntityType.BALL, (Keyframe(0, (0, 0, 0)),), 0.0)
        assert not is_valid_path(path)

    def test_has_movement(self, straight_path):
        assert path_has_movement(straight_path)

    def test_no_movement_within_epsilon(self):
        """Differences below 1e-4 count as stationary."""
        path = create_path("b", EntityType.BALL, (1, 0, 1), (1.00005, 0, 1))
        assert not path_has_movement(path)

    def test_loop_back_has_no_movement(self):
        """Only start and end are compared."""
        path = create_path_from_waypoints("b", EntityType.BALL, [
            Keyframe(0, (0, 0, 0)),
            Keyframe(1, (5, 0, 0)),
            Keyframe(2, (0, 0, 0)),
        ])
        assert not path_has_movement(path)
