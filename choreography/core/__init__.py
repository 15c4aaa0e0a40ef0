"""
Core choreography components - paths, interpolation, events and phases.
"""

from .exceptions import (
    ChoreographyError,
    InvalidPathError,
    InvariantViolationError,
    ParameterError,
)

from .keyframe import (
    Position,
    IdFactory,
    ORIGIN,
    EntityType,
    Keyframe,
    Waypoint,
    MovementPath,
    PATH_DEFAULTS,
    uuid_id_factory,
    as_position,
    create_keyframe,
    create_path,
    create_path_from_waypoints,
    add_keyframe,
    remove_keyframe,
    update_keyframe,
    is_valid_path,
    path_has_movement,
)

from .easing import (
    EasingFn,
    linear,
    ease_in,
    ease_out,
    ease_in_out,
    bezier_easing,
    get_easing,
    list_easings,
    EASING_PRESETS,
    SIMPLE_EASINGS,
)

from .interpolation import (
    Vector,
    ZERO_VECTOR,
    lerp,
    lerp_position,
    clamp,
    distance,
    planar_distance,
    find_surrounding_keyframes,
    position_at_time,
    position_at_time_with_offset,
    position_at_progress,
    position_at_progress_with_easing,
    sample_positions,
    sample_positions_array,
    path_length,
    velocity_at_progress,
    direction_at_end,
)

from .event import (
    PlayerPathConfig,
    AnimationPhase,
    AnimationEvent,
    EVENT_DEFAULTS,
    create_player_path_config,
    create_animation_event,
    create_animation_phase,
    add_player_path,
    remove_player_path,
    update_player_path,
    update_event,
    add_phase,
    remove_phase,
    get_player_path_config,
    has_player_path,
    is_valid_event,
    resolve_end_time,
    sorted_phases,
    active_phase_index,
    pending_phase_boundary,
    next_phase_boundary,
    event_progress,
    time_from_progress,
    format_event_time,
)

from .field import (
    is_point_in_field,
    snap_to_field,
    get_field_bounds,
)

from .logging_config import (
    get_logger,
    setup_logging,
    LogContext,
)

__all__ = [
    # Exceptions
    "ChoreographyError",
    "InvalidPathError",
    "InvariantViolationError",
    "ParameterError",
    # Path model
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
    # Easing
    "EasingFn",
    "linear",
    "ease_in",
    "ease_out",
    "ease_in_out",
    "bezier_easing",
    "get_easing",
    "list_easings",
    "EASING_PRESETS",
    "SIMPLE_EASINGS",
    # Interpolation
    "Vector",
    "ZERO_VECTOR",
    "lerp",
    "lerp_position",
    "clamp",
    "distance",
    "planar_distance",
    "find_surrounding_keyframes",
    "position_at_time",
    "position_at_time_with_offset",
    "position_at_progress",
    "position_at_progress_with_easing",
    "sample_positions",
    "sample_positions_array",
    "path_length",
    "velocity_at_progress",
    "direction_at_end",
    # Events and phases
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
    # Field
    "is_point_in_field",
    "snap_to_field",
    "get_field_bounds",
    # Logging
    "get_logger",
    "setup_logging",
    "LogContext",
]
