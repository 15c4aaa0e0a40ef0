"""
Field choreography core.

Record drag gestures as timed movement paths, group several entities'
paths into an animation event with phase pause points, and evaluate
positions for frame-driven playback.

Usage:
    from choreography import (
        EntityType, PathRecorder, InMemoryPathStore, EventRenderer,
        create_animation_event, create_player_path_config, add_player_path,
    )

    store = InMemoryPathStore()
    recorder = PathRecorder("p7", EntityType.PLAYER, store)
    recorder.begin((0, 0, 0))
    recorder.update((3, 0, 0))
    path = recorder.end((6, 0, 0))

    event = create_animation_event("Kick-out")
    event = add_player_path(event, create_player_path_config("p7", path.id, 500))

    renderer = EventRenderer(store.get_path)
    updates = renderer.render(event, global_time=1500)
"""

from .core import (
    # Exceptions
    ChoreographyError,
    InvalidPathError,
    InvariantViolationError,
    ParameterError,
    # Path model
    Position,
    EntityType,
    Keyframe,
    Waypoint,
    MovementPath,
    PATH_DEFAULTS,
    create_keyframe,
    create_path,
    create_path_from_waypoints,
    add_keyframe,
    remove_keyframe,
    update_keyframe,
    is_valid_path,
    path_has_movement,
    # Easing
    ease_in,
    ease_out,
    ease_in_out,
    get_easing,
    list_easings,
    # Interpolation
    Vector,
    position_at_time,
    position_at_time_with_offset,
    position_at_progress,
    position_at_progress_with_easing,
    sample_positions,
    path_length,
    velocity_at_progress,
    direction_at_end,
    # Events and phases
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
    is_valid_event,
    resolve_end_time,
    sorted_phases,
    active_phase_index,
    pending_phase_boundary,
    next_phase_boundary,
    format_event_time,
    # Logging
    get_logger,
    setup_logging,
)

from .config import (
    RecorderConfig,
    FieldConfig,
    PlaybackConfig,
    RECORDER_CONFIG,
    FIELD_CONFIG,
    PLAYBACK_CONFIG,
)

from .adapters import (
    HistorySnapshot,
    PathStore,
    PathProtection,
    HistorySink,
    AnyProtection,
    InMemoryPathStore,
    InMemoryEventStore,
    CapturedPathSet,
    InMemoryHistory,
)

from .recorder import (
    RecorderState,
    PathRecorder,
)

from .renderer import (
    EntityUpdate,
    FrameContext,
    PlaybackStep,
    EventRenderer,
    render_event,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core - Exceptions
    "ChoreographyError",
    "InvalidPathError",
    "InvariantViolationError",
    "ParameterError",
    # Core - Path model
    "Position",
    "EntityType",
    "Keyframe",
    "Waypoint",
    "MovementPath",
    "PATH_DEFAULTS",
    "create_keyframe",
    "create_path",
    "create_path_from_waypoints",
    "add_keyframe",
    "remove_keyframe",
    "update_keyframe",
    "is_valid_path",
    "path_has_movement",
    # Core - Easing
    "ease_in",
    "ease_out",
    "ease_in_out",
    "get_easing",
    "list_easings",
    # Core - Interpolation
    "Vector",
    "position_at_time",
    "position_at_time_with_offset",
    "position_at_progress",
    "position_at_progress_with_easing",
    "sample_positions",
    "path_length",
    "velocity_at_progress",
    "direction_at_end",
    # Core - Events and phases
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
    "is_valid_event",
    "resolve_end_time",
    "sorted_phases",
    "active_phase_index",
    "pending_phase_boundary",
    "next_phase_boundary",
    "format_event_time",
    # Core - Logging
    "get_logger",
    "setup_logging",
    # Config
    "RecorderConfig",
    "FieldConfig",
    "PlaybackConfig",
    "RECORDER_CONFIG",
    "FIELD_CONFIG",
    "PLAYBACK_CONFIG",
    # Adapters
    "HistorySnapshot",
    "PathStore",
    "PathProtection",
    "HistorySink",
    "AnyProtection",
    "InMemoryPathStore",
    "InMemoryEventStore",
    "CapturedPathSet",
    "InMemoryHistory",
    # Recorder
    "RecorderState",
    "PathRecorder",
    # Renderer
    "EntityUpdate",
    "FrameContext",
    "PlaybackStep",
    "EventRenderer",
    "render_event",
]
