"""
Motion Engine for Still Image Animation

Provides Ken Burns style pan and zoom for still images as a
deterministic, time-varying view transform. No pixels, timers or I/O:
the host feeds image/viewport bounds and elapsed time, and paints
with the returned transform.

Usage:
    from kenburns.motion_engine import (
        KenBurnsAnimator,
        RandomTransitionGenerator,
        Rect,
        TransitionMotion,
    )

    animator = KenBurnsAnimator(
        TransitionMotion(RandomTransitionGenerator(duration_ms=8000)),
        drawable=Rect.from_size(4000, 3000),
        viewport=Rect.from_size(1920, 1080),
    )

    # Once per frame
    transform = animator.tick(16)

    # Keyframe motion from a preset
    animator.set_strategy(
        KeyframeMotion(
            track=PRESET_LIBRARY["four_corners"].to_track(),
            duration_ms=5000,
            mode=PlaybackMode.REVERSE_AND_LOOP,
        )
    )
"""

from .errors import (
    MotionEngineError,
    InvalidGeometryError,
    InvalidArgumentError,
    DegenerateBoundsError,
)

from .easing import (
    EasingKind,
    EASING_LIBRARY,
    interpolate,
    get_easing,
    list_easings,
    random_interpolation,
    random_easing,
)

from .curves import (
    lerp,
    quadratic_bezier,
    cubic_bezier,
    bezier,
    hermite,
    catmull_rom,
)

from .geometry import (
    Rect,
    get_rect_ratio,
    have_same_aspect_ratio,
    max_viewport_fit_rect,
    letterbox_rect,
    cover_scale,
)

from .transition import Transition

from .generators import (
    TransitionGenerator,
    RandomTransitionGenerator,
    FullToRandomTransitionGenerator,
    CornerTransitionGenerator,
    GENERATOR_LIBRARY,
    create_generator,
)

from .keyframes import (
    Keyframe,
    KeyframeTrack,
    TimeMode,
    clamp_offset_to_viewport,
)

from .presets import (
    KeyframePreset,
    PRESET_LIBRARY,
    get_preset,
    get_preset_for_index,
    list_presets,
    random_keyframes,
    random_smooth_keyframes,
)

from .playback import (
    PlaybackMode,
    PlaybackClock,
    compute_progress,
)

from .animator import (
    ViewTransform,
    MotionStrategy,
    TransitionMotion,
    KeyframeMotion,
    KenBurnsAnimator,
)

__all__ = [
    # Errors
    "MotionEngineError",
    "InvalidGeometryError",
    "InvalidArgumentError",
    "DegenerateBoundsError",
    # Easing
    "EasingKind",
    "EASING_LIBRARY",
    "interpolate",
    "get_easing",
    "list_easings",
    "random_interpolation",
    "random_easing",
    # Curves
    "lerp",
    "quadratic_bezier",
    "cubic_bezier",
    "bezier",
    "hermite",
    "catmull_rom",
    # Geometry
    "Rect",
    "get_rect_ratio",
    "have_same_aspect_ratio",
    "max_viewport_fit_rect",
    "letterbox_rect",
    "cover_scale",
    # Transitions
    "Transition",
    "TransitionGenerator",
    "RandomTransitionGenerator",
    "FullToRandomTransitionGenerator",
    "CornerTransitionGenerator",
    "GENERATOR_LIBRARY",
    "create_generator",
    # Keyframes
    "Keyframe",
    "KeyframeTrack",
    "TimeMode",
    "clamp_offset_to_viewport",
    "KeyframePreset",
    "PRESET_LIBRARY",
    "get_preset",
    "get_preset_for_index",
    "list_presets",
    "random_keyframes",
    "random_smooth_keyframes",
    # Playback
    "PlaybackMode",
    "PlaybackClock",
    "compute_progress",
    # Animation
    "ViewTransform",
    "MotionStrategy",
    "TransitionMotion",
    "KeyframeMotion",
    "KenBurnsAnimator",
]
