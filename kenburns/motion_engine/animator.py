"""
Ken Burns Animator

Turns elapsed time into the affine view transform a painter applies
to draw the image into the viewport. Two interchangeable motion
strategies share the same contract:

- TransitionMotion: chained rect transitions from a TransitionGenerator
- KeyframeMotion: scale/offset keyframes driven by a playback mode

The host calls tick() once per frame; nothing here owns a timer or
a thread.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Protocol, Tuple

from ..core.config import get_settings
from .errors import InvalidArgumentError
from .generators import TransitionGenerator
from .geometry import Rect, cover_scale, have_same_aspect_ratio, is_degenerate
from .keyframes import KeyframeTrack, clamp_offset_to_viewport
from .playback import (
    PlaybackClock,
    PlaybackMode,
    compute_progress,
    is_playback_complete,
    resolve_mode,
)
from .transition import Transition

logger = logging.getLogger(__name__)

TransitionCallback = Callable[[Transition], None]

# Transitions replayed for one frame before jumping straight to the current time
MAX_CATCH_UP_TRANSITIONS = 8


@dataclass(frozen=True)
class ViewTransform:
    """
    Uniform scale followed by a translation, in viewport coordinates.

    Attributes:
        scale: Drawable-to-viewport scale factor
        translate_x: Horizontal translation applied after scaling
        translate_y: Vertical translation applied after scaling
        crop: Drawable sub-rect to clip drawing to, or None to draw the whole image
    """

    scale: float = 1.0
    translate_x: float = 0.0
    translate_y: float = 0.0
    crop: Optional[Rect] = None

    def map_point(self, x: float, y: float) -> Tuple[float, float]:
        """Map a point in drawable coordinates into the viewport."""
        return (x * self.scale + self.translate_x, y * self.scale + self.translate_y)

    def to_matrix(self) -> Tuple[Tuple[float, float, float], ...]:
        """3x3 row-major affine matrix."""
        return (
            (self.scale, 0.0, self.translate_x),
            (0.0, self.scale, self.translate_y),
            (0.0, 0.0, 1.0),
        )

    def to_dict(self) -> Dict[str, object]:
        """Convert to dictionary for serialization."""
        return {
            "scale": self.scale,
            "translate_x": self.translate_x,
            "translate_y": self.translate_y,
            "crop": self.crop.to_dict() if self.crop else None,
        }


IDENTITY_TRANSFORM = ViewTransform()


def rect_to_transform(rect: Rect, viewport: Rect, crop: Optional[Rect] = None) -> ViewTransform:
    """
    Transform that maps a drawable-space view window onto the viewport.

    Args:
        rect: View window in drawable coordinates, shaped like the viewport
        viewport: Render target bounds
        crop: Clip rect to attach to the result

    Returns:
        ViewTransform, or the identity for an empty window
    """
    if rect.width <= 0 or is_degenerate(viewport):
        return IDENTITY_TRANSFORM

    scale = viewport.width / rect.width
    return ViewTransform(
        scale=scale,
        translate_x=viewport.left - rect.left * scale,
        translate_y=viewport.top - rect.top * scale,
        crop=crop,
    )


class MotionStrategy(Protocol):
    """Contract shared by the transition and keyframe motion models."""

    def view_transform(self, elapsed_ms: float, drawable: Rect, viewport: Rect) -> ViewTransform:
        ...

    def is_complete(self, elapsed_ms: float) -> bool:
        ...

    def reset(self) -> None:
        ...


# =============================================================================
# Transition-based motion
# =============================================================================


class TransitionMotion:
    """
    Plays transitions from a generator back to back.

    Each transition runs on its own clock, independent of any playback
    mode. A new transition is requested when the current one completes,
    when the drawable changes, or when the viewport's aspect ratio
    changes. Start/end callbacks are informational; a superseded
    transition gets no end callback. A frame that lands several
    transitions late replays at most MAX_CATCH_UP_TRANSITIONS of them,
    then starts the next one on that frame.
    """

    def __init__(
        self,
        generator: TransitionGenerator,
        on_transition_start: Optional[TransitionCallback] = None,
        on_transition_end: Optional[TransitionCallback] = None,
    ):
        if generator is None:
            raise InvalidArgumentError("A transition generator is required")
        self._generator = generator
        self.on_transition_start = on_transition_start
        self.on_transition_end = on_transition_end
        self._transition: Optional[Transition] = None
        self._cropping = generator.is_cropping_image()
        self._started_at = 0.0
        self._drawable: Optional[Rect] = None
        self._viewport: Optional[Rect] = None

    @property
    def generator(self) -> TransitionGenerator:
        return self._generator

    @generator.setter
    def generator(self, generator: TransitionGenerator) -> None:
        # Used from the next generated transition on
        if generator is None:
            raise InvalidArgumentError("A transition generator is required")
        self._generator = generator

    @property
    def transition(self) -> Optional[Transition]:
        return self._transition

    def reset(self) -> None:
        self._transition = None
        self._started_at = 0.0
        self._drawable = None
        self._viewport = None

    def is_complete(self, elapsed_ms: float) -> bool:
        return False

    def view_transform(self, elapsed_ms: float, drawable: Rect, viewport: Rect) -> ViewTransform:
        if self._bounds_changed(drawable, viewport):
            self._start_transition(elapsed_ms, drawable, viewport)
        else:
            skipped = 0
            while elapsed_ms - self._started_at >= self._transition.duration_ms:
                finished = self._transition
                if self.on_transition_end:
                    self.on_transition_end(finished)
                skipped += 1
                started_at = self._started_at + finished.duration_ms
                if skipped >= MAX_CATCH_UP_TRANSITIONS:
                    logger.debug(
                        f"Skipped {skipped} transitions at {elapsed_ms}ms, restarting on this frame"
                    )
                    started_at = elapsed_ms
                self._start_transition(started_at, drawable, viewport)

        self._viewport = viewport
        rect = self._transition.interpolated_rect(elapsed_ms - self._started_at)
        return rect_to_transform(rect, viewport, crop=rect if self._cropping else None)

    def _bounds_changed(self, drawable: Rect, viewport: Rect) -> bool:
        if self._transition is None or drawable != self._drawable:
            return True
        previous = self._viewport
        if is_degenerate(viewport) or is_degenerate(previous):
            return viewport != previous
        return not have_same_aspect_ratio(
            viewport, previous, tolerance=get_settings().aspect_ratio_tolerance
        )

    def _start_transition(self, started_at: float, drawable: Rect, viewport: Rect) -> None:
        self._transition = self._generator.generate_next_transition(drawable, viewport)
        self._cropping = self._generator.is_cropping_image()
        self._started_at = started_at
        self._drawable = drawable
        self._viewport = viewport
        if self.on_transition_start:
            self.on_transition_start(self._transition)


# =============================================================================
# Keyframe-based motion
# =============================================================================


class KeyframeMotion:
    """
    Scales and pans the whole image along a keyframe track.

    Progress comes from the playback mode; the interpolated offset is
    clamped against the live viewport so no empty canvas shows.
    """

    def __init__(
        self,
        track: Optional[KeyframeTrack] = None,
        duration_ms: Optional[float] = None,
        mode: Optional[PlaybackMode] = None,
    ):
        settings = get_settings()
        if track is None:
            track = KeyframeTrack()
            track.set_keyframes(None)
        self.track = track
        self.duration_ms = settings.animation_duration_ms if duration_ms is None else duration_ms
        self.mode = resolve_mode(settings.playback_mode if mode is None else mode)

    @property
    def duration_ms(self) -> float:
        return self._duration_ms

    @duration_ms.setter
    def duration_ms(self, value: float) -> None:
        if value is None or value <= 0:
            raise InvalidArgumentError(f"Animation duration must be positive, got {value}")
        self._duration_ms = value

    def progress(self, elapsed_ms: float) -> float:
        return compute_progress(elapsed_ms, self._duration_ms, self.mode)

    def is_complete(self, elapsed_ms: float) -> bool:
        return is_playback_complete(elapsed_ms, self._duration_ms, self.mode)

    def reset(self) -> None:
        pass

    def view_transform(self, elapsed_ms: float, drawable: Rect, viewport: Rect) -> ViewTransform:
        if is_degenerate(drawable) or is_degenerate(viewport):
            return IDENTITY_TRANSFORM

        effect_scale, offset = self.track.interpolate(self.progress(elapsed_ms))
        x, y = clamp_offset_to_viewport(
            effect_scale, offset, drawable.width, drawable.height, viewport
        )

        base_scale = cover_scale(drawable.width, drawable.height, viewport.width, viewport.height)
        scale = base_scale * effect_scale

        scaled_width = drawable.width * scale
        scaled_height = drawable.height * scale
        dx = viewport.left + (viewport.width - scaled_width) / 2 + viewport.width * x
        dy = viewport.top + (viewport.height - scaled_height) / 2 + viewport.height * y

        return ViewTransform(
            scale=scale,
            translate_x=dx - drawable.left * scale,
            translate_y=dy - drawable.top * scale,
        )


# =============================================================================
# Animator
# =============================================================================


class KenBurnsAnimator:
    """
    Frame-by-frame driver for a motion strategy.

    Usage:
        animator = KenBurnsAnimator(
            TransitionMotion(RandomTransitionGenerator()),
            drawable=Rect.from_size(4000, 3000),
            viewport=Rect.from_size(1920, 1080),
        )
        transform = animator.tick(16)

    Play-once keyframe animations pause themselves when they finish;
    further frames repeat the final transform until reset() or resume().
    """

    def __init__(self, strategy: MotionStrategy, drawable: Rect, viewport: Rect):
        if strategy is None:
            raise InvalidArgumentError("A motion strategy is required")
        self._strategy = strategy
        self._drawable = drawable
        self._viewport = viewport
        self._clock = PlaybackClock()
        self._completed = False

    @property
    def strategy(self) -> MotionStrategy:
        return self._strategy

    @property
    def drawable(self) -> Rect:
        return self._drawable

    @property
    def viewport(self) -> Rect:
        return self._viewport

    @property
    def elapsed_ms(self) -> float:
        return self._clock.elapsed_ms

    @property
    def is_paused(self) -> bool:
        return self._clock.is_paused

    @property
    def is_complete(self) -> bool:
        return self._completed

    def set_strategy(self, strategy: MotionStrategy) -> None:
        """Swap the motion strategy; the next frame reads from it."""
        if strategy is None:
            raise InvalidArgumentError("A motion strategy is required")
        self._strategy = strategy

    def set_bounds(self, drawable: Rect, viewport: Rect) -> None:
        self._drawable = drawable
        self._viewport = viewport

    def tick(self, delta_ms: float) -> ViewTransform:
        """
        Advance by delta_ms and return the transform for the new frame.

        Args:
            delta_ms: Time since the previous frame (ignored while paused)

        Returns:
            ViewTransform for the current frame
        """
        self._clock.tick(delta_ms)
        return self.current_transform()

    def current_transform(self) -> ViewTransform:
        elapsed = self._clock.elapsed_ms
        transform = self._strategy.view_transform(elapsed, self._drawable, self._viewport)
        if not self._completed and self._strategy.is_complete(elapsed):
            logger.debug(f"Animation complete after {elapsed}ms, pausing")
            self._completed = True
            self._clock.pause()
        return transform

    def pause(self) -> None:
        self._clock.pause()

    def resume(self) -> None:
        """Resume from the frozen time, or replay from the start if playback completed."""
        if self._completed:
            self.reset()
        else:
            self._clock.resume()

    def reset(self) -> None:
        self._clock.reset()
        self._strategy.reset()
        self._completed = False
