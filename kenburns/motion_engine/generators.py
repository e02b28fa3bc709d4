"""
Transition Generators

Strategies that pick the next source/destination rect pair for a
drawable shown inside a viewport. All of them produce rects with the
viewport's aspect ratio, so every Transition they build is valid.

- RandomTransitionGenerator: chained random crops
- FullToRandomTransitionGenerator: whole image zooming into a near-full crop
- CornerTransitionGenerator: deterministic tour of the four corners
"""

import logging
import random
from typing import Callable, Dict, Optional, Protocol

from ..core.config import get_settings
from .easing import (
    EasingFunction,
    accelerate_decelerate,
    bind_random_interpolation,
    bounce,
    easing_name,
)
from .errors import InvalidArgumentError
from .geometry import (
    Rect,
    have_same_aspect_ratio,
    is_degenerate,
    letterbox_rect,
    max_viewport_fit_rect,
)
from .transition import Transition

logger = logging.getLogger(__name__)


class TransitionGenerator(Protocol):
    """Capability shared by all transition generation policies."""

    def generate_next_transition(self, drawable: Rect, viewport: Rect) -> Transition:
        """
        Generate the next transition to play.

        Args:
            drawable: Bounds of the image being animated
            viewport: Bounds of the render target

        Returns:
            A Transition whose rects share the viewport's aspect ratio
        """
        ...

    def is_cropping_image(self) -> bool:
        """True if rects are sub-crops to draw clipped, False if the full image is drawn."""
        ...

    def set_transition_duration(self, duration_ms: int) -> None:
        ...

    def set_transition_interpolator(self, easing: EasingFunction) -> None:
        ...


# =============================================================================
# Shared helpers
# =============================================================================


def _validated_duration(duration_ms: int) -> int:
    if duration_ms is None or duration_ms <= 0:
        raise InvalidArgumentError(f"Transition duration must be positive, got {duration_ms}")
    return duration_ms


def _validated_easing(easing: Optional[EasingFunction]) -> EasingFunction:
    if easing is None:
        raise InvalidArgumentError("Transition easing function is required")
    return easing


def _validated_factor(factor: float, name: str) -> float:
    if not (0.0 < factor <= 1.0):
        raise InvalidArgumentError(f"{name} must be in (0, 1], got {factor}")
    return factor


def _is_degenerate_pair(drawable: Rect, viewport: Rect) -> bool:
    if is_degenerate(drawable) or is_degenerate(viewport):
        logger.warning(
            f"Degenerate bounds (drawable={drawable}, viewport={viewport}), "
            "holding still"
        )
        return True
    return False


def random_crop(
    drawable: Rect,
    viewport: Rect,
    min_factor: float,
    rng: random.Random,
) -> Rect:
    """
    Random viewport-shaped crop fully inside drawable.

    The crop is a uniform fraction in [min_factor, 1] of the maximal
    viewport-fit rect, placed at a uniformly random offset.
    """
    fit = max_viewport_fit_rect(drawable, viewport)
    factor = min_factor + (1 - min_factor) * rng.random()

    width = factor * fit.width
    height = factor * fit.height
    width_diff = drawable.width - width
    height_diff = drawable.height - height
    left = drawable.left + (rng.random() * width_diff if width_diff > 0 else 0.0)
    top = drawable.top + (rng.random() * height_diff if height_diff > 0 else 0.0)

    return Rect(left, top, left + width, top + height)


# =============================================================================
# Random crop cycling
# =============================================================================


class RandomTransitionGenerator:
    """
    Chains random crops so each transition starts where the last one ended.

    A fresh random source is picked on the first call, when the drawable
    changes, or when the viewport's aspect ratio no longer matches the
    previous destination within the configured aspect ratio tolerance.
    """

    def __init__(
        self,
        duration_ms: Optional[int] = None,
        easing: Optional[EasingFunction] = None,
        min_rect_factor: Optional[float] = None,
        rng: Optional[random.Random] = None,
    ):
        settings = get_settings()
        self._rng = rng or random.Random()
        self._min_rect_factor = _validated_factor(
            settings.min_rect_factor if min_rect_factor is None else min_rect_factor,
            "min_rect_factor",
        )
        self._duration_ms = _validated_duration(
            settings.transition_duration_ms if duration_ms is None else duration_ms
        )
        self._easing = _validated_easing(easing or bind_random_interpolation(self._rng))
        self._last_transition: Optional[Transition] = None
        self._last_drawable: Optional[Rect] = None

        logger.debug(
            f"RandomTransitionGenerator: {self._duration_ms}ms, easing={easing_name(self._easing)}"
        )

    @property
    def last_transition(self) -> Optional[Transition]:
        return self._last_transition

    def is_cropping_image(self) -> bool:
        return True

    def set_transition_duration(self, duration_ms: int) -> None:
        self._duration_ms = _validated_duration(duration_ms)

    def set_transition_interpolator(self, easing: EasingFunction) -> None:
        self._easing = _validated_easing(easing)

    def generate_next_transition(self, drawable: Rect, viewport: Rect) -> Transition:
        if _is_degenerate_pair(drawable, viewport):
            transition = Transition.still(drawable, self._duration_ms, self._easing)
        else:
            destination = random_crop(drawable, viewport, self._min_rect_factor, self._rng)
            source = self._chained_source(drawable, viewport, destination)
            transition = Transition(source, destination, self._duration_ms, self._easing)

        self._last_transition = transition
        self._last_drawable = drawable
        return transition

    def _chained_source(self, drawable: Rect, viewport: Rect, destination: Rect) -> Rect:
        # Same tolerance the Transition checks with, so a chained source is never rejected
        previous = self._last_transition.destination if self._last_transition else None
        if (
            previous is None
            or drawable != self._last_drawable
            or is_degenerate(previous)
            or not have_same_aspect_ratio(
                previous, destination, tolerance=get_settings().aspect_ratio_tolerance
            )
        ):
            return random_crop(drawable, viewport, self._min_rect_factor, self._rng)
        return previous


# =============================================================================
# Full image to random crop
# =============================================================================


class FullToRandomTransitionGenerator:
    """
    Zooms from the whole image into a near-full random crop.

    The source is the letterbox rect (whole image visible at the
    viewport's aspect ratio); the destination is a crop of 95-100% of the
    maximal viewport-fit rect.
    """

    def __init__(
        self,
        duration_ms: Optional[int] = None,
        easing: Optional[EasingFunction] = None,
        min_rect_factor: Optional[float] = None,
        rng: Optional[random.Random] = None,
    ):
        settings = get_settings()
        self._rng = rng or random.Random()
        self._min_rect_factor = _validated_factor(
            settings.full_to_random_min_rect_factor if min_rect_factor is None else min_rect_factor,
            "min_rect_factor",
        )
        self._duration_ms = _validated_duration(
            settings.transition_duration_ms if duration_ms is None else duration_ms
        )
        self._easing = _validated_easing(easing or accelerate_decelerate)
        self._last_transition: Optional[Transition] = None

    @property
    def last_transition(self) -> Optional[Transition]:
        return self._last_transition

    def is_cropping_image(self) -> bool:
        return False

    def set_transition_duration(self, duration_ms: int) -> None:
        self._duration_ms = _validated_duration(duration_ms)

    def set_transition_interpolator(self, easing: EasingFunction) -> None:
        self._easing = _validated_easing(easing)

    def generate_next_transition(self, drawable: Rect, viewport: Rect) -> Transition:
        if _is_degenerate_pair(drawable, viewport):
            transition = Transition.still(drawable, self._duration_ms, self._easing)
        else:
            source = letterbox_rect(drawable, viewport)
            destination = random_crop(drawable, viewport, self._min_rect_factor, self._rng)
            transition = Transition(source, destination, self._duration_ms, self._easing)

        self._last_transition = transition
        return transition


# =============================================================================
# Four-corner cycling
# =============================================================================


class CornerTransitionGenerator:
    """
    Tours the corners of the image: top-left, top-right, bottom-right,
    bottom-left and back to top-left.

    Each corner rect is `scale` times the maximal viewport-fit rect,
    anchored at that corner of the drawable. The step counter wraps at 4,
    so output is fully determined by the starting step.
    """

    STEP_COUNT = 4

    def __init__(
        self,
        scale: Optional[float] = None,
        duration_ms: Optional[int] = None,
        easing: Optional[EasingFunction] = None,
        start_step: int = 0,
    ):
        settings = get_settings()
        self.scale = settings.corner_scale if scale is None else scale
        self._duration_ms = _validated_duration(
            settings.transition_duration_ms if duration_ms is None else duration_ms
        )
        self._easing = _validated_easing(easing or bounce)
        self._last_transition: Optional[Transition] = None
        self.reset(start_step)

    @property
    def scale(self) -> float:
        return self._scale

    @scale.setter
    def scale(self, value: float) -> None:
        self._scale = _validated_factor(value, "scale")

    @property
    def current_step(self) -> int:
        return self._current_step

    def reset(self, step: int = 0) -> None:
        """Restart the corner tour at step (0 = top-left to top-right)."""
        self._current_step = step % self.STEP_COUNT

    @property
    def last_transition(self) -> Optional[Transition]:
        return self._last_transition

    def is_cropping_image(self) -> bool:
        return False

    def set_transition_duration(self, duration_ms: int) -> None:
        self._duration_ms = _validated_duration(duration_ms)

    def set_transition_interpolator(self, easing: EasingFunction) -> None:
        self._easing = _validated_easing(easing)

    def generate_next_transition(self, drawable: Rect, viewport: Rect) -> Transition:
        if _is_degenerate_pair(drawable, viewport):
            transition = Transition.still(drawable, self._duration_ms, self._easing)
        else:
            corners = self._corner_rects(drawable, viewport)
            source = corners[self._current_step]
            destination = corners[(self._current_step + 1) % self.STEP_COUNT]
            transition = Transition(source, destination, self._duration_ms, self._easing)

        self._current_step = (self._current_step + 1) % self.STEP_COUNT
        self._last_transition = transition
        return transition

    def _corner_rects(self, drawable: Rect, viewport: Rect) -> list:
        # Clockwise from top-left
        fit = max_viewport_fit_rect(drawable, viewport)
        width = self._scale * fit.width
        height = self._scale * fit.height
        d = drawable
        return [
            Rect(d.left, d.top, d.left + width, d.top + height),
            Rect(d.right - width, d.top, d.right, d.top + height),
            Rect(d.right - width, d.bottom - height, d.right, d.bottom),
            Rect(d.left, d.bottom - height, d.left + width, d.bottom),
        ]


# =============================================================================
# Generator Library
# =============================================================================

GENERATOR_LIBRARY: Dict[str, Callable[..., TransitionGenerator]] = {
    "random": RandomTransitionGenerator,
    "full_to_random": FullToRandomTransitionGenerator,
    "corners": CornerTransitionGenerator,
}


def create_generator(name: str, **kwargs) -> TransitionGenerator:
    """
    Create a transition generator by name.

    Args:
        name: Generator name ("random", "full_to_random" or "corners")
        **kwargs: Constructor arguments for the chosen generator

    Returns:
        A new generator instance

    Raises:
        InvalidArgumentError: If name is not a known generator
    """
    factory = GENERATOR_LIBRARY.get(name)
    if factory is None:
        raise InvalidArgumentError(
            f"Unknown transition generator: {name!r} (expected one of {', '.join(GENERATOR_LIBRARY)})"
        )
    return factory(**kwargs)
