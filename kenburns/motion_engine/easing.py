"""
Easing Functions for Motion Transitions

Maps normalized time t in [0, 1] to eased progress. Every curve
starts at 0 and ends at 1; back, bounce, elastic and spring may
leave [0, 1] in between or when extrapolated past t = 1. Inputs are
never clamped here, callers clamp t themselves if they need to.
"""

import math
import random
from enum import Enum
from functools import partial
from typing import Callable, Dict, List, Optional, Union

from .errors import InvalidArgumentError

EasingFunction = Callable[[float], float]


class EasingKind(str, Enum):
    """Names of the built-in easing curves."""

    LINEAR = "linear"
    ACCELERATE = "accelerate"
    DECELERATE = "decelerate"
    ACCELERATE_DECELERATE = "accelerate_decelerate"
    SINE = "sine"
    CIRCULAR = "circular"
    EXPONENTIAL = "exponential"
    SMOOTH_STEP = "smooth_step"
    SMOOTHER_STEP = "smoother_step"
    BACK = "back"
    BOUNCE = "bounce"
    ELASTIC = "elastic"
    SPRING = "spring"


# =============================================================================
# Curves
# =============================================================================


def linear(t: float) -> float:
    return t


def accelerate(t: float) -> float:
    """Quadratic ease-in."""
    return t * t


def decelerate(t: float) -> float:
    """Quadratic ease-out."""
    return 1 - (1 - t) * (1 - t)


def accelerate_decelerate(t: float) -> float:
    """Cosine ease-in-out."""
    return math.cos((t + 1) * math.pi) / 2.0 + 0.5


def sine(t: float) -> float:
    return math.sin(t * math.pi / 2)


def circular(t: float) -> float:
    # Saturates at 1 beyond t = 1
    return 1 - math.sqrt(max(0.0, 1 - t * t))


def exponential(t: float) -> float:
    if t == 0:
        return 0.0
    return math.pow(2, 10 * (t - 1))


def smooth_step(t: float) -> float:
    return t * t * (3 - 2 * t)


def smoother_step(t: float) -> float:
    return t * t * t * (t * (t * 6 - 15) + 10)


def back(t: float) -> float:
    """Ease-in with a short wind-up below zero before accelerating to 1."""
    return t * t * (2.70158 * t - 1.70158)


def bounce(t: float) -> float:
    """Ease-out that lands at 1 with three decaying bounces."""
    n1 = 7.5625
    d1 = 2.75
    if t < 1 / d1:
        return n1 * t * t
    if t < 2 / d1:
        t -= 1.5 / d1
        return n1 * t * t + 0.75
    if t < 2.5 / d1:
        t -= 2.25 / d1
        return n1 * t * t + 0.9375
    t -= 2.625 / d1
    return n1 * t * t + 0.984375


def elastic(t: float) -> float:
    """Ease-out that overshoots 1 and settles with a decaying oscillation."""
    if t == 0:
        return 0.0
    if t == 1:
        return 1.0
    return math.pow(2, -10 * t) * math.sin((t * 10 - 0.75) * (2 * math.pi / 3)) + 1


def spring(t: float) -> float:
    """Damped spring settling on 1."""
    if t == 1:
        return 1.0
    return 1 - math.pow(0.5, 7 * t) * math.cos(4.5 * math.pi * t)


# =============================================================================
# Registry
# =============================================================================

EASING_LIBRARY: Dict[EasingKind, EasingFunction] = {
    EasingKind.LINEAR: linear,
    EasingKind.ACCELERATE: accelerate,
    EasingKind.DECELERATE: decelerate,
    EasingKind.ACCELERATE_DECELERATE: accelerate_decelerate,
    EasingKind.SINE: sine,
    EasingKind.CIRCULAR: circular,
    EasingKind.EXPONENTIAL: exponential,
    EasingKind.SMOOTH_STEP: smooth_step,
    EasingKind.SMOOTHER_STEP: smoother_step,
    EasingKind.BACK: back,
    EasingKind.BOUNCE: bounce,
    EasingKind.ELASTIC: elastic,
    EasingKind.SPRING: spring,
}


def _resolve_kind(kind: Union[EasingKind, str]) -> EasingKind:
    try:
        return EasingKind(kind)
    except ValueError:
        raise InvalidArgumentError(f"Unknown easing: {kind!r}") from None


def interpolate(t: float, kind: Union[EasingKind, str]) -> float:
    """
    Apply the easing curve identified by kind to t.

    Args:
        t: Normalized time, typically in [0, 1]
        kind: EasingKind or its string name (e.g., "bounce")

    Returns:
        Eased progress (not clamped)

    Raises:
        InvalidArgumentError: If kind is not a known easing
    """
    return EASING_LIBRARY[_resolve_kind(kind)](t)


def get_easing(name: Union[EasingKind, str]) -> EasingFunction:
    """
    Get an easing function by name.

    Args:
        name: Easing name (e.g., "accelerate_decelerate")

    Returns:
        The easing function

    Raises:
        InvalidArgumentError: If name is not a known easing
    """
    return EASING_LIBRARY[_resolve_kind(name)]


def list_easings() -> List[str]:
    """List all available easing names."""
    return [kind.value for kind in EASING_LIBRARY]


def random_interpolation(t: float, rng: Optional[random.Random] = None) -> float:
    """
    Apply a uniformly chosen easing curve to t.

    A new curve is drawn on every call, so consecutive frames of the
    same transition may use different curves. Pass a seeded rng for
    reproducible output.
    """
    kind = (rng or random).choice(list(EASING_LIBRARY))
    return EASING_LIBRARY[kind](t)


def random_easing(rng: Optional[random.Random] = None) -> EasingFunction:
    """Pick one easing curve at random and return it."""
    kind = (rng or random).choice(list(EASING_LIBRARY))
    return EASING_LIBRARY[kind]


def bind_random_interpolation(rng: Optional[random.Random] = None) -> EasingFunction:
    """Return random_interpolation bound to rng, usable as a plain easing function."""
    return partial(random_interpolation, rng=rng)


def easing_name(fn: Optional[EasingFunction]) -> str:
    """Best-effort display name for an easing function, used in log messages."""
    if fn is None:
        return "none"
    if isinstance(fn, partial):
        fn = fn.func
    for kind, candidate in EASING_LIBRARY.items():
        if candidate is fn:
            return kind.value
    if fn is random_interpolation:
        return "random"
    return getattr(fn, "__name__", repr(fn))
