"""
Parametric Curve Evaluators

Scalar Bezier, Hermite and Catmull-Rom evaluators usable by any
component that needs a parametric curve instead of a fixed easing.
"""

import math


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def quadratic_bezier(t: float, p0: float, p1: float, p2: float) -> float:
    u = 1 - t
    return u * u * p0 + 2 * u * t * p1 + t * t * p2


def cubic_bezier(t: float, p0: float, p1: float, p2: float, p3: float) -> float:
    u = 1 - t
    return u * u * u * p0 + 3 * u * u * t * p1 + 3 * u * t * t * p2 + t * t * t * p3


def hermite(t: float, p0: float, m0: float, p1: float, m1: float) -> float:
    """
    Cubic Hermite spline between p0 and p1.

    Args:
        t: Curve parameter in [0, 1]
        p0: Start value
        m0: Tangent at the start
        p1: End value
        m1: Tangent at the end
    """
    t2 = t * t
    t3 = t2 * t
    return (
        (2 * t3 - 3 * t2 + 1) * p0
        + (t3 - 2 * t2 + t) * m0
        + (-2 * t3 + 3 * t2) * p1
        + (t3 - t2) * m1
    )


def catmull_rom(t: float, p0: float, p1: float, p2: float, p3: float) -> float:
    """Catmull-Rom segment between p1 and p2, shaped by neighbours p0 and p3."""
    t2 = t * t
    t3 = t2 * t
    return 0.5 * (
        (2 * p1)
        + (-p0 + p2) * t
        + (2 * p0 - 5 * p1 + 4 * p2 - p3) * t2
        + (-p0 + 3 * p1 - 3 * p2 + p3) * t3
    )


def bernstein(n: int, i: int, t: float) -> float:
    return math.comb(n, i) * math.pow(t, i) * math.pow(1 - t, n - i)


def bezier(t: float, *points: float) -> float:
    """
    Evaluate a Bezier curve of any degree through the Bernstein basis.

    Returns 0.0 when no control points are given.
    """
    n = len(points) - 1
    return sum((point * bernstein(n, i, t) for i, point in enumerate(points)), 0.0)
