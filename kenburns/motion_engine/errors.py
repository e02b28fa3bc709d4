"""
Motion Engine Errors

Exceptions raised synchronously by the motion engine when a
transition, generator or keyframe track is misconfigured.
"""


class MotionEngineError(Exception):
    """Base class for all motion engine errors."""

    pass


class InvalidGeometryError(MotionEngineError, ValueError):
    """Raised when source and destination rectangles differ in aspect ratio."""

    pass


class InvalidArgumentError(MotionEngineError, ValueError):
    """Raised for a missing easing function, non-positive duration or unknown name."""

    pass


class DegenerateBoundsError(MotionEngineError, ValueError):
    """Raised when a zero-area rectangle reaches a helper that needs its aspect ratio."""

    pass
