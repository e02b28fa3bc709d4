"""
Transition Segment

A single timed motion segment that slides and scales a view window
from a source rect to a destination rect of the same shape.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ..core.config import get_settings
from .easing import EasingFunction, easing_name
from .errors import InvalidArgumentError, InvalidGeometryError
from .geometry import Rect, have_same_aspect_ratio

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transition:
    """
    Immutable motion segment between two same-aspect-ratio rects.

    Attributes:
        source: View window at the start of the segment
        destination: View window at the end of the segment
        duration_ms: Segment length in milliseconds (> 0)
        easing: Function mapping normalized time to interpolation weight

    Raises:
        InvalidArgumentError: If easing is missing or duration_ms <= 0
        InvalidGeometryError: If source and destination differ in aspect ratio
    """

    source: Rect
    destination: Rect
    duration_ms: int
    easing: Optional[EasingFunction]

    def __post_init__(self) -> None:
        if self.easing is None:
            raise InvalidArgumentError("Transition easing function is required")
        if self.duration_ms <= 0:
            raise InvalidArgumentError(
                f"Transition duration must be positive, got {self.duration_ms}"
            )
        # Identical rects are always the same shape, even when degenerate
        if self.source != self.destination and not have_same_aspect_ratio(
            self.source,
            self.destination,
            tolerance=get_settings().aspect_ratio_tolerance,
        ):
            raise InvalidGeometryError(
                "Source and destination rectangles do not have the same aspect ratio: "
                f"{self.source} vs {self.destination}"
            )

        logger.debug(
            f"Transition: {self.source} -> {self.destination}, "
            f"{self.duration_ms}ms, easing={easing_name(self.easing)}"
        )

    @classmethod
    def still(cls, rect: Rect, duration_ms: int, easing: EasingFunction) -> "Transition":
        """Transition that holds rect for duration_ms."""
        return cls(rect, rect, duration_ms, easing)

    def interpolated_rect(self, elapsed_ms: float) -> Rect:
        """
        View window after elapsed_ms.

        Elapsed time is clamped to the segment, but the eased weight is
        not: overshooting curves push size and position past the
        destination before settling.

        Args:
            elapsed_ms: Time since the segment started

        Returns:
            Interpolated rect, rebuilt from interpolated center and size
        """
        fraction = min(max(elapsed_ms / self.duration_ms, 0.0), 1.0)
        weight = self.easing(fraction)

        src = self.source
        dst = self.destination
        width = src.width + weight * (dst.width - src.width)
        height = src.height + weight * (dst.height - src.height)
        center_x = src.center_x + weight * (dst.center_x - src.center_x)
        center_y = src.center_y + weight * (dst.center_y - src.center_y)

        return Rect.from_center(center_x, center_y, width, height)

    def is_finished(self, elapsed_ms: float) -> bool:
        return elapsed_ms >= self.duration_ms
