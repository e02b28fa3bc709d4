"""
Rectangle Geometry Helpers

Immutable rectangle value type and the aspect-ratio helpers shared by
transitions, generators and keyframe motion.
"""

from dataclasses import dataclass
from typing import Dict

from .errors import DegenerateBoundsError

# Maximum aspect ratio difference for two rects to count as the same shape
ASPECT_RATIO_TOLERANCE = 0.01


@dataclass(frozen=True)
class Rect:
    """
    Axis-aligned rectangle in image-pixel or normalized space.

    Attributes:
        left: X coordinate of the left edge
        top: Y coordinate of the top edge
        right: X coordinate of the right edge
        bottom: Y coordinate of the bottom edge
    """

    left: float
    top: float
    right: float
    bottom: float

    @classmethod
    def from_size(cls, width: float, height: float) -> "Rect":
        """Rectangle of the given size anchored at the origin."""
        return cls(0.0, 0.0, width, height)

    @classmethod
    def from_center(cls, center_x: float, center_y: float, width: float, height: float) -> "Rect":
        left = center_x - width / 2
        top = center_y - height / 2
        return cls(left, top, left + width, top + height)

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center_x(self) -> float:
        return (self.left + self.right) / 2

    @property
    def center_y(self) -> float:
        return (self.top + self.bottom) / 2

    @property
    def aspect_ratio(self) -> float:
        return get_rect_ratio(self)

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def contains(self, other: "Rect", tolerance: float = 1e-6) -> bool:
        """Check whether other lies entirely inside this rect."""
        return (
            other.left >= self.left - tolerance
            and other.top >= self.top - tolerance
            and other.right <= self.right + tolerance
            and other.bottom <= self.bottom + tolerance
        )

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary for serialization."""
        return {
            "left": self.left,
            "top": self.top,
            "right": self.right,
            "bottom": self.bottom,
        }


def is_degenerate(rect: Rect) -> bool:
    """True for rects with zero (or negative) width or height."""
    return rect.is_empty


def get_rect_ratio(rect: Rect) -> float:
    """
    Width-to-height ratio of rect.

    Raises:
        DegenerateBoundsError: If rect has zero height
    """
    if rect.height == 0:
        raise DegenerateBoundsError(f"Cannot compute aspect ratio of zero-height rect {rect}")
    return rect.width / rect.height


def have_same_aspect_ratio(
    first: Rect,
    second: Rect,
    tolerance: float = ASPECT_RATIO_TOLERANCE,
) -> bool:
    """Check whether two rects share an aspect ratio within tolerance."""
    return abs(get_rect_ratio(first) - get_rect_ratio(second)) < tolerance


def max_viewport_fit_rect(drawable: Rect, viewport: Rect) -> Rect:
    """
    Largest rect with the viewport's aspect ratio that fits inside drawable.

    The result is anchored at the drawable's top-left corner. A drawable
    relatively wider than the viewport is constrained by its height,
    otherwise by its width.

    Raises:
        DegenerateBoundsError: If either rect has zero area
    """
    if is_degenerate(drawable) or is_degenerate(viewport):
        raise DegenerateBoundsError(
            f"Cannot fit viewport {viewport} into drawable {drawable}"
        )

    drawable_ratio = get_rect_ratio(drawable)
    viewport_ratio = get_rect_ratio(viewport)

    if drawable_ratio > viewport_ratio:
        width = drawable.height * viewport_ratio
        height = drawable.height
    else:
        width = drawable.width
        height = drawable.width / viewport_ratio

    return Rect(drawable.left, drawable.top, drawable.left + width, drawable.top + height)


def letterbox_rect(drawable: Rect, viewport: Rect) -> Rect:
    """
    Smallest rect with the viewport's aspect ratio that contains drawable.

    Centered on the drawable, so showing it in the viewport displays the
    whole image with bars on the two sides that do not touch.

    Raises:
        DegenerateBoundsError: If either rect has zero area
    """
    if is_degenerate(drawable) or is_degenerate(viewport):
        raise DegenerateBoundsError(
            f"Cannot letterbox drawable {drawable} into viewport {viewport}"
        )

    drawable_ratio = get_rect_ratio(drawable)
    viewport_ratio = get_rect_ratio(viewport)

    if drawable_ratio > viewport_ratio:
        width = drawable.width
        height = drawable.width / viewport_ratio
    else:
        width = drawable.height * viewport_ratio
        height = drawable.height

    return Rect.from_center(drawable.center_x, drawable.center_y, width, height)


def cover_scale(image_width: float, image_height: float, view_width: float, view_height: float) -> float:
    """
    Base scale at which an image just covers the view.

    Raises:
        DegenerateBoundsError: If any dimension is zero
    """
    if image_width <= 0 or image_height <= 0 or view_width <= 0 or view_height <= 0:
        raise DegenerateBoundsError(
            f"Cannot fit {image_width}x{image_height} image into {view_width}x{view_height} view"
        )

    view_aspect = view_width / view_height
    image_aspect = image_width / image_height
    if view_aspect > image_aspect:
        return view_width / image_width
    return view_height / image_height
