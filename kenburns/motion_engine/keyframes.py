"""
Keyframe Scale/Position Track

Alternative motion model: a sorted list of (time, scale, offset)
samples interpolated linearly at a given normalized progress.

Offsets are fractions of the viewport size; (0, 0) keeps the scaled
image centred. Scales are relative to the cover scale, so 1.0 means
the image just covers the viewport.
"""

import logging
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .errors import InvalidArgumentError
from .geometry import Rect, cover_scale

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


class TimeMode(str, Enum):
    """How keyframe times are interpreted."""

    # Times in [0, 1]; scale and offset validated when installed
    NORMALIZED = "normalized"
    # Arbitrary non-negative times (seconds); values clamped against the live viewport
    SECONDS = "seconds"


class Keyframe(BaseModel):
    """A sampled scale/offset control point."""

    model_config = ConfigDict(frozen=True)

    time: float = Field(..., description="Keyframe time (normalized or seconds)")
    scale: float = Field(1.0, description="Zoom relative to the cover scale")
    offset_x: float = Field(0.0, description="Horizontal offset as a fraction of viewport width")
    offset_y: float = Field(0.0, description="Vertical offset as a fraction of viewport height")

    @property
    def position(self) -> Point:
        return (self.offset_x, self.offset_y)


DEFAULT_KEYFRAMES: Tuple[Keyframe, ...] = (
    Keyframe(time=0.0, scale=1.0, offset_x=0.0, offset_y=0.0),
    Keyframe(time=1.0, scale=1.5, offset_x=0.1, offset_y=0.1),
)


def _clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(value, maximum))


def clamp_offset_for_scale(offset: float, scale: float) -> float:
    """
    Clamp one offset axis so an image zoomed by scale still covers the view.

    As scale increases the image can move further without showing
    empty canvas at the edges.
    """
    max_offset = (scale - 1.0) / 2.0
    return _clamp(offset, -max_offset, max_offset)


def validate_keyframe(keyframe: Keyframe) -> Keyframe:
    """Clamp a keyframe for the normalized track: scale >= 1, covering offsets, time in [0, 1]."""
    scale = max(1.0, keyframe.scale)
    return Keyframe(
        time=_clamp(keyframe.time, 0.0, 1.0),
        scale=scale,
        offset_x=clamp_offset_for_scale(keyframe.offset_x, scale),
        offset_y=clamp_offset_for_scale(keyframe.offset_y, scale),
    )


def clamp_offset_to_viewport(
    scale: float,
    offset: Point,
    image_width: float,
    image_height: float,
    viewport: Rect,
) -> Point:
    """
    Clamp an interpolated offset so the scaled image cannot reveal empty canvas.

    Recomputed against the current viewport and image aspect ratio.
    The allowed range on each axis is symmetric around zero.

    Args:
        scale: Effect scale relative to the cover scale
        offset: (x, y) offset as fractions of the viewport size
        image_width: Drawable width in pixels
        image_height: Drawable height in pixels
        viewport: Current render target bounds

    Returns:
        Clamped (x, y) offset
    """
    base_scale = cover_scale(image_width, image_height, viewport.width, viewport.height)
    scaled_width = image_width * base_scale * scale
    scaled_height = image_height * base_scale * scale

    max_x = abs((viewport.width - scaled_width) / viewport.width) / 2
    max_y = abs((viewport.height - scaled_height) / viewport.height) / 2

    x, y = offset
    return (_clamp(x, -max_x, max_x), _clamp(y, -max_y, max_y))


class KeyframeTrack:
    """
    Ordered keyframes with linear scale/offset interpolation.

    A new track is empty and interpolates to the identity (scale 1.0,
    no offset) until keyframes are installed.
    """

    def __init__(self, time_mode: TimeMode = TimeMode.NORMALIZED):
        self.time_mode = TimeMode(time_mode)
        self._keyframes: List[Keyframe] = []

    @property
    def keyframes(self) -> Tuple[Keyframe, ...]:
        return tuple(self._keyframes)

    def __len__(self) -> int:
        return len(self._keyframes)

    def set_keyframes(self, keyframes: Optional[Sequence[Keyframe]]) -> None:
        """
        Replace the track's keyframes.

        An empty or missing list installs the default two-point zoom.
        In normalized mode every keyframe is clamped first, including
        negative times. Keyframes are sorted by time; ties keep their
        given order.

        Args:
            keyframes: Keyframes to install, or None for the default track

        Raises:
            InvalidArgumentError: If a seconds-mode keyframe has a negative time
        """
        if not keyframes:
            keyframes = DEFAULT_KEYFRAMES
        elif self.time_mode == TimeMode.NORMALIZED:
            keyframes = [validate_keyframe(keyframe) for keyframe in keyframes]
        else:
            for keyframe in keyframes:
                if keyframe.time < 0:
                    raise InvalidArgumentError(
                        f"Keyframe time must not be negative, got {keyframe.time}"
                    )

        self._keyframes = sorted(keyframes, key=lambda keyframe: keyframe.time)
        logger.debug(f"Installed {len(self._keyframes)} keyframes ({self.time_mode.value})")

    def clear(self) -> None:
        self._keyframes = []

    def interpolate(self, progress: float) -> Tuple[float, Point]:
        """
        Interpolate scale and offset at progress.

        Progress is mapped onto the track's own min..max time range, then
        scale and each offset axis are blended linearly between the
        surrounding keyframes.

        Args:
            progress: Normalized progress in [0, 1]

        Returns:
            Tuple of (scale, (offset_x, offset_y))
        """
        frames = self._keyframes
        if not frames:
            return 1.0, (0.0, 0.0)
        if len(frames) == 1:
            return frames[0].scale, frames[0].position

        min_time = frames[0].time
        max_time = frames[-1].time
        target = min_time + (max_time - min_time) * progress

        next_frame = next((k for k in frames if k.time >= target), None)
        if next_frame is None:
            return frames[-1].scale, frames[-1].position

        prev_frame = next((k for k in reversed(frames) if k.time <= target), frames[0])

        span = next_frame.time - prev_frame.time
        local = (target - prev_frame.time) / span if span > 0 else 0.0

        scale = prev_frame.scale + (next_frame.scale - prev_frame.scale) * local
        x = prev_frame.offset_x + (next_frame.offset_x - prev_frame.offset_x) * local
        y = prev_frame.offset_y + (next_frame.offset_y - prev_frame.offset_y) * local

        return scale, (x, y)
