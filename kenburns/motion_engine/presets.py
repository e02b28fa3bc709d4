"""
Keyframe Preset Definitions for Ken Burns Style Animation

Defines reusable keyframe tracks with zoom and pan parameters,
plus random track generators for visual variety.
"""

import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .errors import InvalidArgumentError
from .keyframes import DEFAULT_KEYFRAMES, Keyframe, KeyframeTrack, TimeMode

# Random keyframes keep at least this much time between them
MIN_RANDOM_KEYFRAME_SPACING = 0.1
MAX_RANDOM_KEYFRAMES = 20


@dataclass
class KeyframePreset:
    """
    Defines a Ken Burns style keyframe preset.

    Attributes:
        name: Preset identifier
        keyframes: Control points, in any order
        time_mode: How keyframe times are interpreted
        description: Human-readable description
    """

    name: str
    keyframes: List[Keyframe]
    time_mode: TimeMode = TimeMode.NORMALIZED
    description: str = ""

    def validate(self) -> bool:
        """Validate preset parameters are within valid ranges."""
        if not self.keyframes:
            return False
        for keyframe in self.keyframes:
            if keyframe.scale <= 0 or keyframe.time < 0:
                return False
            if self.time_mode == TimeMode.NORMALIZED:
                if not (0.0 <= keyframe.time <= 1.0):
                    return False
                if keyframe.scale < 1.0:
                    return False
                max_offset = (keyframe.scale - 1.0) / 2.0
                if abs(keyframe.offset_x) > max_offset + 1e-9:
                    return False
                if abs(keyframe.offset_y) > max_offset + 1e-9:
                    return False
        return True

    def to_track(self) -> KeyframeTrack:
        """Build a KeyframeTrack holding this preset's keyframes."""
        track = KeyframeTrack(self.time_mode)
        track.set_keyframes(self.keyframes)
        return track

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "time_mode": self.time_mode.value,
            "keyframes": [keyframe.model_dump() for keyframe in self.keyframes],
            "description": self.description,
        }


# =============================================================================
# Preset Library
# =============================================================================

PRESET_LIBRARY: Dict[str, KeyframePreset] = {
    "zoom_in": KeyframePreset(
        name="zoom_in",
        keyframes=list(DEFAULT_KEYFRAMES),
        description="Zoom to 150% with a slight diagonal drift (default track)",
    ),
    "zoom_out": KeyframePreset(
        name="zoom_out",
        keyframes=[
            Keyframe(time=0.0, scale=3.0),
            Keyframe(time=3.0, scale=1.0),
        ],
        time_mode=TimeMode.SECONDS,
        description="Start zoomed in at the center, end at full view",
    ),
    "four_corners": KeyframePreset(
        name="four_corners",
        keyframes=[
            Keyframe(time=0.0, scale=1.0, offset_x=-1.0, offset_y=-1.0),
            Keyframe(time=0.25, scale=1.5, offset_x=1.0, offset_y=-1.0),
            Keyframe(time=0.5, scale=2.0, offset_x=1.0, offset_y=1.0),
            Keyframe(time=0.75, scale=2.5, offset_x=-1.0, offset_y=1.0),
            Keyframe(time=1.0, scale=3.0, offset_x=-1.0, offset_y=-1.0),
        ],
        time_mode=TimeMode.SECONDS,
        description="Tour the corners while zooming in, clamped to the viewport",
    ),
    "pan_left_to_right": KeyframePreset(
        name="pan_left_to_right",
        keyframes=[
            Keyframe(time=0.0, scale=1.1, offset_x=0.05),
            Keyframe(time=1.0, scale=1.1, offset_x=-0.05),
        ],
        description="Horizontal pan left to right",
    ),
    "pan_right_to_left": KeyframePreset(
        name="pan_right_to_left",
        keyframes=[
            Keyframe(time=0.0, scale=1.1, offset_x=-0.05),
            Keyframe(time=1.0, scale=1.1, offset_x=0.05),
        ],
        description="Horizontal pan right to left",
    ),
    "diagonal_push": KeyframePreset(
        name="diagonal_push",
        keyframes=[
            Keyframe(time=0.0, scale=1.05, offset_x=0.025, offset_y=-0.025),
            Keyframe(time=1.0, scale=1.15, offset_x=-0.075, offset_y=0.075),
        ],
        description="Diagonal motion from bottom-left to top-right",
    ),
    "subtle_drift": KeyframePreset(
        name="subtle_drift",
        keyframes=[
            Keyframe(time=0.0, scale=1.05, offset_x=0.004),
            Keyframe(time=0.5, scale=1.065),
            Keyframe(time=1.0, scale=1.08, offset_x=-0.008),
        ],
        description="Subtle floating motion",
    ),
}


def get_preset(name: str) -> Optional[KeyframePreset]:
    """
    Get a keyframe preset by name.

    Args:
        name: Preset name (e.g., "zoom_in")

    Returns:
        KeyframePreset if found, None otherwise
    """
    return PRESET_LIBRARY.get(name)


def list_presets() -> list:
    """
    List all available preset names.

    Returns:
        List of preset name strings
    """
    return list(PRESET_LIBRARY.keys())


def get_preset_for_index(index: int) -> KeyframePreset:
    """
    Get a preset by cycling through the library.

    Useful for giving each image of a slideshow a different motion.

    Args:
        index: Image index (will be modulo'd against library size)

    Returns:
        KeyframePreset
    """
    preset_names = list(PRESET_LIBRARY.keys())
    preset_name = preset_names[index % len(preset_names)]
    return PRESET_LIBRARY[preset_name]


# =============================================================================
# Random Keyframes
# =============================================================================


def _check_count(count: int) -> None:
    if count < 0 or count > MAX_RANDOM_KEYFRAMES:
        raise InvalidArgumentError(
            f"Random keyframe count must be between 0 and {MAX_RANDOM_KEYFRAMES}, got {count}"
        )


def _random_values(rng: random.Random) -> dict:
    return {
        "scale": rng.random() * 4 + 1,
        "offset_x": rng.random() * 2 - 1,
        "offset_y": rng.random() * 2 - 1,
    }


def random_keyframes(count: int, rng: Optional[random.Random] = None) -> List[Keyframe]:
    """
    Generate keyframes at random, well-separated times in seconds.

    Times fall in [0.5, 4.5) and are at least 0.1s apart; scales fall in
    [1, 5) and offsets in [-1, 1). Install them on a SECONDS track so the
    offsets get clamped against the live viewport.

    Args:
        count: Number of keyframes (0 to 20)
        rng: Random source, for reproducible tracks

    Returns:
        Unsorted list of keyframes

    Raises:
        InvalidArgumentError: If count is out of range
    """
    _check_count(count)
    rng = rng or random.Random()

    keyframes: List[Keyframe] = []
    for _ in range(count):
        time = rng.random() * 4 + 0.5
        while any(abs(k.time - time) < MIN_RANDOM_KEYFRAME_SPACING for k in keyframes):
            time = rng.random() * 4 + 0.5
        keyframes.append(Keyframe(time=time, **_random_values(rng)))
    return keyframes


def random_smooth_keyframes(count: int, rng: Optional[random.Random] = None) -> List[Keyframe]:
    """
    Generate random keyframes evenly spaced 0.5s apart.

    Args:
        count: Number of keyframes (0 to 20)
        rng: Random source, for reproducible tracks

    Returns:
        List of keyframes sorted by time

    Raises:
        InvalidArgumentError: If count is out of range
    """
    _check_count(count)
    rng = rng or random.Random()
    return [Keyframe(time=i * 0.5, **_random_values(rng)) for i in range(count)]
