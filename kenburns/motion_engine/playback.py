"""
Playback Progress

Turns elapsed animation time into a normalized progress value
according to a playback mode, and provides the pausable elapsed-time
accumulator the animator advances every frame.
"""

from enum import Enum
from typing import Union

from .errors import InvalidArgumentError


class PlaybackMode(str, Enum):
    """Policy for turning elapsed time into progress."""

    LOOP = "loop"
    REVERSE_AND_LOOP = "reverse_and_loop"
    PLAY_ONCE = "play_once"
    PLAY_ONCE_AND_STOP = "play_once_and_stop"


PLAY_ONCE_MODES = (PlaybackMode.PLAY_ONCE, PlaybackMode.PLAY_ONCE_AND_STOP)


def resolve_mode(mode: Union[PlaybackMode, str]) -> PlaybackMode:
    """
    Parse a playback mode name.

    Raises:
        InvalidArgumentError: If mode is not a known playback mode
    """
    try:
        return PlaybackMode(mode)
    except ValueError:
        raise InvalidArgumentError(f"Unknown playback mode: {mode!r}") from None


def compute_progress(
    elapsed_ms: float,
    duration_ms: float,
    mode: Union[PlaybackMode, str],
) -> float:
    """
    Compute normalized progress for elapsed time.

    - loop: sawtooth 0 -> 1, restarting every duration
    - reverse_and_loop: 0 -> 1 -> 0 ping-pong over two durations
    - play_once: rises to 1 and stays there
    - play_once_and_stop: as play_once, forced to exactly 1.0 once done

    Args:
        elapsed_ms: Monotonic time since the animation started
        duration_ms: Length of one pass (> 0)
        mode: Playback mode

    Returns:
        Progress in [0, 1]

    Raises:
        InvalidArgumentError: If duration_ms <= 0 or mode is unknown
    """
    mode = resolve_mode(mode)
    if duration_ms <= 0:
        raise InvalidArgumentError(f"Animation duration must be positive, got {duration_ms}")

    elapsed_ms = max(elapsed_ms, 0.0)

    if mode == PlaybackMode.REVERSE_AND_LOOP:
        elapsed = elapsed_ms % (2 * duration_ms)
        if elapsed > duration_ms:
            # Convert 1.0 -> 2.0 into 1.0 -> 0.0
            return 2.0 - elapsed / duration_ms
        return elapsed / duration_ms

    if mode == PlaybackMode.PLAY_ONCE:
        return min(elapsed_ms / duration_ms, 1.0)

    if mode == PlaybackMode.PLAY_ONCE_AND_STOP:
        if elapsed_ms >= duration_ms:
            return 1.0
        return elapsed_ms / duration_ms

    return (elapsed_ms % duration_ms) / duration_ms


def is_playback_complete(
    elapsed_ms: float,
    duration_ms: float,
    mode: Union[PlaybackMode, str],
) -> bool:
    """True once a play-once animation has reached the end; looping modes never complete."""
    return resolve_mode(mode) in PLAY_ONCE_MODES and elapsed_ms >= duration_ms


class PlaybackClock:
    """
    Pausable elapsed-time accumulator.

    The host calls tick() once per frame with the time since the last
    frame; while paused, ticks are ignored so resuming continues from
    the frozen value instead of jumping.
    """

    def __init__(self) -> None:
        self._elapsed_ms = 0.0
        self._paused = False

    @property
    def elapsed_ms(self) -> float:
        return self._elapsed_ms

    @property
    def is_paused(self) -> bool:
        return self._paused

    def tick(self, delta_ms: float) -> float:
        """
        Advance the clock by delta_ms unless paused.

        Raises:
            InvalidArgumentError: If delta_ms is negative
        """
        if delta_ms < 0:
            raise InvalidArgumentError(f"Clock cannot run backwards (delta {delta_ms}ms)")
        if not self._paused:
            self._elapsed_ms += delta_ms
        return self._elapsed_ms

    def pause(self) -> None:
        self._paused = True

    def resume(self) -> None:
        self._paused = False

    def reset(self) -> None:
        self._elapsed_ms = 0.0
        self._paused = False
