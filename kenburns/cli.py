"""
kenburns: motion engine sampling CLI.

Drives the animator the way a render loop would and prints one JSON
object per frame, which makes motion easy to inspect, plot or diff.

Usage:
    kenburns sample --image 4000x3000 --viewport 1920x1080 --motion random --seed 7
    kenburns sample --motion keyframes --preset four_corners --mode play_once
    kenburns easings
    kenburns presets
"""
from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from typing import List, Optional

from .core.config import get_settings
from .motion_engine.animator import KenBurnsAnimator, KeyframeMotion, MotionStrategy, TransitionMotion
from .motion_engine.easing import get_easing, list_easings
from .motion_engine.errors import InvalidArgumentError, MotionEngineError
from .motion_engine.generators import GENERATOR_LIBRARY, create_generator
from .motion_engine.geometry import Rect
from .motion_engine.keyframes import KeyframeTrack, TimeMode
from .motion_engine.playback import PlaybackMode
from .motion_engine.presets import PRESET_LIBRARY, get_preset, random_keyframes

logger = logging.getLogger("kenburns.cli")

_MOTIONS = [*GENERATOR_LIBRARY, "keyframes"]


def _parse_size(text: str) -> Rect:
    """Parse "WIDTHxHEIGHT" into a rect anchored at the origin."""
    width, sep, height = text.lower().partition("x")
    try:
        if not sep:
            raise ValueError(text)
        return Rect.from_size(float(width), float(height))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT, got {text!r}") from None


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else get_settings().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def build_strategy(args: argparse.Namespace, rng: random.Random) -> MotionStrategy:
    """Build the motion strategy selected on the command line."""
    if args.motion == "keyframes":
        if args.random_keyframes:
            track = KeyframeTrack(TimeMode.SECONDS)
            track.set_keyframes(random_keyframes(args.random_keyframes, rng))
        else:
            preset = get_preset(args.preset)
            if preset is None:
                raise InvalidArgumentError(
                    f"Unknown preset: {args.preset!r} (expected one of {', '.join(PRESET_LIBRARY)})"
                )
            track = preset.to_track()
        return KeyframeMotion(track=track, duration_ms=args.duration_ms, mode=args.mode)

    kwargs = {"duration_ms": args.duration_ms}
    if args.easing:
        kwargs["easing"] = get_easing(args.easing)
    if args.motion != "corners":
        kwargs["rng"] = rng
    generator = create_generator(args.motion, **kwargs)

    return TransitionMotion(
        generator,
        on_transition_start=lambda t: logger.info(
            f"Transition started: {t.source} -> {t.destination} ({t.duration_ms}ms)"
        ),
        on_transition_end=lambda t: logger.info(f"Transition ended: {t.destination}"),
    )


def cmd_sample(args: argparse.Namespace) -> int:
    """
    Sample the animator frame by frame.
    Prints one JSON line per frame to stdout.
    Returns 0 on success, 1 on failure.
    """
    settings = get_settings()
    rng = random.Random(args.seed)
    interval_ms = 1000.0 / args.fps if args.fps else float(settings.frame_interval_ms)

    try:
        animator = KenBurnsAnimator(
            build_strategy(args, rng),
            drawable=args.image,
            viewport=args.viewport,
        )
        for frame in range(args.frames):
            transform = animator.tick(interval_ms if frame else 0.0)
            print(json.dumps({
                "frame": frame,
                "elapsed_ms": animator.elapsed_ms,
                "paused": animator.is_paused,
                "transform": transform.to_dict(),
            }))
    except MotionEngineError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    return 0


def cmd_easings() -> int:
    """Print each easing with its value at a few sample times."""
    samples = [0.0, 0.25, 0.5, 0.75, 1.0]
    for name in list_easings():
        fn = get_easing(name)
        values = ", ".join(f"{fn(t):.3f}" for t in samples)
        print(f"{name:<22} {values}")
    return 0


def cmd_presets() -> int:
    """Print each keyframe preset with its description."""
    for preset in PRESET_LIBRARY.values():
        print(f"{preset.name:<18} {preset.time_mode.value:<10} {preset.description}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(prog="kenburns", description="Ken Burns motion engine CLI")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    sample = sub.add_parser("sample", help="Print per-frame view transforms as JSON lines")
    sample.add_argument("--image", type=_parse_size, default=Rect.from_size(4000, 3000),
                        help="Image size as WIDTHxHEIGHT (default: 4000x3000)")
    sample.add_argument("--viewport", type=_parse_size, default=Rect.from_size(1920, 1080),
                        help="Viewport size as WIDTHxHEIGHT (default: 1920x1080)")
    sample.add_argument("--motion", default="random", choices=_MOTIONS,
                        help="Transition generator or keyframe motion (default: random)")
    sample.add_argument("--preset", default="zoom_in",
                        help="Keyframe preset for --motion keyframes (default: zoom_in)")
    sample.add_argument("--random-keyframes", type=int, default=0, metavar="N",
                        help="Use N random keyframes instead of a preset")
    sample.add_argument("--mode", default=settings.playback_mode,
                        choices=[mode.value for mode in PlaybackMode],
                        help=f"Keyframe playback mode (default: {settings.playback_mode})")
    sample.add_argument("--duration-ms", type=int, default=None,
                        help="Transition or animation duration in milliseconds")
    sample.add_argument("--easing", default=None, choices=list_easings(),
                        help="Easing for generated transitions")
    sample.add_argument("--frames", type=int, default=60, help="Number of frames (default: 60)")
    sample.add_argument("--fps", type=float, default=None,
                        help=f"Frame rate (default: one frame every {settings.frame_interval_ms}ms)")
    sample.add_argument("--seed", type=int, default=None, help="Seed for reproducible output")

    sub.add_parser("easings", help="List easing functions")
    sub.add_parser("presets", help="List keyframe presets")
    return parser


def run(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    if args.command == "sample":
        return cmd_sample(args)
    if args.command == "easings":
        return cmd_easings()
    return cmd_presets()


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
