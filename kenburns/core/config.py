"""
Motion Engine Configuration

Settings class using pydantic-settings for environment variable loading.
Defines the defaults used by transition generators, keyframe motion
and the sampling CLI.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MotionSettings(BaseSettings):
    """
    Motion engine settings loaded from environment variables.

    All settings can be overridden via environment variables carrying the
    KENBURNS_ prefix. For example, transition_duration_ms can be set via
    KENBURNS_TRANSITION_DURATION_MS.
    """

    model_config = SettingsConfigDict(
        env_prefix="KENBURNS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Transitions
    transition_duration_ms: int = Field(
        default=10000,
        gt=0,
        description="Duration of each generated transition in milliseconds",
    )
    min_rect_factor: float = Field(
        default=0.75,
        gt=0.0,
        le=1.0,
        description="Smallest crop size, as a fraction of the maximal viewport-fit rect",
    )
    full_to_random_min_rect_factor: float = Field(
        default=0.95,
        gt=0.0,
        le=1.0,
        description="Smallest destination size for full-to-random transitions",
    )
    corner_scale: float = Field(
        default=0.5,
        gt=0.0,
        le=1.0,
        description="Size of each corner rect for the four-corner generator",
    )
    aspect_ratio_tolerance: float = Field(
        default=0.01,
        ge=1e-6,
        description=(
            "Maximum aspect ratio difference for two rects to count as the same shape; "
            "used by transitions, generators and the animator alike"
        ),
    )

    # Keyframe animation
    animation_duration_ms: int = Field(
        default=5000,
        gt=0,
        description="Duration of one pass over a keyframe track in milliseconds",
    )
    playback_mode: str = Field(
        default="reverse_and_loop",
        description="Playback mode (loop, reverse_and_loop, play_once, play_once_and_stop)",
    )

    # Host
    frame_interval_ms: int = Field(
        default=1000 // 60,
        gt=0,
        description="Frame interval used by the sampling CLI (default: 60 fps)",
    )
    log_level: str = Field(default="INFO", description="Logging level for the CLI")


@lru_cache()
def get_settings() -> MotionSettings:
    """
    Get cached motion settings instance.

    Uses lru_cache to ensure settings are only loaded once per process.

    Returns:
        MotionSettings: Motion engine settings instance

    Example:
        >>> settings = get_settings()
        >>> print(settings.transition_duration_ms)
        10000
    """
    return MotionSettings()
