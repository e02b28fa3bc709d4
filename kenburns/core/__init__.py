"""Core configuration for the Ken Burns motion engine."""

from .config import MotionSettings, get_settings

__all__ = ["MotionSettings", "get_settings"]
