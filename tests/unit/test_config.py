"""
Unit tests for kenburns.core.config module.
"""

import pytest
from pydantic import ValidationError

from kenburns.core.config import MotionSettings, get_settings


class TestMotionSettings:
    """Tests for MotionSettings."""

    def test_defaults(self):
        """Test built-in defaults."""
        settings = MotionSettings()
        assert settings.transition_duration_ms == 10000
        assert settings.min_rect_factor == 0.75
        assert settings.full_to_random_min_rect_factor == 0.95
        assert settings.corner_scale == 0.5
        assert settings.animation_duration_ms == 5000
        assert settings.playback_mode == "reverse_and_loop"

    def test_environment_override(self, monkeypatch):
        """Test KENBURNS_ prefixed variables override defaults."""
        monkeypatch.setenv("KENBURNS_MIN_RECT_FACTOR", "0.5")
        monkeypatch.setenv("KENBURNS_PLAYBACK_MODE", "loop")
        settings = MotionSettings()
        assert settings.min_rect_factor == 0.5
        assert settings.playback_mode == "loop"

    def test_invalid_value(self, monkeypatch):
        """Test out-of-range values are rejected at load time."""
        monkeypatch.setenv("KENBURNS_TRANSITION_DURATION_MS", "0")
        with pytest.raises(ValidationError):
            MotionSettings()

    @pytest.mark.parametrize("value", ["0", "-0.01", "1e-9"])
    def test_aspect_ratio_tolerance_floor(self, monkeypatch, value):
        """Test tolerances too tight to absorb float noise are rejected."""
        monkeypatch.setenv("KENBURNS_ASPECT_RATIO_TOLERANCE", value)
        with pytest.raises(ValidationError):
            MotionSettings()

    def test_unrelated_variables_ignored(self, monkeypatch):
        """Test unknown prefixed variables do not fail loading."""
        monkeypatch.setenv("KENBURNS_SOMETHING_ELSE", "1")
        MotionSettings()


class TestGetSettings:
    """Tests for the cached settings accessor."""

    def test_cached(self):
        """Test repeated calls return the same instance."""
        assert get_settings() is get_settings()

    def test_cache_clear_reloads(self, monkeypatch):
        """Test clearing the cache picks up new environment values."""
        get_settings()
        monkeypatch.setenv("KENBURNS_CORNER_SCALE", "0.25")
        get_settings.cache_clear()
        assert get_settings().corner_scale == 0.25
