"""
Root conftest for motion engine tests.

Sets up Python path to allow 'from kenburns...' imports from a source
checkout and provides shared geometry and RNG fixtures.
"""
import random
import sys
from pathlib import Path

import pytest

PROJECT_DIR = Path(__file__).parent.parent.resolve()

if str(PROJECT_DIR) not in sys.path:
    sys.path.insert(0, str(PROJECT_DIR))

from kenburns.core.config import get_settings
from kenburns.motion_engine.geometry import Rect


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Reload settings for every test so environment overrides don't leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def rng():
    """Seeded random source for reproducible generator output."""
    return random.Random(1234)


@pytest.fixture
def landscape_image():
    """A 4:3 photo."""
    return Rect.from_size(4000, 3000)


@pytest.fixture
def portrait_image():
    """A 2:3 photo."""
    return Rect.from_size(2000, 3000)


@pytest.fixture
def hd_viewport():
    """A 16:9 render target."""
    return Rect.from_size(1920, 1080)


@pytest.fixture
def square_viewport():
    return Rect.from_size(800, 800)
