"""
Conftest: shared fixtures for SCRAMPAGE tests.

1. Headless SDL so pygame-backed tests never open a window
2. Seeded settings/contexts so simulation runs are reproducible
3. Deterministic monospace measurement (no font files needed)
"""

import os
import random

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

from scrampage.config.settings import MotionSettings, Settings
from scrampage.core.timers import TimerQueue
from scrampage.graphics.metrics import MonospaceMeasurer
from scrampage.simulation.clock import FrameClock
from scrampage.simulation.context import create_context


SEED = 1234


@pytest.fixture
def rng():
    """Seeded random source."""
    return random.Random(SEED)


@pytest.fixture
def measurer():
    """Courier-like metrics at size 100: 60px per character, 100px line."""
    return MonospaceMeasurer(font_size=100)


@pytest.fixture
def settings(tmp_path):
    """Seeded settings with the intro disabled."""
    return Settings(
        seed=SEED,
        base_path=tmp_path,
        motion=MotionSettings(intro_frames=0),
    )


@pytest.fixture
def make_context(settings, measurer):
    """Factory for a fresh context with a word already set."""
    def _make(word="HI", bounds=(800, 600), seed=SEED):
        ctx = create_context(settings, measurer, bounds=bounds, rng=random.Random(seed))
        ctx.word.set_word(word)
        return ctx
    return _make


@pytest.fixture
def timers():
    return TimerQueue()


@pytest.fixture
def make_clock(settings, measurer, timers):
    """Factory for a started frame clock on an 800x600 canvas."""
    def _make(word="HI", bounds=(800, 600), settings_override=None):
        cfg = settings_override or settings
        ctx = create_context(cfg, measurer, bounds=bounds, rng=random.Random(SEED))
        clock = FrameClock(ctx, cfg, timers)
        clock.start(word)
        return clock
    return _make
