"""
SCRAMPAGE: Frame clock tests (end-to-end simulation scenarios).

Run with: pytest tests/test_clock.py -v
"""

import random

import pytest

from scrampage.config.settings import MotionSettings, Settings
from scrampage.core.events import (
    EventBus,
    motion_event,
    resize_event,
    target_event,
    word_changed_event,
)
from scrampage.core.timers import TimerQueue
from scrampage.graphics.commands import ClearCommand, TextCommand
from scrampage.simulation.clock import FrameClock
from scrampage.simulation.context import create_context


def in_bounds(clock):
    ctx = clock.ctx
    width, height = ctx.bounds
    return (
        0 <= ctx.motion.x <= clock.motion.max_position(width, ctx.word.text_width)
        and 0 <= ctx.motion.y <= clock.motion.max_position(height, ctx.word.text_height)
    )


class TestScenarios:

    def test_hi_stays_in_bounds_for_1000_ticks(self, make_clock):
        clock = make_clock("HI", bounds=(800, 600))
        assert clock.ctx.motion.position == (340, 250)
        assert clock.ctx.motion.velocity == (0, 0)
        assert clock.ctx.target is None

        for _ in range(1000):
            clock.step()
            assert in_bounds(clock)

    def test_bounds_hold_with_scheduler_running(self, make_clock):
        clock = make_clock("SCRAMPAGE", bounds=(800, 600))
        for _ in range(3000):
            clock.timers.advance(1000 / 60)
            clock.step()
            assert in_bounds(clock)
            assert abs(clock.ctx.motion.vx) <= 10
            assert abs(clock.ctx.motion.vy) <= 10

    def test_trail_grows_5_to_80_in_75_frames(self, make_clock):
        clock = make_clock()
        ctx = clock.ctx
        ctx.trail.current_length = 5
        ctx.flags.target_trail_length = 80
        for _ in range(75):
            clock.step()
        assert ctx.trail.current_length == 80

    def test_same_word_twice_generates_no_scramble(self, make_clock):
        clock = make_clock("HI")
        assert clock.on_word_changed("CAT") is True
        count = clock.ctx.word.scramble_count
        assert clock.on_word_changed("CAT") is False
        assert clock.ctx.word.scramble_count == count

    def test_color_mode_catch_up_through_frames(self, make_clock):
        clock = make_clock()
        ctx = clock.ctx
        for _ in range(50):
            clock.step()
        assert len(ctx.trail) == 50

        clock.scheduler.activate("color_mode")
        frames = 0
        while ctx.hue_patches.active:
            clock.step()
            frames += 1

        assert frames <= 10
        assert all(entry.patch_count <= 1 for entry in ctx.trail)
        assert clock.scheduler.is_active("color_mode")
        assert 5000 <= clock.timers.remaining("mode:color_mode") <= 10000


class TestFrames:

    def test_clear_then_text_oldest_first(self, make_clock):
        clock = make_clock()
        for _ in range(3):
            frame = clock.step()
        assert isinstance(frame.commands[0], ClearCommand)
        assert all(isinstance(c, TextCommand) for c in frame.commands[1:])
        assert len(frame.text_commands) == 3
        assert frame.index == 2
        # Oldest entry is faded to black
        assert frame.text_commands[0].fill_color == (0, 0, 0)

    def test_text_follows_scramble(self, make_clock):
        clock = make_clock("SCRAMPAGE")
        clock.scheduler.activate("scramble")
        frame = clock.step()
        assert frame.text_commands[-1].text == clock.ctx.word.scrambled_text

    def test_random_color_override(self, make_clock):
        clock = make_clock()
        clock.ctx.flags.random_color = True
        for _ in range(100):
            clock.step()
            assert 25 <= clock.ctx.color.lightness <= 65


class TestIntro:

    @pytest.fixture
    def intro_clock(self, tmp_path, measurer):
        settings = Settings(seed=7, base_path=tmp_path, motion=MotionSettings(intro_frames=10))
        ctx = create_context(settings, measurer, bounds=(800, 600), rng=random.Random(7))
        clock = FrameClock(ctx, settings, TimerQueue())
        clock.start("HI")
        return clock

    def test_word_stays_centered(self, intro_clock):
        for _ in range(10):
            intro_clock.step()
            assert intro_clock.ctx.motion.position == (340, 250)
        assert intro_clock.in_intro

    def test_saturation_ramps_up(self, intro_clock):
        intro_clock.step()
        first = intro_clock.ctx.color.saturation
        for _ in range(8):
            intro_clock.step()
        assert first == 0
        assert 0 < intro_clock.ctx.color.saturation < 100

    def test_scheduler_starts_after_intro(self, intro_clock):
        assert intro_clock.timers.pending_count == 0
        for _ in range(11):
            intro_clock.step()
        assert not intro_clock.in_intro
        assert intro_clock.scheduler.running
        assert intro_clock.ctx.color.saturation == 100

    def test_resize_recenters_during_intro(self, intro_clock):
        intro_clock.on_resize(400, 300)
        assert intro_clock.ctx.motion.position == (140, 100)


class TestInputs:

    def test_word_change_keeps_position_valid(self, make_clock):
        clock = make_clock("HI")
        clock.step()
        clock.ctx.motion.x = 680
        clock.on_word_changed("SCRAMPAGE")
        assert in_bounds(clock)
        assert clock.ctx.motion.x == 260

    def test_resize_clamps(self, make_clock):
        clock = make_clock("HI")
        clock.step()
        clock.ctx.motion.x, clock.ctx.motion.y = 600, 450
        clock.on_resize(400, 300)
        assert clock.ctx.bounds == (400, 300)
        assert clock.ctx.motion.position == (280, 200)

    def test_bus_wiring(self, make_clock):
        clock = make_clock("HI")
        bus = EventBus()
        clock.attach(bus)

        bus.emit(word_changed_event("BUS"))
        bus.emit(target_event((10.0, 20.0)))
        bus.emit(motion_event(0.5, -0.5))
        bus.emit(resize_event(1024, 768))

        assert clock.ctx.word.text == "BUS"
        assert clock.ctx.target == (10.0, 20.0)
        assert clock.ctx.external_acceleration == (0.5, -0.5)
        assert clock.ctx.bounds == (1024, 768)

        bus.emit(target_event(None))
        assert clock.ctx.target is None

        clock.detach()
        bus.emit(word_changed_event("GONE"))
        assert clock.ctx.word.text == "BUS"
