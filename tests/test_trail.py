"""
SCRAMPAGE: Trail buffer and hue patch queue tests.

Run with: pytest tests/test_trail.py -v
"""

import random

import pytest

from scrampage.simulation.color import HSL
from scrampage.simulation.trail import HuePatchQueue, TrailBuffer


def fill(buffer, count, hue=10.0):
    for i in range(count):
        buffer.capture(HSL(hue, 100, 50), (float(i), 0.0), "HI")


class TestLength:

    def test_steps_one_toward_target(self):
        buffer = TrailBuffer(initial_length=10)
        assert buffer.step_length(12) == 11
        assert buffer.step_length(12) == 12
        assert buffer.step_length(12) == 12
        assert buffer.step_length(5) == 11

    def test_grow_from_5_to_80_takes_75_frames(self):
        buffer = TrailBuffer(initial_length=5)
        for _ in range(74):
            buffer.step_length(80)
        assert buffer.current_length == 79
        buffer.step_length(80)
        assert buffer.current_length == 80

    def test_capture_stamps_current_length(self):
        buffer = TrailBuffer(initial_length=7)
        entry = buffer.capture(HSL(0, 0, 50), (1.0, 2.0), "X")
        assert entry.captured_length == 7
        assert buffer.newest is entry


class TestTrim:

    def test_evicts_at_most_two_per_call(self):
        buffer = TrailBuffer(initial_length=50)
        fill(buffer, 50)
        buffer.current_length = 10
        assert buffer.trim() == 2
        assert len(buffer) == 48

    def test_evicts_oldest_first(self):
        buffer = TrailBuffer(initial_length=3)
        fill(buffer, 4)
        buffer.trim()
        assert [e.position[0] for e in buffer] == [1.0, 2.0, 3.0]

    def test_size_converges_to_length(self):
        buffer = TrailBuffer(initial_length=50)
        fill(buffer, 50)
        for _ in range(200):
            buffer.capture(HSL(0, 0, 50), (0.0, 0.0), "HI")
            buffer.step_length(5)
            buffer.trim()
        assert buffer.current_length == 5
        assert len(buffer) == 5

    def test_no_eviction_when_within_length(self):
        buffer = TrailBuffer(initial_length=10)
        fill(buffer, 5)
        assert buffer.trim() == 0


class TestFade:

    def test_oldest_fades_to_black_newest_brightest(self):
        buffer = TrailBuffer(initial_length=4)
        fill(buffer, 4)
        scales = [scale for _, scale in buffer.iter_faded()]
        assert scales == [0.0, 0.25, 0.5, 0.75]

    def test_multiplier_is_clamped(self):
        buffer = TrailBuffer(initial_length=2)
        fill(buffer, 5)
        scales = [scale for _, scale in buffer.iter_faded()]
        assert max(scales) == 1.0
        assert all(0.0 <= s <= 1.0 for s in scales)


class TestHuePatchQueue:

    def test_patches_every_entry_exactly_once(self):
        buffer = TrailBuffer(initial_length=50)
        fill(buffer, 50)
        done = []
        queue = HuePatchQueue()
        queue.begin(buffer.entries, on_complete=lambda: done.append(True))

        rng = random.Random(1)
        frames = 0
        while queue.active:
            queue.consume(buffer, rng, limit=5)
            frames += 1

        assert frames == 10
        assert done == [True]
        assert all(entry.patch_count == 1 for entry in buffer)

    def test_evicted_entries_are_skipped(self):
        buffer = TrailBuffer(initial_length=10)
        fill(buffer, 10)
        queue = HuePatchQueue()
        queue.begin(buffer.entries)
        buffer.current_length = 8
        buffer.trim()

        queue.consume(buffer, random.Random(1), limit=100)
        assert queue.skipped == 2
        assert queue.patched == 8
        assert not queue.active

    def test_empty_trail_completes_immediately(self):
        done = []
        queue = HuePatchQueue()
        queue.begin([], on_complete=lambda: done.append(True))
        assert done == [True]
        assert not queue.active

    def test_cancel_does_not_complete(self):
        buffer = TrailBuffer(initial_length=10)
        fill(buffer, 10)
        done = []
        queue = HuePatchQueue()
        queue.begin(buffer.entries, on_complete=lambda: done.append(True))
        queue.cancel()
        assert queue.consume(buffer, random.Random(1), limit=5) == 0
        assert done == []

    def test_patch_keeps_saturation_and_lightness(self):
        buffer = TrailBuffer(initial_length=1)
        entry = buffer.capture(HSL(10, 80, 40), (0.0, 0.0), "A")
        queue = HuePatchQueue()
        queue.begin(buffer.entries)
        queue.consume(buffer, random.Random(3), limit=1)
        assert entry.color.saturation == 80
        assert entry.color.lightness == 40
        assert entry.patch_count == 1
