"""Shared simulation state passed by reference to every component."""

from dataclasses import dataclass, field
from typing import Optional, Tuple
import random

from scrampage.config.settings import Settings
from scrampage.graphics.metrics import TextMeasurer
from scrampage.simulation.color import ColorOscillator, ColorState
from scrampage.simulation.motion import MotionState
from scrampage.simulation.trail import HuePatchQueue, TrailBuffer
from scrampage.simulation.word import WordStore

Point = Tuple[float, float]


@dataclass
class ModeFlags:
    """Flags written by the mode scheduler and read by the frame clock.

    Attributes:
        wander: Random per-axis jitter; False means smooth acceleration
        random_color: Random-color override is active
        target_trail_length: Length the trail glides toward
    """

    wander: bool = True
    random_color: bool = False
    target_trail_length: int = 50


@dataclass
class SimulationContext:
    """All mutable simulation state.

    Only the frame clock and the mode scheduler's callbacks write to it.
    """

    word: WordStore
    motion: MotionState
    color: ColorState
    trail: TrailBuffer
    flags: ModeFlags
    rng: random.Random
    bounds: Tuple[int, int] = (800, 600)
    target: Optional[Point] = None
    external_acceleration: Point = (0.0, 0.0)
    hue_patches: HuePatchQueue = field(default_factory=HuePatchQueue)
    frame: int = 0


def create_context(
    settings: Settings,
    measurer: TextMeasurer,
    bounds: Tuple[int, int] | None = None,
    rng: random.Random | None = None,
) -> SimulationContext:
    """Build a fresh context from settings.

    The word is not set here; the frame clock sets it so it can center.
    """
    rng = rng or random.Random(settings.seed)
    trail_cfg = settings.trail
    initial_length = trail_cfg.clamp(trail_cfg.initial_length)

    return SimulationContext(
        word=WordStore(measurer, rng),
        motion=MotionState(),
        color=ColorOscillator(settings.color).initial_state(rng),
        trail=TrailBuffer(initial_length, trail_cfg.max_evictions_per_frame),
        flags=ModeFlags(target_trail_length=initial_length),
        rng=rng,
        bounds=bounds or (settings.window.width, settings.window.height),
    )
