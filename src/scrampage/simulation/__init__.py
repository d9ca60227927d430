"""Simulation engine for SCRAMPAGE."""

from scrampage.simulation.word import WordStore, scramble
from scrampage.simulation.motion import MotionState, MotionIntegrator
from scrampage.simulation.color import HSL, ColorState, ColorOscillator
from scrampage.simulation.trail import TrailEntry, TrailBuffer, HuePatchQueue
from scrampage.simulation.context import ModeFlags, SimulationContext, create_context
from scrampage.simulation.scheduler import ScheduledMode, ModeScheduler
from scrampage.simulation.clock import FrameClock

__all__ = [
    "WordStore",
    "scramble",
    "MotionState",
    "MotionIntegrator",
    "HSL",
    "ColorState",
    "ColorOscillator",
    "TrailEntry",
    "TrailBuffer",
    "HuePatchQueue",
    "ModeFlags",
    "SimulationContext",
    "create_context",
    "ScheduledMode",
    "ModeScheduler",
    "FrameClock",
]
