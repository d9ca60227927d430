"""Core framework components for SCRAMPAGE."""

from .state import ModePhase, PhaseMachine
from .events import EventBus, Event, EventType
from .timers import Timer, TimerQueue

__all__ = ["ModePhase", "PhaseMachine", "EventBus", "Event", "EventType", "Timer", "TimerQueue"]
