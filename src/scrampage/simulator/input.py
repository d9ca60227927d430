"""
Input layer for the simulator.

Turns raw keyboard and pointer activity into the signals the frame
clock consumes: word changes, target updates and external acceleration.
Debounces run on the shared timer queue.
"""

import logging
import re
from typing import Optional

from ..config.settings import InputSettings, DEFAULT_WORD
from ..core.events import EventBus, word_changed_event, target_event, motion_event
from ..core.timers import TimerQueue

logger = logging.getLogger(__name__)

KEY_PATTERN = re.compile(r"^[\w\s]$")
WORD_PATTERN = re.compile(r"^[\w\s]+$")

EDITING_TIMER = "input:editing"
TARGET_TIMER = "input:target"


def is_valid_word(text: Optional[str]) -> bool:
    """Letters, digits and whitespace only, with at least one visible character."""
    return bool(text) and bool(WORD_PATTERN.match(text)) and bool(text.strip())


def initial_word(candidate: Optional[str], default: str = DEFAULT_WORD) -> str:
    """Pick the starting word, falling back to ``default`` if invalid."""
    if candidate is None:
        return default
    if not is_valid_word(candidate):
        logger.warning(f"Ignoring invalid initial word {candidate!r}, using {default!r}")
        return default
    return candidate


class InputController:
    """
    Keyboard editing, pointer targeting and simulated device tilt.

    Typing: the first valid key after an idle period starts a new word;
    every key extends it and re-arms the editing timeout.
    Pointer: each movement sets the target; the target is cleared once
    the pointer has been idle for the follow timeout.
    Tilt: held arrow keys produce a constant acceleration.
    """

    def __init__(
        self,
        event_bus: EventBus,
        timers: TimerQueue,
        settings: InputSettings | None = None,
    ) -> None:
        self.event_bus = event_bus
        self.timers = timers
        self.settings = settings or InputSettings()

        self._editing = False
        self._buffer = ""
        self._target: Optional[tuple[float, float]] = None
        self._tilt = {"left": False, "right": False, "up": False, "down": False}

    @property
    def editing(self) -> bool:
        return self._editing

    @property
    def buffer(self) -> str:
        return self._buffer

    @property
    def target(self) -> Optional[tuple[float, float]]:
        return self._target

    # Typing

    def key_typed(self, char: str) -> bool:
        """Handle a typed character.

        Returns:
            True if the character was accepted
        """
        if not char or not KEY_PATTERN.match(char):
            return False

        if not self._editing:
            self._editing = True
            self._buffer = ""
            logger.debug("Editing started")

        self._buffer += char
        self.event_bus.emit(word_changed_event(self._buffer))
        self.timers.arm(EDITING_TIMER, self.settings.editing_timeout_ms, self._end_editing)
        return True

    def _end_editing(self) -> None:
        self._editing = False
        logger.info(f"Editing finished: {self._buffer!r}")

    # Pointer

    def pointer_moved(self, x: float, y: float) -> None:
        """Follow the pointer until it has been idle for the follow timeout."""
        self._target = (float(x), float(y))
        self.event_bus.emit(target_event(self._target))
        self.timers.arm(TARGET_TIMER, self.settings.target_timeout_ms, self._clear_target)

    def _clear_target(self) -> None:
        self._target = None
        self.event_bus.emit(target_event(None))

    # Tilt

    def set_tilt(self, direction: str, pressed: bool) -> None:
        """Press or release one simulated tilt direction."""
        if direction not in self._tilt:
            raise ValueError(f"Unknown tilt direction: {direction}")
        if self._tilt[direction] == pressed:
            return
        self._tilt[direction] = pressed
        ax, ay = self.acceleration
        self.event_bus.emit(motion_event(ax, ay))

    @property
    def acceleration(self) -> tuple[float, float]:
        strength = self.settings.tilt_strength
        ax = (self._tilt["right"] - self._tilt["left"]) * strength
        ay = (self._tilt["down"] - self._tilt["up"]) * strength
        return (float(ax), float(ay))

    def reset(self) -> None:
        """Cancel debounces and release all input."""
        self.timers.cancel(EDITING_TIMER)
        self.timers.cancel(TARGET_TIMER)
        self._editing = False
        if self._target is not None:
            self._clear_target()
        for direction in self._tilt:
            self.set_tilt(direction, False)
