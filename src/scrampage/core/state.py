"""
State machine for scheduled behavior modes.

Every scheduled mode alternates between two phases:
    WAITING: Idle, a timer is pending for the next activation
    ACTIVE: The mode's effect is applied to the simulation
"""

from enum import Enum, auto
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class ModePhase(Enum):
    """Scheduled mode phases."""
    WAITING = auto()
    ACTIVE = auto()


PhaseListener = Callable[[str, ModePhase, ModePhase], None]


class PhaseMachine:
    """
    Manages the phase of a single scheduled mode.

    Only WAITING -> ACTIVE and ACTIVE -> WAITING are valid; a repeated
    transition into the current phase is rejected so that effects are
    never applied twice.
    """

    VALID_TRANSITIONS: list[tuple[ModePhase, ModePhase]] = [
        (ModePhase.WAITING, ModePhase.ACTIVE),
        (ModePhase.ACTIVE, ModePhase.WAITING),
    ]

    def __init__(self, name: str, initial_phase: ModePhase = ModePhase.WAITING) -> None:
        self.name = name
        self._phase = initial_phase
        self._transition_count = 0
        self._listeners: list[PhaseListener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)

    @property
    def phase(self) -> ModePhase:
        """Get current phase."""
        return self._phase

    @property
    def is_active(self) -> bool:
        return self._phase == ModePhase.ACTIVE

    @property
    def transition_count(self) -> int:
        """Number of successful transitions since creation."""
        return self._transition_count

    def can_transition(self, to_phase: ModePhase) -> bool:
        """Check if transition to given phase is valid."""
        return (self._phase, to_phase) in self._valid_transitions

    def transition(self, to_phase: ModePhase) -> bool:
        """
        Attempt to transition to a new phase.

        Args:
            to_phase: Target phase

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_phase):
            logger.warning(
                f"Invalid transition for {self.name}: {self._phase.name} -> {to_phase.name}"
            )
            return False

        old_phase = self._phase
        self._phase = to_phase
        self._transition_count += 1

        logger.debug(f"Mode {self.name}: {old_phase.name} -> {to_phase.name}")

        # Notify listeners
        for listener in self._listeners:
            try:
                listener(self.name, old_phase, to_phase)
            except Exception as e:
                logger.error(f"Error in phase listener: {e}")

        return True

    def add_listener(self, callback: PhaseListener) -> None:
        """Add a phase change listener."""
        self._listeners.append(callback)

    def remove_listener(self, callback: PhaseListener) -> None:
        """Remove a phase change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def reset(self) -> None:
        """Force the machine back to WAITING without notifying listeners."""
        self._phase = ModePhase.WAITING
