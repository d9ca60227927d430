"""Named, cancellable timers driven by a virtual millisecond clock."""

from typing import Callable, Dict, List, Optional
from dataclasses import dataclass, field
import itertools
import logging

logger = logging.getLogger(__name__)


@dataclass
class Timer:
    """A pending callback.

    Attributes:
        name: Unique timer name; arming the same name replaces the timer
        due_ms: Virtual clock time at which the callback fires
        callback: Function called when the timer fires
    """

    name: str
    due_ms: float
    callback: Callable[[], None]
    _seq: int = field(default=0, repr=False)
    _cancelled: bool = field(default=False, repr=False)

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class TimerQueue:
    """Single-threaded timer scheduler.

    Time only moves when ``advance`` is called, so the same queue serves
    the real run loop (advanced by the frame delta) and tests (advanced
    by hand). At most one timer per name is pending at any moment.
    """

    def __init__(self):
        self._timers: Dict[str, Timer] = {}
        self._now_ms = 0.0
        self._counter = itertools.count()

    @property
    def now_ms(self) -> float:
        """Current virtual time in milliseconds."""
        return self._now_ms

    def arm(self, name: str, delay_ms: float, callback: Callable[[], None]) -> Timer:
        """Schedule ``callback`` after ``delay_ms``.

        Any pending timer with the same name is cancelled first.

        Args:
            name: Timer name
            delay_ms: Delay from now in milliseconds (negative means now)
            callback: Function to call when the timer fires

        Returns:
            The armed Timer
        """
        self.cancel(name)
        timer = Timer(
            name=name,
            due_ms=self._now_ms + max(0.0, delay_ms),
            callback=callback,
            _seq=next(self._counter),
        )
        self._timers[name] = timer
        logger.debug(f"Timer armed: {name} in {delay_ms:.0f}ms")
        return timer

    def cancel(self, name: str) -> bool:
        """Cancel a pending timer.

        Returns:
            True if a timer was pending under that name
        """
        timer = self._timers.pop(name, None)
        if timer is None:
            return False
        timer._cancelled = True
        return True

    def cancel_prefix(self, prefix: str) -> int:
        """Cancel all timers whose name starts with ``prefix``."""
        names = [name for name in self._timers if name.startswith(prefix)]
        for name in names:
            self.cancel(name)
        return len(names)

    def is_pending(self, name: str) -> bool:
        return name in self._timers

    def remaining(self, name: str) -> Optional[float]:
        """Milliseconds until a timer fires, or None if not pending."""
        timer = self._timers.get(name)
        if timer is None:
            return None
        return max(0.0, timer.due_ms - self._now_ms)

    def advance(self, delta_ms: float) -> int:
        """Move the clock forward and fire every timer that became due.

        Timers fire in due order (ties in arming order). A callback may arm
        new timers; those fire in the same call if they are already due.

        Args:
            delta_ms: Time elapsed in milliseconds

        Returns:
            Number of callbacks fired
        """
        target = self._now_ms + max(0.0, delta_ms)
        fired = 0

        while True:
            due = self._next_due(target)
            if due is None:
                break

            # Callbacks observe the clock at their own due time
            self._now_ms = max(self._now_ms, due.due_ms)
            del self._timers[due.name]
            due.callback()
            fired += 1

        self._now_ms = target
        return fired

    def _next_due(self, limit_ms: float) -> Optional[Timer]:
        candidates: List[Timer] = [t for t in self._timers.values() if t.due_ms <= limit_ms]
        if not candidates:
            return None
        return min(candidates, key=lambda t: (t.due_ms, t._seq))

    @property
    def pending_count(self) -> int:
        return len(self._timers)

    def pending_names(self) -> List[str]:
        return sorted(self._timers)

    def clear(self) -> int:
        """Cancel every pending timer."""
        count = len(self._timers)
        for timer in self._timers.values():
            timer._cancelled = True
        self._timers.clear()
        return count
