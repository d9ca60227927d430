"""
Event bus for SCRAMPAGE.

The window and the input layer publish; the frame clock and the app
subscribe. Events are delivered synchronously with ``emit`` or deferred
to the next loop pass with ``queue_event``.
"""

from collections import defaultdict, deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Awaitable, Callable, Deque, Dict, List, Optional, Tuple
import asyncio
import inspect
import logging
import time

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Event kinds understood by the simulator."""
    # Input
    WORD_CHANGED = auto()
    TARGET_UPDATE = auto()
    MOTION = auto()

    # Canvas
    RESIZE = auto()

    # Mode scheduler
    MODE_ACTIVATED = auto()
    MODE_DEACTIVATED = auto()

    # Loop
    TICK = auto()
    SHUTDOWN = auto()


@dataclass
class Event:
    """
    A published event.

    Attributes:
        type: EventType or a custom string key
        data: Payload, keys depend on the type
        source: Publisher name
        timestamp: Monotonic creation time in seconds
    """
    type: EventType | str
    data: Dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.monotonic)


Handler = Callable[[Event], None] | Callable[[Event], Awaitable[None]]


class EventBus:
    """
    Publish/subscribe hub.

    A failing handler is logged and skipped; the remaining handlers still
    run. Coroutine handlers only run for queued events.
    """

    def __init__(self, history_limit: int = 100) -> None:
        self._subscribers: Dict[EventType | str, List[Handler]] = defaultdict(list)
        self._wildcard: List[Handler] = []
        self._pending: Deque[Event] = deque()
        self._history: Deque[Event] = deque(maxlen=history_limit)

    def subscribe(self, event_type: EventType | str, handler: Handler) -> Callable[[], None]:
        """
        Register ``handler`` for one event type.

        Returns:
            Function that removes the subscription
        """
        self._subscribers[event_type].append(handler)
        logger.debug(f"Subscribed {getattr(handler, '__qualname__', handler)} to {event_type}")
        return lambda: self._remove(self._subscribers[event_type], handler)

    def subscribe_all(self, handler: Handler) -> Callable[[], None]:
        """Register ``handler`` for every event type."""
        self._wildcard.append(handler)
        return lambda: self._remove(self._wildcard, handler)

    @staticmethod
    def _remove(handlers: List[Handler], handler: Handler) -> None:
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: Event) -> None:
        """Deliver ``event`` now to every plain (non-coroutine) handler."""
        self._record(event)
        for handler in self._targets(event):
            if not inspect.iscoroutinefunction(handler):
                self._call(handler, event)

    def queue_event(self, event: Event) -> None:
        """Defer ``event`` until the next ``process_queue``."""
        self._pending.append(event)

    async def process_queue(self) -> None:
        """Deliver all deferred events, awaiting coroutine handlers."""
        while self._pending:
            event = self._pending.popleft()
            self._record(event)

            coroutines = []
            for handler in self._targets(event):
                if inspect.iscoroutinefunction(handler):
                    coroutines.append(handler(event))
                else:
                    self._call(handler, event)

            if coroutines:
                for result in await asyncio.gather(*coroutines, return_exceptions=True):
                    if isinstance(result, Exception):
                        logger.error(f"Async handler failed for {event.type}: {result}")

    def _targets(self, event: Event) -> List[Handler]:
        return list(self._subscribers.get(event.type, ())) + list(self._wildcard)

    def _call(self, handler: Handler, event: Event) -> None:
        try:
            handler(event)
        except Exception as e:
            logger.error(f"Handler failed for {event.type}: {e}")

    def _record(self, event: Event) -> None:
        # Ticks arrive every frame and would flush everything else
        if event.type != EventType.TICK:
            self._history.append(event)

    def get_history(self, event_type: Optional[EventType | str] = None, limit: int = 10) -> List[Event]:
        """Most recent recorded events, oldest first."""
        events = [e for e in self._history if event_type is None or e.type == event_type]
        return events[-limit:]

    def clear_history(self) -> None:
        self._history.clear()


# Event factories

def word_changed_event(text: str, source: str = "keyboard") -> Event:
    return Event(EventType.WORD_CHANGED, data={"text": text}, source=source)


def target_event(point: Optional[Tuple[float, float]], source: str = "pointer") -> Event:
    """A point of None clears the target."""
    return Event(EventType.TARGET_UPDATE, data={"point": point}, source=source)


def motion_event(ax: float, ay: float, source: str = "tilt") -> Event:
    """External acceleration, per axis."""
    return Event(EventType.MOTION, data={"acceleration": (ax, ay)}, source=source)


def resize_event(width: int, height: int, source: str = "window") -> Event:
    return Event(EventType.RESIZE, data={"width": width, "height": height}, source=source)


def mode_event(name: str, active: bool, source: str = "scheduler") -> Event:
    event_type = EventType.MODE_ACTIVATED if active else EventType.MODE_DEACTIVATED
    return Event(event_type, data={"mode": name}, source=source)


def tick_event(delta: float, frame: int) -> Event:
    """Per-frame tick; ``delta`` is the previous frame's duration in seconds."""
    return Event(EventType.TICK, data={"delta": delta, "frame": frame})
