"""Trail buffer: a variable-length, fading history of rendered frames."""

from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Deque, Iterator, List, Optional, Tuple
import logging
import random

from scrampage.simulation.color import HSL

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class TrailEntry:
    """Snapshot of one rendered frame.

    Attributes:
        color: Color at capture time
        position: Top-left corner of the word
        text: Text that was displayed
        captured_length: Trail length when captured; normalizes the fade
        patch_count: How many times the hue was rewritten in place
    """

    color: HSL
    position: Tuple[float, float]
    text: str
    captured_length: int
    patch_count: int = field(default=0)

    def patch_hue(self, hue: float) -> None:
        """Rewrite the hue in place. The only mutation an entry allows."""
        self.color = self.color.with_hue(hue)
        self.patch_count += 1


class TrailBuffer:
    """Ordered trail history, oldest first.

    ``current_length`` glides one step per frame toward the requested
    length; ``trim`` evicts at most ``max_evictions`` entries per call so a
    sudden shrink is absorbed over several frames.
    """

    def __init__(self, initial_length: int = 50, max_evictions: int = 2):
        self._entries: Deque[TrailEntry] = deque()
        self.current_length = initial_length
        self.max_evictions = max_evictions

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[TrailEntry]:
        return iter(self._entries)

    def __contains__(self, entry: object) -> bool:
        return any(e is entry for e in self._entries)

    @property
    def entries(self) -> List[TrailEntry]:
        """Copy of the entries, oldest first."""
        return list(self._entries)

    @property
    def newest(self) -> Optional[TrailEntry]:
        return self._entries[-1] if self._entries else None

    def capture(self, color: HSL, position: Tuple[float, float], text: str) -> TrailEntry:
        """Create an entry stamped with the current length and push it."""
        entry = TrailEntry(
            color=color,
            position=position,
            text=text,
            captured_length=self.current_length,
        )
        self.push(entry)
        return entry

    def push(self, entry: TrailEntry) -> None:
        """Append an entry as the newest."""
        self._entries.append(entry)

    def step_length(self, target: int) -> int:
        """Move ``current_length`` one step toward ``target``."""
        if target > self.current_length:
            self.current_length += 1
        elif target < self.current_length:
            self.current_length -= 1
        return self.current_length

    def trim(self) -> int:
        """Evict the oldest entries beyond ``current_length``.

        Returns:
            Number of evicted entries (never more than ``max_evictions``)
        """
        evicted = 0
        while len(self._entries) > self.current_length and evicted < self.max_evictions:
            self._entries.popleft()
            evicted += 1
        return evicted

    def iter_faded(self) -> Iterator[Tuple[TrailEntry, float]]:
        """Yield (entry, lightness multiplier) oldest to newest.

        The multiplier is ``index / captured_length`` clamped to [0, 1],
        so older entries fade toward black.
        """
        for index, entry in enumerate(self._entries):
            scale = index / entry.captured_length if entry.captured_length > 0 else 1.0
            yield entry, max(0.0, min(1.0, scale))

    def clear(self) -> None:
        self._entries.clear()


class HuePatchQueue:
    """Pending in-place hue rewrites of existing trail entries.

    Filled once when random-color mode starts, drained a few entries per
    frame. Entries evicted before their turn are skipped. ``on_complete``
    fires once, when the queue has drained.
    """

    def __init__(self):
        self._pending: Deque[TrailEntry] = deque()
        self._on_complete: Optional[Callable[[], None]] = None
        self.patched = 0
        self.skipped = 0

    @property
    def active(self) -> bool:
        return self._on_complete is not None or bool(self._pending)

    @property
    def remaining(self) -> int:
        return len(self._pending)

    def begin(self, entries: List[TrailEntry], on_complete: Optional[Callable[[], None]] = None) -> None:
        """Queue ``entries`` for patching.

        An empty list completes immediately.
        """
        self._pending = deque(entries)
        self._on_complete = on_complete
        self.patched = 0
        self.skipped = 0
        logger.debug(f"Hue patch started for {len(entries)} entries")
        if not self._pending:
            self._finish()

    def consume(self, buffer: TrailBuffer, rng: random.Random, limit: int) -> int:
        """Patch up to ``limit`` queued entries that are still in ``buffer``.

        Returns:
            Number of entries patched this call
        """
        if not self.active:
            return 0

        live = {id(entry) for entry in buffer}
        patched = 0
        while self._pending and patched < limit:
            entry = self._pending.popleft()
            if id(entry) not in live:
                self.skipped += 1
                continue
            entry.patch_hue(rng.random() * 360)
            patched += 1

        self.patched += patched
        if not self._pending:
            self._finish()
        return patched

    def cancel(self) -> None:
        """Drop pending patches without firing the completion callback."""
        self._pending.clear()
        self._on_complete = None

    def _finish(self) -> None:
        callback = self._on_complete
        self._on_complete = None
        logger.debug(f"Hue patch complete: {self.patched} patched, {self.skipped} skipped")
        if callback is not None:
            callback()
