"""Word store: the animated text and its scrambled variant."""

import logging
import random
from typing import Optional

from scrampage.graphics.metrics import TextMeasurer

logger = logging.getLogger(__name__)


def scramble(text: str, rng: random.Random) -> str:
    """Return a uniformly random permutation of ``text``'s characters."""
    return "".join(rng.sample(text, len(text)))


class WordStore:
    """Owns the word, its scrambled variant and the measured text extent.

    ``displayed`` is the only accessor the renderer needs; whether the
    scrambled variant is showing is decided here and nowhere else.
    """

    def __init__(self, measurer: TextMeasurer, rng: Optional[random.Random] = None):
        self._measurer = measurer
        self._rng = rng or random.Random()
        self._text = ""
        self._scrambled = ""
        self._scramble_active = False
        self.text_width = 0.0
        self.text_height = 0.0
        self.scramble_count = 0

    @property
    def text(self) -> str:
        return self._text

    @property
    def scrambled_text(self) -> str:
        return self._scrambled

    @property
    def scramble_active(self) -> bool:
        return self._scramble_active

    @property
    def displayed(self) -> str:
        """The text that is currently rendered."""
        return self._scrambled if self._scramble_active else self._text

    def set_word(self, text: str) -> bool:
        """Replace the word.

        Empty or unchanged text is ignored.

        Returns:
            True if the word changed
        """
        if not text or text == self._text:
            return False

        self._text = text
        self._rescramble()
        self._measure()
        logger.info(f"Word set: {text!r} ({self.text_width:.0f}x{self.text_height:.0f})")
        return True

    def apply_scramble(self) -> None:
        """Show the scrambled variant."""
        self._scramble_active = True

    def restore_scramble(self) -> None:
        """Show the original text and prepare a fresh scramble for next time."""
        self._scramble_active = False
        self._rescramble()

    def remeasure(self, measurer: Optional[TextMeasurer] = None) -> None:
        """Measure again, optionally with a new backend (e.g. after font load)."""
        if measurer is not None:
            self._measurer = measurer
        if self._text:
            self._measure()

    def _rescramble(self) -> None:
        self._scrambled = scramble(self._text, self._rng)
        self.scramble_count += 1

    def _measure(self) -> None:
        width, height = self._measurer.measure(self._text)
        if width < 0 or height < 0:
            raise ValueError(f"Negative text measurement for {self._text!r}: {width}x{height}")
        self.text_width = width
        self.text_height = height
