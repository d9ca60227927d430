"""
Text measurement backends.

The simulation only needs the rendered extent of the word; the pygame
font backend measures real glyphs, the monospace backend is a
deterministic stand-in for headless runs and tests.
"""

from abc import ABC, abstractmethod
from typing import Tuple
import logging

import pygame

logger = logging.getLogger(__name__)


class TextMeasurer(ABC):
    """Abstract base class for text measurement."""

    @property
    @abstractmethod
    def line_height(self) -> int:
        """Height of one rendered line in pixels."""
        ...

    @abstractmethod
    def text_width(self, text: str) -> float:
        """Width of ``text`` in pixels."""
        ...

    def measure(self, text: str) -> Tuple[float, float]:
        """Return (width, height) of ``text``."""
        return self.text_width(text), float(self.line_height)


class MonospaceMeasurer(TextMeasurer):
    """Fixed advance per character, like Courier at a given size."""

    def __init__(self, font_size: int = 100, advance_ratio: float = 0.6) -> None:
        self._font_size = font_size
        self._advance = font_size * advance_ratio

    @property
    def line_height(self) -> int:
        return self._font_size

    def text_width(self, text: str) -> float:
        return len(text) * self._advance


class FontMeasurer(TextMeasurer):
    """Measures text with a pygame font."""

    def __init__(self, font: pygame.font.Font) -> None:
        self._font = font

    @property
    def font(self) -> pygame.font.Font:
        return self._font

    @property
    def line_height(self) -> int:
        return self._font.get_height()

    def text_width(self, text: str) -> float:
        return float(self._font.size(text)[0])


def load_font(names: str, size: int) -> pygame.font.Font:
    """Load the first available system font from a comma-separated list.

    Falls back to pygame's bundled default font.
    """
    if not pygame.font.get_init():
        pygame.font.init()

    for name in (n.strip() for n in names.split(",")):
        if not name:
            continue
        path = pygame.font.match_font(name)
        if path:
            logger.info(f"Using font: {name} ({path})")
            return pygame.font.Font(path, size)

    logger.warning("No requested font found, using default")
    return pygame.font.Font(None, size)
