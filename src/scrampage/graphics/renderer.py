"""Executes frame draw commands on a pygame surface."""

from typing import Dict
import logging

import numpy as np
import pygame

from scrampage.graphics.color import Color
from scrampage.graphics.commands import ClearCommand, Frame, TextCommand

logger = logging.getLogger(__name__)


class Renderer:
    """Draws frames produced by the frame clock.

    Text is rasterized once per string in white and tinted per command,
    which keeps a long trail cheap to draw.
    """

    def __init__(self, font: pygame.font.Font, cache_size: int = 256):
        self._font = font
        self._cache: Dict[str, pygame.Surface] = {}
        self._cache_size = cache_size
        self.commands_drawn = 0

    def set_font(self, font: pygame.font.Font) -> None:
        self._font = font
        self._cache.clear()

    def draw(self, frame: Frame, surface: pygame.Surface) -> int:
        """Execute every command of ``frame`` in order.

        Returns:
            Number of text commands drawn
        """
        drawn = 0
        for command in frame.commands:
            if isinstance(command, ClearCommand):
                self.fade(surface, command.alpha)
            elif isinstance(command, TextCommand):
                self.draw_text(surface, command.text, command.position, command.fill_color)
                drawn += 1
        self.commands_drawn = drawn
        return drawn

    def fade(self, surface: pygame.Surface, alpha: float) -> None:
        """Darken the surface toward black by ``alpha`` (1.0 clears)."""
        if alpha >= 1.0:
            surface.fill((0, 0, 0))
            return
        if alpha <= 0.0:
            return

        pixels = pygame.surfarray.pixels3d(surface)
        pixels[...] = (pixels.astype(np.float32) * (1.0 - alpha)).astype(np.uint8)
        # Release the surface lock
        del pixels

    def draw_text(
        self,
        surface: pygame.Surface,
        text: str,
        position: tuple[float, float],
        color: Color,
    ) -> None:
        if not text:
            return
        glyphs = self._rasterize(text).copy()
        glyphs.fill((*color, 255), special_flags=pygame.BLEND_RGBA_MULT)
        surface.blit(glyphs, (int(position[0]), int(position[1])))

    def _rasterize(self, text: str) -> pygame.Surface:
        cached = self._cache.get(text)
        if cached is not None:
            return cached

        if len(self._cache) >= self._cache_size:
            self._cache.clear()

        rendered = self._font.render(text, True, (255, 255, 255))
        if pygame.display.get_surface() is not None:
            # Match the display format for faster blits
            rendered = rendered.convert_alpha()
        self._cache[text] = rendered
        return rendered
