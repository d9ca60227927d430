"""
Desktop canvas for SCRAMPAGE.

Owns the pygame display, forwards raw input to the input layer, and
publishes one TICK per displayed frame. Whatever subscribes to TICK
draws onto ``surface`` before the frame is flipped.
"""

import asyncio
import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

import pygame

from ..config.settings import WindowSettings
from ..core.events import Event, EventBus, EventType, resize_event, tick_event
from .input import InputController

logger = logging.getLogger(__name__)

TILT_KEYS: Dict[int, str] = {
    pygame.K_LEFT: "left",
    pygame.K_RIGHT: "right",
    pygame.K_UP: "up",
    pygame.K_DOWN: "down",
}

DEBUG_TEXT_COLOR = (200, 200, 220)


class SimulatorWindow:
    """
    Resizable window showing the animated word.

    Controls:
        Letters, digits, SPACE: type a new word
        Mouse: the word follows the pointer
        Arrow keys: simulated device tilt
        F1: debug overlay
        F2: screenshot
        ESC: quit
    """

    def __init__(
        self,
        config: Optional[WindowSettings] = None,
        event_bus: Optional[EventBus] = None,
        input_controller: Optional[InputController] = None,
        screenshot_dir: Optional[Path] = None,
    ) -> None:
        self.config = config or WindowSettings()
        self.event_bus = event_bus or EventBus()
        self.input = input_controller
        self.screenshot_dir = screenshot_dir or Path.cwd() / "screenshots"

        self._display: Optional[pygame.Surface] = None
        self._fps_clock: Optional[pygame.time.Clock] = None
        self._overlay_font: Optional[pygame.font.Font] = None
        self._overlay_source: Optional[Callable[[], List[str]]] = None
        self._show_overlay = False
        self._alive = False
        self.frames = 0

        self._hotkeys: Dict[int, Callable[[], None]] = {
            pygame.K_ESCAPE: self.stop,
            pygame.K_F1: self._toggle_overlay,
            pygame.K_F2: self.save_screenshot,
        }
        self._dispatch: Dict[int, Callable[[pygame.event.Event], None]] = {
            pygame.QUIT: lambda e: self.stop(),
            pygame.KEYDOWN: self._on_key_down,
            pygame.KEYUP: self._on_key_up,
            pygame.MOUSEMOTION: self._on_mouse_motion,
            pygame.VIDEORESIZE: lambda e: self._apply_size(e.w, e.h),
        }

        self.event_bus.subscribe(EventType.SHUTDOWN, self._on_shutdown)

    @property
    def surface(self) -> Optional[pygame.Surface]:
        return self._display

    @property
    def size(self) -> Tuple[int, int]:
        if self._display is None:
            return (self.config.width, self.config.height)
        return self._display.get_size()

    @property
    def running(self) -> bool:
        return self._alive

    def set_debug_source(self, source: Callable[[], List[str]]) -> None:
        """Supply extra lines for the F1 overlay."""
        self._overlay_source = source

    # Setup

    def _open(self) -> None:
        pygame.init()
        pygame.display.set_caption(self.config.title)

        if self.config.fullscreen:
            self._display = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
        else:
            self._display = pygame.display.set_mode(
                (self.config.width, self.config.height), pygame.RESIZABLE
            )
        self._display.fill((0, 0, 0))
        self._fps_clock = pygame.time.Clock()
        self._overlay_font = pygame.font.Font(None, 20)

        width, height = self._display.get_size()
        self.event_bus.emit(resize_event(width, height))
        logger.info(f"Window opened: {width}x{height} @ {self.config.fps} fps")

    def _close(self) -> None:
        pygame.quit()
        self._display = None
        logger.info(f"Window closed after {self.frames} frames")

    # Input

    def _pump(self) -> None:
        for event in pygame.event.get():
            handler = self._dispatch.get(event.type)
            if handler is not None:
                handler(event)

    def _on_key_down(self, event: pygame.event.Event) -> None:
        hotkey = self._hotkeys.get(event.key)
        if hotkey is not None:
            hotkey()
            return

        if self.input is None:
            return
        if event.key in TILT_KEYS:
            self.input.set_tilt(TILT_KEYS[event.key], True)
        elif event.unicode.isprintable():
            self.input.key_typed(event.unicode)

    def _on_key_up(self, event: pygame.event.Event) -> None:
        if self.input is not None and event.key in TILT_KEYS:
            self.input.set_tilt(TILT_KEYS[event.key], False)

    def _on_mouse_motion(self, event: pygame.event.Event) -> None:
        if self.input is not None:
            self.input.pointer_moved(*event.pos)

    def _apply_size(self, width: int, height: int) -> None:
        if not self.config.fullscreen:
            self._display = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        self.event_bus.emit(resize_event(width, height))

    # Overlay and screenshots

    def _toggle_overlay(self) -> None:
        self._show_overlay = not self._show_overlay

    def _draw_overlay(self) -> None:
        if not (self._show_overlay and self._display and self._overlay_font):
            return

        fps = self._fps_clock.get_fps() if self._fps_clock else 0.0
        lines = [f"{fps:.1f} fps  frame {self.frames}"]
        if self._overlay_source is not None:
            lines += self._overlay_source()

        y = 8
        for line in lines:
            rendered = self._overlay_font.render(line, True, DEBUG_TEXT_COLOR)
            self._display.blit(rendered, (8, y))
            y += rendered.get_height() + 2

    def save_screenshot(self) -> Optional[Path]:
        """Write the current canvas to a timestamped PNG."""
        if self._display is None:
            return None
        self.screenshot_dir.mkdir(parents=True, exist_ok=True)
        path = self.screenshot_dir / f"scrampage_{datetime.now():%Y%m%d_%H%M%S}.png"
        pygame.image.save(self._display, str(path))
        logger.info(f"Screenshot saved: {path}")
        return path

    # Loop

    async def run(self) -> None:
        """Open the window and run until ESC, window close or SHUTDOWN."""
        self._open()
        self._alive = True

        try:
            while self._alive:
                self._pump()

                # Previous frame's duration drives timers and the frame step
                delta = self._fps_clock.get_time() / 1000.0
                self.event_bus.emit(tick_event(delta, self.frames))
                await self.event_bus.process_queue()

                self._draw_overlay()
                pygame.display.flip()

                self._fps_clock.tick(self.config.fps)
                self.frames += 1
                await asyncio.sleep(0)
        finally:
            self._close()

    def _on_shutdown(self, event: Event) -> None:
        self.stop()

    def stop(self) -> None:
        self._alive = False
