"""
Main entry point for SCRAMPAGE.

Wires the simulation engine to the pygame window and runs it.
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from scrampage.config.settings import Settings, get_settings
from scrampage.core.events import Event, EventBus, EventType
from scrampage.core.timers import TimerQueue
from scrampage.graphics.metrics import FontMeasurer, load_font
from scrampage.graphics.renderer import Renderer
from scrampage.simulation.clock import FrameClock
from scrampage.simulation.context import create_context
from scrampage.simulator.input import InputController, initial_word
from scrampage.simulator.window import SimulatorWindow

logger = logging.getLogger(__name__)


def setup_logging(log_file: Optional[Path] = None, debug: bool = False) -> None:
    """Configure console logging and, optionally, a fresh log file."""
    level = logging.DEBUG if debug else logging.INFO

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    # File handler - truncate on each run for fresh logs
    if log_file is not None:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        logging.info(f"Logging to file: {log_file}")

    # Reduce per-frame noise
    logging.getLogger("scrampage.core.timers").setLevel(logging.INFO)


class ScrampageApp:
    """Main application integrating the engine, input layer and window."""

    def __init__(self, settings: Settings, word: str):
        self.settings = settings

        # Core systems
        self.event_bus = EventBus()
        self.timers = TimerQueue()

        # Text
        font = load_font(settings.window.font_name, settings.window.font_size)
        self.measurer = FontMeasurer(font)
        self.renderer = Renderer(font)

        # Simulation
        self.context = create_context(settings, self.measurer)
        self.clock = FrameClock(self.context, settings, self.timers, self.event_bus)
        self.clock.attach(self.event_bus)

        # Input + window
        self.input = InputController(self.event_bus, self.timers, settings.input)
        self.window = SimulatorWindow(
            config=settings.window,
            event_bus=self.event_bus,
            input_controller=self.input,
            screenshot_dir=settings.screenshot_path,
        )
        self.window.set_debug_source(self.debug_lines)

        self.event_bus.subscribe(EventType.TICK, self._on_tick)

        self.clock.start(word)
        logger.info("ScrampageApp initialized")

    def _on_tick(self, event: Event) -> None:
        """Handle frame tick - advance timers, step and draw."""
        delta_ms = event.data.get("delta", 0.016) * 1000

        # Mode and debounce timers run before the frame reads their flags
        self.timers.advance(delta_ms)

        frame = self.clock.step()
        surface = self.window.surface
        if surface is not None:
            self.renderer.draw(frame, surface)

    def debug_lines(self) -> List[str]:
        ctx = self.context
        active = [name for name in self.clock.scheduler.modes if self.clock.scheduler.is_active(name)]
        return [
            f"Word: {ctx.word.text!r} -> {ctx.word.displayed!r}",
            f"Pos: ({ctx.motion.x:.0f}, {ctx.motion.y:.0f})  Vel: ({ctx.motion.vx:.2f}, {ctx.motion.vy:.2f})",
            f"HSL: ({ctx.color.hue:.1f}, {ctx.color.saturation:.0f}, {ctx.color.lightness:.1f})",
            f"Trail: {len(ctx.trail)} / {ctx.trail.current_length} -> {ctx.flags.target_trail_length}",
            f"Target: {ctx.target}",
            f"Modes: {', '.join(active) or '-'}",
            f"Intro: {self.clock.in_intro}",
        ]

    async def run(self) -> None:
        """Run the simulator."""
        logger.info("Starting SCRAMPAGE...")
        await self.window.run()
        self.clock.scheduler.stop()
        self.input.reset()


async def run(settings: Settings, word: str) -> None:
    app = ScrampageApp(settings, word)
    await app.run()


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    from dotenv import load_dotenv

    # Load environment variables
    load_dotenv()

    settings = get_settings()
    setup_logging(settings.log_file, settings.debug)

    logger.info("=" * 50)
    logger.info("SCRAMPAGE starting")
    logger.info("=" * 50)
    logger.info("Controls:")
    logger.info("  Type          - Replace the word")
    logger.info("  Mouse         - Word follows the pointer")
    logger.info("  Arrow keys    - Tilt")
    logger.info("  F1 / F2       - Debug overlay / Screenshot")
    logger.info("  ESC           - Quit")

    args = sys.argv[1:] if argv is None else argv
    word = initial_word(" ".join(args) if args else settings.word)

    try:
        asyncio.run(run(settings, word))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("SCRAMPAGE stopped")


if __name__ == "__main__":
    main()
