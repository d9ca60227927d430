"""Frame clock: one discrete simulation step per displayed frame."""

from typing import Optional, Tuple
import logging

from scrampage.animation.easing import get_easing, ramp
from scrampage.config.settings import Settings
from scrampage.core.events import Event, EventBus, EventType
from scrampage.core.timers import TimerQueue
from scrampage.graphics.commands import ClearCommand, Frame, TextCommand
from scrampage.simulation.color import ColorOscillator
from scrampage.simulation.context import SimulationContext
from scrampage.simulation.motion import MotionIntegrator
from scrampage.simulation.scheduler import ModeScheduler

logger = logging.getLogger(__name__)


class FrameClock:
    """Drives the simulation.

    Each ``step``: intro bookkeeping, motion, color drift, random-color
    override, queued hue patches, trail snapshot, trail length step, trim,
    then the frame's draw commands.

    During the intro the word stays centered and its saturation fades in;
    the mode scheduler starts when the intro ends.
    """

    def __init__(
        self,
        ctx: SimulationContext,
        settings: Settings,
        timers: Optional[TimerQueue] = None,
        event_bus: Optional[EventBus] = None,
    ):
        self.ctx = ctx
        self.settings = settings
        self.timers = timers or TimerQueue()
        self.motion = MotionIntegrator(settings.motion)
        self.color = ColorOscillator(settings.color)
        self.scheduler = ModeScheduler(
            ctx,
            self.timers,
            schedule=settings.schedule,
            trail=settings.trail,
            event_bus=event_bus,
        )

        self._intro_frames = settings.motion.intro_frames
        self._intro_easing = get_easing(settings.motion.intro_easing)
        self._intro_done = False
        self._unsubscribers: list = []

    @property
    def in_intro(self) -> bool:
        return not self._intro_done

    def start(self, word: str) -> None:
        """Set the initial word and center it."""
        self.ctx.word.set_word(word)
        self.motion.center(self.ctx)
        logger.info(f"Frame clock ready: {self.ctx.bounds[0]}x{self.ctx.bounds[1]}, "
                    f"intro {self._intro_frames} frames")

    def step(self) -> Frame:
        """Advance the simulation by one frame and return its draw commands."""
        ctx = self.ctx

        if ctx.frame >= self._intro_frames and not self._intro_done:
            self._finish_intro()

        if self._intro_done:
            self.motion.step(ctx)
        else:
            self._intro_step()

        self.color.step(ctx)
        if ctx.flags.random_color:
            self.color.randomize(ctx)

        ctx.hue_patches.consume(ctx.trail, ctx.rng, self.settings.trail.patches_per_frame)

        ctx.trail.capture(ctx.color.snapshot(), ctx.motion.position, ctx.word.displayed)
        ctx.trail.step_length(self.settings.trail.clamp(ctx.flags.target_trail_length))
        ctx.trail.trim()

        frame = self._compose()
        ctx.frame += 1
        return frame

    def _intro_step(self) -> None:
        progress = self.ctx.frame / self._intro_frames if self._intro_frames else 1.0
        self.ctx.color.saturation = ramp(self.settings.color.saturation, progress, self._intro_easing)

    def _finish_intro(self) -> None:
        ctx = self.ctx
        self._intro_done = True
        ctx.color.saturation = self.settings.color.saturation
        self.motion.center(ctx)
        ctx.motion.stop()
        self.scheduler.start()
        logger.info(f"Intro finished at frame {ctx.frame}")

    def _compose(self) -> Frame:
        frame = Frame(index=self.ctx.frame)
        frame.commands.append(ClearCommand(self.settings.window.fade_alpha))
        for entry, scale in self.ctx.trail.iter_faded():
            frame.commands.append(TextCommand(
                text=entry.text,
                position=entry.position,
                fill_color=entry.color.to_rgb(scale),
            ))
        return frame

    # Inputs

    def on_word_changed(self, text: str) -> bool:
        """Replace the word; keeps the position valid for the new extent."""
        changed = self.ctx.word.set_word(text)
        if changed:
            self._reposition()
        return changed

    def on_target_update(self, point: Optional[Tuple[float, float]]) -> None:
        self.ctx.target = None if point is None else (float(point[0]), float(point[1]))

    def on_resize(self, width: int, height: int) -> None:
        self.ctx.bounds = (int(width), int(height))
        self._reposition()
        logger.debug(f"Canvas resized to {width}x{height}")

    def on_motion(self, ax: float, ay: float) -> None:
        self.ctx.external_acceleration = (float(ax), float(ay))

    def _reposition(self) -> None:
        if self._intro_done:
            self.motion.clamp_into_bounds(self.ctx)
        else:
            self.motion.center(self.ctx)

    # Event bus wiring

    def attach(self, event_bus: EventBus) -> None:
        """Subscribe the input handlers to ``event_bus``."""
        self._unsubscribers = [
            event_bus.subscribe(EventType.WORD_CHANGED, self._on_word_event),
            event_bus.subscribe(EventType.TARGET_UPDATE, self._on_target_event),
            event_bus.subscribe(EventType.RESIZE, self._on_resize_event),
            event_bus.subscribe(EventType.MOTION, self._on_motion_event),
        ]

    def detach(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    def _on_word_event(self, event: Event) -> None:
        self.on_word_changed(event.data.get("text", ""))

    def _on_target_event(self, event: Event) -> None:
        self.on_target_update(event.data.get("point"))

    def _on_resize_event(self, event: Event) -> None:
        self.on_resize(event.data["width"], event.data["height"])

    def _on_motion_event(self, event: Event) -> None:
        ax, ay = event.data.get("acceleration", (0.0, 0.0))
        self.on_motion(ax, ay)
