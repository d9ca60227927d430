"""Mode scheduler: four independent waiting/active timed state machines.

    scramble    word shows its scrambled variant
    tail        picks a new trail length, then returns to waiting at once
    wander      smooth acceleration replaces random jitter
    color_mode  random colors; existing trail hues are rewritten first,
                the active timer starts once that catch-up has finished
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional
import logging

from scrampage.config.settings import ScheduleSettings, TrailSettings, ModeTiming
from scrampage.core.events import EventBus, mode_event
from scrampage.core.state import ModePhase, PhaseMachine
from scrampage.core.timers import TimerQueue
from scrampage.simulation.context import SimulationContext

logger = logging.getLogger(__name__)

TIMER_PREFIX = "mode:"


@dataclass
class ScheduledMode:
    """One scheduled behavior mode.

    Attributes:
        name: Mode name, also the timer key suffix
        timing: Waiting/active ranges in seconds
        on_enter: Applies the mode's effect
        on_exit: Reverts the effect
        defer_duration: Active timer is started by ``ModeScheduler.release``
    """

    name: str
    timing: ModeTiming
    on_enter: Callable[[], None]
    on_exit: Optional[Callable[[], None]] = None
    defer_duration: bool = False
    machine: PhaseMachine = field(init=False)

    def __post_init__(self):
        self.machine = PhaseMachine(self.name)

    @property
    def timer_name(self) -> str:
        return f"{TIMER_PREFIX}{self.name}"

    @property
    def is_active(self) -> bool:
        return self.machine.is_active


class ModeScheduler:
    """Runs the scheduled modes on a shared timer queue.

    The scheduler never renders; it only flips flags on the simulation
    context. Each mode owns exactly one timer name, so re-arming always
    replaces the previous pending timer.
    """

    def __init__(
        self,
        ctx: SimulationContext,
        timers: TimerQueue,
        schedule: ScheduleSettings | None = None,
        trail: TrailSettings | None = None,
        event_bus: EventBus | None = None,
    ):
        self.ctx = ctx
        self.timers = timers
        self.schedule = schedule or ScheduleSettings()
        self.trail_settings = trail or TrailSettings()
        self.event_bus = event_bus
        self._running = False

        self.modes: Dict[str, ScheduledMode] = {}
        self._register(ScheduledMode(
            name="scramble",
            timing=self.schedule.scramble,
            on_enter=self._enter_scramble,
            on_exit=self._exit_scramble,
        ))
        self._register(ScheduledMode(
            name="tail",
            timing=self.schedule.tail,
            on_enter=self._enter_tail,
        ))
        self._register(ScheduledMode(
            name="wander",
            timing=self.schedule.wander,
            on_enter=self._enter_wander,
            on_exit=self._exit_wander,
        ))
        self._register(ScheduledMode(
            name="color_mode",
            timing=self.schedule.color_mode,
            on_enter=self._enter_color_mode,
            on_exit=self._exit_color_mode,
            defer_duration=True,
        ))

    def _register(self, mode: ScheduledMode) -> None:
        mode.machine.add_listener(self._on_phase_change)
        self.modes[mode.name] = mode

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Arm the waiting timer of every mode."""
        if self._running:
            return
        self._running = True
        for mode in self.modes.values():
            self._arm_wait(mode)
        logger.info("Mode scheduler started")

    def stop(self) -> None:
        """Cancel all mode timers and revert active effects."""
        if not self._running:
            return
        self._running = False
        self.timers.cancel_prefix(TIMER_PREFIX)
        for mode in self.modes.values():
            if mode.is_active:
                mode.machine.transition(ModePhase.WAITING)
                if mode.on_exit:
                    mode.on_exit()
        logger.info("Mode scheduler stopped")

    def phase(self, name: str) -> ModePhase:
        return self.modes[name].machine.phase

    def is_active(self, name: str) -> bool:
        return self.modes[name].is_active

    def activate(self, name: str) -> None:
        """Enter a mode's active phase now, replacing its pending timer."""
        mode = self.modes[name]
        if mode.is_active:
            return
        self._activate(mode)

    def release(self, name: str) -> None:
        """Start the active-duration timer of a deferred mode."""
        mode = self.modes[name]
        if not mode.is_active or not self._running:
            return
        self._arm_active(mode)

    # Transitions

    def _arm_wait(self, mode: ScheduledMode) -> None:
        delay_ms = self.ctx.rng.uniform(mode.timing.wait_min, mode.timing.wait_max) * 1000
        self.timers.arm(mode.timer_name, delay_ms, lambda: self._activate(mode))

    def _arm_active(self, mode: ScheduledMode) -> None:
        delay_ms = self.ctx.rng.uniform(mode.timing.active_min, mode.timing.active_max) * 1000
        self.timers.arm(mode.timer_name, delay_ms, lambda: self._deactivate(mode))

    def _activate(self, mode: ScheduledMode) -> None:
        if not mode.machine.transition(ModePhase.ACTIVE):
            return
        self.timers.cancel(mode.timer_name)
        mode.on_enter()

        if mode.timing.is_instant:
            self._deactivate(mode)
        elif not mode.defer_duration:
            self._arm_active(mode)

    def _deactivate(self, mode: ScheduledMode) -> None:
        if not mode.machine.transition(ModePhase.WAITING):
            return
        if mode.on_exit:
            mode.on_exit()
        if self._running:
            self._arm_wait(mode)

    def _on_phase_change(self, name: str, old: ModePhase, new: ModePhase) -> None:
        logger.info(f"Mode {name}: {old.name.lower()} -> {new.name.lower()}")
        if self.event_bus is not None:
            self.event_bus.emit(mode_event(name, new == ModePhase.ACTIVE))

    # Effects

    def _enter_scramble(self) -> None:
        self.ctx.word.apply_scramble()

    def _exit_scramble(self) -> None:
        self.ctx.word.restore_scramble()

    def _enter_tail(self) -> None:
        cfg = self.trail_settings
        length = cfg.clamp(self.ctx.rng.randint(cfg.min_length, cfg.max_length))
        self.ctx.flags.target_trail_length = length
        logger.debug(f"Trail target length: {length}")

    def _enter_wander(self) -> None:
        self.ctx.flags.wander = False

    def _exit_wander(self) -> None:
        self.ctx.flags.wander = True

    def _enter_color_mode(self) -> None:
        self.ctx.flags.random_color = True
        self.ctx.hue_patches.begin(
            self.ctx.trail.entries,
            on_complete=lambda: self.release("color_mode"),
        )

    def _exit_color_mode(self) -> None:
        self.ctx.flags.random_color = False
        self.ctx.hue_patches.cancel()
