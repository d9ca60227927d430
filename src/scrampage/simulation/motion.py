"""Motion integrator: wall-clamped movement, reflection, seeking and jitter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Tuple
import math

from scrampage.config.settings import MotionSettings

if TYPE_CHECKING:
    from scrampage.simulation.context import SimulationContext


@dataclass
class MotionState:
    """Position (top-left corner of the word) and per-frame velocity."""

    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def velocity(self) -> Tuple[float, float]:
        return (self.vx, self.vy)

    def stop(self) -> None:
        """Zero the velocity."""
        self.vx = 0.0
        self.vy = 0.0


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class MotionIntegrator:
    """Advances the word by one frame.

    Per axis: seek toward the target, move and hard-stop at the walls,
    add jitter (random wander or smooth acceleration) plus the external
    bias, clamp to the speed limit and reflect off any wall that was
    touched.
    """

    def __init__(self, settings: MotionSettings | None = None):
        self.settings = settings or MotionSettings()

    def max_position(self, bound: float, extent: float) -> float:
        """Largest valid coordinate on an axis.

        A word larger than the canvas is pinned to 0.
        """
        limit = bound - extent
        if self.settings.round_positions:
            limit = math.floor(limit)
        return max(0.0, limit)

    def _place(self, value: float, bound: float, extent: float) -> float:
        if self.settings.round_positions:
            value = round_half_up(value)
        return clamp(value, 0, self.max_position(bound, extent))

    def step(self, ctx: SimulationContext) -> None:
        """Integrate one frame in place on ``ctx.motion``."""
        state = ctx.motion
        cfg = self.settings
        width, height = ctx.bounds
        text_w, text_h = ctx.word.text_width, ctx.word.text_height

        dx, dy = state.vx, state.vy

        if ctx.target is not None:
            # Proportional seek from the word's midpoint toward the target
            mid_x = state.x + text_w / 2
            mid_y = state.y + text_h / 2
            dx += (ctx.target[0] - mid_x) * cfg.seek_fraction
            dy += (ctx.target[1] - mid_y) * cfg.seek_fraction

        new_x = self._place(state.x + dx, width, text_w)
        new_y = self._place(state.y + dy, height, text_h)

        if ctx.flags.wander:
            jitter_x = ctx.rng.randint(-1, 1)
            jitter_y = ctx.rng.randint(-1, 1)
        else:
            jitter_x = dx * cfg.acceleration_factor
            jitter_y = dy * cfg.acceleration_factor

        ax, ay = ctx.external_acceleration
        jitter_x += ax * cfg.external_gain
        jitter_y += ay * cfg.external_gain

        limit = cfg.speed_limit
        vx = clamp(dx + jitter_x, -limit, limit)
        vy = clamp(dy + jitter_y, -limit, limit)

        # Reflect off touched walls
        if new_x <= 0 or new_x >= self.max_position(width, text_w):
            vx = -vx
        if new_y <= 0 or new_y >= self.max_position(height, text_h):
            vy = -vy

        state.x, state.y = new_x, new_y
        state.vx, state.vy = vx, vy

    def clamp_into_bounds(self, ctx: SimulationContext) -> None:
        """Pull the position back inside the canvas (after resize or word change)."""
        width, height = ctx.bounds
        state = ctx.motion
        state.x = clamp(state.x, 0, self.max_position(width, ctx.word.text_width))
        state.y = clamp(state.y, 0, self.max_position(height, ctx.word.text_height))

    def center(self, ctx: SimulationContext) -> None:
        """Center the word on the canvas."""
        width, height = ctx.bounds
        state = ctx.motion
        x = width / 2 - ctx.word.text_width / 2
        y = height / 2 - ctx.word.text_height / 2
        if self.settings.round_positions:
            x, y = round_half_up(x), round_half_up(y)
        state.x = clamp(x, 0, self.max_position(width, ctx.word.text_width))
        state.y = clamp(y, 0, self.max_position(height, ctx.word.text_height))
