"""Color oscillator: slow hue rotation with a bouncing lightness random walk."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING
import logging

from scrampage.config.settings import ColorSettings
from scrampage.graphics.color import Color, hsl_to_rgb

if TYPE_CHECKING:
    from scrampage.simulation.context import SimulationContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HSL:
    """An immutable HSL color (hue in degrees, saturation/lightness in percent)."""

    hue: float
    saturation: float
    lightness: float

    def with_hue(self, hue: float) -> "HSL":
        return replace(self, hue=hue % 360)

    def to_rgb(self, lightness_scale: float = 1.0) -> Color:
        """Convert to RGB, optionally scaling lightness toward black."""
        return hsl_to_rgb(self.hue, self.saturation, self.lightness * lightness_scale)


@dataclass
class ColorState:
    """Current color plus its drift vector."""

    hue: float = 0.0
    saturation: float = 0.0
    lightness: float = 50.0
    d_hue: float = 0.1
    d_lightness: float = 0.0

    def snapshot(self) -> HSL:
        return HSL(self.hue, self.saturation, self.lightness)


class ColorOscillator:
    """Advances hue and lightness once per frame."""

    def __init__(self, settings: ColorSettings | None = None):
        self.settings = settings or ColorSettings()

    def initial_state(self, rng) -> ColorState:
        """Random starting hue, desaturated, mid lightness."""
        return ColorState(
            hue=float(rng.randrange(360)),
            saturation=0.0,
            lightness=self.settings.initial_lightness,
            d_hue=self.settings.hue_drift,
            d_lightness=0.0,
        )

    def step(self, ctx: SimulationContext) -> None:
        """Drift the color in place on ``ctx.color``."""
        state = ctx.color
        cfg = self.settings
        low, high = cfg.lightness_min, cfg.lightness_max

        state.hue = (state.hue + state.d_hue) % 360
        state.lightness = max(low, min(state.lightness + state.d_lightness, high))

        d_lightness = state.d_lightness + ctx.rng.randint(-1, 1)
        d_lightness = max(-cfg.drift_limit, min(d_lightness, cfg.drift_limit))

        # Bounce off the lightness limits
        if state.lightness <= low or state.lightness >= high:
            d_lightness = -d_lightness

        state.d_hue = cfg.hue_drift
        state.d_lightness = d_lightness

    def randomize(self, ctx: SimulationContext) -> None:
        """Random-color override: fresh hue and lightness, no drift."""
        state = ctx.color
        state.hue = ctx.rng.random() * 360
        state.lightness = ctx.rng.uniform(self.settings.lightness_min, self.settings.lightness_max)
