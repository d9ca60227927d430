"""Easing curves.

A curve maps progress in [0, 1] to an eased value in [0, 1]. The intro
uses one to fade the word's saturation in.
"""

from enum import Enum, auto
from typing import Callable, Dict
import math


EasingFunc = Callable[[float], float]


class Easing(Enum):
    """Named easing curves."""

    LINEAR = auto()
    EASE_IN_QUAD = auto()
    EASE_OUT_QUAD = auto()
    EASE_IN_OUT_QUAD = auto()
    EASE_IN_SINE = auto()
    EASE_OUT_SINE = auto()
    EASE_IN_OUT_SINE = auto()


def linear(t: float) -> float:
    return t


def ease_in_quad(t: float) -> float:
    return t * t


def ease_out_quad(t: float) -> float:
    return t * (2 - t)


def ease_in_out_quad(t: float) -> float:
    return 2 * t * t if t < 0.5 else 1 - 2 * (1 - t) * (1 - t)


def ease_in_sine(t: float) -> float:
    return 1 - math.cos(t * math.pi / 2)


def ease_out_sine(t: float) -> float:
    return math.sin(t * math.pi / 2)


def ease_in_out_sine(t: float) -> float:
    """Slow start, slow finish; 0.5 at the midpoint."""
    return (1 - math.cos(t * math.pi)) / 2


_CURVES: Dict[Easing, EasingFunc] = {
    Easing.LINEAR: linear,
    Easing.EASE_IN_QUAD: ease_in_quad,
    Easing.EASE_OUT_QUAD: ease_out_quad,
    Easing.EASE_IN_OUT_QUAD: ease_in_out_quad,
    Easing.EASE_IN_SINE: ease_in_sine,
    Easing.EASE_OUT_SINE: ease_out_sine,
    Easing.EASE_IN_OUT_SINE: ease_in_out_sine,
}


def get_easing(easing: Easing | str) -> EasingFunc:
    """Look up a curve by enum member or by name (``"ease_in_out_sine"``).

    Raises:
        ValueError: If the name is unknown
    """
    if isinstance(easing, str):
        member = Easing.__members__.get(easing.upper())
        if member is None:
            raise ValueError(f"Unknown easing function: {easing}")
        easing = member
    return _CURVES[easing]


def ramp(target: float, progress: float, easing: EasingFunc = linear) -> float:
    """Eased fraction of ``target``; progress is clamped into [0, 1]."""
    return target * easing(max(0.0, min(1.0, progress)))
