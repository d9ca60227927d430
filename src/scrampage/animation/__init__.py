"""Animation helpers for SCRAMPAGE."""

from scrampage.animation.easing import Easing, get_easing, ramp

__all__ = [
    "Easing",
    "get_easing",
    "ramp",
]
