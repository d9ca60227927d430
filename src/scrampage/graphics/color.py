"""Color conversion helpers."""

from typing import Tuple

Color = Tuple[int, int, int]


def hsl_to_rgb(h: float, s: float, l: float) -> Color:
    """Convert HSL to RGB.

    Args:
        h: Hue in degrees (wrapped into 0-360)
        s: Saturation in percent (0-100)
        l: Lightness in percent (0-100)
    """
    h = h % 360
    s = max(0.0, min(100.0, s)) / 100
    l = max(0.0, min(100.0, l)) / 100

    c = (1 - abs(2 * l - 1)) * s
    x = c * (1 - abs((h / 60) % 2 - 1))
    m = l - c / 2

    if h < 60:
        r, g, b = c, x, 0
    elif h < 120:
        r, g, b = x, c, 0
    elif h < 180:
        r, g, b = 0, c, x
    elif h < 240:
        r, g, b = 0, x, c
    elif h < 300:
        r, g, b = x, 0, c
    else:
        r, g, b = c, 0, x

    return (
        round((r + m) * 255),
        round((g + m) * 255),
        round((b + m) * 255),
    )
