"""Graphics module for SCRAMPAGE rendering."""

from scrampage.graphics.color import Color, hsl_to_rgb
from scrampage.graphics.commands import ClearCommand, TextCommand, Frame, DrawCommand
from scrampage.graphics.metrics import TextMeasurer, MonospaceMeasurer, FontMeasurer, load_font
from scrampage.graphics.renderer import Renderer

__all__ = [
    "Color",
    "hsl_to_rgb",
    # Commands
    "ClearCommand",
    "TextCommand",
    "Frame",
    "DrawCommand",
    # Metrics
    "TextMeasurer",
    "MonospaceMeasurer",
    "FontMeasurer",
    "load_font",
    # Renderer
    "Renderer",
]
