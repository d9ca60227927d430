"""SCRAMPAGE: a wandering, scrambling, color-cycling word with a fading trail."""

__version__ = "0.1.0"
