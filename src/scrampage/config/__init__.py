"""Configuration for SCRAMPAGE."""

from .settings import Settings, get_settings, DEFAULT_WORD

__all__ = ["Settings", "get_settings", "DEFAULT_WORD"]
