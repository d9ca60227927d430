"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_WORD = "SCRAMPAGE"


class WindowSettings(BaseModel):
    """Window and rendering settings."""

    width: int = Field(default=1280, gt=0)
    height: int = Field(default=720, gt=0)
    title: str = "SCRAMPAGE"
    fullscreen: bool = False
    fps: int = Field(default=60, gt=0)

    # Text
    font_name: str = "Courier New,Courier,DejaVu Sans Mono,monospace"
    font_size: int = Field(default=100, gt=0)

    # 1.0 clears the canvas every frame, lower values leave ghosting
    fade_alpha: float = Field(default=1.0, ge=0.0, le=1.0)


class MotionSettings(BaseModel):
    """Motion integrator tuning."""

    speed_limit: float = Field(default=10.0, gt=0.0)
    seek_fraction: float = Field(default=0.01, ge=0.0)
    acceleration_factor: float = 0.003
    external_gain: float = 3.0
    intro_frames: int = Field(default=300, ge=0)
    intro_easing: str = "ease_in_out_sine"
    round_positions: bool = True


class ColorSettings(BaseModel):
    """Color oscillator tuning."""

    hue_drift: float = Field(default=0.1, gt=0.0)
    lightness_min: float = 25.0
    lightness_max: float = 65.0
    drift_limit: float = Field(default=5.0, gt=0.0)
    saturation: float = Field(default=100.0, ge=0.0, le=100.0)
    initial_lightness: float = 50.0

    @model_validator(mode="after")
    def _check_lightness(self) -> "ColorSettings":
        if self.lightness_min > self.lightness_max:
            raise ValueError("lightness_min must not exceed lightness_max")
        if not self.lightness_min <= self.initial_lightness <= self.lightness_max:
            raise ValueError("initial_lightness must lie within the lightness range")
        return self


class TrailSettings(BaseModel):
    """Trail buffer bounds."""

    min_length: int = Field(default=5, ge=1)
    max_length: int = Field(default=120, ge=1)
    initial_length: int = Field(default=50, ge=1)
    max_evictions_per_frame: int = Field(default=2, ge=1)
    patches_per_frame: int = Field(default=5, ge=1)

    @model_validator(mode="after")
    def _check_lengths(self) -> "TrailSettings":
        if self.min_length > self.max_length:
            raise ValueError("min_length must not exceed max_length")
        return self

    def clamp(self, length: int) -> int:
        """Clamp a trail length into the configured range."""
        return max(self.min_length, min(self.max_length, length))


class ModeTiming(BaseModel):
    """Waiting and active duration ranges for one scheduled mode, in seconds.

    ``active_min``/``active_max`` of None means the active phase is instant.
    """

    wait_min: float = Field(ge=0.0)
    wait_max: float = Field(gt=0.0)
    active_min: Optional[float] = Field(default=None, ge=0.0)
    active_max: Optional[float] = Field(default=None, ge=0.0)

    @model_validator(mode="after")
    def _check_ranges(self) -> "ModeTiming":
        if self.wait_min > self.wait_max:
            raise ValueError("wait_min must not exceed wait_max")
        if (self.active_min is None) != (self.active_max is None):
            raise ValueError("active_min and active_max must be set together")
        if self.active_min is not None and self.active_min > self.active_max:
            raise ValueError("active_min must not exceed active_max")
        return self

    @property
    def is_instant(self) -> bool:
        return self.active_min is None


class ScheduleSettings(BaseModel):
    """Timings for the four scheduled modes."""

    scramble: ModeTiming = Field(
        default_factory=lambda: ModeTiming(wait_min=5, wait_max=40, active_min=0, active_max=8)
    )
    tail: ModeTiming = Field(
        default_factory=lambda: ModeTiming(wait_min=2.5, wait_max=20)
    )
    wander: ModeTiming = Field(
        default_factory=lambda: ModeTiming(wait_min=20, wait_max=40, active_min=2.5, active_max=10)
    )
    color_mode: ModeTiming = Field(
        default_factory=lambda: ModeTiming(wait_min=30, wait_max=90, active_min=5, active_max=10)
    )


class InputSettings(BaseModel):
    """Input layer debounce timings."""

    editing_timeout_ms: float = Field(default=2000.0, gt=0.0)
    target_timeout_ms: float = Field(default=500.0, gt=0.0)
    tilt_strength: float = Field(default=0.25, ge=0.0)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="SCRAMPAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False
    word: str = DEFAULT_WORD
    seed: Optional[int] = None

    # Paths
    base_path: Path = Field(default_factory=Path.cwd)

    # Nested settings
    window: WindowSettings = Field(default_factory=WindowSettings)
    motion: MotionSettings = Field(default_factory=MotionSettings)
    color: ColorSettings = Field(default_factory=ColorSettings)
    trail: TrailSettings = Field(default_factory=TrailSettings)
    schedule: ScheduleSettings = Field(default_factory=ScheduleSettings)
    input: InputSettings = Field(default_factory=InputSettings)

    @property
    def log_file(self) -> Path:
        """Path of the simulator log file."""
        return self.base_path / "scrampage.log"

    @property
    def screenshot_path(self) -> Path:
        """Directory screenshots are written to."""
        return self.base_path / "screenshots"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
