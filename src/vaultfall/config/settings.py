"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Nested groups use a double underscore, e.g. VAULTFALL_GAMEPLAY__SPAWN_PROBABILITY.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GameplaySettings(BaseSettings):
    """Simulation tunables. Units are pixels and ticks."""

    # Spawning
    spawn_probability: float = Field(default=0.035, ge=0.0, le=1.0)
    base_fall_speed: float = Field(default=3.0, gt=0.0)
    fall_speed_jitter: float = Field(default=0.5, ge=0.0)
    spawn_margin: float = 30.0
    emitter_y: float = 80.0  # Inside the bank facade

    # Catcher
    catcher_width: float = Field(default=70.0, gt=0.0)
    catcher_height: float = 90.0
    bag_opening_offset: float = 10.0

    # Outcomes
    catch_tolerance: float = 40.0
    miss_margin: float = 20.0

    # Feedback
    particle_decay: float = Field(default=0.02, gt=0.0)
    bag_pop_scale: float = Field(default=1.3, gt=1.0)
    bag_scale_decay: float = Field(default=0.05, gt=0.0)
    shake_frames: int = 20
    shake_amplitude: float = 10.0
    splatter_count: int = 6
    splatter_decay: float = Field(default=0.015, gt=0.0)

    # Ambience
    rain_drop_count: int = 100
    window_off_probability: float = Field(default=0.005, ge=0.0, le=1.0)
    window_on_probability: float = Field(default=0.001, ge=0.0, le=1.0)
    alarm_lives: int = 1
    alarm_blink_frames: int = Field(default=10, gt=0)
    storm_lives: int = 2

    @property
    def catcher_half_width(self) -> float:
        return self.catcher_width / 2


class DisplaySettings(BaseSettings):
    """Viewport settings."""

    width: int = Field(default=400, gt=0)
    height: int = Field(default=600, gt=0)
    fps: int = Field(default=60, gt=0)


class SimulatorSettings(BaseSettings):
    """Desktop host settings."""

    title: str = "VAULTFALL"
    scale: int = Field(default=1, gt=0)
    time_limit: int = 60  # seconds, timed mode
    max_lives: int = 5    # survival mode
    panel_width: int = 220


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="VAULTFALL_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False
    seed: int | None = None

    gameplay: GameplaySettings = Field(default_factory=GameplaySettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)
    simulator: SimulatorSettings = Field(default_factory=SimulatorSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
