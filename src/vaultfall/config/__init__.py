"""Configuration for VAULTFALL."""

from vaultfall.config.settings import (
    DisplaySettings,
    GameplaySettings,
    Settings,
    SimulatorSettings,
    get_settings,
)

__all__ = [
    "DisplaySettings",
    "GameplaySettings",
    "Settings",
    "SimulatorSettings",
    "get_settings",
]
