"""Settings loading."""

from vaultfall.config.settings import GameplaySettings, Settings


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.gameplay.spawn_probability == 0.035
    assert settings.gameplay.catcher_half_width == 35
    assert (settings.display.width, settings.display.height, settings.display.fps) == (400, 600, 60)
    assert settings.simulator.time_limit == 60
    assert settings.simulator.max_lives == 5
    assert settings.seed is None


def test_nested_environment_override(monkeypatch):
    monkeypatch.setenv("VAULTFALL_SEED", "42")
    monkeypatch.setenv("VAULTFALL_GAMEPLAY__SPAWN_PROBABILITY", "0.5")
    monkeypatch.setenv("VAULTFALL_DISPLAY__WIDTH", "800")

    settings = Settings(_env_file=None)

    assert settings.seed == 42
    assert settings.gameplay.spawn_probability == 0.5
    assert settings.display.width == 800


def test_gameplay_keyword_overrides():
    assert GameplaySettings(catch_tolerance=10).catch_tolerance == 10
