"""Shared fixtures for VAULTFALL tests."""

import random

import numpy as np
import pytest

from vaultfall.config.settings import GameplaySettings
from vaultfall.game.engine import CatcherEngine, EngineHooks
from vaultfall.game.entities import FrameInputs, GameMode

WIDTH = 400
HEIGHT = 600


class RecordingHooks:
    """Collects engine notifications in call order."""

    def __init__(self):
        self.calls = []

    def on_score(self, value):
        self.calls.append(("score", value))

    def on_miss(self):
        self.calls.append(("miss", None))

    def on_penalty_hit(self):
        self.calls.append(("penalty", None))

    def as_hooks(self) -> EngineHooks:
        return EngineHooks(
            on_score=self.on_score,
            on_miss=self.on_miss,
            on_penalty_hit=self.on_penalty_hit,
        )

    def of(self, name):
        return [value for kind, value in self.calls if kind == name]


def make_inputs(
    is_playing=True,
    lives=5,
    mode=GameMode.TIMED,
    width=WIDTH,
    height=HEIGHT,
    pointer_x=None,
) -> FrameInputs:
    return FrameInputs(
        is_playing=is_playing,
        lives=lives,
        mode=mode,
        viewport_width=width,
        viewport_height=height,
        pointer_x=pointer_x,
    )


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def settings():
    return GameplaySettings()


@pytest.fixture
def quiet_settings():
    """No random spawns; tests place items by hand."""
    return GameplaySettings(spawn_probability=0.0)


@pytest.fixture
def recorder():
    return RecordingHooks()


@pytest.fixture
def engine(quiet_settings, recorder, rng):
    engine = CatcherEngine(settings=quiet_settings, hooks=recorder.as_hooks(), rng=rng)
    engine.resize(WIDTH, HEIGHT)
    return engine


@pytest.fixture
def buffer():
    return np.zeros((HEIGHT, WIDTH, 3), dtype=np.uint8)
