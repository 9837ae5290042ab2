"""Item spawner: kind distribution, spawn rate and initial state."""

import math
import random
from collections import Counter

import pytest

from vaultfall.config.settings import GameplaySettings
from vaultfall.game.entities import ItemKind, KIND_SPECS
from vaultfall.game.spawner import ItemSpawner, choose_kind


@pytest.mark.parametrize("r, kind", [
    (0.0, ItemKind.PENALTY),
    (0.1999, ItemKind.PENALTY),
    (0.20, ItemKind.BILL),
    (0.3499, ItemKind.BILL),
    (0.35, ItemKind.GEM),
    (0.45, ItemKind.SILVER_COIN),
    (0.60, ItemKind.GOLD_COIN),
    (0.9999, ItemKind.GOLD_COIN),
])
def test_choose_kind_thresholds(r, kind):
    assert choose_kind(r) is kind


def test_kind_frequencies_match_table():
    rng = random.Random(99)
    n = 20000
    counts = Counter(choose_kind(rng.random()) for _ in range(n))
    expected = {
        ItemKind.PENALTY: 0.20,
        ItemKind.BILL: 0.15,
        ItemKind.GEM: 0.10,
        ItemKind.SILVER_COIN: 0.15,
        ItemKind.GOLD_COIN: 0.40,
    }
    for kind, share in expected.items():
        assert counts[kind] / n == pytest.approx(share, abs=0.015)


def test_spawn_rate_is_bernoulli_per_tick():
    spawner = ItemSpawner(GameplaySettings(), random.Random(5))
    spawned = sum(spawner.maybe_spawn(400) is not None for _ in range(20000))
    # 20000 * 0.035 = 700, sigma ~ 26
    assert 600 < spawned < 800


def test_zero_probability_never_spawns():
    spawner = ItemSpawner(GameplaySettings(spawn_probability=0.0), random.Random(5))
    assert all(spawner.maybe_spawn(400) is None for _ in range(1000))


@pytest.mark.parametrize("kind", list(ItemKind))
def test_spawned_item_uses_kind_table(kind):
    settings = GameplaySettings()
    spawner = ItemSpawner(settings, random.Random(3))
    spec = KIND_SPECS[kind]

    for _ in range(50):
        item = spawner.spawn(kind, 400)
        assert item.value == spec.value
        assert item.radius == spec.radius
        assert item.y == settings.emitter_y
        assert settings.spawn_margin <= item.x <= 400 - settings.spawn_margin
        low = settings.base_fall_speed * spec.speed_multiplier
        high = (settings.base_fall_speed + settings.fall_speed_jitter) * spec.speed_multiplier
        assert low <= item.vertical_speed <= high
        assert 0 <= item.rotation <= math.pi
        assert abs(item.rotation_speed) <= spec.spin / 2


def test_gem_falls_fastest():
    assert max(KIND_SPECS, key=lambda k: KIND_SPECS[k].speed_multiplier) is ItemKind.GEM


def test_ids_are_unique_and_increasing():
    spawner = ItemSpawner(GameplaySettings(), random.Random(1))
    ids = [spawner.spawn(ItemKind.BILL, 400).id for _ in range(10)]
    assert ids == sorted(set(ids))


def test_narrow_viewport_spawns_at_margin():
    settings = GameplaySettings()
    item = ItemSpawner(settings, random.Random(1)).spawn(ItemKind.GEM, 40)
    assert item.x == settings.spawn_margin
