"""Catch and miss rules."""

import pytest

from vaultfall.config.settings import GameplaySettings
from vaultfall.game.collision import (
    CollisionResolver,
    bag_opening,
    catcher_reference_y,
    clamp_catcher,
)
from vaultfall.game.entities import FallingItem, ItemKind
from vaultfall.game.feedback import AnimationState


@pytest.fixture
def resolver(settings):
    return CollisionResolver(settings)


def item_at(x, y, kind=ItemKind.GOLD_COIN, item_id=1):
    return FallingItem.of_kind(item_id, kind, x, y, vertical_speed=5)


def test_clamp_keeps_catcher_inside():
    assert clamp_catcher(-10, 400, 35) == 35
    assert clamp_catcher(200, 400, 35) == 200
    assert clamp_catcher(1000, 400, 35) == 365


def test_clamp_on_narrow_viewport_pins_to_half_width():
    assert clamp_catcher(10, 50, 35) == 35


def test_bag_opening_sits_above_reference(settings):
    anim = AnimationState(catcher_x=150, shake_offset=3)
    x, y = bag_opening(settings, anim, 600)

    assert x == 153
    assert y == catcher_reference_y(settings, 600) - settings.bag_opening_offset
    assert y == 510


def test_catch_radius_is_item_radius_plus_tolerance(resolver):
    opening = (200, 510)
    gold = item_at(200, 510 - 59.9)
    assert resolver.is_caught(gold, opening)
    assert not resolver.is_caught(item_at(200, 510 - 60), opening)


def test_miss_boundary_is_strict(resolver):
    assert not resolver.is_past_bottom(item_at(0, 620), 600)
    assert resolver.is_past_bottom(item_at(0, 620.1), 600)


def test_resolve_splits_outcomes_and_keeps_survivors(resolver):
    anim = AnimationState(catcher_x=200)
    caught = item_at(200, 505, item_id=1)
    missed = item_at(50, 700, ItemKind.SILVER_COIN, item_id=2)
    dropped = item_at(50, 700, ItemKind.PENALTY, item_id=3)
    falling = item_at(50, 300, item_id=4)
    items = [caught, missed, dropped, falling]

    result = resolver.resolve(items, anim, 600)

    assert result.caught == [caught]
    assert result.missed == [missed]
    assert result.dropped == [dropped]
    assert result.removed == 3
    assert items == [falling]


def test_catch_is_checked_before_miss():
    resolver = CollisionResolver(GameplaySettings(catch_tolerance=200))
    anim = AnimationState(catcher_x=200)
    item = item_at(200, 621)

    result = resolver.resolve([item], anim, 600)

    assert result.caught == [item]
    assert result.missed == []
