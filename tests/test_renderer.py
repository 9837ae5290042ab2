"""Frame renderer."""

import copy

import numpy as np
import pytest

from vaultfall.game.entities import FallingItem, ItemKind
from vaultfall.game.simulation import World
from vaultfall.graphics.item_art import ITEM_PAINTERS, draw_item
from vaultfall.graphics.renderer import ALARM, BAG_MOUTH, GLASS, FrameRenderer

# A pixel inside the first bank window at 400px width
WINDOW_PIXEL = (75, 22)
# Inside the bag mouth, above the head, with the catcher centred at 400x600
BAG_MOUTH_PIXEL = (474, 200)


@pytest.fixture
def renderer(settings):
    return FrameRenderer(settings)


def test_missing_surface_is_skipped(renderer, engine):
    assert renderer.render(None, engine.world) is False


def test_empty_surface_is_skipped(renderer, engine):
    assert renderer.render(np.zeros((0, 0, 3), dtype=np.uint8), engine.world) is False


def test_world_without_area_is_skipped(renderer, buffer):
    assert renderer.render(buffer, World()) is False
    assert not buffer.any()


def test_render_draws_frame(renderer, engine, buffer):
    assert renderer.render(buffer, engine.world) is True
    assert buffer.any()


def test_render_does_not_touch_world(renderer, engine, buffer):
    engine.world.items.append(FallingItem.of_kind(1, ItemKind.GEM, 200, 300, 5, rotation=0.4))
    engine.world.particles.emit_text(100, 100, "+$500", (255, 255, 255))
    before = copy.deepcopy(engine.world)

    renderer.render(buffer, engine.world)

    assert engine.world.items == before.items
    assert engine.world.anim == before.anim
    assert engine.world.backdrop == before.backdrop
    assert engine.world.particles.particles == before.particles.particles


def test_alarm_turns_bank_windows_red(renderer, engine, buffer):
    renderer.render(buffer, engine.world, alarm_on=False)
    assert tuple(buffer[WINDOW_PIXEL]) == GLASS

    renderer.render(buffer, engine.world, alarm_on=True)
    assert tuple(buffer[WINDOW_PIXEL]) == ALARM


def test_bag_mouth_drawn_above_catcher(renderer, engine, buffer):
    renderer.render(buffer, engine.world)
    assert tuple(buffer[BAG_MOUTH_PIXEL]) == BAG_MOUTH


def test_splatter_overlay_tints_frame(renderer, engine, buffer):
    clean = buffer.copy()
    renderer.render(clean, engine.world)

    engine.feedback.trigger_splatter(engine.world.anim, (400, 600))
    renderer.render(buffer, engine.world)

    assert not np.array_equal(clean, buffer)


def test_every_kind_has_art():
    assert set(ITEM_PAINTERS) == set(ItemKind)


@pytest.mark.parametrize("kind", list(ItemKind))
def test_item_art_draws_at_item_position(kind):
    buf = np.zeros((100, 100, 3), dtype=np.uint8)
    draw_item(buf, FallingItem.of_kind(1, kind, 50, 50, 3, rotation=0.3))

    assert buf[35:65, 35:65].any()
    assert not buf[:, :10].any()


def test_item_art_clips_offscreen():
    buf = np.zeros((100, 100, 3), dtype=np.uint8)
    draw_item(buf, FallingItem.of_kind(1, ItemKind.BILL, -500, 50, 3))
    assert not buf.any()
