"""Skyline and rain generation."""

import random

import pytest

from vaultfall.game.background import (
    BUILDING_HEIGHT_RANGE,
    BUILDING_WIDTH_RANGE,
    RAIN_RESPAWN_Y,
    advance_rain,
    flicker_windows,
    generate_backdrop,
    generate_rain,
    generate_skyline,
)
from vaultfall.game.entities import Building, BuildingWindow, RainDrop


class TestSkyline:

    def test_covers_viewport_width(self, rng):
        buildings = generate_skyline(400, 600, rng)
        last = buildings[-1]
        assert buildings[0].x == 0
        assert last.x + last.width >= 400

    def test_buildings_overlap_slightly(self, rng):
        buildings = generate_skyline(400, 600, rng)
        for left, right in zip(buildings, buildings[1:]):
            assert right.x == pytest.approx(left.x + left.width - 5)

    def test_dimensions_in_range(self, rng):
        for b in generate_skyline(800, 600, rng):
            assert BUILDING_WIDTH_RANGE[0] <= b.width <= BUILDING_WIDTH_RANGE[1]
            assert BUILDING_HEIGHT_RANGE[0] <= b.height <= BUILDING_HEIGHT_RANGE[1]

    def test_windows_inside_building(self, rng):
        for b in generate_skyline(400, 600, rng):
            for w in b.windows:
                assert 0 < w.x < b.width
                assert 0 < w.y < b.height

    @pytest.mark.parametrize("width, height", [(0, 600), (400, 0), (-1, -1)])
    def test_rejects_empty_viewport(self, rng, width, height):
        with pytest.raises(ValueError):
            generate_skyline(width, height, rng)
        with pytest.raises(ValueError):
            generate_rain(width, height, 10, rng)


class TestWindows:

    def test_flicker_off_and_on(self):
        rng = random.Random(0)
        lit = BuildingWindow(0, 0, is_lit=True)
        dark = BuildingWindow(0, 0, is_lit=False)
        flicker_windows([Building(0, 10, 10, [lit, dark])], rng, off_probability=1.0, on_probability=1.0)

        assert lit.is_lit is False
        assert dark.is_lit is True

    def test_lit_windows_glow(self):
        rng = random.Random(0)
        window = BuildingWindow(0, 0, is_lit=True)
        flicker_windows([Building(0, 10, 10, [window])], rng, off_probability=0.0, on_probability=0.0)

        assert window.is_lit
        assert 0.6 <= window.brightness <= 1.0


class TestRain:

    def test_generated_within_viewport(self, rng):
        drops = generate_rain(400, 600, 100, rng)
        assert len(drops) == 100
        assert all(0 <= d.x <= 400 and 0 <= d.y <= 600 for d in drops)

    def test_drop_wraps_to_top(self, rng):
        drop = RainDrop(x=10, y=595, length=20, speed=10, opacity=0.3)
        advance_rain([drop], 400, 600, rng, density=1.0)

        assert drop.y == RAIN_RESPAWN_Y
        assert 0 <= drop.x <= 400

    def test_motion_ignores_density(self, rng):
        drop = RainDrop(x=10, y=100, length=20, speed=10, opacity=0.3)
        advance_rain([drop], 400, 600, rng, density=0.0)

        assert drop.y == 110
        assert drop.visible is False

    def test_light_rain_draws_about_half(self, rng):
        drops = generate_rain(400, 600, 2000, rng)
        advance_rain(drops, 400, 600, rng, density=0.5)
        visible = sum(d.visible for d in drops)
        assert 850 < visible < 1150

    def test_backdrop_bundles_both(self, rng):
        backdrop = generate_backdrop(400, 600, 30, rng)
        assert (backdrop.width, backdrop.height) == (400, 600)
        assert len(backdrop.rain) == 30
        assert backdrop.buildings
