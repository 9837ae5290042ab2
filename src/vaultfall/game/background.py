"""Procedural city backdrop: skyline buildings with flickering windows and rain.

The backdrop is generated once per viewport size. Flicker and rain are
advanced every tick regardless of whether a round is running.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import List

from vaultfall.game.entities import Building, BuildingWindow, RainDrop

logger = logging.getLogger(__name__)

# Skyline
BUILDING_WIDTH_RANGE = (30.0, 90.0)
BUILDING_HEIGHT_RANGE = (100.0, 300.0)
BUILDING_OVERLAP = 5.0
WINDOW_STEP_X = 12.0
WINDOW_STEP_Y = 15.0
WINDOW_INSET_X = 5.0
WINDOW_INSET_Y = 10.0
WINDOW_PRESENT_CHANCE = 0.6
WINDOW_LIT_CHANCE = 0.5

# Rain
RAIN_LENGTH_RANGE = (10.0, 30.0)
RAIN_SPEED_RANGE = (10.0, 20.0)
RAIN_OPACITY_RANGE = (0.1, 0.4)
RAIN_RESPAWN_Y = -20.0

# Lit window brightness range, re-rolled every tick
WINDOW_GLOW_RANGE = (0.6, 1.0)


@dataclass
class Backdrop:
    """Skyline and rain field for one viewport size."""
    width: int
    height: int
    buildings: List[Building] = field(default_factory=list)
    rain: List[RainDrop] = field(default_factory=list)


def _check_viewport(width: float, height: float) -> None:
    if width <= 0 or height <= 0:
        raise ValueError(f"Viewport must have positive area, got {width}x{height}")


def _generate_windows(width: float, height: float, rng: random.Random) -> List[BuildingWindow]:
    windows = []
    wy = WINDOW_INSET_Y
    while wy < height - WINDOW_INSET_Y:
        wx = WINDOW_INSET_X
        while wx < width - WINDOW_INSET_X:
            if rng.random() < WINDOW_PRESENT_CHANCE:
                windows.append(BuildingWindow(
                    x=wx,
                    y=wy,
                    is_lit=rng.random() < WINDOW_LIT_CHANCE,
                ))
            wx += WINDOW_STEP_X
        wy += WINDOW_STEP_Y
    return windows


def generate_skyline(width: float, height: float, rng: random.Random) -> List[Building]:
    """Tile buildings left to right, slightly overlapping, until the width is covered."""
    _check_viewport(width, height)

    buildings: List[Building] = []
    cursor = 0.0
    while cursor < width:
        bw = rng.uniform(*BUILDING_WIDTH_RANGE)
        bh = rng.uniform(*BUILDING_HEIGHT_RANGE)
        buildings.append(Building(
            x=cursor,
            width=bw,
            height=bh,
            windows=_generate_windows(bw, bh, rng),
        ))
        cursor += bw - BUILDING_OVERLAP
    return buildings


def generate_rain(width: float, height: float, count: int, rng: random.Random) -> List[RainDrop]:
    """Create a rain field of ``count`` drops scattered over the viewport."""
    _check_viewport(width, height)

    return [
        RainDrop(
            x=rng.uniform(0, width),
            y=rng.uniform(0, height),
            length=rng.uniform(*RAIN_LENGTH_RANGE),
            speed=rng.uniform(*RAIN_SPEED_RANGE),
            opacity=rng.uniform(*RAIN_OPACITY_RANGE),
        )
        for _ in range(count)
    ]


def generate_backdrop(width: int, height: int, rain_count: int, rng: random.Random) -> Backdrop:
    """Build skyline and rain for a viewport."""
    backdrop = Backdrop(
        width=width,
        height=height,
        buildings=generate_skyline(width, height, rng),
        rain=generate_rain(width, height, rain_count, rng),
    )
    logger.info(
        f"Backdrop generated for {width}x{height}: "
        f"{len(backdrop.buildings)} buildings, {len(backdrop.rain)} drops"
    )
    return backdrop


def flicker_windows(
    buildings: List[Building],
    rng: random.Random,
    off_probability: float,
    on_probability: float,
) -> None:
    """Toggle each window independently; lit windows also re-roll their glow."""
    for building in buildings:
        for window in building.windows:
            if window.is_lit:
                if rng.random() < off_probability:
                    window.is_lit = False
                else:
                    window.brightness = rng.uniform(*WINDOW_GLOW_RANGE)
            elif rng.random() < on_probability:
                window.is_lit = True


def advance_rain(
    drops: List[RainDrop],
    width: float,
    height: float,
    rng: random.Random,
    density: float,
) -> None:
    """Move every drop; decide which ones are drawn this tick.

    ``density`` is the chance a drop is drawn (>= 1 draws all). Motion does
    not depend on it.
    """
    for drop in drops:
        drop.y += drop.speed
        if drop.y > height:
            drop.y = RAIN_RESPAWN_Y
            drop.x = rng.uniform(0, width)
        drop.visible = density >= 1.0 or rng.random() < density
