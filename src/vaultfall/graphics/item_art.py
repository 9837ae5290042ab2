"""Procedural art for falling items.

Each kind has one template drawn in item-local coordinates, rotated by the
item's rotation and translated to its centre. Text on items stays upright.
"""

from typing import Callable, Dict, List

import numpy as np
from numpy.typing import NDArray

from vaultfall.game.entities import FallingItem, ItemKind
from vaultfall.graphics.primitives import (
    Color,
    Point,
    draw_circle,
    draw_line,
    draw_polygon,
    draw_text_centered,
    ellipse_points,
    transform_points,
)

Buffer = NDArray[np.uint8]

# Penalty (the trap)
BLOB_BROWN: Color = (101, 67, 33)
EYE_WHITE: Color = (255, 255, 255)
EYE_BLACK: Color = (0, 0, 0)

# Cash stack
BILL_GREEN: Color = (134, 239, 172)
BILL_INK: Color = (21, 128, 61)

# Gold bar
GOLD_FACE: Color = (251, 191, 36)
GOLD_EDGE: Color = (180, 83, 9)
GOLD_STAMP: Color = (146, 64, 14)
SHINE: Color = (255, 255, 255)

# Diamond
GEM_BLUE: Color = (96, 165, 250)
GEM_EDGE: Color = (255, 255, 255)

# Silver coin
SILVER_FACE: Color = (148, 163, 184)
SILVER_EDGE: Color = (71, 85, 105)

# (cx, cy, rx, ry) of the stacked blob tiers, bottom to top
_BLOB_TIERS = [(0, 5, 18, 10), (0, -3, 14, 8), (0, -10, 8, 5)]
_BLOB_EYES = [(-5.0, -2.0), (5.0, -2.0)]

_BILL_W, _BILL_H = 36.0, 20.0
_BILL = [(-_BILL_W / 2, -_BILL_H / 2), (_BILL_W / 2, -_BILL_H / 2),
         (_BILL_W / 2, _BILL_H / 2), (-_BILL_W / 2, _BILL_H / 2)]

_BAR_W, _BAR_H = 40.0, 15.0
_BAR = [(-_BAR_W / 2 + 5, -_BAR_H / 2), (_BAR_W / 2 - 5, -_BAR_H / 2),
        (_BAR_W / 2, _BAR_H / 2), (-_BAR_W / 2, _BAR_H / 2)]
_BAR_SHINE = [(-_BAR_W / 2 + 8, -_BAR_H / 2 + 3), (-_BAR_W / 2 + 18, -_BAR_H / 2 + 3),
              (-_BAR_W / 2 + 10, _BAR_H / 2 - 3), (-_BAR_W / 2 + 2, _BAR_H / 2 - 3)]

_DIAMOND = [(0.0, -15.0), (12.0, -5.0), (0.0, 15.0), (-12.0, -5.0)]


def _place(points: List[Point], item: FallingItem, scale: float = 1.0) -> List[Point]:
    return transform_points(points, item.x, item.y, item.rotation, scale)


def draw_penalty_blob(
    buffer: Buffer,
    x: float,
    y: float,
    rotation: float = 0.0,
    scale: float = 1.0,
    alpha: float = 1.0,
) -> None:
    """Three stacked tiers with cartoon eyes. Also used for splatter marks."""
    for cx, cy, rx, ry in _BLOB_TIERS:
        tier = ellipse_points(cx, cy, rx, ry, segments=24)
        draw_polygon(buffer, transform_points(tier, x, y, rotation, scale), BLOB_BROWN, alpha=alpha)

    for ex, ey in transform_points(_BLOB_EYES, x, y, rotation, scale):
        draw_circle(buffer, ex, ey, 3 * scale, EYE_WHITE, alpha=alpha)
        draw_circle(buffer, ex, ey, 1 * scale, EYE_BLACK, alpha=alpha)


def draw_penalty(buffer: Buffer, item: FallingItem) -> None:
    draw_penalty_blob(buffer, item.x, item.y, item.rotation)


def draw_bill(buffer: Buffer, item: FallingItem) -> None:
    outline = _place(_BILL, item)
    draw_polygon(buffer, outline, BILL_GREEN)
    draw_polygon(buffer, outline, BILL_INK, filled=False)
    draw_circle(buffer, item.x, item.y, 6, BILL_INK, filled=False)
    draw_text_centered(buffer, "$", item.x, item.y, BILL_INK)


def draw_gold_bar(buffer: Buffer, item: FallingItem) -> None:
    outline = _place(_BAR, item)
    draw_polygon(buffer, outline, GOLD_FACE)
    draw_polygon(buffer, outline, GOLD_EDGE, filled=False)
    draw_polygon(buffer, _place(_BAR_SHINE, item), SHINE, alpha=0.6)
    draw_text_centered(buffer, "999.9", item.x, item.y, GOLD_STAMP)


def draw_gem(buffer: Buffer, item: FallingItem) -> None:
    outline = _place(_DIAMOND, item)
    draw_polygon(buffer, outline, GEM_BLUE)
    draw_polygon(buffer, outline, GEM_EDGE, filled=False)

    # Facets: shoulder to shoulder, tip to tip
    top, right, bottom, left = outline
    draw_line(buffer, left[0], left[1], right[0], right[1], GEM_EDGE)
    draw_line(buffer, top[0], top[1], bottom[0], bottom[1], GEM_EDGE)


def draw_silver_coin(buffer: Buffer, item: FallingItem) -> None:
    draw_circle(buffer, item.x, item.y, item.radius, SILVER_FACE)
    draw_circle(buffer, item.x, item.y, item.radius, SILVER_EDGE, filled=False)
    draw_text_centered(buffer, "$", item.x, item.y, EYE_WHITE)


ITEM_PAINTERS: Dict[ItemKind, Callable[[Buffer, FallingItem], None]] = {
    ItemKind.PENALTY: draw_penalty,
    ItemKind.BILL: draw_bill,
    ItemKind.GOLD_COIN: draw_gold_bar,
    ItemKind.GEM: draw_gem,
    ItemKind.SILVER_COIN: draw_silver_coin,
}


def draw_item(buffer: Buffer, item: FallingItem) -> None:
    """Draw an item with the template for its kind."""
    ITEM_PAINTERS[item.kind](buffer, item)
