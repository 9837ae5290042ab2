"""Frame renderer for VAULTFALL.

Draws one frame from the world state, back to front: sky, skyline, rain,
bank facade, catcher, items, particles and the splatter overlay. Rendering
never mutates the world.
"""

from typing import TYPE_CHECKING, Dict, Optional
import logging

import numpy as np
from numpy.typing import NDArray

from vaultfall.config.settings import GameplaySettings
from vaultfall.game.collision import catcher_reference_y
from vaultfall.game.feedback import AnimationState
from vaultfall.graphics.item_art import draw_item, draw_penalty_blob
from vaultfall.graphics.primitives import (
    Color,
    draw_circle,
    draw_ellipse,
    draw_line,
    draw_polygon,
    draw_rect,
    draw_text_centered,
    ellipse_points,
    fill,
    transform_points,
)

if TYPE_CHECKING:
    from vaultfall.game.simulation import World

logger = logging.getLogger(__name__)

# Sky gradient (edge -> middle -> edge)
SKY_EDGE: Color = (15, 23, 42)
SKY_MID: Color = (30, 41, 59)

# Skyline
BUILDING: Color = (15, 23, 42)
WINDOW_WARM: Color = (254, 243, 199)
WINDOW_COOL: Color = (226, 232, 240)
WINDOW_W, WINDOW_H = 4, 6
PARALLAX = 0.05
RAIN: Color = (148, 163, 184)
RAIN_SLANT = 2.0

# Bank facade
BANK_ROOF_TOP = 10
BANK_ROOF_BOTTOM = 50
BANK_HEIGHT = 100
PILLAR_COUNT = 6
PILLAR_WIDTH = 20
PILLAR: Color = (30, 41, 59)
ROOF: Color = (51, 65, 85)
GLASS: Color = (71, 85, 105)
ALARM: Color = (239, 68, 68)
ALARM_GLOW = 6
SIGN: Color = (148, 163, 184)
SIGN_INK: Color = (15, 23, 42)

# Catcher
BAG: Color = (180, 83, 9)
BAG_EDGE: Color = (120, 53, 15)
BAG_MOUTH: Color = (69, 26, 3)
BAG_MARK: Color = (252, 211, 77)
FLASH_MIN_SCALE = 1.05
PANTS: Color = (15, 23, 42)
SHIRT: Color = (255, 255, 255)
SKIN: Color = (252, 165, 165)
BEANIE: Color = (51, 65, 85)

# Splatter overlay
SPLATTER_TINT: Color = (66, 33, 11)
SPLATTER_TINT_ALPHA = 0.7
SPLATTER_MARK_SCALE = 1.4

# Bag body: lower half-ellipse closing into a neck, in bag-local coordinates
_BAG_BODY = ellipse_points(0, 0, 40, 25, 0.0, np.pi, segments=20) + [(-30.0, -30.0), (30.0, -30.0)]


class FrameRenderer:
    """Read-only consumer of world state."""

    def __init__(self, settings: GameplaySettings):
        self.settings = settings
        self._sky_cache: Dict[int, NDArray[np.uint8]] = {}

    def render(
        self,
        buffer: Optional[NDArray[np.uint8]],
        world: "World",
        alarm_on: bool = False,
    ) -> bool:
        """Draw a full frame. Returns False when the frame was skipped."""
        if buffer is None or buffer.size == 0 or not world.has_area:
            return False

        self._draw_sky(buffer)
        if world.backdrop is not None:
            self._draw_skyline(buffer, world)
            self._draw_rain(buffer, world)
        self._draw_bank(buffer, world.width, alarm_on)
        self._draw_catcher(buffer, world.anim, world.height)

        for item in world.items:
            draw_item(buffer, item)

        world.particles.render(buffer)
        self._draw_splatter(buffer, world.anim)
        return True

    # Backdrop
    def _sky(self, height: int) -> NDArray[np.uint8]:
        """Vertical gradient column, cached per buffer height."""
        column = self._sky_cache.get(height)
        if column is None:
            t = np.abs(np.linspace(0.0, 1.0, height) - 0.5) * 2  # 1 at edges, 0 mid
            edge = np.array(SKY_EDGE, dtype=np.float32)
            mid = np.array(SKY_MID, dtype=np.float32)
            column = (mid + (edge - mid) * t[:, None]).astype(np.uint8)
            self._sky_cache[height] = column
        return column

    def _draw_sky(self, buffer: NDArray[np.uint8]) -> None:
        buffer[:, :] = self._sky(buffer.shape[0])[:, None, :]

    def _draw_skyline(self, buffer: NDArray[np.uint8], world: "World") -> None:
        base_y = world.height
        shift = (world.anim.catcher_x - world.width / 2) * PARALLAX

        for i, building in enumerate(world.backdrop.buildings):
            parallax = shift if i % 2 == 0 else -shift
            left = building.x + parallax
            top = base_y - building.height
            draw_rect(buffer, left, top, building.width, building.height, BUILDING)

            light = WINDOW_WARM if i % 3 == 0 else WINDOW_COOL
            for window in building.windows:
                if window.is_lit:
                    draw_rect(
                        buffer, left + window.x, top + window.y, WINDOW_W, WINDOW_H,
                        light, alpha=window.brightness,
                    )

    def _draw_rain(self, buffer: NDArray[np.uint8], world: "World") -> None:
        for drop in world.backdrop.rain:
            if drop.visible:
                draw_line(
                    buffer, drop.x, drop.y, drop.x - RAIN_SLANT, drop.y + drop.length,
                    RAIN, alpha=drop.opacity,
                )

    def _draw_bank(self, buffer: NDArray[np.uint8], width: int, alarm_on: bool) -> None:
        spacing = width / PILLAR_COUNT

        for i in range(PILLAR_COUNT + 1):
            draw_rect(buffer, i * spacing - PILLAR_WIDTH / 2, BANK_ROOF_BOTTOM, PILLAR_WIDTH, BANK_HEIGHT, PILLAR)

        draw_rect(buffer, 0, BANK_ROOF_TOP, width, BANK_ROOF_BOTTOM - BANK_ROOF_TOP, ROOF)

        # Windows between pillars
        glass_w = (spacing - PILLAR_WIDTH * 2) / 2
        for i in range(PILLAR_COUNT):
            wx = i * spacing + (spacing - PILLAR_WIDTH) / 2 - glass_w / 2
            wy = 60
            if alarm_on:
                draw_rect(
                    buffer, wx - ALARM_GLOW, wy - ALARM_GLOW,
                    glass_w + ALARM_GLOW * 2, 30 + ALARM_GLOW * 2, ALARM, alpha=0.35,
                )
                draw_rect(buffer, wx, wy, glass_w, 30, ALARM)
            else:
                draw_rect(buffer, wx, wy, glass_w, 30, GLASS)

        draw_rect(buffer, width / 2 - 60, 20, 120, 25, SIGN)
        draw_text_centered(buffer, "CENTRAL BANK", width / 2, 32.5, SIGN_INK, scale=2)

        draw_rect(buffer, 0, BANK_HEIGHT, width, 20, (0, 0, 0), alpha=0.3)

    # Catcher
    def _draw_catcher(self, buffer: NDArray[np.uint8], anim: AnimationState, height: int) -> None:
        cx = anim.catcher_x + anim.shake_offset
        top = catcher_reference_y(self.settings, height)
        bag_y = top - self.settings.bag_opening_offset

        self._draw_bag(buffer, anim, cx, bag_y)

        # Legs
        draw_rect(buffer, cx - 15, top + 40, 10, 30, PANTS)
        draw_rect(buffer, cx + 5, top + 40, 10, 30, PANTS)

        # Striped torso
        draw_rect(buffer, cx - 20, top, 40, 45, SHIRT)
        stripe_y = top + 5
        while stripe_y < top + 45:
            draw_rect(buffer, cx - 20, stripe_y, 40, 5, PANTS)
            stripe_y += 10

        # Arms reaching up to the bag
        draw_line(buffer, cx - 20, top + 10, cx - 30, top - 10, PANTS, thickness=6)
        draw_line(buffer, cx + 20, top + 10, cx + 30, top - 10, PANTS, thickness=6)

        # Head, mask, eyes
        draw_circle(buffer, cx, top - 15, 18, SKIN)
        draw_rect(buffer, cx - 16, top - 20, 32, 10, PANTS)
        if anim.is_shaking:
            draw_text_centered(buffer, "x", cx - 8, top - 15, SHIRT)
            draw_text_centered(buffer, "x", cx + 8, top - 15, SHIRT)
        else:
            draw_circle(buffer, cx - 8, top - 15, 2, SHIRT)
            draw_circle(buffer, cx + 8, top - 15, 2, SHIRT)

        # Beanie: upper half-disc plus brim
        beanie = ellipse_points(cx, top - 20, 19, 19, np.pi, 2 * np.pi, segments=16)
        draw_polygon(buffer, beanie, BEANIE)
        draw_line(buffer, cx - 18, top - 20, cx + 18, top - 20, BEANIE, thickness=4)

    def _draw_bag(self, buffer: NDArray[np.uint8], anim: AnimationState, cx: float, bag_y: float) -> None:
        scale = anim.bag_scale
        color = BAG
        if anim.hit_flash is not None and scale > FLASH_MIN_SCALE:
            color = anim.hit_flash

        body = transform_points(_BAG_BODY, cx, bag_y, scale=scale)
        draw_polygon(buffer, body, color)
        draw_polygon(buffer, body, BAG_EDGE, filled=False, thickness=3)
        draw_text_centered(buffer, "$", cx, bag_y, BAG_MARK, scale=max(1, round(4 * scale)))
        draw_ellipse(buffer, cx, bag_y - 30 * scale, 30 * scale, 8 * scale, BAG_MOUTH)

    # Overlay
    def _draw_splatter(self, buffer: NDArray[np.uint8], anim: AnimationState) -> None:
        opacity = anim.splatter_opacity
        if opacity <= 0:
            return
        fill(buffer, SPLATTER_TINT, alpha=SPLATTER_TINT_ALPHA * opacity)
        for mark in anim.splatters:
            draw_penalty_blob(
                buffer, mark.x, mark.y, mark.rotation,
                scale=mark.scale * SPLATTER_MARK_SCALE, alpha=opacity,
            )
