"""Visual feedback: bag squash and shake, hit flash, splatter overlay, bank alarm.

``AnimationState`` is the explicit state passed into the simulation step and
read by the renderer. ``FeedbackSystem`` reacts to catches and advances the
decaying animations once per tick.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from vaultfall.animation.particles import ParticleField
from vaultfall.config.settings import GameplaySettings
from vaultfall.game.entities import FallingItem, GameMode, ItemKind, Splatter

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]

# Feedback palette
FLASH_GOOD: Color = (251, 191, 36)
FLASH_BAD: Color = (113, 63, 18)
TEXT_GOOD: Color = (255, 255, 255)
TEXT_BAD: Color = (239, 68, 68)
CONFETTI_GOLD: Tuple[Color, ...] = ((255, 215, 0), (252, 211, 77))
CONFETTI_GEM: Tuple[Color, ...] = ((59, 130, 246), (96, 165, 250), (255, 255, 255))

# Floating text
TEXT_RISE_OFFSET = 20.0
TEXT_SPEED_GOOD = -1.0
TEXT_SPEED_BAD = -2.0

# Splatter marks
SPLATTER_SCALE_RANGE = (2.0, 5.0)
SPLATTER_ROTATION_RANGE = (-0.5, 0.5)

# Confetti bursts per kind
CONFETTI = {
    ItemKind.GOLD_COIN: (5, CONFETTI_GOLD),
    ItemKind.BILL: (5, CONFETTI_GOLD),
    ItemKind.GEM: (15, CONFETTI_GEM),
}


def format_money(value: int) -> str:
    """Signed dollar amount with thousands separators, e.g. '+$8,000'."""
    sign = "-" if value < 0 else "+"
    return f"{sign}${abs(value):,}"


@dataclass
class AnimationState:
    """Animation scalars shared by the step and the renderer."""
    catcher_x: float = 0.0
    bag_scale: float = 1.0
    shake_frames: int = 0
    shake_offset: float = 0.0
    hit_flash: Optional[Color] = None
    splatter_opacity: float = 0.0
    splatters: List[Splatter] = field(default_factory=list)
    frame: int = 0  # Drives alarm blinking

    @property
    def is_shaking(self) -> bool:
        return self.shake_frames > 0


class FeedbackSystem:
    """Applies catch feedback and advances decaying animations."""

    def __init__(self, settings: GameplaySettings, rng: random.Random):
        self.settings = settings
        self._rng = rng

    def on_catch(
        self,
        item: FallingItem,
        anim: AnimationState,
        particles: ParticleField,
        viewport: Tuple[float, float],
    ) -> None:
        """React to a caught item; penalty items get the splatter treatment."""
        anim.bag_scale = self.settings.bag_pop_scale
        if item.is_penalty:
            self._on_penalty(item, anim, particles, viewport)
            return

        anim.hit_flash = FLASH_GOOD
        particles.emit_text(
            item.x, item.y - TEXT_RISE_OFFSET, format_money(item.value),
            TEXT_GOOD, vy=TEXT_SPEED_GOOD,
        )
        burst = CONFETTI.get(item.kind)
        if burst:
            count, colors = burst
            particles.burst(item.x, item.y, count, colors, self._rng)

    def _on_penalty(
        self,
        item: FallingItem,
        anim: AnimationState,
        particles: ParticleField,
        viewport: Tuple[float, float],
    ) -> None:
        anim.hit_flash = FLASH_BAD
        anim.shake_frames = self.settings.shake_frames
        particles.emit_text(
            item.x, item.y - TEXT_RISE_OFFSET, f"SPLAT! {format_money(item.value)}",
            TEXT_BAD, vy=TEXT_SPEED_BAD,
        )
        self.trigger_splatter(anim, viewport)

    def trigger_splatter(self, anim: AnimationState, viewport: Tuple[float, float]) -> None:
        """Start a fresh splatter batch at full opacity."""
        width, height = viewport
        anim.splatter_opacity = 1.0
        anim.splatters = [
            Splatter(
                x=self._rng.uniform(0, width),
                y=self._rng.uniform(0, height),
                scale=self._rng.uniform(*SPLATTER_SCALE_RANGE),
                rotation=self._rng.uniform(*SPLATTER_ROTATION_RANGE),
            )
            for _ in range(self.settings.splatter_count)
        ]
        logger.debug(f"Splatter triggered with {len(anim.splatters)} marks")

    def decay(self, anim: AnimationState) -> None:
        """Relax bag scale toward 1 and count the shake down."""
        if anim.bag_scale > 1.0:
            anim.bag_scale = max(1.0, anim.bag_scale - self.settings.bag_scale_decay)
        else:
            anim.bag_scale = 1.0

        if anim.shake_frames > 0:
            amplitude = self.settings.shake_amplitude
            anim.shake_offset = (self._rng.random() - 0.5) * amplitude
            anim.shake_frames -= 1
        else:
            anim.shake_offset = 0.0

    def fade_splatter(self, anim: AnimationState) -> None:
        """Fade the overlay; the batch is discarded once fully transparent."""
        if anim.splatter_opacity <= 0:
            return
        anim.splatter_opacity = max(0.0, anim.splatter_opacity - self.settings.splatter_decay)
        if anim.splatter_opacity == 0.0:
            anim.splatters = []

    def alarm_active(self, mode: GameMode, lives: int) -> bool:
        """Survival mode with the last life(s) left sounds the bank alarm."""
        return mode is GameMode.SURVIVAL and 0 < lives <= self.settings.alarm_lives

    def alarm_lit(self, anim: AnimationState, mode: GameMode, lives: int) -> bool:
        """Whether alarm windows glow red this frame (blinks at a fixed cadence)."""
        if not self.alarm_active(mode, lives):
            return False
        return (anim.frame // self.settings.alarm_blink_frames) % 2 == 0
