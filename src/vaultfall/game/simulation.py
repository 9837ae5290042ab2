"""Per-tick simulation step and the world state it owns."""

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional

from vaultfall.animation.particles import ParticleField
from vaultfall.config.settings import GameplaySettings
from vaultfall.game.background import Backdrop, advance_rain, flicker_windows
from vaultfall.game.entities import FallingItem, FrameInputs, GameMode
from vaultfall.game.feedback import AnimationState, FeedbackSystem

logger = logging.getLogger(__name__)

LIGHT_RAIN_DENSITY = 0.5
STORM_RAIN_DENSITY = 2.0


@dataclass
class World:
    """Every transient entity of one canvas session."""
    width: int = 0
    height: int = 0
    backdrop: Optional[Backdrop] = None
    items: List[FallingItem] = field(default_factory=list)
    particles: ParticleField = field(default_factory=ParticleField)
    anim: AnimationState = field(default_factory=AnimationState)

    @property
    def has_area(self) -> bool:
        return self.width > 0 and self.height > 0


class SimulationStep:
    """Advances ambience, items and animations by one tick.

    Order: window flicker, rain, items (only while playing), bag animation
    decay, splatter fade.
    """

    def __init__(self, settings: GameplaySettings, rng: random.Random, feedback: FeedbackSystem):
        self.settings = settings
        self._rng = rng
        self.feedback = feedback

    def rain_density(self, inputs: FrameInputs) -> float:
        """Heavy rain when the player is down to their last lives in survival."""
        if inputs.mode is GameMode.SURVIVAL and inputs.lives <= self.settings.storm_lives:
            return STORM_RAIN_DENSITY
        return LIGHT_RAIN_DENSITY

    def advance(self, world: World, inputs: FrameInputs) -> None:
        cfg = self.settings

        if world.backdrop is not None:
            flicker_windows(
                world.backdrop.buildings, self._rng,
                cfg.window_off_probability, cfg.window_on_probability,
            )
            advance_rain(
                world.backdrop.rain, world.width, world.height,
                self._rng, self.rain_density(inputs),
            )

        if inputs.is_playing:
            for item in world.items:
                item.y += item.vertical_speed
                item.rotation += item.rotation_speed

        self.feedback.decay(world.anim)
        self.feedback.fade_splatter(world.anim)
        world.anim.frame += 1
