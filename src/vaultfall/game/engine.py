"""The catcher engine: one tick runs spawn, step, collide, feedback and render.

The engine is host-agnostic. The host supplies ``FrameInputs`` every tick
and receives outcomes through ``EngineHooks``.
"""

import logging
import random
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np
from numpy.typing import NDArray

from vaultfall.animation.particles import ParticleField
from vaultfall.config.settings import GameplaySettings, get_settings
from vaultfall.core.events import Event, EventBus, EventType, item_caught_event
from vaultfall.game.background import generate_backdrop
from vaultfall.game.collision import CollisionResolver, Resolution, clamp_catcher
from vaultfall.game.entities import FrameInputs
from vaultfall.game.feedback import AnimationState, FeedbackSystem
from vaultfall.game.simulation import SimulationStep, World
from vaultfall.game.spawner import ItemSpawner
from vaultfall.graphics.renderer import FrameRenderer

logger = logging.getLogger(__name__)


@dataclass
class EngineHooks:
    """Outcome callbacks raised to the host."""
    on_score: Optional[Callable[[int], None]] = None
    on_miss: Optional[Callable[[], None]] = None
    on_penalty_hit: Optional[Callable[[], None]] = None

    @classmethod
    def from_event_bus(cls, bus: EventBus, source: str = "engine") -> "EngineHooks":
        """Publish outcomes as events instead of direct calls."""
        return cls(
            on_score=lambda value: bus.emit(item_caught_event(value, source=source)),
            on_miss=lambda: bus.emit(Event(EventType.ITEM_MISSED, source=source)),
            on_penalty_hit=lambda: bus.emit(Event(EventType.PENALTY_HIT, source=source)),
        )


class CatcherEngine:
    """Owns the world and runs the per-tick pipeline.

    Usage:
        engine = CatcherEngine(hooks=EngineHooks(on_score=session.add_score))

        # Once per display frame:
        engine.tick(inputs, buffer)
    """

    def __init__(
        self,
        settings: Optional[GameplaySettings] = None,
        hooks: Optional[EngineHooks] = None,
        rng: Optional[random.Random] = None,
        renderer: Optional[FrameRenderer] = None,
    ):
        self.settings = settings or get_settings().gameplay
        self.hooks = hooks or EngineHooks()
        self.rng = rng or random.Random()

        self.world = World(particles=ParticleField(self.settings.particle_decay))
        self.feedback = FeedbackSystem(self.settings, self.rng)
        self.spawner = ItemSpawner(self.settings, self.rng)
        self.step = SimulationStep(self.settings, self.rng, self.feedback)
        self.resolver = CollisionResolver(self.settings)
        self.renderer = renderer or FrameRenderer(self.settings)

    def resize(self, width: int, height: int) -> bool:
        """Regenerate the backdrop for new viewport dimensions.

        Returns True when the world was rebuilt. A zero-area viewport is
        ignored and the previous backdrop kept.
        """
        if width <= 0 or height <= 0:
            logger.debug(f"Ignoring zero-area viewport {width}x{height}")
            return False

        world = self.world
        if world.backdrop is not None and (world.width, world.height) == (width, height):
            return False

        world.width = width
        world.height = height
        world.backdrop = generate_backdrop(width, height, self.settings.rain_drop_count, self.rng)
        world.anim = AnimationState(catcher_x=width / 2)
        return True

    def set_pointer(self, x: float) -> None:
        """Move the catcher, clamped to the viewport."""
        self.world.anim.catcher_x = clamp_catcher(
            x, self.world.width, self.settings.catcher_half_width
        )

    def tick(self, inputs: FrameInputs, surface: Optional[NDArray[np.uint8]] = None) -> Resolution:
        """Advance one frame and draw it to ``surface`` if one is given."""
        self.resize(inputs.viewport_width, inputs.viewport_height)
        world = self.world
        if inputs.pointer_x is not None:
            self.set_pointer(inputs.pointer_x)

        # Spawn
        if inputs.is_playing and world.has_area:
            item = self.spawner.maybe_spawn(world.width)
            if item is not None:
                world.items.append(item)

        # Step
        self.step.advance(world, inputs)

        # Collide
        if inputs.is_playing and world.has_area:
            resolution = self.resolver.resolve(world.items, world.anim, world.height)
        else:
            resolution = Resolution()
        self._dispatch(resolution)

        # Feedback
        world.particles.update()

        # Render
        if surface is not None:
            alarm_on = self.feedback.alarm_lit(world.anim, inputs.mode, inputs.lives)
            self.renderer.render(surface, world, alarm_on)

        return resolution

    def _dispatch(self, resolution: Resolution) -> None:
        world = self.world
        for item in resolution.caught:
            self.feedback.on_catch(item, world.anim, world.particles, (world.width, world.height))
            self._notify(self.hooks.on_score, item.value)
            if item.is_penalty:
                logger.info(f"Penalty hit ({item.value})")
                self._notify(self.hooks.on_penalty_hit)
        for _item in resolution.missed:
            self._notify(self.hooks.on_miss)

    def _notify(self, hook: Optional[Callable], *args) -> None:
        if hook is None:
            return
        try:
            hook(*args)
        except Exception as e:
            logger.error(f"Error in engine hook {getattr(hook, '__name__', hook)}: {e}")
