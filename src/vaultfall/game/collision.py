"""Catch and miss detection between falling items and the catcher's bag."""

import logging
from dataclasses import dataclass, field
from typing import List, Tuple

from vaultfall.config.settings import GameplaySettings
from vaultfall.game.entities import FallingItem
from vaultfall.game.feedback import AnimationState

logger = logging.getLogger(__name__)


def clamp_catcher(x: float, viewport_width: float, half_width: float) -> float:
    """Keep the catcher fully inside the viewport."""
    upper = max(half_width, viewport_width - half_width)
    return max(half_width, min(upper, x))


def catcher_reference_y(settings: GameplaySettings, viewport_height: float) -> float:
    """Top of the catcher's torso; the figure and bag hang off this point."""
    return viewport_height - settings.catcher_height + settings.bag_opening_offset


def bag_opening(
    settings: GameplaySettings, anim: AnimationState, viewport_height: float
) -> Tuple[float, float]:
    """The point items must reach to be caught. Follows the shake jitter."""
    x = anim.catcher_x + anim.shake_offset
    y = catcher_reference_y(settings, viewport_height) - settings.bag_opening_offset
    return x, y


@dataclass
class Resolution:
    """Items removed during one resolver pass."""
    caught: List[FallingItem] = field(default_factory=list)
    missed: List[FallingItem] = field(default_factory=list)   # Count against the player
    dropped: List[FallingItem] = field(default_factory=list)  # Penalties that fell through

    @property
    def removed(self) -> int:
        return len(self.caught) + len(self.missed) + len(self.dropped)


class CollisionResolver:
    """Decides catch or miss for every active item.

    Every qualifying item is resolved in the same tick; there is no
    one-catch-per-tick limit.
    """

    def __init__(self, settings: GameplaySettings):
        self.settings = settings

    def is_caught(self, item: FallingItem, opening: Tuple[float, float]) -> bool:
        return item.distance_to(*opening) < item.radius + self.settings.catch_tolerance

    def is_past_bottom(self, item: FallingItem, viewport_height: float) -> bool:
        return item.y > viewport_height + self.settings.miss_margin

    def resolve(
        self,
        items: List[FallingItem],
        anim: AnimationState,
        viewport_height: float,
    ) -> Resolution:
        """Remove caught and fallen items from ``items`` in place."""
        result = Resolution()
        opening = bag_opening(self.settings, anim, viewport_height)
        survivors = []

        for item in items:
            if self.is_caught(item, opening):
                result.caught.append(item)
            elif self.is_past_bottom(item, viewport_height):
                if item.is_penalty:
                    result.dropped.append(item)
                else:
                    result.missed.append(item)
            else:
                survivors.append(item)

        if result.removed:
            items[:] = survivors
            logger.debug(
                f"Resolved {len(result.caught)} caught, {len(result.missed)} missed, "
                f"{len(result.dropped)} dropped"
            )
        return result
