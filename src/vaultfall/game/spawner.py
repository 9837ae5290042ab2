"""Probabilistic item spawner for the bank emitter."""

import itertools
import logging
import math
import random
from typing import List, Optional, Tuple

from vaultfall.config.settings import GameplaySettings
from vaultfall.game.entities import FallingItem, ItemKind, KIND_SPECS

logger = logging.getLogger(__name__)


# Upper bounds of the cumulative ranges a uniform draw is matched against
SPAWN_THRESHOLDS: List[Tuple[float, ItemKind]] = [
    (0.20, ItemKind.PENALTY),
    (0.35, ItemKind.BILL),
    (0.45, ItemKind.GEM),
    (0.60, ItemKind.SILVER_COIN),
    (1.00, ItemKind.GOLD_COIN),
]


def choose_kind(r: float) -> ItemKind:
    """Map a uniform variate in [0, 1) to an item kind."""
    for upper, kind in SPAWN_THRESHOLDS:
        if r < upper:
            return kind
    return SPAWN_THRESHOLDS[-1][1]


class ItemSpawner:
    """Creates at most one item per tick with a fixed probability.

    Each tick is an independent Bernoulli trial, so gaps between items vary.
    """

    def __init__(self, settings: GameplaySettings, rng: random.Random):
        self.settings = settings
        self._rng = rng
        self._ids = itertools.count(1)

    def maybe_spawn(self, viewport_width: float) -> Optional[FallingItem]:
        """Roll for a spawn this tick."""
        if self._rng.random() >= self.settings.spawn_probability:
            return None
        return self.spawn(choose_kind(self._rng.random()), viewport_width)

    def spawn(self, kind: ItemKind, viewport_width: float) -> FallingItem:
        """Create an item of ``kind`` at the emitter."""
        cfg = self.settings
        spec = KIND_SPECS[kind]

        base_speed = cfg.base_fall_speed + self._rng.uniform(0, cfg.fall_speed_jitter)
        left = cfg.spawn_margin
        right = max(left, viewport_width - cfg.spawn_margin)

        item = FallingItem.of_kind(
            item_id=next(self._ids),
            kind=kind,
            x=self._rng.uniform(left, right),
            y=cfg.emitter_y,
            vertical_speed=base_speed * spec.speed_multiplier,
            rotation=self._rng.uniform(0, math.pi),
            rotation_speed=(self._rng.random() - 0.5) * spec.spin,
        )
        logger.debug(f"Spawned {kind.name} #{item.id} at x={item.x:.0f}")
        return item
