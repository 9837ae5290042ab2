"""Game entities and per-kind constants for the catcher simulation."""

import math
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, List, Optional


class ItemKind(Enum):
    """Kinds of falling items."""
    GOLD_COIN = auto()    # Drawn as a gold bar
    SILVER_COIN = auto()
    GEM = auto()
    PENALTY = auto()      # The trap
    BILL = auto()         # Cash stack


class GameMode(Enum):
    """Play modes supplied by the host."""
    TIMED = auto()
    SURVIVAL = auto()


@dataclass(frozen=True)
class KindSpec:
    """Fixed parameters for one item kind."""
    value: int
    radius: float
    speed_multiplier: float
    spin: float  # Max rotation speed magnitude is spin / 2


# Flat shapes (bill, bar) spin slower than round ones
KIND_SPECS: Dict[ItemKind, KindSpec] = {
    ItemKind.PENALTY: KindSpec(value=-2000, radius=18, speed_multiplier=1.5, spin=0.15),
    ItemKind.BILL: KindSpec(value=2000, radius=22, speed_multiplier=1.1, spin=0.05),
    ItemKind.GEM: KindSpec(value=30000, radius=16, speed_multiplier=3.0, spin=0.15),
    ItemKind.SILVER_COIN: KindSpec(value=500, radius=12, speed_multiplier=1.8, spin=0.15),
    ItemKind.GOLD_COIN: KindSpec(value=8000, radius=20, speed_multiplier=2.0, spin=0.05),
}


@dataclass
class FallingItem:
    """A collectible (or trap) falling from the bank."""
    id: int
    x: float
    y: float
    vertical_speed: float
    kind: ItemKind
    value: int
    radius: float
    rotation: float = 0.0
    rotation_speed: float = 0.0

    @classmethod
    def of_kind(
        cls,
        item_id: int,
        kind: ItemKind,
        x: float,
        y: float,
        vertical_speed: float,
        rotation: float = 0.0,
        rotation_speed: float = 0.0,
    ) -> "FallingItem":
        """Build an item using the value and radius from the kind table."""
        spec = KIND_SPECS[kind]
        return cls(
            id=item_id,
            x=x,
            y=y,
            vertical_speed=vertical_speed,
            kind=kind,
            value=spec.value,
            radius=spec.radius,
            rotation=rotation,
            rotation_speed=rotation_speed,
        )

    @property
    def is_penalty(self) -> bool:
        return self.kind is ItemKind.PENALTY

    def distance_to(self, x: float, y: float) -> float:
        return math.hypot(self.x - x, self.y - y)


@dataclass
class Splatter:
    """One decorative mark of a penalty splatter batch."""
    x: float
    y: float
    scale: float
    rotation: float


@dataclass
class RainDrop:
    """A background rain streak."""
    x: float
    y: float
    length: float
    speed: float
    opacity: float
    visible: bool = True  # Re-rolled every tick by the simulation step


@dataclass
class BuildingWindow:
    """A skyline window, relative to its building's top-left corner."""
    x: float
    y: float
    is_lit: bool
    brightness: float = 1.0


@dataclass
class Building:
    """A skyline building."""
    x: float
    width: float
    height: float
    windows: List[BuildingWindow] = field(default_factory=list)


@dataclass(frozen=True)
class FrameInputs:
    """Per-tick inputs supplied by the host."""
    is_playing: bool
    lives: int
    mode: GameMode
    viewport_width: int
    viewport_height: int
    pointer_x: Optional[float] = None  # None keeps the previous catcher position
