"""Catcher simulation: spawning, motion, collisions and feedback."""

from vaultfall.game.entities import FallingItem, FrameInputs, GameMode, ItemKind

__all__ = ["FallingItem", "FrameInputs", "GameMode", "ItemKind"]
