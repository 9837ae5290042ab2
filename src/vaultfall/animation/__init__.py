"""Animation module for VAULTFALL."""

from vaultfall.animation.particles import Particle, ParticleField

__all__ = [
    "Particle",
    "ParticleField",
]
