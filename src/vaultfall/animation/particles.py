"""Particle system for floating score text and confetti."""

from typing import Optional, List, Sequence, Tuple
from dataclasses import dataclass
import math
import random

import numpy as np
from numpy.typing import NDArray

from vaultfall.graphics.primitives import draw_circle, draw_text_centered

Color = Tuple[int, int, int]

DOT_RADIUS = 4
TEXT_SCALE = 3


@dataclass
class Particle:
    """A decorative particle. Life runs from 1.0 down to 0.0."""

    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    life: float = 1.0
    color: Color = (255, 255, 255)
    text: Optional[str] = None

    @property
    def is_dead(self) -> bool:
        """Check if particle has expired."""
        return self.life <= 0

    @property
    def alpha(self) -> float:
        """Render opacity, proportional to remaining life."""
        return max(0.0, min(1.0, self.life))

    def update(self, decay: float) -> None:
        """Integrate velocity and age by one tick."""
        self.x += self.vx
        self.y += self.vy
        self.life -= decay


class ParticleField:
    """Owns all live particles for a session."""

    def __init__(self, decay: float = 0.02):
        self.decay = decay
        self.particles: List[Particle] = []

    def __len__(self) -> int:
        return len(self.particles)

    def __iter__(self):
        return iter(self.particles)

    def add(self, particle: Particle) -> Particle:
        self.particles.append(particle)
        return particle

    def emit_text(
        self,
        x: float,
        y: float,
        text: str,
        color: Color,
        vy: float = -1.0,
        life: float = 1.0,
    ) -> Particle:
        """Spawn a floating text particle."""
        return self.add(Particle(x=x, y=y, vx=0.0, vy=vy, life=life, color=color, text=text))

    def burst(
        self,
        x: float,
        y: float,
        count: int,
        colors: Sequence[Color],
        rng: random.Random,
        speed_min: float = 1.0,
        speed_max: float = 4.0,
        spread: float = 60.0,
    ) -> None:
        """Emit a confetti burst fanning upward within ``spread`` degrees."""
        for _ in range(count):
            angle = math.radians(-90.0 + rng.uniform(-spread / 2, spread / 2))
            speed = rng.uniform(speed_min, speed_max)
            self.add(Particle(
                x=x,
                y=y,
                vx=math.cos(angle) * speed,
                vy=math.sin(angle) * speed,
                life=1.0,
                color=rng.choice(list(colors)),
            ))

    def update(self) -> None:
        """Advance every particle and drop the expired ones."""
        for particle in self.particles:
            particle.update(self.decay)
        self.particles = [p for p in self.particles if not p.is_dead]

    def render(self, buffer: NDArray[np.uint8]) -> None:
        """Draw all particles; opacity follows remaining life."""
        for particle in self.particles:
            alpha = particle.alpha
            if alpha <= 0:
                continue
            if particle.text:
                draw_text_centered(
                    buffer, particle.text, particle.x, particle.y,
                    particle.color, scale=TEXT_SCALE, alpha=alpha, shadow=True,
                )
            else:
                draw_circle(buffer, particle.x, particle.y, DOT_RADIUS, particle.color, alpha=alpha)

    def clear(self) -> None:
        """Remove all particles."""
        self.particles.clear()
