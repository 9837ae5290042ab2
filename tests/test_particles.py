"""Particle system."""

import numpy as np

from vaultfall.animation.particles import Particle, ParticleField


def test_particle_integrates_and_ages():
    p = Particle(x=0, y=0, vx=1, vy=-2)
    p.update(0.02)
    assert (p.x, p.y) == (1, -2)
    assert p.life == 0.98


def test_alpha_clamped_to_unit_range():
    assert Particle(0, 0, life=1.5).alpha == 1.0
    assert Particle(0, 0, life=-0.1).alpha == 0.0


def test_field_removes_dead_particles():
    field = ParticleField(decay=0.02)
    field.emit_text(10, 10, "+$500", (255, 255, 255))
    for _ in range(49):
        field.update()
    assert len(field) == 1
    for _ in range(2):
        field.update()
    assert len(field) == 0


def test_burst_fans_upward(rng):
    field = ParticleField()
    field.burst(100, 100, 20, [(255, 0, 0)], rng)

    assert len(field) == 20
    assert all(p.vy < 0 for p in field)
    assert all(p.text is None and p.life == 1.0 for p in field)


def test_render_fades_with_life():
    bright = np.zeros((50, 50, 3), dtype=np.uint8)
    dim = np.zeros((50, 50, 3), dtype=np.uint8)

    field = ParticleField()
    field.add(Particle(25, 25, color=(200, 200, 200)))
    field.render(bright)
    field.clear()
    field.add(Particle(25, 25, life=0.25, color=(200, 200, 200)))
    field.render(dim)

    assert bright[25, 25, 0] == 200
    assert 0 < dim[25, 25, 0] < 200
