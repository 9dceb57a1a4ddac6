"""Explosion debris. Purely cosmetic, never collides."""
from __future__ import annotations

import random
from dataclasses import dataclass

from pygame.math import Vector2

PARTICLE_LIFE = 30
PARTICLE_DRAG = 0.98
PARTICLE_SPEED_SPREAD = 8.0
HUE_RANGE = (10.0, 70.0)


@dataclass
class Particle:
    position: Vector2
    velocity: Vector2
    hue: float
    life: int = PARTICLE_LIFE
    max_life: int = PARTICLE_LIFE

    @property
    def alpha(self) -> float:
        if self.max_life <= 0:
            return 0.0
        return max(0.0, min(1.0, self.life / self.max_life))

    def update(self) -> None:
        self.position += self.velocity
        self.velocity *= PARTICLE_DRAG
        self.life -= 1

    def alive(self) -> bool:
        return self.life > 0


def spawn_explosion(position: Vector2, radius: float, rng: random.Random) -> list[Particle]:
    count = int(radius // 2)
    particles = []
    for _ in range(count):
        velocity = Vector2(
            (rng.random() - 0.5) * PARTICLE_SPEED_SPREAD,
            (rng.random() - 0.5) * PARTICLE_SPEED_SPREAD,
        )
        particles.append(Particle(position=Vector2(position), velocity=velocity, hue=rng.uniform(*HUE_RANGE)))
    return particles


__all__ = ["PARTICLE_LIFE", "Particle", "spawn_explosion"]
