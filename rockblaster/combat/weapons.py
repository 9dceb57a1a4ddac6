"""Projectiles fired by the player ship."""
from __future__ import annotations

from dataclasses import dataclass, field

from pygame.math import Vector2

PROJECTILE_LIFETIME = 40
PROJECTILE_SPEED = 10.0
MUZZLE_OFFSET = 15.0


@dataclass(frozen=True)
class ProjectileSpawn:
    """Request to create a projectile; the simulation owns the actual list."""

    position: Vector2
    velocity: Vector2

    def build(self) -> "Projectile":
        return Projectile(position=Vector2(self.position), velocity=Vector2(self.velocity))


@dataclass
class Projectile:
    position: Vector2
    velocity: Vector2
    life: int = field(default=PROJECTILE_LIFETIME)

    def update(self) -> None:
        self.position += self.velocity
        self.life -= 1

    def in_bounds(self, width: float, height: float) -> bool:
        return 0.0 < self.position.x < width and 0.0 < self.position.y < height

    def alive(self, width: float, height: float) -> bool:
        return self.life > 0 and self.in_bounds(width, height)


__all__ = [
    "MUZZLE_OFFSET",
    "PROJECTILE_LIFETIME",
    "PROJECTILE_SPEED",
    "Projectile",
    "ProjectileSpawn",
]
