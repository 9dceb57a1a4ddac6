"""Asteroid entities and their size classes."""
from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

from pygame.math import Vector2

Outline = Tuple[Tuple[float, float], ...]

MIN_OUTLINE_POINTS = 8
MAX_OUTLINE_POINTS = 12
OUTLINE_VARIANCE = (0.8, 1.2)
SPAWN_SPEED_SPREAD = 3.0
ROTATION_SPEED_SPREAD = 0.05
FRAGMENT_COUNT = 2


class AsteroidSize(Enum):
    LARGE = "large"
    MEDIUM = "medium"
    SMALL = "small"

    @property
    def radius(self) -> float:
        return _RADII[self]

    @property
    def base_speed(self) -> float:
        return _BASE_SPEEDS[self]

    @property
    def points(self) -> int:
        return _POINTS[self]

    @property
    def fragment(self) -> "AsteroidSize | None":
        """Size of the pieces this asteroid breaks into, or None if it is dust."""

        return _FRAGMENTS[self]


_RADII = {AsteroidSize.LARGE: 40.0, AsteroidSize.MEDIUM: 25.0, AsteroidSize.SMALL: 15.0}
_BASE_SPEEDS = {AsteroidSize.LARGE: 2.0, AsteroidSize.MEDIUM: 3.0, AsteroidSize.SMALL: 4.0}
_POINTS = {AsteroidSize.LARGE: 20, AsteroidSize.MEDIUM: 50, AsteroidSize.SMALL: 100}
_FRAGMENTS = {
    AsteroidSize.LARGE: AsteroidSize.MEDIUM,
    AsteroidSize.MEDIUM: AsteroidSize.SMALL,
    AsteroidSize.SMALL: None,
}


def generate_outline(radius: float, rng: random.Random) -> Outline:
    """Irregular polygon around the origin, evenly spaced with jittered radii."""

    point_count = rng.randint(MIN_OUTLINE_POINTS, MAX_OUTLINE_POINTS)
    low, high = OUTLINE_VARIANCE
    points = []
    for index in range(point_count):
        angle = (index / point_count) * math.tau
        distance = radius * rng.uniform(low, high)
        points.append((math.cos(angle) * distance, math.sin(angle) * distance))
    return tuple(points)


@dataclass
class Asteroid:
    position: Vector2
    velocity: Vector2
    size: AsteroidSize
    outline: Outline
    rotation: float = 0.0
    rotation_speed: float = 0.0
    _radius: float = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.outline:
            raise ValueError("asteroid outline needs at least one vertex")
        self.outline = tuple((float(x), float(y)) for x, y in self.outline)
        self._radius = self.size.radius

    @classmethod
    def spawn(cls, position: Vector2, size: AsteroidSize, rng: random.Random) -> "Asteroid":
        velocity = Vector2(
            (rng.random() - 0.5) * SPAWN_SPEED_SPREAD,
            (rng.random() - 0.5) * SPAWN_SPEED_SPREAD,
        )
        return cls(
            position=Vector2(position),
            velocity=velocity,
            size=size,
            outline=generate_outline(size.radius, rng),
            rotation_speed=(rng.random() - 0.5) * ROTATION_SPEED_SPREAD,
        )

    @property
    def radius(self) -> float:
        return self._radius

    def update(self, width: float, height: float) -> None:
        self.position += self.velocity
        self.rotation += self.rotation_speed

        r = self._radius
        if self.position.x < -r:
            self.position.x = width + r
        elif self.position.x > width + r:
            self.position.x = -r
        if self.position.y < -r:
            self.position.y = height + r
        elif self.position.y > height + r:
            self.position.y = -r

    def fragments(self, rng: random.Random) -> list["Asteroid"]:
        child = self.size.fragment
        if child is None:
            return []
        return [Asteroid.spawn(self.position, child, rng) for _ in range(FRAGMENT_COUNT)]


__all__ = ["Asteroid", "AsteroidSize", "Outline", "generate_outline"]
