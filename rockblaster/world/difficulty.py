"""Difficulty tiers and the asteroid spawn/speed policy."""
from __future__ import annotations

import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from pygame.math import Vector2

from rockblaster.world.asteroids import Asteroid, AsteroidSize

BASE_ASTEROID_COUNT = 5
MAX_LEVEL_BATCH = 8
SAFE_SPAWN_DISTANCE = 100.0
MAX_SPAWN_ATTEMPTS = 1000


@dataclass(frozen=True)
class DifficultyProfile:
    speed_multiplier: float
    thrust: float
    restart_boost_thrust: Optional[float] = None


class Difficulty(Enum):
    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"

    @classmethod
    def from_key(cls, key: "str | Difficulty") -> "Difficulty":
        if isinstance(key, Difficulty):
            return key
        try:
            return cls(str(key).lower())
        except ValueError:
            raise ValueError(f"Unknown difficulty '{key}'") from None

    @property
    def profile(self) -> DifficultyProfile:
        return DIFFICULTY_PROFILES[self]

    @property
    def speed_multiplier(self) -> float:
        return self.profile.speed_multiplier

    def next(self) -> "Difficulty":
        members = list(Difficulty)
        return members[(members.index(self) + 1) % len(members)]


DIFFICULTY_PROFILES = {
    Difficulty.EASY: DifficultyProfile(speed_multiplier=0.7, thrust=0.6),
    Difficulty.NORMAL: DifficultyProfile(speed_multiplier=1.0, thrust=0.5),
    Difficulty.HARD: DifficultyProfile(speed_multiplier=1.5, thrust=0.4, restart_boost_thrust=0.8),
}


def initial_asteroid_count(difficulty: Difficulty) -> int:
    return math.floor(BASE_ASTEROID_COUNT * difficulty.speed_multiplier)


def level_batch_size(level: int, difficulty: Difficulty) -> int:
    """Large asteroids spawned when ``level`` begins."""

    return min(MAX_LEVEL_BATCH, initial_asteroid_count(difficulty) + level // 2)


def target_speed(size: AsteroidSize, difficulty: Difficulty) -> float:
    return size.base_speed * difficulty.speed_multiplier


def rescale_speeds(asteroids: List[Asteroid], difficulty: Difficulty) -> None:
    """Normalise every asteroid's speed for its size, keeping its heading."""

    for asteroid in asteroids:
        current = asteroid.velocity.length()
        if current <= 0.0:
            continue
        asteroid.velocity *= target_speed(asteroid.size, difficulty) / current


def safe_spawn_point(
    rng: random.Random,
    width: float,
    height: float,
    avoid: Vector2,
    min_distance: float = SAFE_SPAWN_DISTANCE,
) -> Vector2:
    for _ in range(MAX_SPAWN_ATTEMPTS):
        candidate = Vector2(rng.random() * width, rng.random() * height)
        if candidate.distance_to(avoid) >= min_distance:
            return candidate
    raise RuntimeError(
        f"No spawn point {min_distance:.0f} units clear of the ship in a {width:.0f}x{height:.0f} field"
    )


def spawn_large_asteroids(
    count: int,
    rng: random.Random,
    width: float,
    height: float,
    avoid: Vector2,
    speed_multiplier: float = 1.0,
) -> List[Asteroid]:
    asteroids = []
    for _ in range(count):
        position = safe_spawn_point(rng, width, height, avoid)
        asteroid = Asteroid.spawn(position, AsteroidSize.LARGE, rng)
        asteroid.velocity *= speed_multiplier
        asteroids.append(asteroid)
    return asteroids


def adjust_population(
    asteroids: List[Asteroid],
    difficulty: Difficulty,
    rng: random.Random,
    width: float,
    height: float,
    avoid: Vector2,
) -> int:
    """Move the asteroid count toward the tier's starting count.

    Returns the signed change in population. Missing asteroids are appended as
    fresh large rocks away from ``avoid``; surplus ones are cut from the tail.
    """

    rescale_speeds(asteroids, difficulty)
    target = initial_asteroid_count(difficulty)
    current = len(asteroids)
    if current < target:
        asteroids.extend(
            spawn_large_asteroids(target - current, rng, width, height, avoid, difficulty.speed_multiplier)
        )
    elif current > target:
        del asteroids[target:]
    return len(asteroids) - current


__all__ = [
    "DIFFICULTY_PROFILES",
    "Difficulty",
    "DifficultyProfile",
    "adjust_population",
    "initial_asteroid_count",
    "level_batch_size",
    "rescale_speeds",
    "safe_spawn_point",
    "spawn_large_asteroids",
    "target_speed",
]
