"""Read-only snapshots handed from the simulation to renderers."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from rockblaster.world.asteroids import Outline


@dataclass(frozen=True)
class ShipView:
    position: Tuple[float, float]
    angle: float
    color: str
    boosting: bool
    thrusting: bool


@dataclass(frozen=True)
class AsteroidView:
    position: Tuple[float, float]
    rotation: float
    radius: float
    size: str
    outline: Outline


@dataclass(frozen=True)
class ProjectileView:
    position: Tuple[float, float]


@dataclass(frozen=True)
class ParticleView:
    position: Tuple[float, float]
    hue: float
    alpha: float


@dataclass(frozen=True)
class WorldSnapshot:
    width: float
    height: float
    ship: ShipView
    asteroids: Tuple[AsteroidView, ...] = ()
    projectiles: Tuple[ProjectileView, ...] = ()
    particles: Tuple[ParticleView, ...] = ()
    level: int = 1
    combo: int = 0


@dataclass(frozen=True)
class GameOverSummary:
    final_score: int
    best_score: int
    level: int
    elapsed_ms: float
    new_high_score: bool


@dataclass(frozen=True)
class SessionSnapshot:
    """Everything the HUD needs for one frame."""

    world: WorldSnapshot
    state: str
    score: int
    high_score: int
    elapsed_ms: float
    difficulty: str
    game_over: Optional[GameOverSummary] = field(default=None)


__all__ = [
    "AsteroidView",
    "GameOverSummary",
    "ParticleView",
    "ProjectileView",
    "SessionSnapshot",
    "ShipView",
    "WorldSnapshot",
]
