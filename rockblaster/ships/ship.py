"""Player ship entity."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional

from pygame.math import Vector2

from rockblaster.combat.weapons import MUZZLE_OFFSET, PROJECTILE_SPEED, ProjectileSpawn

SHIP_RADIUS = 10.0
SHIP_FRICTION = 0.99
DEFAULT_SHIP_COLOR = "#4ecdc4"
BOOST_DURATION_MS = 5000.0
SHIP_COLORS = ("#4ecdc4", "#ff6b6b", "#ffd93d", "#a29bfe", "#ffffff")


def next_ship_color(current: str) -> str:
    """Next hull colour in the palette; custom colours restart the cycle."""

    try:
        index = SHIP_COLORS.index(current.lower())
    except ValueError:
        return SHIP_COLORS[0]
    return SHIP_COLORS[(index + 1) % len(SHIP_COLORS)]


@dataclass(frozen=True)
class ShipControlState:
    """Read-only view of the steering inputs for one tick."""

    turn_left: bool = False
    turn_right: bool = False
    thrust: bool = False


@dataclass
class Ship:
    position: Vector2
    velocity: Vector2 = field(default_factory=Vector2)
    angle: float = 0.0
    thrust: float = 0.5
    friction: float = SHIP_FRICTION
    radius: float = SHIP_RADIUS
    color: str = DEFAULT_SHIP_COLOR
    boost_expires_at: Optional[float] = None

    @classmethod
    def at_center(cls, width: float, height: float, thrust: float, color: str = DEFAULT_SHIP_COLOR) -> "Ship":
        return cls(position=Vector2(width / 2.0, height / 2.0), thrust=thrust, color=color)

    def forward(self) -> Vector2:
        return Vector2(math.cos(self.angle), math.sin(self.angle))

    @property
    def boosting(self) -> bool:
        return self.boost_expires_at is not None

    def start_boost(self, thrust: float, now_ms: float, duration_ms: float = BOOST_DURATION_MS) -> None:
        self.thrust = thrust
        self.boost_expires_at = now_ms + duration_ms

    def expire_boost(self, now_ms: float, base_thrust: float) -> bool:
        """Drop back to ``base_thrust`` once the boost window has passed."""

        if self.boost_expires_at is None or now_ms <= self.boost_expires_at:
            return False
        self.thrust = base_thrust
        self.boost_expires_at = None
        return True

    def shoot(self) -> ProjectileSpawn:
        forward = self.forward()
        return ProjectileSpawn(
            position=self.position + forward * MUZZLE_OFFSET,
            velocity=forward * PROJECTILE_SPEED,
        )


__all__ = [
    "BOOST_DURATION_MS",
    "DEFAULT_SHIP_COLOR",
    "SHIP_FRICTION",
    "SHIP_COLORS",
    "SHIP_RADIUS",
    "Ship",
    "ShipControlState",
    "next_ship_color",
]
