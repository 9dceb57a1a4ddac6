"""Fire-and-forget notifications raised by the simulation."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SoundEvent(Enum):
    SHOOT = "shoot"
    EXPLOSION = "explosion"
    HIT = "hit"
    THRUST = "thrust"
    COMBO = "combo"
    LEVELUP = "levelup"
    POWERUP = "powerup"


@dataclass(frozen=True)
class GameEvent:
    sound: SoundEvent
    combo_level: int = 0


__all__ = ["GameEvent", "SoundEvent"]
