"""Kill score, combo multiplier and the time bonus."""
from __future__ import annotations

from dataclasses import dataclass

from rockblaster.world.asteroids import AsteroidSize

COMBO_WINDOW_MS = 2000.0
MAX_COMBO_MULTIPLIER = 5
POWERUP_COMBOS = (5, 10)
TIME_BONUS_PER_SECOND = 2


def time_bonus(elapsed_ms: float) -> int:
    """Points earned just by staying alive; derived, never stored."""

    if elapsed_ms <= 0:
        return 0
    return int(elapsed_ms // 1000) * TIME_BONUS_PER_SECOND


def combo_multiplier(combo: int) -> int:
    return max(0, min(combo, MAX_COMBO_MULTIPLIER))


@dataclass
class ScoreState:
    kills: int = 0
    combo: int = 0
    last_hit_ms: float = 0.0
    level: int = 1

    def register_hit(self, size: AsteroidSize, now_ms: float) -> int:
        """Count a hit and return the points awarded for it.

        The combo is bumped before the multiplier is looked up, so the first
        hit of a chain scores at 1x.
        """

        self.combo += 1
        self.last_hit_ms = now_ms
        points = size.points * combo_multiplier(self.combo)
        self.kills += points
        return points

    def expire_combo(self, now_ms: float) -> bool:
        """Drop the combo after a hit-free window; True if a chain was broken."""

        if now_ms - self.last_hit_ms <= COMBO_WINDOW_MS:
            return False
        broken = self.combo > 0
        self.combo = 0
        return broken

    def total(self, elapsed_ms: float) -> int:
        return self.kills + time_bonus(elapsed_ms)


__all__ = [
    "COMBO_WINDOW_MS",
    "MAX_COMBO_MULTIPLIER",
    "POWERUP_COMBOS",
    "ScoreState",
    "combo_multiplier",
    "time_bonus",
]
