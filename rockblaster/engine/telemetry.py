"""Lightweight runtime telemetry: frame rate and collision counters."""
from __future__ import annotations

from dataclasses import dataclass

from rockblaster.engine.logger import ChannelLogger

COLLISION_LOG_INTERVAL = 2.5


@dataclass
class CollisionTelemetrySnapshot:
    projectiles: int
    asteroids: int
    pairs_tested: int
    hits: int
    ship_contacts: int


@dataclass
class CollisionTelemetry:
    """Aggregates per-tick collision statistics."""

    projectiles: int = 0
    asteroids: int = 0
    pairs_tested: int = 0
    hits: int = 0
    ship_contacts: int = 0
    total_hits: int = 0
    _log_accumulator: float = 0.0

    def begin_tick(self, projectiles: int, asteroids: int) -> None:
        self.projectiles = projectiles
        self.asteroids = asteroids
        self.pairs_tested = 0
        self.hits = 0
        self.ship_contacts = 0

    def record_tested(self, count: int = 1) -> None:
        self.pairs_tested += count

    def record_hit(self) -> None:
        self.hits += 1
        self.total_hits += 1

    def record_ship_contact(self) -> None:
        self.ship_contacts += 1

    def advance_time(self, dt: float, logger: ChannelLogger | None = None) -> None:
        self._log_accumulator += dt
        if self._log_accumulator >= COLLISION_LOG_INTERVAL:
            self._log_accumulator = 0.0
            if logger and logger.enabled:
                logger.info(
                    "Collisions: projectiles=%d asteroids=%d tested=%d hits=%d total_hits=%d",
                    self.projectiles,
                    self.asteroids,
                    self.pairs_tested,
                    self.hits,
                    self.total_hits,
                )

    def snapshot(self) -> CollisionTelemetrySnapshot:
        return CollisionTelemetrySnapshot(
            projectiles=self.projectiles,
            asteroids=self.asteroids,
            pairs_tested=self.pairs_tested,
            hits=self.hits,
            ship_contacts=self.ship_contacts,
        )


@dataclass
class FrameRateCounter:
    """Counts rendered frames and publishes the rate once per second."""

    fps: int = 0
    _frames: int = 0
    _window_start: float | None = None

    def tick(self, now_ms: float) -> int:
        if self._window_start is None:
            self._window_start = now_ms
        self._frames += 1
        if now_ms - self._window_start >= 1000.0:
            self.fps = self._frames
            self._frames = 0
            self._window_start = now_ms
        return self.fps


__all__ = [
    "CollisionTelemetry",
    "CollisionTelemetrySnapshot",
    "FrameRateCounter",
]
