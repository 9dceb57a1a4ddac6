"""Per-tick world simulation: entities, collisions, levels and difficulty."""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional

from rockblaster.combat.collisions import CollisionEngine, CollisionReport
from rockblaster.combat.scoring import ScoreState
from rockblaster.combat.weapons import Projectile
from rockblaster.engine.logger import ChannelLogger, GameLogger
from rockblaster.engine.telemetry import CollisionTelemetry
from rockblaster.render.state import (
    AsteroidView,
    ParticleView,
    ProjectileView,
    ShipView,
    WorldSnapshot,
)
from rockblaster.ships.flight import update_ship_flight
from rockblaster.ships.ship import DEFAULT_SHIP_COLOR, Ship, ShipControlState
from rockblaster.world.asteroids import Asteroid
from rockblaster.world.difficulty import (
    Difficulty,
    adjust_population,
    initial_asteroid_count,
    level_batch_size,
    rescale_speeds,
    spawn_large_asteroids,
)
from rockblaster.world.events import GameEvent, SoundEvent
from rockblaster.world.particles import Particle

TICK_SECONDS = 1.0 / 60.0


@dataclass
class TickResult:
    collisions: CollisionReport
    events: List[GameEvent] = field(default_factory=list)
    level_up: bool = False

    @property
    def ship_destroyed(self) -> bool:
        return self.collisions.ship_destroyed


class Simulation:
    """Owns every entity list and advances them one tick at a time."""

    def __init__(
        self,
        width: float,
        height: float,
        difficulty: Difficulty = Difficulty.NORMAL,
        rng: Optional[random.Random] = None,
        logger: Optional[GameLogger] = None,
        particles_enabled: bool = True,
        ship_color: str = DEFAULT_SHIP_COLOR,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("play area must have a positive size")
        self.width = float(width)
        self.height = float(height)
        self.difficulty = Difficulty.from_key(difficulty)
        self.rng = rng or random.Random()
        self.particles_enabled = particles_enabled
        self.ship_color = ship_color
        self._physics_log: Optional[ChannelLogger] = logger.channel("physics") if logger else None
        self._spawn_log: Optional[ChannelLogger] = logger.channel("spawn") if logger else None
        self._combat_log: Optional[ChannelLogger] = logger.channel("combat") if logger else None
        self.telemetry = CollisionTelemetry()
        self.collisions = CollisionEngine(
            self.rng,
            particles_enabled=particles_enabled,
            logger=self._combat_log,
            telemetry=self.telemetry,
        )
        self.ship = Ship.at_center(self.width, self.height, self.difficulty.profile.thrust, ship_color)
        self.asteroids: List[Asteroid] = []
        self.projectiles: List[Projectile] = []
        self.particles: List[Particle] = []
        self.score = ScoreState()
        self.thrusting = False

    @property
    def level(self) -> int:
        return self.score.level

    def reset(self, now_ms: float = 0.0, boost: bool = False) -> List[GameEvent]:
        """Start a fresh round; returns the events raised while doing so."""

        events: List[GameEvent] = []
        profile = self.difficulty.profile
        self.ship = Ship.at_center(self.width, self.height, profile.thrust, self.ship_color)
        self.projectiles.clear()
        self.particles.clear()
        self.score = ScoreState()
        self.thrusting = False
        self.asteroids[:] = spawn_large_asteroids(
            initial_asteroid_count(self.difficulty),
            self.rng,
            self.width,
            self.height,
            self.ship.position,
        )
        if boost and profile.restart_boost_thrust is not None:
            self.ship.start_boost(profile.restart_boost_thrust, now_ms)
            events.append(GameEvent(SoundEvent.POWERUP))
            if self._physics_log:
                self._physics_log.info("Restart boost: thrust %.2f", profile.restart_boost_thrust)
        if self._spawn_log:
            self._spawn_log.info(
                "New round on %s: %d asteroids", self.difficulty.value, len(self.asteroids)
            )
        return events

    def fire(self) -> GameEvent:
        self.projectiles.append(self.ship.shoot().build())
        return GameEvent(SoundEvent.SHOOT)

    def tick(self, control: ShipControlState, now_ms: float, dt: float = TICK_SECONDS) -> TickResult:
        events: List[GameEvent] = []
        width, height = self.width, self.height

        if self.ship.expire_boost(now_ms, self.difficulty.profile.thrust) and self._physics_log:
            self._physics_log.info("Boost expired, thrust back to %.2f", self.ship.thrust)
        update_ship_flight(self.ship, control, width, height)
        self.thrusting = control.thrust
        if control.thrust:
            events.append(GameEvent(SoundEvent.THRUST))

        for projectile in self.projectiles:
            projectile.update()
        self.projectiles[:] = [p for p in self.projectiles if p.alive(width, height)]

        for asteroid in self.asteroids:
            asteroid.update(width, height)

        if self.particles_enabled:
            for particle in self.particles:
                particle.update()
            self.particles[:] = [p for p in self.particles if p.alive()]

        report = self.collisions.resolve(
            self.ship, self.projectiles, self.asteroids, self.particles, self.score, now_ms
        )
        events.extend(report.events)

        self.score.expire_combo(now_ms)

        level_up = False
        if not self.asteroids:
            level_up = True
            events.append(self._advance_level())

        rescale_speeds(self.asteroids, self.difficulty)
        self.telemetry.advance_time(dt, self._combat_log)
        return TickResult(collisions=report, events=events, level_up=level_up)

    def _advance_level(self) -> GameEvent:
        self.score.level += 1
        count = level_batch_size(self.score.level, self.difficulty)
        self.asteroids.extend(
            spawn_large_asteroids(count, self.rng, self.width, self.height, self.ship.position)
        )
        if self._spawn_log:
            self._spawn_log.info("Level %d: spawned %d asteroids", self.score.level, count)
        return GameEvent(SoundEvent.LEVELUP)

    def set_difficulty(self, difficulty: Difficulty) -> None:
        """Switch tiers mid-round without moving any asteroid."""

        self.difficulty = Difficulty.from_key(difficulty)
        delta = adjust_population(
            self.asteroids, self.difficulty, self.rng, self.width, self.height, self.ship.position
        )
        self.ship.thrust = self.difficulty.profile.thrust
        self.ship.boost_expires_at = None
        if self._spawn_log:
            self._spawn_log.info("Difficulty now %s (population %+d)", self.difficulty.value, delta)

    def set_particles_enabled(self, enabled: bool) -> None:
        self.particles_enabled = enabled
        self.collisions.particles_enabled = enabled
        if not enabled:
            self.particles.clear()

    def set_ship_color(self, color: str) -> None:
        self.ship_color = color
        self.ship.color = color

    def shift_timers(self, delta_ms: float) -> None:
        """Push wall-clock deadlines forward, e.g. by the time spent paused."""

        self.score.last_hit_ms += delta_ms
        if self.ship.boost_expires_at is not None:
            self.ship.boost_expires_at += delta_ms

    def snapshot(self) -> WorldSnapshot:
        ship = self.ship
        return WorldSnapshot(
            width=self.width,
            height=self.height,
            ship=ShipView(
                position=(ship.position.x, ship.position.y),
                angle=ship.angle,
                color=ship.color,
                boosting=ship.boosting,
                thrusting=self.thrusting,
            ),
            asteroids=tuple(
                AsteroidView(
                    position=(a.position.x, a.position.y),
                    rotation=a.rotation,
                    radius=a.radius,
                    size=a.size.value,
                    outline=a.outline,
                )
                for a in self.asteroids
            ),
            projectiles=tuple(ProjectileView(position=(p.position.x, p.position.y)) for p in self.projectiles),
            particles=tuple(
                ParticleView(position=(p.position.x, p.position.y), hue=p.hue, alpha=p.alpha)
                for p in self.particles
            ),
            level=self.score.level,
            combo=self.score.combo,
        )


__all__ = ["Simulation", "TICK_SECONDS", "TickResult"]
