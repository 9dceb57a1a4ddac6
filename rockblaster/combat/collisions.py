"""Projectile/asteroid and ship/asteroid collision resolution."""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional

from pygame.math import Vector2

from rockblaster.combat.scoring import POWERUP_COMBOS, ScoreState
from rockblaster.combat.weapons import Projectile
from rockblaster.engine.logger import ChannelLogger
from rockblaster.engine.telemetry import CollisionTelemetry
from rockblaster.ships.ship import Ship
from rockblaster.world.asteroids import Asteroid, AsteroidSize
from rockblaster.world.events import GameEvent, SoundEvent
from rockblaster.world.particles import Particle, spawn_explosion

SHIP_COLLISION_PADDING = 10.0


@dataclass(frozen=True)
class AsteroidHit:
    size: AsteroidSize
    position: Vector2
    points: int
    combo: int
    fragments: int


@dataclass
class CollisionReport:
    hits: List[AsteroidHit] = field(default_factory=list)
    events: List[GameEvent] = field(default_factory=list)
    ship_destroyed: bool = False

    @property
    def points(self) -> int:
        return sum(hit.points for hit in self.hits)


class CollisionEngine:
    """Runs once per tick over lists owned by the simulation.

    Hits are resolved first-match-wins: projectiles are walked in list order
    and each takes the first asteroid, in list order, that no earlier
    projectile already claimed this tick. Fragments join the asteroid list
    after the scan, so they cannot be hit until the next tick.
    """

    def __init__(
        self,
        rng: random.Random,
        particles_enabled: bool = True,
        logger: Optional[ChannelLogger] = None,
        telemetry: Optional[CollisionTelemetry] = None,
    ) -> None:
        self.rng = rng
        self.particles_enabled = particles_enabled
        self.logger = logger
        self.telemetry = telemetry or CollisionTelemetry()

    def resolve(
        self,
        ship: Ship,
        projectiles: List[Projectile],
        asteroids: List[Asteroid],
        particles: List[Particle],
        score: ScoreState,
        now_ms: float,
    ) -> CollisionReport:
        report = CollisionReport()
        self.telemetry.begin_tick(len(projectiles), len(asteroids))

        spent: set[int] = set()
        destroyed: set[int] = set()
        fragments: List[Asteroid] = []
        for p_index, projectile in enumerate(projectiles):
            for a_index, asteroid in enumerate(asteroids):
                if a_index in destroyed:
                    continue
                self.telemetry.record_tested()
                if projectile.position.distance_to(asteroid.position) >= asteroid.radius:
                    continue
                spent.add(p_index)
                destroyed.add(a_index)
                pieces = asteroid.fragments(self.rng)
                fragments.extend(pieces)
                self._score_hit(asteroid, len(pieces), particles, score, now_ms, report)
                break

        if spent:
            projectiles[:] = [p for index, p in enumerate(projectiles) if index not in spent]
        if destroyed or fragments:
            asteroids[:] = [a for index, a in enumerate(asteroids) if index not in destroyed] + fragments

        for asteroid in asteroids:
            if ship.position.distance_to(asteroid.position) < asteroid.radius + SHIP_COLLISION_PADDING:
                self.telemetry.record_ship_contact()
                report.ship_destroyed = True
                report.events.append(GameEvent(SoundEvent.HIT))
                if self.logger:
                    self.logger.info(
                        "Ship struck by %s asteroid at (%.1f, %.1f)",
                        asteroid.size.value,
                        asteroid.position.x,
                        asteroid.position.y,
                    )
                break
        return report

    def _score_hit(
        self,
        asteroid: Asteroid,
        fragment_count: int,
        particles: List[Particle],
        score: ScoreState,
        now_ms: float,
        report: CollisionReport,
    ) -> None:
        if self.particles_enabled:
            particles.extend(spawn_explosion(asteroid.position, asteroid.radius, self.rng))
        points = score.register_hit(asteroid.size, now_ms)
        self.telemetry.record_hit()
        if score.combo > 1:
            report.events.append(GameEvent(SoundEvent.COMBO, combo_level=score.combo))
        report.events.append(GameEvent(SoundEvent.EXPLOSION))
        if score.combo in POWERUP_COMBOS:
            report.events.append(GameEvent(SoundEvent.POWERUP, combo_level=score.combo))
        report.hits.append(
            AsteroidHit(
                size=asteroid.size,
                position=Vector2(asteroid.position),
                points=points,
                combo=score.combo,
                fragments=fragment_count,
            )
        )
        if self.logger:
            self.logger.debug(
                "Destroyed %s asteroid for %d points (combo x%d)",
                asteroid.size.value,
                points,
                score.combo,
            )


__all__ = ["AsteroidHit", "CollisionEngine", "CollisionReport", "SHIP_COLLISION_PADDING"]
