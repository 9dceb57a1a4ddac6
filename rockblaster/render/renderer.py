"""Vector renderer built on pygame."""
from __future__ import annotations

import math
from typing import Iterable, List, Sequence, Tuple

import pygame

from rockblaster.render.state import AsteroidView, ParticleView, ProjectileView, ShipView, WorldSnapshot

BACKGROUND = (0, 0, 0)
STAR_COLOR = (255, 255, 255)
ASTEROID_COLOR = (255, 255, 255)
PROJECTILE_COLOR = (255, 255, 0)
BOOST_GLOW_COLOR = (255, 217, 61)
FLAME_COLOR = (255, 107, 107)
STAR_COUNT = 50

# Ship hull in local space, nose pointing along +x.
SHIP_HULL: Tuple[Tuple[float, float], ...] = ((15.0, 0.0), (-10.0, -10.0), (-5.0, 0.0), (-10.0, 10.0))
FLAME: Tuple[Tuple[float, float], ...] = ((-5.0, -5.0), (-15.0, 0.0), (-5.0, 5.0))
BOOST_FLAME: Tuple[Tuple[float, float], ...] = ((-5.0, -7.0), (-22.0, 0.0), (-5.0, 7.0))


def transform_points(
    points: Iterable[Tuple[float, float]],
    position: Tuple[float, float],
    angle: float,
) -> List[Tuple[float, float]]:
    """Rotate local-space points by ``angle`` and move them to ``position``."""

    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    px, py = position
    return [(px + x * cos_a - y * sin_a, py + x * sin_a + y * cos_a) for x, y in points]


def star_positions(width: int, height: int, count: int = STAR_COUNT) -> List[Tuple[int, int, float]]:
    """Fixed backdrop that does not flicker between frames."""

    if width <= 0 or height <= 0:
        return []
    return [((i * 73) % width, (i * 37) % height, (i % 3) * 0.5 + 0.5) for i in range(count)]


def parse_color(value: str, fallback: Tuple[int, int, int] = (78, 205, 196)) -> pygame.Color:
    try:
        return pygame.Color(value)
    except (ValueError, TypeError):
        return pygame.Color(*fallback)


def particle_color(hue: float) -> pygame.Color:
    color = pygame.Color(0, 0, 0)
    color.hsla = (hue % 360.0, 100, 50, 100)
    return color


class VectorRenderer:
    def __init__(self, surface: pygame.Surface) -> None:
        self.surface = surface
        self._stars = star_positions(surface.get_width(), surface.get_height())

    def draw(self, world: WorldSnapshot, draw_particles: bool = True) -> None:
        self.surface.fill(BACKGROUND)
        self._draw_stars()
        if draw_particles:
            self._draw_particles(world.particles)
        self._draw_ship(world.ship)
        for asteroid in world.asteroids:
            self._draw_asteroid(asteroid)
        self._draw_projectiles(world.projectiles)

    def _draw_stars(self) -> None:
        for x, y, size in self._stars:
            pygame.draw.rect(self.surface, STAR_COLOR, pygame.Rect(x, y, max(1, round(size)), max(1, round(size))))

    def _draw_particles(self, particles: Sequence[ParticleView]) -> None:
        for particle in particles:
            color = particle_color(particle.hue)
            # Fade toward the background instead of per-pixel alpha blending.
            faded = tuple(int(c * particle.alpha) for c in (color.r, color.g, color.b))
            x, y = particle.position
            pygame.draw.rect(self.surface, faded, pygame.Rect(int(x) - 2, int(y) - 2, 4, 4))

    def _draw_ship(self, ship: ShipView) -> None:
        color = parse_color(ship.color)
        if ship.boosting:
            glow = transform_points(SHIP_HULL, ship.position, ship.angle)
            pygame.draw.polygon(self.surface, BOOST_GLOW_COLOR, glow, 4)
        pygame.draw.polygon(self.surface, color, transform_points(SHIP_HULL, ship.position, ship.angle), 2)
        if ship.thrusting:
            flame = BOOST_FLAME if ship.boosting else FLAME
            flame_color = BOOST_GLOW_COLOR if ship.boosting else FLAME_COLOR
            pygame.draw.lines(self.surface, flame_color, False, transform_points(flame, ship.position, ship.angle), 2)

    def _draw_asteroid(self, asteroid: AsteroidView) -> None:
        points = transform_points(asteroid.outline, asteroid.position, asteroid.rotation)
        if len(points) >= 3:
            pygame.draw.polygon(self.surface, ASTEROID_COLOR, points, 2)

    def _draw_projectiles(self, projectiles: Sequence[ProjectileView]) -> None:
        for projectile in projectiles:
            x, y = projectile.position
            pygame.draw.rect(self.surface, PROJECTILE_COLOR, pygame.Rect(int(x) - 2, int(y) - 2, 4, 4))


__all__ = ["VectorRenderer", "parse_color", "particle_color", "star_positions", "transform_points"]
