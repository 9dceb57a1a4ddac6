import random

import pytest
from pygame.math import Vector2

from rockblaster.combat.weapons import PROJECTILE_LIFETIME, Projectile
from rockblaster.ships.ship import ShipControlState
from rockblaster.world.asteroids import Asteroid, AsteroidSize
from rockblaster.world.simulation import Simulation


def _still(x: float, y: float) -> Projectile:
    return Projectile(position=Vector2(x, y), velocity=Vector2(0, 0))


def _quiet_simulation() -> Simulation:
    simulation = Simulation(800, 600, rng=random.Random(4))
    parked = Asteroid.spawn(Vector2(700.0, 500.0), AsteroidSize.SMALL, random.Random(4))
    parked.velocity = Vector2(0, 0)
    simulation.asteroids[:] = [parked]
    return simulation


def test_projectile_moves_and_counts_down() -> None:
    projectile = Projectile(position=Vector2(100.0, 100.0), velocity=Vector2(10.0, -5.0))
    projectile.update()
    assert projectile.position == Vector2(110.0, 95.0)
    assert projectile.life == PROJECTILE_LIFETIME - 1


@pytest.mark.parametrize(
    "x, y, inside",
    [
        (400.0, 300.0, True),
        (0.0, 300.0, False),
        (800.0, 300.0, False),
        (400.0, 0.0, False),
        (400.0, 600.0, False),
        (0.5, 599.5, True),
    ],
)
def test_bounds_are_exclusive(x: float, y: float, inside: bool) -> None:
    assert _still(x, y).in_bounds(800, 600) is inside


def test_stationary_projectile_expires_on_its_last_tick() -> None:
    simulation = _quiet_simulation()
    simulation.projectiles.append(_still(100.0, 100.0))

    counts = []
    for tick in range(PROJECTILE_LIFETIME + 1):
        simulation.tick(ShipControlState(), now_ms=16.0 * tick)
        counts.append(len(simulation.projectiles))

    assert counts[: PROJECTILE_LIFETIME - 1] == [1] * (PROJECTILE_LIFETIME - 1)
    assert counts[PROJECTILE_LIFETIME - 1 :] == [0, 0]


def test_projectile_leaving_the_field_is_dropped() -> None:
    simulation = _quiet_simulation()
    simulation.projectiles.append(Projectile(position=Vector2(795.0, 100.0), velocity=Vector2(10.0, 0.0)))

    simulation.tick(ShipControlState(), now_ms=0.0)

    assert simulation.projectiles == []


def test_projectile_on_the_left_edge_is_dropped() -> None:
    simulation = _quiet_simulation()
    edge = _still(0.0, 300.0)
    inside = _still(100.0, 300.0)
    simulation.projectiles.extend([edge, inside])

    simulation.tick(ShipControlState(), now_ms=0.0)

    assert simulation.projectiles == [inside]
