import math
import random

import pytest
from pygame.math import Vector2

from rockblaster.combat.weapons import MUZZLE_OFFSET, PROJECTILE_SPEED
from rockblaster.ships.flight import TURN_RATE, update_ship_flight, wrap_coordinate
from rockblaster.ships.ship import (
    DEFAULT_SHIP_COLOR,
    SHIP_COLORS,
    SHIP_FRICTION,
    Ship,
    ShipControlState,
    next_ship_color,
)


def _make_ship(x: float = 400.0, y: float = 300.0, thrust: float = 0.5) -> Ship:
    return Ship(position=Vector2(x, y), thrust=thrust)


def test_turn_inputs_rotate_heading_by_fixed_step() -> None:
    ship = _make_ship()
    update_ship_flight(ship, ShipControlState(turn_right=True), 800, 600)
    assert ship.angle == pytest.approx(TURN_RATE)

    update_ship_flight(ship, ShipControlState(turn_left=True), 800, 600)
    update_ship_flight(ship, ShipControlState(turn_left=True), 800, 600)
    assert ship.angle == pytest.approx(-TURN_RATE)


def test_thrust_accelerates_along_heading_then_friction_applies() -> None:
    ship = _make_ship(thrust=0.5)
    ship.angle = math.pi / 2

    update_ship_flight(ship, ShipControlState(thrust=True), 800, 600)

    assert ship.velocity.x == pytest.approx(0.0, abs=1e-9)
    assert ship.velocity.y == pytest.approx(0.5 * SHIP_FRICTION)
    assert ship.position.y == pytest.approx(300.0 + 0.5 * SHIP_FRICTION)


def test_velocity_decays_without_input() -> None:
    ship = _make_ship()
    ship.velocity = Vector2(2.0, 0.0)
    for _ in range(10):
        update_ship_flight(ship, ShipControlState(), 800, 600)
    assert ship.velocity.x == pytest.approx(2.0 * SHIP_FRICTION**10)


def test_ship_wraps_exactly_to_opposite_edge() -> None:
    ship = _make_ship(x=799.0, y=1.0)
    ship.velocity = Vector2(3.0 / SHIP_FRICTION, -3.0 / SHIP_FRICTION)

    update_ship_flight(ship, ShipControlState(), 800, 600)

    assert ship.position.x == pytest.approx(2.0)
    assert ship.position.y == pytest.approx(598.0)


def test_ship_position_stays_inside_bounds_for_random_flight() -> None:
    rng = random.Random(7)
    ship = _make_ship(thrust=0.8)
    width, height = 640, 480
    for _ in range(2000):
        control = ShipControlState(
            turn_left=rng.random() < 0.3,
            turn_right=rng.random() < 0.3,
            thrust=rng.random() < 0.7,
        )
        update_ship_flight(ship, control, width, height)
        assert 0.0 <= ship.position.x < width
        assert 0.0 <= ship.position.y < height


def test_wrap_coordinate_never_returns_the_upper_bound() -> None:
    assert wrap_coordinate(-1e-18, 800.0) < 800.0
    assert wrap_coordinate(800.0, 800.0) == 0.0
    assert wrap_coordinate(-10.0, 800.0) == pytest.approx(790.0)
    with pytest.raises(ValueError):
        wrap_coordinate(1.0, 0.0)


def test_shoot_returns_intent_from_the_nose() -> None:
    ship = _make_ship(x=100.0, y=100.0)
    ship.angle = 0.0

    spawn = ship.shoot()

    assert spawn.position.x == pytest.approx(100.0 + MUZZLE_OFFSET)
    assert spawn.position.y == pytest.approx(100.0)
    assert spawn.velocity.x == pytest.approx(PROJECTILE_SPEED)
    projectile = spawn.build()
    assert projectile.position == spawn.position
    assert projectile.position is not spawn.position


def test_boost_expires_back_to_base_thrust() -> None:
    ship = _make_ship(thrust=0.4)
    ship.start_boost(0.8, now_ms=1000.0, duration_ms=5000.0)
    assert ship.boosting
    assert ship.thrust == 0.8

    assert not ship.expire_boost(6000.0, base_thrust=0.4)
    assert ship.thrust == 0.8

    assert ship.expire_boost(6001.0, base_thrust=0.4)
    assert ship.thrust == 0.4
    assert not ship.boosting


def test_ship_colour_cycle_wraps_and_resets_custom_colours() -> None:
    assert next_ship_color(DEFAULT_SHIP_COLOR) == SHIP_COLORS[1]
    assert next_ship_color(SHIP_COLORS[-1]) == SHIP_COLORS[0]
    assert next_ship_color("#4ECDC4") == SHIP_COLORS[1]
    assert next_ship_color("#123456") == SHIP_COLORS[0]
