"""Flat-screen flight model for the player ship."""
from __future__ import annotations

from pygame.math import Vector2

from .ship import Ship, ShipControlState

TURN_RATE = 0.1


def wrap_coordinate(value: float, span: float) -> float:
    """Wrap ``value`` into ``[0, span)``."""

    if span <= 0:
        raise ValueError("play area must have a positive size")
    wrapped = value % span
    # Float modulo of a tiny negative number can round up to ``span`` itself.
    if wrapped >= span:
        wrapped = 0.0
    return wrapped


def wrap_position(position: Vector2, width: float, height: float) -> Vector2:
    return Vector2(wrap_coordinate(position.x, width), wrap_coordinate(position.y, height))


def update_ship_flight(ship: Ship, control: ShipControlState, width: float, height: float) -> None:
    if control.turn_left:
        ship.angle -= TURN_RATE
    if control.turn_right:
        ship.angle += TURN_RATE
    if control.thrust:
        ship.velocity += ship.forward() * ship.thrust

    ship.velocity *= ship.friction
    ship.position = wrap_position(ship.position + ship.velocity, width, height)


__all__ = ["TURN_RATE", "update_ship_flight", "wrap_coordinate", "wrap_position"]
