import random

import pytest
from pygame.math import Vector2

from rockblaster.world.asteroids import Asteroid, AsteroidSize
from rockblaster.world.difficulty import (
    SAFE_SPAWN_DISTANCE,
    Difficulty,
    adjust_population,
    initial_asteroid_count,
    level_batch_size,
    rescale_speeds,
    safe_spawn_point,
    spawn_large_asteroids,
)


def _asteroid(size: AsteroidSize, velocity: Vector2, x: float = 100.0) -> Asteroid:
    asteroid = Asteroid.spawn(Vector2(x, 100.0), size, random.Random(0))
    asteroid.velocity = Vector2(velocity)
    return asteroid


def test_initial_counts_follow_multiplier() -> None:
    assert initial_asteroid_count(Difficulty.EASY) == 3
    assert initial_asteroid_count(Difficulty.NORMAL) == 5
    assert initial_asteroid_count(Difficulty.HARD) == 7


def test_level_batch_grows_and_caps_at_eight() -> None:
    assert level_batch_size(2, Difficulty.NORMAL) == 6
    assert level_batch_size(3, Difficulty.NORMAL) == 6
    assert level_batch_size(4, Difficulty.NORMAL) == 7
    assert level_batch_size(20, Difficulty.NORMAL) == 8
    assert level_batch_size(4, Difficulty.HARD) == 8
    assert level_batch_size(2, Difficulty.EASY) == 4


def test_unknown_difficulty_key_fails_fast() -> None:
    assert Difficulty.from_key("HARD") is Difficulty.HARD
    with pytest.raises(ValueError):
        Difficulty.from_key("nightmare")


def test_difficulty_cycles_through_tiers() -> None:
    assert Difficulty.EASY.next() is Difficulty.NORMAL
    assert Difficulty.HARD.next() is Difficulty.EASY


@pytest.mark.parametrize("difficulty", list(Difficulty))
def test_rescale_converges_to_target_speed_preserving_direction(difficulty: Difficulty) -> None:
    rng = random.Random(11)
    asteroids = []
    for size in AsteroidSize:
        for _ in range(5):
            velocity = Vector2(rng.uniform(-9, 9), rng.uniform(-9, 9))
            if velocity.length() == 0:
                velocity = Vector2(1, 0)
            asteroids.append(_asteroid(size, velocity))
    directions = [a.velocity.normalize() for a in asteroids]

    rescale_speeds(asteroids, difficulty)

    for asteroid, direction in zip(asteroids, directions):
        expected = asteroid.size.base_speed * difficulty.speed_multiplier
        assert asteroid.velocity.length() == pytest.approx(expected)
        assert asteroid.velocity.normalize().dot(direction) == pytest.approx(1.0)


def test_rescale_leaves_stationary_asteroid_alone() -> None:
    asteroid = _asteroid(AsteroidSize.LARGE, Vector2(0, 0))
    rescale_speeds([asteroid], Difficulty.HARD)
    assert asteroid.velocity == Vector2(0, 0)


def test_spawned_asteroids_keep_clear_of_ship() -> None:
    ship = Vector2(400, 300)
    asteroids = spawn_large_asteroids(50, random.Random(4), 800, 600, ship)
    assert len(asteroids) == 50
    for asteroid in asteroids:
        assert asteroid.size is AsteroidSize.LARGE
        assert asteroid.position.distance_to(ship) >= SAFE_SPAWN_DISTANCE
        assert 0 <= asteroid.position.x <= 800
        assert 0 <= asteroid.position.y <= 600


def test_spawn_point_gives_up_when_field_is_too_small() -> None:
    with pytest.raises(RuntimeError):
        safe_spawn_point(random.Random(1), 50, 50, Vector2(25, 25))


def test_adjust_population_appends_fresh_large_asteroids() -> None:
    existing = [_asteroid(AsteroidSize.SMALL, Vector2(1, 0), x=20.0)]
    before = Vector2(existing[0].position)

    delta = adjust_population(existing, Difficulty.HARD, random.Random(8), 800, 600, Vector2(400, 300))

    assert delta == 6
    assert len(existing) == 7
    assert existing[0].position == before
    assert existing[0].velocity.length() == pytest.approx(4.0 * 1.5)
    assert all(a.size is AsteroidSize.LARGE for a in existing[1:])


def test_adjust_population_truncates_the_tail() -> None:
    asteroids = [_asteroid(AsteroidSize.LARGE, Vector2(1, 0), x=float(10 * i)) for i in range(7)]
    head = asteroids[:3]

    delta = adjust_population(asteroids, Difficulty.EASY, random.Random(8), 800, 600, Vector2(0, 100))

    assert delta == -4
    assert asteroids == head
