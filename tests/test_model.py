"""Unit tests for GameModel - the per-tick simulation phases.

Tests cover:
  - Initialisation (ship tracked once, starting level / spawn rate)
  - Update phase (movement, off-screen removal by identity)
  - Collision phase (ship contacts, bullet vs enemy / asteroid)
  - Spawn phase (fixed draw order, occupancy checks, seeded replay)
  - Level up and game over
"""

from __future__ import annotations

import random

import pytest

from spacegame.core import (
    Asteroid, Bullet, Enemy, HealthPowerUp, ShieldPowerUp, Ship,
)
from spacegame.model import (
    GAME_HEIGHT, GAME_WIDTH, SPAWN_RATE_INCREASE, START_LEVEL, START_SPAWN_RATE, GameModel,
)

from conftest import ScriptedRandom

pytestmark = pytest.mark.unit

EXPECTED_DRAWS = [
    ("randrange", 100), ("randrange", GAME_WIDTH),
    ("randrange", 100), ("randrange", GAME_WIDTH),
    ("randrange", 100), ("randrange", GAME_WIDTH),
    ("getrandbits", 1),
]


def _non_ship(model: GameModel):
    return [o for o in model.space_objects if not isinstance(o, Ship)]


def _make_model(logs=None, verbose=False, **script) -> tuple[GameModel, ScriptedRandom]:
    rng = ScriptedRandom(**script)
    sink = logs if logs is not None else []
    return GameModel(sink.append, rng=rng, verbose=verbose), rng


# ==========================================================================
# Initialisation
# ==========================================================================

class TestInit:

    def test_starting_state(self, model):
        assert model.level == START_LEVEL == 1
        assert model.spawn_rate == START_SPAWN_RATE == 2
        assert model.ship.position == (5, 10)
        assert model.ship.health == 100

    def test_ship_tracked_exactly_once(self, model):
        ships = [o for o in model.space_objects if o is model.ship]
        assert len(ships) == 1
        assert len(model.space_objects) == 1

    def test_add_object_ignores_none(self, model):
        model.add_object(None)
        assert len(model.space_objects) == 1

    def test_logger_required(self):
        with pytest.raises(ValueError):
            GameModel(None)

    def test_creates_own_stats_tracker(self, model):
        assert model.stats_tracker.shots_fired == 0


# ==========================================================================
# Update phase
# ==========================================================================

class TestUpdateGame:

    def test_moves_every_object(self, model):
        asteroid, bullet = Asteroid(1, 3), Bullet(4, 8)
        model.add_object(asteroid)
        model.add_object(bullet)
        model.update_game(0)
        assert asteroid.position == (1, 4)
        assert bullet.position == (4, 7)
        assert model.ship.position == (5, 10)

    def test_removes_objects_leaving_bottom(self, model):
        model.add_object(Enemy(2, GAME_HEIGHT - 1))
        model.update_game(1)
        assert _non_ship(model) == []

    def test_removes_bullets_leaving_top(self, model):
        model.add_object(Bullet(2, 0))
        model.update_game(1)
        assert _non_ship(model) == []

    def test_keeps_objects_on_last_row(self, model):
        enemy = Enemy(2, GAME_HEIGHT - 2)
        model.add_object(enemy)
        model.update_game(1)
        assert _non_ship(model) == [enemy]

    def test_ship_never_removed(self, model):
        model.ship.x = -3
        model.update_game(0)
        assert model.ship in model.space_objects

    def test_removal_by_identity(self, model):
        leaving = Asteroid(2, GAME_HEIGHT - 1)
        staying = Asteroid(2, GAME_HEIGHT - 2)
        model.add_object(leaving)
        model.add_object(staying)
        model.update_game(0)
        remaining = _non_ship(model)
        assert len(remaining) == 1
        assert remaining[0] is staying

    def test_list_identity_preserved(self, model):
        objects = model.space_objects
        model.add_object(Bullet(0, 0))
        model.update_game(0)
        assert model.space_objects is objects


# ==========================================================================
# Collision phase
# ==========================================================================

class TestShipCollisions:

    def test_asteroid_hit(self, model):
        asteroid = Asteroid(5, 10)
        model.add_object(asteroid)
        model.check_collisions()
        assert model.ship.health == 90
        assert asteroid not in model.space_objects

    def test_enemy_hit(self, model):
        model.add_object(Enemy(5, 10))
        model.check_collisions()
        assert model.ship.health == 80
        assert _non_ship(model) == []

    def test_shield_power_up(self, model):
        model.add_object(ShieldPowerUp(5, 10))
        model.check_collisions()
        assert model.ship.score == 50
        assert _non_ship(model) == []

    def test_health_power_up(self, model):
        model.ship.health = 40
        model.add_object(HealthPowerUp(5, 10))
        model.check_collisions()
        assert model.ship.health == 60

    def test_all_simultaneous_contacts_processed(self, model):
        model.add_object(Asteroid(5, 10))
        model.add_object(Enemy(5, 10))
        model.add_object(ShieldPowerUp(5, 10))
        model.check_collisions()
        assert model.ship.health == 70
        assert model.ship.score == 50
        assert _non_ship(model) == []

    def test_other_cells_untouched(self, model):
        asteroid = Asteroid(5, 11)
        model.add_object(asteroid)
        model.check_collisions()
        assert model.ship.health == 100
        assert asteroid in model.space_objects

    def test_bullet_on_ship_cell_survives(self, model):
        model.fire_bullet()
        model.check_collisions()
        assert len(_non_ship(model)) == 1
        assert model.ship.health == 100

    def test_verbose_logging(self, logs):
        model, _ = _make_model(logs, verbose=True)
        model.add_object(Asteroid(5, 10))
        model.add_object(Enemy(5, 10))
        model.add_object(HealthPowerUp(5, 10))
        model.check_collisions()
        assert logs == [
            "Hit by Asteroid(5,10)! Health reduced by 10.",
            "Hit by Enemy(5,10)! Health reduced by 20.",
            "PowerUp collected: HealthPowerUp(5,10)",
        ]

    def test_quiet_when_not_verbose(self, model, logs):
        model.add_object(Enemy(5, 10))
        model.check_collisions()
        assert logs == []


class TestBulletCollisions:

    def test_bullet_and_enemy_destroyed(self, model):
        model.add_object(Bullet(3, 4))
        model.add_object(Enemy(3, 4))
        model.check_collisions()
        assert _non_ship(model) == []
        assert model.stats_tracker.shots_hit == 1

    def test_asteroid_absorbs_bullet(self, model):
        asteroid = Asteroid(3, 4)
        model.add_object(Bullet(3, 4))
        model.add_object(asteroid)
        model.check_collisions()
        assert _non_ship(model) == [asteroid]
        assert model.stats_tracker.shots_hit == 0

    def test_one_bullet_one_enemy(self, model):
        bullet = Bullet(3, 4)
        first, second = Enemy(3, 4), Enemy(3, 4)
        for obj in (bullet, first, second):
            model.add_object(obj)
        model.check_collisions()
        assert _non_ship(model) == [second]
        assert model.stats_tracker.shots_hit == 1

    def test_enemy_and_asteroid_on_bullet_cell(self, model):
        asteroid = Asteroid(3, 4)
        for obj in (Bullet(3, 4), Enemy(3, 4), asteroid):
            model.add_object(obj)
        model.check_collisions()
        assert _non_ship(model) == [asteroid]
        assert model.stats_tracker.shots_hit == 1

    def test_two_bullets_two_enemies(self, model):
        for obj in (Bullet(1, 1), Bullet(1, 1), Enemy(1, 1), Enemy(1, 1)):
            model.add_object(obj)
        model.check_collisions()
        # Both bullets find the first enemy; the second enemy survives
        remaining = _non_ship(model)
        assert len(remaining) == 1
        assert isinstance(remaining[0], Enemy)
        assert model.stats_tracker.shots_hit == 2

    def test_misses_leave_everything(self, model):
        model.add_object(Bullet(3, 4))
        model.add_object(Enemy(3, 5))
        model.check_collisions()
        assert len(_non_ship(model)) == 2

    def test_bullet_meets_enemy_after_update(self, model):
        model.add_object(Bullet(3, 5))
        model.add_object(Enemy(3, 3))
        model.update_game(0)
        model.check_collisions()
        assert _non_ship(model) == []


# ==========================================================================
# Spawn phase
# ==========================================================================

class TestSpawnObjects:

    def test_seven_draws_when_nothing_spawns(self):
        model, rng = _make_model(rolls=[99])
        model.spawn_objects()
        assert rng.calls == EXPECTED_DRAWS
        assert _non_ship(model) == []

    def test_seven_draws_when_everything_spawns(self):
        model, rng = _make_model(rolls=[0], xs=[1, 2, 3], bits=[1])
        model.spawn_objects()
        assert rng.calls == EXPECTED_DRAWS
        spawned = _non_ship(model)
        assert [type(o) for o in spawned] == [Asteroid, Enemy, ShieldPowerUp]
        assert [o.position for o in spawned] == [(1, 0), (2, 0), (3, 0)]

    def test_asteroid_threshold(self):
        model, _ = _make_model(rolls=[1, 99, 99], xs=[4])
        model.spawn_objects()
        assert [o.render() for o in _non_ship(model)] == ["Asteroid(4,0)"]

        model, _ = _make_model(rolls=[2, 99, 99], xs=[4])
        model.spawn_objects()
        assert _non_ship(model) == []

    def test_enemy_uses_half_rate(self):
        model, _ = _make_model(rolls=[99, 0, 99], xs=[0, 6, 0])
        model.spawn_objects()
        assert [o.render() for o in _non_ship(model)] == ["Enemy(6,0)"]

        model, _ = _make_model(rolls=[99, 1, 99])
        model.spawn_objects()
        assert _non_ship(model) == []

    def test_power_up_kind_from_boolean(self):
        model, _ = _make_model(rolls=[99, 99, 0], xs=[0, 0, 7], bits=[0])
        model.spawn_objects()
        assert [o.render() for o in _non_ship(model)] == ["HealthPowerUp(7,0)"]

        model, _ = _make_model(rolls=[99, 99, 0], xs=[0, 0, 7], bits=[1])
        model.spawn_objects()
        assert [o.render() for o in _non_ship(model)] == ["ShieldPowerUp(7,0)"]

    def test_power_up_rate_scales_with_level(self):
        model, _ = _make_model(rolls=[99, 99, 1], xs=[5])
        model.spawn_rate = 7  # 7 * 0.25 = 1.75
        model.spawn_objects()
        assert len(_non_ship(model)) == 1

    def test_occupied_cell_skips_spawn_but_not_draws(self):
        model, rng = _make_model(rolls=[0, 99, 99], xs=[3])
        blocker = Bullet(3, 0)
        model.add_object(blocker)
        model.spawn_objects()
        assert rng.calls == EXPECTED_DRAWS
        assert _non_ship(model) == [blocker]

    def test_ship_cell_refused(self):
        model, _ = _make_model(rolls=[0, 99, 99], xs=[5])
        model.ship.y = 0
        model.spawn_objects()
        assert _non_ship(model) == []

    def test_later_spawn_sees_earlier_spawn(self):
        model, _ = _make_model(rolls=[0, 0, 0], xs=[3], bits=[1])
        model.spawn_objects()
        assert [o.render() for o in _non_ship(model)] == ["Asteroid(3,0)"]

    def test_seeded_runs_replay_exactly(self):
        def run(seed):
            model = GameModel(lambda _: None, rng=random.Random(seed))
            model.spawn_rate = 60
            frames = []
            for tick in range(60):
                model.update_game(tick)
                model.check_collisions()
                model.spawn_objects()
                frames.append(sorted(o.render() for o in model.space_objects))
            return frames

        assert run(1234) == run(1234)
        assert run(1234) != run(4321)

    def test_set_random_seed(self):
        def spawned(model):
            model.spawn_rate = 100
            for _ in range(5):
                model.update_game(0)
                model.spawn_objects()
            return [o.render() for o in _non_ship(model)]

        reseeded = GameModel(lambda _: None, rng=random.Random(1))
        reseeded.set_random_seed(99)
        fresh = GameModel(lambda _: None, rng=random.Random(99))
        assert spawned(reseeded) == spawned(fresh)


# ==========================================================================
# Level up / game over / firing
# ==========================================================================

class TestLevelUp:

    def test_below_threshold(self, model):
        model.ship.score = 99
        model.level_up()
        assert model.level == 1
        assert model.spawn_rate == 2

    def test_at_threshold(self, model):
        model.ship.score = 100
        model.level_up()
        assert model.level == 2
        assert model.spawn_rate == 2 + SPAWN_RATE_INCREASE == 7

    def test_one_level_per_call(self, model):
        model.ship.score = 1000
        model.level_up()
        assert model.level == 2
        model.level_up()
        assert model.level == 3
        assert model.spawn_rate == 12

    def test_next_threshold_scales(self, model):
        model.ship.score = 100
        model.level_up()
        model.level_up()
        assert model.level == 2

    def test_verbose_message(self, logs):
        model, _ = _make_model(logs, verbose=True)
        model.ship.score = 100
        model.level_up()
        assert logs == ["Level Up! Welcome to Level 2. Spawn rate increased to 7%."]

    def test_silent_by_default(self, model, logs):
        model.ship.score = 100
        model.level_up()
        assert logs == []


class TestGameOver:

    def test_alive(self, model):
        model.ship.health = 1
        assert model.check_game_over() is False

    def test_dead(self, model):
        model.ship.health = 0
        assert model.check_game_over() is True

    def test_enemy_hits_until_dead(self, model):
        for _ in range(5):
            model.add_object(Enemy(5, 10))
            model.check_collisions()
        assert model.ship.health == 0
        assert model.check_game_over()


class TestFireBullet:

    def test_bullet_at_ship(self, model):
        model.ship.x, model.ship.y = 2, 15
        model.fire_bullet()
        bullets = [o for o in model.space_objects if isinstance(o, Bullet)]
        assert [b.position for b in bullets] == [(2, 15)]

    def test_no_random_draws(self):
        model, rng = _make_model()
        model.fire_bullet()
        model.fire_bullet()
        assert rng.calls == []
        assert len(_non_ship(model)) == 2


class TestInBounds:

    @pytest.mark.parametrize("x, y, expected", [
        (0, 0, True),
        (GAME_WIDTH - 1, GAME_HEIGHT - 1, True),
        (-1, 0, False),
        (0, -1, False),
        (GAME_WIDTH, 0, False),
        (0, GAME_HEIGHT, False),
    ])
    def test_bounds(self, x, y, expected):
        assert GameModel.is_in_bounds(Asteroid(x, y)) is expected
