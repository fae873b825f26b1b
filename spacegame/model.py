"""
GameModel - the tick-driven simulation engine
---------------------------------------------
Owns the tracked objects, the ship and the level / spawn-rate state.
One tick runs five phases in a fixed order:

    update_game -> check_collisions -> spawn_objects -> level_up -> check_game_over

The engine never stops itself; whoever drives ticks polls check_game_over().

Randomness comes from an injected random.Random and is only consumed by
spawn_objects(), which always makes the same 7 draws per call so a seeded
run replays exactly.
"""

from __future__ import annotations

import random
from typing import Callable, List, Optional

from .core.entities import (
    ASTEROID_DAMAGE, ENEMY_DAMAGE,
    Asteroid, Bullet, Enemy, HealthPowerUp, PowerUp, ShieldPowerUp, Ship, SpaceObject,
)
from .core.utils import in_bounds
from .achievements.stats import PlayerStatsTracker

GAME_HEIGHT = 20
GAME_WIDTH = 10
START_SPAWN_RATE = 2  # percentage chance per tick
SPAWN_RATE_INCREASE = 5  # added to the spawn rate on every level up
START_LEVEL = 1
SCORE_THRESHOLD = 100  # score needed per level
ENEMY_SPAWN_RATE = 0.5  # fraction of the asteroid spawn chance
POWER_UP_SPAWN_RATE = 0.25  # fraction of the asteroid spawn chance

__all__ = [
    "GameModel",
    "GAME_HEIGHT", "GAME_WIDTH", "START_SPAWN_RATE", "SPAWN_RATE_INCREASE",
    "START_LEVEL", "SCORE_THRESHOLD", "ASTEROID_DAMAGE", "ENEMY_DAMAGE",
    "ENEMY_SPAWN_RATE", "POWER_UP_SPAWN_RATE",
]


def _remove_by_identity(objects: List[SpaceObject], doomed: List[SpaceObject]) -> None:
    if not doomed:
        return
    ids = {id(obj) for obj in doomed}
    objects[:] = [obj for obj in objects if id(obj) not in ids]


class GameModel:
    """Game state and the per-tick simulation phases"""

    def __init__(
        self,
        logger: Callable[[str], None],
        stats_tracker: Optional[PlayerStatsTracker] = None,
        rng: Optional[random.Random] = None,
        verbose: bool = False,
    ):
        if logger is None:
            raise ValueError("Logger cannot be null.")
        self._log = logger
        self.stats_tracker = stats_tracker if stats_tracker is not None else PlayerStatsTracker()
        self._rng = rng if rng is not None else random.Random()
        self.verbose = verbose

        self.level = START_LEVEL
        self.spawn_rate = START_SPAWN_RATE
        self.ship = Ship(bounds=(GAME_WIDTH, GAME_HEIGHT))
        self._space_objects: List[SpaceObject] = []

        # The ship is tracked (and rendered) alongside everything else
        self.add_object(self.ship)

    # ----------------------------
    # Accessors
    # ----------------------------

    @property
    def space_objects(self) -> List[SpaceObject]:
        """Live list of tracked objects, ship included"""
        return self._space_objects

    def add_object(self, obj: Optional[SpaceObject]) -> None:
        if obj is not None:
            self._space_objects.append(obj)

    def set_verbose(self, verbose: bool) -> None:
        self.verbose = verbose

    def set_random_seed(self, seed: int) -> None:
        self._rng.seed(seed)

    @staticmethod
    def is_in_bounds(obj: SpaceObject) -> bool:
        return in_bounds(obj.x, obj.y, GAME_WIDTH, GAME_HEIGHT)

    def _verbose_log(self, message: str) -> None:
        if self.verbose:
            self._log(message)

    # ----------------------------
    # Tick phases
    # ----------------------------

    def update_game(self, tick: int) -> None:
        """Move every object, then drop non-ship objects that left the grid"""
        off_screen = []
        for obj in self._space_objects:
            obj.tick(tick)
            if isinstance(obj, Ship):
                continue
            if not self.is_in_bounds(obj):
                off_screen.append(obj)
        _remove_by_identity(self._space_objects, off_screen)

    def check_collisions(self) -> None:
        """Resolve ship contacts first, then bullet hits; remove afterwards"""
        to_remove: List[SpaceObject] = []
        self._handle_ship_collisions(to_remove)
        self._handle_bullet_collisions(to_remove)
        _remove_by_identity(self._space_objects, to_remove)

    def _handle_ship_collisions(self, to_remove: List[SpaceObject]) -> None:
        ship = self.ship
        for obj in self._space_objects:
            if isinstance(obj, (Ship, Bullet)):
                continue
            if obj.position != ship.position:
                continue
            message = obj.collide_with_ship(ship)
            if message:
                self._verbose_log(message)
            to_remove.append(obj)

    def _handle_bullet_collisions(self, to_remove: List[SpaceObject]) -> None:
        for bullet in self._space_objects:
            if not isinstance(bullet, Bullet):
                continue

            for other in self._space_objects:
                if isinstance(other, Enemy) and other.position == bullet.position:
                    self.stats_tracker.record_shot_hit()
                    to_remove.append(bullet)
                    to_remove.append(other)
                    break

            # Asteroids soak up bullets and survive
            for other in self._space_objects:
                if isinstance(other, Asteroid) and other.position == bullet.position:
                    to_remove.append(bullet)
                    break

    def spawn_objects(self) -> None:
        """Roll for an asteroid, an enemy and a power-up.

        Draw order per call (all seven always happen):
          1. randrange(100)        asteroid roll, spawns if < spawn_rate
          2. randrange(GAME_WIDTH) asteroid x
          3. randrange(100)        enemy roll, spawns if < spawn_rate * ENEMY_SPAWN_RATE
          4. randrange(GAME_WIDTH) enemy x
          5. randrange(100)        power-up roll, spawns if < spawn_rate * POWER_UP_SPAWN_RATE
          6. randrange(GAME_WIDTH) power-up x
          7. getrandbits(1)        power-up kind, 1 = shield, 0 = health
        Objects appear at y = 0 and are dropped if the cell is taken.
        """
        rng = self._rng

        asteroid_roll = rng.randrange(100)
        asteroid_x = rng.randrange(GAME_WIDTH)
        enemy_roll = rng.randrange(100)
        enemy_x = rng.randrange(GAME_WIDTH)
        power_up_roll = rng.randrange(100)
        power_up_x = rng.randrange(GAME_WIDTH)
        shield = bool(rng.getrandbits(1))

        if asteroid_roll < self.spawn_rate:
            self._try_spawn(Asteroid(asteroid_x, 0))
        if enemy_roll < self.spawn_rate * ENEMY_SPAWN_RATE:
            self._try_spawn(Enemy(enemy_x, 0))
        if power_up_roll < self.spawn_rate * POWER_UP_SPAWN_RATE:
            power_up: PowerUp = ShieldPowerUp(power_up_x, 0) if shield else HealthPowerUp(power_up_x, 0)
            self._try_spawn(power_up)

    def _try_spawn(self, obj: SpaceObject) -> None:
        if self._is_cell_free(obj.x, obj.y):
            self._space_objects.append(obj)

    def _is_cell_free(self, x: int, y: int) -> bool:
        if self.ship.position == (x, y):
            return False
        return all(obj.position != (x, y) for obj in self._space_objects)

    def level_up(self) -> None:
        if self.ship.score < self.level * SCORE_THRESHOLD:
            return
        self.level += 1
        self.spawn_rate += SPAWN_RATE_INCREASE
        self._verbose_log(
            f"Level Up! Welcome to Level {self.level}. "
            f"Spawn rate increased to {self.spawn_rate}%."
        )

    def check_game_over(self) -> bool:
        return self.ship.health <= 0

    # ----------------------------
    # Player actions
    # ----------------------------

    def fire_bullet(self) -> None:
        """Place a bullet on the ship's cell"""
        self._space_objects.append(Bullet(self.ship.x, self.ship.y))
