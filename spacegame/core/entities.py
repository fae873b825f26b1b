"""
Game entity dataclasses

Every entity occupies exactly one grid cell. Entities compare by identity
(eq=False) so two objects sharing a cell stay distinct in collections.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Optional, Tuple

from .utils import Direction, clamp, step

SHIP_START_X = 5
SHIP_START_Y = 10
SHIP_MAX_HEALTH = 100

ASTEROID_DAMAGE = 10  # health lost when an asteroid hits the ship
ENEMY_DAMAGE = 20  # health lost when an enemy hits the ship
HEALTH_BOOST = 20
SHIELD_SCORE = 50


@dataclass(eq=False)
class SpaceObject:
    """Base entity with a grid position"""
    x: int
    y: int

    glyph: ClassVar[str] = "?"

    @property
    def position(self) -> Tuple[int, int]:
        return self.x, self.y

    def tick(self, tick: int) -> None:
        """Advance one simulation step (stationary by default)"""

    def render(self) -> str:
        return f"{type(self).__name__}({self.x},{self.y})"

    def collide_with_ship(self, ship: "Ship") -> Optional[str]:
        """Apply contact effect to the ship, returning a log line"""
        return None


@dataclass(eq=False)
class Ship(SpaceObject):
    """Player ship"""
    x: int = SHIP_START_X
    y: int = SHIP_START_Y
    health: int = SHIP_MAX_HEALTH
    score: int = 0
    bounds: Optional[Tuple[int, int]] = None  # (width, height) to clamp moves

    glyph: ClassVar[str] = "A"

    def move(self, direction: Direction) -> None:
        x, y = step(self.x, self.y, direction)
        if self.bounds is not None:
            width, height = self.bounds
            x = int(clamp(x, 0, width - 1))
            y = int(clamp(y, 0, height - 1))
        self.x, self.y = x, y

    def take_damage(self, amount: int) -> None:
        self.health = max(0, self.health - amount)

    def heal(self, amount: int) -> None:
        self.health = min(SHIP_MAX_HEALTH, self.health + amount)

    def add_score(self, points: int) -> None:
        self.score += points


@dataclass(eq=False)
class Bullet(SpaceObject):
    """Projectile fired by the ship, travels up one cell per tick"""

    glyph: ClassVar[str] = "|"

    def tick(self, tick: int) -> None:
        self.y -= 1


@dataclass(eq=False)
class FallingObject(SpaceObject):
    """Anything spawned at the top that drifts down one cell per tick"""

    def tick(self, tick: int) -> None:
        self.y += 1


@dataclass(eq=False)
class Hazard(FallingObject):
    damage: ClassVar[int] = 0

    def collide_with_ship(self, ship: Ship) -> Optional[str]:
        ship.take_damage(self.damage)
        return f"Hit by {self.render()}! Health reduced by {self.damage}."


@dataclass(eq=False)
class Asteroid(Hazard):
    """Absorbs bullets without being destroyed"""
    damage: ClassVar[int] = ASTEROID_DAMAGE
    glyph: ClassVar[str] = "o"


@dataclass(eq=False)
class Enemy(Hazard):
    """Destroyed by a single bullet"""
    damage: ClassVar[int] = ENEMY_DAMAGE
    glyph: ClassVar[str] = "X"


@dataclass(eq=False)
class PowerUp(FallingObject, ABC):
    """Collectible with a one-shot effect on the ship"""

    @abstractmethod
    def apply_effect(self, ship: Ship) -> None:
        ...

    def collide_with_ship(self, ship: Ship) -> Optional[str]:
        self.apply_effect(ship)
        return f"PowerUp collected: {self.render()}"


@dataclass(eq=False)
class HealthPowerUp(PowerUp):
    glyph: ClassVar[str] = "+"

    def apply_effect(self, ship: Ship) -> None:
        ship.heal(HEALTH_BOOST)


@dataclass(eq=False)
class ShieldPowerUp(PowerUp):
    glyph: ClassVar[str] = "S"

    def apply_effect(self, ship: Ship) -> None:
        ship.add_score(SHIELD_SCORE)
