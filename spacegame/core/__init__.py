"""Grid entities and helpers"""

from .entities import (
    SpaceObject, Ship, Bullet, FallingObject, Hazard, Asteroid, Enemy,
    PowerUp, HealthPowerUp, ShieldPowerUp,
)
from .utils import Direction, clamp, in_bounds

__all__ = [
    'SpaceObject', 'Ship', 'Bullet', 'FallingObject', 'Hazard', 'Asteroid',
    'Enemy', 'PowerUp', 'HealthPowerUp', 'ShieldPowerUp',
    'Direction', 'clamp', 'in_bounds',
]
