"""
Utility functions for grid mechanics
"""

from __future__ import annotations
from enum import Enum
from typing import Tuple


class Direction(Enum):
    """Unit steps on the grid (y grows downward)"""
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def in_bounds(x: int, y: int, width: int, height: int) -> bool:
    """Check if a cell lies inside a width x height grid"""
    return 0 <= x < width and 0 <= y < height


def step(x: int, y: int, direction: Direction) -> Tuple[int, int]:
    """Cell reached by moving one unit in direction"""
    return x + direction.dx, y + direction.dy
