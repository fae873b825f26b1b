"""
Achievement records with progress and tier
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

MASTER_THRESHOLD = 0.999
EXPERT_THRESHOLD = 0.5


class Achievement(ABC):
    """A named achievement whose progress lives in [0.0, 1.0]"""

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @property
    @abstractmethod
    def description(self) -> str:
        ...

    @property
    @abstractmethod
    def progress(self) -> float:
        ...

    @abstractmethod
    def set_progress(self, new_progress: float) -> None:
        ...

    @property
    def current_tier(self) -> str:
        if self.progress >= MASTER_THRESHOLD:
            return "Master"
        if self.progress >= EXPERT_THRESHOLD:
            return "Expert"
        return "Novice"

    @property
    def mastered(self) -> bool:
        return self.progress >= MASTER_THRESHOLD


class GameAchievement(Achievement):
    """Concrete achievement starting at zero progress"""

    def __init__(self, name: str, description: str):
        if name is None or not name.strip():
            raise ValueError("Achievement name cannot be null or empty.")
        if description is None or not description.strip():
            raise ValueError("Achievement description cannot be null or empty.")
        self._name = name
        self._description = description
        self._progress = 0.0

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @property
    def progress(self) -> float:
        return self._progress

    def set_progress(self, new_progress: float) -> None:
        if not 0.0 <= new_progress <= 1.0:
            raise ValueError("Progress must be between 0.0 and 1.0.")
        self._progress = float(new_progress)

    def __repr__(self) -> str:
        return f"GameAchievement({self._name!r}, progress={self._progress:.3f})"


SURVIVOR = "Survivor"
ENEMY_EXTERMINATOR = "Enemy Exterminator"
SHARP_SHOOTER = "Sharp Shooter"


def default_achievements() -> List[GameAchievement]:
    """The three achievements the controller keeps up to date every tick"""
    return [
        GameAchievement(SURVIVOR, "Survive for 2 minutes."),
        GameAchievement(ENEMY_EXTERMINATOR, "Destroy 20 enemies."),
        GameAchievement(SHARP_SHOOTER, "Hit 99% of shots after firing more than 10."),
    ]
