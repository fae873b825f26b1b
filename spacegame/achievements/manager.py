"""
AchievementManager - registry of achievements plus mastery logging
"""

from __future__ import annotations

from typing import Dict, List, Set

from .achievement import Achievement
from .storage import AchievementFile


class AchievementManager:
    """Registers achievements, updates their progress and logs mastery.

    Each mastered achievement is written to the AchievementFile exactly once
    for the lifetime of the manager. The logged set is kept in memory, so a
    failed write still counts as logged.
    """

    def __init__(self, achievement_file: AchievementFile):
        if achievement_file is None:
            raise ValueError("AchievementFile cannot be null.")
        self.achievement_file = achievement_file
        self._achievements: Dict[str, Achievement] = {}
        self._logged: Set[str] = set()

    def add_achievement(self, achievement: Achievement) -> None:
        if achievement is None:
            raise ValueError("Achievement cannot be null.")
        name = achievement.name
        if name in self._achievements:
            raise ValueError(f"Achievement with name '{name}' is already registered.")
        self._achievements[name] = achievement

    def has_achievement(self, name: str) -> bool:
        return name in self._achievements

    def update_achievement(self, name: str, absolute_progress: float) -> None:
        """Set (not add to) the progress of a registered achievement"""
        if not name:
            raise ValueError("Achievement name cannot be null or empty.")
        achievement = self._achievements.get(name)
        if achievement is None:
            raise ValueError(f"No achievement registered with name: {name}")
        achievement.set_progress(absolute_progress)

    def log_achievement_mastered(self) -> None:
        for achievement in self._achievements.values():
            if achievement.mastered and achievement.name not in self._logged:
                self.achievement_file.save(f"Mastered: {achievement.name}")
                self._logged.add(achievement.name)

    def get_achievements(self) -> List[Achievement]:
        return list(self._achievements.values())
