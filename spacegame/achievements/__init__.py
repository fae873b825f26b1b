"""Achievement tracking and player statistics"""

from .achievement import (
    Achievement, GameAchievement, default_achievements,
    SURVIVOR, ENEMY_EXTERMINATOR, SHARP_SHOOTER,
)
from .manager import AchievementManager
from .stats import PlayerStatsTracker
from .storage import AchievementFile, FileHandler

__all__ = [
    'Achievement', 'GameAchievement', 'default_achievements',
    'SURVIVOR', 'ENEMY_EXTERMINATOR', 'SHARP_SHOOTER',
    'AchievementManager', 'PlayerStatsTracker', 'AchievementFile', 'FileHandler',
]
