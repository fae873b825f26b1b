"""
GameController - glues the model, the achievements and a UI together
"""

from __future__ import annotations

from typing import Optional

from .achievements.achievement import (
    ENEMY_EXTERMINATOR, SHARP_SHOOTER, SURVIVOR, default_achievements,
)
from .achievements.manager import AchievementManager
from .achievements.stats import PlayerStatsTracker
from .core.utils import Direction
from .model import GameModel
from .ui import UI

SURVIVOR_SECONDS = 120.0
EXTERMINATOR_HITS = 20.0
SHARP_SHOOTER_ACCURACY = 0.99
SHARP_SHOOTER_MIN_SHOTS = 10
ACHIEVEMENT_LOG_INTERVAL = 100  # ticks between verbose achievement dumps

INVALID_INPUT_MESSAGE = "Invalid input. Use W, A, S, D, F, or P."

_MOVES = {
    "W": Direction.UP,
    "A": Direction.LEFT,
    "S": Direction.DOWN,
    "D": Direction.RIGHT,
}


class GameController:
    """Runs one tick at a time and turns key presses into game actions.

    Most log lines only appear in verbose mode; pause/unpause and invalid
    input notices are always logged.
    """

    def __init__(
        self,
        ui: UI,
        model: Optional[GameModel],
        achievement_manager: AchievementManager,
        verbose: bool = False,
    ):
        if ui is None:
            raise ValueError("UI cannot be null.")
        if achievement_manager is None:
            raise ValueError("AchievementManager cannot be null.")
        if model is None:
            model = GameModel(ui.log, PlayerStatsTracker())

        self.ui = ui
        self.model = model
        self.achievement_manager = achievement_manager
        self.paused = False
        self.verbose = False
        self.set_verbose(verbose)

        for achievement in default_achievements():
            if not achievement_manager.has_achievement(achievement.name):
                achievement_manager.add_achievement(achievement)

        ui.start()

    @property
    def stats_tracker(self) -> PlayerStatsTracker:
        return self.model.stats_tracker

    def set_verbose(self, verbose: bool) -> None:
        self.verbose = verbose
        self.model.set_verbose(verbose)

    def start_game(self) -> None:
        self.ui.on_step(self.on_tick)
        self.ui.on_key(self.handle_player_input)

    # ----------------------------
    # Tick
    # ----------------------------

    def on_tick(self, tick: int) -> None:
        model = self.model
        model.update_game(tick)
        model.check_collisions()
        model.spawn_objects()
        model.level_up()
        self.refresh_achievements(tick)
        self.render_game()

        if model.check_game_over():
            self.pause_game()
            self.ui.show_game_over(self.build_game_over_report())

    def refresh_achievements(self, tick: int) -> None:
        stats = self.stats_tracker
        survivor = min(stats.elapsed_seconds / SURVIVOR_SECONDS, 1.0)
        exterminator = min(stats.shots_hit / EXTERMINATOR_HITS, 1.0)
        if stats.shots_fired > SHARP_SHOOTER_MIN_SHOTS:
            sharp_shooter = min(stats.accuracy / SHARP_SHOOTER_ACCURACY, 1.0)
        else:
            sharp_shooter = 0.0

        manager = self.achievement_manager
        manager.update_achievement(SURVIVOR, survivor)
        manager.update_achievement(ENEMY_EXTERMINATOR, exterminator)
        manager.update_achievement(SHARP_SHOOTER, sharp_shooter)
        manager.log_achievement_mastered()

        achievements = manager.get_achievements()
        for achievement in achievements:
            self.ui.set_achievement_progress_stat(achievement.name, achievement.progress)

        if self.verbose and tick % ACHIEVEMENT_LOG_INTERVAL == 0:
            self.ui.log_achievements(achievements)

    def render_game(self) -> None:
        ship = self.model.ship
        self.ui.set_stat("Health", str(ship.health))
        self.ui.set_stat("Score", str(ship.score))
        self.ui.set_stat("Level", str(self.model.level))
        self.ui.set_stat("Time Survived", f"{self.stats_tracker.elapsed_seconds} seconds")
        self.ui.render(self.model.space_objects)

    def build_game_over_report(self) -> str:
        stats = self.stats_tracker
        lines = [
            f"Shots Fired: {stats.shots_fired}",
            f"Shots Hit: {stats.shots_hit}",
            # No dedicated kill counter: every hit destroys exactly one enemy
            f"Enemies Destroyed: {stats.shots_hit}",
            f"Survival Time: {stats.elapsed_seconds} seconds",
        ]
        for a in self.achievement_manager.get_achievements():
            lines.append(
                f"{a.name} - {a.description} "
                f"({a.progress * 100:.0f}% complete, Tier: {a.current_tier})"
            )
        return "\n".join(lines) + "\n"

    # ----------------------------
    # Input
    # ----------------------------

    def handle_player_input(self, key: str) -> None:
        if self.model.ship is None:
            return
        key = key.strip().upper()

        if self.paused:
            if key == "P":
                self.pause_game()
            return

        if key in _MOVES:
            ship = self.model.ship
            ship.move(_MOVES[key])
            if self.verbose:
                self.ui.log(f"Ship moved to ({ship.x}, {ship.y})")
        elif key == "F":
            self.model.fire_bullet()
            self.stats_tracker.record_shot_fired()
        elif key == "P":
            self.pause_game()
        else:
            self.ui.log(INVALID_INPUT_MESSAGE)

    def pause_game(self) -> None:
        self.ui.pause()
        self.ui.log("Game unpaused." if self.paused else "Game paused.")
        self.paused = not self.paused
