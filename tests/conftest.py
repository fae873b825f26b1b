"""Shared test doubles for the space game tests."""

from __future__ import annotations

from typing import List

import pytest

from spacegame.achievements import AchievementFile, AchievementManager
from spacegame.model import GameModel
from spacegame.ui import UI


class ScriptedRandom:
    """Stand-in for random.Random that replays fixed draws and records calls.

    ``rolls`` feeds randrange(100) (the spawn chance rolls), ``xs`` feeds every
    other randrange() (the spawn columns) and ``bits`` feeds getrandbits().
    Once a script runs out its last value repeats.
    """

    def __init__(
        self,
        rolls: List[int] | None = None,
        xs: List[int] | None = None,
        bits: List[int] | None = None,
    ) -> None:
        self._rolls = list(rolls or [99])
        self._xs = list(xs or [0])
        self._bits = list(bits or [0])
        self.calls: list[tuple[str, int]] = []

    @staticmethod
    def _next(script: list) -> int:
        return script.pop(0) if len(script) > 1 else script[0]

    def randrange(self, stop: int) -> int:
        self.calls.append(("randrange", stop))
        value = self._next(self._rolls if stop == 100 else self._xs)
        assert 0 <= value < stop, f"scripted value {value} outside [0, {stop})"
        return value

    def getrandbits(self, k: int) -> int:
        self.calls.append(("getrandbits", k))
        return self._next(self._bits)

    def seed(self, a=None) -> None:
        self.calls.append(("seed", a))


class MemoryAchievementFile(AchievementFile):
    """AchievementFile that keeps lines in a list."""

    def __init__(self) -> None:
        self.lines: list[str] = []
        self._location = "memory"

    @property
    def file_location(self) -> str:
        return self._location

    @file_location.setter
    def file_location(self, location: str) -> None:
        self._location = location

    def save(self, data: str) -> None:
        self.lines.append(data)

    def read(self) -> list[str]:
        return list(self.lines)


class RecordingUI(UI):
    """UI that remembers everything the controller sends it."""

    def __init__(self) -> None:
        self.started = False
        self.pause_calls = 0
        self.step_handler = None
        self.key_handler = None
        self.renders: list[list] = []
        self.stats: dict[str, str] = {}
        self.achievement_stats: dict[str, float] = {}
        self.logs: list[str] = []
        self.achievement_logs: list[list] = []
        self.game_over_reports: list[str] = []

    def start(self) -> None:
        self.started = True

    def pause(self) -> None:
        self.pause_calls += 1

    def on_step(self, handler) -> None:
        self.step_handler = handler

    def on_key(self, handler) -> None:
        self.key_handler = handler

    def render(self, objects) -> None:
        self.renders.append(list(objects))

    def set_stat(self, name: str, value: str) -> None:
        self.stats[name] = value

    def set_achievement_progress_stat(self, name: str, progress: float) -> None:
        self.achievement_stats[name] = progress

    def log(self, text: str) -> None:
        self.logs.append(text)

    def log_achievements(self, achievements) -> None:
        self.achievement_logs.append(list(achievements))

    def show_game_over(self, report: str) -> None:
        self.game_over_reports.append(report)


class FakeClock:
    """Manually advanced clock for PlayerStatsTracker."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def logs() -> list[str]:
    return []


@pytest.fixture
def model(logs) -> GameModel:
    """Model whose spawn phase never spawns anything."""
    return GameModel(logs.append, rng=ScriptedRandom())


@pytest.fixture
def achievement_file() -> MemoryAchievementFile:
    return MemoryAchievementFile()


@pytest.fixture
def manager(achievement_file) -> AchievementManager:
    return AchievementManager(achievement_file)
