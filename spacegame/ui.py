"""
UI boundary and a text-mode front end
-------------------------------------
The controller only talks to the abstract UI. ConsoleUI draws the grid with
one character per cell and plays turn by turn: every line typed is a batch
of key tokens, after which the world advances one tick.

    W/A/S/D  move     F  fire     P  pause     Q  quit
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import Callable, Dict, Iterable, List, Optional, TextIO

from .achievements.achievement import Achievement
from .core.entities import SpaceObject
from .model import GAME_HEIGHT, GAME_WIDTH

TickHandler = Callable[[int], None]
KeyHandler = Callable[[str], None]

QUIT_KEY = "Q"


def draw_grid(objects: Iterable[SpaceObject], width: int = GAME_WIDTH, height: int = GAME_HEIGHT) -> str:
    """Grid as text, one row per line; later objects overwrite earlier"""
    rows = [["." for _ in range(width)] for _ in range(height)]
    for obj in objects:
        if 0 <= obj.x < width and 0 <= obj.y < height:
            rows[obj.y][obj.x] = obj.glyph
    return "\n".join("".join(r) for r in rows)


class UI(ABC):
    """Everything the controller needs from a front end"""

    @abstractmethod
    def start(self) -> None:
        ...

    @abstractmethod
    def pause(self) -> None:
        """Toggle delivery of ticks"""

    @abstractmethod
    def on_step(self, handler: TickHandler) -> None:
        ...

    @abstractmethod
    def on_key(self, handler: KeyHandler) -> None:
        ...

    @abstractmethod
    def render(self, objects: List[SpaceObject]) -> None:
        ...

    @abstractmethod
    def set_stat(self, name: str, value: str) -> None:
        ...

    @abstractmethod
    def set_achievement_progress_stat(self, name: str, progress: float) -> None:
        ...

    @abstractmethod
    def log(self, text: str) -> None:
        ...

    @abstractmethod
    def log_achievements(self, achievements: List[Achievement]) -> None:
        ...

    @abstractmethod
    def show_game_over(self, report: str) -> None:
        ...


class ConsoleUI(UI):
    """Turn-based terminal front end"""

    def __init__(
        self,
        input_stream: Optional[TextIO] = None,
        output_stream: Optional[TextIO] = None,
        width: int = GAME_WIDTH,
        height: int = GAME_HEIGHT,
    ):
        self.input_stream = input_stream if input_stream is not None else sys.stdin
        self.output_stream = output_stream if output_stream is not None else sys.stdout
        self.width = width
        self.height = height

        self.stats: Dict[str, str] = {}
        self.achievement_progress: Dict[str, float] = {}
        self.paused = False
        self.started = False
        self.game_over = False

        self._step_handler: Optional[TickHandler] = None
        self._key_handler: Optional[KeyHandler] = None
        self._tick = 0

    # ----------------------------
    # UI API
    # ----------------------------

    def start(self) -> None:
        self.started = True
        self._write("Space Game - W/A/S/D move, F fire, P pause, Q quit")

    def pause(self) -> None:
        self.paused = not self.paused

    def on_step(self, handler: TickHandler) -> None:
        self._step_handler = handler

    def on_key(self, handler: KeyHandler) -> None:
        self._key_handler = handler

    def render(self, objects: List[SpaceObject]) -> None:
        self._write(self.draw(objects))
        self._write(self.stats_line())

    def set_stat(self, name: str, value: str) -> None:
        self.stats[name] = value

    def set_achievement_progress_stat(self, name: str, progress: float) -> None:
        self.achievement_progress[name] = progress

    def log(self, text: str) -> None:
        self._write(f"> {text}")

    def log_achievements(self, achievements: List[Achievement]) -> None:
        for a in achievements:
            self._write(f"> {a.name}: {a.progress * 100:.0f}% ({a.current_tier})")

    def show_game_over(self, report: str) -> None:
        self.game_over = True
        self._write("=" * 40)
        self._write("GAME OVER - Player Stats")
        self._write(report.rstrip("\n"))
        self._write("=" * 40)

    # ----------------------------
    # Drawing
    # ----------------------------

    def draw(self, objects: Iterable[SpaceObject]) -> str:
        return draw_grid(objects, self.width, self.height)

    def stats_line(self) -> str:
        return "  ".join(f"{k}: {v}" for k, v in self.stats.items())

    # ----------------------------
    # Main loop
    # ----------------------------

    def run(self, max_ticks: Optional[int] = None) -> int:
        """Read key batches and advance ticks until quit, EOF or game over.

        Returns the number of ticks delivered.
        """
        if self._step_handler is None:
            raise RuntimeError("ConsoleUI.run() called before on_step() was registered")

        delivered = 0
        while not self.game_over:
            if max_ticks is not None and delivered >= max_ticks:
                break
            line = self.input_stream.readline()
            if not line:
                break
            tokens = line.split()
            if any(t.upper() == QUIT_KEY for t in tokens):
                break
            for token in self._expand(tokens):
                if self._key_handler is not None:
                    self._key_handler(token)
            if self.paused:
                continue
            self._step_handler(self._tick)
            self._tick += 1
            delivered += 1
        return delivered

    @staticmethod
    def _expand(tokens: List[str]) -> List[str]:
        # "wwf" is three presses; recognised words pass through untouched
        keys: List[str] = []
        for token in tokens:
            if len(token) > 1 and all(c.upper() in "WASDFP" for c in token):
                keys.extend(token)
            else:
                keys.append(token)
        return keys

    def _write(self, text: str) -> None:
        print(text, file=self.output_stream)
