"""
Player statistics: shots fired, shots hit, accuracy and survival time
"""

from __future__ import annotations

import time
from typing import Callable, Optional


class PlayerStatsTracker:
    """Counts shots and measures elapsed time since the run started.

    The clock defaults to wall time in seconds; the RL environment swaps in
    a tick counter so survival time follows simulated time instead.
    """

    def __init__(
        self,
        start_time: Optional[float] = None,
        clock: Callable[[], float] = time.time,
    ):
        self._clock = clock
        self.start_time = clock() if start_time is None else start_time
        self.shots_fired = 0
        self.shots_hit = 0

    def record_shot_fired(self) -> None:
        self.shots_fired += 1

    def record_shot_hit(self) -> None:
        self.shots_hit += 1

    @property
    def elapsed_seconds(self) -> int:
        """Whole seconds since the tracker started"""
        return int(self._clock() - self.start_time)

    @property
    def accuracy(self) -> float:
        if self.shots_fired == 0:
            return 0.0
        return self.shots_hit / self.shots_fired
