"""
SpaceGameEnv - Gymnasium wrapper around the grid space game
-----------------------------------------------------------
- GameModel does all the simulation; this class only maps actions in and
  observations / rewards out
- Gymnasium API
- Discrete action space: stay, up, left, down, right, fire
- Vector observation: one-hot occupancy grids (asteroid, enemy, power-up,
  bullet) + ship position, health and level
- Text rendering only ("ansi")

Survival time is measured in simulated seconds (ticks * dt) so achievements
and rewards do not depend on how fast the agent runs.

Quick test:
    python -m spacegame.space_env
"""

from __future__ import annotations

import random
from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .achievements.stats import PlayerStatsTracker
from .core.entities import SHIP_MAX_HEALTH, Asteroid, Bullet, Enemy, PowerUp
from .core.utils import Direction
from .model import GAME_HEIGHT, GAME_WIDTH, GameModel
from .ui import draw_grid

# action index -> ship move (None = stay / fire)
_ACTION_MOVES = {
    0: None,
    1: Direction.UP,
    2: Direction.LEFT,
    3: Direction.DOWN,
    4: Direction.RIGHT,
}
FIRE_ACTION = 5

# Observation channel per object type
_CHANNELS = (Asteroid, Enemy, PowerUp, Bullet)

DEFAULT_REWARDS = {
    "R_SCORE": 0.02,     # per score point (shield power-ups)
    "R_HIT": 1.0,        # per enemy destroyed
    "R_DAMAGE": 0.05,    # per health point lost
    "R_SHOT": 0.01,      # per bullet fired
    "R_TIME": 0.001,     # per tick survived
    "R_DEATH": 5.0,      # on game over
}


class SpaceGameEnv(gym.Env):
    """Grid space shooter driven one tick per step"""

    metadata = {"render_modes": ["ansi"], "render_fps": 10}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        max_steps: int = 2000,
        dt: float = 0.1,  # simulated seconds per tick
        reward_config: Optional[Dict[str, float]] = None,
        verbose: bool = False,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.max_steps = max_steps
        self.dt = dt
        self.verbose = verbose

        self.rewards = dict(DEFAULT_REWARDS)
        if reward_config:
            self.rewards.update({k: v for k, v in reward_config.items() if k.startswith("R_")})

        self.action_space = spaces.Discrete(6)

        # Grid channels + ship x, ship y, health, level
        self._grid_size = len(_CHANNELS) * GAME_HEIGHT * GAME_WIDTH
        obs_dim = self._grid_size + 4
        self.observation_space = spaces.Box(low=0.0, high=1.0, shape=(obs_dim,), dtype=np.float32)

        self.model: GameModel = None  # type: ignore
        self.stats: PlayerStatsTracker = None  # type: ignore
        self.log_lines = []

        self._step_count = 0
        self._damage_taken = 0

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)

        self._step_count = 0
        self._damage_taken = 0
        self.log_lines = []

        self.stats = PlayerStatsTracker(start_time=0.0, clock=self._sim_time)
        self.model = GameModel(
            self._log,
            stats_tracker=self.stats,
            rng=self._model_rng(),
            verbose=self.verbose,
        )

        return self._get_obs(), self._get_info()

    def step(self, action):
        action = int(action)
        model = self.model
        ship = model.ship

        health_before = ship.health
        score_before = ship.score
        hits_before = self.stats.shots_hit

        # Player action
        shot = 0
        if action == FIRE_ACTION:
            model.fire_bullet()
            self.stats.record_shot_fired()
            shot = 1
        elif _ACTION_MOVES.get(action) is not None:
            ship.move(_ACTION_MOVES[action])

        # Simulation phases
        model.update_game(self._step_count)
        model.check_collisions()
        model.spawn_objects()
        model.level_up()

        self._step_count += 1
        terminated = model.check_game_over()
        truncated = self._step_count >= self.max_steps

        damage = max(0, health_before - ship.health)
        self._damage_taken += damage

        r = self.rewards
        reward = 0.0
        reward += r["R_SCORE"] * (ship.score - score_before)
        reward += r["R_HIT"] * (self.stats.shots_hit - hits_before)
        reward -= r["R_DAMAGE"] * damage
        reward -= r["R_SHOT"] * shot
        reward += r["R_TIME"]
        if terminated:
            reward -= r["R_DEATH"]

        return self._get_obs(), float(reward), terminated, truncated, self._get_info()

    def render(self):
        if self.model is None:
            return None
        if self.render_mode == "ansi":
            return draw_grid(self.model.space_objects)
        return None

    def close(self):
        self.model = None  # type: ignore

    # ----------------------------
    # Observation / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        grid = np.zeros((len(_CHANNELS), GAME_HEIGHT, GAME_WIDTH), dtype=np.float32)
        for obj in self.model.space_objects:
            if not GameModel.is_in_bounds(obj):
                continue
            for c, kind in enumerate(_CHANNELS):
                if isinstance(obj, kind):
                    grid[c, obj.y, obj.x] = 1.0
                    break

        ship = self.model.ship
        extras = np.array([
            ship.x / max(1, GAME_WIDTH - 1),
            ship.y / max(1, GAME_HEIGHT - 1),
            ship.health / SHIP_MAX_HEALTH,
            min(self.model.level / 10.0, 1.0),
        ], dtype=np.float32)

        return np.concatenate([grid.ravel(), np.clip(extras, 0.0, 1.0)])

    def _get_info(self) -> Dict[str, Any]:
        ship = self.model.ship
        return {
            "health": ship.health,
            "score": ship.score,
            "level": self.model.level,
            "shots_fired": self.stats.shots_fired,
            "shots_hit": self.stats.shots_hit,
            "enemies_destroyed": self.stats.shots_hit,
            "damage_taken": self._damage_taken,
            "step": self._step_count,
        }

    def _model_rng(self) -> random.Random:
        # Drawn from np_random so unseeded resets continue the seeded stream
        return random.Random(int(self.np_random.integers(np.iinfo(np.int64).max)))

    def _sim_time(self) -> float:
        return self._step_count * self.dt

    def _log(self, message: str) -> None:
        self.log_lines.append(message)
        if self.verbose:
            print(f"[SpaceGameEnv] {message}")


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: int = 42, max_steps: int = 500):
    """Run a random episode for testing"""
    env = SpaceGameEnv(render_mode="ansi" if render else None, max_steps=max_steps)
    obs, info = env.reset(seed=seed)
    env.action_space.seed(seed)

    terminated = False
    truncated = False
    total = 0.0

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

    if render:
        print(env.render())
    print(f"Random episode return: {total:.2f}  "
          f"(steps={info['step']}, score={info['score']}, health={info['health']})")

    env.close()
    return total, info


if __name__ == "__main__":
    run_random_episode(render=True)
