"""Grid space shooter - tick-driven simulation, achievements and an RL environment"""

from .model import GameModel
from .controller import GameController
from .ui import UI, ConsoleUI
from .space_env import SpaceGameEnv, run_random_episode

__all__ = ['GameModel', 'GameController', 'UI', 'ConsoleUI', 'SpaceGameEnv', 'run_random_episode']
