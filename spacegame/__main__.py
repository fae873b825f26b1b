"""
Play the space game in a terminal

    python -m spacegame --verbose --seed 7
"""

import argparse
import random

from .achievements import AchievementManager, FileHandler, PlayerStatsTracker
from .achievements.storage import DEFAULT_FILE_LOCATION
from .controller import GameController
from .model import GameModel
from .ui import ConsoleUI


def main(argv=None):
    parser = argparse.ArgumentParser(description="Grid space shooter (text mode)")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log moves, hits, power-ups and level ups",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for spawn randomness (default: unseeded)",
    )
    parser.add_argument(
        "--achievements-file",
        type=str,
        default=DEFAULT_FILE_LOCATION,
        help=f"Where mastered achievements are appended (default: {DEFAULT_FILE_LOCATION})",
    )
    parser.add_argument(
        "--max-ticks",
        type=int,
        default=None,
        help="Stop after this many ticks",
    )

    args = parser.parse_args(argv)

    ui = ConsoleUI()
    model = GameModel(ui.log, PlayerStatsTracker(), rng=random.Random(args.seed))
    manager = AchievementManager(FileHandler(args.achievements_file))
    controller = GameController(ui, model, manager, verbose=args.verbose)
    controller.start_game()

    ticks = ui.run(max_ticks=args.max_ticks)

    previous = manager.achievement_file.read()
    print(f"\nPlayed {ticks} ticks. {len(previous)} mastery record(s) in {args.achievements_file}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
