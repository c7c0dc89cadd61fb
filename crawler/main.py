"""
Main entry point for the Torch Crawler.

Sets up logging, loads the content repository, asks for the adventurer's
name and stat points, then hands control to the terminal interface.
"""

import argparse
import logging
from pathlib import Path

from crawler.core.content import DEFAULT_DATA_DIR, ContentRepository
from crawler.core.logging import setup_logging
from crawler.core.utils import cprint, crule
from crawler.entities.factory import parse_allocation
from crawler.game.engine import Game
from crawler.ui.cli_interface import TerminalInterface, session


def start_run(game: Game, name: str, difficulty: str, points: str | None) -> None:
    """Starts the run, asking for a point allocation until one is accepted."""
    player_config = game.repository.balance.player
    while True:
        if points is None:
            steps = ", ".join(f"{stat} +{step}" for stat, step in player_config.stat_steps.items())
            cprint(
                f"Spend up to {player_config.allocation_points} points ({steps}), "
                "e.g. 'attack=3 max_hp=2'. Leave empty to keep the defaults.",
                style="cyan",
            )
            points = session.prompt("Points > ")
        try:
            allocation = parse_allocation(points)
        except ValueError as e:
            cprint(str(e), style="bold red")
            points = None
            continue
        result = game.start_game(name, difficulty=difficulty, allocation=allocation)
        if result.ok:
            return
        cprint(result.message, style="bold red")
        points = None


def main() -> None:
    parser = argparse.ArgumentParser(description="A turn-based dungeon crawler.")
    parser.add_argument("--data", type=Path, default=DEFAULT_DATA_DIR, help="Data folder.")
    parser.add_argument("--difficulty", default="normal", help="Difficulty preset.")
    parser.add_argument(
        "--points",
        default=None,
        help="Stat point allocation, e.g. 'attack=3 max_hp=2'. Asked for when omitted.",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    args = parser.parse_args()

    setup_logging(logging.DEBUG if args.debug else logging.WARNING)

    crule("Torch Crawler", style="bold green")
    cprint(
        "Your torch is burning down. Descend as deep as you can before the "
        "darkness takes you.\n",
        style="bold blue",
    )

    repository = ContentRepository(args.data)
    game = Game(repository)
    name = session.prompt("Name > ").strip() or "Adventurer"
    start_run(game, name, args.difficulty, args.points)
    TerminalInterface(game).run()


if __name__ == "__main__":
    main()
