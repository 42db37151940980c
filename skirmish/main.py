"""
Main entry point for the skirmish engine.

Loads a world descriptor, builds the world with an interactive player and
runs the turn loop until the player or every enemy is defeated.

Usage:
    skirmish [path/to/world.json] [--debug]
"""

import logging
import sys
from pathlib import Path

from combat.turn_manager import TurnManager
from config.world_config import build_world, load_world_config
from core.error_handling import GameException
from core.logging import log_error, setup_logging
from core.utils import cprint, crule
from ui.cli_interface import PromptInputSource
from ui.grid_renderer import GridRenderer

# Get the path to the data folder.
data_dir = Path(__file__).with_suffix("").parent / "../data"


def main(argv: list[str] | None = None) -> int:
    """
    Runs an interactive game.

    Args:
        argv (list[str] | None): Command-line arguments, without the program
            name. Defaults to sys.argv[1:].

    Returns:
        int: The process exit status.

    """
    args = list(sys.argv[1:] if argv is None else argv)
    debug = "--debug" in args
    args = [arg for arg in args if arg != "--debug"]
    setup_logging(logging.DEBUG if debug else logging.INFO)

    config_path = Path(args[0]) if args else data_dir / "world.json"

    crule("Grid Skirmish", style="bold green")
    cprint(
        "Move with (w) up, (a) left, (s) down, (d) right. "
        "Walk over objects to loot them and attack adjacent enemies. "
        "Defeat every enemy to win.\n",
        style="bold blue",
    )

    try:
        config = load_world_config(config_path)
        world, player = build_world(config, PromptInputSource())
    except GameException as e:
        log_error(f"Cannot start the game: {e}", {"config": config_path})
        return 1

    manager = TurnManager(world, player, renderer=GridRenderer())
    return 0 if manager.run() else 2


if __name__ == "__main__":
    sys.exit(main())
