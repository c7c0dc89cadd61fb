"""
User interface module for the crawler.

Contains the terminal front-end that renders snapshots and forwards the
player's commands to the game.
"""

from .cli_interface import DIRECTION_KEYS, TerminalInterface, render_map, render_status

__all__ = [
    "DIRECTION_KEYS",
    "TerminalInterface",
    "render_map",
    "render_status",
]
