"""
Game module for the crawler.

This module ties the systems together: the turn scheduler, the message log,
the run state and the ``Game`` facade used by the front-end.
"""

from .clock import Clock, ManualClock
from .engine import ActionResult, Game
from .log import GameLog, LogEntry
from .scheduler import TurnScheduler
from .state import ArrowProjectile, GameSnapshot, GameState

__all__ = [
    "ActionResult",
    "ArrowProjectile",
    "Clock",
    "Game",
    "GameLog",
    "GameSnapshot",
    "GameState",
    "LogEntry",
    "ManualClock",
    "TurnScheduler",
]
