"""
Core system module for the crawler.

This module contains the fundamental components shared by every other part of
the game: constants and enumerations, balance configuration, content loading,
logging and display utilities.
"""

from .config import BalanceConfig, DifficultyMultipliers
from .constants import (
    ActorKind,
    EnemySpecial,
    GameScreen,
    ItemType,
    LogType,
    NiceEnum,
    RelicRarity,
    RelicTrigger,
    SchedulerPhase,
    ShopCategory,
    SkillOutcome,
    SkillType,
    TileType,
)
from .content import ContentRepository
from .utils import Singleton, ccapture, cprint, crule

__all__ = [
    "ActorKind",
    "BalanceConfig",
    "ContentRepository",
    "DifficultyMultipliers",
    "EnemySpecial",
    "GameScreen",
    "ItemType",
    "LogType",
    "NiceEnum",
    "RelicRarity",
    "RelicTrigger",
    "SchedulerPhase",
    "ShopCategory",
    "Singleton",
    "SkillOutcome",
    "SkillType",
    "TileType",
    "ccapture",
    "cprint",
    "crule",
]
