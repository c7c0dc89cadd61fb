"""
Combat system module for the crawler.

This module handles attack resolution, effective statistics, and the
decision logic of the enemies.
"""

from .damage import (
    AttackResult,
    get_effective_attack,
    get_effective_attack_speed,
    get_effective_defense,
    get_effective_move_speed,
    perform_attack,
)
from .npc_ai import EnemyTurnResult, process_enemy_turn, process_stun, update_effects

__all__ = [
    "AttackResult",
    "EnemyTurnResult",
    "get_effective_attack",
    "get_effective_attack_speed",
    "get_effective_defense",
    "get_effective_move_speed",
    "perform_attack",
    "process_enemy_turn",
    "process_stun",
    "update_effects",
]
