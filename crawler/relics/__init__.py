"""
Relics module for the crawler.

This module contains the relic definitions, the effect strategies that
implement them, and the dispatchers folding their results into game events.
"""

from .base import RelicContext, RelicDefinition, RelicEffect, RelicEffectResult
from .library import RELIC_EFFECTS
from .manager import (
    get_passive_bonuses,
    get_random_relic,
    grant_relic,
    process_attack_relics,
    process_damage_relics,
    process_gold_relics,
    process_kill_relics,
    process_level_up_relics,
    process_skill_relics,
    recharge_relics,
    trigger_relics,
)

__all__ = [
    "RELIC_EFFECTS",
    "RelicContext",
    "RelicDefinition",
    "RelicEffect",
    "RelicEffectResult",
    "get_passive_bonuses",
    "get_random_relic",
    "grant_relic",
    "process_attack_relics",
    "process_damage_relics",
    "process_gold_relics",
    "process_kill_relics",
    "process_level_up_relics",
    "process_skill_relics",
    "recharge_relics",
    "trigger_relics",
]
