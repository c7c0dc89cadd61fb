"""
Skills module for the crawler.

This module contains the skill definitions, the effect strategies that
implement them, target selection helpers and the registry joining the two.
"""

from .base import Skill, SkillContext, SkillDefinition, SkillEffect
from .library import SKILL_EFFECTS, perform_dash
from .registry import SkillRegistry
from .targeting import (
    area_tiles,
    find_nearest_enemy,
    get_enemies_in_range,
    resolve_target_enemy,
    resolve_target_position,
)

__all__ = [
    "SKILL_EFFECTS",
    "Skill",
    "SkillContext",
    "SkillDefinition",
    "SkillEffect",
    "SkillRegistry",
    "area_tiles",
    "find_nearest_enemy",
    "get_enemies_in_range",
    "perform_dash",
    "resolve_target_enemy",
    "resolve_target_position",
]
