"""
Skill effect library for the crawler.

Implements the behaviours behind the skills. Each effect reads its numbers
from the skill definition, so several skills can share one behaviour.
"""

import math
import random
from typing import Any

from crawler.core.constants import LogType, SkillOutcome
from crawler.effects.ground_effect import GroundEffect, VisualEffect
from crawler.effects.stat_effect import StatEffect
from crawler.entities.player import Player

from .base import SkillContext, SkillDefinition, SkillEffect
from .targeting import (
    area_tiles,
    get_enemies_in_range,
    resolve_target_enemy,
    resolve_target_position,
)


class AreaDamageEffect(SkillEffect):
    """
    Damages every enemy within a radius of a target tile.

    Centred on the caster when the skill has no search range (whirlwind),
    otherwise on the target or the nearest enemy (fireball). When the
    definition carries ground damage, a ground effect is left on the walkable
    tiles of the area (toxic mist, flame zone).
    """

    def apply(
        self,
        skill: SkillDefinition,
        caster: Player,
        target: Any,
        context: SkillContext,
    ) -> SkillOutcome:
        if skill.range > 0:
            center = resolve_target_position(caster, target, context.enemies, skill.range)
        else:
            center = caster.position
        if center is None:
            context.log(f"{skill.name} has no valid target.", LogType.WARNING)
            return SkillOutcome.FAILED

        # Select the enemies before mutating anything.
        affected = get_enemies_in_range(center[0], center[1], context.enemies, skill.radius)
        if skill.require_hit and not affected:
            context.log(f"{skill.name} has no enemy in reach.", LogType.WARNING)
            return SkillOutcome.FAILED

        tiles = area_tiles(center[0], center[1], skill.radius, context.is_walkable)
        context.log(f"{skill.name} erupts at ({center[0]}, {center[1]})!", LogType.SKILL)
        context.add_visual_effect(VisualEffect(kind="area", tiles=tiles, color=skill.color))

        damage = skill.damage_for(caster.level)
        for enemy in affected:
            context.log(f"{skill.name} hits {enemy.name} for {damage} damage!", LogType.COMBAT)
            context.damage_enemy(enemy, damage)

        if skill.ground_damage > 0 and skill.duration > 0:
            context.add_ground_effect(
                GroundEffect(
                    name=skill.effect_name or skill.name,
                    tiles=tiles,
                    duration=skill.duration,
                    damage=skill.ground_damage,
                    color=skill.color,
                )
            )
        context.refresh()
        return SkillOutcome.SUCCESS


class StrikeEffect(SkillEffect):
    """
    Damages a single enemy, optionally stunning it.

    Used by shield bash, lightning and magic missile.
    """

    def apply(
        self,
        skill: SkillDefinition,
        caster: Player,
        target: Any,
        context: SkillContext,
    ) -> SkillOutcome:
        enemy = resolve_target_enemy(caster, target, context.enemies, skill.range, skill.max_reach)
        if enemy is None:
            context.log(f"{skill.name} has no valid target.", LogType.WARNING)
            return SkillOutcome.FAILED

        damage = skill.damage_for(caster.level)
        context.log(f"{skill.name} hits {enemy.name} for {damage} damage!", LogType.COMBAT)
        context.add_visual_effect(
            VisualEffect(kind="flash", tiles=[enemy.position], color=skill.color)
        )
        context.damage_enemy(enemy, damage)
        if enemy.is_alive() and skill.stun_duration > 0 and random.random() < skill.stun_chance:
            enemy.stunned = skill.stun_duration
            context.log(f"{enemy.name} is stunned!", LogType.SKILL)
        context.refresh()
        return SkillOutcome.SUCCESS


class StunEffect(SkillEffect):
    """Stuns a single enemy without damaging it (freeze)."""

    def apply(
        self,
        skill: SkillDefinition,
        caster: Player,
        target: Any,
        context: SkillContext,
    ) -> SkillOutcome:
        enemy = resolve_target_enemy(caster, target, context.enemies, skill.range, skill.max_reach)
        if enemy is None:
            context.log(f"{skill.name} has no valid target.", LogType.WARNING)
            return SkillOutcome.FAILED
        enemy.stunned = skill.stun_duration
        context.log(f"{enemy.name} is encased in ice!", LogType.SKILL)
        context.refresh()
        return SkillOutcome.SUCCESS


class SlowEffect(SkillEffect):
    """Adds a timed move speed penalty to a single enemy (entangle)."""

    def apply(
        self,
        skill: SkillDefinition,
        caster: Player,
        target: Any,
        context: SkillContext,
    ) -> SkillOutcome:
        enemy = resolve_target_enemy(caster, target, context.enemies, skill.range, skill.max_reach)
        if enemy is None:
            context.log(f"{skill.name} has no valid target.", LogType.WARNING)
            return SkillOutcome.FAILED
        reduction = math.floor(enemy.move_speed * skill.slow_percent)
        enemy.add_effect(
            StatEffect(
                name=skill.effect_name or skill.id,
                duration=skill.duration,
                move_speed=-reduction,
            )
        )
        context.log(f"Vines burst from the ground and grab {enemy.name}!", LogType.SKILL)
        context.refresh()
        return SkillOutcome.SUCCESS


class BuffEffect(SkillEffect):
    """Adds a timed attack and defense bonus to the caster (battle shout)."""

    def apply(
        self,
        skill: SkillDefinition,
        caster: Player,
        target: Any,
        context: SkillContext,
    ) -> SkillOutcome:
        caster.add_effect(
            StatEffect(
                name=skill.effect_name or skill.id,
                duration=skill.duration,
                attack=skill.attack_bonus,
                defense=skill.defense_bonus,
            )
        )
        context.log(f"{skill.name}! Your attack and defense rise.", LogType.SKILL)
        context.refresh()
        return SkillOutcome.SUCCESS


class HealEffect(SkillEffect):
    """Restores a fraction of the caster's maximum HP."""

    def apply(
        self,
        skill: SkillDefinition,
        caster: Player,
        target: Any,
        context: SkillContext,
    ) -> SkillOutcome:
        healed = caster.heal(math.floor(caster.max_hp * skill.heal_percent))
        context.log(f"A holy light restores {healed} HP.", LogType.HEAL)
        context.refresh()
        return SkillOutcome.SUCCESS


class TorchEffect(SkillEffect):
    """Refuels a fraction of the caster's torch (radiance)."""

    def apply(
        self,
        skill: SkillDefinition,
        caster: Player,
        target: Any,
        context: SkillContext,
    ) -> SkillOutcome:
        restored = caster.restore_torch(math.floor(caster.max_torch * skill.torch_restore_percent))
        context.log(f"A burst of light restores {restored} torch.", LogType.SKILL)
        context.refresh()
        return SkillOutcome.SUCCESS


class DashEffect(SkillEffect):
    """Asks for a direction; the movement itself happens once it is given."""

    def apply(
        self,
        skill: SkillDefinition,
        caster: Player,
        target: Any,
        context: SkillContext,
    ) -> SkillOutcome:
        context.log("Choose a direction to dash.", LogType.INFO)
        return SkillOutcome.AWAIT_DIRECTION


def perform_dash(
    caster: Player,
    dx: int,
    dy: int,
    distance: int,
    context: SkillContext,
) -> int:
    """
    Moves the caster up to ``distance`` tiles in a direction.

    The dash stops before the first tile that is a wall or is occupied.

    Returns:
        int: The number of tiles travelled.

    """
    travelled = 0
    for _ in range(distance):
        nx, ny = caster.x + dx, caster.y + dy
        if not context.is_walkable(nx, ny) or not context.is_position_empty(nx, ny):
            break
        caster.x, caster.y = nx, ny
        travelled += 1
    return travelled


# Behaviour of every skill, by identifier.
SKILL_EFFECTS: dict[str, SkillEffect] = {
    "fireball": AreaDamageEffect(),
    "heal": HealEffect(),
    "whirlwind": AreaDamageEffect(),
    "shield_bash": StrikeEffect(),
    "battle_shout": BuffEffect(),
    "dash": DashEffect(),
    "radiance": TorchEffect(),
    "toxic_mist": AreaDamageEffect(),
    "freeze": StunEffect(),
    "entangle": SlowEffect(),
    "lightning": StrikeEffect(),
    "magic_missile": StrikeEffect(),
    "flame_zone": AreaDamageEffect(),
}
