"""
Damage module for the crawler.

Computes effective statistics and resolves a single melee attack: evasion,
mitigation, critical hits, lifesteal and thorns.
"""

import math
import random
from collections.abc import Callable
from typing import cast

from pydantic import BaseModel, Field

from crawler.core.logging import log_debug
from crawler.entities.base import Entity
from crawler.entities.player import Player


class AttackResult(BaseModel):
    """
    The outcome of one attack.

    Both death flags are reported independently: thorns may kill the
    attacker in the same exchange in which the defender dies.
    """

    hit: bool = Field(False, description="The blow landed on the defender.")
    evaded: bool = Field(False, description="The defender dodged the attack.")
    damage: int = Field(0, description="Damage dealt to the defender.")
    is_crit: bool = Field(False, description="The attack was a critical hit.")
    lifesteal_heal: int = Field(0, description="HP the attacker actually recovered.")
    thorns_damage: int = Field(0, description="Damage reflected to the attacker.")
    defender_died: bool = Field(False, description="The defender's HP reached 0.")
    attacker_died: bool = Field(False, description="Thorns brought the attacker to 0 HP.")


def _effect_total(entity: Entity, stat: str) -> int:
    return sum(effect.modifier(stat) for effect in entity.effects)


def get_effective_attack(entity: Entity) -> int:
    """Base attack plus timed modifiers, never below 0."""
    return max(0, entity.attack + _effect_total(entity, "attack"))


def get_effective_defense(entity: Entity) -> int:
    """Base defense plus timed modifiers, never below 0."""
    return max(0, entity.defense + _effect_total(entity, "defense"))


def get_effective_move_speed(entity: Entity) -> int:
    """Base move speed plus timed modifiers, never below 1."""
    return max(1, entity.move_speed + _effect_total(entity, "move_speed"))


def get_effective_attack_speed(entity: Entity) -> int:
    """Base attack speed plus timed modifiers, never below 1."""
    return max(1, entity.attack_speed + _effect_total(entity, "attack_speed"))


def perform_attack(
    attacker: Entity,
    defender: Entity,
    adjust_damage: Callable[[int], int] | None = None,
) -> AttackResult:
    """
    Resolves one attack of ``attacker`` against ``defender``.

    The steps are, in order:
        1. Evasion: the defender dodges with probability evasion%.
        2. Mitigation: damage = max(0, attack - defense), effective values.
        3. Critical hit (player attackers only).
        4. The optional ``adjust_damage`` hook rewrites the damage.
        5. The defender loses the damage; a player attacker heals through
           lifesteal.
        6. A player defender reflects thorns damage to the attacker.

    Args:
        attacker (Entity): The attacking entity.
        defender (Entity): The entity being attacked.
        adjust_damage (Callable[[int], int] | None): Hook used to layer
            relic effects on top of the base damage.

    Returns:
        AttackResult: What happened.

    """
    # Evasion.
    if defender.evasion > 0 and random.random() * 100 < defender.evasion:
        log_debug("Attack evaded", {"attacker": attacker.name, "defender": defender.name})
        return AttackResult(evaded=True)

    # Mitigation.
    damage = max(0, get_effective_attack(attacker) - get_effective_defense(defender))

    # Player-only rules read the player's extra statistics.
    player_attacker = cast(Player, attacker) if attacker.is_player else None
    player_defender = cast(Player, defender) if defender.is_player else None

    # Critical hit.
    is_crit = False
    if player_attacker is not None and random.random() * 100 < player_attacker.crit_chance:
        is_crit = True
        damage = math.floor(damage * player_attacker.crit_damage / 100)

    if adjust_damage is not None:
        damage = max(0, adjust_damage(damage))

    # Apply the damage to the defender.
    defender.hp -= damage
    result = AttackResult(hit=True, damage=damage, is_crit=is_crit)

    # Lifesteal.
    if player_attacker is not None and player_attacker.lifesteal > 0 and damage > 0:
        heal = math.ceil(damage * player_attacker.lifesteal / 50)
        result.lifesteal_heal = player_attacker.heal(heal)

    # Thorns.
    if player_defender is not None and player_defender.thorns > 0:
        attacker.hp -= player_defender.thorns
        result.thorns_damage = player_defender.thorns
        result.attacker_died = attacker.hp <= 0

    result.defender_died = defender.hp <= 0
    log_debug(
        "Attack resolved",
        {
            "attacker": attacker.name,
            "defender": defender.name,
            "damage": damage,
            "crit": is_crit,
        },
    )
    return result
