"""
Relic manager module for the crawler.

Dispatches game events to the relics owned by the player and folds their
results into the numbers the game needs: final attack damage, bonus gold,
final damage taken, skill refunds and level-up multipliers.
"""

import math
import random
from typing import Any

from catchery import log_warning
from pydantic import BaseModel, Field

from crawler.core.constants import RelicRarity, RelicTrigger
from crawler.core.content import ContentRepository
from crawler.core.logging import log_debug
from crawler.entities.enemy import Enemy
from crawler.entities.player import OwnedRelic, Player

from .base import RelicContext, RelicDefinition, RelicEffectResult
from .library import RELIC_EFFECTS


class AttackRelicOutcome(BaseModel):
    """Result of the attack relics."""

    final_damage: int
    messages: list[str] = Field(default_factory=list)


class KillRelicOutcome(BaseModel):
    """Result of the kill relics."""

    bonus_gold: int = 0
    messages: list[str] = Field(default_factory=list)


class DamageRelicOutcome(BaseModel):
    """Result of the damage-taken relics."""

    final_damage: int
    prevented: bool = False
    messages: list[str] = Field(default_factory=list)


class GoldRelicOutcome(BaseModel):
    """Result of the gold relics."""

    final_gold: int
    messages: list[str] = Field(default_factory=list)


class SkillRelicOutcome(BaseModel):
    """Result of the skill-use relics."""

    refund_cost: bool = False
    messages: list[str] = Field(default_factory=list)


class LevelUpRelicOutcome(BaseModel):
    """Result of the level-up relics."""

    stat_multiplier: int = 1
    messages: list[str] = Field(default_factory=list)


def trigger_relics(
    trigger: RelicTrigger,
    player: Player,
    relics: list[OwnedRelic],
    enemies: list[Enemy],
    repository: ContentRepository | None = None,
    **context: Any,
) -> list[RelicEffectResult]:
    """
    Evaluates every owned relic reacting to an event.

    Args:
        trigger (RelicTrigger): The event being processed.
        player (Player): The player owning the relics.
        relics (list[OwnedRelic]): The owned relics.
        enemies (list[Enemy]): The enemies on the floor.
        repository (ContentRepository | None): Where relic definitions live.
        **context: Extra context fields (target, damage, gold_amount, skill_id).

    Returns:
        list[RelicEffectResult]: One result per matching relic. Additive
        bonuses are multiplied by the number of stacks owned.

    """
    repository = repository or ContentRepository()
    results: list[RelicEffectResult] = []
    for owned in relics:
        definition = repository.relics.get(owned.id)
        if definition is None or definition.trigger is not trigger:
            continue
        effect = RELIC_EFFECTS.get(owned.id)
        if effect is None:
            log_warning(f"Relic '{owned.id}' has no effect.", {"relic_id": owned.id})
            continue
        result = effect.apply(
            RelicContext(player=player, owned=owned, enemies=enemies, **context)
        )
        if owned.stacks > 1:
            result.bonus_damage *= owned.stacks
            result.bonus_gold *= owned.stacks
            result.bonus_heal *= owned.stacks
        log_debug(
            "Relic triggered",
            {"relic": owned.id, "trigger": trigger, "stacks": owned.stacks},
        )
        results.append(result)
    return results


def get_passive_bonuses(
    player: Player,
    enemies: list[Enemy],
    repository: ContentRepository | None = None,
) -> int:
    """Returns the flat attack bonus granted by passive relics."""
    results = trigger_relics(RelicTrigger.PASSIVE, player, player.relics, enemies, repository)
    return sum(result.bonus_damage for result in results)


def process_attack_relics(
    player: Player,
    enemies: list[Enemy],
    target: Enemy,
    base_damage: int,
    repository: ContentRepository | None = None,
) -> AttackRelicOutcome:
    """
    Applies the attack relics to the damage of a player attack.

    The final damage is ``floor((base + bonuses + passives) * multipliers)``.
    Heals granted by the relics are applied to the player immediately.
    """
    results = trigger_relics(
        RelicTrigger.ON_ATTACK,
        player,
        player.relics,
        enemies,
        repository,
        target=target,
        damage=base_damage,
    )
    multiplier = 1.0
    bonus = get_passive_bonuses(player, enemies, repository)
    heal = 0
    messages = []
    for result in results:
        multiplier *= result.damage_modifier
        bonus += result.bonus_damage
        heal += result.bonus_heal
        if result.message:
            messages.append(result.message)
    if heal > 0:
        player.heal(heal)
    return AttackRelicOutcome(
        final_damage=max(0, math.floor((base_damage + bonus) * multiplier)),
        messages=messages,
    )


def process_kill_relics(
    player: Player,
    enemies: list[Enemy],
    killed: Enemy,
    repository: ContentRepository | None = None,
) -> KillRelicOutcome:
    """Applies the kill relics; heals are applied, bonus gold is returned."""
    results = trigger_relics(
        RelicTrigger.ON_KILL,
        player,
        player.relics,
        enemies,
        repository,
        target=killed,
    )
    heal = sum(result.bonus_heal for result in results)
    if heal > 0:
        player.heal(heal)
    return KillRelicOutcome(
        bonus_gold=sum(result.bonus_gold for result in results),
        messages=[result.message for result in results if result.message],
    )


def process_damage_relics(
    player: Player,
    enemies: list[Enemy],
    incoming: int,
    repository: ContentRepository | None = None,
) -> DamageRelicOutcome:
    """
    Applies the damage-taken relics to an incoming hit.

    Negative flat bonuses reduce the damage, modifiers multiply it, and any
    relic preventing the damage brings it to zero.
    """
    results = trigger_relics(
        RelicTrigger.ON_DAMAGE_TAKEN,
        player,
        player.relics,
        enemies,
        repository,
        damage=incoming,
    )
    modifier = 1.0
    reduction = 0
    prevented = False
    messages = []
    for result in results:
        modifier *= result.damage_modifier
        reduction -= result.bonus_damage
        prevented = prevented or result.prevent_damage
        if result.message:
            messages.append(result.message)
    if prevented:
        final = 0
    else:
        final = max(0, math.floor((incoming - reduction) * modifier))
    return DamageRelicOutcome(final_damage=final, prevented=prevented, messages=messages)


def process_gold_relics(
    player: Player,
    enemies: list[Enemy],
    base_gold: int,
    repository: ContentRepository | None = None,
) -> GoldRelicOutcome:
    """Returns the gold actually gained once the gold relics are applied."""
    results = trigger_relics(
        RelicTrigger.ON_GOLD_GAIN,
        player,
        player.relics,
        enemies,
        repository,
        gold_amount=base_gold,
    )
    return GoldRelicOutcome(
        final_gold=base_gold + sum(result.bonus_gold for result in results),
        messages=[result.message for result in results if result.message],
    )


def process_skill_relics(
    player: Player,
    enemies: list[Enemy],
    skill_id: str,
    repository: ContentRepository | None = None,
) -> SkillRelicOutcome:
    """Tells whether a relic refunds the cost of the skill just used."""
    results = trigger_relics(
        RelicTrigger.ON_SKILL_USE,
        player,
        player.relics,
        enemies,
        repository,
        skill_id=skill_id,
    )
    return SkillRelicOutcome(
        refund_cost=any(result.refund_cost for result in results),
        messages=[result.message for result in results if result.message],
    )


def process_level_up_relics(
    player: Player,
    enemies: list[Enemy],
    repository: ContentRepository | None = None,
) -> LevelUpRelicOutcome:
    """Returns the multiplier applied to level-up stat gains."""
    results = trigger_relics(RelicTrigger.ON_LEVEL_UP, player, player.relics, enemies, repository)
    multiplier = 1
    for result in results:
        multiplier *= result.stat_multiplier
    return LevelUpRelicOutcome(
        stat_multiplier=multiplier,
        messages=[result.message for result in results if result.message],
    )


def get_random_relic(
    weights: dict[str, int] | None = None,
    repository: ContentRepository | None = None,
) -> RelicDefinition | None:
    """
    Draws a random relic, first by rarity weight, then uniformly.

    Hidden relics are never drawn.

    Returns:
        RelicDefinition | None: The relic, None if the drawn rarity is empty.

    """
    repository = repository or ContentRepository()
    weights = weights or repository.balance.shop.relic_weights
    roll = random.random() * sum(weights.values())
    for rarity_name, weight in weights.items():
        roll -= weight
        if roll <= 0:
            rarity = RelicRarity(rarity_name)
            candidates = [
                r for r in repository.relics.values() if r.rarity is rarity and not r.hidden
            ]
            if candidates:
                return random.choice(candidates)
    return None


def grant_relic(
    player: Player,
    relic_id: str,
    repository: ContentRepository | None = None,
) -> RelicDefinition | None:
    """
    Gives a relic to the player, stacking it if already owned.

    The relic's companion, if any, is granted along with it.

    Returns:
        RelicDefinition | None: The granted relic, None if the id is unknown.

    """
    repository = repository or ContentRepository()
    definition = repository.get_relic(relic_id)
    if definition is None:
        return None
    owned = player.get_relic(relic_id)
    if owned is None:
        player.relics.append(OwnedRelic(id=relic_id))
    else:
        owned.stacks += 1
    if definition.companion:
        grant_relic(player, definition.companion, repository)
    return definition


def recharge_relics(player: Player) -> None:
    """Restores the once-per-floor relics."""
    for owned in player.relics:
        owned.exhausted = False
