"""
Relic effect library for the crawler.

Implements the behaviour of every relic.
"""

import math
import random

from .base import RelicContext, RelicEffect, RelicEffectResult


class BonusHealRelic(RelicEffect):
    """Restores a fixed amount of HP (blood stone)."""

    def __init__(self, amount: int) -> None:
        self.amount = amount

    def apply(self, context: RelicContext) -> RelicEffectResult:
        return RelicEffectResult(
            bonus_heal=self.amount,
            message=f"The blood stone glows and restores {self.amount} HP!",
        )


class GoldPercentRelic(RelicEffect):
    """Adds a percentage of the gold being gained (gold magnet, greed incarnate)."""

    def __init__(self, percent: float, message: str) -> None:
        self.percent = percent
        self.message = message

    def apply(self, context: RelicContext) -> RelicEffectResult:
        return RelicEffectResult(
            bonus_gold=math.floor(context.gold_amount * self.percent),
            message=self.message,
        )


class FlatDamageRelic(RelicEffect):
    """
    Adds a flat amount to the damage being processed.

    A negative amount on a damage-taken relic reduces the damage (iron skin).
    """

    def __init__(self, amount: int) -> None:
        self.amount = amount

    def apply(self, context: RelicContext) -> RelicEffectResult:
        return RelicEffectResult(bonus_damage=self.amount)


class DamageMultiplierRelic(RelicEffect):
    """Multiplies the damage being processed (glass cannon, both halves)."""

    def __init__(self, multiplier: float) -> None:
        self.multiplier = multiplier

    def apply(self, context: RelicContext) -> RelicEffectResult:
        return RelicEffectResult(damage_modifier=self.multiplier)


class BerserkerHeartRelic(RelicEffect):
    """Doubles damage while the player is below 30% HP."""

    def apply(self, context: RelicContext) -> RelicEffectResult:
        player = context.player
        if player.hp < player.max_hp * 0.3:
            return RelicEffectResult(
                damage_modifier=2.0,
                message="The berserker heart burns! Damage doubled!",
            )
        return RelicEffectResult()


class ExecutionerAxeRelic(RelicEffect):
    """Doubles damage against targets below 20% HP."""

    def apply(self, context: RelicContext) -> RelicEffectResult:
        target = context.target
        if target is not None and target.hp < target.max_hp * 0.2:
            return RelicEffectResult(
                damage_modifier=2.0,
                message="The executioner's axe falls!",
            )
        return RelicEffectResult()


class MidasTouchRelic(RelicEffect):
    """Grants gold equal to the player's luck on every kill."""

    def apply(self, context: RelicContext) -> RelicEffectResult:
        luck = context.player.luck
        return RelicEffectResult(
            bonus_gold=luck,
            message=f"Midas touch shines, {luck} extra gold!",
        )


class VampiricBladeRelic(RelicEffect):
    """Heals 10% of the damage dealt."""

    def apply(self, context: RelicContext) -> RelicEffectResult:
        return RelicEffectResult(
            bonus_heal=math.floor(context.damage * 0.1),
            message="The vampiric blade drinks life!",
        )


class WealthIsPowerRelic(RelicEffect):
    """Passive: +5 damage per 100 gold carried."""

    def apply(self, context: RelicContext) -> RelicEffectResult:
        return RelicEffectResult(bonus_damage=(context.player.gold // 100) * 5)


class SoulCollectorRelic(RelicEffect):
    """Permanently raises max HP by one on every kill."""

    def apply(self, context: RelicContext) -> RelicEffectResult:
        context.player.max_hp += 1
        return RelicEffectResult(message="The soul collector claims a soul! Max HP +1.")


class ChainLightningRelic(RelicEffect):
    """20% chance on attack to deal 5 damage to every other enemy."""

    def __init__(self, chance: float = 0.2, damage: int = 5) -> None:
        self.chance = chance
        self.damage = damage

    def apply(self, context: RelicContext) -> RelicEffectResult:
        if random.random() >= self.chance:
            return RelicEffectResult()
        for enemy in context.enemies:
            if enemy is not context.target and enemy.is_alive():
                enemy.hp -= self.damage
        return RelicEffectResult(message="Chain lightning arcs between your foes!")


class InfinityGauntletRelic(RelicEffect):
    """Doubles the stat gains of level-up choices."""

    def apply(self, context: RelicContext) -> RelicEffectResult:
        return RelicEffectResult(
            stat_multiplier=2,
            message="The infinity gauntlet awakens!",
        )


class PhoenixFeatherRelic(RelicEffect):
    """
    Once per floor, cancels a lethal hit and restores half of max HP.

    The relic is spent by marking the owned copy exhausted; it recharges when
    the player reaches a new floor.
    """

    def apply(self, context: RelicContext) -> RelicEffectResult:
        player = context.player
        if context.owned.exhausted or player.hp - context.damage > 0:
            return RelicEffectResult()
        context.owned.exhausted = True
        player.hp = math.floor(player.max_hp * 0.5)
        return RelicEffectResult(
            prevent_damage=True,
            message="The phoenix feather burns! You rise from the ashes!",
        )


class TimeLoopRelic(RelicEffect):
    """30% chance that a skill costs no mana."""

    def __init__(self, chance: float = 0.3) -> None:
        self.chance = chance

    def apply(self, context: RelicContext) -> RelicEffectResult:
        if random.random() < self.chance:
            return RelicEffectResult(
                refund_cost=True,
                message="Time loops! The skill cost no mana.",
            )
        return RelicEffectResult()


# Behaviour of every relic, by identifier.
RELIC_EFFECTS: dict[str, RelicEffect] = {
    "blood_stone": BonusHealRelic(5),
    "gold_magnet": GoldPercentRelic(0.2, "The gold magnet pulls in more coins!"),
    "iron_skin": FlatDamageRelic(-2),
    "berserker_heart": BerserkerHeartRelic(),
    "midas_touch": MidasTouchRelic(),
    "vampiric_blade": VampiricBladeRelic(),
    "executioner_axe": ExecutionerAxeRelic(),
    "wealth_is_power": WealthIsPowerRelic(),
    "glass_cannon": DamageMultiplierRelic(1.5),
    "glass_cannon_defense": DamageMultiplierRelic(1.5),
    "soul_collector": SoulCollectorRelic(),
    "chain_lightning": ChainLightningRelic(),
    "infinity_gauntlet": InfinityGauntletRelic(),
    "phoenix_feather": PhoenixFeatherRelic(),
    "time_loop": TimeLoopRelic(),
    "greed_incarnate": GoldPercentRelic(1.0, "Greed devours even more gold!"),
}
