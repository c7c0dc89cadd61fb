"""
Base relic module for the crawler.

Defines the relic definitions loaded from the content data, the context a
relic effect is evaluated in, the result it returns, and the abstract effect
strategy every relic behaviour implements.
"""

from abc import ABC, abstractmethod

from pydantic import BaseModel, Field

from crawler.core.constants import RelicRarity, RelicTrigger
from crawler.entities.enemy import Enemy
from crawler.entities.player import OwnedRelic, Player


class RelicDefinition(BaseModel):
    """Static description of a relic."""

    id: str = Field(description="Unique identifier of the relic.")
    name: str = Field(description="Display name.")
    description: str = Field("", description="Tooltip text.")
    rarity: RelicRarity = Field(description="Rarity tier, drives price and drop weight.")
    trigger: RelicTrigger = Field(description="Game event the relic reacts to.")
    icon: str = Field("*", description="Icon shown next to the name.")
    hidden: bool = Field(
        False,
        description="Hidden relics are never offered, they come with another relic.",
    )
    companion: str | None = Field(
        None,
        description="Relic granted together with this one, if any.",
    )

    @property
    def colored_name(self) -> str:
        return f"[{self.rarity.color}]{self.icon} {self.name}[/]"


class RelicContext(BaseModel):
    """Everything a relic effect may look at when it triggers."""

    player: Player
    owned: OwnedRelic
    enemies: list[Enemy] = Field(default_factory=list)
    target: Enemy | None = None
    damage: int = Field(0, description="Damage dealt or about to be taken.")
    gold_amount: int = Field(0, description="Gold about to be gained.")
    skill_id: str | None = None


class RelicEffectResult(BaseModel):
    """
    The contribution of one relic to the event being processed.

    Multiplicative fields default to 1 and additive fields to 0, so results
    can be folded together without special cases.
    """

    damage_modifier: float = Field(1.0, description="Multiplier of the damage.")
    bonus_damage: int = Field(0, description="Flat damage added (or removed).")
    bonus_gold: int = Field(0, description="Extra gold gained.")
    bonus_heal: int = Field(0, description="HP restored to the player.")
    prevent_damage: bool = Field(False, description="Cancels the incoming damage.")
    refund_cost: bool = Field(False, description="The skill costs no mana.")
    stat_multiplier: int = Field(1, description="Multiplier of level-up stat gains.")
    message: str | None = Field(None, description="Log message, if the relic fired.")


class RelicEffect(ABC):
    """The behaviour of a relic."""

    @abstractmethod
    def apply(self, context: RelicContext) -> RelicEffectResult:
        """
        Evaluates the relic.

        Args:
            context (RelicContext): The event the relic reacts to.

        Returns:
            RelicEffectResult: The relic's contribution.

        """
