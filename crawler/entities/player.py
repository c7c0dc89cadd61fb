"""
Player module for the crawler.

Defines the player record, with its resources (mana, torch, arrows, gold),
progression, learned skills and owned relics.
"""

from typing import Any

from pydantic import BaseModel, Field

from crawler.core.constants import ActorKind

from .base import Entity


class OwnedRelic(BaseModel):
    """A relic in the player's possession."""

    id: str = Field(description="Identifier of the relic definition.")
    stacks: int = Field(1, description="How many copies the player owns.")
    exhausted: bool = Field(
        False,
        description="True once a once-per-floor relic has been spent.",
    )


class Player(Entity):
    """The adventurer controlled by the user."""

    kind: ActorKind = ActorKind.PLAYER
    mp: int = Field(30, description="Current mana points.")
    max_mp: int = Field(30, description="Maximum mana points.")
    torch: int = Field(500, description="Torch fuel left, burns one per turn.")
    max_torch: int = Field(500, description="Maximum torch fuel.")
    level: int = Field(1, description="Character level.")
    exp: int = Field(0, description="Experience towards the next level.")
    next_level_exp: int = Field(10, description="Experience needed to level up.")
    gold: int = Field(0, description="Gold carried.")
    crit_chance: int = Field(5, description="Critical hit chance, in percent.")
    crit_damage: int = Field(200, description="Critical damage, in percent.")
    luck: int = Field(10, description="Luck, improves item drops.")
    hp_regen: int = Field(0, description="HP regenerated every regen interval.")
    mp_regen: int = Field(0, description="MP regenerated every regen interval.")
    lifesteal: int = Field(0, description="Lifesteal rating.")
    thorns: int = Field(0, description="Damage reflected to melee attackers.")
    skill_slots: int = Field(2, description="Maximum number of known skills.")
    skill_ids: list[str] = Field(
        default_factory=list,
        description="Identifiers of the known skills, in slot order.",
    )
    arrows: int = Field(5, description="Arrows carried.")
    max_arrows: int = Field(20, description="Maximum arrows carried.")
    relics: list[OwnedRelic] = Field(
        default_factory=list,
        description="Relics owned by the player.",
    )
    is_dashing: bool = Field(False, description="True while a dash awaits its direction.")

    def model_post_init(self, _: Any) -> None:
        if self.kind is not ActorKind.PLAYER:
            raise ValueError(f"A player must have kind PLAYER, got {self.kind}.")

    def restore_mp(self, amount: int) -> int:
        """Restores mana without exceeding the maximum, returns the amount restored."""
        before = self.mp
        self.mp = min(self.max_mp, self.mp + max(0, amount))
        return self.mp - before

    def restore_torch(self, amount: int) -> int:
        """Refuels the torch without exceeding the maximum, returns the amount restored."""
        before = self.torch
        self.torch = min(self.max_torch, self.torch + max(0, amount))
        return self.torch - before

    def get_relic(self, relic_id: str) -> OwnedRelic | None:
        for relic in self.relics:
            if relic.id == relic_id:
                return relic
        return None

    def has_relic(self, relic_id: str) -> bool:
        return self.get_relic(relic_id) is not None

    def has_free_skill_slot(self) -> bool:
        return len(self.skill_ids) < self.skill_slots
