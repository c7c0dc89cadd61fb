"""
Enemy module for the crawler.

Defines the monster definitions loaded from the content data and the enemy
records instantiated from them.
"""

from typing import Any

from pydantic import BaseModel, Field

from crawler.core.constants import ActorKind, EnemySpecial

from .base import Entity


class MonsterStats(BaseModel):
    """
    Statistics of a monster definition.

    Scaling statistics are ``[base, per_floor]`` pairs: the value on floor F is
    ``base + F * per_floor`` before difficulty scaling.
    """

    hp: tuple[int, int] = Field(description="Hit points, [base, per floor].")
    attack: tuple[int, int] = Field(description="Attack, [base, per floor].")
    defense: tuple[int, int] = Field(description="Defense, [base, per floor].")
    exp: tuple[int, int] = Field(description="Experience reward, [base, per floor].")
    evasion: int = Field(0, description="Chance to evade attacks, in percent.")
    move_speed: int = Field(10, description="Action points gained per tick.")
    attack_speed: int = Field(10, description="Attack speed.")


class MonsterDefinition(BaseModel):
    """A kind of monster, as described by the content data."""

    id: str = Field(description="Unique identifier of the monster.")
    name: str = Field(description="Display name.")
    glyph: str = Field(description="Single character used to draw the monster.")
    min_floor: int = Field(description="First floor where the monster spawns.")
    max_floor: int = Field(description="Last floor where the monster spawns.")
    stats: MonsterStats
    special: EnemySpecial = Field(
        EnemySpecial.NONE,
        description="Special behaviour of the monster.",
    )
    attack_range: int = Field(1, description="Reach of the monster's attack.")

    def model_post_init(self, _: Any) -> None:
        if len(self.glyph) != 1:
            raise ValueError(f"Monster '{self.id}' glyph must be a single character.")
        if self.min_floor > self.max_floor:
            raise ValueError(
                f"Monster '{self.id}' has min_floor {self.min_floor} > max_floor {self.max_floor}."
            )

    def spawns_on(self, floor: int) -> bool:
        """Returns True if the monster can appear on the given floor."""
        return self.min_floor <= floor <= self.max_floor


class Enemy(Entity):
    """A monster roaming the dungeon."""

    kind: ActorKind = ActorKind.ENEMY
    type_id: str = Field(description="Identifier of the monster definition.")
    glyph: str = Field("?", description="Character used to draw the enemy.")
    exp: int = Field(0, description="Experience granted when killed.")
    special: EnemySpecial = Field(
        EnemySpecial.NONE,
        description="Special behaviour of the enemy.",
    )
    attack_range: int = Field(1, description="Reach of the enemy's attack.")

    def model_post_init(self, _: Any) -> None:
        if self.kind is not ActorKind.ENEMY:
            raise ValueError(f"An enemy must have kind ENEMY, got {self.kind}.")
