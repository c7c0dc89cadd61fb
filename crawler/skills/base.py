"""
Base skill module for the crawler.

Defines the skill definitions loaded from the content data, the capability
context handed to skill effects, and the abstract effect strategy every skill
behaviour implements.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from crawler.core.constants import LogType, SkillOutcome, SkillType

if TYPE_CHECKING:
    from crawler.effects.ground_effect import GroundEffect, VisualEffect
    from crawler.entities.enemy import Enemy
    from crawler.entities.player import Player


class SkillDefinition(BaseModel):
    """
    Static description and tuning numbers of a skill.

    Only the fields relevant to a skill's effect are set; the others keep
    their neutral defaults.
    """

    id: str = Field(description="Unique identifier of the skill.")
    name: str = Field(description="Display name.")
    cost: int = Field(description="Mana cost.")
    type: SkillType = Field(description="Category of the skill.")
    description: str = Field("", description="Tooltip text.")
    damage: int = Field(0, description="Base damage.")
    damage_per_level: int = Field(0, description="Extra damage per caster level.")
    radius: int = Field(0, description="Chebyshev radius of the area.")
    range: float = Field(0, description="Euclidean search range for auto-targeting.")
    max_reach: int | None = Field(
        None,
        description="Maximum Chebyshev distance between caster and target, if any.",
    )
    require_hit: bool = Field(
        False,
        description="If True, the skill fails when no enemy is damaged.",
    )
    duration: int = Field(0, description="Duration of the effect, in turns.")
    ground_damage: int = Field(0, description="Damage per tick of the ground effect.")
    heal_percent: float = Field(0, description="Heal, as a fraction of max HP.")
    torch_restore_percent: float = Field(0, description="Torch refill, of max torch.")
    stun_chance: float = Field(0, description="Chance to stun the target.")
    stun_duration: int = Field(0, description="Turns of stun inflicted.")
    slow_percent: float = Field(0, description="Fraction of move speed removed.")
    attack_bonus: int = Field(0, description="Attack granted by a buff.")
    defense_bonus: int = Field(0, description="Defense granted by a buff.")
    distance: int = Field(0, description="Tiles travelled by a movement skill.")
    effect_name: str | None = Field(
        None,
        description="Name of the timed or ground effect created by the skill.",
    )
    color: str = Field("white", description="Color of the skill's visual effect.")

    def model_post_init(self, _: Any) -> None:
        if self.cost < 0:
            raise ValueError(f"Skill '{self.id}' cost must be non-negative.")

    @property
    def colored_name(self) -> str:
        return f"[{self.type.color}]{self.name}[/]"

    def damage_for(self, level: int) -> int:
        """Returns the damage dealt by a caster of the given level."""
        return self.damage + self.damage_per_level * level


class SkillContext:
    """
    The capabilities a skill effect may use to read and mutate the game.

    Effects never reach into the game directly; everything they can do goes
    through this object.
    """

    def __init__(
        self,
        enemies: list["Enemy"],
        is_walkable: Callable[[int, int], bool],
        is_position_empty: Callable[[int, int], bool],
        kill: Callable[["Enemy"], None],
        log: Callable[[str, LogType], None],
        refresh: Callable[[], None] = lambda: None,
        add_ground_effect: Callable[["GroundEffect"], None] = lambda _: None,
        add_visual_effect: Callable[["VisualEffect"], None] = lambda _: None,
    ) -> None:
        self.enemies = enemies
        self.is_walkable = is_walkable
        self.is_position_empty = is_position_empty
        self.kill = kill
        self.log = log
        self.refresh = refresh
        self.add_ground_effect = add_ground_effect
        self.add_visual_effect = add_visual_effect

    def damage_enemy(self, enemy: "Enemy", amount: int) -> None:
        """Deals damage to an enemy and runs the kill routine if it dies."""
        enemy.hp -= amount
        if enemy.hp <= 0:
            self.kill(enemy)


class SkillEffect(ABC):
    """The behaviour of a skill, parameterized by its definition."""

    @abstractmethod
    def apply(
        self,
        skill: SkillDefinition,
        caster: "Player",
        target: Any,
        context: SkillContext,
    ) -> SkillOutcome:
        """
        Applies the skill.

        Args:
            skill (SkillDefinition): The tuning numbers of the skill.
            caster (Player): The player casting the skill.
            target (Enemy | tuple[int, int] | None): Explicit target, if any.
            context (SkillContext): The capabilities available to the effect.

        Returns:
            SkillOutcome: SUCCESS, FAILED when there is no valid target, or
            AWAIT_DIRECTION when a directional input must complete the skill.

        """


class Skill:
    """A skill definition joined with the effect that implements it."""

    def __init__(self, definition: SkillDefinition, effect: SkillEffect) -> None:
        self.definition = definition
        self.effect = effect

    @property
    def id(self) -> str:
        return self.definition.id

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def cost(self) -> int:
        return self.definition.cost

    def apply(self, caster: "Player", target: Any, context: SkillContext) -> SkillOutcome:
        return self.effect.apply(self.definition, caster, target, context)

    def __repr__(self) -> str:
        return f"Skill({self.id!r}, cost={self.cost})"
