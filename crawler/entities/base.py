"""
Base entity module for the crawler.

Defines the common record shared by the player and the monsters: position,
hit points, combat statistics, timed effects, stun and action points.
"""

from pydantic import BaseModel, Field

from crawler.core.constants import ActorKind
from crawler.effects.stat_effect import StatEffect


class Entity(BaseModel):
    """
    Anything that occupies a tile and takes turns.

    The ``kind`` field discriminates players from enemies; combat rules that
    depend on who attacks whom check it instead of probing for attributes.
    """

    kind: ActorKind = Field(
        description="Discriminates players from enemies.",
    )
    name: str = Field(
        description="Display name of the entity.",
    )
    x: int = Field(0, description="Column of the entity.")
    y: int = Field(0, description="Row of the entity.")
    hp: int = Field(description="Current hit points.")
    max_hp: int = Field(description="Maximum hit points.")
    attack: int = Field(0, description="Base attack.")
    defense: int = Field(0, description="Base defense.")
    move_speed: int = Field(10, description="Action points gained per tick.")
    attack_speed: int = Field(10, description="Attack speed.")
    evasion: int = Field(0, description="Chance to evade attacks, in percent.")
    effects: list[StatEffect] = Field(
        default_factory=list,
        description="Active timed effects, in insertion order.",
    )
    stunned: int = Field(0, description="Turns of stun left.")
    ap: int = Field(0, description="Accumulated action points.")

    @property
    def is_player(self) -> bool:
        return self.kind is ActorKind.PLAYER

    @property
    def position(self) -> tuple[int, int]:
        return self.x, self.y

    @property
    def colored_name(self) -> str:
        return self.kind.colorize(self.name)

    def is_alive(self) -> bool:
        """Returns True while the entity has hit points left."""
        return self.hp > 0

    def is_at(self, x: int, y: int) -> bool:
        return self.x == x and self.y == y

    def heal(self, amount: int) -> int:
        """
        Restores hit points without exceeding the maximum.

        Args:
            amount (int): The amount to restore.

        Returns:
            int: The amount actually restored.

        """
        if amount <= 0:
            return 0
        before = self.hp
        self.hp = min(self.max_hp, self.hp + amount)
        return max(0, self.hp - before)

    def add_effect(self, effect: StatEffect) -> None:
        """Adds a timed effect, replacing any effect with the same name."""
        self.effects = [e for e in self.effects if e.name != effect.name]
        self.effects.append(effect)

    def has_effect(self, name: str) -> bool:
        return any(effect.name == name for effect in self.effects)
