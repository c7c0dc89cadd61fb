"""
Stat effect module for the crawler.

Defines the timed effects that temporarily modify the statistics of an
entity, such as the battle shout buff or the entangle slow.
"""

from typing import Any

from pydantic import BaseModel, Field


class StatEffect(BaseModel):
    """
    A named, timed modification of an entity's statistics.

    The duration is decremented once per turn of the owner and the effect is
    removed once it reaches zero.
    """

    name: str = Field(
        description="The name of the effect.",
    )
    duration: int = Field(
        description="Remaining duration of the effect, in turns of its owner.",
    )
    attack: int | None = Field(
        default=None,
        description="Flat attack modifier.",
    )
    defense: int | None = Field(
        default=None,
        description="Flat defense modifier.",
    )
    move_speed: int | None = Field(
        default=None,
        description="Flat move speed modifier.",
    )
    attack_speed: int | None = Field(
        default=None,
        description="Flat attack speed modifier.",
    )

    def model_post_init(self, _: Any) -> None:
        if not self.name:
            raise ValueError("Effect name must be a non-empty string.")
        if self.duration < 0:
            raise ValueError(f"Effect duration must be non-negative, got {self.duration}.")

    @property
    def display_name(self) -> str:
        return self.name.replace("_", " ").capitalize()

    def modifier(self, stat: str) -> int:
        """
        Returns the flat modifier this effect applies to a statistic.

        Args:
            stat (str): One of attack, defense, move_speed, attack_speed.

        Returns:
            int: The modifier, 0 if the effect does not touch the stat.

        """
        value = getattr(self, stat, None)
        return value if isinstance(value, int) else 0
