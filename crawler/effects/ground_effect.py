"""
Ground effect module for the crawler.

Defines lingering area effects (toxic clouds, flames) that damage the
entities standing on their tiles at the start of each player turn, and the
purely cosmetic visual effects used by the renderer.
"""

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from crawler.entities.base import Entity


class GroundEffect(BaseModel):
    """
    A set of tiles that damages whoever stands on them for a few turns.
    """

    name: str = Field(
        description="The name of the ground effect.",
    )
    tiles: list[tuple[int, int]] = Field(
        default_factory=list,
        description="The (x, y) tiles covered by the effect.",
    )
    duration: int = Field(
        description="Remaining duration, in player turns.",
    )
    damage: int = Field(
        default=0,
        description="Damage dealt per tick to each entity on a covered tile.",
    )
    color: str = Field(
        default="green",
        description="Color used to draw the covered tiles.",
    )

    def covers(self, x: int, y: int) -> bool:
        """Returns True if the tile (x, y) is part of the effect."""
        return (x, y) in self.tiles

    def tick(self, entity: "Entity") -> int:
        """
        Applies one tick of the effect to an entity standing in it.

        Args:
            entity (Entity): The entity to damage.

        Returns:
            int: The damage dealt, 0 if the entity is not on a covered tile.

        """
        if not self.covers(entity.x, entity.y):
            return 0
        entity.hp -= self.damage
        return self.damage

    def expire_tick(self) -> bool:
        """
        Consumes one turn of duration.

        Returns:
            bool: True while the effect is still active.

        """
        self.duration -= 1
        return self.duration > 0


class VisualEffect(BaseModel):
    """A short-lived highlight of some tiles, shown by the renderer."""

    kind: str = Field(description="The kind of highlight (area, flash, ...).")
    tiles: list[tuple[int, int]] = Field(default_factory=list)
    color: str = Field(default="white")
    duration: int = Field(default=1, description="Player turns left on screen.")
