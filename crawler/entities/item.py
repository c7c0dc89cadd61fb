"""
Item module for the crawler.

Defines the items lying on the dungeon floor.
"""

from pydantic import BaseModel, Field

from crawler.core.constants import ItemType


class Item(BaseModel):
    """An item lying on a tile, picked up by walking over it."""

    x: int = Field(description="Column of the item.")
    y: int = Field(description="Row of the item.")
    type: ItemType = Field(description="What the item is.")

    @property
    def position(self) -> tuple[int, int]:
        return self.x, self.y

    def is_at(self, x: int, y: int) -> bool:
        return self.x == x and self.y == y
