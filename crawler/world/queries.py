"""
Spatial query helpers for the crawler.

Answers the questions every other module asks about the map: can something
stand here, is the tile occupied, where can a new entity be placed.
"""

import random

from crawler.core.config import SpawnRates
from crawler.core.constants import DIRECTIONS, ItemType, TileType
from crawler.entities.base import Entity
from crawler.entities.item import Item

from .map_generator import Grid, Room


def is_walkable(grid: Grid, x: int, y: int) -> bool:
    """Returns True if (x, y) is inside the map and is a floor tile."""
    if y < 0 or y >= len(grid) or x < 0 or x >= len(grid[0]):
        return False
    return grid[y][x] is TileType.FLOOR


def is_position_empty(
    x: int,
    y: int,
    player: Entity | None,
    enemies: list[Entity],
    items: list[Item],
) -> bool:
    """
    Returns True if no player, living enemy or item occupies (x, y).

    Args:
        x (int): Column to check.
        y (int): Row to check.
        player (Entity | None): The player, None to ignore it.
        enemies (list[Entity]): The enemies to check.
        items (list[Item]): The items to check.

    """
    if player is not None and player.is_at(x, y):
        return False
    if any(enemy.is_at(x, y) and enemy.is_alive() for enemy in enemies):
        return False
    return not any(item.is_at(x, y) for item in items)


def get_random_position_in_room(
    room: Room,
    grid: Grid,
    player: Entity | None,
    enemies: list[Entity],
    items: list[Item],
    attempts: int = 20,
) -> tuple[int, int] | None:
    """
    Samples a free floor tile inside a room, away from its walls.

    Returns:
        tuple[int, int] | None: The tile, None after ``attempts`` failures.

    """
    for _ in range(attempts):
        x = room.x + 1 + random.randrange(max(1, room.w - 2))
        y = room.y + 1 + random.randrange(max(1, room.h - 2))
        if is_walkable(grid, x, y) and is_position_empty(x, y, player, enemies, items):
            return x, y
    return None


def get_adjacent_empty_position(
    x: int,
    y: int,
    grid: Grid,
    player: Entity | None,
    enemies: list[Entity],
    items: list[Item],
) -> tuple[int, int] | None:
    """Returns a random free floor tile among the 8 neighbours of (x, y), if any."""
    directions = list(DIRECTIONS)
    random.shuffle(directions)
    for dx, dy in directions:
        nx, ny = x + dx, y + dy
        if is_walkable(grid, nx, ny) and is_position_empty(nx, ny, player, enemies, items):
            return nx, ny
    return None


def generate_item_type(rates: SpawnRates | None = None) -> ItemType:
    """Draws the type of a random floor item from the spawn rates."""
    rates = rates or SpawnRates()
    roll = random.random()
    cumulative = 0.0
    for item_type, rate in (
        (ItemType.GOLD, rates.gold),
        (ItemType.OIL, rates.oil),
        (ItemType.POTION, rates.potion),
    ):
        cumulative += rate
        if roll < cumulative:
            return item_type
    return ItemType.ARROW
