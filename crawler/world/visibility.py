"""
Visibility module for the crawler.

Computes the player's field of view by casting rays around the origin and
remembers which tiles have ever been seen.
"""

import math

from pydantic import BaseModel

from crawler.core.constants import TileType
from crawler.core.utils import round_half_up

from .map_generator import Grid


class FovTile(BaseModel):
    """Visibility state of a single tile."""

    visible: bool = False
    explored: bool = False


FovMap = list[list[FovTile]]

# Angle between two consecutive rays, in degrees.
RAY_STEP_DEGREES = 2


def create_fov_map(width: int, height: int) -> FovMap:
    """Returns a visibility grid where nothing has been seen yet."""
    return [[FovTile() for _ in range(width)] for _ in range(height)]


def compute_visibility(grid: Grid, fov: FovMap, origin_x: int, origin_y: int, radius: int) -> None:
    """
    Recomputes the visible tiles around an origin.

    Every tile's visible flag is cleared first. Rays are then cast every two
    degrees, stepping one tile length at a time up to the radius; each tile
    reached becomes visible and explored. A ray stops after the first wall
    it reaches (the wall itself is visible) or when it leaves the map.

    Args:
        grid (Grid): The tile grid.
        fov (FovMap): The visibility grid to update in place.
        origin_x (int): Column of the viewer.
        origin_y (int): Row of the viewer.
        radius (int): Maximum sight distance.

    """
    height = len(grid)
    width = len(grid[0]) if height else 0
    for row in fov:
        for tile in row:
            tile.visible = False

    for angle in range(0, 360, RAY_STEP_DEGREES):
        rad = math.radians(angle)
        cos, sin = math.cos(rad), math.sin(rad)
        for step in range(radius + 1):
            x = round_half_up(origin_x + cos * step)
            y = round_half_up(origin_y + sin * step)
            if not (0 <= x < width and 0 <= y < height):
                break
            fov[y][x].visible = True
            fov[y][x].explored = True
            if grid[y][x] is TileType.WALL:
                break


def is_visible(fov: FovMap, x: int, y: int) -> bool:
    """Returns True if the tile is currently in view."""
    if 0 <= y < len(fov) and 0 <= x < len(fov[y]):
        return fov[y][x].visible
    return False
