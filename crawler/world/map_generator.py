"""
Map generator module for the crawler.

Builds an open cave floor surrounded by walls and scattered with wall
segments and pillars, while keeping every floor tile reachable from every
other. Also defines the virtual rooms used as spawn regions.
"""

import random
from collections import deque

from pydantic import BaseModel, Field

from crawler.core.config import MapConfig
from crawler.core.constants import ORTHOGONAL_DIRECTIONS, TileType
from crawler.core.logging import log_debug, log_info

Grid = list[list[TileType]]


class Room(BaseModel):
    """A rectangular spawn region. Rooms are virtual, they are not carved."""

    x: int = Field(description="Left column.")
    y: int = Field(description="Top row.")
    w: int = Field(description="Width in tiles.")
    h: int = Field(description="Height in tiles.")

    def center(self) -> tuple[int, int]:
        """Returns the central tile of the room."""
        return self.x + self.w // 2, self.y + self.h // 2


def create_open_grid(width: int, height: int) -> Grid:
    """Returns a grid of floor tiles surrounded by a wall border."""
    grid = [[TileType.FLOOR for _ in range(width)] for _ in range(height)]
    for x in range(width):
        grid[0][x] = TileType.WALL
        grid[height - 1][x] = TileType.WALL
    for y in range(height):
        grid[y][0] = TileType.WALL
        grid[y][width - 1] = TileType.WALL
    return grid


def count_floor_tiles(grid: Grid) -> int:
    return sum(1 for row in grid for tile in row if tile is TileType.FLOOR)


def is_map_connected(grid: Grid) -> bool:
    """
    Checks that every floor tile is reachable from every other one.

    Flood-fills orthogonally from the first floor tile found and compares the
    reached count with the total floor count.

    Args:
        grid (Grid): The map.

    Returns:
        bool: True if the floor forms a single region (or there is no floor).

    """
    height = len(grid)
    width = len(grid[0]) if height else 0
    start = next(
        ((x, y) for y in range(height) for x in range(width) if grid[y][x] is TileType.FLOOR),
        None,
    )
    if start is None:
        return True
    seen = {start}
    queue = deque([start])
    while queue:
        cx, cy = queue.popleft()
        for dx, dy in ORTHOGONAL_DIRECTIONS:
            nx, ny = cx + dx, cy + dy
            if (
                0 <= nx < width
                and 0 <= ny < height
                and (nx, ny) not in seen
                and grid[ny][nx] is TileType.FLOOR
            ):
                seen.add((nx, ny))
                queue.append((nx, ny))
    return len(seen) == count_floor_tiles(grid)


def define_rooms(width: int, height: int) -> list[Room]:
    """
    Returns the spawn regions of a map of the given size.

    The first room is the player start (top-left), the last one holds the
    exit portal (bottom-right); the others host enemies and items.
    """
    return [
        Room(x=3, y=3, w=6, h=6),
        Room(x=width // 2 - 3, y=height // 2 - 3, w=6, h=6),
        Room(x=width - 15, y=5, w=6, h=6),
        Room(x=5, y=height - 12, w=6, h=6),
        Room(x=width // 3, y=height // 3, w=5, h=5),
        Room(x=width * 2 // 3, y=height * 2 // 3, w=5, h=5),
        Room(x=width - 10, y=height - 10, w=6, h=6),
    ]


def _try_block(grid: Grid, tiles: list[tuple[int, int]]) -> bool:
    """Walls the tiles off, reverting if the floor becomes disconnected."""
    for x, y in tiles:
        grid[y][x] = TileType.WALL
    if is_map_connected(grid):
        return True
    for x, y in tiles:
        grid[y][x] = TileType.FLOOR
    return False


def _add_wall_segments(grid: Grid, count: int, reserved: set[tuple[int, int]]) -> int:
    height, width = len(grid), len(grid[0])
    placed = 0
    tries = 0
    while placed < count and tries < count * 20:
        tries += 1
        horizontal = random.random() < 0.5
        length = random.randint(3, 6)
        span_x = width - (length if horizontal else 1) - 4
        span_y = height - (1 if horizontal else length) - 4
        if span_x <= 0 or span_y <= 0:
            continue
        x = random.randrange(span_x) + 2
        y = random.randrange(span_y) + 2
        tiles = [(x + i, y) if horizontal else (x, y + i) for i in range(length)]
        if any(
            tx < 2
            or ty < 2
            or tx >= width - 2
            or ty >= height - 2
            or grid[ty][tx] is not TileType.FLOOR
            or (tx, ty) in reserved
            for tx, ty in tiles
        ):
            continue
        if _try_block(grid, tiles):
            placed += 1
    return placed


def _floor_neighbours(grid: Grid, x: int, y: int) -> int:
    return sum(
        1
        for dy in (-1, 0, 1)
        for dx in (-1, 0, 1)
        if (dx or dy) and grid[y + dy][x + dx] is TileType.FLOOR
    )


def _add_pillars(grid: Grid, count: int, reserved: set[tuple[int, int]]) -> int:
    height, width = len(grid), len(grid[0])
    placed = 0
    tries = 0
    while placed < count and tries < count * 10:
        tries += 1
        x = random.randrange(2, width - 2)
        y = random.randrange(2, height - 2)
        if grid[y][x] is not TileType.FLOOR or (x, y) in reserved:
            continue
        # Pillars stand in the open, never against other walls.
        if _floor_neighbours(grid, x, y) < 6:
            continue
        if _try_block(grid, [(x, y)]):
            placed += 1
    return placed


def generate_map(config: MapConfig | None = None) -> tuple[Grid, list[Room]]:
    """
    Generates a connected cave floor and its spawn rooms.

    Every attempt starts from an open bordered grid and adds wall segments
    and pillars, rejecting any addition that would split the floor. The
    result is checked once more; on failure the next attempt uses fewer
    obstacles. Should every attempt fail, the plain bordered grid is used.

    Args:
        config (MapConfig | None): Generation parameters, defaults if None.

    Returns:
        tuple[Grid, list[Room]]: The tile grid (indexed [y][x]) and the rooms.

    """
    config = config or MapConfig()
    rooms = define_rooms(config.width, config.height)
    # Room centres host the player, the portal and the first spawns.
    reserved = {room.center() for room in rooms}

    for attempt in range(config.max_attempts):
        grid = create_open_grid(config.width, config.height)
        segments = max(config.min_segment_count, config.segment_count - attempt)
        pillars = max(config.min_pillar_count, config.pillar_count - attempt * 2)
        placed_segments = _add_wall_segments(grid, segments, reserved)
        placed_pillars = _add_pillars(grid, pillars, reserved)
        if is_map_connected(grid):
            log_debug(
                "Generated map",
                {
                    "attempt": attempt + 1,
                    "segments": placed_segments,
                    "pillars": placed_pillars,
                },
            )
            return grid, rooms
        log_debug("Disconnected map, retrying", {"attempt": attempt + 1})

    log_info("Map generation fell back to an open floor", {"attempts": config.max_attempts})
    return create_open_grid(config.width, config.height), rooms
