"""
Tests for the map generator.
"""

import random

import pytest

from crawler.core.config import MapConfig
from crawler.core.constants import TileType
from crawler.world.map_generator import (
    create_open_grid,
    define_rooms,
    generate_map,
    is_map_connected,
)


@pytest.fixture
def small_config():
    return MapConfig(width=30, height=24, pillar_count=20, segment_count=8)


@pytest.mark.parametrize("seed", [0, 1, 2, 3, 42])
def test_generated_map_is_connected(seed):
    random.seed(seed)
    grid, rooms = generate_map()
    assert is_map_connected(grid)
    assert len(rooms) == 7


def test_generated_map_has_configured_size(small_config):
    random.seed(7)
    grid, _ = generate_map(small_config)
    assert len(grid) == small_config.height
    assert all(len(row) == small_config.width for row in grid)


def test_generated_map_border_is_wall():
    random.seed(11)
    grid, _ = generate_map()
    height, width = len(grid), len(grid[0])
    for x in range(width):
        assert grid[0][x] is TileType.WALL
        assert grid[height - 1][x] is TileType.WALL
    for y in range(height):
        assert grid[y][0] is TileType.WALL
        assert grid[y][width - 1] is TileType.WALL


def test_generated_map_has_obstacles():
    random.seed(5)
    grid, _ = generate_map()
    open_grid = create_open_grid(len(grid[0]), len(grid))
    walls = sum(row.count(TileType.WALL) for row in grid)
    open_walls = sum(row.count(TileType.WALL) for row in open_grid)
    assert walls > open_walls


def test_room_centres_stay_floor():
    random.seed(3)
    grid, rooms = generate_map()
    for room in rooms:
        cx, cy = room.center()
        assert grid[cy][cx] is TileType.FLOOR


def test_rooms_fit_inside_the_map():
    for room in define_rooms(50, 40):
        assert room.x >= 1 and room.y >= 1
        assert room.x + room.w < 50
        assert room.y + room.h < 40


def test_open_grid_is_connected():
    assert is_map_connected(create_open_grid(12, 10))


def test_split_grid_is_not_connected():
    grid = create_open_grid(12, 10)
    for y in range(len(grid)):
        grid[y][6] = TileType.WALL
    assert not is_map_connected(grid)


def test_grid_without_floor_counts_as_connected():
    grid = [[TileType.WALL] * 5 for _ in range(5)]
    assert is_map_connected(grid)


def test_failed_attempts_fall_back_to_open_grid(mocker):
    mocker.patch("crawler.world.map_generator.is_map_connected", return_value=False)
    config = MapConfig(
        width=20,
        height=20,
        max_attempts=2,
        pillar_count=0,
        min_pillar_count=0,
        segment_count=0,
        min_segment_count=0,
    )
    grid, rooms = generate_map(config)
    assert grid == create_open_grid(20, 20)
    assert len(rooms) == 7
