"""
World module for the crawler.

This module contains map generation, field-of-view computation and the
spatial queries used to place and move entities.
"""

from .map_generator import (
    Grid,
    Room,
    create_open_grid,
    define_rooms,
    generate_map,
    is_map_connected,
)
from .queries import (
    generate_item_type,
    get_adjacent_empty_position,
    get_random_position_in_room,
    is_position_empty,
    is_walkable,
)
from .visibility import FovMap, FovTile, compute_visibility, create_fov_map, is_visible

__all__ = [
    "FovMap",
    "FovTile",
    "Grid",
    "Room",
    "compute_visibility",
    "create_fov_map",
    "create_open_grid",
    "define_rooms",
    "generate_item_type",
    "generate_map",
    "get_adjacent_empty_position",
    "get_random_position_in_room",
    "is_map_connected",
    "is_position_empty",
    "is_visible",
    "is_walkable",
]
