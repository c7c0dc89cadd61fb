"""
Targeting helpers for skills.

Resolves explicit or automatic skill targets and selects the enemies caught
in an area.
"""

from collections.abc import Callable
from typing import Any

from crawler.core.utils import chebyshev_distance, euclidean_distance
from crawler.entities.base import Entity
from crawler.entities.enemy import Enemy


def find_nearest_enemy(caster: Entity, enemies: list[Enemy], max_range: float) -> Enemy | None:
    """
    Finds the closest living enemy within a Euclidean range.

    Args:
        caster (Entity): The entity searching for a target.
        enemies (list[Enemy]): The candidate enemies.
        max_range (float): The maximum Euclidean distance.

    Returns:
        Enemy | None: The nearest enemy, first one wins on ties.

    """
    nearest: Enemy | None = None
    nearest_dist = float("inf")
    for enemy in enemies:
        if not enemy.is_alive():
            continue
        dist = euclidean_distance(caster.x, caster.y, enemy.x, enemy.y)
        if dist <= max_range and dist < nearest_dist:
            nearest = enemy
            nearest_dist = dist
    return nearest


def get_enemies_in_range(x: int, y: int, enemies: list[Enemy], radius: int) -> list[Enemy]:
    """Returns the living enemies within a Chebyshev radius of (x, y)."""
    return [
        enemy
        for enemy in enemies
        if enemy.is_alive() and chebyshev_distance(x, y, enemy.x, enemy.y) <= radius
    ]


def area_tiles(
    x: int,
    y: int,
    radius: int,
    is_walkable: Callable[[int, int], bool],
) -> list[tuple[int, int]]:
    """Returns the walkable tiles within a Chebyshev radius of (x, y)."""
    return [
        (tx, ty)
        for tx in range(x - radius, x + radius + 1)
        for ty in range(y - radius, y + radius + 1)
        if is_walkable(tx, ty)
    ]


def resolve_target_position(
    caster: Entity,
    target: Any,
    enemies: list[Enemy],
    max_range: float,
) -> tuple[int, int] | None:
    """
    Resolves the centre of an area skill.

    Args:
        caster (Entity): The caster.
        target (Enemy | tuple[int, int] | None): The explicit target, if any.
        enemies (list[Enemy]): The enemies used for auto-targeting.
        max_range (float): Range of the auto-targeting search.

    Returns:
        tuple[int, int] | None: The centre tile, None if nothing is in range.

    """
    if isinstance(target, Entity):
        return target.x, target.y
    if isinstance(target, tuple):
        return target
    nearest = find_nearest_enemy(caster, enemies, max_range)
    if nearest is None:
        return None
    return nearest.x, nearest.y


def resolve_target_enemy(
    caster: Entity,
    target: Any,
    enemies: list[Enemy],
    max_range: float,
    max_reach: int | None = None,
) -> Enemy | None:
    """
    Resolves the enemy hit by a single-target skill.

    An explicit enemy is used as is, a tile selects the enemy standing on it,
    and no target selects the nearest enemy. The chosen enemy must then be
    within ``max_reach`` Chebyshev tiles of the caster, when given.

    Returns:
        Enemy | None: The target, None if there is no valid one.

    """
    chosen: Enemy | None
    if isinstance(target, Enemy):
        chosen = target
    elif isinstance(target, tuple):
        chosen = next(
            (e for e in enemies if e.is_alive() and e.is_at(*target)),
            None,
        )
    else:
        chosen = find_nearest_enemy(caster, enemies, max_range)
    if chosen is None or not chosen.is_alive():
        return None
    if max_reach is not None and chebyshev_distance(caster.x, caster.y, chosen.x, chosen.y) > max_reach:
        return None
    return chosen
