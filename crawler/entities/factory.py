"""
Entity factory module for the crawler.

Creates the player, enemies and items, populates a freshly generated floor,
resolves item pickups and spawns the offspring of splitting monsters.
"""

import math
import random

from catchery import log_warning
from pydantic import BaseModel, Field

from crawler.core.config import BalanceConfig, DifficultyMultipliers
from crawler.core.constants import EnemySpecial, ItemType
from crawler.core.content import ContentRepository
from crawler.core.logging import log_debug
from crawler.world.map_generator import Grid, Room
from crawler.world.queries import (
    generate_item_type,
    get_adjacent_empty_position,
    get_random_position_in_room,
)

from .enemy import Enemy, MonsterDefinition
from .item import Item
from .player import Player


class Placement(BaseModel):
    """The population of a new floor."""

    player_start: tuple[int, int]
    enemies: list[Enemy] = Field(default_factory=list)
    items: list[Item] = Field(default_factory=list)


class PickupResult(BaseModel):
    """Outcome of stepping on an item."""

    consumed: bool = Field(description="True if the item must be removed from the floor.")
    message: str = Field("", description="Log message describing the pickup.")
    amount: int = Field(0, description="Gold, HP, torch or arrows gained.")


def _balance(repository: ContentRepository | None) -> BalanceConfig:
    return (repository or ContentRepository()).balance


# ---- Player ----


def create_player(
    name: str,
    stat_overrides: dict[str, int] | None = None,
    skill_ids: list[str] | None = None,
    x: int = 0,
    y: int = 0,
    repository: ContentRepository | None = None,
) -> Player:
    """
    Creates a level 1 player.

    Args:
        name (str): The player's name.
        stat_overrides (dict[str, int] | None): Values replacing the default stats.
        skill_ids (list[str] | None): The skills the player starts with.
        x (int): Starting column.
        y (int): Starting row.
        repository (ContentRepository | None): Source of the default stats.

    Returns:
        Player: The new player, at full HP, MP and torch.

    """
    balance = _balance(repository)
    stats = balance.player.defaults.model_dump()
    for key, value in (stat_overrides or {}).items():
        if key not in stats:
            log_warning(f"Ignoring unknown stat override '{key}'.", {"stat": key, "value": value})
            continue
        stats[key] = value
    skills = list(skill_ids or [])
    if len(skills) > stats["skill_slots"]:
        log_warning(
            "More skills than skill slots, extra skills dropped.",
            {"skills": skills, "skill_slots": stats["skill_slots"]},
        )
        skills = skills[: stats["skill_slots"]]
    return Player(
        name=name,
        x=x,
        y=y,
        hp=stats["max_hp"],
        mp=stats["max_mp"],
        torch=stats["max_torch"],
        next_level_exp=balance.progression.initial_next_level_exp,
        skill_ids=skills,
        **stats,
    )


def build_stat_overrides(
    allocation: dict[str, int],
    repository: ContentRepository | None = None,
) -> dict[str, int]:
    """
    Turns a character-creation point allocation into stat overrides.

    Each point spent on a stat adds that stat's step to its default value.

    Args:
        allocation (dict[str, int]): Points spent per stat.
        repository (ContentRepository | None): Source of defaults and steps.

    Returns:
        dict[str, int]: The overridden stats, ready for ``create_player``.

    Raises:
        ValueError: If a stat cannot be raised, a count is negative, or more
            points are spent than available.

    """
    player_config = _balance(repository).player
    defaults = player_config.defaults.model_dump()
    spent = 0
    overrides: dict[str, int] = {}
    for stat, points in allocation.items():
        if stat not in player_config.stat_steps:
            raise ValueError(f"Stat '{stat}' cannot be raised during character creation.")
        if points < 0:
            raise ValueError(f"Cannot spend a negative number of points on '{stat}'.")
        spent += points
        if points:
            overrides[stat] = defaults[stat] + points * player_config.stat_steps[stat]
    if spent > player_config.allocation_points:
        raise ValueError(
            f"Spent {spent} points, only {player_config.allocation_points} are available."
        )
    return overrides


def parse_allocation(text: str) -> dict[str, int]:
    """
    Parses a point allocation written as ``stat=points`` pairs, e.g.
    ``"attack=3 max_hp=2"``. Pairs may be separated by spaces or commas.

    Raises:
        ValueError: If a pair is malformed or its points are not a number.

    """
    allocation: dict[str, int] = {}
    for pair in text.replace(",", " ").split():
        stat, sep, points = pair.partition("=")
        if not sep or not stat:
            raise ValueError(f"Expected 'stat=points', got '{pair}'.")
        try:
            allocation[stat] = allocation.get(stat, 0) + int(points)
        except ValueError:
            raise ValueError(f"Points for '{stat}' must be a whole number, got '{points}'.")
    return allocation


# ---- Enemies and items ----


def create_enemy(
    x: int,
    y: int,
    floor: int,
    type_id: str | None = None,
    difficulty: DifficultyMultipliers | None = None,
    repository: ContentRepository | None = None,
) -> Enemy | None:
    """
    Creates an enemy scaled to a floor and a difficulty.

    Args:
        x (int): Column of the enemy.
        y (int): Row of the enemy.
        floor (int): The current floor.
        type_id (str | None): The monster to create, random eligible one if None.
        difficulty (DifficultyMultipliers | None): Stat multipliers, normal if None.
        repository (ContentRepository | None): Source of monster definitions.

    Returns:
        Enemy | None: The enemy, None if the id is unknown or nothing spawns
        on this floor.

    """
    repository = repository or ContentRepository()
    difficulty = difficulty or DifficultyMultipliers()
    definition: MonsterDefinition | None
    if type_id is not None:
        definition = repository.get_monster(type_id)
    else:
        eligible = repository.get_monsters_for_floor(floor)
        if not eligible:
            log_warning("No monster can spawn on this floor.", {"floor": floor})
            return None
        definition = random.choice(eligible)
    if definition is None:
        return None

    stats = definition.stats

    def scaled(pair: tuple[int, int], multiplier: float) -> int:
        base, per_floor = pair
        return math.floor((base + floor * per_floor) * multiplier)

    hp = scaled(stats.hp, difficulty.hp)
    return Enemy(
        type_id=definition.id,
        name=definition.name,
        glyph=definition.glyph,
        x=x,
        y=y,
        hp=hp,
        max_hp=hp,
        attack=scaled(stats.attack, difficulty.attack),
        defense=scaled(stats.defense, difficulty.defense),
        exp=scaled(stats.exp, difficulty.exp),
        evasion=stats.evasion,
        move_speed=math.floor(stats.move_speed * difficulty.speed),
        attack_speed=math.floor(stats.attack_speed * difficulty.speed),
        special=definition.special,
        attack_range=definition.attack_range,
    )


def create_item(x: int, y: int, item_type: ItemType) -> Item:
    """Creates a floor item."""
    return Item(x=x, y=y, type=item_type)


# ---- Floor population ----


def place_entities(
    rooms: list[Room],
    grid: Grid,
    floor: int,
    player_luck: int,
    difficulty: DifficultyMultipliers | None = None,
    repository: ContentRepository | None = None,
) -> Placement:
    """
    Populates a floor.

    The player starts at the centre of the first room and the portal sits at
    the centre of the last one. Every room in between receives
    ``randint(0, floor + 3) + 3`` enemies and a luck-dependent number of
    items, each on a free floor tile.

    Returns:
        Placement: The player start, the enemies and the items.

    """
    repository = repository or ContentRepository()
    if not rooms:
        return Placement(player_start=(1, 1))

    player_start = rooms[0].center()
    # Stand-in for the player while checking occupancy.
    marker = create_player("marker", x=player_start[0], y=player_start[1], repository=repository)
    enemies: list[Enemy] = []
    items: list[Item] = [create_item(*rooms[-1].center(), ItemType.PORTAL)]
    rates = repository.balance.items.spawn_rates

    for room in rooms[1:-1]:
        num_enemies = math.floor(random.random() * (floor + 4)) + 3
        for _ in range(num_enemies):
            pos = get_random_position_in_room(room, grid, marker, enemies, items)
            if pos is None:
                continue
            enemy = create_enemy(pos[0], pos[1], floor, None, difficulty, repository)
            if enemy is not None:
                enemies.append(enemy)

        num_items = math.floor(random.random() * (2 + player_luck / 10))
        for _ in range(num_items):
            pos = get_random_position_in_room(room, grid, marker, enemies, items)
            if pos is not None:
                items.append(create_item(pos[0], pos[1], generate_item_type(rates)))

    log_debug(
        "Placed entities",
        {"floor": floor, "enemies": len(enemies), "items": len(items)},
    )
    return Placement(player_start=player_start, enemies=enemies, items=items)


# ---- Pickups ----


def handle_item_pickup(
    player: Player,
    item: Item,
    floor: int,
    repository: ContentRepository | None = None,
) -> PickupResult:
    """
    Applies the effect of an item the player stepped on.

    Gold, potions and oil are always consumed. Arrows are left on the floor
    when the quiver is full. The portal is never consumed, the caller handles
    the floor transition.

    Returns:
        PickupResult: Whether the item is consumed, and a message.

    """
    config = _balance(repository).items
    if item.type is ItemType.GOLD:
        amount = math.floor(config.gold_base + floor * config.gold_per_floor)
        player.gold += amount
        return PickupResult(consumed=True, message=f"You pick up {amount} gold.", amount=amount)
    if item.type is ItemType.POTION:
        healed = player.heal(math.floor(player.max_hp * config.potion_heal_percent))
        return PickupResult(
            consumed=True,
            message=f"You drink a potion and recover {healed} HP.",
            amount=healed,
        )
    if item.type is ItemType.OIL:
        restored = player.restore_torch(math.floor(player.max_torch * config.oil_restore_percent))
        return PickupResult(
            consumed=True,
            message=f"You refill your torch by {restored}.",
            amount=restored,
        )
    if item.type is ItemType.ARROW:
        gained = min(config.arrow_pickup_count, player.max_arrows - player.arrows)
        if gained <= 0:
            return PickupResult(consumed=False, message="Your quiver is full.")
        player.arrows += gained
        return PickupResult(consumed=True, message=f"You pick up {gained} arrows.", amount=gained)
    return PickupResult(consumed=False, message="A portal hums here...")


# ---- Splitting ----


def handle_monster_split(
    enemy: Enemy,
    grid: Grid,
    player: Player,
    enemies: list[Enemy],
    items: list[Item],
    floor: int,
    difficulty: DifficultyMultipliers | None = None,
    repository: ContentRepository | None = None,
) -> list[Enemy]:
    """
    Spawns the offspring of a splitting monster that just died.

    With the configured chance, up to two smaller monsters appear on free
    tiles next to the dead one, never on the same tile.

    Returns:
        list[Enemy]: The new enemies, to be added by the caller.

    """
    if enemy.special is not EnemySpecial.SPLIT:
        return []
    combat = _balance(repository).combat
    if random.random() >= combat.split_chance:
        return []
    spawned: list[Enemy] = []
    for _ in range(combat.split_count):
        pos = get_adjacent_empty_position(
            enemy.x,
            enemy.y,
            grid,
            player,
            [*enemies, *spawned],
            items,
        )
        if pos is None:
            continue
        child = create_enemy(pos[0], pos[1], floor, combat.split_spawn_id, difficulty, repository)
        if child is not None:
            spawned.append(child)
    return spawned
