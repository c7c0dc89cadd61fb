"""
Tests for the entity factory: creation, floor population, pickups and splits.
"""

import random

import pytest

from crawler.core.constants import EnemySpecial, ItemType
from crawler.entities.factory import (
    build_stat_overrides,
    create_enemy,
    create_item,
    create_player,
    handle_item_pickup,
    handle_monster_split,
    parse_allocation,
    place_entities,
)
from crawler.world.map_generator import create_open_grid, define_rooms
from crawler.world.queries import is_walkable


# ---- Player ----


def test_create_player_defaults(repository):
    hero = create_player("Aria", repository=repository)
    defaults = repository.balance.player.defaults
    assert hero.level == 1
    assert hero.exp == 0
    assert hero.next_level_exp == 10
    assert hero.hp == hero.max_hp == defaults.max_hp
    assert hero.mp == hero.max_mp == defaults.max_mp
    assert hero.torch == hero.max_torch == defaults.max_torch
    assert hero.effects == []
    assert hero.stunned == 0
    assert hero.ap == 0
    assert hero.is_player


def test_create_player_applies_overrides(repository):
    hero = create_player("Aria", {"attack": 30, "max_hp": 250}, repository=repository)
    assert hero.attack == 30
    assert hero.max_hp == 250
    assert hero.hp == 250


def test_create_player_ignores_unknown_overrides(repository):
    hero = create_player("Aria", {"charisma": 99}, repository=repository)
    assert not hasattr(hero, "charisma")


def test_create_player_drops_extra_skills(repository):
    hero = create_player(
        "Aria",
        skill_ids=["fireball", "heal", "dash"],
        repository=repository,
    )
    assert hero.skill_ids == ["fireball", "heal"]


def test_build_stat_overrides(repository):
    overrides = build_stat_overrides({"attack": 3, "max_hp": 1}, repository)
    defaults = repository.balance.player.defaults
    steps = repository.balance.player.stat_steps
    assert overrides["attack"] == defaults.attack + 3 * steps["attack"]
    assert overrides["max_hp"] == defaults.max_hp + steps["max_hp"]


@pytest.mark.parametrize(
    "allocation",
    [{"attack": 11}, {"attack": -1}, {"level": 1}],
)
def test_build_stat_overrides_rejects_invalid_allocations(allocation, repository):
    with pytest.raises(ValueError):
        build_stat_overrides(allocation, repository)


def test_parse_allocation():
    assert parse_allocation("attack=3, max_hp=2 attack=1") == {"attack": 4, "max_hp": 2}
    assert parse_allocation("  ") == {}


@pytest.mark.parametrize("text", ["attack", "attack=three", "=2"])
def test_parse_allocation_rejects_malformed_pairs(text):
    with pytest.raises(ValueError):
        parse_allocation(text)


# ---- Enemies ----


def test_create_enemy_scales_with_floor(repository):
    goblin = create_enemy(3, 4, floor=2, type_id="goblin", repository=repository)
    assert goblin is not None
    assert goblin.position == (3, 4)
    assert goblin.hp == goblin.max_hp == 12 + 2 * 2
    assert goblin.attack == 3 + 2 * 1
    assert goblin.exp == 5 + 2 * 1
    assert not goblin.is_player


def test_create_enemy_applies_difficulty(repository):
    hard = repository.balance.get_difficulty("hard")
    goblin = create_enemy(0, 0, floor=2, type_id="goblin", difficulty=hard, repository=repository)
    assert goblin is not None
    assert goblin.hp == int((12 + 2 * 2) * 1.3)


def test_create_enemy_unknown_type(repository):
    assert create_enemy(0, 0, floor=1, type_id="unicorn", repository=repository) is None


def test_create_enemy_without_eligible_monster(repository):
    assert create_enemy(0, 0, floor=500, repository=repository) is None


def test_create_random_enemy_is_eligible(repository):
    random.seed(9)
    for _ in range(30):
        enemy = create_enemy(0, 0, floor=1, repository=repository)
        assert enemy is not None
        assert enemy.type_id in ("goblin", "slime")


# ---- Floor population ----


def test_place_entities(repository):
    random.seed(2)
    grid = create_open_grid(50, 40)
    rooms = define_rooms(50, 40)
    placement = place_entities(rooms, grid, 1, player_luck=10, repository=repository)

    assert placement.player_start == rooms[0].center()
    portal = placement.items[0]
    assert portal.type is ItemType.PORTAL
    assert portal.position == rooms[-1].center()
    assert len(placement.enemies) >= 3

    occupied = [e.position for e in placement.enemies] + [i.position for i in placement.items]
    assert len(occupied) == len(set(occupied))
    assert placement.player_start not in occupied
    for x, y in occupied:
        assert is_walkable(grid, x, y)


def test_place_entities_without_rooms(open_grid, repository):
    placement = place_entities([], open_grid, 1, player_luck=10, repository=repository)
    assert placement.enemies == []
    assert placement.items == []


# ---- Pickups ----


def test_gold_pickup(player, repository):
    gold = create_item(5, 5, ItemType.GOLD)
    result = handle_item_pickup(player, gold, 3, repository)
    expected = 10 + 3 * 5
    assert result.consumed
    assert result.amount == expected
    assert player.gold == expected


def test_potion_heals(player, repository):
    player.hp = 100
    result = handle_item_pickup(player, create_item(5, 5, ItemType.POTION), 1, repository)
    assert result.consumed
    assert player.hp == 100 + int(player.max_hp * 0.2)


def test_potion_heal_is_capped(player, repository):
    player.hp = player.max_hp - 10
    result = handle_item_pickup(player, create_item(5, 5, ItemType.POTION), 1, repository)
    assert result.consumed
    assert result.amount == 10
    assert player.hp == player.max_hp


def test_oil_refills_torch(player, repository):
    player.torch = 100
    handle_item_pickup(player, create_item(5, 5, ItemType.OIL), 1, repository)
    assert player.torch == 100 + player.max_torch // 2
    player.torch = player.max_torch - 1
    handle_item_pickup(player, create_item(5, 5, ItemType.OIL), 1, repository)
    assert player.torch == player.max_torch


def test_arrows_are_capped(player, repository):
    player.arrows = player.max_arrows - 1
    result = handle_item_pickup(player, create_item(5, 5, ItemType.ARROW), 1, repository)
    assert result.consumed
    assert player.arrows == player.max_arrows


def test_full_quiver_leaves_arrows(player, repository):
    player.arrows = player.max_arrows
    result = handle_item_pickup(player, create_item(5, 5, ItemType.ARROW), 1, repository)
    assert not result.consumed
    assert player.arrows == player.max_arrows
    assert result.message


def test_portal_is_never_consumed(player, repository):
    result = handle_item_pickup(player, create_item(5, 5, ItemType.PORTAL), 1, repository)
    assert not result.consumed


# ---- Splitting ----


@pytest.fixture
def slime(make_enemy):
    return make_enemy(10, 10, hp=0, special=EnemySpecial.SPLIT, name="Slime")


def test_only_splitting_monsters_split(open_grid, player, make_enemy, repository, monkeypatch):
    monkeypatch.setattr(random, "random", lambda: 0.0)
    goblin = make_enemy(10, 10, hp=0)
    assert handle_monster_split(goblin, open_grid, player, [], [], 1, repository=repository) == []


def test_split_statistics(open_grid, player, slime, make_enemy, repository):
    random.seed(1234)
    bystander = make_enemy(11, 10)
    trials = 1000
    splits = 0
    for _ in range(trials):
        spawned = handle_monster_split(
            slime, open_grid, player, [bystander], [], 1, repository=repository
        )
        if not spawned:
            continue
        splits += 1
        assert len(spawned) == 2
        positions = [child.position for child in spawned]
        assert len(set(positions)) == 2
        for child in spawned:
            assert child.type_id == "mini_slime"
            assert child.position != bystander.position
            assert max(abs(child.x - slime.x), abs(child.y - slime.y)) == 1
    assert 0.44 < splits / trials < 0.56


def test_split_without_room(open_grid, player, slime, make_enemy, repository, monkeypatch):
    monkeypatch.setattr(random, "random", lambda: 0.0)
    blockers = [
        make_enemy(10 + dx, 10 + dy)
        for dx in (-1, 0, 1)
        for dy in (-1, 0, 1)
        if dx or dy
    ]
    spawned = handle_monster_split(slime, open_grid, player, blockers, [], 1, repository=repository)
    assert spawned == []
