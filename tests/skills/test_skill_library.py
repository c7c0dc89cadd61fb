"""
Tests for the skill behaviours.
"""

import random

import pytest

from crawler.core.constants import LogType, SkillOutcome, TileType
from crawler.skills.base import SkillContext
from crawler.skills.library import SKILL_EFFECTS, perform_dash
from crawler.skills.registry import SkillRegistry
from crawler.world.queries import is_position_empty, is_walkable


class Arena:
    """Records everything a skill does through its context."""

    def __init__(self, grid, player, enemies):
        self.grid = grid
        self.player = player
        self.enemies = enemies
        self.killed = []
        self.logs: list[tuple[str, LogType]] = []
        self.ground_effects = []
        self.visual_effects = []
        self.refreshes = 0

    def kill(self, enemy):
        self.killed.append(enemy)

    def refresh(self):
        self.refreshes += 1

    def context(self) -> SkillContext:
        return SkillContext(
            enemies=self.enemies,
            is_walkable=lambda x, y: is_walkable(self.grid, x, y),
            is_position_empty=lambda x, y: is_position_empty(
                x, y, self.player, self.enemies, []
            ),
            kill=self.kill,
            log=lambda message, log_type: self.logs.append((message, log_type)),
            refresh=self.refresh,
            add_ground_effect=self.ground_effects.append,
            add_visual_effect=self.visual_effects.append,
        )


@pytest.fixture
def registry(repository):
    return SkillRegistry(repository)


@pytest.fixture
def arena(open_grid, player):
    return Arena(open_grid, player, [])


def cast(registry, skill_id, arena, target=None):
    skill = registry.get(skill_id)
    assert skill is not None
    return skill.apply(arena.player, target, arena.context())


# ---- Registry ----


def test_every_skill_has_an_effect(registry, repository):
    assert set(registry.ids) == set(repository.skills)
    assert set(SKILL_EFFECTS) == set(repository.skills)


def test_unknown_skill(registry):
    assert registry.get("meteor") is None
    assert "meteor" not in registry


# ---- Area damage ----


def test_fireball_hits_everything_around_the_target(registry, arena, make_enemy):
    near = make_enemy(8, 5, hp=30)
    close = make_enemy(9, 6, hp=30)
    far = make_enemy(13, 5, hp=30)
    arena.enemies.extend([near, close, far])

    assert cast(registry, "fireball", arena) is SkillOutcome.SUCCESS
    # 10 base + 2 per level, level 1.
    assert near.hp == 18
    assert close.hp == 18
    assert far.hp == 30
    assert arena.visual_effects
    assert arena.refreshes == 1


def test_fireball_kills_through_the_kill_routine(registry, arena, make_enemy):
    weak = make_enemy(7, 5, hp=5)
    arena.enemies.append(weak)
    cast(registry, "fireball", arena)
    assert arena.killed == [weak]


def test_fireball_without_enemies_fails(registry, arena):
    assert cast(registry, "fireball", arena) is SkillOutcome.FAILED
    assert arena.visual_effects == []
    assert arena.logs[-1][1] is LogType.WARNING


def test_fireball_at_an_empty_tile_fails(registry, arena, make_enemy):
    enemy = make_enemy(15, 15, hp=30)
    arena.enemies.append(enemy)
    assert cast(registry, "fireball", arena, target=(8, 8)) is SkillOutcome.FAILED
    assert enemy.hp == 30


def test_whirlwind_hits_adjacent_enemies(registry, arena, make_enemy):
    adjacent = make_enemy(6, 6, hp=30)
    distant = make_enemy(7, 5, hp=30)
    arena.enemies.extend([adjacent, distant])
    assert cast(registry, "whirlwind", arena) is SkillOutcome.SUCCESS
    assert adjacent.hp == 30 - 9
    assert distant.hp == 30


def test_toxic_mist_leaves_a_ground_effect(registry, arena, open_grid):
    open_grid[6][6] = TileType.WALL
    assert cast(registry, "toxic_mist", arena, target=(5, 5)) is SkillOutcome.SUCCESS
    assert len(arena.ground_effects) == 1
    cloud = arena.ground_effects[0]
    assert cloud.duration == 5
    assert cloud.damage == 3
    assert (6, 6) not in cloud.tiles
    assert (8, 8) in cloud.tiles
    assert all(is_walkable(open_grid, x, y) for x, y in cloud.tiles)


def test_flame_zone_burns_enemies_inside(registry, arena, make_enemy):
    enemy = make_enemy(8, 5, hp=50)
    arena.enemies.append(enemy)
    assert cast(registry, "flame_zone", arena) is SkillOutcome.SUCCESS
    assert enemy.hp == 50 - 14
    zone = arena.ground_effects[0]
    assert zone.tick(enemy) == 5
    assert enemy.hp == 50 - 14 - 5


# ---- Single target ----


def test_shield_bash_needs_an_adjacent_enemy(registry, arena, make_enemy):
    enemy = make_enemy(7, 5, hp=30)
    arena.enemies.append(enemy)
    assert cast(registry, "shield_bash", arena) is SkillOutcome.FAILED
    assert cast(registry, "shield_bash", arena, target=enemy) is SkillOutcome.FAILED
    assert enemy.hp == 30


def test_shield_bash_stuns(registry, arena, make_enemy, monkeypatch):
    monkeypatch.setattr(random, "random", lambda: 0.1)
    enemy = make_enemy(6, 6, hp=30)
    arena.enemies.append(enemy)
    assert cast(registry, "shield_bash", arena) is SkillOutcome.SUCCESS
    assert enemy.hp == 30 - 6
    assert enemy.stunned == 3


def test_shield_bash_stun_can_fail(registry, arena, make_enemy, monkeypatch):
    monkeypatch.setattr(random, "random", lambda: 0.9)
    enemy = make_enemy(6, 6, hp=30)
    arena.enemies.append(enemy)
    cast(registry, "shield_bash", arena)
    assert enemy.stunned == 0


def test_lightning_targets_the_nearest_enemy(registry, arena, make_enemy):
    far = make_enemy(11, 5, hp=50)
    near = make_enemy(8, 5, hp=50)
    arena.enemies.extend([far, near])
    assert cast(registry, "lightning", arena) is SkillOutcome.SUCCESS
    assert near.hp == 50 - 23
    assert far.hp == 50


def test_magic_missile_explicit_tile_target(registry, arena, make_enemy):
    first = make_enemy(6, 5, hp=20)
    second = make_enemy(9, 5, hp=20)
    arena.enemies.extend([first, second])
    assert cast(registry, "magic_missile", arena, target=(9, 5)) is SkillOutcome.SUCCESS
    assert second.hp == 14
    assert first.hp == 20


def test_freeze_stuns_without_damage(registry, arena, make_enemy):
    enemy = make_enemy(8, 5, hp=20)
    arena.enemies.append(enemy)
    assert cast(registry, "freeze", arena) is SkillOutcome.SUCCESS
    assert enemy.stunned == 8
    assert enemy.hp == 20


def test_entangle_halves_move_speed(registry, arena, make_enemy):
    enemy = make_enemy(8, 5, hp=20)
    enemy.move_speed = 10
    arena.enemies.append(enemy)
    assert cast(registry, "entangle", arena) is SkillOutcome.SUCCESS
    assert enemy.has_effect("entangled")
    effect = enemy.effects[0]
    assert effect.move_speed == -5
    assert effect.duration == 10


def test_dead_enemies_are_not_targeted(registry, arena, make_enemy):
    corpse = make_enemy(6, 5, hp=20)
    corpse.hp = 0
    arena.enemies.append(corpse)
    assert cast(registry, "magic_missile", arena) is SkillOutcome.FAILED


# ---- Self ----


def test_heal_restores_a_share_of_max_hp(registry, arena, player):
    player.hp = 50
    assert cast(registry, "heal", arena) is SkillOutcome.SUCCESS
    assert player.hp == 50 + int(player.max_hp * 0.3)


def test_battle_shout_buffs_the_caster(registry, arena, player):
    assert cast(registry, "battle_shout", arena) is SkillOutcome.SUCCESS
    effect = player.effects[0]
    assert effect.name == "battle_shout"
    assert effect.attack == 5
    assert effect.defense == 3
    assert effect.duration == 5


def test_radiance_refuels_the_torch(registry, arena, player):
    player.torch = 100
    assert cast(registry, "radiance", arena) is SkillOutcome.SUCCESS
    assert player.torch == 100 + player.max_torch // 2


# ---- Dash ----


def test_dash_waits_for_a_direction(registry, arena, player):
    assert cast(registry, "dash", arena) is SkillOutcome.AWAIT_DIRECTION
    assert player.position == (5, 5)


def test_perform_dash_travels_its_distance(arena, player):
    assert perform_dash(player, 1, 0, 2, arena.context()) == 2
    assert player.position == (7, 5)


def test_perform_dash_stops_before_obstacles(arena, player, open_grid, make_enemy):
    open_grid[5][7] = TileType.WALL
    assert perform_dash(player, 1, 0, 2, arena.context()) == 1
    assert player.position == (6, 5)

    arena.enemies.append(make_enemy(6, 6))
    assert perform_dash(player, 0, 1, 2, arena.context()) == 0
    assert player.position == (6, 5)
