"""
Tests for attack resolution and effective statistics.
"""

import random

import pytest

from crawler.combat.damage import (
    get_effective_attack,
    get_effective_defense,
    get_effective_move_speed,
    perform_attack,
)
from crawler.effects.stat_effect import StatEffect


@pytest.fixture
def no_luck(monkeypatch):
    """Rolls that never hit a percentage check."""
    monkeypatch.setattr(random, "random", lambda: 0.999)


@pytest.fixture
def all_luck(monkeypatch):
    """Rolls that always hit a percentage check."""
    monkeypatch.setattr(random, "random", lambda: 0.0)


def test_attack_kills_weak_defender(player, make_enemy, no_luck):
    player.attack = 20
    enemy = make_enemy(6, 5, hp=10, defense=5)
    result = perform_attack(player, enemy)
    assert result.hit
    assert not result.evaded
    assert result.damage == 15
    assert enemy.hp == -5
    assert result.defender_died
    assert not result.attacker_died


def test_damage_is_never_negative(player, make_enemy, no_luck):
    enemy = make_enemy(6, 5, attack=2)
    player.defense = 10
    hp = player.hp
    result = perform_attack(enemy, player)
    assert result.hit
    assert result.damage == 0
    assert player.hp == hp


def test_evaded_attack_changes_nothing(player, make_enemy, all_luck):
    enemy = make_enemy(6, 5, hp=10)
    enemy.evasion = 50
    result = perform_attack(player, enemy)
    assert result.evaded
    assert not result.hit
    assert result.damage == 0
    assert enemy.hp == 10
    assert not result.defender_died


def test_player_critical_hit(player, make_enemy, all_luck):
    player.attack = 20
    player.crit_chance = 5
    player.crit_damage = 200
    enemy = make_enemy(6, 5, hp=100, defense=5)
    result = perform_attack(player, enemy)
    assert result.is_crit
    assert result.damage == 30


def test_enemies_never_crit(player, make_enemy, all_luck):
    enemy = make_enemy(6, 5, attack=12)
    result = perform_attack(enemy, player)
    assert not result.is_crit
    assert result.damage == 12


def test_adjust_hook_rewrites_damage(player, make_enemy, no_luck):
    player.attack = 20
    enemy = make_enemy(6, 5, hp=100)
    result = perform_attack(player, enemy, lambda damage: damage * 2)
    assert result.damage == 40
    assert enemy.hp == 60

    result = perform_attack(player, enemy, lambda damage: -10)
    assert result.damage == 0
    assert enemy.hp == 60


def test_lifesteal_heals_the_player(player, make_enemy, no_luck):
    player.attack = 20
    player.lifesteal = 5
    player.hp = 100
    enemy = make_enemy(6, 5, hp=100, defense=5)
    result = perform_attack(player, enemy)
    # ceil(15 * 5 / 50)
    assert result.lifesteal_heal == 2
    assert player.hp == 102


def test_thorns_hurt_the_attacker(player, make_enemy, no_luck):
    player.thorns = 3
    enemy = make_enemy(6, 5, hp=3, attack=5)
    result = perform_attack(enemy, player)
    assert result.thorns_damage == 3
    assert result.attacker_died
    assert enemy.hp == 0


def test_both_can_die_in_one_exchange(player, make_enemy, no_luck):
    player.thorns = 5
    player.hp = 4
    enemy = make_enemy(6, 5, hp=5, attack=10)
    result = perform_attack(enemy, player)
    assert result.defender_died
    assert result.attacker_died


def test_effective_stats_include_effects(player):
    player.add_effect(StatEffect(name="battle_shout", duration=5, attack=5, defense=3))
    assert get_effective_attack(player) == player.attack + 5
    assert get_effective_defense(player) == player.defense + 3


def test_effective_stats_have_floors(make_enemy):
    enemy = make_enemy(0, 0, attack=2)
    enemy.move_speed = 4
    enemy.add_effect(StatEffect(name="curse", duration=5, attack=-10, move_speed=-10))
    assert get_effective_attack(enemy) == 0
    assert get_effective_move_speed(enemy) == 1
