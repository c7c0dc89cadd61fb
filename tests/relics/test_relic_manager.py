"""
Tests for the relic pipelines.
"""

import random

import pytest

from crawler.core.constants import RelicRarity
from crawler.entities.player import OwnedRelic
from crawler.relics.manager import (
    get_random_relic,
    grant_relic,
    process_attack_relics,
    process_damage_relics,
    process_gold_relics,
    process_kill_relics,
    process_level_up_relics,
    process_skill_relics,
    recharge_relics,
)


@pytest.fixture
def target(make_enemy):
    return make_enemy(6, 5, hp=50)


# ---- Ownership ----


def test_grant_relic_stacks(player, repository):
    grant_relic(player, "iron_skin", repository)
    grant_relic(player, "iron_skin", repository)
    assert len(player.relics) == 1
    assert player.get_relic("iron_skin").stacks == 2


def test_grant_relic_brings_its_companion(player, repository):
    relic = grant_relic(player, "glass_cannon", repository)
    assert relic is not None
    assert player.has_relic("glass_cannon")
    assert player.has_relic("glass_cannon_defense")


def test_grant_unknown_relic(player, repository):
    assert grant_relic(player, "holy_grail", repository) is None
    assert player.relics == []


def test_random_relic_honours_rarity_weights(repository):
    random.seed(3)
    for _ in range(50):
        relic = get_random_relic({"legendary": 1}, repository)
        assert relic is not None
        assert relic.rarity is RelicRarity.LEGENDARY


def test_hidden_relics_are_never_drawn(repository):
    random.seed(8)
    for _ in range(200):
        relic = get_random_relic({"rare": 1}, repository)
        assert relic is not None
        assert not relic.hidden


def test_recharge_relics(player):
    player.relics = [OwnedRelic(id="phoenix_feather", exhausted=True)]
    recharge_relics(player)
    assert not player.relics[0].exhausted


def test_relics_without_definition_are_skipped(player, target, repository):
    player.relics = [OwnedRelic(id="cursed_idol")]
    outcome = process_attack_relics(player, [target], target, 10, repository)
    assert outcome.final_damage == 10


# ---- Attack ----


def test_glass_cannon_multiplies_damage(player, target, repository):
    grant_relic(player, "glass_cannon", repository)
    assert process_attack_relics(player, [target], target, 10, repository).final_damage == 15


def test_wealth_is_power_adds_flat_damage(player, target, repository):
    grant_relic(player, "wealth_is_power", repository)
    player.gold = 250
    assert process_attack_relics(player, [target], target, 10, repository).final_damage == 20


def test_stacks_multiply_flat_bonuses(player, target, repository):
    grant_relic(player, "wealth_is_power", repository)
    grant_relic(player, "wealth_is_power", repository)
    player.gold = 100
    assert process_attack_relics(player, [target], target, 10, repository).final_damage == 20


def test_berserker_heart_below_threshold(player, target, repository):
    grant_relic(player, "berserker_heart", repository)
    player.hp = player.max_hp
    assert process_attack_relics(player, [target], target, 10, repository).final_damage == 10
    player.hp = 10
    outcome = process_attack_relics(player, [target], target, 10, repository)
    assert outcome.final_damage == 20
    assert outcome.messages


def test_chain_lightning_hits_other_enemies(player, target, make_enemy, repository, monkeypatch):
    grant_relic(player, "chain_lightning", repository)
    bystander = make_enemy(9, 9, hp=20)
    monkeypatch.setattr(random, "random", lambda: 0.0)
    process_attack_relics(player, [target, bystander], target, 10, repository)
    assert bystander.hp == 15
    assert target.hp == 50


def test_vampiric_blade_heals(player, target, repository):
    grant_relic(player, "vampiric_blade", repository)
    player.hp = 100
    process_attack_relics(player, [target], target, 30, repository)
    assert player.hp == 103


# ---- Kill ----


def test_blood_stone_heals_on_kill(player, target, repository):
    grant_relic(player, "blood_stone", repository)
    player.hp = 100
    process_kill_relics(player, [], target, repository)
    assert player.hp == 105


def test_midas_touch_grants_luck_as_gold(player, target, repository):
    grant_relic(player, "midas_touch", repository)
    player.luck = 12
    assert process_kill_relics(player, [], target, repository).bonus_gold == 12


def test_soul_collector_raises_max_hp(player, target, repository):
    grant_relic(player, "soul_collector", repository)
    before = player.max_hp
    process_kill_relics(player, [], target, repository)
    assert player.max_hp == before + 1


# ---- Damage taken ----


def test_iron_skin_reduces_damage(player, repository):
    grant_relic(player, "iron_skin", repository)
    assert process_damage_relics(player, [], 10, repository).final_damage == 8
    assert process_damage_relics(player, [], 1, repository).final_damage == 0


def test_glass_cannon_raises_damage_taken(player, repository):
    grant_relic(player, "glass_cannon", repository)
    assert process_damage_relics(player, [], 10, repository).final_damage == 15


def test_damage_relics_combine(player, repository):
    grant_relic(player, "glass_cannon", repository)
    grant_relic(player, "iron_skin", repository)
    assert process_damage_relics(player, [], 10, repository).final_damage == 12


def test_phoenix_feather_once_per_floor(player, repository):
    grant_relic(player, "phoenix_feather", repository)
    player.hp = 10

    outcome = process_damage_relics(player, [], 30, repository)
    assert outcome.prevented
    assert outcome.final_damage == 0
    assert player.hp == player.max_hp // 2
    assert player.get_relic("phoenix_feather").exhausted

    player.hp = 10
    outcome = process_damage_relics(player, [], 30, repository)
    assert not outcome.prevented
    assert outcome.final_damage == 30

    recharge_relics(player)
    assert process_damage_relics(player, [], 30, repository).prevented


def test_phoenix_feather_ignores_survivable_hits(player, repository):
    grant_relic(player, "phoenix_feather", repository)
    player.hp = 50
    outcome = process_damage_relics(player, [], 10, repository)
    assert not outcome.prevented
    assert not player.get_relic("phoenix_feather").exhausted


# ---- Gold, skills, level up ----


@pytest.mark.parametrize(
    ("relic_ids", "expected"),
    [
        ([], 100),
        (["gold_magnet"], 120),
        (["greed_incarnate"], 200),
        (["gold_magnet", "greed_incarnate"], 220),
    ],
)
def test_gold_relics(player, repository, relic_ids, expected):
    for relic_id in relic_ids:
        grant_relic(player, relic_id, repository)
    assert process_gold_relics(player, [], 100, repository).final_gold == expected


def test_time_loop_refunds_sometimes(player, repository, monkeypatch):
    grant_relic(player, "time_loop", repository)
    monkeypatch.setattr(random, "random", lambda: 0.1)
    assert process_skill_relics(player, [], "fireball", repository).refund_cost
    monkeypatch.setattr(random, "random", lambda: 0.9)
    assert not process_skill_relics(player, [], "fireball", repository).refund_cost


def test_infinity_gauntlet_doubles_level_up_gains(player, repository):
    assert process_level_up_relics(player, [], repository).stat_multiplier == 1
    grant_relic(player, "infinity_gauntlet", repository)
    assert process_level_up_relics(player, [], repository).stat_multiplier == 2
