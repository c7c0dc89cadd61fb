"""
Tests for leveling and for the entity records.
"""

import pytest

from crawler.core.config import ProgressionConfig
from crawler.effects.stat_effect import StatEffect
from crawler.entities.progression import (
    LEVEL_UP_CATALOG,
    can_level_up,
    get_level_up_option,
    get_level_up_options,
    perform_level_up,
)


def test_level_thresholds_grow_by_the_multiplier(player):
    thresholds = [player.next_level_exp]
    for _ in range(5):
        player.exp = player.next_level_exp
        perform_level_up(player)
        thresholds.append(player.next_level_exp)
    assert thresholds == [10, 16, 25, 40, 64, 102]
    assert player.level == 6


def test_level_up_keeps_the_surplus(player):
    player.exp = 15
    assert can_level_up(player)
    perform_level_up(player)
    assert player.level == 2
    assert player.exp == 5
    assert not can_level_up(player)


def test_level_up_heals_a_share_of_max_hp(player):
    player.hp = 100
    perform_level_up(player, ProgressionConfig(level_up_heal_percent=0.15))
    assert player.hp == 100 + int(player.max_hp * 0.15)


def test_level_up_options_are_distinct():
    options = get_level_up_options(5)
    assert len(options) == 5
    assert len({option.id for option in options}) == 5


def test_level_up_options_never_exceed_the_catalog():
    assert len(get_level_up_options(100)) == len(LEVEL_UP_CATALOG)


def test_option_applies_its_stat(player):
    option = get_level_up_option("attack")
    assert option is not None
    before = player.attack
    assert option.apply(player) == 2
    assert player.attack == before + 2


def test_option_multiplier(player):
    option = get_level_up_option("max_hp")
    assert option is not None
    before = player.max_hp
    assert option.apply(player, multiplier=2) == 40
    assert player.max_hp == before + 40


def test_unknown_option():
    assert get_level_up_option("wisdom") is None


# ---- Entity records ----


def test_heal_is_capped(player):
    player.hp = player.max_hp - 3
    assert player.heal(10) == 3
    assert player.hp == player.max_hp


def test_heal_ignores_negative_amounts(player):
    player.hp = 50
    assert player.heal(-5) == 0
    assert player.hp == 50


def test_effects_with_the_same_name_replace_each_other(player):
    player.add_effect(StatEffect(name="battle_shout", duration=2, attack=5))
    player.add_effect(StatEffect(name="battle_shout", duration=5, attack=5))
    assert len(player.effects) == 1
    assert player.effects[0].duration == 5
    assert player.has_effect("battle_shout")


def test_effect_validation():
    with pytest.raises(ValueError):
        StatEffect(name="", duration=1)
    with pytest.raises(ValueError):
        StatEffect(name="slow", duration=-1)


def test_effect_modifiers():
    effect = StatEffect(name="entangle", duration=3, move_speed=-4)
    assert effect.modifier("move_speed") == -4
    assert effect.modifier("attack") == 0


def test_restore_mp_and_torch_are_capped(player):
    player.mp = player.max_mp - 2
    assert player.restore_mp(10) == 2
    player.torch = player.max_torch - 1
    assert player.restore_torch(50) == 1
