"""
Tests for entity serialization.
"""

import json

import pytest

from crawler.core.constants import ItemType
from crawler.effects.stat_effect import StatEffect
from crawler.entities.enemy import Enemy
from crawler.entities.item import Item
from crawler.entities.player import OwnedRelic, Player
from crawler.entities.serialization import (
    entity_from_dict,
    entity_to_dict,
    item_from_dict,
    item_to_dict,
)


def test_player_survives_a_json_round_trip(player):
    player.skill_ids = ["fireball", "dash"]
    player.relics = [
        OwnedRelic(id="iron_skin", stacks=2),
        OwnedRelic(id="phoenix_feather", exhausted=True),
    ]
    player.add_effect(StatEffect(name="battle_shout", duration=3, attack=5, defense=3))
    player.gold = 123

    data = json.loads(json.dumps(entity_to_dict(player)))
    restored = entity_from_dict(data)

    assert isinstance(restored, Player)
    assert restored == player


def test_enemy_survives_a_json_round_trip(make_enemy):
    enemy = make_enemy(3, 4, hp=12)
    enemy.stunned = 2
    enemy.ap = 40

    restored = entity_from_dict(json.loads(json.dumps(entity_to_dict(enemy))))

    assert isinstance(restored, Enemy)
    assert restored == enemy


def test_unknown_kind_is_rejected(player):
    data = entity_to_dict(player)
    data["kind"] = "GHOST"
    with pytest.raises(ValueError):
        entity_from_dict(data)


def test_item_round_trip():
    item = Item(x=1, y=2, type=ItemType.OIL)
    assert item_from_dict(item_to_dict(item)) == item
