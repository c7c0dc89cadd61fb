"""
Entities module for the crawler.

This module contains the records for the player, the enemies and the floor
items. Creation and placement live in ``crawler.entities.factory``, leveling
in ``crawler.entities.progression``.
"""

from .base import Entity
from .enemy import Enemy, MonsterDefinition, MonsterStats
from .item import Item
from .player import OwnedRelic, Player

__all__ = [
    "Enemy",
    "Entity",
    "Item",
    "MonsterDefinition",
    "MonsterStats",
    "OwnedRelic",
    "Player",
]
