"""
Serialization module for the crawler.

Converts entity and item records to and from plain dictionaries.
"""

from typing import Any

from crawler.core.constants import ActorKind

from .base import Entity
from .enemy import Enemy
from .item import Item
from .player import Player


def entity_to_dict(entity: Entity) -> dict[str, Any]:
    """Serializes a player or an enemy to a JSON-compatible dictionary."""
    return entity.model_dump(mode="json")


def entity_from_dict(data: dict[str, Any]) -> Player | Enemy:
    """
    Rebuilds a player or an enemy from a dictionary.

    Args:
        data (dict[str, Any]): The serialized entity, with its ``kind``.

    Returns:
        Player | Enemy: The entity, of the type named by ``kind``.

    Raises:
        ValueError: If the kind is missing or unknown.

    """
    kind = data.get("kind")
    if kind in (ActorKind.PLAYER, ActorKind.PLAYER.value):
        return Player.model_validate(data)
    if kind in (ActorKind.ENEMY, ActorKind.ENEMY.value):
        return Enemy.model_validate(data)
    raise ValueError(f"Unknown entity kind: {kind!r}")


def item_to_dict(item: Item) -> dict[str, Any]:
    return item.model_dump(mode="json")


def item_from_dict(data: dict[str, Any]) -> Item:
    return Item.model_validate(data)
