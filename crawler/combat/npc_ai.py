"""
NPC AI module for the crawler.

Decides what an enemy does on its turn: heal an ally, attack the player, or
step towards it. Also ticks timed effects and stun at the start of a turn.
"""

import math
import random
from collections.abc import Callable

from pydantic import BaseModel, Field

from crawler.core.config import CombatConfig
from crawler.core.constants import EnemySpecial
from crawler.core.utils import sign
from crawler.entities.base import Entity
from crawler.entities.enemy import Enemy
from crawler.entities.player import Player


class EnemyTurnResult(BaseModel):
    """What an enemy did on its turn."""

    moved: bool = Field(False, description="The enemy changed tile.")
    attacked: bool = Field(False, description="The enemy attacked the player.")
    healed: bool = Field(False, description="The enemy healed an ally.")
    healed_target: str | None = Field(None, description="Name of the healed ally.")


def _distance(a: Entity, b: Entity) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


def _try_heal_ally(enemy: Enemy, all_enemies: list[Enemy], config: CombatConfig) -> Enemy | None:
    for ally in all_enemies:
        if (
            ally is not enemy
            and ally.is_alive()
            and ally.hp < ally.max_hp
            and _distance(enemy, ally) < config.healer_ally_radius
        ):
            ally.heal(config.shaman_heal_amount)
            return ally
    return None


def _in_attack_reach(enemy: Enemy, distance: float) -> bool:
    if distance < 2:
        return True
    return enemy.special.is_ranged and distance <= enemy.attack_range


def process_enemy_turn(
    enemy: Enemy,
    player: Player,
    all_enemies: list[Enemy],
    is_walkable: Callable[[int, int], bool],
    is_position_empty: Callable[[int, int], bool],
    attack_callback: Callable[[Enemy, Player], None],
    fov_radius: int | None = None,
    config: CombatConfig | None = None,
) -> EnemyTurnResult:
    """
    Runs the decision logic of one enemy.

    Dead enemies and enemies farther from the player than the sight radius
    do nothing. Healers first try to mend a wounded ally while the player is
    near. Enemies next to the player (or within reach, for ranged ones)
    attack through ``attack_callback``; the others step towards the player,
    sliding along one axis when the diagonal step is blocked. Erratic
    enemies take a random step half of the time.

    Args:
        enemy (Enemy): The acting enemy.
        player (Player): The player.
        all_enemies (list[Enemy]): Every enemy on the floor.
        is_walkable (Callable[[int, int], bool]): Map query.
        is_position_empty (Callable[[int, int], bool]): Occupancy query.
        attack_callback (Callable[[Enemy, Player], None]): Resolves an attack.
        fov_radius (int | None): Sight radius of the enemy.
        config (CombatConfig | None): Combat constants.

    Returns:
        EnemyTurnResult: What the enemy did.

    """
    config = config or CombatConfig()
    fov_radius = config.fov_radius if fov_radius is None else fov_radius
    result = EnemyTurnResult()
    if not enemy.is_alive():
        return result

    distance = _distance(enemy, player)
    if distance >= fov_radius:
        return result

    # Healers look after their allies first.
    if enemy.special is EnemySpecial.HEAL and distance < config.healer_player_radius:
        ally = _try_heal_ally(enemy, all_enemies, config)
        if ally is not None:
            result.healed = True
            result.healed_target = ally.name
            return result

    if _in_attack_reach(enemy, distance):
        attack_callback(enemy, player)
        result.attacked = True
        return result

    move_x = sign(player.x - enemy.x)
    move_y = sign(player.y - enemy.y)
    if enemy.special is EnemySpecial.ERRATIC and random.random() < 0.5:
        move_x = random.randint(-1, 1)
        move_y = random.randint(-1, 1)

    for step_x, step_y in ((move_x, move_y), (move_x, 0), (0, move_y)):
        if step_x == 0 and step_y == 0:
            continue
        nx, ny = enemy.x + step_x, enemy.y + step_y
        if is_walkable(nx, ny) and is_position_empty(nx, ny):
            enemy.x, enemy.y = nx, ny
            result.moved = True
            break
    return result


def update_effects(entity: Entity) -> list[str]:
    """
    Ticks the timed effects of an entity.

    Returns:
        list[str]: The names of the effects that expired.

    """
    expired: list[str] = []
    remaining = []
    for effect in entity.effects:
        effect.duration -= 1
        if effect.duration <= 0:
            expired.append(effect.name)
        else:
            remaining.append(effect)
    entity.effects = remaining
    return expired


def process_stun(entity: Entity) -> bool:
    """
    Ticks the stun of an entity.

    Returns:
        bool: True if the entity is stunned and skips this turn.

    """
    if entity.stunned > 0:
        entity.stunned -= 1
        return True
    return False
