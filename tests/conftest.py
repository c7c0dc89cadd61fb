"""
Shared fixtures of the crawler test-suite.
"""

import pytest

from crawler.core.constants import EnemySpecial
from crawler.core.content import ContentRepository
from crawler.entities.enemy import Enemy
from crawler.entities.factory import create_player
from crawler.entities.player import Player
from crawler.game.clock import ManualClock
from crawler.game.engine import Game
from crawler.world.map_generator import create_open_grid
from crawler.world.visibility import create_fov_map


@pytest.fixture
def repository() -> ContentRepository:
    return ContentRepository()


@pytest.fixture
def open_grid():
    return create_open_grid(20, 20)


@pytest.fixture
def player(repository) -> Player:
    hero = create_player("Tester", x=5, y=5, repository=repository)
    # Deterministic combat: no dodging, no critical hits.
    hero.evasion = 0
    hero.crit_chance = 0
    return hero


@pytest.fixture
def make_enemy():
    def _make_enemy(
        x: int,
        y: int,
        hp: int = 10,
        attack: int = 5,
        defense: int = 0,
        exp: int = 7,
        special: EnemySpecial = EnemySpecial.NONE,
        name: str = "Goblin",
        **kwargs,
    ) -> Enemy:
        return Enemy(
            type_id=name.lower().replace(" ", "_"),
            name=name,
            glyph=name[0].lower(),
            x=x,
            y=y,
            hp=hp,
            max_hp=hp,
            attack=attack,
            defense=defense,
            exp=exp,
            special=special,
            **kwargs,
        )

    return _make_enemy


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def game(repository, clock) -> Game:
    """
    A running game on an empty 20x20 room.

    The random floor built by ``start_game`` is replaced so every test starts
    from the same layout: the player stands at (5, 5) and nothing else is on
    the map.
    """
    run = Game(repository, clock=clock)
    run.start_game("Tester", skill_ids=["fireball", "heal"])
    run.state.grid = create_open_grid(20, 20)
    run.state.fov = create_fov_map(20, 20)
    run.state.enemies = []
    run.state.items = []
    hero = run.player
    hero.x, hero.y = 5, 5
    hero.evasion = 0
    hero.crit_chance = 0
    run._update_fov()
    return run
