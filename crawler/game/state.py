"""
Game state module for the crawler.

Holds the mutable state of a run and the immutable snapshots handed to the
rendering layer.
"""

from pydantic import BaseModel, ConfigDict, Field

from crawler.core.constants import GameScreen, SchedulerPhase
from crawler.effects.ground_effect import GroundEffect, VisualEffect
from crawler.entities.enemy import Enemy
from crawler.entities.item import Item
from crawler.entities.player import Player
from crawler.entities.progression import LevelUpOption
from crawler.shop.catalog import ShopOffer
from crawler.world.map_generator import Grid, Room
from crawler.world.visibility import FovMap

from .log import LogEntry


class ArrowProjectile(BaseModel):
    """The trajectory of the last arrow, drawn for a short while."""

    start_x: int
    start_y: int
    end_x: int
    end_y: int
    fired_at: float = Field(description="Clock time of the shot, in seconds.")


class GameState(BaseModel):
    """Everything that changes during a run."""

    screen: GameScreen = GameScreen.START
    player: Player | None = None
    enemies: list[Enemy] = Field(default_factory=list)
    items: list[Item] = Field(default_factory=list)
    grid: Grid = Field(default_factory=list)
    fov: FovMap = Field(default_factory=list)
    rooms: list[Room] = Field(default_factory=list)
    floor: int = 1
    turn_count: int = 0
    game_active: bool = False
    difficulty: str = "normal"
    ground_effects: list[GroundEffect] = Field(default_factory=list)
    visual_effects: list[VisualEffect] = Field(default_factory=list)
    arrow_projectile: ArrowProjectile | None = None
    level_up_options: list[LevelUpOption] = Field(default_factory=list)
    shop_offers: list[ShopOffer] = Field(default_factory=list)
    pending_skill_picks: int = Field(0, description="Skills the player must choose.")


class GameSnapshot(BaseModel):
    """
    A read-only copy of the game, taken after an action.

    Mutating the records it contains never affects the running game.
    """

    model_config = ConfigDict(frozen=True)

    screen: GameScreen
    phase: SchedulerPhase
    player: Player | None
    enemies: tuple[Enemy, ...]
    items: tuple[Item, ...]
    grid: Grid
    fov: FovMap
    floor: int
    turn_count: int
    game_active: bool
    logs: tuple[LogEntry, ...]
    ground_effects: tuple[GroundEffect, ...]
    visual_effects: tuple[VisualEffect, ...]
    arrow_projectile: ArrowProjectile | None
    level_up_options: tuple[LevelUpOption, ...]
    shop_offers: tuple[ShopOffer, ...]
    pending_skill_picks: int

    @property
    def is_player_turn(self) -> bool:
        return self.phase is SchedulerPhase.AWAITING_PLAYER_INPUT
