"""
Constants and enumerations for the crawler.

Defines the enumerations for tiles, actors, items, monster specials, skill and
relic categories, log entries, and game screens used throughout the crawler.
"""

from enum import Enum


class NiceEnum(Enum):
    """An enumeration that provides a nicer string representation."""

    def __str__(self) -> str:
        return self.name

    @property
    def display_name(self) -> str:
        return self.name.replace("_", " ").lower().capitalize()


class TileType(NiceEnum):
    """Defines the terrain of a single map tile."""

    WALL = 0
    FLOOR = 1

    @property
    def glyph(self) -> str:
        return "#" if self is TileType.WALL else "."


class ActorKind(NiceEnum):
    """Discriminates the two kinds of actors taking turns."""

    PLAYER = "PLAYER"
    ENEMY = "ENEMY"

    @property
    def color(self) -> str:
        """Returns the color string associated with this actor kind."""
        return {
            ActorKind.PLAYER: "bold blue",
            ActorKind.ENEMY: "bold red",
        }.get(self, "dim white")

    def colorize(self, message: str) -> str:
        """Applies actor kind color formatting to a message."""
        return f"[{self.color}]{message}[/]"


class ItemType(NiceEnum):
    """Defines the kinds of items lying on the floor."""

    PORTAL = "PORTAL"
    GOLD = "GOLD"
    POTION = "POTION"
    OIL = "OIL"
    ARROW = "ARROW"

    @property
    def glyph(self) -> str:
        return {
            ItemType.PORTAL: ">",
            ItemType.GOLD: "$",
            ItemType.POTION: "!",
            ItemType.OIL: "o",
            ItemType.ARROW: "/",
        }[self]

    @property
    def color(self) -> str:
        return {
            ItemType.PORTAL: "bold magenta",
            ItemType.GOLD: "yellow",
            ItemType.POTION: "red",
            ItemType.OIL: "bright_yellow",
            ItemType.ARROW: "white",
        }[self]


class EnemySpecial(NiceEnum):
    """Special behaviour tags carried by monsters."""

    NONE = "none"
    SPLIT = "split"
    ERRATIC = "erratic"
    HEAL = "heal"
    RANGED = "ranged"
    RANGED_AOE = "ranged_aoe"

    @property
    def is_ranged(self) -> bool:
        return self in (EnemySpecial.RANGED, EnemySpecial.RANGED_AOE)


class SkillType(NiceEnum):
    """Defines the category of a skill."""

    DAMAGE = "damage"
    HEAL = "heal"
    BUFF = "buff"
    CONTROL = "control"
    UTILITY = "utility"

    @property
    def color(self) -> str:
        return {
            SkillType.DAMAGE: "bold red",
            SkillType.HEAL: "bold green",
            SkillType.BUFF: "bold yellow",
            SkillType.CONTROL: "bold cyan",
            SkillType.UTILITY: "bold magenta",
        }.get(self, "dim white")


class SkillOutcome(NiceEnum):
    """Result of applying a skill."""

    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
    AWAIT_DIRECTION = "AWAIT_DIRECTION"


class RelicRarity(NiceEnum):
    """Rarity tiers of relics."""

    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    LEGENDARY = "legendary"

    @property
    def color(self) -> str:
        return {
            RelicRarity.COMMON: "white",
            RelicRarity.UNCOMMON: "green",
            RelicRarity.RARE: "blue",
            RelicRarity.LEGENDARY: "bold yellow",
        }.get(self, "dim white")


class RelicTrigger(NiceEnum):
    """Game events a relic can react to."""

    ON_ATTACK = "onAttack"
    ON_KILL = "onKill"
    ON_DAMAGE_TAKEN = "onDamageTaken"
    ON_GOLD_GAIN = "onGoldGain"
    ON_LEVEL_UP = "onLevelUp"
    ON_SKILL_USE = "onSkillUse"
    PASSIVE = "passive"


class LogType(NiceEnum):
    """Categories of in-game log entries."""

    INFO = "info"
    COMBAT = "combat"
    DAMAGE = "damage"
    HEAL = "heal"
    GOLD = "gold"
    LEVEL = "level"
    DEATH = "death"
    SKILL = "skill"
    RELIC = "relic"
    WARNING = "warning"

    @property
    def color(self) -> str:
        return {
            LogType.INFO: "white",
            LogType.COMBAT: "yellow",
            LogType.DAMAGE: "red",
            LogType.HEAL: "green",
            LogType.GOLD: "bright_yellow",
            LogType.LEVEL: "bold cyan",
            LogType.DEATH: "bold red",
            LogType.SKILL: "magenta",
            LogType.RELIC: "bold magenta",
            LogType.WARNING: "dim yellow",
        }.get(self, "white")


class GameScreen(NiceEnum):
    """Screens the game can be showing."""

    START = "START"
    SKILL_SELECTION = "SKILL_SELECTION"
    PLAYING = "PLAYING"
    LEVEL_UP = "LEVEL_UP"
    SHOP = "SHOP"
    GAME_OVER = "GAME_OVER"


class SchedulerPhase(NiceEnum):
    """States of the turn scheduler."""

    ADVANCING_TIME = "ADVANCING_TIME"
    ACTOR_ACTING = "ACTOR_ACTING"
    AWAITING_PLAYER_INPUT = "AWAITING_PLAYER_INPUT"
    GAME_OVER = "GAME_OVER"


class ShopCategory(NiceEnum):
    """Categories of shop items."""

    CONSUMABLE = "consumable"
    PERMANENT = "permanent"
    SPECIAL = "special"
    RELIC = "relic"


# The eight neighbouring directions of a tile.
DIRECTIONS: list[tuple[int, int]] = [
    (-1, -1),
    (0, -1),
    (1, -1),
    (-1, 0),
    (1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
]

# The four orthogonal directions, used by the flood fill.
ORTHOGONAL_DIRECTIONS: list[tuple[int, int]] = [(0, 1), (1, 0), (0, -1), (-1, 0)]
