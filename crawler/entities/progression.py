"""
Progression module for the crawler.

Handles experience, level ups and the stat choices offered on level up.
"""

import math
import random

from pydantic import BaseModel, Field

from crawler.core.config import ProgressionConfig

from .player import Player


class LevelUpOption(BaseModel):
    """A stat increase the player may pick when leveling up."""

    id: str = Field(description="Unique identifier of the option.")
    text: str = Field(description="Label shown to the player.")
    stat: str = Field(description="Player attribute raised by the option.")
    amount: int = Field(description="Increase of the attribute.")

    def apply(self, player: Player, multiplier: int = 1) -> int:
        """
        Raises the player's stat.

        Args:
            player (Player): The player leveling up.
            multiplier (int): Multiplier of the increase (relics).

        Returns:
            int: The increase actually applied.

        """
        gain = self.amount * multiplier
        setattr(player, self.stat, getattr(player, self.stat) + gain)
        return gain


LEVEL_UP_CATALOG: list[LevelUpOption] = [
    LevelUpOption(id="max_hp", text="Max HP +20", stat="max_hp", amount=20),
    LevelUpOption(id="hp_regen", text="HP regen +1", stat="hp_regen", amount=1),
    LevelUpOption(id="defense", text="Defense +1", stat="defense", amount=1),
    LevelUpOption(id="attack", text="Attack +2", stat="attack", amount=2),
    LevelUpOption(id="speed", text="Speed +1", stat="move_speed", amount=1),
    LevelUpOption(id="crit_chance", text="Crit chance +1%", stat="crit_chance", amount=1),
    LevelUpOption(id="crit_damage", text="Crit damage +5%", stat="crit_damage", amount=5),
    LevelUpOption(id="evasion", text="Evasion +1%", stat="evasion", amount=1),
    LevelUpOption(id="max_mp", text="Max MP +5", stat="max_mp", amount=5),
    LevelUpOption(id="mp_regen", text="MP regen +1", stat="mp_regen", amount=1),
    LevelUpOption(id="skill_slots", text="Skill slots +1", stat="skill_slots", amount=1),
    LevelUpOption(id="luck", text="Luck +1", stat="luck", amount=1),
    LevelUpOption(id="lifesteal", text="Lifesteal +1", stat="lifesteal", amount=1),
    LevelUpOption(id="thorns", text="Thorns +2", stat="thorns", amount=2),
    LevelUpOption(id="max_torch", text="Max torch +20", stat="max_torch", amount=20),
]


def can_level_up(player: Player) -> bool:
    return player.exp >= player.next_level_exp


def perform_level_up(player: Player, config: ProgressionConfig | None = None) -> None:
    """
    Advances the player by one level.

    The experience threshold is paid, the next threshold grows by the
    experience multiplier (rounded down) and the player recovers a share of
    max HP.
    """
    config = config or ProgressionConfig()
    player.level += 1
    player.exp -= player.next_level_exp
    player.next_level_exp = math.floor(player.next_level_exp * config.exp_multiplier)
    player.heal(math.floor(player.max_hp * config.level_up_heal_percent))


def get_level_up_options(count: int = 5) -> list[LevelUpOption]:
    """Returns ``count`` distinct options drawn at random from the catalog."""
    return random.sample(LEVEL_UP_CATALOG, min(count, len(LEVEL_UP_CATALOG)))


def get_level_up_option(option_id: str) -> LevelUpOption | None:
    return next((option for option in LEVEL_UP_CATALOG if option.id == option_id), None)
