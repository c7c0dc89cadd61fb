"""
Balance configuration module for the crawler.

Defines the pydantic models holding every tunable number of the game: player
defaults, combat and progression constants, item values, map generation
parameters, shop settings and difficulty presets. The defaults are the
canonical values; a ``balance.json`` file may override any of them.
"""

from typing import Any

from pydantic import BaseModel, Field


class PlayerStats(BaseModel):
    """Base statistics of a freshly created player."""

    max_hp: int = Field(200, description="Maximum hit points.")
    max_mp: int = Field(30, description="Maximum mana points.")
    max_torch: int = Field(500, description="Maximum torch fuel.")
    attack: int = Field(20, description="Base attack.")
    defense: int = Field(0, description="Base defense.")
    move_speed: int = Field(10, description="Action points gained per tick.")
    attack_speed: int = Field(10, description="Attack speed.")
    crit_chance: int = Field(5, description="Critical hit chance, in percent.")
    crit_damage: int = Field(200, description="Critical damage, in percent.")
    evasion: int = Field(5, description="Chance to evade attacks, in percent.")
    luck: int = Field(10, description="Luck, improves item drops.")
    hp_regen: int = Field(0, description="HP regenerated every regen interval.")
    mp_regen: int = Field(0, description="MP regenerated every regen interval.")
    lifesteal: int = Field(0, description="Lifesteal rating.")
    thorns: int = Field(0, description="Damage reflected to melee attackers.")
    skill_slots: int = Field(2, description="Number of skills that can be known.")
    arrows: int = Field(5, description="Arrows carried at start.")
    max_arrows: int = Field(20, description="Maximum arrows carried.")


class PlayerConfig(BaseModel):
    """Player defaults and character-creation point buy."""

    defaults: PlayerStats = Field(
        default_factory=PlayerStats,
        description="Starting statistics.",
    )
    allocation_points: int = Field(
        10,
        description="Points spent on stats during character creation.",
    )
    stat_steps: dict[str, int] = Field(
        default_factory=lambda: {
            "max_hp": 20,
            "max_mp": 5,
            "max_torch": 20,
            "attack": 2,
            "defense": 1,
            "move_speed": 1,
            "crit_chance": 1,
            "crit_damage": 5,
            "evasion": 1,
            "luck": 1,
            "hp_regen": 1,
            "mp_regen": 1,
            "lifesteal": 1,
            "thorns": 2,
            "skill_slots": 1,
        },
        description="Stat increase granted by one allocation point.",
    )


class CombatConfig(BaseModel):
    """Turn and combat constants."""

    action_cost: int = Field(100, description="Action points spent per action.")
    fov_radius: int = Field(8, description="Radius of the field of view.")
    arrow_damage: int = Field(15, description="Flat damage of an arrow.")
    arrow_range: int = Field(8, description="Maximum arrow distance.")
    arrow_marker_seconds: float = Field(
        0.3,
        description="How long the arrow trajectory stays visible.",
    )
    shaman_heal_amount: int = Field(10, description="HP restored by healer monsters.")
    healer_ally_radius: float = Field(4, description="Reach of healer monsters.")
    healer_player_radius: float = Field(
        5,
        description="Healer monsters only heal while the player is this close.",
    )
    split_chance: float = Field(0.5, description="Chance a splitting monster splits.")
    split_count: int = Field(2, description="Maximum spawns of a split.")
    split_spawn_id: str = Field("mini_slime", description="Monster spawned by a split.")


class ProgressionConfig(BaseModel):
    """Leveling and regeneration constants."""

    initial_next_level_exp: int = Field(10, description="Experience for level 2.")
    exp_multiplier: float = Field(1.6, description="Growth of the experience curve.")
    level_up_heal_percent: float = Field(0.15, description="Heal on level up.")
    level_up_option_count: int = Field(5, description="Options offered on level up.")
    regen_interval: int = Field(100, description="Ticks between regeneration.")


class SpawnRates(BaseModel):
    """Relative chance of each random floor item."""

    gold: float = Field(0.5, description="Chance of a gold pile.")
    oil: float = Field(0.2, description="Chance of an oil flask.")
    potion: float = Field(0.15, description="Chance of a potion.")
    arrow: float = Field(0.15, description="Chance of an arrow bundle.")


class ItemConfig(BaseModel):
    """Values of the floor items."""

    gold_base: int = Field(10, description="Gold per pile on floor 0.")
    gold_per_floor: int = Field(5, description="Extra gold per pile per floor.")
    potion_heal_percent: float = Field(0.2, description="Potion heal, of max HP.")
    oil_restore_percent: float = Field(0.5, description="Oil refill, of max torch.")
    arrow_pickup_count: int = Field(3, description="Arrows per bundle.")
    spawn_rates: SpawnRates = Field(
        default_factory=SpawnRates,
        description="Item type weights.",
    )


class MapConfig(BaseModel):
    """Map generation parameters."""

    width: int = Field(50, description="Map width in tiles.")
    height: int = Field(40, description="Map height in tiles.")
    pillar_count: int = Field(40, description="Pillars tried on the first attempt.")
    min_pillar_count: int = Field(20, description="Lowest pillar count.")
    segment_count: int = Field(15, description="Wall segments on the first attempt.")
    min_segment_count: int = Field(8, description="Lowest wall segment count.")
    max_attempts: int = Field(10, description="Generation attempts.")


class ShopConfig(BaseModel):
    """Shop settings."""

    floor_interval: int = Field(3, description="Floors between shops.")
    inventory_size: int = Field(8, description="Items on offer.")
    special_min_floor: int = Field(4, description="Floor where special items unlock.")
    relic_prices: dict[str, int] = Field(
        default_factory=lambda: {
            "common": 50,
            "uncommon": 100,
            "rare": 200,
            "legendary": 400,
        },
        description="Relic price per rarity.",
    )
    relic_weights: dict[str, int] = Field(
        default_factory=lambda: {
            "common": 50,
            "uncommon": 30,
            "rare": 15,
            "legendary": 5,
        },
        description="Relic drop weight per rarity.",
    )


class DifficultyMultipliers(BaseModel):
    """Scaling applied to monster statistics."""

    hp: float = Field(1.0, description="Monster HP multiplier.")
    attack: float = Field(1.0, description="Monster attack multiplier.")
    defense: float = Field(1.0, description="Monster defense multiplier.")
    exp: float = Field(1.0, description="Monster experience multiplier.")
    speed: float = Field(1.0, description="Monster speed multiplier.")


def _default_difficulties() -> dict[str, DifficultyMultipliers]:
    return {
        "easy": DifficultyMultipliers(hp=0.8, attack=0.8, defense=0.8, exp=1.2, speed=0.9),
        "normal": DifficultyMultipliers(),
        "hard": DifficultyMultipliers(hp=1.3, attack=1.2, defense=1.2, exp=0.9, speed=1.1),
        "nightmare": DifficultyMultipliers(hp=1.6, attack=1.4, defense=1.4, exp=0.8, speed=1.2),
    }


class BalanceConfig(BaseModel):
    """Every tunable number of the game."""

    player: PlayerConfig = Field(default_factory=PlayerConfig)
    combat: CombatConfig = Field(default_factory=CombatConfig)
    progression: ProgressionConfig = Field(default_factory=ProgressionConfig)
    items: ItemConfig = Field(default_factory=ItemConfig)
    map: MapConfig = Field(default_factory=MapConfig)
    shop: ShopConfig = Field(default_factory=ShopConfig)
    difficulties: dict[str, DifficultyMultipliers] = Field(
        default_factory=_default_difficulties,
        description="Difficulty presets by name.",
    )

    def model_post_init(self, _: Any) -> None:
        if "normal" not in self.difficulties:
            raise ValueError("The 'normal' difficulty preset is required.")
        if self.map.width < 10 or self.map.height < 10:
            raise ValueError(
                f"Map must be at least 10x10, got {self.map.width}x{self.map.height}."
            )
        if self.combat.action_cost <= 0:
            raise ValueError("Action cost must be positive.")

    def get_difficulty(self, name: str | None) -> DifficultyMultipliers:
        """
        Returns the multipliers of a difficulty preset.

        Args:
            name (str | None): The preset name, None for normal.

        Returns:
            DifficultyMultipliers: The preset, or normal if the name is unknown.

        """
        if name is None:
            return self.difficulties["normal"]
        return self.difficulties.get(name, self.difficulties["normal"])

    def is_shop_floor(self, floor: int) -> bool:
        """Returns True if the given floor hosts a shop."""
        return floor == 1 or (floor - 1) % self.shop.floor_interval == 0
