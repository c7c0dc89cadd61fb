"""
Shop catalog module for the crawler.

Defines the items sold between floors, rolls the inventory of a shop visit,
prices the offers and applies purchases.
"""

import math
import random
from abc import ABC, abstractmethod

from pydantic import BaseModel, Field

from crawler.core.constants import RelicRarity, ShopCategory
from crawler.core.content import ContentRepository
from crawler.core.logging import log_debug
from crawler.entities.player import Player

# Prefix of the offer ids that sell a relic.
RELIC_OFFER_PREFIX = "relic:"


class ShopItemDefinition(BaseModel):
    """
    An item of the shop catalog.

    The ``effect`` names the behaviour applied on purchase; the remaining
    fields parameterize it.
    """

    id: str = Field(description="Unique identifier of the item.")
    name: str = Field(description="Display name.")
    description: str = Field("", description="Tooltip text.")
    price: int = Field(description="Base price in gold.")
    category: ShopCategory = Field(description="Consumable, permanent or special.")
    effect: str = Field(description="Behaviour applied on purchase.")
    restore_hp: float = Field(0, description="HP restored, fraction of max HP.")
    restore_mp: float = Field(0, description="MP restored, fraction of max MP.")
    restore_torch: float = Field(0, description="Torch restored, fraction of max torch.")
    stat_bonuses: dict[str, int] = Field(
        default_factory=dict,
        description="Permanent increases of player attributes.",
    )
    max_skill_slots: int = Field(6, description="Cap for the skill slot scroll.")
    exp_percent: float = Field(0, description="Experience granted, fraction of next level.")


class ShopOffer(BaseModel):
    """Something for sale during a shop visit."""

    id: str = Field(description="Identifier used to buy the offer.")
    name: str
    description: str = ""
    price: int = Field(description="Base price in gold.")
    category: ShopCategory
    relic_id: str | None = Field(None, description="The relic sold, for relic offers.")


class PurchaseResult(BaseModel):
    """Outcome of a purchase attempt."""

    ok: bool
    message: str
    opens_skill_selection: bool = Field(
        False,
        description="The player must pick new skills after this purchase.",
    )


class ShopEffect(ABC):
    """The behaviour of a shop item."""

    def can_buy(self, item: ShopItemDefinition, player: Player, repository: ContentRepository) -> bool:
        return True

    @abstractmethod
    def apply(self, item: ShopItemDefinition, player: Player, repository: ContentRepository) -> str:
        """Applies the item to the player and returns a log message."""


class RestoreEffect(ShopEffect):
    """Restores fractions of HP, MP and torch (potions, oil, elixir)."""

    def apply(self, item: ShopItemDefinition, player: Player, repository: ContentRepository) -> str:
        healed = player.heal(math.floor(player.max_hp * item.restore_hp))
        restored_mp = player.restore_mp(math.floor(player.max_mp * item.restore_mp))
        restored_torch = player.restore_torch(math.floor(player.max_torch * item.restore_torch))
        parts = [
            f"{amount} {label}"
            for amount, label in ((healed, "HP"), (restored_mp, "MP"), (restored_torch, "torch"))
            if amount > 0
        ]
        return f"You use {item.name}" + (f" and recover {', '.join(parts)}." if parts else ".")


class StatBonusEffect(ShopEffect):
    """Permanently raises player attributes."""

    def apply(self, item: ShopItemDefinition, player: Player, repository: ContentRepository) -> str:
        for stat, amount in item.stat_bonuses.items():
            setattr(player, stat, getattr(player, stat) + amount)
        # Current values never exceed their maximum.
        player.hp = min(player.hp, player.max_hp)
        player.mp = min(player.mp, player.max_mp)
        return f"{item.name}: {item.description}"


class SkillSlotEffect(ShopEffect):
    """Adds a skill slot, up to a cap."""

    def can_buy(self, item: ShopItemDefinition, player: Player, repository: ContentRepository) -> bool:
        return player.skill_slots < item.max_skill_slots

    def apply(self, item: ShopItemDefinition, player: Player, repository: ContentRepository) -> str:
        player.skill_slots += 1
        return f"You now have {player.skill_slots} skill slots."


class SkillResetEffect(ShopEffect):
    """Forgets every skill; the player chooses new ones afterwards."""

    def can_buy(self, item: ShopItemDefinition, player: Player, repository: ContentRepository) -> bool:
        return len(player.skill_ids) > 0

    def apply(self, item: ShopItemDefinition, player: Player, repository: ContentRepository) -> str:
        player.skill_ids = []
        return "Your mind goes blank. Choose your skills anew."


class RandomSkillEffect(ShopEffect):
    """Teaches a random unknown skill, if a slot is free."""

    @staticmethod
    def _unknown_skills(player: Player, repository: ContentRepository) -> list[str]:
        return [skill_id for skill_id in repository.skills if skill_id not in player.skill_ids]

    def can_buy(self, item: ShopItemDefinition, player: Player, repository: ContentRepository) -> bool:
        return player.has_free_skill_slot() and bool(self._unknown_skills(player, repository))

    def apply(self, item: ShopItemDefinition, player: Player, repository: ContentRepository) -> str:
        skill_id = random.choice(self._unknown_skills(player, repository))
        player.skill_ids.append(skill_id)
        return f"You learn {repository.skills[skill_id].name}!"


class ExperienceEffect(ShopEffect):
    """Grants a fraction of the experience needed for the next level."""

    def apply(self, item: ShopItemDefinition, player: Player, repository: ContentRepository) -> str:
        gained = math.floor(player.next_level_exp * item.exp_percent)
        player.exp += gained
        return f"You absorb the orb and gain {gained} experience."


SHOP_EFFECTS: dict[str, ShopEffect] = {
    "restore": RestoreEffect(),
    "stat_bonus": StatBonusEffect(),
    "skill_slot": SkillSlotEffect(),
    "skill_reset": SkillResetEffect(),
    "random_skill": RandomSkillEffect(),
    "experience": ExperienceEffect(),
}


def is_shop_floor(floor: int, repository: ContentRepository | None = None) -> bool:
    """Returns True if the floor hosts a shop (floor 1 and every third floor after)."""
    return (repository or ContentRepository()).balance.is_shop_floor(floor)


def relic_price(rarity: RelicRarity, repository: ContentRepository | None = None) -> int:
    """Returns the base price of a relic of the given rarity."""
    return (repository or ContentRepository()).balance.shop.relic_prices[rarity.value]


def _offer_for_item(item: ShopItemDefinition) -> ShopOffer:
    return ShopOffer(
        id=item.id,
        name=item.name,
        description=item.description,
        price=item.price,
        category=item.category,
    )


def get_relic_offer(repository: ContentRepository | None = None) -> ShopOffer | None:
    """Rolls a random relic and prices it by rarity."""
    from crawler.relics.manager import get_random_relic

    repository = repository or ContentRepository()
    relic = get_random_relic(repository=repository)
    if relic is None:
        return None
    return ShopOffer(
        id=RELIC_OFFER_PREFIX + relic.id,
        name=f"{relic.icon} {relic.name}",
        description=relic.description,
        price=relic_price(relic.rarity, repository),
        category=ShopCategory.RELIC,
        relic_id=relic.id,
    )


def get_shop_inventory(
    floor: int,
    count: int | None = None,
    repository: ContentRepository | None = None,
    include_relic: bool = True,
) -> list[ShopOffer]:
    """
    Rolls the offers of a shop visit.

    Consumables are always available, each permanent upgrade is available
    with chance ``min(0.3 + 0.1 * floor, 1)`` and special items unlock on
    deeper floors. ``count`` of them are picked at random, then one random
    relic is offered on top.

    Args:
        floor (int): The current floor.
        count (int | None): Number of catalog items, configured size if None.
        repository (ContentRepository | None): Source of the catalog.
        include_relic (bool): Whether to add a relic offer.

    Returns:
        list[ShopOffer]: The offers.

    """
    repository = repository or ContentRepository()
    config = repository.balance.shop
    count = config.inventory_size if count is None else count
    unlock_chance = min(0.3 + floor * 0.1, 1)

    available: list[ShopItemDefinition] = []
    for item in repository.shop_items.values():
        if item.category is ShopCategory.CONSUMABLE:
            available.append(item)
        elif item.category is ShopCategory.PERMANENT:
            if random.random() < unlock_chance:
                available.append(item)
        elif item.category is ShopCategory.SPECIAL:
            if floor >= config.special_min_floor:
                available.append(item)

    random.shuffle(available)
    offers = [_offer_for_item(item) for item in available[:count]]
    if include_relic:
        relic_offer = get_relic_offer(repository)
        if relic_offer is not None:
            offers.append(relic_offer)
    log_debug("Rolled shop inventory", {"floor": floor, "offers": [o.id for o in offers]})
    return offers


def get_price(player: Player, offer: ShopOffer) -> int:
    """Returns the price the player pays; greed raises every price by 50%."""
    if player.has_relic("greed_incarnate"):
        return math.floor(offer.price * 1.5)
    return offer.price


def can_buy_item(
    player: Player,
    offer: ShopOffer,
    repository: ContentRepository | None = None,
) -> bool:
    """Returns True if the player can afford the offer and meets its conditions."""
    repository = repository or ContentRepository()
    if player.gold < get_price(player, offer):
        return False
    if offer.relic_id is not None:
        return True
    item = repository.shop_items.get(offer.id)
    if item is None:
        return False
    effect = SHOP_EFFECTS.get(item.effect)
    return effect is not None and effect.can_buy(item, player, repository)


def buy_item(
    player: Player,
    offer: ShopOffer,
    repository: ContentRepository | None = None,
) -> PurchaseResult:
    """
    Buys an offer: pays its price and applies it.

    Returns:
        PurchaseResult: Failure leaves the player untouched.

    """
    from crawler.relics.manager import grant_relic

    repository = repository or ContentRepository()
    if not can_buy_item(player, offer, repository):
        if player.gold < get_price(player, offer):
            return PurchaseResult(ok=False, message=f"You cannot afford {offer.name}.")
        return PurchaseResult(ok=False, message=f"You cannot buy {offer.name} right now.")

    player.gold -= get_price(player, offer)
    if offer.relic_id is not None:
        relic = grant_relic(player, offer.relic_id, repository)
        name = relic.name if relic else offer.name
        return PurchaseResult(ok=True, message=f"You obtain the relic {name}!")

    item = repository.shop_items[offer.id]
    message = SHOP_EFFECTS[item.effect].apply(item, player, repository)
    return PurchaseResult(
        ok=True,
        message=message,
        opens_skill_selection=item.effect == "skill_reset",
    )
