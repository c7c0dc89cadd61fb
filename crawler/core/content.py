"""
Content repository module for the crawler.

Loads the static game tables (balance, monsters, skills, relics and shop
items) from the JSON files shipped in ``crawler/data`` and gives fast by-id
access to them.
"""

import json
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from catchery import log_warning

from .config import BalanceConfig
from .logging import log_debug
from .utils import Singleton

if TYPE_CHECKING:
    from crawler.entities.enemy import MonsterDefinition
    from crawler.relics.base import RelicDefinition
    from crawler.shop.catalog import ShopItemDefinition
    from crawler.skills.base import SkillDefinition

# Folder holding the JSON tables shipped with the package.
DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class ContentRepository(metaclass=Singleton):
    """
    One-stop registry for every static table that needs fast by-id access.
    """

    balance: BalanceConfig
    monsters: dict[str, "MonsterDefinition"]
    skills: dict[str, "SkillDefinition"]
    relics: dict[str, "RelicDefinition"]
    shop_items: dict[str, "ShopItemDefinition"]

    def __init__(self, data_dir: Path | None = None) -> None:
        """
        Initialize the ContentRepository.

        Args:
            data_dir (Path | None):
                The directory containing data files to load. The packaged
                data folder is used on first use when omitted.

        """
        if data_dir:
            self.reload(data_dir)
        elif not hasattr(self, "loaded"):
            self.reload(DEFAULT_DATA_DIR)

    def reload(self, root: Path) -> None:
        """
        (Re)load all JSON assets from disk.

        Args:
            root (Path):
                The directory containing data files to load.

        """
        self.balance = _load_balance_file(root / "balance.json")
        self.monsters = _load_json_file(
            root / "monsters.json",
            self._load_monsters,
            "monsters",
        )
        self.skills = _load_json_file(
            root / "skills.json",
            self._load_skills,
            "skills",
        )
        self.relics = _load_json_file(
            root / "relics.json",
            self._load_relics,
            "relics",
        )
        self.shop_items = _load_json_file(
            root / "shop.json",
            self._load_shop_items,
            "shop items",
        )
        self.loaded = True

    def _get_from_collection(self, collection_name: str, item_id: str) -> Any | None:
        """
        Generic helper to get an entry from any collection.

        Args:
            collection_name (str):
                Name of the collection attribute (e.g., 'monsters', 'skills').
            item_id (str):
                Identifier of the entry to retrieve.

        Returns:
            Any | None:
                The entry if found, None otherwise.

        """
        collection = getattr(self, collection_name, None)
        if collection is None:
            log_warning(
                f"Collection '{collection_name}' not found in ContentRepository.",
                {"collection_name": collection_name, "item_id": item_id},
            )
            return None
        entry = collection.get(item_id)
        if entry is None:
            log_warning(
                f"Unknown entry '{item_id}' in collection '{collection_name}'.",
                {"collection_name": collection_name, "item_id": item_id},
            )
        return entry

    def get_monster(self, monster_id: str) -> "MonsterDefinition | None":
        """Get a monster definition by id, or None if not found."""
        return self._get_from_collection("monsters", monster_id)

    def get_skill(self, skill_id: str) -> "SkillDefinition | None":
        """Get a skill definition by id, or None if not found."""
        return self._get_from_collection("skills", skill_id)

    def get_relic(self, relic_id: str) -> "RelicDefinition | None":
        """Get a relic definition by id, or None if not found."""
        return self._get_from_collection("relics", relic_id)

    def get_shop_item(self, item_id: str) -> "ShopItemDefinition | None":
        """Get a shop item definition by id, or None if not found."""
        return self._get_from_collection("shop_items", item_id)

    def get_monsters_for_floor(self, floor: int) -> list["MonsterDefinition"]:
        """Returns the monsters eligible for a floor, in data order."""
        return [m for m in self.monsters.values() if m.spawns_on(floor)]

    @staticmethod
    def _load_monsters(data: list[dict]) -> dict[str, "MonsterDefinition"]:
        """
        Load monster definitions from JSON data.

        Args:
            data (list[dict]): List of monster data dictionaries.

        Returns:
            dict[str, MonsterDefinition]: Monsters keyed by id, in file order.

        Raises:
            ValueError: If duplicate monster ids are found.

        """
        from crawler.entities.enemy import MonsterDefinition

        return _index_by_id(data, MonsterDefinition.model_validate, "monster")

    @staticmethod
    def _load_skills(data: list[dict]) -> dict[str, "SkillDefinition"]:
        """
        Load skill definitions from JSON data.

        Raises:
            ValueError: If duplicate skill ids are found.

        """
        from crawler.skills.base import SkillDefinition

        return _index_by_id(data, SkillDefinition.model_validate, "skill")

    @staticmethod
    def _load_relics(data: list[dict]) -> dict[str, "RelicDefinition"]:
        """Load relic definitions from JSON data."""
        from crawler.relics.base import RelicDefinition

        return _index_by_id(data, RelicDefinition.model_validate, "relic")

    @staticmethod
    def _load_shop_items(data: list[dict]) -> dict[str, "ShopItemDefinition"]:
        """Load shop item definitions from JSON data."""
        from crawler.shop.catalog import ShopItemDefinition

        return _index_by_id(data, ShopItemDefinition.model_validate, "shop item")


def _index_by_id(
    data: list[dict],
    factory: Callable[[dict], Any],
    label: str,
) -> dict[str, Any]:
    entries: dict[str, Any] = {}
    for entry_data in data:
        entry = factory(entry_data)
        if entry.id in entries:
            raise ValueError(f"Duplicate {label} id: {entry.id}")
        entries[entry.id] = entry
    return entries


def _load_json_file(
    filepath: Path,
    loader_func: Callable[[list[dict]], dict[str, Any]],
    description: str,
) -> dict[str, Any]:
    """Helper to load and validate JSON files"""
    try:
        log_debug(f"Loading {description}", {"file": filepath.name})
        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")
        if not filepath.is_file():
            raise ValueError(f"Not a file: {filepath}")
        with open(filepath, encoding="utf-8") as f:
            data = json.load(f)
        if not data:
            raise ValueError(f"Empty data list in {filepath}")
        if not isinstance(data, list):
            raise ValueError(f"Expected list in {filepath}, got {type(data).__name__}")
        return loader_func(data)
    except (json.JSONDecodeError, FileNotFoundError, ValueError) as e:
        raise ValueError(f"File {filepath} raised an error: {e}") from e


def _load_balance_file(filepath: Path) -> BalanceConfig:
    """Loads the balance tables, falling back to the defaults when absent."""
    if not filepath.is_file():
        log_debug("No balance file, using defaults", {"file": filepath.name})
        return BalanceConfig()
    try:
        log_debug("Loading balance", {"file": filepath.name})
        with open(filepath, encoding="utf-8") as f:
            return BalanceConfig.model_validate(json.load(f))
    except (json.JSONDecodeError, ValueError) as e:
        raise ValueError(f"File {filepath} raised an error: {e}") from e
