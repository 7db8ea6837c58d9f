from __future__ import annotations

from typing import Dict

from focusquest.domain.errors import ContentConfigurationError
from focusquest.domain.models.item import ItemType
from focusquest.domain.models.loot import LootTable
from focusquest.domain.models.task_types import TaskType
from focusquest.domain.repositories import LootTableRepository
from focusquest.infrastructure.inmemory.inmemory_item_template_repo import accessories_of, armor_of, weapons_of


def _weights(weapon: int, armor: int, accessory: int, consumable: int) -> Dict[ItemType, int]:
    return {
        ItemType.WEAPON: weapon,
        ItemType.ARMOR: armor,
        ItemType.ACCESSORY: accessory,
        ItemType.CONSUMABLE: consumable,
    }


def default_loot_tables() -> Dict[TaskType, LootTable]:
    return {
        # Ranged and utility gear, light armour for mobility.
        TaskType.EXPEDITION: LootTable(
            task_type=TaskType.EXPEDITION,
            item_pool=tuple(
                weapons_of("bow") + weapons_of("staff") + weapons_of("dagger") + weapons_of("spear")
                + armor_of("light") + armor_of("robe") + armor_of("medium")[:2]
                + accessories_of("ring") + accessories_of("amulet")
            ),
            consumable_pool=(
                "health-potion-minor",
                "health-potion",
                "bread",
                "cooked-meat",
                "fruit-basket",
                "travelers-rations",
                "elixir-of-focus",
                "elixir-of-fortune",
            ),
            type_weights=_weights(30, 30, 10, 30),
        ),
        TaskType.RAID: LootTable(
            task_type=TaskType.RAID,
            item_pool=tuple(
                weapons_of("sword") + weapons_of("axe") + weapons_of("mace") + weapons_of("spear")
                + armor_of("heavy") + armor_of("medium")
                + accessories_of("bracer") + accessories_of("ring")
            ),
            consumable_pool=(
                "health-potion",
                "health-potion-major",
                "healing-salve",
                "elixir-of-strength",
                "elixir-of-fortitude",
                "travelers-rations",
                "feast",
                "scroll-of-protection",
                "grand-elixir",
            ),
            type_weights=_weights(40, 40, 10, 10),
        ),
        TaskType.CRAFT: LootTable(
            task_type=TaskType.CRAFT,
            item_pool=tuple(weapons_of("dagger")[:2] + armor_of("light")[:2]),
            consumable_pool=(
                "health-potion-minor",
                "health-potion",
                "healing-salve",
                "bread",
                "cooked-meat",
                "fruit-basket",
                "elixir-of-focus",
            ),
            type_weights=_weights(10, 10, 10, 70),
        ),
        TaskType.HUNT: LootTable(
            task_type=TaskType.HUNT,
            item_pool=tuple(weapons_of("bow") + weapons_of("dagger") + armor_of("light") + accessories_of("charm")),
            consumable_pool=(
                "cooked-meat",
                "fruit-basket",
                "travelers-rations",
                "elixir-of-fortune",
                "scroll-of-fortune",
            ),
            type_weights=_weights(35, 35, 15, 15),
        ),
        TaskType.REST: LootTable(
            task_type=TaskType.REST,
            item_pool=(),
            consumable_pool=(
                "health-potion-minor",
                "health-potion",
                "health-potion-major",
                "healing-salve",
                "bread",
                "fruit-basket",
            ),
            type_weights=_weights(0, 0, 0, 100),
        ),
    }


class InMemoryLootTableRepository(LootTableRepository):
    def __init__(self, tables: Dict[TaskType, LootTable] | None = None) -> None:
        self._tables = dict(tables) if tables is not None else default_loot_tables()

    def get(self, task_type: TaskType) -> LootTable:
        key = TaskType.normalize(task_type)
        table = self._tables.get(key)
        if table is None:
            raise ContentConfigurationError(f"No loot table for task type: {key.value}")
        return table
