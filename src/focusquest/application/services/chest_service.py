from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Callable, List, Optional

from focusquest.application.services.balance_tables import (
    CHEST_BASE_GOLD_MAX,
    CHEST_BASE_GOLD_MIN,
    CHEST_LUCKY_LUCK_SCALE,
    CHEST_QUALITY_CONFIGS,
    CHEST_QUALITY_LUCK_SCALE,
    CHEST_VALUE_ESTIMATE_MAX,
    CHEST_VALUE_ESTIMATE_MIN,
)
from focusquest.application.services.event_generator import wall_clock_ms
from focusquest.application.services.loot_generator import LootGenerator
from focusquest.domain.errors import ChestAlreadyOpenedError
from focusquest.domain.events import ChestOpened
from focusquest.domain.models.chest import CHEST_QUALITY_ORDER, Chest, ChestOpenResult, ChestQuality, ChestQualityConfig
from focusquest.domain.models.item import Item, ItemType
from focusquest.domain.models.loot import ItemGenerationContext, LootTable
from focusquest.domain.models.task_types import TaskType
from focusquest.domain.repositories import ItemTemplateRepository, LootTableRepository
from focusquest.domain.services.weighted_pick import weighted_pick

_EQUIPMENT_SLOTS = (ItemType.WEAPON, ItemType.ARMOR, ItemType.ACCESSORY)


@dataclass(frozen=True)
class ChestValueEstimate:
    min: int
    max: int


def chest_quality_config(quality: ChestQuality | str) -> ChestQualityConfig:
    return CHEST_QUALITY_CONFIGS[ChestQuality(quality)]


def chest_quality_name(quality: ChestQuality | str) -> str:
    return chest_quality_config(quality).display_name


def chest_quality_color(quality: ChestQuality | str) -> str:
    return chest_quality_config(quality).color


def estimate_chest_value(chest: Chest) -> ChestValueEstimate:
    multiplier = chest_quality_config(chest.quality).gold_multiplier
    return ChestValueEstimate(
        min=math.floor(CHEST_VALUE_ESTIMATE_MIN * multiplier * chest.loot_quality),
        max=math.floor(CHEST_VALUE_ESTIMATE_MAX * multiplier * chest.loot_quality),
    )


def determine_chest_quality(task_success: bool, luck: float, rng: random.Random | None = None) -> ChestQuality:
    """Failed tasks always give basic chests; successes favour basic but luck lifts every tier."""
    if not task_success:
        return ChestQuality.BASIC
    resolved_rng = rng or random.Random()
    tiers = len(CHEST_QUALITY_ORDER)
    weighted = [
        (quality, 2 ** (tiers - index - 1) * (1 + float(luck) * CHEST_QUALITY_LUCK_SCALE))
        for index, quality in enumerate(CHEST_QUALITY_ORDER)
    ]
    picked = weighted_pick(weighted, lambda row: row[1], resolved_rng)
    return picked[0] if picked is not None else ChestQuality.BASIC


class ChestService:
    """Creates and opens chests against per-task loot tables.

    Opening is single-use: a second open raises ``ChestAlreadyOpenedError``.
    """

    def __init__(
        self,
        item_templates: ItemTemplateRepository,
        loot_tables: LootTableRepository,
        *,
        loot_generator: LootGenerator | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], float] | None = None,
        event_publisher=None,
    ) -> None:
        self._item_templates = item_templates
        self._loot_tables = loot_tables
        self._rng = rng or random.Random()
        self._loot = loot_generator or LootGenerator(self._rng)
        self._clock = clock or wall_clock_ms
        self._event_publisher = event_publisher
        self._logger = logging.getLogger(__name__)

    def create_chest(
        self,
        source_task: TaskType | str,
        loot_quality: float = 1.0,
        quality: ChestQuality = ChestQuality.BASIC,
    ) -> Chest:
        return Chest(
            id=self._loot.new_item_id(),
            quality=ChestQuality(quality),
            source_task=TaskType.normalize(source_task),
            loot_quality=float(loot_quality),
            earned_at=self._clock(),
        )

    def create_chests(
        self,
        source_task: TaskType | str,
        count: int,
        loot_quality: float = 1.0,
        quality: ChestQuality = ChestQuality.BASIC,
    ) -> List[Chest]:
        return [self.create_chest(source_task, loot_quality, quality) for _ in range(max(0, int(count)))]

    def determine_quality(self, task_success: bool, luck: float) -> ChestQuality:
        return determine_chest_quality(task_success, luck, self._rng)

    def open_chest(self, chest: Chest, context: ItemGenerationContext) -> ChestOpenResult:
        if chest.opened:
            raise ChestAlreadyOpenedError(chest.id)

        config = chest_quality_config(chest.quality)
        table = self._loot_tables.get(chest.source_task)

        was_lucky = self._rng.random() * 100 < config.lucky_chance + context.luck * CHEST_LUCKY_LUCK_SCALE
        item_count = self._rng.randint(config.min_items, config.max_items)
        if was_lucky:
            item_count += 1

        items: List[Item] = []
        for _ in range(item_count):
            item = self._chest_item(table, context)
            if item is not None:
                items.append(item)

        base_gold = self._rng.randint(CHEST_BASE_GOLD_MIN, CHEST_BASE_GOLD_MAX)
        gold = math.floor(base_gold * config.gold_multiplier * chest.loot_quality)
        total_value = gold + sum(item.value for item in items)

        chest.opened = True
        result = ChestOpenResult(chest=chest, items=tuple(items), gold=gold, was_lucky=was_lucky, total_value=total_value)
        if callable(self._event_publisher):
            self._event_publisher(
                ChestOpened(
                    chest_id=chest.id,
                    quality=chest.quality.value,
                    item_count=len(items),
                    gold=gold,
                    was_lucky=was_lucky,
                )
            )
        return result

    def open_chests(self, chests: List[Chest], context: ItemGenerationContext) -> List[ChestOpenResult]:
        return [self.open_chest(chest, context) for chest in chests]

    def _roll_slot_type(self, table: LootTable) -> ItemType:
        roll = self._rng.randint(1, 100)
        threshold = 0
        for item_type in _EQUIPMENT_SLOTS:
            threshold += table.weight_for(item_type)
            if roll <= threshold:
                return item_type
        return ItemType.CONSUMABLE

    def _chest_item(self, table: LootTable, context: ItemGenerationContext) -> Optional[Item]:
        item_type = self._roll_slot_type(table)
        if item_type == ItemType.CONSUMABLE:
            return self._chest_consumable(table)
        templates = table.templates_of(item_type)
        if not templates:
            return None
        return self._loot.generate_item(self._rng.choice(templates), context)

    def _chest_consumable(self, table: LootTable) -> Optional[Item]:
        if not table.consumable_pool:
            return None
        consumable_id = self._rng.choice(table.consumable_pool)
        consumable = self._item_templates.get_consumable(consumable_id)
        if consumable is None:
            self._logger.warning(
                "Loot table names an unknown consumable",
                extra={"task_type": table.task_type.value, "consumable_id": consumable_id},
            )
            return None
        return self._loot.clone_consumable(consumable)
