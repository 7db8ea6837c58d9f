from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, List, Optional

from focusquest.application.services.balance_tables import OPENED_CHEST_KEEP_COUNT
from focusquest.application.services.chest_service import ChestService
from focusquest.domain.models.chest import CHEST_QUALITY_ORDER, Chest, ChestOpenResult, ChestQuality
from focusquest.domain.models.loot import ItemGenerationContext
from focusquest.domain.models.task_types import TaskType


@dataclass
class ChestQualityStats:
    earned: int = 0
    opened: int = 0
    total_value: int = 0


class ChestLedger:
    """The player's chest collection with running totals per quality."""

    def __init__(self, chest_service: ChestService) -> None:
        self._service = chest_service
        self.chests: List[Chest] = []
        self.total_earned = 0
        self.total_opened = 0
        self.total_value_obtained = 0
        self.total_gold_obtained = 0
        self.total_items_obtained = 0
        self.last_open_result: Optional[ChestOpenResult] = None
        self.stats_by_quality: Dict[ChestQuality, ChestQualityStats] = {
            quality: ChestQualityStats() for quality in CHEST_QUALITY_ORDER
        }

    def award(self, source_task: TaskType | str, loot_quality: float = 1.0, quality: ChestQuality = ChestQuality.BASIC) -> Chest:
        chest = self._service.create_chest(source_task, loot_quality, quality)
        self.chests.append(chest)
        self.total_earned += 1
        self.stats_by_quality[chest.quality].earned += 1
        return chest

    def award_many(
        self,
        source_task: TaskType | str,
        count: int,
        loot_quality: float = 1.0,
        quality: ChestQuality = ChestQuality.BASIC,
    ) -> List[Chest]:
        return [self.award(source_task, loot_quality, quality) for _ in range(max(0, int(count)))]

    def determine_quality(self, task_success: bool, luck: float) -> ChestQuality:
        return self._service.determine_quality(task_success, luck)

    def find(self, chest_id: str) -> Optional[Chest]:
        return next((chest for chest in self.chests if chest.id == chest_id), None)

    def open_by_id(self, chest_id: str, context: ItemGenerationContext) -> Optional[ChestOpenResult]:
        """Open a held chest. Unknown or already-opened ids return None."""
        chest = self.find(chest_id)
        if chest is None or chest.opened:
            return None
        result = self._service.open_chest(chest, context)
        self.total_opened += 1
        self.total_value_obtained += result.total_value
        self.total_gold_obtained += result.gold
        self.total_items_obtained += len(result.items)
        self.last_open_result = result
        stats = self.stats_by_quality[chest.quality]
        stats.opened += 1
        stats.total_value += result.total_value
        return result

    def unopened(self) -> List[Chest]:
        return [chest for chest in self.chests if not chest.opened]

    def unopened_count(self) -> int:
        return len(self.unopened())

    def by_task(self, task_type: TaskType | str) -> List[Chest]:
        wanted = TaskType.normalize(task_type)
        return [chest for chest in self.chests if chest.source_task == wanted]

    def by_quality(self, quality: ChestQuality | str) -> List[Chest]:
        wanted = ChestQuality(quality)
        return [chest for chest in self.chests if chest.quality == wanted]

    def clear_last_open_result(self) -> None:
        self.last_open_result = None

    def prune_old_chests(self, keep_count: int = OPENED_CHEST_KEEP_COUNT) -> int:
        """Drop the oldest opened chests beyond ``keep_count``. Unopened chests always stay."""
        opened = sorted((chest for chest in self.chests if chest.opened), key=lambda chest: chest.earned_at, reverse=True)
        if len(opened) <= keep_count:
            return 0
        keep_ids = {chest.id for chest in opened[:keep_count]}
        before = len(self.chests)
        self.chests = [chest for chest in self.chests if not chest.opened or chest.id in keep_ids]
        return before - len(self.chests)

    def average_value(self, quality: ChestQuality | str) -> int:
        stats = self.stats_by_quality[ChestQuality(quality)]
        return math.floor(stats.total_value / stats.opened) if stats.opened > 0 else 0
