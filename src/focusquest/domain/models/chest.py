from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from focusquest.domain.models.item import Item
from focusquest.domain.models.task_types import TaskType


class ChestQuality(str, Enum):
    BASIC = "basic"
    QUALITY = "quality"
    SUPERIOR = "superior"
    MASTERWORK = "masterwork"


CHEST_QUALITY_ORDER: Tuple[ChestQuality, ...] = (
    ChestQuality.BASIC,
    ChestQuality.QUALITY,
    ChestQuality.SUPERIOR,
    ChestQuality.MASTERWORK,
)


@dataclass(frozen=True)
class ChestQualityConfig:
    quality: ChestQuality
    display_name: str
    color: str
    min_items: int
    max_items: int
    gold_multiplier: float
    lucky_chance: float


@dataclass
class Chest:
    id: str
    quality: ChestQuality
    source_task: TaskType
    loot_quality: float
    earned_at: float
    opened: bool = False


@dataclass(frozen=True)
class ChestOpenResult:
    chest: Chest
    items: Tuple[Item, ...]
    gold: int
    was_lucky: bool
    total_value: int
