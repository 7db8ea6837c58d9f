from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

from focusquest.domain.models.item import ItemRarity, ItemTemplate, ItemType
from focusquest.domain.models.task_types import TaskType


@dataclass(frozen=True)
class ItemGenerationContext:
    character_level: int
    luck: int
    loot_quality: float = 1.0
    force_rarity: Optional[ItemRarity] = None


@dataclass(frozen=True)
class LootTable:
    task_type: TaskType
    item_pool: Tuple[ItemTemplate, ...]
    consumable_pool: Tuple[str, ...]
    type_weights: Mapping[ItemType, int] = field(default_factory=dict)

    def weight_for(self, item_type: ItemType) -> int:
        return int(self.type_weights.get(item_type, 0))

    def templates_of(self, item_type: ItemType) -> Tuple[ItemTemplate, ...]:
        return tuple(template for template in self.item_pool if template.type == item_type)
