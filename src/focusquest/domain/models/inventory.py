from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from focusquest.domain.models.item import Item


@dataclass
class InventoryState:
    gold: int = 0
    materials: int = 0
    unopened_chests: int = 0
    items: List[Item] = field(default_factory=list)

    def stack_count(self, template_id: str) -> int:
        return sum(1 for item in self.items if item.template_id == template_id)

    def stack_counts(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for item in self.items:
            counts[item.stack_key] = counts.get(item.stack_key, 0) + 1
        return counts

    def add_item(self, item: Item) -> bool:
        """Add an item unless its stack (keyed by template id) is already full."""
        if item.max_stack > 1 and self.stack_count(item.template_id) >= item.max_stack:
            return False
        self.items.append(item)
        return True

    def remove_one(self, template_id: str) -> Item | None:
        for index, item in enumerate(self.items):
            if item.template_id == template_id:
                return self.items.pop(index)
        return None
