from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from focusquest.domain.models.item import RARITY_ORDER, ItemRarity, RarityConfig
from focusquest.domain.services.weighted_pick import round_half_up, weighted_pick


RARITY_CONFIGS: Dict[ItemRarity, RarityConfig] = {
    ItemRarity.COMMON: RarityConfig(ItemRarity.COMMON, "Common", "#9CA3AF", 1.0, 1.0, 100),
    ItemRarity.UNCOMMON: RarityConfig(ItemRarity.UNCOMMON, "Uncommon", "#10B981", 1.3, 1.5, 40),
    ItemRarity.RARE: RarityConfig(ItemRarity.RARE, "Rare", "#3B82F6", 1.6, 2.5, 15),
    ItemRarity.EPIC: RarityConfig(ItemRarity.EPIC, "Epic", "#A855F7", 2.0, 4.0, 5),
    ItemRarity.LEGENDARY: RarityConfig(ItemRarity.LEGENDARY, "Legendary", "#F59E0B", 2.5, 7.0, 1),
}


def rarity_config(rarity: ItemRarity | str) -> RarityConfig:
    return RARITY_CONFIGS[ItemRarity.normalize(rarity)]


def rarity_weights(luck: float = 0) -> List[Tuple[ItemRarity, float]]:
    """Luck compounds per tier, so it helps legendary far more than uncommon."""
    boost = 1 + float(luck) * 0.02
    return [(rarity, RARITY_CONFIGS[rarity].drop_weight * boost**tier) for tier, rarity in enumerate(RARITY_ORDER)]


def select_rarity(luck: float = 0, rng: random.Random | None = None) -> ItemRarity:
    resolved_rng = rng or random.Random()
    picked = weighted_pick(rarity_weights(luck), lambda row: row[1], resolved_rng)
    return picked[0] if picked is not None else ItemRarity.COMMON


def stat_multiplier(rarity: ItemRarity | str) -> float:
    return rarity_config(rarity).stat_multiplier


def value_multiplier(rarity: ItemRarity | str) -> float:
    return rarity_config(rarity).value_multiplier


def apply_rarity_multiplier(base_stat: float, rarity: ItemRarity | str) -> int:
    return round_half_up(base_stat * stat_multiplier(rarity))


def apply_value_multiplier(base_value: float, rarity: ItemRarity | str) -> int:
    return round_half_up(base_value * value_multiplier(rarity))


def rarity_color(rarity: ItemRarity | str) -> str:
    return rarity_config(rarity).color


def rarity_name(rarity: ItemRarity | str) -> str:
    return rarity_config(rarity).name


def rarity_tier(rarity: ItemRarity | str) -> int:
    return RARITY_ORDER.index(ItemRarity.normalize(rarity))


def compare_rarity(left: ItemRarity | str, right: ItemRarity | str) -> int:
    return rarity_tier(left) - rarity_tier(right)


def is_better_rarity(left: ItemRarity | str, right: ItemRarity | str) -> bool:
    return compare_rarity(left, right) > 0


@dataclass
class RarityDropStats:
    total_drops: int = 0
    by_rarity: Dict[ItemRarity, int] = field(default_factory=lambda: {rarity: 0 for rarity in RARITY_ORDER})

    def record(self, rarity: ItemRarity | str) -> None:
        key = ItemRarity.normalize(rarity)
        self.total_drops += 1
        self.by_rarity[key] = self.by_rarity.get(key, 0) + 1

    def drop_rates(self) -> Dict[ItemRarity, float]:
        if self.total_drops == 0:
            return {rarity: 0.0 for rarity in RARITY_ORDER}
        return {rarity: (self.by_rarity.get(rarity, 0) / self.total_drops) * 100 for rarity in RARITY_ORDER}
