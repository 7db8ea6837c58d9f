from __future__ import annotations

import dataclasses
import math
import random
import uuid
from typing import Dict, List, Sequence

from focusquest.application.services.balance_tables import (
    ACCESSORY_AURA_TEXT,
    CONSUMABLE_MAX_STACK,
    LOOT_NAME_PREFIXES,
    MATERIAL_MAX_STACK,
)
from focusquest.domain.errors import ContentConfigurationError
from focusquest.domain.models.character import StatBlock
from focusquest.domain.models.item import (
    AccessoryItem,
    ArmorItem,
    ConsumableItem,
    Item,
    ItemRarity,
    ItemTemplate,
    ItemType,
    MaterialItem,
    WeaponItem,
)
from focusquest.domain.models.loot import ItemGenerationContext
from focusquest.domain.services.rarity import apply_rarity_multiplier, apply_value_multiplier, select_rarity
from focusquest.domain.services.weighted_pick import roll_int


class LootGenerator:
    """Procedural item generation from templates.

    Every draw (rarity, name prefix, value, stats, instance id) comes from the
    injected generator, so a seeded generator replays the same loot.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def new_item_id(self) -> str:
        return str(uuid.UUID(int=self._rng.getrandbits(128), version=4))

    def generate_item(self, template: ItemTemplate, context: ItemGenerationContext) -> Item:
        rarity = context.force_rarity or select_rarity(context.luck * context.loot_quality, self._rng)
        rarity = ItemRarity.normalize(rarity)
        base = {
            "id": self.new_item_id(),
            "template_id": template.id,
            "name": self._item_name(template, rarity),
            "description": template.description,
            "rarity": rarity,
            "value": apply_value_multiplier(10 + int(context.character_level) * self._rng.randint(1, 5), rarity),
            "icon": template.icon,
        }

        if template.type == ItemType.WEAPON:
            return self._weapon(base, template, rarity, context)
        if template.type == ItemType.ARMOR:
            return self._armor(base, template, rarity, context)
        if template.type == ItemType.ACCESSORY:
            return self._accessory(base, template, rarity)
        if template.type == ItemType.CONSUMABLE:
            if not template.consumable_type:
                raise ContentConfigurationError(f"Consumable template {template.id} has no consumable_type")
            return ConsumableItem(**base, max_stack=CONSUMABLE_MAX_STACK, consumable_type=template.consumable_type)
        if template.type == ItemType.MATERIAL:
            if not template.material_type:
                raise ContentConfigurationError(f"Material template {template.id} has no material_type")
            return MaterialItem(**base, max_stack=MATERIAL_MAX_STACK, material_type=template.material_type, tier=1)
        raise ContentConfigurationError(f"Unknown item type for template {template.id}: {template.type}")

    def _item_name(self, template: ItemTemplate, rarity: ItemRarity) -> str:
        prefixes = LOOT_NAME_PREFIXES.get(rarity.value)
        if not prefixes:
            return template.name
        return f"{self._rng.choice(prefixes)} {template.name}"

    def _stat_bonuses(self, template: ItemTemplate, rarity: ItemRarity) -> Dict[str, int]:
        stats: Dict[str, int] = {}
        for key, (low, high) in template.stat_ranges.present().items():
            stats[key] = apply_rarity_multiplier(roll_int(self._rng, low, high), rarity)
        return stats

    def _weapon(self, base: dict, template: ItemTemplate, rarity: ItemRarity, context: ItemGenerationContext) -> WeaponItem:
        if not template.weapon_type:
            raise ContentConfigurationError(f"Weapon template {template.id} has no weapon_type")
        stats = self._stat_bonuses(template, rarity)
        base_damage = stats.get("power", 5) + int(context.character_level)
        variance = max(3, math.floor(base_damage * 0.3))
        return WeaponItem(
            **base,
            weapon_type=template.weapon_type,
            stat_bonuses=StatBlock(**stats),
            damage_min=max(1, base_damage - variance),
            damage_max=base_damage + variance,
        )

    def _armor(self, base: dict, template: ItemTemplate, rarity: ItemRarity, context: ItemGenerationContext) -> ArmorItem:
        if not template.armor_type:
            raise ContentConfigurationError(f"Armor template {template.id} has no armor_type")
        stats = self._stat_bonuses(template, rarity)
        base_armor = stats.get("defense", 3) + math.floor(int(context.character_level) / 2)
        return ArmorItem(
            **base,
            armor_type=template.armor_type,
            stat_bonuses=StatBlock(**stats),
            armor_rating=apply_rarity_multiplier(base_armor, rarity),
        )

    def _accessory(self, base: dict, template: ItemTemplate, rarity: ItemRarity) -> AccessoryItem:
        if not template.accessory_type:
            raise ContentConfigurationError(f"Accessory template {template.id} has no accessory_type")
        stats = self._stat_bonuses(template, rarity)
        special = ACCESSORY_AURA_TEXT if rarity in (ItemRarity.EPIC, ItemRarity.LEGENDARY) else None
        return AccessoryItem(
            **base,
            accessory_type=template.accessory_type,
            stat_bonuses=StatBlock(**stats),
            special_effect=special,
        )

    def clone_consumable(self, consumable: ConsumableItem) -> ConsumableItem:
        """Fresh instance id, same template id, so it stacks with its siblings."""
        return dataclasses.replace(consumable, id=self.new_item_id())

    def generate_items(self, templates: Sequence[ItemTemplate], context: ItemGenerationContext, count: int = 1) -> List[Item]:
        if not templates:
            return []
        return [self.generate_item(self._rng.choice(templates), context) for _ in range(max(0, int(count)))]

    def generate_gold(self, minimum: int, maximum: int, luck_modifier: float = 0) -> int:
        base_gold = roll_int(self._rng, minimum, maximum)
        return base_gold + math.floor(base_gold * luck_modifier * 0.1)

    def generate_materials(self, minimum: int, maximum: int) -> int:
        return roll_int(self._rng, minimum, maximum)

    def generate_xp(self, minimum: int, maximum: int) -> int:
        return roll_int(self._rng, minimum, maximum)
