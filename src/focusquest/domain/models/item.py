from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Dict, Optional, Tuple

from focusquest.domain.errors import ContentConfigurationError
from focusquest.domain.models.character import StatBlock


class ItemRarity(str, Enum):
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"

    @classmethod
    def normalize(cls, value: "ItemRarity | str") -> "ItemRarity":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError as exc:
            raise ContentConfigurationError(f"Unknown rarity: {value}") from exc


RARITY_ORDER: Tuple[ItemRarity, ...] = (
    ItemRarity.COMMON,
    ItemRarity.UNCOMMON,
    ItemRarity.RARE,
    ItemRarity.EPIC,
    ItemRarity.LEGENDARY,
)


class ItemType(str, Enum):
    WEAPON = "weapon"
    ARMOR = "armor"
    ACCESSORY = "accessory"
    CONSUMABLE = "consumable"
    MATERIAL = "material"

    @classmethod
    def normalize(cls, value: "ItemType | str") -> "ItemType":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError as exc:
            raise ContentConfigurationError(f"Unknown item type: {value}") from exc


@dataclass(frozen=True)
class RarityConfig:
    rarity: ItemRarity
    name: str
    color: str
    stat_multiplier: float
    value_multiplier: float
    drop_weight: float


@dataclass(frozen=True)
class StatRanges:
    power: Optional[Tuple[int, int]] = None
    defense: Optional[Tuple[int, int]] = None
    focus: Optional[Tuple[int, int]] = None
    luck: Optional[Tuple[int, int]] = None

    def present(self) -> Dict[str, Tuple[int, int]]:
        rows = {"power": self.power, "defense": self.defense, "focus": self.focus, "luck": self.luck}
        return {key: value for key, value in rows.items() if value is not None}


@dataclass(frozen=True)
class ItemTemplate:
    id: str
    name: str
    description: str
    type: ItemType
    icon: str = ""
    weapon_type: Optional[str] = None
    armor_type: Optional[str] = None
    accessory_type: Optional[str] = None
    consumable_type: Optional[str] = None
    material_type: Optional[str] = None
    stat_ranges: StatRanges = field(default_factory=StatRanges)


@dataclass
class Item:
    """A concrete item instance.

    ``id`` is unique per generated instance. ``template_id`` names the
    definition it came from and is the identity used for stacking.
    """

    item_type: ClassVar[ItemType]

    id: str
    template_id: str
    name: str
    description: str
    rarity: ItemRarity
    value: int
    icon: str = ""
    sellable: bool = True
    max_stack: int = 1

    @property
    def type(self) -> ItemType:
        return self.item_type

    @property
    def stack_key(self) -> str:
        return self.template_id

    def stacks_with(self, other: "Item") -> bool:
        return self.max_stack > 1 and self.stack_key == other.stack_key


@dataclass
class WeaponItem(Item):
    item_type: ClassVar[ItemType] = ItemType.WEAPON

    weapon_type: str = ""
    stat_bonuses: StatBlock = field(default_factory=StatBlock)
    damage_min: int = 1
    damage_max: int = 1


@dataclass
class ArmorItem(Item):
    item_type: ClassVar[ItemType] = ItemType.ARMOR

    armor_type: str = ""
    stat_bonuses: StatBlock = field(default_factory=StatBlock)
    armor_rating: int = 0


@dataclass
class AccessoryItem(Item):
    item_type: ClassVar[ItemType] = ItemType.ACCESSORY

    accessory_type: str = ""
    stat_bonuses: StatBlock = field(default_factory=StatBlock)
    special_effect: Optional[str] = None


@dataclass
class ConsumableItem(Item):
    item_type: ClassVar[ItemType] = ItemType.CONSUMABLE

    consumable_type: str = ""
    heal_amount: int = 0
    cures_injury: bool = False
    buff_stats: Optional[StatBlock] = None
    buff_duration_ms: int = 0


@dataclass
class MaterialItem(Item):
    item_type: ClassVar[ItemType] = ItemType.MATERIAL

    material_type: str = ""
    tier: int = 1
