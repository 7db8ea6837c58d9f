from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from focusquest.domain.models.character import StatBlock
from focusquest.domain.models.item import ConsumableItem, ItemRarity, ItemTemplate, ItemType, StatRanges
from focusquest.domain.repositories import ItemTemplateRepository

_THIRTY_MINUTES_MS = 30 * 60 * 1000

Range = Optional[Tuple[int, int]]


def _weapon(template_id: str, name: str, description: str, weapon_type: str, *, power: Range = None,
            defense: Range = None, focus: Range = None, luck: Range = None) -> ItemTemplate:
    return ItemTemplate(
        id=template_id,
        name=name,
        description=description,
        type=ItemType.WEAPON,
        icon=f"weapon-{template_id}",
        weapon_type=weapon_type,
        stat_ranges=StatRanges(power=power, defense=defense, focus=focus, luck=luck),
    )


def _armor(template_id: str, name: str, description: str, armor_type: str, *, power: Range = None,
           defense: Range = None, focus: Range = None, luck: Range = None) -> ItemTemplate:
    return ItemTemplate(
        id=template_id,
        name=name,
        description=description,
        type=ItemType.ARMOR,
        icon=f"armor-{template_id}",
        armor_type=armor_type,
        stat_ranges=StatRanges(power=power, defense=defense, focus=focus, luck=luck),
    )


def _accessory(template_id: str, name: str, description: str, accessory_type: str, *, power: Range = None,
               defense: Range = None, focus: Range = None, luck: Range = None) -> ItemTemplate:
    return ItemTemplate(
        id=template_id,
        name=name,
        description=description,
        type=ItemType.ACCESSORY,
        icon=f"accessory-{template_id}",
        accessory_type=accessory_type,
        stat_ranges=StatRanges(power=power, defense=defense, focus=focus, luck=luck),
    )


WEAPON_TEMPLATES: Tuple[ItemTemplate, ...] = (
    _weapon("iron-sword", "Iron Sword", "A reliable blade forged from quality iron.", "sword",
            power=(3, 6), defense=(0, 1), focus=(1, 3)),
    _weapon("steel-sword", "Steel Sword", "A well-crafted sword made from hardened steel.", "sword",
            power=(5, 9), defense=(1, 2), focus=(2, 4)),
    _weapon("silver-sword", "Silver Sword", "An elegant blade with silver inlay, excellent against dark foes.", "sword",
            power=(7, 12), defense=(1, 3), focus=(3, 6), luck=(1, 2)),
    _weapon("hand-axe", "Hand Axe", "A small, versatile axe for combat and utility.", "axe",
            power=(5, 8), defense=(0, 1), focus=(0, 2)),
    _weapon("battle-axe", "Battle Axe", "A heavy axe designed for devastating strikes.", "axe",
            power=(8, 13), defense=(0, 2), focus=(0, 1)),
    _weapon("great-axe", "Great Axe", "A massive two-handed axe that cleaves through armor.", "axe",
            power=(12, 18), defense=(1, 3), focus=(0, 1)),
    _weapon("wooden-staff", "Wooden Staff", "A simple staff carved from oak wood.", "staff",
            power=(2, 4), focus=(3, 6), luck=(1, 2)),
    _weapon("mystic-staff", "Mystic Staff", "A staff imbued with arcane energy.", "staff",
            power=(4, 7), focus=(5, 9), luck=(2, 4)),
    _weapon("crystal-staff", "Crystal Staff", "A powerful staff topped with a glowing crystal.", "staff",
            power=(6, 10), focus=(8, 14), luck=(3, 6)),
    _weapon("short-bow", "Short Bow", "A compact bow for quick, accurate shots.", "bow",
            power=(3, 5), focus=(4, 7), luck=(0, 1)),
    _weapon("long-bow", "Long Bow", "A traditional bow with impressive range and power.", "bow",
            power=(5, 9), focus=(6, 10), luck=(1, 2)),
    _weapon("composite-bow", "Composite Bow", "A masterfully crafted bow with superior performance.", "bow",
            power=(8, 13), focus=(9, 15), luck=(2, 4)),
    _weapon("iron-dagger", "Iron Dagger", "A small blade perfect for quick strikes.", "dagger",
            power=(2, 4), focus=(2, 4), luck=(2, 5)),
    _weapon("stiletto", "Stiletto", "A thin, deadly blade designed for precision.", "dagger",
            power=(3, 6), focus=(4, 7), luck=(4, 8)),
    _weapon("shadow-blade", "Shadow Blade", "A mysterious dagger that seems to fade in and out of sight.", "dagger",
            power=(5, 9), focus=(6, 11), luck=(6, 12)),
    _weapon("wooden-club", "Wooden Club", "A simple but effective bludgeoning weapon.", "mace",
            power=(4, 6), defense=(1, 2), focus=(0, 1)),
    _weapon("iron-mace", "Iron Mace", "A heavy flanged mace for crushing armor.", "mace",
            power=(6, 10), defense=(2, 4), focus=(0, 2)),
    _weapon("holy-mace", "Holy Mace", "A blessed mace that radiates divine energy.", "mace",
            power=(9, 14), defense=(3, 6), focus=(2, 4), luck=(1, 3)),
    _weapon("spear", "Spear", "A simple wooden spear with an iron tip.", "spear",
            power=(4, 7), defense=(1, 3), focus=(2, 4)),
    _weapon("pike", "Pike", "A long spear designed to keep enemies at bay.", "spear",
            power=(6, 10), defense=(2, 5), focus=(3, 6)),
    _weapon("halberd", "Halberd", "A versatile polearm with axe and spear capabilities.", "spear",
            power=(9, 15), defense=(3, 7), focus=(4, 8)),
    _weapon("crossbow", "Crossbow", "A mechanical bow with deadly precision.", "bow",
            power=(6, 11), focus=(7, 12), luck=(2, 5)),
    _weapon("heavy-crossbow", "Heavy Crossbow", "A powerful crossbow that pierces through armor.", "bow",
            power=(10, 16), focus=(9, 15), luck=(3, 7)),
    _weapon("warhammer", "Warhammer", "A devastating hammer designed to crush armor and bone.", "mace",
            power=(10, 16), defense=(2, 5), focus=(0, 1)),
    _weapon("thunder-hammer", "Thunder Hammer", "A legendary hammer that crackles with lightning.", "mace",
            power=(14, 22), defense=(3, 8), focus=(1, 3), luck=(2, 5)),
    _weapon("scimitar", "Scimitar", "A curved blade favored by desert warriors.", "sword",
            power=(6, 10), defense=(0, 2), focus=(4, 8), luck=(3, 6)),
    _weapon("katana", "Katana", "A masterfully forged blade with exceptional sharpness.", "sword",
            power=(8, 14), defense=(1, 3), focus=(6, 12), luck=(2, 5)),
    _weapon("glaive", "Glaive", "A single-edged blade mounted on a long pole.", "spear",
            power=(7, 12), defense=(2, 6), focus=(3, 7)),
    _weapon("trident", "Trident", "A three-pronged spear with excellent balance.", "spear",
            power=(8, 13), defense=(3, 7), focus=(4, 9)),
)

ARMOR_TEMPLATES: Tuple[ItemTemplate, ...] = (
    _armor("leather-armor", "Leather Armor", "Supple leather protection that allows freedom of movement.", "light",
           defense=(2, 4), focus=(2, 4), luck=(1, 2)),
    _armor("studded-leather", "Studded Leather", "Leather armor reinforced with metal studs.", "light",
           defense=(3, 6), power=(0, 1), focus=(3, 6), luck=(2, 4)),
    _armor("shadow-leather", "Shadow Leather", "Dark leather armor favored by rogues and scouts.", "light",
           defense=(5, 9), power=(1, 3), focus=(5, 9), luck=(4, 7)),
    _armor("chainmail", "Chainmail", "Interlocking metal rings provide solid protection.", "medium",
           defense=(4, 7), power=(1, 3), focus=(1, 3)),
    _armor("scale-mail", "Scale Mail", "Overlapping metal scales offer flexible defense.", "medium",
           defense=(6, 10), power=(2, 4), focus=(2, 4)),
    _armor("brigandine", "Brigandine", "Armor plates riveted to leather or cloth backing.", "medium",
           defense=(8, 13), power=(3, 6), focus=(3, 6), luck=(1, 2)),
    _armor("iron-plate", "Iron Plate", "Heavy iron plates provide excellent protection.", "heavy",
           defense=(7, 11), power=(2, 5), focus=(0, 1)),
    _armor("steel-plate", "Steel Plate", "Full plate armor crafted from hardened steel.", "heavy",
           defense=(10, 16), power=(4, 8), focus=(0, 2)),
    _armor("dragon-scale-plate", "Dragon Scale Plate", "Legendary armor forged from dragon scales.", "heavy",
           defense=(14, 22), power=(6, 12), focus=(2, 4), luck=(2, 4)),
    _armor("apprentice-robe", "Apprentice Robe", "Simple robes worn by novice spellcasters.", "robe",
           defense=(1, 2), focus=(4, 7), luck=(2, 4)),
    _armor("mage-robe", "Mage Robe", "Enchanted robes that enhance magical abilities.", "robe",
           defense=(2, 4), power=(1, 3), focus=(6, 11), luck=(3, 6)),
    _armor("archmage-robe", "Archmage Robe", "Masterwork robes woven with powerful enchantments.", "robe",
           defense=(3, 6), power=(2, 5), focus=(10, 18), luck=(5, 10)),
    _armor("reinforced-leather", "Reinforced Leather", "Master-crafted leather with exceptional quality.", "light",
           defense=(6, 11), power=(2, 4), focus=(6, 11), luck=(5, 9)),
    _armor("enchanted-chainmail", "Enchanted Chainmail", "Chainmail infused with protective magic.", "medium",
           defense=(9, 15), power=(3, 6), focus=(4, 7), luck=(2, 4)),
    _armor("blessed-plate", "Blessed Plate", "Holy armor blessed by divine powers.", "heavy",
           defense=(12, 19), power=(5, 10), focus=(2, 5), luck=(3, 6)),
    _armor("void-robe", "Void Robe", "Dark robes that channel mysterious void energies.", "robe",
           defense=(4, 8), power=(3, 7), focus=(12, 20), luck=(6, 12)),
    _armor("cloth-tunic", "Cloth Tunic", "Simple cloth offering minimal protection.", "light",
           defense=(1, 2), focus=(1, 2)),
    _armor("padded-armor", "Padded Armor", "Quilted fabric provides basic defense.", "light",
           defense=(2, 3), focus=(1, 3), luck=(0, 1)),
    _armor("hide-armor", "Hide Armor", "Crude armor made from animal hides.", "light",
           defense=(2, 4), power=(1, 2), focus=(0, 1)),
    _armor("battle-harness", "Battle Harness", "Tactical armor designed for sustained combat.", "medium",
           defense=(7, 12), power=(4, 8), focus=(2, 5)),
    _armor("scouts-garb", "Scout's Garb", "Light armor optimized for reconnaissance.", "light",
           defense=(4, 7), focus=(4, 8), luck=(3, 6)),
)

ACCESSORY_TEMPLATES: Tuple[ItemTemplate, ...] = (
    _accessory("copper-ring", "Copper Ring", "A plain band that steadies the hand.", "ring",
               focus=(1, 3), luck=(0, 1)),
    _accessory("silver-ring", "Silver Ring", "A polished ring etched with faint runes.", "ring",
               power=(1, 2), focus=(2, 4), luck=(1, 3)),
    _accessory("jade-amulet", "Jade Amulet", "A carved amulet said to ward off misfortune.", "amulet",
               defense=(1, 3), luck=(2, 4)),
    _accessory("hunters-charm", "Hunter's Charm", "A tooth on a cord, worn by trackers for luck.", "charm",
               power=(0, 2), luck=(3, 6)),
    _accessory("warlords-bracer", "Warlord's Bracer", "A heavy bracer stamped with a war banner.", "bracer",
               power=(2, 5), defense=(1, 3)),
)


def _consumable(template_id: str, name: str, description: str, consumable_type: str, rarity: ItemRarity,
                value: int, *, max_stack: int = 99, heal: int = 0, cures_injury: bool = False,
                buff: StatBlock | None = None, buff_duration_ms: int = 0) -> ConsumableItem:
    return ConsumableItem(
        id=template_id,
        template_id=template_id,
        name=name,
        description=description,
        rarity=rarity,
        value=value,
        icon=f"consumable-{template_id}",
        max_stack=max_stack,
        consumable_type=consumable_type,
        heal_amount=heal,
        cures_injury=cures_injury,
        buff_stats=buff,
        buff_duration_ms=buff_duration_ms if buff is not None else 0,
    )


CONSUMABLES: Tuple[ConsumableItem, ...] = (
    _consumable("health-potion-minor", "Minor Health Potion", "Restores a small amount of health.",
                "potion", ItemRarity.COMMON, 10, heal=25),
    _consumable("health-potion", "Health Potion", "Restores a moderate amount of health.",
                "potion", ItemRarity.UNCOMMON, 25, heal=50),
    _consumable("health-potion-major", "Major Health Potion", "Restores a large amount of health.",
                "potion", ItemRarity.RARE, 50, heal=100),
    _consumable("healing-salve", "Healing Salve", "Removes minor injuries and restores health.",
                "potion", ItemRarity.UNCOMMON, 40, max_stack=50, heal=30, cures_injury=True),
    _consumable("elixir-of-strength", "Elixir of Strength", "Temporarily increases Power for one task.",
                "elixir", ItemRarity.UNCOMMON, 35, max_stack=50, buff=StatBlock(power=5),
                buff_duration_ms=_THIRTY_MINUTES_MS),
    _consumable("elixir-of-fortitude", "Elixir of Fortitude", "Temporarily increases Defense for one task.",
                "elixir", ItemRarity.UNCOMMON, 35, max_stack=50, buff=StatBlock(defense=5),
                buff_duration_ms=_THIRTY_MINUTES_MS),
    _consumable("elixir-of-focus", "Elixir of Focus", "Temporarily increases Focus for one task.",
                "elixir", ItemRarity.UNCOMMON, 35, max_stack=50, buff=StatBlock(focus=5),
                buff_duration_ms=_THIRTY_MINUTES_MS),
    _consumable("elixir-of-fortune", "Elixir of Fortune", "Temporarily increases Luck for one task.",
                "elixir", ItemRarity.UNCOMMON, 35, max_stack=50, buff=StatBlock(luck=5),
                buff_duration_ms=_THIRTY_MINUTES_MS),
    _consumable("grand-elixir", "Grand Elixir", "Significantly boosts all stats for one task.",
                "elixir", ItemRarity.EPIC, 100, max_stack=20, buff=StatBlock(8, 8, 8, 8),
                buff_duration_ms=_THIRTY_MINUTES_MS),
    _consumable("bread", "Bread", "Simple bread that restores a small amount of health.",
                "food", ItemRarity.COMMON, 5, heal=15),
    _consumable("cooked-meat", "Cooked Meat", "Hearty meal that restores health and boosts Power.",
                "food", ItemRarity.COMMON, 15, heal=20, buff=StatBlock(power=2), buff_duration_ms=15 * 60 * 1000),
    _consumable("fruit-basket", "Fruit Basket", "Fresh fruit that restores health and boosts Focus.",
                "food", ItemRarity.COMMON, 12, heal=20, buff=StatBlock(focus=2), buff_duration_ms=15 * 60 * 1000),
    _consumable("travelers-rations", "Traveler's Rations", "Preserved food for long journeys. Modest health and stat boost.",
                "food", ItemRarity.UNCOMMON, 20, heal=30, buff=StatBlock(power=3, defense=3),
                buff_duration_ms=_THIRTY_MINUTES_MS),
    _consumable("feast", "Feast", "A magnificent meal that provides substantial benefits.",
                "food", ItemRarity.RARE, 75, max_stack=20, heal=75, buff=StatBlock(5, 5, 5, 5),
                buff_duration_ms=60 * 60 * 1000),
    _consumable("scroll-of-recall", "Scroll of Recall", "Returns you safely from any dangerous situation.",
                "scroll", ItemRarity.RARE, 50, max_stack=10),
    _consumable("scroll-of-fortune", "Scroll of Fortune", "Greatly increases luck for the next task.",
                "scroll", ItemRarity.RARE, 60, max_stack=10, buff=StatBlock(luck=15),
                buff_duration_ms=_THIRTY_MINUTES_MS),
    _consumable("scroll-of-protection", "Scroll of Protection", "Provides a powerful defensive barrier for one task.",
                "scroll", ItemRarity.RARE, 60, max_stack=10, buff=StatBlock(defense=15),
                buff_duration_ms=_THIRTY_MINUTES_MS),
    _consumable("scroll-of-clarity", "Scroll of Clarity", "Sharpens the mind, greatly increasing Focus.",
                "scroll", ItemRarity.RARE, 60, max_stack=10, buff=StatBlock(focus=15),
                buff_duration_ms=_THIRTY_MINUTES_MS),
)


def weapons_of(weapon_type: str) -> List[ItemTemplate]:
    return [template for template in WEAPON_TEMPLATES if template.weapon_type == weapon_type]


def armor_of(armor_type: str) -> List[ItemTemplate]:
    return [template for template in ARMOR_TEMPLATES if template.armor_type == armor_type]


def accessories_of(accessory_type: str) -> List[ItemTemplate]:
    return [template for template in ACCESSORY_TEMPLATES if template.accessory_type == accessory_type]


class InMemoryItemTemplateRepository(ItemTemplateRepository):
    def __init__(
        self,
        templates: Tuple[ItemTemplate, ...] | None = None,
        consumables: Tuple[ConsumableItem, ...] | None = None,
    ) -> None:
        rows = templates if templates is not None else WEAPON_TEMPLATES + ARMOR_TEMPLATES + ACCESSORY_TEMPLATES
        self._templates: Dict[str, ItemTemplate] = {template.id: template for template in rows}
        self._consumables: Dict[str, ConsumableItem] = {
            consumable.template_id: consumable for consumable in (consumables if consumables is not None else CONSUMABLES)
        }

    def get(self, template_id: str) -> Optional[ItemTemplate]:
        return self._templates.get(str(template_id or "").strip().lower())

    def list_by_type(self, item_type: ItemType) -> List[ItemTemplate]:
        wanted = ItemType.normalize(item_type)
        return [template for template in self._templates.values() if template.type == wanted]

    def get_consumable(self, consumable_id: str) -> Optional[ConsumableItem]:
        return self._consumables.get(str(consumable_id or "").strip().lower())

    def list_consumables(self) -> List[ConsumableItem]:
        return list(self._consumables.values())
