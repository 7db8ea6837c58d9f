from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from focusquest.application.services.balance_tables import IMPACT_SCORE_LIMIT, IMPACT_WEIGHTS
from focusquest.domain.models.character import CharacterState, EquippedGear
from focusquest.domain.models.event import EventEffects, GameEvent
from focusquest.domain.models.inventory import InventoryState
from focusquest.domain.models.task import ActiveTask

logger = logging.getLogger(__name__)


@dataclass
class EffectStateChanges:
    gold_change: Optional[int] = None
    health_change: Optional[int] = None
    materials_change: Optional[int] = None
    success_chance_change: Optional[float] = None
    durability_change: Optional[int] = None
    chests_gained: Optional[int] = None
    xp_change: Optional[int] = None


@dataclass
class EventEffectResult:
    success: bool = True
    applied_effects: List[str] = field(default_factory=list)
    blocked_effects: List[str] = field(default_factory=list)
    state_changes: EffectStateChanges = field(default_factory=EffectStateChanges)


def _signed(value: float) -> str:
    if float(value).is_integer():
        text = str(int(value))
    else:
        text = f"{value:g}"
    return f"+{text}" if value > 0 else text


def apply_event_effects(
    event: GameEvent,
    character: CharacterState,
    inventory: InventoryState,
    active_task: ActiveTask | None = None,
) -> EventEffectResult:
    """Apply an event's effects to caller-owned state.

    Single writer: the caller serializes this with any other mutation of the
    same character, inventory or task.
    """
    result = EventEffectResult()
    effects = event.effects

    if effects.gold_modifier is not None:
        _apply_gold(effects.gold_modifier, inventory, result)
    if effects.health_modifier is not None:
        _apply_health(effects.health_modifier, character, result)
    if effects.materials_modifier is not None:
        _apply_materials(effects.materials_modifier, inventory, result)
    if effects.success_chance_modifier is not None and active_task is not None:
        _apply_success(effects.success_chance_modifier, active_task, result)
    if effects.durability_damage is not None:
        _apply_durability(effects.durability_damage, character, result)
    if effects.extra_chests is not None:
        _apply_extra_chests(effects.extra_chests, inventory, result)
    if effects.xp_modifier is not None:
        _apply_xp(effects.xp_modifier, character, result)
    if effects.loot_quality_modifier is not None:
        # Read later by loot generation; nothing to mutate here.
        result.applied_effects.append(f"Loot quality {_signed(effects.loot_quality_modifier)}")
    return result


def _apply_gold(modifier: int, inventory: InventoryState, result: EventEffectResult) -> None:
    before = inventory.gold
    inventory.gold = max(0, before + modifier)
    result.state_changes.gold_change = inventory.gold - before
    result.applied_effects.append(f"Gold {_signed(modifier)}")


def _apply_health(modifier: int, character: CharacterState, result: EventEffectResult) -> None:
    before = character.current_hp
    character.current_hp = max(0, min(character.max_hp, before + modifier))
    result.state_changes.health_change = character.current_hp - before
    result.applied_effects.append(f"HP {_signed(modifier)}")
    if character.current_hp == 0 and before > 0:
        result.applied_effects.append("Character knocked out!")


def _apply_materials(modifier: int, inventory: InventoryState, result: EventEffectResult) -> None:
    before = inventory.materials
    inventory.materials = max(0, before + modifier)
    result.state_changes.materials_change = inventory.materials - before
    result.applied_effects.append(f"Materials {_signed(modifier)}")


def _apply_success(modifier: float, task: ActiveTask, result: EventEffectResult) -> None:
    before = task.calculated_success_chance
    task.calculated_success_chance = max(0.0, min(100.0, before + modifier))
    result.state_changes.success_chance_change = task.calculated_success_chance - before
    sign = "+" if modifier > 0 else ""
    result.applied_effects.append(f"Success chance {sign}{modifier:.1f}%")


def _damage_gear(gear: EquippedGear, damage: int) -> int:
    before = gear.current_durability
    gear.durability = max(0, before - damage)
    return before - gear.durability


def _apply_durability(damage: int, character: CharacterState, result: EventEffectResult) -> None:
    total = 0
    equipped = False
    for gear, label in ((character.equipped_weapon, "Weapon"), (character.equipped_armor, "Armor")):
        if gear is None:
            continue
        equipped = True
        dealt = _damage_gear(gear, damage)
        total += dealt
        # Already-broken gear absorbs nothing and is not reported again.
        if dealt > 0 and gear.durability == 0:
            result.applied_effects.append(f"{label} broken!")

    if total > 0:
        result.state_changes.durability_change = -total
        result.applied_effects.append(f"Durability -{total}")
    elif equipped:
        result.blocked_effects.append("Equipped items already broken")
        logger.info("Durability damage hit only broken gear", extra={"damage": damage})
    else:
        result.blocked_effects.append("No equipped items to damage")
        logger.info("Durability damage had nothing to hit", extra={"damage": damage})


def _apply_extra_chests(chests: int, inventory: InventoryState, result: EventEffectResult) -> None:
    inventory.unopened_chests = int(inventory.unopened_chests or 0) + chests
    result.state_changes.chests_gained = chests
    plural = "s" if chests > 1 else ""
    result.applied_effects.append(f"+{chests} chest{plural}")


def _apply_xp(modifier: int, character: CharacterState, result: EventEffectResult) -> None:
    before = character.experience
    character.experience = max(0, before + modifier)
    result.state_changes.xp_change = character.experience - before
    result.applied_effects.append(f"XP {_signed(modifier)}")


def effect_summary(result: EventEffectResult) -> str:
    if not result.applied_effects:
        return "No effects applied"
    return ", ".join(result.applied_effects)


def is_harmful_event(effects: EventEffects) -> bool:
    return any(
        (
            effects.gold_modifier is not None and effects.gold_modifier < 0,
            effects.health_modifier is not None and effects.health_modifier < 0,
            effects.materials_modifier is not None and effects.materials_modifier < 0,
            effects.success_chance_modifier is not None and effects.success_chance_modifier < 0,
            effects.durability_damage is not None and effects.durability_damage > 0,
        )
    )


def is_beneficial_event(effects: EventEffects) -> bool:
    positives = (
        effects.gold_modifier,
        effects.health_modifier,
        effects.materials_modifier,
        effects.success_chance_modifier,
        effects.extra_chests,
        effects.xp_modifier,
        effects.loot_quality_modifier,
    )
    return any(value is not None and value > 0 for value in positives)


def impact_score(effects: EventEffects) -> float:
    """Bounded statistic for session reports; never feeds gameplay."""
    score = 0.0
    for name, value in effects.present().items():
        score += float(value) * IMPACT_WEIGHTS[name]
    return max(-IMPACT_SCORE_LIMIT, min(IMPACT_SCORE_LIMIT, score))
