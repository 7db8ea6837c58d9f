from __future__ import annotations

import math
from typing import List

from focusquest.domain.models.character import StatBlock
from focusquest.domain.models.task import SuccessCalculation, TaskConfig, TaskSelectionContext
from focusquest.domain.models.task_types import RiskLevel


def format_percent(value: float) -> str:
    """Render a modifier the way players read it: 3 not 3.0, 2.5 stays 2.5."""
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return f"{number:g}"


def _signed(value: float) -> str:
    return f"+{format_percent(value)}" if value >= 0 else format_percent(value)


def stat_modifier(stat_value: int) -> int:
    return math.floor(int(stat_value) / 2)


def equipment_modifier(bonuses: StatBlock) -> int:
    # Defense only feeds injury avoidance, never the success roll.
    return math.floor((bonuses.power + bonuses.focus + bonuses.luck) * 0.5)


def calculate_success_chance(
    config: TaskConfig,
    risk_level: RiskLevel | str,
    context: TaskSelectionContext,
    event_modifier: float = 0,
    *,
    minimum: int = 5,
    maximum: int = 95,
) -> SuccessCalculation:
    """Combine every success term into a clamped percentage with a readable breakdown.

    Pure: the same inputs always produce the same result.
    """
    risk = config.risk(risk_level)
    breakdown: List[str] = []

    base_chance = int(config.base_success_chance)
    breakdown.append(f"Base: {base_chance}%")

    stat_bonus = stat_modifier(context.character_stats.get(config.primary_stat))
    breakdown.append(f"{config.primary_stat.capitalize()} (+{stat_bonus}%)")

    gear_bonus = equipment_modifier(context.equipment_bonuses)
    if gear_bonus > 0:
        breakdown.append(f"Equipment (+{gear_bonus}%)")

    risk_modifier = int(risk.success_chance_modifier)
    if risk_modifier != 0:
        breakdown.append(f"{risk.display_name} ({_signed(risk_modifier)}%)")

    injury_penalty = int(context.injury_penalty) if context.is_injured else 0
    if injury_penalty > 0:
        breakdown.append(f"Injury (-{injury_penalty}%)")

    bill_penalty = int(context.bill_penalty)
    if bill_penalty > 0:
        breakdown.append(f"Unpaid Bill (-{bill_penalty}%)")

    event_bonus = float(event_modifier or 0)
    if event_bonus != 0:
        breakdown.append(f"Events ({_signed(event_bonus)}%)")

    raw = base_chance + stat_bonus + gear_bonus + risk_modifier - injury_penalty - bill_penalty + event_bonus
    final_chance = max(float(minimum), min(float(maximum), raw))

    return SuccessCalculation(
        base_chance=base_chance,
        stat_modifier=stat_bonus,
        equipment_modifier=gear_bonus,
        risk_modifier=risk_modifier,
        injury_penalty=injury_penalty,
        bill_penalty=bill_penalty,
        event_modifier=event_bonus,
        final_chance=final_chance,
        breakdown=tuple(breakdown),
    )
