from __future__ import annotations

import math
import random

from focusquest.domain.models.character import InjurySeverity
from focusquest.domain.models.task import ActiveTask, RewardRange, TaskConfig, TaskRewards
from focusquest.domain.models.task_types import RiskLevel, TaskOutcome
from focusquest.domain.services.weighted_pick import roll_int

OUTCOME_MULTIPLIERS = {
    TaskOutcome.SUCCESS: 1.0,
    TaskOutcome.PARTIAL: 0.5,
    TaskOutcome.FAILURE: 0.0,
}


def resolve_task_outcome(success_chance: float, rng: random.Random | None = None, partial_band: float = 20) -> TaskOutcome:
    """Roll [0, 100): under the chance succeeds, inside the band above it is partial."""
    resolved_rng = rng or random.Random()
    roll = resolved_rng.random() * 100
    if roll < success_chance:
        return TaskOutcome.SUCCESS
    if roll < success_chance + partial_band:
        return TaskOutcome.PARTIAL
    return TaskOutcome.FAILURE


def _scaled_roll(reward: RewardRange, multiplier: float, rng: random.Random) -> int:
    low = math.floor(reward.min * multiplier)
    high = math.floor(reward.max * multiplier)
    return roll_int(rng, low, high)


def calculate_rewards(
    config: TaskConfig,
    risk_level: RiskLevel | str,
    outcome: TaskOutcome,
    luck: int,
    rng: random.Random | None = None,
    *,
    luck_scale: float = 0.01,
) -> TaskRewards:
    """Resolve concrete rewards. Each range collapses to a single rolled value (read ``.value``)."""
    resolved_rng = rng or random.Random()
    base = config.rewards
    risk_multiplier = config.risk(risk_level).reward_multiplier
    outcome_multiplier = OUTCOME_MULTIPLIERS[outcome]
    luck_multiplier = 1.0 + int(luck) * luck_scale

    scaled = risk_multiplier * outcome_multiplier * luck_multiplier
    gold = _scaled_roll(base.gold, scaled, resolved_rng)
    # XP ignores luck.
    xp = _scaled_roll(base.xp, risk_multiplier * outcome_multiplier, resolved_rng)
    materials = _scaled_roll(base.materials, scaled, resolved_rng)

    chests = int(base.chests)
    if outcome == TaskOutcome.PARTIAL:
        chests = chests // 2
    elif outcome == TaskOutcome.FAILURE:
        chests = 0

    return TaskRewards(
        gold=RewardRange.resolved(gold),
        xp=RewardRange.resolved(xp),
        materials=RewardRange.resolved(materials),
        chests=chests,
        loot_quality=base.loot_quality * risk_multiplier,
    )


def reduced_injury_chance(base_chance: int, defense: int, floor: int = 5) -> int:
    """Defense shaves half its value off the base chance, never below the floor."""
    return max(floor, int(base_chance) - math.floor(int(defense) / 2))


def injury_chance(config: TaskConfig, defense: int, floor: int = 5) -> int:
    return reduced_injury_chance(config.injury_chance_on_failure, defense, floor)


def should_apply_injury(
    config: TaskConfig,
    outcome: TaskOutcome,
    defense: int,
    rng: random.Random | None = None,
    *,
    floor: int = 5,
) -> bool:
    if outcome != TaskOutcome.FAILURE:
        return False
    resolved_rng = rng or random.Random()
    return resolved_rng.random() * 100 < injury_chance(config, defense, floor)


def determine_injury_severity(risk_level: RiskLevel | str, rng: random.Random | None = None) -> InjurySeverity:
    level = RiskLevel.normalize(risk_level)
    if level == RiskLevel.SAFE:
        return InjurySeverity.MINOR
    resolved_rng = rng or random.Random()
    roll = resolved_rng.random()
    if level == RiskLevel.STANDARD:
        return InjurySeverity.MINOR if roll < 0.7 else InjurySeverity.MODERATE
    if roll < 0.4:
        return InjurySeverity.MINOR
    if roll < 0.8:
        return InjurySeverity.MODERATE
    return InjurySeverity.SEVERE


def generate_task_summary(task: ActiveTask, outcome: TaskOutcome, rewards: TaskRewards, was_injured: bool) -> str:
    label = f"{task.config.name} ({task.config.risk(task.risk_level).display_name})"
    if outcome == TaskOutcome.SUCCESS:
        plural = "" if rewards.chests == 1 else "s"
        return (
            f"{label} completed successfully! Earned {rewards.gold.value} gold, "
            f"{rewards.xp.value} XP, and {rewards.chests} chest{plural}."
        )
    if outcome == TaskOutcome.PARTIAL:
        return (
            f"{label} partially completed. Earned {rewards.gold.value} gold and "
            f"{rewards.xp.value} XP, but some objectives were missed."
        )
    if was_injured:
        return f"{label} failed! You were injured and need medical attention."
    return f"{label} failed! No rewards earned, but you escaped unharmed."
