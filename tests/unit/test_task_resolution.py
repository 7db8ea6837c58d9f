import random
import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from focusquest.domain.models.character import InjurySeverity
from focusquest.domain.models.task import ActiveTask, RewardRange, TaskRewards
from focusquest.domain.models.task_types import RiskLevel, TaskOutcome, TaskType
from focusquest.domain.services.task_resolution import (
    calculate_rewards,
    determine_injury_severity,
    generate_task_summary,
    injury_chance,
    resolve_task_outcome,
    should_apply_injury,
)
from focusquest.infrastructure.inmemory.inmemory_task_config_repo import DEFAULT_TASK_CONFIGS, EXPEDITION_CONFIG, RAID_CONFIG


class _ScriptedRng:
    def __init__(self, *values: float) -> None:
        self._values = list(values)

    def random(self) -> float:
        return self._values.pop(0)

    def randint(self, low: int, high: int) -> int:
        return low


class TaskOutcomeTests(unittest.TestCase):
    def test_roll_under_chance_succeeds(self) -> None:
        self.assertEqual(TaskOutcome.SUCCESS, resolve_task_outcome(60, _ScriptedRng(0.59)))

    def test_roll_inside_band_is_partial(self) -> None:
        self.assertEqual(TaskOutcome.PARTIAL, resolve_task_outcome(60, _ScriptedRng(0.61)))
        self.assertEqual(TaskOutcome.PARTIAL, resolve_task_outcome(60, _ScriptedRng(0.79)))

    def test_roll_above_band_fails(self) -> None:
        self.assertEqual(TaskOutcome.FAILURE, resolve_task_outcome(60, _ScriptedRng(0.81)))

    def test_band_width_is_a_parameter(self) -> None:
        self.assertEqual(TaskOutcome.FAILURE, resolve_task_outcome(60, _ScriptedRng(0.65), partial_band=0))

    def test_outcome_distribution_tracks_chance(self) -> None:
        rng = random.Random(1234)
        outcomes = [resolve_task_outcome(50, rng) for _ in range(10_000)]
        successes = outcomes.count(TaskOutcome.SUCCESS) / len(outcomes)
        partials = outcomes.count(TaskOutcome.PARTIAL) / len(outcomes)
        self.assertAlmostEqual(0.5, successes, delta=0.03)
        self.assertAlmostEqual(0.2, partials, delta=0.03)


class RewardTests(unittest.TestCase):
    def test_success_rolls_scaled_ranges_and_keeps_chests(self) -> None:
        rewards = calculate_rewards(RAID_CONFIG, RiskLevel.RISKY, TaskOutcome.SUCCESS, luck=10, rng=_ScriptedRng())

        # randint stub returns the low end: floor(25 * 1.8 * 1.1) = 49
        self.assertEqual(49, rewards.gold.value)
        self.assertEqual(54, rewards.xp.value)
        self.assertEqual(1, rewards.materials.value)
        self.assertEqual(2, rewards.chests)
        self.assertAlmostEqual(1.3 * 1.8, rewards.loot_quality)

    def test_partial_halves_multiplier_and_chests(self) -> None:
        rewards = calculate_rewards(RAID_CONFIG, RiskLevel.STANDARD, TaskOutcome.PARTIAL, luck=0, rng=_ScriptedRng())
        self.assertEqual(12, rewards.gold.value)
        self.assertEqual(15, rewards.xp.value)
        self.assertEqual(1, rewards.chests)

    def test_failure_pays_nothing(self) -> None:
        rewards = calculate_rewards(EXPEDITION_CONFIG, RiskLevel.STANDARD, TaskOutcome.FAILURE, luck=50, rng=random.Random(3))
        self.assertEqual((0, 0, 0, 0), (rewards.gold.value, rewards.xp.value, rewards.materials.value, rewards.chests))

    def test_failure_pays_nothing_for_any_task_or_risk(self) -> None:
        rng = random.Random(17)
        for config in DEFAULT_TASK_CONFIGS:
            for risk in RiskLevel:
                with self.subTest(task=config.id.value, risk=risk.value):
                    rewards = calculate_rewards(config, risk, TaskOutcome.FAILURE, luck=30, rng=rng)
                    self.assertEqual(
                        (0, 0, 0, 0),
                        (rewards.gold.value, rewards.xp.value, rewards.materials.value, rewards.chests),
                    )

    def test_partial_pays_about_half_of_success_on_average(self) -> None:
        rng = random.Random(2024)
        trials = 2_000
        success = [calculate_rewards(RAID_CONFIG, RiskLevel.STANDARD, TaskOutcome.SUCCESS, 0, rng) for _ in range(trials)]
        partial = [calculate_rewards(RAID_CONFIG, RiskLevel.STANDARD, TaskOutcome.PARTIAL, 0, rng) for _ in range(trials)]

        gold_ratio = sum(r.gold.value for r in partial) / sum(r.gold.value for r in success)
        xp_ratio = sum(r.xp.value for r in partial) / sum(r.xp.value for r in success)
        self.assertAlmostEqual(0.5, gold_ratio, delta=0.05)
        self.assertAlmostEqual(0.5, xp_ratio, delta=0.05)

    def test_resolved_rewards_collapse_to_single_value(self) -> None:
        rewards = calculate_rewards(EXPEDITION_CONFIG, RiskLevel.SAFE, TaskOutcome.SUCCESS, luck=0, rng=random.Random(9))
        self.assertEqual(rewards.gold.min, rewards.gold.max)
        self.assertGreaterEqual(rewards.gold.value, 10)
        self.assertLessEqual(rewards.gold.value, 21)


class InjuryRuleTests(unittest.TestCase):
    def test_defense_reduces_chance_down_to_floor(self) -> None:
        self.assertEqual(20, injury_chance(EXPEDITION_CONFIG, 0))
        self.assertEqual(15, injury_chance(EXPEDITION_CONFIG, 11))
        self.assertEqual(5, injury_chance(EXPEDITION_CONFIG, 200))

    def test_only_failures_can_injure(self) -> None:
        self.assertFalse(should_apply_injury(RAID_CONFIG, TaskOutcome.PARTIAL, 0, _ScriptedRng(0.0)))
        self.assertTrue(should_apply_injury(RAID_CONFIG, TaskOutcome.FAILURE, 0, _ScriptedRng(0.34)))
        self.assertFalse(should_apply_injury(RAID_CONFIG, TaskOutcome.FAILURE, 0, _ScriptedRng(0.36)))

    def test_safe_risk_always_minor(self) -> None:
        self.assertEqual(InjurySeverity.MINOR, determine_injury_severity(RiskLevel.SAFE, _ScriptedRng()))

    def test_severity_thresholds_by_risk(self) -> None:
        self.assertEqual(InjurySeverity.MINOR, determine_injury_severity("standard", _ScriptedRng(0.69)))
        self.assertEqual(InjurySeverity.MODERATE, determine_injury_severity("standard", _ScriptedRng(0.7)))
        self.assertEqual(InjurySeverity.MINOR, determine_injury_severity("risky", _ScriptedRng(0.39)))
        self.assertEqual(InjurySeverity.MODERATE, determine_injury_severity("risky", _ScriptedRng(0.79)))
        self.assertEqual(InjurySeverity.SEVERE, determine_injury_severity("risky", _ScriptedRng(0.8)))


class TaskSummaryTests(unittest.TestCase):
    def _task(self) -> ActiveTask:
        return ActiveTask(
            task_type=TaskType.EXPEDITION,
            risk_level=RiskLevel.STANDARD,
            config=EXPEDITION_CONFIG,
            started_at=0.0,
            calculated_success_chance=60.0,
        )

    def _rewards(self, chests: int) -> TaskRewards:
        return TaskRewards(
            gold=RewardRange.resolved(20),
            xp=RewardRange.resolved(30),
            materials=RewardRange.resolved(4),
            chests=chests,
        )

    def test_success_summary_pluralizes_chests(self) -> None:
        text = generate_task_summary(self._task(), TaskOutcome.SUCCESS, self._rewards(1), False)
        self.assertEqual("Expedition (Standard Route) completed successfully! Earned 20 gold, 30 XP, and 1 chest.", text)
        text = generate_task_summary(self._task(), TaskOutcome.SUCCESS, self._rewards(2), False)
        self.assertTrue(text.endswith("2 chests."))

    def test_failure_summary_mentions_injury(self) -> None:
        text = generate_task_summary(self._task(), TaskOutcome.FAILURE, self._rewards(0), True)
        self.assertIn("You were injured", text)
        text = generate_task_summary(self._task(), TaskOutcome.FAILURE, self._rewards(0), False)
        self.assertIn("escaped unharmed", text)


if __name__ == "__main__":
    unittest.main()
