import random
import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from focusquest.application.services.event_bank import EventBank, EventSelectionCriteria, conditions_met
from focusquest.domain.models.event import (
    EventCategory,
    EventConditionContext,
    EventConditions,
    EventSeverity,
    EventTemplate,
)
from focusquest.domain.models.task_types import TaskType
from focusquest.infrastructure.inmemory.inmemory_event_template_repo import InMemoryEventTemplateRepository


def _context(**overrides) -> EventConditionContext:
    values = dict(
        character_level=5,
        current_health=80,
        max_health=100,
        is_injured=False,
        gold=100,
        has_weapon=True,
        has_armor=False,
        task_type=TaskType.EXPEDITION,
        task_progress=50.0,
    )
    values.update(overrides)
    return EventConditionContext(**values)


def _template(template_id: str, severity=EventSeverity.FLAVOR, **kwargs) -> EventTemplate:
    return EventTemplate(
        template_id=template_id,
        severity=severity,
        category=kwargs.pop("category", EventCategory.MYSTERY),
        messages=("Something stirs.",),
        **kwargs,
    )


class ConditionTests(unittest.TestCase):
    def test_no_conditions_always_pass(self) -> None:
        self.assertTrue(conditions_met(None, _context()))

    def test_level_health_and_gold_bounds(self) -> None:
        self.assertFalse(conditions_met(EventConditions(min_level=6), _context()))
        self.assertFalse(conditions_met(EventConditions(max_level=4), _context()))
        self.assertFalse(conditions_met(EventConditions(max_health_percent=50), _context()))
        self.assertTrue(conditions_met(EventConditions(min_health_percent=80), _context()))
        self.assertFalse(conditions_met(EventConditions(min_gold=101), _context()))

    def test_injury_and_gear_requirements(self) -> None:
        self.assertFalse(conditions_met(EventConditions(requires_injury=True), _context()))
        self.assertFalse(conditions_met(EventConditions(requires_not_injured=True), _context(is_injured=True)))
        self.assertTrue(conditions_met(EventConditions(requires_weapon=True), _context()))
        self.assertFalse(conditions_met(EventConditions(requires_armor=True), _context()))

    def test_custom_predicate_is_consulted(self) -> None:
        rich_only = EventConditions(custom_condition=lambda ctx: ctx.gold > 500)
        self.assertFalse(conditions_met(rich_only, _context()))
        self.assertTrue(conditions_met(rich_only, _context(gold=900)))

    def test_raising_predicate_counts_as_unmet(self) -> None:
        broken = EventConditions(custom_condition=lambda ctx: {}["storm"])

        with self.assertLogs("focusquest.application.services.event_bank", level="ERROR") as logs:
            self.assertFalse(conditions_met(broken, _context()))
        self.assertIn("Custom event condition failed", logs.output[0])


class EventBankTests(unittest.TestCase):
    def setUp(self) -> None:
        self.templates = [
            _template("any_task"),
            _template("raid_only", applicable_tasks=(TaskType.RAID,)),
            _template("late_warning", EventSeverity.WARNING, min_progress=70),
            _template("early_info", EventSeverity.INFO, max_progress=20, category=EventCategory.LOOT),
            _template("needs_injury", conditions=EventConditions(requires_injury=True)),
        ]
        self.bank = EventBank(self.templates, rng=random.Random(1))

    def test_empty_applicable_tasks_means_every_task(self) -> None:
        ids = {template.template_id for template in self.bank.by_task_type("craft")}
        self.assertIn("any_task", ids)
        self.assertNotIn("raid_only", ids)
        self.assertIn("raid_only", {template.template_id for template in self.bank.by_task_type(TaskType.RAID)})

    def test_eligibility_applies_progress_window_and_conditions(self) -> None:
        criteria = EventSelectionCriteria(task_type=TaskType.EXPEDITION, condition_context=_context(task_progress=50))
        ids = {template.template_id for template in self.bank.eligible_templates(criteria)}
        self.assertEqual({"any_task"}, ids)

    def test_preferred_severity_narrows_only_when_possible(self) -> None:
        late = _context(task_progress=80)
        warn = EventSelectionCriteria(TaskType.EXPEDITION, late, preferred_severity=EventSeverity.WARNING)
        self.assertEqual(["late_warning"], [t.template_id for t in self.bank.eligible_templates(warn)])

        critical = EventSelectionCriteria(TaskType.EXPEDITION, late, preferred_severity=EventSeverity.CRITICAL)
        self.assertEqual({"any_task", "late_warning"}, {t.template_id for t in self.bank.eligible_templates(critical)})

    def test_excluded_ids_are_skipped(self) -> None:
        criteria = EventSelectionCriteria(
            TaskType.EXPEDITION,
            _context(task_progress=50),
            exclude_template_ids=frozenset({"any_task"}),
        )
        self.assertIsNone(self.bank.select_random_template(criteria))

    def test_lookup_and_statistics(self) -> None:
        self.assertEqual("early_info", self.bank.get("early_info").template_id)
        self.assertIsNone(self.bank.get("missing"))
        self.assertEqual(["early_info"], [t.template_id for t in self.bank.by_category("loot")])
        stats = self.bank.statistics()
        self.assertEqual(5, stats["total_templates"])
        self.assertEqual(3, stats["by_severity"]["flavor"])
        self.assertEqual(5, stats["repeatable"])

    def test_shipped_bank_has_templates_for_every_severity(self) -> None:
        bank = EventBank(InMemoryEventTemplateRepository().list_all())
        for severity in EventSeverity:
            self.assertTrue(bank.by_severity(severity), severity)


if __name__ == "__main__":
    unittest.main()
