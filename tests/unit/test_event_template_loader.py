import json
import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from focusquest.domain.errors import ContentConfigurationError
from focusquest.domain.models.event import EffectRange, EventCategory, EventSeverity
from focusquest.domain.models.task_types import TaskType
from focusquest.infrastructure.event_template_loader import load_event_bank, parse_event_bank, parse_event_template

_TESTS_DIR = Path(__file__).resolve().parents[1]


def _row(**overrides) -> dict:
    row = {
        "template_id": "warning_bandits",
        "severity": "warning",
        "category": "combat",
        "messages": ["Bandits take {gold} gold!"],
        "effects": {"gold_modifier": {"min": -30, "max": -10}, "health_modifier": {"min": -15, "max": -5}},
        "weight": 8,
        "applicable_tasks": ["raid", "hunt"],
        "repeatable": False,
        "min_progress": 20,
        "conditions": {"min_gold": 10, "requires_not_injured": True},
        "visual_cue": {"type": "shake", "color": "#ff0000", "duration": 400},
    }
    row.update(overrides)
    return row


class EventTemplateLoaderTests(unittest.TestCase):
    def test_parse_full_template(self) -> None:
        template = parse_event_template(_row())

        self.assertEqual(template.template_id, "warning_bandits")
        self.assertEqual(template.severity, EventSeverity.WARNING)
        self.assertEqual(template.category, EventCategory.COMBAT)
        self.assertEqual(template.messages, ("Bandits take {gold} gold!",))
        self.assertEqual(template.effects.gold_modifier, EffectRange(min=-30, max=-10))
        self.assertIsNone(template.effects.xp_modifier)
        self.assertEqual(template.applicable_tasks, (TaskType.RAID, TaskType.HUNT))
        self.assertFalse(template.repeatable)
        self.assertEqual(template.min_progress, 20)
        self.assertIsNone(template.max_progress)
        self.assertEqual(template.conditions.min_gold, 10)
        self.assertTrue(template.conditions.requires_not_injured)
        self.assertEqual(template.visual_cue.duration, 400)

    def test_defaults_for_optional_fields(self) -> None:
        template = parse_event_template(
            {"template_id": "flavor_wind", "severity": "flavor", "category": "mystery", "messages": ["Wind."]}
        )

        self.assertEqual(template.weight, 1)
        self.assertEqual(template.applicable_tasks, ())
        self.assertTrue(template.repeatable)
        self.assertIsNone(template.conditions)
        self.assertIsNone(template.visual_cue)
        self.assertEqual(template.effects.present(), {})

    def test_errors_name_template_and_field(self) -> None:
        cases = {
            "'severity'": _row(severity="apocalyptic"),
            "'category'": _row(category="weather"),
            "'messages'": _row(messages=[]),
            "'applicable_tasks'": _row(applicable_tasks=["nap"]),
            "'effects.luck'": _row(effects={"luck": {"min": 1, "max": 2}}),
            "'effects.gold_modifier'": _row(effects={"gold_modifier": 5}),
            "'effects.gold_modifier.min'": _row(effects={"gold_modifier": {"min": "lots", "max": 5}}),
            "'conditions.requires_weapon'": _row(conditions={"requires_weapon": "yes"}),
            "'conditions.weather'": _row(conditions={"weather": "rain"}),
            "'repeatable'": _row(repeatable="sometimes"),
            "'weight'": _row(weight=True),
        }
        for field_name, row in cases.items():
            with self.subTest(field=field_name):
                with self.assertRaises(ContentConfigurationError) as ctx:
                    parse_event_template(row)
                self.assertIn("'warning_bandits'", str(ctx.exception))
                self.assertIn(field_name, str(ctx.exception))

    def test_missing_id_and_non_object_rows(self) -> None:
        with self.assertRaises(ContentConfigurationError):
            parse_event_template(_row(template_id=" "))
        with self.assertRaises(ContentConfigurationError):
            parse_event_template(["not", "a", "template"])

    def test_bank_accepts_list_or_versioned_object(self) -> None:
        rows = [_row(), _row(template_id="warning_wolves")]

        self.assertEqual(len(parse_event_bank(rows)), 2)
        self.assertEqual(len(parse_event_bank({"version": 1, "templates": rows})), 2)
        with self.assertRaises(ContentConfigurationError):
            parse_event_bank({"version": 1})

    def test_shipped_bank_loads(self) -> None:
        templates = load_event_bank()

        self.assertGreaterEqual(len(templates), 50)
        self.assertEqual(len({template.template_id for template in templates}), len(templates))
        self.assertEqual({template.severity for template in templates}, set(EventSeverity))

    def test_invalid_json_file_raises_configuration_error(self) -> None:
        temp = _TESTS_DIR / "_tmp_loader_broken.json"
        temp.write_text("[{", encoding="utf-8")
        try:
            with self.assertRaises(ContentConfigurationError) as ctx:
                load_event_bank(temp)
            self.assertIn("Invalid JSON", str(ctx.exception))
        finally:
            temp.unlink(missing_ok=True)

    def test_load_from_custom_path(self) -> None:
        temp = _TESTS_DIR / "_tmp_loader_bank.json"
        temp.write_text(json.dumps({"version": 1, "templates": [_row()]}), encoding="utf-8")
        try:
            templates = load_event_bank(temp)
            self.assertEqual([template.template_id for template in templates], ["warning_bandits"])
        finally:
            temp.unlink(missing_ok=True)


if __name__ == "__main__":
    unittest.main()
