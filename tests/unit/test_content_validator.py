import io
import json
import sys
from contextlib import redirect_stdout
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from focusquest.infrastructure.content_validator import (
    main,
    validate_event_file,
    validate_event_payload,
    validate_item_templates,
    validate_task_content,
)
from focusquest.infrastructure.event_template_loader import DEFAULT_EVENT_BANK_PATH
from focusquest.infrastructure.inmemory.inmemory_item_template_repo import WEAPON_TEMPLATES

_TESTS_DIR = Path(__file__).resolve().parents[1]


def _template(template_id: str = "info_test", **overrides) -> dict:
    row = {
        "template_id": template_id,
        "severity": "info",
        "category": "loot",
        "messages": ["You find {gold} gold."],
        "effects": {"gold_modifier": {"min": 5, "max": 15}},
        "weight": 5,
        "applicable_tasks": ["expedition"],
        "repeatable": True,
    }
    row.update(overrides)
    return row


class ContentValidatorTests(unittest.TestCase):
    def test_shipped_event_bank_is_valid(self) -> None:
        self.assertEqual([], validate_event_file(DEFAULT_EVENT_BANK_PATH))

    def test_shipped_task_content_is_valid(self) -> None:
        self.assertEqual([], validate_task_content())

    def test_missing_file_is_reported(self) -> None:
        errors = validate_event_file(_TESTS_DIR / "does_not_exist.json")
        self.assertTrue(errors)
        self.assertIn("File not found", errors[0])

    def test_payload_must_hold_templates(self) -> None:
        errors = validate_event_payload({"version": 1})
        self.assertTrue(any("must be a list of templates" in item for item in errors))

    def test_duplicate_ids_are_rejected(self) -> None:
        errors = validate_event_payload([_template("info_twice"), _template("info_twice")])
        self.assertEqual(["Duplicate template id 'info_twice'"], errors)

    def test_parse_errors_name_the_row(self) -> None:
        errors = validate_event_payload([_template(), _template("info_broken", severity="loud")])
        self.assertEqual(1, len(errors))
        self.assertTrue(errors[0].startswith("Template #1:"))
        self.assertIn("'severity'", errors[0])

    def test_effects_beyond_balancing_ceilings_are_rejected(self) -> None:
        payload = [
            _template("info_rich", effects={"gold_modifier": {"min": 10, "max": 500}}),
            _template("warning_deadly", severity="warning", effects={"health_modifier": {"min": -90, "max": -10}}),
        ]

        errors = validate_event_payload(payload)

        self.assertTrue(any("'info_rich'" in item and "max_gold_gain" in item for item in errors))
        self.assertTrue(any("'warning_deadly'" in item and "max_health_damage" in item for item in errors))

    def test_inverted_ranges_and_negative_weight_are_rejected(self) -> None:
        payload = [
            _template("info_backwards", effects={"xp_modifier": {"min": 20, "max": 5}}, weight=-1),
            _template("info_window", min_progress=80, max_progress=20),
        ]

        errors = validate_event_payload(payload)

        self.assertTrue(any("negative weight" in item for item in errors))
        self.assertTrue(any("xp_modifier has min 20 above max 5" in item for item in errors))
        self.assertTrue(any("min_progress above max_progress" in item for item in errors))

    def test_shipped_item_templates_are_valid(self) -> None:
        self.assertEqual([], validate_item_templates(WEAPON_TEMPLATES))

    def test_main_returns_zero_for_valid_payload(self) -> None:
        temp = _TESTS_DIR / "_tmp_events_valid.json"
        temp.write_text(json.dumps({"version": 1, "templates": [_template()]}), encoding="utf-8")
        try:
            buf = io.StringIO()
            with redirect_stdout(buf):
                code = main(["--path", str(temp)])
            self.assertEqual(0, code)
            self.assertIn("Event content valid", buf.getvalue())
        finally:
            temp.unlink(missing_ok=True)

    def test_main_returns_one_for_invalid_payload(self) -> None:
        temp = _TESTS_DIR / "_tmp_events_invalid.json"
        temp.write_text(json.dumps([_template(messages=[])]), encoding="utf-8")
        try:
            buf = io.StringIO()
            with redirect_stdout(buf):
                code = main(["--path", str(temp)])
            self.assertEqual(1, code)
            self.assertIn("Event content invalid (1 errors):", buf.getvalue())
            self.assertIn("'messages'", buf.getvalue())
        finally:
            temp.unlink(missing_ok=True)

    def test_main_reports_invalid_json(self) -> None:
        temp = _TESTS_DIR / "_tmp_events_broken.json"
        temp.write_text("{not json", encoding="utf-8")
        try:
            buf = io.StringIO()
            with redirect_stdout(buf):
                code = main(["--path", str(temp)])
            self.assertEqual(1, code)
            self.assertIn("Invalid JSON", buf.getvalue())
        finally:
            temp.unlink(missing_ok=True)

    def test_main_without_path_checks_shipped_content(self) -> None:
        buf = io.StringIO()
        with redirect_stdout(buf):
            code = main([])
        self.assertEqual(0, code)
        self.assertIn("Event content valid.", buf.getvalue())


if __name__ == "__main__":
    unittest.main()
