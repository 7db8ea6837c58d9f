import io
import sys
from pathlib import Path
import unittest
from unittest import mock

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from focusquest.bootstrap import create_focus_session
from focusquest.presentation.session_view import VirtualClock, run_demo


class DemoFlowTests(unittest.TestCase):
    def test_demo_plays_a_session_to_completion(self) -> None:
        clock = VirtualClock()
        session = create_focus_session(clock=clock)

        with mock.patch("sys.stdout", new_callable=io.StringIO) as output:
            run_demo(session, clock, task_type="raid", risk_level="standard", duration_ms=5 * 60 * 1000)

        transcript = output.getvalue()
        self.assertIn("Available tasks", transcript)
        self.assertIn("Raid (standard)", transcript)
        self.assertIn("Outcome", transcript)
        self.assertIn("Gold", transcript)
        self.assertIsNone(session.active_task)
        self.assertEqual(clock(), 5 * 60 * 1000)
        self.assertEqual(session.chest_ledger.unopened_count(), 0)
        self.assertEqual(session.character.tasks_completed + session.character.tasks_failed, 1)

    def test_demo_reports_milestones(self) -> None:
        clock = VirtualClock()
        session = create_focus_session(clock=clock)

        with mock.patch("sys.stdout", new_callable=io.StringIO) as output:
            run_demo(session, clock, duration_ms=2 * 60 * 1000)

        self.assertEqual(output.getvalue().count("Milestone:"), 3)


if __name__ == "__main__":
    unittest.main()
