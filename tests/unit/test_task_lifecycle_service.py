import random
import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from focusquest.application.services.task_lifecycle_service import TaskLifecycleService
from focusquest.application.services.task_state import TaskStateLedger
from focusquest.domain.errors import ContentConfigurationError, TaskAlreadyActiveError
from focusquest.domain.events import TaskCompleted, TaskStarted
from focusquest.domain.models.character import StatBlock
from focusquest.domain.models.event import EventSeverity
from focusquest.domain.models.task import TaskEffects, TaskEvent, TaskSelectionContext
from focusquest.domain.models.task_types import RiskLevel, TaskOutcome, TaskType
from focusquest.infrastructure.inmemory.inmemory_task_config_repo import InMemoryTaskConfigRepository


class _ScriptedRng:
    """random() pops scripted values; randint returns the low end."""

    def __init__(self, *values: float) -> None:
        self._values = list(values)

    def random(self) -> float:
        return self._values.pop(0) if self._values else 0.99

    def randint(self, low: int, high: int) -> int:
        return low


def _context(focus: int = 10, defense: int = 0) -> TaskSelectionContext:
    return TaskSelectionContext(character_level=1, character_stats=StatBlock(focus=focus, defense=defense))


def _event(modifier: float) -> TaskEvent:
    return TaskEvent(
        id=f"evt_{modifier}",
        timestamp=0.0,
        message="Shift",
        severity=EventSeverity.INFO,
        effects=TaskEffects(success_chance_modifier=modifier),
    )


class TaskLifecycleServiceTests(unittest.TestCase):
    def _service(self, rng=None, **kwargs) -> TaskLifecycleService:
        self.published = []
        return TaskLifecycleService(
            InMemoryTaskConfigRepository(),
            rng=rng or random.Random(5),
            clock=lambda: 1_000.0,
            event_publisher=self.published.append,
            **kwargs,
        )

    def test_start_computes_chance_and_publishes(self) -> None:
        service = self._service()
        task = service.start("expedition", "standard", _context())

        self.assertEqual(TaskType.EXPEDITION, task.task_type)
        self.assertEqual(65.0, task.calculated_success_chance)
        self.assertEqual(1_000.0, task.started_at)
        self.assertIs(task, service.active_task)
        self.assertIsInstance(self.published[0], TaskStarted)

    def test_unknown_task_type_raises(self) -> None:
        with self.assertRaises(ContentConfigurationError):
            self._service().start("dungeon", "standard", _context())

    def test_start_while_active_rejected_by_default(self) -> None:
        service = self._service()
        service.start(TaskType.EXPEDITION, RiskLevel.SAFE, _context())
        with self.assertRaises(TaskAlreadyActiveError):
            service.start(TaskType.RAID, RiskLevel.SAFE, _context())
        self.assertEqual(TaskType.EXPEDITION, service.active_task.task_type)

    def test_replace_policy_drops_running_task(self) -> None:
        service = self._service(start_policy="replace")
        service.start(TaskType.EXPEDITION, RiskLevel.SAFE, _context())
        with self.assertLogs("focusquest.application.services.task_lifecycle_service", level="WARNING"):
            service.start(TaskType.RAID, RiskLevel.SAFE, _context())
        self.assertEqual(TaskType.RAID, service.active_task.task_type)
        self.assertEqual([], service.ledger.history)

    def test_unknown_policy_raises(self) -> None:
        with self.assertRaises(ValueError):
            self._service(start_policy="queue")

    def test_complete_without_task_returns_none(self) -> None:
        service = self._service()
        with self.assertLogs("focusquest.application.services.task_lifecycle_service", level="WARNING"):
            self.assertIsNone(service.complete(_context()))

    def test_event_modifiers_feed_final_chance(self) -> None:
        # Roll 0.70 fails against the base 65% but succeeds once events add 10.
        service = self._service(rng=_ScriptedRng(0.70))
        service.start(TaskType.EXPEDITION, RiskLevel.STANDARD, _context())
        service.add_event(_event(6.0))
        service.add_event(_event(4.0))

        result = service.complete(_context())

        self.assertEqual(75.0, result.final_success_chance)
        self.assertEqual(TaskOutcome.SUCCESS, result.outcome)
        self.assertEqual(2, result.event_count)
        self.assertEqual(100.0, result.task.progress)
        self.assertEqual(15, result.rewards.gold.value)
        self.assertEqual(1, result.rewards.chests)
        self.assertIsNone(service.active_task)
        self.assertIs(result, service.ledger.last_completed)
        self.assertIsInstance(self.published[-1], TaskCompleted)

    def test_failure_can_injure_with_severity(self) -> None:
        # outcome roll, injury roll, severity roll
        service = self._service(rng=_ScriptedRng(0.99, 0.10, 0.90))
        service.start(TaskType.RAID, RiskLevel.RISKY, _context())
        result = service.complete(_context())

        self.assertEqual(TaskOutcome.FAILURE, result.outcome)
        self.assertTrue(result.was_injured)
        self.assertEqual("severe", result.injury_severity.value)
        self.assertIn("You were injured", result.summary)

    def test_partial_band_is_configurable(self) -> None:
        service = self._service(rng=_ScriptedRng(0.70), partial_band=0)
        service.start(TaskType.EXPEDITION, RiskLevel.STANDARD, _context())
        self.assertEqual(TaskOutcome.FAILURE, service.complete(_context()).outcome)

    def test_progress_and_events_without_task_are_ignored(self) -> None:
        service = self._service()
        with self.assertLogs("focusquest.application.services.task_lifecycle_service", level="WARNING") as logs:
            service.update_progress(40)
            service.add_event(_event(1.0))
        self.assertEqual(2, len(logs.records))

    def test_cancel_clears_without_result(self) -> None:
        service = self._service()
        service.start(TaskType.EXPEDITION, RiskLevel.SAFE, _context())
        cancelled = service.cancel()
        self.assertEqual(TaskType.EXPEDITION, cancelled.task_type)
        self.assertIsNone(service.active_task)
        self.assertIsNone(service.ledger.last_completed)
        self.assertIsNone(service.cancel())

    def test_preview_does_not_start_a_task(self) -> None:
        service = self._service()
        preview = service.preview_success_chance("raid", "safe", _context())
        self.assertEqual(70.0, preview.final_chance)
        self.assertIsNone(service.active_task)


class TaskStateLedgerTests(unittest.TestCase):
    def _complete(self, service: TaskLifecycleService, task_type: TaskType, risk: RiskLevel) -> None:
        service.start(task_type, risk, _context())
        service.complete(_context())

    def test_history_is_newest_first_and_bounded(self) -> None:
        ledger = TaskStateLedger(history_limit=3)
        service = TaskLifecycleService(InMemoryTaskConfigRepository(), ledger, rng=random.Random(1), clock=lambda: 0.0)
        for risk in (RiskLevel.SAFE, RiskLevel.STANDARD, RiskLevel.RISKY, RiskLevel.SAFE):
            self._complete(service, TaskType.EXPEDITION, risk)

        self.assertEqual(3, len(ledger.history))
        self.assertEqual(RiskLevel.SAFE, ledger.history[0].task.risk_level)
        self.assertEqual(RiskLevel.RISKY, ledger.history[1].task.risk_level)
        self.assertEqual(4, ledger.statistics.total.started)

    def test_success_rate_counts_partials_half(self) -> None:
        ledger = TaskStateLedger()
        # success, partial, failure against 65%; only the failure draws an injury roll
        rng = _ScriptedRng(0.0, 0.70, 0.99, 0.99)
        service = TaskLifecycleService(InMemoryTaskConfigRepository(), ledger, rng=rng, clock=lambda: 0.0)
        for _ in range(3):
            self._complete(service, TaskType.EXPEDITION, RiskLevel.STANDARD)

        tally = ledger.type_statistics("expedition")
        self.assertEqual((3, 1, 1, 1), (tally.started, tally.succeeded, tally.partial, tally.failed))
        self.assertEqual(50, ledger.type_success_rate(TaskType.EXPEDITION))
        self.assertEqual(50, ledger.risk_success_rate("standard"))
        self.assertEqual(50, ledger.overall_success_rate())
        self.assertEqual(0, ledger.type_success_rate(TaskType.RAID))

    def test_clear_last_completed(self) -> None:
        ledger = TaskStateLedger()
        service = TaskLifecycleService(InMemoryTaskConfigRepository(), ledger, rng=random.Random(2), clock=lambda: 0.0)
        self._complete(service, TaskType.RAID, RiskLevel.SAFE)
        service.clear_last_completed()
        self.assertIsNone(ledger.last_completed)
        self.assertEqual(1, len(ledger.history))

    def test_progress_is_clamped(self) -> None:
        ledger = TaskStateLedger()
        service = TaskLifecycleService(InMemoryTaskConfigRepository(), ledger, clock=lambda: 0.0)
        service.start(TaskType.EXPEDITION, RiskLevel.SAFE, _context())
        service.update_progress(140)
        self.assertEqual(100.0, ledger.active_task.progress)
        service.update_progress(-3)
        self.assertEqual(0.0, ledger.active_task.progress)


if __name__ == "__main__":
    unittest.main()
