from __future__ import annotations

import logging
from typing import List, Optional

from focusquest.application.services.balance_tables import TASK_HISTORY_LIMIT
from focusquest.domain.models.task import ActiveTask, OutcomeTally, TaskCompletionResult, TaskEvent, TaskStatistics
from focusquest.domain.models.task_types import RiskLevel, TaskType


class TaskStateLedger:
    """Holds the single active task, the last result and a bounded history."""

    def __init__(self, history_limit: int = TASK_HISTORY_LIMIT) -> None:
        self._history_limit = max(0, int(history_limit))
        self.active_task: Optional[ActiveTask] = None
        self.last_completed: Optional[TaskCompletionResult] = None
        self.history: List[TaskCompletionResult] = []
        self.statistics = TaskStatistics()
        self._logger = logging.getLogger(__name__)

    @property
    def has_active_task(self) -> bool:
        return self.active_task is not None

    def set_active(self, task: ActiveTask) -> None:
        self.active_task = task

    def clear_active(self) -> Optional[ActiveTask]:
        task = self.active_task
        self.active_task = None
        return task

    def update_progress(self, progress: float) -> bool:
        if self.active_task is None:
            return False
        self.active_task.progress = max(0.0, min(100.0, float(progress)))
        return True

    def add_event(self, event: TaskEvent) -> bool:
        if self.active_task is None:
            return False
        self.active_task.events.append(event)
        return True

    def record_completion(self, result: TaskCompletionResult) -> None:
        self.last_completed = result
        self.history.insert(0, result)
        del self.history[self._history_limit:]
        self.statistics.record(result.task.task_type, result.task.risk_level, result.outcome)
        self.active_task = None

    def clear_last_completed(self) -> None:
        self.last_completed = None

    def type_statistics(self, task_type: TaskType | str) -> OutcomeTally:
        return self.statistics.for_type(TaskType.normalize(task_type))

    def risk_statistics(self, risk_level: RiskLevel | str) -> OutcomeTally:
        return self.statistics.for_risk(RiskLevel.normalize(risk_level))

    def type_success_rate(self, task_type: TaskType | str) -> int:
        return self.type_statistics(task_type).success_rate()

    def risk_success_rate(self, risk_level: RiskLevel | str) -> int:
        return self.risk_statistics(risk_level).success_rate()

    def overall_success_rate(self) -> int:
        return self.statistics.total.success_rate()
