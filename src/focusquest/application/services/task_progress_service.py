from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Set

from focusquest.application.services.balance_tables import DEFAULT_TASK_DURATION_MS
from focusquest.application.services.event_generator import wall_clock_ms
from focusquest.domain.models.event import EventSeverity
from focusquest.domain.models.task import TaskEvent
from focusquest.domain.models.task_definition import TaskDefinition
from focusquest.domain.models.task_types import TaskOutcome


@dataclass
class TaskRun:
    definition: TaskDefinition
    started_at: float
    duration_ms: float
    progress: float = 0.0
    triggered_milestones: Set[float] = field(default_factory=set)
    events: List[TaskEvent] = field(default_factory=list)


class TaskProgressTracker:
    """Turns elapsed wall-clock time into task progress and milestone events.

    Milestone trigger state lives on the run, so definitions stay shared and
    immutable and every run fires each milestone once.
    """

    def __init__(self, *, clock: Callable[[], float] | None = None, rng: random.Random | None = None) -> None:
        self._clock = clock or wall_clock_ms
        self._rng = rng or random.Random()
        self._run: Optional[TaskRun] = None
        self._logger = logging.getLogger(__name__)

    @property
    def is_running(self) -> bool:
        return self._run is not None

    def start(self, definition: TaskDefinition, duration_ms: float = DEFAULT_TASK_DURATION_MS) -> str:
        if duration_ms <= 0:
            raise ValueError("Task duration must be positive.")
        self._run = TaskRun(definition=definition, started_at=self._clock(), duration_ms=float(duration_ms))
        return definition.start_message(self._rng)

    def stop(self) -> None:
        self._run = None

    def update(self, now: float | None = None) -> List[TaskEvent]:
        """Advance progress to ``now`` and return milestones crossed since the last call."""
        run = self._run
        if run is None:
            return []
        current = self._clock() if now is None else float(now)
        elapsed = current - run.started_at
        run.progress = max(0.0, min(100.0, elapsed / run.duration_ms * 100))

        fired: List[TaskEvent] = []
        for milestone in sorted(run.definition.milestones, key=lambda row: row.progress):
            if milestone.progress in run.triggered_milestones or run.progress < milestone.progress:
                continue
            run.triggered_milestones.add(milestone.progress)
            fired.append(
                TaskEvent(
                    id=f"milestone_{milestone.progress:g}_{int(current)}",
                    timestamp=current,
                    message=milestone.description,
                    severity=EventSeverity.INFO,
                )
            )
        run.events.extend(fired)
        return fired

    def progress(self) -> float:
        return self._run.progress if self._run is not None else 0.0

    def progress_flavor(self) -> str:
        if self._run is None:
            return ""
        return self._run.definition.progress_flavor(self._run.progress)

    def completion_flavor(self, outcome: TaskOutcome) -> str:
        if self._run is None:
            return ""
        return self._run.definition.completion_message(outcome, self._rng)

    def events(self) -> List[TaskEvent]:
        return list(self._run.events) if self._run is not None else []

    def time_remaining(self, now: float | None = None) -> float:
        if self._run is None:
            return 0.0
        current = self._clock() if now is None else float(now)
        return max(0.0, self._run.duration_ms - (current - self._run.started_at))

    def is_complete(self, now: float | None = None) -> bool:
        if self._run is None:
            return False
        return self.time_remaining(now) <= 0
