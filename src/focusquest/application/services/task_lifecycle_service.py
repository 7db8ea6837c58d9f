from __future__ import annotations

import logging
import random
from typing import Callable, Optional

from focusquest.application.services.balance_tables import (
    INJURY_CHANCE_FLOOR,
    LUCK_REWARD_SCALE,
    PARTIAL_SUCCESS_BAND,
    SUCCESS_CHANCE_MAX,
    SUCCESS_CHANCE_MIN,
)
from focusquest.application.services.event_generator import wall_clock_ms
from focusquest.application.services.task_state import TaskStateLedger
from focusquest.domain.errors import TaskAlreadyActiveError
from focusquest.domain.events import TaskCompleted, TaskStarted
from focusquest.domain.models.task import (
    ActiveTask,
    SuccessCalculation,
    TaskCompletionResult,
    TaskConfig,
    TaskEvent,
    TaskSelectionContext,
)
from focusquest.domain.models.task_types import RiskLevel, TaskType
from focusquest.domain.repositories import TaskConfigRepository
from focusquest.domain.services.success_chance import calculate_success_chance
from focusquest.domain.services.task_resolution import (
    calculate_rewards,
    determine_injury_severity,
    generate_task_summary,
    resolve_task_outcome,
    should_apply_injury,
)

START_POLICY_REJECT = "reject"
START_POLICY_REPLACE = "replace"
START_POLICIES = (START_POLICY_REJECT, START_POLICY_REPLACE)


class TaskLifecycleService:
    """IDLE -> ACTIVE -> completed result -> IDLE, one task at a time.

    Starting while a task is active follows ``start_policy``: ``reject``
    raises ``TaskAlreadyActiveError``, ``replace`` drops the running task
    without a result. Progress, event and completion calls with nothing
    active are logged and ignored.
    """

    def __init__(
        self,
        task_configs: TaskConfigRepository | None = None,
        ledger: TaskStateLedger | None = None,
        *,
        rng: random.Random | None = None,
        clock: Callable[[], float] | None = None,
        event_publisher=None,
        partial_band: float = PARTIAL_SUCCESS_BAND,
        start_policy: str = START_POLICY_REJECT,
    ) -> None:
        policy = str(start_policy or START_POLICY_REJECT).strip().lower()
        if policy not in START_POLICIES:
            raise ValueError(f"Unknown start policy: {start_policy}")
        self._task_configs = task_configs
        self.ledger = ledger or TaskStateLedger()
        self._rng = rng or random.Random()
        self._clock = clock or wall_clock_ms
        self._event_publisher = event_publisher
        self._partial_band = float(partial_band)
        self._start_policy = policy
        self._logger = logging.getLogger(__name__)

    @property
    def active_task(self) -> Optional[ActiveTask]:
        return self.ledger.active_task

    @property
    def start_policy(self) -> str:
        return self._start_policy

    @property
    def partial_band(self) -> float:
        return self._partial_band

    def _resolve_config(self, task_type: TaskType, config: TaskConfig | None) -> TaskConfig:
        if config is not None:
            return config
        if self._task_configs is None:
            raise ValueError("A task config or a task config repository is required.")
        return self._task_configs.get(task_type)

    def _calculate(
        self,
        config: TaskConfig,
        risk_level: RiskLevel,
        context: TaskSelectionContext,
        event_modifier: float = 0,
    ) -> SuccessCalculation:
        return calculate_success_chance(
            config,
            risk_level,
            context,
            event_modifier,
            minimum=SUCCESS_CHANCE_MIN,
            maximum=SUCCESS_CHANCE_MAX,
        )

    def start(
        self,
        task_type: TaskType | str,
        risk_level: RiskLevel | str,
        context: TaskSelectionContext,
        config: TaskConfig | None = None,
    ) -> ActiveTask:
        resolved_type = TaskType.normalize(task_type)
        resolved_risk = RiskLevel.normalize(risk_level)
        resolved_config = self._resolve_config(resolved_type, config)

        running = self.ledger.active_task
        if running is not None:
            if self._start_policy == START_POLICY_REJECT:
                raise TaskAlreadyActiveError(running.task_type.value)
            self._logger.warning(
                "Replacing active task without a result",
                extra={"replaced_task": running.task_type.value, "new_task": resolved_type.value},
            )
            self.ledger.clear_active()

        calculation = self._calculate(resolved_config, resolved_risk, context)
        task = ActiveTask(
            task_type=resolved_type,
            risk_level=resolved_risk,
            config=resolved_config,
            started_at=self._clock(),
            calculated_success_chance=calculation.final_chance,
        )
        self.ledger.set_active(task)
        if callable(self._event_publisher):
            self._event_publisher(
                TaskStarted(
                    task_type=resolved_type.value,
                    risk_level=resolved_risk.value,
                    success_chance=calculation.final_chance,
                    started_at=task.started_at,
                )
            )
        return task

    def update_progress(self, progress: float) -> None:
        if not self.ledger.update_progress(progress):
            self._logger.warning("No active task to update", extra={"progress": progress})

    def add_event(self, event: TaskEvent) -> None:
        if not self.ledger.add_event(event):
            self._logger.warning("No active task to record event on", extra={"event_id": event.id})

    def complete(self, context: TaskSelectionContext) -> Optional[TaskCompletionResult]:
        task = self.ledger.active_task
        if task is None:
            self._logger.warning("No active task to complete")
            return None

        event_modifier = task.event_success_modifier()
        calculation = self._calculate(task.config, task.risk_level, context, event_modifier)
        final_chance = calculation.final_chance

        outcome = resolve_task_outcome(final_chance, self._rng, self._partial_band)
        rewards = calculate_rewards(
            task.config,
            task.risk_level,
            outcome,
            context.character_stats.luck,
            self._rng,
            luck_scale=LUCK_REWARD_SCALE,
        )
        was_injured = should_apply_injury(
            task.config,
            outcome,
            context.character_stats.defense,
            self._rng,
            floor=INJURY_CHANCE_FLOOR,
        )
        injury_severity = determine_injury_severity(task.risk_level, self._rng) if was_injured else None
        summary = generate_task_summary(task, outcome, rewards, was_injured)

        task.calculated_success_chance = final_chance
        task.outcome = outcome
        task.earned_rewards = rewards
        task.progress = 100.0

        result = TaskCompletionResult(
            task=task,
            outcome=outcome,
            rewards=rewards,
            was_injured=was_injured,
            injury_severity=injury_severity,
            event_count=len(task.events),
            summary=summary,
            final_success_chance=final_chance,
        )
        self.ledger.record_completion(result)
        if callable(self._event_publisher):
            self._event_publisher(
                TaskCompleted(
                    task_type=task.task_type.value,
                    risk_level=task.risk_level.value,
                    outcome=outcome.value,
                    gold=rewards.gold.value,
                    xp=rewards.xp.value,
                    chests=rewards.chests,
                    event_count=result.event_count,
                )
            )
        return result

    def cancel(self) -> Optional[ActiveTask]:
        task = self.ledger.clear_active()
        if task is None:
            self._logger.info("Cancel requested with no active task")
        return task

    def clear_last_completed(self) -> None:
        self.ledger.clear_last_completed()

    def preview_success_chance(
        self,
        task_type: TaskType | str,
        risk_level: RiskLevel | str,
        context: TaskSelectionContext,
        config: TaskConfig | None = None,
    ) -> SuccessCalculation:
        resolved_type = TaskType.normalize(task_type)
        return self._calculate(self._resolve_config(resolved_type, config), RiskLevel.normalize(risk_level), context)
