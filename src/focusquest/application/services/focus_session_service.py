from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from focusquest.application.services.balance_tables import DEFAULT_TASK_DURATION_MS
from focusquest.application.services.chest_ledger import ChestLedger
from focusquest.application.services.completion_service import CompletionApplication, TaskCompletionService
from focusquest.application.services.event_bus import EventBus
from focusquest.application.services.event_effect_applier import EventEffectResult
from focusquest.application.services.event_task_integration import EventTaskIntegration, SessionStatistics
from focusquest.application.services.hospital_service import BillPaymentResult, HospitalService, HospitalVisitResult, PotionUseResult
from focusquest.application.services.task_lifecycle_service import TaskLifecycleService
from focusquest.application.services.task_progress_service import TaskProgressTracker
from focusquest.domain.events import ChestOpened, GameEventFired, InjuryApplied, TaskCompleted, TaskStarted
from focusquest.domain.models.character import CharacterState
from focusquest.domain.models.chest import ChestOpenResult
from focusquest.domain.models.event import GameEvent
from focusquest.domain.models.inventory import InventoryState
from focusquest.domain.models.loot import ItemGenerationContext
from focusquest.domain.models.task import ActiveTask, TaskCompletionResult, TaskEvent, TaskSelectionContext
from focusquest.domain.models.task_definition import TaskDefinition
from focusquest.domain.models.task_types import RiskLevel, TaskType
from focusquest.domain.repositories import TaskConfigRepository, TaskDefinitionRepository


@dataclass
class SessionTick:
    progress: float
    milestones: List[TaskEvent] = field(default_factory=list)
    event: Optional[GameEvent] = None
    effect_result: Optional[EventEffectResult] = None
    finished: bool = False


@dataclass
class SessionOutcome:
    result: TaskCompletionResult
    applied: CompletionApplication
    flavor: str
    events: List[GameEvent]
    statistics: SessionStatistics
    warnings: List[str] = field(default_factory=list)


def register_session_log_handlers(event_bus: EventBus) -> None:
    logger = logging.getLogger(__name__)

    def _log(event: object) -> None:
        logger.info("Domain event published", extra={"event_type": type(event).__name__, "payload": vars(event)})

    for event_type in (TaskStarted, TaskCompleted, GameEventFired, InjuryApplied, ChestOpened):
        event_bus.subscribe(event_type, _log, priority=1000)


class FocusSessionService:
    """Drives one player's focus sessions end to end.

    Owns the character and inventory for the session and is their only
    writer: ticks apply event effects, ``finish`` applies the result, and
    chest or hospital calls settle loot and debts.
    """

    def __init__(
        self,
        lifecycle: TaskLifecycleService,
        tracker: TaskProgressTracker,
        integration: EventTaskIntegration,
        completion: TaskCompletionService,
        chest_ledger: ChestLedger,
        hospital: HospitalService,
        *,
        task_configs: TaskConfigRepository,
        task_definitions: TaskDefinitionRepository,
        event_bus: EventBus | None = None,
        character: CharacterState | None = None,
        inventory: InventoryState | None = None,
    ) -> None:
        self.lifecycle = lifecycle
        self.tracker = tracker
        self.integration = integration
        self.completion = completion
        self.chest_ledger = chest_ledger
        self.hospital = hospital
        self.task_configs = task_configs
        self.task_definitions = task_definitions
        self.event_bus = event_bus
        self.character = character or CharacterState()
        self.inventory = inventory or InventoryState()
        self._logger = logging.getLogger(__name__)

    @property
    def active_task(self) -> Optional[ActiveTask]:
        return self.lifecycle.active_task

    def selection_context(self) -> TaskSelectionContext:
        return TaskSelectionContext.from_character(self.character)

    def available_tasks(self) -> List[TaskType]:
        return [config.id for config in self.task_configs.list_for_level(self.character.level)]

    def preview(self, task_type: TaskType | str) -> Dict[RiskLevel, float]:
        context = self.selection_context()
        return {
            risk: self.lifecycle.preview_success_chance(task_type, risk, context).final_chance
            for risk in RiskLevel
        }

    def _definition(self, task_type: TaskType) -> TaskDefinition:
        return self.task_definitions.get(task_type) or TaskDefinition(task_type=task_type)

    def start_task(
        self,
        task_type: TaskType | str,
        risk_level: RiskLevel | str = RiskLevel.STANDARD,
        duration_ms: float = DEFAULT_TASK_DURATION_MS,
    ) -> str:
        """Start a task and its event session. Returns the opening flavor line."""
        task = self.lifecycle.start(task_type, risk_level, self.selection_context())
        message = self.tracker.start(self._definition(task.task_type), duration_ms)
        self.integration.start_task_events(task.task_type)
        return message

    def tick(self, now: float | None = None) -> SessionTick:
        task = self.lifecycle.active_task
        if task is None:
            return SessionTick(progress=0.0)

        milestones = self.tracker.update(now)
        for milestone in milestones:
            self.lifecycle.add_event(milestone)
        self.lifecycle.update_progress(self.tracker.progress())

        tick = SessionTick(progress=self.tracker.progress(), milestones=milestones)
        event = self.integration.update(task.task_type, self.character, self.inventory, task)
        if event is not None:
            tick.event = event
            tick.effect_result = self.integration.apply_event(event, self.character, self.inventory, task)
            self.lifecycle.add_event(TaskEvent.from_game_event(event))
        tick.finished = self.tracker.is_complete(now)
        return tick

    def finish(self) -> Optional[SessionOutcome]:
        result = self.lifecycle.complete(self.selection_context())
        if result is None:
            return None

        applied = self.completion.process_completion(result, self.character, self.inventory)
        statistics = self.integration.session_statistics()
        events = self.integration.end_task_events()
        flavor = self.tracker.completion_flavor(result.outcome)
        self.tracker.stop()

        warnings = [
            line
            for line in (self.completion.injury_warning(self.character), self.completion.bill_warning(self.character))
            if line
        ]
        return SessionOutcome(
            result=result,
            applied=applied,
            flavor=flavor,
            events=events,
            statistics=statistics,
            warnings=warnings,
        )

    def cancel(self) -> Optional[ActiveTask]:
        task = self.lifecycle.cancel()
        if task is not None:
            self.integration.end_task_events()
            self.tracker.stop()
        return task

    def open_chest(self, chest_id: str) -> Optional[ChestOpenResult]:
        stats = self.character.computed_stats()
        context = ItemGenerationContext(character_level=int(self.character.level), luck=stats.luck)
        result = self.chest_ledger.open_by_id(chest_id, context)
        if result is None:
            self._logger.info("Chest not found or already opened", extra={"chest_id": chest_id})
            return None

        self.inventory.gold += result.gold
        self.inventory.unopened_chests = max(0, self.inventory.unopened_chests - 1)
        for item in result.items:
            if not self.inventory.add_item(item):
                self._logger.info("Stack full, item discarded", extra={"template_id": item.template_id})
        return result

    def open_all_chests(self) -> List[ChestOpenResult]:
        opened = [self.open_chest(chest.id) for chest in self.chest_ledger.unopened()]
        return [result for result in opened if result is not None]

    def visit_hospital(self) -> HospitalVisitResult:
        return self.hospital.visit(self.character, self.inventory)

    def pay_bill(self) -> BillPaymentResult:
        return self.hospital.pay_bill(self.character, self.inventory)

    def use_healing_potion(self) -> PotionUseResult:
        return self.hospital.use_healing_potion(self.character, self.inventory)
