from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from focusquest.application.services.balance_tables import PRODUCTION_EVENT_CONFIG, event_config_for_task
from focusquest.application.services.event_bank import EventBank
from focusquest.application.services.event_effect_applier import (
    EventEffectResult,
    apply_event_effects,
    impact_score,
    is_beneficial_event,
    is_harmful_event,
)
from focusquest.application.services.event_generator import EventGenerator
from focusquest.domain.events import GameEventFired
from focusquest.domain.models.character import CharacterState
from focusquest.domain.models.event import SEVERITY_ORDER, EventCategory, EventConditionContext, EventGenerationConfig, GameEvent
from focusquest.domain.models.inventory import InventoryState
from focusquest.domain.models.task import ActiveTask
from focusquest.domain.models.task_types import TaskType


@dataclass(frozen=True)
class SessionStatistics:
    total: int
    by_severity: Dict[str, int] = field(default_factory=dict)
    by_category: Dict[str, int] = field(default_factory=dict)
    total_impact: float = 0.0
    beneficial_events: int = 0
    harmful_events: int = 0


class EventTaskIntegration:
    """Drives one event session per task: tuned config, polling, effects, statistics."""

    def __init__(
        self,
        event_bank: EventBank,
        generator: EventGenerator | None = None,
        base_config: EventGenerationConfig = PRODUCTION_EVENT_CONFIG,
        *,
        event_publisher=None,
    ) -> None:
        self._bank = event_bank
        self._generator = generator or EventGenerator(event_bank, base_config)
        self._base_config = base_config
        self._event_publisher = event_publisher
        self._generated: List[GameEvent] = []
        self._logger = logging.getLogger(__name__)

    @property
    def generator(self) -> EventGenerator:
        return self._generator

    @property
    def event_bank(self) -> EventBank:
        return self._bank

    def start_task_events(self, task_type: TaskType | str, base_config: EventGenerationConfig | None = None) -> EventGenerationConfig:
        tuned = event_config_for_task(TaskType.normalize(task_type), base_config or self._base_config)
        self._generator.update_config(
            min_time_between_events_ms=tuned.min_time_between_events_ms,
            max_time_between_events_ms=tuned.max_time_between_events_ms,
            max_events_per_session=tuned.max_events_per_session,
            severity_weights=tuned.severity_weights,
            enabled=tuned.enabled,
        )
        self._generator.start_session()
        self._generated = []
        return tuned

    def build_condition_context(
        self,
        character: CharacterState,
        inventory: InventoryState,
        active_task: ActiveTask | None,
    ) -> EventConditionContext:
        return EventConditionContext(
            character_level=int(character.level),
            current_health=int(character.current_hp),
            max_health=int(character.max_hp),
            is_injured=bool(character.injury.is_injured),
            gold=int(inventory.gold),
            has_weapon=character.equipped_weapon is not None,
            has_armor=character.equipped_armor is not None,
            task_type=active_task.task_type if active_task is not None else TaskType.EXPEDITION,
            task_progress=float(active_task.progress) if active_task is not None else 0.0,
            event_count=len(self._generated),
        )

    def update(
        self,
        task_type: TaskType | str,
        character: CharacterState,
        inventory: InventoryState,
        active_task: ActiveTask | None,
    ) -> Optional[GameEvent]:
        resolved_type = TaskType.normalize(task_type)
        context = self.build_condition_context(character, inventory, active_task)
        result = self._generator.try_generate_event(resolved_type, context)
        if not result.success or result.event is None:
            return None

        event = result.event
        self._generated.append(event)
        if callable(self._event_publisher):
            self._event_publisher(
                GameEventFired(
                    event_id=event.id,
                    template_id=event.template_id,
                    task_type=resolved_type.value,
                    severity=event.severity.value,
                    category=event.category.value,
                )
            )
        return event

    def apply_event(
        self,
        event: GameEvent,
        character: CharacterState,
        inventory: InventoryState,
        active_task: ActiveTask | None = None,
    ) -> EventEffectResult:
        result = apply_event_effects(event, character, inventory, active_task)
        if result.blocked_effects:
            self._logger.info(
                "Event effects partially blocked",
                extra={"event_id": event.id, "blocked": list(result.blocked_effects)},
            )
        return result

    def end_task_events(self) -> List[GameEvent]:
        events = self._generator.end_session()
        self._generated = []
        return events

    def current_events(self) -> List[GameEvent]:
        return list(self._generated)

    def pause(self) -> None:
        self._generator.pause()

    def resume(self) -> None:
        self._generator.resume()

    def reset(self) -> None:
        self._generator.reset()
        self._generated = []

    def session_statistics(self) -> SessionStatistics:
        events = self._generated
        return SessionStatistics(
            total=len(events),
            by_severity={severity.value: sum(1 for event in events if event.severity == severity) for severity in SEVERITY_ORDER},
            by_category={category.value: sum(1 for event in events if event.category == category) for category in EventCategory},
            total_impact=sum(impact_score(event.effects) for event in events),
            beneficial_events=sum(1 for event in events if is_beneficial_event(event.effects)),
            harmful_events=sum(1 for event in events if is_harmful_event(event.effects)),
        )
