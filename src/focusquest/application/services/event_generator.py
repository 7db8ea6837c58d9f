from __future__ import annotations

import dataclasses
import logging
import math
import random
import string
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Set

from focusquest.application.services.balance_tables import (
    EVENT_RETRY_CAP_REACHED_MS,
    EVENT_RETRY_DISABLED_MS,
    EVENT_RETRY_PAUSED_MS,
    PRODUCTION_EVENT_CONFIG,
    VISUAL_CUE_DEFAULT_DURATION_MS,
)
from focusquest.application.services.event_bank import EventBank, EventSelectionCriteria
from focusquest.domain.models.event import (
    FRACTIONAL_EFFECT_FIELDS,
    EventConditionContext,
    EventEffects,
    EventGenerationConfig,
    EventSeverity,
    EventTemplate,
    GameEvent,
    VisualCue,
)
from focusquest.domain.models.task_types import TaskType

_ID_ALPHABET = string.ascii_lowercase + string.digits

REASON_DISABLED = "Event generation is disabled"
REASON_PAUSED = "Event generation is paused"
REASON_CAP_REACHED = "Maximum events per session reached"
REASON_NOT_YET = "Not yet time for next event"
REASON_NO_TEMPLATE = "No eligible event templates found"


def wall_clock_ms() -> float:
    return time.time() * 1000


@dataclass(frozen=True)
class EventGenerationResult:
    success: bool
    next_attempt_time: float
    event: Optional[GameEvent] = None
    reason: Optional[str] = None


@dataclass
class EventGeneratorState:
    last_event_timestamp: float = 0.0
    session_events: List[GameEvent] = field(default_factory=list)
    fired_template_ids: Set[str] = field(default_factory=set)
    is_paused: bool = False
    next_event_time: Optional[float] = None


def _magnitude(value: float) -> str:
    number = abs(value)
    return str(int(number)) if float(number).is_integer() else f"{number:g}"


def fill_placeholders(message: str, effects: EventEffects) -> str:
    """Substitute the first occurrence of each placeholder with the sampled magnitude."""
    result = message
    if effects.gold_modifier is not None:
        result = result.replace("{gold}", _magnitude(effects.gold_modifier), 1)
    if effects.health_modifier is not None:
        result = result.replace("{damage}", _magnitude(effects.health_modifier), 1)
        result = result.replace("{heal}", _magnitude(effects.health_modifier), 1)
    if effects.materials_modifier is not None:
        result = result.replace("{materials}", _magnitude(effects.materials_modifier), 1)
    if effects.durability_damage is not None:
        result = result.replace("{durability}", _magnitude(effects.durability_damage), 1)
    if effects.extra_chests is not None:
        result = result.replace("{chests}", _magnitude(effects.extra_chests), 1)
    if effects.success_chance_modifier is not None:
        result = result.replace("{success}", f"{abs(effects.success_chance_modifier):.1f}", 1)
    if effects.xp_modifier is not None:
        result = result.replace("{xp}", _magnitude(effects.xp_modifier), 1)
    return result


class EventGenerator:
    """Per-session, wall-clock rate-limited event scheduler.

    The driver polls ``try_generate_event`` at any cadence. Refusals never
    raise; callers get a result with a reason and the time worth trying
    again. Content errors, such as an unknown task type, still raise
    ``ContentConfigurationError``.
    """

    def __init__(
        self,
        event_bank: EventBank,
        config: EventGenerationConfig = PRODUCTION_EVENT_CONFIG,
        *,
        rng: random.Random | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._bank = event_bank
        self._config = config
        self._rng = rng or random.Random()
        self._clock = clock or wall_clock_ms
        self._state = EventGeneratorState()
        self._logger = logging.getLogger(__name__)

    @property
    def config(self) -> EventGenerationConfig:
        return self._config

    def start_session(self) -> None:
        self._state.session_events = []
        self._state.fired_template_ids = set()
        self._state.is_paused = False
        self._state.last_event_timestamp = self._clock()
        self._state.next_event_time = self._schedule_next()

    def end_session(self) -> List[GameEvent]:
        events = self._state.session_events
        self._state.session_events = []
        self._state.next_event_time = None
        return events

    def pause(self) -> None:
        self._state.is_paused = True

    def resume(self) -> None:
        self._state.is_paused = False

    def reset(self) -> None:
        self._state = EventGeneratorState()

    def update_config(self, **changes) -> None:
        self._config = dataclasses.replace(self._config, **changes)

    def current_session_events(self) -> List[GameEvent]:
        return list(self._state.session_events)

    def state(self) -> EventGeneratorState:
        return dataclasses.replace(
            self._state,
            session_events=list(self._state.session_events),
            fired_template_ids=set(self._state.fired_template_ids),
        )

    def try_generate_event(self, task_type: TaskType, context: EventConditionContext) -> EventGenerationResult:
        now = self._clock()
        if not self._config.enabled:
            return EventGenerationResult(False, now + EVENT_RETRY_DISABLED_MS, reason=REASON_DISABLED)
        if self._state.is_paused:
            return EventGenerationResult(False, now + EVENT_RETRY_PAUSED_MS, reason=REASON_PAUSED)
        if len(self._state.session_events) >= self._config.max_events_per_session:
            return EventGenerationResult(False, now + EVENT_RETRY_CAP_REACHED_MS, reason=REASON_CAP_REACHED)
        next_time = self._state.next_event_time
        if next_time and now < next_time:
            return EventGenerationResult(False, next_time, reason=REASON_NOT_YET)

        criteria = EventSelectionCriteria(
            task_type=TaskType.normalize(task_type),
            condition_context=context,
            preferred_severity=self._select_severity(),
            exclude_template_ids=frozenset(self._state.fired_template_ids),
        )
        template = self._bank.select_random_template(criteria)
        if template is None:
            self._state.next_event_time = self._schedule_next()
            self._logger.info(
                "No eligible event template",
                extra={"task_type": criteria.task_type.value, "severity": criteria.preferred_severity.value},
            )
            return EventGenerationResult(False, self._state.next_event_time, reason=REASON_NO_TEMPLATE)

        event = self.instantiate(template)
        self._state.session_events.append(event)
        self._state.last_event_timestamp = now
        if not template.repeatable:
            self._state.fired_template_ids.add(template.template_id)
        self._state.next_event_time = self._schedule_next()
        return EventGenerationResult(True, self._state.next_event_time, event=event)

    def instantiate(self, template: EventTemplate) -> GameEvent:
        now = self._clock()
        message = template.messages[math.floor(self._rng.random() * len(template.messages))] if template.messages else ""
        effects = self.sample_effects(template)
        visual_cue = None
        if template.visual_cue is not None:
            visual_cue = VisualCue(
                type=template.visual_cue.type,
                color=template.visual_cue.color,
                duration=template.visual_cue.duration or VISUAL_CUE_DEFAULT_DURATION_MS,
            )
        suffix = "".join(self._rng.choice(_ID_ALPHABET) for _ in range(9))
        return GameEvent(
            id=f"event_{int(now)}_{suffix}",
            template_id=template.template_id,
            severity=template.severity,
            category=template.category,
            timestamp=now,
            message=fill_placeholders(message, effects),
            effects=effects,
            visual_cue=visual_cue,
        )

    def sample_effects(self, template: EventTemplate) -> EventEffects:
        sampled = {}
        for name, effect_range in template.effects.present().items():
            value = effect_range.min + self._rng.random() * (effect_range.max - effect_range.min)
            sampled[name] = value if name in FRACTIONAL_EFFECT_FIELDS else math.floor(value)
        return EventEffects(**sampled)

    def _select_severity(self) -> EventSeverity:
        pairs = self._config.severity_weights.as_pairs()
        remaining = self._rng.random() * sum(weight for _, weight in pairs)
        for severity, weight in pairs[:-1]:
            if remaining < weight:
                return severity
            remaining -= weight
        return pairs[-1][0]

    def _schedule_next(self) -> float:
        low = self._config.min_time_between_events_ms
        high = self._config.max_time_between_events_ms
        return self._clock() + low + self._rng.random() * (high - low)
