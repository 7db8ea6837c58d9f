from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Optional

from focusquest.domain.models.event import (
    SEVERITY_ORDER,
    EventCategory,
    EventConditionContext,
    EventConditions,
    EventSeverity,
    EventTemplate,
)
from focusquest.domain.models.task_types import ALL_TASK_TYPES, TaskType
from focusquest.domain.services.weighted_pick import weighted_pick

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EventSelectionCriteria:
    task_type: TaskType
    condition_context: EventConditionContext
    preferred_severity: Optional[EventSeverity] = None
    exclude_template_ids: FrozenSet[str] = field(default_factory=frozenset)


def conditions_met(conditions: Optional[EventConditions], context: EventConditionContext) -> bool:
    if conditions is None:
        return True
    if conditions.min_level is not None and context.character_level < conditions.min_level:
        return False
    if conditions.max_level is not None and context.character_level > conditions.max_level:
        return False
    health_percent = context.health_percent
    if conditions.min_health_percent is not None and health_percent < conditions.min_health_percent:
        return False
    if conditions.max_health_percent is not None and health_percent > conditions.max_health_percent:
        return False
    if conditions.requires_injury and not context.is_injured:
        return False
    if conditions.requires_not_injured and context.is_injured:
        return False
    if conditions.min_gold is not None and context.gold < conditions.min_gold:
        return False
    if conditions.requires_weapon and not context.has_weapon:
        return False
    if conditions.requires_armor and not context.has_armor:
        return False
    if conditions.custom_condition is not None:
        try:
            return bool(conditions.custom_condition(context))
        except Exception:
            # A broken predicate makes the template ineligible.
            logger.exception("Custom event condition failed", extra={"task_progress": context.task_progress})
            return False
    return True


def progress_in_window(template: EventTemplate, progress: float) -> bool:
    if template.min_progress is not None and progress < template.min_progress:
        return False
    if template.max_progress is not None and progress > template.max_progress:
        return False
    return True


class EventBank:
    """Indexed pool of event templates answering eligibility queries.

    Indices are built once at construction; templates are never mutated.
    """

    def __init__(self, templates: Iterable[EventTemplate], rng: random.Random | None = None) -> None:
        self._templates: List[EventTemplate] = list(templates)
        self._rng = rng or random.Random()
        self._by_severity: Dict[EventSeverity, List[EventTemplate]] = {severity: [] for severity in SEVERITY_ORDER}
        self._by_category: Dict[EventCategory, List[EventTemplate]] = {category: [] for category in EventCategory}
        self._by_task_type: Dict[TaskType, List[EventTemplate]] = {task_type: [] for task_type in ALL_TASK_TYPES}
        self._by_id: Dict[str, EventTemplate] = {}
        for template in self._templates:
            self._by_severity[template.severity].append(template)
            self._by_category[template.category].append(template)
            for task_type in template.applicable_tasks or ALL_TASK_TYPES:
                self._by_task_type[task_type].append(template)
            self._by_id.setdefault(template.template_id, template)

    def all_templates(self) -> List[EventTemplate]:
        return list(self._templates)

    def by_severity(self, severity: EventSeverity | str) -> List[EventTemplate]:
        return list(self._by_severity[EventSeverity.normalize(severity)])

    def by_category(self, category: EventCategory | str) -> List[EventTemplate]:
        return list(self._by_category[EventCategory.normalize(category)])

    def by_task_type(self, task_type: TaskType | str) -> List[EventTemplate]:
        return list(self._by_task_type.get(TaskType.normalize(task_type), []))

    def get(self, template_id: str) -> Optional[EventTemplate]:
        return self._by_id.get(template_id)

    def eligible_templates(self, criteria: EventSelectionCriteria) -> List[EventTemplate]:
        context = criteria.condition_context
        eligible = [
            template
            for template in self._by_task_type.get(criteria.task_type, [])
            if template.template_id not in criteria.exclude_template_ids
            and progress_in_window(template, context.task_progress)
            and conditions_met(template.conditions, context)
        ]
        if criteria.preferred_severity is not None:
            preferred = [template for template in eligible if template.severity == criteria.preferred_severity]
            if preferred:
                eligible = preferred
        return eligible

    def select_random_template(self, criteria: EventSelectionCriteria) -> Optional[EventTemplate]:
        return weighted_pick(self.eligible_templates(criteria), lambda template: template.weight, self._rng)

    def statistics(self) -> Dict[str, object]:
        repeatable = sum(1 for template in self._templates if template.repeatable)
        return {
            "total_templates": len(self._templates),
            "by_severity": {severity.value: len(rows) for severity, rows in self._by_severity.items()},
            "by_category": {category.value: len(rows) for category, rows in self._by_category.items()},
            "repeatable": repeatable,
            "non_repeatable": len(self._templates) - repeatable,
        }
