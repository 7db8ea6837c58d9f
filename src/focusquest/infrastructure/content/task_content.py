from __future__ import annotations

from typing import Optional, Tuple

from focusquest.domain.models.event import EffectRange, EventCategory, EventEffectRanges, EventSeverity, EventTemplate
from focusquest.domain.models.task_definition import ProgressFlavorBand, TaskMilestone
from focusquest.domain.models.task_types import TaskType


def task_event(
    template_id: str,
    task_type: TaskType,
    severity: EventSeverity,
    category: EventCategory,
    messages: Tuple[str, ...],
    weight: float,
    *,
    min_progress: Optional[float] = None,
    success: Optional[float] = None,
    gold: Optional[int] = None,
    health: Optional[int] = None,
    materials: Optional[int] = None,
) -> EventTemplate:
    """A task-specific template. Task events carry fixed effects rather than ranges."""

    def fixed(value):
        return EffectRange.fixed(value) if value is not None else None

    return EventTemplate(
        template_id=template_id,
        severity=severity,
        category=category,
        messages=messages,
        effects=EventEffectRanges(
            success_chance_modifier=fixed(success),
            gold_modifier=fixed(gold),
            health_modifier=fixed(health),
            materials_modifier=fixed(materials),
        ),
        weight=weight,
        applicable_tasks=(task_type,),
        repeatable=True,
        min_progress=min_progress,
    )


def milestones(*rows: Tuple[float, str]) -> Tuple[TaskMilestone, ...]:
    return tuple(TaskMilestone(progress=progress, description=text) for progress, text in rows)


def flavor_bands(*rows: Tuple[float, str]) -> Tuple[ProgressFlavorBand, ...]:
    return tuple(ProgressFlavorBand(upper_bound=bound, text=text) for bound, text in rows)
