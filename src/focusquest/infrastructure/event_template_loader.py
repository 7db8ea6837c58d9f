"""Parse event template banks from their JSON form.

A bank is either a list of template objects or ``{"version": 1, "templates": [...]}``.
Keys are snake_case; effect fields hold ``{"min": x, "max": y}`` ranges.
"""

from __future__ import annotations

import json
from dataclasses import fields
from pathlib import Path
from typing import Any, List, Mapping, Optional

from focusquest.domain.errors import ContentConfigurationError
from focusquest.domain.models.event import (
    EffectRange,
    EventCategory,
    EventConditions,
    EventEffectRanges,
    EventSeverity,
    EventTemplate,
    VisualCue,
)
from focusquest.domain.models.task_types import TaskType

DEFAULT_EVENT_BANK_PATH = Path(__file__).resolve().parent / "content" / "data" / "event_bank.json"

_EFFECT_FIELDS = frozenset(item.name for item in fields(EventEffectRanges))
_CONDITION_FIELDS = frozenset(item.name for item in fields(EventConditions) if item.name != "custom_condition")
_BOOL_CONDITIONS = frozenset({"requires_injury", "requires_not_injured", "requires_weapon", "requires_armor"})


def _fail(template_id: str, field_name: str, problem: str) -> ContentConfigurationError:
    return ContentConfigurationError(f"Event template {template_id!r} field {field_name!r}: {problem}")


def _number(value: Any, template_id: str, field_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _fail(template_id, field_name, f"expected a number, got {value!r}")
    return value


def _optional_number(raw: Mapping[str, Any], key: str, template_id: str) -> Optional[float]:
    if raw.get(key) is None:
        return None
    return _number(raw[key], template_id, key)


def _effects(raw: Any, template_id: str) -> EventEffectRanges:
    if raw is None:
        return EventEffectRanges()
    if not isinstance(raw, Mapping):
        raise _fail(template_id, "effects", "expected an object")
    ranges = {}
    for name, bounds in raw.items():
        if name not in _EFFECT_FIELDS:
            raise _fail(template_id, f"effects.{name}", "unknown effect")
        if not isinstance(bounds, Mapping) or "min" not in bounds or "max" not in bounds:
            raise _fail(template_id, f"effects.{name}", "expected {min, max}")
        ranges[name] = EffectRange(
            min=_number(bounds["min"], template_id, f"effects.{name}.min"),
            max=_number(bounds["max"], template_id, f"effects.{name}.max"),
        )
    return EventEffectRanges(**ranges)


def _conditions(raw: Any, template_id: str) -> Optional[EventConditions]:
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raise _fail(template_id, "conditions", "expected an object")
    values = {}
    for name, value in raw.items():
        if name not in _CONDITION_FIELDS:
            raise _fail(template_id, f"conditions.{name}", "unknown condition")
        if name in _BOOL_CONDITIONS:
            if not isinstance(value, bool):
                raise _fail(template_id, f"conditions.{name}", "expected true or false")
            values[name] = value
        else:
            values[name] = _number(value, template_id, f"conditions.{name}")
    return EventConditions(**values)


def _visual_cue(raw: Any, template_id: str) -> Optional[VisualCue]:
    if raw is None:
        return None
    if not isinstance(raw, Mapping) or not str(raw.get("type", "")).strip():
        raise _fail(template_id, "visual_cue", "expected an object with a type")
    duration = raw.get("duration")
    return VisualCue(
        type=str(raw["type"]),
        color=str(raw["color"]) if raw.get("color") is not None else None,
        duration=int(_number(duration, template_id, "visual_cue.duration")) if duration is not None else None,
    )


def parse_event_template(raw: Any) -> EventTemplate:
    if not isinstance(raw, Mapping):
        raise ContentConfigurationError(f"Event template must be an object, got {type(raw).__name__}")
    template_id = str(raw.get("template_id") or "").strip()
    if not template_id:
        raise ContentConfigurationError("Event template is missing 'template_id'")

    try:
        severity = EventSeverity.normalize(raw.get("severity"))
    except ContentConfigurationError as exc:
        raise _fail(template_id, "severity", str(exc)) from exc
    try:
        category = EventCategory.normalize(raw.get("category"))
    except ContentConfigurationError as exc:
        raise _fail(template_id, "category", str(exc)) from exc

    messages = raw.get("messages")
    if not isinstance(messages, list) or not messages or not all(isinstance(row, str) for row in messages):
        raise _fail(template_id, "messages", "expected a non-empty list of strings")

    applicable = raw.get("applicable_tasks") or []
    if not isinstance(applicable, list):
        raise _fail(template_id, "applicable_tasks", "expected a list")
    try:
        applicable_tasks = tuple(TaskType.normalize(row) for row in applicable)
    except ContentConfigurationError as exc:
        raise _fail(template_id, "applicable_tasks", str(exc)) from exc

    repeatable = raw.get("repeatable", True)
    if not isinstance(repeatable, bool):
        raise _fail(template_id, "repeatable", "expected true or false")

    return EventTemplate(
        template_id=template_id,
        severity=severity,
        category=category,
        messages=tuple(messages),
        effects=_effects(raw.get("effects"), template_id),
        weight=_number(raw.get("weight", 1), template_id, "weight"),
        applicable_tasks=applicable_tasks,
        repeatable=repeatable,
        min_progress=_optional_number(raw, "min_progress", template_id),
        max_progress=_optional_number(raw, "max_progress", template_id),
        conditions=_conditions(raw.get("conditions"), template_id),
        visual_cue=_visual_cue(raw.get("visual_cue"), template_id),
    )


def template_rows(payload: Any) -> List[Any]:
    if isinstance(payload, Mapping):
        payload = payload.get("templates")
    if not isinstance(payload, list):
        raise ContentConfigurationError("Event bank must be a list of templates or an object with 'templates'")
    return payload


def parse_event_bank(payload: Any) -> List[EventTemplate]:
    return [parse_event_template(row) for row in template_rows(payload)]


def load_event_bank(path: str | Path = DEFAULT_EVENT_BANK_PATH) -> List[EventTemplate]:
    source = Path(path)
    try:
        payload = json.loads(source.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ContentConfigurationError(f"Invalid JSON in {source}: {exc}") from exc
    return parse_event_bank(payload)
