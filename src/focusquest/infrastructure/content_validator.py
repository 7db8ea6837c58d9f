"""Validate event template banks and shipped task content.

Usage examples:
    python -m focusquest.infrastructure.content_validator
    python -m focusquest.infrastructure.content_validator --path my_events.json
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Iterable, Sequence

from focusquest.application.services.balance_tables import EVENT_BALANCING
from focusquest.domain.errors import ContentConfigurationError
from focusquest.domain.models.event import EventTemplate
from focusquest.domain.models.item import ItemTemplate, ItemType
from focusquest.infrastructure.event_template_loader import DEFAULT_EVENT_BANK_PATH, parse_event_template, template_rows
from focusquest.infrastructure.inmemory.inmemory_item_template_repo import (
    ACCESSORY_TEMPLATES,
    ARMOR_TEMPLATES,
    WEAPON_TEMPLATES,
)
from focusquest.infrastructure.inmemory.inmemory_task_definition_repo import DEFAULT_TASK_DEFINITIONS

# effect field -> (balancing key for the lowest allowed min, balancing key for the highest allowed max)
_CEILINGS = {
    "gold_modifier": ("max_gold_loss", "max_gold_gain"),
    "health_modifier": ("max_health_damage", "max_health_heal"),
    "success_chance_modifier": ("max_success_penalty", "max_success_bonus"),
    "materials_modifier": (None, "max_materials_gain"),
    "durability_damage": (None, "max_durability_damage"),
    "extra_chests": (None, "max_extra_chests"),
    "xp_modifier": (None, "max_xp_gain"),
}

_SUBTYPE_FIELDS = {
    ItemType.WEAPON: "weapon_type",
    ItemType.ARMOR: "armor_type",
    ItemType.ACCESSORY: "accessory_type",
    ItemType.CONSUMABLE: "consumable_type",
    ItemType.MATERIAL: "material_type",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Validate event template banks and shipped task content")
    parser.add_argument(
        "--path",
        default=None,
        help="Path to an event bank JSON file (defaults to the shipped bank plus task content)",
    )
    return parser


def check_template(template: EventTemplate, *, enforce_balancing: bool = True) -> list[str]:
    errors: list[str] = []
    label = template.template_id
    if template.weight < 0:
        errors.append(f"Template {label!r} has a negative weight: {template.weight}")
    if (
        template.min_progress is not None
        and template.max_progress is not None
        and template.min_progress > template.max_progress
    ):
        errors.append(f"Template {label!r} has min_progress above max_progress")

    for name, bounds in template.effects.present().items():
        if bounds.min > bounds.max:
            errors.append(f"Template {label!r} effect {name} has min {bounds.min} above max {bounds.max}")
        if not enforce_balancing:
            continue
        low_key, high_key = _CEILINGS.get(name, (None, None))
        if low_key is not None and bounds.min < EVENT_BALANCING[low_key]:
            errors.append(f"Template {label!r} effect {name} min {bounds.min} is below {low_key} {EVENT_BALANCING[low_key]}")
        if high_key is not None and bounds.max > EVENT_BALANCING[high_key]:
            errors.append(f"Template {label!r} effect {name} max {bounds.max} exceeds {high_key} {EVENT_BALANCING[high_key]}")
    return errors


def validate_event_payload(payload: Any) -> list[str]:
    try:
        rows = template_rows(payload)
    except ContentConfigurationError as exc:
        return [str(exc)]

    errors: list[str] = []
    seen: set[str] = set()
    for index, row in enumerate(rows):
        try:
            template = parse_event_template(row)
        except ContentConfigurationError as exc:
            errors.append(f"Template #{index}: {exc}")
            continue
        if template.template_id in seen:
            errors.append(f"Duplicate template id {template.template_id!r}")
        seen.add(template.template_id)
        errors.extend(check_template(template))
    return errors


def validate_event_file(path: str | Path) -> list[str]:
    source = Path(path)
    if not source.exists():
        return [f"File not found: {source}"]
    try:
        payload = json.loads(source.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        return [f"Invalid JSON: {exc}"]
    return validate_event_payload(payload)


def validate_item_templates(templates: Iterable[ItemTemplate]) -> list[str]:
    errors: list[str] = []
    for template in templates:
        subtype_field = _SUBTYPE_FIELDS[template.type]
        if not getattr(template, subtype_field):
            errors.append(f"Item template {template.id!r} ({template.type.value}) is missing {subtype_field}")
        for stat, (low, high) in template.stat_ranges.present().items():
            if low > high:
                errors.append(f"Item template {template.id!r} stat {stat} has min {low} above max {high}")
    return errors


def validate_task_content() -> list[str]:
    """Task-specific templates use fixed effects and are not held to the general ceilings."""
    errors: list[str] = []
    seen: set[str] = set()
    for definition in DEFAULT_TASK_DEFINITIONS:
        for template in definition.event_templates:
            if template.template_id in seen:
                errors.append(f"Duplicate template id {template.template_id!r}")
            seen.add(template.template_id)
            errors.extend(check_template(template, enforce_balancing=False))
        progress_points = [milestone.progress for milestone in definition.milestones]
        if len(progress_points) != len(set(progress_points)):
            errors.append(f"Task {definition.task_type.value} has duplicate milestone progress values")
        if any(point < 0 or point > 100 for point in progress_points):
            errors.append(f"Task {definition.task_type.value} has a milestone outside 0-100")
    errors.extend(validate_item_templates(WEAPON_TEMPLATES + ARMOR_TEMPLATES + ACCESSORY_TEMPLATES))
    return errors


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.path:
        errors = validate_event_file(args.path)
    else:
        errors = validate_event_file(DEFAULT_EVENT_BANK_PATH) + validate_task_content()

    if errors:
        print(f"Event content invalid ({len(errors)} errors):")
        for message in errors:
            print(f"- {message}")
        return 1

    print("Event content valid.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
