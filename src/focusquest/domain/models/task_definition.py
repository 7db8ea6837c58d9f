from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Mapping, Tuple

from focusquest.domain.models.event import EventTemplate
from focusquest.domain.models.task_types import TaskOutcome, TaskType


@dataclass(frozen=True)
class TaskMilestone:
    progress: float
    description: str


@dataclass(frozen=True)
class ProgressFlavorBand:
    """Text shown while progress is below ``upper_bound``."""

    upper_bound: float
    text: str


@dataclass(frozen=True)
class TaskDefinition:
    task_type: TaskType
    event_templates: Tuple[EventTemplate, ...] = ()
    milestones: Tuple[TaskMilestone, ...] = ()
    progress_flavor_bands: Tuple[ProgressFlavorBand, ...] = ()
    final_flavor: str = ""
    start_messages: Tuple[str, ...] = ()
    completion_flavor: Mapping[TaskOutcome, Tuple[str, ...]] = field(default_factory=dict)

    def progress_flavor(self, progress: float) -> str:
        for band in sorted(self.progress_flavor_bands, key=lambda row: row.upper_bound):
            if progress < band.upper_bound:
                return band.text
        return self.final_flavor

    def start_message(self, rng: random.Random | None = None) -> str:
        if not self.start_messages:
            return ""
        resolved_rng = rng or random.Random()
        return resolved_rng.choice(self.start_messages)

    def completion_message(self, outcome: TaskOutcome, rng: random.Random | None = None) -> str:
        lines = self.completion_flavor.get(outcome, ())
        if not lines:
            return ""
        resolved_rng = rng or random.Random()
        return resolved_rng.choice(lines)
