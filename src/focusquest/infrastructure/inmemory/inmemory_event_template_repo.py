from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from focusquest.domain.models.event import EventTemplate
from focusquest.domain.repositories import EventTemplateRepository
from focusquest.infrastructure.event_template_loader import DEFAULT_EVENT_BANK_PATH, load_event_bank


class InMemoryEventTemplateRepository(EventTemplateRepository):
    """General-purpose event templates, read once from the JSON bank."""

    def __init__(self, templates: Iterable[EventTemplate] | None = None, path: str | Path = DEFAULT_EVENT_BANK_PATH) -> None:
        self._templates: List[EventTemplate] = list(templates) if templates is not None else load_event_bank(path)

    def list_all(self) -> List[EventTemplate]:
        return list(self._templates)
