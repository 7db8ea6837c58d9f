from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from focusquest.domain.models.task_definition import TaskDefinition
from focusquest.domain.models.task_types import TaskType
from focusquest.domain.repositories import TaskDefinitionRepository
from focusquest.infrastructure.content.craft import CRAFT_DEFINITION
from focusquest.infrastructure.content.expedition import EXPEDITION_DEFINITION
from focusquest.infrastructure.content.hunt import HUNT_DEFINITION
from focusquest.infrastructure.content.raid import RAID_DEFINITION
from focusquest.infrastructure.content.rest import REST_DEFINITION

DEFAULT_TASK_DEFINITIONS = (
    EXPEDITION_DEFINITION,
    RAID_DEFINITION,
    CRAFT_DEFINITION,
    HUNT_DEFINITION,
    REST_DEFINITION,
)


class InMemoryTaskDefinitionRepository(TaskDefinitionRepository):
    def __init__(self, definitions: Iterable[TaskDefinition] | None = None) -> None:
        rows = definitions if definitions is not None else DEFAULT_TASK_DEFINITIONS
        self._definitions: Dict[TaskType, TaskDefinition] = {row.task_type: row for row in rows}

    def get(self, task_type: TaskType) -> Optional[TaskDefinition]:
        return self._definitions.get(TaskType.normalize(task_type))

    def list_all(self) -> List[TaskDefinition]:
        return list(self._definitions.values())
