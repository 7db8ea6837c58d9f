from abc import ABC, abstractmethod
from typing import List, Optional

from focusquest.domain.models.event import EventTemplate
from focusquest.domain.models.item import ConsumableItem, ItemTemplate, ItemType
from focusquest.domain.models.loot import LootTable
from focusquest.domain.models.task import TaskConfig
from focusquest.domain.models.task_definition import TaskDefinition
from focusquest.domain.models.task_types import TaskType


class TaskConfigRepository(ABC):
    @abstractmethod
    def get(self, task_type: TaskType) -> TaskConfig:
        """Return the config or raise ContentConfigurationError for unknown types."""
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> List[TaskConfig]:
        raise NotImplementedError

    def list_available(self) -> List[TaskConfig]:
        return [config for config in self.list_all() if config.available]

    def list_for_level(self, level: int) -> List[TaskConfig]:
        return [config for config in self.list_available() if config.min_level <= int(level)]

    def is_available(self, task_type: TaskType, level: int) -> bool:
        return any(config.id == task_type for config in self.list_for_level(level))


class EventTemplateRepository(ABC):
    @abstractmethod
    def list_all(self) -> List[EventTemplate]:
        raise NotImplementedError


class TaskDefinitionRepository(ABC):
    @abstractmethod
    def get(self, task_type: TaskType) -> Optional[TaskDefinition]:
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> List[TaskDefinition]:
        raise NotImplementedError


class ItemTemplateRepository(ABC):
    @abstractmethod
    def get(self, template_id: str) -> Optional[ItemTemplate]:
        raise NotImplementedError

    @abstractmethod
    def list_by_type(self, item_type: ItemType) -> List[ItemTemplate]:
        raise NotImplementedError

    @abstractmethod
    def get_consumable(self, consumable_id: str) -> Optional[ConsumableItem]:
        raise NotImplementedError


class LootTableRepository(ABC):
    @abstractmethod
    def get(self, task_type: TaskType) -> LootTable:
        raise NotImplementedError
