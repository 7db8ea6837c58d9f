from dataclasses import dataclass
from typing import Optional


@dataclass
class TaskStarted:
    task_type: str
    risk_level: str
    success_chance: float
    started_at: float


@dataclass
class TaskCompleted:
    task_type: str
    risk_level: str
    outcome: str
    gold: int
    xp: int
    chests: int
    event_count: int


@dataclass
class GameEventFired:
    event_id: str
    template_id: str
    task_type: str
    severity: str
    category: str


@dataclass
class InjuryApplied:
    severity: str
    success_penalty: int
    source_task: Optional[str] = None


@dataclass
class ChestOpened:
    chest_id: str
    quality: str
    item_count: int
    gold: int
    was_lucky: bool
