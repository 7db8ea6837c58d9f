from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

from focusquest.domain.errors import ContentConfigurationError
from focusquest.domain.models.character import CharacterState, InjurySeverity, StatBlock
from focusquest.domain.models.event import EventSeverity, GameEvent
from focusquest.domain.models.task_types import RiskLevel, TaskOutcome, TaskType


@dataclass(frozen=True)
class RiskLevelModifier:
    success_chance_modifier: int
    reward_multiplier: float
    display_name: str
    description: str = ""


@dataclass(frozen=True)
class RewardRange:
    """A min/max pair.

    Config tables hold real ranges. Once rewards are resolved the same shape
    carries a single scalar in both fields, so read resolved rewards via
    ``value`` and never infer anything from ``min != max``.
    """

    min: int
    max: int

    @classmethod
    def resolved(cls, value: int) -> "RewardRange":
        return cls(min=int(value), max=int(value))

    @property
    def value(self) -> int:
        return int(self.min)


@dataclass(frozen=True)
class TaskRewards:
    gold: RewardRange
    xp: RewardRange
    materials: RewardRange
    chests: int = 0
    loot_quality: float = 1.0


@dataclass(frozen=True)
class TaskConfig:
    id: TaskType
    name: str
    description: str
    base_success_chance: int
    primary_stat: str
    risk_modifiers: Mapping[RiskLevel, RiskLevelModifier]
    rewards: TaskRewards
    injury_chance_on_failure: int
    min_level: int = 1
    available: bool = True

    def risk(self, risk_level: RiskLevel | str) -> RiskLevelModifier:
        level = RiskLevel.normalize(risk_level)
        modifier = self.risk_modifiers.get(level)
        if modifier is None:
            raise ContentConfigurationError(f"Task {self.id.value} has no {level.value} risk modifier")
        return modifier


@dataclass(frozen=True)
class TaskEffects:
    success_chance_modifier: Optional[float] = None
    gold_modifier: Optional[int] = None
    health_modifier: Optional[int] = None
    materials_modifier: Optional[int] = None


@dataclass(frozen=True)
class TaskEvent:
    id: str
    timestamp: float
    message: str
    severity: EventSeverity
    effects: TaskEffects = field(default_factory=TaskEffects)

    @classmethod
    def from_game_event(cls, event: GameEvent) -> "TaskEvent":
        effects = event.effects
        return cls(
            id=event.id,
            timestamp=event.timestamp,
            message=event.message,
            severity=event.severity,
            effects=TaskEffects(
                success_chance_modifier=effects.success_chance_modifier,
                gold_modifier=effects.gold_modifier,
                health_modifier=effects.health_modifier,
                materials_modifier=effects.materials_modifier,
            ),
        )


@dataclass(frozen=True)
class TaskSelectionContext:
    character_level: int
    character_stats: StatBlock
    equipment_bonuses: StatBlock = field(default_factory=StatBlock)
    is_injured: bool = False
    injury_penalty: int = 0
    bill_penalty: int = 0

    @classmethod
    def from_character(cls, character: CharacterState) -> "TaskSelectionContext":
        return cls(
            character_level=int(character.level),
            character_stats=character.computed_stats(),
            equipment_bonuses=character.equipment_bonuses(),
            is_injured=bool(character.injury.is_injured),
            injury_penalty=int(character.injury.success_penalty),
            bill_penalty=character.bill_penalty,
        )


@dataclass(frozen=True)
class SuccessCalculation:
    base_chance: int
    stat_modifier: int
    equipment_modifier: int
    risk_modifier: int
    injury_penalty: int
    bill_penalty: int
    event_modifier: float
    final_chance: float
    breakdown: Tuple[str, ...] = ()


@dataclass
class ActiveTask:
    task_type: TaskType
    risk_level: RiskLevel
    config: TaskConfig
    started_at: float
    calculated_success_chance: float
    progress: float = 0.0
    events: List[TaskEvent] = field(default_factory=list)
    outcome: Optional[TaskOutcome] = None
    earned_rewards: Optional[TaskRewards] = None

    def event_success_modifier(self) -> float:
        return sum(float(event.effects.success_chance_modifier or 0) for event in self.events)


@dataclass(frozen=True)
class TaskCompletionResult:
    task: ActiveTask
    outcome: TaskOutcome
    rewards: TaskRewards
    was_injured: bool
    injury_severity: Optional[InjurySeverity]
    event_count: int
    summary: str
    final_success_chance: float = 0.0


@dataclass
class OutcomeTally:
    started: int = 0
    succeeded: int = 0
    partial: int = 0
    failed: int = 0

    def record(self, outcome: TaskOutcome) -> None:
        self.started += 1
        if outcome == TaskOutcome.SUCCESS:
            self.succeeded += 1
        elif outcome == TaskOutcome.PARTIAL:
            self.partial += 1
        else:
            self.failed += 1

    def success_rate(self) -> int:
        """Partial successes count half. Rounded to a whole percent."""
        if self.started == 0:
            return 0
        ratio = (self.succeeded + self.partial * 0.5) / self.started
        return int(ratio * 100 + 0.5)


@dataclass
class TaskStatistics:
    total: OutcomeTally = field(default_factory=OutcomeTally)
    by_type: Dict[TaskType, OutcomeTally] = field(default_factory=dict)
    by_risk: Dict[RiskLevel, OutcomeTally] = field(default_factory=dict)

    def record(self, task_type: TaskType, risk_level: RiskLevel, outcome: TaskOutcome) -> None:
        self.total.record(outcome)
        self.by_type.setdefault(task_type, OutcomeTally()).record(outcome)
        self.by_risk.setdefault(risk_level, OutcomeTally()).record(outcome)

    def for_type(self, task_type: TaskType) -> OutcomeTally:
        return self.by_type.get(task_type, OutcomeTally())

    def for_risk(self, risk_level: RiskLevel) -> OutcomeTally:
        return self.by_risk.get(risk_level, OutcomeTally())
