from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from focusquest.domain.errors import ContentConfigurationError
from focusquest.domain.models.task_types import TaskType


class EventSeverity(str, Enum):
    FLAVOR = "flavor"
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"

    @classmethod
    def normalize(cls, value: "EventSeverity | str") -> "EventSeverity":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError as exc:
            raise ContentConfigurationError(f"Unknown event severity: {value}") from exc


class EventCategory(str, Enum):
    COMBAT = "combat"
    LOOT = "loot"
    HAZARD = "hazard"
    NPC = "npc"
    FORTUNE = "fortune"
    EQUIPMENT = "equipment"
    HEALTH = "health"
    ECONOMY = "economy"
    MYSTERY = "mystery"

    @classmethod
    def normalize(cls, value: "EventCategory | str") -> "EventCategory":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError as exc:
            raise ContentConfigurationError(f"Unknown event category: {value}") from exc


SEVERITY_ORDER: Tuple[EventSeverity, ...] = (
    EventSeverity.FLAVOR,
    EventSeverity.INFO,
    EventSeverity.WARNING,
    EventSeverity.CRITICAL,
)

# Sampled values for these fields keep their fraction; every other field is floored.
FRACTIONAL_EFFECT_FIELDS = frozenset({"success_chance_modifier", "loot_quality_modifier"})


@dataclass(frozen=True)
class EffectRange:
    min: float
    max: float

    @classmethod
    def fixed(cls, value: float) -> "EffectRange":
        return cls(min=value, max=value)


@dataclass(frozen=True)
class EventEffectRanges:
    success_chance_modifier: Optional[EffectRange] = None
    gold_modifier: Optional[EffectRange] = None
    health_modifier: Optional[EffectRange] = None
    materials_modifier: Optional[EffectRange] = None
    durability_damage: Optional[EffectRange] = None
    extra_chests: Optional[EffectRange] = None
    loot_quality_modifier: Optional[EffectRange] = None
    xp_modifier: Optional[EffectRange] = None

    def present(self) -> Dict[str, EffectRange]:
        return {item.name: getattr(self, item.name) for item in fields(self) if getattr(self, item.name) is not None}


@dataclass(frozen=True)
class EventEffects:
    success_chance_modifier: Optional[float] = None
    gold_modifier: Optional[int] = None
    health_modifier: Optional[int] = None
    materials_modifier: Optional[int] = None
    durability_damage: Optional[int] = None
    extra_chests: Optional[int] = None
    loot_quality_modifier: Optional[float] = None
    xp_modifier: Optional[int] = None

    def present(self) -> Dict[str, float]:
        return {item.name: getattr(self, item.name) for item in fields(self) if getattr(self, item.name) is not None}


@dataclass(frozen=True)
class EventConditionContext:
    character_level: int
    current_health: int
    max_health: int
    is_injured: bool
    gold: int
    has_weapon: bool
    has_armor: bool
    task_type: TaskType
    task_progress: float = 0.0
    event_count: int = 0

    @property
    def health_percent(self) -> float:
        if self.max_health <= 0:
            return 0.0
        return (self.current_health / self.max_health) * 100


@dataclass(frozen=True)
class EventConditions:
    min_level: Optional[int] = None
    max_level: Optional[int] = None
    min_health_percent: Optional[float] = None
    max_health_percent: Optional[float] = None
    requires_injury: bool = False
    requires_not_injured: bool = False
    min_gold: Optional[int] = None
    requires_weapon: bool = False
    requires_armor: bool = False
    custom_condition: Optional[Callable[[EventConditionContext], bool]] = None


@dataclass(frozen=True)
class VisualCue:
    type: str
    color: Optional[str] = None
    duration: Optional[int] = None


@dataclass(frozen=True)
class EventTemplate:
    template_id: str
    severity: EventSeverity
    category: EventCategory
    messages: Tuple[str, ...]
    effects: EventEffectRanges = field(default_factory=EventEffectRanges)
    weight: float = 1.0
    applicable_tasks: Tuple[TaskType, ...] = ()
    repeatable: bool = True
    min_progress: Optional[float] = None
    max_progress: Optional[float] = None
    conditions: Optional[EventConditions] = None
    visual_cue: Optional[VisualCue] = None

    def applies_to(self, task_type: TaskType) -> bool:
        return not self.applicable_tasks or task_type in self.applicable_tasks


@dataclass
class GameEvent:
    id: str
    template_id: str
    severity: EventSeverity
    category: EventCategory
    timestamp: float
    message: str
    effects: EventEffects = field(default_factory=EventEffects)
    visual_cue: Optional[VisualCue] = None
    acknowledged: bool = False


@dataclass(frozen=True)
class SeverityWeights:
    flavor: float
    info: float
    warning: float
    critical: float

    def as_pairs(self) -> Tuple[Tuple[EventSeverity, float], ...]:
        return (
            (EventSeverity.FLAVOR, float(self.flavor)),
            (EventSeverity.INFO, float(self.info)),
            (EventSeverity.WARNING, float(self.warning)),
            (EventSeverity.CRITICAL, float(self.critical)),
        )


@dataclass(frozen=True)
class EventGenerationConfig:
    min_time_between_events_ms: int
    max_time_between_events_ms: int
    max_events_per_session: int
    severity_weights: SeverityWeights
    enabled: bool = True
