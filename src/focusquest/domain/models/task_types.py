from __future__ import annotations

from enum import Enum

from focusquest.domain.errors import ContentConfigurationError


class TaskType(str, Enum):
    EXPEDITION = "expedition"
    RAID = "raid"
    CRAFT = "craft"
    HUNT = "hunt"
    REST = "rest"

    @classmethod
    def normalize(cls, value: "TaskType | str") -> "TaskType":
        if isinstance(value, cls):
            return value
        key = str(value or "").strip().lower()
        try:
            return cls(key)
        except ValueError as exc:
            raise ContentConfigurationError(f"Unknown task type: {value}") from exc


class RiskLevel(str, Enum):
    SAFE = "safe"
    STANDARD = "standard"
    RISKY = "risky"

    @classmethod
    def normalize(cls, value: "RiskLevel | str") -> "RiskLevel":
        if isinstance(value, cls):
            return value
        key = str(value or "").strip().lower()
        try:
            return cls(key)
        except ValueError as exc:
            raise ContentConfigurationError(f"Unknown risk level: {value}") from exc


class TaskOutcome(str, Enum):
    SUCCESS = "success"
    PARTIAL = "partial"
    FAILURE = "failure"


ALL_TASK_TYPES: tuple[TaskType, ...] = tuple(TaskType)
RISK_ORDER: tuple[RiskLevel, ...] = (RiskLevel.SAFE, RiskLevel.STANDARD, RiskLevel.RISKY)
