from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from focusquest.application.services.balance_tables import (
    INJURY_CHANCE_FLOOR,
    INJURY_HEALING_COST,
    INJURY_SUCCESS_PENALTY,
)
from focusquest.application.services.event_generator import wall_clock_ms
from focusquest.domain.events import InjuryApplied
from focusquest.domain.models.character import CharacterState, InjuryState, InjurySeverity
from focusquest.domain.models.task_types import RiskLevel, TaskOutcome, TaskType
from focusquest.domain.services.task_resolution import determine_injury_severity, reduced_injury_chance


@dataclass(frozen=True)
class InjurySeverityConfig:
    success_penalty: int
    power_penalty: int
    focus_penalty: int
    healing_cost: int
    display_name: str
    description: str


INJURY_SEVERITY_CONFIG: Dict[InjurySeverity, InjurySeverityConfig] = {
    InjurySeverity.MINOR: InjurySeverityConfig(
        success_penalty=INJURY_SUCCESS_PENALTY[InjurySeverity.MINOR],
        power_penalty=INJURY_SUCCESS_PENALTY[InjurySeverity.MINOR],
        focus_penalty=INJURY_SUCCESS_PENALTY[InjurySeverity.MINOR],
        healing_cost=INJURY_HEALING_COST[InjurySeverity.MINOR],
        display_name="Minor Injury",
        description="A light wound that slightly impairs performance",
    ),
    InjurySeverity.MODERATE: InjurySeverityConfig(
        success_penalty=INJURY_SUCCESS_PENALTY[InjurySeverity.MODERATE],
        power_penalty=INJURY_SUCCESS_PENALTY[InjurySeverity.MODERATE],
        focus_penalty=INJURY_SUCCESS_PENALTY[InjurySeverity.MODERATE],
        healing_cost=INJURY_HEALING_COST[InjurySeverity.MODERATE],
        display_name="Moderate Injury",
        description="A painful injury that significantly affects combat ability",
    ),
    InjurySeverity.SEVERE: InjurySeverityConfig(
        success_penalty=INJURY_SUCCESS_PENALTY[InjurySeverity.SEVERE],
        power_penalty=INJURY_SUCCESS_PENALTY[InjurySeverity.SEVERE],
        focus_penalty=INJURY_SUCCESS_PENALTY[InjurySeverity.SEVERE],
        healing_cost=INJURY_HEALING_COST[InjurySeverity.SEVERE],
        display_name="Severe Injury",
        description="A critical wound requiring immediate medical attention",
    ),
}


@dataclass(frozen=True)
class InjuryApplicationResult:
    was_applied: bool
    severity: Optional[InjurySeverity]
    message: str


@dataclass(frozen=True)
class StatPenalties:
    power: int = 0
    focus: int = 0


def severity_config(severity: InjurySeverity | str) -> InjurySeverityConfig:
    return INJURY_SEVERITY_CONFIG[InjurySeverity(severity)]


class InjuryService:
    def __init__(
        self,
        *,
        rng: random.Random | None = None,
        clock: Callable[[], float] | None = None,
        event_publisher=None,
    ) -> None:
        self._rng = rng or random.Random()
        self._clock = clock or wall_clock_ms
        self._event_publisher = event_publisher
        self._logger = logging.getLogger(__name__)

    def should_apply_injury(self, outcome: TaskOutcome, injury_chance: int, defense: int) -> bool:
        if outcome != TaskOutcome.FAILURE:
            return False
        chance = reduced_injury_chance(injury_chance, defense, INJURY_CHANCE_FLOOR)
        return self._rng.random() * 100 < chance

    def determine_severity(self, risk_level: RiskLevel | str) -> InjurySeverity:
        return determine_injury_severity(risk_level, self._rng)

    def apply_injury_if_needed(
        self,
        outcome: TaskOutcome,
        risk_level: RiskLevel | str,
        injury_chance: int,
        defense: int,
    ) -> InjuryApplicationResult:
        if not self.should_apply_injury(outcome, injury_chance, defense):
            return InjuryApplicationResult(False, None, "You escaped without injury.")
        severity = self.determine_severity(risk_level)
        config = severity_config(severity)
        return InjuryApplicationResult(
            True,
            severity,
            f"You suffered a {config.display_name.lower()}! {config.description}",
        )

    def inflict(
        self,
        character: CharacterState,
        severity: InjurySeverity | str,
        source_task: TaskType | None = None,
    ) -> InjuryState:
        """Replace the character's injury with one of ``severity``."""
        resolved = InjurySeverity(severity)
        character.injury = InjuryState(
            is_injured=True,
            severity=resolved,
            success_penalty=severity_config(resolved).success_penalty,
            injured_at=self._clock(),
        )
        self._logger.info(
            "Injury applied",
            extra={"severity": resolved.value, "source_task": source_task.value if source_task else None},
        )
        if callable(self._event_publisher):
            self._event_publisher(
                InjuryApplied(
                    severity=resolved.value,
                    success_penalty=character.injury.success_penalty,
                    source_task=source_task.value if source_task else None,
                )
            )
        return character.injury

    def heal(self, character: CharacterState) -> None:
        character.injury = InjuryState()

    def success_chance_penalty(self, injury: InjuryState) -> int:
        return int(injury.success_penalty) if injury.is_injured else 0

    def stat_penalties(self, injury: InjuryState, base_power: int, base_focus: int) -> StatPenalties:
        if not injury.is_injured or injury.severity is None:
            return StatPenalties()
        config = severity_config(injury.severity)
        return StatPenalties(
            power=math.floor(base_power * config.power_penalty / 100),
            focus=math.floor(base_focus * config.focus_penalty / 100),
        )

    def is_critically_injured(self, injury: InjuryState) -> bool:
        return injury.is_injured and injury.severity == InjurySeverity.SEVERE

    def time_since_injury(self, injury: InjuryState) -> float:
        if not injury.is_injured or not injury.injured_at:
            return 0.0
        return self._clock() - injury.injured_at

    def status_message(self, injury: InjuryState) -> str:
        if not injury.is_injured or injury.severity is None:
            return "Healthy"
        config = severity_config(injury.severity)
        return f"{config.display_name} (-{injury.success_penalty}% success chance)"

    def healing_cost(self, injury: InjuryState) -> int:
        if not injury.is_injured or injury.severity is None:
            return 0
        return severity_config(injury.severity).healing_cost
