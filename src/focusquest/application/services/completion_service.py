from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from focusquest.application.services.chest_ledger import ChestLedger
from focusquest.application.services.injury_service import InjuryService
from focusquest.domain.models.character import CharacterState, InjurySeverity
from focusquest.domain.models.chest import Chest, ChestQuality
from focusquest.domain.models.inventory import InventoryState
from focusquest.domain.models.task import TaskCompletionResult
from focusquest.domain.models.task_types import TaskOutcome


@dataclass
class CompletionApplication:
    gold: int = 0
    xp: int = 0
    materials: int = 0
    chests: List[Chest] = field(default_factory=list)
    injury_applied: bool = False
    message: str = ""


class TaskCompletionService:
    """Writes a finished task's result onto the caller's character and inventory."""

    def __init__(self, chest_ledger: ChestLedger, injury_service: InjuryService) -> None:
        self._chests = chest_ledger
        self._injuries = injury_service

    def process_completion(
        self,
        result: TaskCompletionResult,
        character: CharacterState,
        inventory: InventoryState,
    ) -> CompletionApplication:
        rewards = result.rewards
        applied = CompletionApplication(message=result.summary)

        if rewards.gold.value > 0:
            inventory.gold += rewards.gold.value
            applied.gold = rewards.gold.value
        if rewards.xp.value > 0:
            character.experience += rewards.xp.value
            applied.xp = rewards.xp.value
        if rewards.materials.value > 0:
            inventory.materials += rewards.materials.value
            applied.materials = rewards.materials.value

        if rewards.chests > 0:
            quality = self._chests_quality(result, character)
            applied.chests = self._chests.award_many(
                result.task.task_type,
                rewards.chests,
                rewards.loot_quality,
                quality,
            )
            inventory.unopened_chests += len(applied.chests)

        if result.was_injured and result.injury_severity is not None:
            self._injuries.inflict(character, result.injury_severity, result.task.task_type)
            applied.injury_applied = True

        if result.outcome in (TaskOutcome.SUCCESS, TaskOutcome.PARTIAL):
            character.tasks_completed += 1
        else:
            character.tasks_failed += 1
        return applied

    def _chests_quality(self, result: TaskCompletionResult, character: CharacterState) -> ChestQuality:
        success = result.outcome == TaskOutcome.SUCCESS
        return self._chests.determine_quality(success, character.computed_stats().luck)

    def completion_message(self, result: TaskCompletionResult) -> str:
        return result.summary

    def injury_warning(self, character: CharacterState) -> Optional[str]:
        injury = character.injury
        if injury.is_injured and injury.severity == InjurySeverity.SEVERE:
            return "You have a severe injury! Visit the hospital before attempting another task."
        if injury.is_injured:
            return "You are injured. Consider visiting the hospital to heal before your next task."
        return None

    def bill_warning(self, character: CharacterState) -> Optional[str]:
        bill = character.hospital_bill
        if bill is not None and bill.amount > 0:
            return f"You have an outstanding hospital bill of {bill.amount} gold. Pay it to remove the success penalty."
        return None
