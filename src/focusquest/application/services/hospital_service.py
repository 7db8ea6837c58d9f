from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional

from focusquest.application.services.balance_tables import (
    HOSPITAL_BILL_PENALTY_CAP,
    HOSPITAL_BILL_PENALTY_DIVISOR,
    MS_PER_DAY,
)
from focusquest.application.services.event_generator import wall_clock_ms
from focusquest.application.services.injury_service import InjuryService
from focusquest.domain.models.character import CharacterState, HospitalBill, InjuryState
from focusquest.domain.models.inventory import InventoryState
from focusquest.domain.models.item import ConsumableItem


class HealingOption(str, Enum):
    POTION = "potion"
    HOSPITAL = "hospital"
    REST = "rest"


@dataclass(frozen=True)
class HealingService:
    id: HealingOption
    name: str
    description: str
    heals_injury: bool
    health_restoration: int
    available: bool


HEALING_SERVICES: Dict[HealingOption, HealingService] = {
    HealingOption.POTION: HealingService(
        HealingOption.POTION,
        "Use Healing Potion",
        "Consume a healing potion from your inventory to heal injuries",
        heals_injury=True,
        health_restoration=50,
        available=True,
    ),
    # Restores this percentage of max HP.
    HealingOption.HOSPITAL: HealingService(
        HealingOption.HOSPITAL,
        "Hospital Treatment",
        "Receive professional medical care (may incur debt if insufficient funds)",
        heals_injury=True,
        health_restoration=100,
        available=True,
    ),
    HealingOption.REST: HealingService(
        HealingOption.REST,
        "Rest & Recovery",
        "Natural healing over time (takes multiple Pomodoro cycles)",
        heals_injury=False,
        health_restoration=25,
        available=False,
    ),
}


@dataclass(frozen=True)
class HospitalVisitResult:
    success: bool
    bill_created: bool
    bill_amount: int
    gold_paid: int
    message: str


@dataclass(frozen=True)
class BillPaymentResult:
    success: bool
    amount_paid: int
    remaining_gold: int
    message: str


@dataclass(frozen=True)
class DebtInfo:
    has_debt: bool
    amount: int = 0
    penalty: int = 0
    days_overdue: int = 0


@dataclass(frozen=True)
class PotionUseResult:
    success: bool
    message: str
    potion: Optional[ConsumableItem] = None
    health_restored: int = 0


class HospitalService:
    """Treatment, debt and potion healing.

    ``process_visit`` and ``process_bill_payment`` only decide; ``visit``,
    ``pay_bill`` and ``use_healing_potion`` also write the outcome to the
    caller's character and inventory.
    """

    def __init__(self, injury_service: InjuryService | None = None, *, clock: Callable[[], float] | None = None) -> None:
        self._clock = clock or wall_clock_ms
        self._injuries = injury_service or InjuryService(clock=self._clock)
        self._logger = logging.getLogger(__name__)

    def treatment_cost(self, injury: InjuryState) -> int:
        return self._injuries.healing_cost(injury)

    def process_visit(self, injury: InjuryState, current_gold: int) -> HospitalVisitResult:
        if not injury.is_injured:
            return HospitalVisitResult(False, False, 0, 0, "You are not injured and do not need treatment.")
        cost = self.treatment_cost(injury)
        if current_gold >= cost:
            return HospitalVisitResult(
                True, False, 0, cost, f"Treatment successful! Paid {cost} gold. You are now fully healed."
            )
        return HospitalVisitResult(
            True,
            True,
            cost,
            0,
            f"Treatment successful! However, you couldn't pay the {cost} gold fee. A bill has been created.",
        )

    def visit(self, character: CharacterState, inventory: InventoryState) -> HospitalVisitResult:
        result = self.process_visit(character.injury, inventory.gold)
        if not result.success:
            return result

        inventory.gold -= result.gold_paid
        if result.bill_created:
            outstanding = character.hospital_bill.amount if character.hospital_bill is not None else 0
            character.hospital_bill = self.generate_bill(outstanding + result.bill_amount)
            self._logger.info(
                "Hospital bill issued",
                extra={"amount": character.hospital_bill.amount, "penalty": character.hospital_bill.penalty},
            )
        self._injuries.heal(character)
        restoration = HEALING_SERVICES[HealingOption.HOSPITAL].health_restoration
        character.current_hp = max(character.current_hp, math.floor(character.max_hp * restoration / 100))
        return result

    def generate_bill(self, amount: int) -> HospitalBill:
        penalty = min(math.floor(amount / HOSPITAL_BILL_PENALTY_DIVISOR), HOSPITAL_BILL_PENALTY_CAP)
        return HospitalBill(amount=int(amount), penalty=max(0, penalty), created_at=self._clock())

    def process_bill_payment(self, bill: Optional[HospitalBill], current_gold: int) -> BillPaymentResult:
        if bill is None:
            return BillPaymentResult(False, 0, current_gold, "You have no outstanding bills.")
        if current_gold < bill.amount:
            return BillPaymentResult(
                False,
                0,
                current_gold,
                f"Insufficient funds. You need {bill.amount} gold but only have {current_gold} gold.",
            )
        return BillPaymentResult(
            True,
            bill.amount,
            current_gold - bill.amount,
            f"Bill paid successfully! Paid {bill.amount} gold. The success penalty has been removed.",
        )

    def pay_bill(self, character: CharacterState, inventory: InventoryState) -> BillPaymentResult:
        result = self.process_bill_payment(character.hospital_bill, inventory.gold)
        if result.success:
            inventory.gold = result.remaining_gold
            character.hospital_bill = None
        return result

    def _days_outstanding(self, bill: HospitalBill) -> int:
        return math.floor((self._clock() - bill.created_at) / MS_PER_DAY)

    def bill_status_message(self, bill: Optional[HospitalBill]) -> str:
        if bill is None:
            return "No outstanding bills"
        days = self._days_outstanding(bill)
        unit = "day" if days == 1 else "days"
        return f"Outstanding: {bill.amount} gold ({days} {unit} old, -{bill.penalty}% success)"

    def bill_penalty(self, bill: Optional[HospitalBill]) -> int:
        return bill.penalty if bill is not None else 0

    def debt_info(self, bill: Optional[HospitalBill]) -> DebtInfo:
        if bill is None:
            return DebtInfo(has_debt=False)
        return DebtInfo(True, bill.amount, bill.penalty, self._days_outstanding(bill))

    def can_afford_treatment(self, injury: InjuryState, current_gold: int) -> bool:
        if not injury.is_injured:
            return True
        return current_gold >= self.treatment_cost(injury)

    def can_afford_bill_payment(self, bill: Optional[HospitalBill], current_gold: int) -> bool:
        if bill is None:
            return True
        return current_gold >= bill.amount

    def use_healing_potion(self, character: CharacterState, inventory: InventoryState) -> PotionUseResult:
        """Drink the first injury-curing potion held; restores its own heal amount."""
        potion = next(
            (item for item in inventory.items if isinstance(item, ConsumableItem) and item.cures_injury),
            None,
        )
        if potion is None:
            return PotionUseResult(False, "You have no potion that can treat injuries.")
        inventory.remove_one(potion.template_id)
        self._injuries.heal(character)
        before = character.current_hp
        character.current_hp = min(character.max_hp, before + int(potion.heal_amount))
        return PotionUseResult(
            True,
            f"You used a {potion.name}. Your wounds are treated.",
            potion=potion,
            health_restored=character.current_hp - before,
        )

    def healing_service(self, option: HealingOption | str) -> HealingService:
        return HEALING_SERVICES[HealingOption(option)]

    def available_healing_services(self) -> List[HealingService]:
        return [service for service in HEALING_SERVICES.values() if service.available]
