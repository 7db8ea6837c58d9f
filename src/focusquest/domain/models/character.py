from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


DEFAULT_DURABILITY = 100
STAT_KEYS = ("power", "defense", "focus", "luck")


class InjurySeverity(str, Enum):
    MINOR = "minor"
    MODERATE = "moderate"
    SEVERE = "severe"


@dataclass
class StatBlock:
    power: int = 0
    defense: int = 0
    focus: int = 0
    luck: int = 0

    def get(self, key: str) -> int:
        if key not in STAT_KEYS:
            raise KeyError(f"Unknown stat: {key}")
        return int(getattr(self, key))

    def plus(self, other: "StatBlock | None") -> "StatBlock":
        if other is None:
            return StatBlock(self.power, self.defense, self.focus, self.luck)
        return StatBlock(
            power=self.power + other.power,
            defense=self.defense + other.defense,
            focus=self.focus + other.focus,
            luck=self.luck + other.luck,
        )


@dataclass
class EquippedGear:
    item_id: str
    name: str
    stat_bonuses: StatBlock = field(default_factory=StatBlock)
    durability: Optional[int] = None

    @property
    def current_durability(self) -> int:
        return DEFAULT_DURABILITY if self.durability is None else int(self.durability)


@dataclass
class InjuryState:
    is_injured: bool = False
    severity: Optional[InjurySeverity] = None
    success_penalty: int = 0
    injured_at: Optional[float] = None


@dataclass
class HospitalBill:
    amount: int
    penalty: int
    created_at: float


@dataclass
class CharacterState:
    """Host-owned character record; the core mutates it only through explicit calls."""

    level: int = 1
    experience: int = 0
    current_hp: int = 100
    max_hp: int = 100
    base_stats: StatBlock = field(default_factory=StatBlock)
    equipped_weapon: Optional[EquippedGear] = None
    equipped_armor: Optional[EquippedGear] = None
    injury: InjuryState = field(default_factory=InjuryState)
    hospital_bill: Optional[HospitalBill] = None
    tasks_completed: int = 0
    tasks_failed: int = 0

    def equipment_bonuses(self) -> StatBlock:
        total = StatBlock()
        for gear in (self.equipped_weapon, self.equipped_armor):
            if gear is not None:
                total = total.plus(gear.stat_bonuses)
        return total

    def computed_stats(self) -> StatBlock:
        return self.base_stats.plus(self.equipment_bonuses())

    @property
    def bill_penalty(self) -> int:
        return int(self.hospital_bill.penalty) if self.hospital_bill is not None else 0
