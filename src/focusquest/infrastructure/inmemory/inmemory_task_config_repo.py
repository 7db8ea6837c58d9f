from __future__ import annotations

from typing import Dict, List

from focusquest.domain.errors import ContentConfigurationError
from focusquest.domain.models.task import RewardRange, RiskLevelModifier, TaskConfig, TaskRewards
from focusquest.domain.models.task_types import RiskLevel, TaskType
from focusquest.domain.repositories import TaskConfigRepository


def _risks(safe: RiskLevelModifier, standard: RiskLevelModifier, risky: RiskLevelModifier) -> Dict[RiskLevel, RiskLevelModifier]:
    return {RiskLevel.SAFE: safe, RiskLevel.STANDARD: standard, RiskLevel.RISKY: risky}


def _rewards(gold, xp, materials, chests: int, loot_quality: float) -> TaskRewards:
    return TaskRewards(
        gold=RewardRange(*gold),
        xp=RewardRange(*xp),
        materials=RewardRange(*materials),
        chests=chests,
        loot_quality=loot_quality,
    )


EXPEDITION_CONFIG = TaskConfig(
    id=TaskType.EXPEDITION,
    name="Expedition",
    description=(
        "Venture into uncharted territories to gather materials and discover hidden treasures. "
        "A balanced approach with moderate risk and steady rewards."
    ),
    base_success_chance=60,
    primary_stat="focus",
    risk_modifiers=_risks(
        RiskLevelModifier(15, 0.7, "Safe Route", "Take the well-traveled path. Higher success chance but lower rewards."),
        RiskLevelModifier(0, 1.0, "Standard Route", "Balance risk and reward. Standard success chance and rewards."),
        RiskLevelModifier(-20, 1.5, "Dangerous Route", "Venture into perilous areas. Lower success chance but much higher rewards."),
    ),
    rewards=_rewards((15, 30), (20, 40), (3, 8), chests=1, loot_quality=1.0),
    injury_chance_on_failure=20,
    min_level=1,
    available=True,
)

RAID_CONFIG = TaskConfig(
    id=TaskType.RAID,
    name="Raid",
    description="Attack enemy strongholds for valuable loot and gold. High risk, high reward. Prepare for combat!",
    base_success_chance=50,
    primary_stat="power",
    risk_modifiers=_risks(
        RiskLevelModifier(20, 0.6, "Outpost Raid", "Target a lightly defended outpost. Higher success, modest rewards."),
        RiskLevelModifier(0, 1.0, "Fortress Raid", "Attack a standard fortress. Balanced risk and reward."),
        RiskLevelModifier(-25, 1.8, "Citadel Raid", "Assault a heavily fortified citadel. Very dangerous but incredible rewards."),
    ),
    rewards=_rewards((25, 50), (30, 60), (1, 4), chests=2, loot_quality=1.3),
    injury_chance_on_failure=35,
    min_level=1,
    available=True,
)

CRAFT_CONFIG = TaskConfig(
    id=TaskType.CRAFT,
    name="Crafting",
    description="Spend time crafting equipment, potions, and consumables. Safe and productive.",
    base_success_chance=75,
    primary_stat="focus",
    risk_modifiers=_risks(
        RiskLevelModifier(10, 0.8, "Simple Crafts", "Craft basic items. Very safe, modest output."),
        RiskLevelModifier(0, 1.0, "Standard Crafts", "Craft intermediate items. Balanced effort and output."),
        RiskLevelModifier(-15, 1.4, "Master Crafts", "Attempt complex recipes. Risk of failure but exceptional results."),
    ),
    rewards=_rewards((10, 20), (15, 30), (5, 12), chests=1, loot_quality=0.8),
    injury_chance_on_failure=5,
    min_level=3,
    available=False,
)

HUNT_CONFIG = TaskConfig(
    id=TaskType.HUNT,
    name="Hunt",
    description="Track and hunt wild creatures for rare materials and pelts. Luck plays a major role.",
    base_success_chance=55,
    primary_stat="luck",
    risk_modifiers=_risks(
        RiskLevelModifier(15, 0.7, "Small Game", "Hunt common creatures. Safer but less valuable."),
        RiskLevelModifier(0, 1.0, "Medium Game", "Hunt standard creatures. Balanced risk and reward."),
        RiskLevelModifier(-20, 1.6, "Legendary Beast", "Hunt rare and dangerous creatures. High risk, exceptional rewards."),
    ),
    rewards=_rewards((20, 40), (25, 50), (4, 10), chests=2, loot_quality=1.5),
    injury_chance_on_failure=30,
    min_level=2,
    available=False,
)

REST_CONFIG = TaskConfig(
    id=TaskType.REST,
    name="Rest & Recovery",
    description="Take a break to rest and recover. Heals injuries and restores health. No risk of failure.",
    base_success_chance=100,
    primary_stat="focus",
    risk_modifiers=_risks(
        RiskLevelModifier(0, 1.0, "Light Rest", "Gentle recovery. Modest healing."),
        RiskLevelModifier(0, 1.0, "Full Rest", "Complete rest. Good healing."),
        RiskLevelModifier(0, 1.0, "Deep Rest", "Extended rest. Maximum healing."),
    ),
    rewards=_rewards((5, 10), (10, 20), (0, 1), chests=0, loot_quality=0.5),
    injury_chance_on_failure=0,
    min_level=1,
    available=False,
)

DEFAULT_TASK_CONFIGS = (EXPEDITION_CONFIG, RAID_CONFIG, CRAFT_CONFIG, HUNT_CONFIG, REST_CONFIG)


class InMemoryTaskConfigRepository(TaskConfigRepository):
    def __init__(self, configs=None) -> None:
        rows = configs if configs is not None else DEFAULT_TASK_CONFIGS
        self._configs: Dict[TaskType, TaskConfig] = {config.id: config for config in rows}

    def get(self, task_type: TaskType) -> TaskConfig:
        key = TaskType.normalize(task_type)
        config = self._configs.get(key)
        if config is None:
            raise ContentConfigurationError(f"Unknown task type: {key.value}")
        return config

    def list_all(self) -> List[TaskConfig]:
        return list(self._configs.values())
