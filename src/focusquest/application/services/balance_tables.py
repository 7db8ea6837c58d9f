from __future__ import annotations

import math
from typing import Dict

from focusquest.domain.models.character import InjurySeverity
from focusquest.domain.models.chest import ChestQuality, ChestQualityConfig
from focusquest.domain.models.event import EventGenerationConfig, SeverityWeights
from focusquest.domain.models.task_types import TaskType


SUCCESS_CHANCE_MIN = 5
SUCCESS_CHANCE_MAX = 95
PARTIAL_SUCCESS_BAND = 20
LUCK_REWARD_SCALE = 0.01

INJURY_CHANCE_FLOOR = 5

TASK_HISTORY_LIMIT = 10
DEFAULT_TASK_DURATION_MS = 25 * 60 * 1000

# Retry delays handed back when event generation refuses to act.
EVENT_RETRY_DISABLED_MS = 60_000
EVENT_RETRY_PAUSED_MS = 10_000
EVENT_RETRY_CAP_REACHED_MS = 60_000
VISUAL_CUE_DEFAULT_DURATION_MS = 2000

PRODUCTION_EVENT_CONFIG = EventGenerationConfig(
    min_time_between_events_ms=90_000,
    max_time_between_events_ms=150_000,
    max_events_per_session=10,
    severity_weights=SeverityWeights(flavor=50, info=30, warning=15, critical=5),
)
DEVELOPMENT_EVENT_CONFIG = EventGenerationConfig(
    min_time_between_events_ms=10_000,
    max_time_between_events_ms=20_000,
    max_events_per_session=50,
    severity_weights=SeverityWeights(flavor=25, info=35, warning=25, critical=15),
)
TEST_EVENT_CONFIG = EventGenerationConfig(
    min_time_between_events_ms=0,
    max_time_between_events_ms=0,
    max_events_per_session=100,
    severity_weights=SeverityWeights(flavor=25, info=25, warning=25, critical=25),
)
DISABLED_EVENT_CONFIG = EventGenerationConfig(
    min_time_between_events_ms=0,
    max_time_between_events_ms=0,
    max_events_per_session=0,
    severity_weights=SeverityWeights(flavor=0, info=0, warning=0, critical=0),
    enabled=False,
)

EVENT_PROFILES: Dict[str, EventGenerationConfig] = {
    "production": PRODUCTION_EVENT_CONFIG,
    "development": DEVELOPMENT_EVENT_CONFIG,
    "test": TEST_EVENT_CONFIG,
    "disabled": DISABLED_EVENT_CONFIG,
}

# Delays are divided by these, so raids fire more often and rests less.
TASK_EVENT_RATE_MODIFIERS: Dict[TaskType, float] = {
    TaskType.RAID: 1.2,
    TaskType.EXPEDITION: 1.0,
    TaskType.CRAFT: 0.7,
    TaskType.HUNT: 1.1,
    TaskType.REST: 0.5,
}

TASK_SEVERITY_WEIGHTS: Dict[TaskType, SeverityWeights] = {
    TaskType.RAID: SeverityWeights(flavor=30, info=25, warning=25, critical=20),
    TaskType.EXPEDITION: SeverityWeights(flavor=50, info=30, warning=15, critical=5),
    TaskType.CRAFT: SeverityWeights(flavor=60, info=30, warning=8, critical=2),
    TaskType.HUNT: SeverityWeights(flavor=40, info=30, warning=20, critical=10),
    TaskType.REST: SeverityWeights(flavor=80, info=15, warning=4, critical=1),
}

# Per-event ceilings enforced by the content validator.
EVENT_BALANCING: Dict[str, float] = {
    "max_gold_gain": 150,
    "max_gold_loss": -80,
    "max_health_damage": -60,
    "max_health_heal": 100,
    "max_success_bonus": 25,
    "max_success_penalty": -15,
    "max_materials_gain": 50,
    "max_durability_damage": 60,
    "max_extra_chests": 1,
    "max_xp_gain": 150,
}

# Weights for the bounded [-100, 100] event impact score.
IMPACT_WEIGHTS: Dict[str, float] = {
    "gold_modifier": 0.5,
    "health_modifier": 2.0,
    "materials_modifier": 1.0,
    "success_chance_modifier": 3.0,
    "durability_damage": -1.0,
    "extra_chests": 50.0,
    "xp_modifier": 0.5,
    "loot_quality_modifier": 10.0,
}
IMPACT_SCORE_LIMIT = 100

INJURY_SUCCESS_PENALTY: Dict[InjurySeverity, int] = {
    InjurySeverity.MINOR: 5,
    InjurySeverity.MODERATE: 10,
    InjurySeverity.SEVERE: 20,
}
INJURY_HEALING_COST: Dict[InjurySeverity, int] = {
    InjurySeverity.MINOR: 20,
    InjurySeverity.MODERATE: 50,
    InjurySeverity.SEVERE: 100,
}

HOSPITAL_BILL_PENALTY_DIVISOR = 10
HOSPITAL_BILL_PENALTY_CAP = 10
MS_PER_DAY = 1000 * 60 * 60 * 24

CHEST_QUALITY_CONFIGS: Dict[ChestQuality, ChestQualityConfig] = {
    ChestQuality.BASIC: ChestQualityConfig(ChestQuality.BASIC, "Basic Chest", "#9CA3AF", 1, 2, 1.0, 5),
    ChestQuality.QUALITY: ChestQualityConfig(ChestQuality.QUALITY, "Quality Chest", "#10B981", 2, 3, 1.5, 10),
    ChestQuality.SUPERIOR: ChestQualityConfig(ChestQuality.SUPERIOR, "Superior Chest", "#3B82F6", 3, 4, 2.0, 20),
    ChestQuality.MASTERWORK: ChestQualityConfig(ChestQuality.MASTERWORK, "Masterwork Chest", "#A855F7", 4, 6, 3.0, 30),
}
CHEST_LUCKY_LUCK_SCALE = 0.5
CHEST_BASE_GOLD_MIN = 10
CHEST_BASE_GOLD_MAX = 30
CHEST_VALUE_ESTIMATE_MIN = 20
CHEST_VALUE_ESTIMATE_MAX = 100
CHEST_QUALITY_LUCK_SCALE = 0.02
OPENED_CHEST_KEEP_COUNT = 50

LOOT_NAME_PREFIXES = {
    "uncommon": ("Fine", "Quality", "Superior", "Refined"),
    "rare": ("Exceptional", "Masterwork", "Pristine", "Exquisite"),
    "epic": ("Legendary", "Mythic", "Fabled", "Renowned"),
    "legendary": ("Ancient", "Divine", "Celestial", "Eternal", "Godlike"),
}
CONSUMABLE_MAX_STACK = 99
MATERIAL_MAX_STACK = 999
ACCESSORY_AURA_TEXT = "Grants a mystical aura"


def event_config_for_task(task_type: TaskType, base: EventGenerationConfig = PRODUCTION_EVENT_CONFIG) -> EventGenerationConfig:
    rate = TASK_EVENT_RATE_MODIFIERS[TaskType.normalize(task_type)]
    return EventGenerationConfig(
        min_time_between_events_ms=math.floor(base.min_time_between_events_ms / rate),
        max_time_between_events_ms=math.floor(base.max_time_between_events_ms / rate),
        max_events_per_session=base.max_events_per_session,
        severity_weights=TASK_SEVERITY_WEIGHTS[TaskType.normalize(task_type)],
        enabled=base.enabled,
    )


def event_profile(name: str | None) -> EventGenerationConfig:
    key = str(name or "production").strip().lower()
    return EVENT_PROFILES.get(key, PRODUCTION_EVENT_CONFIG)
