import os
import random
from typing import Callable, Optional

from focusquest.application.services.balance_tables import PARTIAL_SUCCESS_BAND, event_profile
from focusquest.application.services.chest_ledger import ChestLedger
from focusquest.application.services.chest_service import ChestService
from focusquest.application.services.completion_service import TaskCompletionService
from focusquest.application.services.event_bank import EventBank
from focusquest.application.services.event_bus import EventBus
from focusquest.application.services.event_generator import EventGenerator
from focusquest.application.services.event_task_integration import EventTaskIntegration
from focusquest.application.services.focus_session_service import FocusSessionService, register_session_log_handlers
from focusquest.application.services.hospital_service import HospitalService
from focusquest.application.services.injury_service import InjuryService
from focusquest.application.services.loot_generator import LootGenerator
from focusquest.application.services.seed_policy import derive_rng
from focusquest.application.services.task_lifecycle_service import START_POLICY_REJECT, TaskLifecycleService
from focusquest.application.services.task_progress_service import TaskProgressTracker
from focusquest.domain.models.character import CharacterState
from focusquest.domain.models.event import EventGenerationConfig
from focusquest.domain.models.inventory import InventoryState
from focusquest.infrastructure.inmemory.inmemory_event_template_repo import InMemoryEventTemplateRepository
from focusquest.infrastructure.inmemory.inmemory_item_template_repo import InMemoryItemTemplateRepository
from focusquest.infrastructure.inmemory.inmemory_loot_table_repo import InMemoryLootTableRepository
from focusquest.infrastructure.inmemory.inmemory_task_config_repo import InMemoryTaskConfigRepository
from focusquest.infrastructure.inmemory.inmemory_task_definition_repo import InMemoryTaskDefinitionRepository

_TRUTHY = {"1", "true", "yes"}
_FALSY = {"0", "false", "no"}


def _events_config() -> EventGenerationConfig:
    config = event_profile(os.getenv("FOCUSQUEST_EVENT_PROFILE", "production"))
    switch = os.getenv("FOCUSQUEST_EVENTS_ENABLED", "").strip().lower()
    if switch in _TRUTHY and not config.enabled:
        # The disabled profile has no pacing of its own.
        return event_profile("production")
    if switch in _FALSY:
        return event_profile("disabled")
    return config


def _partial_band() -> float:
    raw = os.getenv("FOCUSQUEST_PARTIAL_BAND", "").strip()
    return float(int(raw)) if raw else float(PARTIAL_SUCCESS_BAND)


def _seed() -> Optional[int]:
    raw = os.getenv("FOCUSQUEST_SEED", "").strip()
    return int(raw) if raw else None


def _rng_factory(seed: Optional[int]) -> Callable[[str], random.Random]:
    def _build(namespace: str) -> random.Random:
        if seed is None:
            return random.Random()
        return derive_rng(namespace, {"seed": seed})

    return _build


def create_focus_session(
    character: CharacterState | None = None,
    inventory: InventoryState | None = None,
    *,
    clock: Callable[[], float] | None = None,
) -> FocusSessionService:
    rng_for = _rng_factory(_seed())
    task_rng = rng_for("task.resolve")
    event_rng = rng_for("event.generate")
    loot_rng = rng_for("loot.generate")
    chest_rng = rng_for("chest.open")

    event_bus = EventBus()
    register_session_log_handlers(event_bus)

    task_configs = InMemoryTaskConfigRepository()
    task_definitions = InMemoryTaskDefinitionRepository()
    templates = InMemoryEventTemplateRepository().list_all()
    for definition in task_definitions.list_all():
        templates.extend(definition.event_templates)

    events_config = _events_config()
    event_bank = EventBank(templates, rng=event_rng)
    generator = EventGenerator(event_bank, events_config, rng=event_rng, clock=clock)
    integration = EventTaskIntegration(event_bank, generator, events_config, event_publisher=event_bus.publish)

    lifecycle = TaskLifecycleService(
        task_configs,
        rng=task_rng,
        clock=clock,
        event_publisher=event_bus.publish,
        partial_band=_partial_band(),
        start_policy=os.getenv("FOCUSQUEST_START_POLICY", START_POLICY_REJECT),
    )
    tracker = TaskProgressTracker(clock=clock, rng=task_rng)
    injury_service = InjuryService(rng=task_rng, clock=clock, event_publisher=event_bus.publish)

    chest_service = ChestService(
        InMemoryItemTemplateRepository(),
        InMemoryLootTableRepository(),
        loot_generator=LootGenerator(loot_rng),
        rng=chest_rng,
        clock=clock,
        event_publisher=event_bus.publish,
    )
    chest_ledger = ChestLedger(chest_service)

    return FocusSessionService(
        lifecycle,
        tracker,
        integration,
        TaskCompletionService(chest_ledger, injury_service),
        chest_ledger,
        HospitalService(injury_service, clock=clock),
        task_configs=task_configs,
        task_definitions=task_definitions,
        event_bus=event_bus,
        character=character,
        inventory=inventory,
    )
