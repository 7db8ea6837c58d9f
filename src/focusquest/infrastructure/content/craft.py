from focusquest.domain.models.event import EventCategory, EventSeverity
from focusquest.domain.models.task_definition import TaskDefinition
from focusquest.domain.models.task_types import TaskOutcome, TaskType
from focusquest.infrastructure.content.task_content import flavor_bands, milestones, task_event

_T = TaskType.CRAFT

CRAFT_EVENTS = (
    task_event(
        "craft_perfect_technique", _T, EventSeverity.INFO, EventCategory.FORTUNE,
        (
            "Your hands move with practiced precision.",
            "The technique clicks into place perfectly.",
        ),
        18, success=5,
    ),
    task_event(
        "craft_spare_materials", _T, EventSeverity.INFO, EventCategory.LOOT,
        (
            "You salvage usable offcuts from the workbench.",
            "A careful cut leaves extra material to spare.",
        ),
        15, materials=3,
    ),
    task_event(
        "craft_workshop_hum", _T, EventSeverity.FLAVOR, EventCategory.MYSTERY,
        (
            "The forge crackles steadily beside you.",
            "Tools clink softly as you reach for the next one.",
            "The smell of oil and sawdust fills the workshop.",
        ),
        25,
    ),
    task_event(
        "craft_flawed_batch", _T, EventSeverity.WARNING, EventCategory.EQUIPMENT,
        (
            "A hairline crack ruins part of the batch.",
            "The mixture separates - you start that step again.",
        ),
        8, materials=-2, success=-3,
    ),
    task_event(
        "craft_masterstroke", _T, EventSeverity.CRITICAL, EventCategory.FORTUNE,
        (
            "Inspiration strikes - this piece will be your finest yet!",
        ),
        2, min_progress=50, success=10, materials=5,
    ),
)

CRAFT_DEFINITION = TaskDefinition(
    task_type=_T,
    event_templates=CRAFT_EVENTS,
    milestones=milestones(
        (33, "Materials prepared - the real work begins."),
        (66, "The piece takes shape on the workbench."),
    ),
    progress_flavor_bands=flavor_bands(
        (20, "Sorting materials and laying out tools."),
        (50, "Shaping the rough form with steady hands."),
        (80, "Refining details and testing the fit."),
    ),
    final_flavor="Applying the finishing touches.",
    start_messages=(
        "You light the forge and roll up your sleeves.",
        "The workbench is ready - time to create something useful.",
    ),
    completion_flavor={
        TaskOutcome.SUCCESS: ("A flawless result - the workshop smells of success.",),
        TaskOutcome.PARTIAL: ("Serviceable work, though not your best.",),
        TaskOutcome.FAILURE: ("The project falls apart; only scraps remain.",),
    },
)
