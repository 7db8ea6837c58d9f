from focusquest.domain.models.event import EventCategory, EventSeverity
from focusquest.domain.models.task_definition import TaskDefinition
from focusquest.domain.models.task_types import TaskOutcome, TaskType
from focusquest.infrastructure.content.task_content import flavor_bands, milestones, task_event

_T = TaskType.HUNT

HUNT_EVENTS = (
    task_event(
        "hunt_fresh_tracks", _T, EventSeverity.INFO, EventCategory.FORTUNE,
        (
            "Fresh tracks lead deeper into the woods.",
            "Broken twigs reveal the path your quarry took.",
        ),
        18, success=5,
    ),
    task_event(
        "hunt_pelt_cache", _T, EventSeverity.INFO, EventCategory.LOOT,
        (
            "You find a trapper's abandoned stash of pelts.",
        ),
        10, materials=4, gold=5,
    ),
    task_event(
        "hunt_quiet_woods", _T, EventSeverity.FLAVOR, EventCategory.MYSTERY,
        (
            "You crouch low and wait in the undergrowth.",
            "The forest falls silent around you.",
            "Wind shifts - you adjust to stay downwind.",
        ),
        25,
    ),
    task_event(
        "hunt_spooked_prey", _T, EventSeverity.WARNING, EventCategory.HAZARD,
        (
            "A snapping branch spooks your prey.",
            "The trail goes cold at a rushing stream.",
        ),
        12, success=-5,
    ),
    task_event(
        "hunt_cornered_beast", _T, EventSeverity.CRITICAL, EventCategory.COMBAT,
        (
            "The cornered beast turns and charges!",
        ),
        3, min_progress=40, health=-15, success=-10,
    ),
)

HUNT_DEFINITION = TaskDefinition(
    task_type=_T,
    event_templates=HUNT_EVENTS,
    milestones=milestones(
        (30, "You pick up a clear trail."),
        (70, "Your quarry is within reach."),
    ),
    progress_flavor_bands=flavor_bands(
        (25, "Scouting the hunting grounds for signs of game."),
        (60, "Following the trail through dense forest."),
        (90, "Closing in, every step measured."),
    ),
    final_flavor="The final moment of the hunt.",
    start_messages=(
        "Bow strung, you slip quietly into the wilds.",
        "The hunt begins at first light.",
    ),
    completion_flavor={
        TaskOutcome.SUCCESS: ("A clean hunt - your pack is heavy with prizes.",),
        TaskOutcome.PARTIAL: ("You bring back something, though the best prey escaped.",),
        TaskOutcome.FAILURE: ("The wilds keep their secrets today.",),
    },
)
