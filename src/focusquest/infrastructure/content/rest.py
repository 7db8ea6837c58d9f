from focusquest.domain.models.event import EventCategory, EventSeverity
from focusquest.domain.models.task_definition import TaskDefinition
from focusquest.domain.models.task_types import TaskOutcome, TaskType
from focusquest.infrastructure.content.task_content import flavor_bands, milestones, task_event

_T = TaskType.REST

REST_EVENTS = (
    task_event(
        "rest_restful_sleep", _T, EventSeverity.INFO, EventCategory.HEALTH,
        (
            "You drift into a deep, restorative sleep.",
            "A warm meal and a soft bed work wonders.",
        ),
        20, health=10,
    ),
    task_event(
        "rest_campfire", _T, EventSeverity.FLAVOR, EventCategory.MYSTERY,
        (
            "The campfire crackles softly.",
            "Stars wheel slowly overhead.",
        ),
        30,
    ),
    task_event(
        "rest_restless_night", _T, EventSeverity.WARNING, EventCategory.HEALTH,
        (
            "Strange noises keep you from sleeping well.",
        ),
        5, success=-2,
    ),
)

REST_DEFINITION = TaskDefinition(
    task_type=_T,
    event_templates=REST_EVENTS,
    milestones=milestones(
        (50, "Halfway through your rest - you already feel better."),
    ),
    progress_flavor_bands=flavor_bands(
        (50, "Settling in to rest and recover."),
    ),
    final_flavor="Waking refreshed and ready.",
    start_messages=("You find a quiet place to rest.",),
    completion_flavor={
        TaskOutcome.SUCCESS: ("You rise fully rested.",),
        TaskOutcome.PARTIAL: ("You rest, though not as deeply as you hoped.",),
        TaskOutcome.FAILURE: ("Sleep never quite comes.",),
    },
)
