from focusquest.domain.models.event import EventCategory, EventSeverity
from focusquest.domain.models.task_definition import TaskDefinition
from focusquest.domain.models.task_types import TaskOutcome, TaskType
from focusquest.infrastructure.content.task_content import flavor_bands, milestones, task_event

_T = TaskType.EXPEDITION

EXPEDITION_EVENTS = (
    task_event(
        "expedition_treasure_find", _T, EventSeverity.INFO, EventCategory.LOOT,
        (
            "You discover a hidden cache of materials!",
            "A glint catches your eye - valuable resources ahead!",
            "Your expedition uncovers a forgotten stash.",
        ),
        15, materials=3, gold=5,
    ),
    task_event(
        "expedition_safe_path", _T, EventSeverity.INFO, EventCategory.FORTUNE,
        (
            "You find a safe route forward.",
            "The terrain becomes more favorable.",
            "Clear skies and good fortune guide your way.",
        ),
        20, success=5,
    ),
    task_event(
        "expedition_resource_node", _T, EventSeverity.INFO, EventCategory.LOOT,
        (
            "You stumble upon a rich mineral deposit!",
            "Rare herbs grow abundantly in this area.",
            "An untouched resource vein lies before you.",
        ),
        18, materials=5,
    ),
    task_event(
        "expedition_lucky_find", _T, EventSeverity.INFO, EventCategory.FORTUNE,
        (
            "A traveling merchant left supplies behind!",
            "You find an abandoned camp with useful gear.",
            "Fortune smiles upon you - gold coins scattered here!",
        ),
        12, gold=10, success=3,
    ),
    task_event(
        "expedition_scenery", _T, EventSeverity.FLAVOR, EventCategory.MYSTERY,
        (
            "The landscape is breathtaking.",
            "You take a moment to rest and enjoy the view.",
            "Ancient ruins dot the horizon.",
            "Wildlife scurries past, unbothered by your presence.",
        ),
        25,
    ),
    task_event(
        "expedition_discovery", _T, EventSeverity.FLAVOR, EventCategory.MYSTERY,
        (
            "You sketch the local flora in your journal.",
            "An interesting rock formation catches your attention.",
            "You discover tracks from an unknown creature.",
            "The expedition notes are filling up nicely.",
        ),
        20,
    ),
    task_event(
        "expedition_rough_terrain", _T, EventSeverity.WARNING, EventCategory.HAZARD,
        (
            "The terrain becomes treacherous.",
            "A sudden storm slows your progress.",
            "Dense undergrowth blocks the path forward.",
        ),
        10, success=-3,
    ),
    task_event(
        "expedition_wrong_path", _T, EventSeverity.WARNING, EventCategory.HAZARD,
        (
            "You realize you took a wrong turn.",
            "The map seems less accurate than expected.",
            "You backtrack after hitting a dead end.",
        ),
        8, success=-5,
    ),
    task_event(
        "expedition_equipment_issue", _T, EventSeverity.WARNING, EventCategory.EQUIPMENT,
        (
            "Your rope frays - time to be more careful.",
            "A tool breaks, slowing your progress.",
            "Your pack tears, scattering some supplies.",
        ),
        7, materials=-2, success=-2,
    ),
    task_event(
        "expedition_major_discovery", _T, EventSeverity.CRITICAL, EventCategory.LOOT,
        (
            "You discover an untouched ancient cache!",
            "A legendary resource vein - this is the find of a lifetime!",
        ),
        2, min_progress=50, materials=10, gold=20, success=10,
    ),
    task_event(
        "expedition_dangerous_wildlife", _T, EventSeverity.CRITICAL, EventCategory.COMBAT,
        (
            "A territorial beast blocks your path!",
            "You stumble into a predator's hunting ground.",
        ),
        3, health=-15, success=-10,
    ),
)

EXPEDITION_DEFINITION = TaskDefinition(
    task_type=_T,
    event_templates=EXPEDITION_EVENTS,
    milestones=milestones(
        (25, "First quarter complete - the expedition is underway."),
        (50, "Halfway point reached - the path ahead is clearer."),
        (75, "Three quarters done - the destination is in sight."),
    ),
    progress_flavor_bands=flavor_bands(
        (10, "Setting out on the expedition, checking supplies and equipment."),
        (25, "Traversing the initial terrain, mapping the route ahead."),
        (40, "Steadily progressing through diverse landscapes."),
        (60, "Reaching deeper into unexplored territory."),
        (75, "Gathering resources and documenting discoveries."),
        (90, "Beginning the return journey with collected materials."),
    ),
    final_flavor="Final stretch - nearly back to base camp.",
    start_messages=(
        "The expedition begins - adventure awaits beyond the horizon.",
        "You set out with determination, ready to explore the unknown.",
        "Maps unfurled, supplies checked - it's time to venture forth.",
        "The call of discovery pulls you into uncharted lands.",
    ),
    completion_flavor={
        TaskOutcome.SUCCESS: (
            "The expedition was a resounding success! Materials overflow from your pack.",
            "You return triumphant, laden with valuable discoveries.",
            "Every objective met - this expedition will be remembered.",
        ),
        TaskOutcome.PARTIAL: (
            "The expedition yields some results, though not all objectives were met.",
            "You return with modest findings - not quite what you hoped for.",
            "Partial success - some discoveries made, but challenges remain.",
        ),
        TaskOutcome.FAILURE: (
            "The expedition proves too challenging - you return empty-handed.",
            "Harsh conditions force an early retreat with nothing to show.",
            "Despite your best efforts, this expedition yields no results.",
        ),
    },
)
