from focusquest.domain.models.event import EventCategory, EventSeverity
from focusquest.domain.models.task_definition import TaskDefinition
from focusquest.domain.models.task_types import TaskOutcome, TaskType
from focusquest.infrastructure.content.task_content import flavor_bands, milestones, task_event

_T = TaskType.RAID

RAID_EVENTS = (
    task_event(
        "raid_treasure_vault", _T, EventSeverity.INFO, EventCategory.LOOT,
        (
            "You breach the treasure vault - gold glitters everywhere!",
            "A hidden cache of riches awaits your claiming!",
            "The enemy's wealth is now yours!",
        ),
        12, gold=15, success=5,
    ),
    task_event(
        "raid_enemy_defeated", _T, EventSeverity.INFO, EventCategory.COMBAT,
        (
            "The guards fall before your might!",
            "Enemy forces routed - the path is clear!",
            "Victory! Their defenses crumble!",
        ),
        15, success=8, gold=5,
    ),
    task_event(
        "raid_weak_defenses", _T, EventSeverity.INFO, EventCategory.FORTUNE,
        (
            "Their defenses are weaker than expected!",
            "You find a gap in their fortifications.",
            "The guards are few and unprepared.",
        ),
        18, success=10,
    ),
    task_event(
        "raid_weapons_cache", _T, EventSeverity.INFO, EventCategory.LOOT,
        (
            "You discover their armory - fine weapons within!",
            "Equipment upgrades found in the barracks!",
            "Valuable gear left unguarded!",
        ),
        14, gold=10, materials=2,
    ),
    task_event(
        "raid_combat_flavor", _T, EventSeverity.FLAVOR, EventCategory.COMBAT,
        (
            "Steel clashes against steel.",
            "You press forward through enemy territory.",
            "The sound of battle echoes through the halls.",
            "Your weapon finds its mark again and again.",
        ),
        20,
    ),
    task_event(
        "raid_infiltration", _T, EventSeverity.FLAVOR, EventCategory.MYSTERY,
        (
            "You move silently through shadowed corridors.",
            "Every corner could hide an ambush.",
            "The fortress interior is vast and foreboding.",
            "Enemy movements echo in the distance.",
        ),
        18,
    ),
    task_event(
        "raid_tough_resistance", _T, EventSeverity.WARNING, EventCategory.COMBAT,
        (
            "The enemy fights back fiercely!",
            "Reinforcements arrive - the battle intensifies!",
            "Their captain leads a counterattack!",
        ),
        15, success=-8, health=-5,
    ),
    task_event(
        "raid_trap_triggered", _T, EventSeverity.WARNING, EventCategory.HAZARD,
        (
            "You trigger a concealed trap!",
            "An alarm sounds - they know you're here!",
            "Arrows rain down from hidden murder holes!",
        ),
        12, health=-10, success=-5,
    ),
    task_event(
        "raid_elite_guard", _T, EventSeverity.WARNING, EventCategory.COMBAT,
        (
            "An elite guard blocks your path!",
            "You face their strongest warrior!",
            "The champion steps forward to challenge you!",
        ),
        10, health=-8, success=-10,
    ),
    task_event(
        "raid_setback", _T, EventSeverity.WARNING, EventCategory.HAZARD,
        (
            "You're forced to retreat and regroup!",
            "Their defenses were better than scouted!",
            "The raid encounters unexpected complications!",
        ),
        11, success=-6, gold=-5,
    ),
    task_event(
        "raid_legendary_loot", _T, EventSeverity.CRITICAL, EventCategory.LOOT,
        (
            "You discover the enemy commander's personal vault!",
            "Legendary treasures lie before you - the raid of a lifetime!",
            "The war chest stands open - riches beyond imagination!",
        ),
        2, min_progress=60, gold=30, materials=5, success=15,
    ),
    task_event(
        "raid_ambush", _T, EventSeverity.CRITICAL, EventCategory.COMBAT,
        (
            "It's a trap! Enemies surround you!",
            "You've walked into a coordinated ambush!",
            "The entire garrison descends upon you!",
        ),
        4, health=-25, success=-15, gold=-10,
    ),
    task_event(
        "raid_reinforcements_arrive", _T, EventSeverity.CRITICAL, EventCategory.COMBAT,
        (
            "Enemy reinforcements flood in from all sides!",
            "A war horn sounds - massive reinforcements incoming!",
        ),
        3, min_progress=40, health=-15, success=-20,
    ),
)

RAID_DEFINITION = TaskDefinition(
    task_type=_T,
    event_templates=RAID_EVENTS,
    milestones=milestones(
        (20, "Breached the outer defenses - the raid begins in earnest."),
        (50, "Reached the inner sanctum - the highest value targets await."),
        (80, "Extraction phase - time to escape with the loot."),
    ),
    progress_flavor_bands=flavor_bands(
        (15, "Approaching the target under cover of darkness."),
        (30, "Breaching outer defenses, initial resistance encountered."),
        (50, "Fighting through enemy territory, securing key positions."),
        (65, "Deep within enemy stronghold, high-value targets in sight."),
        (80, "Claiming loot and securing objectives amidst fierce combat."),
        (95, "Fighting a tactical retreat, protecting acquired treasure."),
    ),
    final_flavor="Final push to escape with the spoils of war.",
    start_messages=(
        "The raid begins - steel yourself for battle!",
        "You approach the enemy stronghold under cover of night.",
        "Time to strike - for glory and gold!",
        "The fortress stands before you, ripe for plunder.",
    ),
    completion_flavor={
        TaskOutcome.SUCCESS: (
            "Victory! The raid succeeds brilliantly - legendary loot secured!",
            "You emerge victorious, weighed down by plunder!",
            "A perfect raid - the enemy never knew what hit them!",
        ),
        TaskOutcome.PARTIAL: (
            "You escape with some treasure, but casualties were high.",
            "Partial success - you got out alive, but not with everything.",
            "The raid yields results, though not without cost.",
        ),
        TaskOutcome.FAILURE: (
            "The raid fails catastrophically - you barely escape alive!",
            "Overwhelmed by enemy forces, you retreat empty-handed.",
            "Defeat - the enemy was too strong, the raid a disaster.",
        ),
    },
)
