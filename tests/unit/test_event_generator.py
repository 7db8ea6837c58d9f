import random
import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from focusquest.application.services.balance_tables import (
    DISABLED_EVENT_CONFIG,
    PRODUCTION_EVENT_CONFIG,
    TEST_EVENT_CONFIG,
    event_config_for_task,
)
from focusquest.application.services.event_bank import EventBank
from focusquest.application.services.event_generator import (
    REASON_CAP_REACHED,
    REASON_DISABLED,
    REASON_NO_TEMPLATE,
    REASON_NOT_YET,
    REASON_PAUSED,
    EventGenerator,
    fill_placeholders,
)
from focusquest.domain.models.event import (
    EffectRange,
    EventCategory,
    EventConditionContext,
    EventConditions,
    EventEffectRanges,
    EventEffects,
    EventSeverity,
    EventTemplate,
    VisualCue,
)
from focusquest.domain.models.task_types import TaskType


class _Clock:
    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def _context() -> EventConditionContext:
    return EventConditionContext(
        character_level=1,
        current_health=100,
        max_health=100,
        is_injured=False,
        gold=50,
        has_weapon=False,
        has_armor=False,
        task_type=TaskType.EXPEDITION,
    )


GOLD_FIND = EventTemplate(
    template_id="gold_find",
    severity=EventSeverity.INFO,
    category=EventCategory.LOOT,
    messages=("You find {gold} gold!",),
    effects=EventEffectRanges(
        gold_modifier=EffectRange(5, 15),
        success_chance_modifier=EffectRange(1, 3),
    ),
    visual_cue=VisualCue(type="sparkle", color="#FFD700"),
)
ONE_SHOT = EventTemplate(
    template_id="one_shot",
    severity=EventSeverity.FLAVOR,
    category=EventCategory.MYSTERY,
    messages=("Only once.",),
    repeatable=False,
)


class EventGeneratorTests(unittest.TestCase):
    def _generator(self, templates, config=TEST_EVENT_CONFIG, clock=None) -> EventGenerator:
        bank = EventBank(templates, rng=random.Random(3))
        return EventGenerator(bank, config, rng=random.Random(11), clock=clock or _Clock())

    def test_generates_event_with_sampled_effects_and_filled_message(self) -> None:
        generator = self._generator([GOLD_FIND])
        generator.start_session()

        result = generator.try_generate_event(TaskType.EXPEDITION, _context())

        self.assertTrue(result.success)
        event = result.event
        self.assertEqual("gold_find", event.template_id)
        self.assertTrue(5 <= event.effects.gold_modifier <= 15)
        self.assertIsInstance(event.effects.gold_modifier, int)
        self.assertEqual(f"You find {event.effects.gold_modifier} gold!", event.message)
        self.assertTrue(event.id.startswith("event_1000_"))
        self.assertEqual(2000, event.visual_cue.duration)

    def test_disabled_config_refuses_with_retry(self) -> None:
        clock = _Clock(5_000)
        generator = self._generator([GOLD_FIND], DISABLED_EVENT_CONFIG, clock)
        result = generator.try_generate_event(TaskType.EXPEDITION, _context())
        self.assertFalse(result.success)
        self.assertEqual(REASON_DISABLED, result.reason)
        self.assertEqual(65_000, result.next_attempt_time)

    def test_pause_and_resume(self) -> None:
        clock = _Clock()
        generator = self._generator([GOLD_FIND], clock=clock)
        generator.start_session()
        generator.pause()
        result = generator.try_generate_event(TaskType.EXPEDITION, _context())
        self.assertEqual(REASON_PAUSED, result.reason)
        self.assertEqual(clock.now + 10_000, result.next_attempt_time)
        generator.resume()
        self.assertTrue(generator.try_generate_event(TaskType.EXPEDITION, _context()).success)

    def test_rate_limit_reports_scheduled_time(self) -> None:
        clock = _Clock(0)
        generator = self._generator([GOLD_FIND], PRODUCTION_EVENT_CONFIG, clock)
        generator.start_session()
        scheduled = generator.state().next_event_time
        self.assertTrue(90_000 <= scheduled <= 150_000)

        early = generator.try_generate_event(TaskType.EXPEDITION, _context())
        self.assertEqual(REASON_NOT_YET, early.reason)
        self.assertEqual(scheduled, early.next_attempt_time)

        clock.now = scheduled
        self.assertTrue(generator.try_generate_event(TaskType.EXPEDITION, _context()).success)

    def test_session_cap(self) -> None:
        config = event_config_for_task(TaskType.CRAFT, TEST_EVENT_CONFIG)
        generator = self._generator([GOLD_FIND], config)
        generator.update_config(max_events_per_session=2)
        generator.start_session()
        self.assertTrue(generator.try_generate_event(TaskType.EXPEDITION, _context()).success)
        self.assertTrue(generator.try_generate_event(TaskType.EXPEDITION, _context()).success)
        capped = generator.try_generate_event(TaskType.EXPEDITION, _context())
        self.assertEqual(REASON_CAP_REACHED, capped.reason)

    def test_non_repeatable_template_fires_once_per_session(self) -> None:
        generator = self._generator([ONE_SHOT])
        generator.start_session()
        self.assertTrue(generator.try_generate_event(TaskType.EXPEDITION, _context()).success)
        second = generator.try_generate_event(TaskType.EXPEDITION, _context())
        self.assertEqual(REASON_NO_TEMPLATE, second.reason)

        generator.start_session()
        self.assertTrue(generator.try_generate_event(TaskType.EXPEDITION, _context()).success)

    def test_broken_condition_skips_template_instead_of_raising(self) -> None:
        def needs_flag(context):
            raise KeyError("missing flag")

        flagged = EventTemplate(
            template_id="flagged",
            severity=EventSeverity.INFO,
            category=EventCategory.MYSTERY,
            messages=("Flagged.",),
            conditions=EventConditions(custom_condition=needs_flag),
        )
        generator = self._generator([flagged, GOLD_FIND])
        generator.start_session()

        with self.assertLogs("focusquest.application.services.event_bank", level="ERROR"):
            result = generator.try_generate_event(TaskType.EXPEDITION, _context())

        self.assertTrue(result.success)
        self.assertEqual("gold_find", result.event.template_id)

    def test_end_session_returns_and_clears_events(self) -> None:
        generator = self._generator([GOLD_FIND])
        generator.start_session()
        generator.try_generate_event(TaskType.EXPEDITION, _context())
        events = generator.end_session()
        self.assertEqual(1, len(events))
        self.assertEqual([], generator.current_session_events())

    def test_seeded_generators_replay_identically(self) -> None:
        first = self._generator([GOLD_FIND, ONE_SHOT])
        second = self._generator([GOLD_FIND, ONE_SHOT])
        first.start_session()
        second.start_session()
        a = [first.try_generate_event(TaskType.RAID, _context()).event for _ in range(3)]
        b = [second.try_generate_event(TaskType.RAID, _context()).event for _ in range(3)]
        self.assertEqual([event.id for event in a], [event.id for event in b])
        self.assertEqual([event.effects for event in a], [event.effects for event in b])

    def test_fractional_fields_keep_their_fraction(self) -> None:
        generator = self._generator([GOLD_FIND])
        effects = generator.sample_effects(GOLD_FIND)
        self.assertIsInstance(effects.success_chance_modifier, float)
        self.assertTrue(1 <= effects.success_chance_modifier <= 3)


class PlaceholderTests(unittest.TestCase):
    def test_magnitudes_are_absolute(self) -> None:
        effects = EventEffects(health_modifier=-12, gold_modifier=-7, success_chance_modifier=-2.25)
        text = fill_placeholders("Lose {damage} HP, {gold} gold, {success}% focus", effects)
        self.assertEqual("Lose 12 HP, 7 gold, 2.2% focus", text)

    def test_only_first_occurrence_replaced(self) -> None:
        effects = EventEffects(gold_modifier=3)
        self.assertEqual("3 and {gold}", fill_placeholders("{gold} and {gold}", effects))

    def test_absent_effect_leaves_placeholder(self) -> None:
        self.assertEqual("{xp} XP", fill_placeholders("{xp} XP", EventEffects()))


class TaskTuningTests(unittest.TestCase):
    def test_rate_modifier_divides_delays(self) -> None:
        raid = event_config_for_task(TaskType.RAID, PRODUCTION_EVENT_CONFIG)
        self.assertEqual(75_000, raid.min_time_between_events_ms)
        self.assertEqual(125_000, raid.max_time_between_events_ms)
        rest = event_config_for_task("rest", PRODUCTION_EVENT_CONFIG)
        self.assertEqual(180_000, rest.min_time_between_events_ms)
        self.assertEqual(80, rest.severity_weights.flavor)


if __name__ == "__main__":
    unittest.main()
