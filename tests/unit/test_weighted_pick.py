import random
import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from focusquest.domain.services.weighted_pick import roll_int, round_half_up, weighted_pick


class _FixedRng:
    def __init__(self, value: float, index: int = 0) -> None:
        self._value = value
        self._index = index

    def random(self) -> float:
        return self._value

    def randrange(self, size: int) -> int:
        return self._index


class WeightedPickTests(unittest.TestCase):
    def test_empty_sequence_returns_none(self) -> None:
        self.assertIsNone(weighted_pick([], lambda item: 1, random.Random(1)))

    def test_walk_respects_cumulative_weights(self) -> None:
        items = [("a", 1), ("b", 3)]
        self.assertEqual("a", weighted_pick(items, lambda row: row[1], _FixedRng(0.2))[0])
        self.assertEqual("b", weighted_pick(items, lambda row: row[1], _FixedRng(0.3))[0])

    def test_zero_weight_items_are_never_picked_when_others_have_weight(self) -> None:
        items = [("never", 0), ("always", 5)]
        rng = random.Random(42)
        picks = {weighted_pick(items, lambda row: row[1], rng)[0] for _ in range(200)}
        self.assertEqual({"always"}, picks)

    def test_all_zero_weights_fall_back_to_uniform(self) -> None:
        items = ["x", "y", "z"]
        self.assertEqual("z", weighted_pick(items, lambda item: 0, _FixedRng(0.0, index=2)))

    def test_drift_past_the_end_returns_last_item(self) -> None:
        self.assertEqual("b", weighted_pick(["a", "b"], lambda item: 1, _FixedRng(1.0)))

    def test_roll_int_handles_inverted_range(self) -> None:
        value = roll_int(random.Random(5), 10, 3)
        self.assertTrue(3 <= value <= 10)

    def test_round_half_up(self) -> None:
        self.assertEqual(3, round_half_up(2.5))
        self.assertEqual(-2, round_half_up(-2.5))
        self.assertEqual(2, round_half_up(2.49))


if __name__ == "__main__":
    unittest.main()
