import sys
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from focusquest.application.services.seed_policy import derive_rng, derive_seed


class SeedPolicyTests(unittest.TestCase):
    def test_same_context_same_seed(self) -> None:
        context = {
            "seed": 9,
            "task_type": "raid",
            "risk_level": "risky",
            "session": {"duration_ms": 1500000, "profile": "production"},
        }
        self.assertEqual(derive_seed("task.resolve", context), derive_seed("task.resolve", context))

    def test_context_key_order_does_not_change_seed(self) -> None:
        context_a = {"a": 1, "b": {"x": 2, "y": 3}}
        context_b = {"b": {"y": 3, "x": 2}, "a": 1}
        self.assertEqual(derive_seed("event.generate", context_a), derive_seed("event.generate", context_b))

    def test_namespace_changes_seed(self) -> None:
        context = {"value": 10}
        self.assertNotEqual(derive_seed("event.generate", context), derive_seed("task.resolve", context))

    def test_unordered_set_values_produce_stable_seed(self) -> None:
        context_a = {"tasks": {"raid", "hunt", "expedition"}}
        context_b = {"tasks": {"expedition", "raid", "hunt"}}
        self.assertEqual(derive_seed("loot.generate", context_a), derive_seed("loot.generate", context_b))

    def test_non_finite_float_in_context_raises(self) -> None:
        with self.assertRaises(ValueError):
            derive_seed("loot.generate", {"luck": float("nan")})

    def test_derive_rng_is_deterministic_for_same_context(self) -> None:
        context = {"seed": 12, "chest_id": "a4k2", "level": 9}
        rng_a = derive_rng("chest.open", context)
        rng_b = derive_rng("chest.open", context)
        self.assertEqual(rng_a.randint(1, 1000), rng_b.randint(1, 1000))

    def test_derive_rng_changes_with_namespace(self) -> None:
        context = {"seed": 12, "chest_id": "a4k2", "level": 9}
        rng_a = derive_rng("chest.open", context)
        rng_b = derive_rng("loot.generate", context)
        self.assertNotEqual(rng_a.randint(1, 1000), rng_b.randint(1, 1000))


if __name__ == "__main__":
    unittest.main()
