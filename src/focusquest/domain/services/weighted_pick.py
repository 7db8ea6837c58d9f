from __future__ import annotations

import math
import random
from typing import Callable, Optional, Sequence, TypeVar

T = TypeVar("T")


def weighted_pick(items: Sequence[T], weight_of: Callable[[T], float], rng: random.Random) -> Optional[T]:
    """Pick one item with probability proportional to its weight.

    Negative weights count as zero. When every weight is zero the pick is
    uniform, and float drift past the end of the walk yields the last item.
    Returns None only for an empty sequence.
    """
    if not items:
        return None
    weights = [max(0.0, float(weight_of(item))) for item in items]
    total = sum(weights)
    if total <= 0:
        return items[rng.randrange(len(items))]

    remaining = rng.random() * total
    for item, weight in zip(items, weights):
        if weight <= 0:
            continue
        remaining -= weight
        if remaining <= 0:
            return item
    return items[-1]


def roll_int(rng: random.Random, minimum: int, maximum: int) -> int:
    """Inclusive integer roll that tolerates an inverted range."""
    low, high = int(minimum), int(maximum)
    if high < low:
        low, high = high, low
    return rng.randint(low, high)


def round_half_up(value: float) -> int:
    """Round halves upward (2.5 -> 3, -2.5 -> -2) rather than to the even neighbour."""
    return int(math.floor(value + 0.5))
