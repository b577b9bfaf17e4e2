import math
from typing import List, Optional, Sequence

import numpy as np

from .models import NumberFrequency


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Random source for sampling; pass a seed for reproducible runs."""
    return np.random.default_rng(seed)


def weighted_random_selection(
    frequencies: Sequence[NumberFrequency],
    count: int,
    rng: Optional[np.random.Generator] = None,
) -> List[int]:
    """Draw `count` distinct numbers without replacement, biased toward higher weight.

    Each round re-totals the weight of the numbers still available, draws a
    uniform value in [0, total) and walks the pool until the running sum
    passes it. When every remaining weight is zero (or float rounding lets
    the walk run off the end) a remaining number is picked uniformly instead,
    so each round removes exactly one number.

    Args:
        frequencies: Population; only ``number`` and ``weight`` are read.
        count: How many numbers to pick. Capped at the population size.
        rng: numpy Generator. A fresh unseeded one is used when omitted.

    Returns:
        Selected numbers sorted ascending.
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    rng = rng if rng is not None else make_rng()

    # Fixed pool order so the draw never depends on how the table was sorted
    pool = sorted(frequencies, key=lambda f: f.number)
    numbers = [int(f.number) for f in pool]
    weights = [float(f.weight) for f in pool]
    for number, weight in zip(numbers, weights):
        if not math.isfinite(weight) or weight < 0:
            raise ValueError(f"Weight for {number} must be finite and non-negative, got {weight}")
    if len(set(numbers)) != len(numbers):
        raise ValueError("Population contains duplicate numbers")

    available = len(numbers)
    selected = []
    while len(selected) < count and available > 0:
        total_weight = math.fsum(weights[:available])
        chosen = None

        if total_weight > 0:
            rand_value = rng.random() * total_weight
            cumulative = 0.0
            for i in range(available):
                cumulative += weights[i]
                if cumulative > rand_value:
                    chosen = i
                    break

        if chosen is None:
            chosen = int(rng.integers(available))

        selected.append(numbers[chosen])
        # swap-remove: move the last live slot into the chosen one
        available -= 1
        numbers[chosen], numbers[available] = numbers[available], numbers[chosen]
        weights[chosen], weights[available] = weights[available], weights[chosen]

    selected.sort()
    return selected
