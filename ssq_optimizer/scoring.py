from typing import Dict, Iterable, Sequence

from .models import NumberFrequency


def weight_lookup(frequencies: Iterable[NumberFrequency]) -> Dict[int, float]:
    """{number: weight} for a frequency table"""
    return {f.number: f.weight for f in frequencies}


class ScoreModel:
    """Aggregate score of a combination: sum of its numbers' weights."""

    def __init__(self, red_frequencies: Iterable[NumberFrequency], blue_frequencies: Iterable[NumberFrequency]):
        self.red_weights = weight_lookup(red_frequencies)
        self.blue_weights = weight_lookup(blue_frequencies)

    def score(self, red_balls: Sequence[int], blue_ball: int) -> float:
        # Numbers missing from a table contribute nothing
        score = 0.0
        for ball in red_balls:
            score += self.red_weights.get(ball, 0.0)
        score += self.blue_weights.get(blue_ball, 0.0)
        return score


def calculate_score(
    red_balls: Sequence[int],
    blue_ball: int,
    red_frequencies: Iterable[NumberFrequency],
    blue_frequencies: Iterable[NumberFrequency],
) -> float:
    return ScoreModel(red_frequencies, blue_frequencies).score(red_balls, blue_ball)
