import logging
import math
from typing import List, Optional, Sequence, Union

import numpy as np

from .analyzer import analyze_blue_frequency, analyze_red_frequency
from .models import (
    ITERATION_COUNT,
    PREDICTION_COUNT,
    RED_BALL_COUNT,
    Combination,
    SsqRecord,
    WeightPolicy,
)
from .sampler import make_rng, weighted_random_selection
from .scoring import ScoreModel

logger = logging.getLogger(__name__)


def _ranking_key(combination: Combination):
    """Sort key for descending order; NaN scores rank below every real score"""
    if math.isnan(combination.score):
        return (False, 0.0)
    return (True, combination.score)


# ======================
# COMBINATION GENERATOR
# ======================
class CombinationGenerator:
    """Weighted Monte-Carlo search for the top scoring unique combinations.

    Every iteration samples 6 reds and 1 blue from the policy weights and
    scores them. The pooled candidates are ranked by score (stable, so ties
    keep generation order) and the first `prediction_count` distinct ones
    are returned. Fewer come back when fewer distinct candidates exist.
    """

    def __init__(self, iterations: int = ITERATION_COUNT, prediction_count: int = PREDICTION_COUNT):
        if iterations < 1:
            raise ValueError(f"iterations must be positive, got {iterations}")
        if prediction_count < 1:
            raise ValueError(f"prediction_count must be positive, got {prediction_count}")
        self.iterations = int(iterations)
        self.prediction_count = int(prediction_count)

    def generate(
        self,
        records: Sequence[SsqRecord],
        policy: Union[WeightPolicy, str],
        rng: Optional[np.random.Generator] = None,
    ) -> List[Combination]:
        policy = WeightPolicy.from_selector(policy)
        rng = rng if rng is not None else make_rng()

        red_frequencies = analyze_red_frequency(records, policy)
        blue_frequencies = analyze_blue_frequency(records, policy)
        scorer = ScoreModel(red_frequencies, blue_frequencies)

        candidates = []
        for _ in range(self.iterations):
            red_balls = weighted_random_selection(red_frequencies, RED_BALL_COUNT, rng)
            blue_ball = weighted_random_selection(blue_frequencies, 1, rng)[0]
            candidates.append(Combination(
                red_balls=tuple(red_balls),
                blue_ball=blue_ball,
                score=scorer.score(red_balls, blue_ball),
            ))

        candidates.sort(key=_ranking_key, reverse=True)
        results = self._unique_top(candidates)

        logger.debug(
            f"Generated {len(candidates)} candidates over {len(records)} records "
            f"({policy.value}), kept {len(results)} unique"
        )
        return results

    def _unique_top(self, ranked: Sequence[Combination]) -> List[Combination]:
        seen = set()
        unique = []
        for combination in ranked:
            key = combination.key()
            if key in seen:
                continue
            seen.add(key)
            unique.append(combination)
            if len(unique) >= self.prediction_count:
                break
        return unique


def generate_predictions(
    records: Sequence[SsqRecord],
    policy: Union[WeightPolicy, str],
    rng: Optional[np.random.Generator] = None,
    iterations: int = ITERATION_COUNT,
    prediction_count: int = PREDICTION_COUNT,
) -> List[Combination]:
    """Functional shortcut for CombinationGenerator(...).generate(...)"""
    return CombinationGenerator(iterations, prediction_count).generate(records, policy, rng)
