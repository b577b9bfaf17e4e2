"""
SSQ OPTIMIZER
- Frequency analysis of double colour ball draws
- Weighted Monte-Carlo combination search
- CSV history store with remote refresh
"""

from .analyzer import analyze_blue_frequency, analyze_frequency, analyze_red_frequency
from .exceptions import DataUnavailableError, InvalidPolicyError, MalformedRecordError
from .generator import CombinationGenerator, generate_predictions
from .models import Combination, NumberFrequency, SsqRecord, WeightPolicy
from .sampler import make_rng, weighted_random_selection
from .scoring import ScoreModel, calculate_score

__version__ = "0.1.0"

__all__ = [
    "Combination",
    "CombinationGenerator",
    "DataUnavailableError",
    "InvalidPolicyError",
    "MalformedRecordError",
    "NumberFrequency",
    "ScoreModel",
    "SsqRecord",
    "WeightPolicy",
    "analyze_blue_frequency",
    "analyze_frequency",
    "analyze_red_frequency",
    "calculate_score",
    "generate_predictions",
    "make_rng",
    "weighted_random_selection",
]
