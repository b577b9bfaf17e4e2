import logging
from typing import Iterable, List, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from .models import (
    BLUE_DOMAIN,
    RED_DOMAIN,
    NumberFrequency,
    SsqRecord,
    WeightPolicy,
)

logger = logging.getLogger(__name__)


# ======================
# WEIGHT TRANSFORM
# ======================
def calculate_weight(frequency: int, total_records: int, policy: WeightPolicy) -> float:
    """
    Convert one occurrence count into a sampling weight.
    Returns:
        float: p^2 * 100 for FAVOR_FREQUENT, (1-p)^2 * 100 for FAVOR_RARE,
        where p = frequency / total_records. 0.0 when there are no records.
    """
    if total_records == 0:
        return 0.0
    return float(_transform(np.float64(frequency) / total_records, policy))


def _transform(probability, policy: WeightPolicy):
    if policy is WeightPolicy.FAVOR_FREQUENT:
        return probability * probability * 100.0
    if policy is WeightPolicy.FAVOR_RARE:
        inverted = 1.0 - probability
        return inverted * inverted * 100.0
    raise ValueError(f"Unsupported weight policy: {policy!r}")


def _calculate_weights(counts: pd.Series, total_records: int, policy: WeightPolicy) -> pd.Series:
    """Vectorised calculate_weight over a count Series"""
    if total_records == 0:
        return pd.Series(0.0, index=counts.index)
    probabilities = counts.to_numpy(dtype=np.float64) / total_records
    return pd.Series(_transform(probabilities, policy), index=counts.index)


# ======================
# FREQUENCY TABLES
# ======================
def _count_occurrences(values: Iterable[int], domain: range) -> pd.Series:
    """Occurrence count for every number of the domain, zeros included"""
    counts = pd.Series(list(values), dtype="int64").value_counts()
    return counts.reindex(list(domain), fill_value=0).astype("int64")


def _build_table(counts: pd.Series, total_records: int, policy: WeightPolicy) -> List[NumberFrequency]:
    table = pd.DataFrame({
        'number': counts.index.astype("int64"),
        'frequency': counts.to_numpy(),
        'weight': _calculate_weights(counts, total_records, policy).to_numpy(),
    })
    # Presentation order only; the sampler looks weights up by number
    table = table.sort_values(['frequency', 'number'], ascending=[False, True], kind='mergesort')
    return [
        NumberFrequency(number=int(row.number), frequency=int(row.frequency), weight=float(row.weight))
        for row in table.itertuples(index=False)
    ]


def analyze_red_frequency(records: Sequence[SsqRecord], policy: WeightPolicy) -> List[NumberFrequency]:
    """
    Red ball frequency table.
    Returns:
        33 NumberFrequency entries (1-33) ordered by frequency desc, number asc.
    """
    policy = WeightPolicy.from_selector(policy)
    counts = _count_occurrences((ball for record in records for ball in record.red_balls), RED_DOMAIN)
    return _build_table(counts, len(records), policy)


def analyze_blue_frequency(records: Sequence[SsqRecord], policy: WeightPolicy) -> List[NumberFrequency]:
    """
    Blue ball frequency table.
    Returns:
        16 NumberFrequency entries (1-16) ordered by frequency desc, number asc.
    """
    policy = WeightPolicy.from_selector(policy)
    counts = _count_occurrences((record.blue_ball for record in records), BLUE_DOMAIN)
    table = _build_table(counts, len(records), policy)
    logger.debug(f"Blue frequencies: {table}")
    return table


def analyze_frequency(
    records: Sequence[SsqRecord], policy: Union[WeightPolicy, str]
) -> Tuple[List[NumberFrequency], List[NumberFrequency]]:
    """Both tables at once: (red, blue)"""
    policy = WeightPolicy.from_selector(policy)
    return analyze_red_frequency(records, policy), analyze_blue_frequency(records, policy)
