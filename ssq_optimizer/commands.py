"""
Command surface: the three operations a front end calls.

All of them take and return plain dicts/lists (see serialization.py) so they
can sit behind JSON, a CLI or any other shell.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .analyzer import analyze_blue_frequency, analyze_red_frequency
from .exceptions import DataUnavailableError
from .fetcher import DataFetcher
from .generator import CombinationGenerator
from .models import ITERATION_COUNT, PREDICTION_COUNT, SsqRecord, WeightPolicy
from .sampler import make_rng
from .serialization import (
    combination_to_dict,
    frequency_to_dict,
    record_to_dict,
    records_from_dicts,
)
from .store import HistoryStore

logger = logging.getLogger(__name__)


# ======================
# MERGE POLICY
# ======================
def merge_records(existing: Sequence[SsqRecord], fetched: Sequence[SsqRecord]) -> Tuple[List[SsqRecord], int]:
    """Union by issue (existing rows win), sorted by issue ascending.
    Returns:
        (merged records, number of newly added records)
    """
    merged = list(existing)
    known = {r.issue for r in merged}
    added_count = 0
    for record in fetched:
        if record.issue not in known:
            merged.append(record)
            known.add(record.issue)
            added_count += 1
    merged.sort(key=lambda r: r.issue)
    return merged, added_count


def _should_fetch(local_records: Sequence[SsqRecord], last_update: Optional[date], today: date) -> bool:
    if not local_records:
        logger.info("No local data, fetching from network")
        return True
    if last_update is None:
        logger.info("Last update time unknown, fetching from network")
        return True
    if last_update >= today:
        logger.info(f"Data is current (last update: {last_update}, today: {today}), skipping fetch")
        return False
    logger.info(f"Data is stale (last update: {last_update}, today: {today}), fetching from network")
    return True


# ======================
# COMMANDS
# ======================
def refresh_records(store: HistoryStore, fetcher: DataFetcher, max_count: int,
                    today: Optional[date] = None) -> List[SsqRecord]:
    """Load local history and top it up from the network when stale."""
    today = today or date.today()
    local_records = store.load()
    if local_records:
        latest = local_records[-1]
        logger.info(f"Local data: {len(local_records)} records, latest issue {latest.issue} ({latest.date})")

    if not _should_fetch(local_records, store.get_last_update_time(), today):
        return local_records

    try:
        new_records = fetcher.fetch_history(max_count)
    except Exception as e:
        if not local_records:
            raise DataUnavailableError(f"No local data and network fetch failed: {str(e)}")
        logger.warning(f"Network fetch failed: {str(e)}. Using existing local data")
        return local_records

    merged, added_count = merge_records(local_records, new_records)
    logger.info(f"Merged {len(new_records)} fetched records, {added_count} new")
    store.save(merged)
    # the store only keeps its window, so hand back what it now holds
    return merged[-store.max_records:]


def load_and_update_data(config: Mapping[str, Any]) -> List[Dict[str, Any]]:
    store = HistoryStore.from_config(config)
    fetcher = DataFetcher.from_config(config)
    records = refresh_records(store, fetcher, config['fetch'].get('max_count', store.max_records))
    return [record_to_dict(r) for r in records]


def analyze_frequency(
    records: Sequence[Mapping[str, Any]], algorithm: str
) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    """Red and blue frequency tables for serialized records."""
    policy = WeightPolicy.from_selector(algorithm)
    parsed = records_from_dicts(records)
    red_freq = analyze_red_frequency(parsed, policy)
    blue_freq = analyze_blue_frequency(parsed, policy)
    return [frequency_to_dict(f) for f in red_freq], [frequency_to_dict(f) for f in blue_freq]


def generate_predictions(
    records: Sequence[Mapping[str, Any]],
    algorithm: str,
    iterations: int = ITERATION_COUNT,
    prediction_count: int = PREDICTION_COUNT,
    seed: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """Ranked unique combinations for serialized records."""
    policy = WeightPolicy.from_selector(algorithm)
    parsed = records_from_dicts(records)
    generator = CombinationGenerator(iterations, prediction_count)
    predictions = generator.generate(parsed, policy, make_rng(seed))
    return [combination_to_dict(c) for c in predictions]
