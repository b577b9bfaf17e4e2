import logging
from datetime import date, timedelta
from typing import List, Optional

import numpy as np
import requests
from bs4 import BeautifulSoup

from .exceptions import MalformedRecordError
from .models import (
    BLUE_BALL_MAX,
    BLUE_BALL_MIN,
    DATE_FORMAT,
    MAX_RECORDS,
    RED_BALL_COUNT,
    RED_BALL_MAX,
    RED_BALL_MIN,
    SsqRecord,
)

logger = logging.getLogger(__name__)

DEFAULT_URL = "https://datachart.500.com/ssq/history/newinc/history.php"
DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

# Tried in order; the first selector that yields records wins
ROW_SELECTORS = [
    "tbody#tdata tr",
    "tbody tr.t_tr1",
    "tbody tr",
]


class DataFetcher:
    """Best-effort download of recent draws from the 500.com history table.

    The page layout is one row per draw:
        <td>issue</td> <td>red1</td>..<td>red6</td> <td>blue</td> ... <td>date</td>
    Any network or parse failure falls back to synthetic sample data, so
    callers always get schema-valid records.
    """

    def __init__(self, url: str = DEFAULT_URL, timeout: float = 60, user_agent: str = DEFAULT_USER_AGENT,
                 session: Optional[requests.Session] = None):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({'User-Agent': user_agent})

    @classmethod
    def from_config(cls, config: dict) -> "DataFetcher":
        fetch_cfg = config['fetch']
        return cls(
            url=fetch_cfg.get('url', DEFAULT_URL),
            timeout=fetch_cfg.get('timeout', 60),
            user_agent=fetch_cfg.get('user_agent', DEFAULT_USER_AGENT),
        )

    def fetch_history(self, max_count: int = MAX_RECORDS) -> List[SsqRecord]:
        limit = min(max_count, MAX_RECORDS)
        logger.info(f"Fetching up to {limit} draws from {self.url}")

        try:
            response = self.session.get(self.url, params={'limit': limit}, timeout=self.timeout)
            response.raise_for_status()
            records = parse_html(response.text, max_count)
            logger.info(f"Fetched {len(records)} records from network")
            return records
        except requests.RequestException as e:
            logger.warning(f"Network request failed: {str(e)}. Using sample data")
        except ValueError as e:
            logger.warning(f"Page parse failed: {str(e)}. Using sample data")

        return generate_sample_data(max_count)


# ======================
# HTML PARSING
# ======================
def _parse_ball(text: str, low: int, high: int) -> Optional[int]:
    try:
        value = int(text)
    except ValueError:
        return None
    return value if low <= value <= high else None


def _parse_row(cells: List[str]) -> Optional[SsqRecord]:
    # issue + 6 reds + 1 blue at minimum
    if len(cells) < RED_BALL_COUNT + 2:
        return None

    issue = cells[0].strip()
    if not issue.isdigit():
        return None

    red_balls = [_parse_ball(c, RED_BALL_MIN, RED_BALL_MAX) for c in cells[1:RED_BALL_COUNT + 1]]
    if None in red_balls:
        return None
    blue_ball = _parse_ball(cells[RED_BALL_COUNT + 1], BLUE_BALL_MIN, BLUE_BALL_MAX)
    if blue_ball is None:
        return None

    # Draw date sits in the last column of full-width rows
    if len(cells) > 10:
        draw_date = cells[-1].strip()
    else:
        draw_date = date.today().strftime(DATE_FORMAT)

    try:
        return SsqRecord(issue, draw_date, tuple(red_balls), blue_ball)
    except MalformedRecordError as e:
        logger.debug(f"Skipping row {issue}: {str(e)}")
        return None


def parse_html(html: str, max_count: int = MAX_RECORDS) -> List[SsqRecord]:
    """
    Extract draws from the history page.
    Raises:
        ValueError: no selector produced a valid record.
    """
    soup = BeautifulSoup(html, 'html.parser')
    records = []

    for selector in ROW_SELECTORS:
        rows = soup.select(selector)
        logger.debug(f"Selector '{selector}' matched {len(rows)} rows")
        for row in rows:
            cells = [td.get_text(strip=True) for td in row.find_all('td')]
            record = _parse_row(cells)
            if record is None:
                continue
            records.append(record)
            if len(records) >= max_count:
                break
        if records:
            logger.debug(f"Selector '{selector}' parsed {len(records)} records")
            break

    if not records:
        raise ValueError("No valid draw rows found in page")
    return records


# ======================
# SAMPLE DATA
# ======================
def generate_sample_data(count: int, rng: Optional[np.random.Generator] = None) -> List[SsqRecord]:
    """Synthetic but schema-valid draws, issues 2024001 upward, 3 days apart"""
    rng = rng if rng is not None else np.random.default_rng()
    base_issue = 2024001
    today = date.today()

    records = []
    for i in range(min(count, MAX_RECORDS)):
        reds = rng.choice(np.arange(RED_BALL_MIN, RED_BALL_MAX + 1), size=RED_BALL_COUNT, replace=False)
        records.append(SsqRecord(
            issue=str(base_issue + i),
            date=(today - timedelta(days=i * 3)).strftime(DATE_FORMAT),
            red_balls=tuple(sorted(int(n) for n in reds)),
            blue_ball=int(rng.integers(BLUE_BALL_MIN, BLUE_BALL_MAX + 1)),
        ))

    records.sort(key=lambda r: r.issue)
    return records
