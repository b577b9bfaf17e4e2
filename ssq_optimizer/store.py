import logging
from datetime import date, datetime
from pathlib import Path
from typing import List, Optional, Sequence

import pandas as pd

from .exceptions import MalformedRecordError
from .models import DATE_FORMAT, MAX_RECORDS, SsqRecord
from .serialization import CSV_COLUMNS, RED_FIELDS, record_from_dict, record_to_row

logger = logging.getLogger(__name__)

LAST_UPDATE_PREFIX = "# LastUpdate:"
BALL_COLUMNS = set(RED_FIELDS) | {'blue_ball'}


def _cell(column: str, value):
    """Blank cells become None; ball cells become ints only when plain digits"""
    if pd.isna(value):
        return None
    if column not in BALL_COLUMNS:
        return value
    text = value.strip()
    if text.isascii() and text.isdigit():
        return int(text)
    # left as text so record validation rejects it (e.g. '1.0')
    return text


class HistoryStore:
    """CSV file holding the most recent draws.

    Layout:
        # LastUpdate: 2026-02-12
        issue,date,red1,red2,red3,red4,red5,red6,blue_ball
        2026001,2026-01-01,1,5,9,14,22,30,7
    """

    def __init__(self, data_dir: str = 'data', csv_filename: str = 'ssq_history.csv',
                 max_records: int = MAX_RECORDS):
        self.data_dir = Path(data_dir)
        self.csv_path = self.data_dir / csv_filename
        self.max_records = max_records

    @classmethod
    def from_config(cls, config: dict) -> "HistoryStore":
        data_cfg = config['data']
        return cls(data_cfg['data_dir'], data_cfg['csv_filename'], data_cfg.get('max_records', MAX_RECORDS))

    def get_last_update_time(self) -> Optional[date]:
        """Date from the `# LastUpdate:` header line, if present"""
        if not self.csv_path.exists():
            return None
        with open(self.csv_path, encoding='utf-8') as f:
            first_line = f.readline().strip()
        if not first_line.startswith(LAST_UPDATE_PREFIX):
            return None
        try:
            return datetime.strptime(first_line[len(LAST_UPDATE_PREFIX):].strip(), DATE_FORMAT).date()
        except ValueError:
            return None

    def load(self) -> List[SsqRecord]:
        """Load local history (empty when no file), keeping the last max_records draws"""
        if not self.csv_path.exists():
            return []

        try:
            df = pd.read_csv(
                self.csv_path,
                comment='#',
                dtype=str
            )
        except pd.errors.EmptyDataError:
            return []

        records = []
        for idx, row in enumerate(df.to_dict('records')):
            row = {k: _cell(k, v) for k, v in row.items()}
            try:
                records.append(record_from_dict(row))
            except MalformedRecordError as e:
                raise MalformedRecordError(f"{self.csv_path} row {idx + 1}: {str(e)}")

        if len(records) > self.max_records:
            records = records[-self.max_records:]
        logger.info(f"Loaded {len(records)} records from {self.csv_path}")
        return records

    def save(self, records: Sequence[SsqRecord]) -> str:
        """Write the last max_records draws with today's update header"""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        start_index = max(0, len(records) - self.max_records)
        kept = list(records[start_index:])
        logger.info(f"Saving {len(kept)} records (from index {start_index}) to {self.csv_path}")

        df = pd.DataFrame([record_to_row(r) for r in kept], columns=CSV_COLUMNS)
        with open(self.csv_path, 'w', encoding='utf-8', newline='') as f:
            f.write(f"{LAST_UPDATE_PREFIX} {date.today().strftime(DATE_FORMAT)}\n")
            df.to_csv(f, index=False)
        return str(self.csv_path)
