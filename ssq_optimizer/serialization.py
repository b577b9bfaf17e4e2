"""
Dict codec for the command surface.

Records are read from either of two shapes:
    {"issue", "date", "red_balls": [6 ints], "blue_ball"}
    {"issue", "date", "red1", ..., "red6", "blue_ball"}
and always written in the first.
"""

from typing import Any, Dict, Iterable, List, Mapping

from .exceptions import MalformedRecordError
from .models import RED_BALL_COUNT, Combination, NumberFrequency, SsqRecord

RED_FIELDS = [f"red{i}" for i in range(1, RED_BALL_COUNT + 1)]
CSV_COLUMNS = ['issue', 'date'] + RED_FIELDS + ['blue_ball']


def _require(data: Mapping[str, Any], field: str):
    if field not in data or data[field] is None:
        raise MalformedRecordError(f"missing field `{field}`")
    return data[field]


def _red_balls_from(data: Mapping[str, Any]) -> List[Any]:
    if data.get('red_balls') is not None:
        balls = data['red_balls']
        if isinstance(balls, (str, bytes)) or not isinstance(balls, (list, tuple)):
            raise MalformedRecordError(f"red_balls must be a list, got {balls!r}")
        if len(balls) != RED_BALL_COUNT:
            raise MalformedRecordError(f"red_balls must contain exactly {RED_BALL_COUNT} elements")
        return list(balls)
    return [_require(data, field) for field in RED_FIELDS]


def record_from_dict(data: Mapping[str, Any]) -> SsqRecord:
    if not isinstance(data, Mapping):
        raise MalformedRecordError(f"record must be a mapping, got {type(data).__name__}")
    issue = _require(data, 'issue')
    draw_date = _require(data, 'date')
    blue_ball = _require(data, 'blue_ball')
    return SsqRecord(
        issue=issue,
        date=draw_date,
        red_balls=tuple(_red_balls_from(data)),
        blue_ball=blue_ball,
    )


def records_from_dicts(items: Iterable[Mapping[str, Any]]) -> List[SsqRecord]:
    return [record_from_dict(item) for item in items]


def record_to_dict(record: SsqRecord) -> Dict[str, Any]:
    return {
        'issue': record.issue,
        'date': record.date,
        'red_balls': list(record.red_balls),
        'blue_ball': record.blue_ball,
    }


def record_to_row(record: SsqRecord) -> Dict[str, Any]:
    """Flat CSV row: red1..red6 columns instead of a list"""
    row = {'issue': record.issue, 'date': record.date}
    row.update(zip(RED_FIELDS, record.red_balls))
    row['blue_ball'] = record.blue_ball
    return row


def frequency_to_dict(frequency: NumberFrequency) -> Dict[str, Any]:
    return {
        'number': frequency.number,
        'frequency': frequency.frequency,
        'weight': frequency.weight,
    }


def combination_to_dict(combination: Combination) -> Dict[str, Any]:
    return {
        'red_balls': list(combination.red_balls),
        'blue_ball': combination.blue_ball,
        'score': combination.score,
    }
