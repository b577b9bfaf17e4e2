from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from numbers import Integral
from typing import Optional, Sequence, Tuple

from .exceptions import InvalidPolicyError, MalformedRecordError

# ======================
# DOMAIN CONSTANTS
# ======================
RED_BALL_MIN = 1
RED_BALL_MAX = 33
BLUE_BALL_MIN = 1
BLUE_BALL_MAX = 16
RED_BALL_COUNT = 6
PREDICTION_COUNT = 10
ITERATION_COUNT = 10000
MAX_RECORDS = 500
DATE_FORMAT = "%Y-%m-%d"

RED_DOMAIN = range(RED_BALL_MIN, RED_BALL_MAX + 1)
BLUE_DOMAIN = range(BLUE_BALL_MIN, BLUE_BALL_MAX + 1)


def _check_ball(value, low: int, high: int, label: str) -> int:
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise MalformedRecordError(f"{label} must be an integer, got {value!r}")
    if not low <= value <= high:
        raise MalformedRecordError(f"{label} {value} outside range {low}-{high}")
    return int(value)


# ======================
# DRAW RECORD
# ======================
@dataclass(frozen=True)
class SsqRecord:
    """One historical draw: issue number, draw date, 6 reds and 1 blue."""
    issue: str
    date: str
    red_balls: Tuple[int, ...]
    blue_ball: int

    def __post_init__(self):
        if not isinstance(self.issue, str) or not self.issue.strip():
            raise MalformedRecordError(f"issue must be a non-empty string, got {self.issue!r}")
        if not isinstance(self.date, str):
            raise MalformedRecordError(f"date must be a string, got {self.date!r}")
        if isinstance(self.red_balls, (str, bytes)) or not isinstance(self.red_balls, Sequence):
            raise MalformedRecordError(f"red_balls must be a sequence, got {self.red_balls!r}")
        if len(self.red_balls) != RED_BALL_COUNT:
            raise MalformedRecordError(
                f"Issue {self.issue}: red_balls must contain exactly {RED_BALL_COUNT} elements, "
                f"got {len(self.red_balls)}"
            )
        reds = tuple(
            _check_ball(n, RED_BALL_MIN, RED_BALL_MAX, f"Issue {self.issue}: red ball")
            for n in self.red_balls
        )
        if len(set(reds)) != RED_BALL_COUNT:
            raise MalformedRecordError(f"Issue {self.issue}: duplicate red balls {list(reds)}")
        blue = _check_ball(self.blue_ball, BLUE_BALL_MIN, BLUE_BALL_MAX, f"Issue {self.issue}: blue ball")

        # frozen, so normalise through object.__setattr__
        object.__setattr__(self, "red_balls", reds)
        object.__setattr__(self, "blue_ball", blue)

    def get_date(self) -> Optional[date]:
        try:
            return datetime.strptime(self.date, DATE_FORMAT).date()
        except ValueError:
            return None


# ======================
# ANALYSIS TYPES
# ======================
@dataclass(frozen=True)
class NumberFrequency:
    number: int
    frequency: int
    weight: float


class WeightPolicy(Enum):
    """How occurrence frequency is turned into a sampling weight."""
    FAVOR_FREQUENT = "hot"
    FAVOR_RARE = "cold"

    @classmethod
    def from_selector(cls, selector: str) -> "WeightPolicy":
        """Map the 'hot'/'cold' selector string to a policy."""
        if isinstance(selector, cls):
            return selector
        if isinstance(selector, str):
            for policy in cls:
                if policy.value == selector:
                    return policy
        raise InvalidPolicyError(
            f"Invalid algorithm type {selector!r}. Choose from: {[p.value for p in cls]}"
        )


@dataclass(frozen=True)
class Combination:
    """Generated candidate: sorted reds, one blue and its aggregate score."""
    red_balls: Tuple[int, ...]
    blue_ball: int
    score: float

    def __post_init__(self):
        object.__setattr__(self, "red_balls", tuple(sorted(self.red_balls)))

    def key(self) -> Tuple[Tuple[int, ...], int]:
        return self.red_balls, self.blue_ball
