import pytest

from ssq_optimizer.exceptions import InvalidPolicyError, MalformedRecordError
from ssq_optimizer.models import Combination, SsqRecord, WeightPolicy


def test_record_keeps_draw_order_and_parses_date():
    record = SsqRecord('2025001', '2025-03-04', (30, 1, 9, 22, 5, 14), 7)
    assert record.red_balls == (30, 1, 9, 22, 5, 14)
    assert record.get_date().isoformat() == '2025-03-04'


def test_record_unparseable_date_is_none():
    assert SsqRecord('2025001', 'soon', (1, 2, 3, 4, 5, 6), 1).get_date() is None


@pytest.mark.parametrize("reds, blue", [
    ((1, 2, 3, 4, 5), 1),            # too few
    ((1, 2, 3, 4, 5, 6, 7), 1),      # too many
    ((1, 1, 3, 4, 5, 6), 1),         # duplicate
    ((0, 2, 3, 4, 5, 6), 1),         # below range
    ((1, 2, 3, 4, 5, 34), 1),        # above range
    ((1, 2, 3, 4, 5, 6), 17),        # blue out of range
    ((1, 2, 3, 4, 5, '6'), 1),       # not an int
    ((1, 2, 3, 4, 5, 6), True),      # bool is not a ball
])
def test_record_rejects_invalid_numbers(reds, blue):
    with pytest.raises(MalformedRecordError):
        SsqRecord('2025001', '2025-01-01', reds, blue)


def test_record_requires_issue():
    with pytest.raises(MalformedRecordError):
        SsqRecord('  ', '2025-01-01', (1, 2, 3, 4, 5, 6), 1)


def test_record_is_immutable():
    record = SsqRecord('2025001', '2025-01-01', (1, 2, 3, 4, 5, 6), 1)
    with pytest.raises(AttributeError):
        record.blue_ball = 2


def test_policy_selector():
    assert WeightPolicy.from_selector('hot') is WeightPolicy.FAVOR_FREQUENT
    assert WeightPolicy.from_selector('cold') is WeightPolicy.FAVOR_RARE
    assert WeightPolicy.from_selector(WeightPolicy.FAVOR_RARE) is WeightPolicy.FAVOR_RARE


@pytest.mark.parametrize("selector", ['warm', 'HOT', '', None, 1, ' hot', 'cold\n', '\thot ', ' cold '])
def test_policy_selector_rejects_unknown(selector):
    with pytest.raises(InvalidPolicyError):
        WeightPolicy.from_selector(selector)


def test_combination_normalises_red_order():
    a = Combination((9, 1, 5, 30, 22, 14), 7, 1.0)
    b = Combination((1, 5, 9, 14, 22, 30), 7, 2.0)
    assert a.red_balls == (1, 5, 9, 14, 22, 30)
    assert a.key() == b.key()
    assert a.key() != Combination(a.red_balls, 8, 1.0).key()
