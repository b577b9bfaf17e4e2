import pytest

from ssq_optimizer.models import SsqRecord


def make_record(issue, reds, blue, draw_date='2025-01-01'):
    return SsqRecord(issue=str(issue), date=draw_date, red_balls=tuple(reds), blue_ball=blue)


@pytest.fixture
def hot_seven_records():
    """10 draws: 7 is in every one, no other red appears more than twice"""
    others = [n for n in range(1, 34) if n != 7]
    records = []
    for i in range(10):
        reds = [7] + [others[(5 * i + j) % len(others)] for j in range(5)]
        records.append(make_record(2025001 + i, reds, (i % 16) + 1, f'2025-01-{i + 1:02d}'))
    return records


@pytest.fixture
def sample_records():
    return [
        make_record(2025001, [1, 5, 9, 14, 22, 30], 7, '2025-01-02'),
        make_record(2025002, [3, 5, 11, 17, 22, 33], 12, '2025-01-05'),
        make_record(2025003, [2, 5, 8, 19, 27, 31], 7, '2025-01-07'),
        make_record(2025004, [4, 6, 9, 14, 25, 32], 1, '2025-01-09'),
        make_record(2025005, [1, 10, 13, 22, 28, 29], 16, '2025-01-12'),
    ]


@pytest.fixture
def config(tmp_path):
    return {
        'data': {'data_dir': str(tmp_path / 'data'), 'csv_filename': 'ssq_history.csv', 'max_records': 500},
        'fetch': {'url': 'http://example.invalid/history.php', 'max_count': 20, 'timeout': 1},
        'generation': {'iterations': 200, 'prediction_count': 5},
        'logging': {'level': 'WARNING'},
    }
