from datetime import date

import pytest

from ssq_optimizer.exceptions import MalformedRecordError
from ssq_optimizer.store import HistoryStore
from tests.conftest import make_record


def test_missing_file_loads_empty(tmp_path):
    store = HistoryStore(str(tmp_path))
    assert store.load() == []
    assert store.get_last_update_time() is None


def test_round_trip_with_update_header(tmp_path, sample_records):
    store = HistoryStore(str(tmp_path / 'nested'))
    path = store.save(sample_records)

    with open(path, encoding='utf-8') as f:
        lines = f.read().splitlines()
    assert lines[0] == f"# LastUpdate: {date.today():%Y-%m-%d}"
    assert lines[1] == "issue,date,red1,red2,red3,red4,red5,red6,blue_ball"
    assert lines[2] == "2025001,2025-01-02,1,5,9,14,22,30,7"

    assert store.load() == sample_records
    assert store.get_last_update_time() == date.today()


def test_keeps_most_recent_window(tmp_path):
    records = [make_record(2020000 + i, [1, 2, 3, 4, 5, 6 + i % 20], 1 + i % 16) for i in range(30)]
    store = HistoryStore(str(tmp_path), max_records=10)
    store.save(records)
    loaded = store.load()
    assert [r.issue for r in loaded] == [r.issue for r in records[-10:]]


def test_load_applies_window_to_oversized_file(tmp_path):
    records = [make_record(2020000 + i, [1, 2, 3, 4, 5, 6 + i % 20], 1) for i in range(12)]
    HistoryStore(str(tmp_path), max_records=50).save(records)
    assert len(HistoryStore(str(tmp_path), max_records=5).load()) == 5


def test_file_without_header_comment(tmp_path):
    (tmp_path / 'ssq_history.csv').write_text(
        "issue,date,red1,red2,red3,red4,red5,red6,blue_ball\n"
        "2025001,2025-01-02,1,5,9,14,22,30,7\n"
    )
    store = HistoryStore(str(tmp_path))
    assert store.get_last_update_time() is None
    assert store.load()[0].red_balls == (1, 5, 9, 14, 22, 30)


def test_issue_leading_zeros_preserved(tmp_path):
    (tmp_path / 'ssq_history.csv').write_text(
        "issue,date,red1,red2,red3,red4,red5,red6,blue_ball\n"
        "0001,2025-01-02,1,5,9,14,22,30,7\n"
    )
    assert HistoryStore(str(tmp_path)).load()[0].issue == '0001'


def test_malformed_row_names_row(tmp_path):
    (tmp_path / 'ssq_history.csv').write_text(
        "# LastUpdate: 2025-01-01\n"
        "issue,date,red1,red2,red3,red4,red5,red6,blue_ball\n"
        "2025001,2025-01-02,1,5,9,14,22,30,7\n"
        "2025002,2025-01-05,1,5,9,14,22,,7\n"
    )
    store = HistoryStore(str(tmp_path))
    assert store.get_last_update_time() == date(2025, 1, 1)
    with pytest.raises(MalformedRecordError, match="row 2"):
        store.load()


def test_from_config(config):
    store = HistoryStore.from_config(config)
    assert store.csv_path.name == 'ssq_history.csv'
    assert store.max_records == 500


@pytest.mark.parametrize("cell", ['1.0', '+5', '5.5', 'x'])
def test_ball_cells_must_be_plain_integers(tmp_path, cell):
    (tmp_path / 'ssq_history.csv').write_text(
        "issue,date,red1,red2,red3,red4,red5,red6,blue_ball\n"
        "2025001,2025-01-02,1,5,9,14,22,30,7\n"
        f"2025002,2025-01-05,{cell},6,9,14,22,30,7\n"
    )
    with pytest.raises(MalformedRecordError, match="row 2"):
        HistoryStore(str(tmp_path)).load()


def test_blue_cell_written_as_float_rejected(tmp_path):
    (tmp_path / 'ssq_history.csv').write_text(
        "issue,date,red1,red2,red3,red4,red5,red6,blue_ball\n"
        "2025001,2025-01-02,1,5,9,14,22,30,7.0\n"
    )
    with pytest.raises(MalformedRecordError, match="blue ball"):
        HistoryStore(str(tmp_path)).load()
