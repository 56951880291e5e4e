# test/test_table.py
import numpy as np
import pytest

from wav2pwl.core import ColumnTable, ColumnNotFound, IndexOutOfRange, InvalidTimeSeries
from wav2pwl.core.table import default_header, unit_for_column


def _table(has_header=True):
    data = np.array([
        [0.0, 1.0, 10.0],
        [0.1, 2.0, 20.0],
        [0.2, 3.0, 30.0],
    ])
    header = ("time", "out1", "out2") if has_header else default_header(3)
    return ColumnTable(header=header, data=data, has_header=has_header)


def test_table_basic_dict_api():
    table = _table()

    assert len(table) == 2
    assert list(table) == ["out1", "out2"]
    assert "out2" in table
    assert "time" not in table
    assert table.n_rows == 3
    assert np.allclose(table["out1"].values, [1.0, 2.0, 3.0])


def test_select_by_name_and_index_are_identical():
    table = _table()
    by_name = table.series("out2")
    by_index = table.series(2)

    assert np.allclose(by_name.time, by_index.time)
    assert np.allclose(by_name.values, by_index.values)
    assert by_name.name == by_index.name == "out2"


def test_default_selector_is_first_value_column():
    table = _table()
    assert table.column_index(None) == 1
    assert np.allclose(table.series().values, [1.0, 2.0, 3.0])


def test_name_match_is_case_sensitive():
    with pytest.raises(ColumnNotFound):
        _table().series("OUT1")


def test_missing_name_lists_available_columns():
    with pytest.raises(ColumnNotFound) as exc:
        _table().series("vout")
    assert "out1, out2" in str(exc.value)


def test_name_on_headerless_table_raises():
    table = _table(has_header=False)
    assert "col1" not in table
    with pytest.raises(ColumnNotFound):
        table.series("col1")


@pytest.mark.parametrize("index", [0, 3, 5])
def test_out_of_range_index(index):
    with pytest.raises(IndexOutOfRange):
        _table().series(index)


def test_rejects_row_width_mismatch():
    with pytest.raises(InvalidTimeSeries):
        ColumnTable(header=("time", "a", "b"), data=np.zeros((2, 2)))


def test_rejects_header_without_value_column():
    with pytest.raises(InvalidTimeSeries):
        ColumnTable(header=("time",), data=np.zeros((2, 1)))


def test_empty_table_gives_empty_series():
    table = ColumnTable(header=("time", "v"), data=np.array([]))
    assert table.n_rows == 0
    assert table.series().n == 0


def test_default_header():
    assert default_header(3) == ("time", "col1", "col2")


def test_unit_for_column():
    assert unit_for_column("V(out)") == "V"
    assert unit_for_column("I(R1)") == "A"
    assert unit_for_column("Ix(U1:OUT)") == "A"
    assert unit_for_column("out1") is None


def test_duplicate_time_named_column_is_not_time():
    table = ColumnTable(header=("time", "time"), data=np.array([[0.0, 5.0]]))
    assert table.column_index("time") == 1
