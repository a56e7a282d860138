from __future__ import annotations

import pytest

from sheetlens.analysis.dataset_summary import data_quality, summarize
from sheetlens.models.dataset import StructuralInputError


def test_sales_summary_scenario(sales_rows):
    headers, rows = sales_rows
    s = summarize(headers, rows)
    assert s.total_records == 3
    assert s.total_columns == 2
    assert s.numeric_columns == 1
    assert s.text_columns == 1
    assert s.missing_values == 1
    assert s.data_quality == 83  # round(100 * 5 / 6)


def test_no_missing_values_is_100():
    rows = [{"a": 1, "b": "x"}, {"a": 2, "b": "y"}]
    assert summarize(["a", "b"], rows).data_quality == 100


def test_empty_dataset_is_100():
    s = summarize(["a", "b"], [])
    assert s.total_records == 0
    assert s.data_quality == 100
    assert s.missing_values == 0
    assert s.numeric_columns + s.text_columns == 2


def test_boolean_and_date_columns_fold_by_parse_fraction():
    rows = [
        {"flag": "1", "when": "2024-01-01", "ok": True},
        {"flag": "0", "when": "2024-01-02", "ok": False},
    ]
    s = summarize(["flag", "when", "ok"], rows)
    # "1"/"0" parse as numbers, dates and native bools do not
    assert s.numeric_columns == 1
    assert s.text_columns == 2


def test_column_counts_always_add_up():
    rows = [{"a": None, "b": "3", "c": "x"}, {"a": None, "b": None, "c": "4"}]
    s = summarize(["a", "b", "c"], rows)
    assert s.numeric_columns + s.text_columns == s.total_columns
    assert s.missing_values == 3
    assert s.data_quality == 50


@pytest.mark.parametrize(
    "records,columns,missing,expected",
    [(0, 5, 0, 100), (1, 2, 1, 50), (8, 1, 1, 88), (3, 2, 1, 83), (4, 2, 1, 88)],
)
def test_data_quality_rounding(records, columns, missing, expected):
    # 87.5 rounds half up like the dashboard expects
    assert data_quality(records, columns, missing) == expected


def test_rows_without_headers_rejected():
    with pytest.raises(StructuralInputError):
        summarize([], [{"a": 1}])


def test_row_missing_header_rejected():
    with pytest.raises(StructuralInputError):
        summarize(["a", "b"], [{"a": 1, "b": 2}, {"a": 3}])


def test_duplicate_headers_rejected():
    with pytest.raises(StructuralInputError):
        summarize(["a", "a"], [])
