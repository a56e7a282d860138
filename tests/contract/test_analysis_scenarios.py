from __future__ import annotations

import pytest

from sheetlens.analysis.charts import ChartProjector
from sheetlens.analysis.column_stats import compute_stats
from sheetlens.analysis.dataset_summary import summarize
from sheetlens.models.chart_point import ChartType

"""Reference scenarios of the analysis engine."""


def test_sales_scenario(sales_rows):
    headers, rows = sales_rows
    profile = compute_stats([r["Sales"] for r in rows])
    assert profile.count == 3
    assert profile.null_count == 1
    assert profile.mean == pytest.approx(150)
    assert profile.min == 100
    assert profile.max == 200
    assert profile.median == pytest.approx(150)
    assert profile.variance == pytest.approx(2500)
    assert profile.standard_deviation == pytest.approx(50)

    summary = summarize(headers, rows)
    assert summary.total_records == 3
    assert summary.total_columns == 2
    assert summary.missing_values == 1
    assert summary.data_quality == 83


def test_choose_type_thirty_numeric_rows_is_scatter():
    rows = [{"x": str(i), "y": i * 1.5} for i in range(27)]
    rows += [{"x": "n/a", "y": 1}, {"x": 3, "y": "?"}, {"x": 4, "y": 5}]
    projector = ChartProjector(["x", "y"])
    assert projector.choose_type(rows, "x", "y") is ChartType.SCATTER


def test_pie_scenario():
    rows = [{"c": "A"}, {"c": "A"}, {"c": "B"}]
    points = ChartProjector(["c"]).pie(rows, "c", limit=8)
    assert [p.to_dict() for p in points] == [
        {"name": "A", "value": 2},
        {"name": "B", "value": 1},
    ]
