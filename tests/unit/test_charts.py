from __future__ import annotations

import pytest

from sheetlens.analysis.charts import ChartProjector, UnknownColumnError
from sheetlens.models.chart_point import ChartPoint, ChartType
from sheetlens.models.config_models import ChartLimits, ChartSettings, ChartThresholds, DEFAULT_PALETTE


def _rows(xs, ys=None, x="x", y="y"):
    ys = ys if ys is not None else [None] * len(xs)
    return [{x: a, y: b} for a, b in zip(xs, ys)]


@pytest.fixture()
def projector() -> ChartProjector:
    return ChartProjector(["x", "y"])


class TestBar:
    def test_labels_and_values(self, projector):
        rows = _rows(["East", None, "West"], ["10", "$2,000", "5"])
        points = projector.bar(rows, "x", "y")
        assert points == [
            ChartPoint("East", 10.0),
            ChartPoint("Item 2", 2000.0),
            ChartPoint("West", 5.0),
        ]

    def test_unparseable_values_dropped(self, projector):
        rows = _rows(["a", "b", "c"], ["1", "oops", None])
        assert [p.name for p in projector.bar(rows, "x", "y")] == ["a"]

    def test_default_limit_20(self, projector):
        rows = _rows(list(range(30)), list(range(30)))
        points = projector.bar(rows, "x", "y")
        assert len(points) == 20
        assert points[0].name == "0"  # 0 is a value, not an empty cell

    def test_explicit_limit(self, projector):
        rows = _rows(list(range(30)), list(range(30)))
        assert len(projector.bar(rows, "x", "y", limit=5)) == 5


class TestLine:
    def test_unparseable_values_default_to_zero(self, projector):
        rows = _rows(["Jan", "Feb", ""], ["3", "bad", "4"])
        points = projector.line(rows, "x", "y")
        assert points == [ChartPoint("Jan", 3.0), ChartPoint("Feb", 0.0), ChartPoint("Item 3", 4.0)]

    def test_default_limit_50(self, projector):
        rows = _rows(list(range(80)), list(range(80)))
        assert len(projector.line(rows, "x", "y")) == 50


class TestPie:
    def test_counts_groups(self):
        p = ChartProjector(["c"])
        rows = [{"c": "A"}, {"c": "A"}, {"c": "B"}]
        assert p.pie(rows, "c", limit=8) == [ChartPoint("A", 2), ChartPoint("B", 1)]

    def test_missing_is_unknown_and_ties_keep_first_seen_order(self):
        p = ChartProjector(["c"])
        rows = [{"c": "B"}, {"c": None}, {"c": "A"}, {"c": "A"}, {"c": "B"}, {"c": ""}]
        assert [(pt.name, pt.value) for pt in p.pie(rows, "c")] == [("B", 2), ("Unknown", 2), ("A", 2)]

    def test_top_limit_sorted_descending_and_bounded(self):
        p = ChartProjector(["c"])
        rows = [{"c": f"g{i % 12}"} for i in range(100)]
        points = p.pie(rows, "c")
        assert len(points) == 8
        values = [pt.value for pt in points]
        assert values == sorted(values, reverse=True)
        assert sum(values) <= len(rows)


class TestScatter:
    def test_points_require_both_axes(self, projector):
        rows = _rows(["1", "2", "x", "4"], ["10", None, "30", "$40"])
        points = projector.scatter(rows, "x", "y")
        assert points == [
            ChartPoint("1, 10", 10.0, x=1.0, y=10.0),
            ChartPoint("4, $40", 40.0, x=4.0, y=40.0),
        ]

    def test_default_limit_100(self, projector):
        rows = _rows(list(range(150)), list(range(150)))
        assert len(projector.scatter(rows, "x", "y")) == 100


class TestChooseType:
    def test_empty_rows_bar(self, projector):
        assert projector.choose_type([], "x", "y") is ChartType.BAR

    def test_many_numeric_rows_scatter(self, projector):
        xs = [str(i) for i in range(30)]
        ys = [str(i * 2) for i in range(27)] + ["n/a", None, "?"]  # 90% numeric
        assert projector.choose_type(_rows(xs, ys), "x", "y") is ChartType.SCATTER

    def test_repeated_categories_bar(self, projector):
        rows = _rows(["A", "B", "A", "B", "A", "B"], [1, 2, 3, 4, 5, 6])
        assert projector.choose_type(rows, "x", "y") is ChartType.BAR

    def test_few_numeric_rows_line(self, projector):
        rows = _rows([1, 2, 3, 4, 5], [10, 20, 15, 30, 25])
        assert projector.choose_type(rows, "x", "y") is ChartType.LINE

    def test_distinct_categories_text_y_pie(self, projector):
        rows = _rows(["A", "B", "C", "D"], ["x", "y", "z", "w"])
        assert projector.choose_type(rows, "x", "y") is ChartType.PIE

    def test_single_category_falls_back_to_bar(self, projector):
        rows = _rows(["A"], ["text"])
        assert projector.choose_type(rows, "x", "y") is ChartType.BAR

    def test_many_distinct_text_values_bar(self, projector):
        rows = _rows([f"name{i}" for i in range(12)], ["t"] * 12)
        assert projector.choose_type(rows, "x", "y") is ChartType.BAR

    def test_thresholds_are_configurable(self):
        settings = ChartSettings(thresholds=ChartThresholds(scatter_min_rows=3))
        p = ChartProjector(["x", "y"], settings)
        rows = _rows([1, 2, 3, 4, 5], [10, 20, 15, 30, 25])
        assert p.choose_type(rows, "x", "y") is ChartType.SCATTER


class TestRadarAndGrouped:
    def test_radar_normalizes_mean_by_max(self):
        p = ChartProjector(["a", "b", "c"])
        rows = [{"a": 10, "b": 0, "c": "5"}, {"a": 30, "b": 0, "c": "x"}]
        points = p.radar(rows, ["a", "b", "c"])
        assert [pt.name for pt in points] == ["a", "b", "c"]
        assert points[0].value == pytest.approx(20 / 30 * 100)
        assert points[1].value == 0.0
        assert points[2].value == pytest.approx(2.5 / 5 * 100)

    def test_radar_needs_three_columns(self):
        p = ChartProjector(["a", "b"])
        assert p.radar([{"a": 1, "b": 2}], ["a", "b"]) == []

    def test_grouped_mean_per_category(self):
        p = ChartProjector(["region", "sales"])
        rows = [
            {"region": "East", "sales": "100"},
            {"region": None, "sales": "7"},
            {"region": "East", "sales": "bad"},
            {"region": "West", "sales": 30},
        ]
        assert p.grouped(rows, "region", "sales") == [
            ChartPoint("East", 50.0),
            ChartPoint("Unknown", 7.0),
            ChartPoint("West", 30.0),
        ]

    def test_multi_series_labels_by_first_column(self):
        p = ChartProjector(["month", "sales", "cost"])
        rows = [
            {"month": "Jan", "sales": "$1,200", "cost": 800},
            {"month": None, "sales": "n/a", "cost": "300"},
        ]
        points = p.multi_series(rows, ["sales", "cost"])
        assert [pt.to_dict() for pt in points] == [
            {"name": "Jan", "sales": 1200.0, "cost": 800.0},
            {"name": "Item 2", "sales": 0.0, "cost": 300.0},
        ]

    def test_multi_series_default_limit_and_min_columns(self):
        p = ChartProjector(["id", "a", "b"])
        rows = [{"id": i, "a": i, "b": i * 2} for i in range(30)]
        assert len(p.multi_series(rows, ["a", "b"])) == 20
        assert len(p.multi_series(rows, ["a", "b"], limit=5)) == 5
        assert p.multi_series(rows, ["a"]) == []

    def test_multi_series_unknown_column(self):
        p = ChartProjector(["id", "a"])
        with pytest.raises(UnknownColumnError):
            p.multi_series([], ["a", "zzz"])


class TestProjectAndErrors:
    def test_project_dispatch(self, projector):
        rows = _rows(["A", "B"], ["1", "2"])
        assert projector.project(ChartType.BAR, rows, "x", "y") == projector.bar(rows, "x", "y")
        assert projector.project(ChartType.PIE, rows, "x") == projector.pie(rows, "x")
        assert projector.project(ChartType.SCATTER, rows, "x", "y") == []

    def test_project_without_y(self, projector):
        with pytest.raises(ValueError, match="requires a y column") as exc_info:
            projector.project(ChartType.LINE, [], "x")
        # 列名の誤りではなく引数の欠落
        assert not isinstance(exc_info.value, UnknownColumnError)

    @pytest.mark.parametrize("call", [
        lambda p: p.bar([], "x", "nope"),
        lambda p: p.line([], "nope", "y"),
        lambda p: p.pie([], "nope"),
        lambda p: p.scatter([], "x", "nope"),
        lambda p: p.choose_type([], "nope", "y"),
        lambda p: p.grouped([], "x", "nope"),
        lambda p: p.radar([], ["x", "y", "nope"]),
    ])
    def test_unknown_columns(self, projector, call):
        with pytest.raises(UnknownColumnError):
            call(projector)

    def test_unknown_column_error_is_value_error(self, projector):
        with pytest.raises(ValueError):
            projector.pie([], "nope")


def test_titles(projector):
    assert projector.title(ChartType.BAR, "region", "totalSales") == "Total Sales by Region"
    assert projector.title(ChartType.BAR, "region") == "Distribution of Region"
    assert projector.title(ChartType.LINE, "month", "revenue") == "Revenue Trend"
    assert projector.title(ChartType.LINE, "month") == "Month Over Time"
    assert projector.title(ChartType.PIE, "Category") == "Category Distribution"
    assert projector.title(ChartType.SCATTER, "height", "weight") == "Height vs Weight"


def test_palette_cycles():
    p = ChartProjector([], ChartSettings(limits=ChartLimits(), palette=("#000000", "#FFFFFF")))
    assert [p.color(i) for i in range(3)] == ["#000000", "#FFFFFF", "#000000"]
    assert ChartProjector([]).color(0) == DEFAULT_PALETTE[0]


def test_chart_point_to_dict():
    assert ChartPoint("a", 1.0).to_dict() == {"name": "a", "value": 1.0}
    assert ChartPoint("a", 1.0, x=2.0, y=1.0).to_dict() == {"name": "a", "value": 1.0, "x": 2.0, "y": 1.0}
