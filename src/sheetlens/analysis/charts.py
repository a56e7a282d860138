from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

from ..models.chart_point import ChartPoint, ChartType, SeriesPoint
from ..models.config_models import ChartSettings
from ..models.dataset import AnalysisError
from ..models.raw_value import as_number, as_string, canonical_key, is_missing

"""Chart projection: raw rows -> chart-shaped data points.

Per-chart parse policy for the value axis:
- bar:      rows whose value does not parse are dropped
- line:     unparseable values become 0 and the point is kept
- scatter:  points are dropped unless both x and y parse
- radar / grouped: unparseable cells count as 0 in the averages
- multi_series: unparseable cells become 0
- pie:      counts rows, no numeric parsing

All thresholds, default limits and the palette come from ChartSettings.
"""

__all__ = [
    "UnknownColumnError",
    "ChartProjector",
]

UNKNOWN_GROUP = "Unknown"
RADAR_MIN_COLUMNS = 3
MULTI_SERIES_MIN_COLUMNS = 2

Row = dict[str, Any]


class UnknownColumnError(AnalysisError):
    """Raised when a chart request names a column not in the dataset headers."""


def _label(value: Any, index: int) -> str:
    if is_missing(value):
        return f"Item {index + 1}"
    return as_string(value)


def _group_key(value: Any) -> str:
    return UNKNOWN_GROUP if is_missing(value) else as_string(value)


def _format_column_name(name: str) -> str:
    spaced = re.sub(r"([A-Z])", r" \1", name).strip()
    return spaced[:1].upper() + spaced[1:]


class ChartProjector:
    """Projects rows of one dataset into chart points.

    Args:
        headers: Column names of the dataset; requests for other columns
            raise UnknownColumnError
        settings: Chart thresholds, default limits and palette
    """

    def __init__(self, headers: Sequence[str], settings: ChartSettings | None = None) -> None:
        self.headers = list(headers)
        self.settings = settings or ChartSettings()
        self._known = set(self.headers)

    def _check(self, *columns: str | None) -> None:
        unknown = [c for c in columns if c is not None and c not in self._known]
        if unknown:
            raise UnknownColumnError(f"unknown columns: {unknown}")

    # ------------------------------------------------------------------
    # projections
    # ------------------------------------------------------------------
    def bar(self, rows: Sequence[Row], x: str, y: str, limit: int | None = None) -> list[ChartPoint]:
        self._check(x, y)
        limit = self.settings.limits.bar if limit is None else limit
        points = []
        for index, row in enumerate(rows[:limit]):
            value = as_number(row[y])
            if value is None:
                continue
            points.append(ChartPoint(name=_label(row[x], index), value=value))
        return points

    def line(self, rows: Sequence[Row], x: str, y: str, limit: int | None = None) -> list[ChartPoint]:
        self._check(x, y)
        limit = self.settings.limits.line if limit is None else limit
        return [
            ChartPoint(name=_label(row[x], index), value=as_number(row[y]) or 0.0)
            for index, row in enumerate(rows[:limit])
        ]

    def pie(self, rows: Sequence[Row], column: str, limit: int | None = None) -> list[ChartPoint]:
        """Count rows per distinct value, largest groups first.

        Ties keep first-seen group order (sorted() is stable).
        """
        self._check(column)
        limit = self.settings.limits.pie if limit is None else limit
        counts: dict[str, int] = {}
        for row in rows:
            key = _group_key(row[column])
            counts[key] = counts.get(key, 0) + 1
        ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
        return [ChartPoint(name=name, value=count) for name, count in ranked[:limit]]

    def scatter(self, rows: Sequence[Row], x: str, y: str, limit: int | None = None) -> list[ChartPoint]:
        self._check(x, y)
        limit = self.settings.limits.scatter if limit is None else limit
        points = []
        for row in rows[:limit]:
            px, py = as_number(row[x]), as_number(row[y])
            if px is None or py is None:
                continue
            points.append(
                ChartPoint(name=f"{as_string(row[x])}, {as_string(row[y])}", value=py, x=px, y=py)
            )
        return points

    def radar(self, rows: Sequence[Row], columns: Sequence[str]) -> list[ChartPoint]:
        """One point per column: its mean as a percentage of its maximum.

        Needs at least three columns; fewer yields no points.
        """
        self._check(*columns)
        if len(columns) < RADAR_MIN_COLUMNS or not rows:
            return []
        points = []
        for column in columns:
            values = [as_number(row[column]) or 0.0 for row in rows]
            peak = max(values)
            mean = sum(values) / len(values)
            points.append(ChartPoint(name=column, value=mean / peak * 100 if peak > 0 else 0.0))
        return points

    def multi_series(
        self, rows: Sequence[Row], columns: Sequence[str], limit: int | None = None
    ) -> list[SeriesPoint]:
        """First `limit` rows with one value per series column.

        Rows are labelled by the dataset's first column ("Item N" when empty).
        Fewer than two series columns yields no points.
        """
        self._check(*columns)
        if len(columns) < MULTI_SERIES_MIN_COLUMNS:
            return []
        limit = self.settings.limits.multi_series if limit is None else limit
        label_column = self.headers[0]
        return [
            SeriesPoint(
                name=_label(row[label_column], index),
                values={column: as_number(row[column]) or 0.0 for column in columns},
            )
            for index, row in enumerate(rows[:limit])
        ]

    def grouped(self, rows: Sequence[Row], category: str, value: str) -> list[ChartPoint]:
        """Mean of `value` per `category`, in first-seen category order."""
        self._check(category, value)
        totals: dict[str, list[float]] = {}
        for row in rows:
            acc = totals.setdefault(_group_key(row[category]), [0.0, 0])
            acc[0] += as_number(row[value]) or 0.0
            acc[1] += 1
        return [ChartPoint(name=name, value=total / n) for name, (total, n) in totals.items()]

    def project(
        self,
        chart_type: ChartType,
        rows: Sequence[Row],
        x: str,
        y: str | None = None,
        limit: int | None = None,
    ) -> list[ChartPoint]:
        """Dispatch to the projection for `chart_type`. Pie ignores `y`."""
        if chart_type is ChartType.PIE:
            return self.pie(rows, x, limit)
        if y is None:
            raise ValueError(f"{chart_type.value} chart requires a y column")
        if chart_type is ChartType.BAR:
            return self.bar(rows, x, y, limit)
        if chart_type is ChartType.LINE:
            return self.line(rows, x, y, limit)
        return self.scatter(rows, x, y, limit)

    # ------------------------------------------------------------------
    # selection / presentation helpers
    # ------------------------------------------------------------------
    def choose_type(self, rows: Sequence[Row], x: str, y: str) -> ChartType:
        """Heuristic chart type for an x/y column pair.

        Rule cascade (first match wins):
        1. both columns numeric and more than scatter_min_rows rows -> scatter
        2. few distinct x values and numeric y                      -> bar
        3. both columns numeric                                     -> line
        4. between 2 and pie_max_unique - 1 distinct x values       -> pie
        5. otherwise                                                -> bar
        """
        self._check(x, y)
        if not rows:
            return ChartType.BAR
        t = self.settings.thresholds
        total = len(rows)
        x_numeric = sum(1 for row in rows if as_number(row[x]) is not None) / total
        y_numeric = sum(1 for row in rows if as_number(row[y]) is not None) / total
        unique_x = len({canonical_key(row[x]) for row in rows})

        both_numeric = x_numeric > t.numeric_fraction and y_numeric > t.numeric_fraction
        if both_numeric and total > t.scatter_min_rows:
            return ChartType.SCATTER
        if unique_x / total < t.unique_x_fraction and y_numeric > t.numeric_fraction:
            return ChartType.BAR
        if both_numeric:
            return ChartType.LINE
        if 1 < unique_x < t.pie_max_unique:
            return ChartType.PIE
        return ChartType.BAR

    def title(self, chart_type: ChartType, x: str, y: str | None = None) -> str:
        xf = _format_column_name(x)
        yf = _format_column_name(y) if y else ""
        if chart_type is ChartType.BAR:
            return f"{yf} by {xf}" if y else f"Distribution of {xf}"
        if chart_type is ChartType.LINE:
            return f"{yf} Trend" if y else f"{xf} Over Time"
        if chart_type is ChartType.PIE:
            return f"{xf} Distribution"
        return f"{xf} vs {yf}" if y else f"{xf} Scatter Plot"

    def color(self, index: int) -> str:
        palette = self.settings.palette
        return palette[index % len(palette)]
