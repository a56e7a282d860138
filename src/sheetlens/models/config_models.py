from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclasses for the spreadsheet analysis tool.

ChartSettings gathers every chart constant (selector thresholds, default point
limits, color palette) in one structure handed to the ChartProjector, so tests
and config files can override them without touching projection logic.
AnalysisConfig is the root object built by src/sheetlens/config/loader.py.
"""

__all__ = [
    "ChartThresholds",
    "ChartLimits",
    "ChartSettings",
    "AnalysisConfig",
    "DEFAULT_PALETTE",
]

DEFAULT_PALETTE: tuple[str, ...] = (
    "#3B82F6",  # blue
    "#10B981",  # green
    "#F59E0B",  # yellow
    "#EF4444",  # red
    "#8B5CF6",  # purple
    "#06B6D4",  # cyan
    "#84CC16",  # lime
    "#F97316",  # orange
    "#EC4899",  # pink
    "#6B7280",  # gray
)


@dataclass(frozen=True)
class ChartThresholds:
    """Thresholds of the optimal chart type selector.

    The defaults reproduce the selector's rule cascade exactly; changing them
    changes which chart type is suggested.
    """
    numeric_fraction: float = 0.8  # column counts as numeric above this parse fraction
    unique_x_fraction: float = 0.5  # few distinct x values -> bar
    scatter_min_rows: int = 20  # scatter needs more rows than this
    pie_max_unique: int = 10  # pie needs fewer distinct x values than this


@dataclass(frozen=True)
class ChartLimits:
    """Default number of rows (or groups, for pie) per projection."""
    bar: int = 20
    line: int = 50
    pie: int = 8
    scatter: int = 100
    multi_series: int = 20


@dataclass(frozen=True)
class ChartSettings:
    thresholds: ChartThresholds = field(default_factory=ChartThresholds)
    limits: ChartLimits = field(default_factory=ChartLimits)
    palette: tuple[str, ...] = DEFAULT_PALETTE


@dataclass(frozen=True)
class AnalysisConfig:
    """Root configuration object for an analysis run."""
    source_directory: str  # Directory scanned for .xlsx files
    output_directory: str | None = None  # Artifact JSON destination (None = do not write)
    null_sentinels: set[str] | None = None  # 大文字化済, cell strings read as NULL
    charts: ChartSettings = field(default_factory=ChartSettings)
