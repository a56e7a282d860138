"""sheetlens: type inference, column/dataset statistics and chart projection
for tabular data extracted from spreadsheets.
"""

from .analysis import (
    ChartProjector,
    UnknownColumnError,
    analyze_dataset,
    compute_stats,
    infer_type,
    summarize,
)
from .models import (
    AnalysisError,
    ChartPoint,
    ChartSettings,
    ChartType,
    ColumnProfile,
    ColumnType,
    Dataset,
    DatasetSummary,
    StatisticsArtifact,
    StructuralInputError,
)

__version__ = "0.1.0"

__all__ = [
    "AnalysisError",
    "ChartPoint",
    "ChartProjector",
    "ChartSettings",
    "ChartType",
    "ColumnProfile",
    "ColumnType",
    "Dataset",
    "DatasetSummary",
    "StatisticsArtifact",
    "StructuralInputError",
    "UnknownColumnError",
    "analyze_dataset",
    "compute_stats",
    "infer_type",
    "summarize",
]
