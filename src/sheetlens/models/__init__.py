"""Domain models for the spreadsheet analysis tool.

Input models (Dataset, raw cell coercions), analysis results (ColumnProfile,
DatasetSummary, StatisticsArtifact, ChartPoint) and run/config models.
"""

from .chart_point import ChartPoint, ChartType, SeriesPoint
from .column_profile import ColumnProfile, ColumnSchema, ColumnType
from .config_models import AnalysisConfig, ChartLimits, ChartSettings, ChartThresholds
from .dataset import AnalysisError, Dataset, StructuralInputError
from .dataset_summary import DatasetSummary, StatisticsArtifact
from .insight import DataInsights, PatternInsight, QualityInsight, TrendInsight

__all__ = [
    # Input
    "Dataset",
    "AnalysisError",
    "StructuralInputError",
    # Results
    "ColumnType",
    "ColumnProfile",
    "ColumnSchema",
    "DatasetSummary",
    "StatisticsArtifact",
    "ChartType",
    "ChartPoint",
    "SeriesPoint",
    "DataInsights",
    "TrendInsight",
    "QualityInsight",
    "PatternInsight",
    # Configuration models
    "AnalysisConfig",
    "ChartLimits",
    "ChartSettings",
    "ChartThresholds",
]
