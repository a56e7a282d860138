"""Analysis engine: type inference, column/dataset statistics, chart projection and insights."""

from .charts import ChartProjector, UnknownColumnError
from .column_stats import compute_stats
from .dataset_summary import data_quality, summarize
from .insights import generate_insights
from .profiler import analyze_dataset
from .type_inference import infer_type

__all__ = [
    "ChartProjector",
    "UnknownColumnError",
    "analyze_dataset",
    "compute_stats",
    "data_quality",
    "generate_insights",
    "infer_type",
    "summarize",
]
