from __future__ import annotations

import logging

from ..models.column_profile import ColumnProfile, ColumnSchema
from ..models.dataset import Dataset
from ..models.dataset_summary import StatisticsArtifact
from ..models.raw_value import is_missing
from .column_stats import compute_stats
from .dataset_summary import summarize
from .type_inference import infer_type

"""One analysis pass over a dataset.

Runs type inference and column statistics once per column, then the dataset
summary, and returns the StatisticsArtifact that the persistence layer stores
next to the sheet.
"""

__all__ = [
    "analyze_dataset",
]

logger = logging.getLogger(__name__)


def analyze_dataset(dataset: Dataset) -> StatisticsArtifact:
    columns: dict[str, ColumnProfile] = {}
    schema: list[ColumnSchema] = []
    for header in dataset.headers:
        values = dataset.column(header)
        column_type = infer_type(values)
        # 統計の分岐は型推定と独立 (>50% 数値なら数値統計)
        columns[header] = compute_stats(values)
        schema.append(
            ColumnSchema(
                name=header,
                type=column_type,
                nullable=any(is_missing(v) for v in values),
            )
        )
        logger.debug(f"column={header!r} type={column_type.value}")

    summary = summarize(dataset.headers, dataset.rows)
    return StatisticsArtifact(columns=columns, summary=summary, schema=schema)
