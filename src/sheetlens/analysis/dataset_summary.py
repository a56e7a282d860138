from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

from ..models.dataset import validate_structure
from ..models.dataset_summary import DatasetSummary
from ..models.raw_value import as_number, non_missing

"""Dataset summary calculator.

Classifies each column as numeric or text for summary purposes by re-deriving
the numeric parse fraction of its non-null cells (> 0.5 -> numeric). Boolean
and date columns are folded into whichever side that fraction puts them.
"""

__all__ = [
    "NUMERIC_COLUMN_THRESHOLD",
    "data_quality",
    "summarize",
]

NUMERIC_COLUMN_THRESHOLD = 0.5


def data_quality(total_records: int, total_columns: int, missing_values: int) -> int:
    """Percentage (0-100, rounded half up) of non-missing cells.

    An empty dataset is 100 by convention.
    """
    cells = total_records * total_columns
    if total_records == 0 or cells == 0:
        return 100
    return math.floor(100 * (cells - missing_values) / cells + 0.5)


def summarize(headers: Sequence[str], rows: Sequence[dict[str, Any]]) -> DatasetSummary:
    """Aggregate dataset-wide metrics.

    Raises:
        StructuralInputError: headers/rows violate the ingestion contract
    """
    validate_structure(headers, rows)

    numeric_columns = 0
    text_columns = 0
    missing_values = 0
    for header in headers:
        present = non_missing([row[header] for row in rows])
        parsed = sum(1 for v in present if as_number(v) is not None)
        if present and parsed > NUMERIC_COLUMN_THRESHOLD * len(present):
            numeric_columns += 1
        else:
            text_columns += 1
        missing_values += len(rows) - len(present)

    return DatasetSummary(
        total_records=len(rows),
        total_columns=len(headers),
        numeric_columns=numeric_columns,
        text_columns=text_columns,
        missing_values=missing_values,
        data_quality=data_quality(len(rows), len(headers), missing_values),
    )
