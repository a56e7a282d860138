from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from typing import Any

import numpy as np

from ..models.column_profile import ColumnProfile, ColumnType
from ..models.raw_value import as_number, as_string, canonical_key, non_missing

"""Column statistics calculator.

compute_stats() never raises on malformed cells: values that do not parse are
left out of the numeric aggregates and only show up in count / null_count.

Branch selection when no type hint is given:
- more than half of the non-null cells parse as numbers -> numeric branch
- otherwise, any non-null cell                           -> text branch
- otherwise                                              -> base counts only
"""

__all__ = [
    "NUMERIC_BRANCH_THRESHOLD",
    "compute_stats",
]

logger = logging.getLogger(__name__)

# 型推定 (0.8) より緩い閾値
NUMERIC_BRANCH_THRESHOLD = 0.5


def _first_most_frequent(items: Sequence[Any]) -> Any:
    """Most frequent item; ties go to the one encountered first."""
    counts: dict[Any, int] = {}
    for item in items:
        counts[item] = counts.get(item, 0) + 1
    best, best_count = None, 0
    for item, c in counts.items():  # dict keeps insertion order
        if c > best_count:
            best, best_count = item, c
    return best


def _numeric_measures(numbers: list[float]) -> dict[str, Any]:
    arr = np.sort(np.asarray(numbers, dtype=float))
    n = arr.size
    mean = float(arr.mean())
    mid = n // 2
    if n % 2 == 0:
        median = float((arr[mid - 1] + arr[mid]) / 2)
    else:
        median = float(arr[mid])
    variance = float(np.mean((arr - mean) ** 2))
    lo, hi = float(arr[0]), float(arr[-1])
    return {
        "mean": mean,
        "median": median,
        "mode": _first_most_frequent(numbers),
        "min": lo,
        "max": hi,
        "range": hi - lo,
        "variance": variance,
        "standard_deviation": math.sqrt(variance),
    }


def _text_measures(present: list[Any]) -> dict[str, Any]:
    texts = [as_string(v) for v in present]
    return {
        "mode": _first_most_frequent(texts),
        "average_length": sum(len(t) for t in texts) / len(texts),
    }


def compute_stats(values: Sequence[Any], hinted_type: ColumnType | None = None) -> ColumnProfile:
    """Compute the statistical profile of one column.

    Args:
        values: Raw cell values in row order (nulls included)
        hinted_type: Known column type. NUMBER forces the numeric branch,
            TEXT the text branch, BOOLEAN/DATE yield base counts only.
            None selects the branch from the numeric parse fraction.

    Returns:
        A new ColumnProfile; calling twice on the same input gives equal results.
    """
    values = list(values)
    present = non_missing(values)
    base = {
        "count": len(values),
        "null_count": len(values) - len(present),
        "unique_count": len({canonical_key(v) for v in present}),
    }

    parsed = [n for n in (as_number(v) for v in present) if n is not None]

    if hinted_type is None:
        if present and len(parsed) > NUMERIC_BRANCH_THRESHOLD * len(present):
            branch = ColumnType.NUMBER
        elif present:
            branch = ColumnType.TEXT
        else:
            branch = None
    else:
        branch = hinted_type

    if branch is ColumnType.NUMBER:
        if not parsed:
            logger.debug("numeric column without parseable values -> base counts only")
            return ColumnProfile(**base)
        return ColumnProfile(**base, **_numeric_measures(parsed))
    if branch is ColumnType.TEXT and present:
        return ColumnProfile(**base, **_text_measures(present))
    return ColumnProfile(**base)
