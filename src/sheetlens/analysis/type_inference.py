from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ..models.column_profile import ColumnType
from ..models.raw_value import as_number, is_boolean_token, is_date_like, non_missing

"""Column type inference by majority vote.

Checks run in a fixed order (boolean -> number -> date) and the first one
matched by more than 80% of the non-null cells wins; otherwise the column is
text. The order resolves "1"/"0" columns as boolean before they are tried as
numbers. An all-null column is text.
"""

__all__ = [
    "MAJORITY_THRESHOLD",
    "infer_type",
]

MAJORITY_THRESHOLD = 0.8


def infer_type(values: Sequence[Any]) -> ColumnType:
    present = non_missing(list(values))
    if not present:
        return ColumnType.TEXT

    needed = MAJORITY_THRESHOLD * len(present)

    if sum(1 for v in present if is_boolean_token(v)) > needed:
        return ColumnType.BOOLEAN
    if sum(1 for v in present if as_number(v) is not None) > needed:
        return ColumnType.NUMBER
    if sum(1 for v in present if is_date_like(v)) > needed:
        return ColumnType.DATE
    return ColumnType.TEXT
