from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

"""Dataset model: one parsed sheet as ordered headers plus row records.

Row order is insertion order and is preserved end-to-end; chart labels such
as "Item 3" are derived from it.
"""

__all__ = [
    "AnalysisError",
    "StructuralInputError",
    "Dataset",
    "validate_structure",
]


class AnalysisError(ValueError):
    """Base class for the errors the analysis engine surfaces to callers."""


class StructuralInputError(AnalysisError):
    """Raised when headers/rows do not form a rectangular dataset."""


def validate_structure(headers: Sequence[str], rows: Sequence[dict[str, Any]]) -> None:
    """Check the ingestion contract: unique headers, every header in every row.

    Raises:
        StructuralInputError: header list empty while rows exist, duplicate
            header names, or a row lacking a declared header.
    """
    if not headers and rows:
        raise StructuralInputError(f"no headers declared for {len(rows)} rows")
    seen: set[str] = set()
    for h in headers:
        if h in seen:
            raise StructuralInputError(f"duplicate header: {h!r}")
        seen.add(h)
    for index, row in enumerate(rows):
        missing = [h for h in headers if h not in row]
        if missing:
            raise StructuralInputError(f"row {index} missing columns: {missing}")


@dataclass(frozen=True)
class Dataset:
    """Rectangular in-memory dataset (one sheet).

    Construction validates the structure, so a Dataset instance always
    satisfies the ingestion contract.
    """
    headers: list[str]
    rows: list[dict[str, Any]]
    name: str = ""  # sheet name, informational only

    def __post_init__(self) -> None:
        validate_structure(self.headers, self.rows)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def column(self, header: str) -> list[Any]:
        """Values of one column in row order."""
        return [row[header] for row in self.rows]
