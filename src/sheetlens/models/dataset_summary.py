from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .column_profile import ColumnProfile, ColumnSchema

"""Dataset-level result models: DatasetSummary and the StatisticsArtifact.

The artifact is the full output of one analysis pass. The persistence layer
stores `to_dict()` as JSON and hands it back unchanged; `from_dict()` rebuilds
the same artifact (numbers stay numbers, strings stay strings).
"""

__all__ = [
    "DatasetSummary",
    "StatisticsArtifact",
]


@dataclass(frozen=True)
class DatasetSummary:
    total_records: int
    total_columns: int
    numeric_columns: int
    text_columns: int  # boolean/date columns fold into numeric or text by parse fraction
    missing_values: int
    data_quality: int  # 0-100 percentage of non-missing cells

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalRecords": self.total_records,
            "totalColumns": self.total_columns,
            "numericColumns": self.numeric_columns,
            "textColumns": self.text_columns,
            "missingValues": self.missing_values,
            "dataQuality": self.data_quality,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DatasetSummary:
        return cls(
            total_records=data["totalRecords"],
            total_columns=data["totalColumns"],
            numeric_columns=data["numericColumns"],
            text_columns=data["textColumns"],
            missing_values=data["missingValues"],
            data_quality=data["dataQuality"],
        )


@dataclass(frozen=True)
class StatisticsArtifact:
    """Per-column profiles plus the dataset summary for one sheet."""
    columns: dict[str, ColumnProfile]  # header order preserved
    summary: DatasetSummary
    schema: list[ColumnSchema] = field(default_factory=list)

    def numeric_columns(self) -> list[str]:
        """Headers whose profile carries a numeric mean."""
        return [name for name, p in self.columns.items() if p.is_numeric]

    def categorical_columns(self) -> list[str]:
        return [name for name, p in self.columns.items() if not p.is_numeric]

    def to_dict(self) -> dict[str, Any]:
        return {
            "columns": {name: p.to_dict() for name, p in self.columns.items()},
            "summary": self.summary.to_dict(),
            "schema": [s.to_dict() for s in self.schema],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StatisticsArtifact:
        return cls(
            columns={name: ColumnProfile.from_dict(p) for name, p in data["columns"].items()},
            summary=DatasetSummary.from_dict(data["summary"]),
            schema=[ColumnSchema.from_dict(s) for s in data.get("schema", [])],
        )
