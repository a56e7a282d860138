from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

"""Column-level result models.

ColumnType is the classification produced by type inference, ColumnProfile the
statistical profile of one column and ColumnSchema the (name, type, nullable)
triple the ingestion layer reports per column.

`to_dict()` on each model emits the field names the presentation layer reads
(camelCase, e.g. `nullCount`, `standardDeviation`); these names are part of the
artifact contract and must not change.
"""

__all__ = [
    "ColumnType",
    "ColumnProfile",
    "ColumnSchema",
]


class ColumnType(Enum):
    """Inferred column classification.

    - TEXT: free text, and the fallback for empty / mixed columns
    - NUMBER: numeric cells, including "$1,200" style strings
    - DATE: native dates or date-parseable strings
    - BOOLEAN: native bools or true/false/yes/no/1/0 tokens
    """
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    BOOLEAN = "boolean"


# dataclass 属性名 -> 契約上のキー名
_PROFILE_KEYS: dict[str, str] = {
    "count": "count",
    "null_count": "nullCount",
    "unique_count": "uniqueCount",
    "mean": "mean",
    "median": "median",
    "mode": "mode",
    "min": "min",
    "max": "max",
    "range": "range",
    "variance": "variance",
    "standard_deviation": "standardDeviation",
    "average_length": "averageLength",
}
_BASE_FIELDS = ("count", "null_count", "unique_count")


@dataclass(frozen=True)
class ColumnProfile:
    """Statistical profile for one column.

    The base counts are always present. Numeric columns additionally carry
    mean/median/mode/min/max/range/variance/standard_deviation; text columns
    carry mode/average_length. Unpopulated measures stay None.
    """
    count: int  # total values, nulls included
    null_count: int  # None / "" / NaN
    unique_count: int  # distinct non-null values
    mean: float | None = None
    median: float | None = None
    mode: float | str | None = None
    min: float | None = None
    max: float | None = None
    range: float | None = None
    variance: float | None = None  # population variance (divide by n)
    standard_deviation: float | None = None
    average_length: float | None = None

    @property
    def is_numeric(self) -> bool:
        return self.mean is not None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for attr, key in _PROFILE_KEYS.items():
            value = getattr(self, attr)
            if value is None and attr not in _BASE_FIELDS:
                continue
            out[key] = value
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ColumnProfile:
        kwargs = {attr: data.get(key) for attr, key in _PROFILE_KEYS.items()}
        return cls(**kwargs)


@dataclass(frozen=True)
class ColumnSchema:
    name: str
    type: ColumnType
    nullable: bool  # at least one missing cell

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "type": self.type.value, "nullable": self.nullable}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ColumnSchema:
        return cls(name=data["name"], type=ColumnType(data["type"]), nullable=bool(data["nullable"]))
