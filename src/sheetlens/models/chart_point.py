from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

"""Chart projection models. ChartPoints are recomputed per request, never stored."""

__all__ = [
    "ChartType",
    "ChartPoint",
    "SeriesPoint",
]


class ChartType(Enum):
    BAR = "bar"
    LINE = "line"
    PIE = "pie"
    SCATTER = "scatter"


@dataclass(frozen=True)
class ChartPoint:
    name: str
    value: float
    x: float | None = None  # scatter only
    y: float | None = None  # scatter only

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name, "value": self.value}
        if self.x is not None:
            out["x"] = self.x
        if self.y is not None:
            out["y"] = self.y
        return out


@dataclass(frozen=True)
class SeriesPoint:
    """One row of a multi-series chart: a label plus one value per series column."""
    name: str
    values: dict[str, float] = field(default_factory=dict)  # series column -> value

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, **self.values}
