from __future__ import annotations

import math
import statistics
from dataclasses import dataclass
from datetime import datetime

"""Run result models: per-file stats and the aggregate RunResult that feeds the
SUMMARY line.
"""

__all__ = [
    "FileStat",
    "RunResult",
    "average_quality",
]


@dataclass(frozen=True)
class FileStat:
    """Per-file analysis statistics."""
    file_name: str
    status: str  # success/failed
    analyzed_sheets: int
    total_records: int
    elapsed_seconds: float
    qualities: tuple[int, ...] = ()  # dataQuality per analyzed sheet
    error: str | None = None


@dataclass(frozen=True)
class RunResult:
    """Aggregated results of one analysis run."""
    success_files: int
    failed_files: int
    analyzed_sheets: int
    skipped_sheets: int  # sheets with no cells at all
    total_records: int
    average_quality: int  # mean dataQuality over analyzed sheets (100 when none)
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] | None = None


def average_quality(qualities: list[int]) -> int:
    if not qualities:
        return 100
    # dataQuality と同じ四捨五入 (half up)
    return math.floor(statistics.mean(qualities) + 0.5)
