from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

"""Insight models derived from a StatisticsArtifact.

`to_dict()` emits camelCase keys like the other result models.
"""

__all__ = [
    "TrendInsight",
    "QualityInsight",
    "PatternInsight",
    "DataInsights",
]


@dataclass(frozen=True)
class TrendInsight:
    column: str
    trend: str  # "up" | "down"
    variability: str  # "low" | "medium" | "high"
    mean: float
    confidence: int  # percent
    insight: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "column": self.column,
            "trend": self.trend,
            "variability": self.variability,
            "mean": self.mean,
            "confidence": self.confidence,
            "insight": self.insight,
        }


@dataclass(frozen=True)
class QualityInsight:
    overall: int  # dataQuality
    completeness: float  # percent, one decimal
    issues: int  # missing cells
    recommendations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "overall": self.overall,
            "completeness": self.completeness,
            "issues": self.issues,
            "recommendations": list(self.recommendations),
        }


@dataclass(frozen=True)
class PatternInsight:
    column: str
    dominant_value: str
    dominant_percentage: float
    diversity: str  # "low" | "medium" | "high"
    unique_count: int
    insight: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "column": self.column,
            "dominantValue": self.dominant_value,
            "dominantPercentage": self.dominant_percentage,
            "diversity": self.diversity,
            "uniqueCount": self.unique_count,
            "insight": self.insight,
        }


@dataclass(frozen=True)
class DataInsights:
    """Trend, quality and pattern insights for one sheet."""
    trends: list[TrendInsight]
    quality: QualityInsight
    patterns: list[PatternInsight]

    def to_dict(self) -> dict[str, Any]:
        return {
            "trends": [t.to_dict() for t in self.trends],
            "quality": self.quality.to_dict(),
            "patterns": [p.to_dict() for p in self.patterns],
        }
