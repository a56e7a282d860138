from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

from ..models.dataset import Dataset
from ..models.dataset_summary import StatisticsArtifact
from ..models.insight import DataInsights, PatternInsight, QualityInsight, TrendInsight
from ..models.raw_value import as_string, canonical_key, non_missing

"""Rule-based insights over an analyzed sheet.

- trends: first three numeric columns, direction from mean vs median and
  variability from the coefficient of variation (std / mean)
- quality: completeness percentage plus three fixed recommendations
- patterns: first two categorical columns, dominant value and diversity
"""

__all__ = [
    "trend_insights",
    "quality_insights",
    "pattern_insights",
    "generate_insights",
]

TREND_COLUMNS = 3
PATTERN_COLUMNS = 2
HIGH_VARIABILITY = 0.3
MEDIUM_VARIABILITY = 0.15
HIGH_DIVERSITY = 0.5
MEDIUM_DIVERSITY = 0.2
MISSING_SHARE_LIMIT = 0.1
MIN_NUMERIC_COLUMNS = 2
MIN_RECORDS = 100
CONFIDENCE = {"low": 95, "medium": 85, "high": 70}


def _round_half_up(value: float, digits: int) -> float:
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


def _variability(mean: float, std: float) -> str:
    if mean == 0:
        # 平均 0 では変動係数が定義できない。ばらつきがあれば high
        ratio = math.inf if std > 0 else 0.0
    else:
        ratio = std / mean
    if ratio > HIGH_VARIABILITY:
        return "high"
    if ratio > MEDIUM_VARIABILITY:
        return "medium"
    return "low"


def _diversity(ratio: float) -> str:
    if ratio > HIGH_DIVERSITY:
        return "high"
    if ratio > MEDIUM_DIVERSITY:
        return "medium"
    return "low"


def trend_insights(artifact: StatisticsArtifact) -> list[TrendInsight]:
    insights = []
    for column in artifact.numeric_columns()[:TREND_COLUMNS]:
        profile = artifact.columns[column]
        mean = profile.mean or 0.0
        median = profile.median or 0.0
        trend = "up" if mean > median else "down"
        variability = _variability(mean, profile.standard_deviation or 0.0)
        insights.append(
            TrendInsight(
                column=column,
                trend=trend,
                variability=variability,
                mean=_round_half_up(mean, 2),
                confidence=CONFIDENCE[variability],
                insight=(
                    f"{column} shows {'positive' if trend == 'up' else 'negative'} trend "
                    f"with {variability} variability"
                ),
            )
        )
    return insights


def quality_insights(artifact: StatisticsArtifact) -> QualityInsight:
    summary = artifact.summary
    cells = summary.total_records * summary.total_columns
    missing = summary.missing_values
    completeness = _round_half_up((cells - missing) / cells * 100, 1) if cells > 0 else 100.0
    recommendations = [
        "Consider data cleaning for missing values"
        if missing > cells * MISSING_SHARE_LIMIT
        else "Data completeness is excellent",
        "Add more numeric columns for better analysis"
        if len(artifact.numeric_columns()) < MIN_NUMERIC_COLUMNS
        else "Good numeric data coverage",
        "Larger dataset would improve statistical significance"
        if summary.total_records < MIN_RECORDS
        else "Dataset size is adequate",
    ]
    return QualityInsight(
        overall=summary.data_quality,
        completeness=completeness,
        issues=missing,
        recommendations=recommendations,
    )


def _pattern(column: str, values: Sequence[Any]) -> PatternInsight:
    groups: dict[tuple[str, Any], list[Any]] = {}
    for value in values:
        groups.setdefault(canonical_key(value), []).append(value)
    # 出現順を保ったまま件数の降順 (sorted は安定)
    ranked = sorted(groups.values(), key=len, reverse=True)
    if ranked:
        dominant = as_string(ranked[0][0])
        percentage = _round_half_up(len(ranked[0]) / len(values) * 100, 1)
        diversity = _diversity(len(groups) / len(values))
    else:
        dominant, percentage, diversity = "N/A", 0.0, "low"
    return PatternInsight(
        column=column,
        dominant_value=dominant,
        dominant_percentage=percentage,
        diversity=diversity,
        unique_count=len(groups),
        insight=f'{column} is dominated by "{dominant}" ({percentage}%) with {diversity} diversity',
    )


def pattern_insights(artifact: StatisticsArtifact, dataset: Dataset) -> list[PatternInsight]:
    return [
        _pattern(column, non_missing(dataset.column(column)))
        for column in artifact.categorical_columns()[:PATTERN_COLUMNS]
    ]


def generate_insights(artifact: StatisticsArtifact, dataset: Dataset) -> DataInsights:
    """All three insight groups for one analyzed sheet."""
    return DataInsights(
        trends=trend_insights(artifact),
        quality=quality_insights(artifact),
        patterns=pattern_insights(artifact, dataset),
    )
