"""
Category Aggregators

Each aggregator runs its three metric scorers, sums the points and emits
one ``HistoryItem`` per metric. No cross-metric logic: totals are purely
additive.
"""

from __future__ import annotations

from typing import Callable, List, Sequence, Tuple

from vitality.scoring.metrics import (
    score_daily_steps,
    score_daily_training_time,
    score_deep_sleep,
    score_heart_rate_variability,
    score_rem_sleep,
    score_resting_heart_rate,
    score_sleep_consistency,
    score_training_intensity,
    score_vo2_max,
)
from vitality.scoring.models import (
    BonusResult,
    CategoryScoringResult,
    HealthCategory,
    HistoryItem,
    ScoringResult,
)
from vitality.scoring.thresholds import (
    BONUS_MAX,
    DAILY_STEPS,
    DAILY_TRAINING_TIME,
    DEEP_SLEEP,
    HEART_RATE_VARIABILITY,
    REM_SLEEP,
    RESTING_HEART_RATE,
    SLEEP_CONSISTENCY,
    TRAINING_INTENSITY,
    VO2_MAX,
    MetricThresholds,
)

Scorer = Callable[[float], ScoringResult]


def create_history_item(
    category: HealthCategory,
    metric: str,
    points: int,
    max_points: int,
    reason: str,
) -> HistoryItem:
    return HistoryItem(
        category=category,
        metric=metric,
        points=points,
        max_points=max_points,
        reason=reason,
    )


def _score_category(
    category: HealthCategory,
    entries: Sequence[Tuple[MetricThresholds, Scorer, float]],
) -> CategoryScoringResult:
    items: List[HistoryItem] = []
    total = 0
    for table, scorer, value in entries:
        result = scorer(value)
        items.append(
            create_history_item(category, table.metric, result.points, table.max_points, result.reason)
        )
        total += result.points
    return CategoryScoringResult(total=total, items=items)


def calculate_cardiovascular_points(
    resting_heart_rate: float,
    heart_rate_variability: float,
    vo2_max: float,
) -> CategoryScoringResult:
    """Cardiovascular Health (30 points max)."""
    return _score_category(
        HealthCategory.CARDIOVASCULAR,
        [
            (RESTING_HEART_RATE, score_resting_heart_rate, resting_heart_rate),
            (HEART_RATE_VARIABILITY, score_heart_rate_variability, heart_rate_variability),
            (VO2_MAX, score_vo2_max, vo2_max),
        ],
    )


def calculate_recovery_points(
    deep_sleep_percentage: float,
    rem_sleep_percentage: float,
    sleep_consistency: float,
) -> CategoryScoringResult:
    """Recovery & Regeneration (35 points max)."""
    return _score_category(
        HealthCategory.RECOVERY,
        [
            (DEEP_SLEEP, score_deep_sleep, deep_sleep_percentage),
            (REM_SLEEP, score_rem_sleep, rem_sleep_percentage),
            (SLEEP_CONSISTENCY, score_sleep_consistency, sleep_consistency),
        ],
    )


def calculate_activity_points(
    daily_training_time: float,
    training_intensity: float,
    daily_steps: float,
) -> CategoryScoringResult:
    """Activity & Training (30 points max). Training time is minutes per day."""
    return _score_category(
        HealthCategory.ACTIVITY,
        [
            (DAILY_TRAINING_TIME, score_daily_training_time, daily_training_time),
            (TRAINING_INTENSITY, score_training_intensity, training_intensity),
            (DAILY_STEPS, score_daily_steps, daily_steps),
        ],
    )


def create_bonus_history_item(bonus: BonusResult) -> HistoryItem:
    """History line for an evaluated bonus."""
    return create_history_item(
        HealthCategory.BONUS,
        "Overall Consistency",
        bonus.points,
        BONUS_MAX,
        f"{bonus.reason} | {bonus.detailed_explanation}",
    )
