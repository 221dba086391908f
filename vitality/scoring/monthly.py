"""
Monthly Averager

Rolling 30-day view of the category points, built either from persisted
history items or from daily scores. With nothing to average, the current
snapshot is scored once and the result is flagged as estimated.
"""

from __future__ import annotations

import datetime as dt
import logging
from typing import Dict, List, Optional, Sequence

from vitality.scoring.fitness import calculate_fitness_score, determine_fitness_level
from vitality.scoring.models import (
    DailyFitnessScore,
    HealthCategory,
    HealthMetrics,
    HistoryItem,
    MonthlyAverageResult,
)
from vitality.scoring.thresholds import (
    ACTIVITY_MAX,
    BONUS_MAX,
    CARDIOVASCULAR_MAX,
    HISTORY_WINDOW_DAYS,
    RECOVERY_MAX,
)
from vitality.utils import round_to_int

logger = logging.getLogger(__name__)

CATEGORY_CEILINGS: Dict[HealthCategory, int] = {
    HealthCategory.CARDIOVASCULAR: CARDIOVASCULAR_MAX,
    HealthCategory.RECOVERY: RECOVERY_MAX,
    HealthCategory.ACTIVITY: ACTIVITY_MAX,
    HealthCategory.BONUS: BONUS_MAX,
}


def _as_utc(value: dt.datetime) -> dt.datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.timezone.utc)
    return value


def _build_result(
    cardiovascular: int,
    recovery: int,
    activity: int,
    bonus: int,
    data_points_count: int,
    daily_scores: Optional[List[DailyFitnessScore]] = None,
) -> MonthlyAverageResult:
    total_score = cardiovascular + recovery + activity + bonus
    return MonthlyAverageResult(
        total_score=total_score,
        cardiovascular_points=cardiovascular,
        recovery_points=recovery,
        activity_points=activity,
        bonus_points=bonus,
        fitness_level=determine_fitness_level(total_score),
        data_points_count=data_points_count,
        is_estimated=False,
        daily_scores=daily_scores or [],
    )


def calculate_monthly_average(current_metrics: Optional[HealthMetrics] = None) -> MonthlyAverageResult:
    """Estimate the monthly average by scoring the current snapshot once."""
    score = calculate_fitness_score(current_metrics or HealthMetrics.zero())
    return MonthlyAverageResult(
        total_score=score.total_score,
        cardiovascular_points=score.cardiovascular_points,
        recovery_points=score.recovery_points,
        activity_points=score.activity_points,
        bonus_points=score.bonus_points,
        fitness_level=score.fitness_level,
        data_points_count=0,
        is_estimated=True,
    )


def calculate_monthly_average_from_history(
    items: Sequence[HistoryItem],
    current_metrics: Optional[HealthMetrics] = None,
    now: Optional[dt.datetime] = None,
    window_days: int = HISTORY_WINDOW_DAYS,
) -> MonthlyAverageResult:
    """Average persisted history items of the last ``window_days``.

    Items are logged per metric, so each category is averaged as the share
    of its possible points earned across all of its items, scaled back to
    the category ceiling. When every scoring run logged all of its items
    this equals the mean category total per run.
    """
    now = _as_utc(now or dt.datetime.now(dt.timezone.utc))
    cutoff = now - dt.timedelta(days=window_days)
    recent = [item for item in items if _as_utc(item.timestamp) >= cutoff]

    if not recent:
        logger.debug("No history items since %s; estimating from current metrics", cutoff)
        return calculate_monthly_average(current_metrics)

    earned: Dict[HealthCategory, int] = {category: 0 for category in CATEGORY_CEILINGS}
    possible: Dict[HealthCategory, int] = {category: 0 for category in CATEGORY_CEILINGS}
    for item in recent:
        earned[item.category] += item.points
        possible[item.category] += item.max_points

    averages: Dict[HealthCategory, int] = {}
    for category, ceiling in CATEGORY_CEILINGS.items():
        if possible[category] > 0:
            averages[category] = round_to_int(earned[category] / possible[category] * ceiling)
        else:
            averages[category] = 0

    return _build_result(
        averages[HealthCategory.CARDIOVASCULAR],
        averages[HealthCategory.RECOVERY],
        averages[HealthCategory.ACTIVITY],
        averages[HealthCategory.BONUS],
        data_points_count=len(recent),
    )


def calculate_monthly_average_from_daily_scores(
    daily_scores: Sequence[DailyFitnessScore],
    current_metrics: Optional[HealthMetrics] = None,
) -> MonthlyAverageResult:
    """Average the category points (not the raw metrics) of daily scores."""
    if not daily_scores:
        logger.debug("No daily scores; estimating from current metrics")
        return calculate_monthly_average(current_metrics)

    count = len(daily_scores)

    def average(field_name: str) -> int:
        return round_to_int(sum(getattr(score, field_name) for score in daily_scores) / count)

    return _build_result(
        average("cardiovascular_points"),
        average("recovery_points"),
        average("activity_points"),
        average("bonus_points"),
        data_points_count=count,
        daily_scores=list(daily_scores),
    )
