"""
Trend Classifier

Compares the older and newer half of a chronological window of snapshots
and labels heart health, sleep and activity as improving, stable or
declining. Windows shorter than 14 records are always stable.
"""

from __future__ import annotations

from typing import Sequence

from vitality.scoring.models import HealthMetrics, HealthTrends, MetricAggregate, Trend
from vitality.scoring.thresholds import (
    ACTIVITY_TREND_STEPS_DIVISOR,
    TREND_CHANGE_THRESHOLD,
    TREND_MIN_RECORDS,
)
from vitality.utils import round_half_up, round_to_int


def aggregate_metrics(records: Sequence[HealthMetrics]) -> MetricAggregate:
    """Window means of every snapshot field.

    Heart rate, HRV, consistency, training, intensity and steps are rounded
    to integers; VO2 max and the sleep percentages to one decimal.
    """
    count = len(records)
    if count == 0:
        return MetricAggregate()

    def mean(field_name: str) -> float:
        return sum(getattr(record, field_name) for record in records) / count

    return MetricAggregate(
        avg_resting_heart_rate=round_to_int(mean("resting_heart_rate")),
        avg_heart_rate_variability=round_to_int(mean("heart_rate_variability")),
        avg_vo2_max=round_half_up(mean("vo2_max"), 1),
        avg_deep_sleep_percentage=round_half_up(mean("deep_sleep_percentage"), 1),
        avg_rem_sleep_percentage=round_half_up(mean("rem_sleep_percentage"), 1),
        avg_sleep_consistency=round_to_int(mean("sleep_consistency")),
        avg_daily_training_time=round_to_int(mean("daily_training_time")),
        avg_training_intensity=round_to_int(mean("training_intensity")),
        avg_daily_steps=round_to_int(mean("daily_steps")),
        record_count=count,
    )


def classify_change(old: float, new: float, threshold: float = TREND_CHANGE_THRESHOLD) -> Trend:
    """Label the percentage change from ``old`` to ``new``.

    More than +threshold% is improving, less than -threshold% declining.
    A zero baseline has no defined change and is stable.
    """
    if old == 0:
        return Trend.STABLE
    change = (new - old) / old * 100
    if change > threshold:
        return Trend.IMPROVING
    if change < -threshold:
        return Trend.DECLINING
    return Trend.STABLE


def calculate_heart_health_trend(resting_heart_rate_trend: Trend, hrv_trend: Trend) -> Trend:
    """Combine the raw RHR and HRV direction into a heart-health trend.

    A falling resting heart rate is good, a rising HRV is good:

        RHR down + HRV up/stable  -> improving
        RHR stable + HRV up       -> improving
        RHR up + HRV down/stable  -> declining
        RHR stable + HRV down     -> declining
        anything else             -> stable
    """
    rhr, hrv = resting_heart_rate_trend, hrv_trend
    if rhr == Trend.DECLINING and hrv in (Trend.IMPROVING, Trend.STABLE):
        return Trend.IMPROVING
    if rhr == Trend.STABLE and hrv == Trend.IMPROVING:
        return Trend.IMPROVING
    if rhr == Trend.IMPROVING and hrv in (Trend.DECLINING, Trend.STABLE):
        return Trend.DECLINING
    if rhr == Trend.STABLE and hrv == Trend.DECLINING:
        return Trend.DECLINING
    return Trend.STABLE


def _sleep_composite(aggregate: MetricAggregate) -> float:
    return (
        aggregate.avg_deep_sleep_percentage
        + aggregate.avg_rem_sleep_percentage
        + aggregate.avg_sleep_consistency
    ) / 3


def _activity_composite(aggregate: MetricAggregate) -> float:
    return (
        aggregate.avg_daily_training_time
        + aggregate.avg_daily_steps / ACTIVITY_TREND_STEPS_DIVISOR
    ) / 2


def calculate_trends(
    records: Sequence[HealthMetrics],
    threshold: float = TREND_CHANGE_THRESHOLD,
) -> HealthTrends:
    """Trends over a chronologically ordered window (oldest first)."""
    if len(records) < TREND_MIN_RECORDS:
        return HealthTrends()

    midpoint = len(records) // 2
    older = aggregate_metrics(records[:midpoint])
    newer = aggregate_metrics(records[midpoint:])

    heart = calculate_heart_health_trend(
        classify_change(older.avg_resting_heart_rate, newer.avg_resting_heart_rate, threshold),
        classify_change(older.avg_heart_rate_variability, newer.avg_heart_rate_variability, threshold),
    )
    return HealthTrends(
        heart_health_trend=heart,
        sleep_trend=classify_change(_sleep_composite(older), _sleep_composite(newer), threshold),
        activity_trend=classify_change(_activity_composite(older), _activity_composite(newer), threshold),
    )
