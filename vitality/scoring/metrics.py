"""
Metric Scorers

One pure function per raw metric. Each maps a value onto its threshold
table and returns a ``ScoringResult``. Values <= 0 are "no data" and earn
0 points; present values never raise and clamp to the best or worst tier.
"""

from __future__ import annotations

from vitality.scoring.models import ScoringResult
from vitality.scoring.thresholds import (
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
from vitality.utils import round_to_int


def _format_value(value: float, value_format: str) -> str:
    """Render a metric value the way reasons display it.

    Whole numbers drop the trailing ``.0``; ``rounded`` rounds to whole
    minutes and ``thousands`` adds digit grouping (12,500 steps).
    """
    if value_format == "rounded":
        return str(round_to_int(value))
    if value_format == "thousands":
        if float(value).is_integer():
            return f"{int(value):,}"
        return f"{value:,}"
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def score_metric(table: MetricThresholds, value: float) -> ScoringResult:
    """Score ``value`` against ``table``."""
    if value <= 0:
        return ScoringResult(points=0, reason=table.no_data_reason)

    display = _format_value(value, table.value_format)
    for tier in table.tiers:
        matched = value <= tier.bound if table.lower_is_better else value >= tier.bound
        if matched:
            return ScoringResult(points=tier.points, reason=tier.reason.format(value=display))

    return ScoringResult(points=table.floor_points, reason=table.floor_reason.format(value=display))


# =============================================================================
# CARDIOVASCULAR HEALTH
# =============================================================================

def score_resting_heart_rate(resting_heart_rate: float) -> ScoringResult:
    """Resting heart rate in bpm; lower is better (max 10 points)."""
    return score_metric(RESTING_HEART_RATE, resting_heart_rate)


def score_heart_rate_variability(heart_rate_variability: float) -> ScoringResult:
    """HRV in ms (max 10 points)."""
    return score_metric(HEART_RATE_VARIABILITY, heart_rate_variability)


def score_vo2_max(vo2_max: float) -> ScoringResult:
    """VO2 max in ml/kg/min (max 10 points)."""
    return score_metric(VO2_MAX, vo2_max)


# =============================================================================
# RECOVERY & REGENERATION
# =============================================================================

def score_deep_sleep(deep_sleep_percentage: float) -> ScoringResult:
    """Deep sleep share of total sleep (max 15 points)."""
    return score_metric(DEEP_SLEEP, deep_sleep_percentage)


def score_rem_sleep(rem_sleep_percentage: float) -> ScoringResult:
    """REM sleep share of total sleep (max 12 points)."""
    return score_metric(REM_SLEEP, rem_sleep_percentage)


def score_sleep_consistency(sleep_consistency: float) -> ScoringResult:
    """Sleep consistency score 0-100 (max 8 points)."""
    return score_metric(SLEEP_CONSISTENCY, sleep_consistency)


# =============================================================================
# ACTIVITY & TRAINING
# =============================================================================

def score_daily_training_time(daily_training_time: float) -> ScoringResult:
    """Training minutes per day (max 12 points).

    Weekly or monthly totals must be converted with ``vitality.scoring.units``
    first; the tiers are calibrated for a single day.
    """
    return score_metric(DAILY_TRAINING_TIME, daily_training_time)


def score_training_intensity(training_intensity: float) -> ScoringResult:
    """Training intensity score 0-100 (max 12 points)."""
    return score_metric(TRAINING_INTENSITY, training_intensity)


def score_daily_steps(daily_steps: float) -> ScoringResult:
    """Steps per day (max 6 points)."""
    return score_metric(DAILY_STEPS, daily_steps)
