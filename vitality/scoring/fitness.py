"""
Fitness-Score Composer

Runs the three category aggregators and the bonus evaluator over a
snapshot and maps the total onto a fitness level.
"""

from __future__ import annotations

from typing import Any, Dict

from vitality.scoring.bonus import calculate_bonus_points
from vitality.scoring.categories import (
    calculate_activity_points,
    calculate_cardiovascular_points,
    calculate_recovery_points,
    create_bonus_history_item,
)
from vitality.scoring.models import (
    DailyFitnessScore,
    DailyHealthMetrics,
    FitnessScoreResult,
    HealthMetrics,
)
from vitality.scoring.thresholds import (
    FITNESS_LEVEL_THRESHOLDS,
    LOWEST_FITNESS_LEVEL,
    FitnessLevel,
)


def determine_fitness_level(score: float) -> FitnessLevel:
    """Map a total score onto its band: [0,30) [30,50) [50,70) [70,90) [90,100]."""
    for minimum, level in FITNESS_LEVEL_THRESHOLDS:
        if score >= minimum:
            return level
    return LOWEST_FITNESS_LEVEL


def _compose(metrics: HealthMetrics) -> Dict[str, Any]:
    cardiovascular = calculate_cardiovascular_points(
        metrics.resting_heart_rate,
        metrics.heart_rate_variability,
        metrics.vo2_max,
    )
    recovery = calculate_recovery_points(
        metrics.deep_sleep_percentage,
        metrics.rem_sleep_percentage,
        metrics.sleep_consistency,
    )
    activity = calculate_activity_points(
        metrics.daily_training_time,
        metrics.training_intensity,
        metrics.daily_steps,
    )
    bonus = calculate_bonus_points(cardiovascular.total, recovery.total, activity.total)

    total_score = cardiovascular.total + recovery.total + activity.total + bonus.points
    return {
        "total_score": total_score,
        "cardiovascular_points": cardiovascular.total,
        "recovery_points": recovery.total,
        "activity_points": activity.total,
        "bonus_points": bonus.points,
        "fitness_level": determine_fitness_level(total_score),
        "bonus_breakdown": bonus,
        "history_items": [
            *cardiovascular.items,
            *recovery.items,
            *activity.items,
            create_bonus_history_item(bonus),
        ],
    }


def calculate_fitness_score(metrics: HealthMetrics) -> FitnessScoreResult:
    """Score a snapshot.

    Scoring System (Total: 100 points):
        - Cardiovascular Health: 30 points (RHR 10, HRV 10, VO2 Max 10)
        - Recovery & Regeneration: 35 points (Deep Sleep 15, REM 12, Consistency 8)
        - Activity & Training: 30 points (Training Time 12, Intensity 12, Steps 6)
        - Bonus Metric: 5 points

    Returns the category totals, the bonus breakdown and ten history items
    (nine metrics plus the bonus line).
    """
    return FitnessScoreResult(**_compose(metrics))


def calculate_daily_fitness_score(daily_metrics: DailyHealthMetrics) -> DailyFitnessScore:
    """Score one calendar day. Training time is that day's minutes."""
    return DailyFitnessScore(date=daily_metrics.date, **_compose(daily_metrics))
