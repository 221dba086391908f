"""
Vitality Scoring Engine

Deterministic pipeline from raw health metrics to a 0-100 vitality score:
threshold tables -> metric scorers -> category aggregators -> bonus ->
fitness score, plus the historical, monthly and trend views over a
window of days. Everything here is synchronous and free of I/O.
"""

from vitality.scoring.bonus import calculate_bonus_points
from vitality.scoring.categories import (
    calculate_activity_points,
    calculate_cardiovascular_points,
    calculate_recovery_points,
    create_bonus_history_item,
)
from vitality.scoring.fitness import (
    calculate_daily_fitness_score,
    calculate_fitness_score,
    determine_fitness_level,
)
from vitality.scoring.historical import (
    calculate_daily_scores_from_historical_data,
    group_samples_by_day,
)
from vitality.scoring.metrics import (
    score_daily_steps,
    score_daily_training_time,
    score_deep_sleep,
    score_heart_rate_variability,
    score_metric,
    score_rem_sleep,
    score_resting_heart_rate,
    score_sleep_consistency,
    score_training_intensity,
    score_vo2_max,
)
from vitality.scoring.models import (
    BonusResult,
    CategoryScoringResult,
    DailyFitnessScore,
    DailyHealthMetrics,
    DaySamples,
    FitnessScoreResult,
    HealthCategory,
    HealthMetrics,
    HealthSample,
    HealthTrends,
    HistoryItem,
    MetricAggregate,
    MonthlyAverageResult,
    ScoringResult,
    SleepSample,
    Trend,
    WorkoutSession,
    WorkoutSummary,
)
from vitality.scoring.monthly import (
    calculate_monthly_average,
    calculate_monthly_average_from_daily_scores,
    calculate_monthly_average_from_history,
)
from vitality.scoring.sleep import calculate_sleep_consistency, summarize_sleep
from vitality.scoring.thresholds import FitnessLevel
from vitality.scoring.trends import (
    aggregate_metrics,
    calculate_heart_health_trend,
    calculate_trends,
    classify_change,
)
from vitality.scoring.workouts import summarize_daily_workouts, summarize_workouts

__all__ = [
    # Models
    "BonusResult",
    "CategoryScoringResult",
    "DailyFitnessScore",
    "DailyHealthMetrics",
    "DaySamples",
    "FitnessLevel",
    "FitnessScoreResult",
    "HealthCategory",
    "HealthMetrics",
    "HealthSample",
    "HealthTrends",
    "HistoryItem",
    "MetricAggregate",
    "MonthlyAverageResult",
    "ScoringResult",
    "SleepSample",
    "Trend",
    "WorkoutSession",
    "WorkoutSummary",
    # Metric scorers
    "score_metric",
    "score_resting_heart_rate",
    "score_heart_rate_variability",
    "score_vo2_max",
    "score_deep_sleep",
    "score_rem_sleep",
    "score_sleep_consistency",
    "score_daily_training_time",
    "score_training_intensity",
    "score_daily_steps",
    # Categories and composition
    "calculate_cardiovascular_points",
    "calculate_recovery_points",
    "calculate_activity_points",
    "create_bonus_history_item",
    "calculate_bonus_points",
    "calculate_fitness_score",
    "calculate_daily_fitness_score",
    "determine_fitness_level",
    # Windows
    "calculate_sleep_consistency",
    "summarize_sleep",
    "group_samples_by_day",
    "calculate_daily_scores_from_historical_data",
    "calculate_monthly_average",
    "calculate_monthly_average_from_history",
    "calculate_monthly_average_from_daily_scores",
    "aggregate_metrics",
    "classify_change",
    "calculate_heart_health_trend",
    "calculate_trends",
    "summarize_workouts",
    "summarize_daily_workouts",
]
