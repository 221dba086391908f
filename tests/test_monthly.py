"""
Unit Tests for the Monthly Averager
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from vitality.scoring.fitness import calculate_fitness_score
from vitality.scoring.models import (
    DailyFitnessScore,
    HealthCategory,
    HealthMetrics,
    HistoryItem,
)
from vitality.scoring.monthly import (
    calculate_monthly_average,
    calculate_monthly_average_from_daily_scores,
    calculate_monthly_average_from_history,
)
from vitality.scoring.thresholds import FitnessLevel


NOW = datetime(2025, 3, 31, 12, 0, tzinfo=timezone.utc)


def _stamp(items, when):
    return [item.model_copy(update={"timestamp": when}) for item in items]


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def top_form_metrics():
    return HealthMetrics(
        resting_heart_rate=45,
        heart_rate_variability=75,
        vo2_max=55,
        deep_sleep_percentage=25,
        rem_sleep_percentage=28,
        sleep_consistency=90,
        daily_training_time=40,
        training_intensity=90,
        daily_steps=13000,
    )


@pytest.fixture
def daily_scores():
    return [
        DailyFitnessScore(
            date=date(2025, 3, 2),
            total_score=100,
            cardiovascular_points=30,
            recovery_points=35,
            activity_points=30,
            bonus_points=5,
            fitness_level=FitnessLevel.TOP_FORM,
        ),
        DailyFitnessScore(
            date=date(2025, 3, 1),
            total_score=50,
            cardiovascular_points=20,
            recovery_points=20,
            activity_points=10,
            bonus_points=0,
            fitness_level=FitnessLevel.SOLID_PROGRESS,
        ),
    ]


# =============================================================================
# TEST: ESTIMATES
# =============================================================================

class TestEstimatedAverage:

    def test_empty_history_is_estimated(self):
        result = calculate_monthly_average_from_history([], now=NOW)

        assert result.is_estimated is True
        assert result.data_points_count == 0
        assert result.total_score == 0
        assert result.fitness_level == FitnessLevel.TIME_FOR_CHANGE

    def test_empty_history_uses_current_metrics(self, top_form_metrics):
        result = calculate_monthly_average_from_history([], current_metrics=top_form_metrics, now=NOW)

        assert result.is_estimated is True
        assert result.total_score == 100

    def test_empty_daily_scores_is_estimated(self, top_form_metrics):
        result = calculate_monthly_average_from_daily_scores([], current_metrics=top_form_metrics)

        assert result.is_estimated is True
        assert result.data_points_count == 0
        assert result.total_score == 100

    def test_snapshot_estimate(self, top_form_metrics):
        result = calculate_monthly_average(top_form_metrics)
        assert result.is_estimated is True
        assert result.daily_scores == []


# =============================================================================
# TEST: FROM DAILY SCORES
# =============================================================================

class TestAverageFromDailyScores:

    def test_averages_category_points(self, daily_scores):
        result = calculate_monthly_average_from_daily_scores(daily_scores)

        assert result.is_estimated is False
        assert result.data_points_count == 2
        assert result.cardiovascular_points == 25
        # 27.5 rounds half up
        assert result.recovery_points == 28
        assert result.activity_points == 20
        assert result.bonus_points == 3
        assert result.total_score == 76
        assert result.fitness_level == FitnessLevel.STRONG_ACTIVE
        assert result.daily_scores == daily_scores


# =============================================================================
# TEST: FROM HISTORY ITEMS
# =============================================================================

class TestAverageFromHistory:

    def test_single_top_form_run(self, top_form_metrics):
        items = _stamp(calculate_fitness_score(top_form_metrics).history_items, NOW - timedelta(days=1))
        result = calculate_monthly_average_from_history(items, now=NOW)

        assert result.is_estimated is False
        assert result.data_points_count == 10
        assert result.total_score == 100
        assert result.fitness_level == FitnessLevel.TOP_FORM

    def test_mixed_runs(self, top_form_metrics):
        when = NOW - timedelta(days=2)
        items = (
            _stamp(calculate_fitness_score(top_form_metrics).history_items, when)
            + _stamp(calculate_fitness_score(HealthMetrics.zero()).history_items, when)
        )
        result = calculate_monthly_average_from_history(items, now=NOW)

        assert result.data_points_count == 20
        assert result.cardiovascular_points == 15
        assert result.recovery_points == 18
        assert result.activity_points == 15
        assert result.bonus_points == 3
        assert result.total_score == 51

    def test_items_outside_window_are_ignored(self, top_form_metrics):
        recent = _stamp(calculate_fitness_score(top_form_metrics).history_items, NOW - timedelta(days=3))
        stale = _stamp(calculate_fitness_score(HealthMetrics.zero()).history_items, NOW - timedelta(days=45))
        result = calculate_monthly_average_from_history(recent + stale, now=NOW)

        assert result.data_points_count == 10
        assert result.total_score == 100

    def test_only_stale_items_is_estimated(self):
        stale = [
            HistoryItem(
                category=HealthCategory.ACTIVITY,
                metric="Daily Steps",
                points=6,
                max_points=6,
                reason="old",
                timestamp=NOW - timedelta(days=31),
            )
        ]
        result = calculate_monthly_average_from_history(stale, now=NOW)
        assert result.is_estimated is True

    def test_category_without_items_averages_zero(self):
        items = [
            HistoryItem(
                category=HealthCategory.ACTIVITY,
                metric="Daily Steps",
                points=6,
                max_points=6,
                reason="steps",
                timestamp=NOW,
            )
        ]
        result = calculate_monthly_average_from_history(items, now=NOW)

        assert result.activity_points == 30
        assert result.cardiovascular_points == 0
        assert result.total_score == 30
