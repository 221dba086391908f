"""
Unit Tests for the Metric Scorers

Tests validate:
1. Exact tier boundaries for every metric
2. The "no data" branch for zero and negative input
3. Points stay within [0, max] and move in the healthy direction
4. Reason formatting
"""

import pytest

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
from vitality.scoring.thresholds import (
    ALL_METRICS,
    DAILY_STEPS,
    RESTING_HEART_RATE,
)


# =============================================================================
# TEST: TIER BOUNDARIES
# =============================================================================

class TestCardiovascularScorers:
    """Resting heart rate, HRV and VO2 max."""

    @pytest.mark.parametrize("value,expected", [
        (45, 10), (50, 10), (50.5, 8), (60, 8), (61, 6), (70, 6),
        (80, 4), (90, 2), (90.1, 1), (120, 1),
    ])
    def test_resting_heart_rate(self, value, expected):
        assert score_resting_heart_rate(value).points == expected

    @pytest.mark.parametrize("value,expected", [
        (100, 10), (70, 10), (69, 8), (40, 8), (20, 6), (15, 4), (14.9, 2), (1, 2),
    ])
    def test_heart_rate_variability(self, value, expected):
        assert score_heart_rate_variability(value).points == expected

    @pytest.mark.parametrize("value,expected", [
        (55, 10), (50, 10), (45, 8), (30, 6), (20, 4), (19, 2),
    ])
    def test_vo2_max(self, value, expected):
        assert score_vo2_max(value).points == expected


class TestRecoveryScorers:
    """Deep sleep, REM sleep and sleep consistency."""

    @pytest.mark.parametrize("value,expected", [
        (25, 15), (23, 15), (18, 12), (13, 10), (10, 7), (6, 4), (5.9, 2),
    ])
    def test_deep_sleep(self, value, expected):
        assert score_deep_sleep(value).points == expected

    @pytest.mark.parametrize("value,expected", [
        (28, 12), (25, 12), (20, 10), (15, 8), (10, 5), (9, 3),
    ])
    def test_rem_sleep(self, value, expected):
        assert score_rem_sleep(value).points == expected

    @pytest.mark.parametrize("value,expected", [
        (100, 8), (85, 8), (84, 6), (70, 6), (50, 4), (49, 2),
    ])
    def test_sleep_consistency(self, value, expected):
        assert score_sleep_consistency(value).points == expected


class TestActivityScorers:
    """Daily training time, training intensity and steps."""

    @pytest.mark.parametrize("value,expected", [
        (60, 12), (40, 12), (39.6, 10), (35, 10), (25, 8), (20, 6), (12, 4), (4, 2), (3, 1),
    ])
    def test_daily_training_time(self, value, expected):
        assert score_daily_training_time(value).points == expected

    @pytest.mark.parametrize("value,expected", [
        (90, 12), (85, 12), (70, 10), (55, 7), (40, 4), (39, 2),
    ])
    def test_training_intensity(self, value, expected):
        assert score_training_intensity(value).points == expected

    @pytest.mark.parametrize("value,expected", [
        (13000, 6), (12000, 6), (10000, 5), (8000, 4), (6000, 3), (4000, 2), (2000, 1), (500, 1),
    ])
    def test_daily_steps(self, value, expected):
        assert score_daily_steps(value).points == expected


# =============================================================================
# TEST: NO DATA
# =============================================================================

class TestNoData:
    """Zero (and negative) values are the "no data" sentinel."""

    @pytest.mark.parametrize("table", ALL_METRICS, ids=lambda t: t.metric)
    def test_zero_scores_nothing(self, table):
        result = score_metric(table, 0)
        assert result.points == 0
        assert result.reason == table.no_data_reason
        assert result.reason.startswith("No ")
        assert "data available" in result.reason

    @pytest.mark.parametrize("table", ALL_METRICS, ids=lambda t: t.metric)
    def test_negative_scores_nothing(self, table):
        assert score_metric(table, -5).points == 0

    def test_resting_heart_rate_zero_is_not_excellent(self):
        # lower is better, but 0 is missing data rather than a perfect value
        result = score_resting_heart_rate(0)
        assert result.points == 0
        assert result.reason == "No resting heart rate data available"


# =============================================================================
# TEST: PROPERTIES
# =============================================================================

class TestScorerProperties:
    """Bounds and monotonicity over a sweep of inputs."""

    @pytest.mark.parametrize("table", ALL_METRICS, ids=lambda t: t.metric)
    def test_points_within_bounds(self, table):
        top = max(tier.bound for tier in table.tiers) * 1.5
        values = [top * i / 200 for i in range(201)]
        for value in values:
            points = score_metric(table, value).points
            assert 0 <= points <= table.max_points

    @pytest.mark.parametrize("table", ALL_METRICS, ids=lambda t: t.metric)
    def test_monotonic_in_healthy_direction(self, table):
        top = max(tier.bound for tier in table.tiers) * 1.5
        values = [top * i / 200 for i in range(1, 201)]
        points = [score_metric(table, value).points for value in values]
        if table.lower_is_better:
            assert points == sorted(points, reverse=True)
        else:
            assert points == sorted(points)

    @pytest.mark.parametrize("table", ALL_METRICS, ids=lambda t: t.metric)
    def test_best_tier_reaches_max_points(self, table):
        assert table.tiers[0].points == table.max_points


# =============================================================================
# TEST: REASONS
# =============================================================================

class TestReasons:

    def test_steps_use_digit_grouping(self):
        result = score_metric(DAILY_STEPS, 12500)
        assert "12,500 steps" in result.reason

    def test_training_minutes_are_rounded(self):
        result = score_daily_training_time(39.6)
        assert "(40 min/day)" in result.reason

    def test_whole_numbers_drop_decimal(self):
        result = score_metric(RESTING_HEART_RATE, 45.0)
        assert "(45 bpm)" in result.reason

    def test_fractional_values_are_kept(self):
        result = score_deep_sleep(18.5)
        assert "(18.5%)" in result.reason
