"""
Unit Tests for the Category Aggregators and the Bonus Evaluator
"""

import pytest

from vitality.scoring.bonus import calculate_bonus_points, category_percentage
from vitality.scoring.categories import (
    calculate_activity_points,
    calculate_cardiovascular_points,
    calculate_recovery_points,
    create_bonus_history_item,
)
from vitality.scoring.models import HealthCategory


# =============================================================================
# TEST: CATEGORY AGGREGATORS
# =============================================================================

class TestCategoryAggregators:

    def test_cardiovascular_top_marks(self):
        result = calculate_cardiovascular_points(45, 75, 55)

        assert result.total == 30
        assert [item.metric for item in result.items] == [
            "Resting Heart Rate", "Heart Rate Variability", "VO2 Max",
        ]
        assert all(item.category == HealthCategory.CARDIOVASCULAR for item in result.items)
        assert [item.max_points for item in result.items] == [10, 10, 10]

    def test_recovery_top_marks(self):
        result = calculate_recovery_points(25, 28, 90)

        assert result.total == 35
        assert [item.metric for item in result.items] == [
            "Deep Sleep", "REM Sleep", "Sleep Consistency",
        ]
        assert all(item.category == HealthCategory.RECOVERY for item in result.items)

    def test_activity_top_marks(self):
        result = calculate_activity_points(40, 90, 13000)

        assert result.total == 30
        assert [item.metric for item in result.items] == [
            "Daily Training Time", "Training Intensity", "Daily Steps",
        ]
        assert all(item.category == HealthCategory.ACTIVITY for item in result.items)

    def test_total_is_sum_of_items(self):
        result = calculate_cardiovascular_points(72, 18, 33)

        assert result.total == sum(item.points for item in result.items)
        assert result.total == 4 + 4 + 6

    def test_no_data_category(self):
        result = calculate_recovery_points(0, 0, 0)

        assert result.total == 0
        assert len(result.items) == 3
        assert all(item.points == 0 for item in result.items)


# =============================================================================
# TEST: BONUS EVALUATOR
# =============================================================================

class TestBonusEvaluator:

    def test_all_three_excellent(self):
        bonus = calculate_bonus_points(30, 35, 30)

        assert bonus.points == 5
        assert bonus.excellent_categories == ["Cardiovascular", "Recovery", "Activity"]
        assert bonus.reason == (
            "Outstanding consistency across all categories! "
            "Cardiovascular: 100%, Recovery: 100%, Activity: 100%"
        )
        assert "maximum bonus achieved" in bonus.detailed_explanation

    def test_two_excellent(self):
        bonus = calculate_bonus_points(30, 35, 0)

        assert bonus.points == 3
        assert bonus.reason == (
            "Excellent performance in Cardiovascular & Recovery (100%, 100%) - strong consistency!"
        )

    def test_one_excellent(self):
        bonus = calculate_bonus_points(23, 0, 0)

        assert bonus.points == 1
        assert bonus.cardiovascular_percent == 77
        assert bonus.reason == (
            "Good performance in Cardiovascular (77%) - build consistency in other areas"
        )

    def test_none_excellent(self):
        bonus = calculate_bonus_points(10, 12, 8)

        assert bonus.points == 0
        assert bonus.excellent_categories == []
        assert bonus.reason.startswith("Work toward consistency bonus: Cardiovascular 33%")
        assert bonus.detailed_explanation == (
            "Bonus Requirements: Cardiovascular ≥22.5pts (75%), Recovery ≥26.25pts (75%), "
            "Activity ≥22.5pts (75%). Achieve these thresholds in 1, 2, or 3 categories "
            "for 1, 3, or 5 bonus points respectively."
        )

    def test_no_category_data(self):
        bonus = calculate_bonus_points(0, 0, 0)

        assert bonus.points == 0
        assert bonus.reason.startswith("No data available - work toward consistency bonus")

    def test_exactly_at_threshold_counts(self):
        assert calculate_bonus_points(22.5, 0, 0).points == 1
        assert calculate_bonus_points(0, 26.25, 0).points == 1
        assert calculate_bonus_points(0, 0, 22.5).points == 1

    def test_just_below_threshold_does_not_count(self):
        # 22.497 / 30 = 74.99%
        bonus = calculate_bonus_points(22.497, 0, 0)
        assert bonus.points == 0
        assert bonus.cardiovascular_percent == 75

    @pytest.mark.parametrize("scores,expected", [
        ((30, 35, 30), 5),
        ((30, 35, 10), 3),
        ((30, 10, 10), 1),
        ((10, 10, 10), 0),
    ])
    def test_award_table(self, scores, expected):
        assert calculate_bonus_points(*scores).points == expected

    def test_custom_threshold(self):
        assert calculate_bonus_points(18, 0, 0, threshold=60).points == 1
        assert calculate_bonus_points(18, 0, 0).points == 0

    def test_category_percentage_zero_max(self):
        assert category_percentage(5, 0) == 0.0


class TestBonusHistoryItem:

    def test_bonus_item_fields(self):
        bonus = calculate_bonus_points(30, 35, 30)
        item = create_bonus_history_item(bonus)

        assert item.category == HealthCategory.BONUS
        assert item.metric == "Overall Consistency"
        assert item.points == 5
        assert item.max_points == 5
        assert item.reason == f"{bonus.reason} | {bonus.detailed_explanation}"
