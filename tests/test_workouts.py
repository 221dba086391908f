"""
Unit Tests for the Workout Summariser
"""

from datetime import date, datetime, timedelta

import pytest

from vitality.scoring.models import WorkoutSession
from vitality.scoring.workouts import (
    is_high_intensity,
    summarize_daily_workouts,
    summarize_workouts,
    workout_intensity,
)


def _session(activity, start, minutes, calories):
    return WorkoutSession(
        start=start,
        end=start + timedelta(minutes=minutes),
        duration_seconds=minutes * 60,
        calories=calories,
        activity_name=activity,
    )


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def sessions():
    day_one = datetime(2025, 3, 1, 7, 0)
    day_two = datetime(2025, 3, 2, 7, 0)
    return [
        _session("Running", day_one, 30, 300),
        _session("Yoga", day_one + timedelta(hours=10), 60, 240),
        _session("Cycling", day_two, 45, 450),
        _session("HIIT", day_two + timedelta(hours=10), 20, 300),
        WorkoutSession(duration_seconds=1800, calories=200, activity_name="Walking"),
        _session("Walking", day_two, 0, 0),
    ]


# =============================================================================
# TEST: PERIOD SUMMARY
# =============================================================================

class TestSummarizeWorkouts:

    def test_period_summary(self, sessions):
        minutes, intensity = summarize_workouts(sessions[:2])

        # 540 kcal / 90 min = 6 kcal/min -> 30, half high intensity -> 15, 2 workouts -> 10
        assert minutes == 90
        assert intensity == 55

    def test_single_day_bonus(self, sessions):
        _, intensity = summarize_workouts(sessions[:2], per_workout_bonus=10)
        assert intensity == 65

    def test_all_usable_sessions(self, sessions):
        minutes, intensity = summarize_workouts(sessions)

        # 1290 kcal / 155 min * 5 = 41.6, 3 of 4 high intensity -> 22.5, frequency capped at 20
        assert minutes == 155
        assert intensity == 84

    def test_intensity_is_clamped(self):
        start = datetime(2025, 3, 1, 7)
        hard = [_session("HIIT", start + timedelta(hours=i), 10, 250) for i in range(5)]
        _, intensity = summarize_workouts(hard)
        assert intensity == 100

    def test_unusable_sessions_are_skipped(self, sessions):
        assert summarize_workouts(sessions[4:]) == (0, 0)

    def test_empty(self):
        assert summarize_workouts([]) == (0, 0)


# =============================================================================
# TEST: PER-DAY SUMMARY
# =============================================================================

class TestSummarizeDailyWorkouts:

    def test_one_summary_per_day(self, sessions):
        summaries = summarize_daily_workouts(sessions)

        assert [s.date for s in summaries] == [date(2025, 3, 2), date(2025, 3, 1)]
        assert summaries[0].duration == 65
        assert summaries[1].duration == 90

    def test_day_intensity_is_hardest_session(self, sessions):
        summaries = summarize_daily_workouts(sessions)

        # HIIT: 15 kcal/min * 5 + 30, clamped
        assert summaries[0].intensity == 100
        # Running: 10 kcal/min * 5 + 30
        assert summaries[1].intensity == 80

    def test_empty(self):
        assert summarize_daily_workouts([]) == []


class TestSessionIntensity:

    def test_calorie_burn_marks_high_intensity(self):
        session = _session("Walking", datetime(2025, 3, 1, 7), 10, 90)
        assert is_high_intensity(session)
        assert workout_intensity(session) == 45

    def test_activity_type_marks_high_intensity(self):
        session = _session("Swimming", datetime(2025, 3, 1, 7), 30, 60)
        assert is_high_intensity(session)
        assert workout_intensity(session) == 40

    def test_light_session(self):
        session = _session("Yoga", datetime(2025, 3, 1, 7), 60, 120)
        assert not is_high_intensity(session)
        assert workout_intensity(session) == 10
