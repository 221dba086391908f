"""
Historical Aggregator

Builds one ``DailyFitnessScore`` per day of raw health-store samples.
Sleep consistency is computed once over the whole window and applied to
every day; VO2 max is not available per day and is scored as no data.
"""

from __future__ import annotations

import datetime as dt
import logging
from collections import defaultdict
from typing import Dict, List, Optional, Sequence

from vitality.scoring.fitness import calculate_daily_fitness_score
from vitality.scoring.models import (
    DailyFitnessScore,
    DailyHealthMetrics,
    DaySamples,
    HealthSample,
    SleepSample,
    WorkoutSummary,
)
from vitality.scoring.sleep import DEEP_STAGE, REM_STAGE, calculate_sleep_consistency
from vitality.utils import round_half_up, round_to_int

logger = logging.getLogger(__name__)


def group_samples_by_day(
    steps: Sequence[HealthSample] = (),
    heart_rate: Sequence[HealthSample] = (),
    hrv: Sequence[HealthSample] = (),
    sleep: Sequence[SleepSample] = (),
) -> List[DaySamples]:
    """Bucket raw samples by the calendar date of their start, most recent first."""
    buckets: Dict[dt.date, Dict[str, list]] = defaultdict(
        lambda: {"steps_data": [], "heart_rate_data": [], "hrv_data": [], "sleep_data": []}
    )
    for field_name, samples in (
        ("steps_data", steps),
        ("heart_rate_data", heart_rate),
        ("hrv_data", hrv),
        ("sleep_data", sleep),
    ):
        for sample in samples:
            buckets[sample.start_date.date()][field_name].append(sample)

    return [
        DaySamples(date=day, **buckets[day])
        for day in sorted(buckets, reverse=True)
    ]


def _mean(samples: Sequence[HealthSample]) -> float:
    if not samples:
        return 0.0
    return sum(sample.value for sample in samples) / len(samples)


def _sleep_hours(samples: Sequence[SleepSample]) -> Dict[str, float]:
    hours = {"total": 0.0, "deep": 0.0, "rem": 0.0}
    for sample in samples:
        duration = sample.duration_hours
        hours["total"] += duration
        if sample.value == DEEP_STAGE:
            hours["deep"] += duration
        elif sample.value == REM_STAGE:
            hours["rem"] += duration
    return hours


def calculate_daily_scores_from_historical_data(
    historical_data: Sequence[DaySamples],
    workout_data: Optional[Sequence[WorkoutSummary]] = None,
) -> List[DailyFitnessScore]:
    """Score every day that has at least some steps, sleep, heart rate or HRV.

    Days with no data in any source are dropped rather than scored as zero.
    Workouts are matched by exact calendar date. Returns most recent first.
    """
    workouts_by_date: Dict[dt.date, WorkoutSummary] = {}
    for workout in workout_data or ():
        workouts_by_date.setdefault(workout.date, workout)

    nightly_totals = [_sleep_hours(day.sleep_data)["total"] for day in historical_data]
    window_consistency = calculate_sleep_consistency([hours for hours in nightly_totals if hours > 0])

    scores: List[DailyFitnessScore] = []
    for day in historical_data:
        daily_steps = sum(sample.value for sample in day.steps_data)
        heart_rate = _mean(day.heart_rate_data)
        hrv = _mean(day.hrv_data)
        sleep = _sleep_hours(day.sleep_data)

        if not (daily_steps > 0 or sleep["total"] > 0 or heart_rate > 0 or hrv > 0):
            logger.debug("Dropping %s: no steps, sleep, heart rate or HRV", day.date)
            continue

        deep_pct = sleep["deep"] / sleep["total"] * 100 if sleep["total"] > 0 else 0.0
        rem_pct = sleep["rem"] / sleep["total"] * 100 if sleep["total"] > 0 else 0.0
        workout = workouts_by_date.get(day.date)

        metrics = DailyHealthMetrics(
            date=day.date,
            resting_heart_rate=round_to_int(heart_rate),
            heart_rate_variability=round_to_int(hrv),
            vo2_max=0,
            deep_sleep_percentage=round_half_up(deep_pct, 1),
            rem_sleep_percentage=round_half_up(rem_pct, 1),
            sleep_consistency=round_to_int(window_consistency),
            daily_training_time=workout.duration if workout else 0,
            training_intensity=workout.intensity if workout else 0,
            daily_steps=daily_steps,
        )
        scores.append(calculate_daily_fitness_score(metrics))

    return sorted(scores, key=lambda score: score.date, reverse=True)
