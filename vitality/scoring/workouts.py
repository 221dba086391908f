"""
Workout Summariser

Turns raw workout sessions into training minutes and an intensity score
(0-100). Sessions without a start or end, or with a non-positive
duration, are ignored.
"""

from __future__ import annotations

import datetime as dt
import logging
from collections import OrderedDict
from typing import Dict, List, Sequence, Tuple

from vitality.scoring.models import WorkoutSession, WorkoutSummary
from vitality.utils import round_to_int

logger = logging.getLogger(__name__)

HIGH_INTENSITY_ACTIVITIES = frozenset({
    "Running",
    "Cycling",
    "Swimming",
    "HIIT",
    "CrossTraining",
    "TraditionalStrengthTraining",
})
HIGH_INTENSITY_KCAL_PER_MINUTE = 8.0
KCAL_PER_MINUTE_WEIGHT = 5
HIGH_INTENSITY_RATIO_WEIGHT = 30
HIGH_INTENSITY_ACTIVITY_BONUS = 30
FREQUENCY_BONUS_CAP = 20


def _clamp_score(value: float) -> int:
    return min(100, max(0, round_to_int(value)))


def _usable(session: WorkoutSession) -> bool:
    return session.start is not None and session.end is not None and session.duration_minutes > 0


def calories_per_minute(session: WorkoutSession) -> float:
    return session.calories / max(session.duration_minutes, 1)


def is_high_intensity(session: WorkoutSession) -> bool:
    return (
        calories_per_minute(session) > HIGH_INTENSITY_KCAL_PER_MINUTE
        or session.activity_name in HIGH_INTENSITY_ACTIVITIES
    )


def summarize_workouts(
    sessions: Sequence[WorkoutSession],
    per_workout_bonus: int = 5,
) -> Tuple[int, int]:
    """Training minutes and intensity for all sessions of a period.

    intensity = avg kcal/min * 5 + high-intensity ratio * 30
                + min(count * per_workout_bonus, 20), clamped to 0-100.

    Use ``per_workout_bonus=5`` for a 30-day window and 10 for a single day.
    Minutes are the period total; convert with ``vitality.scoring.units``
    before scoring.
    """
    usable = [session for session in sessions if _usable(session)]
    if not usable:
        return 0, 0

    total_minutes = sum(session.duration_minutes for session in usable)
    total_calories = sum(session.calories for session in usable)
    high_intensity = sum(1 for session in usable if is_high_intensity(session))
    count = len(usable)

    raw_score = (
        total_calories / total_minutes * KCAL_PER_MINUTE_WEIGHT
        + high_intensity / count * HIGH_INTENSITY_RATIO_WEIGHT
        + min(count * per_workout_bonus, FREQUENCY_BONUS_CAP)
    )
    return round_to_int(total_minutes), _clamp_score(raw_score)


def workout_intensity(session: WorkoutSession) -> int:
    """Intensity of a single session: kcal/min * 5, +30 for high-intensity activity types."""
    score = calories_per_minute(session) * KCAL_PER_MINUTE_WEIGHT
    if session.activity_name in HIGH_INTENSITY_ACTIVITIES:
        score += HIGH_INTENSITY_ACTIVITY_BONUS
    return _clamp_score(score)


def summarize_daily_workouts(sessions: Sequence[WorkoutSession]) -> List[WorkoutSummary]:
    """One ``WorkoutSummary`` per calendar date of the session start, most recent first.

    Minutes are summed per day; the day's intensity is its hardest session.
    """
    days: Dict[dt.date, Dict[str, float]] = OrderedDict()
    skipped = 0
    for session in sessions:
        if not _usable(session):
            skipped += 1
            continue
        day = days.setdefault(session.start.date(), {"duration": 0.0, "intensity": 0})
        day["duration"] += session.duration_minutes
        day["intensity"] = max(day["intensity"], workout_intensity(session))

    if skipped:
        logger.debug("Skipped %d workout sessions without usable duration", skipped)

    summaries = [
        WorkoutSummary(date=date, duration=round_to_int(data["duration"]), intensity=data["intensity"])
        for date, data in days.items()
    ]
    return sorted(summaries, key=lambda summary: summary.date, reverse=True)
