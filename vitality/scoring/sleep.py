"""
Sleep-Consistency Estimator

Consistency is 100 minus 20 points per hour of (population) standard
deviation in nightly sleep duration, floored at 0.
"""

from __future__ import annotations

import logging
import statistics
from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, Sequence

from vitality.scoring.models import SleepSample
from vitality.scoring.thresholds import SLEEP_CONSISTENCY_STDDEV_FACTOR

logger = logging.getLogger(__name__)

DEEP_STAGE = "DEEP"
REM_STAGE = "REM"


def calculate_sleep_consistency(durations: Sequence[float]) -> float:
    """Consistency score (0-100) for a list of nightly durations in hours.

    Empty input has no variance and returns 100.
    """
    if not durations:
        return 100.0
    stddev = statistics.pstdev(durations)
    return max(0.0, 100 - stddev * SLEEP_CONSISTENCY_STDDEV_FACTOR)


def nightly_sleep_totals(samples: Iterable[SleepSample]) -> Dict[date, float]:
    """Total hours of sleep per calendar date of the sample start."""
    totals: Dict[date, float] = defaultdict(float)
    for sample in samples:
        totals[sample.start_date.date()] += sample.duration_hours
    return dict(totals)


def summarize_sleep(samples: Sequence[SleepSample]) -> Dict[str, float]:
    """Deep %, REM % and consistency for a batch of sleep-stage samples.

    Returns ``deep_sleep_percentage``, ``rem_sleep_percentage`` and
    ``sleep_consistency``, all 0 when there are no samples.
    """
    if not samples:
        return {"deep_sleep_percentage": 0.0, "rem_sleep_percentage": 0.0, "sleep_consistency": 0.0}

    total = deep = rem = 0.0
    for sample in samples:
        hours = sample.duration_hours
        total += hours
        if sample.value == DEEP_STAGE:
            deep += hours
        elif sample.value == REM_STAGE:
            rem += hours

    if total <= 0:
        logger.debug("Sleep samples carry no duration; reporting no data")
        return {"deep_sleep_percentage": 0.0, "rem_sleep_percentage": 0.0, "sleep_consistency": 0.0}

    nights = [hours for hours in nightly_sleep_totals(samples).values() if hours > 0]
    return {
        "deep_sleep_percentage": deep / total * 100,
        "rem_sleep_percentage": rem / total * 100,
        "sleep_consistency": calculate_sleep_consistency(nights),
    }
