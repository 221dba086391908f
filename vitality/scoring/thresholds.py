"""
Threshold Tables

Static scoring configuration for the vitality score. Every metric maps
ordered value boundaries to point awards and the rationale shown to the
user. Changing a boundary or a point value here is a configuration change;
the scorers in ``metrics.py`` only walk these tables.

Scoring System (Total: 100 points):
    - Cardiovascular Health: 30 points (RHR 10, HRV 10, VO2 Max 10)
    - Recovery & Regeneration: 35 points (Deep Sleep 15, REM Sleep 12, Sleep Consistency 8)
    - Activity & Training: 30 points (Daily Training Time 12, Training Intensity 12, Daily Steps 6)
    - Bonus Metric: 5 points (1 / 3 / 5 points for 1 / 2 / 3 categories at >=75%)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


# =============================================================================
# TABLE TYPES
# =============================================================================

@dataclass(frozen=True)
class ThresholdTier:
    """One scoring tier: values at or past ``bound`` earn ``points``."""

    bound: float
    points: int
    reason: str  # str.format template, receives {value}


@dataclass(frozen=True)
class MetricThresholds:
    """Complete scoring table for a single metric.

    Tiers are ordered best first. With ``lower_is_better`` a value matches
    the first tier whose bound it is <= to; otherwise the first tier whose
    bound it is >= to. Present values that match no tier earn
    ``floor_points``. Values <= 0 mean "no data".
    """

    metric: str
    max_points: int
    tiers: Tuple[ThresholdTier, ...]
    floor_points: int
    floor_reason: str
    no_data_reason: str
    lower_is_better: bool = False
    value_format: str = "plain"  # plain | rounded | thousands


# =============================================================================
# CATEGORY CEILINGS
# =============================================================================

CARDIOVASCULAR_MAX = 30
RECOVERY_MAX = 35
ACTIVITY_MAX = 30
BONUS_MAX = 5
TOTAL_MAX = CARDIOVASCULAR_MAX + RECOVERY_MAX + ACTIVITY_MAX + BONUS_MAX


# =============================================================================
# CARDIOVASCULAR HEALTH
# =============================================================================

RESTING_HEART_RATE = MetricThresholds(
    metric="Resting Heart Rate",
    max_points=10,
    lower_is_better=True,
    tiers=(
        ThresholdTier(50, 10, "Excellent RHR ({value} bpm) - athlete-level cardiovascular fitness"),
        ThresholdTier(60, 8, "Very good RHR ({value} bpm) - excellent cardiovascular health"),
        ThresholdTier(70, 6, "Good RHR ({value} bpm) - healthy cardiovascular range"),
        ThresholdTier(80, 4, "Average RHR ({value} bpm) - room for improvement with cardio training"),
        ThresholdTier(90, 2, "Elevated RHR ({value} bpm) - focus on cardiovascular conditioning"),
    ),
    floor_points=1,
    floor_reason="High RHR ({value} bpm) - consult healthcare provider",
    no_data_reason="No resting heart rate data available",
)

HEART_RATE_VARIABILITY = MetricThresholds(
    metric="Heart Rate Variability",
    max_points=10,
    tiers=(
        ThresholdTier(70, 10, "Outstanding HRV ({value} ms) - excellent autonomic nervous system recovery"),
        ThresholdTier(40, 8, "Very good HRV ({value} ms) - strong recovery capacity"),
        ThresholdTier(20, 6, "Good HRV ({value} ms) - adequate recovery signals"),
        ThresholdTier(15, 4, "Below average HRV ({value} ms) - focus on stress management and recovery"),
    ),
    floor_points=2,
    floor_reason="Low HRV ({value} ms) - prioritize sleep, stress reduction, and recovery",
    no_data_reason="No heart rate variability data available",
)

VO2_MAX = MetricThresholds(
    metric="VO2 Max",
    max_points=10,
    tiers=(
        ThresholdTier(50, 10, "Outstanding VO2 Max ({value} ml/kg/min) - superior aerobic fitness"),
        ThresholdTier(40, 8, "Excellent VO2 Max ({value} ml/kg/min) - very high aerobic capacity"),
        ThresholdTier(30, 6, "Good VO2 Max ({value} ml/kg/min) - solid aerobic fitness"),
        ThresholdTier(20, 4, "Average VO2 Max ({value} ml/kg/min) - increase cardio training intensity"),
    ),
    floor_points=2,
    floor_reason="Low VO2 Max ({value} ml/kg/min) - focus on building aerobic endurance",
    no_data_reason="No VO2 Max data available - consider fitness assessment",
)


# =============================================================================
# RECOVERY & REGENERATION
# =============================================================================

DEEP_SLEEP = MetricThresholds(
    metric="Deep Sleep",
    max_points=15,
    tiers=(
        ThresholdTier(23, 15, "Excellent deep sleep ({value}%) - optimal physical recovery"),
        ThresholdTier(18, 12, "Very good deep sleep ({value}%) - great physical recovery"),
        ThresholdTier(13, 10, "Good deep sleep ({value}%) - adequate physical recovery"),
        ThresholdTier(10, 7, "Average deep sleep ({value}%) - improve sleep environment and routine"),
        ThresholdTier(6, 4, "Below average deep sleep ({value}%) - focus on sleep quality improvement"),
    ),
    floor_points=2,
    floor_reason="Low deep sleep ({value}%) - significant sleep quality concerns",
    no_data_reason="No deep sleep data available",
)

REM_SLEEP = MetricThresholds(
    metric="REM Sleep",
    max_points=12,
    tiers=(
        ThresholdTier(25, 12, "Excellent REM sleep ({value}%) - optimal mental recovery and memory consolidation"),
        ThresholdTier(20, 10, "Very good REM sleep ({value}%) - great mental recovery"),
        ThresholdTier(15, 8, "Good REM sleep ({value}%) - adequate mental recovery"),
        ThresholdTier(10, 5, "Average REM sleep ({value}%) - reduce stress and screen time before bed"),
    ),
    floor_points=3,
    floor_reason="Low REM sleep ({value}%) - address sleep disturbances and stress levels",
    no_data_reason="No REM sleep data available",
)

SLEEP_CONSISTENCY = MetricThresholds(
    metric="Sleep Consistency",
    max_points=8,
    tiers=(
        ThresholdTier(85, 8, "Excellent sleep consistency ({value}%) - regular sleep schedule optimizes recovery"),
        ThresholdTier(70, 6, "Good sleep consistency ({value}%) - maintain regular bedtime routine"),
        ThresholdTier(50, 4, "Moderate sleep consistency ({value}%) - work on more regular schedule"),
    ),
    floor_points=2,
    floor_reason="Poor sleep consistency ({value}%) - establish a regular sleep schedule",
    no_data_reason="No sleep consistency data available",
)


# =============================================================================
# ACTIVITY & TRAINING
# =============================================================================

# Calibrated in minutes per day (weekly guideline minutes / 7).
DAILY_TRAINING_TIME = MetricThresholds(
    metric="Daily Training Time",
    max_points=12,
    value_format="rounded",
    tiers=(
        ThresholdTier(40, 12, "Outstanding training volume ({value} min/day) - exceptional fitness commitment"),  # ~280 min/week
        ThresholdTier(35, 10, "Excellent training volume ({value} min/day) - great commitment to fitness"),  # ~245 min/week
        ThresholdTier(25, 8, "Good training volume ({value} min/day) - solid fitness routine"),  # ~175 min/week
        ThresholdTier(20, 6, "Moderate training volume ({value} min/day) - meets WHO minimum"),  # ~140 min/week
        ThresholdTier(12, 4, "Below recommended volume ({value} min/day) - increase frequency"),  # ~84 min/week
        ThresholdTier(4, 2, "Low training volume ({value} min/day) - aim for more consistent training"),  # ~28 min/week
    ),
    floor_points=1,
    floor_reason="Very low training volume ({value} min/day) - start building routine",
    no_data_reason="No training data available",
)

TRAINING_INTENSITY = MetricThresholds(
    metric="Training Intensity",
    max_points=12,
    tiers=(
        ThresholdTier(85, 12, "Exceptional training intensity ({value}%) - outstanding workout quality and effort"),
        ThresholdTier(70, 10, "High training intensity ({value}%) - excellent workout quality and effort"),
        ThresholdTier(55, 7, "Good training intensity ({value}%) - effective workout sessions"),
        ThresholdTier(40, 4, "Moderate training intensity ({value}%) - push yourself harder during workouts"),
    ),
    floor_points=2,
    floor_reason="Low training intensity ({value}%) - focus on challenging yourself more",
    no_data_reason="No training intensity data available",
)

DAILY_STEPS = MetricThresholds(
    metric="Daily Steps",
    max_points=6,
    value_format="thousands",
    tiers=(
        ThresholdTier(12000, 6, "Outstanding daily activity ({value} steps) - exceptional health benefits"),
        ThresholdTier(10000, 5, "Excellent daily activity ({value} steps) - optimal WHO range for health"),
        ThresholdTier(8000, 4, "Very good daily activity ({value} steps) - significant health benefits"),
        ThresholdTier(6000, 3, "Good daily activity ({value} steps) - moderate health benefits"),
        ThresholdTier(4000, 2, "Moderate activity ({value} steps) - some health benefits, aim higher"),
        ThresholdTier(2000, 1, "Low daily activity ({value} steps) - minimal benefits, increase gradually"),
    ),
    floor_points=1,
    floor_reason="Very low daily activity ({value} steps) - start building movement habits",
    no_data_reason="No step data available",
)


ALL_METRICS: Tuple[MetricThresholds, ...] = (
    RESTING_HEART_RATE,
    HEART_RATE_VARIABILITY,
    VO2_MAX,
    DEEP_SLEEP,
    REM_SLEEP,
    SLEEP_CONSISTENCY,
    DAILY_TRAINING_TIME,
    TRAINING_INTENSITY,
    DAILY_STEPS,
)


# =============================================================================
# FITNESS LEVELS
# =============================================================================

class FitnessLevel(str, Enum):
    """Qualitative label derived from the total score."""
    TOP_FORM = "Top Form!"                  # 90-100
    STRONG_ACTIVE = "Strong & Active"       # 70-89
    SOLID_PROGRESS = "Solid Progress"       # 50-69
    ON_THE_WAY = "On The Way"               # 30-49
    TIME_FOR_CHANGE = "Time For Change"     # 0-29


# Minimum total score for each level, best first.
FITNESS_LEVEL_THRESHOLDS: Tuple[Tuple[int, FitnessLevel], ...] = (
    (90, FitnessLevel.TOP_FORM),
    (70, FitnessLevel.STRONG_ACTIVE),
    (50, FitnessLevel.SOLID_PROGRESS),
    (30, FitnessLevel.ON_THE_WAY),
)
LOWEST_FITNESS_LEVEL = FitnessLevel.TIME_FOR_CHANGE


# =============================================================================
# POLICY CONSTANTS
# =============================================================================

# Tunable policy values carried over unchanged from the shipped app. They
# are not derived from clinical literature.
BONUS_EXCELLENT_THRESHOLD = 75.0  # percent of a category's maximum
TREND_CHANGE_THRESHOLD = 5.0  # percent change between window halves

# Number of excellent categories -> bonus points
BONUS_AWARDS: Dict[int, int] = {
    3: 5,
    2: 3,
    1: 1,
    0: 0,
}

TREND_MIN_RECORDS = 14
HISTORY_WINDOW_DAYS = 30

# Sleep consistency: 100 - stddev_hours * factor
SLEEP_CONSISTENCY_STDDEV_FACTOR = 20

# Steps are divided by this before being combined with training minutes in
# the activity trend so both terms have a similar magnitude.
ACTIVITY_TREND_STEPS_DIVISOR = 100
