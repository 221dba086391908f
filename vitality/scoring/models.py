"""
Data model for the vitality scoring engine.

Inputs (snapshots and raw health-store samples) and outputs (scoring
results, history items, averages, trends) are pydantic models with strict
field validation. Metric values are non-negative; 0 means "no data".
"""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import List, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from vitality.scoring.thresholds import FitnessLevel
from vitality.scoring.units import monthly_to_daily_minutes, weekly_to_daily_minutes


# =============================================================================
# ENUMS
# =============================================================================

class HealthCategory(str, Enum):
    """The four scoring buckets."""
    CARDIOVASCULAR = "Cardiovascular Health"
    RECOVERY = "Recovery & Regeneration"
    ACTIVITY = "Activity & Training"
    BONUS = "Bonus Metric"


class Trend(str, Enum):
    """Direction of a health dimension over a historical window."""
    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"


class ScoringModel(BaseModel):
    """Base class for all scoring models."""
    model_config = ConfigDict(extra="forbid")


# =============================================================================
# METRIC SNAPSHOTS
# =============================================================================

class HealthMetrics(ScoringModel):
    """Current snapshot of every scored metric.

    Training time is always minutes per day. Use ``from_monthly_training``
    or ``from_weekly_training`` when the source reports period totals.
    """

    resting_heart_rate: float = Field(0, ge=0, description="Resting heart rate in bpm")
    heart_rate_variability: float = Field(0, ge=0, description="HRV (SDNN) in ms")
    vo2_max: float = Field(0, ge=0, description="VO2 max in ml/kg/min")
    deep_sleep_percentage: float = Field(0, ge=0, le=100, description="Deep sleep as % of total sleep")
    rem_sleep_percentage: float = Field(0, ge=0, le=100, description="REM sleep as % of total sleep")
    sleep_consistency: float = Field(0, ge=0, le=100, description="Sleep consistency score (0-100)")
    daily_training_time: float = Field(0, ge=0, description="Training minutes per day")
    training_intensity: float = Field(0, ge=0, le=100, description="Training intensity score (0-100)")
    daily_steps: float = Field(0, ge=0, description="Steps per day")

    @classmethod
    def zero(cls) -> "HealthMetrics":
        """Snapshot with no data for any metric."""
        return cls()

    @classmethod
    def from_monthly_training(cls, monthly_training_time: float, **kwargs) -> "HealthMetrics":
        return cls(daily_training_time=monthly_to_daily_minutes(monthly_training_time), **kwargs)

    @classmethod
    def from_weekly_training(cls, weekly_training_time: float, **kwargs) -> "HealthMetrics":
        return cls(daily_training_time=weekly_to_daily_minutes(weekly_training_time), **kwargs)


class DailyHealthMetrics(HealthMetrics):
    """Metrics for a single calendar day; training time is that day's minutes."""

    date: dt.date = Field(..., description="Calendar day these metrics describe")


class MetricAggregate(ScoringModel):
    """Average of every snapshot field across a window of records."""

    avg_resting_heart_rate: int = 0
    avg_heart_rate_variability: int = 0
    avg_vo2_max: float = 0.0
    avg_deep_sleep_percentage: float = 0.0
    avg_rem_sleep_percentage: float = 0.0
    avg_sleep_consistency: int = 0
    avg_daily_training_time: int = 0
    avg_training_intensity: int = 0
    avg_daily_steps: int = 0
    record_count: int = Field(0, ge=0, description="Number of records averaged")


# =============================================================================
# RAW HEALTH-STORE SAMPLES
# =============================================================================

class HealthSample(ScoringModel):
    """A numeric sample (steps, heart rate, HRV) with its timestamp."""

    value: float = Field(0, description="Sample value; missing values count as 0")
    start_date: dt.datetime
    end_date: Optional[dt.datetime] = None

    @field_validator("value", mode="before")
    @classmethod
    def _missing_value_is_zero(cls, value: Optional[float]) -> float:
        return 0 if value is None else value


class SleepSample(ScoringModel):
    """A sleep-stage interval. ``value`` is DEEP, REM, CORE, ASLEEP, ..."""

    value: str
    start_date: dt.datetime
    end_date: dt.datetime

    @property
    def duration_hours(self) -> float:
        return (self.end_date - self.start_date).total_seconds() / 3600


class WorkoutSession(ScoringModel):
    """A single workout as reported by the health store."""

    start: Optional[dt.datetime] = None
    end: Optional[dt.datetime] = None
    duration_seconds: float = 0
    calories: float = 0
    activity_name: str = ""

    @property
    def duration_minutes(self) -> float:
        return self.duration_seconds / 60


class WorkoutSummary(ScoringModel):
    """Training totals for one calendar day."""

    date: dt.date
    duration: float = Field(0, ge=0, description="Training minutes that day")
    intensity: float = Field(0, ge=0, le=100, description="Intensity score (0-100)")


class DaySamples(ScoringModel):
    """All raw samples that fall on one calendar day."""

    date: dt.date
    steps_data: List[HealthSample] = Field(default_factory=list)
    heart_rate_data: List[HealthSample] = Field(default_factory=list)
    hrv_data: List[HealthSample] = Field(default_factory=list)
    sleep_data: List[SleepSample] = Field(default_factory=list)


# =============================================================================
# SCORING OUTPUTS
# =============================================================================

class ScoringResult(ScoringModel):
    """Atomic output of a single metric scorer."""

    points: int = Field(..., ge=0)
    reason: str


class HistoryItem(ScoringModel):
    """One persisted scoring line. Immutable once created."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    category: HealthCategory
    metric: str
    points: int = Field(..., ge=0)
    max_points: int = Field(..., ge=0)
    reason: str
    timestamp: dt.datetime = Field(default_factory=lambda: dt.datetime.now(dt.timezone.utc))

    @model_validator(mode="after")
    def _points_within_ceiling(self) -> "HistoryItem":
        if self.points > self.max_points:
            raise ValueError(
                f"{self.metric}: points ({self.points}) exceed max_points ({self.max_points})"
            )
        return self


class CategoryScoringResult(ScoringModel):
    total: int = Field(..., ge=0)
    items: List[HistoryItem] = Field(default_factory=list)


class BonusResult(ScoringModel):
    """Outcome of the consistency bonus evaluation."""

    points: int = Field(..., ge=0, le=5)
    reason: str
    detailed_explanation: str
    cardiovascular_percent: int = Field(..., description="Display percentage (rounded)")
    recovery_percent: int = Field(..., description="Display percentage (rounded)")
    activity_percent: int = Field(..., description="Display percentage (rounded)")
    excellent_categories: List[str] = Field(default_factory=list)


class FitnessScoreResult(ScoringModel):
    """Output of one scoring pass over a snapshot."""

    total_score: int = Field(..., ge=0, le=100)
    cardiovascular_points: int = Field(..., ge=0, le=30)
    recovery_points: int = Field(..., ge=0, le=35)
    activity_points: int = Field(..., ge=0, le=30)
    bonus_points: int = Field(..., ge=0, le=5)
    fitness_level: FitnessLevel
    bonus_breakdown: Optional[BonusResult] = None
    history_items: List[HistoryItem] = Field(default_factory=list)


class DailyFitnessScore(FitnessScoreResult):
    """Fitness score for a single calendar day."""

    date: dt.date


class MonthlyAverageResult(ScoringModel):
    """Rolling 30-day view of category points."""

    total_score: int = Field(..., ge=0, le=100)
    cardiovascular_points: int = Field(..., ge=0, le=30)
    recovery_points: int = Field(..., ge=0, le=35)
    activity_points: int = Field(..., ge=0, le=30)
    bonus_points: int = Field(..., ge=0, le=5)
    fitness_level: FitnessLevel
    data_points_count: int = Field(..., ge=0, description="History items or daily scores averaged")
    is_estimated: bool = Field(..., description="True when computed from the current snapshot only")
    daily_scores: List[DailyFitnessScore] = Field(default_factory=list)


class HealthTrends(ScoringModel):
    heart_health_trend: Trend = Trend.STABLE
    sleep_trend: Trend = Trend.STABLE
    activity_trend: Trend = Trend.STABLE
