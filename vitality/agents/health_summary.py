"""
Health Summary Agent

Scores the current snapshot, reads the stored window for trends and the
rolling monthly average, and derives the plain-language insights,
recommendations, concerns and strengths that the assistant and the app
display.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from vitality.agents.base import AgentInput, AgentOutput, BaseHealthAgent
from vitality.scoring.fitness import calculate_fitness_score
from vitality.scoring.models import (
    HealthMetrics,
    HealthTrends,
    MetricAggregate,
    MonthlyAverageResult,
    Trend,
)
from vitality.scoring.monthly import calculate_monthly_average_from_history
from vitality.scoring.thresholds import FitnessLevel
from vitality.scoring.trends import aggregate_metrics, calculate_trends
from vitality.scoring.units import DAYS_IN_WEEK, daily_to_monthly_minutes, daily_to_weekly_minutes
from vitality.utils import format_datetime


class ActivityLevel(str, Enum):
    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


# =============================================================================
# HEALTH CONTEXT
# =============================================================================

class HealthContext(BaseModel):
    """Everything the assistant needs to know about the user right now."""
    model_config = ConfigDict(extra="forbid")

    current_metrics: HealthMetrics
    vitality_score: int = Field(..., ge=0, le=100)
    fitness_level: FitnessLevel
    activity_level: ActivityLevel
    recent_trends: HealthTrends = Field(default_factory=HealthTrends)
    top_concerns: List[str] = Field(default_factory=list)
    strengths: List[str] = Field(default_factory=list)
    monthly_average: Optional[MonthlyAverageResult] = None
    generated_at: Optional[datetime] = None


def format_number(value: float) -> str:
    """12.0 -> '12', 18.25 -> '18.3'."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.1f}"


def format_health_context(context: HealthContext) -> str:
    """Render a ``HealthContext`` as the text block sent to the language model."""
    metrics = context.current_metrics
    lines = [
        "Health Profile Summary:",
        f"- Vitality Score: {context.vitality_score}/100 ({context.fitness_level.value})",
        f"- Activity Level: {context.activity_level.value}",
        f"- Generated: {format_datetime(context.generated_at)}",
    ]
    if context.monthly_average is not None:
        average = context.monthly_average
        label = "estimated" if average.is_estimated else f"{average.data_points_count} data points"
        lines.append(f"- 30-Day Average: {average.total_score}/100 ({label})")

    lines += [
        "",
        "Current Metrics:",
        f"- Resting Heart Rate: {format_number(metrics.resting_heart_rate)} bpm",
        f"- Heart Rate Variability: {format_number(metrics.heart_rate_variability)} ms",
        f"- VO2 Max: {format_number(metrics.vo2_max)} ml/kg/min",
        f"- Deep Sleep: {format_number(metrics.deep_sleep_percentage)}%",
        f"- REM Sleep: {format_number(metrics.rem_sleep_percentage)}%",
        f"- Sleep Consistency: {format_number(metrics.sleep_consistency)}%",
        f"- Daily Training: {format_number(metrics.daily_training_time)} minutes",
        f"- Training Intensity: {format_number(metrics.training_intensity)}%",
        f"- Daily Steps: {format_number(metrics.daily_steps)}",
        "",
        "Recent Trends:",
        f"- Heart Health: {context.recent_trends.heart_health_trend.value}",
        f"- Sleep Quality: {context.recent_trends.sleep_trend.value}",
        f"- Activity Level: {context.recent_trends.activity_trend.value}",
        "",
        f"Top Concerns: {', '.join(context.top_concerns) or 'None identified'}",
        f"Key Strengths: {', '.join(context.strengths) or 'Establishing baseline'}",
    ]
    return "\n".join(lines)


# =============================================================================
# INPUT/OUTPUT SCHEMAS
# =============================================================================

class HealthSummaryInput(AgentInput):
    """Input schema for HealthSummaryAgent."""

    current_metrics: HealthMetrics = Field(..., description="Latest metrics snapshot")
    persist: bool = Field(
        default=False,
        description="Store the snapshot and its history items before summarising",
    )
    now: Optional[datetime] = Field(None, description="Reference time; defaults to the current UTC time")


class HealthSummaryOutput(AgentOutput):
    """Output schema for HealthSummaryAgent."""

    vitality_score: int = Field(..., ge=0, le=100)
    fitness_level: FitnessLevel
    trends: HealthTrends
    weekly_aggregate: MetricAggregate
    monthly_aggregate: MetricAggregate
    monthly_average: MonthlyAverageResult
    insights: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    context: HealthContext
    context_text: str = Field(..., description="Context block for the assistant")


# =============================================================================
# AGENT IMPLEMENTATION
# =============================================================================

class HealthSummaryAgent(BaseHealthAgent[HealthSummaryInput, HealthSummaryOutput]):
    """
    Summarise the user's health for display and for the assistant.

    Trends come from the stored snapshots of the retention window, the
    monthly average from the stored history items. A metric value of 0 is
    "no data" and never produces a concern or a strength.
    """

    agent_id = "health_summary"
    purpose = "Summarise current metrics, trends and rolling averages"

    MAX_CONCERNS = 3
    MAX_STRENGTHS = 3

    @property
    def input_type(self) -> type[HealthSummaryInput]:
        return HealthSummaryInput

    @property
    def output_type(self) -> type[HealthSummaryOutput]:
        return HealthSummaryOutput

    async def _execute(self, validated_input: HealthSummaryInput) -> HealthSummaryOutput:
        metrics = validated_input.current_metrics
        now = validated_input.now or datetime.now(timezone.utc)
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)

        score = calculate_fitness_score(metrics)
        if validated_input.persist:
            self.store.save_metrics_snapshot(metrics, timestamp=now, now=now)
            self.store.save_history_items(score.history_items)

        window_start = now - timedelta(days=self.settings.storage.history_retention_days)
        snapshots = self.store.load_metrics_snapshots(since=window_start)
        weekly_snapshots = self.store.load_metrics_snapshots(since=now - timedelta(days=DAYS_IN_WEEK))
        trends = calculate_trends(snapshots)
        self.logger.debug("Trends over %d snapshots: %s", len(snapshots), trends.model_dump())

        monthly_average = calculate_monthly_average_from_history(
            self.store.load_history_items(since=window_start),
            current_metrics=metrics,
            now=now,
            window_days=self.settings.storage.history_retention_days,
        )

        context = HealthContext(
            current_metrics=metrics,
            vitality_score=score.total_score,
            fitness_level=score.fitness_level,
            activity_level=self.determine_activity_level(metrics),
            recent_trends=trends,
            top_concerns=self.identify_top_concerns(metrics, trends),
            strengths=self.identify_strengths(metrics, trends),
            monthly_average=monthly_average,
            generated_at=now,
        )

        return HealthSummaryOutput(
            agent_id=self.agent_id,
            vitality_score=score.total_score,
            fitness_level=score.fitness_level,
            trends=trends,
            weekly_aggregate=aggregate_metrics(weekly_snapshots),
            monthly_aggregate=aggregate_metrics(snapshots),
            monthly_average=monthly_average,
            insights=self.generate_insights(metrics, score.total_score, trends),
            recommendations=self.generate_recommendations(metrics, trends),
            context=context,
            context_text=format_health_context(context),
        )

    # -------------------------------------------------------------------------
    # Rules
    # -------------------------------------------------------------------------

    @staticmethod
    def generate_insights(metrics: HealthMetrics, vitality_score: int, trends: HealthTrends) -> List[str]:
        insights: List[str] = []
        monthly_training = daily_to_monthly_minutes(metrics.daily_training_time)

        if vitality_score >= 90:
            insights.append("Excellent work! You're in top form across all health metrics.")
        elif vitality_score >= 70:
            insights.append("Strong overall health with room for targeted improvements.")
        elif vitality_score >= 50:
            insights.append("Solid foundation with opportunities to optimize key areas.")
        else:
            insights.append("Great opportunity to make meaningful improvements to your health.")

        if 0 < metrics.resting_heart_rate < 60 and metrics.heart_rate_variability > 40:
            insights.append("Your cardiovascular fitness is excellent - keep up the great work!")
        elif metrics.resting_heart_rate > 80:
            insights.append("Your resting heart rate suggests room for cardiovascular improvement.")

        if (
            metrics.deep_sleep_percentage + metrics.rem_sleep_percentage > 35
            and metrics.sleep_consistency > 80
        ):
            insights.append("Your sleep quality is excellent with good deep and REM sleep.")
        elif 0 < metrics.deep_sleep_percentage < 15:
            insights.append("Consider optimizing your sleep environment for better deep sleep.")

        if metrics.daily_steps > 10000 and monthly_training > 600:
            insights.append("Outstanding activity levels - you're exceeding recommended guidelines!")
        elif 0 < metrics.daily_steps < 5000:
            insights.append("Increasing daily movement could significantly boost your vitality score.")

        if trends.heart_health_trend == Trend.IMPROVING:
            insights.append("Great news! Your cardiovascular health is trending upward.")
        if trends.sleep_trend == Trend.IMPROVING:
            insights.append("Your sleep quality improvements are paying off!")
        if trends.activity_trend == Trend.IMPROVING:
            insights.append("Your increased activity levels are making a positive impact.")

        return insights

    @staticmethod
    def generate_recommendations(metrics: HealthMetrics, trends: HealthTrends) -> List[str]:
        recommendations: List[str] = []
        monthly_training = daily_to_monthly_minutes(metrics.daily_training_time)

        if metrics.resting_heart_rate > 75:
            recommendations.append("Try adding 20-30 minutes of moderate cardio 3-4 times per week.")
        if 0 < metrics.heart_rate_variability < 30:
            recommendations.append("Consider stress-reduction techniques like meditation or yoga.")

        if 0 < metrics.deep_sleep_percentage < 15:
            recommendations.append("Optimize your sleep environment: cool, dark, and quiet.")
            recommendations.append("Avoid screens 1-2 hours before bedtime.")
        if 0 < metrics.sleep_consistency < 70:
            recommendations.append("Try maintaining a consistent sleep schedule, even on weekends.")

        if metrics.daily_steps < 8000:
            recommendations.append(
                "Aim for 8,000-10,000 steps daily by adding short walks throughout the day."
            )
        if monthly_training < 600:
            recommendations.append(
                "Target 600 minutes of moderate exercise or 300 minutes of vigorous exercise monthly."
            )

        if trends.heart_health_trend == Trend.DECLINING:
            recommendations.append(
                "Focus on cardiovascular exercise to reverse the declining heart health trend."
            )
        if trends.sleep_trend == Trend.DECLINING:
            recommendations.append(
                "Review your sleep hygiene and consider what might be affecting your sleep quality."
            )
        if trends.activity_trend == Trend.DECLINING:
            recommendations.append(
                "Set achievable activity goals to get back on track with your fitness routine."
            )

        return recommendations

    @classmethod
    def identify_top_concerns(cls, metrics: HealthMetrics, trends: HealthTrends) -> List[str]:
        concerns: List[str] = []
        monthly_training = daily_to_monthly_minutes(metrics.daily_training_time)

        if metrics.resting_heart_rate > 80:
            concerns.append("High resting heart rate")
        if 0 < metrics.heart_rate_variability < 25:
            concerns.append("Low heart rate variability")
        if 0 < metrics.vo2_max < 35:
            concerns.append("Low cardiovascular fitness")
        if 0 < metrics.deep_sleep_percentage < 10:
            concerns.append("Insufficient deep sleep")
        if 0 < metrics.sleep_consistency < 60:
            concerns.append("Inconsistent sleep schedule")
        if 0 < metrics.daily_steps < 5000:
            concerns.append("Low daily activity")
        if 0 < monthly_training < 240:
            concerns.append("Insufficient exercise")

        if trends.heart_health_trend == Trend.DECLINING:
            concerns.append("Declining cardiovascular health")
        if trends.sleep_trend == Trend.DECLINING:
            concerns.append("Worsening sleep quality")
        if trends.activity_trend == Trend.DECLINING:
            concerns.append("Decreasing activity levels")

        return concerns[: cls.MAX_CONCERNS]

    @classmethod
    def identify_strengths(cls, metrics: HealthMetrics, trends: HealthTrends) -> List[str]:
        strengths: List[str] = []

        if 0 < metrics.resting_heart_rate < 65:
            strengths.append("Excellent resting heart rate")
        if metrics.heart_rate_variability > 40:
            strengths.append("Good heart rate variability")
        if metrics.vo2_max > 45:
            strengths.append("High cardiovascular fitness")
        if metrics.deep_sleep_percentage > 20:
            strengths.append("Good deep sleep quality")
        if metrics.rem_sleep_percentage > 20:
            strengths.append("Adequate REM sleep")
        if metrics.sleep_consistency > 85:
            strengths.append("Consistent sleep schedule")
        if metrics.daily_steps > 10000:
            strengths.append("High daily activity")
        if daily_to_monthly_minutes(metrics.daily_training_time) > 800:
            strengths.append("Excellent exercise routine")

        if trends.heart_health_trend == Trend.IMPROVING:
            strengths.append("Improving cardiovascular health")
        if trends.sleep_trend == Trend.IMPROVING:
            strengths.append("Better sleep quality")
        if trends.activity_trend == Trend.IMPROVING:
            strengths.append("Increasing activity levels")

        return strengths[: cls.MAX_STRENGTHS]

    @staticmethod
    def determine_activity_level(metrics: HealthMetrics) -> ActivityLevel:
        weekly_minutes = daily_to_weekly_minutes(metrics.daily_training_time)
        steps = metrics.daily_steps

        if weekly_minutes >= 300 and steps >= 12000:
            return ActivityLevel.VERY_ACTIVE
        if weekly_minutes >= 150 and steps >= 8000:
            return ActivityLevel.ACTIVE
        if weekly_minutes >= 75 and steps >= 6000:
            return ActivityLevel.MODERATE
        if weekly_minutes >= 30 or steps >= 4000:
            return ActivityLevel.LIGHT
        return ActivityLevel.SEDENTARY
