"""
Bonus Evaluator

Awards up to 5 consistency points when categories reach the excellent
threshold (75% of their maximum by default):

    3 excellent categories -> 5 points
    2 excellent categories -> 3 points
    1 excellent category   -> 1 point
    none                   -> 0 points

The comparison uses the unrounded percentage, so 74.9% does not qualify.
Rounded percentages are only used in the reason text.
"""

from __future__ import annotations

from typing import Dict, List

from vitality.scoring.models import BonusResult
from vitality.scoring.thresholds import (
    ACTIVITY_MAX,
    BONUS_AWARDS,
    BONUS_EXCELLENT_THRESHOLD,
    CARDIOVASCULAR_MAX,
    RECOVERY_MAX,
)
from vitality.utils import round_to_int


def category_percentage(points: float, max_points: float) -> float:
    """Share of ``max_points`` earned, in percent (unrounded)."""
    if max_points <= 0:
        return 0.0
    return points / max_points * 100


def _threshold_points(max_points: int, threshold: float) -> str:
    return f"{max_points * threshold / 100:g}"


def calculate_bonus_points(
    cardiovascular_points: float,
    recovery_points: float,
    activity_points: float,
    threshold: float = BONUS_EXCELLENT_THRESHOLD,
) -> BonusResult:
    """Evaluate the consistency bonus from the three category totals."""
    percentages: Dict[str, float] = {
        "Cardiovascular": category_percentage(cardiovascular_points, CARDIOVASCULAR_MAX),
        "Recovery": category_percentage(recovery_points, RECOVERY_MAX),
        "Activity": category_percentage(activity_points, ACTIVITY_MAX),
    }
    display = {name: round_to_int(pct) for name, pct in percentages.items()}
    excellent: List[str] = [name for name, pct in percentages.items() if pct >= threshold]
    points = BONUS_AWARDS[len(excellent)]
    limit = f"{threshold:g}"

    if len(excellent) == 3:
        reason = (
            "Outstanding consistency across all categories! "
            f"Cardiovascular: {display['Cardiovascular']}%, Recovery: {display['Recovery']}%, "
            f"Activity: {display['Activity']}%"
        )
        explanation = f"Achieved ≥{limit}% in all three health categories - maximum bonus achieved!"
    elif len(excellent) == 2:
        shares = ", ".join(f"{display[name]}%" for name in excellent)
        reason = f"Excellent performance in {' & '.join(excellent)} ({shares}) - strong consistency!"
        explanation = f"Achieved ≥{limit}% in two health categories - great progress toward full consistency!"
    elif len(excellent) == 1:
        name = excellent[0]
        reason = f"Good performance in {name} ({display[name]}%) - build consistency in other areas"
        explanation = (
            f"Achieved ≥{limit}% in one health category - "
            "focus on improving other areas for more bonus points!"
        )
    else:
        no_data = cardiovascular_points <= 0 and recovery_points <= 0 and activity_points <= 0
        prefix = "No data available - work" if no_data else "Work"
        reason = (
            f"{prefix} toward consistency bonus: "
            f"Cardiovascular {display['Cardiovascular']}%, Recovery {display['Recovery']}%, "
            f"Activity {display['Activity']}%. "
            f"Target: Get any category to ≥{limit}% for bonus points!"
        )
        explanation = (
            "Bonus Requirements: "
            f"Cardiovascular ≥{_threshold_points(CARDIOVASCULAR_MAX, threshold)}pts ({limit}%), "
            f"Recovery ≥{_threshold_points(RECOVERY_MAX, threshold)}pts ({limit}%), "
            f"Activity ≥{_threshold_points(ACTIVITY_MAX, threshold)}pts ({limit}%). "
            f"Achieve these thresholds in 1, 2, or 3 categories for "
            f"{BONUS_AWARDS[1]}, {BONUS_AWARDS[2]}, or {BONUS_AWARDS[3]} bonus points respectively."
        )

    return BonusResult(
        points=points,
        reason=reason,
        detailed_explanation=explanation,
        cardiovascular_percent=display["Cardiovascular"],
        recovery_percent=display["Recovery"],
        activity_percent=display["Activity"],
        excellent_categories=excellent,
    )
