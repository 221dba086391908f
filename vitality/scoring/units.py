"""
Training-time unit conversions.

Minutes per day is the canonical unit for training time everywhere in the
scoring engine. Weekly and monthly totals reported by a health store must
pass through one of these helpers before they reach a scorer.
"""

from __future__ import annotations

DAYS_IN_WEEK = 7
DAYS_IN_MONTH = 30


def monthly_to_daily_minutes(monthly_minutes: float) -> float:
    """Average minutes per day from a 30-day total."""
    return monthly_minutes / DAYS_IN_MONTH


def weekly_to_daily_minutes(weekly_minutes: float) -> float:
    """Average minutes per day from a 7-day total."""
    return weekly_minutes / DAYS_IN_WEEK


def daily_to_weekly_minutes(daily_minutes: float) -> float:
    return daily_minutes * DAYS_IN_WEEK


def daily_to_monthly_minutes(daily_minutes: float) -> float:
    return daily_minutes * DAYS_IN_MONTH
