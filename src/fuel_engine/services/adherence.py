"""Rolling meal-logging consistency and intake averages."""

from collections.abc import Sequence
from datetime import date, datetime, timedelta
from typing import Literal
from zoneinfo import ZoneInfo

from fuel_engine.domain.meals import MealLog
from fuel_engine.domain.nutrition import MacroVector
from fuel_engine.domain.progress import AdherenceSummary
from fuel_engine.services.macros import round1, round_half_up, sum_macros

SHORT_WINDOW_DAYS = 7
LONG_WINDOW_DAYS = 28
ADJUSTMENT_TOLERANCE = 0.1

CalorieSuggestion = Literal["increase", "decrease", "maintain"]


def compute_adherence(
    logs: Sequence[MealLog], now: datetime, timezone_name: str = "UTC"
) -> AdherenceSummary:
    """Summarize 7- and 28-day logging consistency ending at ``now``.

    Consistency counts distinct calendar days in the user's timezone, so
    several meals on one day count once. Averages divide by the full window
    length rather than by the number of days logged.
    """
    tz = ZoneInfo(timezone_name)
    logs_28d = _window(logs, now, LONG_WINDOW_DAYS)
    logs_7d = _window(logs_28d, now, SHORT_WINDOW_DAYS)
    days_7d = _logged_days(logs_7d, tz)
    days_28d = _logged_days(logs_28d, tz)
    totals_7d = sum_macros(log.totals.macros for log in logs_7d)
    return AdherenceSummary(
        consistency_7d=_consistency(len(days_7d), SHORT_WINDOW_DAYS),
        consistency_28d=_consistency(len(days_28d), LONG_WINDOW_DAYS),
        logged_days_7d=len(days_7d),
        logged_days_28d=len(days_28d),
        avg_daily_calories_7d=totals_7d.calories / SHORT_WINDOW_DAYS,
        avg_daily_protein_7d=totals_7d.protein / SHORT_WINDOW_DAYS,
    )


def suggest_calorie_adjustment(
    daily_calorie_totals: Sequence[float], tdee: float
) -> tuple[float, float, CalorieSuggestion]:
    """Compare average intake with TDEE and suggest a direction.

    Returns ``(average_intake, delta, suggestion)``. Deltas within 10% of
    TDEE suggest ``maintain``.
    """
    if not daily_calorie_totals or tdee <= 0:
        return 0.0, 0.0, "maintain"
    average = round1(sum(daily_calorie_totals) / len(daily_calorie_totals))
    delta = round1(average - tdee)
    threshold = tdee * ADJUSTMENT_TOLERANCE
    if delta > threshold:
        return average, delta, "decrease"
    if delta < -threshold:
        return average, delta, "increase"
    return average, delta, "maintain"


def assess_macro_adherence(
    daily_totals: Sequence[MacroVector], target: MacroVector
) -> float:
    """Score 0-100 for how closely average intake matches macro targets."""
    if not daily_totals:
        return 0.0
    count = len(daily_totals)
    average = sum_macros(daily_totals).scaled(1 / count)
    scores = [
        _macro_score(average.calories, target.calories),
        _macro_score(average.protein, target.protein),
        _macro_score(average.carbs, target.carbs),
        _macro_score(average.fats, target.fats),
    ]
    return round1(sum(scores) / len(scores))


def _macro_score(actual: float, target: float) -> float:
    if target <= 0:
        return 100.0
    deviation = abs(actual - target) / target
    return min(100.0, max(0.0, 100 - deviation * 100))


def _window(logs: Sequence[MealLog], now: datetime, days: int) -> list[MealLog]:
    start = now - timedelta(days=days)
    return [log for log in logs if start <= log.logged_at <= now]


def _logged_days(logs: Sequence[MealLog], tz: ZoneInfo) -> set[date]:
    return {log.logged_at.astimezone(tz).date() for log in logs}


def _consistency(logged_days: int, window_days: int) -> int:
    # a window measured from "now" can touch window_days + 1 calendar dates
    return round_half_up(min(logged_days, window_days) / window_days * 100)
