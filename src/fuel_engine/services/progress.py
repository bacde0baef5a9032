"""Progress classification from weight trend and intake signals."""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Protocol
from uuid import UUID

from fuel_engine.domain.meals import MealLog
from fuel_engine.domain.profile import Goal
from fuel_engine.domain.progress import (
    AdaptiveSignal,
    ProgressAssessment,
    ProgressClassification,
    WeightLog,
)
from fuel_engine.services.adherence import LONG_WINDOW_DAYS, compute_adherence
from fuel_engine.services.energy import compute_energy, derive_targets
from fuel_engine.services.macros import round1, round_half_up
from fuel_engine.services.users import ProfileService

MIN_DAYS_BETWEEN_LOGS = 5
STABLE_BAND_KG_PER_WEEK = 0.15
FAST_LOSS_KG_PER_WEEK = 1.0

SURPLUS_FAT_GAIN_KCAL = 250
SURPLUS_LEAN_GAIN_MIN_KCAL = 50
SURPLUS_LEAN_GAIN_MAX_KCAL = 320
DEFICIT_FAT_LOSS_KCAL = -250
DEFICIT_AGGRESSIVE_KCAL = -700
SIGNAL_DISAGREEMENT_KCAL = 100
STABLE_INTAKE_BAND_KCAL = 250

PROTEIN_ADEQUATE = 1.0
PROTEIN_FAT_GAIN_BELOW = 0.9
PROTEIN_LOSS_ADEQUATE = 0.95
PROTEIN_LOSS_RISK_BELOW = 0.85

INSUFFICIENT_CONFIDENCE = 20
MIN_CONFIDENCE = 25
MAX_CONFIDENCE = 95
INTERVAL_CAP_DAYS = 21

_BASE_CONFIDENCE: dict[ProgressClassification, int] = {
    ProgressClassification.STABLE: 70,
    ProgressClassification.FAT_GAIN_LIKELY: 82,
    ProgressClassification.MUSCLE_GAIN_LIKELY: 78,
    ProgressClassification.MIXED_GAIN: 62,
    ProgressClassification.MUSCLE_LOSS_RISK: 80,
}

_SUMMARIES: dict[ProgressClassification, str] = {
    ProgressClassification.INSUFFICIENT_DATA: (
        "Need at least ~1 week between logs for a reliable signal."
    ),
    ProgressClassification.STABLE: (
        "Weight trend is stable. Keep current plan and monitor weekly."
    ),
    ProgressClassification.FAT_GAIN_LIKELY: (
        "Gain trend likely includes excess fat. "
        "Reduce surplus and increase protein quality."
    ),
    ProgressClassification.MUSCLE_GAIN_LIKELY: (
        "Gain trend aligns with lean mass accumulation."
    ),
    ProgressClassification.MIXED_GAIN: (
        "Weight is increasing with mixed composition. "
        "Tune calories and protein for cleaner gain."
    ),
    ProgressClassification.FAT_LOSS_LIKELY: (
        "Loss trend is likely fat-dominant. Keep lifting performance stable."
    ),
    ProgressClassification.MUSCLE_LOSS_RISK: (
        "Loss pace is aggressive for recovery capacity. "
        "Raise protein and reduce deficit."
    ),
}

_MODERATE_LOSS_SUMMARY = "Loss trend is present but signal confidence is moderate."
_DISAGREEMENT_NOTE = " Weight and intake signals disagree; check logging accuracy."
_NO_BIOMETRICS_SUMMARY = (
    "Add height, age and activity level to unlock progress insights."
)

_logger = logging.getLogger(__name__)


def classify_progress(  # noqa: PLR0913
    goal: Goal | str,
    weight_delta_kg: float,
    days_between_logs: float | None,
    calorie_delta_from_tdee: float,
    protein_adequacy_ratio: float,
    consistency_7d: int | None = None,
) -> ProgressAssessment:
    """Classify the weight trend into a body-composition label.

    The decision is threshold based: the weekly rate picks a direction,
    calorie and protein signals pick the label within it, and confidence
    blends sampling interval, logging consistency and signal agreement.
    When evidence is thin the result is ``insufficient_data``.
    """
    if (
        days_between_logs is None
        or not math.isfinite(days_between_logs)
        or days_between_logs < MIN_DAYS_BETWEEN_LOGS
    ):
        return ProgressAssessment(
            classification=ProgressClassification.INSUFFICIENT_DATA,
            weekly_rate_kg=0.0,
            confidence=INSUFFICIENT_CONFIDENCE,
            summary=_SUMMARIES[ProgressClassification.INSUFFICIENT_DATA],
        )

    resolved_goal = Goal(goal)
    weekly_rate = round1(weight_delta_kg / days_between_logs * 7)
    calorie_delta = calorie_delta_from_tdee
    protein_ratio = protein_adequacy_ratio

    if abs(weekly_rate) < STABLE_BAND_KG_PER_WEEK:
        classification = ProgressClassification.STABLE
        base = _BASE_CONFIDENCE[classification]
        summary = _SUMMARIES[classification]
    elif weekly_rate > 0:
        classification = _classify_gain(calorie_delta, protein_ratio)
        base = _BASE_CONFIDENCE[classification]
        summary = _SUMMARIES[classification]
    else:
        classification, base, summary = _classify_loss(
            resolved_goal, weekly_rate, calorie_delta, protein_ratio
        )

    agreement = _agreement(weekly_rate, calorie_delta, classification)
    if agreement < 0:
        summary += _DISAGREEMENT_NOTE
    confidence = (
        base
        + _interval_adjustment(days_between_logs)
        + _consistency_adjustment(consistency_7d)
        + agreement
    )
    return ProgressAssessment(
        classification=classification,
        weekly_rate_kg=weekly_rate,
        confidence=min(
            MAX_CONFIDENCE, max(MIN_CONFIDENCE, round_half_up(confidence))
        ),
        summary=summary,
    )


def _classify_gain(
    calorie_delta: float, protein_ratio: float
) -> ProgressClassification:
    if (
        calorie_delta >= SURPLUS_FAT_GAIN_KCAL
        and protein_ratio < PROTEIN_FAT_GAIN_BELOW
    ):
        return ProgressClassification.FAT_GAIN_LIKELY
    if (
        SURPLUS_LEAN_GAIN_MIN_KCAL <= calorie_delta <= SURPLUS_LEAN_GAIN_MAX_KCAL
        and protein_ratio >= PROTEIN_ADEQUATE
    ):
        return ProgressClassification.MUSCLE_GAIN_LIKELY
    return ProgressClassification.MIXED_GAIN


def _classify_loss(
    goal: Goal, weekly_rate: float, calorie_delta: float, protein_ratio: float
) -> tuple[ProgressClassification, int, str]:
    risk = ProgressClassification.MUSCLE_LOSS_RISK
    fat_loss = ProgressClassification.FAT_LOSS_LIKELY
    if (
        goal == Goal.CUT
        and weekly_rate <= -FAST_LOSS_KG_PER_WEEK
        and protein_ratio < PROTEIN_LOSS_ADEQUATE
    ):
        return risk, _BASE_CONFIDENCE[risk], _SUMMARIES[risk]
    if (
        calorie_delta <= DEFICIT_FAT_LOSS_KCAL
        and protein_ratio >= PROTEIN_LOSS_ADEQUATE
    ):
        base = 84 if goal == Goal.CUT else 72
        return fat_loss, base, _SUMMARIES[fat_loss]
    if (
        protein_ratio < PROTEIN_LOSS_RISK_BELOW
        or calorie_delta <= DEFICIT_AGGRESSIVE_KCAL
    ):
        return risk, _BASE_CONFIDENCE[risk], _SUMMARIES[risk]
    return fat_loss, 60, _MODERATE_LOSS_SUMMARY


def _interval_adjustment(days_between_logs: float) -> float:
    return (min(days_between_logs, INTERVAL_CAP_DAYS) - 7) * 0.5


def _consistency_adjustment(consistency_7d: int | None) -> float:
    if consistency_7d is None:
        return 0.0
    return (min(max(consistency_7d, 0), 100) - 50) / 5


def _agreement(
    weekly_rate: float,
    calorie_delta: float,
    classification: ProgressClassification,
) -> int:
    if classification == ProgressClassification.STABLE:
        return 5 if abs(calorie_delta) <= STABLE_INTAKE_BAND_KCAL else -10
    direction = 1 if weekly_rate > 0 else -1
    if calorie_delta * direction > 0:
        return 5
    if abs(calorie_delta) >= SIGNAL_DISAGREEMENT_KCAL:
        return -15
    return 0


def build_adaptive_signal(  # noqa: PLR0913
    user_id: UUID,
    goal: Goal | str,
    weight_logs: Sequence[WeightLog],
    meal_logs: Sequence[MealLog],
    tdee: float | None,
    protein_target: float,
    now: datetime,
    timezone_name: str = "UTC",
) -> AdaptiveSignal:
    """Compose adherence and classification into one signal record."""
    adherence = compute_adherence(meal_logs, now, timezone_name)
    ordered = sorted(weight_logs, key=lambda log: log.logged_at, reverse=True)
    last_weight_log_at = ordered[0].logged_at if ordered else None

    if tdee is None:
        calorie_delta = 0.0
        protein_ratio = 0.0
        assessment = ProgressAssessment(
            classification=ProgressClassification.INSUFFICIENT_DATA,
            weekly_rate_kg=0.0,
            confidence=INSUFFICIENT_CONFIDENCE,
            summary=_NO_BIOMETRICS_SUMMARY,
        )
    else:
        calorie_delta = round1(adherence.avg_daily_calories_7d - tdee)
        protein_ratio = (
            round(adherence.avg_daily_protein_7d / protein_target, 2)
            if protein_target > 0
            else 0.0
        )
        weight_delta, days_between = _latest_pair(ordered)
        assessment = classify_progress(
            goal=goal,
            weight_delta_kg=weight_delta,
            days_between_logs=days_between,
            calorie_delta_from_tdee=calorie_delta,
            protein_adequacy_ratio=protein_ratio,
            consistency_7d=adherence.consistency_7d,
        )

    return AdaptiveSignal(
        user_id=user_id,
        consistency_7d=adherence.consistency_7d,
        consistency_28d=adherence.consistency_28d,
        avg_daily_calories_7d=round1(adherence.avg_daily_calories_7d),
        avg_daily_protein_7d=round1(adherence.avg_daily_protein_7d),
        weekly_weight_delta_kg=assessment.weekly_rate_kg,
        daily_calorie_delta_7d=calorie_delta,
        protein_adequacy_ratio_7d=protein_ratio,
        classification=assessment.classification,
        confidence=assessment.confidence,
        summary=assessment.summary,
        computed_at=now,
        last_weight_log_at=last_weight_log_at,
    )


def _latest_pair(ordered: Sequence[WeightLog]) -> tuple[float, float | None]:
    if len(ordered) < 2:  # noqa: PLR2004
        return 0.0, None
    latest, previous = ordered[0], ordered[1]
    days = (latest.logged_at - previous.logged_at).total_seconds() / 86400
    return latest.weight_kg - previous.weight_kg, days


class MealLogReader(Protocol):
    """Read access to meal logs."""

    def list_meal_logs(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealLog]:
        """Return meal logs within a time range."""


class WeightLogReader(Protocol):
    """Read access to weight logs."""

    def list_recent_weight_logs(self, user_id: UUID, limit: int) -> list[WeightLog]:
        """Return the most recent weight logs, newest first."""


class AdaptiveSignalRepository(Protocol):
    """Persistence interface for adaptive signals."""

    def get_signal(self, user_id: UUID) -> AdaptiveSignal | None:
        """Return the stored signal for a user."""

    def upsert_signal(self, signal: AdaptiveSignal) -> None:
        """Replace the stored signal for the signal's user."""


@dataclass
class ProgressService:
    """Recompute and read the per-user adaptive signal."""

    profile_service: ProfileService
    meal_logs: MealLogReader
    weight_logs: WeightLogReader
    signals: AdaptiveSignalRepository

    def recompute(self, token_identifier: str, now: datetime) -> AdaptiveSignal:
        """Rebuild the adaptive signal from recent logs and store it."""
        profile = self.profile_service.get_profile(token_identifier)
        meals = self.meal_logs.list_meal_logs(
            profile.id, now - timedelta(days=LONG_WINDOW_DAYS), now
        )
        weights = self.weight_logs.list_recent_weight_logs(profile.id, limit=2)

        tdee: int | None = None
        protein_target = 0.0
        if profile.biometrics is not None:
            # prefer the latest logged bodyweight over the profile snapshot
            biometrics = profile.biometrics
            if weights:
                latest = max(weights, key=lambda log: log.logged_at)
                biometrics = replace(biometrics, weight_kg=latest.weight_kg)
            tdee = compute_energy(biometrics).tdee
            protein_target = derive_targets(
                tdee, biometrics.weight_kg, profile.goal, profile.experience_level
            ).protein

        signal = build_adaptive_signal(
            user_id=profile.id,
            goal=profile.goal,
            weight_logs=weights,
            meal_logs=meals,
            tdee=tdee,
            protein_target=protein_target,
            now=now,
            timezone_name=profile.timezone,
        )
        self.signals.upsert_signal(signal)
        _logger.info(
            "Adaptive signal recomputed: user=%s classification=%s confidence=%s",
            profile.id,
            signal.classification,
            signal.confidence,
        )
        return signal

    def get_signal(self, token_identifier: str) -> AdaptiveSignal | None:
        """Return the stored signal, if any."""
        profile = self.profile_service.get_profile(token_identifier)
        return self.signals.get_signal(profile.id)
