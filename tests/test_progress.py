"""Tests for progress classification and adaptive signals."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from fuel_engine.domain.profile import Goal
from fuel_engine.domain.progress import ProgressClassification, WeightLog
from fuel_engine.errors import ProfileNotFoundError
from fuel_engine.services.progress import (
    ProgressService,
    build_adaptive_signal,
    classify_progress,
)
from tests.conftest import TOKEN, make_meal_log

NOW = datetime(2026, 3, 15, 20, 0, tzinfo=UTC)


def _weight(user_id, weight_kg: float, days_ago: float) -> WeightLog:
    return WeightLog(
        id=uuid4(),
        user_id=user_id,
        weight_kg=weight_kg,
        logged_at=NOW - timedelta(days=days_ago),
    )


def test_lean_bulk_week_is_muscle_gain() -> None:
    result = classify_progress(
        Goal.BULK,
        weight_delta_kg=80.9 - 80.0,
        days_between_logs=7,
        calorie_delta_from_tdee=300,
        protein_adequacy_ratio=1.1,
        consistency_7d=71,
    )

    assert result.weekly_rate_kg == 0.9
    assert result.classification == ProgressClassification.MUSCLE_GAIN_LIKELY
    assert result.confidence == 87


@pytest.mark.parametrize("days", [None, 0, 3, float("nan")])
def test_short_intervals_are_insufficient(days: float | None) -> None:
    result = classify_progress(Goal.CUT, -0.5, days, -500, 1.0)

    assert result.classification == ProgressClassification.INSUFFICIENT_DATA
    assert result.confidence == 20
    assert result.weekly_rate_kg == 0


def test_small_change_is_stable() -> None:
    result = classify_progress(Goal.MAINTAIN, 0.1, 7, 50, 1.0)

    assert result.classification == ProgressClassification.STABLE
    assert result.confidence == 75


@pytest.mark.parametrize(
    ("calorie_delta", "protein_ratio", "expected", "confidence"),
    [
        (400, 0.8, ProgressClassification.FAT_GAIN_LIKELY, 87),
        (100, 0.95, ProgressClassification.MIXED_GAIN, 67),
        (150, 1.2, ProgressClassification.MUSCLE_GAIN_LIKELY, 83),
        (30, 1.2, ProgressClassification.MIXED_GAIN, 67),
        (1500, 1.0, ProgressClassification.MIXED_GAIN, 67),
    ],
)
def test_gain_labels(
    calorie_delta: float,
    protein_ratio: float,
    expected: ProgressClassification,
    confidence: int,
) -> None:
    result = classify_progress(Goal.BULK, 0.5, 7, calorie_delta, protein_ratio)

    assert result.classification == expected
    assert result.confidence == confidence


def test_fast_cut_with_low_protein_risks_muscle() -> None:
    result = classify_progress(Goal.CUT, -1.2, 7, -600, 0.9)

    assert result.classification == ProgressClassification.MUSCLE_LOSS_RISK
    assert result.weekly_rate_kg == -1.2
    assert result.confidence == 85


def test_fat_loss_confidence_depends_on_goal() -> None:
    on_cut = classify_progress(Goal.CUT, -0.5, 7, -400, 1.0)
    on_maintain = classify_progress(Goal.MAINTAIN, -0.5, 7, -400, 1.0)

    assert on_cut.classification == ProgressClassification.FAT_LOSS_LIKELY
    assert on_cut.confidence == 89
    assert on_maintain.classification == ProgressClassification.FAT_LOSS_LIKELY
    assert on_maintain.confidence == 77


def test_low_protein_loss_is_muscle_risk() -> None:
    result = classify_progress(Goal.MAINTAIN, -0.4, 7, -200, 0.7)

    assert result.classification == ProgressClassification.MUSCLE_LOSS_RISK


def test_disagreeing_signals_lower_confidence() -> None:
    result = classify_progress(Goal.BULK, 0.5, 7, -300, 1.1)

    assert result.classification == ProgressClassification.MIXED_GAIN
    assert result.confidence == 47
    assert "disagree" in result.summary


def test_confidence_is_capped() -> None:
    result = classify_progress(Goal.CUT, -2.0, 28, -400, 1.0, consistency_7d=100)

    assert result.weekly_rate_kg == -0.5
    assert result.confidence == 95


def test_build_signal_from_logs() -> None:
    user_id = uuid4()
    weights = [_weight(user_id, 80.9, 0), _weight(user_id, 80.0, 7)]
    meals = [
        make_meal_log(user_id, NOW - timedelta(days=day), calories=3000, protein=170)
        for day in range(7)
    ]

    signal = build_adaptive_signal(
        user_id, Goal.BULK, weights, meals, tdee=2759, protein_target=160, now=NOW
    )

    assert signal.classification == ProgressClassification.MUSCLE_GAIN_LIKELY
    assert signal.weekly_weight_delta_kg == 0.9
    assert signal.consistency_7d == 100
    assert signal.daily_calorie_delta_7d == 241
    assert signal.protein_adequacy_ratio_7d == 1.06
    assert signal.confidence == 93
    assert signal.last_weight_log_at == NOW


def test_single_weight_log_is_insufficient() -> None:
    user_id = uuid4()

    signal = build_adaptive_signal(
        user_id, Goal.CUT, [_weight(user_id, 80, 1)], [], 2500, 150, NOW
    )

    assert signal.classification == ProgressClassification.INSUFFICIENT_DATA
    assert signal.confidence == 20


def test_signal_without_tdee_asks_for_biometrics() -> None:
    user_id = uuid4()
    weights = [_weight(user_id, 80.9, 0), _weight(user_id, 80.0, 7)]

    signal = build_adaptive_signal(user_id, Goal.BULK, weights, [], None, 0, NOW)

    assert signal.classification == ProgressClassification.INSUFFICIENT_DATA
    assert "height" in signal.summary


def test_recompute_stores_signal_with_latest_weight(
    profile,
    profile_service,
    meal_log_repository,
    weight_log_repository,
    signal_repository,
) -> None:
    weight_log_repository.logs.extend(
        [_weight(profile.id, 80.0, 7), _weight(profile.id, 80.9, 0)]
    )
    meal_log_repository.logs.extend(
        make_meal_log(profile.id, NOW - timedelta(days=day), calories=3000, protein=170)
        for day in range(7)
    )
    service = ProgressService(
        profile_service=profile_service,
        meal_logs=meal_log_repository,
        weight_logs=weight_log_repository,
        signals=signal_repository,
    )

    signal = service.recompute(TOKEN, NOW)

    assert signal.classification == ProgressClassification.MUSCLE_GAIN_LIKELY
    assert signal.daily_calorie_delta_7d == 227
    assert signal.protein_adequacy_ratio_7d == 1.05
    assert signal_repository.signals[profile.id] == signal
    assert service.get_signal(TOKEN) == signal


def test_recompute_unknown_user(
    profile_service, meal_log_repository, weight_log_repository, signal_repository
) -> None:
    service = ProgressService(
        profile_service, meal_log_repository, weight_log_repository, signal_repository
    )

    with pytest.raises(ProfileNotFoundError):
        service.recompute("missing", NOW)
