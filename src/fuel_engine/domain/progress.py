"""Domain models for weight tracking and adaptive progress signals."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class ProgressClassification(StrEnum):
    """Inferred body-composition trend."""

    INSUFFICIENT_DATA = "insufficient_data"
    MUSCLE_GAIN_LIKELY = "muscle_gain_likely"
    FAT_GAIN_LIKELY = "fat_gain_likely"
    MIXED_GAIN = "mixed_gain"
    FAT_LOSS_LIKELY = "fat_loss_likely"
    MUSCLE_LOSS_RISK = "muscle_loss_risk"
    STABLE = "stable"


@dataclass(frozen=True)
class WeightLog:
    """Append-only bodyweight entry."""

    id: UUID
    user_id: UUID
    weight_kg: float
    logged_at: datetime
    source: str = "manual"


@dataclass(frozen=True)
class AdherenceSummary:
    """Rolling logging consistency and average intake."""

    consistency_7d: int
    consistency_28d: int
    logged_days_7d: int
    logged_days_28d: int
    avg_daily_calories_7d: float
    avg_daily_protein_7d: float


@dataclass(frozen=True)
class ProgressAssessment:
    """Classifier output."""

    classification: ProgressClassification
    weekly_rate_kg: float
    confidence: int
    summary: str


@dataclass(frozen=True)
class AdaptiveSignal:
    """Per-user cache of the latest adherence and progress computation.

    Replaced wholesale on every recomputation; it can always be rebuilt
    from the meal and weight logs.
    """

    user_id: UUID
    consistency_7d: int
    consistency_28d: int
    avg_daily_calories_7d: float
    avg_daily_protein_7d: float
    weekly_weight_delta_kg: float
    daily_calorie_delta_7d: float
    protein_adequacy_ratio_7d: float
    classification: ProgressClassification
    confidence: int
    summary: str
    computed_at: datetime
    last_weight_log_at: datetime | None = None
