"""Dashboard snapshot combining the stored signal with live adherence."""

from dataclasses import dataclass
from datetime import datetime, timedelta

from fuel_engine.domain.progress import ProgressClassification
from fuel_engine.services.adherence import SHORT_WINDOW_DAYS, compute_adherence
from fuel_engine.services.meals import MealLogRepository
from fuel_engine.services.progress import AdaptiveSignalRepository
from fuel_engine.services.users import ProfileService


@dataclass(frozen=True)
class DashboardSnapshot:
    """Values rendered by the dashboard badge and nutrition cards."""

    user_name: str
    classification: ProgressClassification
    weekly_weight_delta_kg: float
    summary: str | None
    confidence: int
    last_weight_log_at: datetime | None
    protein_adequacy_ratio_7d: float
    daily_calorie_delta_7d: float
    consistency_7d: int
    meal_days_logged_7d: int
    snapshot_at: datetime


@dataclass
class DashboardService:
    """Build dashboard snapshots."""

    profile_service: ProfileService
    signals: AdaptiveSignalRepository
    meal_logs: MealLogRepository

    def get_snapshot(
        self, token_identifier: str, now: datetime
    ) -> DashboardSnapshot | None:
        """Return the snapshot, or None when the user has no profile."""
        profile = self.profile_service.find_profile(token_identifier)
        if profile is None:
            return None
        signal = self.signals.get_signal(profile.id)
        recent = self.meal_logs.list_meal_logs(
            profile.id, now - timedelta(days=SHORT_WINDOW_DAYS), now
        )
        adherence = compute_adherence(recent, now, profile.timezone)
        if signal is None:
            return DashboardSnapshot(
                user_name=profile.name,
                classification=ProgressClassification.INSUFFICIENT_DATA,
                weekly_weight_delta_kg=0.0,
                summary=None,
                confidence=0,
                last_weight_log_at=None,
                protein_adequacy_ratio_7d=0.0,
                daily_calorie_delta_7d=0.0,
                consistency_7d=adherence.consistency_7d,
                meal_days_logged_7d=adherence.logged_days_7d,
                snapshot_at=now,
            )
        return DashboardSnapshot(
            user_name=profile.name,
            classification=signal.classification,
            weekly_weight_delta_kg=signal.weekly_weight_delta_kg,
            summary=signal.summary,
            confidence=signal.confidence,
            last_weight_log_at=signal.last_weight_log_at,
            protein_adequacy_ratio_7d=signal.protein_adequacy_ratio_7d,
            daily_calorie_delta_7d=signal.daily_calorie_delta_7d,
            consistency_7d=adherence.consistency_7d,
            meal_days_logged_7d=adherence.logged_days_7d,
            snapshot_at=now,
        )
