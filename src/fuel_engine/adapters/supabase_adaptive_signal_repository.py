"""Supabase repository for cached adaptive signals."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from fuel_engine.adapters.supabase_rows import (
    parse_required_timestamp,
    parse_timestamp,
)
from fuel_engine.domain.progress import AdaptiveSignal, ProgressClassification
from fuel_engine.services.progress import AdaptiveSignalRepository


@dataclass
class SupabaseAdaptiveSignalRepository(AdaptiveSignalRepository):
    """Supabase implementation keeping one signal row per user."""

    client: Client

    def get_signal(self, user_id: UUID) -> AdaptiveSignal | None:
        """Return the stored signal for a user."""
        response = (
            self.client.table("nutrition_adaptive_signals")
            .select("*")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_signal(response.data[0])

    def upsert_signal(self, signal: AdaptiveSignal) -> None:
        """Replace the user's signal row."""
        last_weight = signal.last_weight_log_at
        self.client.table("nutrition_adaptive_signals").upsert(
            {
                "user_id": str(signal.user_id),
                "consistency_7d": signal.consistency_7d,
                "consistency_28d": signal.consistency_28d,
                "avg_daily_calories_7d": signal.avg_daily_calories_7d,
                "avg_daily_protein_7d": signal.avg_daily_protein_7d,
                "weekly_weight_delta_kg": signal.weekly_weight_delta_kg,
                "daily_calorie_delta_7d": signal.daily_calorie_delta_7d,
                "protein_adequacy_ratio_7d": signal.protein_adequacy_ratio_7d,
                "classification": str(signal.classification),
                "confidence": signal.confidence,
                "summary": signal.summary,
                "computed_at": signal.computed_at.isoformat(),
                "last_weight_log_at": last_weight.isoformat() if last_weight else None,
            },
            on_conflict="user_id",
        ).execute()


def _parse_signal(row: dict[str, object]) -> AdaptiveSignal:
    return AdaptiveSignal(
        user_id=UUID(str(row["user_id"])),
        consistency_7d=int(row.get("consistency_7d") or 0),
        consistency_28d=int(row.get("consistency_28d") or 0),
        avg_daily_calories_7d=float(row.get("avg_daily_calories_7d") or 0.0),
        avg_daily_protein_7d=float(row.get("avg_daily_protein_7d") or 0.0),
        weekly_weight_delta_kg=float(row.get("weekly_weight_delta_kg") or 0.0),
        daily_calorie_delta_7d=float(row.get("daily_calorie_delta_7d") or 0.0),
        protein_adequacy_ratio_7d=float(row.get("protein_adequacy_ratio_7d") or 0.0),
        classification=ProgressClassification(
            row.get("classification") or ProgressClassification.INSUFFICIENT_DATA
        ),
        confidence=int(row.get("confidence") or 0),
        summary=str(row.get("summary") or ""),
        computed_at=parse_required_timestamp(row["computed_at"]),
        last_weight_log_at=parse_timestamp(row.get("last_weight_log_at")),
    )
