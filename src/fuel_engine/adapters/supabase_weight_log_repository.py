"""Supabase repository for bodyweight logs."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from fuel_engine.adapters.supabase_rows import parse_required_timestamp
from fuel_engine.domain.progress import WeightLog
from fuel_engine.services.weights import WeightLogRepository


@dataclass
class SupabaseWeightLogRepository(WeightLogRepository):
    """Supabase implementation for weight logs."""

    client: Client

    def create_weight_log(
        self, user_id: UUID, weight_kg: float, logged_at: datetime, source: str
    ) -> WeightLog:
        """Append a weight log row and return it."""
        response = (
            self.client.table("weight_logs")
            .insert(
                {
                    "user_id": str(user_id),
                    "weight_kg": weight_kg,
                    "logged_at": logged_at.isoformat(),
                    "source": source,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create weight log")
        return _parse_weight_log(response.data[0])

    def list_recent_weight_logs(self, user_id: UUID, limit: int) -> list[WeightLog]:
        """Return the most recent weight logs, newest first."""
        response = (
            self.client.table("weight_logs")
            .select("id, user_id, weight_kg, logged_at, source")
            .eq("user_id", str(user_id))
            .order("logged_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_weight_log(row) for row in response.data or []]


def _parse_weight_log(row: dict[str, object]) -> WeightLog:
    return WeightLog(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        weight_kg=float(row["weight_kg"]),
        logged_at=parse_required_timestamp(row["logged_at"]),
        source=str(row.get("source") or "manual"),
    )
