"""Supabase repository for meal logs."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from fuel_engine.adapters.supabase_rows import (
    macros_from_json,
    macros_to_json,
    parse_required_timestamp,
    parse_timestamp,
)
from fuel_engine.domain.meals import (
    MealComponent,
    MealLog,
    MealTotals,
    NormalizedComponent,
)
from fuel_engine.domain.nutrition import FuelUnit, MacroVector
from fuel_engine.services.meals import MealLogRepository

_COLUMNS = (
    "id, user_id, name, logged_at, components, normalized_components, "
    "total_calories, total_protein, total_carbs, total_fats, total_fiber, "
    "total_grams, goal_context, created_at"
)


@dataclass
class SupabaseMealLogRepository(MealLogRepository):
    """Supabase implementation for meal logs."""

    client: Client

    def create_meal_log(  # noqa: PLR0913
        self,
        user_id: UUID,
        name: str,
        logged_at: datetime,
        components: tuple[MealComponent, ...],
        normalized_components: tuple[NormalizedComponent, ...],
        totals: MealTotals,
        goal_context: str | None,
    ) -> MealLog:
        """Create a meal log row and return it."""
        response = (
            self.client.table("meal_logs")
            .insert(
                {
                    "user_id": str(user_id),
                    "name": name,
                    "logged_at": logged_at.isoformat(),
                    "components": [_component_row(c) for c in components],
                    "normalized_components": [
                        _normalized_row(c) for c in normalized_components
                    ],
                    "total_calories": totals.macros.calories,
                    "total_protein": totals.macros.protein,
                    "total_carbs": totals.macros.carbs,
                    "total_fats": totals.macros.fats,
                    "total_fiber": totals.macros.fiber,
                    "total_grams": totals.total_grams,
                    "goal_context": goal_context,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal log")
        return _parse_meal_log(response.data[0])

    def list_meal_logs(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealLog]:
        """Return meal logs with start <= logged_at <= end."""
        response = (
            self.client.table("meal_logs")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("logged_at", start.isoformat())
            .lte("logged_at", end.isoformat())
            .order("logged_at", desc=False)
            .execute()
        )
        return [_parse_meal_log(row) for row in response.data or []]

    def list_recent_meal_logs(self, user_id: UUID, limit: int) -> list[MealLog]:
        """Return recent meal logs, newest first."""
        response = (
            self.client.table("meal_logs")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .order("logged_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_meal_log(row) for row in response.data or []]


def _component_row(component: MealComponent) -> dict[str, object]:
    return {
        "type": component.type,
        "item_id": str(component.item_id),
        "item_type": component.item_type,
        "amount": component.amount,
        "unit": str(component.unit),
    }


def _normalized_row(component: NormalizedComponent) -> dict[str, object]:
    return {
        "item_id": str(component.item_id),
        "item_type": component.item_type,
        "name": component.name,
        "amount": component.amount,
        "unit": str(component.unit),
        "grams": component.grams,
        "macros": macros_to_json(component.macros),
    }


def _parse_meal_log(row: dict[str, object]) -> MealLog:
    return MealLog(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name", "")),
        logged_at=parse_required_timestamp(row["logged_at"]),
        components=tuple(
            MealComponent(
                type=entry.get("type", "base"),
                item_id=UUID(str(entry["item_id"])),
                item_type=entry["item_type"],
                amount=float(entry["amount"]),
                unit=FuelUnit(entry["unit"]),
            )
            for entry in row.get("components") or []
        ),
        normalized_components=tuple(
            NormalizedComponent(
                item_id=UUID(str(entry["item_id"])),
                item_type=entry["item_type"],
                name=str(entry.get("name", "")),
                amount=float(entry["amount"]),
                unit=FuelUnit(entry["unit"]),
                grams=float(entry.get("grams", 0.0)),
                macros=macros_from_json(entry.get("macros")),
            )
            for entry in row.get("normalized_components") or []
        ),
        totals=MealTotals(
            macros=MacroVector(
                calories=float(row.get("total_calories") or 0.0),
                protein=float(row.get("total_protein") or 0.0),
                carbs=float(row.get("total_carbs") or 0.0),
                fats=float(row.get("total_fats") or 0.0),
                fiber=float(row.get("total_fiber") or 0.0),
            ),
            total_grams=float(row.get("total_grams") or 0.0),
        ),
        goal_context=row.get("goal_context"),
        created_at=parse_timestamp(row.get("created_at")),
    )
