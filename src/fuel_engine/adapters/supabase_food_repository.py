"""Supabase repository for the ingredient and dish catalogue."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from fuel_engine.adapters.supabase_rows import (
    macros_from_json,
    macros_to_json,
    measures_from_json,
    measures_to_json,
    optional_float,
    parse_timestamp,
)
from fuel_engine.domain.catalog import IngredientSeed
from fuel_engine.domain.foods import Dish, DishComponent, Ingredient, ServingMacros
from fuel_engine.domain.nutrition import FuelUnit, NutritionBasis
from fuel_engine.services.foods import FoodRepository

_INGREDIENT_COLUMNS = (
    "id, name, calories, protein, carbs, fats, fiber, category, is_local, "
    "nutrition_basis, serving_size_grams, density_g_per_ml, common_measures, "
    "local_name, serving_label"
)
_DISH_COLUMNS = (
    "id, name, description, components, default_serving_grams, "
    "density_g_per_ml, common_measures, cached_per_100g, cached_per_serving, "
    "is_public, created_by, created_at"
)


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase implementation for ingredients and dishes."""

    client: Client

    def get_ingredient(self, ingredient_id: UUID) -> Ingredient | None:
        """Return an ingredient by id."""
        response = (
            self.client.table("ingredients")
            .select(_INGREDIENT_COLUMNS)
            .eq("id", str(ingredient_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_ingredient(response.data[0])

    def get_dish(self, dish_id: UUID) -> Dish | None:
        """Return a dish by id."""
        response = (
            self.client.table("dishes")
            .select(_DISH_COLUMNS)
            .eq("id", str(dish_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_dish(response.data[0])

    def find_ingredient_by_name(self, name: str) -> Ingredient | None:
        """Return an ingredient whose name matches, ignoring case."""
        response = (
            self.client.table("ingredients")
            .select(_INGREDIENT_COLUMNS)
            .ilike("name", name)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_ingredient(response.data[0])

    def create_ingredient(self, seed: IngredientSeed) -> Ingredient:
        """Create an ingredient row and return it."""
        response = (
            self.client.table("ingredients")
            .insert(
                {
                    "name": seed.name,
                    "calories": seed.calories,
                    "protein": seed.protein,
                    "carbs": seed.carbs,
                    "fats": seed.fats,
                    "fiber": seed.fiber,
                    "category": seed.category,
                    "is_local": seed.is_local,
                    "local_name": seed.local_name,
                    "nutrition_basis": str(NutritionBasis.PER_100G),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create ingredient")
        return _parse_ingredient(response.data[0])

    def create_dish(self, payload: dict[str, object]) -> Dish:
        """Create a dish row and return it."""
        per_serving = payload.get("cached_per_serving")
        created_at = payload.get("created_at")
        row = {
            "name": payload["name"],
            "description": payload.get("description"),
            "components": [
                {
                    "ingredient_id": str(component.ingredient_id),
                    "amount": component.amount,
                    "unit": str(component.unit),
                }
                for component in payload.get("components", ())
            ],
            "default_serving_grams": payload["default_serving_grams"],
            "density_g_per_ml": payload.get("density_g_per_ml"),
            "common_measures": measures_to_json(payload.get("common_measures", ())),
            "cached_per_100g": macros_to_json(payload["cached_per_100g"]),
            "cached_per_serving": (
                {
                    "macros": macros_to_json(per_serving.macros),
                    "serving_grams": per_serving.serving_grams,
                }
                if isinstance(per_serving, ServingMacros)
                else None
            ),
            "is_public": bool(payload.get("is_public", False)),
            "created_by": payload.get("created_by"),
            "created_at": created_at.isoformat() if created_at else None,
        }
        response = self.client.table("dishes").insert(row).execute()
        if not response.data:
            raise RuntimeError("Failed to create dish")
        return _parse_dish(response.data[0])


def _parse_ingredient(row: dict[str, object]) -> Ingredient:
    return Ingredient(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        calories=float(row.get("calories", 0.0)),
        protein=float(row.get("protein", 0.0)),
        carbs=float(row.get("carbs", 0.0)),
        fats=float(row.get("fats", 0.0)),
        fiber=float(row.get("fiber") or 0.0),
        category=row.get("category") or "other",
        is_local=bool(row.get("is_local", False)),
        nutrition_basis=NutritionBasis(
            row.get("nutrition_basis") or NutritionBasis.PER_100G
        ),
        serving_size_grams=optional_float(row.get("serving_size_grams")),
        density_g_per_ml=optional_float(row.get("density_g_per_ml")),
        common_measures=measures_from_json(row.get("common_measures")),
        local_name=row.get("local_name"),
        serving_label=row.get("serving_label"),
    )


def _parse_dish(row: dict[str, object]) -> Dish:
    per_serving = row.get("cached_per_serving")
    return Dish(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        components=tuple(
            DishComponent(
                ingredient_id=UUID(str(component["ingredient_id"])),
                amount=float(component["amount"]),
                unit=FuelUnit(component["unit"]),
            )
            for component in row.get("components") or []
        ),
        default_serving_grams=float(row.get("default_serving_grams", 0.0)),
        cached_per_100g=macros_from_json(row.get("cached_per_100g")),
        cached_per_serving=(
            ServingMacros(
                macros=macros_from_json(per_serving.get("macros")),
                serving_grams=float(per_serving.get("serving_grams", 0.0)),
            )
            if isinstance(per_serving, dict)
            else None
        ),
        description=row.get("description"),
        density_g_per_ml=optional_float(row.get("density_g_per_ml")),
        common_measures=measures_from_json(row.get("common_measures")),
        is_public=bool(row.get("is_public", False)),
        created_by=row.get("created_by"),
        created_at=parse_timestamp(row.get("created_at")),
    )
