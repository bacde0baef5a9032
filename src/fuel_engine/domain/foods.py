"""Domain models for ingredients and composite dishes.

Both variants carry a ``kind`` tag so resolvers can switch on it once
instead of relying on inheritance.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal
from uuid import UUID

from fuel_engine.domain.nutrition import (
    FuelUnit,
    MacroVector,
    MeasureDef,
    NutritionBasis,
)

IngredientCategory = Literal["grain", "legume", "meat", "vegetable", "other"]


@dataclass(frozen=True)
class Ingredient:
    """Atomic food with macros stored directly."""

    id: UUID
    name: str
    calories: float
    protein: float
    carbs: float
    fats: float
    fiber: float
    category: IngredientCategory = "other"
    is_local: bool = False
    nutrition_basis: NutritionBasis = NutritionBasis.PER_100G
    serving_size_grams: float | None = None
    density_g_per_ml: float | None = None
    common_measures: tuple[MeasureDef, ...] = ()
    local_name: str | None = None
    serving_label: str | None = None
    kind: Literal["ingredient"] = field(default="ingredient", init=False)

    @property
    def stored_macros(self) -> MacroVector:
        """Macros as stored, in the ingredient's own basis."""
        return MacroVector(
            calories=self.calories,
            protein=self.protein,
            carbs=self.carbs,
            fats=self.fats,
            fiber=self.fiber,
        )


@dataclass(frozen=True)
class DishComponent:
    """An ingredient reference inside a dish recipe."""

    ingredient_id: UUID
    amount: float
    unit: FuelUnit


@dataclass(frozen=True)
class ServingMacros:
    """Cached macros for one default serving of a dish."""

    macros: MacroVector
    serving_grams: float


@dataclass(frozen=True)
class Dish:
    """Composite food whose macros are cached when the dish is authored.

    ``cached_per_100g`` and ``cached_per_serving`` are snapshots taken at
    creation time. They are not refreshed when the underlying ingredients
    change, so meals logged against the dish keep their historical values.
    """

    id: UUID
    name: str
    components: tuple[DishComponent, ...]
    default_serving_grams: float
    cached_per_100g: MacroVector
    cached_per_serving: ServingMacros | None = None
    description: str | None = None
    density_g_per_ml: float | None = None
    common_measures: tuple[MeasureDef, ...] = ()
    is_public: bool = False
    created_by: str | None = None
    created_at: datetime | None = None
    kind: Literal["dish"] = field(default="dish", init=False)


FoodItem = Ingredient | Dish
