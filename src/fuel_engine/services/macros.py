"""Macro resolution and aggregation for ingredients and dishes."""

import math
from collections.abc import Iterable

from fuel_engine.domain.foods import Dish, FoodItem, Ingredient
from fuel_engine.domain.nutrition import (
    FuelUnit,
    MacroVector,
    NutritionBasis,
    ResolvedPortion,
)
from fuel_engine.services.units import to_grams

_BASE_GRAMS = 100.0


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounded up."""
    return math.floor(value + 0.5)


def round1(value: float) -> float:
    """Round to one decimal place, halves rounded up."""
    return math.floor(value * 10 + 0.5) / 10


def round_macros(vector: MacroVector) -> MacroVector:
    """Round every field of a vector to one decimal place."""
    return MacroVector(
        calories=round1(vector.calories),
        protein=round1(vector.protein),
        carbs=round1(vector.carbs),
        fats=round1(vector.fats),
        fiber=round1(vector.fiber),
    )


def resolve_ingredient(
    ingredient: Ingredient, amount: float, unit: FuelUnit | str
) -> ResolvedPortion:
    """Return grams and absolute macros for an ingredient portion."""
    grams = to_grams(
        amount,
        unit,
        density=ingredient.density_g_per_ml,
        serving_size_grams=ingredient.serving_size_grams,
        measures=ingredient.common_measures,
    )
    return ResolvedPortion(
        grams=grams,
        macros=ingredient.stored_macros.scaled(grams / _basis_divisor(ingredient)),
    )


def resolve_dish(dish: Dish, amount: float, unit: FuelUnit | str) -> ResolvedPortion:
    """Return grams and absolute macros for a dish portion.

    Uses the dish's cached per-100g snapshot; ingredients are not re-read.
    """
    grams = to_grams(
        amount,
        unit,
        density=dish.density_g_per_ml,
        serving_size_grams=dish.default_serving_grams,
        measures=dish.common_measures,
    )
    return ResolvedPortion(
        grams=grams,
        macros=dish.cached_per_100g.scaled(grams / _BASE_GRAMS),
    )


def resolve_food(
    item: FoodItem | None, amount: float, unit: FuelUnit | str
) -> ResolvedPortion | None:
    """Resolve any food item; unknown references resolve to None."""
    if item is None:
        return None
    if item.kind == "ingredient":
        return resolve_ingredient(item, amount, unit)
    return resolve_dish(item, amount, unit)


def sum_macros(vectors: Iterable[MacroVector]) -> MacroVector:
    """Componentwise sum of macro vectors."""
    total = MacroVector.zero()
    for vector in vectors:
        total = total + vector
    return total


def per_100g(vector: MacroVector, total_grams: float) -> MacroVector:
    """Re-derive per-100g figures from pooled totals."""
    if total_grams <= 0:
        return MacroVector.zero()
    return round_macros(vector.scaled(_BASE_GRAMS / total_grams))


def per_100g_view(ingredient: Ingredient) -> MacroVector:
    """Express an ingredient's stored macros per 100 g for display."""
    if (
        ingredient.nutrition_basis == NutritionBasis.PER_SERVING
        and ingredient.serving_size_grams is not None
        and ingredient.serving_size_grams > 0
    ):
        return round_macros(
            ingredient.stored_macros.scaled(
                _BASE_GRAMS / ingredient.serving_size_grams
            )
        )
    return ingredient.stored_macros


def _basis_divisor(ingredient: Ingredient) -> float:
    if ingredient.nutrition_basis == NutritionBasis.PER_SERVING:
        serving = ingredient.serving_size_grams
        if serving is not None and serving > 0:
            return serving
    return _BASE_GRAMS
