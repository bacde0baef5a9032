"""Tests for the food catalogue service."""

import pytest

from fuel_engine.domain.admin import AuthorizationContext
from fuel_engine.domain.catalog import STARTER_INGREDIENTS, IngredientSeed
from fuel_engine.domain.nutrition import NutritionBasis
from fuel_engine.errors import AuthorizationError


def test_seed_imports_starter_catalogue(
    catalog_service, food_repository, audit_repository
) -> None:
    result = catalog_service.seed_ingredients(AuthorizationContext.admin())

    assert len(result.created) == len(STARTER_INGREDIENTS)
    assert result.skipped_names == []
    teff = food_repository.find_ingredient_by_name("teff flour")
    assert teff is not None
    assert teff.is_local
    assert audit_repository.events[0].action == "ingredients.seed"
    assert audit_repository.events[0].actor == "admin"


def test_seed_skips_existing_names(catalog_service, food_repository) -> None:
    food_repository.add_ingredient(
        name="WHITE RICE (RAW)", calories=1, protein=1, carbs=1, fats=1, fiber=1
    )
    extra = IngredientSeed("Kocho", 210, 1, 50, 0.3, 3, "grain", True)

    result = catalog_service.seed_ingredients(
        AuthorizationContext.admin(), [*STARTER_INGREDIENTS, extra]
    )

    assert result.skipped_names == ["White Rice (Raw)"]
    assert len(result.created) == len(STARTER_INGREDIENTS)
    existing = food_repository.find_ingredient_by_name("white rice (raw)")
    assert existing.calories == 1


def test_seed_requires_capability(catalog_service, audit_repository) -> None:
    with pytest.raises(AuthorizationError):
        catalog_service.seed_ingredients(AuthorizationContext(actor="user-1"))
    assert audit_repository.events == []


def test_get_item_dispatches_on_type(catalog_service, food_repository) -> None:
    ingredient = food_repository.add_ingredient(
        name="Teff", calories=366, protein=12.2, carbs=70.7, fats=3.7, fiber=12.2
    )

    assert catalog_service.get_item(ingredient.id, "ingredient") == ingredient
    assert catalog_service.get_item(ingredient.id, "dish") is None


def test_ingredient_per_100g(catalog_service, food_repository) -> None:
    bar = food_repository.add_ingredient(
        name="Protein Bar",
        calories=200,
        protein=20,
        carbs=22,
        fats=6,
        fiber=4,
        nutrition_basis=NutritionBasis.PER_SERVING,
        serving_size_grams=40,
    )

    view = catalog_service.ingredient_per_100g(bar)

    assert view.calories == 500
    assert view.protein == 50
