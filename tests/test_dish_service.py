"""Tests for dish authoring."""

from dataclasses import replace
from uuid import uuid4

import pytest

from fuel_engine.domain.foods import DishComponent
from fuel_engine.domain.nutrition import FuelUnit, MacroVector, MeasureDef
from fuel_engine.errors import ProfileNotFoundError
from fuel_engine.services.dishes import DishService, compute_dish_nutrition
from tests.conftest import TOKEN


@pytest.fixture
def ingredients(food_repository):
    rice = food_repository.add_ingredient(
        name="White Rice", calories=360, protein=7, carbs=80, fats=0.6, fiber=1
    )
    chicken = food_repository.add_ingredient(
        name="Chicken Breast", calories=120, protein=23, carbs=0, fats=2.5, fiber=0
    )
    return rice, chicken


def _recipe(rice, chicken) -> list[DishComponent]:
    return [
        DishComponent(ingredient_id=rice.id, amount=200, unit=FuelUnit.GRAMS),
        DishComponent(ingredient_id=chicken.id, amount=100, unit=FuelUnit.GRAMS),
    ]


def test_compute_dish_nutrition(catalog_service, ingredients) -> None:
    nutrition = compute_dish_nutrition(catalog_service, _recipe(*ingredients), 250)

    assert nutrition.total_grams == 300
    assert nutrition.totals.calories == pytest.approx(840)
    assert nutrition.per_100g == MacroVector(280, 12.3, 53.3, 1.2, 0.7)
    assert nutrition.per_serving.serving_grams == 250
    assert nutrition.per_serving.macros.calories == 700


def test_zero_serving_size_uses_per_100g(catalog_service, ingredients) -> None:
    nutrition = compute_dish_nutrition(catalog_service, _recipe(*ingredients), 0)

    assert nutrition.per_serving.macros == nutrition.per_100g


def test_empty_recipe_is_zero(catalog_service) -> None:
    nutrition = compute_dish_nutrition(catalog_service, [], 250)

    assert nutrition.per_100g == MacroVector.zero()
    assert nutrition.per_serving.macros == MacroVector.zero()


def test_create_dish_snapshots_nutrition(
    profile, catalog_service, food_repository, ingredients, profile_service
) -> None:
    rice, chicken = ingredients
    components = [
        *_recipe(rice, chicken),
        DishComponent(ingredient_id=uuid4(), amount=50, unit=FuelUnit.GRAMS),
    ]
    service = DishService(profile_service, catalog_service)

    dish = service.create_dish(
        TOKEN,
        "Chicken and Rice",
        components,
        default_serving_grams=250,
        common_measures=[MeasureDef(unit=FuelUnit.BOWLS, grams=350)],
        is_public=True,
    )

    assert food_repository.dishes[dish.id] == dish
    assert dish.cached_per_100g.calories == 280
    assert dish.created_by == TOKEN
    assert dish.is_public
    assert len(dish.components) == 3

    food_repository.ingredients[rice.id] = replace(rice, calories=999)
    stored = catalog_service.get_item(dish.id, "dish")
    assert stored.cached_per_100g.calories == 280


def test_create_dish_requires_profile(catalog_service, profile_service) -> None:
    service = DishService(profile_service, catalog_service)

    with pytest.raises(ProfileNotFoundError):
        service.create_dish("missing", "Dish", [], default_serving_grams=100)
