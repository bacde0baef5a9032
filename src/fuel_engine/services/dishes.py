"""Composite dish authoring."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime

from fuel_engine.domain.foods import Dish, DishComponent, ServingMacros
from fuel_engine.domain.nutrition import MacroVector, MeasureDef
from fuel_engine.services.foods import FoodCatalogService
from fuel_engine.services.macros import (
    per_100g,
    resolve_ingredient,
    round_macros,
    sum_macros,
)
from fuel_engine.services.users import ProfileService

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DishNutrition:
    """Macros computed for a recipe at authoring time."""

    totals: MacroVector
    total_grams: float
    per_100g: MacroVector
    per_serving: ServingMacros


def compute_dish_nutrition(
    catalog: FoodCatalogService,
    components: Sequence[DishComponent],
    default_serving_grams: float,
) -> DishNutrition:
    """Resolve a recipe against the catalogue and derive cached snapshots.

    Components pointing at missing ingredients are left out of both the
    macro and gram totals.
    """
    vectors: list[MacroVector] = []
    total_grams = 0.0
    for component in components:
        ingredient = catalog.repository.get_ingredient(component.ingredient_id)
        if ingredient is None:
            _logger.warning(
                "Dish component skipped: missing ingredient %s",
                component.ingredient_id,
            )
            continue
        portion = resolve_ingredient(ingredient, component.amount, component.unit)
        vectors.append(portion.macros)
        total_grams += portion.grams

    totals = sum_macros(vectors)
    per100 = per_100g(totals, total_grams)
    serving_ratio = default_serving_grams / 100 if default_serving_grams > 0 else 1
    return DishNutrition(
        totals=totals,
        total_grams=total_grams,
        per_100g=per100,
        per_serving=ServingMacros(
            macros=round_macros(per100.scaled(serving_ratio)),
            serving_grams=default_serving_grams,
        ),
    )


@dataclass
class DishService:
    """Create dishes with cached nutrition snapshots."""

    profile_service: ProfileService
    catalog: FoodCatalogService

    def create_dish(  # noqa: PLR0913
        self,
        token_identifier: str,
        name: str,
        components: Sequence[DishComponent],
        default_serving_grams: float,
        description: str | None = None,
        common_measures: Sequence[MeasureDef] = (),
        is_public: bool = False,
    ) -> Dish:
        """Author a dish; its macros are snapshotted once here."""
        profile = self.profile_service.get_profile(token_identifier)
        nutrition = compute_dish_nutrition(
            self.catalog, components, default_serving_grams
        )
        now = datetime.now(tz=UTC)
        return self.catalog.repository.create_dish(
            {
                "name": name,
                "description": description,
                "components": tuple(components),
                "default_serving_grams": default_serving_grams,
                "common_measures": tuple(common_measures),
                "cached_per_100g": nutrition.per_100g,
                "cached_per_serving": nutrition.per_serving,
                "is_public": is_public,
                "created_by": profile.token_identifier,
                "created_at": now,
            }
        )
