"""Services for the shared ingredient and dish catalogue."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from fuel_engine.domain.admin import AuthorizationContext
from fuel_engine.domain.catalog import STARTER_INGREDIENTS, IngredientSeed
from fuel_engine.domain.foods import Dish, FoodItem, Ingredient
from fuel_engine.domain.meals import ItemType
from fuel_engine.domain.nutrition import MacroVector
from fuel_engine.errors import AuthorizationError
from fuel_engine.services.audit import AuditService
from fuel_engine.services.macros import per_100g_view

_logger = logging.getLogger(__name__)


class FoodRepository(Protocol):
    """Persistence interface for ingredients and dishes."""

    def get_ingredient(self, ingredient_id: UUID) -> Ingredient | None:
        """Return an ingredient by id, if present."""

    def get_dish(self, dish_id: UUID) -> Dish | None:
        """Return a dish by id, if present."""

    def find_ingredient_by_name(self, name: str) -> Ingredient | None:
        """Return an ingredient with this exact name, ignoring case."""

    def create_ingredient(self, seed: IngredientSeed) -> Ingredient:
        """Create an ingredient and return it."""

    def create_dish(self, payload: dict[str, object]) -> Dish:
        """Create a dish and return it."""


@dataclass(frozen=True)
class SeedResult:
    """Counts from a bulk ingredient import."""

    created: list[Ingredient]
    skipped_names: list[str]


@dataclass
class FoodCatalogService:
    """Application service for catalogue lookups and seeding."""

    repository: FoodRepository
    audit_service: AuditService

    def get_item(self, item_id: UUID, item_type: ItemType) -> FoodItem | None:
        """Return the referenced ingredient or dish; None when missing."""
        if item_type == "ingredient":
            return self.repository.get_ingredient(item_id)
        return self.repository.get_dish(item_id)

    def seed_ingredients(
        self,
        auth: AuthorizationContext,
        ingredients: Sequence[IngredientSeed] = STARTER_INGREDIENTS,
    ) -> SeedResult:
        """Import ingredients, skipping names that already exist.

        Existing rows are never overwritten.
        """
        if not auth.can_seed_foods:
            raise AuthorizationError(f"{auth.actor} may not seed ingredients")

        created: list[Ingredient] = []
        skipped: list[str] = []
        for seed in ingredients:
            if self.repository.find_ingredient_by_name(seed.name):
                skipped.append(seed.name)
                continue
            created.append(self.repository.create_ingredient(seed))

        self.audit_service.record_event(
            action="ingredients.seed",
            actor=auth.actor,
            details=f"created={len(created)} skipped={len(skipped)}",
        )
        _logger.info(
            "Ingredient seed by %s: created=%s skipped=%s",
            auth.actor,
            len(created),
            len(skipped),
        )
        return SeedResult(created=created, skipped_names=skipped)

    @staticmethod
    def ingredient_per_100g(ingredient: Ingredient) -> MacroVector:
        """Return display macros per 100 g regardless of the stored basis."""
        return per_100g_view(ingredient)
