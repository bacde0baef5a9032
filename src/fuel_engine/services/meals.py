"""Meal logging service."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from fuel_engine.domain.meals import (
    MealComponent,
    MealLog,
    MealLogSummary,
    MealTotals,
    NormalizedComponent,
)
from fuel_engine.services.foods import FoodCatalogService
from fuel_engine.services.macros import resolve_food, round1, round_macros, sum_macros
from fuel_engine.services.users import ProfileService

_logger = logging.getLogger(__name__)


class MealLogRepository(Protocol):
    """Persistence interface for meal logs."""

    def create_meal_log(  # noqa: PLR0913
        self,
        user_id: UUID,
        name: str,
        logged_at: datetime,
        components: Sequence[MealComponent],
        normalized_components: Sequence[NormalizedComponent],
        totals: MealTotals,
        goal_context: str | None,
    ) -> MealLog:
        """Create a meal log and return it."""

    def list_meal_logs(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealLog]:
        """Return meal logs within a time range."""

    def list_recent_meal_logs(self, user_id: UUID, limit: int) -> list[MealLog]:
        """Return recent meal logs, newest first."""


@dataclass
class MealLogService:
    """Service that resolves components and persists meal logs.

    Normalized components and totals are computed once at write time and
    stored with the log; reads never re-resolve food references.
    """

    profile_service: ProfileService
    catalog: FoodCatalogService
    repository: MealLogRepository

    def compute_summary(self, components: Sequence[MealComponent]) -> MealLogSummary:
        """Compute totals and normalized components without persisting."""
        normalized, skipped = self._normalize(components)
        return MealLogSummary(
            meal_id=None,
            totals=_sum_totals(normalized),
            items=normalized,
            skipped_item_ids=skipped,
        )

    def log_meal(  # noqa: PLR0913
        self,
        token_identifier: str,
        name: str,
        logged_at: datetime,
        components: Sequence[MealComponent],
        goal_context: str | None = None,
    ) -> MealLogSummary:
        """Resolve macros for each component and persist the meal log."""
        profile = self.profile_service.get_profile(token_identifier)
        normalized, skipped = self._normalize(components)
        totals = _sum_totals(normalized)
        meal = self.repository.create_meal_log(
            user_id=profile.id,
            name=name,
            logged_at=logged_at,
            components=tuple(components),
            normalized_components=tuple(normalized),
            totals=totals,
            goal_context=goal_context,
        )
        return MealLogSummary(
            meal_id=meal.id,
            totals=totals,
            items=normalized,
            skipped_item_ids=skipped,
        )

    def list_meals(self, token_identifier: str, limit: int = 20) -> list[MealLog]:
        """Return the user's most recent meals, or nothing for unknown users."""
        profile = self.profile_service.find_profile(token_identifier)
        if profile is None:
            return []
        return self.repository.list_recent_meal_logs(profile.id, limit)

    def _normalize(
        self, components: Sequence[MealComponent]
    ) -> tuple[list[NormalizedComponent], list[UUID]]:
        normalized: list[NormalizedComponent] = []
        skipped: list[UUID] = []
        for component in components:
            item = self.catalog.get_item(component.item_id, component.item_type)
            portion = resolve_food(item, component.amount, component.unit)
            if item is None or portion is None:
                _logger.warning(
                    "Meal component skipped: missing %s %s",
                    component.item_type,
                    component.item_id,
                )
                skipped.append(component.item_id)
                continue
            normalized.append(
                NormalizedComponent(
                    item_id=component.item_id,
                    item_type=component.item_type,
                    name=item.name,
                    amount=component.amount,
                    unit=component.unit,
                    grams=round1(portion.grams),
                    macros=round_macros(portion.macros),
                )
            )
        return normalized, skipped


def _sum_totals(items: Sequence[NormalizedComponent]) -> MealTotals:
    # totals add the stored, already rounded component values
    return MealTotals(
        macros=round_macros(sum_macros(item.macros for item in items)),
        total_grams=round1(sum(item.grams for item in items)),
    )
