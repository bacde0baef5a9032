"""Domain models for meal logging."""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal
from uuid import UUID

from fuel_engine.domain.nutrition import FuelUnit, MacroVector

ComponentType = Literal["base", "topping", "side"]
ItemType = Literal["ingredient", "dish"]


@dataclass(frozen=True)
class MealComponent:
    """A food reference as entered by the user."""

    type: ComponentType
    item_id: UUID
    item_type: ItemType
    amount: float
    unit: FuelUnit


@dataclass(frozen=True)
class NormalizedComponent:
    """Resolved component stored with the meal at write time."""

    item_id: UUID
    item_type: ItemType
    name: str
    amount: float
    unit: FuelUnit
    grams: float
    macros: MacroVector


@dataclass(frozen=True)
class MealTotals:
    """Rounded meal totals."""

    macros: MacroVector
    total_grams: float


@dataclass(frozen=True)
class MealLog:
    """Immutable record of a logged meal."""

    id: UUID
    user_id: UUID
    name: str
    logged_at: datetime
    components: tuple[MealComponent, ...]
    normalized_components: tuple[NormalizedComponent, ...]
    totals: MealTotals
    goal_context: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class MealLogSummary:
    """Summary of a logged or previewed meal."""

    meal_id: UUID | None
    totals: MealTotals
    items: list[NormalizedComponent]
    skipped_item_ids: list[UUID]
