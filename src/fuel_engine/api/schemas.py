"""Pydantic models for API request payloads."""

from datetime import UTC, datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from fuel_engine.domain.catalog import IngredientSeed
from fuel_engine.domain.foods import DishComponent, IngredientCategory
from fuel_engine.domain.meals import ComponentType, ItemType, MealComponent
from fuel_engine.domain.nutrition import FuelUnit, MeasureDef
from fuel_engine.domain.profile import (
    ActivityLevel,
    Biometrics,
    ExperienceLevel,
    Gender,
    Goal,
)


def as_utc(value: datetime | None) -> datetime | None:
    """Read timestamps without an offset as UTC and convert the rest to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class BiometricsPayload(BaseModel):
    """Biometrics submitted with a profile sync."""

    weight_kg: float = Field(gt=0)
    height_cm: float = Field(gt=0)
    age: int = Field(gt=0)
    gender: Gender
    activity_level: ActivityLevel
    body_fat_percent: float | None = Field(default=None, ge=0, lt=100)

    def to_domain(self) -> Biometrics:
        return Biometrics(**self.model_dump())


class ProfileSyncRequest(BaseModel):
    """Profile upsert payload."""

    name: str
    biometrics: BiometricsPayload | None = None
    goal: Goal | None = None
    experience_level: ExperienceLevel | None = None
    meals_per_day: int | None = Field(default=None, ge=1)
    timezone: str | None = None


class MealComponentPayload(BaseModel):
    """A food reference inside a meal log request."""

    type: ComponentType = "base"
    item_id: UUID
    item_type: ItemType
    amount: float
    unit: FuelUnit

    def to_domain(self) -> MealComponent:
        return MealComponent(**self.model_dump())


class MealLogRequest(BaseModel):
    """Meal log payload."""

    name: str
    components: list[MealComponentPayload]
    logged_at: datetime | None = None
    goal_context: str | None = None

    @field_validator("logged_at")
    @classmethod
    def normalize_logged_at(cls, value: datetime | None) -> datetime | None:
        return as_utc(value)


class WeightLogRequest(BaseModel):
    """Bodyweight log payload."""

    weight_kg: float
    logged_at: datetime | None = None
    source: str = "manual"

    @field_validator("logged_at")
    @classmethod
    def normalize_logged_at(cls, value: datetime | None) -> datetime | None:
        return as_utc(value)


class MeasurePayload(BaseModel):
    unit: FuelUnit
    grams: float = Field(gt=0)
    label: str | None = None


class DishComponentPayload(BaseModel):
    ingredient_id: UUID
    amount: float
    unit: FuelUnit


class DishCreateRequest(BaseModel):
    """Dish authoring payload."""

    name: str
    components: list[DishComponentPayload]
    default_serving_grams: float
    description: str | None = None
    common_measures: list[MeasurePayload] = []
    is_public: bool = False

    def domain_components(self) -> list[DishComponent]:
        return [DishComponent(**c.model_dump()) for c in self.components]

    def domain_measures(self) -> list[MeasureDef]:
        return [MeasureDef(**m.model_dump()) for m in self.common_measures]


class IngredientSeedPayload(BaseModel):
    """Ingredient values per 100 g for a bulk import."""

    name: str
    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fats: float = Field(ge=0)
    fiber: float = Field(default=0, ge=0)
    category: IngredientCategory = "other"
    is_local: bool = False
    local_name: str | None = None

    def to_domain(self) -> IngredientSeed:
        return IngredientSeed(**self.model_dump())


class SeedRequest(BaseModel):
    """Seed payload; an empty body imports the starter catalogue."""

    ingredients: list[IngredientSeedPayload] | None = None
