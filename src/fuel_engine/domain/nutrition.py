"""Nutrition domain models."""

from dataclasses import dataclass
from enum import StrEnum


class FuelUnit(StrEnum):
    """Measurement units accepted when logging food."""

    GRAMS = "grams"
    KG = "kg"
    ML = "ml"
    CUPS = "cups"
    TBSP = "tbsp"
    TSP = "tsp"
    PIECES = "pieces"
    ROLLS = "rolls"
    LADLES = "ladles"
    SLICES = "slices"
    PATTIES = "patties"
    BOWLS = "bowls"
    SERVINGS = "servings"


DEFAULT_UNIT_GRAMS: dict[FuelUnit, float] = {
    FuelUnit.GRAMS: 1,
    FuelUnit.KG: 1000,
    FuelUnit.ML: 1,
    FuelUnit.CUPS: 240,
    FuelUnit.TBSP: 15,
    FuelUnit.TSP: 5,
    FuelUnit.PIECES: 50,
    FuelUnit.ROLLS: 150,
    FuelUnit.LADLES: 180,
    FuelUnit.SLICES: 30,
    FuelUnit.PATTIES: 90,
    FuelUnit.BOWLS: 320,
    FuelUnit.SERVINGS: 100,
}


class NutritionBasis(StrEnum):
    """Whether stored macros are per 100 g or per serving."""

    PER_100G = "per_100g"
    PER_SERVING = "per_serving"


@dataclass(frozen=True)
class MacroVector:
    """Calories and macronutrients for an amount of food."""

    calories: float
    protein: float
    carbs: float
    fats: float
    fiber: float

    @classmethod
    def zero(cls) -> "MacroVector":
        """Return the additive identity."""
        return cls(calories=0.0, protein=0.0, carbs=0.0, fats=0.0, fiber=0.0)

    def __add__(self, other: "MacroVector") -> "MacroVector":
        return MacroVector(
            calories=self.calories + other.calories,
            protein=self.protein + other.protein,
            carbs=self.carbs + other.carbs,
            fats=self.fats + other.fats,
            fiber=self.fiber + other.fiber,
        )

    def scaled(self, ratio: float) -> "MacroVector":
        """Return every field multiplied by ratio."""
        return MacroVector(
            calories=self.calories * ratio,
            protein=self.protein * ratio,
            carbs=self.carbs * ratio,
            fats=self.fats * ratio,
            fiber=self.fiber * ratio,
        )

    def as_dict(self) -> dict[str, float]:
        """Return the vector as a plain mapping."""
        return {
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fats": self.fats,
            "fiber": self.fiber,
        }


@dataclass(frozen=True)
class MeasureDef:
    """Food-specific grams for a unit, overriding the default table."""

    unit: FuelUnit
    grams: float
    label: str | None = None


@dataclass(frozen=True)
class ResolvedPortion:
    """Grams and macros for a food item at a given amount and unit."""

    grams: float
    macros: MacroVector
