"""User profile and biometrics models."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class Gender(StrEnum):
    MALE = "male"
    FEMALE = "female"


class ActivityLevel(StrEnum):
    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    ATHLETE = "athlete"


ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.ATHLETE: 1.9,
}


class Goal(StrEnum):
    CUT = "cut"
    MAINTAIN = "maintain"
    BULK = "bulk"


class ExperienceLevel(StrEnum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ELITE = "elite"


class EnergyFormula(StrEnum):
    MIFFLIN_ST_JEOR = "Mifflin-St Jeor"
    KATCH_MCARDLE = "Katch-McArdle"


@dataclass(frozen=True)
class Biometrics:
    """Inputs to the energy model."""

    weight_kg: float
    height_cm: float
    age: int
    gender: Gender
    activity_level: ActivityLevel
    body_fat_percent: float | None = None


@dataclass(frozen=True)
class EnergyEstimate:
    """BMR and TDEE with the formula that produced them."""

    bmr: int
    tdee: int
    formula: EnergyFormula


@dataclass(frozen=True)
class UserProfile:
    """Represents a user profile stored in the database."""

    id: UUID
    token_identifier: str
    name: str
    biometrics: Biometrics | None = None
    goal: Goal = Goal.MAINTAIN
    experience_level: ExperienceLevel = ExperienceLevel.INTERMEDIATE
    meals_per_day: int | None = None
    timezone: str = "UTC"
    created_at: datetime | None = None
