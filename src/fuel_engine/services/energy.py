"""Energy expenditure and macro target calculations."""

import logging
from dataclasses import dataclass

from fuel_engine.domain.nutrition import MacroVector
from fuel_engine.domain.profile import (
    ACTIVITY_MULTIPLIERS,
    ActivityLevel,
    Biometrics,
    EnergyEstimate,
    EnergyFormula,
    ExperienceLevel,
    Gender,
    Goal,
)
from fuel_engine.errors import MissingBiometricsError
from fuel_engine.services.macros import round1, round_half_up
from fuel_engine.services.users import ProfileService

PROTEIN_PER_KG: dict[ExperienceLevel, float] = {
    ExperienceLevel.BEGINNER: 1.8,
    ExperienceLevel.INTERMEDIATE: 2.0,
    ExperienceLevel.ELITE: 2.2,
}

FAT_FLOOR_PER_KG: dict[Goal, float] = {
    Goal.CUT: 0.8,
    Goal.MAINTAIN: 0.9,
    Goal.BULK: 0.9,
}

FIBER_TARGET_CUT = 32
FIBER_TARGET_DEFAULT = 28

CUT_DEFICIT_KCAL = 500
BULK_SURPLUS_KCAL = 300

_KCAL_PER_G_PROTEIN = 4
_KCAL_PER_G_CARB = 4
_KCAL_PER_G_FAT = 9

_logger = logging.getLogger(__name__)


def compute_energy(biometrics: Biometrics) -> EnergyEstimate:
    """Compute BMR and TDEE, preferring Katch-McArdle when body fat is known."""
    body_fat = biometrics.body_fat_percent
    if body_fat is not None and body_fat > 0:
        lean_mass_kg = biometrics.weight_kg * (1 - body_fat / 100)
        bmr = 370 + 21.6 * lean_mass_kg
        formula = EnergyFormula.KATCH_MCARDLE
    else:
        sex_offset = 5 if biometrics.gender == Gender.MALE else -161
        bmr = (
            10 * biometrics.weight_kg
            + 6.25 * biometrics.height_cm
            - 5 * biometrics.age
            + sex_offset
        )
        formula = EnergyFormula.MIFFLIN_ST_JEOR

    multiplier = ACTIVITY_MULTIPLIERS[ActivityLevel(biometrics.activity_level)]
    return EnergyEstimate(
        bmr=round_half_up(bmr),
        tdee=round_half_up(bmr * multiplier),
        formula=formula,
    )


def derive_targets(
    calories: float,
    weight_kg: float,
    goal: Goal | str | None = None,
    experience_level: ExperienceLevel | str | None = None,
) -> MacroVector:
    """Convert a calorie target into protein, fat, carb and fiber grams.

    Protein and fat are set per kg of bodyweight first; carbohydrate takes
    whatever calories remain and never goes below zero.
    """
    resolved_goal = Goal(goal or Goal.MAINTAIN)
    resolved_level = ExperienceLevel(experience_level or ExperienceLevel.INTERMEDIATE)

    protein = round_half_up(weight_kg * PROTEIN_PER_KG[resolved_level])
    fats = round_half_up(weight_kg * FAT_FLOOR_PER_KG[resolved_goal])
    used_calories = protein * _KCAL_PER_G_PROTEIN + fats * _KCAL_PER_G_FAT
    carbs = max(0, round_half_up((calories - used_calories) / _KCAL_PER_G_CARB))

    return MacroVector(
        calories=round_half_up(calories),
        protein=protein,
        carbs=carbs,
        fats=fats,
        fiber=FIBER_TARGET_CUT if resolved_goal == Goal.CUT else FIBER_TARGET_DEFAULT,
    )


def split_per_meal(daily: MacroVector, meals_per_day: int) -> MacroVector:
    """Divide a daily target evenly across meals, one decimal per field."""
    meals = max(int(meals_per_day), 1)
    return MacroVector(
        calories=round1(daily.calories / meals),
        protein=round1(daily.protein / meals),
        carbs=round1(daily.carbs / meals),
        fats=round1(daily.fats / meals),
        fiber=round1(daily.fiber / meals),
    )


def goal_calorie_targets(
    tdee: float,
    weight_kg: float,
    experience_level: ExperienceLevel | str | None = None,
) -> dict[Goal, MacroVector]:
    """Return macro targets for each goal phase around a TDEE."""
    return {
        Goal.CUT: derive_targets(
            tdee - CUT_DEFICIT_KCAL, weight_kg, Goal.CUT, experience_level
        ),
        Goal.MAINTAIN: derive_targets(
            tdee, weight_kg, Goal.MAINTAIN, experience_level
        ),
        Goal.BULK: derive_targets(
            tdee + BULK_SURPLUS_KCAL, weight_kg, Goal.BULK, experience_level
        ),
    }


@dataclass(frozen=True)
class EnergyTargets:
    """Energy estimate plus daily and per-meal macro targets."""

    energy: EnergyEstimate
    daily: MacroVector
    per_meal: MacroVector
    meals_per_day: int
    goal: Goal


@dataclass
class EnergyService:
    """Compose energy and target calculations from stored biometrics."""

    profile_service: ProfileService
    default_meals_per_day: int = 3

    def get_targets(
        self, token_identifier: str, meals_per_day: int | None = None
    ) -> EnergyTargets:
        """Return energy and targets for the user's current biometrics."""
        profile = self.profile_service.get_profile(token_identifier)
        if profile.biometrics is None:
            raise MissingBiometricsError(
                f"Profile {token_identifier} has no biometrics recorded"
            )
        energy = compute_energy(profile.biometrics)
        goal_calories = _goal_calories(energy.tdee, profile.goal)
        daily = derive_targets(
            goal_calories,
            profile.biometrics.weight_kg,
            profile.goal,
            profile.experience_level,
        )
        meals = meals_per_day or profile.meals_per_day or self.default_meals_per_day
        _logger.debug(
            "Energy targets: user=%s formula=%s tdee=%s meals=%s",
            token_identifier,
            energy.formula,
            energy.tdee,
            meals,
        )
        return EnergyTargets(
            energy=energy,
            daily=daily,
            per_meal=split_per_meal(daily, meals),
            meals_per_day=meals,
            goal=Goal(profile.goal),
        )


def _goal_calories(tdee: int, goal: Goal) -> int:
    if goal == Goal.CUT:
        return tdee - CUT_DEFICIT_KCAL
    if goal == Goal.BULK:
        return tdee + BULK_SURPLUS_KCAL
    return tdee
