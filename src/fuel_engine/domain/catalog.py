"""Starter ingredient catalogue, values per 100 g."""

from dataclasses import dataclass

from fuel_engine.domain.foods import IngredientCategory


@dataclass(frozen=True)
class IngredientSeed:
    """Ingredient payload used for bulk imports."""

    name: str
    calories: float
    protein: float
    carbs: float
    fats: float
    fiber: float
    category: IngredientCategory
    is_local: bool
    local_name: str | None = None


STARTER_INGREDIENTS: tuple[IngredientSeed, ...] = (
    IngredientSeed("Teff Flour", 366, 12.2, 70.7, 3.7, 12.2, "grain", True, "Teff"),
    IngredientSeed(
        "Injera (Pure Teff)", 165, 5.0, 35.0, 1.0, 2.5, "grain", True, "Injera"
    ),
    IngredientSeed("Injera (House/Mixed)", 140, 3.5, 30.0, 0.8, 1.5, "grain", True),
    IngredientSeed(
        "Shiro Powder (Chickpea/Spiced)",
        360,
        20.0,
        55.0,
        6.0,
        10.0,
        "legume",
        True,
        "Shiro",
    ),
    IngredientSeed(
        "Doro Wat (Chicken Stew)", 150, 11.0, 6.0, 9.0, 1.0, "meat", True, "Doro Wat"
    ),
    IngredientSeed("Beef Tibs (Lean)", 150, 22.0, 0.0, 7.0, 0.0, "meat", True, "Tibbs"),
    IngredientSeed("Chicken Breast (Raw)", 120, 23, 0, 2.5, 0, "meat", False),
    IngredientSeed("White Rice (Raw)", 360, 7, 80, 0.6, 1, "grain", False),
)
