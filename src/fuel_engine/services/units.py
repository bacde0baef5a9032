"""Conversion of food amounts to grams."""

import math
from collections.abc import Iterable

from fuel_engine.domain.nutrition import DEFAULT_UNIT_GRAMS, FuelUnit, MeasureDef


def to_grams(
    amount: float,
    unit: FuelUnit | str,
    *,
    density: float | None = None,
    serving_size_grams: float | None = None,
    measures: Iterable[MeasureDef] = (),
) -> float:
    """Normalize an amount in any supported unit to grams.

    Lookup order: a food-specific measure for the unit, then the serving
    size for ``servings``, then the density for ``ml``, then the default
    grams-per-unit table. Non-finite or non-positive amounts give 0.
    """
    if not isinstance(amount, int | float) or not math.isfinite(amount):
        return 0.0
    if amount <= 0:
        return 0.0
    resolved_unit = FuelUnit(unit)

    for measure in measures:
        if measure.unit == resolved_unit:
            return amount * measure.grams

    if (
        resolved_unit is FuelUnit.SERVINGS
        and serving_size_grams is not None
        and serving_size_grams > 0
    ):
        return amount * serving_size_grams

    if resolved_unit is FuelUnit.ML and density is not None and density > 0:
        return amount * density

    return amount * DEFAULT_UNIT_GRAMS[resolved_unit]
