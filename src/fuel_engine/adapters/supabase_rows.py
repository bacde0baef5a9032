"""Row conversion helpers shared by the Supabase repositories."""

from collections.abc import Iterable
from datetime import UTC, datetime

from fuel_engine.domain.nutrition import FuelUnit, MacroVector, MeasureDef

_UNIT_VALUES = frozenset(unit.value for unit in FuelUnit)


def macros_to_json(vector: MacroVector) -> dict[str, float]:
    return vector.as_dict()


def macros_from_json(data: object) -> MacroVector:
    if not isinstance(data, dict):
        return MacroVector.zero()
    return MacroVector(
        calories=float(data.get("calories", 0.0)),
        protein=float(data.get("protein", 0.0)),
        carbs=float(data.get("carbs", 0.0)),
        fats=float(data.get("fats", 0.0)),
        fiber=float(data.get("fiber", 0.0)),
    )


def measures_to_json(measures: Iterable[MeasureDef]) -> list[dict[str, object]]:
    return [
        {"unit": str(measure.unit), "grams": measure.grams, "label": measure.label}
        for measure in measures
    ]


def measures_from_json(data: object) -> tuple[MeasureDef, ...]:
    """Parse stored measures, ignoring entries with unknown units."""
    if not isinstance(data, list):
        return ()
    measures = []
    for entry in data:
        if not isinstance(entry, dict) or entry.get("unit") not in _UNIT_VALUES:
            continue
        measures.append(
            MeasureDef(
                unit=FuelUnit(entry["unit"]),
                grams=float(entry.get("grams", 0.0)),
                label=entry.get("label"),
            )
        )
    return tuple(measures)


def optional_float(value: object) -> float | None:
    return float(value) if value is not None else None


def parse_required_timestamp(value: object) -> datetime:
    """Parse an ISO timestamp, reading values without an offset as UTC."""
    parsed = datetime.fromisoformat(str(value))
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


def parse_timestamp(value: object) -> datetime | None:
    return parse_required_timestamp(value) if value else None
