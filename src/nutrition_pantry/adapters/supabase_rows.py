"""Row conversion helpers shared by the Supabase repositories."""

from datetime import date, datetime

from nutrition_pantry.domain.nutrients import Macros, NutrientsPer100


def parse_nutrients(row: dict[str, object]) -> NutrientsPer100:
    """Read per-100 nutrient columns from a row."""
    micros = row.get("micros") or {}
    return NutrientsPer100(
        macros=Macros(
            carbs=float(row.get("carbs_per_100") or 0.0),
            fats=float(row.get("fats_per_100") or 0.0),
            protein=float(row.get("protein_per_100") or 0.0),
        ),
        micros={str(key): float(value or 0.0) for key, value in micros.items()},
    )


def nutrients_payload(nutrients: NutrientsPer100) -> dict[str, object]:
    """Return the per-100 nutrient columns for a row."""
    return {
        "carbs_per_100": nutrients.macros.carbs,
        "fats_per_100": nutrients.macros.fats,
        "protein_per_100": nutrients.macros.protein,
        "micros": dict(nutrients.micros),
    }


def parse_optional_float(value: object) -> float | None:
    """Return a float for numeric values, None otherwise."""
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str) and value:
        return float(value)
    return None


def parse_date(value: object) -> date | None:
    """Parse an ISO date column."""
    if isinstance(value, str) and value:
        return date.fromisoformat(value[:10])
    return None


def parse_datetime(value: object) -> datetime:
    """Parse an ISO timestamp column, accepting a trailing Z."""
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
