"""Domain models for external food composition lookups."""

from dataclasses import dataclass

from nutrition_pantry.domain.nutrients import NutrientsPer100


@dataclass(frozen=True)
class FoodSummary:
    """Search hit from FoodData Central."""

    fdc_id: int
    description: str
    brand_owner: str | None
    data_type: str | None


@dataclass(frozen=True)
class FoodNutrients:
    """Nutrient density of a FoodData Central food, per 100 g."""

    summary: FoodSummary
    nutrients: NutrientsPer100
