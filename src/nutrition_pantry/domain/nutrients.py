"""Nutrient density and nutrition totals."""

from collections.abc import Mapping
from dataclasses import dataclass, field

CARB_KCAL_PER_G = 4.0
PROTEIN_KCAL_PER_G = 4.0
FAT_KCAL_PER_G = 9.0


@dataclass(frozen=True)
class Macros:
    """Macronutrients in grams."""

    carbs: float = 0.0
    fats: float = 0.0
    protein: float = 0.0

    def __add__(self, other: "Macros") -> "Macros":
        return Macros(
            carbs=self.carbs + other.carbs,
            fats=self.fats + other.fats,
            protein=self.protein + other.protein,
        )

    def scaled(self, factor: float) -> "Macros":
        """Return macros multiplied by a factor."""
        return Macros(
            carbs=self.carbs * factor,
            fats=self.fats * factor,
            protein=self.protein * factor,
        )

    @property
    def calories(self) -> float:
        """Energy derived with Atwater factors."""
        return (
            self.carbs * CARB_KCAL_PER_G
            + self.protein * PROTEIN_KCAL_PER_G
            + self.fats * FAT_KCAL_PER_G
        )


@dataclass(frozen=True)
class NutrientsPer100:
    """Nutrient density per 100 base units (g, ml or pieces)."""

    macros: Macros = field(default_factory=Macros)
    micros: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class NutritionTotals:
    """Summed nutrition and cost for a portion of a recipe."""

    macros: Macros = field(default_factory=Macros)
    micros: dict[str, float] = field(default_factory=dict)
    cost: float = 0.0

    @property
    def calories(self) -> float:
        """Calories are always recomputed from macros."""
        return self.macros.calories

    def divided_by(self, divisor: float) -> "NutritionTotals":
        """Return every field divided by the same divisor."""
        return NutritionTotals(
            macros=self.macros.scaled(1 / divisor),
            micros={key: value / divisor for key, value in self.micros.items()},
            cost=self.cost / divisor,
        )


def merge_micros(
    left: Mapping[str, float], right: Mapping[str, float]
) -> dict[str, float]:
    """Sum two micronutrient maps over the union of their keys."""
    keys = list(left) + [key for key in right if key not in left]
    return {key: (left.get(key) or 0.0) + (right.get(key) or 0.0) for key in keys}


def scale_micros(micros: Mapping[str, float], factor: float) -> dict[str, float]:
    """Multiply every micronutrient value by a factor."""
    return {key: (value or 0.0) * factor for key, value in micros.items()}
