"""Domain models for recipes and recipe calculations."""

from dataclasses import dataclass
from enum import StrEnum

from nutrition_pantry.domain.nutrients import NutritionTotals
from nutrition_pantry.domain.units import Quantity


class RecipeCategory(StrEnum):
    """Meal slot a recipe belongs to."""

    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    DESSERTS_AND_SNACKS = "Desserts & Snacks"


@dataclass(frozen=True)
class RecipeIngredient:
    """Ingredient line; the quantity covers the recipe's base servings."""

    name: str
    quantity: Quantity


@dataclass(frozen=True)
class Recipe:
    """A dish authored for a fixed number of servings."""

    id: str
    name: str
    category: RecipeCategory
    base_servings: int
    ingredients: tuple[RecipeIngredient, ...]
    diets: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.base_servings <= 0:
            raise ValueError(
                f"Recipe {self.id} must have positive base servings, "
                f"got {self.base_servings}"
            )


@dataclass(frozen=True)
class LimitingIngredient:
    """Ingredient that prevents a recipe from being made."""

    ingredient_id: str
    needed: float
    available: float


@dataclass(frozen=True)
class Feasibility:
    """Whether the pantry covers a recipe at a requested serving count."""

    can_make: bool
    limiting: LimitingIngredient | None = None
    max_pax: int | None = None


@dataclass(frozen=True)
class RecipeCalculation:
    """Scaled nutrition and cost for a recipe."""

    totals: NutritionTotals
    per_person: NutritionTotals
