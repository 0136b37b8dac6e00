"""Recipe feasibility, serving limits and scaled nutrition."""

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from nutrition_pantry.domain.nutrients import (
    Macros,
    NutritionTotals,
    merge_micros,
    scale_micros,
)
from nutrition_pantry.domain.pantry import CatalogFood, Ingredient
from nutrition_pantry.domain.recipes import (
    Feasibility,
    LimitingIngredient,
    Recipe,
    RecipeCalculation,
    RecipeIngredient,
)
from nutrition_pantry.domain.units import BaseAmount, convert_to_base
from nutrition_pantry.errors import (
    InsufficientIngredientError,
    MissingIngredientError,
    UnitKindMismatchError,
)
from nutrition_pantry.services.naming import build_canonical_name_map, resolve_name


@dataclass(frozen=True)
class PantryIndex:
    """Name-keyed snapshot of pantry stock used for one calculation."""

    by_name: Mapping[str, Ingredient]
    canonical_names: dict[str, str] = field(default_factory=dict)

    @classmethod
    def build(
        cls, ingredients: Iterable[Ingredient], foods: Iterable[CatalogFood] = ()
    ) -> "PantryIndex":
        """Index ingredients by name and derive the canonical name map."""
        by_name = {ingredient.name: ingredient for ingredient in ingredients}
        return cls(
            by_name=by_name,
            canonical_names=build_canonical_name_map(by_name, foods),
        )

    def resolve(self, name: str) -> str:
        """Return the pantry name a recipe name refers to."""
        return resolve_name(name, self.canonical_names)

    def lookup(self, name: str) -> Ingredient | None:
        """Return the ingredient a recipe name refers to, if stocked."""
        return self.by_name.get(self.resolve(name))


def feasibility_for_recipe(
    recipe: Recipe, pax: float, index: PantryIndex
) -> Feasibility:
    """Check whether the pantry covers a recipe at the requested servings.

    The first failing line in declaration order is reported as limiting.
    A recipe with no lines is never makeable.
    Failures are returned as data; this never raises.
    """
    if not recipe.ingredients:
        return Feasibility(can_make=False)
    scale = pax / recipe.base_servings
    for line in recipe.ingredients:
        name = index.resolve(line.name)
        ingredient = index.by_name.get(name)
        if ingredient is None:
            return Feasibility(
                can_make=False,
                limiting=LimitingIngredient(ingredient_id=name, needed=0, available=0),
            )
        needed = _needed(line, scale)
        if needed.kind != ingredient.unit_kind or needed > ingredient.stock:
            return Feasibility(
                can_make=False,
                limiting=LimitingIngredient(
                    ingredient_id=name,
                    needed=needed.value,
                    available=ingredient.std_amount,
                ),
            )
    return Feasibility(can_make=True, max_pax=max_servings_for_recipe(recipe, index))


def max_servings_for_recipe(recipe: Recipe, index: PantryIndex) -> int:
    """Return the largest whole number of servings the pantry covers."""
    if not recipe.ingredients:
        return 0
    limit = math.inf
    for line in recipe.ingredients:
        ingredient = index.lookup(line.name)
        if ingredient is None:
            return 0
        per_serving = _needed(line, 1 / recipe.base_servings)
        if per_serving.value <= 0 or per_serving.kind != ingredient.unit_kind:
            return 0
        limit = min(limit, ingredient.std_amount / per_serving.value)
    servings = math.floor(limit)
    # Division and scaled conversion can disagree in the last bit.
    while servings > 0 and not _covers(recipe, servings, index):
        servings -= 1
    while _covers(recipe, servings + 1, index):
        servings += 1
    return servings


def calculate_recipe_for_pax(
    recipe: Recipe, pax: float, index: PantryIndex
) -> RecipeCalculation:
    """Scale a recipe to pax and total its nutrients and cost.

    Raises a RecipeCalculationError when an ingredient is missing, of the
    wrong kind, or short. Call feasibility_for_recipe first for a
    non-raising check.
    """
    if pax <= 0:
        raise ValueError(f"pax must be positive, got {pax}")
    scale = pax / recipe.base_servings
    macros = Macros()
    micros: dict[str, float] = {}
    cost = 0.0
    for line in recipe.ingredients:
        name = index.resolve(line.name)
        ingredient = index.by_name.get(name)
        if ingredient is None:
            raise MissingIngredientError(name)
        needed = _needed(line, scale)
        if needed.kind != ingredient.unit_kind:
            raise UnitKindMismatchError(needed.kind.value, ingredient.unit_kind.value)
        if needed > ingredient.stock:
            raise InsufficientIngredientError(
                name, needed=needed.value, available=ingredient.std_amount
            )
        factor = needed.value / 100
        macros = macros + ingredient.nutrients.macros.scaled(factor)
        micros = merge_micros(micros, scale_micros(ingredient.nutrients.micros, factor))
        cost += ingredient.effective_price_per_base * needed.value
    totals = NutritionTotals(macros=macros, micros=micros, cost=cost)
    return RecipeCalculation(totals=totals, per_person=totals.divided_by(pax))


def scaled_requirements(
    recipe: Recipe, pax: float
) -> list[tuple[RecipeIngredient, BaseAmount]]:
    """Return each recipe line with its base amount scaled to pax."""
    scale = pax / recipe.base_servings
    return [(line, _needed(line, scale)) for line in recipe.ingredients]


def _needed(line: RecipeIngredient, scale: float) -> BaseAmount:
    return convert_to_base(line.quantity.amount * scale, line.quantity.unit)


def _covers(recipe: Recipe, pax: int, index: PantryIndex) -> bool:
    scale = pax / recipe.base_servings
    for line in recipe.ingredients:
        ingredient = index.lookup(line.name)
        if ingredient is None:
            return False
        needed = _needed(line, scale)
        if needed.kind != ingredient.unit_kind or needed > ingredient.stock:
            return False
    return True
