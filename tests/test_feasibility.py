"""Tests for recipe feasibility, serving limits and scaled nutrition."""

from uuid import uuid4

import pytest

from nutrition_pantry.domain.nutrients import NutrientsPer100
from nutrition_pantry.domain.pantry import CatalogFood
from nutrition_pantry.domain.recipes import (
    Feasibility,
    LimitingIngredient,
    Recipe,
    RecipeCategory,
    RecipeIngredient,
)
from nutrition_pantry.domain.units import Quantity, Unit, UnitKind
from nutrition_pantry.errors import (
    InsufficientIngredientError,
    MissingIngredientError,
    RecipeCalculationError,
    UnitKindMismatchError,
)
from nutrition_pantry.services.feasibility import (
    PantryIndex,
    calculate_recipe_for_pax,
    feasibility_for_recipe,
    max_servings_for_recipe,
    scaled_requirements,
)
from tests.conftest import make_ingredient


def _recipe(*lines: tuple[str, float, Unit], base_servings: int = 2) -> Recipe:
    return Recipe(
        id="test-recipe",
        name="Test Recipe",
        category=RecipeCategory.LUNCH,
        base_servings=base_servings,
        ingredients=tuple(
            RecipeIngredient(name=name, quantity=Quantity(amount, unit))
            for name, amount, unit in lines
        ),
    )


CHICKEN_BOWL = _recipe(("Chicken breast", 200, Unit.G))


def test_chicken_bowl_feasible_for_one() -> None:
    index = PantryIndex.build([make_ingredient("Chicken breast", 150)])

    result = feasibility_for_recipe(CHICKEN_BOWL, 1, index)

    assert result.can_make is True
    assert result.max_pax == 1
    assert result.limiting is None


def test_chicken_bowl_short_for_two() -> None:
    index = PantryIndex.build([make_ingredient("Chicken breast", 150)])

    result = feasibility_for_recipe(CHICKEN_BOWL, 2, index)

    assert result.can_make is False
    assert result.limiting == LimitingIngredient(
        ingredient_id="Chicken breast", needed=200, available=150
    )


def test_missing_ingredient_reported_with_zero_amounts() -> None:
    index = PantryIndex.build([])

    result = feasibility_for_recipe(CHICKEN_BOWL, 1, index)

    assert result.can_make is False
    assert result.limiting == LimitingIngredient("Chicken breast", 0, 0)


def test_first_failing_line_is_limiting() -> None:
    recipe = _recipe(("Saffron", 1, Unit.G), ("Chicken breast", 200, Unit.G))
    index = PantryIndex.build([make_ingredient("Chicken breast", 10)])

    result = feasibility_for_recipe(recipe, 2, index)

    assert result.limiting is not None
    assert result.limiting.ingredient_id == "Saffron"


def test_kind_mismatch_is_limiting_not_error() -> None:
    index = PantryIndex.build(
        [make_ingredient("Chicken breast", 1000, unit_kind=UnitKind.VOLUME)]
    )

    result = feasibility_for_recipe(CHICKEN_BOWL, 1, index)

    assert result.can_make is False
    assert result.limiting == LimitingIngredient("Chicken breast", 100, 1000)
    assert max_servings_for_recipe(CHICKEN_BOWL, index) == 0


def test_recipe_names_resolve_through_pantry_spelling() -> None:
    index = PantryIndex.build([make_ingredient("chicken breasts (skinless)", 400)])

    result = feasibility_for_recipe(CHICKEN_BOWL, 4, index)

    assert result.can_make is True
    assert result.max_pax == 4


def test_recipe_names_resolve_through_catalog_alias() -> None:
    food = CatalogFood(
        id=uuid4(),
        name="Chickpea",
        unit_kind=UnitKind.VOLUME,
        nutrients=NutrientsPer100(),
        aliases=("garbanzo",),
    )
    recipe = _recipe(("Garbanzo", 1, Unit.CUP))
    index = PantryIndex.build(
        [make_ingredient("Chickpea", 480, unit_kind=UnitKind.VOLUME)], [food]
    )

    assert index.resolve("Garbanzo") == "Chickpea"
    assert feasibility_for_recipe(recipe, 2, index).can_make is True


def test_max_servings_uses_volume_conversion() -> None:
    recipe = _recipe(("Brown rice", 2, Unit.CUP))
    index = PantryIndex.build(
        [make_ingredient("Brown rice", 720, unit_kind=UnitKind.VOLUME)]
    )

    assert max_servings_for_recipe(recipe, index) == 3


def test_max_servings_takes_tightest_line() -> None:
    recipe = _recipe(("Chicken breast", 200, Unit.G), ("Egg", 4, Unit.PIECE))
    index = PantryIndex.build(
        [
            make_ingredient("Chicken breast", 1000),
            make_ingredient("Egg", 6, unit_kind=UnitKind.COUNT),
        ]
    )

    assert max_servings_for_recipe(recipe, index) == 3


def test_empty_recipe_is_never_makeable() -> None:
    recipe = _recipe()
    index = PantryIndex.build([])

    assert max_servings_for_recipe(recipe, index) == 0
    for pax in (1, 5):
        assert feasibility_for_recipe(recipe, pax, index) == Feasibility(
            can_make=False
        )


def test_feasibility_is_monotonic_in_servings() -> None:
    recipe = _recipe(
        ("Chicken breast", 1, Unit.LB),
        ("Olive oil", 1, Unit.TBSP),
        base_servings=3,
    )
    index = PantryIndex.build(
        [
            make_ingredient("Chicken breast", 1500),
            make_ingredient("Olive oil", 100, unit_kind=UnitKind.VOLUME),
        ]
    )
    max_pax = max_servings_for_recipe(recipe, index)

    assert max_pax > 0
    for pax in range(1, max_pax + 4):
        assert feasibility_for_recipe(recipe, pax, index).can_make is (pax <= max_pax)


def test_calculation_scales_macros_and_cost() -> None:
    chicken = make_ingredient(
        "Chicken breast",
        500,
        fats=3.6,
        protein=31,
        micros={"sodium": 74},
        price_per_base=0.01,
    )
    index = PantryIndex.build([chicken])

    calculation = calculate_recipe_for_pax(CHICKEN_BOWL, 2, index)

    assert calculation.totals.macros.protein == pytest.approx(62)
    assert calculation.totals.macros.fats == pytest.approx(7.2)
    assert calculation.totals.calories == pytest.approx(62 * 4 + 7.2 * 9)
    assert calculation.totals.micros == {"sodium": pytest.approx(148)}
    assert calculation.totals.cost == pytest.approx(2.0)
    assert calculation.per_person.macros.protein == pytest.approx(31)
    assert calculation.per_person.cost == pytest.approx(1.0)
    per_person = calculation.per_person.macros
    assert calculation.per_person.calories == pytest.approx(
        per_person.carbs * 4 + per_person.protein * 4 + per_person.fats * 9
    )


def test_calculation_merges_micros_by_key_union() -> None:
    recipe = _recipe(("Spinach", 100, Unit.G), ("Salmon", 100, Unit.G))
    index = PantryIndex.build(
        [
            make_ingredient("Spinach", 200, micros={"iron": 2.7, "sodium": 79}),
            make_ingredient("Salmon", 200, micros={"sodium": 59, "potassium": 363}),
        ]
    )

    totals = calculate_recipe_for_pax(recipe, 2, index).totals

    assert totals.micros == {
        "iron": pytest.approx(2.7),
        "sodium": pytest.approx(138),
        "potassium": pytest.approx(363),
    }


def test_calculation_skips_cost_when_excluded() -> None:
    chicken = make_ingredient(
        "Chicken breast", 500, price_per_base=0.02, include_cost=False
    )
    index = PantryIndex.build([chicken])

    calculation = calculate_recipe_for_pax(CHICKEN_BOWL, 1, index)

    assert calculation.totals.cost == 0


def test_calculation_raises_for_missing_ingredient() -> None:
    with pytest.raises(MissingIngredientError) as exc_info:
        calculate_recipe_for_pax(CHICKEN_BOWL, 1, PantryIndex.build([]))

    assert exc_info.value.ingredient == "Chicken breast"


def test_calculation_raises_for_shortage() -> None:
    index = PantryIndex.build([make_ingredient("Chicken breast", 150)])

    with pytest.raises(InsufficientIngredientError) as exc_info:
        calculate_recipe_for_pax(CHICKEN_BOWL, 2, index)

    assert exc_info.value.needed == 200
    assert exc_info.value.available == 150
    assert isinstance(exc_info.value, RecipeCalculationError)


def test_calculation_raises_for_kind_mismatch() -> None:
    index = PantryIndex.build(
        [make_ingredient("Chicken breast", 500, unit_kind=UnitKind.COUNT)]
    )

    with pytest.raises(UnitKindMismatchError):
        calculate_recipe_for_pax(CHICKEN_BOWL, 1, index)


def test_calculation_rejects_non_positive_pax() -> None:
    index = PantryIndex.build([make_ingredient("Chicken breast", 500)])

    with pytest.raises(ValueError):
        calculate_recipe_for_pax(CHICKEN_BOWL, 0, index)


def test_scaled_requirements_per_line() -> None:
    recipe = _recipe(("Chicken breast", 200, Unit.G), ("Olive oil", 2, Unit.TBSP))

    requirements = scaled_requirements(recipe, 1)

    assert [amount.value for _, amount in requirements] == [
        pytest.approx(100),
        pytest.approx(14.7868),
    ]


def test_recipe_requires_positive_base_servings() -> None:
    with pytest.raises(ValueError):
        _recipe(("Chicken breast", 200, Unit.G), base_servings=0)
