"""JSON payload builders for API responses."""

from nutrition_pantry.domain.foods import FoodNutrients, FoodSummary
from nutrition_pantry.domain.nutrients import NutrientsPer100, NutritionTotals
from nutrition_pantry.domain.pantry import Ingredient, InventoryEntry, InventoryEvent
from nutrition_pantry.domain.recipes import Feasibility, Recipe, RecipeCalculation
from nutrition_pantry.domain.units import format_base_quantity


def nutrients_payload(nutrients: NutrientsPer100) -> dict[str, object]:
    return {
        "carbs": nutrients.macros.carbs,
        "fats": nutrients.macros.fats,
        "protein": nutrients.macros.protein,
        "calories": nutrients.macros.calories,
        "micros": dict(nutrients.micros),
    }


def ingredient_payload(ingredient: Ingredient) -> dict[str, object]:
    """Serialize an ingredient with a human-readable stock label."""
    return {
        "id": str(ingredient.id),
        "name": ingredient.name,
        "unit_kind": ingredient.unit_kind.value,
        "std_amount": ingredient.std_amount,
        "display_amount": format_base_quantity(
            ingredient.std_amount, ingredient.unit_kind
        ),
        "price_per_base": ingredient.price_per_base,
        "package_size_base": ingredient.package_size_base,
        "package_price": ingredient.package_price,
        "category": ingredient.category,
        "expiry_date": ingredient.expiry_date.isoformat()
        if ingredient.expiry_date
        else None,
        "include_cost": ingredient.include_cost,
        "nutrients": nutrients_payload(ingredient.nutrients),
    }


def event_payload(event: InventoryEvent) -> dict[str, object]:
    return {
        "type": event.type.value,
        "amount": event.amount,
        "at": event.at.isoformat(),
        "note": event.note,
    }


def entry_payload(entry: InventoryEntry) -> dict[str, object]:
    """Serialize an inventory entry with its full history."""
    return {
        "ingredient_id": str(entry.ingredient_id),
        "std_remaining": entry.std_remaining,
        "history": [event_payload(event) for event in entry.history],
    }


def recipe_payload(recipe: Recipe) -> dict[str, object]:
    return {
        "id": recipe.id,
        "name": recipe.name,
        "category": recipe.category.value,
        "base_servings": recipe.base_servings,
        "diets": list(recipe.diets),
        "ingredients": [
            {
                "name": line.name,
                "amount": line.quantity.amount,
                "unit": line.quantity.unit.value,
            }
            for line in recipe.ingredients
        ],
    }


def feasibility_payload(result: Feasibility) -> dict[str, object]:
    limiting = result.limiting
    return {
        "can_make": result.can_make,
        "max_pax": result.max_pax,
        "limiting": None
        if limiting is None
        else {
            "ingredient": limiting.ingredient_id,
            "needed": limiting.needed,
            "available": limiting.available,
        },
    }


def totals_payload(totals: NutritionTotals) -> dict[str, object]:
    return {
        "calories": totals.calories,
        "carbs": totals.macros.carbs,
        "fats": totals.macros.fats,
        "protein": totals.macros.protein,
        "micros": dict(totals.micros),
        "cost": totals.cost,
    }


def calculation_payload(calculation: RecipeCalculation) -> dict[str, object]:
    """Serialize recipe totals and the per-person share."""
    return {
        "totals": totals_payload(calculation.totals),
        "per_person": totals_payload(calculation.per_person),
    }


def food_summary_payload(food: FoodSummary) -> dict[str, object]:
    return {
        "fdc_id": food.fdc_id,
        "description": food.description,
        "brand_owner": food.brand_owner,
        "data_type": food.data_type,
    }


def food_nutrients_payload(details: FoodNutrients) -> dict[str, object]:
    return {
        **food_summary_payload(details.summary),
        "nutrients": nutrients_payload(details.nutrients),
    }
