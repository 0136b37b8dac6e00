"""Supabase repository for stored recipes."""

from collections import defaultdict
from dataclasses import dataclass

from supabase import Client

from nutrition_pantry.domain.recipes import Recipe, RecipeCategory, RecipeIngredient
from nutrition_pantry.domain.units import Quantity, Unit
from nutrition_pantry.services.recipes import RecipeRepository

_RECIPE_COLUMNS = "id, recipe_key, name, category, base_servings, diets"
_LINE_COLUMNS = "recipe_id, name, quantity_amount, quantity_unit, position"


@dataclass
class SupabaseRecipeRepository(RecipeRepository):
    """Reads recipes from `nutrition_recipes` and their ingredient lines."""

    client: Client

    def list_recipes(self) -> list[Recipe]:
        """Return all stored recipes with ordered ingredient lines."""
        recipes_response = (
            self.client.table("nutrition_recipes")
            .select(_RECIPE_COLUMNS)
            .order("name")
            .execute()
        )
        lines_response = (
            self.client.table("nutrition_recipe_ingredients")
            .select(_LINE_COLUMNS)
            .order("position")
            .execute()
        )
        lines: dict[str, list[RecipeIngredient]] = defaultdict(list)
        for row in lines_response.data or []:
            lines[str(row["recipe_id"])].append(_parse_line(row))
        return [
            _parse_recipe(row, lines.get(str(row["id"]), []))
            for row in recipes_response.data or []
        ]

    def get_recipe(self, recipe_id: str) -> Recipe | None:
        """Return a stored recipe by its recipe key."""
        response = (
            self.client.table("nutrition_recipes")
            .select(_RECIPE_COLUMNS)
            .eq("recipe_key", recipe_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        lines_response = (
            self.client.table("nutrition_recipe_ingredients")
            .select(_LINE_COLUMNS)
            .eq("recipe_id", str(row["id"]))
            .order("position")
            .execute()
        )
        return _parse_recipe(
            row, [_parse_line(line) for line in lines_response.data or []]
        )


def _parse_recipe(row: dict[str, object], lines: list[RecipeIngredient]) -> Recipe:
    return Recipe(
        id=str(row.get("recipe_key") or row["id"]),
        name=str(row.get("name", "")),
        category=_parse_category(row.get("category")),
        base_servings=int(row.get("base_servings") or 1),
        ingredients=tuple(lines),
        diets=tuple(str(tag) for tag in row.get("diets") or []),
    )


def _parse_line(row: dict[str, object]) -> RecipeIngredient:
    return RecipeIngredient(
        name=str(row.get("name", "")),
        quantity=Quantity(
            amount=float(row.get("quantity_amount") or 0.0),
            unit=Unit(str(row.get("quantity_unit") or Unit.G)),
        ),
    )


def _parse_category(value: object) -> RecipeCategory:
    try:
        return RecipeCategory(str(value))
    except ValueError:
        return RecipeCategory.DINNER
