"""Recipe catalog, filtering and cook-and-deduct workflow."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from nutrition_pantry.catalog import CUISINE_TYPES, HEALTHY_RECIPES
from nutrition_pantry.domain.recipes import Feasibility, Recipe, RecipeCalculation
from nutrition_pantry.errors import RecipeNotFoundError
from nutrition_pantry.services.feasibility import (
    calculate_recipe_for_pax,
    feasibility_for_recipe,
    scaled_requirements,
)
from nutrition_pantry.services.pantry import PantryService

_logger = logging.getLogger(__name__)


class RecipeRepository(Protocol):
    """Persistence interface for stored recipes."""

    def list_recipes(self) -> list[Recipe]:
        """Return all stored recipes."""

    def get_recipe(self, recipe_id: str) -> Recipe | None:
        """Return a stored recipe by id, if present."""


@dataclass
class RecipeService:
    """Application service for recipe lookups and calculations."""

    repository: RecipeRepository
    pantry_service: PantryService
    catalog: tuple[Recipe, ...] = HEALTHY_RECIPES

    def list_recipes(self) -> list[Recipe]:
        """Return built-in recipes merged with stored ones; stored ids win."""
        merged = {recipe.id: recipe for recipe in self.catalog}
        for recipe in self.repository.list_recipes():
            merged[recipe.id] = recipe
        return list(merged.values())

    def get_recipe(self, recipe_id: str) -> Recipe:
        """Return a recipe by id or raise RecipeNotFoundError."""
        stored = self.repository.get_recipe(recipe_id)
        if stored is not None:
            return stored
        for recipe in self.catalog:
            if recipe.id == recipe_id:
                return recipe
        raise RecipeNotFoundError(recipe_id)

    def filter_recipes(  # noqa: PLR0913
        self,
        user_id: UUID,
        search: str | None = None,
        diets: Iterable[str] = (),
        cuisines: Iterable[str] = (),
        only_feasible: bool = False,
        pax: int = 2,
    ) -> list[Recipe]:
        """Filter recipes by text, diet tags, cuisine tags and pantry stock."""
        recipes = self.list_recipes()
        query = (search or "").strip().lower()
        if query:
            recipes = [
                recipe
                for recipe in recipes
                if query in recipe.name.lower()
                or any(query in line.name.lower() for line in recipe.ingredients)
            ]
        selected_diets = set(diets)
        if selected_diets:
            recipes = [r for r in recipes if selected_diets.intersection(r.diets)]
        selected_cuisines = set(cuisines)
        if selected_cuisines:
            recipes = [r for r in recipes if selected_cuisines.intersection(r.diets)]
        if only_feasible:
            index = self.pantry_service.build_index(user_id)
            recipes = [
                recipe
                for recipe in recipes
                if feasibility_for_recipe(recipe, pax, index).can_make
            ]
        return recipes

    def feasibility(self, user_id: UUID, recipe_id: str, pax: int) -> Feasibility:
        """Check a recipe against the user's current pantry."""
        recipe = self.get_recipe(recipe_id)
        index = self.pantry_service.build_index(user_id)
        return feasibility_for_recipe(recipe, pax, index)

    def calculate(self, user_id: UUID, recipe_id: str, pax: int) -> RecipeCalculation:
        """Scale a recipe's nutrition and cost against the user's pantry."""
        recipe = self.get_recipe(recipe_id)
        index = self.pantry_service.build_index(user_id)
        return calculate_recipe_for_pax(recipe, pax, index)

    def cook(
        self, user_id: UUID, recipe_id: str, pax: int, days: int = 1
    ) -> RecipeCalculation:
        """Calculate a recipe and deduct its ingredients once per day.

        Raises a RecipeCalculationError before touching stock when the pantry
        cannot cover a single day at pax. Only one day is checked, so later
        days may floor stock at zero.
        """
        recipe = self.get_recipe(recipe_id)
        index = self.pantry_service.build_index(user_id)
        calculation = calculate_recipe_for_pax(recipe, pax, index)
        note = f"Scheduled {recipe.name}"
        for _ in range(days):
            for line, needed in scaled_requirements(recipe, pax):
                ingredient = index.lookup(line.name)
                if ingredient is None:
                    continue
                self.pantry_service.deduct(user_id, ingredient.id, needed.value, note)
        _logger.info(
            "Cooked recipe: user=%s recipe=%s pax=%s days=%s",
            user_id,
            recipe_id,
            pax,
            days,
        )
        return calculation


def diet_tags(recipes: Iterable[Recipe]) -> list[str]:
    """Return sorted diet tags, excluding cuisine names."""
    return sorted(
        {
            tag
            for recipe in recipes
            for tag in recipe.diets
            if tag.strip().lower() not in CUISINE_TYPES
        }
    )


def cuisine_tags(recipes: Iterable[Recipe]) -> list[str]:
    """Return sorted cuisine tags."""
    return sorted(
        {
            tag
            for recipe in recipes
            for tag in recipe.diets
            if tag.strip().lower() in CUISINE_TYPES
        }
    )
