"""Exceptions raised by the pantry and recipe engine."""


class PantryError(Exception):
    """Base class for pantry and recipe errors."""


class RecipeCalculationError(PantryError):
    """Raised when a recipe cannot be calculated against the pantry."""


class MissingIngredientError(RecipeCalculationError):
    """A recipe line references an ingredient the pantry does not know."""

    def __init__(self, ingredient: str) -> None:
        super().__init__(f"Missing ingredient {ingredient}")
        self.ingredient = ingredient


class InsufficientIngredientError(RecipeCalculationError):
    """The pantry holds less of an ingredient than the recipe needs."""

    def __init__(self, ingredient: str, needed: float, available: float) -> None:
        super().__init__(
            f"Insufficient {ingredient}: needed {needed:g}, available {available:g}"
        )
        self.ingredient = ingredient
        self.needed = needed
        self.available = available


class UnitKindMismatchError(RecipeCalculationError):
    """Two base amounts of different kinds were combined or compared."""

    def __init__(self, left: str, right: str) -> None:
        super().__init__(f"Cannot combine {left} with {right} amounts")
        self.left = left
        self.right = right


class RecipeNotFoundError(PantryError, LookupError):
    """Raised when a recipe id is unknown."""

    def __init__(self, recipe_id: str) -> None:
        super().__init__(f"Recipe {recipe_id} not found")
        self.recipe_id = recipe_id
