"""Built-in recipe catalog."""

from nutrition_pantry.domain.recipes import Recipe, RecipeCategory, RecipeIngredient
from nutrition_pantry.domain.units import Quantity, Unit

CUISINE_TYPES = frozenset(
    {
        "chinese",
        "indian",
        "japanese",
        "korean",
        "thai",
        "italian",
        "french",
        "mexican",
        "spanish",
        "greek",
        "lebanese",
        "turkish",
        "vietnamese",
        "malaysian",
        "indonesian",
        "filipino",
        "american",
        "canadian",
        "british",
        "german",
        "russian",
        "brazilian",
        "peruvian",
        "moroccan",
        "egyptian",
        "ethiopian",
        "south african",
    }
)


def _line(name: str, amount: float, unit: Unit) -> RecipeIngredient:
    return RecipeIngredient(name=name, quantity=Quantity(amount, unit))


HEALTHY_RECIPES: tuple[Recipe, ...] = (
    Recipe(
        id="grilled-chicken-bowl",
        name="Grilled Chicken Bowl",
        category=RecipeCategory.LUNCH,
        base_servings=2,
        diets=(
            "High Protein",
            "Balanced",
            "Gluten Free",
            "Paleo",
            "DASH",
            "Low Sodium",
        ),
        ingredients=(
            _line("Chicken breast", 200, Unit.G),
            _line("Brown rice", 2, Unit.CUP),
            _line("Broccoli", 200, Unit.G),
            _line("Olive oil", 1, Unit.TBSP),
        ),
    ),
    Recipe(
        id="salmon-quinoa-salad",
        name="Salmon Quinoa Salad",
        category=RecipeCategory.DINNER,
        base_servings=2,
        diets=(
            "Mediterranean",
            "Pescatarian",
            "Balanced",
            "High Protein",
            "Gluten Free",
            "DASH",
            "Low Sodium",
        ),
        ingredients=(
            _line("Salmon", 250, Unit.G),
            _line("Quinoa", 2, Unit.CUP),
            _line("Spinach", 150, Unit.G),
            _line("Olive oil", 1, Unit.TBSP),
        ),
    ),
    Recipe(
        id="tofu-stir-fry",
        name="Tofu Veggie Stir-Fry",
        category=RecipeCategory.DINNER,
        base_servings=2,
        diets=("Vegan", "Vegetarian", "Dairy Free", "Low FODMAP", "Chinese"),
        ingredients=(
            _line("Tofu", 200, Unit.G),
            _line("Bell pepper", 1, Unit.PIECE),
            _line("Mushrooms", 150, Unit.G),
            _line("Soy sauce", 2, Unit.TBSP),
        ),
    ),
    Recipe(
        id="greek-yogurt-parfait",
        name="Greek Yogurt Parfait",
        category=RecipeCategory.BREAKFAST,
        base_servings=2,
        diets=("Balanced", "Vegetarian", "DASH", "Low Sodium", "Greek"),
        ingredients=(
            _line("Greek yogurt", 300, Unit.G),
            _line("Blueberry", 1, Unit.CUP),
            _line("Honey", 1, Unit.TBSP),
        ),
    ),
    Recipe(
        id="keto-egg-avocado-bowl",
        name="Keto Egg & Avocado Bowl",
        category=RecipeCategory.BREAKFAST,
        base_servings=2,
        diets=("Keto", "Low Carb", "High Protein", "Gluten Free", "Paleo"),
        ingredients=(
            _line("Egg", 4, Unit.PIECE),
            _line("Avocado", 1, Unit.PIECE),
            _line("Olive oil", 1, Unit.TBSP),
        ),
    ),
    Recipe(
        id="vegan-chickpea-bowl",
        name="Vegan Chickpea Power Bowl",
        category=RecipeCategory.LUNCH,
        base_servings=2,
        diets=("Vegan", "Vegetarian", "Dairy Free", "Mediterranean", "Balanced"),
        ingredients=(
            _line("Chickpea", 2, Unit.CUP),
            _line("Quinoa", 1, Unit.CUP),
            _line("Spinach", 150, Unit.G),
            _line("Olive oil", 1, Unit.TBSP),
        ),
    ),
    Recipe(
        id="mediterranean-chicken-salad",
        name="Mediterranean Chicken Salad",
        category=RecipeCategory.DINNER,
        base_servings=2,
        diets=("Mediterranean", "High Protein", "Gluten Free", "Paleo", "DASH"),
        ingredients=(
            _line("Chicken breast", 250, Unit.G),
            _line("Olive oil", 1, Unit.TBSP),
            _line("Spinach", 200, Unit.G),
        ),
    ),
)
