"""Shared test fixtures."""

from dataclasses import dataclass, field
from uuid import UUID, uuid4

import pytest

from nutrition_pantry.adapters.fdc_client import FdcClient
from nutrition_pantry.config import Settings
from nutrition_pantry.containers import AppContainer
from nutrition_pantry.domain.nutrients import Macros, NutrientsPer100
from nutrition_pantry.domain.pantry import CatalogFood, Ingredient, InventoryEntry
from nutrition_pantry.domain.recipes import Recipe
from nutrition_pantry.domain.units import UnitKind
from nutrition_pantry.services import inventory
from nutrition_pantry.services.cache import InMemoryCache
from nutrition_pantry.services.nutrient_lookup import NutrientLookupService
from nutrition_pantry.services.pantry import (
    FoodCatalogRepository,
    PantryRepository,
    PantryService,
)
from nutrition_pantry.services.recipes import RecipeRepository, RecipeService


def make_ingredient(  # noqa: PLR0913
    name: str,
    std_amount: float,
    unit_kind: UnitKind = UnitKind.MASS,
    carbs: float = 0.0,
    fats: float = 0.0,
    protein: float = 0.0,
    micros: dict[str, float] | None = None,
    price_per_base: float = 0.0,
    include_cost: bool = True,
) -> Ingredient:
    return Ingredient(
        id=uuid4(),
        name=name,
        unit_kind=unit_kind,
        nutrients=NutrientsPer100(
            macros=Macros(carbs=carbs, fats=fats, protein=protein),
            micros=micros or {},
        ),
        price_per_base=price_per_base,
        std_amount=std_amount,
        include_cost=include_cost,
    )


@dataclass
class InMemoryPantryRepository(PantryRepository):
    """In-memory pantry repository for tests."""

    ingredients: dict[UUID, dict[UUID, Ingredient]] = field(default_factory=dict)
    entries: dict[UUID, dict[UUID, InventoryEntry]] = field(default_factory=dict)
    saved_entries: list[InventoryEntry] = field(default_factory=list)

    def stock(self, user_id: UUID, ingredient: Ingredient) -> Ingredient:
        """Seed an ingredient with an opening inventory entry."""
        self.save_ingredient(user_id, ingredient)
        self.entries.setdefault(user_id, {})[ingredient.id] = inventory.open_entry(
            ingredient
        )
        return ingredient

    def list_ingredients(self, user_id: UUID) -> list[Ingredient]:
        return list(self.ingredients.get(user_id, {}).values())

    def get_ingredient(self, user_id: UUID, ingredient_id: UUID) -> Ingredient | None:
        return self.ingredients.get(user_id, {}).get(ingredient_id)

    def save_ingredient(self, user_id: UUID, ingredient: Ingredient) -> None:
        self.ingredients.setdefault(user_id, {})[ingredient.id] = ingredient

    def delete_ingredient(self, user_id: UUID, ingredient_id: UUID) -> None:
        self.ingredients.get(user_id, {}).pop(ingredient_id, None)
        self.entries.get(user_id, {}).pop(ingredient_id, None)

    def list_entries(self, user_id: UUID) -> dict[UUID, InventoryEntry]:
        return dict(self.entries.get(user_id, {}))

    def save_entry(self, user_id: UUID, entry: InventoryEntry) -> None:
        self.entries.setdefault(user_id, {})[entry.ingredient_id] = entry
        self.saved_entries.append(entry)


@dataclass
class InMemoryFoodCatalogRepository(FoodCatalogRepository):
    """In-memory foods catalog for tests."""

    foods: list[CatalogFood] = field(default_factory=list)

    def list_foods(self) -> list[CatalogFood]:
        return list(self.foods)


@dataclass
class InMemoryRecipeRepository(RecipeRepository):
    """In-memory stored recipes for tests."""

    recipes: dict[str, Recipe] = field(default_factory=dict)

    def list_recipes(self) -> list[Recipe]:
        return list(self.recipes.values())

    def get_recipe(self, recipe_id: str) -> Recipe | None:
        return self.recipes.get(recipe_id)


@dataclass
class FakeFdcClient(FdcClient):
    """Fake FDC client with in-memory responses."""

    search_calls: int = 0
    food_calls: int = 0
    search_payload: dict[str, object] = field(
        default_factory=lambda: {
            "foods": [
                {
                    "fdcId": 171477,
                    "description": "Chicken, broiler or fryers, breast, raw",
                    "dataType": "SR Legacy",
                }
            ]
        }
    )
    food_payload: dict[str, object] = field(
        default_factory=lambda: {
            "fdcId": 171477,
            "description": "Chicken, broiler or fryers, breast, raw",
            "dataType": "SR Legacy",
            "foodNutrients": [
                {"nutrient": {"id": 1003}, "amount": 22.5},
                {"nutrient": {"id": 1004}, "amount": 2.62},
                {"nutrient": {"id": 1005}, "amount": 0},
                {"nutrient": {"id": 1008}, "amount": 120},
                {"nutrient": {"id": 1093}, "amount": 45},
                {"nutrient": {"id": 1092}, "amount": 334},
            ],
        }
    )

    async def search_foods(self, query: str, page_size: int = 10) -> dict[str, object]:
        self.search_calls += 1
        return self.search_payload

    async def get_food(self, fdc_id: int) -> dict[str, object]:
        self.food_calls += 1
        return self.food_payload


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        admin_token="admin-token",
        fdc_api_key="fdc-key",
    )


@pytest.fixture
def user_id() -> UUID:
    return uuid4()


@pytest.fixture
def pantry_repository() -> InMemoryPantryRepository:
    return InMemoryPantryRepository()


@pytest.fixture
def catalog_repository() -> InMemoryFoodCatalogRepository:
    return InMemoryFoodCatalogRepository()


@pytest.fixture
def recipe_repository() -> InMemoryRecipeRepository:
    return InMemoryRecipeRepository()


@pytest.fixture
def pantry_service(
    pantry_repository: InMemoryPantryRepository,
    catalog_repository: InMemoryFoodCatalogRepository,
) -> PantryService:
    return PantryService(repository=pantry_repository, catalog=catalog_repository)


@pytest.fixture
def recipe_service(
    recipe_repository: InMemoryRecipeRepository, pantry_service: PantryService
) -> RecipeService:
    return RecipeService(repository=recipe_repository, pantry_service=pantry_service)


@pytest.fixture
def fdc_client() -> FakeFdcClient:
    return FakeFdcClient()


@pytest.fixture
def container(
    settings: Settings,
    pantry_service: PantryService,
    recipe_service: RecipeService,
    fdc_client: FakeFdcClient,
) -> AppContainer:
    nutrient_lookup_service = NutrientLookupService(
        fdc_client=fdc_client,
        cache=InMemoryCache(),
        retry_delay_seconds=0,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        pantry_service=pantry_service,
        recipe_service=recipe_service,
        nutrient_lookup_service=nutrient_lookup_service,
        close_resources=close_resources,
    )
