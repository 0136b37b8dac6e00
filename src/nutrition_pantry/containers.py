"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from nutrition_pantry.adapters.fdc_client import HttpxFdcClient
from nutrition_pantry.adapters.supabase_food_catalog_repository import (
    SupabaseFoodCatalogRepository,
)
from nutrition_pantry.adapters.supabase_pantry_repository import (
    SupabasePantryRepository,
)
from nutrition_pantry.adapters.supabase_recipe_repository import (
    SupabaseRecipeRepository,
)
from nutrition_pantry.config import Settings
from nutrition_pantry.services.cache import InMemoryCache
from nutrition_pantry.services.nutrient_lookup import NutrientLookupService
from nutrition_pantry.services.pantry import PantryService
from nutrition_pantry.services.recipes import RecipeService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    pantry_service: PantryService
    recipe_service: RecipeService
    nutrient_lookup_service: NutrientLookupService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    pantry_service = PantryService(
        repository=SupabasePantryRepository(supabase_client),
        catalog=SupabaseFoodCatalogRepository(supabase_client),
    )
    recipe_service = RecipeService(
        repository=SupabaseRecipeRepository(supabase_client),
        pantry_service=pantry_service,
    )
    fdc_client = HttpxFdcClient.create(
        api_key=resolved_settings.fdc_api_key,
        base_url=resolved_settings.fdc_base_url,
    )
    nutrient_lookup_service = NutrientLookupService(
        fdc_client=fdc_client,
        cache=InMemoryCache(),
    )

    async def close_resources() -> None:
        await fdc_client.close()

    return AppContainer(
        settings=resolved_settings,
        pantry_service=pantry_service,
        recipe_service=recipe_service,
        nutrient_lookup_service=nutrient_lookup_service,
        close_resources=close_resources,
    )
