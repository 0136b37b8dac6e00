"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Literal
from uuid import UUID

import httpx
from fastapi import FastAPI, HTTPException, Query, Request, status

from nutrition_pantry.api.admin import router as admin_router
from nutrition_pantry.api.models import (
    AddIngredientRequest,
    CookRequest,
    InventoryMutationRequest,
)
from nutrition_pantry.api.serializers import (
    calculation_payload,
    entry_payload,
    feasibility_payload,
    food_nutrients_payload,
    food_summary_payload,
    ingredient_payload,
    recipe_payload,
)
from nutrition_pantry.app_logging import configure_logging
from nutrition_pantry.config import parse_tag_list
from nutrition_pantry.containers import AppContainer
from nutrition_pantry.domain.units import Quantity
from nutrition_pantry.errors import (
    RecipeCalculationError,
    RecipeNotFoundError,
    UnitKindMismatchError,
)
from nutrition_pantry.services.recipes import cuisine_tags, diet_tags


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/users/{user_id}/pantry")
    async def list_pantry(user_id: UUID, request: Request) -> dict[str, object]:
        """Return the user's pantry with current stock."""
        state_container: AppContainer = request.app.state.container
        ingredients = state_container.pantry_service.list_pantry(user_id)
        return {"ingredients": [ingredient_payload(item) for item in ingredients]}

    @app.post("/users/{user_id}/pantry", status_code=status.HTTP_201_CREATED)
    async def add_ingredient(
        user_id: UUID, body: AddIngredientRequest, request: Request
    ) -> dict[str, object]:
        """Buy stock, creating or restocking an ingredient."""
        state_container: AppContainer = request.app.state.container
        try:
            purchase = state_container.pantry_service.add_ingredient(
                user_id,
                name=body.name,
                quantity=Quantity(amount=body.amount, unit=body.unit),
                price_per_100=body.price_per_100,
                nutrients=body.nutrients.to_domain(),
                package_size_base=body.package_size_base,
                category=body.category,
                expiry_date=body.expiry_date,
                include_cost=body.include_cost,
            )
        except UnitKindMismatchError as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
            ) from exc
        return {
            "ingredient": ingredient_payload(purchase.ingredient),
            "added_amount": purchase.added_amount,
            "packages": purchase.packages,
            "total_price": purchase.total_price,
            "created": purchase.created,
        }

    @app.post("/users/{user_id}/pantry/reset")
    async def reset_pantry(user_id: UUID, request: Request) -> dict[str, int]:
        """Zero every ingredient's stock."""
        state_container: AppContainer = request.app.state.container
        count = state_container.pantry_service.reset_inventory(user_id)
        return {"reset": count}

    @app.get("/users/{user_id}/pantry/expiring")
    async def expiring(
        user_id: UUID, request: Request, days: int | None = Query(default=None, ge=0)
    ) -> dict[str, object]:
        """Return stocked ingredients expiring soon, plus expired ones."""
        state_container: AppContainer = request.app.state.container
        pantry_service = state_container.pantry_service
        window = state_container.settings.expiring_soon_days if days is None else days
        return {
            "expiring": [
                ingredient_payload(item)
                for item in pantry_service.expiring_soon(user_id, window)
            ],
            "expired": [
                ingredient_payload(item) for item in pantry_service.expired(user_id)
            ],
        }

    @app.delete(
        "/users/{user_id}/pantry/{ingredient_id}",
        status_code=status.HTTP_204_NO_CONTENT,
    )
    async def remove_ingredient(
        user_id: UUID, ingredient_id: UUID, request: Request
    ) -> None:
        """Delete an ingredient and its inventory."""
        state_container: AppContainer = request.app.state.container
        if not state_container.pantry_service.remove_ingredient(user_id, ingredient_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)

    @app.post("/users/{user_id}/pantry/{ingredient_id}/{action}")
    async def mutate_inventory(
        user_id: UUID,
        ingredient_id: UUID,
        action: Literal["deduct", "restock", "waste"],
        body: InventoryMutationRequest,
        request: Request,
    ) -> dict[str, object]:
        """Apply a deduct, restock or waste event."""
        state_container: AppContainer = request.app.state.container
        pantry_service = state_container.pantry_service
        mutation = {
            "deduct": pantry_service.deduct,
            "restock": pantry_service.restock,
            "waste": pantry_service.waste,
        }[action]
        entry = mutation(user_id, ingredient_id, body.amount, body.note)
        if entry is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Unknown ingredient {ingredient_id}",
            )
        return entry_payload(entry)

    @app.get("/users/{user_id}/recipes")
    async def list_recipes(  # noqa: PLR0913
        user_id: UUID,
        request: Request,
        search: str | None = None,
        diets: str | None = None,
        cuisines: str | None = None,
        only_feasible: bool = False,
        pax: int | None = Query(default=None, gt=0),
    ) -> dict[str, object]:
        """Filter recipes by text, tags and pantry feasibility."""
        state_container: AppContainer = request.app.state.container
        recipe_service = state_container.recipe_service
        recipes = recipe_service.filter_recipes(
            user_id,
            search=search,
            diets=parse_tag_list(diets),
            cuisines=parse_tag_list(cuisines),
            only_feasible=only_feasible,
            pax=pax or state_container.settings.default_pax,
        )
        all_recipes = recipe_service.list_recipes()
        return {
            "recipes": [recipe_payload(recipe) for recipe in recipes],
            "diets": diet_tags(all_recipes),
            "cuisines": cuisine_tags(all_recipes),
        }

    @app.get("/users/{user_id}/recipes/{recipe_id}/feasibility")
    async def recipe_feasibility(
        user_id: UUID,
        recipe_id: str,
        request: Request,
        pax: int | None = Query(default=None, gt=0),
    ) -> dict[str, object]:
        """Check whether the pantry covers a recipe."""
        state_container: AppContainer = request.app.state.container
        try:
            result = state_container.recipe_service.feasibility(
                user_id, recipe_id, pax or state_container.settings.default_pax
            )
        except RecipeNotFoundError as exc:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
            ) from exc
        return feasibility_payload(result)

    @app.get("/users/{user_id}/recipes/{recipe_id}/nutrition")
    async def recipe_nutrition(
        user_id: UUID,
        recipe_id: str,
        request: Request,
        pax: int | None = Query(default=None, gt=0),
    ) -> dict[str, object]:
        """Return scaled nutrition and cost for a recipe."""
        state_container: AppContainer = request.app.state.container
        try:
            calculation = state_container.recipe_service.calculate(
                user_id, recipe_id, pax or state_container.settings.default_pax
            )
        except RecipeNotFoundError as exc:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
            ) from exc
        except RecipeCalculationError as exc:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT, detail=str(exc)
            ) from exc
        return calculation_payload(calculation)

    @app.post("/users/{user_id}/recipes/{recipe_id}/cook")
    async def cook_recipe(
        user_id: UUID, recipe_id: str, body: CookRequest, request: Request
    ) -> dict[str, object]:
        """Cook a recipe and deduct its ingredients from the pantry."""
        state_container: AppContainer = request.app.state.container
        try:
            calculation = state_container.recipe_service.cook(
                user_id,
                recipe_id,
                pax=body.pax or state_container.settings.default_pax,
                days=body.days,
            )
        except RecipeNotFoundError as exc:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
            ) from exc
        except RecipeCalculationError as exc:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT, detail=str(exc)
            ) from exc
        return calculation_payload(calculation)

    @app.get("/foods/search")
    async def search_foods(
        request: Request,
        q: str = Query(min_length=1),
        limit: int = Query(default=5, gt=0, le=50),
    ) -> dict[str, object]:
        """Search FoodData Central for generic foods."""
        state_container: AppContainer = request.app.state.container
        try:
            foods = await state_container.nutrient_lookup_service.search(q, limit)
        except httpx.HTTPError as exc:
            logger.exception("Food search failed for %r", q)
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY) from exc
        return {"foods": [food_summary_payload(food) for food in foods]}

    @app.get("/foods/{fdc_id}")
    async def food_nutrients(fdc_id: int, request: Request) -> dict[str, object]:
        """Return per-100 g nutrient density for an FDC food."""
        state_container: AppContainer = request.app.state.container
        try:
            details = await state_container.nutrient_lookup_service.get_nutrients(
                fdc_id
            )
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == status.HTTP_404_NOT_FOUND:
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND) from exc
            logger.exception("Food lookup failed for %s", fdc_id)
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY) from exc
        except httpx.HTTPError as exc:
            logger.exception("Food lookup failed for %s", fdc_id)
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY) from exc
        return food_nutrients_payload(details)

    return app
