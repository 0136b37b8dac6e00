"""Nutrient density lookup backed by USDA FoodData Central."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from nutrition_pantry.adapters.fdc_client import FdcClient
from nutrition_pantry.domain.foods import FoodNutrients, FoodSummary
from nutrition_pantry.domain.nutrients import Macros, NutrientsPer100
from nutrition_pantry.services.cache import Cache

_MACRO_IDS = {
    1005: "carbs",
    1004: "fats",
    1003: "protein",
}

_MICRO_IDS = {
    1079: "fiber",
    2000: "sugars",
    1093: "sodium",
    1087: "calcium",
    1089: "iron",
    1092: "potassium",
    1162: "vitaminC",
}

_logger = logging.getLogger(__name__)


@dataclass
class NutrientLookupService:
    """Looks up per-100 g nutrient density for new pantry ingredients."""

    fdc_client: FdcClient
    cache: Cache
    search_ttl_seconds: int = 3600
    food_ttl_seconds: int = 86400
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def search(self, query: str, limit: int = 5) -> list[FoodSummary]:
        """Search FDC, caching results per normalized query."""
        cache_key = f"fdc:search:{query.strip().lower()}:{limit}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        payload = await self._call_with_retry(
            lambda: self.fdc_client.search_foods(query, page_size=limit),
            action="search",
        )
        foods = [_parse_summary(food) for food in payload.get("foods", [])]
        self.cache.set(cache_key, foods, ttl_seconds=self.search_ttl_seconds)
        return foods

    async def get_nutrients(self, fdc_id: int) -> FoodNutrients:
        """Return macro and micro density for an FDC food."""
        cache_key = f"fdc:food:{fdc_id}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, FoodNutrients):
            return cached

        payload = await self._call_with_retry(
            lambda: self.fdc_client.get_food(fdc_id),
            action=f"get_food:{fdc_id}",
        )
        details = FoodNutrients(
            summary=_parse_summary(payload),
            nutrients=extract_nutrients(payload.get("foodNutrients", [])),
        )
        self.cache.set(cache_key, details, ttl_seconds=self.food_ttl_seconds)
        return details

    async def _call_with_retry(
        self, func: Callable[[], Awaitable[dict[str, object]]], *, action: str
    ) -> dict[str, object]:
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                _logger.warning(
                    "FDC %s failed (attempt %s/%s, status=%s): %s",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    _status_code_from_exception(exc),
                    exc,
                )
                if attempt > self.retry_attempts:
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


def extract_nutrients(food_nutrients: list[dict[str, object]]) -> NutrientsPer100:
    """Map FDC nutrient rows onto macros and named micros."""
    macros: dict[str, float] = {"carbs": 0.0, "fats": 0.0, "protein": 0.0}
    micros: dict[str, float] = {}
    for nutrient in food_nutrients:
        info = nutrient.get("nutrient") or {}
        nutrient_id = info.get("id") or nutrient.get("nutrientId")
        amount = nutrient.get("amount", nutrient.get("value"))
        if amount is None:
            continue
        if nutrient_id in _MACRO_IDS:
            macros[_MACRO_IDS[nutrient_id]] = float(amount)
        elif nutrient_id in _MICRO_IDS:
            micros[_MICRO_IDS[nutrient_id]] = float(amount)
    return NutrientsPer100(macros=Macros(**macros), micros=micros)


def _parse_summary(food: dict[str, object]) -> FoodSummary:
    return FoodSummary(
        fdc_id=int(food["fdcId"]),
        description=str(food.get("description", "")),
        brand_owner=food.get("brandOwner"),
        data_type=food.get("dataType"),
    )


def _status_code_from_exception(exc: Exception) -> str:
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"
