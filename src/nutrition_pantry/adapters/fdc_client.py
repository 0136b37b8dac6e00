"""USDA FoodData Central HTTP client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

_TIMEOUT_SECONDS = 15


class FdcClient(Protocol):
    """Interface for FoodData Central lookups."""

    async def search_foods(self, query: str, page_size: int = 10) -> dict[str, object]:
        """Search foods and return the raw response body."""

    async def get_food(self, fdc_id: int) -> dict[str, object]:
        """Return the raw food record for an FDC id."""


@dataclass
class HttpxFdcClient(FdcClient):
    """FoodData Central client on a shared httpx session."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, api_key: str, base_url: str) -> "HttpxFdcClient":
        """Build a client that owns its httpx session."""
        return cls(api_key=api_key, base_url=base_url, http_client=httpx.AsyncClient())

    async def search_foods(self, query: str, page_size: int = 10) -> dict[str, object]:
        """POST a search restricted to generic food records."""
        response = await self.http_client.post(
            f"{self.base_url}/foods/search",
            params={"api_key": self.api_key},
            json={
                "query": query,
                "pageSize": page_size,
                "dataType": ["Foundation", "SR Legacy"],
            },
            timeout=_TIMEOUT_SECONDS,
        )
        response.raise_for_status()
        return response.json()

    async def get_food(self, fdc_id: int) -> dict[str, object]:
        """GET a single food with its nutrients."""
        response = await self.http_client.get(
            f"{self.base_url}/food/{fdc_id}",
            params={"api_key": self.api_key},
            timeout=_TIMEOUT_SECONDS,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the httpx session."""
        await self.http_client.aclose()
