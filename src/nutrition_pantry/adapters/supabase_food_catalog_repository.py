"""Supabase repository for the shared foods catalog."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from nutrition_pantry.adapters.supabase_rows import parse_nutrients
from nutrition_pantry.domain.pantry import CatalogFood
from nutrition_pantry.domain.units import UnitKind
from nutrition_pantry.services.pantry import FoodCatalogRepository


@dataclass
class SupabaseFoodCatalogRepository(FoodCatalogRepository):
    """Reads the `foods` table with its aliases."""

    client: Client

    def list_foods(self) -> list[CatalogFood]:
        """Return catalog foods ordered by name."""
        response = (
            self.client.table("foods")
            .select(
                "id, name, aliases, category, unit_kind, carbs_per_100, "
                "fats_per_100, protein_per_100, micros"
            )
            .order("name")
            .execute()
        )
        return [_parse_food(row) for row in response.data or []]


def _parse_food(row: dict[str, object]) -> CatalogFood:
    return CatalogFood(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        unit_kind=UnitKind(str(row.get("unit_kind") or UnitKind.MASS)),
        nutrients=parse_nutrients(row),
        aliases=tuple(str(alias) for alias in row.get("aliases") or []),
        category=row.get("category"),
    )
