"""Supabase repository for pantry ingredients and inventory."""

from collections import defaultdict
from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from nutrition_pantry.adapters.supabase_rows import (
    nutrients_payload,
    parse_date,
    parse_datetime,
    parse_nutrients,
    parse_optional_float,
)
from nutrition_pantry.domain.pantry import (
    Ingredient,
    InventoryEntry,
    InventoryEvent,
    InventoryEventType,
)
from nutrition_pantry.domain.units import UnitKind
from nutrition_pantry.services.pantry import PantryRepository


@dataclass
class SupabasePantryRepository(PantryRepository):
    """Supabase-backed pantry persistence."""

    client: Client

    def list_ingredients(self, user_id: UUID) -> list[Ingredient]:
        """Return all pantry ingredients for a user."""
        response = (
            self.client.table("pantry_ingredients")
            .select("*")
            .eq("user_id", str(user_id))
            .order("name")
            .execute()
        )
        return [_parse_ingredient(row) for row in response.data or []]

    def get_ingredient(self, user_id: UUID, ingredient_id: UUID) -> Ingredient | None:
        """Return a pantry ingredient by id, if present."""
        response = (
            self.client.table("pantry_ingredients")
            .select("*")
            .eq("user_id", str(user_id))
            .eq("id", str(ingredient_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_ingredient(response.data[0])

    def save_ingredient(self, user_id: UUID, ingredient: Ingredient) -> None:
        """Insert or update a pantry ingredient row."""
        response = (
            self.client.table("pantry_ingredients")
            .upsert(
                {
                    "id": str(ingredient.id),
                    "user_id": str(user_id),
                    "name": ingredient.name,
                    "unit_kind": ingredient.unit_kind.value,
                    **nutrients_payload(ingredient.nutrients),
                    "price_per_base": ingredient.price_per_base,
                    "std_amount": ingredient.std_amount,
                    "package_size_base": ingredient.package_size_base,
                    "package_price": ingredient.package_price,
                    "category": ingredient.category,
                    "expiry_date": ingredient.expiry_date.isoformat()
                    if ingredient.expiry_date
                    else None,
                    "include_cost": ingredient.include_cost,
                },
                on_conflict="id",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save pantry ingredient")

    def delete_ingredient(self, user_id: UUID, ingredient_id: UUID) -> None:
        """Remove an ingredient and its inventory row."""
        (
            self.client.table("pantry_inventory")
            .delete()
            .eq("user_id", str(user_id))
            .eq("ingredient_id", str(ingredient_id))
            .execute()
        )
        (
            self.client.table("pantry_ingredients")
            .delete()
            .eq("user_id", str(user_id))
            .eq("id", str(ingredient_id))
            .execute()
        )

    def list_entries(self, user_id: UUID) -> dict[UUID, InventoryEntry]:
        """Return inventory entries with their event history."""
        inventory_response = (
            self.client.table("pantry_inventory")
            .select("ingredient_id, std_remaining")
            .eq("user_id", str(user_id))
            .execute()
        )
        events_response = (
            self.client.table("inventory_events")
            .select("ingredient_id, event_type, amount, note, at")
            .eq("user_id", str(user_id))
            .order("at")
            .execute()
        )
        history: dict[UUID, list[InventoryEvent]] = defaultdict(list)
        for row in events_response.data or []:
            history[UUID(str(row["ingredient_id"]))].append(_parse_event(row))

        entries: dict[UUID, InventoryEntry] = {}
        for row in inventory_response.data or []:
            ingredient_id = UUID(str(row["ingredient_id"]))
            entries[ingredient_id] = InventoryEntry(
                ingredient_id=ingredient_id,
                std_remaining=float(row.get("std_remaining") or 0.0),
                history=tuple(history.get(ingredient_id, [])),
            )
        return entries

    def save_entry(self, user_id: UUID, entry: InventoryEntry) -> None:
        """Upsert the remaining amount and append the newest event."""
        self.client.table("pantry_inventory").upsert(
            {
                "user_id": str(user_id),
                "ingredient_id": str(entry.ingredient_id),
                "std_remaining": entry.std_remaining,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="user_id,ingredient_id",
        ).execute()
        event = entry.last_event
        if event is None:
            return
        self.client.table("inventory_events").insert(
            {
                "user_id": str(user_id),
                "ingredient_id": str(entry.ingredient_id),
                "event_type": event.type.value,
                "amount": event.amount,
                "note": event.note,
                "at": event.at.isoformat(),
            }
        ).execute()


def _parse_ingredient(row: dict[str, object]) -> Ingredient:
    """Parse a pantry ingredient row into a domain model."""
    include_cost = row.get("include_cost")
    return Ingredient(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        unit_kind=UnitKind(str(row.get("unit_kind") or UnitKind.MASS)),
        nutrients=parse_nutrients(row),
        price_per_base=float(row.get("price_per_base") or 0.0),
        std_amount=float(row.get("std_amount") or 0.0),
        package_size_base=parse_optional_float(row.get("package_size_base")),
        package_price=parse_optional_float(row.get("package_price")),
        category=row.get("category"),
        expiry_date=parse_date(row.get("expiry_date")),
        include_cost=True if include_cost is None else bool(include_cost),
    )


def _parse_event(row: dict[str, object]) -> InventoryEvent:
    return InventoryEvent(
        type=InventoryEventType(str(row["event_type"])),
        amount=float(row.get("amount") or 0.0),
        at=parse_datetime(row["at"]),
        note=row.get("note"),
    )
