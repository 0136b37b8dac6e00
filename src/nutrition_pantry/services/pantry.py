"""Pantry service: stock acquisition, mutations and index snapshots."""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime, timedelta
from typing import Protocol
from uuid import UUID, uuid4

from nutrition_pantry.domain.nutrients import NutrientsPer100
from nutrition_pantry.domain.pantry import (
    CatalogFood,
    Ingredient,
    IngredientPurchase,
    InventoryChange,
    InventoryEntry,
    plan_purchase,
)
from nutrition_pantry.domain.units import Quantity, convert_to_base
from nutrition_pantry.errors import UnitKindMismatchError
from nutrition_pantry.services import inventory
from nutrition_pantry.services.feasibility import PantryIndex
from nutrition_pantry.services.naming import normalize_name

_logger = logging.getLogger(__name__)

InventoryListener = Callable[[InventoryChange], None]


class PantryRepository(Protocol):
    """Persistence interface for a user's pantry."""

    def list_ingredients(self, user_id: UUID) -> list[Ingredient]:
        """Return all pantry ingredients for a user."""

    def get_ingredient(self, user_id: UUID, ingredient_id: UUID) -> Ingredient | None:
        """Return a pantry ingredient by id, if present."""

    def save_ingredient(self, user_id: UUID, ingredient: Ingredient) -> None:
        """Insert or update a pantry ingredient."""

    def delete_ingredient(self, user_id: UUID, ingredient_id: UUID) -> None:
        """Remove an ingredient and its inventory entry."""

    def list_entries(self, user_id: UUID) -> dict[UUID, InventoryEntry]:
        """Return inventory entries keyed by ingredient id."""

    def save_entry(self, user_id: UUID, entry: InventoryEntry) -> None:
        """Persist the remaining amount and the newest history event."""


class FoodCatalogRepository(Protocol):
    """Read interface for the shared foods catalog."""

    def list_foods(self) -> list[CatalogFood]:
        """Return catalog foods with their aliases."""


@dataclass
class PantryService:
    """Application service for pantry stock."""

    repository: PantryRepository
    catalog: FoodCatalogRepository
    listeners: list[InventoryListener] = field(default_factory=list)

    def subscribe(self, listener: InventoryListener) -> None:
        """Register a callback invoked after each persisted mutation."""
        self.listeners.append(listener)

    def list_pantry(self, user_id: UUID) -> list[Ingredient]:
        """Return ingredients with stock taken from their inventory entries."""
        entries = self.repository.list_entries(user_id)
        return [
            _with_stock(ingredient, entries)
            for ingredient in self.repository.list_ingredients(user_id)
        ]

    def add_ingredient(  # noqa: PLR0913
        self,
        user_id: UUID,
        name: str,
        quantity: Quantity,
        price_per_100: float,
        nutrients: NutrientsPer100,
        package_size_base: float | None = None,
        category: str | None = None,
        expiry_date: date | None = None,
        include_cost: bool = True,
    ) -> IngredientPurchase:
        """Acquire stock, creating the ingredient on first use.

        Purchases are rounded up to whole packages when a package size is
        given. An existing ingredient with the same normalized name is
        restocked instead of duplicated.
        """
        base = convert_to_base(quantity.amount, quantity.unit)
        price_per_base = price_per_100 / 100
        plan = plan_purchase(base.value, price_per_base, package_size_base)
        existing = self._find_by_name(user_id, name)
        if existing is not None:
            if existing.unit_kind != base.kind:
                raise UnitKindMismatchError(existing.unit_kind.value, base.kind.value)
            restocked = self.restock(
                user_id, existing.id, plan.amount, note=f"Bought {name}"
            )
            if restocked is None:
                # Ingredient row saved without its inventory entry.
                entry = inventory.open_entry(replace(existing, std_amount=plan.amount))
                self.repository.save_entry(user_id, entry)
                self._notify(user_id, entry)
            entries = self.repository.list_entries(user_id)
            return IngredientPurchase(
                ingredient=_with_stock(existing, entries),
                added_amount=plan.amount,
                packages=plan.packages,
                total_price=plan.total_price,
                created=False,
            )

        ingredient = Ingredient(
            id=uuid4(),
            name=name,
            unit_kind=base.kind,
            nutrients=nutrients,
            price_per_base=price_per_base,
            std_amount=plan.amount,
            package_size_base=package_size_base,
            package_price=price_per_base * package_size_base
            if package_size_base
            else None,
            category=category,
            expiry_date=expiry_date,
            include_cost=include_cost,
        )
        entry = inventory.open_entry(ingredient)
        self.repository.save_ingredient(user_id, ingredient)
        self.repository.save_entry(user_id, entry)
        _logger.info(
            "Pantry add: user=%s ingredient=%s amount=%s packages=%s",
            user_id,
            name,
            plan.amount,
            plan.packages,
        )
        self._notify(user_id, entry)
        return IngredientPurchase(
            ingredient=ingredient,
            added_amount=plan.amount,
            packages=plan.packages,
            total_price=plan.total_price,
            created=True,
        )

    def update_ingredient(self, user_id: UUID, ingredient: Ingredient) -> None:
        """Persist edited ingredient attributes; stock is left to mutations."""
        self.repository.save_ingredient(user_id, ingredient)

    def remove_ingredient(self, user_id: UUID, ingredient_id: UUID) -> bool:
        """Delete an ingredient; returns False when it does not exist."""
        if self.repository.get_ingredient(user_id, ingredient_id) is None:
            return False
        self.repository.delete_ingredient(user_id, ingredient_id)
        return True

    def deduct(
        self,
        user_id: UUID,
        ingredient_id: UUID,
        std_amount: float,
        note: str | None = None,
    ) -> InventoryEntry | None:
        """Consume stock; over-deduction floors at zero."""
        return self._mutate(
            user_id,
            lambda current: inventory.deduct(current, ingredient_id, std_amount, note),
            ingredient_id,
        )

    def restock(
        self,
        user_id: UUID,
        ingredient_id: UUID,
        std_amount: float,
        note: str | None = None,
    ) -> InventoryEntry | None:
        """Add stock to an existing ingredient."""
        return self._mutate(
            user_id,
            lambda current: inventory.restock(current, ingredient_id, std_amount, note),
            ingredient_id,
        )

    def waste(
        self,
        user_id: UUID,
        ingredient_id: UUID,
        std_amount: float,
        note: str | None = None,
    ) -> InventoryEntry | None:
        """Record discarded stock."""
        return self._mutate(
            user_id,
            lambda current: inventory.waste(current, ingredient_id, std_amount, note),
            ingredient_id,
        )

    def undo(
        self,
        user_id: UUID,
        ingredient_id: UUID,
        delta: float,
        note: str | None = None,
    ) -> InventoryEntry | None:
        """Apply a signed stock correction."""
        return self._mutate(
            user_id,
            lambda current: inventory.undo(current, ingredient_id, delta, note),
            ingredient_id,
        )

    def reset_inventory(self, user_id: UUID) -> int:
        """Set every ingredient's stock to zero; returns the entry count."""
        entries = self.repository.list_entries(user_id)
        emptied = inventory.reset(entries, note="Inventory reset")
        for entry in emptied.values():
            self.repository.save_entry(user_id, entry)
            self._notify(user_id, entry)
        return len(emptied)

    def list_inventory(self, user_id: UUID) -> dict[UUID, InventoryEntry]:
        """Return every inventory entry keyed by ingredient id."""
        return self.repository.list_entries(user_id)

    def history(self, user_id: UUID, ingredient_id: UUID) -> InventoryEntry | None:
        """Return an ingredient's inventory entry with its audit trail."""
        return self.repository.list_entries(user_id).get(ingredient_id)

    def build_index(self, user_id: UUID) -> PantryIndex:
        """Snapshot the pantry for feasibility and nutrition calculations.

        Catalog foods the user has never stocked are included with zero stock
        so recipes referencing them report a shortage rather than a miss.
        """
        ingredients = self.list_pantry(user_id)
        foods = self.catalog.list_foods()
        stocked = {normalize_name(ingredient.name) for ingredient in ingredients}
        placeholders = [
            Ingredient(
                id=food.id,
                name=food.name,
                unit_kind=food.unit_kind,
                nutrients=food.nutrients,
                price_per_base=0.0,
                std_amount=0.0,
                category=food.category,
            )
            for food in foods
            if stocked.isdisjoint(
                normalize_name(name) for name in (food.name, *food.aliases)
            )
        ]
        return PantryIndex.build([*ingredients, *placeholders], foods)

    def expiring_soon(
        self, user_id: UUID, days: int, today: date | None = None
    ) -> list[Ingredient]:
        """Return stocked ingredients that expire within the given days."""
        start = today or datetime.now(tz=UTC).date()
        horizon = start + timedelta(days=days)
        items = [
            ingredient
            for ingredient in self.list_pantry(user_id)
            if ingredient.expiry_date is not None
            and ingredient.std_amount > 0
            and ingredient.expiry_date <= horizon
        ]
        return sorted(items, key=lambda item: item.expiry_date or horizon)

    def expired(self, user_id: UUID, today: date | None = None) -> list[Ingredient]:
        """Return stocked ingredients past their expiry date."""
        current = today or datetime.now(tz=UTC).date()
        return [
            ingredient
            for ingredient in self.list_pantry(user_id)
            if ingredient.expiry_date is not None
            and ingredient.std_amount > 0
            and ingredient.expiry_date < current
        ]

    def _find_by_name(self, user_id: UUID, name: str) -> Ingredient | None:
        key = normalize_name(name)
        for ingredient in self.repository.list_ingredients(user_id):
            if normalize_name(ingredient.name) == key:
                return ingredient
        return None

    def _mutate(
        self,
        user_id: UUID,
        mutation: Callable[[dict[UUID, InventoryEntry]], Mapping[UUID, InventoryEntry]],
        ingredient_id: UUID,
    ) -> InventoryEntry | None:
        entries = self.repository.list_entries(user_id)
        updated = mutation(entries)
        if updated is entries:
            return None
        entry = updated[ingredient_id]
        self.repository.save_entry(user_id, entry)
        self._notify(user_id, entry)
        return entry

    def _notify(self, user_id: UUID, entry: InventoryEntry) -> None:
        event = entry.last_event
        if event is None:
            return
        change = InventoryChange(
            user_id=user_id,
            ingredient_id=entry.ingredient_id,
            event=event,
            std_remaining=entry.std_remaining,
        )
        for listener in self.listeners:
            try:
                listener(change)
            except Exception:
                _logger.exception(
                    "Inventory listener failed for ingredient %s", entry.ingredient_id
                )


def _with_stock(
    ingredient: Ingredient, entries: Mapping[UUID, InventoryEntry]
) -> Ingredient:
    entry = entries.get(ingredient.id)
    if entry is None:
        return ingredient
    return replace(ingredient, std_amount=entry.std_remaining)
