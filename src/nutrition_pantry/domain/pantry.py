"""Domain models for pantry ingredients and inventory."""

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from uuid import UUID

from nutrition_pantry.domain.nutrients import NutrientsPer100
from nutrition_pantry.domain.units import BaseAmount, UnitKind


@dataclass(frozen=True)
class Ingredient:
    """A pantry ingredient with its stock in base units."""

    id: UUID
    name: str
    unit_kind: UnitKind
    nutrients: NutrientsPer100
    price_per_base: float
    std_amount: float
    package_size_base: float | None = None
    package_price: float | None = None
    category: str | None = None
    expiry_date: date | None = None
    include_cost: bool = True

    @property
    def stock(self) -> BaseAmount:
        """Quantity on hand as a tagged base amount."""
        return BaseAmount(self.std_amount, self.unit_kind)

    @property
    def effective_price_per_base(self) -> float:
        """Price used for cost totals, zero when cost tracking is off."""
        return self.price_per_base if self.include_cost else 0.0


@dataclass(frozen=True)
class CatalogFood:
    """A food from the shared catalog, with alternative names."""

    id: UUID
    name: str
    unit_kind: UnitKind
    nutrients: NutrientsPer100
    aliases: tuple[str, ...] = ()
    category: str | None = None


class InventoryEventType(StrEnum):
    """Kinds of inventory history events."""

    ADD = "add"
    DEDUCT = "deduct"
    RESTOCK = "restock"
    WASTE = "waste"
    UNDO = "undo"


@dataclass(frozen=True)
class InventoryEvent:
    """Single audit entry for an inventory mutation."""

    type: InventoryEventType
    amount: float
    at: datetime
    note: str | None = None


@dataclass(frozen=True)
class InventoryEntry:
    """Remaining stock of an ingredient plus its audit trail."""

    ingredient_id: UUID
    std_remaining: float
    history: tuple[InventoryEvent, ...] = field(default_factory=tuple)

    @property
    def last_event(self) -> InventoryEvent | None:
        """Most recent history event, if any."""
        return self.history[-1] if self.history else None


@dataclass(frozen=True)
class PurchasePlan:
    """Stock actually bought once package sizes are applied."""

    amount: float
    packages: int | None
    total_price: float


@dataclass(frozen=True)
class IngredientPurchase:
    """Result of acquiring stock for an ingredient."""

    ingredient: Ingredient
    added_amount: float
    packages: int | None
    total_price: float
    created: bool


@dataclass(frozen=True)
class InventoryChange:
    """Notification emitted after an inventory mutation is persisted."""

    user_id: UUID
    ingredient_id: UUID
    event: InventoryEvent
    std_remaining: float


def plan_purchase(
    std_needed: float, price_per_base: float, package_size_base: float | None
) -> PurchasePlan:
    """Round a purchase up to whole packages and price the rounded amount."""
    if package_size_base and package_size_base > 0:
        packages = math.ceil(std_needed / package_size_base)
        amount = packages * package_size_base
        return PurchasePlan(
            amount=amount, packages=packages, total_price=amount * price_per_base
        )
    return PurchasePlan(
        amount=std_needed, packages=None, total_price=std_needed * price_per_base
    )
