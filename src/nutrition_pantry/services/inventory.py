"""Pure inventory mutations.

Each function takes an inventory mapping keyed by ingredient id and returns a
new dict with one entry replaced. The replaced entry gains exactly one history
event. Unknown ids leave the inventory untouched and the same mapping object
is returned, so callers can detect a no-op with ``is``.
"""

from collections.abc import Mapping
from dataclasses import replace
from datetime import UTC, datetime
from uuid import UUID

from nutrition_pantry.domain.pantry import (
    Ingredient,
    InventoryEntry,
    InventoryEvent,
    InventoryEventType,
)

Inventory = Mapping[UUID, InventoryEntry]


def open_entry(ingredient: Ingredient, at: datetime | None = None) -> InventoryEntry:
    """Create the inventory entry for a newly stocked ingredient."""
    event = InventoryEvent(
        type=InventoryEventType.ADD,
        amount=ingredient.std_amount,
        at=at or _now(),
    )
    return InventoryEntry(
        ingredient_id=ingredient.id,
        std_remaining=max(0.0, ingredient.std_amount),
        history=(event,),
    )


def deduct(
    inventory: Inventory,
    ingredient_id: UUID,
    std_amount: float,
    note: str | None = None,
    at: datetime | None = None,
) -> Inventory:
    """Consume stock, flooring the remainder at zero."""
    return _apply(
        inventory,
        ingredient_id,
        delta=-std_amount,
        event_type=InventoryEventType.DEDUCT,
        logged_amount=std_amount,
        note=note,
        at=at,
    )


def waste(
    inventory: Inventory,
    ingredient_id: UUID,
    std_amount: float,
    note: str | None = None,
    at: datetime | None = None,
) -> Inventory:
    """Discard stock, flooring the remainder at zero."""
    return _apply(
        inventory,
        ingredient_id,
        delta=-std_amount,
        event_type=InventoryEventType.WASTE,
        logged_amount=std_amount,
        note=note,
        at=at,
    )


def restock(
    inventory: Inventory,
    ingredient_id: UUID,
    std_amount: float,
    note: str | None = None,
    at: datetime | None = None,
) -> Inventory:
    """Add stock without an upper bound."""
    return _apply(
        inventory,
        ingredient_id,
        delta=std_amount,
        event_type=InventoryEventType.RESTOCK,
        logged_amount=std_amount,
        note=note,
        at=at,
    )


def undo(
    inventory: Inventory,
    ingredient_id: UUID,
    delta: float,
    note: str | None = None,
    at: datetime | None = None,
) -> Inventory:
    """Apply a signed correction, flooring the remainder at zero."""
    return _apply(
        inventory,
        ingredient_id,
        delta=delta,
        event_type=InventoryEventType.UNDO,
        logged_amount=delta,
        note=note,
        at=at,
    )


def reset(
    inventory: Inventory, note: str | None = None, at: datetime | None = None
) -> dict[UUID, InventoryEntry]:
    """Empty every entry, logging the discarded remainder as waste."""
    moment = at or _now()
    result: dict[UUID, InventoryEntry] = {}
    for ingredient_id, entry in inventory.items():
        event = InventoryEvent(
            type=InventoryEventType.WASTE,
            amount=entry.std_remaining,
            at=moment,
            note=note,
        )
        result[ingredient_id] = replace(
            entry, std_remaining=0.0, history=(*entry.history, event)
        )
    return result


def _apply(  # noqa: PLR0913
    inventory: Inventory,
    ingredient_id: UUID,
    delta: float,
    event_type: InventoryEventType,
    logged_amount: float,
    note: str | None,
    at: datetime | None,
) -> Inventory:
    entry = inventory.get(ingredient_id)
    if entry is None:
        return inventory
    event = InventoryEvent(
        type=event_type, amount=logged_amount, at=at or _now(), note=note
    )
    updated = replace(
        entry,
        std_remaining=max(0.0, entry.std_remaining + delta),
        history=(*entry.history, event),
    )
    return {**inventory, ingredient_id: updated}


def _now() -> datetime:
    return datetime.now(tz=UTC)
