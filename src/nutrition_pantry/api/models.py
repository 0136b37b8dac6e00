"""Pydantic request bodies for the pantry API."""

from datetime import date

from pydantic import BaseModel, Field

from nutrition_pantry.domain.nutrients import Macros, NutrientsPer100
from nutrition_pantry.domain.units import Unit


class NutrientsBody(BaseModel):
    """Nutrient density per 100 base units."""

    carbs: float = 0.0
    fats: float = 0.0
    protein: float = 0.0
    micros: dict[str, float] = Field(default_factory=dict)

    def to_domain(self) -> NutrientsPer100:
        """Convert to the domain nutrient record."""
        return NutrientsPer100(
            macros=Macros(carbs=self.carbs, fats=self.fats, protein=self.protein),
            micros=dict(self.micros),
        )


class AddIngredientRequest(BaseModel):
    """Stock acquisition payload."""

    name: str = Field(min_length=1)
    amount: float = Field(gt=0)
    unit: Unit
    price_per_100: float = Field(default=0.0, ge=0)
    nutrients: NutrientsBody = Field(default_factory=NutrientsBody)
    package_size_base: float | None = Field(default=None, gt=0)
    category: str | None = None
    expiry_date: date | None = None
    include_cost: bool = True


class InventoryMutationRequest(BaseModel):
    """Amount in base units for deduct, restock and waste."""

    amount: float = Field(ge=0)
    note: str | None = None


class CookRequest(BaseModel):
    """Cook a recipe for pax people over a number of days."""

    pax: int | None = Field(default=None, gt=0)
    days: int = Field(default=1, gt=0)
