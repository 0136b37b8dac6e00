"""Measurement units and conversion to base amounts."""

from dataclasses import dataclass
from enum import StrEnum

from nutrition_pantry.errors import UnitKindMismatchError


class UnitKind(StrEnum):
    """Physical dimension of a unit."""

    MASS = "mass"
    VOLUME = "volume"
    COUNT = "count"


class Unit(StrEnum):
    """Supported measurement units."""

    MG = "mg"
    G = "g"
    KG = "kg"
    LB = "lb"
    OZ = "oz"
    ML = "ml"
    L = "l"
    TSP = "tsp"
    TBSP = "tbsp"
    CUP = "cup"
    PIECE = "piece"


# Grams per unit.
_MASS_FACTORS: dict[Unit, float] = {
    Unit.MG: 0.001,
    Unit.G: 1.0,
    Unit.KG: 1000.0,
    Unit.LB: 453.59237,
    Unit.OZ: 28.349523125,
}

# Milliliters per unit.
_VOLUME_FACTORS: dict[Unit, float] = {
    Unit.ML: 1.0,
    Unit.L: 1000.0,
    Unit.TSP: 4.92892,
    Unit.TBSP: 14.7868,
    Unit.CUP: 240.0,
}

KILO_THRESHOLD = 1000.0


@dataclass(frozen=True)
class Quantity:
    """Amount and unit as entered by a user."""

    amount: float
    unit: Unit


@dataclass(frozen=True)
class BaseAmount:
    """Amount in grams, milliliters or pieces, tagged with its kind."""

    value: float
    kind: UnitKind

    def __add__(self, other: "BaseAmount") -> "BaseAmount":
        self._check_kind(other)
        return BaseAmount(self.value + other.value, self.kind)

    def __lt__(self, other: "BaseAmount") -> bool:
        self._check_kind(other)
        return self.value < other.value

    def __le__(self, other: "BaseAmount") -> bool:
        self._check_kind(other)
        return self.value <= other.value

    def __gt__(self, other: "BaseAmount") -> bool:
        self._check_kind(other)
        return self.value > other.value

    def __ge__(self, other: "BaseAmount") -> bool:
        self._check_kind(other)
        return self.value >= other.value

    def scaled(self, factor: float) -> "BaseAmount":
        """Return this amount multiplied by a plain factor."""
        return BaseAmount(self.value * factor, self.kind)

    def _check_kind(self, other: "BaseAmount") -> None:
        if other.kind != self.kind:
            raise UnitKindMismatchError(self.kind.value, other.kind.value)


def get_unit_kind(unit: Unit | str) -> UnitKind:
    """Return the kind a unit belongs to."""
    resolved = Unit(unit)
    if resolved is Unit.PIECE:
        return UnitKind.COUNT
    if resolved in _VOLUME_FACTORS:
        return UnitKind.VOLUME
    return UnitKind.MASS


def convert_to_base(amount: float, unit: Unit | str) -> BaseAmount:
    """Convert an amount to grams (mass), milliliters (volume) or pieces."""
    resolved = Unit(unit)
    kind = get_unit_kind(resolved)
    if kind is UnitKind.MASS:
        return BaseAmount(amount * _MASS_FACTORS[resolved], kind)
    if kind is UnitKind.VOLUME:
        return BaseAmount(amount * _VOLUME_FACTORS[resolved], kind)
    return BaseAmount(amount, kind)


def from_base(value: float, unit: Unit | str) -> float:
    """Express a base value in the given unit of the same kind."""
    resolved = Unit(unit)
    if resolved in _MASS_FACTORS:
        return value / _MASS_FACTORS[resolved]
    if resolved in _VOLUME_FACTORS:
        return value / _VOLUME_FACTORS[resolved]
    return value


def format_base_quantity(value: float, kind: UnitKind | str) -> str:
    """Render a base value with a human-scaled unit label."""
    resolved = UnitKind(kind)
    if resolved is UnitKind.COUNT:
        return f"{value:.0f} pcs"
    if resolved is UnitKind.MASS:
        if value >= KILO_THRESHOLD:
            return f"{value / KILO_THRESHOLD:.2f} kg"
        return f"{value:.0f} g"
    if value >= KILO_THRESHOLD:
        return f"{value / KILO_THRESHOLD:.2f} L"
    return f"{value:.0f} ml"
