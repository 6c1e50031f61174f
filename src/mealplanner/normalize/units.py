"""Unit normalization and conversion utilities."""

from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from typing import overload

from mealplanner.config import get_settings
from mealplanner.errors import CrossFamilyConversionError, UnknownUnitError
from mealplanner.normalize.quantity import RationalQuantity, normalize


DEFAULT_FRACTION_RESOLUTION = 16
BASE_VALUE_PLACES = 2


class MeasurementType(str, Enum):
    VOLUME = "volume"
    MASS = "mass"


class Unit(str, Enum):
    """Supported units. Volume units convert through ml, mass units through g."""

    ML = "ml"
    L = "L"
    TSP = "tsp"
    TBSP = "tbsp"
    FL_OZ = "fl oz"
    CUP = "cup"
    G = "g"
    KG = "kg"
    OZ = "oz"
    LB = "lb"

    def __str__(self) -> str:
        return self.value

    @property
    def measurement_type(self) -> MeasurementType:
        return measurement_type(self)

    @property
    def factor(self) -> Fraction:
        """Exact multiplier to this unit's base unit."""
        return CONVERSION_FACTORS[self]

    @classmethod
    def parse(cls, text: "str | Unit") -> "Unit":
        """
        Look up a unit by its symbol or a common spelling.

        Examples:
            "cup", "cups", "Cups" -> Unit.CUP
            "l", "litre" -> Unit.L
            "fluid ounces" -> Unit.FL_OZ
        """
        if isinstance(text, Unit):
            return text
        if not isinstance(text, str):
            raise UnknownUnitError(text)

        cleaned = " ".join(text.strip().split())
        try:
            return cls(cleaned)
        except ValueError:
            pass

        unit = UNIT_ALIASES.get(cleaned.lower())
        if unit is None:
            raise UnknownUnitError(text)
        return unit


# =============================================================================
# Unit Conversion Tables
# =============================================================================

# Volume conversions (base unit: ml)
VOLUME_TO_ML: dict[Unit, Fraction] = {
    Unit.ML: Fraction(1),
    Unit.L: Fraction(1000),
    Unit.TSP: Fraction("4.92892"),
    Unit.TBSP: Fraction("14.7868"),
    Unit.FL_OZ: Fraction("29.5735"),
    Unit.CUP: Fraction("236.588"),
}

# Mass conversions (base unit: g)
MASS_TO_G: dict[Unit, Fraction] = {
    Unit.G: Fraction(1),
    Unit.KG: Fraction(1000),
    Unit.OZ: Fraction("28.3495"),
    Unit.LB: Fraction("453.592"),
}

CONVERSION_FACTORS: dict[Unit, Fraction] = {**VOLUME_TO_ML, **MASS_TO_G}

BASE_UNITS: dict[MeasurementType, Unit] = {
    MeasurementType.VOLUME: Unit.ML,
    MeasurementType.MASS: Unit.G,
}

UNIT_ALIASES: dict[str, Unit] = {
    # Metric volume
    "ml": Unit.ML,
    "milliliter": Unit.ML,
    "milliliters": Unit.ML,
    "millilitre": Unit.ML,
    "millilitres": Unit.ML,
    "l": Unit.L,
    "liter": Unit.L,
    "liters": Unit.L,
    "litre": Unit.L,
    "litres": Unit.L,
    # US customary volume
    "tsp": Unit.TSP,
    "teaspoon": Unit.TSP,
    "teaspoons": Unit.TSP,
    "tbsp": Unit.TBSP,
    "tbs": Unit.TBSP,
    "tablespoon": Unit.TBSP,
    "tablespoons": Unit.TBSP,
    "fl oz": Unit.FL_OZ,
    "fl. oz": Unit.FL_OZ,
    "fluid ounce": Unit.FL_OZ,
    "fluid ounces": Unit.FL_OZ,
    "cup": Unit.CUP,
    "cups": Unit.CUP,
    # Metric mass
    "g": Unit.G,
    "gram": Unit.G,
    "grams": Unit.G,
    "kg": Unit.KG,
    "kilogram": Unit.KG,
    "kilograms": Unit.KG,
    # Imperial mass
    "oz": Unit.OZ,
    "ounce": Unit.OZ,
    "ounces": Unit.OZ,
    "lb": Unit.LB,
    "lbs": Unit.LB,
    "pound": Unit.LB,
    "pounds": Unit.LB,
}


@dataclass(frozen=True)
class BaseQuantity:
    """A value expressed in its family's base unit (ml or g)."""

    value: float
    unit: Unit

    @property
    def measurement_type(self) -> MeasurementType:
        return measurement_type(self.unit)


# =============================================================================
# Lookup Functions
# =============================================================================


def measurement_type(unit: Unit | str) -> MeasurementType:
    """Determine whether a unit measures volume or mass."""
    unit = Unit.parse(unit)
    if unit in VOLUME_TO_ML:
        return MeasurementType.VOLUME
    if unit in MASS_TO_G:
        return MeasurementType.MASS
    raise UnknownUnitError(unit)


def base_unit_for(unit: Unit | str) -> Unit:
    return BASE_UNITS[measurement_type(unit)]


def volume_units() -> list[Unit]:
    return list(VOLUME_TO_ML)


def mass_units() -> list[Unit]:
    return list(MASS_TO_G)


def can_combine(unit1: Unit | str, unit2: Unit | str) -> bool:
    """Check if two units belong to the same measurement family."""
    return measurement_type(unit1) == measurement_type(unit2)


def _check_same_family(from_unit: Unit, to_unit: Unit) -> None:
    from_type = measurement_type(from_unit)
    to_type = measurement_type(to_unit)
    if from_type != to_type:
        raise CrossFamilyConversionError(
            from_unit,
            to_unit,
            f"Cannot convert between {from_type.value} and {to_type.value} units. "
            f"{from_unit} is {from_type.value}, {to_unit} is {to_type.value}.",
        )


# =============================================================================
# Conversion Functions
# =============================================================================


def round_to_fraction(
    value: Fraction | float, resolution: int = DEFAULT_FRACTION_RESOLUTION
) -> RationalQuantity:
    """
    Round a value to the nearest 1/resolution, e.g. 0.33 -> 5/16.

    Halves round away from zero.
    """
    exact = Fraction(value)
    scaled = abs(exact) * resolution
    steps = int(scaled + Fraction(1, 2))
    if exact < 0:
        steps = -steps
    return normalize(RationalQuantity(0, steps, resolution))


def _round_value(value: Fraction, places: int = BASE_VALUE_PLACES) -> float:
    return round(float(value), places)


@overload
def convert_quantity(
    quantity: RationalQuantity,
    from_unit: Unit | str,
    to_unit: Unit | str,
    resolution: int | None = ...,
) -> RationalQuantity: ...


@overload
def convert_quantity(
    quantity: float,
    from_unit: Unit | str,
    to_unit: Unit | str,
    resolution: int | None = ...,
) -> float: ...


def convert_quantity(quantity, from_unit, to_unit, resolution=None):
    """
    Convert a quantity between two units of the same measurement family.

    A RationalQuantity comes back rounded to the nearest 1/resolution (a
    practical kitchen fraction, 1/16 unless ``conversion_fraction_resolution``
    says otherwise); a plain number comes back rounded to 2 decimal places
    (a precise shopping total). Converting to the same unit returns the input
    untouched.

    E.g. convert_quantity(2, "cup", "ml") -> 473.18

    Raises:
        UnknownUnitError: Either unit is not supported.
        CrossFamilyConversionError: One unit is volume and the other mass.
    """
    from_unit = Unit.parse(from_unit)
    to_unit = Unit.parse(to_unit)
    _check_same_family(from_unit, to_unit)

    if from_unit == to_unit:
        return quantity

    ratio = from_unit.factor / to_unit.factor

    if isinstance(quantity, RationalQuantity):
        resolution = resolution or get_settings().conversion_fraction_resolution
        return round_to_fraction(quantity.to_fraction() * ratio, resolution)

    return _round_value(Fraction(quantity) * ratio)


def to_base_units(quantity: RationalQuantity | float, unit: Unit | str) -> BaseQuantity:
    """Convert a quantity to ml (volume) or g (mass), rounded to 2 decimal places."""
    unit = Unit.parse(unit)
    base_unit = base_unit_for(unit)

    if isinstance(quantity, RationalQuantity):
        exact = quantity.to_fraction()
    else:
        exact = Fraction(quantity)

    return BaseQuantity(value=_round_value(exact * unit.factor), unit=base_unit)


def from_base_units(base_value: float, base_unit: Unit | str, target_unit: Unit | str) -> float:
    """
    Convert a base-unit value back to a target unit, rounded to 2 decimal places.

    Useful for showing an aggregated total in a preferred unit.
    """
    base_unit = Unit.parse(base_unit)
    target_unit = Unit.parse(target_unit)

    if base_unit not in BASE_UNITS.values():
        raise CrossFamilyConversionError(base_unit, target_unit, f"{base_unit} is not a base unit")
    if measurement_type(base_unit) != measurement_type(target_unit):
        raise CrossFamilyConversionError(
            base_unit, target_unit, f"Cannot convert {base_unit} to {target_unit}"
        )

    return _round_value(Fraction(base_value) / target_unit.factor)
