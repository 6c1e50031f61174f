"""Rendering quantities for display."""

from decimal import ROUND_HALF_UP, Decimal
from fractions import Fraction
from typing import Literal

from mealplanner.normalize.quantity import RationalQuantity, normalize
from mealplanner.normalize.units import Unit

FormatMode = Literal["fraction", "decimal", "auto"]

DEFAULT_DECIMAL_PLACES = 2

PLURAL_UNIT_NAMES: dict[Unit, tuple[str, str]] = {
    Unit.ML: ("ml", "ml"),
    Unit.L: ("liter", "liters"),
    Unit.TSP: ("teaspoon", "teaspoons"),
    Unit.TBSP: ("tablespoon", "tablespoons"),
    Unit.FL_OZ: ("fluid ounce", "fluid ounces"),
    Unit.CUP: ("cup", "cups"),
    Unit.G: ("g", "g"),
    Unit.KG: ("kg", "kg"),
    Unit.OZ: ("ounce", "ounces"),
    Unit.LB: ("pound", "pounds"),
}


def _decimal_string(value: Fraction, places: int) -> str:
    """Round half-up to ``places`` and trim trailing zeros."""
    exact = Decimal(value.numerator) / Decimal(value.denominator)
    rounded = exact.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    if rounded == 0:
        return "0"
    text = f"{rounded:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_quantity(
    q: RationalQuantity,
    mode: FormatMode = "auto",
    decimal_places: int = DEFAULT_DECIMAL_PLACES,
) -> str:
    """
    Format a quantity as a string.

    Examples:
        (1, 1, 2) -> "1 1/2"
        (0, 2, 4) -> "1/2"
        (2, 0, 1) -> "2"
        (1, 1, 2), mode="decimal" -> "1.5"
    """
    normalized = normalize(q)

    if mode == "decimal" or (mode == "auto" and normalized.num == 0):
        return _decimal_string(normalized.to_fraction(), decimal_places)

    if mode not in ("fraction", "auto"):
        raise ValueError(f"Unknown format mode: {mode}")

    sign = "-" if normalized.whole < 0 or normalized.num < 0 else ""
    whole, num = abs(normalized.whole), abs(normalized.num)

    parts = []
    if whole:
        parts.append(str(whole))
    if num:
        parts.append(f"{num}/{normalized.denom}")

    if not parts:
        return "0"

    return sign + " ".join(parts)


def format_decimal(quantity: float, decimal_places: int = DEFAULT_DECIMAL_PLACES) -> str:
    """Format a decimal-model quantity, e.g. 1.50 -> "1.5", 2.0 -> "2"."""
    return _decimal_string(Fraction(str(quantity)), decimal_places)


def pluralize_unit(unit: Unit | str, quantity: RationalQuantity | float) -> str:
    """Long unit name, e.g. ("tbsp", 2) -> "tablespoons"."""
    unit = Unit.parse(unit)
    value = quantity.to_fraction() if isinstance(quantity, RationalQuantity) else quantity
    singular, plural = PLURAL_UNIT_NAMES[unit]
    return singular if abs(value) == 1 else plural


def format_quantity_with_unit(
    quantity: RationalQuantity | float,
    unit: Unit | str,
    style: Literal["short", "long"] = "short",
    mode: FormatMode = "auto",
    decimal_places: int = DEFAULT_DECIMAL_PLACES,
) -> str:
    """
    Format a quantity with its unit.

    E.g. (1 1/2, "cup") -> "1 1/2 cup", or "1 1/2 cups" with style="long".
    """
    unit = Unit.parse(unit)

    if isinstance(quantity, RationalQuantity):
        quantity_str = format_quantity(quantity, mode, decimal_places)
    else:
        quantity_str = format_decimal(quantity, decimal_places)

    unit_str = pluralize_unit(unit, quantity) if style == "long" else unit.value
    return f"{quantity_str} {unit_str}"
