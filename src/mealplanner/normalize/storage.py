"""Conversion between stored quantity columns and RationalQuantity."""

from typing import TypedDict

from mealplanner.normalize.parsing import validate_decimal_quantity
from mealplanner.normalize.quantity import RationalQuantity


class QuantityColumns(TypedDict):
    quantity_whole: int
    quantity_num: int
    quantity_denom: int


def db_to_quantity(quantity_whole: int, quantity_num: int, quantity_denom: int) -> RationalQuantity:
    """
    Build a quantity from the (whole, num, denom) columns of a recipe ingredient row.

    Raises:
        ZeroDenominatorError: The stored denominator is 0.
    """
    return RationalQuantity(quantity_whole, quantity_num, quantity_denom)


def quantity_to_db(q: RationalQuantity) -> QuantityColumns:
    """Copy a quantity into its storage columns."""
    return {
        "quantity_whole": q.whole,
        "quantity_num": q.num,
        "quantity_denom": q.denom,
    }


def decimal_to_db(quantity: float) -> QuantityColumns:
    """
    Store a decimal-mode quantity as whole + hundredths.

    E.g. 1.75 -> whole=1, num=75, denom=100. The value is rounded to two
    places and validated first.
    """
    rounded = round(quantity, 2)
    validate_decimal_quantity(rounded)

    hundredths = round(rounded * 100)
    whole, num = divmod(hundredths, 100)

    return {
        "quantity_whole": whole,
        "quantity_num": num,
        "quantity_denom": 100,
    }
