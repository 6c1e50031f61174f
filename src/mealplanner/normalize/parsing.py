"""Parsing of user-entered quantity strings."""

import math
import re
from typing import Literal

from mealplanner.config import get_settings
from mealplanner.errors import (
    EmptyInputError,
    FractionNotSupportedError,
    InvalidFormatError,
    QuantityOutOfRangeError,
    ZeroDenominatorError,
)
from mealplanner.normalize.quantity import RationalQuantity, normalize

InputMode = Literal["fraction", "decimal"]

MIXED_NUMBER_RE = re.compile(r"^(\d+)\s+(\d+)/(\d+)$")
FRACTION_RE = re.compile(r"^(\d+)/(\d+)$")
DECIMAL_RE = re.compile(r"^(\d+)\.(\d+)$")
INTEGER_RE = re.compile(r"^\d+$")
DECIMAL_INPUT_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")

MIN_DECIMAL_QUANTITY = 0.01
MAX_DECIMAL_QUANTITY = 9999.99


# =============================================================================
# Fraction Grammar
# =============================================================================


def parse_quantity(text: str) -> RationalQuantity:
    """
    Parse a quantity string into a RationalQuantity.

    Handles formats like:
    - "2"     -> (2, 0, 1)
    - "1/2"   -> (0, 1, 2)
    - "1 1/2" -> (1, 1, 2)
    - "0.5"   -> (0, 1, 2)
    - "1.25"  -> (1, 1, 4)

    Fractions and mixed numbers are returned exactly as written, so "2/4"
    stays (0, 2, 4) until normalized. Negative numbers are not accepted.

    Raises:
        EmptyInputError: The string is blank.
        ZeroDenominatorError: The fraction has a zero denominator.
        InvalidFormatError: Anything else.
    """
    trimmed = text.strip()

    if not trimmed:
        raise EmptyInputError()

    mixed_match = MIXED_NUMBER_RE.match(trimmed)
    if mixed_match:
        whole, num, denom = (int(group) for group in mixed_match.groups())
        if denom == 0:
            raise ZeroDenominatorError()
        return RationalQuantity(whole, num, denom)

    frac_match = FRACTION_RE.match(trimmed)
    if frac_match:
        num, denom = (int(group) for group in frac_match.groups())
        if denom == 0:
            raise ZeroDenominatorError()
        return RationalQuantity(0, num, denom)

    decimal_match = DECIMAL_RE.match(trimmed)
    if decimal_match:
        return _decimal_to_quantity(int(decimal_match.group(1)), decimal_match.group(2))

    if INTEGER_RE.match(trimmed):
        return RationalQuantity(int(trimmed), 0, 1)

    raise InvalidFormatError(text)


def _decimal_to_quantity(whole: int, digits: str) -> RationalQuantity:
    """Turn the digits after the decimal point into a reduced fraction, e.g. "25" -> 1/4."""
    denom = 10 ** len(digits)
    num = int(digits)

    divisor = math.gcd(num, denom)
    num //= divisor
    denom //= divisor

    if num >= denom:
        whole += num // denom
        num %= denom

    return RationalQuantity(whole, num, denom)


# =============================================================================
# Decimal Input Mode
# =============================================================================


def validate_decimal_quantity(value: float) -> None:
    """
    Check a decimal-mode quantity is finite, within [0.01, 9999.99] and has at
    most two decimal places.
    """
    if not math.isfinite(value):
        raise QuantityOutOfRangeError(value, "Quantity must be a finite number")

    if value < MIN_DECIMAL_QUANTITY:
        raise QuantityOutOfRangeError(value, f"Quantity must be at least {MIN_DECIMAL_QUANTITY}")

    if value > MAX_DECIMAL_QUANTITY:
        raise QuantityOutOfRangeError(value, "Quantity must be less than 10000")

    if abs(value - round(value, 2)) > 0.001:
        raise QuantityOutOfRangeError(value, "Quantity can have at most 2 decimal places")


def parse_decimal_input(text: str) -> float:
    """
    Parse a quantity from an API that only accepts decimals ("2", "1.5", "0.75").

    Fraction syntax such as "1/2" or "1 1/2" is rejected outright rather than
    guessed at. The value is rounded to two decimal places and validated.
    """
    trimmed = text.strip()

    if not trimmed:
        raise EmptyInputError()

    if "/" in trimmed:
        raise FractionNotSupportedError(text)

    if not DECIMAL_INPUT_RE.match(trimmed):
        raise InvalidFormatError(text, f'Invalid quantity format: "{text}". Expected a decimal number.')

    rounded = round(float(trimmed), 2)
    validate_decimal_quantity(rounded)
    return rounded


def decimal_to_quantity(value: float) -> RationalQuantity:
    """Express a two-place decimal exactly as hundredths, normalized."""
    return normalize(RationalQuantity(0, round(value * 100), 100))


# =============================================================================
# Mode Selection
# =============================================================================


class QuantityParser:
    """
    Parses API quantity strings in exactly one input mode.

    In "fraction" mode the full fraction grammar is accepted. In "decimal"
    mode only decimal numbers are accepted and fraction syntax fails with
    FractionNotSupportedError. Both return a RationalQuantity so everything
    downstream works on one representation.
    """

    def __init__(self, mode: InputMode = "fraction"):
        if mode not in ("fraction", "decimal"):
            raise ValueError(f"Unknown quantity input mode: {mode}")
        self.mode = mode

    def parse(self, text: str) -> RationalQuantity:
        if self.mode == "decimal":
            return decimal_to_quantity(parse_decimal_input(text))
        return parse_quantity(text)

    __call__ = parse

    def __repr__(self) -> str:
        return f"QuantityParser(mode={self.mode!r})"


def get_quantity_parser() -> QuantityParser:
    """Build the parser for the configured input mode."""
    return QuantityParser(get_settings().quantity_input_mode)
