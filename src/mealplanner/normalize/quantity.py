"""Exact rational quantities and their arithmetic."""

import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Union

from mealplanner.errors import (
    DivisionByZeroError,
    InvalidFormatError,
    ZeroDenominatorError,
)

# A float scalar is snapped to the nearest fraction with at most this
# denominator when that fraction reads back as the same float, so 0.1 scales
# by exactly 1/10. Other floats are used at their exact binary value.
FLOAT_SCALAR_MAX_DENOMINATOR = 10_000


@dataclass(frozen=True)
class RationalQuantity:
    """
    A culinary amount ``whole + num/denom``.

    Values straight from the parser may be un-normalized (``2 4/8``); every
    arithmetic result is normalized. Negative values keep ``whole`` and
    ``num`` on the same side of zero, e.g. -1 1/2 is ``(-1, -1, 2)``.
    """

    whole: int = 0
    num: int = 0
    denom: int = 1

    def __post_init__(self) -> None:
        if self.denom == 0:
            raise ZeroDenominatorError()

    @property
    def improper_numerator(self) -> int:
        """Numerator of the value written as a single fraction over ``denom``."""
        return self.whole * self.denom + self.num

    @property
    def is_integral(self) -> bool:
        """Check if the value has no fractional part."""
        return self.improper_numerator % self.denom == 0

    def to_fraction(self) -> Fraction:
        return Fraction(self.improper_numerator, self.denom)

    @classmethod
    def from_fraction(cls, value: Fraction | int) -> "RationalQuantity":
        value = Fraction(value)
        return normalize(cls(0, value.numerator, value.denominator))

    def __float__(self) -> float:
        return quantity_to_decimal(self)

    def __neg__(self) -> "RationalQuantity":
        return negate(self)

    def __add__(self, other: "RationalQuantity") -> "RationalQuantity":
        if not isinstance(other, RationalQuantity):
            return NotImplemented
        return add(self, other)

    def __sub__(self, other: "RationalQuantity") -> "RationalQuantity":
        if not isinstance(other, RationalQuantity):
            return NotImplemented
        return subtract(self, other)

    def __mul__(self, scalar: "Scalar") -> "RationalQuantity":
        return multiply(self, scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: "Scalar") -> "RationalQuantity":
        return divide(self, scalar)


Scalar = Union[int, float, Fraction, RationalQuantity]

ZERO = RationalQuantity(0, 0, 1)


def normalize(q: RationalQuantity) -> RationalQuantity:
    """
    Bring a quantity into canonical form.

    The fractional part is proper and reduced, ``denom`` is positive, and a
    zero fraction is always written ``0/1``. The integer part is carried by
    floor division on the magnitude so ``whole`` and ``num`` share a sign.

    Examples:
        (0, 2, 4)  -> (0, 1, 2)
        (1, 5, 2)  -> (3, 1, 2)
        (2, -5, 2) -> (0, -1, 2)
        (5, 0, 3)  -> (5, 0, 1)
    """
    whole, num, denom = q.whole, q.num, q.denom

    if num == 0:
        return RationalQuantity(whole, 0, 1)

    if denom < 0:
        num, denom = -num, -denom

    total = whole * denom + num
    sign = -1 if total < 0 else 1
    carried, remainder = divmod(abs(total), denom)
    whole, num = sign * carried, sign * remainder

    if num == 0:
        return RationalQuantity(whole, 0, 1)

    divisor = math.gcd(num, denom)
    return RationalQuantity(whole, num // divisor, denom // divisor)


def negate(q: RationalQuantity) -> RationalQuantity:
    return RationalQuantity(-q.whole, -q.num, q.denom)


def add(a: RationalQuantity, b: RationalQuantity) -> RationalQuantity:
    """
    Add two quantities over their least common denominator.

    E.g. 1 1/2 + 1/4 = 1 3/4
    """
    lcm = a.denom * b.denom // math.gcd(a.denom, b.denom)
    num_a = a.improper_numerator * (lcm // a.denom)
    num_b = b.improper_numerator * (lcm // b.denom)
    return normalize(RationalQuantity(0, num_a + num_b, lcm))


def subtract(a: RationalQuantity, b: RationalQuantity) -> RationalQuantity:
    """Subtract ``b`` from ``a``."""
    return add(a, negate(b))


def _as_fraction(scalar: Scalar) -> Fraction:
    if isinstance(scalar, RationalQuantity):
        return scalar.to_fraction()
    if isinstance(scalar, bool):
        raise InvalidFormatError(scalar, f"Invalid scalar: {scalar!r}")
    if isinstance(scalar, float):
        if not math.isfinite(scalar):
            raise InvalidFormatError(scalar, f"Scalar must be a finite number, got {scalar}")
        exact = Fraction(scalar)
        snapped = exact.limit_denominator(FLOAT_SCALAR_MAX_DENOMINATOR)
        return snapped if float(snapped) == scalar else exact
    if isinstance(scalar, (int, Fraction)):
        return Fraction(scalar)
    raise InvalidFormatError(scalar, f"Invalid scalar: {scalar!r}")


def multiply(q: RationalQuantity, scalar: Scalar) -> RationalQuantity:
    """
    Multiply a quantity by a scalar, e.g. to scale a recipe.

    Integer and rational scalars are exact. A float scalar becomes a short
    fraction when one reads back as the same float (0.1 -> 1/10), and its
    exact binary value otherwise, so a tiny non-zero factor never becomes 0.
    """
    factor = _as_fraction(scalar)
    numerator = q.improper_numerator * factor.numerator
    denom = q.denom * factor.denominator
    return normalize(RationalQuantity(0, numerator, denom))


def divide(q: RationalQuantity, scalar: Scalar) -> RationalQuantity:
    """Divide a quantity by a scalar."""
    factor = _as_fraction(scalar)
    if factor == 0:
        raise DivisionByZeroError()
    return multiply(q, 1 / factor)


def compare(a: RationalQuantity, b: RationalQuantity) -> int:
    """
    Compare two quantities exactly.

    Returns -1 if a < b, 0 if equal in value, 1 if a > b.
    """
    a, b = normalize(a), normalize(b)
    left = a.improper_numerator * b.denom
    right = b.improper_numerator * a.denom
    if left < right:
        return -1
    if left > right:
        return 1
    return 0


def is_zero(q: RationalQuantity) -> bool:
    return q.improper_numerator == 0


def quantity_to_decimal(q: RationalQuantity) -> float:
    """E.g. (1, 1, 2) -> 1.5"""
    return q.whole + q.num / q.denom
