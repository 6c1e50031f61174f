"""Exceptions raised by the quantity engine."""

from typing import Any


class QuantityError(ValueError):
    """Base exception for quantity parsing, arithmetic and conversion errors."""


class EmptyInputError(QuantityError):
    """Raised when a quantity string is blank."""

    def __init__(self, message: str = "Empty quantity string"):
        super().__init__(message)


class InvalidFormatError(QuantityError):
    """Raised when a quantity string matches none of the accepted formats."""

    def __init__(self, value: Any, message: str | None = None):
        super().__init__(message or f'Invalid quantity format: "{value}"')
        self.value = value


class ZeroDenominatorError(QuantityError):
    """Raised for an explicit '/0' or a stored denominator of zero."""

    def __init__(self, message: str = "Denominator cannot be zero"):
        super().__init__(message)


class DivisionByZeroError(QuantityError, ZeroDivisionError):
    """Raised when a quantity is divided by a zero scalar."""

    def __init__(self, message: str = "Cannot divide by zero"):
        super().__init__(message)


class UnknownUnitError(QuantityError):
    """Raised when a unit is in neither the volume nor the mass table."""

    def __init__(self, unit: Any):
        super().__init__(f"Unknown unit: {unit}")
        self.unit = unit


class CrossFamilyConversionError(QuantityError):
    """Raised when converting between volume and mass units."""

    def __init__(self, from_unit: Any, to_unit: Any, message: str | None = None):
        super().__init__(
            message or f"Cannot convert between {from_unit} and {to_unit}: different measurement types"
        )
        self.from_unit = from_unit
        self.to_unit = to_unit


class FractionNotSupportedError(QuantityError):
    """Raised in decimal input mode when fraction syntax is submitted."""

    def __init__(self, value: str):
        super().__init__(
            "Fraction format not supported. "
            'Please use decimal format (e.g., "1.5" instead of "1 1/2")'
        )
        self.value = value


class QuantityOutOfRangeError(QuantityError):
    """Raised in decimal input mode for values outside [0.01, 9999.99] or with >2 decimals."""

    def __init__(self, value: float, message: str):
        super().__init__(message)
        self.value = value
