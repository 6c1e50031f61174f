"""Quantity parsing, arithmetic, formatting and unit conversion."""

from mealplanner.normalize.formatting import (
    format_decimal,
    format_quantity,
    format_quantity_with_unit,
    pluralize_unit,
)
from mealplanner.normalize.parsing import (
    QuantityParser,
    decimal_to_quantity,
    get_quantity_parser,
    parse_decimal_input,
    parse_quantity,
    validate_decimal_quantity,
)
from mealplanner.normalize.quantity import (
    ZERO,
    RationalQuantity,
    add,
    compare,
    divide,
    is_zero,
    multiply,
    negate,
    normalize,
    quantity_to_decimal,
    subtract,
)
from mealplanner.normalize.storage import decimal_to_db, db_to_quantity, quantity_to_db
from mealplanner.normalize.units import (
    BaseQuantity,
    MeasurementType,
    Unit,
    base_unit_for,
    can_combine,
    convert_quantity,
    from_base_units,
    mass_units,
    measurement_type,
    round_to_fraction,
    to_base_units,
    volume_units,
)

__all__ = [
    "ZERO",
    "BaseQuantity",
    "MeasurementType",
    "QuantityParser",
    "RationalQuantity",
    "Unit",
    "add",
    "base_unit_for",
    "can_combine",
    "compare",
    "convert_quantity",
    "db_to_quantity",
    "decimal_to_db",
    "decimal_to_quantity",
    "divide",
    "format_decimal",
    "format_quantity",
    "format_quantity_with_unit",
    "from_base_units",
    "get_quantity_parser",
    "is_zero",
    "mass_units",
    "measurement_type",
    "multiply",
    "negate",
    "normalize",
    "parse_decimal_input",
    "parse_quantity",
    "pluralize_unit",
    "quantity_to_db",
    "quantity_to_decimal",
    "round_to_fraction",
    "subtract",
    "to_base_units",
    "validate_decimal_quantity",
    "volume_units",
]
