"""
Core math modules

Беззнаковые целые произвольной длины и двоичная плавающая точка
произвольной точности.
"""

# Magnitude (блочное беззнаковое целое)
from src.core.math.magnitude import (
    BLOCK_BITS,
    BLOCK_MASK,
    BlockIndexError,
    Magnitude,
)

# Decimal parsing
from src.core.math.decimal_parsing import (
    BinaryFraction,
    ParsedDecimal,
    fraction_to_binary,
    parse_decimal,
    shift_decimal_point,
)

# Formatting
from src.core.math.formatting import decimal_parts, format_decimal

# Square root
from src.core.math.square_root import square_root

# SignedFloat
from src.core.math.signed_float import DOUBLE, SINGLE, IeeeFormat, SignedFloat

__all__ = [
    # Magnitude — Constants
    "BLOCK_BITS",
    "BLOCK_MASK",
    # Magnitude — Exceptions
    "BlockIndexError",
    # Magnitude — Types
    "Magnitude",
    # Decimal parsing — Types
    "BinaryFraction",
    "ParsedDecimal",
    # Decimal parsing — Functions
    "fraction_to_binary",
    "parse_decimal",
    "shift_decimal_point",
    # Formatting
    "decimal_parts",
    "format_decimal",
    # Square root
    "square_root",
    # SignedFloat — IEEE754 layouts
    "DOUBLE",
    "SINGLE",
    "IeeeFormat",
    # SignedFloat — Types
    "SignedFloat",
]
