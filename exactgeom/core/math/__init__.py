"""
Core math modules для exactgeom

Точная арифметика и граница преобразования exact → double.
"""

from exactgeom.core.math.conversion import (
    EXACT_TEXT_PATTERN,
    fraction_from_text,
    fraction_to_text,
    is_valid_float,
    sqrt_to_double,
    to_double,
    to_fraction,
)
from exactgeom.core.math.exact_number import NA_TEXT, ExactNumber

__all__ = [
    # Conversion: constants
    "EXACT_TEXT_PATTERN",
    "NA_TEXT",
    # Conversion: functions
    "fraction_from_text",
    "fraction_to_text",
    "is_valid_float",
    "sqrt_to_double",
    "to_double",
    "to_fraction",
    # Types
    "ExactNumber",
]
