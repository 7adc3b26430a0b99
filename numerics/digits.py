# ============================================================================
# Numerics - Digit String Conversion
# ============================================================================
#
# Reliability Level: L6 Critical
# Purpose: Convert between decimal digit strings and unbounded ints
#
# MANDATE:
#   - No digit-count ceiling: int(str) and str(int) stop at
#     sys.get_int_max_str_digits(); conversions here go through Decimal
#   - The interpreter-wide limit is never changed
#
# ============================================================================

from decimal import Decimal
from typing import Tuple


def digits_to_int(digits: str) -> int:
    """
    Unsigned int from a run of ASCII decimal digits.

    An empty run is zero.
    """
    if not digits:
        return 0
    return int(Decimal((0, tuple(int(digit) for digit in digits), 0)))


def int_to_digit_tuple(value: int) -> Tuple[int, ...]:
    """Decimal digits of abs(value), most significant first."""
    return Decimal(abs(value)).as_tuple().digits


def int_to_digits(value: int) -> str:
    """Decimal digits of abs(value) as a string, no sign."""
    return "".join(str(digit) for digit in int_to_digit_tuple(value))


def int_to_num_str(value: int) -> str:
    """Signed decimal string of value ('-' prefix only when negative)."""
    digits = int_to_digits(value)
    return f"-{digits}" if value < 0 else digits


__all__ = [
    "digits_to_int",
    "int_to_digit_tuple",
    "int_to_digits",
    "int_to_num_str",
]
