"""
============================================================================
Numerics - Fixed-Point Decimal Values
============================================================================

Arbitrary-precision fixed-point decimal value type, its unscaled integer
sibling, and read-only thread-safe views for sharing constant values.

Reliability Level: L6 Critical
============================================================================
"""

from numerics.errors import (
    NumericErrorCode,
    NumericError,
    ParseError,
    NumericConfigurationError,
)

from numerics.config import (
    NumericSeparators,
    US_SEPARATORS,
    get_numeric_separators,
    reset_numeric_separators,
)

from numerics.native import NativeWidth

from numerics.scanner import (
    RejectReason,
    ScanResult,
    scan_num_str,
)

from numerics.fixed_decimal import (
    FixedDecimal,
    format_num_str,
    parse_num_str,
)

from numerics.fixed_decimal_view import FixedDecimalView

from numerics.big_integer import BigIntegerValue

from numerics.big_integer_view import BigIntegerView

__all__ = [
    # Errors
    "NumericErrorCode",
    "NumericError",
    "ParseError",
    "NumericConfigurationError",
    # Configuration
    "NumericSeparators",
    "US_SEPARATORS",
    "get_numeric_separators",
    "reset_numeric_separators",
    # Native widths
    "NativeWidth",
    # Scanner
    "RejectReason",
    "ScanResult",
    "scan_num_str",
    # Values
    "FixedDecimal",
    "format_num_str",
    "parse_num_str",
    "BigIntegerValue",
    # Views
    "FixedDecimalView",
    "BigIntegerView",
]
