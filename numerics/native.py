"""
Native integer widths accepted by the typed factories.

Python ints are unbounded, so each width-specific factory checks its
argument against the inclusive range of the width it names. INT and UINT
follow the platform pointer width.
"""

from enum import Enum
import struct

from numerics.digits import int_to_num_str

_PLATFORM_BITS = struct.calcsize("P") * 8


class NativeWidth(Enum):
    """Signed/unsigned integer widths as (label, bits, signed)."""
    INT = ("int", _PLATFORM_BITS, True)
    INT32 = ("int32", 32, True)
    INT64 = ("int64", 64, True)
    UINT = ("uint", _PLATFORM_BITS, False)
    UINT32 = ("uint32", 32, False)
    UINT64 = ("uint64", 64, False)

    def __init__(self, label: str, bits: int, signed: bool):
        self.label = label
        self.bits = bits
        self.signed = signed

    @property
    def min_value(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max_value(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1

    def check(self, value: int, operation: str) -> int:
        """
        Validate value against this width.

        Raises:
            TypeError: If value is not an int (bool is rejected)
            ValueError: If value lies outside the width's range
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(
                f"{operation} expects an int, got {type(value).__name__}"
            )
        if not self.min_value <= value <= self.max_value:
            raise ValueError(
                f"{operation} value {int_to_num_str(value)} outside {self.name} range "
                f"[{self.min_value}, {self.max_value}]"
            )
        return value


def check_scale(scale: int, operation: str) -> int:
    """
    Validate a scale (digits right of the decimal point).

    Raises:
        TypeError: If scale is not an int (bool is rejected)
        ValueError: If scale is negative
    """
    if isinstance(scale, bool) or not isinstance(scale, int):
        raise TypeError(
            f"{operation} expects an int scale, got {type(scale).__name__}"
        )
    if scale < 0:
        raise ValueError(f"{operation} scale must be non-negative, got {scale}")
    return scale


def check_integer(value: int, operation: str) -> int:
    """Validate an unbounded integer argument (bool is rejected)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(
            f"{operation} expects an int, got {type(value).__name__}"
        )
    return value
