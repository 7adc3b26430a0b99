# ============================================================================
# Numerics - BigIntegerValue
# ============================================================================
#
# Reliability Level: L6 Critical
# Purpose: Unbounded integer value, the unscaled sibling of FixedDecimal
#
# MANDATE:
#   - No scale: precision is always 0
#   - Conversions from scaled values never drop non-zero fraction digits
#
# ============================================================================

from typing import Optional
import logging

from numerics.config import NumericSeparators
from numerics.digits import digits_to_int, int_to_num_str
from numerics.fixed_decimal import FixedDecimal
from numerics.native import NativeWidth, check_integer
from numerics.scanner import scan_num_str

logger = logging.getLogger(__name__)


class BigIntegerValue:
    """
    Mutable unbounded integer with the same construction, validity and copy
    discipline as FixedDecimal.

    A bare BigIntegerValue() is unconstructed and heals to zero on the first
    is_valid() call.
    """

    __hash__ = None

    def __init__(self):
        self._value: Optional[int] = None

    @classmethod
    def _from_value(cls, value: int) -> "BigIntegerValue":
        big_int = cls()
        big_int._value = value
        return big_int

    @classmethod
    def _new_native(cls, width: NativeWidth, value: int) -> "BigIntegerValue":
        width.check(value, f"BigIntegerValue.new_{width.label}")
        return cls._from_value(value)

    @classmethod
    def new_zero(cls) -> "BigIntegerValue":
        return cls._from_value(0)

    @classmethod
    def new_big_int(cls, value: int) -> "BigIntegerValue":
        check_integer(value, "BigIntegerValue.new_big_int")
        return cls._from_value(value)

    @classmethod
    def new_int(cls, value: int) -> "BigIntegerValue":
        return cls._new_native(NativeWidth.INT, value)

    @classmethod
    def new_int32(cls, value: int) -> "BigIntegerValue":
        return cls._new_native(NativeWidth.INT32, value)

    @classmethod
    def new_int64(cls, value: int) -> "BigIntegerValue":
        return cls._new_native(NativeWidth.INT64, value)

    @classmethod
    def new_uint(cls, value: int) -> "BigIntegerValue":
        return cls._new_native(NativeWidth.UINT, value)

    @classmethod
    def new_uint32(cls, value: int) -> "BigIntegerValue":
        return cls._new_native(NativeWidth.UINT32, value)

    @classmethod
    def new_uint64(cls, value: int) -> "BigIntegerValue":
        return cls._new_native(NativeWidth.UINT64, value)

    @classmethod
    def new_num_str(
        cls,
        num_str: str,
        separators: Optional[NumericSeparators] = None,
        operation: str = "BigIntegerValue.new_num_str"
    ) -> "BigIntegerValue":
        """
        Parse a number string with the FixedDecimal grammar.

        Fraction digits are allowed only when they are all zero
        ("1,200.00" → 1200).

        Raises:
            ParseError: On grammar violations or a non-zero fraction
                (NUM-PARSE-001)
        """
        scanned = scan_num_str(
            num_str,
            separators,
            operation,
            integer_only=True,
        )
        value = digits_to_int(scanned.integer_digits)
        return cls._from_value(-value if scanned.negative else value)

    @classmethod
    def new_fixed_decimal(cls, fixed_decimal: FixedDecimal) -> "BigIntegerValue":
        """
        Convert a FixedDecimal whose fraction digits are all zero.

        Raises:
            TypeError: If fixed_decimal is not a FixedDecimal
            ValueError: If the fixed decimal has a non-zero fraction
        """
        if not isinstance(fixed_decimal, FixedDecimal):
            raise TypeError(
                f"BigIntegerValue.new_fixed_decimal expects a FixedDecimal, "
                f"got {type(fixed_decimal).__name__}"
            )
        magnitude = fixed_decimal.get_integer()
        scale = fixed_decimal.get_precision()
        whole, fraction = divmod(abs(magnitude), 10 ** scale)
        if fraction:
            raise ValueError(
                f"BigIntegerValue.new_fixed_decimal cannot represent "
                f"{fixed_decimal.get_num_str()} without losing fraction digits"
            )
        return cls._from_value(-whole if magnitude < 0 else whole)

    def set_big_int(self, value: int) -> None:
        check_integer(value, "BigIntegerValue.set_big_int")
        self._value = value

    def copy_in(self, other: "BigIntegerValue") -> None:
        """Replace this value with a copy of `other`."""
        if not isinstance(other, BigIntegerValue):
            raise TypeError(
                f"BigIntegerValue.copy_in expects a BigIntegerValue, "
                f"got {type(other).__name__}"
            )
        self._value = other._current()

    def copy_out(self) -> "BigIntegerValue":
        return BigIntegerValue._from_value(self._current())

    def is_valid(self) -> bool:
        """Report whether this value was constructed, healing it to zero if not."""
        value = self._value
        if isinstance(value, int) and not isinstance(value, bool):
            return True

        self._value = 0
        logger.debug(
            f"[BIG-INTEGER] Unconstructed value healed to zero | "
            f"previous_value={value!r}"
        )
        return False

    def _current(self) -> int:
        self.is_valid()
        return self._value

    def is_zero(self) -> bool:
        return self._current() == 0

    def get_integer_value(self) -> int:
        return self._current()

    def get_precision_uint(self) -> int:
        """Always 0; integers carry no fraction digits."""
        self.is_valid()
        return 0

    def get_fixed_decimal(self) -> FixedDecimal:
        """This value as a FixedDecimal at scale 0."""
        return FixedDecimal.new_big_int(self._current(), 0)

    def get_num_str(self) -> str:
        return int_to_num_str(self._current())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BigIntegerValue):
            return NotImplemented
        return self._current() == other._current()

    def __str__(self) -> str:
        return self.get_num_str()

    def __repr__(self) -> str:
        return f"BigIntegerValue({int_to_num_str(self._current())})"

    def __copy__(self) -> "BigIntegerValue":
        return self.copy_out()

    def __deepcopy__(self, memo: dict) -> "BigIntegerValue":
        return self.copy_out()


__all__ = ["BigIntegerValue"]
