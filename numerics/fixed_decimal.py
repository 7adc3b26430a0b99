# ============================================================================
# Numerics - FixedDecimal
# ============================================================================
#
# Reliability Level: L6 Critical
# Purpose: Arbitrary-precision fixed-point decimal value
#
# MANDATE:
#   - value == magnitude / 10 ** scale, scale >= 0, magnitude unbounded
#   - No silent precision loss: nothing here rounds
#   - Number strings round-trip: new_num_str(v.get_num_str()) == v
#   - State is replaced whole by setters; accessors never expose it
#
# Error Codes:
#   - NUM-PARSE-001: Number string rejected (raised by numerics.scanner)
#
# ============================================================================

from decimal import Decimal
from typing import Optional, Tuple
import logging

from numerics.config import NumericSeparators
from numerics.digits import (
    digits_to_int,
    int_to_digit_tuple,
    int_to_digits,
    int_to_num_str,
)
from numerics.native import NativeWidth, check_integer, check_scale
from numerics.scanner import scan_num_str

logger = logging.getLogger(__name__)


def format_num_str(magnitude: int, scale: int) -> str:
    """
    Format magnitude and scale as a canonical number string.

    '-' prefix only when negative, no grouping, exactly `scale` fraction
    digits. Zero is never signed.
    """
    digits = int_to_digits(magnitude)
    if scale > 0:
        digits = digits.rjust(scale + 1, "0")
        digits = f"{digits[:-scale]}.{digits[-scale:]}"
    return f"-{digits}" if magnitude < 0 else digits


class FixedDecimal:
    """
    Mutable fixed-point decimal: an unbounded integer magnitude plus a
    non-negative scale.

    A bare FixedDecimal() is unconstructed. The first is_valid() call (and
    every accessor, which checks validity first) heals it to canonical zero
    at scale 0.

    Instances are not synchronized. Share constant values through
    FixedDecimalView.

    Example Usage:
        price = FixedDecimal.new_int(500, 2)
        price.get_num_str()                           # '5.00'
        FixedDecimal.new_num_str("(1,234.56)").get_integer()  # -123456
    """

    # Mutable value type
    __hash__ = None

    def __init__(self):
        # (magnitude, scale); None until constructed
        self._state: Optional[Tuple[int, int]] = None

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def _from_state(cls, magnitude: int, scale: int) -> "FixedDecimal":
        fixed = cls()
        fixed._state = (magnitude, scale)
        return fixed

    @classmethod
    def _new_native(
        cls,
        width: NativeWidth,
        value: int,
        scale: int
    ) -> "FixedDecimal":
        operation = f"FixedDecimal.new_{width.label}"
        width.check(value, operation)
        check_scale(scale, operation)
        return cls._from_state(value, scale)

    @classmethod
    def new_zero(cls, scale: int = 0) -> "FixedDecimal":
        """Zero with `scale` zero fraction digits."""
        check_scale(scale, "FixedDecimal.new_zero")
        return cls._from_state(0, scale)

    @classmethod
    def new_int(cls, value: int, scale: int) -> "FixedDecimal":
        """
        Create from a platform-native signed integer.

        Args:
            value: Magnitude, the decimal value with the point removed
            scale: Digits right of the decimal point

        Example:
            FixedDecimal.new_int(12345, 3) represents 12.345
        """
        return cls._new_native(NativeWidth.INT, value, scale)

    @classmethod
    def new_int32(cls, value: int, scale: int) -> "FixedDecimal":
        return cls._new_native(NativeWidth.INT32, value, scale)

    @classmethod
    def new_int64(cls, value: int, scale: int) -> "FixedDecimal":
        return cls._new_native(NativeWidth.INT64, value, scale)

    @classmethod
    def new_uint(cls, value: int, scale: int) -> "FixedDecimal":
        return cls._new_native(NativeWidth.UINT, value, scale)

    @classmethod
    def new_uint32(cls, value: int, scale: int) -> "FixedDecimal":
        return cls._new_native(NativeWidth.UINT32, value, scale)

    @classmethod
    def new_uint64(cls, value: int, scale: int) -> "FixedDecimal":
        return cls._new_native(NativeWidth.UINT64, value, scale)

    @classmethod
    def new_big_int(cls, value: int, scale: int) -> "FixedDecimal":
        """Create from an unbounded integer magnitude."""
        check_integer(value, "FixedDecimal.new_big_int")
        check_scale(scale, "FixedDecimal.new_big_int")
        return cls._from_state(value, scale)

    @classmethod
    def new_num_str(
        cls,
        num_str: str,
        separators: Optional[NumericSeparators] = None,
        operation: str = "FixedDecimal.new_num_str"
    ) -> "FixedDecimal":
        """
        Parse a number string.

        Accepts a leading '-' or enclosing parentheses for negative values,
        a single '.' decimal separator and integer grouping separators.
        Scale is the number of digits after the '.'.

        Args:
            num_str: Number string, e.g. "-123.45", "(5.00)", "1,234.56"
            separators: Grouping configuration (default: module separators)
            operation: Operation name reported in logs and ParseError

        Raises:
            ParseError: If num_str violates the grammar (NUM-PARSE-001)
        """
        scanned = scan_num_str(num_str, separators, operation)
        return cls._from_state(scanned.magnitude, scanned.scale)

    @classmethod
    def new_decimal(cls, value: Decimal) -> "FixedDecimal":
        """
        Create from a finite decimal.Decimal without rounding.

        A positive exponent is expanded into the magnitude at scale 0.

        Raises:
            TypeError: If value is not a Decimal
            ValueError: If value is NaN or infinite
        """
        if not isinstance(value, Decimal):
            raise TypeError(
                f"FixedDecimal.new_decimal expects a Decimal, "
                f"got {type(value).__name__}"
            )
        if not value.is_finite():
            raise ValueError(
                f"FixedDecimal.new_decimal cannot represent {value}"
            )

        sign, digits, exponent = value.as_tuple()
        magnitude = digits_to_int("".join(str(digit) for digit in digits))
        if exponent >= 0:
            magnitude *= 10 ** exponent
            scale = 0
        else:
            scale = -exponent

        return cls._from_state(-magnitude if sign else magnitude, scale)

    # ------------------------------------------------------------------
    # Setters (whole-state replacement)
    # ------------------------------------------------------------------

    def set_int(self, value: int, scale: int) -> None:
        """Replace magnitude and scale together."""
        check_integer(value, "FixedDecimal.set_int")
        check_scale(scale, "FixedDecimal.set_int")
        self._state = (value, scale)

    def set_num_str(
        self,
        num_str: str,
        separators: Optional[NumericSeparators] = None
    ) -> None:
        """
        Replace this value with a parsed number string.

        On ParseError the current value is left untouched.
        """
        scanned = scan_num_str(num_str, separators, "FixedDecimal.set_num_str")
        self._state = (scanned.magnitude, scanned.scale)

    def copy_in(self, other: "FixedDecimal") -> None:
        """Replace this value's entire state with a copy of `other`'s."""
        if not isinstance(other, FixedDecimal):
            raise TypeError(
                f"FixedDecimal.copy_in expects a FixedDecimal, "
                f"got {type(other).__name__}"
            )
        self._state = other._current()

    def copy_out(self) -> "FixedDecimal":
        """Return an independent copy of this value."""
        magnitude, scale = self._current()
        return FixedDecimal._from_state(magnitude, scale)

    # ------------------------------------------------------------------
    # Validity
    # ------------------------------------------------------------------

    def is_valid(self) -> bool:
        """
        Report whether this value was constructed, healing it if not.

        An unconstructed or corrupt value is reset to zero at scale 0 and
        False is returned. Every later call returns True.
        """
        state = self._state
        if state is not None and _is_well_formed(state):
            return True

        self._state = (0, 0)
        logger.debug(
            f"[FIXED-DECIMAL] Unconstructed value healed to canonical zero | "
            f"previous_state={state!r}"
        )
        return False

    def _current(self) -> Tuple[int, int]:
        self.is_valid()
        return self._state

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def is_zero(self) -> bool:
        """True when the magnitude is zero, whatever the scale."""
        return self._current()[0] == 0

    def get_integer(self) -> int:
        """The magnitude: the decimal value with the point removed."""
        return self._current()[0]

    def get_precision(self) -> int:
        """Digits right of the decimal point."""
        return self._current()[1]

    def get_precision_big_int(self) -> int:
        return self._current()[1]

    def get_num_str(self) -> str:
        """Canonical number string: '-' sign only, no grouping, `scale` fraction digits."""
        magnitude, scale = self._current()
        return format_num_str(magnitude, scale)

    def to_decimal(self) -> Decimal:
        """Exact decimal.Decimal with exponent -scale."""
        magnitude, scale = self._current()
        sign = 1 if magnitude < 0 else 0
        return Decimal((sign, int_to_digit_tuple(magnitude), -scale))

    # ------------------------------------------------------------------
    # Python protocols
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FixedDecimal):
            return NotImplemented
        return self._current() == other._current()

    def __str__(self) -> str:
        return self.get_num_str()

    def __repr__(self) -> str:
        magnitude, scale = self._current()
        return f"FixedDecimal(magnitude={int_to_num_str(magnitude)}, scale={scale})"

    def __copy__(self) -> "FixedDecimal":
        return self.copy_out()

    def __deepcopy__(self, memo: dict) -> "FixedDecimal":
        return self.copy_out()


def _is_well_formed(state: object) -> bool:
    if not isinstance(state, tuple) or len(state) != 2:
        return False
    magnitude, scale = state
    return (
        isinstance(magnitude, int) and not isinstance(magnitude, bool)
        and isinstance(scale, int) and not isinstance(scale, bool)
        and scale >= 0
    )


def parse_num_str(
    num_str: str,
    separators: Optional[NumericSeparators] = None
) -> FixedDecimal:
    """Module-level convenience function for FixedDecimal.new_num_str."""
    return FixedDecimal.new_num_str(num_str, separators)


__all__ = [
    "FixedDecimal",
    "format_num_str",
    "parse_num_str",
]
