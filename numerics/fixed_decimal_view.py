"""
============================================================================
Numerics - FixedDecimalView
============================================================================

Reliability Level: L6 Critical
Thread Safety: Mutex lock held for the duration of every accessor
Side Effects: None observable; reported value never changes

Read-only wrapper for FixedDecimal values that are treated as constants and
shared across threads.

INVARIANTS:
    - The wrapped FixedDecimal is a private copy, created by the constructor
      (canonical zero when no value is given) and never mutated afterwards
    - No accessor returns a reference into the wrapped value: FixedDecimal
      results are fresh copies, everything else is an immutable primitive
    - Factory classmethods always build a new view

CACHED FIELDS:
    _num_str: canonical number string. Written at most once, under _lock;
        readers take the same lock, so the first write happens-before every
        later read.

Example Usage:
    ONE_HUNDRED = FixedDecimalView.new_int(10000, 2)

    # any thread
    ONE_HUNDRED.get_num_str()        # '100.00'
    value = ONE_HUNDRED.get_fixed_decimal()
    value.set_int(1, 0)              # changes the copy only

============================================================================
"""

from decimal import Decimal
from typing import Optional, Tuple
import threading

from numerics.config import NumericSeparators
from numerics.fixed_decimal import FixedDecimal


class FixedDecimalView:
    """
    Immutable, thread-safe view of one FixedDecimal.

    Reliability Level: L6 Critical
    Thread Safety: Protected by mutex lock
    """

    __slots__ = ("_fixed_decimal", "_lock", "_num_str")

    def __init__(self, fixed_decimal: Optional[FixedDecimal] = None):
        """
        Args:
            fixed_decimal: Value to copy in (default: zero at scale 0)

        Raises:
            TypeError: If fixed_decimal is not a FixedDecimal
        """
        value = FixedDecimal.new_zero(0)
        if fixed_decimal is not None:
            value.copy_in(fixed_decimal)

        object.__setattr__(self, "_fixed_decimal", value)
        object.__setattr__(self, "_lock", threading.Lock())
        object.__setattr__(self, "_num_str", None)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only")

    # =========================================================================
    # Factories
    # =========================================================================

    @classmethod
    def new_zero(cls, precision: int = 0) -> "FixedDecimalView":
        """Zero with `precision` zero digits right of the decimal point."""
        return cls._wrap(FixedDecimal.new_zero(precision))

    @classmethod
    def new_int(cls, int_value: int, precision: int) -> "FixedDecimalView":
        """
        Create from a platform-native signed integer.

        'precision' is the number of digits right of the decimal place in
        'int_value': new_int(12345, 3) is 12.345.
        """
        return cls._wrap(FixedDecimal.new_int(int_value, precision))

    @classmethod
    def new_int32(cls, int32_value: int, precision: int) -> "FixedDecimalView":
        return cls._wrap(FixedDecimal.new_int32(int32_value, precision))

    @classmethod
    def new_int64(cls, int64_value: int, precision: int) -> "FixedDecimalView":
        return cls._wrap(FixedDecimal.new_int64(int64_value, precision))

    @classmethod
    def new_uint(cls, uint_value: int, precision: int) -> "FixedDecimalView":
        return cls._wrap(FixedDecimal.new_uint(uint_value, precision))

    @classmethod
    def new_uint32(cls, uint32_value: int, precision: int) -> "FixedDecimalView":
        return cls._wrap(FixedDecimal.new_uint32(uint32_value, precision))

    @classmethod
    def new_uint64(cls, uint64_value: int, precision: int) -> "FixedDecimalView":
        return cls._wrap(FixedDecimal.new_uint64(uint64_value, precision))

    @classmethod
    def new_num_str(
        cls,
        num_str: str,
        separators: Optional[NumericSeparators] = None
    ) -> "FixedDecimalView":
        """
        Create from a number string.

        A number string is a string of digits, optionally prefixed with '-'
        or enclosed in parentheses (both mean negative), optionally split by
        a single '.' into integer and fraction digits. The integer digits
        may be grouped with the configured integer separator.

        Raises:
            ParseError: If num_str is not a valid number string
        """
        fixed_decimal = FixedDecimal.new_num_str(
            num_str, separators, operation="FixedDecimalView.new_num_str"
        )
        return cls._wrap(fixed_decimal)

    @classmethod
    def new_fixed_decimal(cls, fixed_decimal: FixedDecimal) -> "FixedDecimalView":
        """Create a view holding a deep copy of `fixed_decimal`."""
        return cls(fixed_decimal)

    @classmethod
    def new_decimal(cls, value: Decimal) -> "FixedDecimalView":
        return cls._wrap(FixedDecimal.new_decimal(value))

    @classmethod
    def _wrap(cls, owned: FixedDecimal) -> "FixedDecimalView":
        # `owned` must not be referenced anywhere else
        view = cls()
        object.__setattr__(view, "_fixed_decimal", owned)
        return view

    # =========================================================================
    # Accessors
    # =========================================================================

    def get_fixed_decimal(self) -> FixedDecimal:
        """Deep copy of the wrapped value."""
        with self._lock:
            self._fixed_decimal.is_valid()
            return self._fixed_decimal.copy_out()

    def get_integer(self) -> int:
        """All digits of the value, decimal point removed."""
        with self._lock:
            self._fixed_decimal.is_valid()
            return self._fixed_decimal.get_integer()

    def get_precision(self) -> int:
        """Number of digits right of the decimal point."""
        with self._lock:
            self._fixed_decimal.is_valid()
            return self._fixed_decimal.get_precision()

    def get_precision_big_int(self) -> int:
        with self._lock:
            self._fixed_decimal.is_valid()
            return self._fixed_decimal.get_precision_big_int()

    def get_num_str(self) -> str:
        """
        Canonical number string. The decimal separator is always '.'.
        """
        with self._lock:
            if self._num_str is None:
                self._fixed_decimal.is_valid()
                object.__setattr__(self, "_num_str", self._fixed_decimal.get_num_str())
            return self._num_str

    def get_integer_and_precision(self) -> Tuple[int, int]:
        """
        (integer, precision) read under a single lock hold.

        Both members are always ints; an unconstructed value reports (0, 0).
        """
        with self._lock:
            self._fixed_decimal.is_valid()
            return (
                self._fixed_decimal.get_integer(),
                self._fixed_decimal.get_precision_big_int(),
            )

    get_big_int_precision = get_integer_and_precision

    def to_decimal(self) -> Decimal:
        with self._lock:
            self._fixed_decimal.is_valid()
            return self._fixed_decimal.to_decimal()

    def is_valid(self) -> bool:
        with self._lock:
            return self._fixed_decimal.is_valid()

    def is_zero(self) -> bool:
        with self._lock:
            return self._fixed_decimal.is_zero()

    # =========================================================================
    # Python protocols
    # =========================================================================

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FixedDecimalView):
            return NotImplemented
        # Locks taken one at a time, never nested
        return self.get_integer_and_precision() == other.get_integer_and_precision()

    def __hash__(self) -> int:
        return hash(self.get_integer_and_precision())

    def __str__(self) -> str:
        return self.get_num_str()

    def __repr__(self) -> str:
        return f"FixedDecimalView({self.get_num_str()!r})"

    def __copy__(self) -> "FixedDecimalView":
        return self

    def __deepcopy__(self, memo: dict) -> "FixedDecimalView":
        return self


__all__ = ["FixedDecimalView"]
