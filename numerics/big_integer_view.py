"""
============================================================================
Numerics - BigIntegerView
============================================================================

Reliability Level: L6 Critical
Thread Safety: Mutex lock held for the duration of every accessor

Read-only wrapper for BigIntegerValue. Same contract as FixedDecimalView:
the wrapped value is a private copy fixed at construction, and accessors
return copies or immutable ints.

Number strings use the default United States separators unless a
NumericSeparators instance is passed:

    decimal separator = '.'
    integer separator = ','
    integer grouping  = 3 (thousands)

============================================================================
"""

from typing import Optional
import threading

from numerics.big_integer import BigIntegerValue
from numerics.config import NumericSeparators
from numerics.fixed_decimal import FixedDecimal


class BigIntegerView:
    """Immutable, thread-safe view of one BigIntegerValue."""

    __slots__ = ("_big_integer", "_lock")

    def __init__(self, big_integer: Optional[BigIntegerValue] = None):
        value = BigIntegerValue.new_zero()
        if big_integer is not None:
            value.copy_in(big_integer)

        object.__setattr__(self, "_big_integer", value)
        object.__setattr__(self, "_lock", threading.Lock())

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only")

    @classmethod
    def _wrap(cls, owned: BigIntegerValue) -> "BigIntegerView":
        # `owned` must not be referenced anywhere else
        view = cls()
        object.__setattr__(view, "_big_integer", owned)
        return view

    # =========================================================================
    # Factories
    # =========================================================================

    @classmethod
    def new_zero(cls) -> "BigIntegerView":
        return cls()

    @classmethod
    def new_big_integer(cls, big_integer: BigIntegerValue) -> "BigIntegerView":
        """Create a view holding a deep copy of `big_integer`."""
        return cls(big_integer)

    @classmethod
    def new_fixed_decimal(cls, fixed_decimal: FixedDecimal) -> "BigIntegerView":
        """
        Create from a FixedDecimal whose fraction digits are all zero.

        Raises:
            ValueError: If the fixed decimal has a non-zero fraction
        """
        return cls._wrap(BigIntegerValue.new_fixed_decimal(fixed_decimal))

    @classmethod
    def new_num_str(
        cls,
        num_str: str,
        separators: Optional[NumericSeparators] = None
    ) -> "BigIntegerView":
        """
        Create from a number string.

        Raises:
            ParseError: If num_str is invalid or has a non-zero fraction
        """
        big_integer = BigIntegerValue.new_num_str(
            num_str, separators, operation="BigIntegerView.new_num_str"
        )
        return cls._wrap(big_integer)

    @classmethod
    def new_int(cls, int_value: int) -> "BigIntegerView":
        return cls._wrap(BigIntegerValue.new_int(int_value))

    @classmethod
    def new_int32(cls, int32_value: int) -> "BigIntegerView":
        return cls._wrap(BigIntegerValue.new_int32(int32_value))

    @classmethod
    def new_int64(cls, int64_value: int) -> "BigIntegerView":
        return cls._wrap(BigIntegerValue.new_int64(int64_value))

    @classmethod
    def new_uint(cls, uint_value: int) -> "BigIntegerView":
        return cls._wrap(BigIntegerValue.new_uint(uint_value))

    @classmethod
    def new_uint32(cls, uint32_value: int) -> "BigIntegerView":
        return cls._wrap(BigIntegerValue.new_uint32(uint32_value))

    @classmethod
    def new_uint64(cls, uint64_value: int) -> "BigIntegerView":
        return cls._wrap(BigIntegerValue.new_uint64(uint64_value))

    # =========================================================================
    # Accessors
    # =========================================================================

    def get_integer_value(self) -> int:
        """All numeric digits of the wrapped value."""
        with self._lock:
            return self._big_integer.get_integer_value()

    def get_precision_uint(self) -> int:
        """Precision of the wrapped value; always 0 for integers."""
        with self._lock:
            return self._big_integer.get_precision_uint()

    def get_big_integer(self) -> BigIntegerValue:
        """Deep copy of the wrapped value."""
        with self._lock:
            return self._big_integer.copy_out()

    def get_fixed_decimal(self) -> FixedDecimal:
        """The wrapped value as a new FixedDecimal at scale 0."""
        with self._lock:
            return self._big_integer.get_fixed_decimal()

    def get_num_str(self) -> str:
        with self._lock:
            return self._big_integer.get_num_str()

    def is_valid(self) -> bool:
        with self._lock:
            return self._big_integer.is_valid()

    def is_zero(self) -> bool:
        with self._lock:
            return self._big_integer.is_zero()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BigIntegerView):
            return NotImplemented
        return self.get_integer_value() == other.get_integer_value()

    def __hash__(self) -> int:
        return hash(self.get_integer_value())

    def __str__(self) -> str:
        return self.get_num_str()

    def __repr__(self) -> str:
        return f"BigIntegerView({self.get_num_str()!r})"

    def __copy__(self) -> "BigIntegerView":
        return self

    def __deepcopy__(self, memo: dict) -> "BigIntegerView":
        return self


__all__ = ["BigIntegerView"]
