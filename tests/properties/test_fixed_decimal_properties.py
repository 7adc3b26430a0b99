"""
============================================================================
Property-Based Tests for FixedDecimal
============================================================================

Reliability Level: L6 Critical

Properties tested with Hypothesis, 100 examples each:
- Property 1: Number strings round-trip for every native width
- Property 2: copy_out / copy_in / views never alias
- Property 3: Self-healing is idempotent
- Property 4: Grouped and parenthesized inputs parse to the plain value
- Property 5: Zero detection is independent of scale
- Property 6: decimal.Decimal conversion is exact
- Property 7: Magnitudes past the int/str digit limit round-trip

============================================================================
"""

from decimal import Decimal

from hypothesis import given, settings, Phase
from hypothesis import strategies as st

import os
import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from numerics.big_integer import BigIntegerValue
from numerics.big_integer_view import BigIntegerView
from numerics.config import US_SEPARATORS
from numerics.fixed_decimal import FixedDecimal
from numerics.fixed_decimal_view import FixedDecimalView
from numerics.native import NativeWidth


# =============================================================================
# HYPOTHESIS STRATEGIES
# =============================================================================

scale_strategy = st.integers(min_value=0, max_value=40)

width_strategy = st.sampled_from(list(NativeWidth))

FACTORIES = {
    NativeWidth.INT: FixedDecimal.new_int,
    NativeWidth.INT32: FixedDecimal.new_int32,
    NativeWidth.INT64: FixedDecimal.new_int64,
    NativeWidth.UINT: FixedDecimal.new_uint,
    NativeWidth.UINT32: FixedDecimal.new_uint32,
    NativeWidth.UINT64: FixedDecimal.new_uint64,
}


@st.composite
def native_fixed_decimals(draw):
    """A FixedDecimal built through a randomly chosen native-width factory."""
    width = draw(width_strategy)
    value = draw(st.integers(min_value=width.min_value, max_value=width.max_value))
    scale = draw(scale_strategy)
    return FACTORIES[width](value, scale)


big_magnitude_strategy = st.integers(min_value=-(10 ** 60), max_value=10 ** 60)


@st.composite
def long_digit_strings(draw):
    """
    Digit strings of at least 4400 digits with no leading zero, plus their value.

    Built from small ints so the expected text never needs str() on a huge int.
    """
    head = draw(st.integers(min_value=1, max_value=10 ** 30))
    tail = draw(st.integers(min_value=0, max_value=10 ** 30))
    width = draw(st.integers(min_value=4400, max_value=6000))
    digits = str(head) + str(tail).rjust(width, "0")
    return digits, head * 10 ** width + tail


def group_digits(digits: str, size: int = 3, separator: str = ",") -> str:
    """Insert grouping separators into a run of integer digits."""
    head = len(digits) % size or size
    groups = [digits[:head]]
    groups.extend(digits[i:i + size] for i in range(head, len(digits), size))
    return separator.join(groups)


# =============================================================================
# PROPERTY 1: Round Trip
# =============================================================================

class TestRoundTrip:
    """
    Property 1: for every value v from a native-width factory,
    new_num_str(v.get_num_str()) equals v in magnitude and scale.
    """

    @settings(max_examples=100, phases=[Phase.generate, Phase.target])
    @given(value=native_fixed_decimals())
    def test_native_round_trip(self, value: FixedDecimal) -> None:
        parsed = FixedDecimal.new_num_str(value.get_num_str(), US_SEPARATORS)

        assert parsed.get_integer() == value.get_integer()
        assert parsed.get_precision() == value.get_precision()

    @settings(max_examples=100, phases=[Phase.generate, Phase.target])
    @given(magnitude=big_magnitude_strategy, scale=scale_strategy)
    def test_unbounded_round_trip(self, magnitude: int, scale: int) -> None:
        value = FixedDecimal.new_big_int(magnitude, scale)

        parsed = FixedDecimal.new_num_str(value.get_num_str(), US_SEPARATORS)

        assert parsed == value

    @settings(max_examples=100, phases=[Phase.generate, Phase.target])
    @given(magnitude=big_magnitude_strategy, scale=scale_strategy)
    def test_num_str_shape(self, magnitude: int, scale: int) -> None:
        num_str = FixedDecimal.new_big_int(magnitude, scale).get_num_str()

        assert num_str.startswith("-") == (magnitude < 0)
        assert "," not in num_str
        if scale == 0:
            assert "." not in num_str
        else:
            assert len(num_str.split(".")[1]) == scale

    @settings(max_examples=100, phases=[Phase.generate, Phase.target])
    @given(value=native_fixed_decimals())
    def test_view_round_trip(self, value: FixedDecimal) -> None:
        view = FixedDecimalView.new_fixed_decimal(value)

        assert FixedDecimalView.new_num_str(view.get_num_str(), US_SEPARATORS) == view


# =============================================================================
# PROPERTY 2: Deep-Copy Independence
# =============================================================================

class TestDeepCopyIndependence:
    """Property 2: copies never share state with their source."""

    @settings(max_examples=100, phases=[Phase.generate, Phase.target])
    @given(
        original=native_fixed_decimals(),
        replacement=big_magnitude_strategy,
        replacement_scale=scale_strategy,
    )
    def test_copy_out(
        self,
        original: FixedDecimal,
        replacement: int,
        replacement_scale: int,
    ) -> None:
        before = original.get_num_str()
        clone = original.copy_out()

        original.set_int(replacement, replacement_scale)

        assert clone.get_num_str() == before

    @settings(max_examples=100, phases=[Phase.generate, Phase.target])
    @given(
        original=native_fixed_decimals(),
        replacement=big_magnitude_strategy,
    )
    def test_view_from_value(self, original: FixedDecimal, replacement: int) -> None:
        before = original.get_num_str()
        view = FixedDecimalView.new_fixed_decimal(original)

        original.set_int(replacement, 0)
        view.get_fixed_decimal().set_int(replacement, 1)

        assert view.get_num_str() == before


# =============================================================================
# PROPERTY 3: Self-Healing Idempotence
# =============================================================================

class TestSelfHealing:
    """Property 3: an unconstructed value heals once, to zero at scale 0."""

    @settings(max_examples=100, phases=[Phase.generate, Phase.target])
    @given(calls=st.integers(min_value=1, max_value=20))
    def test_repeated_is_valid(self, calls: int) -> None:
        value = FixedDecimal()

        results = [value.is_valid() for _ in range(calls)]

        assert results[0] is False
        assert all(results[1:])
        assert (value.get_integer(), value.get_precision()) == (0, 0)


# =============================================================================
# PROPERTY 4: Grammar Equivalence
# =============================================================================

class TestGrammarEquivalence:
    """Property 4: sign notations and grouping do not change the value."""

    @settings(max_examples=100, phases=[Phase.generate, Phase.target])
    @given(
        integer_part=st.integers(min_value=0, max_value=10 ** 30),
        fraction=st.text(alphabet="0123456789", max_size=12),
    )
    def test_grouping_and_parentheses(self, integer_part: int, fraction: str) -> None:
        plain = str(integer_part)
        grouped = group_digits(plain)
        suffix = f".{fraction}" if fraction else ""

        expected = FixedDecimal.new_num_str(f"-{plain}{suffix}", US_SEPARATORS)

        assert FixedDecimal.new_num_str(f"({grouped}{suffix})", US_SEPARATORS) == expected
        assert FixedDecimal.new_num_str(f"-{grouped}{suffix}", US_SEPARATORS) == expected
        assert expected.get_precision() == len(fraction)


# =============================================================================
# PROPERTY 5: Zero Detection
# =============================================================================

class TestZeroDetection:
    """Property 5: is_zero depends on the magnitude only."""

    @settings(max_examples=100, phases=[Phase.generate, Phase.target])
    @given(magnitude=big_magnitude_strategy, scale=scale_strategy)
    def test_is_zero(self, magnitude: int, scale: int) -> None:
        value = FixedDecimal.new_big_int(magnitude, scale)

        assert value.is_zero() == (magnitude == 0)
        assert FixedDecimalView.new_fixed_decimal(value).is_zero() == (magnitude == 0)


# =============================================================================
# PROPERTY 6: Decimal Conversion
# =============================================================================

class TestDecimalConversion:
    """Property 6: to_decimal / new_decimal are exact inverses."""

    @settings(max_examples=100, phases=[Phase.generate, Phase.target])
    @given(magnitude=big_magnitude_strategy, scale=scale_strategy)
    def test_to_decimal_round_trip(self, magnitude: int, scale: int) -> None:
        value = FixedDecimal.new_big_int(magnitude, scale)

        converted = value.to_decimal()

        assert FixedDecimal.new_decimal(converted) == value
        assert converted.as_tuple().exponent == -scale
        assert converted == Decimal(value.get_num_str())


# =============================================================================
# PROPERTY 7: Large Magnitudes
# =============================================================================

class TestLargeMagnitudes:
    """
    Property 7: magnitudes with more digits than the interpreter's int/str
    conversion limit parse, format and convert like any other.
    """

    @settings(max_examples=100, phases=[Phase.generate, Phase.target])
    @given(long_digits=long_digit_strings(), scale=scale_strategy, negative=st.booleans())
    def test_fixed_decimal_round_trip(self, long_digits, scale: int, negative: bool) -> None:
        digits, magnitude = long_digits
        if negative:
            magnitude = -magnitude
        expected = f"{digits[:-scale]}.{digits[-scale:]}" if scale else digits
        if negative:
            expected = f"-{expected}"

        value = FixedDecimal.new_big_int(magnitude, scale)

        assert value.get_num_str() == expected
        assert FixedDecimal.new_num_str(expected, US_SEPARATORS) == value
        assert value.to_decimal() == Decimal(expected)
        assert FixedDecimal.new_decimal(value.to_decimal()) == value

    @settings(max_examples=100, phases=[Phase.generate, Phase.target])
    @given(long_digits=long_digit_strings(), scale=scale_strategy)
    def test_view_round_trip(self, long_digits, scale: int) -> None:
        digits, magnitude = long_digits
        fraction = f".{'0' * scale}" if scale else ""
        num_str = f"({group_digits(digits)}{fraction})"

        view = FixedDecimalView.new_num_str(num_str, US_SEPARATORS)

        assert view.get_integer_and_precision() == (-magnitude * 10 ** scale, scale)
        assert FixedDecimalView.new_num_str(view.get_num_str(), US_SEPARATORS) == view

    @settings(max_examples=100, phases=[Phase.generate, Phase.target])
    @given(long_digits=long_digit_strings())
    def test_big_integer_round_trip(self, long_digits) -> None:
        digits, magnitude = long_digits

        value = BigIntegerValue.new_num_str(group_digits(digits), US_SEPARATORS)
        view = BigIntegerView.new_big_integer(value)

        assert value.get_integer_value() == magnitude
        assert value.get_num_str() == digits
        assert view.get_num_str() == digits
        assert BigIntegerValue.new_big_int(magnitude) == value
