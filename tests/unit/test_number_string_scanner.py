"""
Unit Tests for the Number String Scanner

Reliability Level: L6 Critical

Every rejection reason is reachable and reported with the offending
position. The transition table covers every (state, character class) pair
of the non-terminal states.
"""

import pytest

import os
import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from numerics.config import NumericSeparators, US_SEPARATORS
from numerics.errors import ParseError
from numerics.scanner import (
    CharClass,
    RejectReason,
    ScanState,
    TRANSITIONS,
    scan_num_str,
)


# =============================================================================
# Transition Table
# =============================================================================

class TestTransitionTable:
    """Tests for the TRANSITIONS constant."""

    @pytest.mark.parametrize("state", [
        ScanState.SIGN,
        ScanState.INTEGER_DIGITS,
        ScanState.FRACTION_DIGITS,
        ScanState.CLOSE_PAREN,
    ])
    def test_every_char_class_has_an_entry(self, state: ScanState) -> None:
        for char_class in CharClass:
            assert (state, char_class) in TRANSITIONS, (
                f"missing entry for ({state.value}, {char_class.value})"
            )

    def test_done_has_no_outbound_entries(self) -> None:
        assert not any(state is ScanState.DONE for state, _ in TRANSITIONS)


# =============================================================================
# Rejection Reasons
# =============================================================================

class TestRejections:
    """Each rejection reason with representative inputs."""

    @pytest.mark.parametrize("num_str,reason,position", [
        ("", RejectReason.EMPTY, -1),
        ("-", RejectReason.NO_DIGITS, -1),
        ("()", RejectReason.NO_DIGITS, 1),
        (".", RejectReason.NO_DIGITS, 0),
        ("12a", RejectReason.INVALID_CHARACTER, 2),
        (" 5", RejectReason.INVALID_CHARACTER, 0),
        ("5 ", RejectReason.INVALID_CHARACTER, 1),
        ("+5", RejectReason.INVALID_CHARACTER, 0),
        ("(5)5", RejectReason.INVALID_CHARACTER, 3),
        ("1.2.3", RejectReason.MULTIPLE_DECIMAL, 3),
        ("(-5)", RejectReason.MIXED_SIGN, 1),
        ("-(5)", RejectReason.MIXED_SIGN, 1),
        ("--5", RejectReason.MIXED_SIGN, 1),
        ("5-", RejectReason.MIXED_SIGN, 1),
        ("(5", RejectReason.UNBALANCED_PAREN, -1),
        ("5)", RejectReason.UNBALANCED_PAREN, 1),
        ("(5))", RejectReason.UNBALANCED_PAREN, 3),
        (",123", RejectReason.MISPLACED_GROUP, 0),
        ("1,,234", RejectReason.MISPLACED_GROUP, 2),
        ("1,23", RejectReason.MISPLACED_GROUP, 3),
        ("1234,567", RejectReason.MISPLACED_GROUP, 4),
        ("1,234,56", RejectReason.MISPLACED_GROUP, 7),
        ("1,.5", RejectReason.MISPLACED_GROUP, 2),
        ("1.234,5", RejectReason.MISPLACED_GROUP, 5),
        ("5.", RejectReason.TRAILING_DECIMAL, 1),
        ("(5.)", RejectReason.TRAILING_DECIMAL, 3),
    ])
    def test_rejected_with_reason(
        self,
        num_str: str,
        reason: RejectReason,
        position: int,
    ) -> None:
        with pytest.raises(ParseError) as exc_info:
            scan_num_str(num_str, US_SEPARATORS)

        assert exc_info.value.reason == reason.value
        assert exc_info.value.position == position

    def test_non_string_input_is_type_error(self) -> None:
        with pytest.raises(TypeError):
            scan_num_str(123, US_SEPARATORS)

    def test_operation_name_reported(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            scan_num_str("x", US_SEPARATORS, operation="Caller.parse")

        assert exc_info.value.operation == "Caller.parse"
        assert exc_info.value.to_dict()["operation"] == "Caller.parse"

    def test_integer_only_rejects_non_zero_fraction(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            scan_num_str("12.50", US_SEPARATORS, integer_only=True)

        assert exc_info.value.reason == RejectReason.FRACTIONAL_VALUE.value
        assert exc_info.value.position == 2

    def test_integer_only_accepts_zero_fraction(self) -> None:
        result = scan_num_str("12.00", US_SEPARATORS, integer_only=True)

        assert result.integer_digits == "12"


# =============================================================================
# Accepted Inputs
# =============================================================================

class TestAccepted:
    """Accepted inputs split into sign, integer and fraction digits."""

    @pytest.mark.parametrize("num_str,negative,integer_digits,fraction_digits", [
        ("0", False, "0", ""),
        ("-123.45", True, "123", "45"),
        ("(123.45)", True, "123", "45"),
        ("1,234.56", False, "1234", "56"),
        ("(1,234,567.0)", True, "1234567", "0"),
        ("-.25", True, "", "25"),
        ("999", False, "999", ""),
    ])
    def test_parts(
        self,
        num_str: str,
        negative: bool,
        integer_digits: str,
        fraction_digits: str,
    ) -> None:
        result = scan_num_str(num_str, US_SEPARATORS)

        assert result.negative is negative
        assert result.integer_digits == integer_digits
        assert result.fraction_digits == fraction_digits

    def test_magnitude_and_scale(self) -> None:
        result = scan_num_str("(1,234.560)", US_SEPARATORS)

        assert result.magnitude == -1234560
        assert result.scale == 3

    def test_custom_separators(self) -> None:
        separators = NumericSeparators(integer_separator="_", integer_grouping=4)

        result = scan_num_str("12_3456_7890.5", separators)

        assert result.magnitude == 12345678905
        assert result.scale == 1

    def test_custom_separators_reject_default_comma(self) -> None:
        separators = NumericSeparators(integer_separator="_", integer_grouping=4)

        with pytest.raises(ParseError) as exc_info:
            scan_num_str("1,234", separators)

        assert exc_info.value.reason == RejectReason.INVALID_CHARACTER.value
