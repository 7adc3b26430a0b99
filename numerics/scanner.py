"""
============================================================================
Numerics - Number String Scanner
============================================================================

Reliability Level: L6 Critical
Input Constraints: str only
Side Effects: Logs NUM-PARSE-001 on rejection

GRAMMAR:
    number   := "-" body | "(" body ")" | body
    body     := integer [ "." fraction ] | "." fraction
    integer  := digits | group ( SEP group_n )*
    fraction := digits

    group    is 1..N digits, group_n is exactly N digits, SEP and N come from
    NumericSeparators (default ',' and 3). The period is the only decimal
    separator. A leading '-' and enclosing parentheses never combine.

SCANNER STATES:
    SIGN → INTEGER_DIGITS (digit)
    SIGN → FRACTION_DIGITS (decimal separator)
    INTEGER_DIGITS → FRACTION_DIGITS (decimal separator)
    INTEGER_DIGITS / FRACTION_DIGITS → CLOSE_PAREN (")")
    any accepting state → DONE (end of input)

    Every (state, character class) pair that is not a transition maps to
    exactly one RejectReason in the same table.

ERROR CODES:
    - NUM-PARSE-001: Number string rejected

============================================================================
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple, Union
import logging

from numerics.config import NumericSeparators, get_numeric_separators
from numerics.digits import digits_to_int
from numerics.errors import NumericErrorCode, ParseError

# Configure module logger
logger = logging.getLogger(__name__)


# =============================================================================
# Enums
# =============================================================================

class ScanState(Enum):
    """Scanner states."""
    SIGN = "SIGN"
    INTEGER_DIGITS = "INTEGER_DIGITS"
    FRACTION_DIGITS = "FRACTION_DIGITS"
    CLOSE_PAREN = "CLOSE_PAREN"
    DONE = "DONE"


class CharClass(Enum):
    """Character classes recognized by the scanner."""
    MINUS = "MINUS"
    OPEN_PAREN = "OPEN_PAREN"
    CLOSE_PAREN = "CLOSE_PAREN"
    DIGIT = "DIGIT"
    GROUP_SEP = "GROUP_SEP"
    DECIMAL_SEP = "DECIMAL_SEP"
    OTHER = "OTHER"


class ScanAction(Enum):
    """Side effect performed on a transition."""
    MINUS = "MINUS"
    OPEN = "OPEN"
    INTEGER_DIGIT = "INTEGER_DIGIT"
    GROUP = "GROUP"
    POINT = "POINT"
    FRACTION_DIGIT = "FRACTION_DIGIT"
    CLOSE = "CLOSE"


class RejectReason(Enum):
    """Why a number string was rejected."""
    EMPTY = "EMPTY"
    NO_DIGITS = "NO_DIGITS"
    INVALID_CHARACTER = "INVALID_CHARACTER"
    MULTIPLE_DECIMAL = "MULTIPLE_DECIMAL"
    MIXED_SIGN = "MIXED_SIGN"
    UNBALANCED_PAREN = "UNBALANCED_PAREN"
    MISPLACED_GROUP = "MISPLACED_GROUP"
    TRAILING_DECIMAL = "TRAILING_DECIMAL"
    FRACTIONAL_VALUE = "FRACTIONAL_VALUE"


REJECT_DETAILS: Dict[RejectReason, str] = {
    RejectReason.EMPTY: "number string is empty",
    RejectReason.NO_DIGITS: "number string contains no digits",
    RejectReason.INVALID_CHARACTER: "unexpected character",
    RejectReason.MULTIPLE_DECIMAL: "more than one decimal separator",
    RejectReason.MIXED_SIGN: "sign notation repeated or combined",
    RejectReason.UNBALANCED_PAREN: "parentheses do not enclose the number",
    RejectReason.MISPLACED_GROUP: "integer grouping separator misplaced",
    RejectReason.TRAILING_DECIMAL: "decimal separator has no fraction digits",
    RejectReason.FRACTIONAL_VALUE: "integer value has non-zero fraction digits",
}


# =============================================================================
# TRANSITIONS Constant
# =============================================================================

Transition = Tuple[ScanState, ScanAction]

_S = ScanState
_C = CharClass
_A = ScanAction
_R = RejectReason

TRANSITIONS: Dict[Tuple[ScanState, CharClass], Union[Transition, RejectReason]] = {
    (_S.SIGN, _C.MINUS): (_S.SIGN, _A.MINUS),
    (_S.SIGN, _C.OPEN_PAREN): (_S.SIGN, _A.OPEN),
    (_S.SIGN, _C.DIGIT): (_S.INTEGER_DIGITS, _A.INTEGER_DIGIT),
    (_S.SIGN, _C.DECIMAL_SEP): (_S.FRACTION_DIGITS, _A.POINT),
    (_S.SIGN, _C.CLOSE_PAREN): _R.NO_DIGITS,
    (_S.SIGN, _C.GROUP_SEP): _R.MISPLACED_GROUP,
    (_S.SIGN, _C.OTHER): _R.INVALID_CHARACTER,

    (_S.INTEGER_DIGITS, _C.DIGIT): (_S.INTEGER_DIGITS, _A.INTEGER_DIGIT),
    (_S.INTEGER_DIGITS, _C.GROUP_SEP): (_S.INTEGER_DIGITS, _A.GROUP),
    (_S.INTEGER_DIGITS, _C.DECIMAL_SEP): (_S.FRACTION_DIGITS, _A.POINT),
    (_S.INTEGER_DIGITS, _C.CLOSE_PAREN): (_S.CLOSE_PAREN, _A.CLOSE),
    (_S.INTEGER_DIGITS, _C.MINUS): _R.MIXED_SIGN,
    (_S.INTEGER_DIGITS, _C.OPEN_PAREN): _R.UNBALANCED_PAREN,
    (_S.INTEGER_DIGITS, _C.OTHER): _R.INVALID_CHARACTER,

    (_S.FRACTION_DIGITS, _C.DIGIT): (_S.FRACTION_DIGITS, _A.FRACTION_DIGIT),
    (_S.FRACTION_DIGITS, _C.CLOSE_PAREN): (_S.CLOSE_PAREN, _A.CLOSE),
    (_S.FRACTION_DIGITS, _C.DECIMAL_SEP): _R.MULTIPLE_DECIMAL,
    (_S.FRACTION_DIGITS, _C.GROUP_SEP): _R.MISPLACED_GROUP,
    (_S.FRACTION_DIGITS, _C.MINUS): _R.MIXED_SIGN,
    (_S.FRACTION_DIGITS, _C.OPEN_PAREN): _R.UNBALANCED_PAREN,
    (_S.FRACTION_DIGITS, _C.OTHER): _R.INVALID_CHARACTER,

    (_S.CLOSE_PAREN, _C.CLOSE_PAREN): _R.UNBALANCED_PAREN,
    (_S.CLOSE_PAREN, _C.OPEN_PAREN): _R.UNBALANCED_PAREN,
    (_S.CLOSE_PAREN, _C.MINUS): _R.MIXED_SIGN,
    (_S.CLOSE_PAREN, _C.DIGIT): _R.INVALID_CHARACTER,
    (_S.CLOSE_PAREN, _C.GROUP_SEP): _R.INVALID_CHARACTER,
    (_S.CLOSE_PAREN, _C.DECIMAL_SEP): _R.INVALID_CHARACTER,
    (_S.CLOSE_PAREN, _C.OTHER): _R.INVALID_CHARACTER,
}

# States in which end of input is acceptable (subject to final checks)
ACCEPTING_STATES = frozenset({
    ScanState.INTEGER_DIGITS,
    ScanState.FRACTION_DIGITS,
    ScanState.CLOSE_PAREN,
})


# =============================================================================
# Data Classes
# =============================================================================

@dataclass(frozen=True)
class ScanResult:
    """
    Accepted number string, split into its parts.

    integer_digits has grouping separators removed. Either digit string may
    be empty but not both.
    """
    negative: bool
    integer_digits: str
    fraction_digits: str

    @property
    def scale(self) -> int:
        return len(self.fraction_digits)

    @property
    def magnitude(self) -> int:
        value = digits_to_int(self.integer_digits + self.fraction_digits)
        return -value if self.negative else value


class _Rejected(Exception):
    """Internal signal carrying a reject reason and position."""

    def __init__(self, reason: RejectReason, position: int):
        self.reason = reason
        self.position = position
        super().__init__(reason.value)


# =============================================================================
# Scanner
# =============================================================================

class NumberStringScanner:
    """
    Single-use scanner over one number string.

    Use scan_num_str() rather than instantiating directly.
    """

    def __init__(self, num_str: str, separators: NumericSeparators):
        self.num_str = num_str
        self.separators = separators
        self.state = ScanState.SIGN

        self._minus = False
        self._paren = False
        self._integer_digits = []
        self._fraction_digits = []
        self._point_seen = False
        self._group_count = 0
        self._group_length = 0

    def classify(self, char: str) -> CharClass:
        if "0" <= char <= "9":
            return CharClass.DIGIT
        if char == "-":
            return CharClass.MINUS
        if char == "(":
            return CharClass.OPEN_PAREN
        if char == ")":
            return CharClass.CLOSE_PAREN
        if char == self.separators.decimal_separator:
            return CharClass.DECIMAL_SEP
        if char == self.separators.integer_separator:
            return CharClass.GROUP_SEP
        return CharClass.OTHER

    def run(self) -> ScanResult:
        if self.num_str == "":
            raise _Rejected(RejectReason.EMPTY, -1)

        for position, char in enumerate(self.num_str):
            entry = TRANSITIONS[(self.state, self.classify(char))]
            if isinstance(entry, RejectReason):
                raise _Rejected(entry, position)
            next_state, action = entry
            self._apply(action, position)
            self.state = next_state

        return self._finish()

    def _apply(self, action: ScanAction, position: int) -> None:
        if action is ScanAction.MINUS or action is ScanAction.OPEN:
            if self._minus or self._paren:
                raise _Rejected(RejectReason.MIXED_SIGN, position)
            if action is ScanAction.MINUS:
                self._minus = True
            else:
                self._paren = True

        elif action is ScanAction.INTEGER_DIGIT:
            self._integer_digits.append(self.num_str[position])
            self._group_length += 1

        elif action is ScanAction.GROUP:
            self._check_group(position, closing=False)
            self._group_count += 1
            self._group_length = 0

        elif action is ScanAction.POINT:
            self._check_last_group(position)
            self._point_seen = True

        elif action is ScanAction.FRACTION_DIGIT:
            self._fraction_digits.append(self.num_str[position])

        elif action is ScanAction.CLOSE:
            if not self._paren:
                raise _Rejected(RejectReason.UNBALANCED_PAREN, position)
            self._check_last_group(position)
            self._check_fraction(position)

    def _check_group(self, position: int, closing: bool) -> None:
        grouping = self.separators.integer_grouping
        if self._group_count == 0 and not closing:
            # Leading group: 1..grouping digits
            if not 0 < self._group_length <= grouping:
                raise _Rejected(RejectReason.MISPLACED_GROUP, position)
        elif self._group_length != grouping:
            raise _Rejected(RejectReason.MISPLACED_GROUP, position)

    def _check_last_group(self, position: int) -> None:
        if self._group_count > 0 and not self._point_seen:
            self._check_group(position, closing=True)

    def _check_fraction(self, position: int) -> None:
        if self._point_seen and not self._fraction_digits:
            if not self._integer_digits:
                raise _Rejected(RejectReason.NO_DIGITS, position)
            raise _Rejected(RejectReason.TRAILING_DECIMAL, position)

    def _finish(self) -> ScanResult:
        end = len(self.num_str)

        if self.state not in ACCEPTING_STATES:
            raise _Rejected(RejectReason.NO_DIGITS, -1)

        if self.state is not ScanState.CLOSE_PAREN:
            if self._paren:
                raise _Rejected(RejectReason.UNBALANCED_PAREN, -1)
            self._check_last_group(end - 1)
            self._check_fraction(end - 1)

        self.state = ScanState.DONE

        return ScanResult(
            negative=self._minus or self._paren,
            integer_digits="".join(self._integer_digits),
            fraction_digits="".join(self._fraction_digits),
        )


def scan_num_str(
    num_str: str,
    separators: Optional[NumericSeparators] = None,
    operation: str = "scan_num_str",
    integer_only: bool = False
) -> ScanResult:
    """
    Scan a number string against the accepted grammar.

    Args:
        num_str: Number string, e.g. "-123.45", "(123.45)", "1,234.56"
        separators: Grouping configuration (default: module separators)
        operation: Operation name reported in ParseError
        integer_only: Reject non-zero fraction digits (FRACTIONAL_VALUE)

    Returns:
        ScanResult with sign, integer digits and fraction digits

    Raises:
        ParseError: If num_str violates the grammar (NUM-PARSE-001)
        TypeError: If num_str is not a str
    """
    if not isinstance(num_str, str):
        raise TypeError(
            f"{operation} expects a number string, got {type(num_str).__name__}"
        )

    if separators is None:
        separators = get_numeric_separators()

    try:
        scanned = NumberStringScanner(num_str, separators).run()
        if integer_only and scanned.fraction_digits.strip("0"):
            raise _Rejected(
                RejectReason.FRACTIONAL_VALUE,
                num_str.find(separators.decimal_separator),
            )
        return scanned
    except _Rejected as rejected:
        logger.warning(
            f"[{NumericErrorCode.PARSE_REJECTED}] Number string rejected | "
            f"operation={operation} | num_str={num_str!r} | "
            f"reason={rejected.reason.value} | position={rejected.position}"
        )
        raise ParseError(
            num_str=num_str,
            operation=operation,
            reason=rejected.reason.value,
            detail=REJECT_DETAILS[rejected.reason],
            position=rejected.position,
        ) from None


__all__ = [
    "ScanState",
    "CharClass",
    "RejectReason",
    "TRANSITIONS",
    "ScanResult",
    "NumberStringScanner",
    "scan_num_str",
]
