"""
============================================================================
Numerics - Separator Configuration
============================================================================

Reliability Level: L6 Critical
Input Constraints: Environment variables must be properly formatted
Side Effects: Loads .env on import, logs configuration on load

Number strings accepted by the parser may carry thousands grouping in the
integer portion. The grouping character and group size are configurable;
the decimal separator is always the period ('.').

Default (United States) separators:
    decimal separator = '.'
    integer separator = ','
    integer grouping  = 3 (thousands)

ENVIRONMENT VARIABLES:
    - NUMERICS_INTEGER_SEPARATOR: Single grouping character (default: ",")
    - NUMERICS_INTEGER_GROUPING: Digits per group, positive int (default: 3)

ERROR CODES:
    - NUM-CFG-001: Configuration invalid

============================================================================
"""

from dataclasses import dataclass
from typing import List, Optional
import logging
import os
import threading

from dotenv import load_dotenv

from numerics.errors import NumericConfigurationError, NumericErrorCode

load_dotenv()

# Configure module logger
logger = logging.getLogger(__name__)


# =============================================================================
# Default Values
# =============================================================================

DECIMAL_SEPARATOR = "."

DEFAULT_INTEGER_SEPARATOR = ","

DEFAULT_INTEGER_GROUPING = 3

# Characters that already carry meaning in the number string grammar
RESERVED_CHARACTERS = frozenset("0123456789.-()")


# =============================================================================
# NumericSeparators
# =============================================================================

@dataclass(frozen=True)
class NumericSeparators:
    """
    Separator characters recognized when parsing number strings.

    Frozen so a single instance can be shared by every parser call.

    Reliability Level: L6 Critical
    Input Constraints: integer_separator is one non-reserved character,
        integer_grouping is positive
    """

    integer_separator: str = DEFAULT_INTEGER_SEPARATOR
    integer_grouping: int = DEFAULT_INTEGER_GROUPING
    decimal_separator: str = DECIMAL_SEPARATOR

    def validate(self) -> None:
        """
        Validate separator configuration.

        Raises:
            NumericConfigurationError: If any field is invalid (NUM-CFG-001)
        """
        errors: List[str] = []

        if self.decimal_separator != DECIMAL_SEPARATOR:
            errors.append(
                f"decimal_separator must be {DECIMAL_SEPARATOR!r}, "
                f"got: {self.decimal_separator!r}"
            )

        if not isinstance(self.integer_separator, str) or len(self.integer_separator) != 1:
            errors.append(
                f"integer_separator must be a single character, "
                f"got: {self.integer_separator!r}"
            )
        elif self.integer_separator in RESERVED_CHARACTERS or self.integer_separator.isspace():
            errors.append(
                f"integer_separator {self.integer_separator!r} collides with "
                f"number string syntax"
            )

        if (
            isinstance(self.integer_grouping, bool)
            or not isinstance(self.integer_grouping, int)
            or self.integer_grouping <= 0
        ):
            errors.append(
                f"integer_grouping must be a positive integer, "
                f"got: {self.integer_grouping!r}"
            )

        if errors:
            error_msg = "Numeric separator validation failed: " + "; ".join(errors)
            logger.error(f"[{NumericErrorCode.CONFIG_INVALID}] {error_msg}")
            raise NumericConfigurationError(error_msg)

    @classmethod
    def from_environment(cls, validate: bool = True) -> "NumericSeparators":
        """
        Load separators from environment variables.

        Malformed NUMERICS_INTEGER_GROUPING falls back to the default with a
        warning. A separator that fails validation is an error.

        Args:
            validate: Whether to validate after loading (default: True)

        Returns:
            NumericSeparators instance

        Raises:
            NumericConfigurationError: If validation fails (NUM-CFG-001)
        """
        integer_separator = os.environ.get(
            "NUMERICS_INTEGER_SEPARATOR", DEFAULT_INTEGER_SEPARATOR
        )

        grouping_str = os.environ.get(
            "NUMERICS_INTEGER_GROUPING", str(DEFAULT_INTEGER_GROUPING)
        )
        try:
            integer_grouping = int(grouping_str.strip())
        except ValueError:
            logger.warning(
                f"[NUMERICS-CONFIG] Invalid NUMERICS_INTEGER_GROUPING value: "
                f"{grouping_str}, using default: {DEFAULT_INTEGER_GROUPING}"
            )
            integer_grouping = DEFAULT_INTEGER_GROUPING

        logger.info(
            f"[NUMERICS-CONFIG] Loading separators from environment | "
            f"NUMERICS_INTEGER_SEPARATOR={integer_separator!r} | "
            f"NUMERICS_INTEGER_GROUPING={integer_grouping}"
        )

        separators = cls(
            integer_separator=integer_separator,
            integer_grouping=integer_grouping,
        )

        if validate:
            separators.validate()

        return separators

    def to_dict(self) -> dict:
        """Convert configuration to dictionary for logging."""
        return {
            "decimal_separator": self.decimal_separator,
            "integer_separator": self.integer_separator,
            "integer_grouping": self.integer_grouping,
        }


# US defaults, always valid
US_SEPARATORS = NumericSeparators()


# =============================================================================
# Module-Level Configuration Instance
# =============================================================================

# Global separators instance (lazy-loaded)
_separators_instance: Optional[NumericSeparators] = None
_separators_lock = threading.Lock()


def get_numeric_separators() -> NumericSeparators:
    """
    Get the module-level separators, loading from environment on first call.

    Raises:
        NumericConfigurationError: If environment configuration is invalid
    """
    global _separators_instance

    with _separators_lock:
        if _separators_instance is None:
            _separators_instance = NumericSeparators.from_environment(validate=True)
        return _separators_instance


def reset_numeric_separators() -> None:
    """Clear the module-level separators. Used by tests."""
    global _separators_instance
    with _separators_lock:
        _separators_instance = None
    logger.debug("[NUMERICS-CONFIG] Separators instance reset")


__all__ = [
    "NumericSeparators",
    "DECIMAL_SEPARATOR",
    "DEFAULT_INTEGER_SEPARATOR",
    "DEFAULT_INTEGER_GROUPING",
    "US_SEPARATORS",
    "get_numeric_separators",
    "reset_numeric_separators",
]
