"""
============================================================================
Numerics - Error Taxonomy
============================================================================

Reliability Level: L6 Critical
Input Constraints: None
Side Effects: None

Parsing a number string is the only value operation that can fail. Parse
failures surface to the immediate caller as ParseError, carrying the
offending input, the operation name and the scanner's rejection reason.
They are never defaulted or swallowed.

ERROR CODES:
    - NUM-PARSE-001: Number string rejected by the scanner
    - NUM-CFG-001: Numeric separator configuration invalid

============================================================================
"""

from typing import Any, Dict, Optional


class NumericErrorCode:
    """Numerics error codes for audit logging."""
    PARSE_REJECTED = "NUM-PARSE-001"
    CONFIG_INVALID = "NUM-CFG-001"


class NumericError(Exception):
    """
    Base class for all numerics errors.

    Args:
        message: Human-readable error message
        error_code: Numerics error code
    """

    def __init__(self, message: str, error_code: str):
        self.error_code = error_code
        self.message = message
        super().__init__(f"[{error_code}] {message}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "error_code": self.error_code,
            "message": self.message,
        }


class ParseError(NumericError, ValueError):
    """
    Raised when a number string violates the accepted grammar.

    Subclasses ValueError so callers catching the builtin still see it.

    Attributes:
        num_str: The rejected input, verbatim
        operation: Name of the operation that attempted the parse
        reason: Scanner rejection reason (see numerics.scanner.RejectReason)
        position: Index of the offending character, -1 when not positional
    """

    def __init__(
        self,
        num_str: str,
        operation: str,
        reason: str,
        detail: str,
        position: int = -1
    ):
        self.num_str = num_str
        self.operation = operation
        self.reason = reason
        self.detail = detail
        self.position = position
        message = (
            f"{operation} cannot parse {num_str!r}: {detail} "
            f"(reason={reason}, position={position})"
        )
        super().__init__(message, NumericErrorCode.PARSE_REJECTED)

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result.update({
            "num_str": self.num_str,
            "operation": self.operation,
            "reason": self.reason,
            "position": self.position,
        })
        return result


class NumericConfigurationError(NumericError):
    """Raised when numeric separator configuration is invalid (NUM-CFG-001)."""

    def __init__(self, message: str, field_name: Optional[str] = None):
        self.field_name = field_name
        super().__init__(message, NumericErrorCode.CONFIG_INVALID)


__all__ = [
    "NumericErrorCode",
    "NumericError",
    "ParseError",
    "NumericConfigurationError",
]
