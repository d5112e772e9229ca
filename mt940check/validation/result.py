"""ErrorResult data structure.

This module defines the ErrorResult class returned by every validation rule
and by the validation engine. The default value denotes success; a failure
carries a stable error code and a formatted message that names the field.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ErrorResult:
    """Outcome of a rule check or an engine run.

    Attributes:
        is_error: True if the check failed. False (the default) is success.
        error_code: Stable code identifying the error category
                   (e.g. "invalid param"). Empty on success.
        error_message: Human-readable message including the display name of
                      the failing field. Empty on success.

    Example:
        >>> ErrorResult().is_error
        False
        >>> result = failure("invalid param", "Sequence Number is mandatory")
        >>> print(result.format())
        [invalid param] Sequence Number is mandatory
    """

    is_error: bool = False
    error_code: str = ""
    error_message: str = ""

    def is_success(self) -> bool:
        """Check if the check passed."""
        return not self.is_error

    def format(self) -> str:
        """Format result as a single human-readable line."""
        if not self.is_error:
            return "Validation passed"
        return f"[{self.error_code}] {self.error_message}"

    def to_dict(self) -> dict[str, Any]:
        """Export the result for JSON serialization."""
        return {
            "is_error": self.is_error,
            "error_code": self.error_code,
            "error_message": self.error_message,
        }


SUCCESS = ErrorResult()


def success() -> ErrorResult:
    """Return the success result."""
    return SUCCESS


def failure(error_code: str, error_message: str) -> ErrorResult:
    """Construct a failure result.

    Args:
        error_code: Stable error code
        error_message: Formatted message naming the failing field

    Returns:
        ErrorResult with is_error set
    """
    return ErrorResult(is_error=True, error_code=error_code, error_message=error_message)
