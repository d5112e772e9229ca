"""Custom exception classes for mt940check error handling.

This module defines the exception hierarchy for faults that are not
validation outcomes:
- PayloadError: Payload files that cannot be read or decoded
- RuleConfigurationError: Rules or field contexts built with invalid parameters
- ConfigError: CLI configuration files that cannot be loaded or are invalid

Field-content defects are never raised. They are returned as ErrorResult
values by the validation engine.

All exceptions inherit from Mt940CheckError for consistent error handling.
"""

from typing import Any


class Mt940CheckError(Exception):
    """Base exception for all mt940check errors.

    Provides a common base class for all custom exceptions in the package,
    enabling catch-all error handling when needed.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error description
            context: Optional dictionary of contextual information (file paths,
                    field keys, rule kinds, etc.)
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return a formatted error message with context."""
        if not self.context:
            return self.message

        context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"{self.message} [{context_str}]"


class PayloadError(Mt940CheckError):
    """Exception raised when a statement payload cannot be loaded.

    Raised by the payload loader when the file is missing, is not valid JSON,
    or does not decode to the expected object structure.

    Context typically includes:
        - file_path: Path to the payload file
        - section: Payload section that has the wrong shape
        - reason: Specific reason for the failure
    """

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        section: str | None = None,
        reason: str | None = None,
        **extra_context: Any,
    ) -> None:
        """Initialize payload error with file and section details.

        Args:
            message: Human-readable error description
            file_path: Path to the payload file that failed
            section: Payload section with the unexpected structure
            reason: Specific reason for the failure
            **extra_context: Additional context information
        """
        context: dict[str, Any] = {}
        if file_path is not None:
            context["file_path"] = file_path
        if section is not None:
            context["section"] = section
        if reason is not None:
            context["reason"] = reason
        context.update(extra_context)

        super().__init__(message, context)


class RuleConfigurationError(Mt940CheckError):
    """Exception raised when a rule or field context is built incorrectly.

    This is a programming defect in the rule-set configuration (an empty
    field key, a rule with no contexts), never a payload defect.

    Context typically includes:
        - rule: Kind of the rule being built
        - parameter: Name of the invalid parameter
        - value: Invalid value provided

    Example:
        >>> raise RuleConfigurationError(
        ...     "A rule needs at least one field context",
        ...     rule="Mandatory Param Validation",
        ...     parameter="contexts",
        ... )
    """

    def __init__(
        self,
        message: str,
        rule: str | None = None,
        parameter: str | None = None,
        value: Any = None,
        **extra_context: Any,
    ) -> None:
        """Initialize rule configuration error.

        Args:
            message: Human-readable error description
            rule: Label of the rule being built
            parameter: Name of the invalid parameter
            value: Invalid value provided
            **extra_context: Additional context information
        """
        context: dict[str, Any] = {}
        if rule is not None:
            context["rule"] = rule
        if parameter is not None:
            context["parameter"] = parameter
        if value is not None:
            context["value"] = value
        context.update(extra_context)

        super().__init__(message, context)


class ConfigError(Mt940CheckError):
    """Configuration file error.

    Raised when CLI configuration files cannot be loaded or parsed.

    Context typically includes:
        - config_path: Path to the configuration file
        - reason: Specific reason for the failure
    """

    def __init__(
        self,
        message: str,
        config_path: str | None = None,
        reason: str | None = None,
        **extra_context: Any,
    ) -> None:
        context: dict[str, Any] = {}
        if config_path is not None:
            context["config_path"] = config_path
        if reason is not None:
            context["reason"] = reason
        context.update(extra_context)

        super().__init__(message, context)
