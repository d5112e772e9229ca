"""Exit code constants for CLI commands.

Exit codes:
    0: SUCCESS - Every payload passed validation
    1: UNEXPECTED_ERROR - Unexpected/unhandled exception
    2: VALIDATION_ERROR - At least one payload failed validation
    3: PAYLOAD_ERROR - Payload file missing or not valid JSON
    6: CONFIG_ERROR - Configuration file or argument error
"""


class ExitCode:
    """Standard exit codes for CLI commands.

    Example:
        >>> from mt940check.cli.exit_codes import ExitCode
        >>> import sys
        >>>
        >>> if result.is_error:
        ...     sys.exit(ExitCode.VALIDATION_ERROR)
    """

    SUCCESS = 0
    """Operation completed successfully."""

    UNEXPECTED_ERROR = 1
    """Unexpected or unhandled exception occurred."""

    VALIDATION_ERROR = 2
    """A payload failed field validation."""

    PAYLOAD_ERROR = 3
    """Payload file reading or decoding failed."""

    CONFIG_ERROR = 6
    """Configuration file or argument error."""
