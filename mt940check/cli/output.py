"""Output formatting, progress indicators and logging setup for the CLI.

This module provides:
- ProgressIndicator: TTY-aware progress indicators for batch runs
- handle_error: Formatted error messages with context and optional stack traces
- configure_logging: Root logger setup from --log-level / --log-file
"""

import logging
import sys
import traceback
from pathlib import Path
from typing import TextIO

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class ProgressIndicator:
    """Simple progress indicator for CLI operations.

    Disabled automatically when the stream is not a TTY. Progress messages
    are written to stderr to keep stdout clean for actual output.
    """

    def __init__(self, enabled: bool = True, stream: TextIO = sys.stderr):
        self.enabled = enabled and stream.isatty()
        self.stream = stream

    def start(self, message: str) -> None:
        if self.enabled:
            self.stream.write(f"{message}... ")
            self.stream.flush()

    def success(self, message: str) -> None:
        if self.enabled:
            self.stream.write("✓\n")
        print(message)

    def error(self, message: str) -> None:
        if self.enabled:
            self.stream.write("✗\n")
        print(f"Error: {message}", file=sys.stderr)


def handle_error(error: Exception, verbose: bool = False) -> None:
    """Format and display error message with context.

    Displays error messages to stderr with the context fields carried by
    Mt940CheckError exceptions. When verbose mode is enabled, also displays
    the full stack trace.

    Args:
        error: Exception to display
        verbose: Whether to show stack trace (default False)
    """
    print(f"Error: {error}", file=sys.stderr)

    if hasattr(error, "context") and error.context:
        print("Context:", file=sys.stderr)
        for key, value in error.context.items():
            print(f"  {key}: {value}", file=sys.stderr)

    if verbose:
        print("\nStack trace:", file=sys.stderr)
        traceback.print_exc(file=sys.stderr)


def configure_logging(level: str = "warning", log_file: Path | None = None) -> None:
    """Configure the root logger for a CLI run.

    Args:
        level: One of debug, info, warning, error (case insensitive)
        log_file: Optional file receiving log records in addition to stderr

    Raises:
        ValueError: If level is not a known log level
    """
    try:
        numeric_level = LOG_LEVELS[level.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown log level '{level}'. Expected one of: {', '.join(LOG_LEVELS)}"
        ) from None

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(level=numeric_level, format=LOG_FORMAT, handlers=handlers, force=True)
