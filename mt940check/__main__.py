"""CLI entry point for mt940check.

Enables invocation via `python -m mt940check`.
"""

import sys

from mt940check.cli.app import app


def main() -> None:
    exit_code = app()
    sys.exit(exit_code if exit_code is not None else 0)


if __name__ == "__main__":
    main()
