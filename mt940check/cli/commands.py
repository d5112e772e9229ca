"""CLI command implementations.

This module implements the CLI commands for the mt940check tool:
- validate: Validate one JSON statement payload
- batch: Validate many payloads and optionally write a tabular summary
- list_rules: Show the rules configured for each statement section
- check_config: Validate configuration files

Each command is implemented as a function that returns an exit code,
enabling both direct invocation and subprocess-based testing.
"""

import json
import sys
from collections.abc import Callable
from functools import partial
from pathlib import Path
from typing import Annotated, Any

import polars as pl
from cyclopts import Parameter

from mt940check.cli.config import load_config, merge_config, validate_config
from mt940check.cli.exit_codes import ExitCode
from mt940check.cli.output import ProgressIndicator, configure_logging, handle_error
from mt940check.core import constants
from mt940check.core.exceptions import ConfigError, PayloadError
from mt940check.core.payload import load_payload
from mt940check.validation.engine import ValidationEngine, describe_engine
from mt940check.validation.mt940 import (
    build_balance_engine,
    build_header_engine,
    build_transaction_engine,
)
from mt940check.validation.statement import (
    REPORT_SCHEMA,
    build_statement_report,
    validate_statement,
)

PAYLOAD_ERROR_CODE = "payload error"
PAYLOAD_SECTION = "Payload"


def _prepare(config: Path | None, **overrides: Any) -> dict[str, Any]:
    """Load, merge and check configuration, then set up logging.

    Raises:
        ConfigError: If the configuration file or a value is invalid
    """
    cfg = load_config(config) if config else {}
    cfg = merge_config(cfg, **overrides)

    errors = validate_config(cfg)
    if errors:
        raise ConfigError("Invalid configuration", errors=errors)

    log_file = cfg.get("log_file")
    configure_logging(cfg["log_level"], Path(log_file) if log_file else None)
    return cfg


def validate(
    input_path: Annotated[Path, Parameter(help="JSON statement payload")],
    config: Annotated[Path | None, Parameter(help="Configuration file path")] = None,
    output_format: Annotated[str | None, Parameter(help="Output format (text, json)")] = None,
    fail_fast: Annotated[bool | None, Parameter(help="Report only the first failure")] = None,
    verbose: Annotated[bool, Parameter(help="Show detailed error information")] = False,
    log_level: Annotated[str | None, Parameter(help="Log level (debug, info, warning, error)")] = None,
    log_file: Annotated[Path | None, Parameter(help="Log file path")] = None,
) -> int:
    """Validate an MT940 JSON statement payload.

    By default every section is validated and a per-section report is
    printed. With --fail-fast only the first failure is reported.

    Args:
        input_path: Path to the JSON payload
        config: Path to configuration file (optional)
        output_format: "text" (default) or "json"
        fail_fast: Stop at the first failing section
        verbose: Show stack traces for unexpected errors
        log_level: Logging level
        log_file: Path to log file (optional)

    Returns:
        Exit code (0 valid, 2 invalid, 3 unreadable payload)

    Example:
        >>> from pathlib import Path
        >>> from mt940check.cli.commands import validate
        >>>
        >>> exit_code = validate(input_path=Path("statement.json"), fail_fast=True)
    """
    try:
        cfg = _prepare(
            config,
            output_format=output_format,
            fail_fast=fail_fast,
            log_level=log_level,
            log_file=str(log_file) if log_file else None,
        )
        payload = load_payload(input_path)

        if cfg["fail_fast"]:
            result = validate_statement(payload)
            if cfg["output_format"] == "json":
                print(json.dumps(result.to_dict(), indent=2))
            elif result.is_error:
                print(f"✗ Validation failed: {result.format()}", file=sys.stderr)
            else:
                print(f"✓ Validation successful: {input_path.name}")
            return ExitCode.VALIDATION_ERROR if result.is_error else ExitCode.SUCCESS

        report = build_statement_report(payload, source=str(input_path))
        if cfg["output_format"] == "json":
            print(json.dumps(report.to_json(), indent=2))
        else:
            print(report.format())
        return ExitCode.SUCCESS if report.is_valid() else ExitCode.VALIDATION_ERROR

    except PayloadError as e:
        handle_error(e, verbose=verbose)
        return ExitCode.PAYLOAD_ERROR
    except (ConfigError, ValueError) as e:
        handle_error(e, verbose=verbose)
        return ExitCode.CONFIG_ERROR
    except Exception as e:
        handle_error(e, verbose=verbose)
        return ExitCode.UNEXPECTED_ERROR


def batch(
    input_paths: Annotated[list[Path], Parameter(help="JSON statement payloads")],
    config: Annotated[Path | None, Parameter(help="Configuration file path")] = None,
    report_path: Annotated[Path | None, Parameter(help="Summary output (.csv or .parquet)")] = None,
    quiet: Annotated[bool, Parameter(help="Suppress progress output")] = False,
    verbose: Annotated[bool, Parameter(help="Show detailed error information")] = False,
    log_level: Annotated[str | None, Parameter(help="Log level (debug, info, warning, error)")] = None,
    log_file: Annotated[Path | None, Parameter(help="Log file path")] = None,
) -> int:
    """Validate several payloads and summarize the results.

    Every file is processed even when earlier ones fail. An unreadable
    payload is recorded in the summary as a "Payload" section failure.

    Args:
        input_paths: Payload files to validate
        config: Path to configuration file (optional)
        report_path: Where to write the per-section summary table
        quiet: Suppress progress indicators
        verbose: Show stack traces for unexpected errors
        log_level: Logging level
        log_file: Path to log file (optional)

    Returns:
        Exit code (0 all valid, 2 any invalid, 3 any unreadable payload)
    """
    try:
        cfg = _prepare(
            config,
            report_path=str(report_path) if report_path else None,
            log_level=log_level,
            log_file=str(log_file) if log_file else None,
        )

        progress = ProgressIndicator(enabled=not quiet)
        frames: list[pl.DataFrame] = []
        invalid = 0
        unreadable = 0

        for input_path in input_paths:
            progress.start(f"Validating {input_path.name}")
            try:
                report = build_statement_report(load_payload(input_path), source=str(input_path))
            except PayloadError as e:
                unreadable += 1
                progress.error(str(e))
                frames.append(
                    _payload_error_frame(e).with_columns(pl.lit(str(input_path)).alias("source"))
                )
                continue

            frames.append(report.to_dataframe().with_columns(pl.lit(str(input_path)).alias("source")))
            if report.is_valid():
                progress.success(f"✓ {input_path.name}: {report.summary()}")
            else:
                invalid += 1
                progress.error(f"{input_path.name}: {report.first_error().error_message}")

        print(
            f"Batch Summary: {len(input_paths) - invalid - unreadable}/{len(input_paths)} valid, "
            f"{invalid} invalid, {unreadable} unreadable"
        )

        if cfg.get("report_path"):
            _write_summary(frames, Path(cfg["report_path"]))

        if unreadable:
            return ExitCode.PAYLOAD_ERROR
        if invalid:
            return ExitCode.VALIDATION_ERROR
        return ExitCode.SUCCESS

    except (ConfigError, ValueError) as e:
        handle_error(e, verbose=verbose)
        return ExitCode.CONFIG_ERROR
    except Exception as e:
        handle_error(e, verbose=verbose)
        return ExitCode.UNEXPECTED_ERROR


def _payload_error_frame(error: PayloadError) -> pl.DataFrame:
    return pl.DataFrame(
        {
            "section": [PAYLOAD_SECTION],
            "is_error": [True],
            "error_code": [PAYLOAD_ERROR_CODE],
            "error_message": [error.message],
        },
        schema=REPORT_SCHEMA,
    )


def _write_summary(frames: list[pl.DataFrame], path: Path) -> None:
    """Write the concatenated section table to CSV or Parquet."""
    if frames:
        summary = pl.concat(frames, how="vertical")
    else:
        summary = pl.DataFrame(schema={**REPORT_SCHEMA, "source": pl.Utf8})
    summary = summary.select("source", *REPORT_SCHEMA)

    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix == ".parquet":
        summary.write_parquet(path)
    else:
        summary.write_csv(path)
    print(f"Summary written to {path}")


SECTION_ENGINES: dict[str, Callable[[], ValidationEngine]] = {
    "header": build_header_engine,
    "balance": partial(build_balance_engine, constants.DN_OPENING_BALANCE_SECTION),
    "transaction": build_transaction_engine,
}


def list_rules(
    section: Annotated[str | None, Parameter(help="Section (header, balance, transaction)")] = None,
) -> int:
    """List the validation rules configured for each statement section.

    Args:
        section: Only show this section

    Returns:
        Exit code (0 for success, 6 for an unknown section)
    """
    if section is not None and section not in SECTION_ENGINES:
        print(
            f"Error: Unknown section '{section}'. "
            f"Available sections: {', '.join(SECTION_ENGINES)}",
            file=sys.stderr,
        )
        return ExitCode.CONFIG_ERROR

    names = [section] if section else list(SECTION_ENGINES)
    for name in names:
        engine = SECTION_ENGINES[name]()
        print(f"{name}:")
        for label, fields in describe_engine(engine):
            print(f"  {label}: {', '.join(fields)}")
    return ExitCode.SUCCESS


def check_config(
    config_path: Annotated[Path, Parameter(help="Configuration file to check")],
) -> int:
    """Validate a configuration file.

    Returns:
        Exit code (0 for a valid file, 6 otherwise)
    """
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        handle_error(e)
        return ExitCode.CONFIG_ERROR

    errors = validate_config(cfg)
    if errors:
        print("✗ Configuration invalid:", file=sys.stderr)
        for error in errors:
            print(f"  - {error}", file=sys.stderr)
        return ExitCode.CONFIG_ERROR

    print(f"✓ Configuration valid: {config_path}")
    return ExitCode.SUCCESS
