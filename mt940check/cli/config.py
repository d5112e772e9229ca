"""Configuration file loading and validation.

This module handles loading CLI configuration from JSON and YAML files and
merging CLI arguments with file-based configuration (CLI takes precedence).

Configuration files can specify:
- log_level: debug, info, warning or error
- log_file: Path of a file receiving log records
- output_format: "text" or "json"
- fail_fast: Stop at the first failing section instead of reporting all
- report_path: Where batch writes its tabular summary (.csv or .parquet)
"""

import json
from pathlib import Path
from typing import Any

import yaml

from mt940check.cli.output import LOG_LEVELS
from mt940check.core.exceptions import ConfigError

CONFIG_KEYS = {"log_level", "log_file", "output_format", "fail_fast", "report_path"}
OUTPUT_FORMATS = ("text", "json")
REPORT_SUFFIXES = (".csv", ".parquet")

DEFAULT_CONFIG: dict[str, Any] = {
    "log_level": "warning",
    "log_file": None,
    "output_format": "text",
    "fail_fast": False,
    "report_path": None,
}


def load_config(path: Path) -> dict[str, Any]:
    """Load configuration from a JSON or YAML file.

    Format is determined by file extension (.json, .yaml, .yml); other
    extensions are tried as JSON first, then YAML.

    Args:
        path: Path to configuration file

    Returns:
        Configuration dictionary

    Raises:
        ConfigError: If the file cannot be read or parsed, or does not
                    contain a mapping

    Example:
        >>> config = load_config(Path("mt940check.yaml"))
        >>> config["output_format"]
        'json'
    """
    if not path.exists():
        raise ConfigError("Configuration file not found", config_path=str(path))

    try:
        content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ConfigError(
            f"Configuration file {path} is not valid UTF-8", config_path=str(path), reason=str(e)
        ) from e
    except OSError as e:
        raise ConfigError(
            f"Failed to load config from {path}", config_path=str(path), reason=str(e)
        ) from e

    try:
        if path.suffix == ".json":
            config = json.loads(content)
        elif path.suffix in (".yaml", ".yml"):
            config = yaml.safe_load(content)
        else:
            try:
                config = json.loads(content)
            except json.JSONDecodeError:
                config = yaml.safe_load(content)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}", config_path=str(path)) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}", config_path=str(path)) from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(
            "Configuration file must contain a mapping",
            config_path=str(path),
            reason=f"got {type(config).__name__}",
        )
    return config


def merge_config(base: dict[str, Any], **overrides: Any) -> dict[str, Any]:
    """Merge CLI arguments into base configuration.

    Defaults fill keys missing from base. Only non-None override values are
    applied, so file values are used when a CLI argument is not given.

    Example:
        >>> merge_config({"output_format": "json"}, output_format=None)["output_format"]
        'json'
        >>> merge_config({"output_format": "json"}, output_format="text")["output_format"]
        'text'
    """
    merged = {**DEFAULT_CONFIG, **base}
    for key, value in overrides.items():
        if value is not None:
            merged[key] = value
    return merged


def validate_config(config: dict[str, Any]) -> list[str]:
    """Validate configuration keys and values.

    Args:
        config: Configuration dictionary to validate

    Returns:
        List of validation error messages (empty list if valid)
    """
    errors = []

    for key in sorted(set(config) - CONFIG_KEYS):
        errors.append(f"Unknown configuration key: {key}")

    log_level = config.get("log_level")
    if log_level is not None and str(log_level).lower() not in LOG_LEVELS:
        errors.append(f"Unknown log level: {log_level}")

    output_format = config.get("output_format")
    if output_format is not None and output_format not in OUTPUT_FORMATS:
        errors.append(
            f"Unknown output format: {output_format} (expected one of: {', '.join(OUTPUT_FORMATS)})"
        )

    fail_fast = config.get("fail_fast")
    if fail_fast is not None and not isinstance(fail_fast, bool):
        errors.append(f"fail_fast must be true or false, got: {fail_fast!r}")

    report_path = config.get("report_path")
    if report_path is not None and Path(str(report_path)).suffix not in REPORT_SUFFIXES:
        errors.append(
            f"Unsupported report format: {report_path} (expected .csv or .parquet)"
        )

    return errors
