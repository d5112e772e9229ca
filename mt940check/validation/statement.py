"""Whole-statement validation and reporting.

A statement is validated section by section: the header, the opening
balance, each transaction in payload order, then the closing balance. Each
section gets its own freshly built engine. validate_statement stops at the
first failing section; build_statement_report runs every section and
collects the results in a StatementReport.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import polars as pl

from mt940check.core import constants
from mt940check.core.payload import (
    extract_balance_fields,
    extract_header_fields,
    extract_transactions,
)
from mt940check.validation.engine import ValidationEngine
from mt940check.validation.mt940 import (
    build_balance_engine,
    build_header_engine,
    build_transaction_engine,
)
from mt940check.validation.result import ErrorResult, success

logger = logging.getLogger(__name__)

REPORT_SCHEMA = {
    "section": pl.Utf8,
    "is_error": pl.Boolean,
    "error_code": pl.Utf8,
    "error_message": pl.Utf8,
}


def statement_engines(payload: dict[str, Any]) -> Iterator[tuple[str, ValidationEngine]]:
    """Yield (section name, engine) pairs in validation order.

    Engines are built lazily, so a caller that stops early never builds the
    remaining ones.

    Raises:
        PayloadError: If a balance or transaction has the wrong JSON shape
    """
    yield constants.DN_HEADER, build_header_engine(extract_header_fields(payload))

    yield constants.DN_OPENING_BALANCE_SECTION, build_balance_engine(
        constants.DN_OPENING_BALANCE_SECTION,
        extract_balance_fields(payload, constants.OPENING_BALANCE),
    )

    for index, transaction in enumerate(extract_transactions(payload)):
        yield f"{constants.DN_TRANSACTION}[{index}]", build_transaction_engine(transaction)

    yield constants.DN_CLOSING_BALANCE_SECTION, build_balance_engine(
        constants.DN_CLOSING_BALANCE_SECTION,
        extract_balance_fields(payload, constants.CLOSING_BALANCE),
    )


def validate_statement(payload: dict[str, Any]) -> ErrorResult:
    """Validate a statement payload, stopping at the first failure.

    Args:
        payload: Decoded JSON payload

    Returns:
        The first failure in section order, or success

    Example:
        >>> result = validate_statement(load_payload(Path("statement.json")))
        >>> if result.is_error:
        ...     print(result.error_message)
    """
    for section, engine in statement_engines(payload):
        result = engine.run()
        if result.is_error:
            logger.info("Statement failed in section %s", section)
            return result
    return success()


@dataclass(frozen=True)
class SectionResult:
    """Engine result for one statement section."""

    section: str
    result: ErrorResult


@dataclass
class StatementReport:
    """Per-section results of a full statement validation.

    Attributes:
        sections: One SectionResult per section, in validation order
        timestamp: When validation was performed
        source: Optional origin of the payload (e.g. a file path)

    Example:
        >>> report = build_statement_report(payload)
        >>> print(report.summary())
        Statement Summary: 4/4 sections passed, 0 failed
    """

    sections: list[SectionResult]
    timestamp: datetime = field(default_factory=datetime.now)
    source: str | None = None

    @property
    def failed(self) -> int:
        return sum(1 for s in self.sections if s.result.is_error)

    @property
    def passed(self) -> int:
        return len(self.sections) - self.failed

    def is_valid(self) -> bool:
        """Check if every section passed."""
        return self.failed == 0

    def first_error(self) -> ErrorResult:
        """Return the failure validate_statement would report, or success."""
        for section in self.sections:
            if section.result.is_error:
                return section.result
        return success()

    def summary(self) -> str:
        return (
            f"Statement Summary: {self.passed}/{len(self.sections)} sections passed, "
            f"{self.failed} failed"
        )

    def format(self, errors_only: bool = False) -> str:
        """Format report as human-readable text.

        Args:
            errors_only: Only list sections that failed

        Returns:
            Formatted string with summary and per-section lines
        """
        lines = []

        title = "Statement Report"
        if self.source:
            title += f": {self.source}"
        lines.append(f"{title} ({self.timestamp.strftime('%Y-%m-%d %H:%M:%S')})")
        lines.append("=" * 60)
        lines.append(self.summary())
        lines.append("")

        for section in self.sections:
            if errors_only and not section.result.is_error:
                continue
            status = "✗" if section.result.is_error else "✓"
            lines.append(f"  {status} {section.section}: {section.result.format()}")

        return "\n".join(lines)

    def to_json(self) -> dict[str, Any]:
        """Export report as JSON for programmatic access."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "source": self.source,
            "summary": {
                "sections": len(self.sections),
                "passed": self.passed,
                "failed": self.failed,
                "is_valid": self.is_valid(),
            },
            "first_error": self.first_error().to_dict(),
            "sections": [
                {"section": s.section, **s.result.to_dict()} for s in self.sections
            ],
        }

    def to_dataframe(self) -> pl.DataFrame:
        """Tabulate the section results, one row per section in validation order."""
        return pl.DataFrame(
            {
                "section": [s.section for s in self.sections],
                "is_error": [s.result.is_error for s in self.sections],
                "error_code": [s.result.error_code for s in self.sections],
                "error_message": [s.result.error_message for s in self.sections],
            },
            schema=REPORT_SCHEMA,
        )


def build_statement_report(
    payload: dict[str, Any], source: str | None = None
) -> StatementReport:
    """Validate every section of a statement payload.

    Unlike validate_statement, a failing section does not stop validation
    of the following ones.

    Args:
        payload: Decoded JSON payload
        source: Optional origin recorded on the report

    Returns:
        StatementReport with one result per section
    """
    sections = [
        SectionResult(section=section, result=engine.run())
        for section, engine in statement_engines(payload)
    ]
    return StatementReport(sections=sections, source=source)
