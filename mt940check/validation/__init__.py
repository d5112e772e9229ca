"""Validation rule engine for MT940 statement payloads.

This package provides the field-level rule engine (field contexts, the nine
rule variants, and the fail-fast ValidationEngine), the MT940 rule-set
configuration that builds engines for the header, balance and transaction
sections, and whole-statement validation with per-section reporting.
"""

# Core data structures
from mt940check.validation.context import FieldContext
from mt940check.validation.result import ErrorResult, failure, success

# Rules and engine
from mt940check.validation.engine import ValidationEngine, describe_engine
from mt940check.validation.rules import RuleKind, ValidationRule, check_rule, make_rule

# MT940 rule sets
from mt940check.validation.mt940 import (
    FieldSpec,
    balance_engine_fields,
    build_balance_engine,
    build_header_engine,
    build_transaction_engine,
    header_engine_fields,
    transaction_engine_fields,
)

# Whole-statement validation
from mt940check.validation.statement import (
    SectionResult,
    StatementReport,
    build_statement_report,
    statement_engines,
    validate_statement,
)

__all__ = [
    # Core data structures
    "FieldContext",
    "ErrorResult",
    "success",
    "failure",
    # Rules and engine
    "RuleKind",
    "ValidationRule",
    "check_rule",
    "make_rule",
    "ValidationEngine",
    "describe_engine",
    # MT940 rule sets
    "FieldSpec",
    "header_engine_fields",
    "balance_engine_fields",
    "transaction_engine_fields",
    "build_header_engine",
    "build_balance_engine",
    "build_transaction_engine",
    # Whole-statement validation
    "SectionResult",
    "StatementReport",
    "build_statement_report",
    "statement_engines",
    "validate_statement",
]
