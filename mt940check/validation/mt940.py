"""MT940 rule-set configuration.

This module assembles the field contexts for each payload section and hands
them to a ValidationEngine. Three sections are validated separately:

- Header: top-level message fields (header blocks, account, reference,
  sequence number, presence of both balances)
- Balance: one named balance object ("OpeningBalance" or "ClosingBalance"),
  whose name prefixes the generated display names
- Transaction: one statement line

The *_fields functions are pure: the same inputs always produce equal
context tables, which keeps engine builds deterministic and thread safe.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from mt940check.core import constants as c
from mt940check.validation.context import FieldContext
from mt940check.validation.engine import ValidationEngine
from mt940check.validation.rules import RuleKind

FieldTable = dict[RuleKind, tuple[FieldContext, ...]]


@dataclass(frozen=True)
class FieldSpec:
    """Static description of a field: payload key, display name, length bound."""

    key: str
    display_name: str
    max_length: int | None = None

    def bind(self, values: Mapping[str, Any]) -> FieldContext:
        """Create the FieldContext for this field from extracted values."""
        return FieldContext(self.key, self.display_name, values.get(self.key), self.max_length)


def _bind_all(specs: tuple[FieldSpec, ...], values: Mapping[str, Any]) -> tuple[FieldContext, ...]:
    return tuple(spec.bind(values) for spec in specs)


def _length_keys(specs: tuple[FieldSpec, ...]) -> frozenset[str]:
    return frozenset(spec.key for spec in specs if spec.max_length)


# Header fields
_BLOCK_1 = FieldSpec(c.HEADER_BLOCK_1, c.DN_HEADER_BLOCK_1)
_BLOCK_2 = FieldSpec(c.HEADER_BLOCK_2, c.DN_HEADER_BLOCK_2)
_ACC_NUMBER = FieldSpec(c.ACC_NUMBER, c.DN_ACC_NUMBER)
_ACC_NUMBER_ID = FieldSpec(c.ACC_NUMBER_IDENTIFICATION, c.DN_ACC_NUMBER_IDENTIFICATION)
_REFERENCE = FieldSpec(c.REFERENCE, c.DN_TRANSACTION_REFERENCE)
_SEQUENCE_NO = FieldSpec(c.SEQUENCE_NO, c.DN_SEQUENCE_NO)

HEADER_MANDATORY = (
    _BLOCK_1,
    _BLOCK_2,
    _ACC_NUMBER,
    _REFERENCE,
    _SEQUENCE_NO,
    FieldSpec(c.OPENING_BALANCE, c.DN_OPENING_BALANCE),
    FieldSpec(c.CLOSING_BALANCE, c.DN_CLOSING_BALANCE),
)
HEADER_OPTIONAL = (_ACC_NUMBER_ID,)
HEADER_LENGTH = (
    FieldSpec(c.ACC_NUMBER, c.DN_ACC_NUMBER, c.ACC_IDENTIFICATION_LENGTH),
    FieldSpec(c.REFERENCE, c.DN_TRANSACTION_REFERENCE, c.REFERENCE_LENGTH),
    FieldSpec(c.SEQUENCE_NO, c.DN_SEQUENCE_NO, c.SEQUENCE_NO_LENGTH),
)
HEADER_ALPHA_NUMERIC = (_BLOCK_1, _BLOCK_2, _ACC_NUMBER, _ACC_NUMBER_ID)
HEADER_NUMERIC = (_SEQUENCE_NO,)
HEADER_CHARACTER_SET_X = (_REFERENCE,)

# Transaction fields
_TX_DATE = FieldSpec(c.TRANSACTION_DATE, c.DN_TRANSACTION + c.DN_DATE)
_TX_CURRENCY = FieldSpec(c.TRANSACTION_CURRENCY, c.DN_TRANSACTION + c.DN_CURRENCY)
_TX_AMOUNT = FieldSpec(c.TRANSACTION_AMOUNT, c.DN_TRANSACTION + c.DN_AMOUNT)
_TX_INDICATOR = FieldSpec(c.TRANSACTION_INDICATOR, c.DN_TRANSACTION + c.DN_INDICATOR)
_TX_REFERENCE = FieldSpec(c.TRANSACTION_REFERENCE, c.DN_TRANSACTION_REFERENCE)
_TX_CUSTOMER_REF = FieldSpec(c.CUSTOMER_REFERENCE, c.DN_TRANSACTION + c.DN_CUSTOMER_REFERENCE)
_TX_TYPE = FieldSpec(c.TRANSACTION_TYPE, c.DN_TRANSACTION_TYPE)

TRANSACTION_MANDATORY = (
    _TX_DATE,
    _TX_CURRENCY,
    _TX_AMOUNT,
    _TX_INDICATOR,
    _TX_REFERENCE,
    _TX_CUSTOMER_REF,
    _TX_TYPE,
)
TRANSACTION_LENGTH = (
    FieldSpec(_TX_DATE.key, _TX_DATE.display_name, c.DATE_LENGTH),
    FieldSpec(_TX_CURRENCY.key, _TX_CURRENCY.display_name, c.CURRENCY_LENGTH),
    FieldSpec(_TX_AMOUNT.key, _TX_AMOUNT.display_name, c.AMOUNT_LENGTH),
    FieldSpec(_TX_INDICATOR.key, _TX_INDICATOR.display_name, c.TRANSACTION_IND_LENGTH),
    FieldSpec(_TX_REFERENCE.key, _TX_REFERENCE.display_name, c.REFERENCE_LENGTH),
    FieldSpec(_TX_CUSTOMER_REF.key, _TX_CUSTOMER_REF.display_name, c.REFERENCE_LENGTH),
    FieldSpec(_TX_TYPE.key, _TX_TYPE.display_name, c.TRANSACTION_TYPE_LENGTH),
)
TRANSACTION_ALPHA_NUMERIC = (_TX_REFERENCE, _TX_CUSTOMER_REF)
TRANSACTION_ALPHA = (_TX_INDICATOR, _TX_CURRENCY, _TX_TYPE)
TRANSACTION_NUMERIC = (_TX_DATE,)
TRANSACTION_DATE_FORMAT = (_TX_DATE,)
TRANSACTION_CURRENCY_FORMAT = (_TX_CURRENCY,)


def balance_specs(balance_name: str) -> dict[RuleKind, tuple[FieldSpec, ...]]:
    """Field specs of a balance section, with display names prefixed by balance_name.

    Args:
        balance_name: Section name such as "OpeningBalance"

    Returns:
        Specs per rule kind, in engine order
    """
    date = FieldSpec(c.BAL_DATE, balance_name + c.DN_DATE)
    currency = FieldSpec(c.BAL_CURRENCY, balance_name + c.DN_CURRENCY)
    amount = FieldSpec(c.BAL_AMOUNT, balance_name + c.DN_AMOUNT)
    indicator = FieldSpec(c.BAL_INDICATOR, balance_name + c.DN_INDICATOR)
    statement_type = FieldSpec(c.BAL_STATEMENT_TYPE, balance_name + c.DN_STATEMENT_TYPE)

    return {
        RuleKind.MANDATORY: (date, currency, amount, indicator),
        RuleKind.OPTIONAL_STRING: (statement_type,),
        RuleKind.LENGTH: (
            FieldSpec(date.key, date.display_name, c.DATE_LENGTH),
            FieldSpec(currency.key, currency.display_name, c.CURRENCY_LENGTH),
            FieldSpec(amount.key, amount.display_name, c.AMOUNT_LENGTH),
            FieldSpec(indicator.key, indicator.display_name, c.INDICATOR_LENGTH),
        ),
        RuleKind.ALPHA: (indicator, currency, statement_type),
        RuleKind.NUMERIC: (date,),
        RuleKind.DATE_FORMAT: (date,),
        RuleKind.CURRENCY_FORMAT: (currency,),
    }


def header_engine_fields(values: Mapping[str, Any] | None = None) -> FieldTable:
    """Bind the header field specs to extracted values.

    Args:
        values: Header field values by payload key (missing keys are absent)

    Returns:
        Field contexts per rule kind, in engine order
    """
    values = values or {}
    return {
        RuleKind.MANDATORY: _bind_all(HEADER_MANDATORY, values),
        RuleKind.OPTIONAL_STRING: _bind_all(HEADER_OPTIONAL, values),
        RuleKind.LENGTH: _bind_all(HEADER_LENGTH, values),
        RuleKind.ALPHA_NUMERIC: _bind_all(HEADER_ALPHA_NUMERIC, values),
        RuleKind.NUMERIC: _bind_all(HEADER_NUMERIC, values),
        RuleKind.CHARACTER_SET_X: _bind_all(HEADER_CHARACTER_SET_X, values),
    }


def balance_engine_fields(balance_name: str, values: Mapping[str, Any] | None = None) -> FieldTable:
    """Bind the field specs of a named balance to extracted values."""
    values = values or {}
    return {kind: _bind_all(specs, values) for kind, specs in balance_specs(balance_name).items()}


def transaction_engine_fields(values: Mapping[str, Any] | None = None) -> FieldTable:
    """Bind the transaction field specs to extracted values."""
    values = values or {}
    return {
        RuleKind.MANDATORY: _bind_all(TRANSACTION_MANDATORY, values),
        RuleKind.LENGTH: _bind_all(TRANSACTION_LENGTH, values),
        RuleKind.ALPHA_NUMERIC: _bind_all(TRANSACTION_ALPHA_NUMERIC, values),
        RuleKind.ALPHA: _bind_all(TRANSACTION_ALPHA, values),
        RuleKind.NUMERIC: _bind_all(TRANSACTION_NUMERIC, values),
        RuleKind.DATE_FORMAT: _bind_all(TRANSACTION_DATE_FORMAT, values),
        RuleKind.CURRENCY_FORMAT: _bind_all(TRANSACTION_CURRENCY_FORMAT, values),
    }


def build_header_engine(values: Mapping[str, Any] | None = None) -> ValidationEngine:
    """Build the engine validating the top-level message fields.

    Example:
        >>> engine = build_header_engine({"block1": "F01BANKBEBBAXXX0000000000"})
        >>> engine.run().error_message
        'Header Block 2 is mandatory'
    """
    fields = header_engine_fields(values)
    return (
        ValidationEngine(c.DN_HEADER)
        .add_mandatory_rule(fields[RuleKind.MANDATORY])
        .add_optional_rule(fields[RuleKind.OPTIONAL_STRING])
        .add_length_rule(fields[RuleKind.LENGTH], _length_keys(HEADER_LENGTH))
        .add_alphanumeric_rule(fields[RuleKind.ALPHA_NUMERIC])
        .add_numeric_rule(fields[RuleKind.NUMERIC])
        .add_character_set_x_rule(fields[RuleKind.CHARACTER_SET_X])
    )


def build_balance_engine(
    balance_name: str, values: Mapping[str, Any] | None = None
) -> ValidationEngine:
    """Build the engine validating one balance object.

    Args:
        balance_name: Section name used to prefix display names
        values: Balance field values by payload key
    """
    fields = balance_engine_fields(balance_name, values)
    length_keys = _length_keys(balance_specs(balance_name)[RuleKind.LENGTH])
    return (
        ValidationEngine(balance_name)
        .add_mandatory_rule(fields[RuleKind.MANDATORY])
        .add_optional_rule(fields[RuleKind.OPTIONAL_STRING])
        .add_length_rule(fields[RuleKind.LENGTH], length_keys)
        .add_alpha_rule(fields[RuleKind.ALPHA])
        .add_numeric_rule(fields[RuleKind.NUMERIC])
        .add_date_format_rule(fields[RuleKind.DATE_FORMAT])
        .add_currency_format_rule(fields[RuleKind.CURRENCY_FORMAT])
    )


def build_transaction_engine(values: Mapping[str, Any] | None = None) -> ValidationEngine:
    """Build the engine validating one statement line."""
    fields = transaction_engine_fields(values)
    return (
        ValidationEngine(c.DN_TRANSACTION)
        .add_mandatory_rule(fields[RuleKind.MANDATORY])
        .add_length_rule(fields[RuleKind.LENGTH], _length_keys(TRANSACTION_LENGTH))
        .add_alphanumeric_rule(fields[RuleKind.ALPHA_NUMERIC])
        .add_alpha_rule(fields[RuleKind.ALPHA])
        .add_numeric_rule(fields[RuleKind.NUMERIC])
        .add_date_format_rule(fields[RuleKind.DATE_FORMAT])
        .add_currency_format_rule(fields[RuleKind.CURRENCY_FORMAT])
    )
