"""Tests for the MT940 rule-set configuration."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from mt940check.validation.engine import describe_engine
from mt940check.validation.mt940 import (
    balance_engine_fields,
    build_balance_engine,
    build_header_engine,
    build_transaction_engine,
    header_engine_fields,
    transaction_engine_fields,
)
from mt940check.validation.rules import RuleKind


class TestPurity:
    """Field tables are pure functions of their inputs."""

    def test_balance_fields_are_deterministic(self):
        assert balance_engine_fields("OpeningBalance") == balance_engine_fields("OpeningBalance")

    def test_transaction_fields_are_deterministic(self, valid_transaction):
        first = transaction_engine_fields(valid_transaction)
        second = transaction_engine_fields(dict(valid_transaction))
        assert first == second

    def test_header_fields_are_deterministic(self, valid_payload):
        assert header_engine_fields(valid_payload) == header_engine_fields(valid_payload)

    def test_concurrent_builds_are_equal(self):
        with ThreadPoolExecutor(max_workers=8) as pool:
            tables = list(pool.map(balance_engine_fields, ["ClosingBalance"] * 40))
        assert all(table == tables[0] for table in tables)


class TestDisplayNames:
    def test_balance_names_are_prefixed(self):
        fields = balance_engine_fields("OpeningBalance")
        names = [context.display_name for context in fields[RuleKind.MANDATORY]]
        assert names == [
            "OpeningBalance.Date",
            "OpeningBalance.Currency",
            "OpeningBalance.Amount",
            "OpeningBalance.Indicator",
        ]

    def test_closing_balance_prefix(self):
        fields = balance_engine_fields("ClosingBalance")
        assert fields[RuleKind.DATE_FORMAT][0].display_name == "ClosingBalance.Date"

    def test_transaction_names(self):
        fields = transaction_engine_fields()
        names = [context.display_name for context in fields[RuleKind.MANDATORY]]
        assert names == [
            "Transaction.Date",
            "Transaction.Currency",
            "Transaction.Amount",
            "Transaction.Indicator",
            "Transaction Reference",
            "Transaction.CustomerReference",
            "Transaction Type",
        ]


class TestLengthConfiguration:
    def test_header_lengths(self):
        lengths = {
            context.key: context.max_length
            for context in header_engine_fields()[RuleKind.LENGTH]
        }
        assert lengths == {"accountNumber": 35, "reference": 16, "sequenceNumber": 5}

    def test_balance_lengths(self):
        lengths = {
            context.key: context.max_length
            for context in balance_engine_fields("OpeningBalance")[RuleKind.LENGTH]
        }
        assert lengths == {"date": 6, "currency": 3, "amount": 15, "indicator": 1}

    def test_transaction_lengths(self):
        lengths = {
            context.key: context.max_length
            for context in transaction_engine_fields()[RuleKind.LENGTH]
        }
        assert lengths == {
            "date": 6,
            "currency": 3,
            "amount": 15,
            "indicator": 2,
            "transactionReference": 16,
            "customerReference": 16,
            "transactionType": 4,
        }


class TestRuleOrder:
    def test_header_engine_rules(self):
        labels = [label for label, _ in describe_engine(build_header_engine())]
        assert labels == [
            "Mandatory Param Validation",
            "Optional String Param Validation",
            "Parameter Length Validation",
            "Alpha Numeric Param Validation",
            "Numeric Param Validation",
            "MT Character Set X Validation",
        ]

    def test_balance_engine_rules(self):
        kinds = [rule.kind for rule in build_balance_engine("OpeningBalance").rules]
        assert kinds == [
            RuleKind.MANDATORY,
            RuleKind.OPTIONAL_STRING,
            RuleKind.LENGTH,
            RuleKind.ALPHA,
            RuleKind.NUMERIC,
            RuleKind.DATE_FORMAT,
            RuleKind.CURRENCY_FORMAT,
        ]

    def test_transaction_engine_rules(self):
        kinds = [rule.kind for rule in build_transaction_engine().rules]
        assert kinds == [
            RuleKind.MANDATORY,
            RuleKind.LENGTH,
            RuleKind.ALPHA_NUMERIC,
            RuleKind.ALPHA,
            RuleKind.NUMERIC,
            RuleKind.DATE_FORMAT,
            RuleKind.CURRENCY_FORMAT,
        ]


class TestHeaderEngine:
    def test_valid_header_passes(self, valid_payload):
        assert not build_header_engine(valid_payload).run().is_error

    @pytest.mark.parametrize(
        ("key", "display_name"),
        [
            ("block1", "Header Block 1"),
            ("accountNumber", "Account Number"),
            ("sequenceNumber", "Sequence Number"),
            ("openingBalance", "Opening Balance"),
            ("closingBalance", "Closing Balance"),
        ],
    )
    def test_missing_mandatory_field(self, valid_payload, key, display_name):
        del valid_payload[key]
        result = build_header_engine(valid_payload).run()
        assert result.error_message == f"{display_name} is mandatory"

    def test_account_identification_is_optional(self, valid_payload):
        del valid_payload["accountNumberIdentification"]
        assert not build_header_engine(valid_payload).run().is_error

    def test_whitespace_account_identification_fails(self, valid_payload):
        valid_payload["accountNumberIdentification"] = "   "
        result = build_header_engine(valid_payload).run()
        assert result.is_error
        assert result.error_message.endswith("is not alphanumeric")

    def test_reference_too_long(self, valid_payload):
        valid_payload["reference"] = "R" * 17
        result = build_header_engine(valid_payload).run()
        assert result.error_message == "Transaction Reference exceeds length 16"

    def test_reference_outside_character_set_x(self, valid_payload):
        valid_payload["reference"] = "REF#1"
        result = build_header_engine(valid_payload).run()
        assert result.error_message == "Transaction Reference contains invalid characters"

    def test_sequence_number_not_numeric(self, valid_payload):
        valid_payload["sequenceNumber"] = "0A1"
        result = build_header_engine(valid_payload).run()
        assert result.error_message == "Sequence Number is not numeric"

    def test_account_number_not_alphanumeric(self, valid_payload):
        valid_payload["accountNumber"] = "NL91 ABNA"
        result = build_header_engine(valid_payload).run()
        assert result.error_message == "Account Number is not alphanumeric"


class TestBalanceEngine:
    def test_valid_balance_passes(self, valid_balance):
        assert not build_balance_engine("OpeningBalance", valid_balance).run().is_error

    def test_invalid_date(self, valid_balance):
        valid_balance["date"] = "230230"
        result = build_balance_engine("OpeningBalance", valid_balance).run()
        assert result.error_code == "invalid param"
        assert result.error_message == "date invalid for OpeningBalance.Date"

    def test_lowercase_currency_is_not_a_currency_code(self, valid_balance):
        valid_balance["currency"] = "eur"
        result = build_balance_engine("ClosingBalance", valid_balance).run()
        assert result.error_message == "ClosingBalance.Currency is not a valid currency code"

    def test_indicator_too_long(self, valid_balance):
        valid_balance["indicator"] = "CR"
        result = build_balance_engine("OpeningBalance", valid_balance).run()
        assert result.error_message == "OpeningBalance.Indicator exceeds length 1"

    def test_statement_type_must_be_alphabetic(self, valid_balance):
        valid_balance["statementType"] = "1"
        result = build_balance_engine("OpeningBalance", valid_balance).run()
        assert result.error_message == "OpeningBalance.StatementType is not alphabetic"

    def test_whitespace_statement_type_fails(self, valid_balance):
        valid_balance["statementType"] = "   "
        result = build_balance_engine("OpeningBalance", valid_balance).run()
        assert result.error_message == "OpeningBalance.StatementType is not alphabetic"


class TestTransactionEngine:
    def test_valid_transaction_passes(self, valid_transaction):
        assert not build_transaction_engine(valid_transaction).run().is_error

    def test_missing_transaction_type(self, valid_transaction):
        del valid_transaction["transactionType"]
        result = build_transaction_engine(valid_transaction).run()
        assert result.is_error
        assert result.error_code == "invalid param"
        assert "Transaction Type" in result.error_message
        assert "mandatory" in result.error_message

    def test_reversal_indicator_fits(self, valid_transaction):
        valid_transaction["indicator"] = "RD"
        assert not build_transaction_engine(valid_transaction).run().is_error

    def test_customer_reference_not_alphanumeric(self, valid_transaction):
        valid_transaction["customerReference"] = "CUST/42"
        result = build_transaction_engine(valid_transaction).run()
        assert result.error_message == "Transaction.CustomerReference is not alphanumeric"
