"""Shared test fixtures for mt940check tests."""

import copy
import json
import logging
from pathlib import Path
from typing import Any

import pytest
from hypothesis import settings

settings.register_profile("mt940check", max_examples=100, deadline=None)
settings.load_profile("mt940check")


VALID_BALANCE = {
    "date": "230915",
    "currency": "EUR",
    "amount": "1500,00",
    "indicator": "C",
    "statementType": "F",
}

VALID_TRANSACTION = {
    "date": "230915",
    "currency": "EUR",
    "amount": "250,00",
    "indicator": "D",
    "transactionReference": "TX0001",
    "customerReference": "CUST42",
    "transactionType": "NTRF",
}

VALID_PAYLOAD = {
    "block1": "F01BANKBEBBAXXX0000000000",
    "block2": "I940BANKDEFFXXXXN",
    "accountNumber": "NL91ABNA0417164300",
    "accountNumberIdentification": "ACC001",
    "reference": "STMT-2023/09",
    "sequenceNumber": "00001",
    "openingBalance": VALID_BALANCE,
    "transactions": [VALID_TRANSACTION],
    "closingBalance": {**VALID_BALANCE, "amount": "1250,00", "statementType": None},
}


@pytest.fixture
def valid_payload() -> dict[str, Any]:
    """A minimal MT940 payload that passes every section."""
    return copy.deepcopy(VALID_PAYLOAD)


@pytest.fixture
def valid_transaction() -> dict[str, Any]:
    return dict(VALID_TRANSACTION)


@pytest.fixture
def valid_balance() -> dict[str, Any]:
    return dict(VALID_BALANCE)


@pytest.fixture
def write_payload(tmp_path: Path):
    """Write a payload object to a JSON file and return its path."""

    def _write(payload: Any, name: str = "statement.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def restore_logging():
    """Close file handlers installed on the root logger during the test."""
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        if isinstance(handler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
