"""MT940 JSON payload loading and field extraction.

This module turns a JSON statement payload into the flat field-value
mappings the rule-set builder consumes. It checks only the structure it
needs to walk (objects where objects are expected, a list of transactions);
field content is left entirely to the validation engines.

Expected document shape:
    {
        "block1": "...", "block2": "...",
        "accountNumber": "...", "accountNumberIdentification": "...",
        "reference": "...", "sequenceNumber": "...",
        "openingBalance": {"date": ..., "currency": ..., "amount": ...,
                           "indicator": ..., "statementType": ...},
        "transactions": [{"date": ..., "currency": ..., "amount": ...,
                          "indicator": ..., "transactionReference": ...,
                          "customerReference": ..., "transactionType": ...}],
        "closingBalance": {...}
    }
"""

import json
from pathlib import Path
from typing import Any

from mt940check.core import constants
from mt940check.core.exceptions import PayloadError

HEADER_FIELDS = (
    constants.HEADER_BLOCK_1,
    constants.HEADER_BLOCK_2,
    constants.ACC_NUMBER,
    constants.ACC_NUMBER_IDENTIFICATION,
    constants.REFERENCE,
    constants.SEQUENCE_NO,
    constants.OPENING_BALANCE,
    constants.CLOSING_BALANCE,
)

BALANCE_FIELDS = (
    constants.BAL_DATE,
    constants.BAL_CURRENCY,
    constants.BAL_AMOUNT,
    constants.BAL_INDICATOR,
    constants.BAL_STATEMENT_TYPE,
)

TRANSACTION_FIELDS = (
    constants.TRANSACTION_DATE,
    constants.TRANSACTION_CURRENCY,
    constants.TRANSACTION_AMOUNT,
    constants.TRANSACTION_INDICATOR,
    constants.TRANSACTION_REFERENCE,
    constants.CUSTOMER_REFERENCE,
    constants.TRANSACTION_TYPE,
)


def load_payload(path: Path) -> dict[str, Any]:
    """Load a JSON statement payload from a file.

    Args:
        path: Path to the JSON payload

    Returns:
        Decoded payload object

    Raises:
        PayloadError: If the file is missing or unreadable, is not valid UTF-8
                     JSON, or does not contain a JSON object
    """
    if not path.exists():
        raise PayloadError("Payload file not found", file_path=str(path))

    try:
        content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise PayloadError(
            "Payload is not valid UTF-8",
            file_path=str(path),
            reason=str(e),
        ) from e
    except OSError as e:
        raise PayloadError("Failed to read payload", file_path=str(path), reason=str(e)) from e

    try:
        payload = json.loads(content)
    except json.JSONDecodeError as e:
        raise PayloadError(
            f"Invalid JSON in payload: {e.msg}",
            file_path=str(path),
            line_number=e.lineno,
        ) from e

    return parse_payload(payload, source=str(path))


def parse_payload(payload: Any, source: str | None = None) -> dict[str, Any]:
    """Check the top-level shape of a decoded payload.

    Raises:
        PayloadError: If the payload is not a JSON object
    """
    if not isinstance(payload, dict):
        raise PayloadError(
            "Payload must be a JSON object",
            file_path=source,
            reason=f"got {type(payload).__name__}",
        )
    return payload


def extract_header_fields(payload: dict[str, Any]) -> dict[str, Any]:
    """Extract the top-level header field values."""
    return {key: payload.get(key) for key in HEADER_FIELDS}


def extract_balance_fields(payload: dict[str, Any], balance_key: str) -> dict[str, Any]:
    """Extract the field values of one balance object.

    A missing balance yields absent values; presence of the balance itself
    is checked by the header engine.

    Raises:
        PayloadError: If the balance is present but not an object
    """
    balance = payload.get(balance_key)
    if balance is None:
        return dict.fromkeys(BALANCE_FIELDS)
    if not isinstance(balance, dict):
        raise PayloadError(
            "Balance must be a JSON object",
            section=balance_key,
            reason=f"got {type(balance).__name__}",
        )
    return {key: balance.get(key) for key in BALANCE_FIELDS}


def extract_transactions(payload: dict[str, Any]) -> list[dict[str, Any]]:
    """Extract the field values of every statement line, in payload order.

    Raises:
        PayloadError: If transactions is not a list of objects
    """
    transactions = payload.get(constants.TRANSACTIONS)
    if transactions is None:
        return []
    if not isinstance(transactions, list):
        raise PayloadError(
            "Transactions must be a JSON array",
            section=constants.TRANSACTIONS,
            reason=f"got {type(transactions).__name__}",
        )

    extracted = []
    for index, transaction in enumerate(transactions):
        if not isinstance(transaction, dict):
            raise PayloadError(
                "Transaction must be a JSON object",
                section=constants.TRANSACTIONS,
                index=index,
                reason=f"got {type(transaction).__name__}",
            )
        extracted.append({key: transaction.get(key) for key in TRANSACTION_FIELDS})
    return extracted
