"""MT940 field definitions and validation constants.

This module holds the fixed configuration data the rule engine is layered
on: payload field keys, human-readable display names, SWIFT field lengths,
error codes, error message templates, and the character-set and format
patterns used by the content rules.

Payload layout:
    - block1, block2: Basic and application header blocks [REQUIRED]
    - accountNumber: Account identification, tag 25 [REQUIRED]
    - accountNumberIdentification: Account owner identifier [OPTIONAL]
    - reference: Transaction reference number, tag 20 [REQUIRED]
    - sequenceNumber: Statement number, tag 28C [REQUIRED]
    - openingBalance / closingBalance: Balance objects, tags 60a / 62a [REQUIRED]
    - transactions: List of statement lines, tag 61 [OPTIONAL]
"""

import re

# Header fields
HEADER_BLOCK_1 = "block1"
HEADER_BLOCK_2 = "block2"
ACC_NUMBER = "accountNumber"
ACC_NUMBER_IDENTIFICATION = "accountNumberIdentification"
REFERENCE = "reference"
SEQUENCE_NO = "sequenceNumber"
OPENING_BALANCE = "openingBalance"
CLOSING_BALANCE = "closingBalance"
TRANSACTIONS = "transactions"

# Balance fields
BAL_DATE = "date"
BAL_CURRENCY = "currency"
BAL_AMOUNT = "amount"
BAL_INDICATOR = "indicator"
BAL_STATEMENT_TYPE = "statementType"

# Transaction fields (date, currency, amount and indicator share the balance keys)
TRANSACTION_DATE = BAL_DATE
TRANSACTION_CURRENCY = BAL_CURRENCY
TRANSACTION_AMOUNT = BAL_AMOUNT
TRANSACTION_INDICATOR = BAL_INDICATOR
TRANSACTION_REFERENCE = "transactionReference"
CUSTOMER_REFERENCE = "customerReference"
TRANSACTION_TYPE = "transactionType"

# Display names used in error messages
DN_HEADER_BLOCK_1 = "Header Block 1"
DN_HEADER_BLOCK_2 = "Header Block 2"
DN_ACC_NUMBER = "Account Number"
DN_ACC_NUMBER_IDENTIFICATION = "Account Number Identification"
DN_TRANSACTION_REFERENCE = "Transaction Reference"
DN_SEQUENCE_NO = "Sequence Number"
DN_OPENING_BALANCE = "Opening Balance"
DN_CLOSING_BALANCE = "Closing Balance"
DN_TRANSACTION_TYPE = "Transaction Type"

# Section names, also the prefix of generated display names
DN_OPENING_BALANCE_SECTION = "OpeningBalance"
DN_CLOSING_BALANCE_SECTION = "ClosingBalance"
DN_TRANSACTION = "Transaction"
DN_HEADER = "Header"

# Display name suffixes joined onto a section name
DN_DATE = ".Date"
DN_CURRENCY = ".Currency"
DN_AMOUNT = ".Amount"
DN_INDICATOR = ".Indicator"
DN_STATEMENT_TYPE = ".StatementType"
DN_CUSTOMER_REFERENCE = ".CustomerReference"

# Maximum field lengths from the SWIFT MT940 field formats
ACC_IDENTIFICATION_LENGTH = 35
REFERENCE_LENGTH = 16
SEQUENCE_NO_LENGTH = 5
DATE_LENGTH = 6
CURRENCY_LENGTH = 3
AMOUNT_LENGTH = 15
INDICATOR_LENGTH = 1
TRANSACTION_IND_LENGTH = 2
TRANSACTION_TYPE_LENGTH = 4

# Error codes
ERROR_CODE_INVALID_PARAM = "invalid param"

# Error message templates, formatted with the field display name
ERROR_MANDATORY = "{} is mandatory"
ERROR_PARAMETER_LENGTH = "{} exceeds length {}"
ERROR_NOT_ALPHA_NUMERIC = "{} is not alphanumeric"
ERROR_NOT_ALPHA = "{} is not alphabetic"
ERROR_NOT_NUMERIC = "{} is not numeric"
ERROR_INVALID_CHARACTERS = "{} contains invalid characters"
ERROR_DATE_INVALID = "date invalid for {}"
ERROR_INVALID_CURRENCY = "{} is not a valid currency code"

# Formats
DATE_FORMAT = "%y%m%d"  # yyMMdd
DATE_PATTERN = re.compile(r"\d{6}")
CURRENCY_PATTERN = re.compile(r"[A-Z]{3}")
ALPHA_NUMERIC_PATTERN = re.compile(r"[A-Za-z0-9]+")
ALPHA_PATTERN = re.compile(r"[A-Za-z]+")
NUMERIC_PATTERN = re.compile(r"[0-9]+")
# SWIFT character set X: letters, digits, / - ? : ( ) . , ' + and space
CHARACTER_SET_X_PATTERN = re.compile(r"[A-Za-z0-9/\-?:().,'+ ]+")
