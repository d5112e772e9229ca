"""Example: validating an MT940 payload from Python.

Shows the three ways of using the rule engine:
1. Whole-statement validation with first-failure-wins semantics
2. A per-section report, tabulated with polars
3. A hand-built engine for a single field

Run with: python examples/validate_statement_example.py
"""

from pathlib import Path

from mt940check.core.payload import load_payload
from mt940check.validation import (
    FieldContext,
    ValidationEngine,
    build_statement_report,
    validate_statement,
)


def main() -> None:
    payload = load_payload(Path(__file__).parent / "statement.json")

    # 1. First failure only
    result = validate_statement(payload)
    print(result.format())

    # 2. Every section, even after a failure
    payload["transactions"][0].pop("transactionType")
    report = build_statement_report(payload, source="statement.json")
    print(report.format(errors_only=True))
    print(report.to_dataframe())

    # 3. A custom engine
    reference = FieldContext("reference", "Transaction Reference", "REF#1", 16)
    engine = (
        ValidationEngine("Custom")
        .add_mandatory_rule([reference])
        .add_length_rule([reference])
        .add_character_set_x_rule([reference])
    )
    print(engine.run().format())


if __name__ == "__main__":
    main()
