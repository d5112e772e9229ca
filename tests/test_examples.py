"""Smoke test for the bundled usage example."""

import runpy
from pathlib import Path

EXAMPLE = Path(__file__).parent.parent / "examples" / "validate_statement_example.py"


def test_example_runs(capsys):
    runpy.run_path(str(EXAMPLE), run_name="__main__")

    out = capsys.readouterr().out
    assert "Validation passed" in out
    assert "Transaction Type is mandatory" in out
    assert "Transaction Reference contains invalid characters" in out
