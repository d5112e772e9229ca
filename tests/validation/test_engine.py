"""Tests for ValidationEngine ordering and short-circuit semantics."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from mt940check.core.exceptions import RuleConfigurationError
from mt940check.validation import engine as engine_module
from mt940check.validation.context import FieldContext
from mt940check.validation.engine import ValidationEngine, describe_engine
from mt940check.validation.rules import RuleKind


@pytest.fixture
def rule_counter(monkeypatch):
    """Record every rule the engine evaluates."""
    evaluated: list[RuleKind] = []
    original = engine_module.check_rule

    def counting_check(rule):
        evaluated.append(rule.kind)
        return original(rule)

    monkeypatch.setattr(engine_module, "check_rule", counting_check)
    return evaluated


def test_empty_engine_returns_success():
    result = ValidationEngine().run()
    assert not result.is_error
    assert result.error_code == ""


def test_builder_methods_chain_and_keep_order():
    context = [FieldContext("k", "K", "1")]
    engine = (
        ValidationEngine()
        .add_mandatory_rule(context)
        .add_optional_rule(context)
        .add_length_rule(context)
        .add_alphanumeric_rule(context)
        .add_alpha_rule(context)
        .add_numeric_rule(context)
        .add_character_set_x_rule(context)
        .add_date_format_rule(context)
        .add_currency_format_rule(context)
    )

    assert [rule.kind for rule in engine.rules] == list(RuleKind)
    assert len(engine) == 9


def test_failing_mandatory_short_circuits(rule_counter):
    """Rules after the first failure are never evaluated."""
    engine = (
        ValidationEngine()
        .add_mandatory_rule([FieldContext("sequenceNumber", "Sequence Number", None)])
        .add_length_rule([FieldContext("sequenceNumber", "Sequence Number", "1234567", 5)])
        .add_alphanumeric_rule([FieldContext("sequenceNumber", "Sequence Number", "!!")])
    )

    result = engine.run()

    assert result.error_message == "Sequence Number is mandatory"
    assert rule_counter == [RuleKind.MANDATORY]


def test_first_failing_rule_wins_across_rules(rule_counter):
    engine = (
        ValidationEngine()
        .add_mandatory_rule([FieldContext("a", "A", "x")])
        .add_length_rule([FieldContext("a", "A", "toolong", 3)])
        .add_alphanumeric_rule([FieldContext("a", "A", "bad value")])
    )

    result = engine.run()

    assert result.error_message == "A exceeds length 3"
    assert rule_counter == [RuleKind.MANDATORY, RuleKind.LENGTH]


def test_all_rules_run_when_passing(rule_counter):
    engine = (
        ValidationEngine()
        .add_mandatory_rule([FieldContext("a", "A", "x")])
        .add_numeric_rule([FieldContext("b", "B", "12")])
    )

    assert not engine.run().is_error
    assert rule_counter == [RuleKind.MANDATORY, RuleKind.NUMERIC]


def test_run_all_evaluates_every_rule():
    engine = (
        ValidationEngine()
        .add_mandatory_rule([FieldContext("a", "A", None)])
        .add_numeric_rule([FieldContext("b", "B", "x")])
        .add_alpha_rule([FieldContext("c", "C", "abc")])
    )

    outcomes = [result.is_error for _, result in engine.run_all()]

    assert outcomes == [True, True, False]


def test_run_is_repeatable():
    engine = ValidationEngine().add_currency_format_rule([FieldContext("c", "Currency", "eur")])
    assert engine.run() == engine.run()


def test_length_rule_key_filter():
    contexts = [FieldContext("amount", "Amount", "x" * 20, 15)]
    assert not ValidationEngine().add_length_rule(contexts, {"date"}).run().is_error
    assert ValidationEngine().add_length_rule(contexts, {"amount"}).run().is_error


def test_empty_context_list_raises():
    with pytest.raises(RuleConfigurationError):
        ValidationEngine().add_mandatory_rule([])


def test_describe_engine():
    engine = (
        ValidationEngine()
        .add_mandatory_rule([FieldContext("a", "A"), FieldContext("b", "B")])
        .add_date_format_rule([FieldContext("d", "D")])
    )

    assert describe_engine(engine) == [
        ("Mandatory Param Validation", ["A", "B"]),
        ("Date Format Validation", ["D"]),
    ]


def test_independent_engines_built_concurrently():
    """Engines built on separate threads never share rules."""

    def build(i: int) -> ValidationEngine:
        engine = ValidationEngine(f"engine-{i}")
        for _ in range(i % 5 + 1):
            engine.add_numeric_rule([FieldContext("n", f"N{i}", str(i))])
        return engine

    with ThreadPoolExecutor(max_workers=8) as pool:
        engines = list(pool.map(build, range(50)))

    for i, engine in enumerate(engines):
        assert len(engine) == i % 5 + 1
        assert all(rule.contexts[0].display_name == f"N{i}" for rule in engine.rules)
        assert not engine.run().is_error
