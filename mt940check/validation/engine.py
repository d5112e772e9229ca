"""ValidationEngine orchestration.

This module defines the ValidationEngine class that holds an ordered list of
validation rules and executes them with first-failure-wins semantics.
"""

import logging
from collections.abc import Iterable

from mt940check.validation.context import FieldContext
from mt940check.validation.result import ErrorResult, success
from mt940check.validation.rules import RuleKind, ValidationRule, check_rule, make_rule

logger = logging.getLogger(__name__)


class ValidationEngine:
    """Ordered, append-only collection of validation rules.

    Rules are added through chained builder calls and evaluated strictly in
    insertion order. Each engine owns its rule list, so independently built
    engines never share state and can be built from several threads at once.

    Attributes:
        name: Label used in log messages (e.g. "OpeningBalance")

    Example:
        >>> engine = (
        ...     ValidationEngine("Header")
        ...     .add_mandatory_rule([FieldContext("reference", "Transaction Reference", "")])
        ...     .add_numeric_rule([FieldContext("sequenceNumber", "Sequence Number", "1")])
        ... )
        >>> engine.run().error_message
        'Transaction Reference is mandatory'
    """

    def __init__(self, name: str = "engine"):
        self.name = name
        self._rules: list[ValidationRule] = []

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"ValidationEngine(name={self.name!r}, rules={len(self._rules)})"

    @property
    def rules(self) -> tuple[ValidationRule, ...]:
        """Rules in evaluation order."""
        return tuple(self._rules)

    def add_rule(
        self,
        kind: RuleKind,
        contexts: Iterable[FieldContext],
        length_keys: Iterable[str] | None = None,
    ) -> "ValidationEngine":
        """Append a rule of the given kind.

        Args:
            kind: Rule variant to add
            contexts: Field contexts the rule checks (must not be empty)
            length_keys: Keys taking part in length checking (LENGTH only)

        Returns:
            This engine, for chaining

        Raises:
            RuleConfigurationError: If contexts is empty
        """
        self._rules.append(make_rule(kind, contexts, length_keys))
        return self

    def add_mandatory_rule(self, contexts: Iterable[FieldContext]) -> "ValidationEngine":
        return self.add_rule(RuleKind.MANDATORY, contexts)

    def add_optional_rule(self, contexts: Iterable[FieldContext]) -> "ValidationEngine":
        return self.add_rule(RuleKind.OPTIONAL_STRING, contexts)

    def add_length_rule(
        self,
        contexts: Iterable[FieldContext],
        length_keys: Iterable[str] | None = None,
    ) -> "ValidationEngine":
        """Append a length rule.

        Only contexts whose key is in length_keys are length checked; None
        checks every context. A checked context without a configured bound is
        skipped with a warning rather than failing.
        """
        return self.add_rule(RuleKind.LENGTH, contexts, length_keys)

    def add_alphanumeric_rule(self, contexts: Iterable[FieldContext]) -> "ValidationEngine":
        return self.add_rule(RuleKind.ALPHA_NUMERIC, contexts)

    def add_alpha_rule(self, contexts: Iterable[FieldContext]) -> "ValidationEngine":
        return self.add_rule(RuleKind.ALPHA, contexts)

    def add_numeric_rule(self, contexts: Iterable[FieldContext]) -> "ValidationEngine":
        return self.add_rule(RuleKind.NUMERIC, contexts)

    def add_character_set_x_rule(self, contexts: Iterable[FieldContext]) -> "ValidationEngine":
        return self.add_rule(RuleKind.CHARACTER_SET_X, contexts)

    def add_date_format_rule(self, contexts: Iterable[FieldContext]) -> "ValidationEngine":
        return self.add_rule(RuleKind.DATE_FORMAT, contexts)

    def add_currency_format_rule(self, contexts: Iterable[FieldContext]) -> "ValidationEngine":
        return self.add_rule(RuleKind.CURRENCY_FORMAT, contexts)

    def run(self) -> ErrorResult:
        """Run rules in order and return the first failure.

        Evaluation stops at the first failing rule; later rules are never
        checked. An engine with no rules returns success.

        Returns:
            The first failing ErrorResult, or success if every rule passes
        """
        for index, rule in enumerate(self._rules):
            logger.debug("[%s] rule %d: %s", self.name, index, rule.display_name())
            result = check_rule(rule)
            if result.is_error:
                logger.info("[%s] %s failed: %s", self.name, rule.display_name(), result.error_message)
                return result
        return success()

    def run_all(self) -> list[tuple[ValidationRule, ErrorResult]]:
        """Run every rule regardless of failures.

        Used for diagnostics and reporting; run() is the validation entry
        point.

        Returns:
            (rule, result) pairs in evaluation order
        """
        return [(rule, check_rule(rule)) for rule in self._rules]


def describe_engine(engine: ValidationEngine) -> list[tuple[str, list[str]]]:
    """List the rules of an engine as (rule label, field display names) pairs."""
    return [(rule.display_name(), rule.field_names()) for rule in engine.rules]
