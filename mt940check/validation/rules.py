"""Validation rule variants and their checks.

The rule set is closed: RuleKind enumerates the nine variants and
check_rule dispatches on the kind in one place. A ValidationRule is a plain
value (kind plus the field contexts it checks); adding a variant means adding
a RuleKind member and a case in check_rule.

Every variant walks its contexts in order and returns the failure for the
first context that fails, or success when all of them pass.

Content rules (everything except Mandatory and OptionalString) skip absent
(None) values. Presence is the Mandatory rule's concern, so a missing
optional field passes the content rules, while an empty or whitespace-only
string is checked like any other text.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from re import Pattern

from mt940check.core import constants
from mt940check.core.exceptions import RuleConfigurationError
from mt940check.validation.context import FieldContext
from mt940check.validation.result import ErrorResult, failure, success

logger = logging.getLogger(__name__)


class RuleKind(Enum):
    """Rule variants, each valued with its diagnostic label."""

    MANDATORY = "Mandatory Param Validation"
    OPTIONAL_STRING = "Optional String Param Validation"
    LENGTH = "Parameter Length Validation"
    ALPHA_NUMERIC = "Alpha Numeric Param Validation"
    ALPHA = "Alpha Param Validation"
    NUMERIC = "Numeric Param Validation"
    CHARACTER_SET_X = "MT Character Set X Validation"
    DATE_FORMAT = "Date Format Validation"
    CURRENCY_FORMAT = "Currency Format Validation"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True)
class ValidationRule:
    """One rule variant bound to the field contexts it checks.

    Attributes:
        kind: Rule variant
        contexts: Ordered, non-empty tuple of field contexts
        length_keys: For LENGTH rules, the field keys that take part in length
                    checking. None means every context takes part. Ignored by
                    the other variants.

    Example:
        >>> rule = ValidationRule(
        ...     RuleKind.NUMERIC,
        ...     (FieldContext("sequenceNumber", "Sequence Number", "12A"),),
        ... )
        >>> rule.check().error_message
        'Sequence Number is not numeric'
    """

    kind: RuleKind
    contexts: tuple[FieldContext, ...]
    length_keys: frozenset[str] | None = None

    def __post_init__(self) -> None:
        if not self.contexts:
            raise RuleConfigurationError(
                "A rule needs at least one field context",
                rule=self.kind.label,
                parameter="contexts",
            )

    def check(self) -> ErrorResult:
        """Check the rule's contexts and return the first failure, or success."""
        return check_rule(self)

    def display_name(self) -> str:
        """Return the fixed diagnostic label of the rule variant."""
        return self.kind.label

    def field_names(self) -> list[str]:
        """Return the display names of the checked fields, in order."""
        return [context.display_name for context in self.contexts]


def make_rule(
    kind: RuleKind,
    contexts: Iterable[FieldContext],
    length_keys: Iterable[str] | None = None,
) -> ValidationRule:
    """Build a ValidationRule from any iterable of contexts."""
    keys = frozenset(length_keys) if length_keys is not None else None
    return ValidationRule(kind=kind, contexts=tuple(contexts), length_keys=keys)


def check_rule(rule: ValidationRule) -> ErrorResult:
    """Evaluate a rule.

    Args:
        rule: Rule to evaluate

    Returns:
        Failure for the first failing context, success otherwise
    """
    match rule.kind:
        case RuleKind.MANDATORY:
            return _check_mandatory(rule.contexts)
        case RuleKind.OPTIONAL_STRING:
            return success()
        case RuleKind.LENGTH:
            return _check_length(rule.contexts, rule.length_keys)
        case RuleKind.ALPHA_NUMERIC:
            return _check_pattern(
                rule.contexts, constants.ALPHA_NUMERIC_PATTERN, constants.ERROR_NOT_ALPHA_NUMERIC
            )
        case RuleKind.ALPHA:
            return _check_pattern(rule.contexts, constants.ALPHA_PATTERN, constants.ERROR_NOT_ALPHA)
        case RuleKind.NUMERIC:
            return _check_pattern(
                rule.contexts, constants.NUMERIC_PATTERN, constants.ERROR_NOT_NUMERIC
            )
        case RuleKind.CHARACTER_SET_X:
            return _check_pattern(
                rule.contexts,
                constants.CHARACTER_SET_X_PATTERN,
                constants.ERROR_INVALID_CHARACTERS,
            )
        case RuleKind.DATE_FORMAT:
            return _check_each(rule.contexts, _is_valid_date, constants.ERROR_DATE_INVALID)
        case RuleKind.CURRENCY_FORMAT:
            return _check_pattern(
                rule.contexts, constants.CURRENCY_PATTERN, constants.ERROR_INVALID_CURRENCY
            )
    raise RuleConfigurationError("Unknown rule kind", rule=str(rule.kind))


def _check_mandatory(contexts: tuple[FieldContext, ...]) -> ErrorResult:
    for context in contexts:
        if context.is_blank():
            return failure(
                constants.ERROR_CODE_INVALID_PARAM,
                constants.ERROR_MANDATORY.format(context.display_name),
            )
    return success()


def _check_length(
    contexts: tuple[FieldContext, ...], length_keys: frozenset[str] | None
) -> ErrorResult:
    for context in contexts:
        if length_keys is not None and context.key not in length_keys:
            continue
        if context.value is None:
            continue
        if not context.has_length_bound():
            # No bound configured: the field is not length checked.
            logger.warning(
                "No maximum length configured for %s; skipping length check",
                context.display_name,
            )
            continue
        if len(context.text()) > context.max_length:
            return failure(
                constants.ERROR_CODE_INVALID_PARAM,
                constants.ERROR_PARAMETER_LENGTH.format(context.display_name, context.max_length),
            )
    return success()


def _check_pattern(
    contexts: tuple[FieldContext, ...], pattern: Pattern[str], message: str
) -> ErrorResult:
    return _check_each(contexts, lambda text: pattern.fullmatch(text) is not None, message)


def _check_each(
    contexts: tuple[FieldContext, ...], predicate: Callable[[str], bool], message: str
) -> ErrorResult:
    for context in contexts:
        if context.value is None:
            continue
        if not predicate(context.text()):
            return failure(constants.ERROR_CODE_INVALID_PARAM, message.format(context.display_name))
    return success()


def _is_valid_date(text: str) -> bool:
    """Check text against the yyMMdd pattern, including calendar validity."""
    if constants.DATE_PATTERN.fullmatch(text) is None:
        return False
    try:
        datetime.strptime(text, constants.DATE_FORMAT)
    except ValueError:
        logger.debug("Could not parse %r as %s", text, constants.DATE_FORMAT)
        return False
    return True
