"""FieldContext data structure.

A FieldContext carries one field into a validation rule: the payload key
it was extracted from, the display name used in error messages, the
extracted value, and an optional maximum length for the Length rule.
"""

from dataclasses import dataclass
from typing import Any

from mt940check.core.exceptions import RuleConfigurationError


@dataclass(frozen=True)
class FieldContext:
    """One field to validate.

    Contexts are immutable and built fresh for every engine build, so they
    are never shared between engine runs.

    Attributes:
        key: Stable payload key of the field (e.g. "sequenceNumber").
        display_name: Human-readable label used in error messages
                     (e.g. "OpeningBalance.Date").
        value: Extracted field content. Any value coercible to text.
        max_length: Maximum length enforced by the Length rule. None or 0
                   means no bound was configured, in which case the Length
                   rule does not check this field.

    Example:
        >>> context = FieldContext("sequenceNumber", "Sequence Number", "00001", 5)
        >>> context.has_length_bound()
        True
    """

    key: str
    display_name: str
    value: Any = None
    max_length: int | None = None

    def __post_init__(self) -> None:
        if not self.key:
            raise RuleConfigurationError(
                "Field context key must not be empty",
                parameter="key",
                display_name=self.display_name,
            )
        if not self.display_name:
            raise RuleConfigurationError(
                "Field context display name must not be empty",
                parameter="display_name",
                key=self.key,
            )

    def has_length_bound(self) -> bool:
        """Return True when a positive maximum length was configured."""
        return bool(self.max_length) and self.max_length > 0

    def text(self) -> str:
        """Return the value as text ("" for an absent value)."""
        if self.value is None:
            return ""
        return str(self.value)

    def is_blank(self) -> bool:
        """Check if the value is absent, or textual and only whitespace."""
        if self.value is None:
            return True
        if isinstance(self.value, str):
            return not self.value.strip()
        return False
