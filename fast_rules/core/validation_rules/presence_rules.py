from __future__ import annotations

from typing import Any, Optional

from fast_rules.contracts.validator_rule import ValidatorRule
from fast_rules.utils.value_utils import stringify


def required(value: Any, args: Optional[str] = None, attribute: Optional[str] = None) -> bool:
    """
    The single definition of presence.

    None, blank strings and empty containers are absent; everything else
    (including 0 and False) is present.
    """
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ''
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) > 0
    return True


def accepted(value: Any, args: Optional[str] = None, attribute: Optional[str] = None) -> bool:
    return value in ('on', 'yes', 'true', '1', 1, True)


class PresentRule(ValidatorRule):
    """The key exists in the input, whatever its value."""

    def passes(self, value: Any, args: Optional[str], attribute: Optional[str]) -> bool:
        if self.validator is None:
            return value is not None
        return attribute in self.validator.input


class RequiredIfRule(ValidatorRule):
    """`required_if:other,value` - required when `other` equals `value`."""

    def passes(self, value: Any, args: Optional[str], attribute: Optional[str]) -> bool:
        other, _, expected = (args or '').partition(',')
        if stringify(self.other_value(other)) == expected:
            return required(value)
        return True


class RequiredUnlessRule(ValidatorRule):
    """`required_unless:other,value` - required unless `other` equals `value`."""

    def passes(self, value: Any, args: Optional[str], attribute: Optional[str]) -> bool:
        other, _, expected = (args or '').partition(',')
        if stringify(self.other_value(other)) != expected:
            return required(value)
        return True


class RequiredWithRule(ValidatorRule):
    """`required_with:a,b` - required when any of the listed fields is present."""

    def passes(self, value: Any, args: Optional[str], attribute: Optional[str]) -> bool:
        fields = [f for f in (args or '').split(',') if f]
        if any(required(self.other_value(f)) for f in fields):
            return required(value)
        return True


class RequiredWithoutRule(ValidatorRule):
    """`required_without:a,b` - required when any of the listed fields is absent."""

    def passes(self, value: Any, args: Optional[str], attribute: Optional[str]) -> bool:
        fields = [f for f in (args or '').split(',') if f]
        if any(not required(self.other_value(f)) for f in fields):
            return required(value)
        return True
