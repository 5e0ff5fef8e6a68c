from __future__ import annotations

from typing import Any, Optional

from fast_rules.contracts.validator_rule import ValidatorRule
from fast_rules.core.validation_rules.type_rules import parse_date
from fast_rules.utils.value_utils import stringify


def in_rule(value: Any, args: Optional[str] = None, attribute: Optional[str] = None) -> bool:
    options = (args or '').split(',')
    if isinstance(value, (list, tuple)):
        return all(stringify(item) in options for item in value)
    return stringify(value) in options


def not_in(value: Any, args: Optional[str] = None, attribute: Optional[str] = None) -> bool:
    options = (args or '').split(',')
    if isinstance(value, (list, tuple)):
        return not any(stringify(item) in options for item in value)
    return stringify(value) not in options


class SameRule(ValidatorRule):
    def passes(self, value: Any, args: Optional[str], attribute: Optional[str]) -> bool:
        return self.other_value(args or '') == value


class DifferentRule(ValidatorRule):
    def passes(self, value: Any, args: Optional[str], attribute: Optional[str]) -> bool:
        return self.other_value(args or '') != value


class ConfirmedRule(ValidatorRule):
    """`password` is confirmed by an equal `password_confirmation` input."""

    def passes(self, value: Any, args: Optional[str], attribute: Optional[str]) -> bool:
        return self.other_value(f"{attribute}_confirmation") == value


def _compare_dates(value: Any, args: Optional[str]):
    current = parse_date(value)
    reference = parse_date(args)
    if current is None or reference is None:
        return None
    # Naive and aware datetimes cannot be ordered against each other
    if (current.tzinfo is None) != (reference.tzinfo is None):
        current = current.replace(tzinfo=None)
        reference = reference.replace(tzinfo=None)
    return current, reference


def after(value: Any, args: Optional[str] = None, attribute: Optional[str] = None) -> bool:
    pair = _compare_dates(value, args)
    return pair is not None and pair[0] > pair[1]


def before(value: Any, args: Optional[str] = None, attribute: Optional[str] = None) -> bool:
    pair = _compare_dates(value, args)
    return pair is not None and pair[0] < pair[1]
