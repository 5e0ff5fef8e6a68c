from __future__ import annotations

from typing import Any, Optional

from fast_rules.contracts.validator_rule import ValidatorRule
from fast_rules.utils.value_utils import to_number


class SizeRule(ValidatorRule):
    """
    Base for rules comparing a value's size.

    Numbers are measured by value, containers by length and strings by length
    unless the attribute also carries a numeric rule (`integer`, `numeric`,
    `between`) and the string parses as a number.
    """

    def size_of(self, value: Any, attribute: Optional[str]) -> Optional[float]:
        if isinstance(value, (list, tuple, dict, set)):
            return len(value)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return value
        if self.validator is not None and self.validator.has_numeric_rule(attribute):
            number = to_number(value)
            if number is not None:
                return number
        if value is None:
            return None
        return len(str(value))

    @staticmethod
    def bounds(args: Optional[str]) -> list[Optional[float]]:
        return [to_number(part) for part in (args or '').split(',')]


class MinRule(SizeRule):
    def passes(self, value: Any, args: Optional[str], attribute: Optional[str]) -> bool:
        size = self.size_of(value, attribute)
        (minimum, *_) = self.bounds(args)
        return size is not None and minimum is not None and size >= minimum


class MaxRule(SizeRule):
    def passes(self, value: Any, args: Optional[str], attribute: Optional[str]) -> bool:
        size = self.size_of(value, attribute)
        (maximum, *_) = self.bounds(args)
        return size is not None and maximum is not None and size <= maximum


class BetweenRule(SizeRule):
    def passes(self, value: Any, args: Optional[str], attribute: Optional[str]) -> bool:
        size = self.size_of(value, attribute)
        limits = self.bounds(args)
        if size is None or len(limits) != 2 or None in limits:
            return False
        minimum, maximum = limits
        return minimum <= size <= maximum


class SizeExactRule(SizeRule):
    def passes(self, value: Any, args: Optional[str], attribute: Optional[str]) -> bool:
        size = self.size_of(value, attribute)
        (expected, *_) = self.bounds(args)
        return size is not None and expected is not None and size == expected


def _digits(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    text = str(value).strip()
    return text if text.isdigit() else None


def digits(value: Any, args: Optional[str] = None, attribute: Optional[str] = None) -> bool:
    text = _digits(value)
    length = to_number(args)
    return text is not None and length is not None and len(text) == length


def digits_between(value: Any, args: Optional[str] = None, attribute: Optional[str] = None) -> bool:
    text = _digits(value)
    limits = [to_number(part) for part in (args or '').split(',')]
    if text is None or len(limits) != 2 or None in limits:
        return False
    return limits[0] <= len(text) <= limits[1]
