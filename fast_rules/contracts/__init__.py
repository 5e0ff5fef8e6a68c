"""Contract classes and data models shared across the validator."""

from .rule_directive import RuleDirective
from .validator_rule import AsyncValidatorRule, ValidatorRule

__all__ = [
    "RuleDirective",
    "ValidatorRule",
    "AsyncValidatorRule",
]
