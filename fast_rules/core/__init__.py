"""Core engine re-exported for convenient access.

These modules provide the validator, its rule registry and the message store.
"""

from .async_resolvers import AsyncResolvers
from .errors import ErrorBag
from .messages import Messages
from .rule_parser import extract_rule, parse_rules
from .rules import Rule, RuleRegistry, rules
from .validator import Validator

__all__ = [
    "AsyncResolvers",
    "ErrorBag",
    "Messages",
    "Rule",
    "RuleRegistry",
    "Validator",
    "extract_rule",
    "parse_rules",
    "rules",
]
