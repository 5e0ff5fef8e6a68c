from .rule_decorators import async_rule, rule

__all__ = [
    "rule",
    "async_rule",
]
