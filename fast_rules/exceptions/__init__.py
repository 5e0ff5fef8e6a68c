"""Exceptions raised by fast-rules on structural misuse."""

from .validator_exceptions import (
    ValidatorException,
    UnknownRuleError,
    InvalidUsageError,
)


__all__ = [
    "ValidatorException",
    "UnknownRuleError",
    "InvalidUsageError",
]
